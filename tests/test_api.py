import pytest

from aeslab import api
from aeslab.errors import (
    DecryptionFailed,
    InvalidCiphertextLength,
    InvalidHexInput,
    InvalidIVLength,
    InvalidKeyLength,
)
from aeslab.trace import StepTrace

KEY_HEX = "000102030405060708090a0b0c0d0e0f"
ZERO_IV = "00" * 16


def test_encrypt_decrypt_roundtrip():
    result = api.encrypt("HELLO", KEY_HEX)
    assert len(result.iv_hex) == 32
    assert len(result.ciphertext_hex) == 32
    assert result.trace is None
    assert api.decrypt(result.ciphertext_hex, KEY_HEX, result.iv_hex).plaintext_text == "HELLO"


def test_unicode_text_roundtrip():
    text = "Grüße, 世界 ✓"
    result = api.encrypt(text, KEY_HEX, iv_hex=ZERO_IV)
    assert api.decrypt(result.ciphertext_hex, KEY_HEX, ZERO_IV).plaintext_text == text


def test_hex_input_is_case_insensitive_and_ignores_whitespace():
    result = api.encrypt("case", KEY_HEX, iv_hex=ZERO_IV)
    upper = api.encrypt("case", KEY_HEX.upper(), iv_hex=ZERO_IV.upper())
    assert result.ciphertext_hex == upper.ciphertext_hex
    spaced = " ".join(result.ciphertext_hex[i:i + 8] for i in range(0, 32, 8)).upper()
    assert api.decrypt(spaced, KEY_HEX, ZERO_IV).plaintext_text == "case"


def test_output_hex_is_lowercase():
    result = api.encrypt("lower", KEY_HEX, iv_hex=ZERO_IV)
    assert result.ciphertext_hex == result.ciphertext_hex.lower()


def test_hello_zero_key_is_reproducible():
    a = api.encrypt("HELLO", "00" * 16, iv_hex=ZERO_IV)
    b = api.encrypt("HELLO", "00" * 16, iv_hex=ZERO_IV)
    assert a.ciphertext_hex == b.ciphertext_hex
    assert a.iv_hex == ZERO_IV


def test_record_steps():
    result = api.encrypt("A longer message spanning blocks", KEY_HEX, iv_hex=ZERO_IV, record_steps=True)
    assert isinstance(result.trace, StepTrace)
    assert result.trace.final_result_hex == result.ciphertext_hex
    assert result.trace.padded_length_bytes == 48
    assert len(result.trace.blocks) == 3

    plain = api.encrypt("A longer message spanning blocks", KEY_HEX, iv_hex=ZERO_IV)
    assert plain.ciphertext_hex == result.ciphertext_hex

    dec = api.decrypt(result.ciphertext_hex, KEY_HEX, ZERO_IV, record_steps=True)
    assert dec.plaintext_text == "A longer message spanning blocks"
    assert dec.trace.operation == "decrypt"
    assert dec.trace.final_result_hex == "A longer message spanning blocks".encode().hex()


def test_result_models_serialize():
    result = api.encrypt("x", KEY_HEX, iv_hex=ZERO_IV, record_steps=True)
    dumped = result.model_dump()
    assert set(dumped) == {"iv_hex", "ciphertext_hex", "trace"}
    assert dumped["trace"]["blocks"][0]["index"] == 0


@pytest.mark.parametrize("key_hex", ["00" * 15, "00" * 17, "00" * 20, "00" * 33, ""])
def test_invalid_key_length(key_hex):
    with pytest.raises(InvalidKeyLength):
        api.encrypt("msg", key_hex)
    with pytest.raises(InvalidKeyLength):
        api.decrypt("00" * 16, key_hex, ZERO_IV)


@pytest.mark.parametrize("bad_hex", ["zz" * 16, "0g" + "00" * 15, "0" * 31])
def test_invalid_hex(bad_hex):
    with pytest.raises(InvalidHexInput):
        api.encrypt("msg", bad_hex)
    with pytest.raises(InvalidHexInput):
        api.decrypt(bad_hex, KEY_HEX, ZERO_IV)


def test_invalid_iv_and_ciphertext():
    with pytest.raises(InvalidIVLength):
        api.encrypt("msg", KEY_HEX, iv_hex="00" * 15)
    with pytest.raises(InvalidIVLength):
        api.decrypt("00" * 16, KEY_HEX, "00" * 15)
    with pytest.raises(InvalidCiphertextLength):
        api.decrypt("00" * 17, KEY_HEX, ZERO_IV)


def test_non_utf8_plaintext_is_generic_failure():
    from aeslab.modes.cbc import encrypt_cbc

    ct = encrypt_cbc(b"\xff\xfe\xfd", bytes.fromhex(KEY_HEX), bytes(16)).ciphertext
    with pytest.raises(DecryptionFailed):
        api.decrypt(ct.hex(), KEY_HEX, ZERO_IV)


@pytest.mark.parametrize("bits", [128, 192, 256])
def test_generate_key(bits):
    key_hex = api.generate_key(bits)
    assert len(key_hex) == bits // 4
    assert api.get_key_size(key_hex) == bits
    assert api.generate_key(bits) != key_hex


@pytest.mark.parametrize("bits", [0, 64, 100, 512])
def test_generate_key_rejects_other_sizes(bits):
    with pytest.raises(InvalidKeyLength):
        api.generate_key(bits)


def test_generate_iv():
    iv = api.generate_iv()
    assert len(bytes.fromhex(iv)) == 16
    assert api.generate_iv() != iv


def test_block_helpers_known_answer():
    ct = api.encrypt_block_hex("00112233445566778899aabbccddeeff", KEY_HEX)
    assert ct == "69c4e0d86a7b0430d8cdb78070b4c55a"
    assert api.decrypt_block_hex(ct, KEY_HEX) == "00112233445566778899aabbccddeeff"


def test_expand_key_hex():
    details = api.expand_key_hex(KEY_HEX)
    assert len(details) == 11
    assert details[1]["key_hex"] == "d6aa74fdd2af72fadaa678f1d6ab76fe"


def test_string_hex_helpers():
    assert api.string_to_hex("HELLO") == "48454c4c4f"
    assert api.hex_to_string("48454c4c4f") == "HELLO"


def test_key_size_helpers():
    assert api.get_key_size("00" * 24) == 192
    assert api.get_key_size("00" * 20) is None
    assert api.get_key_size("not hex") is None
    assert api.is_valid_key_length("00" * 32)
    assert not api.is_valid_key_length("00" * 31)
