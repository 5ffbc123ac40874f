import random

import pytest

from aeslab.cipher.block import (
    AESBlockCipher,
    BlockRoundRecorder,
    add_round_key,
    bytes_to_state,
    decrypt_block,
    encrypt_block,
    format_state,
    inv_mix_columns,
    inv_shift_rows,
    inv_sub_bytes,
    mix_columns,
    shift_rows,
    state_to_bytes,
    sub_bytes,
)
from aeslab.cipher.key_schedule import expand_key
from aeslab.errors import InvalidBlockLength, InvalidKeyLength

FIPS_PLAINTEXT = bytes.fromhex("00112233445566778899aabbccddeeff")


# ---------------------------------------------------------------------------
# Known-answer vectors (FIPS-197 Appendix C)
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "key_hex,ct_hex",
    [
        ("000102030405060708090a0b0c0d0e0f", "69c4e0d86a7b0430d8cdb78070b4c55a"),
        ("000102030405060708090a0b0c0d0e0f1011121314151617", "dda97ca4864cdfe06eaf70a0ec0d7191"),
        (
            "000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f",
            "8ea2b7ca516745bfeafc49904b496089",
        ),
    ],
)
def test_fips197_known_answer(key_hex, ct_hex):
    key = bytes.fromhex(key_hex)
    ct = encrypt_block(FIPS_PLAINTEXT, key)
    assert ct.hex() == ct_hex
    assert decrypt_block(ct, key) == FIPS_PLAINTEXT


def test_accepts_expanded_schedule():
    key = bytes.fromhex("000102030405060708090a0b0c0d0e0f")
    ks = expand_key(key)
    assert encrypt_block(FIPS_PLAINTEXT, ks) == encrypt_block(FIPS_PLAINTEXT, key)


# ---------------------------------------------------------------------------
# Round-trip
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("key_len", [16, 24, 32])
def test_block_roundtrip_random(key_len):
    rng = random.Random(1337 + key_len)
    for _ in range(25):
        block = bytes(rng.randrange(256) for _ in range(16))
        key = bytes(rng.randrange(256) for _ in range(key_len))
        assert decrypt_block(encrypt_block(block, key), key) == block


# ---------------------------------------------------------------------------
# State layout and primitives
# ---------------------------------------------------------------------------

def test_state_is_column_major():
    state = bytes_to_state(bytes(range(16)))
    assert state[0] == [0, 4, 8, 12]
    assert state[1] == [1, 5, 9, 13]
    assert state_to_bytes(state) == bytes(range(16))
    assert format_state(state)[3] == ["03", "07", "0b", "0f"]


@pytest.mark.parametrize("length", [0, 15, 17, 32])
def test_rejects_wrong_block_length(length):
    with pytest.raises(InvalidBlockLength):
        encrypt_block(bytes(length), bytes(16))
    with pytest.raises(InvalidBlockLength):
        decrypt_block(bytes(length), bytes(16))


@pytest.mark.parametrize("key_len", [15, 17, 20, 33])
def test_rejects_wrong_key_length(key_len):
    with pytest.raises(InvalidKeyLength):
        encrypt_block(bytes(16), bytes(key_len))


def test_shift_rows_rotates_each_row_left_by_index():
    state = bytes_to_state(bytes(range(16)))
    shifted = shift_rows(state)
    assert shifted[0] == [0, 4, 8, 12]
    assert shifted[1] == [5, 9, 13, 1]
    assert shifted[2] == [10, 14, 2, 6]
    assert shifted[3] == [15, 3, 7, 11]
    assert inv_shift_rows(shifted) == state


def test_primitives_do_not_mutate_input():
    state = bytes_to_state(bytes(range(16)))
    snapshot = [row[:] for row in state]
    sub_bytes(state)
    shift_rows(state)
    mix_columns(state)
    add_round_key(state, bytes(range(16, 32)))
    assert state == snapshot


def test_mix_columns_reference_column():
    # Standard MixColumns test columns
    state = bytes_to_state(bytes.fromhex("db135345f20a225c01010101c6c6c6c6"))
    mixed = state_to_bytes(mix_columns(state))
    assert mixed.hex() == "8e4da1bc9fdc589d01010101c6c6c6c6"
    assert inv_mix_columns(mix_columns(state)) == state


def test_sub_bytes_inverse():
    state = bytes_to_state(bytes(range(0, 256, 16)))
    assert inv_sub_bytes(sub_bytes(state)) == state


def test_add_round_key_is_self_inverse():
    state = bytes_to_state(bytes(range(16)))
    rk = bytes(range(100, 116))
    assert add_round_key(add_round_key(state, rk), rk) == state


# ---------------------------------------------------------------------------
# Round observer
# ---------------------------------------------------------------------------

def test_observer_matches_fips197_round_one():
    recorder = BlockRoundRecorder()
    key = bytes.fromhex("000102030405060708090a0b0c0d0e0f")
    encrypt_block(FIPS_PLAINTEXT, key, observer=recorder)

    assert recorder.by_round(0)[0].state_hex == "00102030405060708090a0b0c0d0e0f0"
    round1 = {s.step: s.state_hex for s in recorder.by_round(1)}
    assert round1["sub_bytes"] == "63cab7040953d051cd60e0e7ba70e18c"
    assert round1["shift_rows"] == "6353e08c0960e104cd70b751bacad0e7"
    assert round1["mix_columns"] == "5f72641557f5bc92f7be3b291db9f91a"
    assert round1["add_round_key"] == "89d810e8855ace682d1843d8cb128fe4"


def test_final_round_skips_mix_columns():
    recorder = BlockRoundRecorder()
    encrypt_block(FIPS_PLAINTEXT, bytes(16), observer=recorder)
    steps = [s.step for s in recorder.by_round(10)]
    assert steps == ["sub_bytes", "shift_rows", "add_round_key"]
    # 1 whitening + 9 full rounds * 4 + final round * 3
    assert len(recorder.steps) == 1 + 9 * 4 + 3


def test_decrypt_last_step_skips_inv_mix_columns():
    recorder = BlockRoundRecorder()
    decrypt_block(FIPS_PLAINTEXT, bytes(32), observer=recorder)
    steps = [s.step for s in recorder.by_round(0)]
    assert steps == ["inv_shift_rows", "inv_sub_bytes", "add_round_key"]
    assert recorder.steps[-1].state_hex == decrypt_block(FIPS_PLAINTEXT, bytes(32)).hex()


# ---------------------------------------------------------------------------
# Adapter
# ---------------------------------------------------------------------------

def test_aes_block_cipher_adapter():
    cipher = AESBlockCipher(key_size_bits=192)
    assert cipher.name == "AES-192"
    assert cipher.rounds == 12
    key = bytes(24)
    assert cipher.decrypt_block(cipher.encrypt_block(FIPS_PLAINTEXT, key), key) == FIPS_PLAINTEXT


def test_aes_block_cipher_rejects_unknown_size():
    with pytest.raises(ValueError):
        AESBlockCipher(key_size_bits=64)
