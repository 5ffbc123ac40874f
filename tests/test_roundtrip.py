import random

import pytest

from aeslab.cipher.block import AESBlockCipher
from aeslab.evaluation.roundtrip import (
    RoundtripResult,
    run_all_key_sizes,
    run_block_roundtrip,
    run_cbc_roundtrip,
)
from aeslab.modes.cbc import decrypt_cbc, encrypt_cbc


# ---------------------------------------------------------------------------
# Hand-crafted roundtrips
# ---------------------------------------------------------------------------

def test_aes128_roundtrip():
    cipher = AESBlockCipher(key_size_bits=128)
    key = b"K" * 16
    pt = bytes(range(16))
    ct = cipher.encrypt_block(pt, key)
    assert ct != pt
    assert cipher.decrypt_block(ct, key) == pt


def test_cbc_roundtrip_text():
    key = b"K" * 32
    iv = b"I" * 16
    msg = b"Cipher Block Chaining needs the whole message first."
    assert decrypt_cbc(encrypt_cbc(msg, key, iv).ciphertext, key, iv) == msg


# ---------------------------------------------------------------------------
# Parametrized harness runs for every key size
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("bits", [128, 192, 256])
def test_block_harness(bits):
    result = run_block_roundtrip(bits, num_vectors=20, seed=1337)
    assert isinstance(result, RoundtripResult)
    assert result.is_perfect, result.summary()
    assert result.success_rate == 1.0
    assert result.rounds == {128: 10, 192: 12, 256: 14}[bits]
    assert result.summary().startswith("[PASS]")


@pytest.mark.parametrize("bits", [128, 192, 256])
def test_cbc_harness(bits):
    result = run_cbc_roundtrip(bits, num_vectors=15, seed=2026, max_message_len=48)
    assert result.is_perfect, result.summary()
    assert result.mode == "cbc"
    assert result.to_dict()["failures"] == []


def test_run_all_key_sizes_reports_progress():
    seen = []
    results = run_all_key_sizes(num_vectors=3, progress_callback=lambda m, i, n: seen.append((m, i, n)))
    assert len(results) == 6
    assert all(r.is_perfect for r in results)
    assert seen[0] == ("AES-128 block", 0, 6)


def test_random_vectors_with_seeded_rng():
    cipher = AESBlockCipher(key_size_bits=256)
    rng = random.Random(1337)
    for _ in range(30):
        pt = bytes(rng.randrange(0, 256) for _ in range(16))
        key = bytes(rng.randrange(0, 256) for _ in range(32))
        ct = cipher.encrypt_block(pt, key)
        rt = cipher.decrypt_block(ct, key)
        assert rt == pt, f"roundtrip failed. pt={pt.hex()}, key={key.hex()}, ct={ct.hex()}, rt={rt.hex()}"
