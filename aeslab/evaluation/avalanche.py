"""Avalanche measurements: quick means and the Strict Avalanche Criterion.

SAC asks whether flipping each individual input bit flips each output bit
with probability ~0.5. AES is expected to land close to 0.5 everywhere.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import random
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from aeslab.cipher.block import BlockCipher


def _hamming_distance_bytes(a: bytes, b: bytes) -> int:
    if len(a) != len(b):
        raise ValueError("hamming distance length mismatch")
    dist = 0
    for x, y in zip(a, b):
        dist += bin(x ^ y).count("1")
    return dist


def _flip_bit(data: bytes, bit_index: int) -> bytes:
    byte_i = bit_index // 8
    bit_i = bit_index % 8
    if byte_i < 0 or byte_i >= len(data):
        raise IndexError("bit_index out of range")
    out = bytearray(data)
    out[byte_i] ^= 1 << bit_i
    return bytes(out)


def _rand_bytes(rng: random.Random, n: int) -> bytes:
    return bytes(rng.randrange(0, 256) for _ in range(n))


def avalanche_plaintext(
    cipher: BlockCipher,
    *,
    key_size_bits: int,
    trials: int = 200,
    seed: int = 1337,
) -> Dict[str, float]:
    """Mean fraction of ciphertext bits changed by one random plaintext bit flip."""
    rng = random.Random(seed)
    block_bits = cipher.block_size_bits
    fractions = []
    for _ in range(trials):
        key = _rand_bytes(rng, key_size_bits // 8)
        pt = _rand_bytes(rng, block_bits // 8)
        ct = cipher.encrypt_block(pt, key)
        ct2 = cipher.encrypt_block(_flip_bit(pt, rng.randrange(0, block_bits)), key)
        fractions.append(_hamming_distance_bytes(ct, ct2) / block_bits)
    return {
        "mean": float(np.mean(fractions)) if fractions else 0.0,
        "std": float(np.std(fractions)) if fractions else 0.0,
    }


def avalanche_key(
    cipher: BlockCipher,
    *,
    key_size_bits: int,
    trials: int = 200,
    seed: int = 1337,
) -> Dict[str, float]:
    """Mean fraction of ciphertext bits changed by one random key bit flip."""
    rng = random.Random(seed + 1)
    block_bits = cipher.block_size_bits
    fractions = []
    for _ in range(trials):
        key = _rand_bytes(rng, key_size_bits // 8)
        pt = _rand_bytes(rng, block_bits // 8)
        ct = cipher.encrypt_block(pt, key)
        ct2 = cipher.encrypt_block(pt, _flip_bit(key, rng.randrange(0, key_size_bits)))
        fractions.append(_hamming_distance_bytes(ct, ct2) / block_bits)
    return {
        "mean": float(np.mean(fractions)) if fractions else 0.0,
        "std": float(np.std(fractions)) if fractions else 0.0,
    }


@dataclass
class SACResult:
    """Strict Avalanche Criterion measurement for one input type."""
    algorithm_name: str
    input_type: str             # "plaintext" or "key"
    num_trials: int
    num_input_bits: int
    num_output_bits: int

    # Per-input-bit mean flip fraction (len = num_input_bits)
    per_input_bit_mean: List[float] = field(default_factory=list)

    global_mean: float = 0.0    # ~0.5 ideal
    global_std: float = 0.0     # lower = more uniform
    min_bit_prob: float = 0.0
    max_bit_prob: float = 0.0
    sac_deviation: float = 0.0  # mean |per_bit - 0.5|

    @property
    def passes_sac(self) -> bool:
        """Heuristic: SAC deviation < 0.05 and min_bit_prob > 0.35."""
        return self.sac_deviation < 0.05 and self.min_bit_prob > 0.35

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["passes_sac"] = self.passes_sac
        return d

    def summary(self) -> str:
        status = "PASS" if self.passes_sac else "FAIL"
        return (
            f"[{status}] SAC({self.input_type}) {self.algorithm_name}: "
            f"mean={self.global_mean:.4f}, std={self.global_std:.4f}, "
            f"deviation={self.sac_deviation:.4f}, "
            f"min={self.min_bit_prob:.4f}, max={self.max_bit_prob:.4f}"
        )


def compute_sac(
    cipher: BlockCipher,
    *,
    key_size_bits: int,
    input_type: str = "plaintext",
    trials: int = 50,
    seed: int = 1337,
    algorithm_name: str = "",
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> SACResult:
    """Compute the Strict Avalanche Criterion bit by bit.

    For each input bit position i, ``trials`` random (plaintext, key) pairs
    are encrypted with and without bit i flipped and the fraction of changed
    output bits is averaged.

    Args:
        cipher: Cipher exposing ``encrypt_block(pt, key)``.
        key_size_bits: Key size in bits.
        input_type: "plaintext" or "key", the input that gets perturbed.
        trials: Random trials per input bit.
        seed: Random seed for reproducibility.
        algorithm_name: Label for the result.
        progress_callback: Optional callback(current_bit, total_bits).
    """
    block_bits = cipher.block_size_bits
    if input_type == "plaintext":
        num_input_bits = block_bits
    elif input_type == "key":
        num_input_bits = key_size_bits
    else:
        raise ValueError(f"input_type must be 'plaintext' or 'key', got '{input_type}'")

    rng = random.Random(seed)
    per_bit = np.zeros(num_input_bits, dtype=np.float64)

    for bit_i in range(num_input_bits):
        if progress_callback:
            progress_callback(bit_i, num_input_bits)

        total = 0
        for _ in range(trials):
            pt = _rand_bytes(rng, block_bits // 8)
            key = _rand_bytes(rng, key_size_bits // 8)
            ct1 = cipher.encrypt_block(pt, key)
            if input_type == "plaintext":
                ct2 = cipher.encrypt_block(_flip_bit(pt, bit_i), key)
            else:
                ct2 = cipher.encrypt_block(pt, _flip_bit(key, bit_i))
            total += _hamming_distance_bytes(ct1, ct2)
        per_bit[bit_i] = total / (trials * block_bits)

    return SACResult(
        algorithm_name=algorithm_name or getattr(cipher, "name", ""),
        input_type=input_type,
        num_trials=trials,
        num_input_bits=num_input_bits,
        num_output_bits=block_bits,
        per_input_bit_mean=[round(float(p), 6) for p in per_bit],
        global_mean=round(float(per_bit.mean()), 6),
        global_std=round(float(per_bit.std(ddof=1)), 6) if num_input_bits > 1 else 0.0,
        min_bit_prob=round(float(per_bit.min()), 6),
        max_bit_prob=round(float(per_bit.max()), 6),
        sac_deviation=round(float(np.abs(per_bit - 0.5).mean()), 6),
    )
