"""Algebraic unit testing: roundtrip verification.

Block level:  P = D(E(P, K), K)        for random 16-byte P
CBC level:    M = Dcbc(Ecbc(M, K, IV)) for random messages of any length

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
import random
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional

from aeslab.cipher.block import AESBlockCipher, BLOCK_SIZE
from aeslab.modes.cbc import decrypt_cbc, encrypt_cbc

from .avalanche import _rand_bytes

logger = logging.getLogger(__name__)


@dataclass
class RoundtripFailure:
    """Details of a single failed roundtrip test vector."""
    vector_index: int
    plaintext_hex: str
    key_hex: str
    ciphertext_hex: str
    decrypted_hex: str       # What decrypt returned (should equal plaintext)
    error: Optional[str]     # Exception message if decrypt/encrypt threw


@dataclass
class RoundtripResult:
    """Aggregate result of roundtrip testing for one configuration."""
    algorithm_name: str
    mode: str                # "block" or "cbc"
    key_size_bits: int
    rounds: int
    total_vectors: int
    passed: int
    failed: int
    failures: List[RoundtripFailure] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    seed: int = 1337

    @property
    def success_rate(self) -> float:
        return self.passed / self.total_vectors if self.total_vectors > 0 else 0.0

    @property
    def is_perfect(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        status = "PASS" if self.is_perfect else "FAIL"
        return (
            f"[{status}] {self.algorithm_name} ({self.mode}): "
            f"{self.passed}/{self.total_vectors} vectors passed "
            f"({self.elapsed_seconds:.2f}s)"
        )


def run_block_roundtrip(
    key_size_bits: int = 128,
    *,
    num_vectors: int = 1000,
    seed: int = 1337,
    max_failures_recorded: int = 10,
) -> RoundtripResult:
    """Verify D(E(P, K), K) == P over random blocks and keys."""
    cipher = AESBlockCipher(key_size_bits=key_size_bits)
    rng = random.Random(seed)
    passed = 0
    failures: List[RoundtripFailure] = []
    failed = 0

    start = time.perf_counter()
    for i in range(num_vectors):
        pt = _rand_bytes(rng, BLOCK_SIZE)
        key = _rand_bytes(rng, key_size_bits // 8)
        ct = b""
        try:
            ct = cipher.encrypt_block(pt, key)
            pt2 = cipher.decrypt_block(ct, key)
            error = None
        except Exception as exc:
            pt2 = b""
            error = str(exc)

        if error is None and pt2 == pt:
            passed += 1
            continue
        failed += 1
        if len(failures) < max_failures_recorded:
            failures.append(RoundtripFailure(
                vector_index=i,
                plaintext_hex=pt.hex(),
                key_hex=key.hex(),
                ciphertext_hex=ct.hex() if ct else "<error>",
                decrypted_hex=pt2.hex() if error is None else "<error>",
                error=error,
            ))
    elapsed = time.perf_counter() - start

    result = RoundtripResult(
        algorithm_name=cipher.name,
        mode="block",
        key_size_bits=key_size_bits,
        rounds=cipher.rounds,
        total_vectors=num_vectors,
        passed=passed,
        failed=failed,
        failures=failures,
        elapsed_seconds=round(elapsed, 4),
        seed=seed,
    )
    logger.info(result.summary())
    return result


def run_cbc_roundtrip(
    key_size_bits: int = 128,
    *,
    num_vectors: int = 200,
    seed: int = 1337,
    max_message_len: int = 64,
    max_failures_recorded: int = 10,
) -> RoundtripResult:
    """Verify CBC decrypt(encrypt(M)) == M for random messages of 0..max_message_len bytes."""
    cipher = AESBlockCipher(key_size_bits=key_size_bits)
    rng = random.Random(seed)
    passed = 0
    failed = 0
    failures: List[RoundtripFailure] = []

    start = time.perf_counter()
    for i in range(num_vectors):
        msg = _rand_bytes(rng, rng.randrange(0, max_message_len + 1))
        key = _rand_bytes(rng, key_size_bits // 8)
        iv = _rand_bytes(rng, BLOCK_SIZE)
        ct = b""
        try:
            ct = encrypt_cbc(msg, key, iv).ciphertext
            msg2 = decrypt_cbc(ct, key, iv)
            error = None
        except Exception as exc:
            msg2 = b""
            error = str(exc)

        if error is None and msg2 == msg:
            passed += 1
            continue
        failed += 1
        if len(failures) < max_failures_recorded:
            failures.append(RoundtripFailure(
                vector_index=i,
                plaintext_hex=msg.hex(),
                key_hex=key.hex(),
                ciphertext_hex=ct.hex() if ct else "<error>",
                decrypted_hex=msg2.hex() if error is None else "<error>",
                error=error,
            ))
    elapsed = time.perf_counter() - start

    result = RoundtripResult(
        algorithm_name=f"{cipher.name}-CBC",
        mode="cbc",
        key_size_bits=key_size_bits,
        rounds=cipher.rounds,
        total_vectors=num_vectors,
        passed=passed,
        failed=failed,
        failures=failures,
        elapsed_seconds=round(elapsed, 4),
        seed=seed,
    )
    logger.info(result.summary())
    return result


def run_all_key_sizes(
    *,
    num_vectors: int = 200,
    seed: int = 1337,
    progress_callback: Optional[Callable[[str, int, int], None]] = None,
) -> List[RoundtripResult]:
    """Block and CBC roundtrips for AES-128, AES-192 and AES-256."""
    jobs = [(mode, bits) for bits in (128, 192, 256) for mode in ("block", "cbc")]
    results: List[RoundtripResult] = []
    for idx, (mode, bits) in enumerate(jobs):
        if progress_callback:
            progress_callback(f"AES-{bits} {mode}", idx, len(jobs))
        if mode == "block":
            results.append(run_block_roundtrip(bits, num_vectors=num_vectors, seed=seed))
        else:
            results.append(run_cbc_roundtrip(bits, num_vectors=num_vectors, seed=seed))
    return results
