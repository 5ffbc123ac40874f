"""AES in Cipher Block Chaining mode with PKCS#7 padding.

Encryption:  C[i] = E(P[i] XOR C[i-1]),  C[-1] = IV
Decryption:  P[i] = D(C[i]) XOR C[i-1],  C[-1] = IV

Both directions run block by block in order. The key is expanded once per
call and the schedule is handed down to the block transform.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from aeslab.cipher.block import BLOCK_SIZE, decrypt_block, encrypt_block
from aeslab.cipher.key_schedule import expand_key
from aeslab.errors import (
    DecryptionFailed,
    EmptyInput,
    InvalidCiphertextLength,
    InvalidIVLength,
    InvalidPadding,
)
from aeslab.trace import CBCTraceRecorder
from aeslab.utils.encoding import random_bytes, xor_bytes

from .padding import pad, unpad

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CBCResult:
    iv: bytes
    ciphertext: bytes


def generate_iv() -> bytes:
    return random_bytes(BLOCK_SIZE)


def _check_iv(iv: bytes) -> bytes:
    if len(iv) != BLOCK_SIZE:
        raise InvalidIVLength(len(iv))
    return bytes(iv)


def encrypt_cbc(
    plaintext: bytes,
    key: bytes,
    iv: Optional[bytes] = None,
    *,
    recorder: Optional[CBCTraceRecorder] = None,
) -> CBCResult:
    """Pad and encrypt ``plaintext``; a fresh IV is generated when none is given."""
    schedule = expand_key(bytes(key))
    init_vector = _check_iv(iv) if iv is not None else generate_iv()

    padded = pad(plaintext, BLOCK_SIZE)
    if recorder is not None:
        recorder.begin("encrypt", init_vector, len(padded))

    out = bytearray()
    previous = init_vector
    for index, start in enumerate(range(0, len(padded), BLOCK_SIZE)):
        block = padded[start:start + BLOCK_SIZE]
        xored = xor_bytes(block, previous)
        encrypted = encrypt_block(xored, schedule)
        if recorder is not None:
            recorder.block(index, block, xored, encrypted)
        out += encrypted
        previous = encrypted

    ciphertext = bytes(out)
    if recorder is not None:
        recorder.finish(ciphertext)

    logger.debug("CBC encrypt: AES-%d, %d plaintext bytes -> %d blocks",
                 schedule.key_size_bits, len(plaintext), len(ciphertext) // BLOCK_SIZE)
    return CBCResult(iv=init_vector, ciphertext=ciphertext)


def decrypt_cbc(
    ciphertext: bytes,
    key: bytes,
    iv: bytes,
    *,
    recorder: Optional[CBCTraceRecorder] = None,
) -> bytes:
    """Decrypt and unpad.

    Length problems are reported before any block is processed. Any padding
    problem is reported as a single DecryptionFailed.
    """
    init_vector = _check_iv(iv)
    if len(ciphertext) == 0 or len(ciphertext) % BLOCK_SIZE != 0:
        raise InvalidCiphertextLength(len(ciphertext))
    schedule = expand_key(bytes(key))

    if recorder is not None:
        recorder.begin("decrypt", init_vector, len(ciphertext))

    out = bytearray()
    previous = init_vector
    for index, start in enumerate(range(0, len(ciphertext), BLOCK_SIZE)):
        block = bytes(ciphertext[start:start + BLOCK_SIZE])
        decrypted = decrypt_block(block, schedule)
        xored = xor_bytes(decrypted, previous)
        if recorder is not None:
            recorder.block(index, block, xored, decrypted)
        out += xored
        # chain on the ciphertext input, not the recovered plaintext
        previous = block

    try:
        plaintext = unpad(bytes(out), BLOCK_SIZE)
    except (InvalidPadding, EmptyInput):
        logger.debug("CBC decrypt: padding check failed")
        raise DecryptionFailed() from None

    if recorder is not None:
        recorder.finish(plaintext)

    logger.debug("CBC decrypt: AES-%d, %d blocks -> %d plaintext bytes",
                 schedule.key_size_bits, len(ciphertext) // BLOCK_SIZE, len(plaintext))
    return plaintext
