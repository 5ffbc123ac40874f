"""PKCS#7 padding.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from aeslab.errors import EmptyInput, InvalidPadding

BLOCK_SIZE_BYTES = 16


def pad(data: bytes, block_size: int = BLOCK_SIZE_BYTES) -> bytes:
    """Append ``n = block_size - len % block_size`` bytes of value ``n``.

    A message that is already a multiple of the block size gets a full
    extra block of padding.
    """
    if not 1 <= block_size <= 255:
        raise ValueError("block_size must be in 1..255")
    n = block_size - (len(data) % block_size)
    return bytes(data) + bytes([n]) * n


def unpad(data: bytes, block_size: int = BLOCK_SIZE_BYTES) -> bytes:
    """Strip and validate PKCS#7 padding, checking every padding byte."""
    if len(data) == 0:
        raise EmptyInput()
    n = data[-1]
    if n == 0 or n > block_size or n > len(data):
        raise InvalidPadding(f"Invalid padding length: {n}")
    for i in range(len(data) - n, len(data)):
        if data[i] != n:
            raise InvalidPadding(f"Invalid padding byte at offset {i}")
    return bytes(data[:-n])
