"""Byte, hex and text conversions used at the engine boundary.

Pure helpers with no cipher knowledge: text <-> bytes, hex <-> bytes,
fixed-length XOR, block splitting/joining and display grouping.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import re
import secrets
from typing import Iterable, List

from aeslab.errors import InvalidHexInput

BLOCK_SIZE_BYTES = 16

_HEX_RE = re.compile(r"^[0-9A-Fa-f]*$")
_WHITESPACE_RE = re.compile(r"\s+")


def text_to_bytes(text: str) -> bytes:
    """Encode text as UTF-8."""
    return text.encode("utf-8")


def bytes_to_text(data: bytes) -> str:
    """Decode UTF-8 bytes; raises UnicodeDecodeError on invalid input."""
    return bytes(data).decode("utf-8")


def _strip_hex(text: str) -> str:
    return _WHITESPACE_RE.sub("", text)


def is_valid_hex(text: str) -> bool:
    """True for a non-empty, even-length hex string (whitespace ignored)."""
    cleaned = _strip_hex(text)
    return bool(cleaned) and len(cleaned) % 2 == 0 and bool(_HEX_RE.match(cleaned))


def hex_to_bytes(text: str) -> bytes:
    """Parse case-insensitive hex, ignoring whitespace.

    Odd-length input and non-hex characters raise InvalidHexInput; nothing
    is padded or dropped.
    """
    if not isinstance(text, str):
        raise InvalidHexInput(f"expected str, got {type(text).__name__}")
    cleaned = _strip_hex(text)
    if not _HEX_RE.match(cleaned):
        raise InvalidHexInput("non-hex characters", text)
    if len(cleaned) % 2 != 0:
        raise InvalidHexInput(f"odd number of hex digits ({len(cleaned)})", text)
    return bytes.fromhex(cleaned)


def bytes_to_hex(data: bytes) -> str:
    return bytes(data).hex()


def xor_bytes(a: bytes, b: bytes) -> bytes:
    """XOR two byte strings of equal length."""
    if len(a) != len(b):
        raise ValueError(f"xor_bytes length mismatch: {len(a)} vs {len(b)}")
    return bytes(x ^ y for x, y in zip(a, b))


def split_blocks(data: bytes, block_size: int = BLOCK_SIZE_BYTES) -> List[bytes]:
    """Split into consecutive chunks; the last chunk may be short."""
    if block_size <= 0:
        raise ValueError("block_size must be positive")
    return [bytes(data[i:i + block_size]) for i in range(0, len(data), block_size)]


def join_blocks(blocks: Iterable[bytes]) -> bytes:
    return b"".join(blocks)


def format_bytes_for_display(data: bytes, bytes_per_group: int = 4) -> str:
    """Hex with a space every ``bytes_per_group`` bytes, e.g. ``00112233 44556677``."""
    hx = bytes_to_hex(data)
    step = bytes_per_group * 2
    return " ".join(hx[i:i + step] for i in range(0, len(hx), step))


def random_bytes(n: int) -> bytes:
    """Fresh random bytes for keys and IVs (OS CSPRNG via ``secrets``)."""
    if n < 0:
        raise ValueError("n must be non-negative")
    return secrets.token_bytes(n)
