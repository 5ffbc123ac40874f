"""Text/hex boundary of the engine.

All textual interchange is hexadecimal: input is case-insensitive and may
contain whitespace, output is lowercase. Message text is UTF-8.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from pydantic import BaseModel

from aeslab.cipher.block import BLOCK_SIZE, decrypt_block, encrypt_block
from aeslab.cipher.key_schedule import ROUNDS_BY_KEY_LENGTH, describe_key_schedule
from aeslab.errors import DecryptionFailed, InvalidKeyLength
from aeslab.modes.cbc import decrypt_cbc, encrypt_cbc
from aeslab.trace import CBCTraceRecorder, StepTrace
from aeslab.utils.encoding import (
    bytes_to_hex,
    bytes_to_text,
    hex_to_bytes,
    is_valid_hex,
    random_bytes,
    text_to_bytes,
)

logger = logging.getLogger(__name__)

KEY_SIZES_BITS = (128, 192, 256)


class EncryptResult(BaseModel):
    iv_hex: str
    ciphertext_hex: str
    trace: Optional[StepTrace] = None


class DecryptResult(BaseModel):
    plaintext_text: str
    trace: Optional[StepTrace] = None


def _key_from_hex(key_hex: str) -> bytes:
    key = hex_to_bytes(key_hex)
    if len(key) not in ROUNDS_BY_KEY_LENGTH:
        raise InvalidKeyLength(len(key))
    return key


def encrypt(
    plaintext_text: str,
    key_hex: str,
    *,
    iv_hex: Optional[str] = None,
    record_steps: bool = False,
) -> EncryptResult:
    """Encrypt text under a hex key. A fresh IV is generated unless ``iv_hex`` is given."""
    key = _key_from_hex(key_hex)
    iv = hex_to_bytes(iv_hex) if iv_hex is not None else None
    recorder = CBCTraceRecorder() if record_steps else None

    result = encrypt_cbc(text_to_bytes(plaintext_text), key, iv, recorder=recorder)
    return EncryptResult(
        iv_hex=bytes_to_hex(result.iv),
        ciphertext_hex=bytes_to_hex(result.ciphertext),
        trace=recorder.trace if recorder is not None else None,
    )


def decrypt(
    ciphertext_hex: str,
    key_hex: str,
    iv_hex: str,
    *,
    record_steps: bool = False,
) -> DecryptResult:
    ciphertext = hex_to_bytes(ciphertext_hex)
    key = _key_from_hex(key_hex)
    iv = hex_to_bytes(iv_hex)
    recorder = CBCTraceRecorder() if record_steps else None

    plaintext = decrypt_cbc(ciphertext, key, iv, recorder=recorder)
    try:
        text = bytes_to_text(plaintext)
    except UnicodeDecodeError:
        logger.debug("decrypted bytes are not valid UTF-8")
        raise DecryptionFailed() from None

    return DecryptResult(
        plaintext_text=text,
        trace=recorder.trace if recorder is not None else None,
    )


def generate_key(bits: int = 128) -> str:
    if bits not in KEY_SIZES_BITS:
        raise InvalidKeyLength(bits // 8 if bits > 0 else 0)
    return bytes_to_hex(random_bytes(bits // 8))


def generate_iv() -> str:
    return bytes_to_hex(random_bytes(BLOCK_SIZE))


# ---------------------------------------------------------------------------
# Educational helpers
# ---------------------------------------------------------------------------

def encrypt_block_hex(block_hex: str, key_hex: str) -> str:
    """Single block, no chaining or padding (ECB-equivalent)."""
    return bytes_to_hex(encrypt_block(hex_to_bytes(block_hex), _key_from_hex(key_hex)))


def decrypt_block_hex(block_hex: str, key_hex: str) -> str:
    return bytes_to_hex(decrypt_block(hex_to_bytes(block_hex), _key_from_hex(key_hex)))


def expand_key_hex(key_hex: str) -> List[Dict[str, object]]:
    return describe_key_schedule(_key_from_hex(key_hex))


def string_to_hex(text: str) -> str:
    return bytes_to_hex(text_to_bytes(text))


def hex_to_string(text_hex: str) -> str:
    return bytes_to_text(hex_to_bytes(text_hex))


def is_valid_key_length(key_hex: str) -> bool:
    return get_key_size(key_hex) is not None


def get_key_size(key_hex: str) -> Optional[int]:
    """Key size in bits, or None for a malformed or wrongly sized key."""
    if not is_valid_hex(key_hex):
        return None
    n = len(hex_to_bytes(key_hex))
    return n * 8 if n in ROUNDS_BY_KEY_LENGTH else None


__all__ = [
    "EncryptResult",
    "DecryptResult",
    "encrypt",
    "decrypt",
    "generate_key",
    "generate_iv",
    "encrypt_block_hex",
    "decrypt_block_hex",
    "expand_key_hex",
    "string_to_hex",
    "hex_to_string",
    "is_valid_hex",
    "is_valid_key_length",
    "get_key_size",
]
