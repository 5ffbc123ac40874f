"""AES primitives: GF(2^8) tables, key expansion and the block transform."""

from .block import (
    AESBlockCipher,
    BlockCipher,
    BlockRoundRecorder,
    RoundStep,
    decrypt_block,
    encrypt_block,
)
from .key_schedule import KeySchedule, describe_key_schedule, expand_key

__all__ = [
    "AESBlockCipher",
    "BlockCipher",
    "BlockRoundRecorder",
    "RoundStep",
    "decrypt_block",
    "encrypt_block",
    "KeySchedule",
    "describe_key_schedule",
    "expand_key",
]
