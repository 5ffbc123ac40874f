"""Block-cipher modes of operation and padding."""

from .cbc import CBCResult, decrypt_cbc, encrypt_cbc, generate_iv
from .padding import pad, unpad

__all__ = ["CBCResult", "decrypt_cbc", "encrypt_cbc", "generate_iv", "pad", "unpad"]
