"""Error taxonomy for the AES/CBC engine.

Every failure is a subclass of ``AESLabError`` (itself a ``ValueError``) so
callers can branch on the type and its attributes instead of message text.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from typing import Optional


class AESLabError(ValueError):
    """Base class for every engine error."""


class InvalidKeyLength(AESLabError):
    def __init__(self, length: int):
        self.length = length
        super().__init__(f"Invalid key length: {length} bytes. Must be 16, 24, or 32 bytes.")


class InvalidIVLength(AESLabError):
    def __init__(self, length: int):
        self.length = length
        super().__init__(f"Invalid IV length: {length} bytes. Must be 16 bytes.")


class InvalidBlockLength(AESLabError):
    def __init__(self, length: int):
        self.length = length
        super().__init__(f"Invalid block length: {length} bytes. Must be 16 bytes.")


class InvalidCiphertextLength(AESLabError):
    def __init__(self, length: int):
        self.length = length
        super().__init__(
            f"Invalid ciphertext length: {length} bytes. Must be a positive multiple of 16 bytes."
        )


class InvalidHexInput(AESLabError):
    def __init__(self, reason: str, value: Optional[str] = None):
        self.reason = reason
        self.value = value
        super().__init__(f"Invalid hex input: {reason}")


class EmptyInput(AESLabError):
    def __init__(self, message: str = "Cannot unpad empty data"):
        super().__init__(message)


class InvalidPadding(AESLabError):
    def __init__(self, message: str = "Invalid PKCS#7 padding"):
        super().__init__(message)


class DecryptionFailed(AESLabError):
    """Generic decryption failure.

    Raised for every padding problem found after CBC decryption. The message
    is fixed and the exception is raised without a cause so it does not tell
    which padding check failed or where.
    """

    def __init__(self) -> None:
        super().__init__("decryption failed")
