"""aeslab: from-scratch AES-128/192/256 with CBC mode and PKCS#7 padding.

Research / education only. Do NOT use in production: the implementation is
not constant-time and provides no authentication.
"""

from .api import (
    DecryptResult,
    EncryptResult,
    decrypt,
    encrypt,
    generate_iv,
    generate_key,
)
from .errors import (
    AESLabError,
    DecryptionFailed,
    EmptyInput,
    InvalidBlockLength,
    InvalidCiphertextLength,
    InvalidHexInput,
    InvalidIVLength,
    InvalidKeyLength,
    InvalidPadding,
)

__version__ = "0.1.0"

__all__ = [
    "DecryptResult",
    "EncryptResult",
    "decrypt",
    "encrypt",
    "generate_iv",
    "generate_key",
    "AESLabError",
    "DecryptionFailed",
    "EmptyInput",
    "InvalidBlockLength",
    "InvalidCiphertextLength",
    "InvalidHexInput",
    "InvalidIVLength",
    "InvalidKeyLength",
    "InvalidPadding",
]
