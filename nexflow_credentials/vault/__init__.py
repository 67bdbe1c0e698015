"""Token Vault — Authenticated encryption for stored integration tokens.

Security Note (Threat Model):
    Decrypted tokens exist in process memory while in use, and the master
    key is held in memory for the life of the process. Protecting the key
    at rest (HSM/KMS) and rotating it are out of scope.
"""

from .crypto import encrypt, decrypt, is_encrypted, derive_key
from .exceptions import (
    EncryptionError,
    KeyTooShort,
    EmptyPlaintext,
    MalformedEnvelope,
    AuthenticationFailed,
    InvalidUtf8,
)
from .config import EncryptionConfig, load_encryption_key, generate_master_key
from .tokens import (
    TokenEncryption,
    get_token_encryption,
    reset_token_encryption,
    token_encryption_enabled,
)

__all__ = [
    "encrypt",
    "decrypt",
    "is_encrypted",
    "derive_key",
    "EncryptionError",
    "KeyTooShort",
    "EmptyPlaintext",
    "MalformedEnvelope",
    "AuthenticationFailed",
    "InvalidUtf8",
    "EncryptionConfig",
    "load_encryption_key",
    "generate_master_key",
    "TokenEncryption",
    "get_token_encryption",
    "reset_token_encryption",
    "token_encryption_enabled",
]
