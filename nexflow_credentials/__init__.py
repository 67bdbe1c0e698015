"""Nexflow Credentials.

Encryption at rest for integration OAuth tokens.
"""
from .version import __version__
from .data import IntegrationTokens
from .vault import (
    TokenEncryption,
    EncryptionConfig,
    get_token_encryption,
)

__all__ = (
    "__version__",
    "IntegrationTokens",
    "TokenEncryption",
    "EncryptionConfig",
    "get_token_encryption",
)
