"""
Vault Configuration — Master key loading and validated settings.

Reads the token master key from the environment:
    TOKEN_ENCRYPTION_KEY = <secret string, at least 32 characters>

An absent or short key leaves token encryption disabled; the wrapper then
stores tokens in plaintext and logs a warning.

Security Note:
    Never log key material. Only log whether a key is present and its length.
"""
import os
import base64
import secrets
import logging
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .crypto import MIN_MASTER_KEY_LENGTH
from .exceptions import KeyTooShort

logger = logging.getLogger("nexflow.vault")

ENCRYPTION_KEY_ENV = "TOKEN_ENCRYPTION_KEY"


def load_encryption_key(env_var: str = ENCRYPTION_KEY_ENV) -> Optional[str]:
    """Read the master key from an environment variable.

    Args:
        env_var: Environment variable name.

    Returns:
        The key, or None when the variable is unset or blank.
    """
    value = os.environ.get(env_var)
    if value is None or not value.strip():
        logger.debug("%s is not set", env_var)
        return None
    logger.debug("Loaded %s (%d characters)", env_var, len(value))
    return value


def generate_master_key() -> str:
    """Create a value for TOKEN_ENCRYPTION_KEY.

    The result is 44 characters long, above the 32-character minimum, so
    setting it turns on TokenEncryption. Operators run it once per
    environment; losing the value makes every stored token unreadable.
    """
    return base64.b64encode(secrets.token_bytes(32)).decode("ascii")


class EncryptionConfig(BaseModel):
    """Validated token encryption configuration."""

    encryption_key: Optional[str] = Field(default=None, repr=False)
    min_key_length: int = Field(default=MIN_MASTER_KEY_LENGTH, ge=MIN_MASTER_KEY_LENGTH)

    @field_validator("encryption_key")
    @classmethod
    def normalize_key(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank keys as absent."""
        if v is not None and not v.strip():
            return None
        return v

    @property
    def enabled(self) -> bool:
        """True when a key of sufficient length is configured."""
        return bool(
            self.encryption_key
            and len(self.encryption_key) >= self.min_key_length
        )

    def require_enabled(self) -> str:
        """Fail fast when encryption is mandatory but not configured.

        Returns:
            The configured master key.

        Raises:
            KeyTooShort: If the key is missing or too short.
        """
        if not self.enabled:
            length = len(self.encryption_key or "")
            logger.error(
                "Token encryption is required but %s is %s",
                ENCRYPTION_KEY_ENV,
                "too short" if length else "not set",
            )
            raise KeyTooShort(length, self.min_key_length)
        return self.encryption_key

    @classmethod
    def from_env(cls, env_var: str = ENCRYPTION_KEY_ENV) -> "EncryptionConfig":
        """Create EncryptionConfig by loading values from environment.

        A short key is kept as-is; ``enabled`` reports it as disabled.

        Returns:
            Populated EncryptionConfig instance.
        """
        return cls(encryption_key=load_encryption_key(env_var))
