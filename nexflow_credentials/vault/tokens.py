"""
TokenEncryption — Applies the envelope codec to integration tokens.

Degraded modes:
- No key (or a short one) configured: tokens pass through in plaintext and a
  warning is logged. Encryption can be switched on later without a migration.
- Key configured but the stored value does not look like an envelope: the
  value is a legacy plaintext token and is returned as-is with a warning.

Once a stored value looks like an envelope, codec errors propagate; a
wrong-key or tampered token is never handed back to the caller.

Security Note:
    Never log token values, only which path was taken.
"""
import logging
import threading
from typing import Any, Optional

from .crypto import encrypt, decrypt, is_encrypted
from .config import EncryptionConfig
from ..data import IntegrationTokens

logger = logging.getLogger("nexflow.vault")


class TokenEncryption:
    """Encrypts and decrypts the secret fields of integration records.

    The master key is resolved once at construction: explicit argument,
    then ``config``, then the ``TOKEN_ENCRYPTION_KEY`` environment variable.
    Instances hold no mutable state and can be shared across threads.
    """

    def __init__(
        self,
        encryption_key: Optional[str] = None,
        config: Optional[EncryptionConfig] = None,
    ):
        if config is None:
            config = (
                EncryptionConfig(encryption_key=encryption_key)
                if encryption_key else EncryptionConfig.from_env()
            )
        elif encryption_key:
            config = config.model_copy(update={"encryption_key": encryption_key})
        self._config = config
        if config.encryption_key and not config.enabled:
            logger.warning(
                "Token encryption key is shorter than %d characters; "
                "encryption disabled",
                config.min_key_length,
            )

    def __repr__(self) -> str:
        return f'<TokenEncryption [enabled:{self.is_enabled}]>'

    @property
    def is_enabled(self) -> bool:
        """True when the configured master key meets the configured minimum."""
        return self._config.enabled

    @property
    def _encryption_key(self) -> Optional[str]:
        return self._config.encryption_key

    # ------------------------------------------------------------------
    # Single tokens
    # ------------------------------------------------------------------

    def encrypt_token(self, token: str) -> str:
        """Encrypt a token for storage, or pass it through when disabled."""
        if not self.is_enabled:
            logger.warning(
                "Encryption disabled - storing token in plaintext"
            )
            return token
        return encrypt(token, self._encryption_key)

    def decrypt_token(self, encrypted_token: str) -> str:
        """Decrypt a stored token.

        Returns the input unchanged when encryption is disabled or when the
        value does not look like an envelope (legacy plaintext).

        Raises:
            MalformedEnvelope: Propagated from the codec.
            AuthenticationFailed: Propagated from the codec.
            InvalidUtf8: Propagated from the codec.
        """
        if not self.is_enabled:
            return encrypted_token
        if not is_encrypted(encrypted_token):
            logger.warning(
                "Token appears unencrypted - returning as-is"
            )
            return encrypted_token
        return decrypt(encrypted_token, self._encryption_key)

    # ------------------------------------------------------------------
    # Integration records
    # ------------------------------------------------------------------

    def encrypt_integration_tokens(self, data: Any) -> IntegrationTokens:
        """Encrypt both token fields of an integration record for storage.

        Fields are handled independently; absent or empty fields become None.

        Args:
            data: IntegrationTokens or a mapping with ``access_token`` /
                ``refresh_token`` (or ``accessToken`` / ``refreshToken``).

        Returns:
            IntegrationTokens holding the stored representation.
        """
        tokens = IntegrationTokens.coerce(data)
        return IntegrationTokens(
            access_token=(
                self.encrypt_token(tokens.access_token)
                if tokens.access_token else None
            ),
            refresh_token=(
                self.encrypt_token(tokens.refresh_token)
                if tokens.refresh_token else None
            ),
        )

    def decrypt_integration_tokens(self, data: Any) -> IntegrationTokens:
        """Decrypt both token fields of a stored integration record.

        Args:
            data: IntegrationTokens or a mapping, as stored.

        Returns:
            IntegrationTokens holding plaintext tokens.
        """
        tokens = IntegrationTokens.coerce(data)
        return IntegrationTokens(
            access_token=(
                self.decrypt_token(tokens.access_token)
                if tokens.access_token else None
            ),
            refresh_token=(
                self.decrypt_token(tokens.refresh_token)
                if tokens.refresh_token else None
            ),
        )


# ---------------------------------------------------------------------------
# Default instance
# ---------------------------------------------------------------------------

_default: Optional[TokenEncryption] = None
_default_lock = threading.Lock()


def get_token_encryption() -> TokenEncryption:
    """Return the process-wide TokenEncryption built from the environment."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = TokenEncryption(config=EncryptionConfig.from_env())
                logger.debug("Default %r created", _default)
    return _default


def reset_token_encryption() -> None:
    """Drop the cached default instance so the environment is re-read."""
    global _default
    with _default_lock:
        _default = None


def token_encryption_enabled() -> bool:
    """Feature flag: token encryption is active for this process."""
    return get_token_encryption().is_enabled
