"""
Vault Exceptions — Error hierarchy for the envelope codec.

Security Note:
    Messages never carry key material, plaintext or ciphertext.
"""


class EncryptionError(Exception):
    """Base class for every envelope codec failure."""


class KeyTooShort(EncryptionError, ValueError):
    """Master key is missing or shorter than the minimum length."""

    def __init__(self, length: int, minimum: int = 32):
        self.length = length
        self.minimum = minimum
        super().__init__(
            f"Encryption key must be at least {minimum} characters "
            f"(got {length})"
        )


class EmptyPlaintext(EncryptionError, ValueError):
    """Refused to encrypt an empty value."""


class MalformedEnvelope(EncryptionError, ValueError):
    """Value is not valid base64 or is too short to be an envelope."""


class AuthenticationFailed(EncryptionError):
    """Authentication tag did not verify (wrong key or tampered envelope)."""


class InvalidUtf8(EncryptionError, ValueError):
    """Authenticated plaintext is not valid UTF-8."""
