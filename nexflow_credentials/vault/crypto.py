"""
Vault Crypto Core — Key derivation and the token envelope codec.

Envelope layout (base64-encoded for text columns):
    [salt 32B][iv 16B][auth_tag 16B][ciphertext nB]

- Key: scrypt(master_key, salt) → 32 bytes (AES-256)
- Cipher: AES-GCM with the 16-byte iv and no associated data

Security Note:
    Never log plaintext or ciphertext values.
    The scrypt cost parameters are not stored in the envelope; changing them
    makes every previously written envelope undecryptable.
"""
import os
import base64
import binascii
import logging
from typing import Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .exceptions import (
    KeyTooShort,
    EmptyPlaintext,
    MalformedEnvelope,
    AuthenticationFailed,
    InvalidUtf8,
)

logger = logging.getLogger("nexflow.vault")

SALT_LENGTH = 32
IV_LENGTH = 16
AUTH_TAG_LENGTH = 16
KEY_LENGTH = 32  # AES-256
MIN_MASTER_KEY_LENGTH = 32

HEADER_LENGTH = SALT_LENGTH + IV_LENGTH + AUTH_TAG_LENGTH
MIN_ENVELOPE_LENGTH = HEADER_LENGTH + 1

# scrypt cost, frozen for the lifetime of the envelope format.
SCRYPT_N = 2**14
SCRYPT_R = 8
SCRYPT_P = 1

MasterKey = Union[str, bytes]


def _key_bytes(master_key: MasterKey) -> bytes:
    if isinstance(master_key, str):
        return master_key.encode("utf-8")
    return bytes(master_key)


def _check_master_key(master_key: MasterKey) -> None:
    """Reject a missing or short master key before any crypto work.

    Raises:
        KeyTooShort: If the key is shorter than MIN_MASTER_KEY_LENGTH.
    """
    length = len(master_key) if master_key else 0
    if length < MIN_MASTER_KEY_LENGTH:
        raise KeyTooShort(length, MIN_MASTER_KEY_LENGTH)


def _b64decode(value: Union[str, bytes]) -> bytes:
    """Strict base64 decode; raises ValueError on any invalid input."""
    if isinstance(value, str):
        value = value.encode("ascii")
    return base64.b64decode(value, validate=True)


# ---------------------------------------------------------------------------
# Key derivation
# ---------------------------------------------------------------------------

def derive_key(master_key: MasterKey, salt: bytes) -> bytes:
    """Derive a 32-byte encryption key using scrypt.

    Args:
        master_key: Operator master secret (str is encoded as UTF-8).
        salt: Per-envelope random salt.

    Returns:
        32-byte derived key.
    """
    kdf = Scrypt(
        salt=salt,
        length=KEY_LENGTH,
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
    )
    return kdf.derive(_key_bytes(master_key))


# ---------------------------------------------------------------------------
# Envelope codec
# ---------------------------------------------------------------------------

def encrypt(plaintext: str, master_key: MasterKey) -> str:
    """Encrypt a token into a base64 envelope.

    Format: base64([salt 32B][iv 16B][auth_tag 16B][ciphertext])

    Args:
        plaintext: Token to encrypt. Must not be empty.
        master_key: Master secret, at least 32 characters.

    Returns:
        ASCII base64 envelope, different on every call.

    Raises:
        KeyTooShort: If master_key is shorter than 32.
        EmptyPlaintext: If plaintext is empty.
    """
    _check_master_key(master_key)
    if not plaintext:
        raise EmptyPlaintext("Cannot encrypt an empty value")

    salt = os.urandom(SALT_LENGTH)
    iv = os.urandom(IV_LENGTH)
    key = derive_key(master_key, salt)

    # AESGCM appends the tag to the ciphertext
    sealed = AESGCM(key).encrypt(iv, plaintext.encode("utf-8"), None)
    ciphertext, auth_tag = sealed[:-AUTH_TAG_LENGTH], sealed[-AUTH_TAG_LENGTH:]

    envelope = salt + iv + auth_tag + ciphertext
    return base64.b64encode(envelope).decode("ascii")


def decrypt(envelope: Union[str, bytes], master_key: MasterKey) -> str:
    """Decrypt a base64 envelope produced by :func:`encrypt`.

    Args:
        envelope: Base64 envelope.
        master_key: Master secret used at encryption time.

    Returns:
        Original plaintext.

    Raises:
        KeyTooShort: If master_key is shorter than 32.
        MalformedEnvelope: If the value is not base64 or is too short.
        AuthenticationFailed: If the tag does not verify.
        InvalidUtf8: If the decrypted bytes are not UTF-8.
    """
    _check_master_key(master_key)

    try:
        combined = _b64decode(envelope)
    except (binascii.Error, ValueError, TypeError) as err:
        raise MalformedEnvelope("Envelope is not valid base64") from err
    if len(combined) < MIN_ENVELOPE_LENGTH:
        raise MalformedEnvelope(
            f"Envelope too short: {len(combined)} bytes "
            f"(minimum {MIN_ENVELOPE_LENGTH})"
        )

    salt = combined[:SALT_LENGTH]
    iv = combined[SALT_LENGTH:SALT_LENGTH + IV_LENGTH]
    auth_tag = combined[SALT_LENGTH + IV_LENGTH:HEADER_LENGTH]
    ciphertext = combined[HEADER_LENGTH:]

    key = derive_key(master_key, salt)
    try:
        data = AESGCM(key).decrypt(iv, ciphertext + auth_tag, None)
    except InvalidTag as err:
        raise AuthenticationFailed(
            "Envelope authentication failed: wrong key or tampered data"
        ) from err

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as err:
        raise InvalidUtf8("Decrypted value is not valid UTF-8") from err


def is_encrypted(value: Union[str, bytes, None]) -> bool:
    """Best-effort check that a value looks like an envelope.

    True when the value strictly base64-decodes to at least
    MIN_ENVELOPE_LENGTH bytes. Coincidental base64-looking plaintext can
    match; only :func:`decrypt` is authoritative.
    """
    if not value or not isinstance(value, (str, bytes)):
        return False
    try:
        decoded = _b64decode(value)
    except (binascii.Error, ValueError):
        return False
    return len(decoded) >= MIN_ENVELOPE_LENGTH
