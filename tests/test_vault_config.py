"""Tests for EncryptionConfig and key helpers."""
import base64

import pytest
from pydantic import ValidationError

from nexflow_credentials.vault.config import (
    EncryptionConfig,
    load_encryption_key,
    generate_master_key,
)
from nexflow_credentials.vault.exceptions import KeyTooShort


class TestLoadEncryptionKey:

    def test_unset(self):
        assert load_encryption_key() is None

    def test_blank(self, monkeypatch):
        monkeypatch.setenv("TOKEN_ENCRYPTION_KEY", "   ")
        assert load_encryption_key() is None

    def test_set(self, monkeypatch, master_key):
        monkeypatch.setenv("TOKEN_ENCRYPTION_KEY", master_key)
        assert load_encryption_key() == master_key

    def test_custom_variable(self, monkeypatch, master_key):
        monkeypatch.setenv("OTHER_KEY", master_key)
        assert load_encryption_key("OTHER_KEY") == master_key


class TestEncryptionConfig:

    def test_defaults(self):
        config = EncryptionConfig()
        assert config.encryption_key is None
        assert config.enabled is False

    def test_enabled(self, master_key):
        assert EncryptionConfig(encryption_key=master_key).enabled is True

    def test_short_key_is_disabled(self):
        """Short keys are accepted but leave encryption off."""
        config = EncryptionConfig(encryption_key="k" * 31)
        assert config.enabled is False

    def test_blank_key_normalized(self):
        assert EncryptionConfig(encryption_key="").encryption_key is None

    def test_min_length_cannot_be_lowered(self):
        with pytest.raises(ValidationError):
            EncryptionConfig(encryption_key="k" * 16, min_key_length=16)

    def test_repr_hides_key(self, master_key):
        assert master_key not in repr(EncryptionConfig(encryption_key=master_key))

    def test_from_env(self, monkeypatch, master_key):
        monkeypatch.setenv("TOKEN_ENCRYPTION_KEY", master_key)
        config = EncryptionConfig.from_env()
        assert config.enabled is True
        assert config.encryption_key == master_key

    def test_from_env_short_key_does_not_raise(self, monkeypatch):
        monkeypatch.setenv("TOKEN_ENCRYPTION_KEY", "short")
        assert EncryptionConfig.from_env().enabled is False

    def test_require_enabled(self, master_key):
        config = EncryptionConfig(encryption_key=master_key)
        assert config.require_enabled() == master_key

    @pytest.mark.parametrize("key", [None, "short"])
    def test_require_enabled_fails_fast(self, key):
        with pytest.raises(KeyTooShort):
            EncryptionConfig(encryption_key=key).require_enabled()


class TestGenerateMasterKey:

    def test_shape(self):
        key = generate_master_key()
        assert len(key) == 44
        assert len(base64.b64decode(key)) == 32

    def test_usable(self):
        assert EncryptionConfig(encryption_key=generate_master_key()).enabled

    def test_unique(self):
        assert generate_master_key() != generate_master_key()
