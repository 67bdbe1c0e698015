"""Tests for the IntegrationTokens record."""
import pytest
from pydantic import ValidationError

from nexflow_credentials.data import IntegrationTokens


class TestIntegrationTokensRecord:

    def test_aliases(self):
        """Storage and Python spellings populate the same fields."""
        a = IntegrationTokens.coerce({"accessToken": "a", "refreshToken": "r"})
        b = IntegrationTokens.coerce({"access_token": "a", "refresh_token": "r"})
        assert a == b

    def test_to_storage(self):
        tokens = IntegrationTokens(access_token="a")
        assert tokens.to_storage() == {"accessToken": "a", "refreshToken": None}

    def test_has_tokens(self):
        assert IntegrationTokens().has_tokens is False
        assert IntegrationTokens(refresh_token="r").has_tokens is True

    def test_coerce_instance(self):
        tokens = IntegrationTokens(access_token="a")
        assert IntegrationTokens.coerce(tokens) is tokens

    def test_coerce_none(self):
        assert IntegrationTokens.coerce(None) == IntegrationTokens()

    def test_repr_hides_values(self):
        tokens = IntegrationTokens(access_token="secret-a", refresh_token="secret-r")
        assert "secret" not in repr(tokens)
        assert "secret" not in str(tokens)

    def test_frozen(self):
        tokens = IntegrationTokens(access_token="a")
        with pytest.raises(ValidationError):
            tokens.access_token = "b"
