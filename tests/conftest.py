import pytest

from nexflow_credentials.vault import reset_token_encryption


MASTER_KEY = "k" * 32


@pytest.fixture
def master_key():
    return MASTER_KEY


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate every test from the host TOKEN_ENCRYPTION_KEY."""
    monkeypatch.delenv("TOKEN_ENCRYPTION_KEY", raising=False)
    reset_token_encryption()
    yield
    reset_token_encryption()
