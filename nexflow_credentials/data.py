"""Integration token records.

An integration row carries two independently optional OAuth secrets.
Field names accept both the storage spelling (``accessToken``) and the
Python spelling (``access_token``).
"""
from typing import Any, Optional
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field


class IntegrationTokens(BaseModel):
    """Access/refresh token pair of a third-party integration."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    access_token: Optional[str] = Field(default=None, alias="accessToken")
    refresh_token: Optional[str] = Field(default=None, alias="refreshToken")

    def __repr__(self) -> str:
        # never expose token values
        return (
            f'<IntegrationTokens [access:{self.access_token is not None}, '
            f'refresh:{self.refresh_token is not None}]>'
        )

    __str__ = __repr__

    @classmethod
    def coerce(cls, data: Any) -> "IntegrationTokens":
        """Build a record from a model instance or a mapping."""
        if isinstance(data, cls):
            return data
        if data is None:
            return cls()
        if isinstance(data, Mapping):
            return cls.model_validate(dict(data))
        raise TypeError(
            f"Expected IntegrationTokens or a mapping, got {type(data).__name__}"
        )

    @property
    def has_tokens(self) -> bool:
        return bool(self.access_token or self.refresh_token)

    def to_storage(self) -> dict[str, Optional[str]]:
        """Column-name dict for writing to the integrations table."""
        return self.model_dump(by_alias=True)
