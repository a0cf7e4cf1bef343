"""Base model for API records.

Every incoming record model inherits from :class:`DscBaseModel` which
provides:

* ``extra="ignore"`` so new API keys never break parsing.
* A ``raw`` dict capturing the original payload.
* Presence tracking through pydantic's ``model_fields_set``: a key sent
  with ``null`` counts as present, a key never sent does not. Entity
  merges depend on that distinction, so unlike a typical cleaning
  validator this base never drops ``None`` values.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator


def parse_snowflake(value: Any) -> Any:
    """Accept snowflakes sent as ints and normalise them to decimal strings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value.strip()
    return value


Snowflake = Annotated[str, BeforeValidator(parse_snowflake)]
"""Annotated type for snowflake ids (always a decimal string)."""


class DscBaseModel(BaseModel):
    """Base for API record models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)
    """Original API record."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict) or "raw" in values:
            return values
        stashed = dict(values)
        stashed["raw"] = dict(values)
        return stashed

    def has(self, name: str) -> bool:
        """Whether *name* was present in the record (even when ``null``)."""
        return name in self.model_fields_set
