"""Base model for payloads received from outside the library.

Every wire model inherits from :class:`RutasBaseModel` which provides:

* ``populate_by_name`` so Spanish backend keys (``nombre``, ``costo``)
  and English field names are both accepted through ``AliasChoices``.
* A ``model_validator(mode="before")`` that drops ``null`` values so the
  field default is used.
* A ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RutasBaseModel(BaseModel):
    """Base for payloads parsed at the library boundary."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original payload dict."""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        """Drop ``None`` values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        cleaned = {key: value for key, value in values.items() if value is not None}
        # Keep an explicitly supplied raw= as is.
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned
