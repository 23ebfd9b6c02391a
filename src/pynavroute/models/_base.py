"""Base model and enum for route annotations.

Every annotation model inherits from :class:`NavBaseModel` which
provides:

* ``alias_generator=to_camel`` so camelCase keys (as found in recorded
  tracks and leg payloads) map automatically to snake_case fields.
* A ``model_validator(mode="before")`` that drops missing values
  (``None``, NaN) so the field default is used. Empty strings are
  kept: an empty street name is meaningful.

Index-keyed table rows inherit from :class:`IndexedItem`.

Enums inherit from :class:`NavEnum` which adds an ``UNKNOWN`` member at
``-1`` and a ``_missing_`` hook that returns ``UNKNOWN`` for any value
without a mapped member.
"""

from __future__ import annotations

import enum
import math
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class NavEnum(enum.IntEnum):
    """Base for annotation enums.

    Every subclass **must** define ``UNKNOWN = -1``.
    """

    @classmethod
    def _missing_(cls, value: object) -> NavEnum:
        # pylint: disable=no-member
        if hasattr(cls, "UNKNOWN"):
            unknown: NavEnum = cls.UNKNOWN  # type: ignore[attr-defined]
            return unknown
        return next(iter(cls))


class NavBaseModel(BaseModel):
    """Base for immutable annotation models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @staticmethod
    def _clean_dict(values: dict[str, Any]) -> dict[str, Any]:
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            cleaned[key] = value
        return cleaned

    @model_validator(mode="before")
    @classmethod
    def _clean_values(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return NavBaseModel._clean_dict(values)


class IndexedItem(NavBaseModel):
    """A table row keyed by a path vertex index."""

    index: int = Field(ge=0)

    def shifted(self, offset: int, **updates: Any) -> Self:
        """Copy of this row moved *offset* vertices forward."""
        return self.model_copy(update={"index": self.index + offset, **updates})
