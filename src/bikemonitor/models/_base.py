"""Base model shared by feed and state models.

Every model inherits from :class:`BikeBaseModel` which provides:

* ``alias_generator=to_camel`` so camelCase JSON keys map
  automatically to snake_case fields (and back on dump).
* A ``model_validator(mode="before")`` that strips placeholder values
  (``""``, ``"-"``, NaN) so the field default is used, and renames
  legacy keys listed in ``_KEY_ALIASES``.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

# Placeholder strings feeds use for "not available".
_SENTINELS = frozenset({"", "-", "--", "NaN", "nan"})


def ensure_utc(value: Any) -> Any:
    """Normalise datetimes (and ISO strings) to UTC; naive values are taken as UTC."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
    return value


UtcDatetime = Annotated[datetime, BeforeValidator(ensure_utc)]
"""Annotated type that coerces datetimes (and ISO strings) to aware UTC."""


class BikeBaseModel(BaseModel):
    """Base for bikemonitor models."""

    _KEY_ALIASES: ClassVar[dict[str, str]] = {}
    """Legacy key -> current camelCase key, applied before validation."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @staticmethod
    def _clean_dict(values: dict[str, Any], aliases: dict[str, str] | None = None) -> dict[str, Any]:
        working = dict(values)
        if aliases:
            for old_key, new_key in aliases.items():
                if old_key in working and new_key not in working:
                    working[new_key] = working.pop(old_key)

        cleaned: dict[str, Any] = {}
        for key, value in working.items():
            if value is None:
                continue
            if isinstance(value, str) and value.strip() in _SENTINELS:
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            cleaned[key] = value
        return cleaned

    @model_validator(mode="before")
    @classmethod
    def _clean_values(cls, values: Any) -> Any:
        """Strip placeholder values and apply legacy key aliases."""
        if not isinstance(values, dict):
            return values
        aliases: dict[str, str] = getattr(cls, "_KEY_ALIASES", {})
        return BikeBaseModel._clean_dict(values, aliases)
