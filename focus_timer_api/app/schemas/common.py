"""Shared model configuration and field helpers."""

import json
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

# Range of an SQLite INTEGER column.
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


class CamelModel(BaseModel):
    """Base model using camelCase aliases on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def reject_null(value: Any) -> Any:
    """Before-validator for optional inputs whose column cannot be NULL.

    Leaving the field out means "unchanged"; sending ``null`` is an error.
    """
    if value is None:
        raise ValueError("may be omitted but not null")
    return value


def check_json(value: Any) -> Any:
    """After-validator for free-form values that are stored as JSON text."""
    if value is not None:
        try:
            json.dumps(value)
        except (TypeError, ValueError):
            raise ValueError("must be JSON-serializable")
    return value


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
