"""
Shared model plumbing: camelCase wire format and datetime helpers.
"""

import datetime as dt
from typing import Any, Dict, Union

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def utc_today() -> dt.date:
    return utc_now().date()


def as_datetime(value: Union[dt.datetime, dt.date]) -> dt.datetime:
    """Promote a date to midnight UTC; make naive datetimes UTC."""
    if isinstance(value, dt.datetime):
        return value if value.tzinfo else value.replace(tzinfo=dt.timezone.utc)
    return dt.datetime.combine(value, dt.time.min, tzinfo=dt.timezone.utc)


class CamelModel(BaseModel):
    """Base model: snake_case in Python, camelCase on the wire and on disk."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def to_document(self) -> Dict[str, Any]:
        """JSON-compatible dict with camelCase keys, ready for the store."""
        return self.model_dump(mode="json", by_alias=True)
