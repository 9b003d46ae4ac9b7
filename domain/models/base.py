"""
Shared pieces of the domain entities: base model, id and timestamp helpers.
"""

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base for persisted entities.

    Entities are plain values; invariants are checked by the mappers, not on
    construction, so an invalid entity can exist long enough to be reported.
    """

    model_config = ConfigDict(from_attributes=True)


def new_id() -> str:
    """Opaque unique identifier for a new row."""
    return str(uuid.uuid4())


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. 2025-10-27T12:00:00.000Z"""
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )
