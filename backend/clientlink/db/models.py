"""Pydantic models matching the SQLite table schemas.

These are shared between the DB layer and API responses.
"""

from datetime import datetime

from pydantic import BaseModel


class Client(BaseModel):
    """A client record from the source that needs a link (set A)."""

    id: str
    name: str | None = None
    linked_target_key: str | None = None  # None until a match is applied
    created_at: datetime
    updated_at: datetime


class Target(BaseModel):
    """A record clients can be linked to (set B)."""

    id: str
    name: str | None = None
    tax_id: str | None = None
    created_at: datetime
