"""clientlink persistence layer: the SQLite link store."""

from clientlink.db.models import Client, Target
from clientlink.db.repositories import ClientRepo, TargetRepo, to_source_record
from clientlink.db.sqlite import SQLiteDB

__all__ = [
    "SQLiteDB",
    "Client",
    "Target",
    "ClientRepo",
    "TargetRepo",
    "to_source_record",
]
