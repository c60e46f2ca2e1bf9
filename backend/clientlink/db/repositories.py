"""Data access repositories for the link store.

Each repo takes a SQLiteDB instance via dependency injection. Repositories are
the single entry point for all persistence: no direct DB access from API
routes. The matcher itself never sees a repository; rows are converted to
SourceRecord values with to_source_record() before matching.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from clientlink.db.sqlite import SQLiteDB
from clientlink.entity.models import SourceRecord


def _now_iso() -> str:
    """Return the current UTC time as an ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    """Generate a new UUID string."""
    return str(uuid.uuid4())


def to_source_record(
    row: dict[str, Any],
    name_field: str = "name",
    metadata_fields: Sequence[str] = (),
) -> SourceRecord:
    """Adapt a store row to the matcher's input shape.

    Only the listed metadata fields are carried along; they are passed
    through to match candidates untouched.
    """
    return SourceRecord(
        id=row["id"],
        raw_name=row.get(name_field),
        metadata={f: row.get(f) for f in metadata_fields},
    )


class ClientRepo:
    """Repository for client records (set A).

    A client without linked_target_key is "unlinked" and is offered to the
    matcher; apply_link() is the only write that removes it from that set.
    """

    def __init__(self, db: SQLiteDB) -> None:
        self._db = db

    def create(self, name: str | None, client_id: str | None = None) -> dict[str, Any]:
        """Create a client and return it as a dict."""
        client_id = client_id or _new_id()
        now = _now_iso()
        self._db.execute(
            "INSERT INTO clients (id, name, linked_target_key, created_at, updated_at) "
            "VALUES (?, ?, NULL, ?, ?)",
            (client_id, name, now, now),
        )
        return self.get(client_id)  # type: ignore[return-value]

    def get(self, client_id: str) -> dict[str, Any] | None:
        """Get a client by ID."""
        return self._db.fetchone("SELECT * FROM clients WHERE id = ?", (client_id,))

    def list_unlinked(self) -> list[dict[str, Any]]:
        """List clients without a confirmed link, in insertion order."""
        return self._db.fetchall(
            "SELECT * FROM clients WHERE linked_target_key IS NULL ORDER BY rowid"
        )

    def apply_link(self, client_id: str, target_key: str) -> dict[str, Any] | None:
        """Persist a confirmed link and return the updated client.

        Returns None when the client does not exist.
        """
        cursor = self._db.execute(
            "UPDATE clients SET linked_target_key = ?, updated_at = ? WHERE id = ?",
            (target_key, _now_iso(), client_id),
        )
        if cursor.rowcount == 0:
            return None
        return self.get(client_id)


class TargetRepo:
    """Repository for link targets (set B)."""

    def __init__(self, db: SQLiteDB) -> None:
        self._db = db

    def create(
        self,
        name: str | None,
        tax_id: str | None = None,
        target_id: str | None = None,
    ) -> dict[str, Any]:
        """Create a target record."""
        target_id = target_id or _new_id()
        self._db.execute(
            "INSERT INTO targets (id, name, tax_id, created_at) VALUES (?, ?, ?, ?)",
            (target_id, name, tax_id, _now_iso()),
        )
        return self.get(target_id)  # type: ignore[return-value]

    def get(self, target_id: str) -> dict[str, Any] | None:
        """Get a target by ID."""
        return self._db.fetchone("SELECT * FROM targets WHERE id = ?", (target_id,))

    def list_named(self) -> list[dict[str, Any]]:
        """List targets that carry a name, in insertion order."""
        return self._db.fetchall(
            "SELECT * FROM targets WHERE name IS NOT NULL AND name != '' ORDER BY rowid"
        )
