"""Tests for clientlink.db.repositories: the link store repositories."""

from pathlib import Path

import pytest

from clientlink.db.repositories import ClientRepo, TargetRepo, to_source_record
from clientlink.db.sqlite import SQLiteDB
from clientlink.entity.matcher import propose_matches


@pytest.fixture
def sqlite_db(tmp_path: Path) -> SQLiteDB:
    """Create a fresh SQLiteDB instance."""
    db = SQLiteDB(str(tmp_path / "test.db"))
    yield db
    db.close()


@pytest.fixture
def client_repo(sqlite_db: SQLiteDB) -> ClientRepo:
    return ClientRepo(sqlite_db)


@pytest.fixture
def target_repo(sqlite_db: SQLiteDB) -> TargetRepo:
    return TargetRepo(sqlite_db)


# ---------------------------------------------------------------------------
# ClientRepo
# ---------------------------------------------------------------------------


class TestClientRepo:

    def test_create_returns_unlinked_client(self, client_repo: ClientRepo):
        client = client_repo.create("Acme Ltda")
        assert client["name"] == "Acme Ltda"
        assert client["linked_target_key"] is None
        assert client["id"]

    def test_create_with_explicit_id(self, client_repo: ClientRepo):
        client = client_repo.create("Acme", client_id="c-1")
        assert client_repo.get("c-1") == client

    def test_get_missing(self, client_repo: ClientRepo):
        assert client_repo.get("missing") is None

    def test_list_unlinked_in_insertion_order(self, client_repo: ClientRepo):
        for name in ("Zeta", "Alpha", "Mid"):
            client_repo.create(name)
        assert [c["name"] for c in client_repo.list_unlinked()] == ["Zeta", "Alpha", "Mid"]

    def test_apply_link_removes_from_unlinked(self, client_repo: ClientRepo):
        linked = client_repo.create("Acme", client_id="c-1")
        client_repo.create("Globex", client_id="c-2")

        updated = client_repo.apply_link("c-1", "12345678000190")

        assert updated is not None
        assert updated["linked_target_key"] == "12345678000190"
        assert updated["updated_at"] >= linked["updated_at"]
        assert [c["id"] for c in client_repo.list_unlinked()] == ["c-2"]

    def test_apply_link_missing_client(self, client_repo: ClientRepo):
        assert client_repo.apply_link("missing", "123") is None


# ---------------------------------------------------------------------------
# TargetRepo
# ---------------------------------------------------------------------------


class TestTargetRepo:

    def test_create_and_get(self, target_repo: TargetRepo):
        target = target_repo.create("ACME LTDA", tax_id="12.345.678/0001-90", target_id="t-1")
        assert target_repo.get("t-1") == target
        assert target["tax_id"] == "12.345.678/0001-90"

    def test_list_named_skips_unnamed(self, target_repo: TargetRepo):
        target_repo.create("Acme")
        target_repo.create(None)
        target_repo.create("")
        target_repo.create("Globex")
        assert [t["name"] for t in target_repo.list_named()] == ["Acme", "Globex"]


# ---------------------------------------------------------------------------
# Store rows -> matcher
# ---------------------------------------------------------------------------


class TestToSourceRecord:

    def test_maps_id_and_name(self):
        record = to_source_record({"id": "c-1", "name": "Acme"})
        assert record.id == "c-1"
        assert record.raw_name == "Acme"
        assert dict(record.metadata) == {}

    def test_carries_listed_metadata_only(self):
        row = {"id": "t-1", "name": "Acme", "tax_id": "123", "created_at": "x"}
        record = to_source_record(row, metadata_fields=("tax_id",))
        assert dict(record.metadata) == {"tax_id": "123"}

    def test_custom_name_field(self):
        record = to_source_record({"id": 7, "nome": "Acme"}, name_field="nome")
        assert record.raw_name == "Acme"

    def test_round_trip_through_matcher(self, client_repo: ClientRepo, target_repo: TargetRepo):
        """Unlinked clients and named targets feed the matcher directly."""
        client_repo.create("Globex Consultoria", client_id="c-1")
        target_repo.create("GLOBEX", tax_id="999", target_id="t-1")

        result = propose_matches(
            [to_source_record(r) for r in client_repo.list_unlinked()],
            [to_source_record(r, metadata_fields=("tax_id",)) for r in target_repo.list_named()],
        )

        assert len(result) == 1
        assert result[0].source_id == "c-1"
        assert result[0].target_id == "t-1"
        assert result[0].target_metadata == {"tax_id": "999"}
