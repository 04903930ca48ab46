import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from app import venue_loader


@pytest.fixture
def mock_loader_db(monkeypatch):
    db = MagicMock()
    db.venues.update_one = AsyncMock(
        side_effect=[MagicMock(upserted_id="new"), MagicMock(upserted_id=None)]
    )
    monkeypatch.setattr(venue_loader, "get_db", lambda: db)
    monkeypatch.setattr(venue_loader, "init_db", AsyncMock())
    return db


def test_record_to_venue_camel_case_and_defaults():
    doc = venue_loader.record_to_venue(
        {"id": 7, "name": "Elks Lanes", "city": "Boulder", "state": "CO", "avgRating": None}
    )
    assert doc["id"] == "7"
    assert doc["avgRating"] == 0
    assert doc["amenities"] == []
    assert doc["isActive"] is True
    assert "updatedAt" in doc


def test_record_without_id_is_skipped(capsys):
    assert venue_loader.record_to_venue({"name": "No Id Lanes"}) is None
    assert "Skipping 'No Id Lanes'" in capsys.readouterr().out


def test_read_venue_file_accepts_list_or_wrapper(tmp_path):
    listed = tmp_path / "list.json"
    listed.write_text(json.dumps([{"id": "a"}]))
    wrapped = tmp_path / "wrapped.json"
    wrapped.write_text(json.dumps({"venues": [{"id": "b"}]}))

    assert venue_loader.read_venue_file(listed) == [{"id": "a"}]
    assert venue_loader.read_venue_file(wrapped) == [{"id": "b"}]


async def test_load_venues_upserts_by_id(mock_loader_db, capsys):
    records = [
        {"id": "a", "name": "Lucky Strike", "city": "Denver", "state": "CO"},
        {"id": "b", "name": "Elks Lanes", "city": "Boulder", "state": "CO"},
        {"name": "Broken"},
    ]

    await venue_loader.load_venues(records)

    calls = mock_loader_db.venues.update_one.await_args_list
    assert [c.args[0] for c in calls] == [{"id": "a"}, {"id": "b"}]
    assert calls[0].kwargs == {"upsert": True}
    assert "createdAt" in calls[0].args[1]["$setOnInsert"]
    assert "Done: 1 new, 1 already existed (updated)." in capsys.readouterr().out


async def test_dry_run_saves_nothing(mock_loader_db):
    await venue_loader.load_venues([{"id": "a", "name": "Lucky Strike"}], dry_run=True)
    mock_loader_db.venues.update_one.assert_not_awaited()
