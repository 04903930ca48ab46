"""
Shared fixtures: venue factory, mocked MongoDB collection, and an async
client bound to the FastAPI app (no lifespan, so no real database).
"""

import os
from itertools import count
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

# Ensure test env vars before any app imports
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGODB_DB", "bowlingalleys_test")
os.environ.setdefault("API_BASE_URL", "")

from app.models import Venue  # noqa: E402

_ids = count(1)


def make_venue(
    city: str | None = "Denver",
    rating: float = 4.0,
    *,
    state: str | None = "CO",
    name: str | None = None,
    **extra: Any,
) -> Venue:
    venue_id = extra.pop("id", f"v{next(_ids)}")
    return Venue(
        id=venue_id,
        name=name or f"Lanes {venue_id}",
        address=extra.pop("address", f"{venue_id} Main St"),
        city=city,
        state=state,
        avg_rating=rating,
        **extra,
    )


def venue_doc(city: str = "Denver", rating: float = 4.0, **fields: Any) -> dict:
    """A raw MongoDB document in the upstream camelCase shape."""
    venue_id = fields.pop("id", f"v{next(_ids)}")
    doc = {
        "_id": f"oid-{venue_id}",
        "id": venue_id,
        "name": fields.pop("name", f"Lanes {venue_id}"),
        "address": f"{venue_id} Main St",
        "city": city,
        "state": fields.pop("state", "CO"),
        "avgRating": rating,
        "reviewCount": 3,
        "amenities": [],
    }
    doc.update(fields)
    return doc


@pytest.fixture
def venue_factory():
    return make_venue


@pytest.fixture
def mock_venues_collection(monkeypatch):
    """Patch app.venues.get_db with a mock whose ``venues`` collection returns ``docs``.

    Tests set ``collection.docs`` and read ``collection.find.call_args``.
    """
    collection = MagicMock()
    collection.docs = []

    def _find(query=None):
        cursor = MagicMock()
        cursor.to_list = AsyncMock(return_value=list(collection.docs))
        return cursor

    collection.find = MagicMock(side_effect=_find)
    collection.find_one = AsyncMock(return_value=None)

    db = MagicMock()
    db.venues = collection
    monkeypatch.setattr("app.venues.get_db", lambda: db)
    return collection


@pytest.fixture
async def client():
    from app.api import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://bowlingalleys.test") as ac:
        yield ac
    app.dependency_overrides.clear()
