"""Read venues from MongoDB for listing and category pages."""

import re
from typing import Optional

from bson import ObjectId

from app.categories import Category
from app.db import get_db
from app.locations import ABBR_TO_STATE, normalize_state, state_name
from app.models import StateVenueCount, Venue

# Hidden venues keep isActive: false; documents without the field are listed
ACTIVE = {"isActive": {"$ne": False}}


def _serialize_doc(doc: dict) -> dict:
    """Copy a MongoDB document into Venue-shaped data."""
    doc = dict(doc)
    oid = doc.pop("_id", None)
    if not doc.get("id"):
        doc["id"] = str(oid)
    return doc


def _to_venues(docs: list[dict]) -> list[Venue]:
    venues = [Venue.model_validate(_serialize_doc(d)) for d in docs]
    venues.sort(key=lambda v: v.avg_rating, reverse=True)
    return venues


def _state_query(state: str) -> dict:
    """Match documents storing either the abbreviation or the full state name."""
    abbr = normalize_state(state)
    names = [re.escape(abbr)]
    if abbr in ABBR_TO_STATE:
        names.append(re.escape(ABBR_TO_STATE[abbr]))
    return {"state": {"$regex": f"^\\s*({'|'.join(names)})\\s*$", "$options": "i"}}


async def list_venues() -> list[Venue]:
    db = get_db()
    docs = await db.venues.find(ACTIVE).to_list(None)
    return _to_venues(docs)


async def get_venue(venue_id: str) -> Optional[Venue]:
    """Look a venue up by upstream id, falling back to the MongoDB ObjectId."""
    db = get_db()
    doc = await db.venues.find_one({"id": venue_id})
    if doc is None and ObjectId.is_valid(venue_id):
        doc = await db.venues.find_one({"_id": ObjectId(venue_id)})
    if doc is None:
        return None
    return Venue.model_validate(_serialize_doc(doc))


async def venues_by_state(
    state: str, category: Optional[Category] = None
) -> list[Venue]:
    """Active venues in a state, best rated first, optionally one category only."""
    db = get_db()
    docs = await db.venues.find({**ACTIVE, **_state_query(state)}).to_list(None)
    venues = _to_venues(docs)
    if category is not None:
        venues = [v for v in venues if category.matches(v)]
    return venues


async def venues_by_state_and_city(state: str, city: str) -> list[Venue]:
    wanted = city.strip().lower()
    return [
        v
        for v in await venues_by_state(state)
        if v.city and v.city.strip().lower() == wanted
    ]


async def states_for_category(category: Category) -> list[str]:
    """Sorted abbreviations of states with at least one matching venue."""
    states = {
        normalize_state(v.state)
        for v in await list_venues()
        if v.state and category.matches(v)
    }
    return sorted(states)


async def venue_counts_by_state() -> list[StateVenueCount]:
    counts: dict[str, int] = {}
    for venue in await list_venues():
        if venue.state:
            abbr = normalize_state(venue.state)
            counts[abbr] = counts.get(abbr, 0) + 1

    result = [
        StateVenueCount(state=state_name(abbr), abbreviation=abbr, count=count)
        for abbr, count in counts.items()
    ]
    result.sort(key=lambda s: s.state)
    return result
