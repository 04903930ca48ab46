"""Import venues from the upstream REST API or a JSON export into MongoDB."""

import asyncio
import json
import sys
from datetime import datetime, timezone
from pathlib import Path

import httpx
from pydantic import ValidationError

from app.config import settings
from app.db import close_db, get_db, init_db
from app.models import Venue

VENUES_PATH = "/api/venues"


async def fetch_upstream_venues() -> list[dict]:
    """Download the full venue list from the upstream API."""
    if not settings.api_base_url:
        print("ERROR: Set API_BASE_URL in .env")
        sys.exit(1)

    url = f"{settings.api_base_url.rstrip('/')}{VENUES_PATH}"
    async with httpx.AsyncClient(timeout=httpx.Timeout(60)) as client:
        resp = await client.get(url)
        resp.raise_for_status()
        data = resp.json()

    if isinstance(data, dict):
        data = data.get("venues", [])
    return data


def read_venue_file(path: Path) -> list[dict]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("venues", [])
    return data


def record_to_venue(record: dict) -> dict | None:
    """Validate an upstream record and convert it to our document format.

    Returns None for records that cannot be used (e.g. no id).
    """
    try:
        venue = Venue.model_validate(record)
    except ValidationError as e:
        print(f"  Skipping {record.get('name') or record.get('id')!r}: {e.error_count()} errors")
        return None
    doc = venue.model_dump(by_alias=True)
    doc["updatedAt"] = datetime.now(timezone.utc)
    return doc


def _print_venues(venues: list[dict]) -> None:
    for i, venue in enumerate(venues, 1):
        where = ", ".join(p for p in (venue["city"], venue["state"]) if p) or "N/A"
        print(f"  {i}. {venue['name']}")
        print(f"     Location:  {where}")
        print(f"     Rating:    {venue['avgRating']:.1f} ({venue['reviewCount']} reviews)")
        if venue["amenities"]:
            print(f"     Amenities: {', '.join(venue['amenities'])}")
        print()


async def _upsert_venues(venues: list[dict]) -> tuple[int, int]:
    db = get_db()
    await init_db()
    saved = 0
    updated = 0
    for venue in venues:
        result = await db.venues.update_one(
            {"id": venue["id"]},
            {
                "$set": venue,
                "$setOnInsert": {"createdAt": datetime.now(timezone.utc)},
            },
            upsert=True,
        )
        if result.upserted_id:
            saved += 1
        else:
            updated += 1
    return saved, updated


async def load_venues(records: list[dict], *, dry_run: bool = False) -> None:
    """Validate records and upsert them into MongoDB by upstream id."""
    if not records:
        print("No venues found.")
        return

    venues = [v for v in (record_to_venue(r) for r in records) if v is not None]
    print(f"\nFound {len(venues)} usable venues ({len(records)} records):\n")
    _print_venues(venues)

    if dry_run:
        print("Dry run — nothing saved.")
        return

    saved, updated = await _upsert_venues(venues)
    print(f"\nDone: {saved} new, {updated} already existed (updated).")


async def main() -> None:
    args = [a for a in sys.argv[1:] if a != "--dry-run"]
    dry_run = "--dry-run" in sys.argv[1:]

    if not args or args[0] not in ("api", "file") or (args[0] == "file" and len(args) < 2):
        print("Usage:")
        print("  uv run -m app.venue_loader api [--dry-run]")
        print("  uv run -m app.venue_loader file <venues.json> [--dry-run]")
        sys.exit(1)

    try:
        if args[0] == "api":
            print(f"Fetching venues from {settings.api_base_url or '(unset)'}")
            records = await fetch_upstream_venues()
        else:
            records = read_venue_file(Path(args[1]))
        await load_venues(records, dry_run=dry_run)
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
