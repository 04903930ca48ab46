"""Check that the directory is ready to serve: database, indexes and data.

    uv run main.py
"""

import asyncio

from app.config import settings
from app.db import close_db, get_client, get_db, init_db
from app.venues import venue_counts_by_state


async def check_directory() -> int:
    """Print a readiness report and return the number of listed venues."""
    result = await get_client().admin.command("ping")
    print(f"MongoDB ping: {result}")

    await init_db()
    print("Indexes ready on 'venues'.")

    db = get_db()
    stored = await db.venues.count_documents({})
    states = await venue_counts_by_state()
    listed = sum(s.count for s in states)
    print(f"Venues in '{db.name}': {stored} stored, {listed} listed in {len(states)} states")
    for s in states:
        print(f"  {s.abbreviation}  {s.count:>4}  {s.state}")

    if not settings.api_base_url:
        print("API_BASE_URL is not set; /sitemap.xml will answer 500.")
    return listed


async def main() -> None:
    try:
        await check_directory()
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
