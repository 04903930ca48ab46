"""FastAPI backend for venue listings, category pages and the sitemap."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from app.categories import Category, get_category, list_categories
from app.config import settings
from app.db import close_db, init_db
from app.grouping import (
    city_summaries,
    count_venues,
    group_and_backfill,
    group_by_city,
    match_city,
)
from app.locations import format_display_name, normalize_state, safe_decode, state_name
from app.models import (
    CategoryIndexPage,
    CategoryPage,
    CategorySummary,
    CityGroup,
    StateVenueCount,
    Venue,
)
from app.seo import build_page_metadata, describe_totals
from app.sitemap import SitemapError, fetch_sitemap
from app.venues import (
    get_venue,
    list_venues,
    states_for_category,
    venue_counts_by_state,
    venues_by_state,
    venues_by_state_and_city,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    yield
    await close_db()


app = FastAPI(title="Bowling Alley Directory API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_sitemap_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Outbound transport for the sitemap fetch; tests override this."""
    return None


@app.get("/api/health")
async def health():
    return {"status": "ok"}


# ── Sitemap ─────────────────────────────────────────────────


@app.get("/sitemap.xml")
async def sitemap(
    request: Request,
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_sitemap_transport),
):
    """Proxy the upstream sitemap with CDN caching headers."""
    try:
        result = await fetch_sitemap(
            settings.api_base_url,
            request.headers.get("host"),
            default_host=settings.default_host,
            timeout=settings.sitemap_timeout_s,
            min_bytes=settings.sitemap_min_bytes,
            transport=transport,
        )
    except SitemapError as e:
        return JSONResponse({"error": e.message}, status_code=e.status_code)
    return Response(
        content=result.body, status_code=result.status_code, headers=result.headers
    )


# ── Venues ──────────────────────────────────────────────────


@app.get("/api/venues")
async def all_venues() -> list[Venue]:
    return await list_venues()


@app.get("/api/venues/stats/by-state")
async def venue_stats_by_state() -> list[StateVenueCount]:
    """Venue counts per state, alphabetical by state name."""
    return await venue_counts_by_state()


@app.get("/api/venues/by-state/{state}")
async def state_venues(state: str) -> list[Venue]:
    return await venues_by_state(safe_decode(state))


@app.get("/api/venues/by-state-city/{state}/{city}")
async def city_venues(state: str, city: str) -> list[Venue]:
    return await venues_by_state_and_city(safe_decode(state), safe_decode(city))


@app.get("/api/venues/{venue_id}")
async def venue_detail(venue_id: str) -> Venue:
    """Get a single venue by ID."""
    venue = await get_venue(venue_id)
    if not venue:
        raise HTTPException(status_code=404, detail="Venue not found")
    return venue


# ── Category pages ──────────────────────────────────────────


def _category_or_404(slug: str) -> Category:
    category = get_category(slug)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


def _summary(category: Category) -> CategorySummary:
    return CategorySummary(
        slug=category.slug, label=category.label, click_event=category.click_event
    )


@app.get("/api/categories")
async def categories() -> list[CategorySummary]:
    return [_summary(c) for c in list_categories()]


@app.get("/api/categories/{slug}")
async def category_index(slug: str) -> CategoryIndexPage:
    """Landing page of a category: the states that have matching venues."""
    category = _category_or_404(slug)
    return CategoryIndexPage(
        category=_summary(category),
        metadata=build_page_metadata(category, settings.site_url),
        states=await states_for_category(category),
    )


@app.get("/api/categories/{slug}/{state}")
@app.get("/api/categories/{slug}/{state}/{city}")
async def category_page(
    slug: str,
    state: str,
    city: Optional[str] = None,
    search: Optional[str] = Query(None, description="Filter by name, address or description"),
) -> CategoryPage:
    """State view (city cards) or city view (city plus nearby backfill)."""
    category = _category_or_404(slug)
    state_segment = safe_decode(state)
    city_segment = safe_decode(city)

    state_abbr = normalize_state(state_segment)
    venues = await venues_by_state(state_abbr, category)

    if city_segment is None:
        groups = group_and_backfill(venues, None, state_abbr)
        total = len(venues)
        name = state_name(state_abbr)
        return CategoryPage(
            category=_summary(category),
            metadata=build_page_metadata(
                category, settings.site_url, state_abbr, state_segment=state_segment
            ),
            state=state_abbr,
            state_name=name,
            cities=city_summaries(groups),
            total=total,
            subtitle=describe_totals(category, name, total, total),
            empty_message=category.empty_message(name) if not total else None,
        )

    display_city = format_display_name(city_segment)
    by_city = group_by_city(venues)
    primary = match_city(by_city, display_city)
    native = len(by_city.get(primary, []))

    groups = group_and_backfill(
        venues,
        primary,
        state_abbr,
        min_count=settings.backfill_min_count,
        search=search,
    )
    total = count_venues(groups)
    logger.debug(
        "%s %s/%s: %d native, %d shown", slug, state_abbr, primary, native, total
    )

    return CategoryPage(
        category=_summary(category),
        metadata=build_page_metadata(
            category,
            settings.site_url,
            state_abbr,
            primary,
            state_segment=state_segment,
            city_segment=city_segment,
        ),
        state=state_abbr,
        state_name=state_name(state_abbr),
        city=primary,
        groups=[CityGroup(city=c, venues=vs) for c, vs in groups.items()],
        total=total,
        nearby=max(total - native, 0),
        subtitle=describe_totals(category, primary, native, total),
        empty_message=(
            category.empty_message(f"{primary}, {state_abbr}") if not total else None
        ),
    )
