"""Group a state's venues by city and backfill sparse cities.

Everything here is pure: venues in, ordered ``{city: [venues]}`` dicts out.
"""

from typing import Iterable, Optional

from app.locations import create_slug, normalize_state
from app.models import CitySummary, Venue

UNKNOWN_CITY = "Unknown City"

# Category pages fill a city up to this many venues
DEFAULT_MIN_COUNT = 20

Groups = dict[str, list[Venue]]


def _rating(venue: Venue) -> float:
    return venue.avg_rating


def group_by_city(venues: Iterable[Venue]) -> Groups:
    """Partition venues by city, best rated first within each city.

    Ties keep their input order.
    """
    grouped: Groups = {}
    for venue in venues:
        grouped.setdefault(venue.city or UNKNOWN_CITY, []).append(venue)
    for city_venues in grouped.values():
        city_venues.sort(key=_rating, reverse=True)
    return grouped


def match_city(groups: Groups, city: str) -> str:
    """Return the group key for ``city``, tolerating case and slug differences.

    Falls back to ``city`` itself when the state has no venues there.
    """
    if city in groups:
        return city
    wanted = create_slug(city)
    for key in groups:
        if create_slug(key) == wanted:
            return key
    return city


def _in_state(venue: Venue, state: str) -> bool:
    if not venue.state:
        # No state: usable only if a real city ties it to the caller's state query
        return bool(venue.city)
    return normalize_state(venue.state) == normalize_state(state)


def _ordered(groups: Groups, primary: Optional[str] = None) -> Groups:
    others = sorted((c for c in groups if c != primary), key=str.casefold)
    ordered: Groups = {}
    if primary is not None and primary in groups:
        ordered[primary] = groups[primary]
    for city in others:
        ordered[city] = groups[city]
    return ordered


def _matches_search(venue: Venue, term: str) -> bool:
    return (
        term in venue.name.lower()
        or term in venue.address.lower()
        or (venue.description is not None and term in venue.description.lower())
    )


def filter_groups(groups: Groups, search: Optional[str]) -> Groups:
    """Keep venues whose name, address or description contains ``search``.

    Groups left empty are dropped. An empty search returns a copy unchanged.
    """
    if not search:
        return dict(groups)
    term = search.lower()
    filtered: Groups = {}
    for city, venues in groups.items():
        kept = [v for v in venues if _matches_search(v, term)]
        if kept:
            filtered[city] = kept
    return filtered


def group_and_backfill(
    venues: Iterable[Venue],
    target_city: Optional[str],
    target_state: str,
    min_count: int = DEFAULT_MIN_COUNT,
    search: Optional[str] = None,
) -> Groups:
    """Group venues by city and fill the target city up to ``min_count``.

    With no ``target_city`` the whole state is returned, one entry per city.
    Otherwise the target city comes first (possibly as an empty list) followed
    by the best rated venues from the state's other cities, enough to cover
    the shortfall, each under its own city. Non-primary cities are sorted
    alphabetically.
    """
    grouped = group_by_city(venues)
    if not grouped:
        return {}

    if target_city is None:
        return _ordered(grouped)

    primary = match_city(grouped, target_city)
    result: Groups = {primary: grouped.get(primary, [])}

    deficit = min_count - len(result[primary])
    if deficit > 0:
        pool = [
            venue
            for city, city_venues in grouped.items()
            if city != primary
            for venue in city_venues
            if _in_state(venue, target_state)
        ]
        pool.sort(key=_rating, reverse=True)
        result.update(group_by_city(pool[:deficit]))

    result = filter_groups(result, search)
    return _ordered(result, primary)


def city_summaries(groups: Groups) -> list[CitySummary]:
    """City cards for a state-level page, alphabetical."""
    cards = [
        CitySummary(name=city, venue_count=len(venues), slug=create_slug(city))
        for city, venues in groups.items()
    ]
    cards.sort(key=lambda c: c.name.casefold())
    return cards


def count_venues(groups: Groups) -> int:
    return sum(len(venues) for venues in groups.values())
