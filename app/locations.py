"""State names, abbreviations, and URL slug helpers."""

import re
from urllib.parse import unquote

STATE_TO_ABBR = {
    "ak": "AK", "al": "AL", "ar": "AR", "az": "AZ", "ca": "CA", "co": "CO", "ct": "CT",
    "dc": "DC", "de": "DE", "fl": "FL", "ga": "GA", "hi": "HI", "ia": "IA", "id": "ID",
    "il": "IL", "in": "IN", "ks": "KS", "ky": "KY", "la": "LA", "ma": "MA", "md": "MD",
    "me": "ME", "mi": "MI", "mn": "MN", "mo": "MO", "ms": "MS", "mt": "MT", "nc": "NC",
    "nd": "ND", "ne": "NE", "nh": "NH", "nj": "NJ", "nm": "NM", "nv": "NV", "ny": "NY",
    "oh": "OH", "ok": "OK", "or": "OR", "pa": "PA", "ri": "RI", "sc": "SC", "sd": "SD",
    "tn": "TN", "tx": "TX", "ut": "UT", "va": "VA", "vt": "VT", "wa": "WA", "wi": "WI",
    "wv": "WV", "wy": "WY",
    "alaska": "AK", "alabama": "AL", "arkansas": "AR", "arizona": "AZ",
    "california": "CA", "colorado": "CO", "connecticut": "CT",
    "district of columbia": "DC", "washington d.c.": "DC", "delaware": "DE",
    "florida": "FL", "georgia": "GA", "hawaii": "HI", "iowa": "IA", "idaho": "ID",
    "illinois": "IL", "indiana": "IN", "kansas": "KS", "kentucky": "KY",
    "louisiana": "LA", "massachusetts": "MA", "maryland": "MD", "maine": "ME",
    "michigan": "MI", "minnesota": "MN", "missouri": "MO", "mississippi": "MS",
    "montana": "MT", "north carolina": "NC", "north dakota": "ND", "nebraska": "NE",
    "new hampshire": "NH", "new jersey": "NJ", "new mexico": "NM", "nevada": "NV",
    "new york": "NY", "ohio": "OH", "oklahoma": "OK", "oregon": "OR",
    "pennsylvania": "PA", "rhode island": "RI", "south carolina": "SC",
    "south dakota": "SD", "tennessee": "TN", "texas": "TX", "utah": "UT",
    "virginia": "VA", "vermont": "VT", "washington": "WA", "wisconsin": "WI",
    "west virginia": "WV", "wyoming": "WY",
}

ABBR_TO_STATE = {
    "AK": "Alaska", "AL": "Alabama", "AR": "Arkansas", "AZ": "Arizona",
    "CA": "California", "CO": "Colorado", "CT": "Connecticut",
    "DC": "Washington D.C.", "DE": "Delaware", "FL": "Florida", "GA": "Georgia",
    "HI": "Hawaii", "IA": "Iowa", "ID": "Idaho", "IL": "Illinois", "IN": "Indiana",
    "KS": "Kansas", "KY": "Kentucky", "LA": "Louisiana", "MA": "Massachusetts",
    "MD": "Maryland", "ME": "Maine", "MI": "Michigan", "MN": "Minnesota",
    "MO": "Missouri", "MS": "Mississippi", "MT": "Montana", "NC": "North Carolina",
    "ND": "North Dakota", "NE": "Nebraska", "NH": "New Hampshire", "NJ": "New Jersey",
    "NM": "New Mexico", "NV": "Nevada", "NY": "New York", "OH": "Ohio",
    "OK": "Oklahoma", "OR": "Oregon", "PA": "Pennsylvania", "RI": "Rhode Island",
    "SC": "South Carolina", "SD": "South Dakota", "TN": "Tennessee", "TX": "Texas",
    "UT": "Utah", "VA": "Virginia", "VT": "Vermont", "WA": "Washington",
    "WI": "Wisconsin", "WV": "West Virginia", "WY": "Wyoming",
}

_SLUG_STRIP = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def normalize_state(state: str) -> str:
    """Return the two-letter abbreviation for a state name or abbreviation.

    Unknown values come back upper-cased so they still compare consistently.
    """
    normalized = state.strip().lower().replace("-", " ")
    return STATE_TO_ABBR.get(normalized, state.strip().upper())


def state_name(state: str) -> str:
    abbr = normalize_state(state)
    return ABBR_TO_STATE.get(abbr, abbr)


def create_slug(text: str) -> str:
    """URL-friendly slug: ``"St. Louis Park"`` -> ``"st-louis-park"``."""
    slug = _SLUG_STRIP.sub("", text.strip().lower())
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")


def format_display_name(slug: str) -> str:
    """Reverse of :func:`create_slug` for display.

    State slugs map to the state's proper name; anything else is title-cased
    word by word.
    """
    key = slug.strip().lower().replace("-", " ")
    if key in STATE_TO_ABBR:
        return ABBR_TO_STATE[STATE_TO_ABBR[key]]
    words = [w for w in re.split(r"[-\s]+", slug.strip()) if w]
    return " ".join(w[:1].upper() + w[1:] for w in words)


def safe_decode(segment: str | None) -> str | None:
    """Percent-decode a path segment, returning it unchanged if malformed."""
    if not segment:
        return segment
    try:
        return unquote(segment, errors="strict")
    except UnicodeDecodeError:
        return segment
