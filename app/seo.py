"""Page titles, descriptions and schema.org data for category pages."""

from typing import Any, Optional

from app.categories import Category
from app.locations import create_slug
from app.models import PageMetadata


def _page_copy(
    category: Category, state: Optional[str], city: Optional[str]
) -> tuple[str, str]:
    if city and state:
        title = f"{category.label} in {city}, {state} | Bowling Alleys {category.feature}"
        description = (
            f"Find bowling alleys {category.feature} in {city}, {state}. "
            f"{category.pitch}"
        )
    elif state:
        title = f"{category.label} in {state} | Bowling Alleys {category.feature} by City"
        description = (
            f"Browse {category.label.lower()} across {state}. "
            f"{category.pitch} Compare venues in cities throughout the state."
        )
    else:
        title = f"{category.label} Near Me | Find Bowling Alleys {category.feature} by State"
        description = (
            f"Discover bowling alleys {category.feature} across the United States. "
            f"{category.pitch}"
        )
    return title, description


def _crumb(position: int, name: str, url: str) -> dict[str, Any]:
    return {"@type": "ListItem", "position": position, "name": name, "item": url}


def build_page_metadata(
    category: Category,
    base_url: str,
    state: Optional[str] = None,
    city: Optional[str] = None,
    *,
    state_segment: Optional[str] = None,
    city_segment: Optional[str] = None,
) -> PageMetadata:
    """Describe the head of a category page.

    ``state`` and ``city`` are display names; the ``*_segment`` arguments are
    the path segments as requested; their slugs form breadcrumb and canonical
    URLs.
    """
    base_url = base_url.rstrip("/")
    title, description = _page_copy(category, state, city)

    category_url = f"{base_url}/{category.slug}"
    crumbs = [
        _crumb(1, "Home", base_url),
        _crumb(2, category.label, category_url),
    ]
    url = category_url
    if state:
        url = f"{category_url}/{create_slug(state_segment or state)}"
        crumbs.append(_crumb(3, f"{state} {category.label}", url))
        if city:
            url = f"{url}/{create_slug(city_segment or city)}"
            crumbs.append(_crumb(4, f"{city} {category.label}", url))

    if city and state:
        list_name = f"{category.label} in {city}, {state}"
    elif state:
        list_name = f"{category.label} in {state}"
    else:
        list_name = f"{category.label} by State"

    structured_data = {
        "@context": "https://schema.org",
        "@type": "WebPage",
        "name": title,
        "description": description,
        "url": url,
        "breadcrumb": {"@type": "BreadcrumbList", "itemListElement": crumbs},
        "mainEntity": {
            "@type": "ItemList",
            "name": list_name,
            "description": description,
        },
    }
    return PageMetadata(
        title=title,
        description=description,
        canonical_url=url,
        structured_data=structured_data,
    )


def _alleys(n: int) -> str:
    return "alley" if n == 1 else "alleys"


def describe_totals(category: Category, city: str, native: int, total: int) -> str:
    """Subtitle for a city page, e.g. "3 alleys in Denver + 17 nearby with karaoke"."""
    nearby = total - native
    if nearby > 0:
        return f"{native} {_alleys(native)} in {city} + {nearby} nearby {category.feature}"
    return f"{total} bowling {_alleys(total)} {category.feature}"
