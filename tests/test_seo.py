from app.categories import get_category
from app.seo import build_page_metadata, describe_totals

BASE = "https://bowlingalleys.io/"


def crumbs(metadata):
    return metadata.structured_data["breadcrumb"]["itemListElement"]


def test_root_page():
    cosmic = get_category("cosmic-bowling")
    metadata = build_page_metadata(cosmic, BASE)

    assert metadata.title == (
        "Cosmic Bowling Near Me | Find Bowling Alleys with cosmic bowling by State"
    )
    assert metadata.canonical_url == "https://bowlingalleys.io/cosmic-bowling"
    assert [c["name"] for c in crumbs(metadata)] == ["Home", "Cosmic Bowling"]
    assert metadata.structured_data["mainEntity"]["name"] == "Cosmic Bowling by State"


def test_state_page_uses_requested_segment_in_urls():
    karaoke = get_category("karaoke-bowling")
    metadata = build_page_metadata(karaoke, BASE, "CO", state_segment="colorado")

    assert metadata.title.startswith("Karaoke Bowling in CO |")
    assert metadata.canonical_url == "https://bowlingalleys.io/karaoke-bowling/colorado"
    assert crumbs(metadata)[-1] == {
        "@type": "ListItem",
        "position": 3,
        "name": "CO Karaoke Bowling",
        "item": "https://bowlingalleys.io/karaoke-bowling/colorado",
    }


def test_city_page_structured_data():
    karaoke = get_category("karaoke-bowling")
    metadata = build_page_metadata(
        karaoke, BASE, "TX", "El Paso", state_segment="tx", city_segment="el-paso"
    )

    data = metadata.structured_data
    assert data["@context"] == "https://schema.org"
    assert data["@type"] == "WebPage"
    assert data["name"] == metadata.title
    assert data["url"] == "https://bowlingalleys.io/karaoke-bowling/tx/el-paso"
    assert [c["position"] for c in crumbs(metadata)] == [1, 2, 3, 4]
    assert crumbs(metadata)[3]["name"] == "El Paso Karaoke Bowling"
    assert data["mainEntity"]["name"] == "Karaoke Bowling in El Paso, TX"
    assert "El Paso, TX" in metadata.description


def test_describe_totals():
    karaoke = get_category("karaoke-bowling")
    assert describe_totals(karaoke, "Denver", 3, 20) == (
        "3 alleys in Denver + 17 nearby with karaoke"
    )
    assert describe_totals(karaoke, "Denver", 1, 1) == "1 bowling alley with karaoke"
    # Search can leave fewer than the city's own venues
    assert describe_totals(karaoke, "Denver", 5, 2) == "2 bowling alleys with karaoke"


def test_canonical_url_slugs_decoded_segments():
    karaoke = get_category("karaoke-bowling")
    metadata = build_page_metadata(
        karaoke,
        BASE,
        "NY",
        "St. Louis Park",
        state_segment="new york",
        city_segment="St. Louis Park",
    )

    assert metadata.canonical_url == (
        "https://bowlingalleys.io/karaoke-bowling/new-york/st-louis-park"
    )
    assert crumbs(metadata)[2]["item"] == "https://bowlingalleys.io/karaoke-bowling/new-york"
