from bson import ObjectId

from app import venues
from app.categories import get_category
from tests.conftest import venue_doc


async def test_get_venue_falls_back_to_object_id(mock_venues_collection):
    oid = ObjectId()
    doc = venue_doc("Denver", 4.0)
    doc.pop("id")
    doc["_id"] = oid
    mock_venues_collection.find_one.side_effect = [None, doc]

    venue = await venues.get_venue(str(oid))

    assert venue.id == str(oid)
    assert mock_venues_collection.find_one.await_args_list[1].args[0] == {"_id": oid}


async def test_venues_by_state_filters_category(mock_venues_collection):
    mock_venues_collection.docs = [
        venue_doc("Denver", 3.0, id="a", amenities=["Arcade"]),
        venue_doc("Denver", 4.0, id="b", amenities=["Bar"]),
        venue_doc("Boulder", 5.0, id="c", amenities=["Arcade", "Bar"]),
    ]

    result = await venues.venues_by_state("Colorado", get_category("arcade-bowling"))

    assert [v.id for v in result] == ["c", "a"]


async def test_malformed_fields_fall_back_to_defaults(mock_venues_collection):
    mock_venues_collection.docs = [
        venue_doc(None, None, id="x", name=None, amenities=None, isActive=None),
    ]

    [venue] = await venues.list_venues()

    assert venue.city is None
    assert venue.name == ""
    assert venue.avg_rating == 0
    assert venue.amenities == []
    assert venue.is_active is True
