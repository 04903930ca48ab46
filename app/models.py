from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GeoPoint(BaseModel):
    """Venue coordinates as stored by the upstream API."""

    latitude: Optional[float] = None
    longitude: Optional[float] = None


class Venue(BaseModel):
    """A bowling alley listing.

    Documents come from the upstream REST API in camelCase; both the alias and
    the field name are accepted, and responses serialize with the alias.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    address: str = ""
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = Field(None, alias="zipCode")
    phone: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    location: Optional[GeoPoint] = None

    amenities: list[str] = Field(default_factory=list)
    specials_url: Optional[str] = Field(
        None, alias="specialsUrl", description="Link to the venue's specials page"
    )

    avg_rating: float = Field(0.0, alias="avgRating", description="0-5 star average")
    review_count: int = Field(0, alias="reviewCount", ge=0)

    is_active: bool = Field(True, alias="isActive")
    # Marketing designations, not used for grouping
    is_founding_partner: bool = Field(False, alias="isFoundingPartner")
    is_sponsor: bool = Field(False, alias="isSponsor")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    # Upstream records are not always complete; nulls fall back to defaults
    @field_validator("name", "address", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("avg_rating", "review_count", mode="before")
    @classmethod
    def _none_as_zero(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("amenities", mode="before")
    @classmethod
    def _none_as_no_amenities(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("is_active", mode="before")
    @classmethod
    def _none_as_active(cls, v: Any) -> Any:
        return True if v is None else v


class CityGroup(BaseModel):
    """Venues of one city, best rated first."""

    city: str
    venues: list[Venue]


class CitySummary(BaseModel):
    """City card shown on a state-level category page."""

    name: str
    venue_count: int
    slug: str


class StateVenueCount(BaseModel):
    state: str
    abbreviation: str
    count: int


class PageMetadata(BaseModel):
    """Head metadata for a page, rendered by the frontend's head manager."""

    title: str
    description: str
    canonical_url: str
    structured_data: dict[str, Any] = Field(
        ..., description="schema.org JSON-LD object"
    )


class CategorySummary(BaseModel):
    slug: str
    label: str
    click_event: str = Field(..., description="Analytics event for venue clicks")


class CategoryIndexPage(BaseModel):
    """Landing page of a category: which states have matching venues."""

    category: CategorySummary
    metadata: PageMetadata
    states: list[str]


class CategoryPage(BaseModel):
    """State or city view of a category page."""

    category: CategorySummary
    metadata: PageMetadata
    state: str
    state_name: str
    city: Optional[str] = None
    groups: list[CityGroup] = Field(
        default_factory=list,
        description="City view: requested city first, then backfilled cities.",
    )
    cities: list[CitySummary] = Field(
        default_factory=list, description="State view: one card per city."
    )
    total: int = 0
    nearby: int = 0
    subtitle: str = ""
    empty_message: Optional[str] = None
