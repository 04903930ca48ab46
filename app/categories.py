"""Amenity categories served by the generic category page.

Each category is a venue filter plus the copy that varies between pages.
"""

import re
from typing import Optional

from pydantic import BaseModel, Field

from app.models import Venue

# Leading emoji / punctuation on amenity tags, e.g. "🏆 Leagues"
_TAG_PREFIX = re.compile(r"^[\W_]+")


def normalize_amenity(tag: str) -> str:
    return _TAG_PREFIX.sub("", tag).strip()


class Category(BaseModel):
    """A venue category page such as karaoke or cosmic bowling."""

    model_config = {"frozen": True}

    slug: str
    label: str = Field(..., description='Headline noun, e.g. "Karaoke Bowling"')
    feature: str = Field(..., description='Trailing phrase, e.g. "with karaoke"')
    pitch: str = Field(..., description="One-sentence description of the experience")
    amenities: tuple[str, ...] = ()
    requires_specials_url: bool = False

    def matches(self, venue: Venue) -> bool:
        if self.requires_specials_url:
            return bool(venue.specials_url)
        return any(normalize_amenity(tag) in self.amenities for tag in venue.amenities)

    @property
    def click_event(self) -> str:
        """Analytics event name for venue clicks from this page."""
        return f"{self.slug.replace('-', '_')}_venue_click"

    def empty_message(self, where: str) -> str:
        return f"No bowling alleys {self.feature} found in {where} yet."


CATEGORIES: tuple[Category, ...] = (
    Category(
        slug="bowling-leagues",
        label="Bowling Leagues",
        feature="with leagues",
        pitch="Join a weekly league and bowl with the same crew all season.",
        amenities=("Leagues",),
    ),
    Category(
        slug="tournaments",
        label="Bowling Tournaments",
        feature="hosting tournaments",
        pitch="Test your game against other bowlers in sanctioned and local tournaments.",
        amenities=("Tournaments",),
    ),
    Category(
        slug="cosmic-bowling",
        label="Cosmic Bowling",
        feature="with cosmic bowling",
        pitch="Bowl under black lights with glowing pins, music and a party atmosphere.",
        amenities=("Glow Bowling", "Cosmic Bowling"),
    ),
    Category(
        slug="open-bowling",
        label="Open Bowling",
        feature="with open bowling",
        pitch="Walk in and bowl without a reservation.",
        amenities=("Open Bowling",),
    ),
    Category(
        slug="specials",
        label="Bowling Specials",
        feature="running specials",
        pitch="Save on games, shoes and food with current deals.",
        requires_specials_url=True,
    ),
    Category(
        slug="bowling-birthday-party",
        label="Bowling Birthday Parties",
        feature="hosting birthday parties",
        pitch="Book party packages with lanes, food and a host.",
        amenities=("Parties",),
    ),
    Category(
        slug="arcade-bowling",
        label="Arcade Bowling",
        feature="with arcades",
        pitch="Pair a few frames with arcade games and prizes.",
        amenities=("Arcade",),
    ),
    Category(
        slug="bowling-lessons",
        label="Bowling Lessons",
        feature="offering lessons",
        pitch="Learn proper form and technique from experienced coaches.",
        amenities=("Bowling Lessons",),
    ),
    Category(
        slug="senior-bowling",
        label="Senior Bowling",
        feature="with senior programs",
        pitch="Find senior leagues, daytime rates and 55+ programs.",
        amenities=("Seniors / 55+",),
    ),
    Category(
        slug="corporate-events",
        label="Corporate Bowling Events",
        feature="for corporate events",
        pitch="Plan team building outings and company parties on the lanes.",
        amenities=("Corporate Events",),
    ),
    Category(
        slug="batting-cages",
        label="Batting Cages",
        feature="with batting cages",
        pitch="Take some swings between games at venues with batting cages.",
        amenities=("Batting Cages",),
    ),
    Category(
        slug="bowling-restaurant",
        label="Bowling Restaurants",
        feature="with restaurants",
        pitch="Grab a full meal without leaving the lanes.",
        amenities=("Food", "Restaurant"),
    ),
    Category(
        slug="karaoke-bowling",
        label="Karaoke Bowling",
        feature="with karaoke",
        pitch="Sing while you bowl and make a night of it with friends.",
        amenities=("Karaoke",),
    ),
    Category(
        slug="bowling-bar",
        label="Bowling Bars",
        feature="with bars",
        pitch="Enjoy drinks and cocktails between frames.",
        amenities=("Bar",),
    ),
    Category(
        slug="sports-bar",
        label="Bowling Sports Bars",
        feature="with sports bars",
        pitch="Catch the game on big screens while you bowl.",
        amenities=("Sports Bar",),
    ),
    Category(
        slug="snack-bar",
        label="Bowling Snack Bars",
        feature="with snack bars",
        pitch="Pizza, fries and nachos right by the lanes.",
        amenities=("Food",),
    ),
    Category(
        slug="pro-shop",
        label="Bowling Pro Shops",
        feature="with pro shops",
        pitch="Get balls drilled, fitted and resurfaced on site.",
        amenities=("Pro Shop",),
    ),
    Category(
        slug="bowling-billiards",
        label="Bowling & Billiards",
        feature="with billiards",
        pitch="Shoot pool between games at venues with billiards tables.",
        amenities=("Billiards/Pool", "Pool Tables"),
    ),
    Category(
        slug="laser-tag",
        label="Laser Tag & Bowling",
        feature="with laser tag",
        pitch="Combine bowling with laser tag arenas for groups and parties.",
        amenities=("Laser Tag",),
    ),
    Category(
        slug="duckpin-bowling",
        label="Duckpin Bowling",
        feature="with duckpin lanes",
        pitch="Try small balls and short pins on duckpin lanes.",
        amenities=("Duckpin Bowling",),
    ),
    Category(
        slug="escape-rooms",
        label="Escape Rooms & Bowling",
        feature="with escape rooms",
        pitch="Solve puzzles in an escape room before or after you bowl.",
        amenities=("Escape Rooms",),
    ),
    Category(
        slug="candlepin-bowling",
        label="Candlepin Bowling",
        feature="with candlepin lanes",
        pitch="Bowl New England style with thin pins and three balls a frame.",
        amenities=("Candlepin Bowling",),
    ),
    Category(
        slug="wheelchair-accessible",
        label="Wheelchair Accessible Bowling",
        feature="that are wheelchair accessible",
        pitch="Find accessible entrances, lanes and ramps for every bowler.",
        amenities=("Wheelchair Accessible",),
    ),
    Category(
        slug="kids-bowling",
        label="Kids Bowling",
        feature="that are kid-friendly",
        pitch="Bumpers, ramps and lightweight balls for young bowlers.",
        amenities=("Kid-Friendly",),
    ),
    Category(
        slug="ping-pong",
        label="Ping Pong & Bowling",
        feature="with ping pong",
        pitch="Play table tennis between frames.",
        amenities=("Ping Pong", "Table Tennis"),
    ),
)

_BY_SLUG = {c.slug: c for c in CATEGORIES}


def get_category(slug: str) -> Optional[Category]:
    return _BY_SLUG.get(slug)


def list_categories() -> list[Category]:
    return list(CATEGORIES)
