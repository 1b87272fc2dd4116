"""Small demo directory served when no database is configured."""

from __future__ import annotations

from datetime import datetime, timezone

from facility_query.memory import InMemoryFacilityStore, InMemoryStatusStore
from facility_query.models import Category, FacilityRecord, StatusEntry

DEMO_CATEGORIES = [
    Category(id=1, name="Recycling Point"),
    Category(id=2, name="Bottle Bank"),
    Category(id=3, name="Composting"),
    Category(id=4, name="Electric Vehicle Charging"),
]

DEMO_FACILITIES = [
    FacilityRecord(
        id=1,
        title="Piccadilly Recycling Centre",
        lat=53.4808,
        lng=-2.2426,
        category_id=1,
        description="Mixed recycling, cardboard and cans",
        house_number="12",
        street_name="Portland Street",
        town="Manchester",
        county="Greater Manchester",
        postcode="M1 4BT",
        contributor_id=1,
    ),
    FacilityRecord(
        id=2,
        title="Heaton Park Compost Bays",
        lat=53.5335,
        lng=-2.2540,
        category_id=3,
        description="Garden waste composting near the boating lake",
        street_name="Middleton Road",
        town="Manchester",
        county="Greater Manchester",
        postcode="M25 2SW",
        contributor_id=2,
    ),
    FacilityRecord(
        id=3,
        title="Salford Quays Bottle Bank",
        lat=53.4719,
        lng=-2.2936,
        category_id=2,
        description="Clear, green and brown glass",
        street_name="The Quays",
        town="Salford",
        county="Greater Manchester",
        postcode="M50 3AZ",
        contributor_id=1,
    ),
    FacilityRecord(
        id=4,
        title="Oxford Road EV Hub",
        lat=53.4668,
        lng=-2.2339,
        category_id=4,
        description="Six rapid chargers",
        house_number="300",
        street_name="Oxford Road",
        town="Manchester",
        county="Greater Manchester",
        postcode="M13 9PL",
        contributor_id=3,
    ),
    FacilityRecord(
        id=5,
        title="Roundhay Park Recycling",
        lat=53.8390,
        lng=-1.4996,
        category_id=1,
        description="Paper and plastics next to the park entrance",
        street_name="Mansion Lane",
        town="Leeds",
        county="West Yorkshire",
        postcode="LS8 2HH",
        contributor_id=2,
    ),
    FacilityRecord(
        id=6,
        title="Kirkstall Bottle Bank",
        lat=53.8160,
        lng=-1.6020,
        category_id=2,
        description="Glass only",
        street_name="Abbey Road",
        town="Leeds",
        county="West Yorkshire",
        postcode="LS5 3EH",
        contributor_id=3,
    ),
    FacilityRecord(
        id=7,
        title="York Community Compost",
        lat=53.9590,
        lng=-1.0815,
        category_id=3,
        description="Allotment composting scheme",
        town="York",
        county="North Yorkshire",
        postcode="YO1 7HH",
        contributor_id=1,
    ),
    FacilityRecord(
        id=8,
        title="Hull Marina Charging Point",
        lat=53.7405,
        lng=-0.3361,
        category_id=4,
        description="Two fast chargers by the marina",
        street_name="Castle Street",
        town="Hull",
        county="East Riding of Yorkshire",
        postcode="HU1 2DE",
        contributor_id=2,
    ),
]

DEMO_STATUSES = [
    StatusEntry(
        id=1,
        facility_id=1,
        comment="Cardboard skip full",
        author_id=2,
        timestamp=datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc),
    ),
    StatusEntry(
        id=2,
        facility_id=1,
        comment="Emptied this morning",
        author_id=3,
        timestamp=datetime(2024, 5, 2, 8, 0, tzinfo=timezone.utc),
    ),
    StatusEntry(
        id=3,
        facility_id=3,
        comment="Green glass bin damaged",
        author_id=1,
        timestamp=datetime(2024, 5, 3, 17, 45, tzinfo=timezone.utc),
    ),
]


def demo_facility_store() -> InMemoryFacilityStore:
    return InMemoryFacilityStore(DEMO_FACILITIES, DEMO_CATEGORIES)


def demo_status_store() -> InMemoryStatusStore:
    return InMemoryStatusStore(DEMO_STATUSES)
