from datetime import datetime, timezone

import pytest

from facility_query.models import EnrichedFacility, FacilityRecord, StatusEntry


def test_full_address_skips_missing_components() -> None:
    record = FacilityRecord(
        id=1,
        title="Recycling Point",
        lat=53.48,
        lng=-2.24,
        house_number=None,
        street_name="Main St",
        town="Springfield",
        county=None,
        postcode="AB1 2CD",
    )

    assert record.full_address == "Main St, Springfield, AB1 2CD"


def test_full_address_treats_blank_components_as_missing() -> None:
    record = FacilityRecord(id=1, title="Bin", lat=0.0, lng=0.0, house_number="  ", street_name="", town="Leeds")

    assert record.full_address == "Leeds"


def test_full_address_empty_when_no_components() -> None:
    assert FacilityRecord(id=1, title="Bin", lat=0.0, lng=0.0).full_address == ""


def test_out_of_range_coordinates_are_rejected() -> None:
    with pytest.raises(ValueError):
        FacilityRecord(id=1, title="Bad", lat=95.0, lng=0.0)
    with pytest.raises(ValueError):
        FacilityRecord(id=1, title="Bad", lat=0.0, lng=181.0)


def test_status_comment_is_trimmed_and_truncated() -> None:
    entry = StatusEntry(
        id=1,
        facility_id=1,
        comment="  " + "a" * 150,
        author_id=7,
        timestamp=datetime(2024, 1, 1, 9, 0),
    )

    assert entry.comment == "a" * 100
    assert entry.timestamp.tzinfo is timezone.utc


def test_enriched_payload_only_carries_known_fields() -> None:
    record = FacilityRecord(id=4, title="Bottle Bank", lat=51.5, lng=-0.12, category_id=2, town="London")
    bare = EnrichedFacility(record=record).to_dict()

    assert bare["full_address"] == "London"
    assert "category_name" not in bare
    assert "status_comment" not in bare

    status = StatusEntry(
        id=9,
        facility_id=4,
        comment="Emptied today",
        author_id=3,
        timestamp=datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc),
    )
    full = EnrichedFacility(record=record, category_name="Glass", status=status).to_dict()

    assert full["category_name"] == "Glass"
    assert full["status_comment"] == "Emptied today"
    assert full["status_author_id"] == 3
    assert full["status_timestamp"] == "2024-06-01T12:00:00+00:00"
