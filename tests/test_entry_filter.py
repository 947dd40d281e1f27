"""Tests for the entry filter."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from models import EntryCategory, EntryPriority, EntryStatus, FilterOptions
from routers.services.entry_filter import apply_filters, matches
from factories import make_entry


@pytest.fixture
def entries():
    base = datetime(2026, 3, 1, 8, 0)
    return [
        make_entry(
            id="e1", title="Fault on feeder 10", description="Line trip, AR failed",
            category="emergency", priority="critical", status="cancelled",
            timestamp=base + timedelta(hours=3), equipment_id="eq-1", location_id="loc-1",
        ),
        make_entry(
            id="e2", title="Relay test", description="Protection settings checked, no FAULT found",
            category="relay_protection", priority="medium", status="active",
            timestamp=base + timedelta(hours=2), equipment_id="eq-2",
        ),
        make_entry(
            id="e3", title="Team admitted", description="Permit 42 issued",
            category="team_permits", priority="low", status="draft",
            timestamp=base + timedelta(hours=1), location_id="loc-1", category_id="cat-1",
        ),
        make_entry(
            id="e4", title="Outage", description="Planned outage of TP-7",
            category="network_outages", priority="high", status="active",
            timestamp=base,
        ),
    ]


def ids(items):
    return [item.id for item in items]


class TestEmptyFilters:
    """No criteria means no constraint."""

    def test_none_returns_input(self, entries):
        assert ids(apply_filters(entries, None)) == ["e1", "e2", "e3", "e4"]

    def test_empty_options_returns_input(self, entries):
        assert ids(apply_filters(entries, FilterOptions())) == ["e1", "e2", "e3", "e4"]

    def test_blank_strings_are_ignored(self, entries):
        filters = FilterOptions(search_text="   ", equipment_id="", status="")
        assert filters.is_empty()
        assert ids(apply_filters(entries, filters)) == ["e1", "e2", "e3", "e4"]

    def test_input_is_not_mutated(self, entries):
        before = list(entries)
        apply_filters(entries, FilterOptions(status=EntryStatus.ACTIVE))
        assert entries == before


class TestExactFields:
    """category / status / priority are exact matches."""

    def test_status(self, entries):
        assert ids(apply_filters(entries, FilterOptions(status="active"))) == ["e2", "e4"]

    def test_category(self, entries):
        filters = FilterOptions(category=EntryCategory.RELAY_PROTECTION)
        assert ids(apply_filters(entries, filters)) == ["e2"]

    def test_priority(self, entries):
        filters = FilterOptions(priority=EntryPriority.CRITICAL)
        assert ids(apply_filters(entries, filters)) == ["e1"]

    def test_unknown_enum_value_rejected(self):
        with pytest.raises(PydanticValidationError):
            FilterOptions(status="archived")


class TestReferenceFields:
    """Reference ids never match entries without that reference."""

    def test_equipment(self, entries):
        assert ids(apply_filters(entries, FilterOptions(equipment_id="eq-1"))) == ["e1"]

    def test_location(self, entries):
        assert ids(apply_filters(entries, FilterOptions(location_id="loc-1"))) == ["e1", "e3"]

    def test_category_reference(self, entries):
        assert ids(apply_filters(entries, FilterOptions(category_id="cat-1"))) == ["e3"]

    def test_missing_reference_does_not_match(self, entries):
        assert apply_filters(entries, FilterOptions(equipment_id="eq-404")) == []


class TestDateRange:
    """date_from / date_to are inclusive and independently optional."""

    def test_inclusive_bounds(self, entries):
        filters = FilterOptions(
            date_from=datetime(2026, 3, 1, 9, 0),
            date_to=datetime(2026, 3, 1, 10, 0),
        )
        assert ids(apply_filters(entries, filters)) == ["e2", "e3"]

    def test_open_ended_from(self, entries):
        filters = FilterOptions(date_from=datetime(2026, 3, 1, 10, 0))
        assert ids(apply_filters(entries, filters)) == ["e1", "e2"]

    def test_open_ended_to(self, entries):
        filters = FilterOptions(date_to=datetime(2026, 3, 1, 8, 0))
        assert ids(apply_filters(entries, filters)) == ["e4"]

    def test_aware_bounds_normalized_to_utc(self, entries):
        moscow = timezone(timedelta(hours=3))
        filters = FilterOptions(date_from=datetime(2026, 3, 1, 13, 0, tzinfo=moscow))
        assert filters.date_from == datetime(2026, 3, 1, 10, 0)
        assert ids(apply_filters(entries, filters)) == ["e1", "e2"]


class TestSearchText:
    """Case-insensitive search over title and description."""

    def test_matches_title_case_insensitive(self, entries):
        assert ids(apply_filters(entries, FilterOptions(search_text="fault"))) == ["e1", "e2"]

    def test_matches_description(self, entries):
        assert ids(apply_filters(entries, FilterOptions(search_text="permit 42"))) == ["e3"]

    def test_no_match(self, entries):
        assert apply_filters(entries, FilterOptions(search_text="transformer")) == []

    def test_cyrillic_case_insensitive(self):
        entry = make_entry(title="Авария на ПС-110", description="Отключение")
        assert matches(entry, FilterOptions(search_text="авария"))


class TestCombined:
    """Present fields combine with AND."""

    def test_search_and_status(self, entries):
        filters = FilterOptions(search_text="fault", status="cancelled")
        assert ids(apply_filters(entries, filters)) == ["e1"]

    def test_conflicting_fields_yield_nothing(self, entries):
        filters = FilterOptions(priority="critical", status="active")
        assert apply_filters(entries, filters) == []

    def test_active_filters_reports_only_set_fields(self):
        filters = FilterOptions(status="active", search_text="fault", equipment_id="")
        assert filters.active_filters() == {"status": "active", "search_text": "fault"}
