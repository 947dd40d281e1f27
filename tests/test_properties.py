"""Property-based tests for the filter and statistics invariants.

Uses hypothesis to check that the invariants hold for arbitrary entry sets.
"""

from datetime import datetime

from hypothesis import given, settings, strategies as st

from models import EntryCategory, EntryPriority, EntryStatus, FilterOptions
from routers.services.entry_filter import apply_filters, matches
from routers.services.entry_stats import summarize
from factories import make_entry


timestamps = st.datetimes(min_value=datetime(2025, 1, 1), max_value=datetime(2026, 12, 31))
short_text = st.text(alphabet="abcFAULTфаз ", max_size=12)

entry_strategy = st.builds(
    make_entry,
    category=st.sampled_from([item.value for item in EntryCategory]),
    status=st.sampled_from([item.value for item in EntryStatus]),
    priority=st.sampled_from([item.value for item in EntryPriority]),
    title=short_text,
    description=short_text,
    timestamp=timestamps,
    equipment_id=st.sampled_from([None, "eq-1", "eq-2"]),
    location_id=st.sampled_from([None, "loc-1"]),
)

filter_strategy = st.builds(
    FilterOptions,
    category=st.none() | st.sampled_from(list(EntryCategory)),
    status=st.none() | st.sampled_from(list(EntryStatus)),
    priority=st.none() | st.sampled_from(list(EntryPriority)),
    date_from=st.none() | timestamps,
    date_to=st.none() | timestamps,
    search_text=st.none() | st.text(alphabet="abcfault", min_size=1, max_size=3),
    equipment_id=st.none() | st.sampled_from(["eq-1", "eq-2", "eq-404"]),
    location_id=st.none() | st.just("loc-1"),
)


class TestFilterProperties:
    """apply_filters invariants."""

    @given(entries=st.lists(entry_strategy, max_size=20))
    @settings(max_examples=50)
    def test_empty_filter_is_identity(self, entries):
        assert apply_filters(entries, FilterOptions()) == entries

    @given(entries=st.lists(entry_strategy, max_size=20), filters=filter_strategy)
    @settings(max_examples=100)
    def test_idempotent(self, entries, filters):
        once = apply_filters(entries, filters)
        assert apply_filters(once, filters) == once

    @given(entries=st.lists(entry_strategy, max_size=20), filters=filter_strategy)
    @settings(max_examples=100)
    def test_stable_subsequence(self, entries, filters):
        result = apply_filters(entries, filters)
        positions = [entries.index(entry) for entry in result]
        assert positions == sorted(positions)
        assert all(matches(entry, filters) for entry in result)
        rejected = [entry for entry in entries if entry not in result]
        assert not any(matches(entry, filters) for entry in rejected)


class TestStatsProperties:
    """summarize invariants."""

    @given(entries=st.lists(entry_strategy, max_size=30))
    @settings(max_examples=100)
    def test_status_counts_sum_to_total(self, entries):
        stats = summarize(entries)
        assert stats.total == len(entries)
        assert stats.total == stats.active + stats.drafts + stats.cancelled

    @given(entries=st.lists(entry_strategy, max_size=30))
    @settings(max_examples=100)
    def test_critical_bounded_by_active(self, entries):
        stats = summarize(entries)
        assert 0 <= stats.critical <= stats.active
