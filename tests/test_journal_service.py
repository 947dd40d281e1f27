"""Tests for JournalService: create, cancel, activate, list."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import update

from models import FilterOptions, JournalStats
from storage.models.entry import Entry
from routers.services.entry_stats import summarize
from routers.services.exceptions import InvalidStateError, NotFoundError, ValidationError


def fault_entry(**overrides):
    values = {
        "category": "emergency",
        "title": "Fault",
        "description": "Line trip",
        "author": "Ivanov",
        "priority": "critical",
    }
    values.update(overrides)
    return values


class TestCreateEntry:
    """create_entry validation and defaults."""

    @pytest.mark.asyncio
    async def test_default_status_is_active(self, journal_service):
        entry = await journal_service.create_entry(**fault_entry())

        assert entry.id
        assert entry.status == "active"
        assert entry.author == "Ivanov"
        assert entry.cancelled_at is None
        assert entry.cancelled_by is None
        assert entry.cancel_reason is None

        entries = await journal_service.list_entries()
        assert summarize(entries) == JournalStats(total=1, active=1, drafts=0, cancelled=0, critical=1)

    @pytest.mark.asyncio
    async def test_draft_on_request(self, journal_service):
        entry = await journal_service.create_entry(**fault_entry(status="draft"))
        assert entry.status == "draft"

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, journal_service):
        first = await journal_service.create_entry(**fault_entry())
        second = await journal_service.create_entry(**fault_entry())
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_timestamp_defaults_to_now(self, journal_service):
        before = datetime.utcnow()
        entry = await journal_service.create_entry(**fault_entry())
        assert before <= entry.timestamp <= datetime.utcnow()

    @pytest.mark.asyncio
    async def test_aware_timestamp_stored_as_utc(self, journal_service):
        moscow = timezone(timedelta(hours=3))
        entry = await journal_service.create_entry(
            **fault_entry(timestamp=datetime(2026, 3, 1, 12, 0, tzinfo=moscow))
        )
        assert entry.timestamp == datetime(2026, 3, 1, 9, 0)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["title", "description", "author", "category"])
    async def test_empty_required_field_rejected(self, journal_service, field):
        await journal_service.create_entry(**fault_entry())

        with pytest.raises(ValidationError):
            await journal_service.create_entry(**fault_entry(**{field: "  "}))

        assert len(await journal_service.list_entries()) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("overrides", [
        {"category": "maintenance"},
        {"priority": "urgent"},
        {"status": "cancelled"},
    ])
    async def test_unknown_enum_values_rejected(self, journal_service, overrides):
        with pytest.raises(ValidationError):
            await journal_service.create_entry(**fault_entry(**overrides))
        assert await journal_service.list_entries() == []


class TestReferences:
    """Optional references are checked against the active reference set."""

    @pytest.mark.asyncio
    async def test_resolves_active_references(self, journal_service, reference_service):
        equipment = await reference_service.create_reference("equipment", name="T-1 transformer")
        location = await reference_service.create_reference("locations", name="PS-110 Severnaya")
        category = await reference_service.create_reference("categories", name="Emergencies", code="emergency")

        entry = await journal_service.create_entry(**fault_entry(
            equipment_id=equipment.id, location_id=location.id, category_id=category.id
        ))

        snapshot = await reference_service.snapshot()
        assert snapshot.equipment_item(entry.equipment_id).name == "T-1 transformer"
        assert snapshot.location(entry.location_id).name == "PS-110 Severnaya"
        assert snapshot.category(entry.category_id).code == "emergency"

    @pytest.mark.asyncio
    async def test_unknown_reference_rejected(self, journal_service):
        with pytest.raises(ValidationError):
            await journal_service.create_entry(**fault_entry(equipment_id="missing"))
        assert await journal_service.list_entries() == []

    @pytest.mark.asyncio
    async def test_inactive_reference_rejected_for_new_entries(self, journal_service, reference_service):
        location = await reference_service.create_reference("locations", name="Old substation")
        await reference_service.set_active("locations", location.id, False)

        with pytest.raises(ValidationError):
            await journal_service.create_entry(**fault_entry(location_id=location.id))

    @pytest.mark.asyncio
    async def test_deactivation_keeps_historical_reference(self, journal_service, reference_service):
        equipment = await reference_service.create_reference("equipment", name="Breaker Q5")
        entry = await journal_service.create_entry(**fault_entry(equipment_id=equipment.id))

        await reference_service.set_active("equipment", equipment.id, False)

        snapshot = await reference_service.snapshot()
        resolved = snapshot.equipment_item(entry.equipment_id)
        assert resolved is not None
        assert resolved.is_active is False


class TestCancelEntry:
    """cancel_entry is one-way and audited."""

    @pytest.mark.asyncio
    async def test_cancel_sets_audit_fields(self, journal_service):
        entry = await journal_service.create_entry(**fault_entry())

        cancelled = await journal_service.cancel_entry(entry.id, reason="False alarm", cancelled_by="Petrov")

        assert cancelled.status == "cancelled"
        assert cancelled.cancelled_at is not None
        assert cancelled.cancelled_by == "Petrov"
        assert cancelled.cancel_reason == "False alarm"

        stats = summarize(await journal_service.list_entries())
        assert stats.critical == 0
        assert stats.cancelled == 1

    @pytest.mark.asyncio
    async def test_second_cancel_fails_and_keeps_fields(self, journal_service):
        entry = await journal_service.create_entry(**fault_entry())
        first = await journal_service.cancel_entry(entry.id, reason="False alarm", cancelled_by="Petrov")
        cancelled_at = first.cancelled_at

        with pytest.raises(InvalidStateError):
            await journal_service.cancel_entry(entry.id, reason="Again", cancelled_by="Sidorov")

        current = await journal_service.get_entry(entry.id)
        assert current.status == "cancelled"
        assert current.cancelled_at == cancelled_at
        assert current.cancelled_by == "Petrov"
        assert current.cancel_reason == "False alarm"
        assert len(await journal_service.list_entries()) == 1

    @pytest.mark.asyncio
    async def test_cancel_draft(self, journal_service):
        entry = await journal_service.create_entry(**fault_entry(status="draft"))
        cancelled = await journal_service.cancel_entry(entry.id, reason="Not needed", cancelled_by="Ivanov")
        assert cancelled.status == "cancelled"

    @pytest.mark.asyncio
    async def test_unknown_id(self, journal_service):
        with pytest.raises(NotFoundError):
            await journal_service.cancel_entry("missing", reason="x", cancelled_by="Petrov")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reason,cancelled_by", [("", "Petrov"), ("   ", "Petrov"), ("Duplicate", "")])
    async def test_empty_reason_or_actor(self, journal_service, reason, cancelled_by):
        entry = await journal_service.create_entry(**fault_entry())

        with pytest.raises(ValidationError):
            await journal_service.cancel_entry(entry.id, reason=reason, cancelled_by=cancelled_by)

        current = await journal_service.get_entry(entry.id)
        assert current.status == "active"
        assert current.cancelled_at is None

    @pytest.mark.asyncio
    async def test_state_check_precedes_reason_check(self, journal_service):
        entry = await journal_service.create_entry(**fault_entry())
        await journal_service.cancel_entry(entry.id, reason="False alarm", cancelled_by="Petrov")

        with pytest.raises(InvalidStateError):
            await journal_service.cancel_entry(entry.id, reason="", cancelled_by="Petrov")

    @pytest.mark.asyncio
    async def test_concurrent_cancel_is_detected(self, journal_service, session):
        entry = await journal_service.create_entry(**fault_entry())

        # Another writer cancels the row behind this session's back
        await session.execute(
            update(Entry)
            .where(Entry.id == entry.id)
            .values(status="cancelled", cancelled_at=datetime.utcnow(),
                    cancelled_by="Sidorov", cancel_reason="Handled elsewhere")
            .execution_options(synchronize_session=False)
        )
        assert entry.status == "active"

        with pytest.raises(InvalidStateError):
            await journal_service.cancel_entry(entry.id, reason="False alarm", cancelled_by="Petrov")

        current = await journal_service.get_entry(entry.id)
        assert current.cancelled_by == "Sidorov"


class TestActivateEntry:
    """draft -> active."""

    @pytest.mark.asyncio
    async def test_activate_draft(self, journal_service):
        entry = await journal_service.create_entry(**fault_entry(status="draft"))
        activated = await journal_service.activate_entry(entry.id)
        assert activated.status == "active"
        assert (await journal_service.get_stats()).critical == 1

    @pytest.mark.asyncio
    async def test_activate_active_rejected(self, journal_service):
        entry = await journal_service.create_entry(**fault_entry())
        with pytest.raises(InvalidStateError):
            await journal_service.activate_entry(entry.id)

    @pytest.mark.asyncio
    async def test_activate_cancelled_rejected(self, journal_service):
        entry = await journal_service.create_entry(**fault_entry(status="draft"))
        await journal_service.cancel_entry(entry.id, reason="Typo", cancelled_by="Ivanov")
        with pytest.raises(InvalidStateError):
            await journal_service.activate_entry(entry.id)

    @pytest.mark.asyncio
    async def test_activate_unknown(self, journal_service):
        with pytest.raises(NotFoundError):
            await journal_service.activate_entry("missing")


class TestListEntries:
    """Ordering and filtering through the store."""

    @pytest.mark.asyncio
    async def test_newest_first(self, journal_service):
        base = datetime(2026, 3, 1, 8, 0)
        for hours, title in [(1, "second"), (0, "first"), (2, "third")]:
            await journal_service.create_entry(**fault_entry(title=title, timestamp=base + timedelta(hours=hours)))

        titles = [entry.title for entry in await journal_service.list_entries()]
        assert titles == ["third", "second", "first"]

    @pytest.mark.asyncio
    async def test_search_and_status_filter(self, journal_service):
        fault = await journal_service.create_entry(**fault_entry())
        await journal_service.cancel_entry(fault.id, reason="False alarm", cancelled_by="Petrov")
        await journal_service.create_entry(**fault_entry(
            title="Fault on feeder 2", description="Earth fault", priority="high"
        ))

        result = await journal_service.list_entries(FilterOptions(search_text="fault", status="cancelled"))

        assert [entry.id for entry in result] == [fault.id]

    @pytest.mark.asyncio
    async def test_browse_stats_follow_filtered_rows(self, journal_service):
        await journal_service.create_entry(**fault_entry())
        await journal_service.create_entry(**fault_entry(title="Planned work", priority="low", status="draft"))

        entries, stats = await journal_service.browse(FilterOptions(status="draft"))

        assert [entry.title for entry in entries] == ["Planned work"]
        assert stats == JournalStats(total=1, active=0, drafts=1, cancelled=0, critical=0)
        assert await journal_service.get_stats() == JournalStats(
            total=2, active=1, drafts=1, cancelled=0, critical=1
        )

    @pytest.mark.asyncio
    async def test_browse_without_filters_counts_everything(self, journal_service):
        await journal_service.create_entry(**fault_entry())
        await journal_service.create_entry(**fault_entry(title="Planned work", priority="low", status="draft"))

        entries, stats = await journal_service.browse()

        assert len(entries) == 2
        assert stats == JournalStats(total=2, active=1, drafts=1, cancelled=0, critical=1)
