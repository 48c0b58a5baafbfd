"""Tests for the Event and EventHistoryEntry models."""
# ruff: noqa: SLF001

from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError
from model_bakery import baker

from events.models import (
    ACTION_PREVIEW_LENGTH,
    MAX_RATING_SCORE,
    Event,
    EventHistoryEntry,
)
from events.types import CostType, Stage


@pytest.mark.django_db
class TestEventModel:
    """Tests for Event model CRUD, constraints, and __str__."""

    def test_create_event(self) -> None:
        """Create an event and verify the defaults."""
        event = Event.objects.create(title="Summit", organizer="Acme", city="Berlin")
        assert event.pk is not None
        assert event.stage == Stage.PLANNED
        assert event.booked is False
        assert event.cost_type == CostType.PARTICIPANT
        assert event.cost_value == 0
        assert event.colleagues == []
        assert event.tags == []
        assert event.attachments == []
        assert event.linkedin_plan is False

    def test_str_returns_title(self) -> None:
        """__str__ returns the event title."""
        event = baker.make(Event, title="Summit 2025")
        assert str(event) == "Summit 2025"

    def test_lists_round_trip(self) -> None:
        """List fields are stored in order."""
        event = baker.make(Event, colleagues=["Bob", "Alice"], tags=["AI"])
        event.refresh_from_db()
        assert event.colleagues == ["Bob", "Alice"]
        assert event.tags == ["AI"]

    def test_negative_cost_constraint(self) -> None:
        """The database rejects negative cost values."""
        with pytest.raises(IntegrityError):
            Event.objects.create(title="Summit", cost_value=Decimal(-5))

    def test_blank_title_fails_validation(self) -> None:
        """An event without a title is invalid."""
        with pytest.raises(ValidationError) as exc_info:
            Event(title="   ").full_clean()
        assert "title" in exc_info.value.message_dict

    def test_rating_range(self) -> None:
        """Ratings must be between one and five."""
        with pytest.raises(ValidationError) as exc_info:
            Event(title="Summit", rating_sales=MAX_RATING_SCORE + 1).full_clean()
        assert "rating_sales" in exc_info.value.message_dict

    def test_linkedin_plan_follows_note(self) -> None:
        """Saving derives the plan flag from the trimmed note."""
        event = baker.make(Event, linkedin_note="  Post it ")
        assert event.linkedin_plan is True
        assert event.linkedin_note == "Post it"

        event.linkedin_note = "   "
        event.save(update_fields=["linkedin_note"])
        event.refresh_from_db()
        assert event.linkedin_plan is False
        assert event.linkedin_note == ""

    def test_participant_count(self) -> None:
        """The participant count is the number of colleagues."""
        event = baker.make(Event, colleagues=["Alice", "Bob", "Carol"])
        assert event.participant_count == 3

    def test_verbose_name(self) -> None:
        """Meta verbose_name is 'Event'."""
        assert Event._meta.verbose_name == "Event"
        assert Event._meta.verbose_name_plural == "Events"

    def test_history_related_manager(self) -> None:
        """Event.history reverse relation returns the entries."""
        event = baker.make(Event)
        entry = baker.make(EventHistoryEntry, event=event, action="Event created")
        assert entry in event.history.all()


@pytest.mark.django_db
class TestEventHistoryEntryModel:
    """Tests for EventHistoryEntry."""

    def test_str_short_action(self) -> None:
        """Short actions are shown in full."""
        entry = baker.make(EventHistoryEntry, action="Event created")
        assert str(entry) == "Event created"

    def test_str_long_action(self) -> None:
        """Long actions are shortened."""
        entry = baker.make(EventHistoryEntry, action="x" * (ACTION_PREVIEW_LENGTH + 10))
        assert str(entry) == "x" * ACTION_PREVIEW_LENGTH + "..."

    def test_default_user_email(self) -> None:
        """Entries without an actor store an empty string."""
        entry = EventHistoryEntry.objects.create(event=baker.make(Event), action="Event created")
        assert entry.user_email == ""
        assert entry.timestamp is not None

    def test_for_event(self) -> None:
        """for_event only returns entries of that event."""
        event = baker.make(Event)
        own = baker.make(EventHistoryEntry, event=event)
        baker.make(EventHistoryEntry, event=baker.make(Event))
        assert list(EventHistoryEntry.objects.for_event(event.pk)) == [own]

    def test_newest_first_breaks_ties_by_id(self) -> None:
        """Entries with the same timestamp are ordered by insertion, newest first."""
        event = baker.make(Event)
        first = baker.make(EventHistoryEntry, event=event)
        second = baker.make(EventHistoryEntry, event=event, timestamp=first.timestamp)
        assert list(EventHistoryEntry.objects.for_event(event.pk).newest_first()) == [
            second,
            first,
        ]
