"""Tests for the event forms."""

from datetime import date
from decimal import Decimal

import pytest
from model_bakery import baker

from events.forms import EventCreateForm, EventDraftForm, split_items
from events.models import Event
from events.types import CostType, Stage


def draft_data(**overrides: str) -> dict[str, str]:
    """Return valid POST data for the draft form."""
    data = {
        "title": "Summit",
        "stage": Stage.PLANNED,
        "cost_type": CostType.PARTICIPANT,
        "cost_value": "0",
    }
    data.update(overrides)
    return data


@pytest.mark.parametrize(
    ("value", "separator", "expected"),
    [
        ("Alice, Bob", ",", ["Alice", "Bob"]),
        (" Alice ,, Bob ,", ",", ["Alice", "Bob"]),
        ("", ",", []),
        ("https://a.example\n\nhttps://b.example\r\n", "\n", ["https://a.example", "https://b.example"]),
    ],
)
def test_split_items(value: str, separator: str, expected: list[str]) -> None:
    """Items are trimmed and blanks dropped, order is kept."""
    assert split_items(value, separator) == expected


@pytest.mark.django_db
class TestEventCreateForm:
    """Creating events through the form."""

    def test_valid(self) -> None:
        """A title is enough."""
        form = EventCreateForm(data={"title": "Summit", "cost_type": CostType.BOOTH})
        assert form.is_valid(), form.errors
        event = form.save()
        assert event.cost_value == Decimal(0)
        assert event.cost_type == CostType.BOOTH

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("1500", Decimal(1500)), ("1500,50", Decimal("1500.50")), (" 12.5 ", Decimal("12.5"))],
    )
    def test_cost_value_parsing(self, raw: str, expected: Decimal) -> None:
        """Decimal commas and surrounding whitespace are accepted."""
        form = EventCreateForm(
            data={"title": "Summit", "cost_type": CostType.PARTICIPANT, "cost_value": raw},
        )
        assert form.is_valid(), form.errors
        assert form.cleaned_data["cost_value"] == expected

    @pytest.mark.parametrize("raw", ["-1", "abc", "NaN", "1.2.3"])
    def test_invalid_cost_value(self, raw: str) -> None:
        """Negative and non-numeric amounts are rejected."""
        form = EventCreateForm(
            data={"title": "Summit", "cost_type": CostType.PARTICIPANT, "cost_value": raw},
        )
        assert not form.is_valid()
        assert "cost_value" in form.errors

    def test_blank_title(self) -> None:
        """A title is required."""
        form = EventCreateForm(data={"title": "", "cost_type": CostType.PARTICIPANT})
        assert not form.is_valid()
        assert "title" in form.errors


@pytest.mark.django_db
class TestEventDraftForm:
    """Editing events through the form."""

    def test_list_fields_are_parsed(self) -> None:
        """Free text becomes lists."""
        form = EventDraftForm(
            data=draft_data(
                colleagues="Alice, Bob",
                tags="AI,Cloud",
                attachments="https://a.example\nhttps://b.example",
            ),
        )
        assert form.is_valid(), form.errors
        event = form.save(commit=False)
        assert event.colleagues == ["Alice", "Bob"]
        assert event.tags == ["AI", "Cloud"]
        assert event.attachments == ["https://a.example", "https://b.example"]

    def test_initial_text_from_instance(self) -> None:
        """A bound event shows its lists as editable text."""
        event = baker.make(
            Event,
            colleagues=["Alice", "Bob"],
            tags=["AI"],
            attachments=["https://a.example", "https://b.example"],
        )
        form = EventDraftForm(instance=event)
        assert form.initial["colleagues"] == "Alice, Bob"
        assert form.initial["tags"] == "AI"
        assert form.initial["attachments"] == "https://a.example\nhttps://b.example"

    def test_end_before_start(self) -> None:
        """The end date cannot be before the start date."""
        form = EventDraftForm(
            data=draft_data(start_date=date(2025, 5, 3).isoformat(), end_date="2025-05-01"),
        )
        assert not form.is_valid()
        assert "end_date" in form.errors

    def test_rating_out_of_range(self) -> None:
        """Ratings are limited to one to five."""
        form = EventDraftForm(data=draft_data(rating_kam="6"))
        assert not form.is_valid()
        assert "rating_kam" in form.errors

    def test_edit_keeps_other_fields(self) -> None:
        """Editing through the form changes only what was submitted."""
        event = baker.make(Event, title="Summit", organizer="Acme", colleagues=["Alice"])
        form = EventDraftForm(
            data=draft_data(organizer="Acme", colleagues="Alice, Bob", notes="Bring flyers"),
            instance=event,
        )
        assert form.is_valid(), form.errors
        draft = form.save(commit=False)
        assert draft.pk == event.pk
        assert draft.colleagues == ["Alice", "Bob"]
        assert draft.notes == "Bring flyers"
