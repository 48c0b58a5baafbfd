"""
Change detection between the stored state of an event and an edited draft.

Instead of recording every single field mutation, the stored event and the draft are compared as
two snapshots. Related fields are grouped, and each changed group is named once in a combined
history entry such as ``"Event data changed (Title, Notes)"``. Status transitions are reported as
separate entries in front of it.
"""

from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from .status import to_presentation_status
from .types import PresentationStatus, Stage


if TYPE_CHECKING:
    from .models import Event


MARKED_AS_BOOKED = "Marked as booked"
STATUS_CHANGED = "Status changed to: {status}"
DATA_CHANGED = "Event data changed ({groups})"

RATING_FIELDS = ("rating_sales", "rating_kam", "rating_marketing", "rating_clevel")


def _text(value: str | None) -> str:
    return value or ""


def _items(value: list[str] | None) -> list[str]:
    return list(value or [])


def _linkedin_planned(event: "Event") -> bool:
    return bool(_text(event.linkedin_note).strip())


def _fields_differ(*names: str) -> Callable[["Event", "Event"], bool]:
    def differ(before: "Event", after: "Event") -> bool:
        return any(getattr(before, name) != getattr(after, name) for name in names)

    return differ


def _text_differs(name: str) -> Callable[["Event", "Event"], bool]:
    def differ(before: "Event", after: "Event") -> bool:
        return _text(getattr(before, name)) != _text(getattr(after, name))

    return differ


def _list_differs(name: str) -> Callable[["Event", "Event"], bool]:
    # Lists are edited as free text and parsed again, so a new order is a real edit.
    def differ(before: "Event", after: "Event") -> bool:
        return _items(getattr(before, name)) != _items(getattr(after, name))

    return differ


def _title_differs(before: "Event", after: "Event") -> bool:
    return _text(before.title).strip() != _text(after.title).strip()


def _location_differs(before: "Event", after: "Event") -> bool:
    return _text_differs("city")(before, after) or _text_differs("location")(before, after)


def _costs_differ(before: "Event", after: "Event") -> bool:
    return before.cost_type != after.cost_type or Decimal(before.cost_value) != Decimal(
        after.cost_value,
    )


def _linkedin_differs(before: "Event", after: "Event") -> bool:
    return _linkedin_planned(before) != _linkedin_planned(after) or _text(
        before.linkedin_note,
    ).strip() != _text(after.linkedin_note).strip()


@dataclass(frozen=True)
class FieldGroup:
    """A named set of fields that is reported as one change."""

    label: str
    differs: Callable[["Event", "Event"], bool]


# Order matters: changed groups are listed in this order
FIELD_GROUPS: tuple[FieldGroup, ...] = (
    FieldGroup("Title", _title_differs),
    FieldGroup("Organizer", _text_differs("organizer")),
    FieldGroup("Location", _location_differs),
    FieldGroup("Dates", _fields_differ("start_date", "end_date")),
    FieldGroup("Costs", _costs_differ),
    FieldGroup("URL", _text_differs("event_url")),
    FieldGroup("Notes", _text_differs("notes")),
    FieldGroup("Visitor notes", _text_differs("visitor_notes")),
    FieldGroup("Ratings", _fields_differ(*RATING_FIELDS)),
    FieldGroup("LinkedIn", _linkedin_differs),
    FieldGroup("Website publication", _fields_differ("publication_status")),
    FieldGroup("Participants", _list_differs("colleagues")),
    FieldGroup("Tags", _list_differs("tags")),
    FieldGroup("Attachments", _list_differs("attachments")),
)


def changed_groups(persisted: "Event", draft: "Event") -> list[str]:
    """Return the labels of all field groups that differ, in reporting order."""
    return [group.label for group in FIELD_GROUPS if group.differs(persisted, draft)]


def _status(event: "Event") -> PresentationStatus:
    return to_presentation_status(Stage(event.stage), booked=event.booked)


def detect_changes(
    persisted: "Event",
    draft: "Event",
    *,
    mark_as_booked: bool = False,
) -> list[str]:
    """
    Return the history entries describing how ``draft`` differs from ``persisted``.

    The entries come in this order:

    1. ``"Marked as booked"`` when the caller asked to mark the event as booked and the display
       status moves into *Booked* from another status.
    2. ``"Status changed to: <status>"`` when the display status differs.
    3. ``"Event data changed (<groups>)"`` when any field group differs.

    Identical events yield an empty list. The result is advisory, it does not decide whether the
    draft gets saved.
    """
    entries: list[str] = []

    status_before = _status(persisted)
    status_after = _status(draft)
    if status_before != status_after:
        if mark_as_booked and status_after == PresentationStatus.BOOKED:
            entries.append(MARKED_AS_BOOKED)
        entries.append(STATUS_CHANGED.format(status=status_after.label))

    if groups := changed_groups(persisted, draft):
        entries.append(DATA_CHANGED.format(groups=", ".join(groups)))

    return entries
