"""
Draft/save cycle of events and the cost report pipeline.

Every edit goes through :func:`save_draft`: the stored event is compared with the draft, the
draft is persisted and the detected changes are appended to the event history. The cost report
chains cost calculation, filtering and aggregation over the stored events.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog
from django.db import transaction

from . import history
from .aggregation import CostSummary, MonthTotal, OrganizerTotal, by_month, by_organizer, summarize
from .changes import detect_changes
from .costs import CostRecord, build_cost_records
from .filters import EventFilters, filter_records
from .models import Event
from .types import PresentationStatus


if TYPE_CHECKING:
    from django.contrib.auth.models import AbstractBaseUser, AnonymousUser


logger = structlog.get_logger(__name__)

EVENT_CREATED = "Event created"


def is_privileged(user: "AbstractBaseUser | AnonymousUser | None") -> bool:
    """Return True if ``user`` may delete recent history entries."""
    return bool(user is not None and user.is_authenticated and getattr(user, "is_staff", False))


def actor_of(user: "AbstractBaseUser | AnonymousUser | None") -> str | None:
    """Return the identifier recorded for ``user`` in the history, if any."""
    if user is None or not user.is_authenticated:
        return None
    return getattr(user, "email", "") or user.get_username()


def create_event(title: str, *, actor: str | None = None, **fields: Any) -> Event:
    """
    Create an event with the given title and optional further fields.

    Raises:
        ValidationError: If the title is empty or a field value is invalid.

    """
    event = Event(title=title.strip(), **fields)
    event.full_clean()
    with transaction.atomic():
        event.save()
        history.append(event.pk, EVENT_CREATED, actor)
    logger.info("event_created", event_id=event.pk, title=event.title, actor=actor)
    return event


def save_draft(draft: Event, *, actor: str | None = None, mark_as_booked: bool = False) -> list[str]:
    """
    Persist an edited event and record what changed.

    ``draft`` is an in-memory copy of a stored event carrying the edits. With ``mark_as_booked``
    the draft is moved to the canonical *Booked* representation before comparing.

    The stored row is locked while comparing, saving and writing history, so concurrent edits of
    the same event cannot interleave their history entries. The draft is saved even when no
    tracked field group changed.

    Returns:
        The history entries that were written, in order.

    Raises:
        ValidationError: If the draft is invalid.
        Event.DoesNotExist: If the event was deleted in the meantime.

    """
    if mark_as_booked:
        draft.apply_presentation_status(PresentationStatus.BOOKED)
    draft.full_clean()

    with transaction.atomic():
        persisted = Event.objects.select_for_update().get(pk=draft.pk)
        changes = detect_changes(persisted, draft, mark_as_booked=mark_as_booked)
        draft.save()
        if changes:
            history.append_many(draft.pk, changes, actor)

    logger.info("event_saved", event_id=draft.pk, changes=changes, actor=actor)
    return changes


def delete_event(event_id: int, *, actor: str | None = None) -> bool:
    """Delete an event together with its history. Return False if it did not exist."""
    deleted, per_model = Event.objects.filter(pk=event_id).delete()
    if not deleted:
        return False
    logger.info(
        "event_deleted",
        event_id=event_id,
        history_entries=per_model.get("events.EventHistoryEntry", 0),
        actor=actor,
    )
    return True


@dataclass(frozen=True)
class CostReport:
    """Filtered cost records with their aggregated views."""

    filters: EventFilters
    records: list[CostRecord]
    summary: CostSummary
    by_organizer: list[OrganizerTotal]
    by_month: list[MonthTotal]


def build_cost_report(
    filters: EventFilters | None = None,
    events: Iterable[Event] | None = None,
) -> CostReport:
    """Compute costs, apply ``filters`` and aggregate. Defaults to all stored events."""
    filters = filters or EventFilters()
    if events is None:
        events = Event.objects.order_by("start_date", "title")
    records = filter_records(build_cost_records(events), filters)
    return CostReport(
        filters=filters,
        records=records,
        summary=summarize(records),
        by_organizer=by_organizer(records),
        by_month=by_month(records),
    )
