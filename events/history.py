"""
Audit trail of events.

History entries are append-only. The only way to remove one is :func:`delete_entry`, which is
limited to privileged users and to the two most recent entries of an event, so an obvious mistake
can be corrected without rewriting older history.

Writes for one event are serialised by locking the event row for the duration of the transaction.
Different events do not block each other.
"""

from collections.abc import Iterable
from enum import StrEnum

import structlog
from django.db import transaction
from django.utils import timezone

from .models import Event, EventHistoryEntry


logger = structlog.get_logger(__name__)

# Number of newest entries per event that may still be deleted
DELETABLE_ENTRIES = 2


class DeletionResult(StrEnum):
    """Outcome of a request to delete a history entry."""

    DELETED = "deleted"
    DENIED = "denied"


def _lock_event(event_id: int) -> Event:
    return Event.objects.select_for_update().get(pk=event_id)


def _append_locked(event: Event, action: str, actor: str | None) -> EventHistoryEntry:
    now = timezone.now()
    latest = (
        EventHistoryEntry.objects.for_event(event.pk)
        .newest_first()
        .values_list("timestamp", flat=True)
        .first()
    )
    # Timestamps never go backwards within one event, even if the clock does
    timestamp = max(now, latest) if latest else now
    entry = EventHistoryEntry.objects.create(
        event=event,
        action=action,
        timestamp=timestamp,
        user_email=actor or "",
    )
    logger.info(
        "history_entry_appended",
        event_id=event.pk,
        entry_id=entry.pk,
        action=action,
        actor=actor,
    )
    return entry


def append(event_id: int, action: str, actor: str | None = None) -> EventHistoryEntry:
    """
    Record ``action`` for the event with id ``event_id``.

    Raises:
        Event.DoesNotExist: If there is no such event.

    """
    with transaction.atomic():
        event = _lock_event(event_id)
        return _append_locked(event, action, actor)


def append_many(
    event_id: int,
    actions: Iterable[str],
    actor: str | None = None,
) -> list[EventHistoryEntry]:
    """Record several actions for one event in the given order, under a single lock."""
    with transaction.atomic():
        event = _lock_event(event_id)
        return [_append_locked(event, action, actor) for action in actions]


def list_entries(event_id: int) -> list[EventHistoryEntry]:
    """Return the history of an event, newest entry first."""
    return list(EventHistoryEntry.objects.for_event(event_id).newest_first())


def delete_entry(event_id: int, entry_id: int, *, privileged: bool) -> DeletionResult:
    """
    Delete a history entry if the policy allows it.

    Deletion is allowed only for privileged users and only for one of the two newest entries of the
    event. The window is based on position in the newest-first list, not on age. Remaining entries
    keep their ids and timestamps.

    A refusal is an expected outcome and is returned as :attr:`DeletionResult.DENIED`.
    """
    log = logger.bind(event_id=event_id, entry_id=entry_id)

    if not privileged:
        log.warning("history_entry_delete_denied", reason="not_privileged")
        return DeletionResult.DENIED

    with transaction.atomic():
        if Event.objects.select_for_update().filter(pk=event_id).first() is None:
            log.warning("history_entry_delete_denied", reason="unknown_event")
            return DeletionResult.DENIED

        deletable = list(
            EventHistoryEntry.objects.for_event(event_id)
            .newest_first()
            .values_list("pk", flat=True)[:DELETABLE_ENTRIES],
        )
        if entry_id not in deletable:
            log.warning("history_entry_delete_denied", reason="outside_window")
            return DeletionResult.DENIED

        EventHistoryEntry.objects.filter(pk=entry_id).delete()

    log.info("history_entry_deleted")
    return DeletionResult.DELETED
