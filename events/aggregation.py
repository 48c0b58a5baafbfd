"""
Cost aggregation over filtered cost records.

All views are plain sums of ``total_cost``. Records missing the grouping key of a view (no
organizer, no start date) are left out of that view only.
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from .costs import ZERO, CostRecord
from .types import CostType


HUNDRED = Decimal(100)


@dataclass(frozen=True)
class OrganizerTotal:
    """Summed cost of all events of one organizer."""

    organizer: str
    total_cost: Decimal
    event_count: int
    share: Decimal


@dataclass(frozen=True)
class MonthTotal:
    """Summed cost of all events starting in one calendar month."""

    year_month: str
    total_cost: Decimal
    event_count: int
    representative_date: date


@dataclass(frozen=True)
class CostSummary:
    """Key figures of a set of cost records."""

    total_events: int
    total_participants: int
    total_cost: Decimal
    avg_cost_per_event: Decimal
    avg_participants_per_event: Decimal
    cost_per_participant: Decimal
    cost_by_type: dict[CostType, Decimal]


def by_organizer(records: Iterable[CostRecord]) -> list[OrganizerTotal]:
    """
    Sum costs per organizer, most expensive organizer first.

    Records without an organizer are excluded, they are not collected under an "unknown" bucket.
    Equal totals are ordered by organizer name. ``share`` is the percentage of the summed cost of
    this view.
    """
    totals: dict[str, Decimal] = defaultdict(Decimal)
    counts: dict[str, int] = defaultdict(int)
    for record in records:
        if not record.organizer:
            continue
        totals[record.organizer] += record.total_cost
        counts[record.organizer] += 1

    grand_total = sum(totals.values(), ZERO)
    rows = [
        OrganizerTotal(
            organizer=organizer,
            total_cost=total,
            event_count=counts[organizer],
            share=total / grand_total * HUNDRED if grand_total else ZERO,
        )
        for organizer, total in totals.items()
    ]
    return sorted(rows, key=lambda row: (-row.total_cost, row.organizer))


def month_key(day: date) -> str:
    """Return the ``YYYY-MM`` grouping key of a date."""
    return day.isoformat()[:7]


def by_month(records: Iterable[CostRecord]) -> list[MonthTotal]:
    """Sum costs per month of the start date in chronological order, skipping undated records."""
    totals: dict[str, Decimal] = defaultdict(Decimal)
    counts: dict[str, int] = defaultdict(int)
    for record in records:
        if record.start_date is None:
            continue
        key = month_key(record.start_date)
        totals[key] += record.total_cost
        counts[key] += 1

    rows = [
        MonthTotal(
            year_month=key,
            total_cost=total,
            event_count=counts[key],
            representative_date=date.fromisoformat(f"{key}-01"),
        )
        for key, total in totals.items()
    ]
    return sorted(rows, key=lambda row: row.representative_date)


def summarize(records: Iterable[CostRecord]) -> CostSummary:
    """
    Return the key figures of ``records``.

    The cost per participant divides the total cost by the total number of participants. It is not
    an average of the per-event values. Divisions by zero yield ``0``.
    """
    records = list(records)
    total_events = len(records)
    total_participants = sum(record.participant_count for record in records)
    total_cost = sum((record.total_cost for record in records), ZERO)

    cost_by_type: dict[CostType, Decimal] = dict.fromkeys(CostType, ZERO)
    for record in records:
        cost_by_type[record.cost_type] += record.total_cost

    return CostSummary(
        total_events=total_events,
        total_participants=total_participants,
        total_cost=total_cost,
        avg_cost_per_event=total_cost / total_events if total_events else ZERO,
        avg_participants_per_event=(
            Decimal(total_participants) / total_events if total_events else ZERO
        ),
        cost_per_participant=total_cost / total_participants if total_participants else ZERO,
        cost_by_type=cost_by_type,
    )
