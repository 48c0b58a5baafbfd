"""
Cost calculation for events.

Costs are never stored. They are derived from the cost type, the cost value and the number of
participating colleagues every time they are needed, so they cannot drift from the source fields.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, NamedTuple

from .status import to_presentation_status
from .types import CostBracket, CostType, PresentationStatus, Stage


if TYPE_CHECKING:
    from .models import Event


# Lower bounds of the medium and high cost brackets
MEDIUM_COST_THRESHOLD = Decimal(500)
HIGH_COST_THRESHOLD = Decimal(2000)

ZERO = Decimal(0)
FLAT_COST_TYPES = frozenset({CostType.BOOTH, CostType.SPONSORING})


class CostBreakdown(NamedTuple):
    """Total cost of an event and the share per participant."""

    total: Decimal
    per_participant: Decimal


def _as_decimal(value: Decimal | float | str) -> Decimal:
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def compute_cost(
    cost_type: CostType,
    unit_value: Decimal | float | str,
    participant_count: int,
) -> CostBreakdown:
    """
    Return total and per-participant cost.

    - Per participant: the value is a price per head, so the total scales with the number of
      participants and the per-participant cost is the value itself.
    - Booth / sponsoring: the value is a flat amount. The per-participant cost is the amount split
      across the participants, or ``0`` when nobody takes part. That ``0`` means "not applicable",
      callers tell it apart from a real zero by looking at the participant count.

    Inputs are expected to be non-negative; validation happens before costs are computed.
    """
    value = _as_decimal(unit_value)

    if CostType(cost_type) in FLAT_COST_TYPES:
        per_participant = value / participant_count if participant_count > 0 else ZERO
        return CostBreakdown(total=value, per_participant=per_participant)

    return CostBreakdown(total=value * participant_count, per_participant=value)


def cost_bracket(total_cost: Decimal) -> CostBracket:
    """Return the bracket a total cost falls into: below 500, below 2000, or above."""
    if total_cost < MEDIUM_COST_THRESHOLD:
        return CostBracket.LOW
    if total_cost < HIGH_COST_THRESHOLD:
        return CostBracket.MEDIUM
    return CostBracket.HIGH


def quarter_of(day: date) -> int:
    """Return the calendar quarter (1-4) of a date."""
    return (day.month - 1) // 3 + 1


@dataclass(frozen=True)
class CostRecord:
    """An event enriched with its computed costs."""

    event: "Event"
    participant_count: int
    total_cost: Decimal
    cost_per_participant: Decimal

    @classmethod
    def from_event(cls, event: "Event") -> "CostRecord":
        """Compute the costs of ``event`` from its current field values."""
        participants = len(event.colleagues or [])
        breakdown = compute_cost(CostType(event.cost_type), event.cost_value, participants)
        return cls(
            event=event,
            participant_count=participants,
            total_cost=breakdown.total,
            cost_per_participant=breakdown.per_participant,
        )

    # ------------------------------------------------------------------
    # Accessors used by filtering and aggregation
    # ------------------------------------------------------------------

    @property
    def presentation_status(self) -> PresentationStatus:
        """Return the display status of the event."""
        return to_presentation_status(Stage(self.event.stage), booked=self.event.booked)

    @property
    def cost_type(self) -> CostType:
        """Return the cost type of the event."""
        return CostType(self.event.cost_type)

    @property
    def organizer(self) -> str:
        """Return the organizer, or an empty string when unknown."""
        return self.event.organizer or ""

    @property
    def city(self) -> str:
        """Return the city, or an empty string when unknown."""
        return self.event.city or ""

    @property
    def start_date(self) -> date | None:
        """Return the start date of the event."""
        return self.event.start_date

    @property
    def year(self) -> int | None:
        """Return the year of the start date."""
        return self.start_date.year if self.start_date else None

    @property
    def quarter(self) -> int | None:
        """Return the quarter of the start date."""
        return quarter_of(self.start_date) if self.start_date else None

    @property
    def cost_bracket(self) -> CostBracket:
        """Return the bracket of the total cost."""
        return cost_bracket(self.total_cost)

    @property
    def colleagues(self) -> list[str]:
        """Return the participating colleagues."""
        return list(self.event.colleagues or [])

    @property
    def tags(self) -> list[str]:
        """Return the tags of the event."""
        return list(self.event.tags or [])


def build_cost_records(events: Iterable["Event"]) -> list[CostRecord]:
    """Return a cost record for every event, keeping the input order."""
    return [CostRecord.from_event(event) for event in events]
