"""
Mapping between the stored lifecycle representation of an event and its display status.

An event stores a ``stage`` and an independent ``booked`` flag. Together they collapse into one of
four presentation statuses. The forward mapping is many-to-one: ``(attended, True)``,
``(attended, False)`` and ``(planned, True)`` all display as *Booked*. The inverse therefore
returns a canonical representative rather than the original pair, and
``to_presentation_status(*from_presentation_status(s)) == s`` holds for every status.
"""

from .types import PresentationStatus, Stage


CANONICAL_REPRESENTATION: dict[PresentationStatus, tuple[Stage, bool]] = {
    PresentationStatus.REVIEW: (Stage.CONSIDER, False),
    PresentationStatus.PLANNED: (Stage.PLANNED, False),
    PresentationStatus.BOOKED: (Stage.ATTENDED, True),
    PresentationStatus.CANCELLED: (Stage.CANCELLED, False),
}


def to_presentation_status(stage: Stage, *, booked: bool) -> PresentationStatus:
    """
    Return the display status for a stored stage and booked flag.

    Rules are checked in order, the first match wins:

    1. cancelled -> Cancelled (overrides the booked flag)
    2. attended -> Booked
    3. booked flag set -> Booked
    4. consider -> Review
    5. anything else -> Planned
    """
    if stage == Stage.CANCELLED:
        return PresentationStatus.CANCELLED
    if stage == Stage.ATTENDED or booked:
        return PresentationStatus.BOOKED
    if stage == Stage.CONSIDER:
        return PresentationStatus.REVIEW
    return PresentationStatus.PLANNED


def from_presentation_status(status: PresentationStatus) -> tuple[Stage, bool]:
    """Return the canonical ``(stage, booked)`` pair for a display status picked by a user."""
    return CANONICAL_REPRESENTATION[PresentationStatus(status)]
