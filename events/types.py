"""
Event lifecycle and cost tracking for EventHub.

This module provides the choice types that are shared across the events app.
"""

from enum import StrEnum

from django.db import models
from django.utils.translation import gettext_lazy as _


class Stage(models.TextChoices):
    """Stored lifecycle stage of an event."""

    PLANNED = "planned", _("Planned")
    CONSIDER = "consider", _("Consider")
    ATTENDED = "attended", _("Attended")
    CANCELLED = "cancelled", _("Cancelled")


class CostType(models.TextChoices):
    """How the cost value of an event is to be interpreted."""

    PARTICIPANT = "participant", _("Per participant")
    BOOTH = "booth", _("Booth (flat)")
    SPONSORING = "sponsoring", _("Sponsorship (flat)")


class PresentationStatus(models.TextChoices):
    """
    Four-valued display status derived from stage and the booked flag.

    See :mod:`events.status` for the mapping in both directions.
    """

    REVIEW = "review", _("Review")
    PLANNED = "planned", _("Planned")
    BOOKED = "booked", _("Booked")
    CANCELLED = "cancelled", _("Cancelled")


class CostBracket(StrEnum):
    """Bucket of the total cost of an event."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Timing(StrEnum):
    """Position of an event relative to a reference day."""

    UPCOMING = "upcoming"
    PAST = "past"
