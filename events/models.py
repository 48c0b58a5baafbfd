"""
Event tracking models for EventHub.

This module provides the Event model, holding the lifecycle, cost, planning and rating data of a
conference or trade show, and the EventHistoryEntry model that stores its audit trail.
"""

from typing import TYPE_CHECKING, Any, ClassVar

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import QuerySet
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .costs import CostBreakdown, compute_cost
from .status import from_presentation_status, to_presentation_status
from .types import CostType, PresentationStatus, Stage


if TYPE_CHECKING:
    from django_stubs_ext.db.models.manager import RelatedManager


# Constants
MAX_TITLE_LENGTH = 250
MAX_FIELD_LENGTH = 200
MAX_PHONE_LENGTH = 50
MIN_RATING_SCORE = 1
MAX_RATING_SCORE = 5
ACTION_PREVIEW_LENGTH = 50


def _rating_field(help_text: str) -> models.PositiveSmallIntegerField:
    return models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[
            MinValueValidator(MIN_RATING_SCORE),
            MaxValueValidator(MAX_RATING_SCORE),
        ],
        help_text=help_text,
    )


class Event(models.Model):
    """Represents a conference, trade show or similar event the organization may attend."""

    title = models.CharField(
        max_length=MAX_TITLE_LENGTH,
        help_text=_("Title of the event"),
    )
    organizer = models.CharField(
        max_length=MAX_FIELD_LENGTH,
        blank=True,
        default="",
        help_text=_("Organizer of the event"),
    )
    city = models.CharField(
        max_length=MAX_FIELD_LENGTH,
        blank=True,
        default="",
        help_text=_("City where the event takes place"),
    )
    location = models.CharField(
        max_length=MAX_FIELD_LENGTH,
        blank=True,
        default="",
        help_text=_("Venue of the event"),
    )
    start_date = models.DateField(
        null=True,
        blank=True,
        help_text=_("First day of the event"),
    )
    end_date = models.DateField(
        null=True,
        blank=True,
        help_text=_("Last day of the event"),
    )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    stage = models.CharField(
        max_length=10,
        choices=Stage.choices,
        default=Stage.PLANNED,
        help_text=_("Lifecycle stage of the event"),
    )
    booked = models.BooleanField(
        default=False,
        help_text=_("Whether tickets or a booth have already been booked"),
    )

    # ------------------------------------------------------------------
    # Costs
    # ------------------------------------------------------------------
    cost_type = models.CharField(
        max_length=12,
        choices=CostType.choices,
        default=CostType.PARTICIPANT,
        help_text=_("How the cost value is to be interpreted"),
    )
    cost_value = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=0,
        validators=[MinValueValidator(0)],
        help_text=_("Price per participant or flat amount, depending on the cost type"),
    )

    # ------------------------------------------------------------------
    # People and content
    # ------------------------------------------------------------------
    colleagues = models.JSONField(
        blank=True,
        default=list,
        help_text=_("Names of the colleagues taking part"),
    )
    tags = models.JSONField(
        blank=True,
        default=list,
        help_text=_("Free-text tags"),
    )
    attachments = models.JSONField(
        blank=True,
        default=list,
        help_text=_("Links to attached files"),
    )
    event_url = models.URLField(
        blank=True,
        default="",
        help_text=_("Website of the event"),
    )
    notes = models.TextField(
        blank=True,
        default="",
        help_text=_("Internal notes"),
    )
    visitor_notes = models.TextField(
        blank=True,
        default="",
        help_text=_("Notes from the colleagues who visited the event"),
    )

    # ------------------------------------------------------------------
    # Social and planning
    # ------------------------------------------------------------------
    publication_status = models.BooleanField(
        default=False,
        help_text=_("Whether the event is published on the website"),
    )
    linkedin_plan = models.BooleanField(
        default=False,
        editable=False,
        help_text=_("Whether a LinkedIn post is planned. Derived from the LinkedIn note."),
    )
    linkedin_note = models.TextField(
        blank=True,
        default="",
        help_text=_("Draft or idea for the LinkedIn post"),
    )

    # ------------------------------------------------------------------
    # Ratings
    # ------------------------------------------------------------------
    rating_sales = _rating_field(_("Rating from the sales perspective (1-5)"))
    rating_kam = _rating_field(_("Rating from the key account management perspective (1-5)"))
    rating_marketing = _rating_field(_("Rating from the marketing perspective (1-5)"))
    rating_clevel = _rating_field(_("Rating from the executive perspective (1-5)"))

    # ------------------------------------------------------------------
    # Contact
    # ------------------------------------------------------------------
    contact_name = models.CharField(
        max_length=MAX_FIELD_LENGTH,
        blank=True,
        default="",
        help_text=_("Contact person at the organizer"),
    )
    contact_email = models.EmailField(
        blank=True,
        default="",
        help_text=_("E-mail of the contact person"),
    )
    contact_phone = models.CharField(
        max_length=MAX_PHONE_LENGTH,
        blank=True,
        default="",
        help_text=_("Phone number of the contact person"),
    )

    created_at = models.DateTimeField(
        default=timezone.now,
        help_text=_("When this event was added to the system"),
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text=_("When this event was last modified"),
    )

    if TYPE_CHECKING:
        history: RelatedManager[EventHistoryEntry]

    class Meta:
        """Metadata for the Event model."""

        verbose_name = _("Event")
        verbose_name_plural = _("Events")
        ordering: ClassVar[list[str]] = ["start_date", "title"]
        indexes: ClassVar[list[models.Index]] = [
            models.Index(fields=["start_date"], name="event_start_date_idx"),
            models.Index(fields=["organizer"], name="event_organizer_idx"),
        ]
        constraints: ClassVar[list[models.CheckConstraint]] = [
            models.CheckConstraint(
                condition=models.Q(cost_value__gte=0),
                name="event_cost_value_non_negative",
            ),
        ]

    def __str__(self) -> str:
        """Return the event title."""
        return self.title

    def clean(self) -> None:
        """Reject events without a title."""
        if not self.title.strip():
            raise ValidationError({"title": _("An event needs a title.")})

    def save(self, *args: Any, **kwargs: Any) -> None:
        """
        Save the event instance.

        Keep the LinkedIn plan flag in sync with the note: a post is planned exactly when the note
        is non-empty after trimming.
        """
        self.linkedin_note = self.linkedin_note.strip()
        self.linkedin_plan = bool(self.linkedin_note)
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "linkedin_note" in update_fields:
            kwargs["update_fields"] = {*update_fields, "linkedin_plan"}
        super().save(*args, **kwargs)

    # ------------------------------------------------------------------
    # Derived helpers
    # ------------------------------------------------------------------

    @property
    def presentation_status(self) -> PresentationStatus:
        """Return the display status derived from stage and booked flag."""
        return to_presentation_status(Stage(self.stage), booked=self.booked)

    def apply_presentation_status(self, status: PresentationStatus) -> None:
        """Set stage and booked flag to the canonical representation of ``status``."""
        self.stage, self.booked = from_presentation_status(status)

    @property
    def participant_count(self) -> int:
        """Return the number of colleagues taking part."""
        return len(self.colleagues or [])

    @property
    def cost(self) -> CostBreakdown:
        """Return total and per-participant cost, computed from the current field values."""
        return compute_cost(CostType(self.cost_type), self.cost_value, self.participant_count)


class EventHistoryQuerySet(models.QuerySet):
    """Custom QuerySet for EventHistoryEntry with ordering helpers."""

    def for_event(self, event_id: int) -> QuerySet:
        """Return the entries belonging to one event."""
        return self.filter(event_id=event_id)

    def newest_first(self) -> QuerySet:
        """Return entries newest first; insertion order breaks timestamp ties."""
        return self.order_by("-timestamp", "-id")


class EventHistoryEntry(models.Model):
    """A single audit trail entry describing a change to an event."""

    event = models.ForeignKey(
        Event,
        on_delete=models.CASCADE,
        related_name="history",
        help_text=_("Event this entry belongs to"),
    )
    action = models.TextField(
        help_text=_("Description of the change"),
    )
    timestamp = models.DateTimeField(
        default=timezone.now,
        help_text=_("When the change was recorded"),
    )
    user_email = models.CharField(
        max_length=MAX_FIELD_LENGTH,
        blank=True,
        default="",
        help_text=_("Who made the change, if known"),
    )

    objects = EventHistoryQuerySet.as_manager()

    class Meta:
        """Metadata for the EventHistoryEntry model."""

        ordering: ClassVar[list[str]] = ["-timestamp", "-id"]
        verbose_name = _("History entry")
        verbose_name_plural = _("History entries")
        indexes: ClassVar[list[models.Index]] = [
            models.Index(fields=["event", "timestamp"], name="history_event_timestamp_idx"),
        ]

    def __str__(self) -> str:
        """Return a shortened version of the action."""
        if len(self.action) > ACTION_PREVIEW_LENGTH:
            return f"{self.action[:ACTION_PREVIEW_LENGTH]}..."
        return self.action
