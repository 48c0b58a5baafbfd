"""
Admin configuration for events and their history.

Edits made in the admin go through the same draft/save cycle as every other edit, so they are
recorded in the event history. History entries are read-only; deleting one follows the deletion
policy of :mod:`events.history`.
"""

from decimal import Decimal
from typing import Any, ClassVar

from django.contrib import admin, messages
from django.db.models import QuerySet
from django.forms import ModelForm
from django.http import HttpRequest
from django.utils.translation import gettext_lazy as _

from . import history, services
from .forms import EventDraftForm
from .models import Event, EventHistoryEntry


class EventHistoryEntryInline(admin.TabularInline):
    """Read-only list of history entries on the event page."""

    model = EventHistoryEntry
    fields = ("timestamp", "action", "user_email")
    readonly_fields = ("timestamp", "action", "user_email")
    extra = 0
    can_delete = False
    show_change_link = True

    def has_add_permission(self, request: HttpRequest, obj: Any = None) -> bool:
        """History entries are written by the system only."""
        return False

    def has_change_permission(self, request: HttpRequest, obj: Any = None) -> bool:
        """History entries are never edited."""
        return False


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    """Admin configuration for the Event model."""

    form = EventDraftForm
    list_display = (
        "title",
        "start_date",
        "organizer",
        "city",
        "status_display",
        "participant_count",
        "total_cost_display",
    )
    list_filter = ("stage", "booked", "cost_type", "publication_status")
    search_fields = ("title", "organizer", "city")
    date_hierarchy = "start_date"
    actions = ("mark_as_booked",)
    inlines: ClassVar[list[type[admin.TabularInline]]] = [EventHistoryEntryInline]
    fieldsets: ClassVar[list[Any]] = [
        (
            None,
            {
                "fields": (
                    "title",
                    "stage",
                    "booked",
                    "organizer",
                    ("city", "location"),
                    ("start_date", "end_date"),
                    "event_url",
                ),
            },
        ),
        (
            _("Costs and participants"),
            {"fields": ("cost_type", "cost_value", "colleagues")},
        ),
        (
            _("Notes"),
            {"fields": ("notes", "visitor_notes", "tags", "attachments")},
        ),
        (
            _("Publication"),
            {"fields": ("publication_status", "linkedin_note")},
        ),
        (
            _("Ratings"),
            {
                "fields": ("rating_sales", "rating_kam", "rating_marketing", "rating_clevel"),
                "classes": ("collapse",),
            },
        ),
        (
            _("Contact"),
            {
                "fields": ("contact_name", "contact_email", "contact_phone"),
                "classes": ("collapse",),
            },
        ),
    ]

    @admin.display(description=_("Status"))
    def status_display(self, obj: Event) -> str:
        """Display the presentation status."""
        return str(obj.presentation_status.label)

    @admin.display(description=_("Participants"))
    def participant_count(self, obj: Event) -> int:
        """Display the number of participating colleagues."""
        return obj.participant_count

    @admin.display(description=_("Total cost"))
    def total_cost_display(self, obj: Event) -> Decimal:
        """Display the computed total cost."""
        return obj.cost.total

    @admin.action(description=_("Mark selected events as booked"))
    def mark_as_booked(self, request: HttpRequest, queryset: QuerySet[Event]) -> None:
        """Move the selected events to the booked status and record the transition."""
        actor = services.actor_of(request.user)
        updated = sum(
            bool(services.save_draft(event, actor=actor, mark_as_booked=True))
            for event in queryset
        )
        messages.success(request, _("%(count)d event(s) marked as booked.") % {"count": updated})

    def save_model(self, request: HttpRequest, obj: Event, form: ModelForm, change: bool) -> None:  # noqa: FBT001
        """Save through the draft/save cycle so the change is recorded."""
        actor = services.actor_of(request.user)
        if change:
            services.save_draft(obj, actor=actor)
        else:
            obj.save()
            history.append(obj.pk, services.EVENT_CREATED, actor)

    def delete_model(self, request: HttpRequest, obj: Event) -> None:
        """Delete the event and its history."""
        services.delete_event(obj.pk, actor=services.actor_of(request.user))


@admin.register(EventHistoryEntry)
class EventHistoryEntryAdmin(admin.ModelAdmin):
    """Admin configuration for history entries. Entries cannot be added or edited."""

    list_display = ("event", "action_preview", "timestamp", "user_email")
    list_filter = ("timestamp",)
    search_fields = ("event__title", "action", "user_email")
    readonly_fields = ("event", "action", "timestamp", "user_email")

    @admin.display(description=_("Action"))
    def action_preview(self, obj: EventHistoryEntry) -> str:
        """Display a shortened action."""
        return str(obj)

    def has_add_permission(self, request: HttpRequest) -> bool:
        """History entries are written by the system only."""
        return False

    def has_change_permission(self, request: HttpRequest, obj: Any = None) -> bool:
        """History entries are never edited."""
        return False

    def has_delete_permission(
        self,
        request: HttpRequest,
        obj: EventHistoryEntry | None = None,
    ) -> bool:
        """Allow deleting only entries inside the deletion window, for privileged users."""
        if not services.is_privileged(request.user):
            return False
        if obj is None:
            return True
        window = history.list_entries(obj.event_id)[: history.DELETABLE_ENTRIES]
        return obj in window

    def get_actions(self, request: HttpRequest) -> dict[str, Any]:
        """Remove bulk deletion; entries are deleted one at a time."""
        actions = super().get_actions(request)
        actions.pop("delete_selected", None)
        return actions

    def delete_model(self, request: HttpRequest, obj: EventHistoryEntry) -> None:
        """Delete the entry through the deletion policy."""
        result = history.delete_entry(
            obj.event_id,
            obj.pk,
            privileged=services.is_privileged(request.user),
        )
        if result == history.DeletionResult.DENIED:
            messages.error(request, _("Only one of the two newest entries can be deleted."))

    def delete_queryset(self, request: HttpRequest, queryset: QuerySet) -> None:
        """Delete entries one by one through the deletion policy."""
        for entry in queryset:
            self.delete_model(request, entry)
