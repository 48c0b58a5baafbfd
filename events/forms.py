"""
Forms for creating and editing events.

Participants and tags are entered as comma-separated text and attachments one link per line.
The forms turn that text into lists and accept cost values with a decimal comma. Everything that
reaches the event models through these forms is validated.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from django import forms
from django.utils.translation import gettext_lazy as _

from .models import Event


def split_items(value: str, separator: str) -> list[str]:
    """Split free text into trimmed, non-empty items, keeping their order."""
    return [item.strip() for item in value.split(separator) if item.strip()]


class EventCreateForm(forms.ModelForm):
    """Form for creating a new event with its basic data."""

    cost_value = forms.CharField(
        label=_("Cost"),
        required=False,
        help_text=_("Price per participant or flat amount. A decimal comma is accepted."),
    )

    class Meta:
        """Meta class for EventCreateForm."""

        model = Event
        fields = (
            "title",
            "organizer",
            "city",
            "start_date",
            "end_date",
            "cost_type",
            "cost_value",
        )

    def clean_cost_value(self) -> Decimal:
        """Parse the cost value; an empty value means zero."""
        raw = (self.cleaned_data.get("cost_value") or "").strip().replace(",", ".")
        if not raw:
            return Decimal(0)
        try:
            value = Decimal(raw)
        except InvalidOperation as e:
            raise forms.ValidationError(_("Enter a valid amount.")) from e
        if not value.is_finite() or value < 0:
            raise forms.ValidationError(_("The cost cannot be negative."))
        return value


class EventDraftForm(EventCreateForm):
    """Form for editing all data of an existing event."""

    colleagues = forms.CharField(
        label=_("Colleagues"),
        required=False,
        help_text=_("Comma-separated names"),
    )
    tags = forms.CharField(
        label=_("Tags"),
        required=False,
        help_text=_("Comma-separated tags"),
    )
    attachments = forms.CharField(
        label=_("Attachments"),
        required=False,
        widget=forms.Textarea,
        help_text=_("One link per line"),
    )

    class Meta(EventCreateForm.Meta):
        """Meta class for EventDraftForm."""

        fields = (
            "title",
            "stage",
            "booked",
            "organizer",
            "city",
            "location",
            "start_date",
            "end_date",
            "colleagues",
            "tags",
            "cost_type",
            "cost_value",
            "event_url",
            "attachments",
            "notes",
            "visitor_notes",
            "linkedin_note",
            "publication_status",
            "rating_sales",
            "rating_kam",
            "rating_marketing",
            "rating_clevel",
            "contact_name",
            "contact_email",
            "contact_phone",
        )

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Show the list fields of the bound event as editable text."""
        super().__init__(*args, **kwargs)
        if self.instance.pk:
            self.initial["colleagues"] = ", ".join(self.instance.colleagues or [])
            self.initial["tags"] = ", ".join(self.instance.tags or [])
            self.initial["attachments"] = "\n".join(self.instance.attachments or [])

    def clean_colleagues(self) -> list[str]:
        """Split the colleagues into a list."""
        return split_items(self.cleaned_data.get("colleagues") or "", ",")

    def clean_tags(self) -> list[str]:
        """Split the tags into a list."""
        return split_items(self.cleaned_data.get("tags") or "", ",")

    def clean_attachments(self) -> list[str]:
        """Split the attachments into a list, one link per line."""
        return split_items(self.cleaned_data.get("attachments") or "", "\n")

    def clean(self) -> dict[str, Any]:
        """Reject an end date before the start date."""
        cleaned_data = super().clean() or {}
        start_date = cleaned_data.get("start_date")
        end_date = cleaned_data.get("end_date")
        if start_date and end_date and end_date < start_date:
            self.add_error("end_date", _("The end date cannot be before the start date."))
        return cleaned_data
