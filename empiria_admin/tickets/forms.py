from django import forms

from .models import TICKET_STATUS_CHOICES


class IssueTicketsForm(forms.Form):
    tier = forms.ChoiceField(
        label="Ticket tier",
        widget=forms.Select(attrs={"class": "form-select"}),
    )
    quantity = forms.IntegerField(
        min_value=1,
        initial=1,
        widget=forms.NumberInput(attrs={"class": "form-control"}),
    )
    attendee_name = forms.CharField(
        max_length=255,
        widget=forms.TextInput(attrs={"class": "form-control", "placeholder": "Full name"}),
    )
    attendee_email = forms.EmailField(
        widget=forms.EmailInput(
            attrs={"class": "form-control", "placeholder": "attendee@example.com"}
        ),
    )
    reason = forms.CharField(
        widget=forms.Textarea(
            attrs={"class": "form-control", "rows": 2, "placeholder": "Comp, sponsor, ..."}
        ),
    )
    is_free = forms.BooleanField(required=False, initial=True, label="Complimentary (free)")
    send_email = forms.BooleanField(required=False, initial=True, label="Email the tickets")

    def __init__(self, *args, **kwargs):
        tiers = kwargs.pop("tiers", None) or []
        super().__init__(*args, **kwargs)
        self.fields["tier"].choices = [
            (
                str(tier.id),
                f"{tier.name} ({tier.price} {tier.effective_currency.upper()}) - "
                f"{tier.remaining_quantity} left",
            )
            for tier in tiers
        ]


class ReissueTicketForm(forms.Form):
    order_id = forms.UUIDField(widget=forms.HiddenInput())
    new_attendee_name = forms.CharField(
        max_length=255, widget=forms.TextInput(attrs={"class": "form-control"})
    )
    new_attendee_email = forms.EmailField(widget=forms.EmailInput(attrs={"class": "form-control"}))
    reason = forms.CharField(widget=forms.TextInput(attrs={"class": "form-control"}))


class SendTicketsForm(forms.Form):
    recipient_name = forms.CharField(
        max_length=255, widget=forms.TextInput(attrs={"class": "form-control"})
    )
    recipient_email = forms.EmailField(widget=forms.EmailInput(attrs={"class": "form-control"}))


class TicketStatusForm(forms.Form):
    status = forms.ChoiceField(choices=TICKET_STATUS_CHOICES)


class TicketFilterForm(forms.Form):
    search = forms.CharField(
        required=False,
        widget=forms.TextInput(
            attrs={"class": "form-control", "placeholder": "QR code, email or name"}
        ),
    )
    status = forms.ChoiceField(
        required=False,
        choices=(("", "All statuses"),) + TICKET_STATUS_CHOICES,
        widget=forms.Select(attrs={"class": "form-select"}),
    )
