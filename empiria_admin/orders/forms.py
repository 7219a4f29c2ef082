from django import forms

from .models import ORDER_STATUS_CHOICES


class OrderStatusForm(forms.Form):
    status = forms.ChoiceField(choices=ORDER_STATUS_CHOICES)


class OrderFilterForm(forms.Form):
    search = forms.CharField(
        required=False,
        widget=forms.TextInput(
            attrs={"class": "form-control", "placeholder": "Stripe payment or session id"}
        ),
    )
    status = forms.ChoiceField(
        required=False,
        choices=(("", "All statuses"),) + ORDER_STATUS_CHOICES,
        widget=forms.Select(attrs={"class": "form-select"}),
    )
