from django import forms

from .models import EVENT_STATUS_CHOICES


class EventFilterForm(forms.Form):
    search = forms.CharField(
        required=False,
        widget=forms.TextInput(
            attrs={"class": "form-control", "placeholder": "Search events by title"}
        ),
    )
    status = forms.ChoiceField(
        required=False,
        choices=(("", "All statuses"),) + EVENT_STATUS_CHOICES,
        widget=forms.Select(attrs={"class": "form-select"}),
    )


class EventStatusForm(forms.Form):
    status = forms.ChoiceField(choices=EVENT_STATUS_CHOICES)


class EventFeatureForm(forms.Form):
    # Unchecked checkboxes are not posted, so "false" is spelled out.
    is_featured = forms.TypedChoiceField(
        choices=(("true", "Feature"), ("false", "Unfeature")),
        coerce=lambda value: value == "true",
    )


class PlatformFeeForm(forms.Form):
    platform_fee_percent = forms.DecimalField(
        min_value=0,
        max_value=100,
        max_digits=5,
        decimal_places=2,
        label="Fee %",
        widget=forms.NumberInput(attrs={"class": "form-control", "step": "0.01"}),
    )
    platform_fee_fixed = forms.DecimalField(
        min_value=0,
        max_digits=10,
        decimal_places=2,
        label="Fixed fee",
        widget=forms.NumberInput(attrs={"class": "form-control", "step": "0.01"}),
    )


class CategoryForm(forms.Form):
    name = forms.CharField(
        max_length=120,
        widget=forms.TextInput(attrs={"class": "form-control", "placeholder": "Category name"}),
    )
    slug = forms.SlugField(
        required=False,
        max_length=140,
        widget=forms.TextInput(
            attrs={"class": "form-control", "placeholder": "slug (optional)"}
        ),
    )


class CategoryActiveForm(forms.Form):
    is_active = forms.TypedChoiceField(
        choices=(("true", "Activate"), ("false", "Deactivate")),
        coerce=lambda value: value == "true",
    )
