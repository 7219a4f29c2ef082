from django import forms

from .models import ROLE_CHOICES


class UserRoleForm(forms.Form):
    role = forms.ChoiceField(choices=ROLE_CHOICES)


class UserFilterForm(forms.Form):
    search = forms.CharField(
        required=False,
        widget=forms.TextInput(
            attrs={"class": "form-control", "placeholder": "Search name or email"}
        ),
    )
    role = forms.ChoiceField(
        required=False,
        choices=(("", "All roles"),) + ROLE_CHOICES,
        widget=forms.Select(attrs={"class": "form-select"}),
    )
