"""Forms used by the clinic application.

This module defines the Django forms that bind and validate owner, pet and
visit input as well as the query parameters of the owner search and the
upcoming visits listing.  Forms encapsulate the server-side validation
rules; the views only decide how to answer.
"""

from __future__ import annotations

import re
from typing import Any, Dict

from django import forms
from django.utils import timezone

from .models import Owner, Pet, PetType, Visit

_TELEPHONE_SEPARATORS = re.compile(r'[\s-]')


def normalize_telephone(value: str | None) -> str:
    """Strip spaces and dashes from a telephone number."""

    if value is None:
        return ''
    return _TELEPHONE_SEPARATORS.sub('', value)


class OwnerForm(forms.ModelForm):
    """Create or update an owner.

    Telephone numbers are stored without separators, so ``608-555-1023``
    and ``608 555 1023`` both end up as ``6085551023`` before the model's
    ten digit validator runs.
    """

    class Meta:
        model = Owner
        fields = ['first_name', 'last_name', 'address', 'city', 'telephone']

    def clean_telephone(self) -> str:
        return normalize_telephone(self.cleaned_data.get('telephone'))


class OwnerSearchForm(forms.Form):
    """Query parameters of the owner search."""

    last_name = forms.CharField(required=False)
    telephone = forms.CharField(required=False)
    city = forms.CharField(required=False)
    page = forms.IntegerField(required=False, min_value=1)

    def clean_page(self) -> int:
        return self.cleaned_data.get('page') or 1

    def clean_telephone(self) -> str | None:
        return self.cleaned_data.get('telephone') or None

    def clean_city(self) -> str | None:
        return self.cleaned_data.get('city') or None


class PetForm(forms.ModelForm):
    """Register a new pet for an owner.

    The pet type is looked up by name (``dog``, ``cat``...).  A pet name may
    only be used once per owner, ignoring case.
    """

    type = forms.ModelChoiceField(
        queryset=PetType.objects.all(),
        to_field_name='name',
        error_messages={'invalid_choice': 'Unknown pet type.'},
    )

    class Meta:
        model = Pet
        fields = ['name', 'birth_date', 'type']

    def __init__(self, *args: Any, owner: Owner, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.owner = owner

    def clean_name(self) -> str:
        name = self.cleaned_data['name']
        existing = self.owner.get_pet(name, ignore_new=True)
        if existing is not None and existing.pk != self.instance.pk:
            raise forms.ValidationError('This owner already has a pet with that name.')
        return name

    def clean_birth_date(self):
        birth_date = self.cleaned_data.get('birth_date')
        if birth_date and birth_date > timezone.localdate():
            raise forms.ValidationError('Birth date cannot be in the future.')
        return birth_date


class VisitForm(forms.ModelForm):
    """Book a visit for a pet.  Visits cannot be booked in the past."""

    date = forms.DateField(required=False)

    class Meta:
        model = Visit
        fields = ['date', 'description']

    def clean_date(self):
        visit_date = self.cleaned_data.get('date')
        today = timezone.localdate()
        if visit_date is None:
            return today
        if visit_date < today:
            raise forms.ValidationError('Visit date cannot be in the past')
        return visit_date


class UpcomingVisitsFilterForm(forms.Form):
    """Optional filters of the upcoming visits listing."""

    from_date = forms.DateField(required=False)
    to_date = forms.DateField(required=False)
    pet_type = forms.CharField(required=False, max_length=80)
    owner_last_name = forms.CharField(required=False, max_length=30)

    def clean(self) -> Dict[str, Any]:  # type: ignore[override]
        cleaned_data = super().clean()
        if not cleaned_data.get('from_date'):
            cleaned_data['from_date'] = timezone.localdate()
        for name in ('pet_type', 'owner_last_name'):
            cleaned_data[name] = cleaned_data.get(name) or None
        return cleaned_data

    @property
    def has_filters(self) -> bool:
        data = self.cleaned_data
        return any(data.get(name) for name in ('to_date', 'pet_type', 'owner_last_name'))
