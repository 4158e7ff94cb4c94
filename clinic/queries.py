"""Explicit query functions for the clinic models.

Every lookup used by the views and services lives here with its predicate
and parameters spelled out, so callers never build ORM filters inline.
Functions returning querysets are lazy and can be paginated by the caller;
the ones returning lists are evaluated immediately.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from django.db.models import Prefetch, QuerySet

from .models import Owner, Pet, PetType, Vet, Visit


def find_owners_by_last_name_prefix(prefix: Optional[str]) -> List[Owner]:
    """Return every owner whose last name starts with ``prefix``.

    The match is case-insensitive and unpaginated.  An empty or ``None``
    prefix matches all owners.  Rows come back in primary key order.
    """

    queryset = Owner.objects.all()
    if prefix:
        queryset = queryset.filter(last_name__istartswith=prefix)
    return list(queryset.order_by('pk'))


def search_owners(
    last_name: Optional[str] = '',
    telephone: Optional[str] = None,
    city: Optional[str] = None,
) -> QuerySet[Owner]:
    """Owners matching every supplied criterion.

    * ``last_name``: case-insensitive prefix
    * ``telephone``: prefix
    * ``city``: case-insensitive exact match

    Empty or ``None`` criteria are ignored.
    """

    queryset = Owner.objects.all()
    if last_name:
        queryset = queryset.filter(last_name__istartswith=last_name)
    if telephone:
        queryset = queryset.filter(telephone__startswith=telephone)
    if city:
        queryset = queryset.filter(city__iexact=city)
    return queryset.order_by('pk')


def find_duplicate_owners(first_name: str, last_name: str, telephone: str) -> QuerySet[Owner]:
    """Owners with the same names (ignoring case) and the same telephone."""

    return Owner.objects.filter(
        first_name__iexact=first_name,
        last_name__iexact=last_name,
        telephone=telephone,
    )


def owner_with_pets(owner_id: int) -> QuerySet[Owner]:
    """Queryset for a single owner with pets, pet types and visits prefetched."""

    pets = Pet.objects.select_related('type').prefetch_related('visits')
    return Owner.objects.filter(pk=owner_id).prefetch_related(Prefetch('pets', queryset=pets))


def visits_from(from_date: date) -> List[Visit]:
    """Visits on or after ``from_date`` in ascending date order."""

    return list(
        Visit.objects.select_related('pet__owner', 'pet__type')
        .filter(date__gte=from_date)
        .order_by('date', 'pk')
    )


def upcoming_visits(
    from_date: date,
    to_date: Optional[date] = None,
    pet_type: Optional[str] = None,
    owner_last_name: Optional[str] = None,
) -> List[Visit]:
    """Visits on or after ``from_date`` narrowed by the optional filters.

    ``to_date`` is an inclusive upper bound, ``pet_type`` matches the type
    name exactly ignoring case and ``owner_last_name`` is a case-insensitive
    substring match on the owner's last name.
    """

    queryset = Visit.objects.select_related('pet__owner', 'pet__type').filter(date__gte=from_date)
    if to_date is not None:
        queryset = queryset.filter(date__lte=to_date)
    if pet_type:
        queryset = queryset.filter(pet__type__name__iexact=pet_type)
    if owner_last_name:
        queryset = queryset.filter(pet__owner__last_name__icontains=owner_last_name)
    return list(queryset.order_by('date', 'pk'))


def list_pet_types() -> List[PetType]:
    return list(PetType.objects.order_by('name'))


def list_vets() -> List[Vet]:
    """All vets with their specialties, ordered by last then first name."""

    return list(Vet.objects.prefetch_related('specialties').order_by('last_name', 'first_name'))
