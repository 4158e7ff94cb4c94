"""View functions for the clinic application.

The views cover the owner workflow (search, create, edit, detail), pet
registration, visit booking, the upcoming visits listing, the vet roster
and the owner CSV export.  Pages answer with JSON payloads or redirects;
the export answers with a CSV download.  Lookups go through
:mod:`clinic.queries` and validation through :mod:`clinic.forms`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from django.conf import settings
from django.core.paginator import Paginator
from django.http import Http404, HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import redirect
from django.views.decorators.http import require_GET, require_POST

from . import queries
from .forms import (
    OwnerForm,
    OwnerSearchForm,
    PetForm,
    UpcomingVisitsFilterForm,
    VisitForm,
)
from .models import Owner, Pet, Vet, Visit
from .services.owner_csv import OwnerExportError, export_owners_csv

logger = logging.getLogger(__name__)

OWNER_NOT_FOUND_MESSAGE = 'The requested owner could not be found.'
PET_NOT_FOUND_MESSAGE = 'The requested pet could not be found.'
GENERIC_NOT_FOUND_MESSAGE = 'The requested page could not be found.'


def _form_errors(form) -> JsonResponse:
    return JsonResponse({'errors': form.errors.get_json_data()}, status=400)


def _serialise_owner(owner: Owner) -> Dict[str, Any]:
    return {
        'id': owner.pk,
        'firstName': owner.first_name,
        'lastName': owner.last_name,
        'address': owner.address,
        'city': owner.city,
        'telephone': owner.telephone,
    }


def _serialise_visit(visit: Visit) -> Dict[str, Any]:
    return {
        'id': visit.pk,
        'date': visit.date.isoformat(),
        'description': visit.description,
    }


def _serialise_pet(pet: Pet) -> Dict[str, Any]:
    return {
        'id': pet.pk,
        'name': pet.name,
        'birthDate': pet.birth_date.isoformat() if pet.birth_date else None,
        'type': pet.type.name,
        'visits': [_serialise_visit(visit) for visit in pet.visits.all()],
    }


def _serialise_vet(vet: Vet) -> Dict[str, Any]:
    return {
        'id': vet.pk,
        'firstName': vet.first_name,
        'lastName': vet.last_name,
        'specialties': [specialty.name for specialty in vet.specialties.all()],
    }


class OwnerNotFound(Http404):
    """No owner exists with the requested id."""


class PetNotFound(Http404):
    """The owner has no pet with the requested id."""


def _get_owner_or_404(owner_id: int, with_pets: bool = False) -> Owner:
    queryset = queries.owner_with_pets(owner_id) if with_pets else Owner.objects.filter(pk=owner_id)
    owner = queryset.first()
    if owner is None:
        raise OwnerNotFound(f'Owner not found with id: {owner_id}')
    return owner


def not_found(request: HttpRequest, exception: Exception | None = None) -> JsonResponse:
    """Project wide 404 handler answering with a JSON error body.

    Missing owners and pets get a message naming the resource; anything
    else, unresolved URLs included, gets the generic message.
    """

    if isinstance(exception, OwnerNotFound):
        message = OWNER_NOT_FOUND_MESSAGE
    elif isinstance(exception, PetNotFound):
        message = PET_NOT_FOUND_MESSAGE
    else:
        message = GENERIC_NOT_FOUND_MESSAGE
    return JsonResponse({'error': message, 'status': 404}, status=404)


# ---------------------------------------------------------------------------
# Owners
# ---------------------------------------------------------------------------


@require_GET
def owner_list(request: HttpRequest) -> HttpResponse:
    """Search owners by last name prefix, telephone prefix and city.

    A single hit redirects to the owner, several hits answer one page of
    results and no hit answers 404 with a field error on ``lastName``.
    """

    form = OwnerSearchForm(
        {
            'last_name': request.GET.get('lastName', ''),
            'telephone': request.GET.get('telephone', ''),
            'city': request.GET.get('city', ''),
            'page': request.GET.get('page', ''),
        }
    )
    if not form.is_valid():
        return _form_errors(form)
    criteria = form.cleaned_data
    last_name = criteria['last_name'] or ''
    results = queries.search_owners(last_name, criteria['telephone'], criteria['city'])
    paginator = Paginator(results, settings.OWNER_SEARCH_PAGE_SIZE)
    if paginator.count == 0:
        return JsonResponse({'errors': {'lastName': ['not found']}}, status=404)
    if paginator.count == 1:
        return redirect('owner_detail', owner_id=results.first().pk)
    page = paginator.get_page(criteria['page'])
    return JsonResponse(
        {
            'lastName': last_name,
            'currentPage': page.number,
            'totalPages': paginator.num_pages,
            'totalItems': paginator.count,
            'owners': [_serialise_owner(owner) for owner in page.object_list],
        }
    )


@require_POST
def owner_create(request: HttpRequest) -> HttpResponse:
    """Create an owner unless an identical one already exists."""

    form = OwnerForm(request.POST)
    if not form.is_valid():
        return _form_errors(form)
    data = form.cleaned_data
    if queries.find_duplicate_owners(data['first_name'], data['last_name'], data['telephone']).exists():
        return JsonResponse(
            {'error': 'An owner with this information already exists'},
            status=409,
        )
    owner = form.save()
    logger.info("Created owner %s (%s %s)", owner.pk, owner.first_name, owner.last_name)
    return redirect('owner_detail', owner_id=owner.pk)


@require_GET
def owner_detail(request: HttpRequest, owner_id: int) -> HttpResponse:
    owner = _get_owner_or_404(owner_id, with_pets=True)
    payload = _serialise_owner(owner)
    payload['pets'] = [_serialise_pet(pet) for pet in owner.pets.all()]
    return JsonResponse(payload)


@require_POST
def owner_edit(request: HttpRequest, owner_id: int) -> HttpResponse:
    """Update an owner; a posted ``id`` must match the URL."""

    owner = _get_owner_or_404(owner_id)
    form = OwnerForm(request.POST, instance=owner)
    if not form.is_valid():
        return _form_errors(form)
    posted_id = request.POST.get('id')
    if posted_id not in (None, '') and posted_id != str(owner_id):
        return JsonResponse(
            {'errors': {'id': ['The owner ID in the form does not match the URL.']}},
            status=400,
        )
    owner = form.save()
    logger.info("Updated owner %s", owner.pk)
    return redirect('owner_detail', owner_id=owner.pk)


@require_GET
def owner_export_csv(request: HttpRequest) -> HttpResponse:
    """Download the owners matching ``lastName`` as a CSV file."""

    try:
        export = export_owners_csv(request.GET.get('lastName', ''))
    except OwnerExportError as exc:
        return JsonResponse({'error': str(exc)}, status=exc.status_code)
    response = HttpResponse(export.body, content_type=export.content_type)
    for header, value in export.headers.items():
        response[header] = value
    return response


# ---------------------------------------------------------------------------
# Pets and visits
# ---------------------------------------------------------------------------


@require_POST
def pet_create(request: HttpRequest, owner_id: int) -> HttpResponse:
    owner = _get_owner_or_404(owner_id)
    form = PetForm(request.POST, owner=owner)
    if not form.is_valid():
        return _form_errors(form)
    pet = form.save(commit=False)
    pet.owner = owner
    pet.save()
    logger.info("Added pet %s to owner %s", pet.pk, owner.pk)
    return redirect('owner_detail', owner_id=owner.pk)


@require_POST
def visit_create(request: HttpRequest, owner_id: int, pet_id: int) -> HttpResponse:
    owner = _get_owner_or_404(owner_id)
    pet = Pet.objects.filter(pk=pet_id, owner=owner).first()
    if pet is None:
        raise PetNotFound(f'Pet not found with id: {pet_id}')
    form = VisitForm(request.POST)
    if not form.is_valid():
        return _form_errors(form)
    visit = form.save(commit=False)
    visit.pet = pet
    visit.save()
    logger.info("Booked visit %s for pet %s on %s", visit.pk, pet.pk, visit.date)
    return redirect('owner_detail', owner_id=owner.pk)


@require_GET
def upcoming_visits(request: HttpRequest) -> HttpResponse:
    """Visits from ``fromDate`` (default today) onwards, earliest first."""

    form = UpcomingVisitsFilterForm(
        {
            'from_date': request.GET.get('fromDate', ''),
            'to_date': request.GET.get('toDate', ''),
            'pet_type': request.GET.get('petType', ''),
            'owner_last_name': request.GET.get('ownerLastName', ''),
        }
    )
    if not form.is_valid():
        return _form_errors(form)
    filters = form.cleaned_data
    if form.has_filters:
        visits = queries.upcoming_visits(
            filters['from_date'],
            filters['to_date'],
            filters['pet_type'],
            filters['owner_last_name'],
        )
    else:
        visits = queries.visits_from(filters['from_date'])

    rows: List[Dict[str, Any]] = []
    for visit in visits:
        row = _serialise_visit(visit)
        row['pet'] = {'id': visit.pet.pk, 'name': visit.pet.name, 'type': visit.pet.type.name}
        row['owner'] = _serialise_owner(visit.pet.owner)
        rows.append(row)
    return JsonResponse(
        {
            'visits': rows,
            'petTypes': [pet_type.name for pet_type in queries.list_pet_types()],
        }
    )


# ---------------------------------------------------------------------------
# Vets
# ---------------------------------------------------------------------------


@require_GET
def vet_list(request: HttpRequest) -> HttpResponse:
    vets = queries.list_vets()
    return JsonResponse({'vets': [_serialise_vet(vet) for vet in vets]})
