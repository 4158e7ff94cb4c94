"""Tests for pet registration, visit booking and the upcoming visits listing."""

from __future__ import annotations

from datetime import date, timedelta

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from clinic.forms import VisitForm
from clinic.models import Owner, Pet, PetType, Visit


class PetCreateViewTests(TestCase):
    def setUp(self) -> None:
        self.owner = Owner.objects.create(
            first_name='Jean', last_name='Coleman', address='105 N. Lake St.',
            city='Monona', telephone='6085552654',
        )
        self.cat = PetType.objects.create(name='cat')

    def test_pet_is_added_to_owner(self) -> None:
        response = self.client.post(
            reverse('pet_create', args=[self.owner.pk]),
            {'name': 'Samantha', 'birth_date': '2012-09-04', 'type': 'cat'},
        )

        self.assertRedirects(
            response,
            reverse('owner_detail', args=[self.owner.pk]),
            fetch_redirect_response=False,
        )
        pet = Pet.objects.get()
        self.assertEqual(pet.owner, self.owner)
        self.assertEqual(pet.type, self.cat)

    def test_duplicate_pet_name_is_rejected(self) -> None:
        Pet.objects.create(name='Max', type=self.cat, owner=self.owner)

        response = self.client.post(
            reverse('pet_create', args=[self.owner.pk]),
            {'name': 'max', 'type': 'cat'},
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn('name', response.json()['errors'])

    def test_future_birth_date_and_unknown_type_are_rejected(self) -> None:
        tomorrow = timezone.localdate() + timedelta(days=1)

        response = self.client.post(
            reverse('pet_create', args=[self.owner.pk]),
            {'name': 'Leo', 'birth_date': tomorrow.isoformat(), 'type': 'dragon'},
        )

        self.assertEqual(response.status_code, 400)
        errors = response.json()['errors']
        self.assertIn('birth_date', errors)
        self.assertIn('type', errors)
        self.assertFalse(Pet.objects.exists())


class VisitFormTests(TestCase):
    """Visits may be booked for today or later, never in the past."""

    def test_past_date_is_rejected(self) -> None:
        yesterday = timezone.localdate() - timedelta(days=1)
        form = VisitForm({'date': yesterday.isoformat(), 'description': 'check up'})

        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['date'], ['Visit date cannot be in the past'])

    def test_today_and_future_dates_are_accepted(self) -> None:
        today = timezone.localdate()
        for visit_date in (today, today + timedelta(days=30)):
            form = VisitForm({'date': visit_date.isoformat(), 'description': 'check up'})
            self.assertTrue(form.is_valid(), form.errors)

    def test_missing_date_defaults_to_today(self) -> None:
        form = VisitForm({'description': 'check up'})

        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['date'], timezone.localdate())


class VisitCreateViewTests(TestCase):
    def setUp(self) -> None:
        self.owner = Owner.objects.create(
            first_name='Jean', last_name='Coleman', address='105 N. Lake St.',
            city='Monona', telephone='6085552654',
        )
        self.pet = Pet.objects.create(name='Max', type=PetType.objects.create(name='cat'), owner=self.owner)

    def test_visit_is_booked(self) -> None:
        visit_date = timezone.localdate() + timedelta(days=3)

        response = self.client.post(
            reverse('visit_create', args=[self.owner.pk, self.pet.pk]),
            {'date': visit_date.isoformat(), 'description': 'rabies shot'},
        )

        self.assertEqual(response.status_code, 302)
        visit = Visit.objects.get()
        self.assertEqual(visit.pet, self.pet)
        self.assertEqual(visit.date, visit_date)

    def test_past_visit_is_rejected(self) -> None:
        response = self.client.post(
            reverse('visit_create', args=[self.owner.pk, self.pet.pk]),
            {'date': '2013-01-01', 'description': 'rabies shot'},
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn('date', response.json()['errors'])
        self.assertFalse(Visit.objects.exists())

    def test_pet_of_another_owner_answers_pet_404(self) -> None:
        other = Owner.objects.create(
            first_name='Jeff', last_name='Black', address='1450 Oak Blvd.',
            city='Monona', telephone='6085555387',
        )

        response = self.client.post(
            reverse('visit_create', args=[other.pk, self.pet.pk]),
            {'description': 'rabies shot'},
        )

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['error'], 'The requested pet could not be found.')


class UpcomingVisitsViewTests(TestCase):
    """Upcoming visits are listed in date order and respect every filter."""

    def setUp(self) -> None:
        self.today = timezone.localdate()
        cat = PetType.objects.create(name='cat')
        dog = PetType.objects.create(name='dog')
        coleman = Owner.objects.create(
            first_name='Jean', last_name='Coleman', address='105 N. Lake St.',
            city='Monona', telephone='6085552654',
        )
        franklin = Owner.objects.create(
            first_name='George', last_name='Franklin', address='110 W. Liberty St.',
            city='Madison', telephone='6085551023',
        )
        samantha = Pet.objects.create(name='Samantha', type=cat, owner=coleman)
        rosy = Pet.objects.create(name='Rosy', type=dog, owner=franklin)
        Visit.objects.create(pet=samantha, date=self.today - timedelta(days=2), description='past')
        Visit.objects.create(pet=rosy, date=self.today + timedelta(days=10), description='late')
        Visit.objects.create(pet=samantha, date=self.today, description='today')
        Visit.objects.create(pet=rosy, date=self.today + timedelta(days=1), description='soon')

    def _descriptions(self, params=None) -> list[str]:
        response = self.client.get(reverse('upcoming_visits'), params or {})
        self.assertEqual(response.status_code, 200)
        return [visit['description'] for visit in response.json()['visits']]

    def test_defaults_to_today_onwards_in_date_order(self) -> None:
        self.assertEqual(self._descriptions(), ['today', 'soon', 'late'])

    def test_explicit_from_date_includes_older_visits(self) -> None:
        from_date = (self.today - timedelta(days=5)).isoformat()

        self.assertEqual(self._descriptions({'fromDate': from_date}), ['past', 'today', 'soon', 'late'])

    def test_to_date_is_inclusive(self) -> None:
        to_date = (self.today + timedelta(days=1)).isoformat()

        self.assertEqual(self._descriptions({'toDate': to_date}), ['today', 'soon'])

    def test_pet_type_matches_ignoring_case(self) -> None:
        self.assertEqual(self._descriptions({'petType': 'DOG'}), ['soon', 'late'])

    def test_owner_last_name_is_a_substring_match(self) -> None:
        self.assertEqual(self._descriptions({'ownerLastName': 'olem'}), ['today'])

    def test_all_filters_combine(self) -> None:
        params = {
            'fromDate': self.today.isoformat(),
            'toDate': (self.today + timedelta(days=5)).isoformat(),
            'petType': 'dog',
            'ownerLastName': 'frank',
        }

        self.assertEqual(self._descriptions(params), ['soon'])

    def test_payload_lists_pet_types_and_owner(self) -> None:
        payload = self.client.get(reverse('upcoming_visits')).json()

        self.assertEqual(payload['petTypes'], ['cat', 'dog'])
        first = payload['visits'][0]
        self.assertEqual(first['pet']['name'], 'Samantha')
        self.assertEqual(first['owner']['lastName'], 'Coleman')

    def test_invalid_date_is_rejected(self) -> None:
        response = self.client.get(reverse('upcoming_visits'), {'fromDate': 'not-a-date'})

        self.assertEqual(response.status_code, 400)
        self.assertIn('from_date', response.json()['errors'])
