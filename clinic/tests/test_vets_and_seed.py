"""Tests for the vet roster and the ``seed_clinic`` management command."""

from __future__ import annotations

from io import StringIO

from django.core.management import call_command
from django.test import TestCase
from django.urls import reverse

from clinic.models import Owner, Pet, PetType, Specialty, Vet, Visit


class VetListViewTests(TestCase):
    def setUp(self) -> None:
        radiology = Specialty.objects.create(name='radiology')
        surgery = Specialty.objects.create(name='surgery')
        Vet.objects.create(first_name='James', last_name='Carter')
        douglas = Vet.objects.create(first_name='Linda', last_name='Douglas')
        douglas.specialties.set([surgery, radiology])

    def test_vets_are_listed_with_specialties(self) -> None:
        response = self.client.get(reverse('vet_list'))

        self.assertEqual(response.status_code, 200)
        vets = response.json()['vets']
        self.assertEqual([vet['lastName'] for vet in vets], ['Carter', 'Douglas'])
        self.assertEqual(vets[0]['specialties'], [])
        self.assertEqual(vets[1]['specialties'], ['radiology', 'surgery'])


class SeedClinicCommandTests(TestCase):
    """The sample clinic loads once and is protected against reloading."""

    def test_loads_sample_clinic(self) -> None:
        out = StringIO()
        call_command('seed_clinic', stdout=out)

        self.assertIn('Sample clinic loaded (10 owners).', out.getvalue())
        self.assertEqual(Owner.objects.count(), 10)
        self.assertEqual(Vet.objects.count(), 6)
        self.assertEqual(PetType.objects.count(), 6)
        self.assertEqual(Pet.objects.count(), 13)
        self.assertEqual(Visit.objects.count(), 4)
        self.assertEqual(
            sorted(Vet.objects.get(last_name='Douglas').specialties.values_list('name', flat=True)),
            ['dentistry', 'surgery'],
        )

    def test_refuses_to_reload_without_force(self) -> None:
        call_command('seed_clinic', stdout=StringIO())
        out = StringIO()

        call_command('seed_clinic', stdout=out)

        self.assertIn('use --force', out.getvalue())
        self.assertEqual(Owner.objects.count(), 10)

    def test_force_adds_owners_without_duplicating_reference_data(self) -> None:
        call_command('seed_clinic', stdout=StringIO())

        call_command('seed_clinic', '--force', stdout=StringIO())

        self.assertEqual(Owner.objects.count(), 20)
        self.assertEqual(Vet.objects.count(), 6)
        self.assertEqual(PetType.objects.count(), 6)

    def test_seeded_clinic_exports_davis_owners(self) -> None:
        call_command('seed_clinic', stdout=StringIO())

        response = self.client.get(reverse('owner_export_csv'), {'lastName': 'Davis'})

        body = response.content.decode('utf-8')
        self.assertIn('Betty,Davis', body)
        self.assertIn('Harold,Davis', body)
        self.assertNotIn('Franklin', body)
