"""Load the sample clinic into the local database.

Creates the classic set of vets, specialties, pet types, owners, pets and
visits.  The command refuses to touch a database that already has owners
unless ``--force`` is given, in which case the sample rows are added next
to the existing ones.
"""

from __future__ import annotations

from datetime import date

from django.core.management.base import BaseCommand, CommandError
from django.db import OperationalError, transaction

SPECIALTIES = ['radiology', 'surgery', 'dentistry']

VETS = [
    ('James', 'Carter', []),
    ('Helen', 'Leary', ['radiology']),
    ('Linda', 'Douglas', ['surgery', 'dentistry']),
    ('Rafael', 'Ortega', ['surgery']),
    ('Henry', 'Stevens', ['radiology']),
    ('Sharon', 'Jenkins', []),
]

PET_TYPES = ['cat', 'dog', 'lizard', 'snake', 'bird', 'hamster']

# (first, last, address, city, telephone, [(pet, birth date, type), ...])
OWNERS = [
    ('George', 'Franklin', '110 W. Liberty St.', 'Madison', '6085551023', [
        ('Leo', date(2010, 9, 7), 'cat'),
    ]),
    ('Betty', 'Davis', '638 Cardinal Ave.', 'Sun Prairie', '6085551749', [
        ('Basil', date(2012, 8, 6), 'hamster'),
    ]),
    ('Eduardo', 'Rodriquez', '2693 Commerce St.', 'McFarland', '6085558763', [
        ('Rosy', date(2011, 4, 17), 'dog'),
        ('Jewel', date(2010, 3, 7), 'dog'),
    ]),
    ('Harold', 'Davis', '563 Friendly St.', 'Windsor', '6085553198', [
        ('Iggy', date(2010, 11, 30), 'lizard'),
    ]),
    ('Peter', 'McTavish', '2387 S. Fair Way', 'Madison', '6085552765', [
        ('George', date(2010, 1, 20), 'snake'),
    ]),
    ('Jean', 'Coleman', '105 N. Lake St.', 'Monona', '6085552654', [
        ('Samantha', date(2012, 9, 4), 'cat'),
        ('Max', date(2012, 9, 4), 'cat'),
    ]),
    ('Jeff', 'Black', '1450 Oak Blvd.', 'Monona', '6085555387', [
        ('Lucky', date(2011, 8, 6), 'bird'),
    ]),
    ('Maria', 'Escobito', '345 Maple St.', 'Madison', '6085557683', [
        ('Mulligan', date(2007, 2, 24), 'dog'),
    ]),
    ('David', 'Schroeder', '2749 Blackhawk Trail', 'Madison', '6085559435', [
        ('Freddy', date(2010, 3, 9), 'bird'),
    ]),
    ('Carlos', 'Estaban', '2335 Independence La.', 'Waunakee', '6085555487', [
        ('Lucky', date(2010, 6, 24), 'dog'),
        ('Sly', date(2012, 6, 8), 'cat'),
    ]),
]

# (owner last name, pet name, date, description)
VISITS = [
    ('Coleman', 'Samantha', date(2013, 1, 1), 'rabies shot'),
    ('Coleman', 'Max', date(2013, 1, 2), 'rabies shot'),
    ('Coleman', 'Max', date(2013, 1, 3), 'neutered'),
    ('Coleman', 'Samantha', date(2013, 1, 4), 'spayed'),
]


class Command(BaseCommand):
    help = "Load the sample clinic (vets, owners, pets and visits)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--force",
            action="store_true",
            help="Load the sample rows even if owners already exist.",
        )

    def handle(self, *args, **options):
        from clinic.models import Owner

        try:
            if Owner.objects.exists() and not options["force"]:
                self.stdout.write(
                    self.style.WARNING(
                        "Clinic already contains owners; use --force to load the sample anyway."
                    )
                )
                return
        except OperationalError as exc:
            raise CommandError(
                "Database is not ready; ensure migrations have been applied before seeding."
            ) from exc

        self.stdout.write(self.style.NOTICE("Loading sample clinic..."))
        with transaction.atomic():
            owner_count = self._load()
        self.stdout.write(self.style.SUCCESS(f"Sample clinic loaded ({owner_count} owners)."))

    def _load(self) -> int:
        from clinic.models import Owner, Pet, PetType, Specialty, Vet, Visit

        specialties = {
            name: Specialty.objects.get_or_create(name=name)[0] for name in SPECIALTIES
        }
        for first_name, last_name, vet_specialties in VETS:
            vet, _ = Vet.objects.get_or_create(first_name=first_name, last_name=last_name)
            vet.specialties.set([specialties[name] for name in vet_specialties])

        pet_types = {name: PetType.objects.get_or_create(name=name)[0] for name in PET_TYPES}

        pets = {}
        for first_name, last_name, address, city, telephone, owner_pets in OWNERS:
            owner = Owner.objects.create(
                first_name=first_name,
                last_name=last_name,
                address=address,
                city=city,
                telephone=telephone,
            )
            for pet_name, birth_date, type_name in owner_pets:
                pets[(last_name, pet_name)] = Pet.objects.create(
                    name=pet_name,
                    birth_date=birth_date,
                    type=pet_types[type_name],
                    owner=owner,
                )

        for last_name, pet_name, visit_date, description in VISITS:
            Visit.objects.create(pet=pets[(last_name, pet_name)], date=visit_date, description=description)
        return len(OWNERS)
