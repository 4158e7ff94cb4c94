"""Data models for the PetClinic application.

The schema is the classic clinic layout: an ``Owner`` has any number of
``Pet`` rows, each pet belongs to a ``PetType`` and accumulates ``Visit``
rows over time.  Vets are independent of owners and carry a set of
``Specialty`` labels.
"""

from __future__ import annotations

from django.core.validators import RegexValidator
from django.db import models
from django.utils import timezone

telephone_validator = RegexValidator(
    regex=r'^\d{10}$',
    message='Telephone must be a 10 digit number.',
)


class Owner(models.Model):
    """A client of the clinic who owns one or more pets."""

    first_name = models.CharField(max_length=30)
    last_name = models.CharField(max_length=30, db_index=True)
    address = models.CharField(max_length=255)
    city = models.CharField(max_length=80)
    telephone = models.CharField(max_length=20, validators=[telephone_validator])

    class Meta:
        ordering = ['pk']

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.first_name} {self.last_name}".strip()

    def get_pet(self, name: str, ignore_new: bool = False) -> 'Pet | None':
        """Return the owner's pet called ``name`` (case-insensitive), if any.

        Unsaved pets are skipped when ``ignore_new`` is set; that is the
        behaviour the pet form relies on when checking for duplicates.
        """

        wanted = (name or '').strip().casefold()
        for pet in self.pets.all():
            if ignore_new and pet.pk is None:
                continue
            if pet.name.strip().casefold() == wanted:
                return pet
        return None


class PetType(models.Model):
    """Species label such as cat, dog or hamster."""

    name = models.CharField(max_length=80, unique=True)

    class Meta:
        ordering = ['name']

    def __str__(self) -> str:  # pragma: no cover
        return self.name


class Pet(models.Model):
    """An animal registered with the clinic."""

    name = models.CharField(max_length=30)
    birth_date = models.DateField(blank=True, null=True)
    type = models.ForeignKey(PetType, on_delete=models.PROTECT, related_name='pets')
    owner = models.ForeignKey(Owner, on_delete=models.CASCADE, related_name='pets')

    class Meta:
        ordering = ['name']

    def __str__(self) -> str:  # pragma: no cover
        return self.name


class Visit(models.Model):
    """A booked or past appointment for a pet."""

    date = models.DateField(default=timezone.localdate)
    description = models.CharField(max_length=255)
    pet = models.ForeignKey(Pet, on_delete=models.CASCADE, related_name='visits')

    class Meta:
        ordering = ['date', 'pk']

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.date:%Y-%m-%d} - {self.pet}: {self.description}"


class Specialty(models.Model):
    """A vet specialty such as radiology or surgery."""

    name = models.CharField(max_length=80, unique=True)

    class Meta:
        ordering = ['name']
        verbose_name_plural = 'specialties'

    def __str__(self) -> str:  # pragma: no cover
        return self.name


class Vet(models.Model):
    """A veterinarian working at the clinic."""

    first_name = models.CharField(max_length=30)
    last_name = models.CharField(max_length=30)
    specialties = models.ManyToManyField(Specialty, blank=True, related_name='vets')

    class Meta:
        ordering = ['last_name', 'first_name']

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.first_name} {self.last_name}".strip()
