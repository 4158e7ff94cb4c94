"""Clinic application for PetClinic.

This package contains the models, queries, forms, views and supporting
services that power the veterinary clinic: owners and their pets, visit
booking, the vet roster and the owner CSV export.  Sample data is loaded
on demand through the ``seed_clinic`` management command so application
startup never touches the database.
"""
