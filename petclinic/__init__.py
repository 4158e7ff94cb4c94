"""Project package for the PetClinic Django site."""
