"""Service helpers used by the clinic views."""
