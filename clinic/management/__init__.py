"""Management package for custom clinic admin commands.

``seed_clinic`` loads the sample clinic used for demos and manual testing.
"""
