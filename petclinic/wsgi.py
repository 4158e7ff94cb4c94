"""WSGI entry point for the PetClinic project.

It exposes the WSGI callable as a module-level variable named
``application`` for use by application servers such as gunicorn.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'petclinic.settings')

application = get_wsgi_application()
