"""Root URL configuration for the PetClinic project.

The clinic application owns every user facing route; the Django admin is
mounted under ``/admin/``.  Missing pages are answered by the clinic's JSON
``not_found`` handler.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', include('clinic.urls')),
]

handler404 = 'clinic.views.not_found'
