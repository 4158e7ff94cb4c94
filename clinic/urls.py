"""URL declarations for the clinic application.

Owner routes mirror the classic clinic layout (``/owners/...``); the CSV
export sits beside them at ``/owners.csv``.
"""

from django.urls import path

from . import views

urlpatterns = [
    # Owners
    path('owners/', views.owner_list, name='owner_list'),
    path('owners.csv', views.owner_export_csv, name='owner_export_csv'),
    path('owners/new/', views.owner_create, name='owner_create'),
    path('owners/<int:owner_id>/', views.owner_detail, name='owner_detail'),
    path('owners/<int:owner_id>/edit/', views.owner_edit, name='owner_edit'),
    # Pets and visits
    path('owners/<int:owner_id>/pets/new/', views.pet_create, name='pet_create'),
    path(
        'owners/<int:owner_id>/pets/<int:pet_id>/visits/new/',
        views.visit_create,
        name='visit_create',
    ),
    path('visits/upcoming/', views.upcoming_visits, name='upcoming_visits'),
    # Vets
    path('vets/', views.vet_list, name='vet_list'),
]
