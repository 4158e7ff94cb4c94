"""Django admin configuration for clinic models."""

from django.contrib import admin

from .models import Owner, Pet, PetType, Specialty, Vet, Visit


class PetInline(admin.TabularInline):
    """Allows editing an owner's pets on the owner page."""
    model = Pet
    extra = 0


class VisitInline(admin.TabularInline):
    model = Visit
    extra = 0


@admin.register(Owner)
class OwnerAdmin(admin.ModelAdmin):
    list_display = ('last_name', 'first_name', 'city', 'telephone')
    search_fields = ('last_name', 'first_name', 'telephone')
    inlines = (PetInline,)


@admin.register(Pet)
class PetAdmin(admin.ModelAdmin):
    list_display = ('name', 'type', 'owner', 'birth_date')
    list_select_related = ('type', 'owner')
    inlines = (VisitInline,)


@admin.register(Vet)
class VetAdmin(admin.ModelAdmin):
    list_display = ('last_name', 'first_name')
    filter_horizontal = ('specialties',)


admin.site.register(PetType)
admin.site.register(Specialty)
admin.site.register(Visit)
