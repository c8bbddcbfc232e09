# Путь: backend/geo/admin.py
# Назначение: Админка гео-справочника. Slug и проверку имени берёт на себя SluggedModelAdmin.

from django.contrib import admin

from catalog.admin import SluggedModelAdmin

from .models import Area, City, Country, Location, State


@admin.register(Country)
class CountryAdmin(SluggedModelAdmin):
    list_display = ("name", "slug", "code", "updated_at")
    search_fields = ("name", "slug", "code")
    prepopulated_fields = {"slug": ("name",)}


@admin.register(State)
class StateAdmin(SluggedModelAdmin):
    list_display = ("name", "slug", "code", "country")
    list_filter = ("country",)
    list_select_related = ("country",)
    search_fields = ("name", "slug", "code")
    prepopulated_fields = {"slug": ("name",)}


@admin.register(City)
class CityAdmin(SluggedModelAdmin):
    list_display = ("name", "slug", "state", "country", "pincode")
    list_filter = ("country", "state")
    list_select_related = ("country", "state")
    search_fields = ("name", "slug", "pincode")
    autocomplete_fields = ("state",)
    prepopulated_fields = {"slug": ("name",)}


@admin.register(Area)
class AreaAdmin(SluggedModelAdmin):
    list_display = ("name", "slug", "city", "state", "pincode")
    list_filter = ("state",)
    list_select_related = ("city", "state")
    search_fields = ("name", "slug", "pincode")
    autocomplete_fields = ("city",)
    prepopulated_fields = {"slug": ("name",)}


@admin.register(Location)
class LocationAdmin(SluggedModelAdmin):
    list_display = ("name", "slug", "city", "state", "timezone", "language")
    list_filter = ("state", "language")
    list_select_related = ("city", "state")
    search_fields = ("name", "slug", "pincode")
    autocomplete_fields = ("city",)
    prepopulated_fields = {"slug": ("name",)}
