# Путь: backend/geo/views.py
# Назначение: Read-only API гео-справочника (страны, штаты, города, районы, локации).
# Детальная по id или slug, список с фильтрами по родителю: ?country= / ?state= / ?city=

from catalog.views_base import SlugLookupViewSet

from .models import Area, City, Country, Location, State
from .serializers import AreaSerializer, CitySerializer, CountrySerializer, LocationSerializer, StateSerializer


class CountryViewSet(SlugLookupViewSet):
    queryset = Country.objects.all().order_by("name")
    serializer_class = CountrySerializer
    envelope_item, envelope_list = "country", "countries"
    search_fields = ("name", "slug", "code")
    not_found_message = "Страна не найдена"


class StateViewSet(SlugLookupViewSet):
    queryset = State.objects.select_related("country").order_by("name")
    serializer_class = StateSerializer
    envelope_item, envelope_list = "state", "states"
    parent_filters = ("country",)
    search_fields = ("name", "slug", "code")
    not_found_message = "Штат не найден"


class CityViewSet(SlugLookupViewSet):
    queryset = City.objects.select_related("country", "state").order_by("name")
    serializer_class = CitySerializer
    envelope_item, envelope_list = "city", "cities"
    parent_filters = ("country", "state")
    not_found_message = "Город не найден"


class AreaViewSet(SlugLookupViewSet):
    queryset = Area.objects.select_related("country", "state", "city").order_by("name")
    serializer_class = AreaSerializer
    envelope_item, envelope_list = "area", "areas"
    parent_filters = ("country", "state", "city")
    search_fields = ("name", "slug", "pincode")
    not_found_message = "Район не найден"


class LocationViewSet(SlugLookupViewSet):
    queryset = Location.objects.select_related("country", "state", "city").order_by("name")
    serializer_class = LocationSerializer
    envelope_item, envelope_list = "location", "locations"
    parent_filters = ("country", "state", "city")
    search_fields = ("name", "slug", "pincode")
    not_found_message = "Локация не найдена"
