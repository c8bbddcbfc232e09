# Путь: backend/geo/urls.py
# Назначение: Роутинг гео-справочника (префикс /api/ добавляется на уровне проекта).

from rest_framework.routers import DefaultRouter

from .views import AreaViewSet, CityViewSet, CountryViewSet, LocationViewSet, StateViewSet

app_name = "geo"

router = DefaultRouter()
router.register(r"countries", CountryViewSet, basename="country")
router.register(r"states", StateViewSet, basename="state")
router.register(r"cities", CityViewSet, basename="city")
router.register(r"areas", AreaViewSet, basename="area")
router.register(r"locations", LocationViewSet, basename="location")

urlpatterns = router.urls
