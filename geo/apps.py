# Путь: backend/geo/apps.py
# Назначение: Конфигурация приложения geo (страны, штаты, города, районы, локации).

from django.apps import AppConfig


class GeoConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "geo"
    verbose_name = "География"
