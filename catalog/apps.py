# Путь: backend/catalog/apps.py
# Назначение: Конфигурация приложения catalog (товары, SEO, тематические страницы + сервис slug).

from django.apps import AppConfig


class CatalogConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "catalog"
    verbose_name = "Каталог"
