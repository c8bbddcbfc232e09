# Путь: backend/backend/urls.py
# Назначение: Корневой роутинг проекта каталога.
#   • /admin/       - админка (единственная точка записи справочников и товаров)
#   • /api/         - read-only API гео-справочника и каталога
#   • /ckeditor5/   - загрузка файлов из редактора CKEditor 5

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.http import JsonResponse
from django.urls import include, path


def health(request):
    return JsonResponse({"status": "ok"})


urlpatterns = [
    path("admin/", admin.site.urls),
    path("ckeditor5/", include("django_ckeditor_5.urls")),
    path("api/health/", health, name="health"),
    path("api/", include(("geo.urls", "geo"), namespace="geo")),
    path("api/", include(("catalog.urls", "catalog"), namespace="catalog")),
]

# Раздача медиа в DEV
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
