# Путь: backend/catalog/urls.py
# Назначение: Роутинг каталога (префикс /api/ добавляется на уровне проекта).

from rest_framework.routers import SimpleRouter

from .views import ProductViewSet, SeoViewSet, TopicPageViewSet

app_name = "catalog"

router = SimpleRouter()
router.register(r"products", ProductViewSet, basename="product")
router.register(r"seo", SeoViewSet, basename="seo")
router.register(r"topics", TopicPageViewSet, basename="topic")

urlpatterns = router.urls
