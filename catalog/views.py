# Путь: backend/catalog/views.py
# Назначение: Read-only API каталога: товары, SEO товар×локация, опубликованные тематические страницы.
# Подбор тканей по характеристике с допуском ±15%:
#   GET /api/products/gsm/<значение>/   (а также oz, cm, inch)

import math

from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ParseError
from rest_framework.response import Response

from .models import Product, Seo, TopicPage
from .serializers import ProductSerializer, SeoSerializer, TopicPageSerializer
from .views_base import SlugLookupViewSet

RANGE_TOLERANCE = 0.15


class ProductViewSet(SlugLookupViewSet):
    queryset = Product.objects.all().order_by("-created_at", "-id")
    serializer_class = ProductSerializer
    envelope_item, envelope_list = "product", "products"
    search_fields = ("name", "slug", "sku", "product_title")
    not_found_message = "Товар не найден"

    def _in_range(self, field, raw_value):
        label = field.upper()
        try:
            value = float(raw_value)
        except (TypeError, ValueError):
            raise ParseError(f"Некорректное значение {label}")
        if not math.isfinite(value):
            raise ParseError(f"Некорректное значение {label}")

        low, high = sorted((value * (1 - RANGE_TOLERANCE), value * (1 + RANGE_TOLERANCE)))
        qs = self.get_queryset().filter(**{f"{field}__gte": low, f"{field}__lte": high})
        if not qs.exists():
            raise NotFound(f"Товары с {label} в диапазоне не найдены")
        serializer = self.get_serializer(qs, many=True)
        return Response({"status": 1, "data": serializer.data})

    @action(detail=False, methods=["get"], url_path=r"gsm/(?P<value>[^/]+)")
    def by_gsm(self, request, value=None):
        return self._in_range("gsm", value)

    @action(detail=False, methods=["get"], url_path=r"oz/(?P<value>[^/]+)")
    def by_oz(self, request, value=None):
        return self._in_range("oz", value)

    @action(detail=False, methods=["get"], url_path=r"cm/(?P<value>[^/]+)")
    def by_cm(self, request, value=None):
        return self._in_range("cm", value)

    @action(detail=False, methods=["get"], url_path=r"inch/(?P<value>[^/]+)")
    def by_inch(self, request, value=None):
        return self._in_range("inch", value)


class SeoViewSet(SlugLookupViewSet):
    queryset = Seo.objects.select_related("product", "location").order_by("-created_at", "-id")
    serializer_class = SeoSerializer
    envelope_item, envelope_list = "seo", "seo"
    parent_filters = ("product", "location")
    search_fields = ("slug", "keywords", "product__name")
    name_field = "product__name"
    not_found_message = "SEO-запись не найдена"


class TopicPageViewSet(SlugLookupViewSet):
    # черновики и архив наружу не отдаём
    queryset = TopicPage.objects.filter(status=TopicPage.Status.PUBLISHED).order_by("name")
    serializer_class = TopicPageSerializer
    envelope_item, envelope_list = "topic", "topics"
    not_found_message = "Страница не найдена"
