# Путь: backend/catalog/views_base.py
# Назначение: Базовый read-only ViewSet для справочников со slug (гео и каталог).
# Что умеет:
#   ✅ GET /<ресурс>/                 - список с пагинацией (?page, ?limit), фильтрами по родителю и ?search
#   ✅ GET /<ресурс>/<id или slug>/   - деталь по числовому id ИЛИ по slug
#   ✅ GET /<ресурс>/slug/<slug>/     - строго по slug
#   ✅ GET /<ресурс>/search/<q>/      - поиск по названию без пагинации
# Slug городов/районов уникален только внутри родителя - уточняйте ?state= / ?city=.

from django.db.models import Q
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.viewsets import ReadOnlyModelViewSet

from .pagination import CatalogPagination


class SlugLookupViewSet(ReadOnlyModelViewSet):
    pagination_class = CatalogPagination
    lookup_field = "pk"
    lookup_url_kwarg = "id_or_slug"
    lookup_value_regex = r"[-\w]+"

    # переопределяются в наследниках
    envelope_item = "item"
    envelope_list = "items"
    parent_filters = ()
    search_fields = ("name", "slug")
    name_field = "name"
    not_found_message = "Запись не найдена"

    def filter_queryset(self, queryset):
        params = self.request.query_params
        for field in self.parent_filters:
            value = params.get(field)
            if value:
                queryset = queryset.filter(**{f"{field}_id": value})

        search = (params.get("search") or "").strip()
        if search:
            cond = Q()
            for field in self.search_fields:
                cond |= Q(**{f"{field}__icontains": search})
            queryset = queryset.filter(cond)
        return queryset

    def paginate_queryset(self, queryset):
        if self.paginator is not None:
            self.paginator.envelope_key = self.envelope_list
        return super().paginate_queryset(queryset)

    def get_object(self):
        value = self.kwargs[self.lookup_url_kwarg]
        qs = self.filter_queryset(self.get_queryset())
        cond = Q(slug=value)
        if value.isdigit():
            cond |= Q(pk=int(value))
        obj = qs.filter(cond).order_by("pk").first()
        if obj is None:
            raise NotFound(self.not_found_message)
        self.check_object_permissions(self.request, obj)
        return obj

    def _detail_response(self, obj):
        serializer = self.get_serializer(obj)
        return Response({"status": "success", "data": {self.envelope_item: serializer.data}})

    def retrieve(self, request, *args, **kwargs):
        return self._detail_response(self.get_object())

    @action(detail=False, methods=["get"], url_path=r"slug/(?P<slug>[-\w]+)")
    def by_slug(self, request, slug=None):
        obj = self.filter_queryset(self.get_queryset()).filter(slug=slug).order_by("pk").first()
        if obj is None:
            raise NotFound(self.not_found_message)
        return self._detail_response(obj)

    @action(detail=False, methods=["get"], url_path=r"search/(?P<q>[^/]+)")
    def search(self, request, q=None):
        qs = self.get_queryset().filter(**{f"{self.name_field}__icontains": q or ""})
        serializer = self.get_serializer(qs, many=True)
        return Response({"status": 1, "data": serializer.data})
