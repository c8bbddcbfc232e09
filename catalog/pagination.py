# Путь: backend/catalog/pagination.py
# Назначение: Пагинатор справочников каталога в формате, который ждёт фронт:
#   {"status": "success", "data": {"<ключ>": [...], "pagination": {...}}}
# Параметры: ?page=1&limit=10 (limit ≤ 100).

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class CatalogPagination(PageNumberPagination):
    page_size = 10
    page_size_query_param = "limit"
    max_page_size = 100

    def get_paginated_response(self, data):
        paginator = self.page.paginator
        page = self.page.number
        total_pages = paginator.num_pages if paginator.count else 0
        key = getattr(self, "envelope_key", "results")
        return Response({
            "status": "success",
            "data": {
                key: data,
                "pagination": {
                    "total": paginator.count,
                    "page": page,
                    "limit": paginator.per_page,
                    "totalPages": total_pages,
                    "hasNextPage": self.page.has_next(),
                    "hasPreviousPage": self.page.has_previous(),
                },
            },
        })
