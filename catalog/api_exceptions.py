# Путь: backend/catalog/api_exceptions.py
# Назначение: DRF exception handler - приводит ошибки API к конверту {"status": "error", "message": ...}
# (404 по id/slug, 405 на запись в read-only ресурс, 400 на неверный параметр диапазона).
# Ошибки сервиса slug сюда не доходят: API только читает, запись идёт через админку и команды.
# Подключение: REST_FRAMEWORK["EXCEPTION_HANDLER"] = "catalog.api_exceptions.catalog_exception_handler"

from rest_framework.views import exception_handler


def _message(detail) -> str:
    if isinstance(detail, dict):
        parts = []
        for key, value in detail.items():
            parts.append(f"{key}: {_message(value)}")
        return "; ".join(parts)
    if isinstance(detail, (list, tuple)):
        return " ".join(_message(v) for v in detail)
    return str(detail)


def catalog_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        return None
    data = response.data
    if isinstance(data, dict) and "detail" in data:
        data = data["detail"]
    response.data = {"status": "error", "message": _message(data)}
    return response
