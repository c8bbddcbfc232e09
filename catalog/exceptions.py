# Путь: backend/catalog/exceptions.py
# Назначение: Ошибки сервиса slug. Ядро их только выбрасывает - в сообщения редактору их переводит админка (admin.py).
#   • DuplicateNameError  - имя уже занято в своей области
#   • SlugStorageError    - не достучались до БД при проверке/записи
#   • DuplicateKeyError   - запись упала на уникальном индексе (повторяем подбор slug)
#   • ExhaustedProbeError - перебор суффиксов упёрся в предел

from django.core.exceptions import ValidationError


class DuplicateNameError(ValidationError):
    def __init__(self, field: str, message: str):
        super().__init__({field: [message]}, code="duplicate_name")
        self.field = field
        self.message_text = message

    def __str__(self):
        return self.message_text


class SlugStorageError(Exception):
    """Сбой хранилища при проверке существования или при сохранении."""


class DuplicateKeyError(SlugStorageError):
    """Хранилище отклонило запись из-за нарушения уникальности."""


class ExhaustedProbeError(Exception):
    def __init__(self, base: str, attempts: int):
        super().__init__(f"Не удалось подобрать свободный slug для «{base}» за {attempts} попыток")
        self.base = base
        self.attempts = attempts
