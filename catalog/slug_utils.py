# Путь: backend/catalog/slug_utils.py
# Назначение: Чистые функции для slug - нормализация, проверка формата, запасной токен и подбор свободного варианта.
# Правила нормализации зафиксированы: фронт и старые ссылки опираются на побайтово тот же результат.

import re

from django.utils.crypto import get_random_string

from .exceptions import ExhaustedProbeError

_DROP_RE = re.compile(r"[^a-z0-9\s-]")
_SPACES_RE = re.compile(r"\s+")
_DASHES_RE = re.compile(r"-+")
_VALID_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")

FALLBACK_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"
FALLBACK_LENGTH = 9
DEFAULT_MAX_ATTEMPTS = 1000


def normalize_slug(text) -> str:
    """
    Примеры:
      'Pure Silk!!'          -> 'pure-silk'
      '  --Two--Words--  '   -> 'two-words'
      '!!!'                  -> ''   (пусто = нужен запасной токен)
    Символы вне [a-z0-9] не транслитерируются, а выбрасываются.
    """
    if text is None:
        return ""
    value = str(text).lower()
    value = _DROP_RE.sub("", value)
    value = _SPACES_RE.sub("-", value)
    value = _DASHES_RE.sub("-", value)
    return value.lstrip("-").rstrip("-")


def is_valid_slug(value) -> bool:
    return bool(value) and bool(_VALID_RE.match(value))


def fallback_slug(prefix: str) -> str:
    """'product' -> 'product-k3x9q0m2a'"""
    return f"{prefix}-{get_random_string(FALLBACK_LENGTH, allowed_chars=FALLBACK_ALPHABET)}"


def _fit(stem: str, suffix: str, max_length) -> str:
    if max_length is None:
        return stem + suffix
    return stem[: max_length - len(suffix)].rstrip("-") + suffix


def make_unique(base_slug: str, exists, max_attempts: int = DEFAULT_MAX_ATTEMPTS, max_length=None) -> str:
    """
    Обеспечивает уникальность: base, base-1, base-2, ...
    max_length - длина колонки slug: основа подрезается так, чтобы base-N в неё влезал.
    exists(slug)->bool: «занят ли такой slug» (область и исключаемый id уже учтены вызывающим).
    Ошибки exists не глотаются - при сбое БД считать slug свободным нельзя.
    """
    if not base_slug:
        raise ValueError("make_unique() требует непустой base_slug")

    base_slug = _fit(base_slug, "", max_length)
    if not exists(base_slug):
        return base_slug

    for n in range(1, max_attempts + 1):
        candidate = _fit(base_slug, f"-{n}", max_length)
        if not exists(candidate):
            return candidate

    raise ExhaustedProbeError(base_slug, max_attempts)
