# Путь: backend/catalog/slug_service.py
# Назначение: Единый сервис присвоения slug перед сохранением (вместо копий save()/pre_save в каждой модели).
#   • assign_slug()     - проверка имени, нормализация, подбор свободного варианта в области, запись в поле slug
#   • save_with_slug()  - assign_slug + запись в БД; при дубликате на уникальном индексе - повторный подбор
#   • DjangoSlugStore   - все обращения к БД (проверки существования и сама запись)
# Вызывается явно: админка, management-команды и любой код, создающий/меняющий сущности.

import logging

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction

from .exceptions import DuplicateKeyError, DuplicateNameError, SlugStorageError
from .slug_policy import ScopePolicy, get_policy
from .slug_utils import fallback_slug, make_unique, normalize_slug

logger = logging.getLogger(__name__)


def _attname(model, field_name: str) -> str:
    return model._meta.get_field(field_name).attname


def _is_unique_violation(error) -> bool:
    """23505 у PostgreSQL; SQLite кода не даёт, только текст «UNIQUE constraint failed»."""
    cause = error.__cause__
    code = getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)
    if code:
        return code == "23505"
    return "unique" in str(error).lower()


def scope_values(instance, fields) -> dict:
    """{"state_id": 7} - значения полей области у инстанса (по attname, без лишних запросов)."""
    model = type(instance)
    values = {}
    for f in fields or ():
        attname = _attname(model, f)
        values[attname] = getattr(instance, attname)
    return values


def scope_values_from_data(model, fields, data) -> dict:
    """То же, но из cleaned_data формы (там лежат объекты, а не id)."""
    values = {}
    for f in fields or ():
        value = data.get(f)
        values[_attname(model, f)] = getattr(value, "pk", value)
    return values


class DjangoSlugStore:
    def __init__(self, model, policy: ScopePolicy):
        self.model = model
        self.policy = policy

    def _scoped(self, scope: dict, exclude_pk):
        qs = self.model._default_manager.filter(**scope)
        if exclude_pk is not None:
            qs = qs.exclude(pk=exclude_pk)
        return qs

    def slug_exists(self, scope: dict, candidate: str, exclude_pk=None) -> bool:
        try:
            return self._scoped(scope, exclude_pk).filter(**{self.policy.slug_field: candidate}).exists()
        except DatabaseError as e:
            raise SlugStorageError(f"Проверка slug «{candidate}» не удалась: {e}") from e

    def name_exists(self, scope: dict, name: str, exclude_pk=None) -> bool:
        try:
            lookup = {f"{self.policy.name_field}__iexact": name}
            return self._scoped(scope, exclude_pk).filter(**lookup).exists()
        except DatabaseError as e:
            raise SlugStorageError(f"Проверка имени «{name}» не удалась: {e}") from e

    def stored_values(self, pk, fields):
        try:
            return self.model._default_manager.filter(pk=pk).values(*fields).first()
        except DatabaseError as e:
            raise SlugStorageError(f"Не удалось прочитать запись pk={pk}: {e}") from e

    def persist(self, instance):
        try:
            with transaction.atomic(using=instance._state.db or None):
                instance.save()
        except IntegrityError as e:
            if _is_unique_violation(e):
                raise DuplicateKeyError(str(e)) from e
            raise SlugStorageError(f"Не удалось сохранить {self.model._meta.label}: {e}") from e
        except DatabaseError as e:
            raise SlugStorageError(f"Не удалось сохранить {self.model._meta.label}: {e}") from e
        return instance


def ensure_name_available(model, name, scope: dict, exclude_pk=None, policy=None, store=None):
    policy = policy or get_policy(model)
    store = store or DjangoSlugStore(model, policy)
    if name and store.name_exists(scope, name, exclude_pk):
        raise DuplicateNameError(policy.name_field, policy.duplicate_name_message)


def assign_slug(instance, policy=None, store=None, regenerate=False) -> str:
    """
    Присваивает slug инстансу перед сохранением и возвращает его.

    • создание - slug всегда вычисляется;
    • изменение - только если сменилось имя, передан новый slug или родитель (область);
    • regenerate=True - вывести slug заново из имени, не глядя на текущий (fix_slugs, действие админки).

    Сначала проверяется уникальность имени в своей области (DuplicateNameError),
    затем slug нормализуется и подбирается свободный вариант base, base-1, base-2, ...
    Меняется только поле slug.
    """
    model = type(instance)
    policy = policy or get_policy(model)
    store = store or DjangoSlugStore(model, policy)

    slug_field = policy.slug_field
    source_attname = _attname(model, policy.source_field)
    scope_attnames = [_attname(model, f) for f in policy.scope]
    name_scope_attnames = [_attname(model, f) for f in (policy.name_scope or ())]

    current_slug = (getattr(instance, slug_field, None) or "").strip()
    name = policy.read_name(instance)
    if name is not None and not name.strip():
        name = None

    exclude_pk = None if instance._state.adding else instance.pk
    stored = None
    if exclude_pk is not None:
        tracked = list(dict.fromkeys([slug_field, source_attname] + scope_attnames + name_scope_attnames))
        stored = store.stored_values(exclude_pk, tracked)

    if stored is None:
        stored_slug = ""
        name_changed = True
        name_scope_changed = False
        scope_changed = False
        slug_supplied = bool(current_slug)
    else:
        stored_slug = stored[slug_field] or ""
        name_changed = stored[source_attname] != getattr(instance, source_attname)
        name_scope_changed = any(stored[a] != getattr(instance, a) for a in name_scope_attnames)
        scope_changed = any(stored[a] != getattr(instance, a) for a in scope_attnames)
        slug_supplied = bool(current_slug) and current_slug != stored_slug

        if stored_slug and not (name_changed or slug_supplied or scope_changed or regenerate):
            # ни имя, ни slug, ни родитель не менялись - slug остаётся прежним
            setattr(instance, slug_field, stored_slug)
            return stored_slug

    if (name_changed or name_scope_changed) and policy.checks_name and name:
        ensure_name_available(
            model, name, scope_values(instance, policy.name_scope), exclude_pk, policy=policy, store=store
        )

    if regenerate:
        # без имени пересобирать не из чего: приводим к норме текущий slug
        slug_supplied = name is None and bool(current_slug)
    elif scope_changed and not slug_supplied and not name_changed:
        # запись переехала к другому родителю: прежний slug перепроверяем в новой области
        current_slug = stored_slug
        slug_supplied = bool(stored_slug)

    slug_scope = scope_values(instance, policy.scope)
    max_attempts = policy.max_attempts or settings.SLUG_MAX_PROBE_ATTEMPTS
    max_length = model._meta.get_field(slug_field).max_length

    def taken(candidate):
        return store.slug_exists(slug_scope, candidate, exclude_pk)

    base = ""
    resolved = None
    if slug_supplied:
        base = normalize_slug(current_slug)
        if base:
            resolved = make_unique(base, taken, max_attempts, max_length)

    if resolved is None and name:
        base = normalize_slug(name)
        if base:
            resolved = make_unique(base, taken, max_attempts, max_length)
        elif regenerate and stored_slug.startswith(f"{policy.fallback_prefix}-"):
            # имя по-прежнему не даёт slug: запасной токен не перевыпускаем
            resolved = stored_slug
        else:
            resolved = fallback_slug(policy.fallback_prefix)

    if resolved is None:
        resolved = stored_slug or fallback_slug(policy.fallback_prefix)

    if base and resolved != base[:max_length].rstrip("-"):
        logger.info("slug «%s» занят в %s, назначен «%s»", base, model._meta.label, resolved)

    setattr(instance, slug_field, resolved)
    return resolved


def save_with_slug(instance, policy=None, store=None, retries=None, regenerate=False):
    """
    assign_slug + запись. Проверка «занят ли slug» и запись не атомарны между запросами,
    поэтому окончательно уникальность держит индекс БД: на дубликате ключа slug подбирается
    заново (занятый вариант уже виден) - не больше SLUG_PERSIST_RETRIES раз.
    """
    model = type(instance)
    policy = policy or get_policy(model)
    store = store or DjangoSlugStore(model, policy)
    if retries is None:
        retries = settings.SLUG_PERSIST_RETRIES

    attempt = 0
    while True:
        assign_slug(instance, policy=policy, store=store, regenerate=regenerate and attempt == 0)
        try:
            return store.persist(instance)
        except DuplicateKeyError:
            if attempt >= retries:
                logger.error(
                    "Дубликат ключа при сохранении %s (slug=%s), попытки исчерпаны",
                    model._meta.label, getattr(instance, policy.slug_field),
                )
                raise
            attempt += 1
            logger.warning(
                "Дубликат ключа при сохранении %s (slug=%s), повторный подбор %s/%s",
                model._meta.label, getattr(instance, policy.slug_field), attempt, retries,
            )
