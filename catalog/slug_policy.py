# Путь: backend/catalog/slug_policy.py
# Назначение: Таблица политик slug по моделям - где slug уникален (глобально или внутри родителя),
# откуда берётся имя, нужна ли проверка уникальности имени и какой префикс у запасного токена.
# Модели регистрируют свою политику сами (см. geo/models.py, catalog/models.py),
# а settings.SLUG_SCOPE_POLICIES может её переопределить без правки кода.

from dataclasses import dataclass, replace
from typing import Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured


@dataclass(frozen=True)
class ScopePolicy:
    # FK-поля, образующие раздел уникальности slug; () - глобально
    scope: tuple = ()
    # Источник slug; допускается путь через FK: "product.name"
    name_field: str = "name"
    slug_field: str = "slug"
    # None - имя не проверяем; () - имя уникально глобально; ("city",) - внутри города
    name_scope: Optional[tuple] = None
    fallback_prefix: str = "item"
    max_attempts: Optional[int] = None
    duplicate_name_message: str = "Запись с таким названием уже существует"

    @property
    def source_field(self) -> str:
        """Поле самой модели, изменение которого означает «сменилось имя»."""
        return self.name_field.split(".", 1)[0]

    @property
    def checks_name(self) -> bool:
        return self.name_scope is not None and "." not in self.name_field

    def read_name(self, instance):
        value = instance
        for part in self.name_field.split("."):
            value = getattr(value, part, None)
            if value is None:
                return None
        return str(value)


_registry = {}


def _label(model) -> str:
    return f"{model._meta.app_label}.{model._meta.model_name}"


def register_policy(model, policy: ScopePolicy):
    _registry[_label(model)] = policy
    return model


def registered_models():
    from django.apps import apps

    return [apps.get_model(label) for label in sorted(_registry)]


def _as_tuple(value):
    if value is None:
        return None
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def get_policy(model) -> ScopePolicy:
    label = _label(model)
    policy = _registry.get(label)
    if policy is None:
        raise ImproperlyConfigured(f"Для модели {label} не зарегистрирована политика slug")

    overrides = dict(getattr(settings, "SLUG_SCOPE_POLICIES", {}).get(label, {}))
    if not overrides:
        return policy

    for key in ("scope", "name_scope"):
        if key in overrides:
            overrides[key] = _as_tuple(overrides[key])
    try:
        return replace(policy, **overrides)
    except TypeError as e:
        raise ImproperlyConfigured(f"SLUG_SCOPE_POLICIES[{label!r}]: {e}") from e
