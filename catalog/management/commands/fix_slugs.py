# Путь: backend/catalog/management/commands/fix_slugs.py
# Назначение: Пересобрать slug у модели с зарегистрированной политикой (app_label.ModelName)
# через тот же сервис, что и админка: нормализация, уникальность в области, суффиксы -1, -2, ...
# По умолчанию правим только пустые и невалидные slug.
#
# Пример запуска:
#   python manage.py fix_slugs --model geo.city --dry-run
#   python manage.py fix_slugs --model catalog.product --apply
#   --all   пересобрать все записи (не только подозрительные)

from django.apps import apps
from django.core.exceptions import ImproperlyConfigured
from django.core.management.base import BaseCommand, CommandError

from catalog.exceptions import DuplicateNameError, ExhaustedProbeError, SlugStorageError
from catalog.slug_policy import get_policy
from catalog.slug_service import DjangoSlugStore, assign_slug, save_with_slug, scope_values
from catalog.slug_utils import is_valid_slug


class PlannedSlugStore(DjangoSlugStore):
    """Для --dry-run: slug, уже выданные в плане, считаются занятыми (в БД их ещё нет)."""

    def __init__(self, model, policy):
        super().__init__(model, policy)
        self.planned = set()

    def _key(self, scope, slug):
        return tuple(sorted(scope.items())), slug

    def slug_exists(self, scope, candidate, exclude_pk=None):
        return self._key(scope, candidate) in self.planned or super().slug_exists(scope, candidate, exclude_pk)

    def plan(self, instance):
        self.planned.add(self._key(scope_values(instance, self.policy.scope), getattr(instance, self.policy.slug_field)))


class Command(BaseCommand):
    help = "Пересчитывает slug у указанной модели по её политике slug."

    def add_arguments(self, parser):
        parser.add_argument("--model", required=True, help="app_label.ModelName, например: geo.city")
        parser.add_argument("--dry-run", action="store_true", help="Показать план (без изменений)")
        parser.add_argument("--apply", action="store_true", help="Применить изменения")
        parser.add_argument("--all", dest="fix_all", action="store_true", help="Чинить все записи (не только пустые/невалидные)")

    def handle(self, *args, **opts):
        model_label = opts["model"]
        dry = opts["dry_run"]
        apply_changes = opts["apply"]

        if not dry and not apply_changes:
            raise CommandError("Укажи --dry-run или --apply")

        try:
            model = apps.get_model(model_label)
        except (LookupError, ValueError):
            raise CommandError(f"Модель {model_label} не найдена (формат app_label.ModelName)")
        try:
            policy = get_policy(model)
        except ImproperlyConfigured as e:
            raise CommandError(str(e))

        slug_field = policy.slug_field
        objects = list(model._default_manager.order_by("pk"))
        if not opts["fix_all"]:
            objects = [o for o in objects if not is_valid_slug(getattr(o, slug_field))]

        label = model._meta.label_lower
        if not objects:
            self.stdout.write(self.style.SUCCESS(f"В {label} нечего чинить (пустых и невалидных slug нет)."))
            return

        self.stdout.write(self.style.NOTICE(f"Модель: {label} | к правке: {len(objects)}"))

        planner = PlannedSlugStore(model, policy)
        changed = 0
        failed = 0
        for obj in objects:
            old = getattr(obj, slug_field) or ""
            try:
                if dry:
                    new = assign_slug(obj, policy=policy, store=planner, regenerate=True)
                    planner.plan(obj)
                else:
                    save_with_slug(obj, policy=policy, regenerate=True)
                    new = getattr(obj, slug_field)
            except (DuplicateNameError, ExhaustedProbeError, SlugStorageError) as e:
                failed += 1
                self.stderr.write(f"{obj.pk:>6} | {policy.read_name(obj)} -> ошибка: {e}")
                continue

            status = "OK" if old == new else "CHANGE"
            if status == "CHANGE":
                changed += 1
            self.stdout.write(f"{obj.pk:>6} | {policy.read_name(obj)} -> {old} => {new} [{status}]")

        if dry:
            self.stdout.write(self.style.SUCCESS(f"DRY-RUN завершён. БД не изменена. К изменению: {changed}"))
            return

        if failed:
            self.stdout.write(self.style.WARNING(f"Обновлено slug: {changed}, с ошибками: {failed}"))
        else:
            self.stdout.write(self.style.SUCCESS(f"Готово. Обновлено slug: {changed}"))
