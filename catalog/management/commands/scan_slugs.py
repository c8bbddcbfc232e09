# Путь: backend/catalog/management/commands/scan_slugs.py
# Назначение: Просканировать все модели с политикой slug и показать:
#   • пустые и невалидные slug (не вида abc-123)
#   • дубликаты slug внутри области уникальности (до появления индекса или после ручных правок БД)
# Ничего не меняет; чинить - fix_slugs.

from django.core.management.base import BaseCommand
from django.db.models import Count

from catalog.slug_policy import get_policy, registered_models
from catalog.slug_utils import is_valid_slug


class Command(BaseCommand):
    help = "Ищет пустые/невалидные slug и дубликаты slug в пределах области уникальности."

    def add_arguments(self, parser):
        parser.add_argument("--limit", type=int, default=25, help="Сколько строк показывать на модель")

    def handle(self, *args, **opts):
        limit = opts["limit"]
        total = 0
        for model in registered_models():
            policy = get_policy(model)
            slug_field = policy.slug_field
            label = model._meta.label_lower

            invalid = [
                (pk, slug)
                for pk, slug in model._default_manager.order_by("pk").values_list("pk", slug_field)
                if not is_valid_slug(slug)
            ]
            group_by = list(policy.scope) + [slug_field]
            duplicates = list(
                model._default_manager.exclude(**{slug_field: ""})
                .values(*group_by)
                .annotate(n=Count("pk"))
                .filter(n__gt=1)
                .order_by(slug_field)
            )

            if not invalid and not duplicates:
                continue

            total += len(invalid) + len(duplicates)
            self.stdout.write(self.style.NOTICE(f"\nМодель: {label}"))
            if invalid:
                self.stdout.write(f"  невалидных slug: {len(invalid)}")
                for pk, slug in invalid[:limit]:
                    self.stdout.write(f"{pk:>6} | «{slug or ''}»")
                if len(invalid) > limit:
                    self.stdout.write(f"... ещё {len(invalid) - limit} строк скрыто ...")
            if duplicates:
                self.stdout.write(f"  дубликатов в области: {len(duplicates)}")
                for row in duplicates[:limit]:
                    scope = ", ".join(f"{f}={row[f]}" for f in policy.scope)
                    where = f" [{scope}]" if scope else ""
                    self.stdout.write(f"    {row[slug_field]}{where} × {row['n']}")

        if total == 0:
            self.stdout.write(self.style.SUCCESS("\nПроблемных slug не найдено."))
        else:
            self.stdout.write(self.style.WARNING(f"\nИтого проблем: {total}. Исправить: manage.py fix_slugs --model <app.Model> --apply"))
