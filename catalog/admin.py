# Путь: backend/catalog/admin.py
# Назначение: Админка каталога + общая база SluggedModelAdmin для всех моделей со slug (используется и в geo/admin.py).
#   ✅ Поле slug можно оставить пустым - соберётся из названия
#   ✅ Занятый slug получает суффикс -1, -2, ... и админ видит сообщение
#   ✅ Дубликат имени в своей области - ошибка формы у поля названия
#   ✅ Ошибки сервиса slug (перебор исчерпан, гонка при записи, сбой БД) - сообщение, а не трейсбек
#   ✅ Действие «Пересобрать slug из названия»

from django import forms
from django.contrib import admin, messages
from django.http import HttpResponseRedirect
from django.utils.html import format_html, strip_tags

from .exceptions import DuplicateNameError, ExhaustedProbeError, SlugStorageError
from .models import Product, Seo, TopicPage
from .slug_policy import get_policy
from .slug_service import assign_slug, ensure_name_available, save_with_slug, scope_values, scope_values_from_data

SLUG_ERRORS = (DuplicateNameError, ExhaustedProbeError, SlugStorageError)


# ===========================
# ФОРМА: slug свободного вида (нормализуем и разводим конфликты здесь же, до сохранения)
# ===========================
class SluggedAdminForm(forms.ModelForm):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.slug_policy = get_policy(self._meta.model)
        self.typed_slug = ""
        slug_field = self.slug_policy.slug_field
        if slug_field in self.fields:
            self.fields[slug_field] = forms.CharField(
                label=self.fields[slug_field].label,
                required=False,
                max_length=255,
                help_text="Можно оставить пустым - slug соберётся из названия. Занятый получит суффикс -1, -2, ...",
            )

    def _get_validation_exclusions(self):
        # уникальность slug и имени проверяет сервис slug, а не валидация модели
        exclude = super()._get_validation_exclusions()
        exclude.add(self.slug_policy.slug_field)
        if self.slug_policy.checks_name:
            exclude.add(self.slug_policy.name_field)
        return exclude

    def clean(self):
        cleaned = super().clean()
        policy = self.slug_policy
        if not policy.checks_name or policy.name_field not in self.fields:
            return cleaned

        name = (cleaned.get(policy.name_field) or "").strip()
        if not name:
            return cleaned

        model = self._meta.model
        scope = {}
        for f in policy.name_scope:
            if f in self.fields:
                scope.update(scope_values_from_data(model, (f,), cleaned))
            else:
                scope.update(scope_values(self.instance, (f,)))

        exclude_pk = None if self.instance._state.adding else self.instance.pk
        try:
            ensure_name_available(model, name, scope, exclude_pk, policy=policy)
        except DuplicateNameError as e:
            self.add_error(policy.name_field, e.message_text)
        return cleaned

    def _post_clean(self):
        super()._post_clean()
        if self.errors:
            return
        policy = self.slug_policy
        # подбираем slug уже на валидации: исчерпанный перебор - ошибка поля, а не 500
        self.typed_slug = (getattr(self.instance, policy.slug_field, "") or "").strip()
        try:
            assign_slug(self.instance, policy=policy)
        except DuplicateNameError as e:
            self.add_error(policy.name_field if policy.name_field in self.fields else None, e.message_text)
        except ExhaustedProbeError as e:
            self.add_error(policy.slug_field if policy.slug_field in self.fields else None, str(e))


class SluggedModelAdmin(admin.ModelAdmin):
    form = SluggedAdminForm
    actions = ["action_regenerate_slug"]

    def changeform_view(self, request, object_id=None, form_url="", extra_context=None):
        # гонка после валидации формы или сбой БД: транзакция уже откатана, возвращаем на форму
        try:
            return super().changeform_view(request, object_id, form_url, extra_context)
        except SLUG_ERRORS as e:
            self.message_user(request, f"Запись не сохранена: {e}", level=messages.ERROR)
            return HttpResponseRedirect(request.get_full_path())

    # --- сохранение: slug присваивает сервис + сообщение, если он отличается от введённого ---
    def save_model(self, request, obj, form, change):
        typed_slug = getattr(form, "typed_slug", None)
        if typed_slug is None:
            typed_slug = (getattr(obj, "slug", "") or "").strip()
        save_with_slug(obj)
        if typed_slug and obj.slug != typed_slug:
            self.message_user(
                request,
                f"Слаг «{typed_slug}» занят или недопустим. Автоматически установлен «{obj.slug}».",
                level=messages.WARNING,
            )

    @admin.action(description="🔁 Пересобрать slug из названия")
    def action_regenerate_slug(self, request, queryset):
        changed = 0
        for obj in queryset.order_by("pk"):
            old_slug = obj.slug
            try:
                save_with_slug(obj, regenerate=True)
            except SLUG_ERRORS as e:
                self.message_user(request, f"«{obj}»: slug не пересобран ({e})", level=messages.ERROR)
                continue
            if obj.slug != old_slug:
                changed += 1
        self.message_user(request, f"Обновлено slug: {changed}")


@admin.register(Product)
class ProductAdmin(SluggedModelAdmin):
    list_display = ("name", "slug", "sku", "sales_price", "popular_product", "updated_at")
    list_filter = ("popular_product", "top_rated_product", "landing_page_product")
    search_fields = ("name", "slug", "sku", "vendor_fabric_code")
    ordering = ("-created_at",)
    prepopulated_fields = {"slug": ("name",)}
    readonly_fields = ("created_at", "updated_at")
    fieldsets = (
        ("Основное", {
            "fields": ("name", "slug", "product_title", "product_tagline", "short_description", "full_description"),
            "description": "Slug формирует адрес карточки /fabric/<slug>/.",
        }),
        ("Характеристики", {
            "fields": ("sku", "vendor_fabric_code", "um", "currency", "gsm", "oz", "cm", "inch",
                       "purchase_price", "sales_price", "leadtime"),
        }),
        ("Витрина", {
            "fields": ("popular_product", "top_rated_product", "landing_page_product", "rating_value", "rating_count"),
        }),
        ("Метаданные", {
            "fields": ("created_at", "updated_at"),
            "classes": ("collapse",),
        }),
    )


@admin.register(Seo)
class SeoAdmin(SluggedModelAdmin):
    list_display = ("slug", "product", "location", "content_language", "updated_at")
    list_select_related = ("product", "location")
    search_fields = ("slug", "product__name", "location__name", "keywords")
    autocomplete_fields = ("product", "location")
    readonly_fields = ("created_at", "updated_at")


@admin.register(TopicPage)
class TopicPageAdmin(SluggedModelAdmin):
    list_display = ("name", "slug", "status", "updated_at", "excerpt_preview")
    list_filter = ("status",)
    search_fields = ("name", "slug", "keywords")
    prepopulated_fields = {"slug": ("name",)}
    readonly_fields = ("created_at", "updated_at", "view_link")
    actions = ["action_regenerate_slug", "action_publish", "action_archive"]

    @admin.action(description="✅ Опубликовать выбранные")
    def action_publish(self, request, queryset):
        updated = queryset.update(status=TopicPage.Status.PUBLISHED)
        self.message_user(request, f"Опубликовано: {updated}")

    @admin.action(description="🗄 В архив")
    def action_archive(self, request, queryset):
        updated = queryset.update(status=TopicPage.Status.ARCHIVED)
        self.message_user(request, f"Отправлено в архив: {updated}")

    def view_link(self, obj):
        if not obj.slug:
            return "—"
        return format_html('<a href="/topic/{}/" target="_blank" rel="noopener">/topic/{}/</a>', obj.slug, obj.slug)
    view_link.short_description = "Ссылка"

    def excerpt_preview(self, obj):
        text = " ".join(strip_tags(obj.excerpt or obj.description_html or "").split())
        return (text[:117] + "…") if len(text) > 120 else text or "—"
    excerpt_preview.short_description = "Анонс"
