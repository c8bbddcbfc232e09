# Путь: backend/catalog/models.py
# Назначение: Модели каталога - товары (ткани), SEO-записи товар×локация и тематические SEO-страницы.
# Slug присваивает catalog.slug_service (политики - внизу файла), save() моделей его не трогает.
#   ✅ Product.name необязателен: без имени slug будет product-xxxxxxxxx
#   ✅ Seo берёт slug из названия связанного товара
#   ✅ TopicPage.description_html - визуальный редактор CKEditor 5

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q
from django.db.models.functions import Lower
from django_ckeditor_5.fields import CKEditor5Field

from .slug_policy import ScopePolicy, register_policy


class Product(models.Model):
    name = models.CharField("Название", max_length=255, blank=True, default="")
    slug = models.SlugField("Слаг", max_length=255, blank=True)

    product_title = models.CharField("Заголовок карточки", max_length=255, blank=True, default="")
    product_tagline = models.CharField("Слоган", max_length=255, blank=True, default="")
    short_description = models.TextField("Краткое описание", blank=True, default="")
    full_description = models.TextField("Полное описание", blank=True, default="")

    sku = models.CharField("Артикул", max_length=100, blank=True, default="")
    vendor_fabric_code = models.CharField("Код ткани поставщика", max_length=100, blank=True, default="")
    um = models.CharField("Ед. измерения", max_length=20, blank=True, default="")
    currency = models.CharField("Валюта", max_length=10, blank=True, default="")
    gsm = models.FloatField("GSM", null=True, blank=True)
    oz = models.FloatField("Унции", null=True, blank=True)
    cm = models.FloatField("Ширина, см", null=True, blank=True)
    inch = models.FloatField("Ширина, дюймы", null=True, blank=True)
    purchase_price = models.DecimalField("Закупочная цена", max_digits=12, decimal_places=2, null=True, blank=True)
    sales_price = models.DecimalField("Цена продажи", max_digits=12, decimal_places=2, null=True, blank=True)
    leadtime = models.PositiveIntegerField("Срок поставки, дней", null=True, blank=True)

    popular_product = models.BooleanField("Популярный", default=False)
    top_rated_product = models.BooleanField("Топ по рейтингу", default=False)
    landing_page_product = models.BooleanField("На лендинге", default=False)
    rating_value = models.FloatField(
        "Рейтинг", null=True, blank=True, validators=[MinValueValidator(0), MaxValueValidator(5)]
    )
    rating_count = models.PositiveIntegerField("Кол-во оценок", null=True, blank=True)

    created_at = models.DateTimeField("Создано", auto_now_add=True)
    updated_at = models.DateTimeField("Обновлено", auto_now=True)

    class Meta:
        verbose_name = "Товар"
        verbose_name_plural = "Товары"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["slug"], name="catalog_product_slug_uniq"),
            models.UniqueConstraint(Lower("name"), condition=~Q(name=""), name="catalog_product_name_ci_uniq"),
        ]

    def __str__(self):
        return self.name or self.slug


class Seo(models.Model):
    product = models.ForeignKey(
        Product, on_delete=models.SET_NULL, null=True, blank=True, related_name="seo_entries", verbose_name="Товар"
    )
    location = models.ForeignKey(
        "geo.Location", on_delete=models.SET_NULL, null=True, blank=True,
        related_name="seo_entries", verbose_name="Локация",
    )
    slug = models.SlugField("Слаг", max_length=255, blank=True)
    canonical_url = models.URLField("Canonical URL", max_length=500, blank=True, default="")
    excerpt = models.TextField("Анонс", blank=True, default="")
    keywords = models.TextField("Ключевые слова", blank=True, default="")
    content_language = models.CharField("Язык контента", max_length=16, blank=True, default="")
    og_locale = models.CharField("og:locale", max_length=16, blank=True, default="")
    created_at = models.DateTimeField("Создано", auto_now_add=True)
    updated_at = models.DateTimeField("Обновлено", auto_now=True)

    class Meta:
        verbose_name = "SEO товара"
        verbose_name_plural = "SEO товаров"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["slug"], name="catalog_seo_slug_uniq"),
        ]

    def __str__(self):
        return self.slug


class TopicPage(models.Model):
    class Status(models.TextChoices):
        DRAFT = "draft", "Черновик"
        PUBLISHED = "published", "Опубликовано"
        ARCHIVED = "archived", "В архиве"

    name = models.CharField("Название", max_length=255)
    slug = models.SlugField("Слаг", max_length=255, blank=True)
    meta_title = models.CharField("Meta title", max_length=255, blank=True, default="")
    meta_description = models.TextField("Meta description", blank=True, default="")
    keywords = models.TextField("Ключевые слова", blank=True, default="")
    canonical_url = models.URLField("Canonical URL", max_length=500, blank=True, default="")
    excerpt = models.TextField("Анонс", blank=True, default="")
    description_html = CKEditor5Field("Описание", config_name="default", blank=True, default="")
    status = models.CharField("Статус", max_length=16, choices=Status.choices, default=Status.DRAFT)
    created_at = models.DateTimeField("Создано", auto_now_add=True)
    updated_at = models.DateTimeField("Обновлено", auto_now=True)

    class Meta:
        verbose_name = "Тематическая страница"
        verbose_name_plural = "Тематические страницы"
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(fields=["slug"], name="catalog_topicpage_slug_uniq"),
            models.UniqueConstraint(Lower("name"), name="catalog_topicpage_name_ci_uniq"),
        ]

    def __str__(self):
        return self.name


# ==============================
# ПОЛИТИКИ SLUG
# ==============================

register_policy(Product, ScopePolicy(
    name_scope=(), fallback_prefix="product",
    duplicate_name_message="Товар с таким названием уже существует",
))
register_policy(Seo, ScopePolicy(name_field="product.name", fallback_prefix="seo"))
register_policy(TopicPage, ScopePolicy(
    name_scope=(), fallback_prefix="topic",
    duplicate_name_message="Страница с таким названием уже существует",
))
