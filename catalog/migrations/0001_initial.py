# Путь: backend/catalog/migrations/0001_initial.py
# Назначение: Начальная схема каталога (товары, SEO товар×локация, тематические страницы).

import django.core.validators
import django.db.models.deletion
import django.db.models.functions.text
import django_ckeditor_5.fields
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("geo", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(blank=True, default="", max_length=255, verbose_name="Название")),
                ("slug", models.SlugField(blank=True, max_length=255, verbose_name="Слаг")),
                ("product_title", models.CharField(blank=True, default="", max_length=255, verbose_name="Заголовок карточки")),
                ("product_tagline", models.CharField(blank=True, default="", max_length=255, verbose_name="Слоган")),
                ("short_description", models.TextField(blank=True, default="", verbose_name="Краткое описание")),
                ("full_description", models.TextField(blank=True, default="", verbose_name="Полное описание")),
                ("sku", models.CharField(blank=True, default="", max_length=100, verbose_name="Артикул")),
                ("vendor_fabric_code", models.CharField(blank=True, default="", max_length=100, verbose_name="Код ткани поставщика")),
                ("um", models.CharField(blank=True, default="", max_length=20, verbose_name="Ед. измерения")),
                ("currency", models.CharField(blank=True, default="", max_length=10, verbose_name="Валюта")),
                ("gsm", models.FloatField(blank=True, null=True, verbose_name="GSM")),
                ("oz", models.FloatField(blank=True, null=True, verbose_name="Унции")),
                ("cm", models.FloatField(blank=True, null=True, verbose_name="Ширина, см")),
                ("inch", models.FloatField(blank=True, null=True, verbose_name="Ширина, дюймы")),
                ("purchase_price", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, verbose_name="Закупочная цена")),
                ("sales_price", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, verbose_name="Цена продажи")),
                ("leadtime", models.PositiveIntegerField(blank=True, null=True, verbose_name="Срок поставки, дней")),
                ("popular_product", models.BooleanField(default=False, verbose_name="Популярный")),
                ("top_rated_product", models.BooleanField(default=False, verbose_name="Топ по рейтингу")),
                ("landing_page_product", models.BooleanField(default=False, verbose_name="На лендинге")),
                ("rating_value", models.FloatField(
                    blank=True, null=True, verbose_name="Рейтинг",
                    validators=[
                        django.core.validators.MinValueValidator(0),
                        django.core.validators.MaxValueValidator(5),
                    ],
                )),
                ("rating_count", models.PositiveIntegerField(blank=True, null=True, verbose_name="Кол-во оценок")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Создано")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Обновлено")),
            ],
            options={
                "verbose_name": "Товар",
                "verbose_name_plural": "Товары",
                "ordering": ["-created_at"],
                "constraints": [
                    models.UniqueConstraint(fields=("slug",), name="catalog_product_slug_uniq"),
                    models.UniqueConstraint(
                        django.db.models.functions.text.Lower("name"),
                        condition=models.Q(("name", ""), _negated=True),
                        name="catalog_product_name_ci_uniq",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Seo",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("slug", models.SlugField(blank=True, max_length=255, verbose_name="Слаг")),
                ("canonical_url", models.URLField(blank=True, default="", max_length=500, verbose_name="Canonical URL")),
                ("excerpt", models.TextField(blank=True, default="", verbose_name="Анонс")),
                ("keywords", models.TextField(blank=True, default="", verbose_name="Ключевые слова")),
                ("content_language", models.CharField(blank=True, default="", max_length=16, verbose_name="Язык контента")),
                ("og_locale", models.CharField(blank=True, default="", max_length=16, verbose_name="og:locale")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Создано")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Обновлено")),
                ("location", models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name="seo_entries", to="geo.location", verbose_name="Локация",
                )),
                ("product", models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name="seo_entries", to="catalog.product", verbose_name="Товар",
                )),
            ],
            options={
                "verbose_name": "SEO товара",
                "verbose_name_plural": "SEO товаров",
                "ordering": ["-created_at"],
                "constraints": [
                    models.UniqueConstraint(fields=("slug",), name="catalog_seo_slug_uniq"),
                ],
            },
        ),
        migrations.CreateModel(
            name="TopicPage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255, verbose_name="Название")),
                ("slug", models.SlugField(blank=True, max_length=255, verbose_name="Слаг")),
                ("meta_title", models.CharField(blank=True, default="", max_length=255, verbose_name="Meta title")),
                ("meta_description", models.TextField(blank=True, default="", verbose_name="Meta description")),
                ("keywords", models.TextField(blank=True, default="", verbose_name="Ключевые слова")),
                ("canonical_url", models.URLField(blank=True, default="", max_length=500, verbose_name="Canonical URL")),
                ("excerpt", models.TextField(blank=True, default="", verbose_name="Анонс")),
                ("description_html", django_ckeditor_5.fields.CKEditor5Field(blank=True, default="", verbose_name="Описание")),
                ("status", models.CharField(
                    choices=[("draft", "Черновик"), ("published", "Опубликовано"), ("archived", "В архиве")],
                    default="draft", max_length=16, verbose_name="Статус",
                )),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Создано")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Обновлено")),
            ],
            options={
                "verbose_name": "Тематическая страница",
                "verbose_name_plural": "Тематические страницы",
                "ordering": ["name"],
                "constraints": [
                    models.UniqueConstraint(fields=("slug",), name="catalog_topicpage_slug_uniq"),
                    models.UniqueConstraint(django.db.models.functions.text.Lower("name"), name="catalog_topicpage_name_ci_uniq"),
                ],
            },
        ),
    ]
