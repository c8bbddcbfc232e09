# Путь: backend/geo/migrations/0001_initial.py
# Назначение: Начальная схема гео-справочника с уникальностью slug/имени внутри родителя.

import django.db.models.deletion
import django.db.models.functions.text
from django.db import migrations, models


def _base_fields():
    return [
        ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        ("name", models.CharField(max_length=255, verbose_name="Название")),
        ("slug", models.SlugField(blank=True, max_length=255, verbose_name="Слаг")),
        ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Создано")),
        ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Обновлено")),
    ]


def _fk(model, related_name, verbose_name):
    return models.ForeignKey(
        blank=True,
        null=True,
        on_delete=django.db.models.deletion.PROTECT,
        related_name=related_name,
        to=model,
        verbose_name=verbose_name,
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Country",
            fields=_base_fields() + [
                ("code", models.CharField(blank=True, default="", max_length=3, verbose_name="Код")),
                ("longitude", models.FloatField(default=0, verbose_name="Долгота")),
                ("latitude", models.FloatField(default=0, verbose_name="Широта")),
            ],
            options={
                "verbose_name": "Страна",
                "verbose_name_plural": "Страны",
                "ordering": ["name"],
                "abstract": False,
                "constraints": [
                    models.UniqueConstraint(fields=("slug",), name="geo_country_slug_uniq"),
                    models.UniqueConstraint(django.db.models.functions.text.Lower("name"), name="geo_country_name_ci_uniq"),
                ],
            },
        ),
        migrations.CreateModel(
            name="State",
            fields=_base_fields() + [
                ("code", models.CharField(blank=True, default="", max_length=10, verbose_name="Код")),
                ("country", _fk("geo.country", "states", "Страна")),
            ],
            options={
                "verbose_name": "Штат",
                "verbose_name_plural": "Штаты",
                "ordering": ["name"],
                "abstract": False,
                "constraints": [
                    models.UniqueConstraint(fields=("slug",), name="geo_state_slug_uniq"),
                    models.UniqueConstraint(django.db.models.functions.text.Lower("name"), models.F("country"), name="geo_state_name_ci_uniq"),
                ],
            },
        ),
        migrations.CreateModel(
            name="City",
            fields=_base_fields() + [
                ("pincode", models.CharField(blank=True, default="", max_length=20, verbose_name="Индекс")),
                ("country", _fk("geo.country", "cities", "Страна")),
                ("state", _fk("geo.state", "cities", "Штат")),
            ],
            options={
                "verbose_name": "Город",
                "verbose_name_plural": "Города",
                "ordering": ["name"],
                "abstract": False,
                "constraints": [
                    models.UniqueConstraint(fields=("state", "slug"), name="geo_city_state_slug_uniq"),
                    models.UniqueConstraint(django.db.models.functions.text.Lower("name"), models.F("state"), name="geo_city_name_ci_uniq"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Area",
            fields=_base_fields() + [
                ("pincode", models.CharField(blank=True, default="", max_length=20, verbose_name="Индекс")),
                ("country", _fk("geo.country", "areas", "Страна")),
                ("state", _fk("geo.state", "areas", "Штат")),
                ("city", _fk("geo.city", "areas", "Город")),
            ],
            options={
                "verbose_name": "Район",
                "verbose_name_plural": "Районы",
                "ordering": ["name"],
                "abstract": False,
                "constraints": [
                    models.UniqueConstraint(fields=("city", "slug"), name="geo_area_city_slug_uniq"),
                    models.UniqueConstraint(django.db.models.functions.text.Lower("name"), models.F("city"), name="geo_area_name_ci_uniq"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Location",
            fields=_base_fields() + [
                ("pincode", models.CharField(blank=True, default="", max_length=20, verbose_name="Индекс")),
                ("timezone", models.CharField(default="Asia/Kolkata", max_length=64, verbose_name="Часовой пояс")),
                ("language", models.CharField(default="en", max_length=16, verbose_name="Язык")),
                ("country", _fk("geo.country", "locations", "Страна")),
                ("state", _fk("geo.state", "locations", "Штат")),
                ("city", _fk("geo.city", "locations", "Город")),
            ],
            options={
                "verbose_name": "Локация",
                "verbose_name_plural": "Локации",
                "ordering": ["name"],
                "abstract": False,
                "constraints": [
                    models.UniqueConstraint(fields=("city", "slug"), name="geo_location_city_slug_uniq"),
                    models.UniqueConstraint(django.db.models.functions.text.Lower("name"), models.F("city"), name="geo_location_name_ci_uniq"),
                ],
            },
        ),
    ]
