# Путь: backend/geo/models.py
# Назначение: Гео-справочник каталога: Страна → Штат → Город → Район / Локация.
# Slug здесь не генерируется в save(): его присваивает catalog.slug_service по политикам внизу файла.
#   ✅ Город уникален по slug внутри штата, район и локация - внутри города.
#   ✅ Имена уникальны без учёта регистра внутри той же области.
#   ✅ Удалить родителя, на которого ссылаются, нельзя (PROTECT).

from django.db import models
from django.db.models import Q
from django.db.models.functions import Lower

from catalog.slug_policy import ScopePolicy, register_policy


class GeoBase(models.Model):
    name = models.CharField("Название", max_length=255)
    slug = models.SlugField("Слаг", max_length=255, blank=True)
    created_at = models.DateTimeField("Создано", auto_now_add=True)
    updated_at = models.DateTimeField("Обновлено", auto_now=True)

    class Meta:
        abstract = True
        ordering = ["name"]

    def __str__(self):
        return self.name


class Country(GeoBase):
    code = models.CharField("Код", max_length=3, blank=True, default="")
    longitude = models.FloatField("Долгота", default=0)
    latitude = models.FloatField("Широта", default=0)

    class Meta(GeoBase.Meta):
        verbose_name = "Страна"
        verbose_name_plural = "Страны"
        constraints = [
            models.UniqueConstraint(fields=["slug"], name="geo_country_slug_uniq"),
            models.UniqueConstraint(Lower("name"), name="geo_country_name_ci_uniq"),
        ]

    def save(self, *args, **kwargs):
        self.code = (self.code or "").strip().upper()
        super().save(*args, **kwargs)


class State(GeoBase):
    code = models.CharField("Код", max_length=10, blank=True, default="")
    country = models.ForeignKey(
        Country, on_delete=models.PROTECT, null=True, blank=True, related_name="states", verbose_name="Страна"
    )

    class Meta(GeoBase.Meta):
        verbose_name = "Штат"
        verbose_name_plural = "Штаты"
        constraints = [
            models.UniqueConstraint(fields=["slug"], name="geo_state_slug_uniq"),
            models.UniqueConstraint(Lower("name"), "country", name="geo_state_name_ci_uniq"),
            models.UniqueConstraint(Lower("name"), condition=Q(country__isnull=True), name="geo_state_name_no_country_uniq"),
        ]


class City(GeoBase):
    pincode = models.CharField("Индекс", max_length=20, blank=True, default="")
    country = models.ForeignKey(
        Country, on_delete=models.PROTECT, null=True, blank=True, related_name="cities", verbose_name="Страна"
    )
    state = models.ForeignKey(
        State, on_delete=models.PROTECT, null=True, blank=True, related_name="cities", verbose_name="Штат"
    )

    class Meta(GeoBase.Meta):
        verbose_name = "Город"
        verbose_name_plural = "Города"
        constraints = [
            models.UniqueConstraint(fields=["state", "slug"], name="geo_city_state_slug_uniq"),
            models.UniqueConstraint(Lower("name"), "state", name="geo_city_name_ci_uniq"),
            # без родителя NULL в индексе не совпадает сам с собой: отдельные частичные индексы
            models.UniqueConstraint(fields=["slug"], condition=Q(state__isnull=True), name="geo_city_slug_no_state_uniq"),
            models.UniqueConstraint(Lower("name"), condition=Q(state__isnull=True), name="geo_city_name_no_state_uniq"),
        ]


class Area(GeoBase):
    pincode = models.CharField("Индекс", max_length=20, blank=True, default="")
    country = models.ForeignKey(
        Country, on_delete=models.PROTECT, null=True, blank=True, related_name="areas", verbose_name="Страна"
    )
    state = models.ForeignKey(
        State, on_delete=models.PROTECT, null=True, blank=True, related_name="areas", verbose_name="Штат"
    )
    city = models.ForeignKey(
        City, on_delete=models.PROTECT, null=True, blank=True, related_name="areas", verbose_name="Город"
    )

    class Meta(GeoBase.Meta):
        verbose_name = "Район"
        verbose_name_plural = "Районы"
        constraints = [
            models.UniqueConstraint(fields=["city", "slug"], name="geo_area_city_slug_uniq"),
            models.UniqueConstraint(Lower("name"), "city", name="geo_area_name_ci_uniq"),
            # без родителя NULL в индексе не совпадает сам с собой: отдельные частичные индексы
            models.UniqueConstraint(fields=["slug"], condition=Q(city__isnull=True), name="geo_area_slug_no_city_uniq"),
            models.UniqueConstraint(Lower("name"), condition=Q(city__isnull=True), name="geo_area_name_no_city_uniq"),
        ]


class Location(GeoBase):
    pincode = models.CharField("Индекс", max_length=20, blank=True, default="")
    country = models.ForeignKey(
        Country, on_delete=models.PROTECT, null=True, blank=True, related_name="locations", verbose_name="Страна"
    )
    state = models.ForeignKey(
        State, on_delete=models.PROTECT, null=True, blank=True, related_name="locations", verbose_name="Штат"
    )
    city = models.ForeignKey(
        City, on_delete=models.PROTECT, null=True, blank=True, related_name="locations", verbose_name="Город"
    )
    timezone = models.CharField("Часовой пояс", max_length=64, default="Asia/Kolkata")
    language = models.CharField("Язык", max_length=16, default="en")

    class Meta(GeoBase.Meta):
        verbose_name = "Локация"
        verbose_name_plural = "Локации"
        constraints = [
            models.UniqueConstraint(fields=["city", "slug"], name="geo_location_city_slug_uniq"),
            models.UniqueConstraint(Lower("name"), "city", name="geo_location_name_ci_uniq"),
            # без родителя NULL в индексе не совпадает сам с собой: отдельные частичные индексы
            models.UniqueConstraint(fields=["slug"], condition=Q(city__isnull=True), name="geo_location_slug_no_city_uniq"),
            models.UniqueConstraint(Lower("name"), condition=Q(city__isnull=True), name="geo_location_name_no_city_uniq"),
        ]


# ==============================
# ПОЛИТИКИ SLUG
# ==============================

register_policy(Country, ScopePolicy(
    name_scope=(), fallback_prefix="country",
    duplicate_name_message="Страна с таким названием уже существует",
))
register_policy(State, ScopePolicy(
    name_scope=("country",), fallback_prefix="state",
    duplicate_name_message="Штат с таким названием уже есть в этой стране",
))
register_policy(City, ScopePolicy(
    scope=("state",), name_scope=("state",), fallback_prefix="city",
    duplicate_name_message="Город с таким названием уже есть в этом штате",
))
register_policy(Area, ScopePolicy(
    scope=("city",), name_scope=("city",), fallback_prefix="area",
    duplicate_name_message="Район с таким названием уже есть в этом городе",
))
register_policy(Location, ScopePolicy(
    scope=("city",), name_scope=("city",), fallback_prefix="location",
    duplicate_name_message="Локация с таким названием уже есть в этом городе",
))
