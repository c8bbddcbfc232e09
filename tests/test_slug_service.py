# tests/test_slug_service.py
import re

import pytest
from django.db import IntegrityError, OperationalError, transaction
from django.test import override_settings

from catalog.exceptions import DuplicateKeyError, DuplicateNameError, ExhaustedProbeError, SlugStorageError
from catalog.models import Product, Seo
from catalog.slug_policy import get_policy
from catalog.slug_service import DjangoSlugStore, assign_slug, save_with_slug
from geo.models import Area, City

from .conftest import create

pytestmark = pytest.mark.django_db


class StaleStore(DjangoSlugStore):
    """Первая проверка slug «не видит» уже сохранённую запись (как при гонке двух запросов)."""

    def __init__(self, model, policy, stale_checks=1):
        super().__init__(model, policy)
        self.stale_checks = stale_checks

    def slug_exists(self, scope, candidate, exclude_pk=None):
        if self.stale_checks:
            self.stale_checks -= 1
            return False
        return super().slug_exists(scope, candidate, exclude_pk)


# ---------- создание ----------

def test_slug_from_name(cotton):
    assert cotton.slug == "organic-cotton"


def test_repeated_base_gets_sequential_suffixes(cotton):
    slugs = [create(Seo, product=cotton).slug for _ in range(4)]
    assert slugs == ["organic-cotton", "organic-cotton-1", "organic-cotton-2", "organic-cotton-3"]


def test_explicit_slug_is_normalized_and_deduplicated(cotton):
    product = create(Product, name="Linen Blend", slug="Organic Cotton!!")
    assert product.slug == "organic-cotton-1"


def test_unusable_explicit_slug_falls_back_to_name(db):
    assert create(Product, name="Linen", slug="!!!").slug == "linen"


def test_name_without_latin_gets_fallback_token(db):
    product = create(Product, name="!!!")
    assert re.fullmatch(r"product-[a-z0-9]{9}", product.slug)


def test_no_name_gets_fallback_token(db):
    assert re.fullmatch(r"product-[a-z0-9]{9}", create(Product).slug)
    assert re.fullmatch(r"seo-[a-z0-9]{9}", create(Seo).slug)


def test_assign_slug_does_not_touch_other_fields(db):
    product = Product(name="Pure Silk", sku="PS-1", gsm=60)
    assert assign_slug(product) == "pure-silk"
    assert (product.name, product.sku, product.gsm) == ("Pure Silk", "PS-1", 60)
    assert product.pk is None


# ---------- области ----------

def test_same_city_slug_in_different_states(india, maharashtra, gujarat):
    a = create(City, name="Springfield", state=maharashtra, country=india)
    b = create(City, name="Springfield", state=gujarat, country=india)
    assert a.slug == b.slug == "springfield"


def test_areas_are_scoped_by_city(india, maharashtra, mumbai):
    pune = create(City, name="Pune", state=maharashtra, country=india)
    first = create(Area, name="Camp", city=mumbai, state=maharashtra)
    second = create(Area, name="Camp", city=pune, state=maharashtra)
    third = create(Area, name="Camp Road", slug="camp", city=mumbai, state=maharashtra)
    assert (first.slug, second.slug, third.slug) == ("camp", "camp", "camp-1")


def test_duplicate_city_name_in_state_is_rejected(india, maharashtra, mumbai):
    with pytest.raises(DuplicateNameError) as err:
        create(City, name="mumbai", state=maharashtra, country=india)
    assert err.value.field == "name"
    assert "name" in err.value.message_dict
    assert City.objects.count() == 1


def test_duplicate_product_name_is_case_insensitive(cotton):
    with pytest.raises(DuplicateNameError):
        create(Product, name="ORGANIC COTTON")
    assert Product.objects.count() == 1


def test_moving_city_to_other_state_rechecks_slug(india, maharashtra, gujarat):
    create(City, name="Pune", state=gujarat, country=india)
    moved = create(City, name="Pune!", state=maharashtra, country=india)
    assert moved.slug == "pune"

    moved.state = gujarat
    save_with_slug(moved)
    assert moved.slug == "pune-1"


# ---------- изменение ----------

def test_update_without_name_change_keeps_slug(cotton, mocker):
    spy = mocker.spy(DjangoSlugStore, "slug_exists")
    cotton.sku = "OC-2"
    save_with_slug(cotton)
    assert cotton.slug == "organic-cotton"
    spy.assert_not_called()


def test_cleared_slug_is_restored_on_update(cotton):
    cotton.slug = ""
    save_with_slug(cotton)
    assert Product.objects.get(pk=cotton.pk).slug == "organic-cotton"


def test_rename_to_same_base_does_not_collide_with_itself(cotton):
    cotton.name = "ORGANIC COTTON"
    save_with_slug(cotton)
    assert cotton.slug == "organic-cotton"


def test_rename_rederives_slug(cotton):
    cotton.name = "Pure Silk"
    save_with_slug(cotton)
    assert Product.objects.get(pk=cotton.pk).slug == "pure-silk"


def test_rename_into_taken_name_is_rejected(cotton):
    silk = create(Product, name="Pure Silk")
    silk.name = "organic cotton"
    with pytest.raises(DuplicateNameError):
        save_with_slug(silk)
    assert Product.objects.get(pk=silk.pk).name == "Pure Silk"


def test_explicit_slug_on_update(cotton):
    cotton.slug = "Cotton Premium"
    save_with_slug(cotton)
    assert cotton.slug == "cotton-premium"


def test_regenerate_ignores_manual_slug(cotton):
    cotton.slug = "whatever"
    save_with_slug(cotton)
    assert cotton.slug == "whatever"

    save_with_slug(cotton, regenerate=True)
    assert cotton.slug == "organic-cotton"


def test_seo_slug_follows_product(cotton):
    seo = create(Seo, product=cotton)
    silk = create(Product, name="Pure Silk")
    seo.product = silk
    save_with_slug(seo)
    assert seo.slug == "pure-silk"


# ---------- предел и сбои ----------

@override_settings(SLUG_MAX_PROBE_ATTEMPTS=2)
def test_suffix_attempts_are_capped(cotton):
    for _ in range(3):
        create(Seo, product=cotton)
    with pytest.raises(ExhaustedProbeError):
        create(Seo, product=cotton)
    assert Seo.objects.count() == 3


def test_stale_check_is_retried_on_duplicate_key(cotton, mocker):
    logger = mocker.patch("catalog.slug_service.logger")
    product = Product(name="Cotton Twill", slug="organic-cotton")
    store = StaleStore(Product, get_policy(Product))

    save_with_slug(product, store=store)

    assert product.pk is not None
    assert product.slug == "organic-cotton-1"
    logger.warning.assert_called_once()


def test_duplicate_key_is_raised_when_retries_exhausted(cotton, mocker):
    mocker.patch("catalog.slug_service.logger")
    product = Product(name="Cotton Twill", slug="organic-cotton")
    store = StaleStore(Product, get_policy(Product), stale_checks=10)

    with pytest.raises(DuplicateKeyError):
        save_with_slug(product, store=store, retries=1)
    assert not Product.objects.filter(name="Cotton Twill").exists()


def test_storage_failure_is_wrapped(db, mocker):
    mocker.patch("django.db.models.query.QuerySet.exists", side_effect=OperationalError("db down"))
    with pytest.raises(SlugStorageError):
        assign_slug(Seo(product=Product(name="Linen")))
    with pytest.raises(SlugStorageError):
        assign_slug(Product(name="Pure Silk"))


def test_injected_store_is_used(mocker):
    store = mocker.Mock()
    store.slug_exists.side_effect = lambda scope, candidate, exclude_pk: candidate in {"pure-silk", "pure-silk-1"}
    store.name_exists.return_value = False

    product = Product(name="Pure Silk")
    assert assign_slug(product, store=store) == "pure-silk-2"
    store.name_exists.assert_called_once_with({}, "Pure Silk", None)


# ---------- сценарий «Мумбаи» целиком ----------

def test_mumbai_scenario(india, maharashtra, gujarat):
    first = create(City, name="Mumbai", state=maharashtra, country=india)
    other_state = create(City, name="Mumbai", state=gujarat, country=india)
    assert first.slug == other_state.slug == "mumbai"

    # второе такое же имя в том же штате отклоняется проверкой имени
    with pytest.raises(DuplicateNameError):
        create(City, name="Mumbai", state=maharashtra, country=india)

    # второй город того же штата с тем же slug получает суффикс
    second = create(City, name="Bombay", slug="mumbai", state=maharashtra, country=india)
    assert second.slug == "mumbai-1"

    second.name = "Mumbai Central"
    second.slug = ""
    save_with_slug(second)

    assert City.objects.get(pk=second.pk).slug == "mumbai-central"
    assert City.objects.get(pk=first.pk).slug == "mumbai"
    assert City.objects.get(pk=other_state.pk).slug == "mumbai"


# ---------- длина колонки ----------

def test_suffixed_slug_fits_column(db):
    long_name = create(Product, name="a" * 255)
    first = create(Seo, product=long_name)
    second = create(Seo, product=long_name)

    assert long_name.slug == "a" * 255
    assert first.slug == "a" * 255
    assert second.slug == "a" * 253 + "-1"
    second.full_clean()


def test_trimmed_base_does_not_end_with_hyphen(db):
    stem = "b" * 252 + "-cc"
    owner = create(Product, name=stem)
    assert owner.slug == stem
    assert create(Seo, product=owner).slug == stem
    assert create(Seo, product=owner).slug == "b" * 252 + "-1"


# ---------- запись: не всякий IntegrityError - дубликат ----------

def test_non_unique_integrity_error_is_not_retried(db, mocker):
    save = mocker.patch.object(Product, "save", side_effect=IntegrityError("NOT NULL constraint failed: catalog_product.um"))
    with pytest.raises(SlugStorageError) as err:
        create(Product, name="Pure Silk")
    assert not isinstance(err.value, DuplicateKeyError)
    assert save.call_count == 1


def test_unique_violation_with_sqlstate_is_duplicate(mocker):
    cause = type("UniqueViolation", (Exception,), {"sqlstate": "23505"})("duplicate key value")
    error = IntegrityError("duplicate key value violates unique constraint")
    error.__cause__ = cause
    mocker.patch.object(Product, "save", side_effect=error)
    store = DjangoSlugStore(Product, get_policy(Product))
    with pytest.raises(DuplicateKeyError):
        store.persist(Product(name="Pure Silk", slug="pure-silk"))


# ---------- записи без родителя ----------

def test_cities_without_state_share_one_scope(db):
    create(City, name="Springfield")
    with pytest.raises(DuplicateNameError):
        create(City, name="springfield")
    assert create(City, name="Springfield West", slug="springfield").slug == "springfield-1"


def test_database_rejects_duplicate_slug_without_parent(db):
    City.objects.create(name="Springfield", slug="springfield")
    with pytest.raises(IntegrityError), transaction.atomic():
        City.objects.create(name="Shelbyville", slug="springfield")
