# tests/test_slug_policy.py
import pytest
from django.contrib.auth.models import Group
from django.core.exceptions import ImproperlyConfigured
from django.test import override_settings

from catalog.models import Product, Seo
from catalog.slug_policy import get_policy, registered_models
from geo.models import Area, City, Country, Location, State


def test_policy_table():
    assert get_policy(Product).scope == ()
    assert get_policy(Product).name_scope == ()
    assert get_policy(Country).scope == ()
    assert get_policy(State).scope == ()
    assert get_policy(State).name_scope == ("country",)
    assert get_policy(City).scope == ("state",)
    assert get_policy(Area).scope == ("city",)
    assert get_policy(Location).scope == ("city",)
    assert get_policy(Location).fallback_prefix == "location"


def test_seo_name_comes_from_product():
    policy = get_policy(Seo)
    assert policy.source_field == "product"
    assert not policy.checks_name
    assert policy.read_name(Seo(product=Product(name="Linen"))) == "Linen"
    assert policy.read_name(Seo()) is None


def test_registered_models_cover_catalog_and_geo():
    labels = {m._meta.label_lower for m in registered_models()}
    assert labels >= {
        "catalog.product", "catalog.seo", "catalog.topicpage",
        "geo.country", "geo.state", "geo.city", "geo.area", "geo.location",
    }


def test_unregistered_model_is_misconfiguration():
    with pytest.raises(ImproperlyConfigured):
        get_policy(Group)


@override_settings(SLUG_SCOPE_POLICIES={"geo.city": {"scope": "country", "max_attempts": 5}})
def test_settings_override_policy():
    policy = get_policy(City)
    assert policy.scope == ("country",)
    assert policy.max_attempts == 5
    assert policy.name_scope == ("state",)


@override_settings(SLUG_SCOPE_POLICIES={"geo.city": {"no_such_option": 1}})
def test_unknown_override_key_is_misconfiguration():
    with pytest.raises(ImproperlyConfigured):
        get_policy(City)
