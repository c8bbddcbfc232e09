# tests/conftest.py
import pytest

from catalog.models import Product
from catalog.slug_service import save_with_slug
from geo.models import City, Country, State


def create(model, **fields):
    """Создание записи так же, как это делают админка и команды: через сервис slug."""
    return save_with_slug(model(**fields))


@pytest.fixture
def india(db):
    return create(Country, name="India", code="in")


@pytest.fixture
def maharashtra(india):
    return create(State, name="Maharashtra", country=india)


@pytest.fixture
def gujarat(india):
    return create(State, name="Gujarat", country=india)


@pytest.fixture
def mumbai(india, maharashtra):
    return create(City, name="Mumbai", state=maharashtra, country=india)


@pytest.fixture
def cotton(db):
    return create(Product, name="Organic Cotton", sku="OC-1")
