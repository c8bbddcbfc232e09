# tests/test_api.py
import pytest
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.test import APIClient

from catalog.api_exceptions import catalog_exception_handler
from catalog.models import Product, Seo, TopicPage
from geo.models import City, Location

from .conftest import create

pytestmark = pytest.mark.django_db


@pytest.fixture
def client():
    return APIClient()


def test_health(client):
    assert client.get("/api/health/").json() == {"status": "ok"}


def test_list_envelope_and_pagination(client, india, maharashtra):
    for name in ("Pune", "Nagpur", "Nashik"):
        create(City, name=name, state=maharashtra, country=india)

    body = client.get("/api/cities/", {"limit": 2}).json()

    assert body["status"] == "success"
    assert [c["name"] for c in body["data"]["cities"]] == ["Nagpur", "Nashik"]
    assert body["data"]["pagination"] == {
        "total": 3,
        "page": 1,
        "limit": 2,
        "totalPages": 2,
        "hasNextPage": True,
        "hasPreviousPage": False,
    }


def test_list_filters_by_parent_and_search(client, india, maharashtra, gujarat, mumbai):
    create(City, name="Surat", state=gujarat, country=india)

    by_state = client.get("/api/cities/", {"state": gujarat.pk}).json()
    assert [c["slug"] for c in by_state["data"]["cities"]] == ["surat"]

    found = client.get("/api/cities/", {"search": "mum"}).json()
    assert [c["slug"] for c in found["data"]["cities"]] == ["mumbai"]


def test_detail_by_id_and_by_slug(client, mumbai):
    by_id = client.get(f"/api/cities/{mumbai.pk}/").json()
    by_slug = client.get("/api/cities/mumbai/").json()

    assert by_id["status"] == "success"
    assert by_id["data"]["city"]["id"] == mumbai.pk
    assert by_slug["data"]["city"]["id"] == mumbai.pk
    assert by_slug["data"]["city"]["state"]["name"] == "Maharashtra"


def test_slug_lookup_narrowed_by_parent(client, india, maharashtra, gujarat):
    create(City, name="Aurangabad", state=maharashtra, country=india)
    other = create(City, name="Aurangabad", state=gujarat, country=india)

    body = client.get("/api/cities/slug/aurangabad/", {"state": gujarat.pk}).json()
    assert body["data"]["city"]["id"] == other.pk


def test_not_found_envelope(client, db):
    response = client.get("/api/cities/nowhere/")
    assert response.status_code == 404
    assert response.json() == {"status": "error", "message": "Город не найден"}


def test_search_action(client, india, maharashtra, mumbai):
    create(Location, name="Andheri West", city=mumbai, state=maharashtra, country=india)
    body = client.get("/api/locations/search/andheri/").json()
    assert body["status"] == 1
    assert [loc["slug"] for loc in body["data"]] == ["andheri-west"]


def test_product_seo_url(client, cotton):
    body = client.get("/api/products/organic-cotton/").json()
    assert body["data"]["product"]["seo_url"] == "/fabric/organic-cotton/"


def test_seo_entry_with_location(client, cotton, india, maharashtra, mumbai):
    andheri = create(Location, name="Andheri", city=mumbai, state=maharashtra, country=india)
    seo = create(Seo, product=cotton, location=andheri)

    body = client.get(f"/api/seo/{seo.pk}/").json()
    assert body["data"]["seo"]["product"]["slug"] == "organic-cotton"
    assert body["data"]["seo"]["seo_url"] == "/fabric/organic-cotton/andheri/"


def test_only_published_topics_are_public(client, db):
    create(TopicPage, name="Summer Linen", status=TopicPage.Status.PUBLISHED)
    create(TopicPage, name="Winter Wool")

    body = client.get("/api/topics/").json()
    assert [t["slug"] for t in body["data"]["topics"]] == ["summer-linen"]
    assert client.get("/api/topics/winter-wool/").status_code == 404


def test_api_is_read_only(client, db):
    response = client.post("/api/cities/", {"name": "Pune"}, format="json")
    assert response.status_code == 405
    assert response.json()["status"] == "error"


# ---------- подбор по характеристике ±15% ----------

@pytest.fixture
def fabrics(db):
    return {
        "light": create(Product, name="Voile", gsm=60, oz=1.8, cm=150, inch=59),
        "medium": create(Product, name="Poplin", gsm=115, oz=3.4, cm=140, inch=55),
        "heavy": create(Product, name="Canvas", gsm=300, oz=8.8, cm=150, inch=59),
    }


def test_gsm_range_is_inclusive_fifteen_percent(client, fabrics):
    body = client.get("/api/products/gsm/100/").json()
    assert body["status"] == 1
    assert [p["slug"] for p in body["data"]] == ["poplin"]

    edge = client.get("/api/products/gsm/52.2/").json()
    assert [p["slug"] for p in edge["data"]] == ["voile"]


@pytest.mark.parametrize(
    "field, value, expected",
    [("oz", "3", {"poplin"}), ("cm", "150", {"voile", "poplin", "canvas"}), ("inch", "66", {"voile", "canvas"})],
)
def test_other_ranges(client, fabrics, field, value, expected):
    body = client.get(f"/api/products/{field}/{value}/").json()
    assert {p["slug"] for p in body["data"]} == expected


def test_range_without_matches_is_404(client, fabrics):
    response = client.get("/api/products/gsm/1000/")
    assert response.status_code == 404
    assert response.json()["status"] == "error"


@pytest.mark.parametrize("value", ["abc", "nan"])
def test_range_rejects_non_numbers(client, fabrics, value):
    response = client.get(f"/api/products/gsm/{value}/")
    assert response.status_code == 400
    assert response.json() == {"status": "error", "message": "Некорректное значение GSM"}


# ---------- конверт ошибок ----------

def test_drf_errors_keep_status_and_get_envelope():
    response = catalog_exception_handler(NotFound("Нет такого"), {})
    assert response.status_code == 404
    assert response.data == {"status": "error", "message": "Нет такого"}


def test_validation_details_are_flattened():
    response = catalog_exception_handler(ValidationError({"limit": ["Должно быть числом"]}), {})
    assert response.status_code == 400
    assert response.data["message"] == "limit: Должно быть числом"


def test_unknown_errors_are_left_to_django():
    assert catalog_exception_handler(RuntimeError("boom"), {}) is None
