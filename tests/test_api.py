import asyncpg
import pytest
from fastapi.testclient import TestClient

from isuumo_service.api.dependencies import (
    get_chair_repository,
    get_estate_repository,
    get_estate_search_condition,
    get_initialize_service,
)
from isuumo_service.config import settings
from isuumo_service.infrastructure.conditions import load_estate_search_condition
from isuumo_service.main import app
from tests.fakes import FakeChairRepository, FakeEstateRepository, make_chair, make_estate


@pytest.fixture
def estate_repo():
    return FakeEstateRepository([
        make_estate(1, 5, 5, popularity=10, rent=40000, door_height=70, door_width=120, features="ロフト"),
        make_estate(2, 15, 5, popularity=20, rent=60000, door_height=160, door_width=90),
        make_estate(3, 9, 1, popularity=30, rent=120000, door_height=100, door_width=100, features="ロフト,角部屋"),
    ])


@pytest.fixture
def chair_repo():
    return FakeChairRepository([make_chair(1, width=60, height=100, depth=95)])


@pytest.fixture
def client(estate_repo, chair_repo):
    condition = load_estate_search_condition(settings.ESTATE_CONDITION_PATH)
    app.dependency_overrides[get_estate_repository] = lambda: estate_repo
    app.dependency_overrides[get_chair_repository] = lambda: chair_repo
    app.dependency_overrides[get_estate_search_condition] = lambda: condition
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_nazotte_returns_estates_inside_polygon(client):
    body = {"coordinates": [
        {"latitude": 0, "longitude": 0},
        {"latitude": 0, "longitude": 10},
        {"latitude": 10, "longitude": 10},
        {"latitude": 10, "longitude": 0},
    ]}

    response = client.post("/api/estate/nazotte", json=body)

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == len(data["estates"]) == 2
    assert [e["id"] for e in data["estates"]] == [3, 1]
    assert data["estates"][1]["doorHeight"] == 70
    assert data["estates"][1]["doorWidth"] == 120
    assert "popularity" not in data["estates"][0]


def test_nazotte_rejects_empty_polygon(client):
    response = client.post("/api/estate/nazotte", json={"coordinates": []})
    assert response.status_code == 400


def test_nazotte_rejects_malformed_body(client):
    response = client.post("/api/estate/nazotte", json={"coordinates": [{"latitude": "north"}]})
    assert response.status_code == 400


def test_search_by_rent_bucket(client):
    response = client.get("/api/estate/search", params={"rentRangeId": "1", "page": "0", "perPage": "10"})

    assert response.status_code == 200
    assert response.json()["count"] == 1
    assert [e["id"] for e in response.json()["estates"]] == [2]


def test_search_by_features_and_door_height(client):
    response = client.get("/api/estate/search", params={
        "features": "ロフト",
        "doorHeightRangeId": "0",
        "page": "0",
        "perPage": "10",
    })

    assert response.status_code == 200
    assert [e["id"] for e in response.json()["estates"]] == [1]


def test_search_paginates_but_counts_everything(client):
    response = client.get("/api/estate/search", params={"features": "", "rentRangeId": "", "page": "0", "perPage": "1"})
    assert response.status_code == 400

    response = client.get("/api/estate/search", params={"doorWidthRangeId": "1", "page": "0", "perPage": "1"})
    data = response.json()
    assert data["count"] == 2
    assert [e["id"] for e in data["estates"]] == [3]


@pytest.mark.parametrize("params", [
    {"page": "0", "perPage": "10"},
    {"rentRangeId": "99", "page": "0", "perPage": "10"},
    {"rentRangeId": "x", "page": "0", "perPage": "10"},
    {"rentRangeId": "1", "perPage": "10"},
    {"rentRangeId": "1", "page": "0", "perPage": "zero"},
])
def test_search_rejects_bad_requests(client, params):
    assert client.get("/api/estate/search", params=params).status_code == 400


def test_search_condition_catalogue(client):
    data = client.get("/api/estate/search/condition").json()

    assert set(data) == {"doorWidth", "doorHeight", "rent", "feature"}
    assert data["rent"]["ranges"][0] == {"id": 0, "min": -1, "max": 50000}
    assert "ロフト" in data["feature"]["list"]


def test_estate_detail(client):
    assert client.get("/api/estate/3").json()["name"] == "estate 3"
    assert client.get("/api/estate/404").status_code == 404
    assert client.get("/api/estate/abc").status_code == 400


def test_low_priced(client):
    data = client.get("/api/estate/low_priced").json()
    assert [e["id"] for e in data["estates"]] == [1, 2, 3]


def test_recommended_estate(client):
    data = client.get("/api/recommended_estate/1").json()
    # chair needs door_min >= 60 and door_max >= 95
    assert [e["id"] for e in data["estates"]] == [3, 2, 1]

    assert client.get("/api/recommended_estate/2").status_code == 404


def test_request_document(client):
    assert client.post("/api/estate/req_doc/1", json={"email": "a@example.com"}).status_code == 200
    assert client.post("/api/estate/req_doc/1", json={}).status_code == 400
    assert client.post("/api/estate/req_doc/404", json={"email": "a@example.com"}).status_code == 404


def test_post_estate_csv(client, estate_repo):
    csv_body = "10,New,desc,/10.png,addr,1.5,2.5,30000,100,100,,5\n".encode("utf-8")

    response = client.post("/api/estate", files={"estates": ("estates.csv", csv_body, "text/csv")})

    assert response.status_code == 201
    assert estate_repo.estates[-1].id == 10


def test_post_estate_csv_malformed(client, estate_repo):
    response = client.post("/api/estate", files={"estates": ("estates.csv", b"10,New\n", "text/csv")})

    assert response.status_code == 400
    assert len(estate_repo.estates) == 3


def test_chair_routes(client, chair_repo):
    csv_body = "2,Stool,,/2.png,5000,45,35,35,white,,stool,1,0\n".encode("utf-8")

    assert client.post("/api/chair", files={"chairs": ("chairs.csv", csv_body, "text/csv")}).status_code == 201
    assert client.get("/api/chair/1").json()["depth"] == 95
    assert client.get("/api/chair/2").status_code == 404


def test_initialize(client):
    class _Initializer:
        called = False

        async def initialize(self):
            _Initializer.called = True

    app.dependency_overrides[get_initialize_service] = lambda: _Initializer()

    response = client.post("/initialize")

    assert response.status_code == 200
    assert response.json() == {"language": "python"}
    assert _Initializer.called


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"


class _BrokenEstateRepository(FakeEstateRepository):
    async def find_by_id(self, estate_id):
        raise asyncpg.InterfaceError("invalid input for query argument $1")


def test_client_side_driver_errors_become_logged_500(client, caplog):
    app.dependency_overrides[get_estate_repository] = lambda: _BrokenEstateRepository()

    response = client.get("/api/estate/1")

    assert response.status_code == 500
    assert response.json() == {"detail": "internal server error"}
    assert any(r.levelname == "ERROR" and "/api/estate/1" in r.getMessage() for r in caplog.records)
