"""Smoke tests — エンドポイントの応答を確認"""
import threading
from unittest.mock import patch

import pytest
import requests
from fastapi.testclient import TestClient

from conftest import CLUBS_URL, GEOCODE_URL, FakeResponse, club, load_script
from club_api import config
from club_api.database import SessionLocal, init_db
from club_api.main import app
from club_api.models import SportsClub
from club_api.services.search import SearchNotFound

client = TestClient(app)
import_clubs = load_script("import_clubs")

CLUBS = [
    club("Фитнес A", "57.15", "65.54", "4.5"),
    club("Бассейн B", "60.0", "65.53", "4.9"),
    club("Зал без координат", "", "65.53", "4.0"),
]


@pytest.fixture(autouse=True)
def seeded_db():
    init_db()
    db = SessionLocal()
    try:
        db.query(SportsClub).delete()
        for record in CLUBS:
            db.add(import_clubs.to_model(record))
        db.commit()
    finally:
        db.close()
    yield


def fake_get(responses):
    def _get(url, params=None, headers=None, timeout=None):
        resp = responses[url]
        if isinstance(resp, Exception):
            raise resp
        return resp
    return _get


def patched(responses):
    get = fake_get(responses)
    return (
        patch("club_api.services.geocoding._session.get", side_effect=get),
        patch("club_api.services.club_source._session.get", side_effect=get),
    )


def search(params, responses):
    geo_patch, clubs_patch = patched(responses)
    with geo_patch as geo_get, clubs_patch as clubs_get:
        r = client.get("/api/v1/search", params=params)
    return r, geo_get, clubs_get


USER = FakeResponse([{"lat": "57.15", "lon": "65.53"}])


class TestHealthAndMeta:
    def test_health(self):
        r = client.get("/api/v1/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"

    def test_map_config(self):
        r = client.get("/api/v1/map-config")
        assert r.status_code == 200
        data = r.json()
        assert data["center"] == {"lat": 57.1522, "lon": 65.5272}
        assert data["zoom"] == 12

    def test_index(self):
        r = client.get("/")
        assert r.status_code == 200
        assert "leaflet" in r.text

    def test_openapi(self):
        r = client.get("/openapi.json")
        assert r.status_code == 200


class TestAllClubs:
    def test_records_use_backend_field_names(self):
        r = client.get("/all-clubs")
        assert r.status_code == 200
        data = r.json()
        assert len(data) == 3
        assert data[0]["Название"] == "Фитнес A"
        assert data[0]["Координаты (lat)"] == "57.15"
        assert data[2]["Координаты (lat)"] is None


class TestSearch:
    def test_nearby_filter(self):
        r, _, _ = search(
            {"address": "ул. Республики, 1", "min_rating": "4", "max_distance": "5"},
            {GEOCODE_URL: USER, CLUBS_URL: FakeResponse(CLUBS)},
        )
        assert r.status_code == 200
        data = r.json()
        assert data["user_location"] == {"lat": 57.15, "lon": 65.53}
        assert data["total"] == 1
        assert data["dropped"] == 1
        assert data["clubs"][0]["name"] == "Фитнес A"
        assert data["clubs"][0]["distance_km"] == pytest.approx(0.6, abs=0.01)

    def test_blank_thresholds_are_unset(self):
        r, _, _ = search(
            {"address": "Республики", "min_rating": "", "max_distance": ""},
            {GEOCODE_URL: USER, CLUBS_URL: FakeResponse(CLUBS)},
        )
        assert r.status_code == 200
        assert [c["name"] for c in r.json()["clubs"]] == ["Фитнес A", "Бассейн B"]

    def test_empty_address(self):
        r, geo_get, clubs_get = search({"address": ""}, {})
        assert r.status_code == 400
        assert r.json()["detail"] == "Введите адрес!"
        geo_get.assert_not_called()
        clubs_get.assert_not_called()

    def test_invalid_threshold(self):
        r, geo_get, _ = search({"address": "Республики", "min_rating": "abc"}, {})
        assert r.status_code == 400
        geo_get.assert_not_called()

    def test_address_not_found(self):
        r, _, clubs_get = search({"address": "нигде"}, {GEOCODE_URL: FakeResponse([])})
        assert r.status_code == 404
        assert r.json()["detail"] == "Адрес не найден!"
        clubs_get.assert_not_called()

    def test_club_list_not_array(self):
        r, _, _ = search(
            {"address": "Республики"},
            {GEOCODE_URL: USER, CLUBS_URL: FakeResponse({"clubs": CLUBS})},
        )
        assert r.status_code == 502
        assert r.json()["detail"].startswith("data_shape")

    def test_backend_unreachable(self):
        r, _, _ = search(
            {"address": "Республики"},
            {GEOCODE_URL: USER, CLUBS_URL: requests.ConnectionError("refused")},
        )
        assert r.status_code == 502

    def test_unexpected_error_is_502(self):
        r, _, clubs_get = search(
            {"address": "Республики"},
            {GEOCODE_URL: RuntimeError("boom")},
        )
        assert r.status_code == 502
        assert r.json()["detail"].startswith("unexpected")
        clubs_get.assert_not_called()

    def test_huge_number_in_club_record_is_dropped(self):
        huge = club("Огромный рейтинг", "57.15", "65.54", 10 ** 400)
        r, _, _ = search(
            {"address": "Республики"},
            {GEOCODE_URL: USER, CLUBS_URL: FakeResponse(CLUBS[:1] + [huge])},
        )
        assert r.status_code == 200
        data = r.json()
        assert [c["name"] for c in data["clubs"]] == ["Фитнес A"]
        assert data["dropped"] == 1

    def test_search_runs_on_its_own_threads(self):
        seen = []

        def fake_run_search(address, criteria):
            seen.append(threading.current_thread().name)
            return SearchNotFound("Адрес не найден!")

        with patch("club_api.routes.clubs.run_search", side_effect=fake_run_search):
            r = client.get("/api/v1/search", params={"address": "Республики"})

        assert r.status_code == 404
        assert len(seen) == 1
        assert seen[0].startswith("club-search")


def test_default_club_source_follows_api_port():
    assert config.CLUBS_API_BASE == f"http://localhost:{config.API_PORT}"


def test_tests_use_temporary_database():
    assert config.DATABASE_URL.startswith("sqlite:///")
    assert "club_finder_" in config.DATABASE_URL
