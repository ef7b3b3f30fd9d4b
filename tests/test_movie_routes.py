"""
Movie Store — HTTP Endpoint Tests
==================================

What:  End-to-end tests of the five movie routes, the health route and the
       error handlers, through the real FastAPI app.
How:   HTTPX AsyncClient over ASGITransport; the process-wide store is
       reseeded before each test by conftest.

What we test:
    ✅ Seed listing, get by id, create, update-moves-to-end, delete
    ✅ Empty 200 responses (with JSON content type) for misses and deletes
    ✅ Malformed bodies absorbed by default
    ✅ Strict modes produce structured 400 / 404 error bodies
    ✅ Request ID header (unsafe client IDs replaced) and router-default 404 / 405
    ✅ Access log lines flag empty responses and carry the movie ID
"""

import logging

import pytest

from moviestore.config import settings
from moviestore.main import app
from moviestore.services.movie_service import movie_service
from moviestore.store import MovieStore, get_movie_store

SEED = [
    {
        "id": "1",
        "isbn": "123456",
        "title": "Movie One",
        "director": {"firstname": "Lebron", "lastname": "James"},
    },
    {
        "id": "2",
        "isbn": "654321",
        "title": "Movie Two",
        "director": {"firstname": "Joe", "lastname": "Biden"},
    },
]


def assert_empty_json(response):
    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["content-type"].startswith("application/json")


class TestListAndGet:

    @pytest.mark.asyncio
    async def test_list_seed(self, test_client):
        response = await test_client.get("/movies")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == SEED

    @pytest.mark.asyncio
    async def test_field_order(self, test_client):
        response = await test_client.get("/movies/1")
        assert list(response.json().keys()) == ["id", "isbn", "title", "director"]

    @pytest.mark.asyncio
    async def test_get_by_id(self, test_client):
        response = await test_client.get("/movies/1")
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "1"
        assert body["title"] == "Movie One"
        assert body["director"]["firstname"] == "Lebron"

    @pytest.mark.asyncio
    async def test_get_missing_is_empty_200(self, test_client):
        response = await test_client.get("/movies/999")
        assert_empty_json(response)


class TestCreate:

    @pytest.mark.asyncio
    async def test_create_assigns_random_id(self, test_client):
        payload = {"isbn": "999", "title": "New", "director": {"firstname": "A", "lastname": "B"}}
        response = await test_client.post("/movies", json=payload)
        assert response.status_code == 200
        created = response.json()
        assert created["id"].isdigit()
        assert 0 <= int(created["id"]) < 1_000_000
        assert created["isbn"] == "999"
        assert created["title"] == "New"
        assert created["director"] == {"firstname": "A", "lastname": "B"}

        listing = (await test_client.get("/movies")).json()
        assert len(listing) == 3
        assert listing[-1] == created

    @pytest.mark.asyncio
    async def test_create_ignores_body_id(self, test_client):
        response = await test_client.post("/movies", json={"id": "not-a-number", "title": "X"})
        assert response.json()["id"] != "not-a-number"

    @pytest.mark.asyncio
    async def test_create_without_director(self, test_client):
        response = await test_client.post("/movies", json={"title": "Solo"})
        assert response.json()["director"] is None

    @pytest.mark.asyncio
    async def test_create_malformed_body_absorbed(self, test_client):
        response = await test_client.post(
            "/movies", content=b"{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 200
        created = response.json()
        assert created["isbn"] == ""
        assert created["title"] == ""
        assert created["director"] is None
        assert len((await test_client.get("/movies")).json()) == 3

    @pytest.mark.asyncio
    async def test_create_deeply_nested_body_absorbed(self, test_client):
        response = await test_client.post("/movies", content=b'{"title":' + b"[" * 100000)
        assert response.status_code == 200
        assert response.json()["title"] == ""
        assert len((await test_client.get("/movies")).json()) == 3

    @pytest.mark.asyncio
    async def test_create_deeply_nested_body_strict(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "strict_body", True)
        response = await test_client.post("/movies", content=b"[" * 100000)
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert len((await test_client.get("/movies")).json()) == 2

    @pytest.mark.asyncio
    async def test_create_reads_first_json_value_only(self, test_client):
        response = await test_client.post("/movies", content=b'{"title":"x"} trailing')
        assert response.status_code == 200
        assert response.json()["title"] == "x"

    @pytest.mark.asyncio
    async def test_update_later_key_wins(self, test_client):
        response = await test_client.put("/movies/2", content=b'{"title":"a","Title":"b"}')
        assert response.json()["title"] == "b"

    @pytest.mark.asyncio
    async def test_create_strict_body_rejects(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "strict_body", True)
        response = await test_client.post("/movies", json={"title": 5})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"] == {"field": "title"}
        assert body["request_id"] == response.headers["x-request-id"]
        assert len((await test_client.get("/movies")).json()) == 2

    @pytest.mark.asyncio
    async def test_create_unique_ids_exhausted_is_500(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "unique_ids", True)
        monkeypatch.setattr(settings, "id_max_attempts", 2)
        monkeypatch.setattr(movie_service, "_new_id", lambda: "1")
        response = await test_client.post("/movies", json={"title": "Clash"})
        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "2 attempts" in body["message"]


class TestUpdate:

    @pytest.mark.asyncio
    async def test_update_moves_to_end_and_keeps_id(self, test_client):
        response = await test_client.put(
            "/movies/1",
            json={"id": "555", "isbn": "1", "title": "Renamed", "director": None},
        )
        assert response.status_code == 200
        assert response.json() == {"id": "1", "isbn": "1", "title": "Renamed", "director": None}

        listing = (await test_client.get("/movies")).json()
        assert [m["id"] for m in listing] == ["2", "1"]
        assert listing[-1]["title"] == "Renamed"
        assert (await test_client.get("/movies/555")).content == b""

    @pytest.mark.asyncio
    async def test_update_missing_is_empty_noop(self, test_client):
        response = await test_client.put("/movies/999", json={"title": "Ghost"})
        assert_empty_json(response)
        assert (await test_client.get("/movies")).json() == SEED

    @pytest.mark.asyncio
    async def test_update_missing_strict(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "strict_not_found", True)
        response = await test_client.put("/movies/999", json={"title": "Ghost"})
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_removes_movie(self, test_client):
        response = await test_client.delete("/movies/2")
        assert_empty_json(response)

        assert_empty_json(await test_client.get("/movies/2"))
        listing = (await test_client.get("/movies")).json()
        assert listing == SEED[:1]

    @pytest.mark.asyncio
    async def test_delete_twice_is_noop(self, test_client):
        first = await test_client.delete("/movies/2")
        second = await test_client.delete("/movies/2")
        assert_empty_json(first)
        assert_empty_json(second)
        assert len((await test_client.get("/movies")).json()) == 1

    @pytest.mark.asyncio
    async def test_delete_missing_stays_silent_in_strict_mode(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "strict_not_found", True)
        assert_empty_json(await test_client.delete("/movies/999"))


class TestStrictNotFound:

    @pytest.mark.asyncio
    async def test_get_missing_404(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "strict_not_found", True)
        response = await test_client.get("/movies/999")
        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert "999" in body["message"]

    @pytest.mark.asyncio
    async def test_get_existing_unaffected(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "strict_not_found", True)
        response = await test_client.get("/movies/2")
        assert response.status_code == 200
        assert response.json() == SEED[1]


class TestPlumbing:

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/movies")
        assert len(response.headers["x-request-id"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/movies", headers={"X-Request-ID": "trace-me"})
        assert response.headers["x-request-id"] == "trace-me"

    @pytest.mark.asyncio
    async def test_access_log_line(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="moviestore.access")
        await test_client.get("/movies/1", headers={"X-Request-ID": "abc12345"})
        await test_client.get("/health")
        records = [r for r in caplog.records if r.name == "moviestore.access"]
        assert len(records) == 1
        assert records[0].levelno == logging.INFO
        assert "GET /movies/1 200" in records[0].getMessage()
        assert records[0].request_id == "abc12345"
        assert records[0].movie_id == "1"
        assert records[0].empty_body is False

    @pytest.mark.asyncio
    async def test_access_log_flags_empty_miss(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="moviestore.access")
        await test_client.get("/movies/999")
        await test_client.get("/openapi.json")
        records = [r for r in caplog.records if r.name == "moviestore.access"]
        assert len(records) == 1
        assert "GET /movies/999 200 empty" in records[0].getMessage()
        assert records[0].empty_body is True
        assert records[0].movie_id == "999"

    @pytest.mark.asyncio
    async def test_access_log_listing_has_no_movie_id(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="moviestore.access")
        await test_client.get("/movies")
        records = [r for r in caplog.records if r.name == "moviestore.access"]
        assert records[0].movie_id is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("supplied", ["has space", "x" * 65, "<script>", "semi;colon"])
    async def test_unsafe_request_id_replaced(self, test_client, supplied):
        response = await test_client.get("/movies/999", headers={"X-Request-ID": supplied})
        rid = response.headers["x-request-id"]
        assert rid != supplied
        assert len(rid) == 8

    @pytest.mark.asyncio
    async def test_request_id_in_error_body_is_sanitized(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "strict_not_found", True)
        response = await test_client.get("/movies/999", headers={"X-Request-ID": "bad id!"})
        assert response.status_code == 404
        assert response.json()["request_id"] == response.headers["x-request-id"]
        assert response.json()["request_id"] != "bad id!"

    @pytest.mark.asyncio
    async def test_unknown_path_404(self, test_client):
        response = await test_client.get("/films")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_wrong_method_405(self, test_client):
        response = await test_client.patch("/movies/1", json={})
        assert response.status_code == 405

    @pytest.mark.asyncio
    async def test_health_reports_collection_size(self, test_client):
        await test_client.delete("/movies/1")
        response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["movies"] == 1

    @pytest.mark.asyncio
    async def test_store_dependency_override(self, test_client):
        isolated = MovieStore()
        app.dependency_overrides[get_movie_store] = lambda: isolated
        try:
            assert (await test_client.get("/movies")).json() == []
            await test_client.post("/movies", json={"title": "Only"})
            assert len(isolated) == 1
        finally:
            app.dependency_overrides.clear()
        assert len((await test_client.get("/movies")).json()) == 2
