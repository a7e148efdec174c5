"""Tests for the HTTP API."""

from __future__ import annotations

from dataclasses import replace

import pytest
from fastapi.testclient import TestClient

from typeahead.api.app import create_app
from typeahead.config.settings import Settings
from typeahead.exceptions import StoreError
from typeahead.storage.ordered_set import MemoryOrderedSetStore


class BrokenStore(MemoryOrderedSetStore):
    """Store whose reads always fail."""

    async def rank(self, key, member):
        raise StoreError("connection refused")


@pytest.fixture
def client(settings: Settings):
    app = create_app(settings, store=MemoryOrderedSetStore())
    with TestClient(app) as c:
        yield c


def add(client: TestClient, *words: str) -> None:
    for word in words:
        assert client.post("/words", json={"word": word}).status_code == 200


class TestHealth:
    def test_health(self, client: TestClient):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestWords:
    def test_add_new_word(self, client: TestClient):
        resp = client.post("/words", json={"word": " Cat "})
        assert resp.status_code == 200
        assert resp.json() == {"word": "cat", "added": True}

    def test_add_known_word(self, client: TestClient):
        add(client, "cat")
        resp = client.post("/words", json={"word": "CAT"})
        assert resp.json() == {"word": "cat", "added": False}

    def test_add_blank_word_rejected(self, client: TestClient):
        resp = client.post("/words", json={"word": "   "})
        assert resp.status_code == 422

    def test_add_unencodable_word_rejected(self, client: TestClient):
        resp = client.post("/words", json={"word": "new york"})
        assert resp.status_code == 422
        assert "new york" in resp.json()["detail"]

    def test_batch(self, client: TestClient):
        resp = client.post("/words/batch", json={"words": ["b", "a", "b"]})
        assert resp.status_code == 200
        assert resp.json() == {"added": ["b", "a"]}

    def test_batch_partial_failure(self, client: TestClient):
        resp = client.post("/words/batch", json={"words": ["cat", " ", "dog"]})
        assert resp.status_code == 502
        assert resp.json()["added"] == ["cat", "dog"]
        # Successful elements stay
        assert client.get("/complete", params={"q": "d"}).json()["completions"] == ["dog"]

    def test_remove(self, client: TestClient):
        add(client, "cat", "cats")
        resp = client.delete("/words/Cat")
        assert resp.status_code == 200
        assert resp.json() == {"word": "cat", "removed": True}
        assert client.get("/complete", params={"q": "cat"}).json()["completions"] == ["cats"]

    def test_remove_unknown(self, client: TestClient):
        resp = client.delete("/words/cat")
        assert resp.json() == {"word": "cat", "removed": False}

    def test_flush(self, client: TestClient):
        add(client, "cat")
        assert client.delete("/words").json() == {"deleted": 1}
        assert client.delete("/words").json() == {"deleted": 0}
        assert client.get("/stats").json()["total"] == 0


class TestComplete:
    def test_returns_completions(self, client: TestClient):
        add(client, "cat", "catalog", "dog")
        resp = client.get("/complete", params={"q": "CA"})
        assert resp.status_code == 200
        assert resp.json() == {"prefix": "ca", "completions": ["cat", "catalog"]}

    def test_empty_query_rejected(self, client: TestClient):
        resp = client.get("/complete", params={"q": ""})
        assert resp.status_code == 422

    def test_blank_query_returns_nothing(self, client: TestClient):
        add(client, "cat")
        resp = client.get("/complete", params={"q": "  "})
        assert resp.status_code == 200
        assert resp.json() == {"prefix": "", "completions": []}

    def test_limit(self, client: TestClient):
        add(client, "a1", "a2", "a3", "a4")
        resp = client.get("/complete", params={"q": "a", "limit": 2})
        assert resp.json()["completions"] == ["a1", "a2"]

    def test_limit_capped(self, settings: Settings):
        settings = replace(settings, completion=replace(settings.completion, max_limit=3))
        app = create_app(settings, store=MemoryOrderedSetStore())
        with TestClient(app) as c:
            add(c, "a1", "a2", "a3", "a4")
            resp = c.get("/complete", params={"q": "a", "limit": 50})
        assert resp.json()["completions"] == ["a1", "a2", "a3"]

    def test_invalid_limit_rejected(self, client: TestClient):
        resp = client.get("/complete", params={"q": "a", "limit": 0})
        assert resp.status_code == 422


class TestStats:
    def test_stats(self, client: TestClient):
        add(client, "cats")
        resp = client.get("/stats")
        assert resp.status_code == 200
        assert resp.json() == {
            "key": "completer",
            "leaf_count": 1,
            "leaf_char_total": 4,
            "prefix_char_total": 6,
            "total": 5,
        }


class TestStoreFailure:
    def test_store_error_maps_to_503(self, settings: Settings):
        app = create_app(settings, store=BrokenStore())
        with TestClient(app) as c:
            resp = c.get("/complete", params={"q": "cat"})
        assert resp.status_code == 503
        assert resp.json() == {"detail": "Completion store unavailable"}
