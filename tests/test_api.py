"""
End-to-end tests for the HTTP routes, served over the built-in demo corpus.
"""

import pytest
from fastapi.testclient import TestClient

import api
from ampere_search.rate_limiter import RateLimiter


@pytest.fixture
def client(monkeypatch):
	monkeypatch.setattr(api, "ENGINE", None)
	monkeypatch.setattr(api, "PARSER", None)
	monkeypatch.setattr(api, "LIMITER", None)
	return TestClient(api.app)


def test_health(client):
	client.get("/api/search", params={"q": "loki"})
	body = client.get("/health").json()
	assert body["status"] == "ok"
	assert body["engine_ready"] is True
	assert body["index_size"] == 22


def test_search_response_shape(client):
	resp = client.get("/api/search", params={"q": " Stranger "})
	assert resp.status_code == 200
	body = resp.json()
	assert body["query"] == "Stranger"
	assert body["totalCount"] == 1
	assert body["searchTimeMs"] >= 0
	assert body["filters"] == {"platforms": [], "genre": "", "type": ""}
	assert body["results"] == [{
		"id": "netflix_strangerthings",
		"title": "Stranger Things",
		"platformId": "netflix",
		"genre": "Basic",
		"type": "series",
		"year": 2016,
		"matchScore": 0.8,
		"platform": "Netflix",
	}]


def test_search_filters_and_limit(client):
	body = client.get("/api/search", params={"genre": "basic", "platforms": "netflix,,hulu", "limit": "3"}).json()
	assert body["totalCount"] == 6
	assert len(body["results"]) == 3
	assert body["filters"] == {"platforms": ["netflix", "hulu"], "genre": "basic", "type": ""}
	assert {r["platformId"] for r in body["results"]} <= {"netflix", "hulu"}
	assert all(r["matchScore"] == 0.5 for r in body["results"])


def test_search_limit_is_clamped(client):
	body = client.get("/api/search", params={"genre": "Basic", "limit": "500"}).json()
	assert body["totalCount"] == 13
	assert len(body["results"]) == 13

	body = client.get("/api/search", params={"genre": "Basic", "limit": "0"}).json()
	assert len(body["results"]) == 1

	body = client.get("/api/search", params={"genre": "Basic", "limit": "lots"}).json()
	assert len(body["results"]) == 13


def test_search_type_filter(client):
	body = client.get("/api/search", params={"platforms": "netflix", "type": "movie"}).json()
	assert [r["title"] for r in body["results"]] == ["Glass Onion"]


def test_search_without_criteria(client):
	resp = client.get("/api/search", params={"type": "movie"})
	assert resp.status_code == 400
	assert resp.json() == {
		"error": "At least one of: q, platforms, genre is required",
		"code": "MISSING_QUERY",
		"status": 400,
	}


@pytest.mark.parametrize("command, parsed", [
	("switch to netflix", {"action": "launch", "target": "netflix"}),
	("search batman", {"action": "search", "query": "batman"}),
	("xyzzy nonsense", {"action": "unknown"}),
])
def test_command(client, command, parsed):
	resp = client.post("/api/search", json={"command": command})
	assert resp.status_code == 200
	assert resp.json() == {"command": command, "parsed": parsed}


@pytest.mark.parametrize("kwargs", [
	{"json": {}},
	{"json": {"command": ""}},
	{"json": {"command": 42}},
	{"json": ["power on"]},
	{"content": b"not json", "headers": {"content-type": "application/json"}},
])
def test_command_missing(client, kwargs):
	resp = client.post("/api/search", **kwargs)
	assert resp.status_code == 400
	assert resp.json()["code"] == "MISSING_COMMAND"
	assert resp.json()["status"] == 400


def test_rate_limited(client, monkeypatch):
	monkeypatch.setattr(api, "LIMITER", RateLimiter(max_requests=2, window_ms=60000))
	headers = {"x-forwarded-for": "203.0.113.9, 10.0.0.1"}

	assert client.get("/api/search", params={"q": "loki"}, headers=headers).status_code == 200
	assert client.post("/api/search", json={"command": "home"}, headers=headers).status_code == 200

	resp = client.get("/api/search", params={"q": "loki"}, headers=headers)
	assert resp.status_code == 429
	assert resp.json()["code"] == "RATE_LIMITED"
	assert resp.headers["x-ratelimit-remaining"] == "0"
	assert int(resp.headers["retry-after"]) >= 0

	# a different client is unaffected
	assert client.get("/api/search", params={"q": "loki"}, headers={"x-forwarded-for": "198.51.100.1"}).status_code == 200
