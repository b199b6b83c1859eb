import pytest
import requests
from requests.adapters import HTTPAdapter

from app.catalog import SWAPI_POOL_SIZE, CatalogClient, build_session
from app.errors import UpstreamMalformed, UpstreamUnavailable

FILM_PAYLOAD = {
    "title": "A New Hope",
    "episode_id": 4,
    "opening_crawl": "It is a period of civil war.",
    "director": "George Lucas",
    "producer": "Gary Kurtz, Rick McCallum",
    "release_date": "1977-05-25",
    "characters": ["https://swapi.dev/api/people/1/"],
    "planets": [],
    "starships": [],
    "vehicles": [],
    "species": [],
    "created": "2014-12-10T14:23:31.880000Z",
    "edited": "2014-12-20T19:49:45.256000Z",
    "url": "https://swapi.dev/api/films/1/",
}

LUKE_PAYLOAD = {
    "name": "Luke Skywalker",
    "height": "172",
    "mass": "77",
    "hair_color": "blond",
    "skin_color": "fair",
    "eye_color": "blue",
    "birth_year": "19BBY",
    "gender": "male",
    "homeworld": "https://swapi.dev/api/planets/1/",
}


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self._text = text

    def json(self):
        if self._text is not None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    def __init__(self, routes=None, error=None):
        self.routes = routes or {}
        self.error = error
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.routes[url]


def client_with(**kwargs):
    session = FakeSession(**kwargs)
    return CatalogClient(base_url="https://swapi.test/api/", timeout=3, session=session), session


def test_fetch_films_parses_results_and_ignores_extra_fields():
    payload = {"count": 1, "next": None, "previous": None, "results": [dict(FILM_PAYLOAD, extra="x")]}
    client, session = client_with(routes={"https://swapi.test/api/films/": FakeResponse(payload=payload)})

    films = client.fetch_films()

    assert [f.title for f in films] == ["A New Hope"]
    assert films[0].characters == ["https://swapi.dev/api/people/1/"]
    assert session.calls == [("https://swapi.test/api/films/", 3)]


def test_fetch_character_by_reference_url():
    url = "https://swapi.dev/api/people/1/"
    client, _ = client_with(routes={url: FakeResponse(payload=LUKE_PAYLOAD)})

    luke = client.fetch_character(url)

    assert luke.name == "Luke Skywalker"
    assert luke.height == "172"
    assert not hasattr(luke, "homeworld")


def test_transport_error_is_upstream_unavailable():
    client, _ = client_with(error=requests.ConnectionError("dns failure"))
    with pytest.raises(UpstreamUnavailable):
        client.fetch_films()


def test_timeout_is_upstream_unavailable():
    client, _ = client_with(error=requests.Timeout("read timed out"))
    with pytest.raises(UpstreamUnavailable):
        client.fetch_character("https://swapi.dev/api/people/1/")


def test_http_error_status_is_upstream_unavailable():
    url = "https://swapi.dev/api/people/999/"
    client, _ = client_with(routes={url: FakeResponse(status_code=404, payload={"detail": "Not found"})})
    with pytest.raises(UpstreamUnavailable):
        client.fetch_character(url)


def test_invalid_json_is_upstream_malformed():
    client, _ = client_with(routes={"https://swapi.test/api/films/": FakeResponse(text="<html>")})
    with pytest.raises(UpstreamMalformed):
        client.fetch_films()


def test_missing_required_field_is_upstream_malformed():
    url = "https://swapi.dev/api/people/1/"
    payload = {k: v for k, v in LUKE_PAYLOAD.items() if k != "gender"}
    client, _ = client_with(routes={url: FakeResponse(payload=payload)})
    with pytest.raises(UpstreamMalformed):
        client.fetch_character(url)


def test_films_payload_without_results_is_upstream_malformed():
    client, _ = client_with(routes={"https://swapi.test/api/films/": FakeResponse(payload={"detail": "x"})})
    with pytest.raises(UpstreamMalformed):
        client.fetch_films()


def test_default_session_mounts_sized_connection_pool():
    client = CatalogClient(base_url="https://swapi.test/api")
    adapter = client.session.get_adapter("https://swapi.test/api/films/")

    assert isinstance(adapter, HTTPAdapter)
    assert adapter.poolmanager.connection_pool_kw["maxsize"] == SWAPI_POOL_SIZE
    assert adapter.poolmanager.connection_pool_kw["block"] is True


def test_build_session_shares_one_adapter_for_http_and_https():
    session = build_session(pool_size=4)

    https = session.get_adapter("https://swapi.dev/api/people/1/")
    http = session.get_adapter("http://swapi.dev/api/people/1/")

    assert https is http
    assert https.poolmanager.connection_pool_kw["maxsize"] == 4
