"""Pytest configuration and fixtures."""

import os

import httpx
import pytest

# Set before the app (and its cached settings) are imported
os.environ["LLM_PROVIDER"] = "fake"
os.environ["THECATAPI_KEY"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

from breedmatch.services.catalog import clear_catalog_cache  # noqa: E402


DOG_BREEDS_PAYLOAD = {
    "status": "success",
    "message": {
        "affenpinscher": [],
        "bulldog": ["english", "french"],
        "husky": [],
        "retriever": ["golden", "labrador"],
        "shepherd": ["german"],
    },
}

CAT_BREEDS_PAYLOAD = [
    {"id": "ebur", "name": "European Burmese", "origin": "Burma"},
    {"id": "rblu", "name": "Russian Blue", "origin": "Russia"},
]


class FakeUpstream:
    """Routes requests to canned responses and records what was asked."""

    def __init__(self, routes: dict):
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"status": "error", "message": "not found"})
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(request)
        status_code, body = route
        return httpx.Response(status_code, json=body)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


@pytest.fixture(autouse=True)
def fresh_catalog_cache():
    """Every test starts (and ends) with no cached catalogs."""
    clear_catalog_cache()
    yield
    clear_catalog_cache()


@pytest.fixture
def dog_upstream():
    """dog.ceo with a small breed list and one labrador photo."""
    return FakeUpstream({
        "/api/breeds/list/all": (200, DOG_BREEDS_PAYLOAD),
        "/api/breed/retriever/labrador/images/random": (
            200,
            {"status": "success", "message": "https://images.dog.ceo/breeds/retriever-labrador/1.jpg"},
        ),
        "/api/breed/retriever/golden/images/random": (
            200,
            {"status": "success", "message": "https://images.dog.ceo/breeds/retriever-golden/2.jpg"},
        ),
    })


@pytest.fixture
def cat_upstream():
    """TheCatAPI with two breeds; only Russian Blue has a photo."""

    def search(request: httpx.Request) -> httpx.Response:
        if request.url.params.get("breed_ids") == "rblu":
            return httpx.Response(200, json=[{"id": "abc", "url": "https://cdn2.thecatapi.com/images/abc.jpg"}])
        return httpx.Response(200, json=[])

    return FakeUpstream({
        "/v1/breeds": (200, CAT_BREEDS_PAYLOAD),
        "/v1/images/search": search,
    })
