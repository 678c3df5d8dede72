"""Tests for the breed catalog client and its cache."""

import asyncio

import httpx
import pytest

from breedmatch.services.catalog import (
    AnimalMode,
    CatalogEntry,
    CatalogFormatError,
    build_cat_catalog,
    build_dog_catalog,
    load_catalog,
    normalize,
)

from conftest import CAT_BREEDS_PAYLOAD, DOG_BREEDS_PAYLOAD, FakeUpstream


def _load(mode, upstream):
    async def scenario():
        async with upstream.client() as client:
            return await load_catalog(mode, client)
    return asyncio.run(scenario())


class TestBuildDogCatalog:
    """Tests for flattening the dog.ceo breed mapping."""

    def test_breeds_and_sub_breeds(self):
        catalog = build_dog_catalog(DOG_BREEDS_PAYLOAD)

        assert catalog[0] == CatalogEntry(id="affenpinscher", tokens=("affenpinscher",))
        assert CatalogEntry(id="retriever/golden", tokens=("golden", "retriever")) in catalog
        assert CatalogEntry(id="shepherd/german", tokens=("german", "shepherd")) in catalog
        # Breeds with sub-breeds only appear as their sub-breeds
        assert "retriever" not in {entry.id for entry in catalog}
        assert len(catalog) == 7

    def test_keeps_upstream_order(self):
        ids = [entry.id for entry in build_dog_catalog(DOG_BREEDS_PAYLOAD)]
        assert ids == [
            "affenpinscher",
            "bulldog/english",
            "bulldog/french",
            "husky",
            "retriever/golden",
            "retriever/labrador",
            "shepherd/german",
        ]

    def test_rejects_error_status(self):
        with pytest.raises(CatalogFormatError):
            build_dog_catalog({"status": "error", "message": "down for maintenance"})

    def test_rejects_bad_shape(self):
        with pytest.raises(CatalogFormatError):
            build_dog_catalog({"status": "success", "message": ["husky"]})


class TestBuildCatCatalog:
    """Tests for TheCatAPI breed records."""

    def test_names_are_normalized(self):
        catalog = build_cat_catalog(CAT_BREEDS_PAYLOAD + [{"id": "cspa", "name": "Cornish-Rex (Spotted)"}])

        assert catalog[0] == CatalogEntry(id="ebur", tokens=("european", "burmese"))
        assert catalog[1] == CatalogEntry(id="rblu", tokens=("russian", "blue"))
        assert catalog[2] == CatalogEntry(id="cspa", tokens=("cornishrex", "spotted"))

    def test_drops_names_without_letters(self):
        assert build_cat_catalog([{"id": "x", "name": "123"}]) == ()

    def test_rejects_non_list(self):
        with pytest.raises(CatalogFormatError):
            build_cat_catalog({"message": "rate limited"})


def test_normalize():
    assert normalize("  Russian   Blue! ") == ["russian", "blue"]
    assert normalize("St. Bernard's") == ["st", "bernards"]
    assert normalize("") == []


class TestLoadCatalog:
    """Tests for fetching and caching catalogs."""

    def test_dog_catalog(self, dog_upstream):
        catalog = _load(AnimalMode.DOG, dog_upstream)

        assert len(catalog) == 7
        assert dog_upstream.paths() == ["/api/breeds/list/all"]
        assert str(dog_upstream.requests[0].url) == "https://dog.ceo/api/breeds/list/all"

    def test_cat_catalog(self, cat_upstream):
        catalog = _load("cat", cat_upstream)

        assert [entry.id for entry in catalog] == ["ebur", "rblu"]
        assert str(cat_upstream.requests[0].url) == "https://api.thecatapi.com/v1/breeds"

    def test_second_load_is_cached(self, dog_upstream):
        first = _load(AnimalMode.DOG, dog_upstream)
        second = _load(AnimalMode.DOG, dog_upstream)

        assert second is first
        assert len(dog_upstream.requests) == 1

    def test_modes_are_cached_separately(self, dog_upstream, cat_upstream):
        _load(AnimalMode.DOG, dog_upstream)
        cats = _load(AnimalMode.CAT, cat_upstream)

        assert [entry.id for entry in cats] == ["ebur", "rblu"]
        assert len(cat_upstream.requests) == 1

    @pytest.mark.parametrize("route", [
        (500, {"status": "error"}),
        (200, {"status": "error", "message": "nope"}),
        (200, {"status": "success", "message": {}}),
        (200, ["not", "a", "mapping"]),
        httpx.ConnectError("connection refused"),
        httpx.ReadTimeout("timed out"),
        (200, {"status": "success", "message": {"hound": [1]}}),
        (200, {"status": "success", "message": {"hound": ["afghan", None]}}),
    ])
    def test_failures_are_empty_and_not_cached(self, dog_upstream, route):
        failing = FakeUpstream({"/api/breeds/list/all": route})

        assert _load(AnimalMode.DOG, failing) == ()

        # A later call gets to try again
        assert len(_load(AnimalMode.DOG, dog_upstream)) == 7
        assert len(dog_upstream.requests) == 1

    def test_invalid_json_is_empty(self):
        def garbage(request):
            return httpx.Response(200, content=b"<html>oops</html>")

        assert _load(AnimalMode.DOG, FakeUpstream({"/api/breeds/list/all": garbage})) == ()

    def test_cat_records_missing_fields(self):
        broken = FakeUpstream({"/v1/breeds": (200, [{"id": "abys"}])})
        assert _load(AnimalMode.CAT, broken) == ()

    @pytest.mark.parametrize("record", [
        {"id": "abys", "name": None},
        {"id": "abys", "name": ["Abyssinian"]},
        {"id": None, "name": "Abyssinian"},
        "abys",
    ])
    def test_cat_records_with_wrong_types(self, cat_upstream, record):
        broken = FakeUpstream({"/v1/breeds": (200, [record])})

        assert _load(AnimalMode.CAT, broken) == ()
        assert [entry.id for entry in _load(AnimalMode.CAT, cat_upstream)] == ["ebur", "rblu"]
