"""
Breed catalog client.

Fetches the list of breeds each image provider knows about and keeps it for
the lifetime of the process:

- dog.ceo returns ``{breed: [sub, ...]}``; ids are ``breed`` or ``breed/sub``
- TheCatAPI returns ``[{id, name, ...}]``; ids are the provider's short codes

Both are flattened into the same ``CatalogEntry`` shape so the resolver can
treat them alike.
"""
import re
from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, AsyncIterator, Optional

import httpx

from ..utils.logging import get_logger

logger = get_logger(__name__)


DOG_API_URL = "https://dog.ceo/api"
CAT_API_URL = "https://api.thecatapi.com/v1"

DOG_BREEDS_URL = f"{DOG_API_URL}/breeds/list/all"
CAT_BREEDS_URL = f"{CAT_API_URL}/breeds"

_NON_ALPHA = re.compile(r"[^a-z ]")


class AnimalMode(str, Enum):
    """Which image provider (and id shape) a request is using."""
    DOG = "dog"
    CAT = "cat"


@dataclass(frozen=True)
class CatalogEntry:
    """A breed the provider can serve images for."""
    id: str
    tokens: tuple[str, ...]


Catalog = tuple[CatalogEntry, ...]


class CatalogFormatError(ValueError):
    """Upstream answered, but not with a breed list we understand."""


# One published catalog per mode. Only complete, non-empty tuples are stored.
_catalog_cache: dict[AnimalMode, Catalog] = {}


def normalize(text: str) -> list[str]:
    """Lowercase, keep only a-z and spaces, split into words."""
    return _NON_ALPHA.sub("", text.lower()).split()


@asynccontextmanager
async def upstream_client(client: Optional[httpx.AsyncClient] = None) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the caller's client, or a short-lived one closed on exit."""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient() as owned:
        yield owned


def build_dog_catalog(payload: Any) -> Catalog:
    """Flatten a dog.ceo ``breeds/list/all`` payload into catalog entries."""
    if not isinstance(payload, dict) or payload.get("status") != "success":
        raise CatalogFormatError("dog.ceo status was not 'success'")

    breeds = payload.get("message")
    if not isinstance(breeds, dict):
        raise CatalogFormatError("dog.ceo message is not a breed mapping")

    entries = []
    for breed, subs in breeds.items():
        if not isinstance(subs, list):
            raise CatalogFormatError(f"sub-breeds of {breed!r} are not a list")
        breed_tokens = normalize(breed)
        if not subs:
            if breed_tokens:
                entries.append(CatalogEntry(id=breed, tokens=tuple(breed_tokens)))
            continue
        for sub in subs:
            if not isinstance(sub, str):
                raise CatalogFormatError(f"sub-breed {sub!r} of {breed!r} is not a name")
            # Human reading order is "<sub> <breed>", e.g. "golden retriever"
            tokens = tuple(normalize(sub) + breed_tokens)
            if tokens:
                entries.append(CatalogEntry(id=f"{breed}/{sub}", tokens=tokens))
    return tuple(entries)


def build_cat_catalog(payload: Any) -> Catalog:
    """Turn a TheCatAPI ``/breeds`` payload into catalog entries."""
    if not isinstance(payload, list):
        raise CatalogFormatError("TheCatAPI breeds payload is not a list")

    entries = []
    for record in payload:
        name, breed_id = record["name"], record["id"]
        if not isinstance(name, str) or not isinstance(breed_id, str):
            raise CatalogFormatError(f"cat breed record {record!r} has no usable id and name")
        tokens = tuple(normalize(name))
        if tokens:
            entries.append(CatalogEntry(id=breed_id, tokens=tokens))
    return tuple(entries)


_SOURCES = {
    AnimalMode.DOG: (DOG_BREEDS_URL, build_dog_catalog),
    AnimalMode.CAT: (CAT_BREEDS_URL, build_cat_catalog),
}


async def load_catalog(
    mode: AnimalMode,
    client: Optional[httpx.AsyncClient] = None,
) -> Catalog:
    """
    Get the breed catalog for a mode, fetching it on first use.

    Returns an empty catalog if the provider is unreachable or answers with
    something unexpected. Failures are not cached, so the next call retries.
    """
    mode = AnimalMode(mode)
    cached = _catalog_cache.get(mode)
    if cached is not None:
        return cached

    url, build = _SOURCES[mode]
    try:
        async with upstream_client(client) as http:
            response = await http.get(url)
            response.raise_for_status()
            catalog = build(response.json())
    except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
        logger.warning(f"Could not load {mode.value} breed catalog: {e}")
        return ()

    if not catalog:
        logger.warning(f"{mode.value} breed catalog came back empty")
        return ()

    _catalog_cache[mode] = catalog
    logger.info(f"Cached {len(catalog)} {mode.value} breeds")
    return catalog


def clear_catalog_cache() -> None:
    """Forget every cached catalog (tests and maintenance only)."""
    _catalog_cache.clear()
