"""
Breed image fetching service.

Fetches one random photo of a resolved breed from dog.ceo or TheCatAPI.
The photo is decorative, so every failure here ends up as ``None`` and the
caller shows a placeholder instead.
"""
from typing import Optional, Union

import httpx

from .catalog import (
    CAT_API_URL,
    DOG_API_URL,
    AnimalMode,
    load_catalog,
    upstream_client,
)
from .resolver import resolve_breed
from ..utils.logging import get_logger

logger = get_logger(__name__)


CAT_SEARCH_URL = f"{CAT_API_URL}/images/search"


async def _fetch_dog_image(client: httpx.AsyncClient, breed_path: str) -> Optional[str]:
    response = await client.get(f"{DOG_API_URL}/breed/{breed_path}/images/random")
    if not response.is_success:
        return None
    data = response.json()
    if data.get("status") != "success":
        return None
    url = data["message"]
    return url if isinstance(url, str) else None


async def _fetch_cat_image(client: httpx.AsyncClient, breed_id: str) -> Optional[str]:
    response = await client.get(
        CAT_SEARCH_URL,
        params={"breed_ids": breed_id, "limit": 1},
    )
    if not response.is_success:
        return None
    data = response.json()
    if isinstance(data, list) and data:
        url = data[0]["url"]
        return url if isinstance(url, str) else None
    return None


_FETCHERS = {
    AnimalMode.DOG: _fetch_dog_image,
    AnimalMode.CAT: _fetch_cat_image,
}


async def fetch_breed_image(
    mode: AnimalMode,
    entry_id: str,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[str]:
    """
    Fetch a random image URL for a catalog entry id.

    Returns None when the provider is down, has no image, or answers with
    something we can't read.
    """
    mode = AnimalMode(mode)
    try:
        async with upstream_client(client) as http:
            return await _FETCHERS[mode](http, entry_id)
    except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError, IndexError) as e:
        logger.warning(f"{mode.value} image lookup for {entry_id!r} failed: {e}")
        return None


async def resolve_image(
    mode: Union[AnimalMode, str],
    breed: str,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[str]:
    """
    Turn an LLM breed name into a photo URL of that breed.

    Args:
        mode: "dog" or "cat"
        breed: Free-form breed name, e.g. "Labrador Retriever"
        client: Shared HTTP client; a temporary one is used if omitted

    Returns:
        An image URL, or None if anything along the way didn't work out.
    """
    try:
        mode = AnimalMode(mode)
        async with upstream_client(client) as http:
            catalog = await load_catalog(mode, http)
            if not catalog:
                return None

            entry_id = resolve_breed(breed, catalog)
            if entry_id is None:
                logger.info(f"No {mode.value} catalog match for breed {breed!r}")
                return None

            return await fetch_breed_image(mode, entry_id, http)

    except Exception as e:
        logger.exception(f"Unexpected error resolving image for {breed!r}: {e}")
        return None
