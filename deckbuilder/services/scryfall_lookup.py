"""
Scryfall-backed card lookup and metadata snapshot loading.

ScryfallLookup implements the CardLookup protocol over the public API:
    GET /cards/named?fuzzy=<name>
    GET /cards/<set>/<collector_number>

A 404 means "no match" and returns None. Any other failure raises
LookupServiceError. No retry, backoff or rate limiting happens here; callers
that import large lists are expected to pace their own requests.
"""

import json
import logging
from pathlib import Path
from types import TracebackType
from urllib.parse import quote

import httpx

from deckbuilder.config import settings
from deckbuilder.models.card import CardMetadata
from deckbuilder.models.failure import LookupServiceError

logger = logging.getLogger(__name__)


class ScryfallLookup:
    """
    Card lookup against the Scryfall API.

    Pass an existing httpx.AsyncClient to share a connection pool; otherwise
    the lookup owns one and closes it in aclose() / on context exit.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
    ) -> None:
        self._base_url = (base_url or settings.scryfall_api_url).rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=settings.scryfall_timeout_seconds,
            headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
        )

    async def __aenter__(self) -> "ScryfallLookup":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def lookup_by_name_fuzzy(self, name: str) -> CardMetadata | None:
        return await self._get_card("/cards/named", params={"fuzzy": name})

    async def lookup_by_set_and_number(
        self, set_code: str, collector_number: str
    ) -> CardMetadata | None:
        path = f"/cards/{quote(set_code.lower(), safe='')}/{quote(collector_number, safe='')}"
        return await self._get_card(path)

    async def _get_card(
        self, path: str, params: dict[str, str] | None = None
    ) -> CardMetadata | None:
        url = f"{self._base_url}{path}"
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as e:
            raise LookupServiceError(
                "Card lookup request failed",
                detail=f"{type(e).__name__}: {e}",
            ) from e

        if response.status_code == httpx.codes.NOT_FOUND:
            logger.debug("scryfall_no_match", extra={"path": path, "params": params})
            return None

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise LookupServiceError(
                f"Card lookup failed with status {response.status_code}",
                detail=str(e),
            ) from e

        return CardMetadata.from_scryfall(response.json())


def load_metadata_cache(path: Path | None = None) -> dict[str, CardMetadata]:
    """
    Load a metadata snapshot from a Scryfall bulk JSON file.

    Args:
        path: Bulk JSON file. Defaults to settings.metadata_cache_path

    Returns:
        Dict mapping Scryfall card id to CardMetadata

    Raises:
        FileNotFoundError: If no file is configured or it does not exist
    """
    path = path or settings.metadata_cache_path
    if path is None or not path.exists():
        raise FileNotFoundError(
            f"Metadata cache not found at {path}. "
            "Set METADATA_CACHE_PATH to a Scryfall bulk data file."
        )

    with open(path, encoding="utf-8") as f:
        cards = json.load(f)

    cache: dict[str, CardMetadata] = {}
    for card in cards:
        if card.get("id") and card.get("name"):
            metadata = CardMetadata.from_scryfall(card)
            cache[metadata.id] = metadata

    logger.info("metadata_cache_loaded", extra={"path": str(path), "card_count": len(cache)})
    return cache
