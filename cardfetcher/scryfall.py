"""
Scryfall API client.

Runs card searches against api.scryfall.com and turns the result list into
Candidate objects. Nothing past this module sees raw Scryfall JSON.

A search with no hits comes back from Scryfall as a 404 error object; that
is treated as an empty result, not a failure.
"""

import logging

import httpx

from cardfetcher.models import Candidate, Target

logger = logging.getLogger(__name__)

BASE_URL = "https://api.scryfall.com"
SEARCH_PATH = "/cards/search"
USER_AGENT = "CardFetcher/2.0 (Signal card lookup bot)"


class ScryfallError(Exception):
    """Raised when a search can't be completed: error object, HTTP or parse failure."""
    def __init__(self, status: int, details: str, warnings: list[str] | None = None):
        self.status = status
        self.details = details
        self.warnings = warnings or []
        super().__init__(details)


_client: httpx.AsyncClient | None = None


def get_client() -> httpx.AsyncClient:
    global _client
    if _client is None:
        _client = httpx.AsyncClient(
            headers={
                "User-Agent": USER_AGENT,
                "Accept": "application/json",
            },
            timeout=10.0,
        )
    return _client


async def _get(path: str, params: dict | None = None) -> dict:
    """Raw GET against the Scryfall API."""
    client = get_client()
    url = f"{BASE_URL}{path}"
    logger.debug("GET %s params=%s", url, params)
    try:
        response = await client.get(url, params=params)
        data = response.json()
    except httpx.HTTPError as e:
        raise ScryfallError(status=0, details=f"Request failed: {e}") from e
    except ValueError as e:
        raise ScryfallError(status=0, details="Scryfall returned an unreadable response") from e

    if not isinstance(data, dict):
        raise ScryfallError(status=response.status_code, details="Unexpected response shape")
    if data.get("object") == "error":
        raise ScryfallError(
            status=data.get("status", response.status_code),
            details=data.get("details", "Unknown error"),
            warnings=data.get("warnings"),
        )
    if response.is_error:
        raise ScryfallError(status=response.status_code, details=response.reason_phrase)
    return data


async def search_cards(query: str) -> list[Candidate]:
    """
    Run a full-text card search and return every usable candidate.

    Returns an empty list when Scryfall finds nothing.
    """
    try:
        data = await _get(SEARCH_PATH, params={"q": query})
    except ScryfallError as e:
        if e.status == 404:
            logger.debug("No search results for %r", query)
            return []
        raise

    return parse_candidates(data.get("data"))


def parse_candidates(records) -> list[Candidate]:
    """Validate a Scryfall card list. Records without a usable name are skipped."""
    if not isinstance(records, list):
        return []

    candidates = []
    for record in records:
        candidate = _to_candidate(record)
        if candidate is None:
            logger.debug("Skipping malformed card record: %r", record)
            continue
        candidates.append(candidate)
    return candidates


def _str_or_none(value) -> str | None:
    return value if isinstance(value, str) and value else None


def _dict(value) -> dict:
    return value if isinstance(value, dict) else {}


def _image_url(card: dict, size: str = "png") -> str | None:
    """
    Return an image URL for the card. Falls back to the first face for DFCs.
    """
    images = _dict(card.get("image_uris"))
    if not images:
        faces = card.get("card_faces")
        if isinstance(faces, list) and faces:
            images = _dict(_dict(faces[0]).get("image_uris"))
    return _str_or_none(images.get(size))


def _to_candidate(card) -> Candidate | None:
    if not isinstance(card, dict):
        return None
    name = _str_or_none(card.get("name"))
    if name is None or not name.strip():
        return None

    related = _dict(card.get("related_uris"))
    related_urls = {}
    for target in (Target.GATHERER, Target.EDHREC):
        url = _str_or_none(related.get(target.value))
        if url:
            related_urls[target] = url

    legalities = {
        fmt: status
        for fmt, status in _dict(card.get("legalities")).items()
        if isinstance(fmt, str) and isinstance(status, str)
    }

    return Candidate(
        name=name,
        image_url=_image_url(card),
        related_urls=related_urls,
        legalities=legalities,
        purchase_url=_str_or_none(_dict(card.get("purchase_uris")).get("tcgplayer")),
    )


async def close() -> None:
    """Close the shared httpx client."""
    global _client
    if _client:
        await _client.aclose()
        _client = None
