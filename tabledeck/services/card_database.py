"""
Card database service.

Keeps a local copy of Scryfall's default-cards bulk file and exposes it as
a card factory, so card lists can name any Magic card and get its images.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import httpx

from tabledeck.config import settings
from tabledeck.models.card import CardInfo, CardNotFoundError, CardShape, FrontImageNotFoundError

logger = logging.getLogger(__name__)

USER_AGENT = "TableDeck/1.0"

BULK_DATA_TYPE = "default_cards"
DOWNLOAD_TIMEOUT = 300.0
CHUNK_SIZE = 64 * 1024

# Preferred image_uris entries, best first
IMAGE_SIZES = ("large", "normal", "png", "small")


async def _find_bulk_download_url(client: httpx.AsyncClient) -> str:
    response = await client.get(settings.scryfall_bulk_api)
    response.raise_for_status()
    for item in response.json()["data"]:
        if item["type"] == BULK_DATA_TYPE:
            return str(item["download_uri"])
    raise ValueError(f"Could not find {BULK_DATA_TYPE} bulk data URL")


async def download_card_database(output_path: Path | None = None) -> Path:
    """
    Download the latest Scryfall default-cards bulk data.

    The file is streamed to `<output_path>.part` and renamed once complete,
    so a reader never sees a half-written database.

    Args:
        output_path: Where to save the file. Defaults to settings.card_database_path

    Returns:
        Path to downloaded file.

    Raises:
        ValueError: If the bulk data index has no default_cards entry
        httpx.HTTPError: If download fails
    """
    if output_path is None:
        output_path = settings.card_database_path
    output_path.parent.mkdir(parents=True, exist_ok=True)
    partial_path = output_path.with_name(output_path.name + ".part")

    async with httpx.AsyncClient(
        timeout=settings.http_timeout,
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
    ) as client:
        download_url = await _find_bulk_download_url(client)
        logger.debug("Bulk data URL: %s", download_url)

        try:
            async with client.stream("GET", download_url, timeout=DOWNLOAD_TIMEOUT) as response:
                response.raise_for_status()
                with partial_path.open("wb") as f:
                    async for chunk in response.aiter_bytes(CHUNK_SIZE):
                        f.write(chunk)
        except BaseException:
            partial_path.unlink(missing_ok=True)
            raise

    partial_path.replace(output_path)
    return output_path


def load_card_database(path: Path | None = None) -> dict[str, dict[str, Any]]:
    """
    Read the bulk file into a name -> card record mapping.

    Scryfall lists every printing; the first one of each name is kept.

    Raises:
        FileNotFoundError: If database file doesn't exist
    """
    if path is None:
        path = settings.card_database_path

    if not path.exists():
        raise FileNotFoundError(
            f"Card database not found at {path}. Run `tabledeck-download-cards` first."
        )

    with path.open(encoding="utf-8") as f:
        cards: list[dict[str, Any]] = json.load(f)

    db: dict[str, dict[str, Any]] = {}
    for card in cards:
        name = card.get("name")
        if name:
            db.setdefault(name, card)

    logger.info("Loaded %d cards from %s", len(db), path)
    return db


@lru_cache(maxsize=1)
def get_card_database() -> dict[str, dict[str, Any]]:
    """Card database, loaded on first use and cached for the process."""
    return load_card_database()


def _pick_image(image_uris: dict[str, str] | None) -> str | None:
    if not image_uris:
        return None
    for size in IMAGE_SIZES:
        if image_uris.get(size):
            return image_uris[size]
    return None


class ScryfallCard(CardInfo):
    """
    A Magic card described by its Scryfall record.

    Single-faced cards (and split/adventure cards, which share one image)
    use the top-level image and the standard card back. Double-faced cards
    show their second face as the back.
    """

    def __init__(self, data: dict[str, Any], default_back_url: str | None = None) -> None:
        self._data = data
        self._default_back_url = default_back_url or settings.card_back_url

    @property
    def name(self) -> str:
        return str(self._data["name"])

    def _faces(self) -> list[dict[str, Any]]:
        faces: list[dict[str, Any]] = self._data.get("card_faces") or []
        return faces

    def front_image_url(self) -> str:
        url = _pick_image(self._data.get("image_uris"))
        if url is None and self._faces():
            url = _pick_image(self._faces()[0].get("image_uris"))
        if url is None:
            raise FrontImageNotFoundError(self.name, self._data.get("scryfall_uri", ""))
        return url

    def back_image_url(self) -> str:
        faces = self._faces()
        if not self._data.get("image_uris") and len(faces) > 1:
            url = _pick_image(faces[1].get("image_uris"))
            if url is not None:
                return url
        return self._default_back_url

    def card_shape(self) -> CardShape:
        return CardShape.ROUNDED_RECTANGLE

    def __repr__(self) -> str:
        return f"ScryfallCard({self.name!r})"


class ScryfallCardSource:
    """
    Card factory backed by a Scryfall card database.

    Names must match Scryfall's exactly (case-sensitive).
    """

    def __init__(
        self,
        card_db: dict[str, dict[str, Any]],
        default_back_url: str | None = None,
    ) -> None:
        self._card_db = card_db
        self._default_back_url = default_back_url

    def __call__(self, name: str) -> ScryfallCard:
        data = self._card_db.get(name)
        if data is None:
            raise CardNotFoundError(name)
        return ScryfallCard(data, self._default_back_url)


def fetch_image(url: str) -> bytes:
    """
    Download an image, e.g. a card face to use as a saved-object thumbnail.

    Raises:
        httpx.HTTPError: If the download fails
    """
    response = httpx.get(
        url,
        headers={"User-Agent": USER_AGENT},
        timeout=settings.http_timeout,
        follow_redirects=True,
    )
    response.raise_for_status()
    return response.content
