import json
from pathlib import Path

import httpx
import pytest
import respx

from tabledeck.config import settings
from tabledeck.models.card import CardNotFoundError, CardShape, FrontImageNotFoundError
from tabledeck.services.card_database import (
    ScryfallCard,
    ScryfallCardSource,
    download_card_database,
    fetch_image,
    load_card_database,
)

BULK_DOWNLOAD_URL = "https://data.scryfall.io/default-cards/default-cards.json"


@pytest.fixture
def source(sample_card_db: dict) -> ScryfallCardSource:
    return ScryfallCardSource(sample_card_db, default_back_url="https://backs.example/mtg.jpg")


class TestScryfallCardSource:
    def test_builds_known_card(self, source: ScryfallCardSource) -> None:
        """Known names produce a ScryfallCard."""
        card = source("Lightning Bolt")

        assert isinstance(card, ScryfallCard)
        assert card.name == "Lightning Bolt"

    def test_unknown_card(self, source: ScryfallCardSource) -> None:
        """Unknown names raise CardNotFoundError."""
        with pytest.raises(CardNotFoundError) as exc_info:
            source("Lightning Bolt ")

        assert exc_info.value.card_name == "Lightning Bolt "

    def test_names_are_case_sensitive(self, source: ScryfallCardSource) -> None:
        """Lookup requires Scryfall's exact capitalization."""
        with pytest.raises(CardNotFoundError):
            source("lightning bolt")

    def test_default_back_from_settings(self, sample_card_db: dict) -> None:
        """Without an explicit back, the configured card back is used."""
        card = ScryfallCardSource(sample_card_db)("Mountain")

        assert card.back_image_url() == settings.card_back_url


class TestScryfallCard:
    def test_prefers_large_image(self, source: ScryfallCardSource) -> None:
        """The largest available image wins."""
        card = source("Lightning Bolt")

        assert card.front_image_url() == "https://cards.scryfall.io/large/front/bolt.jpg"
        assert card.back_image_url() == "https://backs.example/mtg.jpg"

    def test_falls_back_to_smaller_image(self, source: ScryfallCardSource) -> None:
        """Smaller images are used when large is missing."""
        card = source("Mountain")

        assert card.front_image_url() == "https://cards.scryfall.io/normal/front/mountain.jpg"

    def test_double_faced_card_shows_second_face_as_back(self, source: ScryfallCardSource) -> None:
        """Transform cards show their second face as the back."""
        card = source("Delver of Secrets // Insectile Aberration")

        assert card.front_image_url() == "https://cards.scryfall.io/large/front/delver.jpg"
        assert card.back_image_url() == "https://cards.scryfall.io/large/back/delver.jpg"

    def test_split_card_uses_standard_back(self, source: ScryfallCardSource) -> None:
        """Split cards share one image and keep the standard back."""
        card = source("Fire // Ice")

        assert card.front_image_url() == "https://cards.scryfall.io/large/front/fire-ice.jpg"
        assert card.back_image_url() == "https://backs.example/mtg.jpg"

    def test_missing_front_image(self, source: ScryfallCardSource) -> None:
        """Cards without any image raise FrontImageNotFoundError."""
        card = source("Imageless Card")

        with pytest.raises(FrontImageNotFoundError) as exc_info:
            card.front_image_url()

        assert exc_info.value.image_url == "https://scryfall.com/card/tst/1/imageless-card"

    def test_shape(self, source: ScryfallCardSource) -> None:
        assert source("Mountain").card_shape() == CardShape.ROUNDED_RECTANGLE


class TestLoadCardDatabase:
    def test_indexes_by_name_first_printing_wins(self, tmp_path: Path) -> None:
        """The first printing of each name is kept."""
        path = tmp_path / "cards.json"
        path.write_text(
            json.dumps(
                [
                    {"name": "Mountain", "set": "dmu"},
                    {"name": "Mountain", "set": "neo"},
                    {"name": "Lightning Bolt", "set": "sta"},
                    {"set": "nameless"},
                ]
            ),
            encoding="utf-8",
        )

        db = load_card_database(path)

        assert set(db) == {"Mountain", "Lightning Bolt"}
        assert db["Mountain"]["set"] == "dmu"

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing database tells the user how to download it."""
        with pytest.raises(FileNotFoundError, match="tabledeck-download-cards"):
            load_card_database(tmp_path / "missing.json")


class TestFetchImage:
    @respx.mock
    def test_returns_bytes(self) -> None:
        """Image downloads return the response body."""
        respx.get("https://cards.example/bolt.png").mock(
            return_value=httpx.Response(200, content=b"\x89PNG data")
        )

        assert fetch_image("https://cards.example/bolt.png") == b"\x89PNG data"

    @respx.mock
    def test_raises_on_http_error(self) -> None:
        """HTTP errors propagate to the caller."""
        respx.get("https://cards.example/missing.png").mock(return_value=httpx.Response(404))

        with pytest.raises(httpx.HTTPStatusError):
            fetch_image("https://cards.example/missing.png")


class TestDownloadCardDatabase:
    @pytest.mark.asyncio
    @respx.mock
    async def test_downloads_default_cards(self, tmp_path: Path) -> None:
        """The default_cards entry of the bulk index is downloaded."""
        respx.get(settings.scryfall_bulk_api).mock(
            return_value=httpx.Response(
                200,
                json={
                    "data": [
                        {"type": "oracle_cards", "download_uri": "https://elsewhere.example"},
                        {"type": "default_cards", "download_uri": BULK_DOWNLOAD_URL},
                    ]
                },
            )
        )
        respx.get(BULK_DOWNLOAD_URL).mock(
            return_value=httpx.Response(200, content=b'[{"name": "Mountain"}]')
        )
        output = tmp_path / "data" / "cards.json"

        path = await download_card_database(output)

        assert path == output
        assert load_card_database(path) == {"Mountain": {"name": "Mountain"}}

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_bulk_entry(self, tmp_path: Path) -> None:
        """An index without default_cards is an error."""
        respx.get(settings.scryfall_bulk_api).mock(
            return_value=httpx.Response(200, json={"data": []})
        )

        with pytest.raises(ValueError, match="default_cards"):
            await download_card_database(tmp_path / "cards.json")

    @pytest.mark.asyncio
    @respx.mock
    async def test_failed_download_keeps_previous_file(self, tmp_path: Path) -> None:
        """A failed download leaves the existing database untouched."""
        respx.get(settings.scryfall_bulk_api).mock(
            return_value=httpx.Response(
                200, json={"data": [{"type": "default_cards", "download_uri": BULK_DOWNLOAD_URL}]}
            )
        )
        respx.get(BULK_DOWNLOAD_URL).mock(return_value=httpx.Response(500))
        output = tmp_path / "cards.json"
        output.write_text('[{"name": "Island"}]', encoding="utf-8")

        with pytest.raises(httpx.HTTPStatusError):
            await download_card_database(output)

        assert output.read_text(encoding="utf-8") == '[{"name": "Island"}]'
        assert not (tmp_path / "cards.json.part").exists()
