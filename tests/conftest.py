from collections.abc import Callable

import pytest

from tabledeck.models.card import (
    CardInfo,
    CardNotFoundError,
    CardShape,
    FrontImageNotFoundError,
)

CARD_BACK = "https://cards.example/back.png"


class StubCard(CardInfo):
    """In-memory card with predictable image URLs."""

    def __init__(self, name: str, broken: bool = False) -> None:
        self._name = name
        self._broken = broken

    @property
    def name(self) -> str:
        return self._name

    def front_image_url(self) -> str:
        url = f"https://cards.example/{self._name.replace(' ', '_')}.png"
        if self._broken:
            raise FrontImageNotFoundError(self._name, url)
        return url

    def back_image_url(self) -> str:
        return CARD_BACK

    def card_shape(self) -> CardShape:
        return CardShape.ROUNDED_RECTANGLE


class StubCardSource:
    """
    Card factory over any name, except the ones configured to fail.

    Records every name it was asked for.
    """

    def __init__(
        self,
        unknown: frozenset[str] = frozenset(),
        broken: frozenset[str] = frozenset(),
    ) -> None:
        self.unknown = unknown
        self.broken = broken
        self.calls: list[str] = []

    def __call__(self, name: str) -> StubCard:
        self.calls.append(name)
        if name in self.unknown:
            raise CardNotFoundError(name)
        return StubCard(name, broken=name in self.broken)


@pytest.fixture
def card_source() -> StubCardSource:
    """Card factory that rejects "Nonexistent Card" and cannot draw "Blank Card"."""
    return StubCardSource(
        unknown=frozenset({"Nonexistent Card"}),
        broken=frozenset({"Blank Card"}),
    )


@pytest.fixture
def sequential_guids() -> Callable[[], str]:
    """Deterministic GUID factory: guid-1, guid-2, ..."""
    counter = 0

    def next_guid() -> str:
        nonlocal counter
        counter += 1
        return f"guid-{counter}"

    return next_guid


@pytest.fixture
def sample_card_list() -> str:
    """Sample card list mixing every separator style."""
    return """4 Lightning Bolt
4x Monastery Swiftspear

20 X Mountain
2	Abrade
"""


@pytest.fixture
def sample_card_db() -> dict:
    """Scryfall-like card database for testing."""
    return {
        "Lightning Bolt": {
            "name": "Lightning Bolt",
            "scryfall_uri": "https://scryfall.com/card/sta/42/lightning-bolt",
            "image_uris": {
                "small": "https://cards.scryfall.io/small/front/bolt.jpg",
                "normal": "https://cards.scryfall.io/normal/front/bolt.jpg",
                "large": "https://cards.scryfall.io/large/front/bolt.jpg",
            },
        },
        "Mountain": {
            "name": "Mountain",
            "scryfall_uri": "https://scryfall.com/card/dmu/290/mountain",
            "image_uris": {
                "normal": "https://cards.scryfall.io/normal/front/mountain.jpg",
            },
        },
        "Delver of Secrets // Insectile Aberration": {
            "name": "Delver of Secrets // Insectile Aberration",
            "scryfall_uri": "https://scryfall.com/card/isd/51/delver-of-secrets",
            "card_faces": [
                {
                    "name": "Delver of Secrets",
                    "image_uris": {"large": "https://cards.scryfall.io/large/front/delver.jpg"},
                },
                {
                    "name": "Insectile Aberration",
                    "image_uris": {"large": "https://cards.scryfall.io/large/back/delver.jpg"},
                },
            ],
        },
        "Fire // Ice": {
            "name": "Fire // Ice",
            "scryfall_uri": "https://scryfall.com/card/mh2/290/fire-ice",
            "image_uris": {"large": "https://cards.scryfall.io/large/front/fire-ice.jpg"},
            "card_faces": [{"name": "Fire"}, {"name": "Ice"}],
        },
        "Imageless Card": {
            "name": "Imageless Card",
            "scryfall_uri": "https://scryfall.com/card/tst/1/imageless-card",
        },
    }
