"""
Card capability and card-list entries.

CardInfo is the narrow interface the parser and the deck transformer call
to learn anything about a card. Concrete catalogs (Scryfall, a folder of
custom images, ...) subclass it; the core never looks past these methods.

INVARIANTS:
- CardEntry.amount is always >= 1
- CardShape ordinals are part of the save-file format and never change
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum

from tabledeck.models.failure import FailureKind, KnownError


class CardShape(IntEnum):
    """Tabletop Simulator custom card shapes, by save-file ordinal."""

    ROUNDED_RECTANGLE = 0
    RECTANGLE = 1
    ROUNDED_HEXAGON = 2
    HEXAGON = 3
    CIRCLE = 4


CARD_NAME_SUGGESTION = "Card names must match the catalog exactly, including capitalization."
IMAGE_SUGGESTION = "Check that the catalog has images for this card."


class CardError(KnownError):
    """
    Failure reported by a card catalog.

    Instantiate directly for catalog-specific failures; the subclasses
    cover the cases every catalog shares.
    """

    def __init__(
        self,
        message: str,
        kind: FailureKind = FailureKind.CARD_SOURCE_ERROR,
        status_code: int = 422,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        super().__init__(
            kind=kind,
            message=message,
            detail=detail,
            suggestion=suggestion,
            status_code=status_code,
        )


class CardNotFoundError(CardError):
    """Raised when a catalog has no card with the requested name."""

    def __init__(self, card_name: str):
        self.card_name = card_name
        super().__init__(
            f"Card doesn't exist: {card_name}",
            kind=FailureKind.CARD_NOT_FOUND,
            suggestion=CARD_NAME_SUGGESTION,
        )


class FrontImageNotFoundError(CardError):
    """Raised when a card's front image cannot be located."""

    def __init__(self, card_name: str, image_url: str):
        self.card_name = card_name
        self.image_url = image_url
        super().__init__(
            f"Couldn't find the file for {card_name}'s front: {image_url}",
            kind=FailureKind.IMAGE_NOT_FOUND,
            detail=image_url,
            suggestion=IMAGE_SUGGESTION,
        )


class BackImageNotFoundError(CardError):
    """Raised when a card's back image cannot be located."""

    def __init__(self, card_name: str, image_url: str):
        self.card_name = card_name
        self.image_url = image_url
        super().__init__(
            f"Couldn't find the file for {card_name}'s back: {image_url}",
            kind=FailureKind.IMAGE_NOT_FOUND,
            detail=image_url,
            suggestion=IMAGE_SUGGESTION,
        )


class CardInfo(ABC):
    """Everything the exporter needs to know about a single card."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name, also used for duplicate detection."""

    @abstractmethod
    def front_image_url(self) -> str:
        """
        URL of the card's face.

        Raises:
            CardError: If the image cannot be determined
        """

    @abstractmethod
    def back_image_url(self) -> str:
        """
        URL of the card's back.

        Raises:
            CardError: If the image cannot be determined
        """

    @abstractmethod
    def card_shape(self) -> CardShape:
        """
        Physical shape of the card.

        Raises:
            CardError: If the shape cannot be determined
        """


# Builds a card from its (trimmed) name; raises CardError on failure.
CardFactory = Callable[[str], CardInfo]


@dataclass(frozen=True, slots=True)
class CardEntry:
    """
    One line of a card list: a card and how many copies of it.

    Attributes:
        card: The card, as built by the catalog
        amount: Number of copies (always >= 1)
    """

    card: CardInfo
    amount: int
