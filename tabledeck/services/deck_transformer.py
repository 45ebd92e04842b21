"""
Deck transformation.

Expands parsed card entries into the pieces of a TTS deck: the ordered id
list, the descriptor map and one CardCustom object per physical copy.

INVARIANTS:
1. Ids are 100, 200, 300, ... in entry order, one per distinct card
2. Each card is described exactly once; every copy embeds an equal descriptor
3. Objects appear card-major, then by copy index
4. Any card error aborts the whole deck (no partial decks)
"""

import logging
import uuid
from collections.abc import Callable
from typing import NamedTuple

from tabledeck.models.card import CardEntry, CardInfo
from tabledeck.models.tts import CustomDeckState, ObjectState

logger = logging.getLogger(__name__)

ID_STRIDE = 100
CARD_OBJECT_NAME = "CardCustom"


class DeckData(NamedTuple):
    """Everything the Deck container object aggregates."""

    deck_ids: list[int]
    custom_deck: dict[int, CustomDeckState]
    contained_objects: list[ObjectState]


def generate_guid() -> str:
    """Fresh random object GUID."""
    return str(uuid.uuid4())


def describe_card(card: CardInfo) -> CustomDeckState:
    """
    Build the visual descriptor of a card.

    Raises:
        CardError: If the card cannot report its images or shape
    """
    return CustomDeckState(
        name=card.name,
        face_url=card.front_image_url(),
        back_url=card.back_image_url(),
        card_type=card.card_shape(),
    )


def generate_deck_data(
    entries: list[CardEntry],
    guid_factory: Callable[[], str] = generate_guid,
) -> DeckData:
    """
    Assign ids, describe each card and replicate it by its amount.

    Args:
        entries: Parsed entries, in list order
        guid_factory: Source of object GUIDs (override for reproducible output)

    Returns:
        DeckData with len(deck_ids) == len(contained_objects) == total copies

    Raises:
        CardError: From the first card that cannot be described
    """
    deck_ids: list[int] = []
    custom_deck: dict[int, CustomDeckState] = {}
    contained_objects: list[ObjectState] = []

    for index, entry in enumerate(entries, start=1):
        card_id = index * ID_STRIDE
        descriptor = describe_card(entry.card)
        custom_deck[card_id] = descriptor

        for _ in range(entry.amount):
            deck_ids.append(card_id)
            contained_objects.append(
                ObjectState(
                    guid=guid_factory(),
                    name=CARD_OBJECT_NAME,
                    hands=True,
                    card_id=card_id,
                    custom_deck={card_id: descriptor.model_copy()},
                )
            )

        logger.debug("Card %s -> id %d x%d", descriptor.name, card_id, entry.amount)

    return DeckData(deck_ids, custom_deck, contained_objects)
