"""
Document builder.

Wraps a transformed deck into a complete TTS saved-object document: one
"Deck" container holding every card, inside an otherwise empty SaveState.
"""

import logging
from collections.abc import Callable

from tabledeck.models.card import CardEntry
from tabledeck.models.tts import ObjectState, SaveState, TransformState
from tabledeck.services.deck_transformer import DeckData, generate_deck_data, generate_guid

logger = logging.getLogger(__name__)

DECK_OBJECT_NAME = "Deck"

# Decks lie face down
DECK_TRANSFORM = TransformState(rot_y=180.0)


def build_deck_object(
    deck: DeckData,
    guid_factory: Callable[[], str] = generate_guid,
) -> ObjectState:
    """Build the container object around already-transformed deck data."""
    return ObjectState(
        guid=guid_factory(),
        name=DECK_OBJECT_NAME,
        transform=DECK_TRANSFORM,
        deck_ids=tuple(deck.deck_ids),
        custom_deck=deck.custom_deck,
        contained_objects=tuple(deck.contained_objects),
    )


def build_save_state(
    entries: list[CardEntry],
    guid_factory: Callable[[], str] = generate_guid,
) -> SaveState:
    """
    Build the saved-object document for a deck.

    Args:
        entries: Parsed card entries
        guid_factory: Source of object GUIDs

    Returns:
        SaveState holding a single Deck object

    Raises:
        CardError: If any card cannot be described
    """
    deck = generate_deck_data(entries, guid_factory)
    logger.info(
        "Built deck with %d cards (%d distinct)",
        len(deck.deck_ids),
        len(deck.custom_deck),
    )
    return SaveState(object_states=(build_deck_object(deck, guid_factory),))


def save_state_to_json(state: SaveState, indent: int | None = 2) -> str:
    """Serialize with TTS field names, leaving out unset optional fields."""
    return state.model_dump_json(by_alias=True, exclude_none=True, indent=indent)
