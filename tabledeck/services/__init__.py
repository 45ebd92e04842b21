"""
TableDeck services.

Deck transformation, document building, the Scryfall card catalog and the
saved-objects writer.
"""

from tabledeck.services.card_database import (
    ScryfallCard,
    ScryfallCardSource,
    download_card_database,
    fetch_image,
    get_card_database,
    load_card_database,
)
from tabledeck.services.deck_transformer import (
    DeckData,
    describe_card,
    generate_deck_data,
    generate_guid,
)
from tabledeck.services.document_builder import (
    build_deck_object,
    build_save_state,
    save_state_to_json,
)
from tabledeck.services.saved_objects import (
    ImageWriteError,
    ObjectWriteError,
    SaveDirectoryNotFoundError,
    SaveError,
    get_saved_objects_dir,
    write_saved_object,
)

__all__ = [
    "DeckData",
    "ImageWriteError",
    "ObjectWriteError",
    "SaveDirectoryNotFoundError",
    "SaveError",
    "ScryfallCard",
    "ScryfallCardSource",
    "build_deck_object",
    "build_save_state",
    "describe_card",
    "download_card_database",
    "fetch_image",
    "generate_deck_data",
    "generate_guid",
    "get_card_database",
    "get_saved_objects_dir",
    "load_card_database",
    "save_state_to_json",
    "write_saved_object",
]
