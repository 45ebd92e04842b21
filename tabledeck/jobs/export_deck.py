"""
Export a card list file as a Tabletop Simulator saved object.

Usage:
    tabledeck-export deck.txt
    tabledeck-export deck.txt --name "Mono Red" --thumbnail cover.png
    tabledeck-export deck.txt --stdout > deck.json

Every problem in the card list is reported (with line and column) before
anything is written.
"""

import argparse
import logging
import sys
from pathlib import Path

import httpx

from tabledeck.config import settings
from tabledeck.models.card import CardEntry, CardError, CardFactory
from tabledeck.models.parse_error import ParseFailure
from tabledeck.parsers.card_list import parse_file
from tabledeck.services.card_database import ScryfallCardSource, fetch_image, get_card_database
from tabledeck.services.document_builder import build_save_state, save_state_to_json
from tabledeck.services.saved_objects import SaveError, write_saved_object

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_BAD_INPUT = 1
EXIT_FAILED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tabledeck-export",
        description="Convert a card list into a Tabletop Simulator saved object.",
    )
    parser.add_argument("path", type=Path, help="Card list, one `<quantity> <name>` per line")
    parser.add_argument("--name", help="Saved object name (default: the file's stem)")
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Directory to write to (default: TTS's Saved Objects directory)",
    )
    parser.add_argument(
        "--thumbnail",
        type=Path,
        help="PNG thumbnail (default: the first card's front image)",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the document instead of writing a saved object",
    )
    return parser


def export_deck(args: argparse.Namespace, card_factory: CardFactory) -> int:
    """
    Run one export.

    Returns:
        Process exit code
    """
    result = parse_file(args.path, card_factory)
    if isinstance(result, ParseFailure):
        for error in result.errors:
            logger.error("%s", error)
        logger.error("%d problem(s) found in %s, nothing exported", len(result.errors), args.path)
        return EXIT_BAD_INPUT

    if not result.entries:
        logger.warning("%s contains no cards", args.path)

    try:
        state = build_save_state(result.entries)
    except CardError as e:
        logger.error("Cannot export %s: %s", args.path, e.message)
        return EXIT_FAILED

    document = save_state_to_json(state)
    if args.stdout:
        sys.stdout.write(document + "\n")
        return EXIT_OK

    try:
        image = _load_thumbnail(args.thumbnail, result.entries)
    except (OSError, httpx.HTTPError, CardError) as e:
        logger.error("Cannot load thumbnail: %s", e)
        return EXIT_FAILED

    name = args.name or args.path.stem
    try:
        path = write_saved_object(name, document, image, directory=args.output_dir)
    except SaveError as e:
        logger.error("%s", e.message)
        if e.suggestion:
            logger.error("%s", e.suggestion)
        return EXIT_FAILED

    logger.info("Exported %d cards to %s", result.total_cards, path)
    return EXIT_OK


def _load_thumbnail(thumbnail: Path | None, entries: list[CardEntry]) -> bytes:
    if thumbnail is not None:
        return thumbnail.read_bytes()
    if not entries:
        return b""
    return fetch_image(entries[0].card.front_image_url())


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        card_db = get_card_database()
    except FileNotFoundError as e:
        logger.error("%s", e)
        return EXIT_FAILED

    return export_deck(args, ScryfallCardSource(card_db))


if __name__ == "__main__":
    sys.exit(main())
