"""
Download the Scryfall card database.

Card lists are resolved against this file, so run the job before the first
export and again whenever new sets are released.

Usage:
    tabledeck-download-cards
    tabledeck-download-cards --output /srv/tabledeck/default-cards.json
"""

import argparse
import asyncio
import logging
from pathlib import Path

from tabledeck.config import settings
from tabledeck.services.card_database import download_card_database

logger = logging.getLogger(__name__)


async def run_download(output_path: Path | None = None) -> Path:
    """Download the bulk file, logging where it ended up and how big it is."""
    logger.info("Downloading Scryfall card database...")

    try:
        path = await download_card_database(output_path)
    except Exception as e:
        logger.error("Failed to download card database: %s", e)
        raise

    logger.info("Saved card database to %s (%.1f MB)", path, path.stat().st_size / 1e6)
    return path


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="tabledeck-download-cards",
        description="Download Scryfall's default-cards bulk data.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help=f"Destination file (default: {settings.card_database_path})",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_download(args.output))


if __name__ == "__main__":
    main()
