"""
Deck export API endpoints.

Turns a pasted card list into a Tabletop Simulator saved-object document.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, Field

from tabledeck.models.card import CardError, CardFactory
from tabledeck.models.failure import (
    ApiResponse,
    FailureKind,
    create_known_failure,
    create_success,
    create_unknown_failure,
)
from tabledeck.models.parse_error import ParseFailure
from tabledeck.parsers.card_list import parse_text
from tabledeck.services.card_database import ScryfallCardSource, get_card_database
from tabledeck.services.document_builder import build_save_state

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/decks", tags=["decks"])


class ExportRequest(BaseModel):
    """Request model for exporting a card list."""

    text: str = Field(
        ...,
        description="Card list, one `<quantity> <name>` or `<quantity>x <name>` per line",
        examples=["4x Lightning Bolt\n20 Mountain"],
    )


def get_card_factory() -> CardFactory:
    """Card factory backed by the cached Scryfall database."""
    try:
        card_db = get_card_database()
    except FileNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Card database not available. Please try again later.",
        ) from e
    return ScryfallCardSource(card_db)


@router.post("/export", response_model=ApiResponse[dict[str, Any]])
async def export_deck(
    request: ExportRequest,
    response: Response,
    card_factory: Annotated[CardFactory, Depends(get_card_factory)],
) -> ApiResponse[Any]:
    """
    Export a card list as a saved-object document.

    Every malformed line is reported at once, with its line and column.
    Card catalog failures stop the export at the first failing card.
    """
    result = parse_text(request.text, card_factory)

    if isinstance(result, ParseFailure):
        response.status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
        return create_known_failure(
            FailureKind.INVALID_INPUT,
            f"{len(result.errors)} problem(s) found in the card list",
            errors=[error.to_detail() for error in result.errors],
        )

    try:
        state = build_save_state(result.entries)
    except CardError as e:
        logger.warning("Export failed: %s", e.message)
        response.status_code = e.status_code
        return e.to_response()
    except Exception as e:
        logger.exception("Unexpected failure exporting a deck")
        response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        return create_unknown_failure(e)

    return create_success(state.model_dump(mode="json", by_alias=True, exclude_none=True))
