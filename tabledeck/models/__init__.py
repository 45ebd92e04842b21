from tabledeck.models.card import (
    BackImageNotFoundError,
    CardEntry,
    CardError,
    CardFactory,
    CardInfo,
    CardNotFoundError,
    CardShape,
    FrontImageNotFoundError,
)
from tabledeck.models.failure import (
    STANDARD_MESSAGES,
    STANDARD_SUGGESTIONS,
    ApiResponse,
    FailureDetail,
    FailureKind,
    KnownError,
    OutcomeType,
    PositionedError,
    create_known_failure,
    create_success,
    create_unknown_failure,
    finalize_response,
    is_finalized,
)
from tabledeck.models.parse_error import (
    ParsedDeck,
    ParseError,
    ParseErrorKind,
    ParseFailure,
    ParseResult,
)
from tabledeck.models.tts import (
    ColourState,
    CustomDeckState,
    ObjectState,
    SaveState,
    TransformState,
    Vector3,
)

__all__ = [
    "ApiResponse",
    "BackImageNotFoundError",
    "CardEntry",
    "CardError",
    "CardFactory",
    "CardInfo",
    "CardNotFoundError",
    "CardShape",
    "ColourState",
    "CustomDeckState",
    "FailureDetail",
    "FailureKind",
    "FrontImageNotFoundError",
    "KnownError",
    "ObjectState",
    "OutcomeType",
    "ParseError",
    "ParseErrorKind",
    "ParseFailure",
    "ParseResult",
    "ParsedDeck",
    "PositionedError",
    "STANDARD_MESSAGES",
    "STANDARD_SUGGESTIONS",
    "SaveState",
    "TransformState",
    "Vector3",
    "create_known_failure",
    "create_success",
    "create_unknown_failure",
    "finalize_response",
    "is_finalized",
]
