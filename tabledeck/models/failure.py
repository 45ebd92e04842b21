"""
Response envelope and known-error base class.

Every answer of the export API is an ApiResponse whose outcome is one of:
- success: the document was built
- known_failure: we can say what is wrong (bad line, unknown card, ...)
- unknown_failure: something unexpected broke; only the exception type leaks

Responses leave the API through finalize_response(), which rejects
envelopes whose outcome and payload disagree. Domain exceptions
(ParseError, CardError, SaveError) subclass KnownError so callers can turn
any of them into a known failure without checking the concrete type.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, PrivateAttr


class FailureKind(str, Enum):
    """What went wrong, as reported to API clients."""

    # Card list problems
    INVALID_INPUT = "invalid_input"
    DUPLICATE_CARD = "duplicate_card"

    # Files and streams
    IO_ERROR = "io_error"

    # Card catalog
    CARD_NOT_FOUND = "card_not_found"
    IMAGE_NOT_FOUND = "image_not_found"
    CARD_SOURCE_ERROR = "card_source_error"

    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    SUCCESS = "success"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


T = TypeVar("T")


class PositionedError(BaseModel):
    """One problem in a card list, located as precisely as the parser could."""

    line: int | None = None
    column: int | None = None
    reason: str
    message: str


class FailureDetail(BaseModel):
    kind: FailureKind = Field(..., description="Failure classification")
    message: str = Field(..., description="Fixed, user-facing summary")
    detail: str | None = Field(default=None, description="What exactly went wrong")
    suggestion: str | None = Field(default=None, description="What the user can do about it")
    errors: list[PositionedError] | None = Field(
        default=None,
        description="Every problem found, for failures that collect several",
    )


class ApiResponse(BaseModel, Generic[T]):
    """
    Envelope returned by every export endpoint.

    Exactly one of `data` (success) or `failure` (anything else) is set once
    the response has been finalized.
    """

    outcome: OutcomeType = Field(..., description="Result classification")
    data: T | None = Field(default=None, description="Payload on success")
    failure: FailureDetail | None = Field(default=None, description="Details on failure")

    _finalized: bool = PrivateAttr(default=False)

    @classmethod
    def success(cls, data: T) -> "ApiResponse[T]":
        return cls(outcome=OutcomeType.SUCCESS, data=data)

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        errors: list[PositionedError] | None = None,
    ) -> "ApiResponse[Any]":
        """Failure whose cause we can name, e.g. a card missing from the catalog."""
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
                errors=errors,
            ),
        )


class KnownError(Exception):
    """
    Exception with an explanation fit for users.

    `status_code` is the HTTP status the API answers with when this error
    ends a request.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ApiResponse[Any]:
        """Finalized known-failure envelope carrying this error's message."""
        return finalize_response(
            ApiResponse.known_failure(
                kind=self.kind,
                message=self.message,
                detail=self.detail,
                suggestion=self.suggestion,
            )
        )


STANDARD_MESSAGES: dict[OutcomeType, str] = {
    OutcomeType.KNOWN_FAILURE: "The deck could not be exported.",
    OutcomeType.UNKNOWN_FAILURE: (
        "Exporting the deck failed for an unexpected reason. Try again later."
    ),
}

STANDARD_SUGGESTIONS: dict[OutcomeType, str] = {
    OutcomeType.KNOWN_FAILURE: "Fix the problems listed and submit the card list again.",
    OutcomeType.UNKNOWN_FAILURE: "If this keeps happening, please report it.",
}


def finalize_response(response: ApiResponse[Any]) -> ApiResponse[Any]:
    """
    Check that the outcome matches the payload and mark the response final.

    Raises:
        ValueError: If a success carries failure details or a failure lacks them
    """
    if response.outcome == OutcomeType.SUCCESS:
        if response.failure is not None:
            raise ValueError("Success response must not have failure details")
    elif response.failure is None:
        raise ValueError(f"{response.outcome.value} response must have failure details")

    response._finalized = True
    return response


def is_finalized(response: ApiResponse[Any]) -> bool:
    return response._finalized


def create_unknown_failure(exception: Exception) -> ApiResponse[Any]:
    """
    Finalized unknown failure for an unexpected exception.

    The exception's message is never exposed, only its type name.
    """
    response: ApiResponse[Any] = ApiResponse(
        outcome=OutcomeType.UNKNOWN_FAILURE,
        failure=FailureDetail(
            kind=FailureKind.UNKNOWN,
            message=STANDARD_MESSAGES[OutcomeType.UNKNOWN_FAILURE],
            detail=type(exception).__name__,
            suggestion=STANDARD_SUGGESTIONS[OutcomeType.UNKNOWN_FAILURE],
        ),
    )
    return finalize_response(response)


def create_known_failure(
    kind: FailureKind,
    reason: str,
    errors: list[PositionedError] | None = None,
) -> ApiResponse[Any]:
    """
    Finalized known failure with the standard message.

    Args:
        kind: Failure classification
        reason: What went wrong, shown as the failure's detail
        errors: Individual problems, when the failure collects several
    """
    response = ApiResponse.known_failure(
        kind=kind,
        message=STANDARD_MESSAGES[OutcomeType.KNOWN_FAILURE],
        detail=reason,
        suggestion=STANDARD_SUGGESTIONS[OutcomeType.KNOWN_FAILURE],
        errors=errors,
    )
    return finalize_response(response)


def create_success(data: T) -> ApiResponse[T]:
    """Finalized success envelope around `data`."""
    return finalize_response(ApiResponse[T].success(data))
