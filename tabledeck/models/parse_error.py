"""
Card-list parse errors and the file-level parse result.

A ParseError knows its column when the line parser raises it and learns
its line number from the file parser. Both are optional, and the rendered
message adapts to whichever of them is known.

File parsing never raises for bad input: it returns ParsedDeck when every
line was accepted, or ParseFailure carrying every error found.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from tabledeck.models.card import CardEntry, CardError
from tabledeck.models.failure import FailureKind, KnownError, PositionedError


class ParseErrorKind(str, Enum):
    """What went wrong on a line."""

    UNEXPECTED_CHARACTER = "unexpected_character"
    NOT_A_NUMBER = "not_a_number"
    AMOUNT_IS_ZERO = "amount_is_zero"
    NAME_IS_EMPTY = "name_is_empty"
    DUPLICATE_NAME = "duplicate_name"
    CANNOT_OPEN_FILE = "cannot_open_file"
    CANNOT_READ_LINE = "cannot_read_line"
    CARD_REJECTED = "card_rejected"


def _display_char(char: str) -> str:
    if char in ("\n", "\r"):
        return "<newline>"
    if char == "\t":
        return "<tab>"
    return char


class ParseError(KnownError):
    """
    A single problem found while parsing a card list.

    Use the classmethod constructors; each fills in the payload attributes
    relevant to its reason and leaves the others as None.
    """

    def __init__(
        self,
        reason: ParseErrorKind,
        message: str,
        *,
        line: int | None = None,
        column: int | None = None,
        kind: FailureKind = FailureKind.INVALID_INPUT,
    ):
        self.reason = reason
        self.line = line
        self.column = column
        self.obtained: str | None = None
        self.expected: list[str] = []
        self.text: str | None = None
        self.card_name: str | None = None
        self.path: Path | None = None
        self.cause: BaseException | None = None
        super().__init__(kind=kind, message=message, status_code=422)

    @classmethod
    def unexpected_character(cls, obtained: str, expected: list[str], column: int) -> "ParseError":
        bullets = "".join(f"\n - {item}" for item in expected)
        error = cls(
            ParseErrorKind.UNEXPECTED_CHARACTER,
            f"Obtained character `{_display_char(obtained)}`, "
            f"expected one of the following:{bullets}",
            column=column,
        )
        error.obtained = obtained
        error.expected = list(expected)
        return error

    @classmethod
    def not_a_number(cls, text: str, cause: BaseException | None = None) -> "ParseError":
        reason = f":\n  {cause}" if cause is not None else ""
        error = cls(
            ParseErrorKind.NOT_A_NUMBER,
            f"Failed to parse `{text}` as a number{reason}",
        )
        error.text = text
        error.cause = cause
        return error

    @classmethod
    def amount_is_zero(cls, card_name: str) -> "ParseError":
        error = cls(
            ParseErrorKind.AMOUNT_IS_ZERO,
            f"Tried to create {card_name} with an amount of 0",
        )
        error.card_name = card_name
        return error

    @classmethod
    def name_is_empty(cls) -> "ParseError":
        return cls(ParseErrorKind.NAME_IS_EMPTY, "Tried to create a card with an empty name")

    @classmethod
    def duplicate_name(cls, name: str, line: int) -> "ParseError":
        error = cls(
            ParseErrorKind.DUPLICATE_NAME,
            f"The name `{name}` appears multiple times, which is not allowed.",
            line=line,
            kind=FailureKind.DUPLICATE_CARD,
        )
        error.card_name = name
        return error

    @classmethod
    def cannot_open_file(cls, path: Path, cause: OSError) -> "ParseError":
        error = cls(
            ParseErrorKind.CANNOT_OPEN_FILE,
            f"Failed to load file `{path}`, with the following error: {cause}",
            kind=FailureKind.IO_ERROR,
        )
        error.path = path
        error.cause = cause
        return error

    @classmethod
    def cannot_read_line(cls, path: Path | None, line: int, cause: Exception) -> "ParseError":
        source = f" in file {path}" if path is not None else ""
        error = cls(
            ParseErrorKind.CANNOT_READ_LINE,
            f"Failed to read line {line}{source}:\n  {cause}",
            line=line,
            kind=FailureKind.IO_ERROR,
        )
        error.path = path
        error.cause = cause
        return error

    @classmethod
    def card_rejected(cls, cause: CardError) -> "ParseError":
        """Wrap a catalog failure without re-encoding it."""
        error = cls(ParseErrorKind.CARD_REJECTED, cause.message, kind=cause.kind)
        error.cause = cause
        return error

    def at_line(self, line: int) -> "ParseError":
        """Attach the line number once the caller knows it."""
        self.line = line
        return self

    def __str__(self) -> str:
        if self.line is None and self.column is None:
            return f"Error at unknown position: {self.message}"
        if self.line is None:
            return f"Error at unknown line, column {self.column}: {self.message}"
        if self.column is None:
            return f"Error at line {self.line}: {self.message}"
        return f"Error at line {self.line}, column {self.column}: {self.message}"

    def to_detail(self) -> PositionedError:
        """Convert to the API's per-error representation."""
        return PositionedError(
            line=self.line,
            column=self.column,
            reason=self.reason.value,
            message=self.message,
        )


@dataclass(frozen=True, slots=True)
class ParsedDeck:
    """Every line of the card list was accepted."""

    entries: list[CardEntry]

    @property
    def total_cards(self) -> int:
        return sum(entry.amount for entry in self.entries)


@dataclass(frozen=True, slots=True)
class ParseFailure:
    """At least one line was rejected. Holds every error, in line order."""

    errors: list[ParseError]

    def __post_init__(self) -> None:
        if not self.errors:
            raise ValueError("ParseFailure requires at least one error")


ParseResult = ParsedDeck | ParseFailure
