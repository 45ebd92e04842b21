"""
Parser for plain card lists.

Format, one card per line:
    <quantity><separator><card name>

The separator is spaces/tabs, an `x`/`X`, or both:
    4 Lightning Bolt
    4x Lightning Bolt
    4 x Lightning Bolt
    4xLightning Bolt

Blank lines are ignored. Anything after the separator is the card name,
so "3x1 Card" is three copies of "1 Card".

Line errors carry the 1-based column of the offending character; the file
parser adds the line number and keeps going, so one pass reports every
problem in the file.
"""

import logging
from collections.abc import Iterable, Iterator
from enum import Enum
from pathlib import Path

from tabledeck.models.card import CardEntry, CardError, CardFactory
from tabledeck.models.parse_error import ParsedDeck, ParseError, ParseFailure, ParseResult

logger = logging.getLogger(__name__)

DIGITS = frozenset("0123456789")
SEPARATOR_WHITESPACE = frozenset(" \t")
AMOUNT_MARKERS = frozenset("xX")

# Largest amount representable in the save file's signed 64-bit ids
MAX_AMOUNT = 2**63 - 1

EXPECTED_FIRST = "a digit"
EXPECTED_AFTER_DIGITS = ("a number separator (space, tab or `x`)", "a card name")


class _ScanState(Enum):
    NUMBERING = "numbering"
    SEPARATOR = "separator"


def parse_line(line: str, card_factory: CardFactory) -> CardEntry:
    """
    Parse one line of a card list.

    Scans the quantity digit by digit, then skips the separator; from the
    first name character on, the rest of the line is the name verbatim.

    Args:
        line: Raw line text (a trailing newline is allowed)
        card_factory: Builds the card from its trimmed name

    Returns:
        The parsed CardEntry

    Raises:
        ParseError: With a column for unexpected characters, without one for
            bad numbers, zero amounts, empty names and rejected cards.
            The line number is never set here.
    """
    state = _ScanState.NUMBERING
    numeral: list[str] = []
    name_start = len(line)

    for index, char in enumerate(line):
        if state is _ScanState.NUMBERING:
            if char in DIGITS:
                numeral.append(char)
            elif char in SEPARATOR_WHITESPACE:
                state = _ScanState.SEPARATOR
            elif char in AMOUNT_MARKERS:
                name_start = index + 1
                break
            else:
                expected = [EXPECTED_FIRST]
                if numeral:
                    expected.extend(EXPECTED_AFTER_DIGITS)
                raise ParseError.unexpected_character(char, expected, column=index + 1)
        else:
            if char in SEPARATOR_WHITESPACE:
                continue
            # A marker after whitespace is consumed; anything else starts the name
            name_start = index + 1 if char in AMOUNT_MARKERS else index
            break

    name = line[name_start:].strip()
    amount = _parse_amount("".join(numeral))

    if amount == 0:
        raise ParseError.amount_is_zero(name)
    if not name:
        raise ParseError.name_is_empty()

    try:
        card = card_factory(name)
    except CardError as e:
        raise ParseError.card_rejected(e) from e

    return CardEntry(card=card, amount=amount)


def _parse_amount(numeral: str) -> int:
    try:
        amount = int(numeral)
    except ValueError as e:
        raise ParseError.not_a_number(numeral, e) from e
    if amount > MAX_AMOUNT:
        raise ParseError.not_a_number(
            numeral, ValueError("number too large to fit in a 64-bit integer")
        )
    return amount


def _read_lines(
    lines: Iterable[str | bytes],
    source: Path | None,
) -> Iterator[tuple[int, str | ParseError]]:
    """
    Yield (line number, text) pairs, or (line number, error) for lines that
    could not be read. Undecodable byte lines are skipped; a stream that
    fails while reading (I/O error, or a decode error in a text-mode handle)
    ends the iteration after its error.
    """
    iterator = iter(lines)
    line_number = 0
    while True:
        line_number += 1
        try:
            raw = next(iterator)
        except StopIteration:
            return
        except (OSError, UnicodeDecodeError) as e:
            # A text-mode stream loses its decoder state after a bad byte
            yield line_number, ParseError.cannot_read_line(source, line_number, e)
            return

        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                yield line_number, ParseError.cannot_read_line(source, line_number, e)
                continue

        if line_number == 1:
            raw = raw.removeprefix("\ufeff")
        yield line_number, raw


def parse_lines(
    lines: Iterable[str | bytes],
    card_factory: CardFactory,
    source: Path | None = None,
) -> ParseResult:
    """
    Parse a card list given as an iterable of lines.

    Errors are collected, not raised: every bad line is reported, and card
    names must be unique within the list (exact, case-sensitive match).

    Args:
        lines: Text or UTF-8 encoded lines, newlines optional
        card_factory: Builds each card from its trimmed name
        source: File the lines come from, for error messages

    Returns:
        ParsedDeck with every entry in order, or ParseFailure with every
        error in line order. Never a mix of both.
    """
    entries: list[CardEntry] = []
    errors: list[ParseError] = []
    seen_names: set[str] = set()

    for line_number, line in _read_lines(lines, source):
        if isinstance(line, ParseError):
            errors.append(line)
            continue

        if not line.strip():
            continue

        try:
            entry = parse_line(line, card_factory)
        except ParseError as e:
            errors.append(e.at_line(line_number))
            continue

        name = entry.card.name
        if name in seen_names:
            errors.append(ParseError.duplicate_name(name, line_number))
            continue

        seen_names.add(name)
        entries.append(entry)

    for error in errors:
        logger.debug("%s", error)

    if errors:
        logger.info("Rejected card list %s: %d error(s)", source or "<text>", len(errors))
        return ParseFailure(errors)

    logger.info("Parsed %d card entries from %s", len(entries), source or "<text>")
    return ParsedDeck(entries)


def _split_lines(text: str) -> list[str]:
    """Split on "\\n" only, keeping terminators, the way a file is read."""
    lines = [line + "\n" for line in text.split("\n")]
    lines[-1] = lines[-1][:-1]
    if not lines[-1]:
        lines.pop()
    return lines


def parse_text(text: str, card_factory: CardFactory) -> ParseResult:
    """Parse a card list held in memory (e.g. pasted into a request)."""
    return parse_lines(_split_lines(text), card_factory)


def parse_file(path: Path | str, card_factory: CardFactory) -> ParseResult:
    """
    Parse a card list file.

    Args:
        path: File to read (UTF-8)
        card_factory: Builds each card from its trimmed name

    Returns:
        ParsedDeck or ParseFailure; a file that cannot be opened yields a
        ParseFailure with that single error.
    """
    path = Path(path)
    try:
        handle = path.open("rb")
    except OSError as e:
        logger.warning("Cannot open card list %s: %s", path, e)
        return ParseFailure([ParseError.cannot_open_file(path, e)])

    with handle:
        return parse_lines(handle, card_factory, source=path)
