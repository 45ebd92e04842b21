from tabledeck.parsers.card_list import (
    parse_file,
    parse_line,
    parse_lines,
    parse_text,
)

__all__ = [
    "parse_file",
    "parse_line",
    "parse_lines",
    "parse_text",
]
