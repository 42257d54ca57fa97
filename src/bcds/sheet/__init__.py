"""Membership sheet parsing."""

from bcds.sheet.parser import (
    SheetColumn,
    SheetParseError,
    SheetParseResult,
    parse_row,
    parse_rows,
    registry_number_from_string,
)

__all__ = [
    "SheetColumn",
    "SheetParseError",
    "SheetParseResult",
    "parse_row",
    "parse_rows",
    "registry_number_from_string",
]
