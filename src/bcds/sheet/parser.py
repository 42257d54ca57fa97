"""
Membership sheet row parsing.

The club's membership sheet has one row per payment, exported from the
online store. Each row is validated and turned into an ImportRecord:

- Name, confirmation code and transaction date are required; a row
  missing any of them is skipped
- A PDGA number outside the valid range, or an unreadable birth date, is
  dropped with a warning (the row itself is still usable)
- Identity fields are lower-cased; payment fields are kept as typed
- The validity interval is derived from the transaction date

The column layout is fixed. If the sheet gains or loses a column,
SheetColumn has to change with it.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Optional, Sequence

from bcds.config import Settings, settings as default_settings
from bcds.dates import parse_date
from bcds.memberships.status import membership_year
from bcds.players.aliases import normalize_name
from bcds.players.records import ImportRecord

logger = logging.getLogger(__name__)


class SheetParseError(ValueError):
    """Raised when a sheet row cannot be turned into an import record."""

    def __init__(self, row_number: int, reason: str, message: str):
        super().__init__(f"Row {row_number}: {message}")
        self.row_number = row_number
        self.reason = reason


class SheetColumn(IntEnum):
    """Column positions in the membership sheet."""

    TRANSACTION_DATE = 0
    NAME = 1
    DOB = 2
    ADDRESS = 3
    EMAIL = 4
    CLUB = 5
    PDGA_NUMBER = 6
    PAYMENT_RECEIVED = 7
    PAYMENT_NAME = 8
    PAYMENT_ADDRESS = 9
    PAYMENT_EMAIL = 10
    PAYMENT_TOTAL = 11
    PAYMENT_QUANTITY = 12
    BILLING_ADDRESS = 13
    CITY = 14
    PROVINCE = 15
    COUNTRY = 16
    PURCHASE_DETAIL = 17
    PURCHASE_TYPE = 18
    CONFIRMATION_CODE = 19
    MEMO = 20
    LOCALE = 21
    SUBMISSION_SOURCE = 22


@dataclass
class SheetParseResult:
    """Records parsed from the sheet plus counts of what went wrong."""
    records: list[ImportRecord] = field(default_factory=list)
    rows_read: int = 0
    rows_skipped: int = 0
    issues: Counter = field(default_factory=Counter)

    def summary(self) -> str:
        lines = [
            "Membership sheet parsed:",
            f"  Rows read:     {self.rows_read}",
            f"  Rows accepted: {len(self.records)}",
            f"  Rows skipped:  {self.rows_skipped}",
        ]
        for reason, count in sorted(self.issues.items()):
            lines.append(f"    {reason}: {count}")
        return "\n".join(lines)


def registry_number_from_string(
    text: Optional[str],
    config: Optional[Settings] = None,
) -> Optional[str]:
    """
    Validate a PDGA number typed into the sheet.

    Returns:
        The number as a canonical string (no leading zeros or whitespace),
        or None if the text is empty, not a whole number, or out of range
    """
    if not text or not text.strip():
        return None
    config = config or default_settings
    try:
        number = int(text.strip())
    except ValueError:
        return None
    if not config.registry_number_min <= number <= config.registry_number_max:
        return None
    return str(number)


def _cell(row: Sequence[Optional[str]], column: SheetColumn) -> Optional[str]:
    """Trimmed cell content, or None for missing/blank cells."""
    if column >= len(row):
        return None
    value = row[column]
    if value is None:
        return None
    value = value.strip()
    return value or None


def _lower(value: Optional[str]) -> Optional[str]:
    return value.lower() if value else None


def parse_row(
    row: Sequence[Optional[str]],
    row_number: int,
    issues: Optional[Counter] = None,
    config: Optional[Settings] = None,
) -> ImportRecord:
    """
    Parse one sheet row into an ImportRecord.

    Args:
        row: Cell values in SheetColumn order (short rows are fine)
        row_number: 1-based row number in the sheet, for messages
        issues: Optional counter for non-fatal problems
        config: Settings (PDGA number range, rollover month)

    Raises:
        SheetParseError: If a required field is missing or invalid
    """
    config = config or default_settings
    issues = issues if issues is not None else Counter()

    raw_name = _cell(row, SheetColumn.NAME)
    if not raw_name:
        raise SheetParseError(row_number, "missing name", "no player name")
    full_name = normalize_name(raw_name)

    raw_number = _cell(row, SheetColumn.PDGA_NUMBER)
    registry_number = registry_number_from_string(raw_number, config)
    if raw_number and registry_number is None:
        logger.warning("Invalid PDGA number for %s: %s", full_name, raw_number)
        issues["invalid PDGA number"] += 1

    birth_date = None
    raw_dob = _cell(row, SheetColumn.DOB)
    if raw_dob:
        try:
            birth_date = parse_date(raw_dob)
        except ValueError:
            logger.warning("Bad DOB for %s: %s", full_name, raw_dob)
            issues["invalid DOB"] += 1

    confirmation_code = _cell(row, SheetColumn.CONFIRMATION_CODE)
    if not confirmation_code:
        raise SheetParseError(
            row_number, "missing confirmation code",
            f"missing confirmation code for {full_name}",
        )

    raw_transaction_date = _cell(row, SheetColumn.TRANSACTION_DATE)
    if not raw_transaction_date:
        raise SheetParseError(
            row_number, "missing transaction date",
            f"missing transaction date for {full_name}",
        )
    try:
        transaction_date = parse_date(raw_transaction_date)
    except ValueError:
        raise SheetParseError(
            row_number, "invalid transaction date",
            f"transaction date for {full_name} is invalid: {raw_transaction_date}",
        ) from None

    valid_from, valid_until = membership_year(
        transaction_date, config.membership_rollover_month
    )

    return ImportRecord(
        full_name=full_name,
        confirmation_code=confirmation_code,
        valid_from=valid_from,
        valid_until=valid_until,
        registry_number=registry_number,
        birth_date=birth_date,
        email=_lower(_cell(row, SheetColumn.EMAIL)),
        address=_lower(_cell(row, SheetColumn.ADDRESS)),
        city=_lower(_cell(row, SheetColumn.CITY)),
        transaction_date=transaction_date,
        payment_name=_cell(row, SheetColumn.PAYMENT_NAME),
        payment_address=_cell(row, SheetColumn.PAYMENT_ADDRESS),
        payment_email=_cell(row, SheetColumn.PAYMENT_EMAIL),
        payment_amount=_cell(row, SheetColumn.PAYMENT_TOTAL),
        payment_source=_cell(row, SheetColumn.SUBMISSION_SOURCE),
        payment_detail=_cell(row, SheetColumn.PURCHASE_DETAIL),
        row_number=row_number,
    )


def parse_rows(
    rows: Iterable[Sequence[Optional[str]]],
    skip_header: bool = True,
    config: Optional[Settings] = None,
) -> SheetParseResult:
    """
    Parse every row of the sheet, skipping (and counting) bad rows.

    Args:
        rows: Sheet rows, header first unless skip_header is False
        skip_header: Whether the first row is a header
        config: Settings passed through to parse_row

    Returns:
        SheetParseResult with records in sheet order
    """
    result = SheetParseResult()
    first_row = 2 if skip_header else 1
    iterator = iter(rows)
    if skip_header:
        next(iterator, None)

    for row_number, row in enumerate(iterator, start=first_row):
        result.rows_read += 1
        try:
            record = parse_row(row, row_number, result.issues, config)
        except SheetParseError as e:
            logger.error("%s. Skipping it.", e)
            result.issues[e.reason] += 1
            result.rows_skipped += 1
            continue
        result.records.append(record)

    logger.info(result.summary())
    return result
