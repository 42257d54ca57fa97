"""
Incoming identity claims.

Two sources make claims about players:
- The membership sheet: one row per payment, with whatever identity and
  contact details the payer typed in (ImportRecord)
- PDGA event pages: a name and, for PDGA members, a PDGA number
  (ExternalPlayerRef)

Neither is trusted. The identity service decides which stored player (if
any) a claim refers to.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class ImportRecord:
    """
    One membership sheet row: a claim about a player plus a payment.

    Dates are calendar dates; the sheet parser strips any time component
    before building the record.
    """

    full_name: str
    confirmation_code: str
    valid_from: date
    valid_until: date

    registry_number: Optional[str] = None
    birth_date: Optional[date] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None

    # Payment details, stored as-is alongside the membership
    transaction_date: Optional[date] = None
    payment_name: Optional[str] = None
    payment_address: Optional[str] = None
    payment_email: Optional[str] = None
    payment_amount: Optional[str] = None
    payment_source: Optional[str] = None
    payment_detail: Optional[str] = None

    # Sheet row the record came from (for log messages)
    row_number: Optional[int] = None

    def __repr__(self) -> str:
        return (
            f"<ImportRecord(name='{self.full_name}', pdga={self.registry_number}, "
            f"code='{self.confirmation_code}')>"
        )


@dataclass(frozen=True)
class ExternalPlayerRef:
    """A player as listed on a tournament roster."""

    name: str
    registry_number: Optional[str] = None
