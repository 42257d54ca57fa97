"""
Membership status evaluation.

A player is an active member on a date if one of their membership
intervals includes that date. Comparisons are on calendar dates only.

Membership years follow the club's season: a payment covers the rest of
its calendar year, except that a renewal bought in October, November or
December also covers the whole of the following season.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Optional

from bcds.config import settings
from bcds.dates import to_calendar_date
from bcds.db.models import Player
from bcds.memberships.store import MembershipStore


class MembershipState(str, Enum):
    """Outcome of a membership check."""

    PLAYER_NOT_KNOWN = "PLAYER_NOT_KNOWN"
    ACTIVE_MEMBER = "ACTIVE_MEMBER"
    # Lapsed, or known to us but never paid: the data cannot tell them apart
    PREVIOUS_MEMBER = "PREVIOUS_MEMBER"


def membership_state(
    player: Optional[Player],
    as_of: Optional[date | datetime] = None,
    *,
    store: MembershipStore,
) -> MembershipState:
    """
    Membership state of a player on a given date.

    Args:
        player: Resolved player, or None if the player could not be resolved
        as_of: Date to check; defaults to today
        store: Where membership intervals live

    Returns:
        PLAYER_NOT_KNOWN for no (or an unsaved) player, ACTIVE_MEMBER if an
        interval covers the date, PREVIOUS_MEMBER otherwise
    """
    if player is None or player.id is None:
        return MembershipState.PLAYER_NOT_KNOWN

    on_date = to_calendar_date(as_of) if as_of is not None else date.today()
    if store.interval_covering(player.id, on_date) is not None:
        return MembershipState.ACTIVE_MEMBER
    return MembershipState.PREVIOUS_MEMBER


def membership_year(
    transaction_date: date | datetime,
    rollover_month: Optional[int] = None,
) -> tuple[date, date]:
    """
    Validity interval bought by a payment on transaction_date.

    Args:
        transaction_date: When the payment was made
        rollover_month: First month whose payments also cover next year
            (defaults to settings.membership_rollover_month, October)

    Returns:
        (valid_from, valid_until)

    Examples:
        >>> membership_year(date(2023, 9, 15))
        (datetime.date(2023, 9, 15), datetime.date(2023, 12, 31))
        >>> membership_year(date(2023, 10, 1))
        (datetime.date(2023, 10, 1), datetime.date(2024, 12, 31))
    """
    if rollover_month is None:
        rollover_month = settings.membership_rollover_month

    valid_from = to_calendar_date(transaction_date)
    end_year = valid_from.year
    if valid_from.month >= rollover_month:
        end_year += 1
    return valid_from, date(end_year, 12, 31)
