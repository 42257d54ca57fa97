#!/usr/bin/env python3
"""
Check one player's membership state, or print their membership history.

Usage:
    python scripts/check_membership.py --first Ted --last Moens --pdga 89924
    python scripts/check_membership.py --first Ted --last Moens --date 2024-06-01
    python scripts/check_membership.py --first Ted --last Moens --history
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bcds.config import settings
from bcds.dates import parse_date
from bcds.db.session import get_session
from bcds.memberships.store import DBMembershipStore
from bcds.players.errors import IdentityError
from bcds.players.store import DBPlayerStore
from bcds.services.player_lookup import check_membership, get_memberships

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Check a player's BCDS membership")
    parser.add_argument("--first", required=True, help="First name")
    parser.add_argument("--last", required=True, help="Last name")
    parser.add_argument("--pdga", default=None, help="PDGA number")
    parser.add_argument("--date", default=None, help="Date to check (default: today)")
    parser.add_argument("--history", action="store_true",
                        help="Print every membership instead of the state")
    args = parser.parse_args()

    with get_session() as session:
        player_store = DBPlayerStore(session)
        membership_store = DBMembershipStore(session)
        try:
            if args.history:
                for membership in get_memberships(
                    player_store, membership_store, args.first, args.last, args.pdga
                ):
                    print(f"{membership.valid_from} -> {membership.valid_until}")
                return

            state = check_membership(
                player_store, membership_store,
                args.first, args.last, args.pdga,
                on_date=parse_date(args.date),
            )
        except IdentityError as e:
            logger.error("%s", e)
            sys.exit(1)

    print(state.value)


if __name__ == "__main__":
    main()
