#!/usr/bin/env python3
"""
Report the membership state of everyone at a PDGA event.

Membership is evaluated on the event's start date. Players listed on the
event page with a PDGA number we have never seen are added to the player
registry.

Usage:
    python scripts/check_tournament.py 71234
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bcds.config import settings
from bcds.db.session import get_session
from bcds.memberships.store import DBMembershipStore
from bcds.pdga.client import PdgaClient
from bcds.players.identity import PlayerIdentityService
from bcds.players.store import DBPlayerStore
from bcds.services.tournament_report import check_tournament

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Check membership for a PDGA event")
    parser.add_argument("tournament_id", help="PDGA event id")
    args = parser.parse_args()

    client = PdgaClient()
    with get_session() as session:
        report = check_tournament(
            args.tournament_id,
            client,
            PlayerIdentityService(DBPlayerStore(session)),
            DBMembershipStore(session),
        )

        if report is None:
            print(f"PDGA has no event {args.tournament_id}")
            sys.exit(1)

        for member in report.players:
            number = member.registry_number or "-"
            note = f"  ({member.note})" if member.note else ""
            print(f"{member.name:<30} {number:>8}  {member.state.value}{note}")
        print()
        print(report.summary())


if __name__ == "__main__":
    main()
