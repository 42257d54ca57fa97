#!/usr/bin/env python3
"""
Import the membership sheet into the player registry.

Reads a CSV export of the membership sheet, parses every row, and records
a membership for each payment not imported before. Rows that contradict a
stored player are logged with a "FIX ==>" prefix and skipped.

With --watch the export is re-imported as it changes, at most once every
SHEET_RELOAD_LATENCY_SECONDS.

Usage:
    python scripts/import_membership_sheet.py --csv membership.csv

    # Parse only, don't touch the database
    python scripts/import_membership_sheet.py --csv membership.csv --dry-run

    # Keep importing the export as it is refreshed
    python scripts/import_membership_sheet.py --csv membership.csv --watch
"""

import argparse
import csv
import logging
import sys
import time
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bcds.config import settings
from bcds.db.session import get_session
from bcds.memberships.store import DBMembershipStore
from bcds.players.identity import PlayerIdentityService
from bcds.players.store import DBPlayerStore
from bcds.services.membership_import import ImportThrottle, reload_memberships
from bcds.sheet.parser import parse_rows

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

# Seconds between checks for a changed export in --watch mode
POLL_INTERVAL_SECONDS = 10


def read_rows(path: Path) -> list[list[str]]:
    with path.open(newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


def main():
    parser = argparse.ArgumentParser(description="Import the BCDS membership sheet")
    parser.add_argument("--csv", type=Path, required=True,
                        help="CSV export of the membership sheet (header row first)")
    parser.add_argument("--dry-run", action="store_true",
                        help="Parse and validate the sheet without importing")
    parser.add_argument("--watch", action="store_true",
                        help="Re-import whenever the export changes")
    args = parser.parse_args()

    if args.dry_run:
        print(parse_rows(read_rows(args.csv)).summary())
        return

    throttle = ImportThrottle()
    last_mtime = None
    while True:
        mtime = args.csv.stat().st_mtime
        if mtime != last_mtime:
            with get_session() as session:
                stats = reload_memberships(
                    session,
                    lambda: read_rows(args.csv),
                    throttle,
                    PlayerIdentityService(DBPlayerStore(session)),
                    DBMembershipStore(session),
                )
            if stats is not None:
                last_mtime = mtime
                print(stats.summary())

        if not args.watch:
            break
        time.sleep(POLL_INTERVAL_SECONDS)


if __name__ == "__main__":
    main()
