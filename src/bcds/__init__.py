"""
BCDS Membership Tracker

Tracks club membership for disc golf players who show up under
inconsistent names in the membership sheet, on PDGA tournament rosters,
and in our own player registry.

Main components:
- players: Player identity reconciliation and alias tracking
- memberships: Membership intervals and status checks
- sheet: Membership sheet row parsing
- pdga: PDGA API client and event roster scraping
- services: Sheet import, tournament reports, player lookup
"""

__version__ = "1.0.0"
