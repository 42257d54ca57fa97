"""
Services that drive the identity engine from the outside world.

- membership_import: sheet records -> players + memberships
- tournament_report: PDGA roster -> membership state per player
- player_lookup: first/last name + PDGA number -> player / state / history
"""

from bcds.services.membership_import import (
    ImportThrottle,
    MembershipImportStats,
    import_memberships,
    reload_memberships,
)
from bcds.services.player_lookup import check_membership, find_player, get_memberships
from bcds.services.tournament_report import (
    MemberStatus,
    TournamentMembershipReport,
    check_tournament,
)

__all__ = [
    "ImportThrottle",
    "MemberStatus",
    "MembershipImportStats",
    "TournamentMembershipReport",
    "check_membership",
    "check_tournament",
    "find_player",
    "get_memberships",
    "import_memberships",
    "reload_memberships",
]
