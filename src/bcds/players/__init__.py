"""
Player identity management module.

Players reach us from two untrusted sources (the membership sheet and
PDGA tournament rosters) under inconsistent names. This module decides
which stored player each record refers to.

Key components:
- PlayerIdentityService: Reconciles sheet rows and roster entries
- score_candidate: Ranks same-name candidates for a sheet row
- is_known_as / track_alias: Alias bookkeeping on a player
- DBPlayerStore: Database-backed player registry

The matching strategy (in priority order):
1. Exact PDGA number
2. Exact name, ranked by birth date / PDGA number / email / address
3. Single validated name-or-alias match (rosters only)
4. New player, or "unknown" for bare roster names
"""

from bcds.players.aliases import is_known_as, normalize_name, track_alias
from bcds.players.errors import AmbiguousMatch, IdentityConflict, IdentityError
from bcds.players.identity import PlayerIdentityService
from bcds.players.records import ExternalPlayerRef, ImportRecord
from bcds.players.scoring import DISQUALIFIED, score_candidate
from bcds.players.store import DBPlayerStore, PlayerStore

__all__ = [
    "AmbiguousMatch",
    "DBPlayerStore",
    "DISQUALIFIED",
    "ExternalPlayerRef",
    "IdentityConflict",
    "IdentityError",
    "ImportRecord",
    "PlayerIdentityService",
    "PlayerStore",
    "is_known_as",
    "normalize_name",
    "score_candidate",
    "track_alias",
]
