"""
Tournament membership report: which players at a PDGA event were members.

Tournament directors need to know, for every player on an event roster,
whether they held a club membership on the first day of the event.

Roster entries are resolved with the identity service's read-leaning
path: known players may gain an alias or a PDGA number, and a player is
only created when the roster gives a PDGA number nobody has.

Usage:
    with get_session() as session:
        report = check_tournament(
            "71234",
            PdgaClient(),
            PlayerIdentityService(DBPlayerStore(session)),
            DBMembershipStore(session),
        )
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from bcds.dates import parse_date
from bcds.memberships.status import MembershipState, membership_state
from bcds.memberships.store import MembershipStore
from bcds.pdga.client import PdgaClient
from bcds.players.errors import IdentityConflict
from bcds.players.identity import PlayerIdentityService

logger = logging.getLogger(__name__)


@dataclass
class MemberStatus:
    """Membership state of one roster entry."""
    name: str
    registry_number: Optional[str]
    state: MembershipState = MembershipState.PLAYER_NOT_KNOWN
    player_id: Optional[int] = None
    note: Optional[str] = None


@dataclass
class TournamentMembershipReport:
    """Membership state of everyone on an event roster."""
    tournament_id: str
    tournament_data: dict[str, Any]
    as_of: date
    players: list[MemberStatus] = field(default_factory=list)

    @property
    def tournament_name(self) -> Optional[str]:
        return self.tournament_data.get("tournament_name") or self.tournament_data.get("name")

    def counts(self) -> dict[MembershipState, int]:
        """Number of roster entries per membership state."""
        counter = Counter(member.state for member in self.players)
        return {state: counter.get(state, 0) for state in MembershipState}

    def summary(self) -> str:
        lines = [f"Tournament {self.tournament_id} ({self.tournament_name}) on {self.as_of}:"]
        for state, count in self.counts().items():
            lines.append(f"  {state.value}: {count}")
        return "\n".join(lines)


def _event_start_date(tournament_data: dict[str, Any]) -> date:
    start = tournament_data.get("start_date")
    try:
        parsed = parse_date(start) if isinstance(start, str) else None
    except ValueError:
        parsed = None
    if parsed is None:
        logger.warning("Event has no usable start_date (%r); using today", start)
        return date.today()
    return parsed


def check_tournament(
    tournament_id: str,
    pdga_client: PdgaClient,
    identity_service: PlayerIdentityService,
    membership_store: MembershipStore,
) -> Optional[TournamentMembershipReport]:
    """
    Check the membership state of every player at a PDGA event.

    Args:
        tournament_id: PDGA event id
        pdga_client: Client for event data and roster
        identity_service: Resolves roster entries to players
        membership_store: Membership intervals

    Returns:
        The report, or None if the PDGA does not know the event
    """
    tournament_data = pdga_client.get_tournament_data(tournament_id)
    if not tournament_data:
        logger.info("PDGA has no event %s", tournament_id)
        return None

    report = TournamentMembershipReport(
        tournament_id=str(tournament_id),
        tournament_data=tournament_data,
        as_of=_event_start_date(tournament_data),
    )

    for ref in pdga_client.get_tournament_players(tournament_id):
        member = MemberStatus(name=ref.name, registry_number=ref.registry_number)
        try:
            player = identity_service.resolve_from_external_ref(ref)
        except IdentityConflict as e:
            logger.warning("Could not resolve roster entry %s: %s", ref, e)
            member.note = str(e)
            report.players.append(member)
            continue

        if player is not None:
            member.player_id = player.id
        member.state = membership_state(player, report.as_of, store=membership_store)
        report.players.append(member)

    logger.info(report.summary())
    return report
