"""
Unit tests for the tournament membership report.
"""

from datetime import date

from bcds.db.models import Player
from bcds.memberships.status import MembershipState
from bcds.players.records import ExternalPlayerRef
from bcds.services.tournament_report import check_tournament


class FakePdgaClient:
    """Stands in for PdgaClient with a fixed event and roster."""

    def __init__(self, events=None, rosters=None):
        self.events = events or {}
        self.rosters = rosters or {}

    def get_tournament_data(self, tournament_id):
        return self.events.get(tournament_id)

    def get_tournament_players(self, tournament_id):
        return self.rosters.get(tournament_id, [])


def test_unknown_event_returns_none(identity_service, membership_store):
    assert check_tournament("404", FakePdgaClient(), identity_service, membership_store) is None


def test_report_for_event(db_session, identity_service, membership_store, add_player):
    ted = add_player("ted moens", registry_number="89924")
    membership_store.add_interval(ted.id, date(2024, 3, 1), date(2024, 12, 31))
    maria = add_player("maria jacobs")
    membership_store.add_interval(maria.id, date(2023, 3, 1), date(2023, 12, 31))

    client = FakePdgaClient(
        events={"71234": {"tournament_name": "Fall Classic", "start_date": "2024-06-01"}},
        rosters={
            "71234": [
                ExternalPlayerRef(name="theodore moens", registry_number="89924"),
                ExternalPlayerRef(name="maria jacobs"),
                ExternalPlayerRef(name="drop in"),
                ExternalPlayerRef(name="new person", registry_number="5555"),
            ]
        },
    )

    report = check_tournament("71234", client, identity_service, membership_store)

    assert report.tournament_name == "Fall Classic"
    assert report.as_of == date(2024, 6, 1)
    assert [(m.name, m.state) for m in report.players] == [
        ("theodore moens", MembershipState.ACTIVE_MEMBER),
        ("maria jacobs", MembershipState.PREVIOUS_MEMBER),
        ("drop in", MembershipState.PLAYER_NOT_KNOWN),
        ("new person", MembershipState.PREVIOUS_MEMBER),
    ]
    assert report.players[0].player_id == ted.id
    assert report.players[2].player_id is None

    assert report.counts() == {
        MembershipState.PLAYER_NOT_KNOWN: 1,
        MembershipState.ACTIVE_MEMBER: 1,
        MembershipState.PREVIOUS_MEMBER: 2,
    }
    assert "ACTIVE_MEMBER: 1" in report.summary()

    # Roster names become aliases; only the numbered newcomer is added
    assert ted.alias_names == ["theodore moens"]
    assert db_session.query(Player).count() == 3


def test_event_without_start_date_uses_today(identity_service, membership_store):
    client = FakePdgaClient(events={"1": {"name": "League Night"}})

    report = check_tournament("1", client, identity_service, membership_store)

    assert report.as_of == date.today()
    assert report.tournament_name == "League Night"
    assert report.players == []
