"""
Unit tests for membership status evaluation and membership years.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from bcds.db.models import Player
from bcds.memberships.status import MembershipState, membership_state, membership_year


@pytest.fixture
def member(add_player, membership_store):
    """A player with one membership covering the 2024 season."""
    player = add_player("ted moens", registry_number="89924")
    membership_store.add_interval(player.id, date(2024, 3, 1), date(2024, 12, 31))
    return player


def test_unresolved_player_is_not_known(membership_store):
    assert membership_state(None, date(2024, 6, 1), store=membership_store) == (
        MembershipState.PLAYER_NOT_KNOWN
    )


def test_unsaved_player_is_not_known(membership_store):
    player = Player(full_name="ted moens")
    assert membership_state(player, date(2024, 6, 1), store=membership_store) == (
        MembershipState.PLAYER_NOT_KNOWN
    )


def test_player_without_memberships_is_previous_member(add_player, membership_store):
    player = add_player("maria jacobs")
    assert membership_state(player, date(2024, 6, 1), store=membership_store) == (
        MembershipState.PREVIOUS_MEMBER
    )


@pytest.mark.parametrize(
    "on_date, expected",
    [
        (date(2024, 2, 29), MembershipState.PREVIOUS_MEMBER),
        (date(2024, 3, 1), MembershipState.ACTIVE_MEMBER),
        (date(2024, 7, 15), MembershipState.ACTIVE_MEMBER),
        (date(2024, 12, 31), MembershipState.ACTIVE_MEMBER),
        (date(2025, 1, 1), MembershipState.PREVIOUS_MEMBER),
    ],
)
def test_interval_ends_are_inclusive(member, membership_store, on_date, expected):
    assert membership_state(member, on_date, store=membership_store) == expected


def test_datetime_is_reduced_to_calendar_date(member, membership_store):
    late_evening = datetime(2024, 12, 31, 23, 59, 59)
    assert membership_state(member, late_evening, store=membership_store) == (
        MembershipState.ACTIVE_MEMBER
    )

    # 23:30 in Toronto on Dec 31 is already Jan 1 in UTC
    toronto = timezone(timedelta(hours=-5))
    assert membership_state(
        member, datetime(2024, 12, 31, 23, 30, tzinfo=toronto), store=membership_store
    ) == MembershipState.PREVIOUS_MEMBER


def test_defaults_to_today(add_player, membership_store):
    player = add_player("sam green")
    today = date.today()
    membership_store.add_interval(player.id, today - timedelta(days=1), today + timedelta(days=1))

    assert membership_state(player, store=membership_store) == MembershipState.ACTIVE_MEMBER


def test_any_of_several_intervals_counts(member, membership_store):
    membership_store.add_interval(member.id, date(2026, 1, 1), date(2026, 12, 31))

    assert membership_state(member, date(2025, 6, 1), store=membership_store) == (
        MembershipState.PREVIOUS_MEMBER
    )
    assert membership_state(member, date(2026, 6, 1), store=membership_store) == (
        MembershipState.ACTIVE_MEMBER
    )


def test_intervals_for_player_oldest_first(member, membership_store):
    membership_store.add_interval(member.id, date(2022, 1, 1), date(2022, 12, 31))

    history = membership_store.intervals_for_player(member.id)

    assert [m.valid_from for m in history] == [date(2022, 1, 1), date(2024, 3, 1)]


def test_add_interval_rejects_reversed_range(member, membership_store):
    with pytest.raises(ValueError):
        membership_store.add_interval(member.id, date(2024, 12, 31), date(2024, 1, 1))


class TestMembershipYear:
    """Tests for membership_year()."""

    def test_before_rollover_covers_rest_of_year(self):
        assert membership_year(date(2023, 9, 15)) == (date(2023, 9, 15), date(2023, 12, 31))

    def test_from_rollover_covers_next_year(self):
        assert membership_year(date(2023, 10, 1)) == (date(2023, 10, 1), date(2024, 12, 31))

    def test_december_covers_next_year(self):
        assert membership_year(date(2023, 12, 31)) == (date(2023, 12, 31), date(2024, 12, 31))

    def test_datetime_transaction(self):
        assert membership_year(datetime(2023, 3, 2, 18, 45)) == (
            date(2023, 3, 2),
            date(2023, 12, 31),
        )

    def test_rollover_month_override(self):
        assert membership_year(date(2023, 9, 15), rollover_month=9) == (
            date(2023, 9, 15),
            date(2024, 12, 31),
        )
