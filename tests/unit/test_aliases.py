"""
Unit tests for name normalization and alias tracking.
"""

from bcds.db.models import Player
from bcds.players.aliases import is_known_as, normalize_name, track_alias


def test_normalize_name():
    assert normalize_name("  Ted   MOENS ") == "ted moens"
    assert normalize_name("Fred\tRoberts-Lee") == "fred roberts-lee"
    assert normalize_name("") == ""
    assert normalize_name(None) == ""


def test_is_known_as_full_name_ignores_case_and_spacing():
    player = Player(full_name="fred roberts")
    assert is_known_as(player, "Fred  Roberts")
    assert not is_known_as(player, "")


def test_is_known_as_alias():
    player = Player(full_name="katherine smith")
    track_alias(player, "kate smith")
    assert is_known_as(player, "KATE SMITH")


def test_is_known_as_requires_whole_name():
    """A substring of an alias is a different person."""
    player = Player(full_name="frederick robertson")
    track_alias(player, "fred robertson")

    assert not is_known_as(player, "fred roberts")
    assert not is_known_as(player, "robertson")


class TestTrackAlias:
    """Tests for track_alias()."""

    def test_adds_new_name(self):
        player = Player(full_name="ted moens")
        assert track_alias(player, "Theodore Moens", source="pdga") is True
        assert player.alias_names == ["theodore moens"]
        assert player.aliases[0].source == "pdga"

    def test_ignores_full_name(self):
        player = Player(full_name="ted moens")
        assert track_alias(player, "TED MOENS") is False
        assert player.alias_names == []

    def test_ignores_existing_alias(self):
        player = Player(full_name="ted moens")
        track_alias(player, "teddy moens")
        assert track_alias(player, "teddy  moens") is False
        assert player.alias_names == ["teddy moens"]

    def test_ignores_blank_name(self):
        player = Player(full_name="ted moens")
        assert track_alias(player, "   ") is False
        assert player.alias_names == []

    def test_keeps_discovery_order(self):
        player = Player(full_name="ted moens")
        for name in ["teddy moens", "t moens", "theodore moens"]:
            track_alias(player, name)
        assert player.alias_names == ["teddy moens", "t moens", "theodore moens"]
