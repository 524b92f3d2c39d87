"""
Tests for rent cards and Double The Rent.
"""

from monopoly_deal.events import EventType
from monopoly_deal.view import RentContext

from conftest import Table


def test_rent_charges_every_opponent(four_playing_game):
    table = Table(four_playing_game)
    table.give(0, "hand", "rent-dark_blue-green-0")
    table.give(0, "properties", "prop-boardwalk", "prop-park_place")
    table.give(1, "bank", "money-10-0")
    table.give(2, "bank", "money-5-0", "money-3-0")
    table.give(3, "bank", "money-4-0", "money-4-1")

    assert four_playing_game.play_card("rent-dark_blue-green-0", "action", target="dark_blue")

    # No change is given on the $10M note
    assert four_playing_game.get_player(0).bank_value == 26
    for player_id in (1, 2, 3):
        assert four_playing_game.get_player(player_id).bank == []
    assert four_playing_game.moves_left == 2


def test_wild_rent_charges_one_opponent(four_playing_game):
    table = Table(four_playing_game)
    table.give(0, "hand", "rent-wild-0")
    table.give(0, "properties", "prop-boardwalk", "prop-park_place")
    table.give(1, "bank", "money-10-0")
    table.give(2, "bank", "money-5-0", "money-3-0")

    assert four_playing_game.play_card("rent-wild-0", "action", target_player_id=2, target="dark_blue")

    assert four_playing_game.get_player(0).bank_value == 8
    assert four_playing_game.get_player(1).bank_value == 10
    assert four_playing_game.get_player(2).bank == []
    assert four_playing_game.last_rent == RentContext("dark_blue", 8, (2,))


def test_bot_rent_picks_highest_colour(playing_game, table):
    table.give(0, "hand", "rent-dark_blue-green-0")
    table.give(0, "properties", "prop-boardwalk", "prop-pacific_avenue", "prop-pennsylvania_avenue")
    table.give(1, "bank", "money-4-0")

    assert playing_game.play_card("rent-dark_blue-green-0", "action")

    assert playing_game.get_player(0).bank_value == 4
    assert playing_game.last_rent.color == "green"


def test_rent_needs_a_matching_property(playing_game, table):
    table.give(0, "hand", "rent-red-yellow-0")
    table.give(0, "properties", "prop-boardwalk")

    assert not playing_game.play_card("rent-red-yellow-0", "action")
    assert not playing_game.play_card("rent-red-yellow-0", "action", target="red")
    assert playing_game.moves_left == 3


def test_rent_colour_must_be_on_card(playing_game, table):
    table.give(0, "hand", "rent-dark_blue-green-0")
    table.give(0, "properties", "prop-baltic_avenue")

    assert not playing_game.play_card("rent-dark_blue-green-0", "action", target="brown")


def test_rent_includes_buildings(playing_game, table):
    table.give(0, "hand", "rent-dark_blue-green-0")
    house = table.give(0, "properties", "prop-boardwalk", "prop-park_place", "action-house-0")[-1]
    house.attached_color = "dark_blue"
    table.give(1, "bank", "money-10-0", "money-1-0")

    assert playing_game.play_card("rent-dark_blue-green-0", "action", target="dark_blue")

    assert playing_game.last_rent.amount == 11
    assert playing_game.get_player(0).bank_value == 11


def test_double_rent_repeats_the_charge(playing_game, table):
    """Orange rent of 3 followed by Double The Rent collects 3 twice."""
    table.give(0, "hand", "rent-pink-orange-0", "action-double_rent-0")
    table.give(0, "properties", "prop-new_york_avenue", "prop-st_james_place")
    table.give(1, "bank", "money-3-0", "money-3-1", "money-1-0")

    assert playing_game.play_card("rent-pink-orange-0", "action", target="orange")
    assert playing_game.last_rent == RentContext("orange", 3, (1,))

    assert playing_game.play_card("action-double_rent-0", "action")

    payments = playing_game.event_log.of_type(EventType.PAYMENT)
    assert [e.details["amount"] for e in payments] == [3, 3]
    assert playing_game.get_player(0).bank_value == 6
    assert playing_game.get_player(1).bank_value == 1
    assert playing_game.moves_left == 1
    assert playing_game.last_rent is None


def test_double_rent_needs_a_rent_first(playing_game, table):
    table.give(0, "hand", "action-double_rent-0")

    assert not playing_game.play_card("action-double_rent-0", "action")
    assert playing_game.moves_left == 3
    assert playing_game.event_log.of_type(EventType.RULE_VIOLATION)


def test_double_rent_must_follow_directly(playing_game, table):
    table.give(0, "hand", "rent-pink-orange-0", "money-1-1", "action-double_rent-0")
    table.give(0, "properties", "prop-new_york_avenue")
    table.give(1, "bank", "money-5-0")

    assert playing_game.play_card("rent-pink-orange-0", "action", target="orange")
    assert playing_game.play_card("money-1-1", "bank")

    assert not playing_game.play_card("action-double_rent-0", "action")
    assert playing_game.moves_left == 1


def test_rent_context_cleared_at_turn_end(playing_game, table):
    table.give(0, "hand", "rent-pink-orange-0")
    table.give(0, "properties", "prop-new_york_avenue")

    assert playing_game.play_card("rent-pink-orange-0", "action", target="orange")
    assert playing_game.last_rent is not None

    assert playing_game.end_turn()
    assert playing_game.last_rent is None
