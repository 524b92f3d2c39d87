"""
Tests for action cards, buildings and wild properties.
"""

from monopoly_deal import Phase
from monopoly_deal.events import EventType
from monopoly_deal.sets import rent_for_color

from conftest import Table


def _ids(cards):
    return sorted(c.card_id for c in cards)


def test_pass_go_draws_two(playing_game, table):
    table.give(0, "hand", "action-pass_go-0")

    assert playing_game.play_card("action-pass_go-0", "action")

    alice = playing_game.get_player(0)
    assert len(alice.hand) == 2
    assert [c.card_id for c in playing_game.discard_pile] == ["action-pass_go-0"]
    assert playing_game.moves_left == 2


def test_debt_collector_takes_exact_payment(playing_game, table):
    """Debt of 5 against a [1, 2, 2, 3] bank leaves the property alone."""
    table.give(0, "hand", "action-debt_collector-0")
    table.give(1, "bank", "money-1-0", "money-2-0", "money-2-1", "money-3-0")
    table.give(1, "properties", "prop-boardwalk")

    assert playing_game.play_card("action-debt_collector-0", "action", target_player_id=1)

    alice = playing_game.get_player(0)
    bob = playing_game.get_player(1)
    assert alice.bank_value == 5
    assert bob.bank_value == 3
    assert _ids(bob.properties) == ["prop-boardwalk"]
    assert playing_game.moves_left == 2
    assert playing_game.phase == Phase.PLAYING
    assert playing_game.discard_pile[-1].card_id == "action-debt_collector-0"


def test_debt_collector_needs_target(playing_game, table):
    table.give(0, "hand", "action-debt_collector-0")

    assert not playing_game.play_card("action-debt_collector-0", "action")

    assert playing_game.get_player(0).find_in_hand("action-debt_collector-0") is not None
    assert playing_game.event_log.of_type(EventType.INVALID_REQUEST)
    assert playing_game.moves_left == 3


def test_cannot_target_yourself(playing_game, table):
    table.give(0, "hand", "action-debt_collector-0")

    assert not playing_game.play_card("action-debt_collector-0", "action", target_player_id=0)
    assert playing_game.event_log.of_type(EventType.RULE_VIOLATION)


def test_debt_forgiven_when_victim_has_nothing(playing_game, table):
    table.give(0, "hand", "action-debt_collector-0")
    table.give(1, "hand", "money-5-0")

    assert playing_game.play_card("action-debt_collector-0", "action", target_player_id=1)

    # Hand cards are never taken
    assert playing_game.get_player(1).find_in_hand("money-5-0") is not None
    assert playing_game.event_log.of_type(EventType.DEBT_FORGIVEN)
    assert playing_game.moves_left == 2


def test_paid_properties_go_to_properties(playing_game, table):
    table.give(0, "hand", "action-debt_collector-0")
    table.give(1, "properties", "prop-pacific_avenue")

    assert playing_game.play_card("action-debt_collector-0", "action", target_player_id=1)

    alice = playing_game.get_player(0)
    assert _ids(alice.properties) == ["prop-pacific_avenue"]
    assert alice.bank == []
    assert playing_game.get_player(1).properties == []


def test_birthday_charges_every_opponent(four_playing_game):
    table = Table(four_playing_game)
    table.give(0, "hand", "action-birthday-0")
    table.give(1, "bank", "money-2-0")
    table.give(2, "bank", "money-2-1")
    table.give(3, "bank", "money-1-0", "money-1-1")

    assert four_playing_game.play_card("action-birthday-0", "action")

    assert four_playing_game.get_player(0).bank_value == 6
    for player_id in (1, 2, 3):
        assert four_playing_game.get_player(player_id).bank == []
    assert len(four_playing_game.event_log.of_type(EventType.PAYMENT)) == 3


def test_sly_deal_takes_property(playing_game, table):
    table.give(0, "hand", "action-sly_deal-0")
    table.give(1, "properties", "prop-baltic_avenue")

    assert playing_game.play_card("action-sly_deal-0", "action", target_player_id=1, target="prop-baltic_avenue")

    assert _ids(playing_game.get_player(0).properties) == ["prop-baltic_avenue"]
    assert playing_game.get_player(1).properties == []
    assert playing_game.event_log.of_type(EventType.STEAL)


def test_sly_deal_finds_owner_without_player_id(playing_game, table):
    table.give(0, "hand", "action-sly_deal-0")
    table.give(1, "properties", "prop-baltic_avenue")

    assert playing_game.play_card("action-sly_deal-0", "action", target="prop-baltic_avenue")
    assert _ids(playing_game.get_player(0).properties) == ["prop-baltic_avenue"]


def test_sly_deal_cannot_break_complete_set(playing_game, table):
    table.give(0, "hand", "action-sly_deal-0")
    table.give(1, "properties", "prop-boardwalk", "prop-park_place")

    assert not playing_game.play_card("action-sly_deal-0", "action", target_player_id=1, target="prop-boardwalk")

    assert _ids(playing_game.get_player(1).properties) == ["prop-boardwalk", "prop-park_place"]
    assert playing_game.get_player(0).find_in_hand("action-sly_deal-0") is not None
    assert playing_game.moves_left == 3
    assert playing_game.event_log.of_type(EventType.RULE_VIOLATION)


def test_sly_deal_cannot_take_buildings(playing_game, table):
    table.give(0, "hand", "action-sly_deal-0")
    house = table.give(1, "properties", "prop-boardwalk", "prop-park_place", "action-house-0")[-1]
    house.attached_color = "dark_blue"

    assert not playing_game.play_card("action-sly_deal-0", "action", target_player_id=1, target="action-house-0")


def test_forced_deal_swaps_properties(playing_game, table):
    table.give(0, "hand", "action-forced_deal-0")
    table.give(0, "properties", "prop-baltic_avenue")
    table.give(1, "properties", "prop-pacific_avenue")

    assert playing_game.play_card(
        "action-forced_deal-0",
        "action",
        target_player_id=1,
        target="prop-pacific_avenue",
        auxiliary_card_id="prop-baltic_avenue",
    )

    assert _ids(playing_game.get_player(0).properties) == ["prop-pacific_avenue"]
    assert _ids(playing_game.get_player(1).properties) == ["prop-baltic_avenue"]
    assert playing_game.event_log.of_type(EventType.SWAP)


def test_forced_deal_cannot_give_from_complete_set(playing_game, table):
    table.give(0, "hand", "action-forced_deal-0")
    table.give(0, "properties", "prop-boardwalk", "prop-park_place")
    table.give(1, "properties", "prop-pacific_avenue")

    assert not playing_game.play_card(
        "action-forced_deal-0",
        "action",
        target_player_id=1,
        target="prop-pacific_avenue",
        auxiliary_card_id="prop-boardwalk",
    )
    assert _ids(playing_game.get_player(1).properties) == ["prop-pacific_avenue"]


def test_deal_breaker_takes_set_with_buildings(playing_game, table):
    table.give(0, "hand", "action-deal_breaker-0")
    house = table.give(1, "properties", "prop-boardwalk", "prop-park_place", "action-house-0")[-1]
    house.attached_color = "dark_blue"

    assert playing_game.play_card("action-deal_breaker-0", "action", target_player_id=1, target="dark_blue")

    alice = playing_game.get_player(0)
    assert _ids(alice.properties) == ["action-house-0", "prop-boardwalk", "prop-park_place"]
    assert house.attached_color == "dark_blue"
    assert rent_for_color(alice.properties, "dark_blue") == 11
    assert playing_game.get_player(1).properties == []
    assert playing_game.event_log.of_type(EventType.SET_STOLEN)


def test_deal_breaker_by_member_card(playing_game, table):
    table.give(0, "hand", "action-deal_breaker-0")
    table.give(1, "properties", "prop-baltic_avenue", "prop-mediterranean_avenue")

    assert playing_game.play_card("action-deal_breaker-0", "action", target="prop-baltic_avenue")
    assert len(playing_game.get_player(0).properties) == 2


def test_deal_breaker_needs_complete_set(playing_game, table):
    table.give(0, "hand", "action-deal_breaker-0")
    table.give(1, "properties", "prop-pacific_avenue", "prop-pennsylvania_avenue")

    assert not playing_game.play_card("action-deal_breaker-0", "action", target_player_id=1, target="green")
    assert len(playing_game.get_player(1).properties) == 2
    assert playing_game.moves_left == 3


def test_house_needs_complete_set(playing_game, table):
    table.give(0, "hand", "action-house-0")
    table.give(0, "properties", "prop-boardwalk")

    assert not playing_game.play_card("action-house-0", "properties", target="dark_blue")
    assert playing_game.get_player(0).find_in_hand("action-house-0") is not None


def test_house_and_hotel_raise_rent(playing_game, table):
    table.give(0, "hand", "action-house-0", "action-hotel-0")
    table.give(0, "properties", "prop-boardwalk", "prop-park_place")

    assert playing_game.play_card("action-house-0", "properties", target="dark_blue")
    assert playing_game.play_card("action-hotel-0", "properties", target="prop-boardwalk")

    alice = playing_game.get_player(0)
    assert rent_for_color(alice.properties, "dark_blue") == 15
    assert len(playing_game.event_log.of_type(EventType.BUILD)) == 2
    assert playing_game.moves_left == 1


def test_hotel_needs_house(playing_game, table):
    table.give(0, "hand", "action-hotel-0")
    table.give(0, "properties", "prop-boardwalk", "prop-park_place")

    assert not playing_game.play_card("action-hotel-0", "properties", target="dark_blue")


def test_only_one_house_per_set(playing_game, table):
    table.give(0, "hand", "action-house-1")
    house = table.give(0, "properties", "prop-boardwalk", "prop-park_place", "action-house-0")[-1]
    house.attached_color = "dark_blue"

    assert not playing_game.play_card("action-house-1", "properties", target="dark_blue")


def test_building_leaves_when_set_breaks(playing_game, table):
    """Flipping a wild out of a built set moves the house to the bank."""
    table.give(0, "properties", "prop-boardwalk")
    table.give(0, "properties", "wild-dark_blue-green-0", color="dark_blue")
    house = table.give(0, "properties", "action-house-0")[0]
    house.attached_color = "dark_blue"

    assert playing_game.flip_wild_card("wild-dark_blue-green-0", "green")

    alice = playing_game.get_player(0)
    assert house in alice.bank
    assert house not in alice.properties
    assert house.attached_color is None
    assert playing_game.event_log.of_type(EventType.BUILDING_DISPLACED)


def test_attached_building_can_pay_debts(playing_game, table):
    table.give(0, "hand", "action-debt_collector-0")
    house = table.give(1, "properties", "prop-baltic_avenue", "prop-mediterranean_avenue", "action-house-0")[-1]
    house.attached_color = "brown"

    assert playing_game.play_card("action-debt_collector-0", "action", target_player_id=1)

    alice = playing_game.get_player(0)
    assert house in alice.bank
    assert house.attached_color is None
    assert _ids(alice.properties) == ["prop-baltic_avenue", "prop-mediterranean_avenue"]
    assert playing_game.get_player(1).properties == []


def test_wild_property_takes_chosen_colour(playing_game, table):
    wild = table.give(0, "hand", "wild-dark_blue-green-0")[0]

    assert playing_game.play_card("wild-dark_blue-green-0", "properties", target="green")

    assert wild.current_color == "green"


def test_wild_property_rejects_foreign_colour(playing_game, table):
    table.give(0, "hand", "wild-dark_blue-green-0")

    assert not playing_game.play_card("wild-dark_blue-green-0", "properties", target="red")


def test_flip_wild_costs_no_move(playing_game, table):
    wild = table.give(0, "properties", "wild-dark_blue-green-0", color="dark_blue")[0]

    assert playing_game.flip_wild_card("wild-dark_blue-green-0")

    assert wild.current_color == "green"
    assert playing_game.moves_left == 3
    assert playing_game.event_log.of_type(EventType.FLIP_WILD)


def test_flip_to_same_colour_rejected(playing_game, table):
    table.give(0, "properties", "wild-dark_blue-green-0", color="dark_blue")

    assert not playing_game.flip_wild_card("wild-dark_blue-green-0", "dark_blue")
    assert not playing_game.flip_wild_card("wild-dark_blue-green-0", "red")


def test_rainbow_assigned_once(playing_game, table):
    rainbow = table.give(0, "hand", "wild-rainbow-0")[0]

    assert playing_game.play_card("wild-rainbow-0", "properties")
    assert rainbow.current_color is None

    assert playing_game.flip_wild_card("wild-rainbow-0", "red")
    assert rainbow.current_color == "red"
    assert not playing_game.flip_wild_card("wild-rainbow-0", "green")
    assert rainbow.current_color == "red"


def test_rainbow_cannot_be_banked(playing_game, table):
    table.give(0, "hand", "wild-rainbow-0")

    assert not playing_game.play_card("wild-rainbow-0", "bank")


def test_debt_collector_takes_lone_five(playing_game, table):
    """A victim holding only $5M hands it over."""
    table.give(0, "hand", "action-debt_collector-0")
    table.give(1, "bank", "money-5-0")

    assert playing_game.play_card("action-debt_collector-0", "action", target_player_id=1)

    assert [c.card_id for c in playing_game.get_player(0).bank] == ["money-5-0"]
    assert playing_game.get_player(1).bank == []
