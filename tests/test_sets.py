"""
Tests for set grouping, completion and rent.
"""

from monopoly_deal.config import PROPERTY_SETS
from monopoly_deal.sets import (
    UNASSIGNED,
    compute_sets,
    count_complete_sets,
    displaced_buildings,
    is_in_complete_set,
    rent_for_color,
    sets_by_color,
)


def test_groups_by_effective_colour(catalog):
    """A wild joins the group of its current colour."""
    wild = catalog["wild-dark_blue-green-0"]
    wild.current_color = "green"
    properties = [catalog["prop-boardwalk"], wild, catalog["prop-pacific_avenue"]]

    groups = sets_by_color(properties)

    assert set(groups) == {"dark_blue", "green"}
    assert len(groups["dark_blue"].cards) == 1
    assert len(groups["green"].cards) == 2
    assert [s.color for s in compute_sets(properties)] == ["dark_blue", "green"]


def test_complete_dark_blue_rent(catalog):
    properties = [catalog["prop-boardwalk"], catalog["prop-park_place"]]
    group = sets_by_color(properties)["dark_blue"]

    assert group.is_complete
    assert group.rent == 8
    assert count_complete_sets(properties) == 1


def test_partial_set_rent_follows_schedule(catalog):
    properties = [catalog["prop-pacific_avenue"], catalog["prop-pennsylvania_avenue"]]

    assert rent_for_color(properties, "green") == 4
    assert rent_for_color(properties, "red") == 0
    assert count_complete_sets(properties) == 0


def test_rent_schedule_caps_at_last_entry():
    assert PROPERTY_SETS["railroad"].rent_for(4) == 4
    assert PROPERTY_SETS["brown"].rent_for(3) == 2
    assert PROPERTY_SETS["green"].rent_for(0) == 0


def test_unassigned_rainbow_never_completes(catalog):
    """Rainbow wilds without a colour sit in their own group worth nothing."""
    properties = [catalog["wild-rainbow-0"], catalog["wild-rainbow-1"]]

    groups = sets_by_color(properties)

    assert list(groups) == [UNASSIGNED]
    assert not groups[UNASSIGNED].is_complete
    assert groups[UNASSIGNED].rent == 0
    assert count_complete_sets(properties) == 0


def test_assigned_rainbow_counts_towards_set(catalog):
    rainbow = catalog["wild-rainbow-0"]
    rainbow.current_color = "dark_blue"

    assert count_complete_sets([catalog["prop-boardwalk"], rainbow]) == 1


def test_house_and_hotel_bonus(catalog):
    house = catalog["action-house-0"]
    hotel = catalog["action-hotel-0"]
    house.attached_color = "dark_blue"
    hotel.attached_color = "dark_blue"
    properties = [catalog["prop-boardwalk"], catalog["prop-park_place"], house, hotel]

    group = sets_by_color(properties)["dark_blue"]

    assert group.houses == 1
    assert group.hotels == 1
    assert group.rent == 8 + 3 + 4
    assert group.value == 4 + 3 + 3 + 4
    assert displaced_buildings(properties) == []


def test_building_bonus_configurable(catalog):
    house = catalog["action-house-0"]
    house.attached_color = "brown"
    properties = [catalog["prop-baltic_avenue"], catalog["prop-mediterranean_avenue"], house]

    assert rent_for_color(properties, "brown", house_bonus=1, hotel_bonus=1) == 3


def test_building_on_incomplete_set_is_displaced(catalog):
    house = catalog["action-house-0"]
    house.attached_color = "dark_blue"
    properties = [catalog["prop-boardwalk"], house]

    assert displaced_buildings(properties) == [house]
    # No bonus without a complete set
    assert rent_for_color(properties, "dark_blue") == 3


def test_hotel_without_house_is_displaced(catalog):
    hotel = catalog["action-hotel-0"]
    hotel.attached_color = "dark_blue"
    properties = [catalog["prop-boardwalk"], catalog["prop-park_place"], hotel]

    assert displaced_buildings(properties) == [hotel]


def test_second_house_is_displaced(catalog):
    first = catalog["action-house-0"]
    second = catalog["action-house-1"]
    first.attached_color = "dark_blue"
    second.attached_color = "dark_blue"
    properties = [catalog["prop-boardwalk"], catalog["prop-park_place"], first, second]

    assert displaced_buildings(properties) == [second]


def test_is_in_complete_set(catalog):
    boardwalk = catalog["prop-boardwalk"]
    baltic = catalog["prop-baltic_avenue"]
    properties = [boardwalk, catalog["prop-park_place"], baltic]

    assert is_in_complete_set(properties, boardwalk)
    assert not is_in_complete_set(properties, baltic)


def test_extra_cards_keep_set_complete(catalog):
    """Three dark blue cards still make one complete set."""
    wild = catalog["wild-dark_blue-green-0"]
    properties = [catalog["prop-boardwalk"], catalog["prop-park_place"], wild]

    group = sets_by_color(properties)["dark_blue"]

    assert group.is_complete
    assert group.rent == 8
    assert group.missing == 0


def test_adding_property_never_uncompletes(catalog):
    """Completion is monotone under adding cards."""
    properties = [catalog["prop-boardwalk"], catalog["prop-park_place"]]
    before = count_complete_sets(properties)

    for card_id in ("wild-dark_blue-green-0", "prop-pacific_avenue", "wild-rainbow-0"):
        properties.append(catalog[card_id])
        assert count_complete_sets(properties) >= before
        before = count_complete_sets(properties)
