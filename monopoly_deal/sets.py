"""
Set grouping and rent calculation.

All functions here are pure: they read a player's property area and never
modify it.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from monopoly_deal.cards import BuildingCard, Card, PropertyCard, WildPropertyCard
from monopoly_deal.config import PROPERTY_SETS

# Pseudo-colour of a rainbow wild that has not been given a colour yet
UNASSIGNED = "unassigned"

HOUSE_BONUS = 3
HOTEL_BONUS = 4


def effective_color(card: Card) -> Optional[str]:
    """Colour group a card in a property area belongs to."""
    if isinstance(card, PropertyCard):
        return card.color
    if isinstance(card, WildPropertyCard):
        return card.current_color or UNASSIGNED
    if isinstance(card, BuildingCard):
        return card.attached_color
    return None


@dataclass
class PropertySet:
    """Derived grouping of one player's properties sharing an effective colour."""

    color: str
    cards: List[Card] = field(default_factory=list)
    buildings: List[BuildingCard] = field(default_factory=list)
    house_bonus: int = HOUSE_BONUS
    hotel_bonus: int = HOTEL_BONUS

    @property
    def houses(self) -> int:
        return sum(1 for b in self.buildings if b.is_house)

    @property
    def hotels(self) -> int:
        return sum(1 for b in self.buildings if not b.is_house)

    @property
    def cards_needed(self) -> int:
        definition = PROPERTY_SETS.get(self.color)
        return definition.cards_needed if definition else 0

    @property
    def is_complete(self) -> bool:
        if self.color not in PROPERTY_SETS:
            return False
        return len(self.cards) >= self.cards_needed

    @property
    def rent(self) -> int:
        definition = PROPERTY_SETS.get(self.color)
        if definition is None or not self.cards:
            return 0
        amount = definition.rent_for(len(self.cards))
        if self.is_complete:
            if self.houses:
                amount += self.house_bonus
            if self.hotels:
                amount += self.hotel_bonus
        return amount

    @property
    def value(self) -> int:
        """Payment value of every card in the set, buildings included."""
        return sum(c.value for c in self.cards) + sum(b.value for b in self.buildings)

    @property
    def missing(self) -> int:
        return max(self.cards_needed - len(self.cards), 0)


def compute_sets(
    properties: Iterable[Card],
    house_bonus: int = HOUSE_BONUS,
    hotel_bonus: int = HOTEL_BONUS,
) -> List[PropertySet]:
    """Group a property area by effective colour, in order of first appearance."""
    groups: Dict[str, PropertySet] = {}
    buildings: List[BuildingCard] = []

    for card in properties:
        if isinstance(card, BuildingCard):
            buildings.append(card)
            continue
        color = effective_color(card)
        if color is None:
            continue
        if color not in groups:
            groups[color] = PropertySet(color, house_bonus=house_bonus, hotel_bonus=hotel_bonus)
        groups[color].cards.append(card)

    for building in buildings:
        group = groups.get(building.attached_color)
        if group is not None:
            group.buildings.append(building)

    return list(groups.values())


def sets_by_color(properties: Iterable[Card], **bonuses: int) -> Dict[str, PropertySet]:
    return {s.color: s for s in compute_sets(properties, **bonuses)}


def count_complete_sets(properties: Iterable[Card]) -> int:
    return sum(1 for s in compute_sets(properties) if s.is_complete)


def complete_colors(properties: Iterable[Card]) -> List[str]:
    return [s.color for s in compute_sets(properties) if s.is_complete]


def rent_for_color(properties: Iterable[Card], color: str, **bonuses: int) -> int:
    """Rent a player collects for one colour, 0 when they hold none of it."""
    group = sets_by_color(properties, **bonuses).get(color)
    return group.rent if group else 0


def is_in_complete_set(properties: Iterable[Card], card: Card) -> bool:
    """Check whether removing `card` would break a complete set."""
    color = effective_color(card)
    group = sets_by_color(properties).get(color)
    return bool(group and group.is_complete and card in group.cards)


def displaced_buildings(properties: Iterable[Card]) -> List[BuildingCard]:
    """
    Buildings that may no longer stay in the property area.

    A building must sit on a complete set, a set carries at most one house
    and one hotel, and a hotel needs a house on the same set.
    """
    properties = list(properties)
    groups = sets_by_color(properties)
    displaced: List[BuildingCard] = []
    for building in (c for c in properties if isinstance(c, BuildingCard)):
        group = groups.get(building.attached_color)
        if group is None or not group.is_complete:
            displaced.append(building)

    kept = [c for c in properties if isinstance(c, BuildingCard) and c not in displaced]
    for color in dict.fromkeys(b.attached_color for b in kept):
        on_set = [b for b in kept if b.attached_color == color]
        houses = [b for b in on_set if b.is_house]
        hotels = [b for b in on_set if not b.is_house]
        displaced.extend(houses[1:])
        displaced.extend(hotels[1:])
        if not houses:
            displaced.extend(hotels[:1])
    return displaced
