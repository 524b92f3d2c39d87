"""
Card catalog and deck management.
"""

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Tuple

from monopoly_deal.config import ALL_COLORS


class CardKind(Enum):
    """Discriminant of the card variants."""

    MONEY = "money"
    PROPERTY = "property"
    PROPERTY_WILD = "property_wild"
    ACTION = "action"
    RENT = "rent"
    RENT_WILD = "rent_wild"


class ActionKind(Enum):
    """Types of action cards."""

    PASS_GO = "pass_go"
    DEBT_COLLECTOR = "debt_collector"
    BIRTHDAY = "birthday"
    SLY_DEAL = "sly_deal"
    FORCED_DEAL = "forced_deal"
    DEAL_BREAKER = "deal_breaker"
    JUST_SAY_NO = "just_say_no"
    HOUSE = "house"
    HOTEL = "hotel"
    DOUBLE_RENT = "double_rent"


@dataclass(eq=False)
class Card:
    """Base card: a unique instance id, a display name and a payment value."""

    card_id: str
    name: str
    value: int

    kind: ClassVar[CardKind]

    @property
    def is_property(self) -> bool:
        return self.kind in (CardKind.PROPERTY, CardKind.PROPERTY_WILD)

    @property
    def is_bankable(self) -> bool:
        """Property cards may never be banked."""
        return not self.is_property

    def __str__(self) -> str:
        return f"{self.name} (${self.value}M)"


@dataclass(eq=False)
class MoneyCard(Card):
    kind: ClassVar[CardKind] = CardKind.MONEY


@dataclass(eq=False)
class PropertyCard(Card):
    color: str = ""

    kind: ClassVar[CardKind] = CardKind.PROPERTY


@dataclass(eq=False)
class WildPropertyCard(Card):
    """
    Property valid for two colours, or for every colour (rainbow).

    `current_color` selects the set the card belongs to. A rainbow wild
    starts unassigned (None) and gets its colour once, when played.
    """

    colors: Tuple[str, ...] = ()
    current_color: Optional[str] = None

    kind: ClassVar[CardKind] = CardKind.PROPERTY_WILD

    @property
    def is_rainbow(self) -> bool:
        return len(self.colors) > 2

    def can_be(self, color: str) -> bool:
        return color in self.colors


@dataclass(eq=False)
class ActionCard(Card):
    action_kind: ActionKind = ActionKind.PASS_GO

    kind: ClassVar[CardKind] = CardKind.ACTION


@dataclass(eq=False)
class BuildingCard(ActionCard):
    """House or Hotel. `attached_color` is set while it sits on a set."""

    attached_color: Optional[str] = None

    @property
    def is_house(self) -> bool:
        return self.action_kind == ActionKind.HOUSE


@dataclass(eq=False)
class RentCard(Card):
    colors: Tuple[str, ...] = ()

    kind: ClassVar[CardKind] = CardKind.RENT


@dataclass(eq=False)
class WildRentCard(Card):
    kind: ClassVar[CardKind] = CardKind.RENT_WILD

    @property
    def colors(self) -> Tuple[str, ...]:
        return tuple(ALL_COLORS)


def is_action(card: Card, action_kind: ActionKind) -> bool:
    """Check whether a card is an action card of the given kind."""
    return isinstance(card, ActionCard) and card.action_kind == action_kind


def is_rent(card: Card) -> bool:
    return card.kind in (CardKind.RENT, CardKind.RENT_WILD)


# (name, color, value)
_PROPERTIES = [
    ("Baltic Avenue", "brown", 1),
    ("Mediterranean Avenue", "brown", 1),
    ("Boardwalk", "dark_blue", 4),
    ("Park Place", "dark_blue", 3),
    ("North Carolina Avenue", "green", 4),
    ("Pacific Avenue", "green", 4),
    ("Pennsylvania Avenue", "green", 4),
    ("Marvin Gardens", "yellow", 3),
    ("Ventnor Avenue", "yellow", 3),
    ("Atlantic Avenue", "yellow", 3),
    ("New York Avenue", "orange", 2),
    ("St. James Place", "orange", 2),
    ("Tennessee Avenue", "orange", 2),
    ("St. Charles Place", "pink", 2),
    ("Virginia Avenue", "pink", 2),
    ("States Avenue", "pink", 2),
    ("Kentucky Avenue", "red", 3),
    ("Indiana Avenue", "red", 3),
    ("Illinois Avenue", "red", 3),
    ("Oriental Avenue", "light_blue", 1),
    ("Vermont Avenue", "light_blue", 1),
    ("Connecticut Avenue", "light_blue", 1),
    ("Reading Railroad", "railroad", 2),
    ("Pennsylvania Railroad", "railroad", 2),
    ("B. & O. Railroad", "railroad", 2),
    ("Short Line", "railroad", 2),
    ("Electric Company", "utility", 2),
    ("Water Works", "utility", 2),
]

# (colors, value, copies)
_DUAL_WILDS = [
    (("dark_blue", "green"), 4, 1),
    (("light_blue", "brown"), 1, 1),
    (("pink", "orange"), 2, 2),
    (("red", "yellow"), 3, 2),
    (("railroad", "green"), 4, 1),
    (("railroad", "light_blue"), 4, 1),
    (("railroad", "utility"), 2, 1),
]

# (value, copies)
_MONEY = [(10, 1), (5, 2), (4, 3), (3, 3), (2, 5), (1, 6)]

# (kind, name, value, copies)
_ACTIONS = [
    (ActionKind.DEAL_BREAKER, "Deal Breaker", 5, 2),
    (ActionKind.JUST_SAY_NO, "Just Say No", 4, 3),
    (ActionKind.SLY_DEAL, "Sly Deal", 3, 3),
    (ActionKind.FORCED_DEAL, "Forced Deal", 3, 3),
    (ActionKind.DEBT_COLLECTOR, "Debt Collector", 3, 3),
    (ActionKind.BIRTHDAY, "It's My Birthday", 2, 3),
    (ActionKind.PASS_GO, "Pass Go", 1, 10),
    (ActionKind.HOUSE, "House", 3, 3),
    (ActionKind.HOTEL, "Hotel", 4, 2),
    (ActionKind.DOUBLE_RENT, "Double The Rent", 1, 2),
]

_RENT_PAIRS = [
    ("dark_blue", "green"),
    ("red", "yellow"),
    ("pink", "orange"),
    ("light_blue", "brown"),
    ("railroad", "utility"),
]

RAINBOW_WILD_COUNT = 2
RENT_PAIR_COPIES = 2
WILD_RENT_COPIES = 3
DECK_SIZE = 106


def _label(color: str) -> str:
    return color.replace("_", " ").title()


def create_cards() -> List[Card]:
    """Create the full 106-card composition in catalog order."""
    cards: List[Card] = []

    for value, copies in _MONEY:
        for i in range(copies):
            cards.append(MoneyCard(f"money-{value}-{i}", f"${value}M", value))

    for name, color, value in _PROPERTIES:
        slug = name.lower().replace(".", "").replace("&", "").replace(" ", "_").replace("__", "_")
        cards.append(PropertyCard(f"prop-{slug}", name, value, color=color))

    for colors, value, copies in _DUAL_WILDS:
        for i in range(copies):
            cards.append(
                WildPropertyCard(
                    f"wild-{'-'.join(colors)}-{i}",
                    f"Wild {_label(colors[0])}/{_label(colors[1])}",
                    value,
                    colors=colors,
                    current_color=colors[0],
                )
            )
    for i in range(RAINBOW_WILD_COUNT):
        cards.append(WildPropertyCard(f"wild-rainbow-{i}", "Rainbow Wild", 0, colors=tuple(ALL_COLORS)))

    for action_kind, name, value, copies in _ACTIONS:
        for i in range(copies):
            card_id = f"action-{action_kind.value}-{i}"
            if action_kind in (ActionKind.HOUSE, ActionKind.HOTEL):
                cards.append(BuildingCard(card_id, name, value, action_kind=action_kind))
            else:
                cards.append(ActionCard(card_id, name, value, action_kind=action_kind))

    for colors in _RENT_PAIRS:
        for i in range(RENT_PAIR_COPIES):
            cards.append(
                RentCard(
                    f"rent-{'-'.join(colors)}-{i}",
                    f"Rent {_label(colors[0])}/{_label(colors[1])}",
                    1,
                    colors=colors,
                )
            )
    for i in range(WILD_RENT_COPIES):
        cards.append(WildRentCard(f"rent-wild-{i}", "Wild Rent", 3))

    return cards


def build_deck(rng: Optional[random.Random] = None) -> List[Card]:
    """Create the 106 cards in a uniformly random order."""
    cards = create_cards()
    (rng or random.Random()).shuffle(cards)
    return cards


class Deck:
    """
    Draw pile plus discard pile.

    Drawing from an empty draw pile shuffles the discard pile back in.
    When both are empty fewer cards than requested are delivered.
    """

    def __init__(self, cards: List[Card], rng: random.Random, discard_pile: Optional[List[Card]] = None):
        self.cards = list(cards)
        self.rng = rng
        self.discard_pile: List[Card] = list(discard_pile or [])

    def __len__(self) -> int:
        return len(self.cards)

    def shuffle(self) -> None:
        """Shuffle the draw pile."""
        self.rng.shuffle(self.cards)

    def draw(self, count: int = 1) -> List[Card]:
        """Draw up to `count` cards from the top."""
        drawn: List[Card] = []
        for _ in range(count):
            if not self.cards:
                if not self.discard_pile:
                    break
                self.cards = self.discard_pile.copy()
                self.discard_pile.clear()
                self.shuffle()
            drawn.append(self.cards.pop(0))
        return drawn

    def discard(self, card: Card) -> None:
        """Put a card on the discard pile."""
        if isinstance(card, BuildingCard):
            card.attached_color = None
        self.discard_pile.append(card)


def create_deck(rng: random.Random) -> Deck:
    """Create a shuffled deck with an empty discard pile."""
    return Deck(build_deck(rng), rng)
