"""Base class and shared targeting helpers for Monopoly Deal bots."""

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from monopoly_deal.cards import (
    ActionCard,
    ActionKind,
    BuildingCard,
    Card,
    CardKind,
    PropertyCard,
    WildPropertyCard,
    is_rent,
)
from monopoly_deal.config import PROPERTY_SETS
from monopoly_deal.sets import PropertySet, effective_color, is_in_complete_set, sets_by_color
from monopoly_deal.view import GameView, PlayerView

# Colours whose complete sets charge the most rent
HIGH_VALUE_COLORS = ("dark_blue", "green", "railroad")


class BotAction(Enum):
    """Moves a bot can choose."""

    PLAY_PROPERTY = "play_property"
    BANK = "bank"
    PLAY_ACTION = "play_action"
    FLIP_WILD = "flip_wild"
    END_TURN = "end_turn"


@dataclass
class Decision:
    """A bot's chosen move."""

    action: BotAction
    card: Optional[Card] = None
    target_player_id: Optional[int] = None
    target: Optional[str] = None
    auxiliary_card_id: Optional[str] = None

    def __repr__(self) -> str:
        card = self.card.name if self.card else None
        return (
            f"Decision({self.action.value}, card={card}, player={self.target_player_id}, "
            f"target={self.target}, aux={self.auxiliary_card_id})"
        )


END_TURN = Decision(BotAction.END_TURN)


class Agent(ABC):
    """
    Abstract base class for Monopoly Deal bots.

    All agents implement `decide_move`, a synchronous function of the bot's
    hand and the public game view.

    Attributes:
        player_id: The player's seat in the game (0, 1, 2, ...).
        name: The player's display name.
        rng: Seeded RNG for any randomness in the strategy.
    """

    difficulty = "base"

    def __init__(self, player_id: int, name: str, seed: Optional[int] = None):
        """
        Initialize the agent.

        Args:
            player_id: The player's seat in the game.
            name: The player's display name.
            seed: Seed for the agent's RNG; defaults to the player id.
        """
        self.player_id = player_id
        self.name = name
        self.rng = random.Random(player_id if seed is None else seed)

    @abstractmethod
    def decide_move(self, hand: Sequence[Card], view: GameView) -> Decision:
        """
        Choose the next move.

        Args:
            hand: The bot's hand.
            view: Public game state as seen by this bot.

        Returns:
            The chosen move. END_TURN when nothing is worth playing.
        """
        pass

    # === VICTIM PREFERENCES ===

    def avoids(self, player_id: int) -> bool:
        """Whether to steer clear of a victim when others are available."""
        return False

    def _prefer(self, victims: List[PlayerView]) -> List[PlayerView]:
        preferred = [v for v in victims if not self.avoids(v.player_id)]
        return preferred or victims

    # === BUILDING BLOCKS ===

    @staticmethod
    def bank(card: Card) -> Decision:
        return Decision(BotAction.BANK, card)

    def play_property(self, card: Card, view: GameView) -> Decision:
        if isinstance(card, WildPropertyCard):
            return Decision(BotAction.PLAY_PROPERTY, card, target=choose_wild_color(card, view.me))
        return Decision(BotAction.PLAY_PROPERTY, card)

    def plan_action(self, card: Card, view: GameView) -> Optional[Decision]:
        """A sensible way to play an action or rent card, or None."""
        if is_rent(card):
            return self.plan_rent(card, view)
        if not isinstance(card, ActionCard):
            return None

        kind = card.action_kind
        if isinstance(card, BuildingCard):
            color = building_target(card, view.me)
            return Decision(BotAction.PLAY_ACTION, card, target=color) if color else None
        if kind == ActionKind.PASS_GO:
            return Decision(BotAction.PLAY_ACTION, card)
        if kind == ActionKind.BIRTHDAY:
            if any(o.net_worth > 0 for o in view.opponents):
                return Decision(BotAction.PLAY_ACTION, card)
            return None
        if kind == ActionKind.DEBT_COLLECTOR:
            victim = self.richest_opponent(view)
            return Decision(BotAction.PLAY_ACTION, card, target_player_id=victim.player_id) if victim else None
        if kind == ActionKind.SLY_DEAL:
            found = self.best_sly_deal_target(view)
            if found is None:
                return None
            victim, target = found
            return Decision(BotAction.PLAY_ACTION, card, target_player_id=victim.player_id, target=target.card_id)
        if kind == ActionKind.FORCED_DEAL:
            found = self.best_forced_deal(view)
            if found is None:
                return None
            victim, target, given = found
            return Decision(
                BotAction.PLAY_ACTION,
                card,
                target_player_id=victim.player_id,
                target=target.card_id,
                auxiliary_card_id=given.card_id,
            )
        if kind == ActionKind.DEAL_BREAKER:
            found = self.best_deal_breaker_target(view)
            if found is None:
                return None
            victim, group = found
            return Decision(BotAction.PLAY_ACTION, card, target_player_id=victim.player_id, target=group.color)
        if kind == ActionKind.DOUBLE_RENT:
            return Decision(BotAction.PLAY_ACTION, card) if view.last_rent is not None else None
        return None

    def plan_rent(self, card: Card, view: GameView) -> Optional[Decision]:
        color, _ = best_rent_color(card, view.me)
        if color is None or not any(o.net_worth > 0 for o in view.opponents):
            return None
        return Decision(BotAction.PLAY_ACTION, card, target=color)

    # === TARGET SELECTION ===

    def richest_opponent(self, view: GameView) -> Optional[PlayerView]:
        """Opponent with the most collectable assets, bank plus properties."""
        candidates = self._prefer([o for o in view.opponents if o.net_worth > 0])
        if not candidates:
            return None
        return max(candidates, key=lambda o: o.net_worth)

    def best_sly_deal_target(self, view: GameView) -> Optional[Tuple[PlayerView, Card]]:
        """Stealable property scored by value, plus 10 when it grows one of our sets."""
        best = None
        best_score = -1
        for victim in self._prefer(list(view.opponents)):
            for card in stealable_properties(victim):
                score = card.value + (10 if helps_own_set(card, view.me) else 0)
                if score > best_score:
                    best, best_score = (victim, card), score
        return best

    def best_forced_deal(self, view: GameView) -> Optional[Tuple[PlayerView, Card, Card]]:
        """Give away a lone, low-value property for the best stealable one."""
        junk = junk_property(view.me)
        if junk is None:
            return None
        target = self.best_sly_deal_target(view)
        if target is None:
            return None
        victim, card = target
        if card.value + (10 if helps_own_set(card, view.me) else 0) <= junk.value:
            return None
        return victim, card, junk

    def best_deal_breaker_target(self, view: GameView) -> Optional[Tuple[PlayerView, PropertySet]]:
        """Complete set to take: opponents with 2+ complete sets first, then by set value."""
        best = None
        best_score = -1
        for victim in self._prefer(list(view.opponents)):
            complete = victim.complete_sets
            for group in complete:
                score = (100 if len(complete) >= 2 else 0) + group.value
                if score > best_score:
                    best, best_score = (victim, group), score
        return best


# === PURE HELPERS ===


def card_colors(card: Card) -> Tuple[str, ...]:
    """Colours a property card from hand could join."""
    if isinstance(card, PropertyCard):
        return (card.color,)
    if isinstance(card, WildPropertyCard):
        return card.colors
    return ()


def choose_wild_color(card: WildPropertyCard, me: PlayerView) -> str:
    """Colour that brings the most owned cards closest to a complete set."""
    groups = sets_by_color(me.properties)

    def score(color: str) -> Tuple[int, int, int]:
        group = groups.get(color)
        held = len(group.cards) if group else 0
        needed = PROPERTY_SETS[color].cards_needed
        # Prefer finishing a set, then growing one, never overfilling
        completes = 1 if held + 1 == needed else 0
        useful = 1 if held < needed else 0
        return completes, useful * held, PROPERTY_SETS[color].rent[-1]

    candidates = list(card.colors)
    if card.is_rainbow:
        owned = [c for c in candidates if c in groups]
        candidates = owned or candidates
    return max(candidates, key=score)


def completes_set(card: Card, me: PlayerView) -> bool:
    """Whether playing `card` from hand finishes one of our sets."""
    groups = sets_by_color(me.properties)
    for color in card_colors(card):
        if isinstance(card, WildPropertyCard) and card.is_rainbow and color not in groups:
            continue
        group = groups.get(color)
        held = len(group.cards) if group else 0
        if held + 1 == PROPERTY_SETS[color].cards_needed:
            return True
    return False


def helps_own_set(card: Card, me: PlayerView) -> bool:
    """Whether `card` would grow one of our incomplete sets."""
    groups = sets_by_color(me.properties)
    color = effective_color(card)
    group = groups.get(color)
    return bool(group and not group.is_complete)


def stealable_properties(victim: PlayerView) -> List[Card]:
    """Victim's property cards that are not part of a complete set."""
    return [c for c in victim.properties if c.is_property and not is_in_complete_set(victim.properties, c)]


def junk_property(me: PlayerView) -> Optional[Card]:
    """Our least useful property outside a complete set: a lone card, lowest value."""
    groups = sets_by_color(me.properties)
    loose = [c for c in me.properties if c.is_property and not is_in_complete_set(me.properties, c)]
    if not loose:
        return None
    return min(loose, key=lambda c: (len(groups[effective_color(c)].cards), c.value))


def best_rent_color(card: Card, me: PlayerView) -> Tuple[Optional[str], int]:
    """The colour on a rent card charging the most rent for us."""
    groups = sets_by_color(me.properties)
    best_color, best_amount = None, 0
    for color in card.colors:
        group = groups.get(color)
        if group and group.rent > best_amount:
            best_color, best_amount = color, group.rent
    return best_color, best_amount


def building_target(card: BuildingCard, me: PlayerView) -> Optional[str]:
    """Complete set that can take this House or Hotel."""
    for group in sorted(me.complete_sets, key=lambda s: s.rent, reverse=True):
        if card.is_house and not group.houses:
            return group.color
        if not card.is_house and group.houses and not group.hotels:
            return group.color
    return None


def money_cards(hand: Sequence[Card]) -> List[Card]:
    return [c for c in hand if c.kind == CardKind.MONEY]


def property_cards(hand: Sequence[Card]) -> List[Card]:
    return [c for c in hand if c.is_property]


def cards_of(hand: Sequence[Card], kind: ActionKind) -> List[Card]:
    return [c for c in hand if isinstance(c, ActionCard) and c.action_kind == kind]
