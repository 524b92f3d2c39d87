"""Hard bot: win-now checks, targeted theft and value-aware banking."""

from typing import Optional, Sequence

from monopoly_deal.agents.base import (
    END_TURN,
    HIGH_VALUE_COLORS,
    Agent,
    Decision,
    best_rent_color,
    building_target,
    card_colors,
    cards_of,
    completes_set,
    property_cards,
)
from monopoly_deal.cards import ActionKind, BuildingCard, Card, is_rent
from monopoly_deal.sets import sets_by_color
from monopoly_deal.view import GameView

ACTION_BONUS = {
    ActionKind.JUST_SAY_NO: 12,
    ActionKind.SLY_DEAL: 8,
    ActionKind.FORCED_DEAL: 7,
    ActionKind.PASS_GO: 10,
}


class HardAgent(Agent):
    """
    Strategic AI.

    Priority order:
    1. A card that wins the game right now
    2. Double The Rent straight after a rent card
    3. Deal Breaker (opponents with 2+ complete sets first)
    4. Properties of high-value colours
    5. Sly Deal on the card that helps us most, then Forced Deal
    6. Any property
    7. Debt Collector, It's My Birthday
    8. Pass Go while the hand is small
    9. Rent, then House/Hotel
    10. Bank the card with the lowest strategic value
    """

    difficulty = "hard"

    def decide_move(self, hand: Sequence[Card], view: GameView) -> Decision:
        me = view.me

        winning = self.winning_move(hand, view)
        if winning is not None:
            return winning

        if view.last_rent is not None:
            for card in cards_of(hand, ActionKind.DOUBLE_RENT):
                return self.plan_action(card, view)

        for card in cards_of(hand, ActionKind.DEAL_BREAKER):
            decision = self.plan_action(card, view)
            if decision:
                return decision

        properties = property_cards(hand)
        for card in properties:
            if any(color in HIGH_VALUE_COLORS for color in card_colors(card)) and self._worth_playing(card, view):
                return self.play_property(card, view)

        for kind in (ActionKind.SLY_DEAL, ActionKind.FORCED_DEAL):
            for card in cards_of(hand, kind):
                decision = self.plan_action(card, view)
                if decision:
                    return decision

        if properties:
            best = max(properties, key=lambda c: (completes_set(c, me), c.value))
            return self.play_property(best, view)

        for kind in (ActionKind.DEBT_COLLECTOR, ActionKind.BIRTHDAY):
            for card in cards_of(hand, kind):
                decision = self.plan_action(card, view)
                if decision:
                    return decision

        if len(hand) < view.max_hand_size:
            for card in cards_of(hand, ActionKind.PASS_GO):
                return self.plan_action(card, view)

        rent_plays = [d for d in (self.plan_action(c, view) for c in hand if is_rent(c)) if d]
        if rent_plays:
            return max(rent_plays, key=lambda d: best_rent_color(d.card, me)[1])

        for card in (c for c in hand if isinstance(c, BuildingCard)):
            decision = self.plan_action(card, view)
            if decision:
                return decision

        bankable = [c for c in hand if c.is_bankable]
        if bankable:
            return self.bank(min(bankable, key=lambda c: self.strategic_value(c, view)))

        return END_TURN

    def winning_move(self, hand: Sequence[Card], view: GameView) -> Optional[Decision]:
        """A card that gives us the last complete set we need."""
        me = view.me
        if len(me.complete_sets) != view.sets_to_win - 1:
            return None
        for card in property_cards(hand):
            if completes_set(card, me):
                return self.play_property(card, view)
        for card in cards_of(hand, ActionKind.DEAL_BREAKER):
            decision = self.plan_action(card, view)
            if decision:
                return decision
        for card in cards_of(hand, ActionKind.SLY_DEAL):
            decision = self.plan_action(card, view)
            if decision and self._completes_with(decision.target, view):
                return decision
        return None

    def _completes_with(self, card_id: str, view: GameView) -> bool:
        owner = view.owner_of(card_id)
        if owner is None:
            return False
        stolen = next(c for c in view.player(owner).properties if c.card_id == card_id)
        return completes_set(stolen, view.me)

    def _worth_playing(self, card: Card, view: GameView) -> bool:
        groups = sets_by_color(view.me.properties)
        return completes_set(card, view.me) or any(color in groups for color in card_colors(card))

    def strategic_value(self, card: Card, view: GameView) -> int:
        """Base value plus set-completion and situational action bonuses."""
        me = view.me
        value = card.value

        if card.is_property:
            groups = sets_by_color(me.properties)
            if completes_set(card, me):
                return value + 20
            held = max((len(groups[c].cards) for c in card_colors(card) if c in groups), default=0)
            return value + (5 * held if held else 2)

        if is_rent(card):
            return value + best_rent_color(card, me)[1]

        kind = getattr(card, "action_kind", None)
        if kind == ActionKind.DEAL_BREAKER:
            value += 15 * sum(1 for o in view.opponents if o.complete_sets)
        elif kind == ActionKind.DOUBLE_RENT:
            value += 10 if me.complete_sets else 2
        elif isinstance(card, BuildingCard):
            value += 15 if building_target(card, me) else 5
        elif kind in ACTION_BONUS:
            value += ACTION_BONUS[kind]
        return value
