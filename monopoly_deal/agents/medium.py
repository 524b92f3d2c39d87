"""Medium bot: simple priority list."""

from typing import Sequence

from monopoly_deal.agents.base import (
    END_TURN,
    Agent,
    BotAction,
    Decision,
    cards_of,
    completes_set,
    property_cards,
)
from monopoly_deal.cards import ActionKind, Card, is_rent
from monopoly_deal.view import GameView


class MediumAgent(Agent):
    """
    Priority-driven AI.

    Priority order:
    1. Finish a set that is one card short
    2. Deal Breaker against an opponent with 2+ complete sets
    3. Any property
    4. Debt Collector, then It's My Birthday
    5. Rent, if holding a complete set
    6. Bank the lowest-value card
    7. End turn
    """

    difficulty = "medium"

    def decide_move(self, hand: Sequence[Card], view: GameView) -> Decision:
        properties = property_cards(hand)

        for card in properties:
            if completes_set(card, view.me):
                return self.play_property(card, view)

        for card in cards_of(hand, ActionKind.DEAL_BREAKER):
            decision = self.plan_action(card, view)
            if decision and len(view.player(decision.target_player_id).complete_sets) >= 2:
                return decision

        if properties:
            return self.play_property(properties[0], view)

        for kind in (ActionKind.DEBT_COLLECTOR, ActionKind.BIRTHDAY):
            for card in cards_of(hand, kind):
                decision = self.plan_action(card, view)
                if decision:
                    return decision

        complete = {s.color for s in view.me.complete_sets}
        if complete:
            for card in (c for c in hand if is_rent(c)):
                colors = [c for c in card.colors if c in complete]
                if colors:
                    return Decision(BotAction.PLAY_ACTION, card, target=colors[0])

        bankable = [c for c in hand if c.is_bankable]
        if bankable:
            return self.bank(min(bankable, key=lambda c: c.value))

        return END_TURN
