"""Easy bot: mostly random play."""

from typing import Sequence

from monopoly_deal.agents.base import END_TURN, Agent, Decision, money_cards, property_cards
from monopoly_deal.cards import Card
from monopoly_deal.view import GameView


class EasyAgent(Agent):
    """
    Simple AI that makes loosely random moves.

    30% of the time it banks an arbitrary bankable card. Otherwise it lays
    down the first property in hand, else banks money, else plays an action
    card half of the time, else ends the turn.
    """

    difficulty = "easy"

    def decide_move(self, hand: Sequence[Card], view: GameView) -> Decision:
        bankable = [c for c in hand if c.is_bankable]
        if bankable and self.rng.random() < 0.3:
            return self.bank(self.rng.choice(bankable))

        properties = property_cards(hand)
        if properties:
            return self.play_property(properties[0], view)

        money = money_cards(hand)
        if money:
            return self.bank(money[0])

        playable = [d for d in (self.plan_action(c, view) for c in hand) if d is not None]
        if playable and self.rng.random() < 0.5:
            return self.rng.choice(playable)

        return END_TURN
