"""Expert bot: Hard strategy plus threat response, wild flips and opponent memory."""

from typing import Dict, Optional, Sequence

from monopoly_deal.agents.base import BotAction, Decision, cards_of
from monopoly_deal.agents.hard import HardAgent
from monopoly_deal.cards import ActionKind, Card, WildPropertyCard
from monopoly_deal.config import PROPERTY_SETS
from monopoly_deal.events import EventType
from monopoly_deal.sets import count_complete_sets, effective_color, sets_by_color
from monopoly_deal.view import GameView


class ExpertAgent(HardAgent):
    """
    Hard strategy with three additions:

    - if any opponent already has 2+ complete sets, a held Deal Breaker is
      played against them before anything else;
    - wild cards already on the table are flipped when that completes a set;
    - opponents seen answering with Just Say No are remembered and avoided
      as victims whenever someone else can be targeted.
    """

    difficulty = "expert"

    def __init__(self, player_id: int, name: str, seed: Optional[int] = None):
        super().__init__(player_id, name, seed)
        self.just_say_no_seen: Dict[int, int] = {}
        self._events_seen = 0

    def avoids(self, player_id: int) -> bool:
        return self.just_say_no_seen.get(player_id, 0) > 0

    def observe_events(self, view: GameView) -> None:
        """Update the Just Say No memory from new match log entries."""
        for event in view.events[self._events_seen:]:
            if event.event_type == EventType.JUST_SAY_NO and event.player_id != self.player_id:
                self.just_say_no_seen[event.player_id] = self.just_say_no_seen.get(event.player_id, 0) + 1
        self._events_seen = len(view.events)

    def decide_move(self, hand: Sequence[Card], view: GameView) -> Decision:
        self.observe_events(view)

        if any(len(o.complete_sets) >= 2 for o in view.opponents):
            for card in cards_of(hand, ActionKind.DEAL_BREAKER):
                decision = self.plan_action(card, view)
                if decision:
                    return decision

        flip = self.best_flip(view)
        if flip is not None:
            return flip

        return super().decide_move(hand, view)

    def best_flip(self, view: GameView) -> Optional[Decision]:
        """Flip a dual wild on the table when that adds a complete set."""
        properties = list(view.me.properties)
        current = count_complete_sets(properties)
        for card in properties:
            if not isinstance(card, WildPropertyCard) or card.is_rainbow:
                continue
            for color in card.colors:
                if color == card.current_color:
                    continue
                if self._complete_after_flip(properties, card, color) > current:
                    return Decision(BotAction.FLIP_WILD, card, target=color)
        return None

    @staticmethod
    def _complete_after_flip(properties, card: WildPropertyCard, color: str) -> int:
        groups = sets_by_color(properties)
        complete = 0
        for group_color, group in groups.items():
            size = len(group.cards)
            if group_color == effective_color(card):
                size -= 1
            if group_color == color:
                size += 1
            if group_color in PROPERTY_SETS and size >= PROPERTY_SETS[group_color].cards_needed:
                complete += 1
        return complete
