"""
Read-only views of the game handed to bots and UI code.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from monopoly_deal.cards import Card
from monopoly_deal.events import GameEvent
from monopoly_deal.sets import PropertySet, compute_sets


@dataclass(frozen=True)
class RentContext:
    """The last rent charge of the current turn, repeated by Double The Rent."""

    color: str
    amount: int
    victim_ids: Tuple[int, ...]


@dataclass(frozen=True)
class PlayerView:
    """Public information about one player."""

    player_id: int
    name: str
    is_human: bool
    hand_size: int
    bank: Tuple[Card, ...]
    properties: Tuple[Card, ...]

    @property
    def sets(self) -> List[PropertySet]:
        return compute_sets(self.properties)

    @property
    def complete_sets(self) -> List[PropertySet]:
        return [s for s in self.sets if s.is_complete]

    @property
    def bank_value(self) -> int:
        return sum(c.value for c in self.bank)

    @property
    def net_worth(self) -> int:
        return self.bank_value + sum(c.value for c in self.properties)


@dataclass(frozen=True)
class GameView:
    """What one player may see: their own hand plus every public zone."""

    player_id: int
    hand: Tuple[Card, ...]
    players: Tuple[PlayerView, ...]
    current_player_id: int
    moves_left: int
    phase: str
    deck_size: int
    discard_size: int
    last_rent: Optional[RentContext] = None
    events: Tuple[GameEvent, ...] = ()
    sets_to_win: int = 3
    max_hand_size: int = 7

    @property
    def me(self) -> PlayerView:
        return self.player(self.player_id)

    def player(self, player_id: int) -> PlayerView:
        return next(p for p in self.players if p.player_id == player_id)

    @property
    def opponents(self) -> List[PlayerView]:
        return [p for p in self.players if p.player_id != self.player_id]

    def owner_of(self, card_id: str) -> Optional[int]:
        """Player whose property area holds `card_id`."""
        for p in self.players:
            if any(c.card_id == card_id for c in p.properties):
                return p.player_id
        return None
