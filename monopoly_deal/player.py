"""
Player state and management.
"""

from typing import List, Optional

from monopoly_deal.cards import Card


class PlayerState:
    """Represents the complete state of a player in the game."""

    def __init__(self, player_id: int, name: str, is_human: bool = False):
        self.player_id = player_id
        self.name = name
        self.is_human = is_human
        self.hand: List[Card] = []
        self.bank: List[Card] = []
        # Property and wild cards plus attached House/Hotel cards
        self.properties: List[Card] = []

    @property
    def bank_value(self) -> int:
        return sum(card.value for card in self.bank)

    @property
    def property_value(self) -> int:
        return sum(card.value for card in self.properties)

    @property
    def total_assets(self) -> int:
        """Everything a creditor could collect: bank plus property area."""
        return self.bank_value + self.property_value

    def find_in_hand(self, card_id: str) -> Optional[Card]:
        return next((c for c in self.hand if c.card_id == card_id), None)

    def find_in_properties(self, card_id: str) -> Optional[Card]:
        return next((c for c in self.properties if c.card_id == card_id), None)

    def find_in_bank(self, card_id: str) -> Optional[Card]:
        return next((c for c in self.bank if c.card_id == card_id), None)

    def all_cards(self) -> List[Card]:
        return self.hand + self.bank + self.properties

    def __repr__(self) -> str:
        return (
            f"PlayerState(id={self.player_id}, name='{self.name}', human={self.is_human}, "
            f"hand={len(self.hand)}, bank=${self.bank_value}M, properties={len(self.properties)})"
        )


class Player:
    """
    Convenience wrapper for player information.
    This is primarily for the external API.
    """

    def __init__(self, player_id: int, name: str, is_human: bool = False):
        self.player_id = player_id
        self.name = name
        self.is_human = is_human

    def __repr__(self) -> str:
        return f"Player(id={self.player_id}, name='{self.name}')"
