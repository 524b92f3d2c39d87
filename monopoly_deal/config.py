"""
Game configuration and property set definitions.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass
class GameConfig:
    """Configuration for a Monopoly Deal game."""

    player_count: int = 2
    bot_difficulty: str = "medium"
    human_players: int = 1

    starting_hand_size: int = 5
    draw_count: int = 2
    empty_hand_draw_count: int = 5
    pass_go_draw_count: int = 2
    max_moves_per_turn: int = 3
    max_hand_size: int = 7
    sets_to_win: int = 3

    debt_collector_amount: int = 5
    birthday_amount: int = 2
    house_bonus: int = 3
    hotel_bonus: int = 4

    # End the turn as soon as the move budget is spent
    auto_end_turn: bool = True

    seed: Optional[int] = None


@dataclass
class SetDefinition:
    """Static data for one property colour."""

    color: str
    cards_needed: int
    rent: List[int]

    def rent_for(self, count: int) -> int:
        """Schedule-indexed rent for a group of `count` cards."""
        if count <= 0:
            return 0
        return self.rent[min(count, len(self.rent)) - 1]


PROPERTY_SETS: Dict[str, SetDefinition] = {
    "brown": SetDefinition("brown", 2, [1, 2]),
    "light_blue": SetDefinition("light_blue", 3, [1, 2, 3]),
    "pink": SetDefinition("pink", 3, [1, 2, 4]),
    "orange": SetDefinition("orange", 3, [1, 3, 5]),
    "red": SetDefinition("red", 3, [2, 3, 6]),
    "yellow": SetDefinition("yellow", 3, [2, 4, 6]),
    "green": SetDefinition("green", 3, [2, 4, 7]),
    "dark_blue": SetDefinition("dark_blue", 2, [3, 8]),
    "railroad": SetDefinition("railroad", 4, [1, 2, 3, 4]),
    "utility": SetDefinition("utility", 2, [1, 2]),
}

ALL_COLORS: List[str] = list(PROPERTY_SETS.keys())

DIFFICULTIES = ("easy", "medium", "hard", "expert")
