"""
Monopoly Deal Rules Engine

Turn state machine, card effects, payment selection and bot players for
the Monopoly Deal card game.
"""

from .config import GameConfig
from .game import Destination, GameState, Phase, create_game, start_game
from .player import Player, PlayerState

__all__ = [
    "GameConfig",
    "GameState",
    "Destination",
    "Phase",
    "create_game",
    "start_game",
    "Player",
    "PlayerState",
]
