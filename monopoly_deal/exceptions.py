"""
Custom exception hierarchy for the Monopoly Deal engine.

Engine operations raise these internally before mutating anything; the
public GameState operations turn them into a logged rejection.
"""


class DealError(Exception):
    """Base exception for all game-related errors."""


class InvalidActionError(DealError):
    """Move breaks a game rule in the current state."""


class TargetNotFoundError(DealError):
    """Referenced player or card does not exist where the request says."""


class GameOverError(InvalidActionError):
    """The game already has a winner."""
