"""
Match log: one entry per resolved action, for replay and audit.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class EventType(Enum):
    """Types of game events."""

    GAME_START = "game_start"
    TURN_START = "turn_start"
    DRAW = "draw"
    TURN_END = "turn_end"
    HAND_TRIMMED = "hand_trimmed"
    DISCARD = "discard"

    BANK = "bank"
    PLAY_PROPERTY = "play_property"
    FLIP_WILD = "flip_wild"
    PLAY_ACTION = "play_action"
    TARGET_SELECT = "target_select"
    ACTION_CANCELLED = "action_cancelled"

    PAYMENT_REQUEST = "payment_request"
    PAYMENT = "payment"
    DEBT_FORGIVEN = "debt_forgiven"

    STEAL = "steal"
    SWAP = "swap"
    SET_STOLEN = "set_stolen"
    BUILD = "build"
    BUILDING_DISPLACED = "building_displaced"

    REACTION_WINDOW = "reaction_window"
    JUST_SAY_NO = "just_say_no"

    RULE_VIOLATION = "rule_violation"
    INVALID_REQUEST = "invalid_request"
    GAME_END = "game_end"


@dataclass
class GameEvent:
    """A logged event in the game."""

    event_type: EventType
    player_id: Optional[int] = None
    message: str = ""
    details: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        player_str = f"P{self.player_id}" if self.player_id is not None else "System"
        return f"[{player_str}] {self.event_type.value}: {self.message or self.details}"


class EventLog:
    """Manages the match log."""

    def __init__(self):
        self.events: List[GameEvent] = []

    def log(
        self,
        event_type: EventType,
        player_id: Optional[int] = None,
        message: str = "",
        **details: Any,
    ) -> GameEvent:
        """Log a game event."""
        event = GameEvent(event_type, player_id, message, details)
        self.events.append(event)
        return event

    def get_events(self) -> List[GameEvent]:
        """Get all logged events."""
        return self.events.copy()

    def of_type(self, event_type: EventType) -> List[GameEvent]:
        return [e for e in self.events if e.event_type == event_type]

    def lines(self) -> List[str]:
        """Human-readable entries in chronological order."""
        return [e.message or repr(e) for e in self.events]
