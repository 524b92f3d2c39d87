"""
High-level rules API for controlling game flow.
This module provides the public interface for game actions, legal move
detection and the driver that lets bots take their turns.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from monopoly_deal.agents.base import Agent, BotAction, Decision
from monopoly_deal.cards import ActionKind, BuildingCard, CardKind, WildPropertyCard
from monopoly_deal.config import PROPERTY_SETS
from monopoly_deal.game import Destination, GameState, Phase
from monopoly_deal.sets import complete_colors

logger = logging.getLogger(__name__)

# Upper bound on decisions a bot may make in one turn
MAX_DECISIONS_PER_TURN = 20


class ActionType(Enum):
    """Types of actions a player can take."""

    DRAW = "draw"
    PLAY_CARD = "play_card"
    SELECT_TARGET = "select_target"
    CANCEL_ACTION = "cancel_action"
    RESPOND = "respond"
    CONFIRM_PAYMENT = "confirm_payment"
    FLIP_WILD = "flip_wild"
    DISCARD = "discard"
    END_TURN = "end_turn"


class Action:
    """Represents a game action that can be taken."""

    def __init__(self, action_type: ActionType, **params: Any):
        self.action_type = action_type
        self.params = params

    def __repr__(self) -> str:
        return f"Action({self.action_type.value}, {self.params})"


def get_legal_actions(game_state: GameState, player_id: int) -> List[Action]:
    """
    Get all legal actions available to a player.

    Args:
        game_state: Current game state
        player_id: Player to get actions for

    Returns:
        List of legal Action objects
    """
    if game_state.game_over:
        return []

    # Sub-phases waiting on a player other than the current one
    if game_state.phase == Phase.REQUEST_PAYMENT:
        request = game_state.pending_request
        if request.debtor_id != player_id:
            return []
        suggested = [c.card_id for c in game_state.suggest_payment()]
        return [Action(ActionType.CONFIRM_PAYMENT, card_ids=suggested)]

    if game_state.phase == Phase.REACTION:
        if game_state.pending_reaction.victim_id != player_id:
            return []
        return [
            Action(ActionType.RESPOND, use_just_say_no=True),
            Action(ActionType.RESPOND, use_just_say_no=False),
        ]

    current_player = game_state.get_current_player()
    if current_player.player_id != player_id:
        return []

    if game_state.phase == Phase.DRAW:
        return [Action(ActionType.DRAW)]

    if game_state.phase == Phase.TARGET_SELECT:
        pending = game_state.pending_action
        card = current_player.find_in_hand(pending.card_id)
        actions = []
        for params in _candidate_plays(game_state, card):
            if params.pop("destination") != pending.destination:
                continue
            if game_state.can_select_target(**params):
                actions.append(Action(ActionType.SELECT_TARGET, **params))
        actions.append(Action(ActionType.CANCEL_ACTION))
        return actions

    actions: List[Action] = []
    if game_state.moves_left > 0:
        for card in current_player.hand:
            for params in _candidate_plays(game_state, card):
                if game_state.can_play(card.card_id, **params):
                    actions.append(Action(ActionType.PLAY_CARD, card_id=card.card_id, **params))

    for card in current_player.properties:
        if isinstance(card, WildPropertyCard) and not card.is_rainbow:
            actions.append(Action(ActionType.FLIP_WILD, card_id=card.card_id))

    if len(current_player.hand) > game_state.config.max_hand_size:
        surplus = len(current_player.hand) - game_state.config.max_hand_size
        actions.append(
            Action(ActionType.DISCARD, card_ids=[c.card_id for c in current_player.hand[-surplus:]])
        )

    actions.append(Action(ActionType.END_TURN))
    return actions


def _candidate_plays(game_state: GameState, card) -> List[Dict[str, Any]]:
    """Parameter sets worth checking for one card in hand."""
    player = game_state.get_current_player()
    opponents = game_state.opponents_of(player.player_id)
    candidates: List[Dict[str, Any]] = [{"destination": Destination.BANK}]

    if card.kind == CardKind.PROPERTY:
        candidates.append({"destination": Destination.PROPERTIES})
    elif isinstance(card, WildPropertyCard):
        candidates.extend({"destination": Destination.PROPERTIES, "target": color} for color in card.colors)
    elif isinstance(card, BuildingCard):
        candidates.extend(
            {"destination": Destination.PROPERTIES, "target": color} for color in complete_colors(player.properties)
        )
    elif card.kind in (CardKind.RENT, CardKind.RENT_WILD):
        for color in card.colors:
            candidates.append({"destination": Destination.ACTION, "target": color})
            if card.kind == CardKind.RENT_WILD:
                candidates.extend(
                    {"destination": Destination.ACTION, "target": color, "target_player_id": o.player_id}
                    for o in opponents
                )
    elif card.kind == CardKind.ACTION:
        kind = card.action_kind
        if kind in (ActionKind.PASS_GO, ActionKind.BIRTHDAY, ActionKind.DOUBLE_RENT):
            candidates.append({"destination": Destination.ACTION})
        elif kind == ActionKind.DEBT_COLLECTOR:
            candidates.extend({"destination": Destination.ACTION, "target_player_id": o.player_id} for o in opponents)
        elif kind == ActionKind.SLY_DEAL:
            candidates.extend(
                {"destination": Destination.ACTION, "target_player_id": o.player_id, "target": c.card_id}
                for o in opponents
                for c in o.properties
            )
        elif kind == ActionKind.FORCED_DEAL:
            candidates.extend(
                {
                    "destination": Destination.ACTION,
                    "target_player_id": o.player_id,
                    "target": c.card_id,
                    "auxiliary_card_id": own.card_id,
                }
                for o in opponents
                for c in o.properties
                for own in player.properties
            )
        elif kind == ActionKind.DEAL_BREAKER:
            candidates.extend(
                {"destination": Destination.ACTION, "target_player_id": o.player_id, "target": color}
                for o in opponents
                for color in PROPERTY_SETS
            )
    return candidates


def apply_action(game_state: GameState, action: Action, player_id: Optional[int] = None) -> bool:
    """
    Apply an action to the game state.

    Args:
        game_state: Current game state
        action: Action to apply
        player_id: Acting player. Defaults to whoever the phase waits on.

    Returns:
        True if action was successful, False otherwise
    """
    if game_state.game_over:
        return False

    if player_id is not None and player_id != _waiting_on(game_state):
        logger.warning(f"Player {player_id} acted out of turn: {action}")
        return False

    params = action.params

    if action.action_type == ActionType.DRAW:
        return game_state.draw_cards()

    elif action.action_type == ActionType.PLAY_CARD:
        return game_state.play_card(
            params.get("card_id"),
            params.get("destination", Destination.ACTION),
            target_player_id=params.get("target_player_id"),
            target=params.get("target"),
            auxiliary_card_id=params.get("auxiliary_card_id"),
        )

    elif action.action_type == ActionType.SELECT_TARGET:
        return game_state.select_target(
            target_player_id=params.get("target_player_id"),
            target=params.get("target"),
            auxiliary_card_id=params.get("auxiliary_card_id"),
        )

    elif action.action_type == ActionType.CANCEL_ACTION:
        return game_state.cancel_action()

    elif action.action_type == ActionType.RESPOND:
        return game_state.respond_to_action(bool(params.get("use_just_say_no")))

    elif action.action_type == ActionType.CONFIRM_PAYMENT:
        return game_state.confirm_payment(params.get("card_ids", []))

    elif action.action_type == ActionType.FLIP_WILD:
        return game_state.flip_wild_card(params.get("card_id"), params.get("color"))

    elif action.action_type == ActionType.DISCARD:
        return game_state.discard_cards(params.get("card_ids", []))

    elif action.action_type == ActionType.END_TURN:
        return game_state.end_turn()

    return False


def _waiting_on(game_state: GameState) -> int:
    """The player whose input the current phase needs."""
    if game_state.phase == Phase.REQUEST_PAYMENT:
        return game_state.pending_request.debtor_id
    if game_state.phase == Phase.REACTION:
        return game_state.pending_reaction.victim_id
    return game_state.get_current_player().player_id


def decision_to_action(decision: Decision) -> Action:
    """Translate a bot decision into an engine action."""
    if decision.action == BotAction.END_TURN:
        return Action(ActionType.END_TURN)
    if decision.action == BotAction.FLIP_WILD:
        return Action(ActionType.FLIP_WILD, card_id=decision.card.card_id, color=decision.target)

    destination = {
        BotAction.BANK: Destination.BANK,
        BotAction.PLAY_PROPERTY: Destination.PROPERTIES,
        BotAction.PLAY_ACTION: Destination.ACTION,
    }[decision.action]
    return Action(
        ActionType.PLAY_CARD,
        card_id=decision.card.card_id,
        destination=destination,
        target_player_id=decision.target_player_id,
        target=decision.target,
        auxiliary_card_id=decision.auxiliary_card_id,
    )


def play_bot_turn(game_state: GameState, agent: Agent) -> int:
    """
    Let a bot take (or continue) its turn.

    Stops when the turn passes, the game ends, or a human has to answer a
    payment request or reaction window.

    Returns:
        Number of decisions the bot made.
    """
    player = game_state.get_current_player()
    if player.player_id != agent.player_id or game_state.game_over:
        return 0

    if game_state.phase == Phase.DRAW:
        game_state.draw_cards()

    decisions = 0
    while (
        game_state.phase == Phase.PLAYING
        and game_state.get_current_player().player_id == agent.player_id
        and decisions < MAX_DECISIONS_PER_TURN
    ):
        view = game_state.observe(agent.player_id)
        decision = agent.decide_move(view.hand, view)
        decisions += 1
        logger.debug(f"{agent.name} decided {decision}")

        action = decision_to_action(decision)
        if action.action_type == ActionType.END_TURN:
            game_state.end_turn()
            break
        if not apply_action(game_state, action):
            logger.warning(f"{agent.name} made an illegal move ({action}); ending turn")
            game_state.end_turn()
            break

    if (
        game_state.phase == Phase.PLAYING
        and game_state.get_current_player().player_id == agent.player_id
        and decisions >= MAX_DECISIONS_PER_TURN
    ):
        game_state.end_turn()

    return decisions


def step_turn(game_state: GameState, agents: Dict[int, Agent]) -> bool:
    """
    Advance the game by one bot turn.

    Returns:
        False when nothing could be done: the game is over, a human must
        act, or the current player has no agent.
    """
    if game_state.game_over:
        return False
    if game_state.phase in (Phase.REQUEST_PAYMENT, Phase.REACTION, Phase.TARGET_SELECT):
        return False
    agent = agents.get(game_state.get_current_player().player_id)
    if agent is None:
        return False
    play_bot_turn(game_state, agent)
    return True


def run_bots(game_state: GameState, agents: Dict[int, Agent], max_turns: Optional[int] = None) -> int:
    """
    Play bot turns until a human is needed, the game ends or `max_turns` passes.

    Returns:
        Number of turns played.
    """
    turns = 0
    while max_turns is None or turns < max_turns:
        if not step_turn(game_state, agents):
            break
        turns += 1
    return turns
