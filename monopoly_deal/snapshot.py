"""
Snapshot serialization of GameState.

The public snapshot is a UI-friendly view without hidden information
(hands and deck order appear as counts only). A full snapshot adds the
hidden zones and the RNG state and can be turned back into a GameState.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from monopoly_deal.cards import (
    ActionCard,
    BuildingCard,
    Card,
    Deck,
    PropertyCard,
    RentCard,
    WildPropertyCard,
    create_cards,
)
from monopoly_deal.config import GameConfig
from monopoly_deal.game import (
    Destination,
    EffectKind,
    EffectStep,
    GameState,
    PaymentRequest,
    PendingAction,
    PendingReaction,
    Phase,
    Resolution,
)
from monopoly_deal.player import Player
from monopoly_deal.sets import count_complete_sets
from monopoly_deal.view import RentContext


class CardModel(BaseModel):
    card_id: str
    name: str
    kind: str
    value: int
    color: Optional[str] = None
    colors: Optional[List[str]] = None
    current_color: Optional[str] = None
    action_kind: Optional[str] = None
    attached_color: Optional[str] = None


class PlayerSnapshot(BaseModel):
    player_id: int
    name: str
    is_human: bool
    hand_size: int
    bank_value: int
    complete_sets: int
    bank: List[CardModel] = Field(default_factory=list)
    properties: List[CardModel] = Field(default_factory=list)
    hand: Optional[List[CardModel]] = None


class RentSnapshot(BaseModel):
    color: str
    amount: int
    victim_ids: List[int]


class StepSnapshot(BaseModel):
    kind: str
    victim_id: int
    amount: int = 0
    card_id: Optional[str] = None
    own_card_id: Optional[str] = None
    color: Optional[str] = None
    reaction_done: bool = False


class ResolutionSnapshot(BaseModel):
    instigator_id: int
    card_name: str
    steps: List[StepSnapshot] = Field(default_factory=list)


class GameSnapshot(BaseModel):
    phase: str
    turn_number: int
    current_turn_index: int
    current_player_id: int
    moves_left: int
    winner: Optional[int] = None
    deck_size: int
    discard_size: int
    discard: List[CardModel] = Field(default_factory=list)
    players: List[PlayerSnapshot]
    last_rent: Optional[RentSnapshot] = None
    pending_request: Optional[Dict[str, Any]] = None
    pending_reaction: Optional[Dict[str, Any]] = None
    pending_action: Optional[Dict[str, Any]] = None
    resolution: Optional[ResolutionSnapshot] = None
    config: Dict[str, Any] = Field(default_factory=dict)
    deck: Optional[List[CardModel]] = None
    rng_state: Optional[List[Any]] = None


def _card_model(card: Card) -> CardModel:
    model = CardModel(card_id=card.card_id, name=card.name, kind=card.kind.value, value=card.value)
    if isinstance(card, PropertyCard):
        model.color = card.color
    if isinstance(card, WildPropertyCard):
        model.colors = list(card.colors)
        model.current_color = card.current_color
    if isinstance(card, RentCard):
        model.colors = list(card.colors)
    if isinstance(card, ActionCard):
        model.action_kind = card.action_kind.value
    if isinstance(card, BuildingCard):
        model.attached_color = card.attached_color
    return model


def _enum_dict(obj) -> Dict[str, Any]:
    data = asdict(obj)
    for key, value in data.items():
        if isinstance(value, (Destination, EffectKind)):
            data[key] = value.value
    return data


def build_snapshot(game: GameState, include_hidden: bool = False) -> GameSnapshot:
    """Build the validated snapshot model for a game."""
    players = [
        PlayerSnapshot(
            player_id=p.player_id,
            name=p.name,
            is_human=p.is_human,
            hand_size=len(p.hand),
            bank_value=p.bank_value,
            complete_sets=count_complete_sets(p.properties),
            bank=[_card_model(c) for c in p.bank],
            properties=[_card_model(c) for c in p.properties],
            hand=[_card_model(c) for c in p.hand] if include_hidden else None,
        )
        for p in game.players
    ]

    resolution = None
    if game.resolution is not None:
        resolution = ResolutionSnapshot(
            instigator_id=game.resolution.instigator_id,
            card_name=game.resolution.card_name,
            steps=[StepSnapshot(**_enum_dict(s)) for s in game.resolution.steps],
        )

    snapshot = GameSnapshot(
        phase=game.phase.value,
        turn_number=game.turn_number,
        current_turn_index=game.current_turn_index,
        current_player_id=game.get_current_player().player_id,
        moves_left=game.moves_left,
        winner=game.winner,
        deck_size=game.deck_size,
        discard_size=game.discard_size,
        discard=[_card_model(c) for c in game.discard_pile],
        players=players,
        last_rent=RentSnapshot(**asdict(game.last_rent)) if game.last_rent else None,
        pending_request=asdict(game.pending_request) if game.pending_request else None,
        pending_reaction=_enum_dict(game.pending_reaction) if game.pending_reaction else None,
        pending_action=_enum_dict(game.pending_action) if game.pending_action else None,
        resolution=resolution,
        config=asdict(game.config),
    )
    if include_hidden:
        snapshot.deck = [_card_model(c) for c in game.deck.cards]
        version, state, gauss = game.rng.getstate()
        snapshot.rng_state = [version, list(state), gauss]
    return snapshot


def serialize_snapshot(game: GameState, include_hidden: bool = False) -> Dict[str, Any]:
    """Serialize a GameState into a JSON-friendly dict.

    The snapshot includes:
    - phase, turn number, current player and moves left
    - players with bank, properties and hand size
    - discard pile (face up) and deck size
    - any pending request, reaction window or target selection

    With include_hidden=True it also carries hands, deck order and RNG
    state, which restore_snapshot needs.
    """
    return build_snapshot(game, include_hidden).model_dump(mode="json")


def restore_snapshot(data: Dict[str, Any]) -> GameState:
    """
    Rebuild a GameState from a full snapshot.

    Raises:
        ValueError: The snapshot lacks hidden zones or does not account for
            every card exactly once.
    """
    snapshot = GameSnapshot.model_validate(data)
    if snapshot.deck is None or any(p.hand is None for p in snapshot.players):
        raise ValueError("Restoring needs a snapshot taken with include_hidden=True")

    catalog = {card.card_id: card for card in create_cards()}
    used: set = set()

    def take(model: CardModel) -> Card:
        card = catalog.get(model.card_id)
        if card is None:
            raise ValueError(f"Unknown card id {model.card_id}")
        if model.card_id in used:
            raise ValueError(f"Card {model.card_id} appears twice")
        used.add(model.card_id)
        if isinstance(card, WildPropertyCard):
            card.current_color = model.current_color
        if isinstance(card, BuildingCard):
            card.attached_color = model.attached_color
        return card

    config = GameConfig(**snapshot.config)
    players = [Player(p.player_id, p.name, p.is_human) for p in snapshot.players]
    game = GameState(config, players)

    for state, saved in zip(game.players, snapshot.players):
        state.hand = [take(c) for c in saved.hand]
        state.bank = [take(c) for c in saved.bank]
        state.properties = [take(c) for c in saved.properties]
    game.deck = Deck([take(c) for c in snapshot.deck], game.rng, [take(c) for c in snapshot.discard])
    if len(used) != len(catalog):
        raise ValueError(f"Snapshot accounts for {len(used)} of {len(catalog)} cards")

    if snapshot.rng_state is not None:
        version, state, gauss = snapshot.rng_state
        game.rng.setstate((version, tuple(state), gauss))

    game.phase = Phase(snapshot.phase)
    game.turn_number = snapshot.turn_number
    game.current_turn_index = snapshot.current_turn_index
    game.moves_left = snapshot.moves_left
    game.winner = snapshot.winner
    if snapshot.last_rent is not None:
        game.last_rent = RentContext(
            snapshot.last_rent.color, snapshot.last_rent.amount, tuple(snapshot.last_rent.victim_ids)
        )
    if snapshot.pending_request is not None:
        game.pending_request = PaymentRequest(**snapshot.pending_request)
    if snapshot.pending_reaction is not None:
        reaction = dict(snapshot.pending_reaction)
        reaction["effect"] = EffectKind(reaction["effect"])
        game.pending_reaction = PendingReaction(**reaction)
    if snapshot.pending_action is not None:
        action = dict(snapshot.pending_action)
        action["destination"] = Destination(action["destination"])
        game.pending_action = PendingAction(**action)
    if snapshot.resolution is not None:
        game.resolution = Resolution(
            snapshot.resolution.instigator_id,
            snapshot.resolution.card_name,
            [
                EffectStep(**{**step.model_dump(), "kind": EffectKind(step.kind)})
                for step in snapshot.resolution.steps
            ],
        )
    return game
