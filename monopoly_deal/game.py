"""
Main game engine and state management.

GameState owns every zone of every card. Its public operations either
apply a move completely and return True, or reject it, leave the state
untouched, record the rejection in the match log and return False.
"""

import logging
import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple, Union

from monopoly_deal.cards import (
    ActionKind,
    BuildingCard,
    Card,
    CardKind,
    Deck,
    MoneyCard,
    PropertyCard,
    WildPropertyCard,
    create_deck,
    is_action,
)
from monopoly_deal.config import DIFFICULTIES, PROPERTY_SETS, GameConfig
from monopoly_deal.events import EventLog, EventType
from monopoly_deal.exceptions import (
    DealError,
    GameOverError,
    InvalidActionError,
    TargetNotFoundError,
)
from monopoly_deal.payment import select_payment, total_value
from monopoly_deal.player import Player, PlayerState
from monopoly_deal.sets import (
    count_complete_sets,
    displaced_buildings,
    effective_color,
    is_in_complete_set,
    sets_by_color,
)
from monopoly_deal.view import GameView, PlayerView, RentContext

logger = logging.getLogger(__name__)

MIN_PLAYERS = 2
MAX_PLAYERS = 6


class Phase(Enum):
    """Turn state machine phases."""

    SETUP = "setup"
    DRAW = "draw"
    PLAYING = "playing"
    REQUEST_PAYMENT = "request_payment"
    TARGET_SELECT = "target_select"
    REACTION = "reaction"
    GAME_OVER = "game_over"


class Destination(Enum):
    """Where a card from the hand is played to."""

    BANK = "bank"
    PROPERTIES = "properties"
    ACTION = "action"


class EffectKind(Enum):
    """What an action does to one victim."""

    PAYMENT = "payment"
    STEAL = "steal"
    SWAP = "swap"
    TAKE_SET = "take_set"


@dataclass
class EffectStep:
    """One victim's share of an action, resolved after its reaction window."""

    kind: EffectKind
    victim_id: int
    amount: int = 0
    card_id: Optional[str] = None
    own_card_id: Optional[str] = None
    color: Optional[str] = None
    reaction_done: bool = False


@dataclass
class Resolution:
    """An action card being resolved victim by victim."""

    instigator_id: int
    card_name: str
    steps: List[EffectStep] = field(default_factory=list)


@dataclass
class PaymentRequest:
    """A debt waiting for a human debtor to choose the cards."""

    creditor_id: int
    debtor_id: int
    amount: int
    reason: str


@dataclass
class PendingReaction:
    """A human victim deciding whether to answer with Just Say No."""

    victim_id: int
    instigator_id: int
    card_name: str
    effect: EffectKind


@dataclass
class PendingAction:
    """A card held back until its player picks a target."""

    card_id: str
    destination: Destination
    target_player_id: Optional[int] = None
    target: Optional[str] = None
    auxiliary_card_id: Optional[str] = None


@dataclass
class PlayPlan:
    """A validated card play, ready to apply."""

    card: Card
    destination: Destination
    color: Optional[str] = None
    steps: List[EffectStep] = field(default_factory=list)
    rent: Optional[RentContext] = None
    needs_target: bool = False


class GameState:
    """
    Represents the complete state of a Monopoly Deal game.
    This is the main interface for the game engine.
    """

    def __init__(self, config: GameConfig, players: List[Player]):
        if not MIN_PLAYERS <= len(players) <= MAX_PLAYERS:
            raise ValueError(f"Player count must be between {MIN_PLAYERS} and {MAX_PLAYERS}, got {len(players)}")
        if config.bot_difficulty not in DIFFICULTIES:
            raise ValueError(f"Unknown bot difficulty: {config.bot_difficulty}")

        self.config = config
        self.event_log = EventLog()
        self.rng = random.Random(config.seed)
        self.deck: Deck = create_deck(self.rng)

        self.players: List[PlayerState] = [PlayerState(p.player_id, p.name, p.is_human) for p in players]

        self.phase = Phase.SETUP
        self.current_turn_index = 0
        self.turn_number = 0
        self.moves_left = 0
        self.winner: Optional[int] = None

        self.pending_request: Optional[PaymentRequest] = None
        self.pending_reaction: Optional[PendingReaction] = None
        self.pending_action: Optional[PendingAction] = None
        self.resolution: Optional[Resolution] = None
        self.last_rent: Optional[RentContext] = None

    # === READ-ONLY ACCESSORS ===

    @property
    def discard_pile(self) -> List[Card]:
        return self.deck.discard_pile

    @property
    def deck_size(self) -> int:
        return len(self.deck)

    @property
    def discard_size(self) -> int:
        return len(self.deck.discard_pile)

    @property
    def game_over(self) -> bool:
        return self.phase == Phase.GAME_OVER

    def get_current_player(self) -> PlayerState:
        """Get the current active player."""
        return self.players[self.current_turn_index]

    def get_player(self, player_id: int) -> PlayerState:
        for player in self.players:
            if player.player_id == player_id:
                return player
        raise TargetNotFoundError(f"Player {player_id} does not exist")

    def opponents_of(self, player_id: int) -> List[PlayerState]:
        """Other players, in turn order starting after `player_id`."""
        index = next(i for i, p in enumerate(self.players) if p.player_id == player_id)
        count = len(self.players)
        return [self.players[(index + offset) % count] for offset in range(1, count)]

    def get_match_log(self) -> List[str]:
        """Human-readable match log, oldest entry first."""
        return self.event_log.lines()

    def all_cards(self) -> List[Card]:
        """Every card in every zone."""
        cards = list(self.deck.cards) + list(self.deck.discard_pile)
        for player in self.players:
            cards.extend(player.all_cards())
        return cards

    def observe(self, player_id: int) -> GameView:
        """Snapshot of what `player_id` is allowed to see."""
        viewer = self.get_player(player_id)
        return GameView(
            player_id=player_id,
            hand=tuple(viewer.hand),
            players=tuple(
                PlayerView(
                    player_id=p.player_id,
                    name=p.name,
                    is_human=p.is_human,
                    hand_size=len(p.hand),
                    bank=tuple(p.bank),
                    properties=tuple(p.properties),
                )
                for p in self.players
            ),
            current_player_id=self.get_current_player().player_id,
            moves_left=self.moves_left,
            phase=self.phase.value,
            deck_size=self.deck_size,
            discard_size=self.discard_size,
            last_rent=self.last_rent,
            events=tuple(self.event_log.events),
            sets_to_win=self.config.sets_to_win,
            max_hand_size=self.config.max_hand_size,
        )

    def suggest_payment(self) -> List[Card]:
        """Cards the payment selector would pick for the pending request."""
        if self.pending_request is None:
            return []
        debtor = self.get_player(self.pending_request.debtor_id)
        return select_payment(debtor.bank + debtor.properties, self.pending_request.amount, debtor.properties)

    # === SETUP ===

    def deal_starting_hands(self) -> None:
        """Deal the starting hands round-robin and open the first turn."""
        for _ in range(self.config.starting_hand_size):
            for player in self.players:
                player.hand.extend(self.deck.draw(1))

        self.phase = Phase.DRAW
        self.event_log.log(
            EventType.GAME_START,
            message=f"Game started with {len(self.players)} players",
            players=[p.name for p in self.players],
            seed=self.config.seed,
            bot_difficulty=self.config.bot_difficulty,
        )
        self._log_turn_start()

    # === PUBLIC OPERATIONS ===

    def draw_cards(self) -> bool:
        """Draw at the start of a turn: 5 cards with an empty hand, else 2."""
        return self._attempt("draw_cards", self._draw_cards)

    def play_card(
        self,
        card_id: str,
        destination: Union[Destination, str],
        target_player_id: Optional[int] = None,
        target: Optional[str] = None,
        auxiliary_card_id: Optional[str] = None,
    ) -> bool:
        """
        Play a card from the current player's hand.

        Args:
            card_id: Card in the current player's hand.
            destination: BANK, PROPERTIES or ACTION.
            target_player_id: Victim of an action, or the one opponent a
                Wild Rent charges.
            target: A colour (wild property, rent, building, Deal Breaker)
                or an opponent's card id (Sly Deal, Forced Deal, Deal Breaker).
            auxiliary_card_id: The card given away in a Forced Deal.
        """
        return self._attempt(
            "play_card", self._play_card, card_id, destination, target_player_id, target, auxiliary_card_id
        )

    def select_target(
        self,
        target_player_id: Optional[int] = None,
        target: Optional[str] = None,
        auxiliary_card_id: Optional[str] = None,
    ) -> bool:
        """Supply the target of the card waiting in TARGET_SELECT."""
        return self._attempt("select_target", self._select_target, target_player_id, target, auxiliary_card_id)

    def cancel_action(self) -> bool:
        """Abort target selection; the card stays in hand and no move is spent."""
        return self._attempt("cancel_action", self._cancel_action)

    def respond_to_action(self, use_just_say_no: bool) -> bool:
        """Answer the pending reaction window of a human victim."""
        return self._attempt("respond_to_action", self._respond_to_action, use_just_say_no)

    def confirm_payment(self, card_ids: Sequence[str]) -> bool:
        """Settle the pending payment request with the debtor's chosen cards."""
        return self._attempt("confirm_payment", self._confirm_payment, list(card_ids))

    def flip_wild_card(self, card_id: str, color: Optional[str] = None) -> bool:
        """Move a wild property to another of its colours. Costs no move."""
        return self._attempt("flip_wild_card", self._flip_wild_card, card_id, color)

    def end_turn(self) -> bool:
        return self._attempt("end_turn", self._end_turn_checked)

    def discard_cards(self, card_ids: Sequence[str]) -> bool:
        """Discard chosen cards while the hand is over the limit."""
        return self._attempt("discard_cards", self._discard_cards, list(card_ids))

    def can_play(
        self,
        card_id: str,
        destination: Union[Destination, str],
        target_player_id: Optional[int] = None,
        target: Optional[str] = None,
        auxiliary_card_id: Optional[str] = None,
    ) -> bool:
        """Check a card play without applying or logging anything."""
        try:
            self._require_phase(Phase.PLAYING)
            self._require_moves()
            player = self.get_current_player()
            card = self._card_in_hand(player, card_id)
            plan = self._plan_play(
                player, card, _destination(destination), target_player_id, target, auxiliary_card_id
            )
        except DealError:
            return False
        return not plan.needs_target

    def can_select_target(
        self,
        target_player_id: Optional[int] = None,
        target: Optional[str] = None,
        auxiliary_card_id: Optional[str] = None,
    ) -> bool:
        """Check a target for the pending card without applying it."""
        try:
            self._require_phase(Phase.TARGET_SELECT)
            pending = self.pending_action
            player = self.get_current_player()
            card = self._card_in_hand(player, pending.card_id)
            plan = self._plan_play(
                player,
                card,
                pending.destination,
                target_player_id if target_player_id is not None else pending.target_player_id,
                target if target is not None else pending.target,
                auxiliary_card_id if auxiliary_card_id is not None else pending.auxiliary_card_id,
            )
        except DealError:
            return False
        return not plan.needs_target

    # === ERROR HANDLING ===

    def _attempt(self, operation: str, func: Callable, *args) -> bool:
        player_id = self.get_current_player().player_id if self.players else None
        try:
            func(*args)
        except InvalidActionError as e:
            logger.warning(f"Rule violation in {operation}: {e}")
            self.event_log.log(
                EventType.RULE_VIOLATION, player_id=player_id, message=f"Rejected {operation}: {e}", operation=operation
            )
            return False
        except TargetNotFoundError as e:
            logger.error(f"Malformed {operation} request: {e}")
            self.event_log.log(
                EventType.INVALID_REQUEST, player_id=player_id, message=f"Invalid {operation}: {e}", operation=operation
            )
            return False
        return True

    def _require_phase(self, *phases: Phase) -> None:
        if self.phase == Phase.GAME_OVER:
            raise GameOverError("The game is over")
        if self.phase not in phases:
            expected = " or ".join(p.value for p in phases)
            raise InvalidActionError(f"Expected phase {expected}, game is in {self.phase.value}")

    def _require_moves(self) -> None:
        if self.moves_left <= 0:
            raise InvalidActionError("No moves left this turn")

    def _card_in_hand(self, player: PlayerState, card_id: str) -> Card:
        card = player.find_in_hand(card_id)
        if card is None:
            raise TargetNotFoundError(f"Card {card_id} is not in {player.name}'s hand")
        return card

    def _opponent(self, player: PlayerState, target_player_id: int) -> PlayerState:
        victim = self.get_player(target_player_id)
        if victim.player_id == player.player_id:
            raise InvalidActionError("A player cannot target themselves")
        return victim

    # === DRAW / TURN END ===

    def _draw_cards(self) -> None:
        self._require_phase(Phase.DRAW)
        player = self.get_current_player()
        count = self.config.empty_hand_draw_count if not player.hand else self.config.draw_count
        drawn = self.deck.draw(count)
        player.hand.extend(drawn)
        self.moves_left = self.config.max_moves_per_turn
        self.phase = Phase.PLAYING

        if len(drawn) < count:
            logger.info(f"Deck exhausted: {player.name} drew {len(drawn)} of {count} cards")
        self.event_log.log(
            EventType.DRAW,
            player_id=player.player_id,
            message=f"{player.name} drew {len(drawn)} card(s)",
            requested=count,
            drawn=len(drawn),
        )

    def _end_turn_checked(self) -> None:
        self._require_phase(Phase.PLAYING)
        self._end_turn()

    def _end_turn(self) -> None:
        player = self.get_current_player()

        surplus: List[Card] = []
        while len(player.hand) > self.config.max_hand_size:
            card = player.hand.pop()
            self.deck.discard(card)
            surplus.append(card)
        if surplus:
            self.event_log.log(
                EventType.HAND_TRIMMED,
                player_id=player.player_id,
                message=f"{player.name} discarded {len(surplus)} card(s) down to {self.config.max_hand_size}",
                cards=[c.name for c in surplus],
            )

        self.event_log.log(EventType.TURN_END, player_id=player.player_id, message=f"{player.name} ended their turn")

        self.last_rent = None
        self.moves_left = 0
        self.current_turn_index = (self.current_turn_index + 1) % len(self.players)
        self.turn_number += 1
        self.phase = Phase.DRAW
        self._log_turn_start()

    def _log_turn_start(self) -> None:
        player = self.get_current_player()
        logger.debug(f"Turn {self.turn_number}: {player.name}")
        self.event_log.log(
            EventType.TURN_START,
            player_id=player.player_id,
            message=f"Turn {self.turn_number}: {player.name}",
            turn_number=self.turn_number,
        )

    def _discard_cards(self, card_ids: List[str]) -> None:
        self._require_phase(Phase.PLAYING)
        player = self.get_current_player()
        if len(set(card_ids)) != len(card_ids):
            raise TargetNotFoundError("Duplicate card ids in discard request")
        cards = [self._card_in_hand(player, cid) for cid in card_ids]
        if len(player.hand) - len(cards) < self.config.max_hand_size:
            raise InvalidActionError(
                f"Cannot discard below {self.config.max_hand_size} cards (hand has {len(player.hand)})"
            )
        for card in cards:
            player.hand.remove(card)
            self.deck.discard(card)
        self.event_log.log(
            EventType.DISCARD,
            player_id=player.player_id,
            message=f"{player.name} discarded {', '.join(c.name for c in cards)}",
            cards=[c.card_id for c in cards],
        )

    def _finish_move(self) -> None:
        if self.phase == Phase.GAME_OVER:
            return
        self.moves_left = max(self.moves_left - 1, 0)
        logger.debug(f"{self.get_current_player().name} has {self.moves_left} move(s) left")
        if self.moves_left == 0 and self.config.auto_end_turn and self.phase == Phase.PLAYING:
            self._end_turn()

    # === CARD PLAY ===

    def _play_card(
        self,
        card_id: str,
        destination: Union[Destination, str],
        target_player_id: Optional[int],
        target: Optional[str],
        auxiliary_card_id: Optional[str],
    ) -> None:
        self._require_phase(Phase.PLAYING)
        self._require_moves()
        player = self.get_current_player()
        card = self._card_in_hand(player, card_id)
        dest = _destination(destination)
        plan = self._plan_play(player, card, dest, target_player_id, target, auxiliary_card_id)

        if plan.needs_target:
            self.pending_action = PendingAction(card_id, dest, target_player_id, target, auxiliary_card_id)
            self.phase = Phase.TARGET_SELECT
            self.event_log.log(
                EventType.TARGET_SELECT,
                player_id=player.player_id,
                message=f"{player.name} is choosing a target for {card.name}",
                card=card.name,
            )
            return

        self._execute_plan(player, plan)

    def _select_target(
        self, target_player_id: Optional[int], target: Optional[str], auxiliary_card_id: Optional[str]
    ) -> None:
        self._require_phase(Phase.TARGET_SELECT)
        pending = self.pending_action
        player = self.get_current_player()
        card = self._card_in_hand(player, pending.card_id)
        merged_player = target_player_id if target_player_id is not None else pending.target_player_id
        merged_target = target if target is not None else pending.target
        merged_aux = auxiliary_card_id if auxiliary_card_id is not None else pending.auxiliary_card_id

        plan = self._plan_play(player, card, pending.destination, merged_player, merged_target, merged_aux)
        if plan.needs_target:
            raise TargetNotFoundError(f"{card.name} still has no target")

        self.pending_action = None
        self.phase = Phase.PLAYING
        self._execute_plan(player, plan)

    def _cancel_action(self) -> None:
        self._require_phase(Phase.TARGET_SELECT)
        player = self.get_current_player()
        pending = self.pending_action
        self.pending_action = None
        self.phase = Phase.PLAYING
        self.event_log.log(
            EventType.ACTION_CANCELLED,
            player_id=player.player_id,
            message=f"{player.name} cancelled target selection",
            card_id=pending.card_id if pending else None,
        )

    def _plan_play(
        self,
        player: PlayerState,
        card: Card,
        dest: Destination,
        target_player_id: Optional[int],
        target: Optional[str],
        auxiliary_card_id: Optional[str],
    ) -> PlayPlan:
        """Validate a card play. Raises before anything is mutated."""
        if dest == Destination.BANK:
            if not card.is_bankable:
                raise InvalidActionError(f"{card.name} is a property and cannot be banked")
            return PlayPlan(card, dest)

        if isinstance(card, MoneyCard):
            raise InvalidActionError(f"{card.name} can only be banked")

        if isinstance(card, BuildingCard):
            return self._plan_building(player, card, target)

        if dest == Destination.PROPERTIES:
            if isinstance(card, PropertyCard):
                return PlayPlan(card, dest, color=card.color)
            if isinstance(card, WildPropertyCard):
                return self._plan_wild(card, target)
            raise InvalidActionError(f"{card.name} cannot be played to properties")

        if card.is_property:
            raise InvalidActionError(f"{card.name} must be played to properties")
        if card.kind in (CardKind.RENT, CardKind.RENT_WILD):
            return self._plan_rent(player, card, target_player_id, target)

        action_kind = card.action_kind
        if action_kind == ActionKind.JUST_SAY_NO:
            raise InvalidActionError("Just Say No can only be used in response to an action")
        if action_kind == ActionKind.PASS_GO:
            return PlayPlan(card, dest)
        if action_kind == ActionKind.BIRTHDAY:
            steps = [
                EffectStep(EffectKind.PAYMENT, victim.player_id, amount=self.config.birthday_amount)
                for victim in self.opponents_of(player.player_id)
            ]
            return PlayPlan(card, dest, steps=steps)
        if action_kind == ActionKind.DEBT_COLLECTOR:
            if target_player_id is None:
                return self._needs_target(player, card)
            victim = self._opponent(player, target_player_id)
            step = EffectStep(EffectKind.PAYMENT, victim.player_id, amount=self.config.debt_collector_amount)
            return PlayPlan(card, dest, steps=[step])
        if action_kind == ActionKind.SLY_DEAL:
            return self._plan_sly_deal(player, card, target_player_id, target)
        if action_kind == ActionKind.FORCED_DEAL:
            return self._plan_forced_deal(player, card, target_player_id, target, auxiliary_card_id)
        if action_kind == ActionKind.DEAL_BREAKER:
            return self._plan_deal_breaker(player, card, target_player_id, target)
        if action_kind == ActionKind.DOUBLE_RENT:
            if self.last_rent is None:
                raise InvalidActionError("Double The Rent must directly follow a rent card")
            steps = [
                EffectStep(EffectKind.PAYMENT, victim_id, amount=self.last_rent.amount)
                for victim_id in self.last_rent.victim_ids
            ]
            return PlayPlan(card, dest, steps=steps)

        raise InvalidActionError(f"{card.name} cannot be played as an action")

    def _needs_target(self, player: PlayerState, card: Card) -> PlayPlan:
        if not player.is_human:
            raise TargetNotFoundError(f"{card.name} needs a target")
        return PlayPlan(card, Destination.ACTION, needs_target=True)

    def _plan_wild(self, card: WildPropertyCard, target: Optional[str]) -> PlayPlan:
        if target is None:
            # Dual wilds keep their colour; a rainbow may be laid down unassigned
            return PlayPlan(card, Destination.PROPERTIES, color=card.current_color)
        if not card.can_be(target):
            raise InvalidActionError(f"{card.name} cannot be {target}")
        return PlayPlan(card, Destination.PROPERTIES, color=target)

    def _plan_building(self, player: PlayerState, card: BuildingCard, target: Optional[str]) -> PlayPlan:
        if target is None:
            return self._needs_target(player, card)
        color = self._resolve_own_color(player, target)
        group = sets_by_color(player.properties).get(color)
        if group is None or not group.is_complete:
            raise InvalidActionError(f"{card.name} needs a complete {color} set")
        if card.is_house and group.houses:
            raise InvalidActionError(f"The {color} set already has a house")
        if not card.is_house:
            if not group.houses:
                raise InvalidActionError(f"A hotel needs a house on the {color} set first")
            if group.hotels:
                raise InvalidActionError(f"The {color} set already has a hotel")
        return PlayPlan(card, Destination.PROPERTIES, color=color)

    def _resolve_own_color(self, player: PlayerState, target: str) -> str:
        if target in PROPERTY_SETS:
            return target
        own = player.find_in_properties(target)
        if own is None:
            raise TargetNotFoundError(f"{target} is neither a colour nor one of {player.name}'s properties")
        return effective_color(own)

    def _plan_rent(
        self, player: PlayerState, card: Card, target_player_id: Optional[int], target: Optional[str]
    ) -> PlayPlan:
        held = sets_by_color(player.properties, house_bonus=self.config.house_bonus, hotel_bonus=self.config.hotel_bonus)
        color = target
        if color is None:
            options = [held[c] for c in card.colors if c in held and held[c].rent > 0]
            if not options:
                raise InvalidActionError(f"{player.name} holds no property {card.name} can charge for")
            if player.is_human and len(options) > 1:
                return PlayPlan(card, Destination.ACTION, needs_target=True)
            color = max(options, key=lambda s: s.rent).color
        if color not in card.colors:
            raise InvalidActionError(f"{card.name} cannot charge for {color}")
        group = held.get(color)
        if group is None or group.rent <= 0:
            raise InvalidActionError(f"{player.name} holds no {color} property")

        if card.kind == CardKind.RENT_WILD and target_player_id is not None:
            victims = [self._opponent(player, target_player_id)]
        else:
            victims = self.opponents_of(player.player_id)

        steps = [EffectStep(EffectKind.PAYMENT, v.player_id, amount=group.rent) for v in victims]
        rent = RentContext(color, group.rent, tuple(v.player_id for v in victims))
        return PlayPlan(card, Destination.ACTION, color=color, steps=steps, rent=rent)

    def _find_victim_property(
        self, player: PlayerState, target_player_id: Optional[int], card_id: str
    ) -> Tuple[PlayerState, Card]:
        if target_player_id is not None:
            victim = self._opponent(player, target_player_id)
            found = victim.find_in_properties(card_id)
        else:
            victim, found = None, None
            for opponent in self.opponents_of(player.player_id):
                found = opponent.find_in_properties(card_id)
                if found is not None:
                    victim = opponent
                    break
        if found is None:
            raise TargetNotFoundError(f"No opponent property with id {card_id}")
        if not found.is_property:
            raise InvalidActionError(f"{found.name} is not a property card")
        return victim, found

    def _plan_sly_deal(
        self, player: PlayerState, card: Card, target_player_id: Optional[int], target: Optional[str]
    ) -> PlayPlan:
        if target is None:
            return self._needs_target(player, card)
        victim, stolen = self._find_victim_property(player, target_player_id, target)
        if is_in_complete_set(victim.properties, stolen):
            raise InvalidActionError(f"{stolen.name} is part of a complete set")
        step = EffectStep(EffectKind.STEAL, victim.player_id, card_id=stolen.card_id)
        return PlayPlan(card, Destination.ACTION, steps=[step])

    def _plan_forced_deal(
        self,
        player: PlayerState,
        card: Card,
        target_player_id: Optional[int],
        target: Optional[str],
        auxiliary_card_id: Optional[str],
    ) -> PlayPlan:
        if target is None or auxiliary_card_id is None:
            return self._needs_target(player, card)
        victim, taken = self._find_victim_property(player, target_player_id, target)
        given = player.find_in_properties(auxiliary_card_id)
        if given is None:
            raise TargetNotFoundError(f"{auxiliary_card_id} is not one of {player.name}'s properties")
        if not given.is_property:
            raise InvalidActionError(f"{given.name} is not a property card")
        if is_in_complete_set(victim.properties, taken):
            raise InvalidActionError(f"{taken.name} is part of a complete set")
        if is_in_complete_set(player.properties, given):
            raise InvalidActionError(f"{given.name} is part of a complete set")
        step = EffectStep(EffectKind.SWAP, victim.player_id, card_id=taken.card_id, own_card_id=given.card_id)
        return PlayPlan(card, Destination.ACTION, steps=[step])

    def _plan_deal_breaker(
        self, player: PlayerState, card: Card, target_player_id: Optional[int], target: Optional[str]
    ) -> PlayPlan:
        if target is None:
            return self._needs_target(player, card)

        if target in PROPERTY_SETS:
            color = target
            if target_player_id is not None:
                victim = self._opponent(player, target_player_id)
            else:
                candidates = [
                    o for o in self.opponents_of(player.player_id)
                    if getattr(sets_by_color(o.properties).get(color), "is_complete", False)
                ]
                if not candidates:
                    raise InvalidActionError(f"No opponent has a complete {color} set")
                victim = candidates[0]
        else:
            victim, member = self._find_victim_property(player, target_player_id, target)
            color = effective_color(member)

        group = sets_by_color(victim.properties).get(color)
        if group is None or not group.is_complete:
            raise InvalidActionError(f"{victim.name}'s {color} set is not complete")
        step = EffectStep(EffectKind.TAKE_SET, victim.player_id, color=color)
        return PlayPlan(card, Destination.ACTION, steps=[step])

    def _execute_plan(self, player: PlayerState, plan: PlayPlan) -> None:
        card = plan.card
        self.last_rent = None

        if plan.destination == Destination.BANK:
            player.hand.remove(card)
            player.bank.append(card)
            self.event_log.log(
                EventType.BANK,
                player_id=player.player_id,
                message=f"{player.name} banked {card}",
                card=card.card_id,
                value=card.value,
            )
            self._finish_move()
            return

        if isinstance(card, BuildingCard):
            player.hand.remove(card)
            card.attached_color = plan.color
            player.properties.append(card)
            self.event_log.log(
                EventType.BUILD,
                player_id=player.player_id,
                message=f"{player.name} put a {card.name} on their {plan.color} set",
                card=card.card_id,
                color=plan.color,
            )
            self._finish_move()
            return

        if card.is_property:
            player.hand.remove(card)
            if isinstance(card, WildPropertyCard):
                card.current_color = plan.color
            player.properties.append(card)
            self.event_log.log(
                EventType.PLAY_PROPERTY,
                player_id=player.player_id,
                message=f"{player.name} played {card.name} as {effective_color(card)}",
                card=card.card_id,
                color=effective_color(card),
            )
            if self._check_winner():
                return
            self._finish_move()
            return

        player.hand.remove(card)
        self.deck.discard(card)
        self.event_log.log(
            EventType.PLAY_ACTION,
            player_id=player.player_id,
            message=_describe_play(self, player, plan),
            card=card.card_id,
            color=plan.color,
            victims=[s.victim_id for s in plan.steps],
        )

        if is_action(card, ActionKind.PASS_GO):
            drawn = self.deck.draw(self.config.pass_go_draw_count)
            player.hand.extend(drawn)
            self.event_log.log(
                EventType.DRAW, player_id=player.player_id, message=f"{player.name} drew {len(drawn)} card(s)"
            )
            self._finish_move()
            return

        if plan.rent is not None:
            self.last_rent = plan.rent
        self.resolution = Resolution(player.player_id, card.name, list(plan.steps))
        self._advance_resolution()

    # === EFFECT RESOLUTION ===

    def _advance_resolution(self) -> None:
        """Resolve victims in order until done or waiting for a human."""
        if self.phase == Phase.GAME_OVER:
            return
        resolution = self.resolution
        while resolution.steps:
            if self.phase == Phase.GAME_OVER:
                return
            step = resolution.steps[0]
            victim = self.get_player(step.victim_id)

            if not step.reaction_done:
                just_say_no = _find_just_say_no(victim)
                if just_say_no is not None:
                    if victim.is_human:
                        self.pending_reaction = PendingReaction(
                            victim.player_id, resolution.instigator_id, resolution.card_name, step.kind
                        )
                        self.phase = Phase.REACTION
                        self.event_log.log(
                            EventType.REACTION_WINDOW,
                            player_id=victim.player_id,
                            message=f"{victim.name} may answer {resolution.card_name} with Just Say No",
                        )
                        return
                    self._use_just_say_no(victim, just_say_no, resolution)
                    resolution.steps.pop(0)
                    continue
                step.reaction_done = True

            if step.kind == EffectKind.PAYMENT:
                if not self._collect(step, resolution):
                    return
            else:
                self._apply_transfer(step, resolution)
            resolution.steps.pop(0)

        if self.phase == Phase.GAME_OVER:
            return
        self.resolution = None
        self.phase = Phase.PLAYING
        self._finish_move()

    def _use_just_say_no(self, victim: PlayerState, card: Card, resolution: Resolution) -> None:
        victim.hand.remove(card)
        self.deck.discard(card)
        self.event_log.log(
            EventType.JUST_SAY_NO,
            player_id=victim.player_id,
            message=f"{victim.name} said no to {resolution.card_name}",
            instigator_id=resolution.instigator_id,
            card=resolution.card_name,
        )

    def _respond_to_action(self, use_just_say_no: bool) -> None:
        self._require_phase(Phase.REACTION)
        pending = self.pending_reaction
        victim = self.get_player(pending.victim_id)
        step = self.resolution.steps[0]

        if use_just_say_no:
            just_say_no = _find_just_say_no(victim)
            if just_say_no is None:
                raise InvalidActionError(f"{victim.name} holds no Just Say No")
            self._use_just_say_no(victim, just_say_no, self.resolution)
            self.resolution.steps.pop(0)
        else:
            step.reaction_done = True

        self.pending_reaction = None
        self.phase = Phase.PLAYING
        self._advance_resolution()

    def _collect(self, step: EffectStep, resolution: Resolution) -> bool:
        """Charge one victim. Returns False while waiting for a human debtor."""
        debtor = self.get_player(step.victim_id)
        creditor = self.get_player(resolution.instigator_id)
        eligible = [c for c in debtor.bank + debtor.properties if c.value > 0]

        if not eligible:
            logger.info(f"{debtor.name} has no assets; debt of ${step.amount}M to {creditor.name} forgiven")
            self.event_log.log(
                EventType.DEBT_FORGIVEN,
                player_id=debtor.player_id,
                message=f"{debtor.name} has nothing to pay {creditor.name}",
                creditor_id=creditor.player_id,
                amount=step.amount,
            )
            return True

        if debtor.is_human:
            self.pending_request = PaymentRequest(creditor.player_id, debtor.player_id, step.amount, resolution.card_name)
            self.phase = Phase.REQUEST_PAYMENT
            self.event_log.log(
                EventType.PAYMENT_REQUEST,
                player_id=debtor.player_id,
                message=f"{creditor.name} asks {debtor.name} for ${step.amount}M ({resolution.card_name})",
                creditor_id=creditor.player_id,
                amount=step.amount,
            )
            return False

        cards = select_payment(debtor.bank + debtor.properties, step.amount, debtor.properties)
        self._transfer_payment(debtor, creditor, cards, step.amount)
        return True

    def _confirm_payment(self, card_ids: List[str]) -> None:
        self._require_phase(Phase.REQUEST_PAYMENT)
        request = self.pending_request
        debtor = self.get_player(request.debtor_id)
        creditor = self.get_player(request.creditor_id)

        if len(set(card_ids)) != len(card_ids):
            raise TargetNotFoundError("Duplicate card ids in payment")
        cards: List[Card] = []
        for card_id in card_ids:
            card = debtor.find_in_bank(card_id) or debtor.find_in_properties(card_id)
            if card is None:
                raise TargetNotFoundError(f"{card_id} is not in {debtor.name}'s bank or properties")
            cards.append(card)

        paid = total_value(cards)
        everything = sum(c.value for c in debtor.bank + debtor.properties)
        if paid < request.amount and paid < everything:
            raise InvalidActionError(
                f"${paid}M does not cover ${request.amount}M and {debtor.name} can pay more"
            )

        resolution = self.resolution
        self.pending_request = None
        self.phase = Phase.PLAYING
        self._transfer_payment(debtor, creditor, cards, request.amount)
        resolution.steps.pop(0)
        self._advance_resolution()

    def _transfer_payment(self, debtor: PlayerState, creditor: PlayerState, cards: List[Card], amount: int) -> None:
        for card in cards:
            if card in debtor.bank:
                debtor.bank.remove(card)
            else:
                debtor.properties.remove(card)

            if card.is_property:
                creditor.properties.append(card)
            else:
                if isinstance(card, BuildingCard):
                    card.attached_color = None
                creditor.bank.append(card)

        self.event_log.log(
            EventType.PAYMENT,
            player_id=debtor.player_id,
            message=f"{debtor.name} paid {creditor.name} ${total_value(cards)}M of ${amount}M",
            creditor_id=creditor.player_id,
            amount=amount,
            paid=total_value(cards),
            cards=[c.card_id for c in cards],
        )
        self._cleanup_buildings(debtor)
        self._check_winner()

    def _apply_transfer(self, step: EffectStep, resolution: Resolution) -> None:
        victim = self.get_player(step.victim_id)
        instigator = self.get_player(resolution.instigator_id)

        if step.kind == EffectKind.STEAL:
            card = victim.find_in_properties(step.card_id)
            victim.properties.remove(card)
            instigator.properties.append(card)
            self.event_log.log(
                EventType.STEAL,
                player_id=instigator.player_id,
                message=f"{instigator.name} took {card.name} from {victim.name}",
                victim_id=victim.player_id,
                card=card.card_id,
            )
        elif step.kind == EffectKind.SWAP:
            taken = victim.find_in_properties(step.card_id)
            given = instigator.find_in_properties(step.own_card_id)
            victim.properties.remove(taken)
            instigator.properties.remove(given)
            instigator.properties.append(taken)
            victim.properties.append(given)
            self.event_log.log(
                EventType.SWAP,
                player_id=instigator.player_id,
                message=f"{instigator.name} swapped {given.name} for {victim.name}'s {taken.name}",
                victim_id=victim.player_id,
                taken=taken.card_id,
                given=given.card_id,
            )
        elif step.kind == EffectKind.TAKE_SET:
            moved = [c for c in victim.properties if effective_color(c) == step.color]
            for card in moved:
                victim.properties.remove(card)
                instigator.properties.append(card)
            self.event_log.log(
                EventType.SET_STOLEN,
                player_id=instigator.player_id,
                message=f"{instigator.name} took {victim.name}'s {step.color} set",
                victim_id=victim.player_id,
                color=step.color,
                cards=[c.card_id for c in moved],
            )

        self._cleanup_buildings(victim)
        self._cleanup_buildings(instigator)
        self._check_winner()

    def _cleanup_buildings(self, player: PlayerState) -> None:
        for building in displaced_buildings(player.properties):
            color = building.attached_color
            player.properties.remove(building)
            building.attached_color = None
            player.bank.append(building)
            self.event_log.log(
                EventType.BUILDING_DISPLACED,
                player_id=player.player_id,
                message=f"{player.name}'s {building.name} moved to the bank from the {color} set",
                card=building.card_id,
                color=color,
            )

    # === WILDS ===

    def _flip_wild_card(self, card_id: str, color: Optional[str]) -> None:
        self._require_phase(Phase.PLAYING)
        player = self.get_current_player()
        card = player.find_in_properties(card_id)
        if card is None:
            raise TargetNotFoundError(f"{card_id} is not one of {player.name}'s properties")
        if not isinstance(card, WildPropertyCard):
            raise InvalidActionError(f"{card.name} is not a wild card")

        if card.is_rainbow:
            if card.current_color is not None:
                raise InvalidActionError("A rainbow wild keeps the colour it was given")
            if color is None or not card.can_be(color):
                raise InvalidActionError("A rainbow wild needs a colour")
            new_color = color
        elif color is None:
            new_color = next(c for c in card.colors if c != card.current_color)
        elif not card.can_be(color):
            raise InvalidActionError(f"{card.name} cannot be {color}")
        elif color == card.current_color:
            raise InvalidActionError(f"{card.name} is already {color}")
        else:
            new_color = color

        old_color = card.current_color
        card.current_color = new_color
        self.event_log.log(
            EventType.FLIP_WILD,
            player_id=player.player_id,
            message=f"{player.name} moved {card.name} from {old_color or 'unassigned'} to {new_color}",
            card=card.card_id,
            color=new_color,
        )
        self._cleanup_buildings(player)
        self._check_winner()

    # === WIN CHECK ===

    def _check_winner(self) -> bool:
        """End the game the moment a player holds enough complete sets."""
        if self.phase == Phase.GAME_OVER:
            return True
        current = self.get_current_player()
        for player in [current] + self.opponents_of(current.player_id):
            if count_complete_sets(player.properties) >= self.config.sets_to_win:
                self.winner = player.player_id
                self.phase = Phase.GAME_OVER
                self.pending_request = None
                self.pending_reaction = None
                self.pending_action = None
                self.resolution = None
                self.last_rent = None
                self.event_log.log(
                    EventType.GAME_END,
                    player_id=player.player_id,
                    message=f"{player.name} wins with {count_complete_sets(player.properties)} complete sets",
                    turn_number=self.turn_number,
                )
                logger.info(f"Game over: {player.name} wins on turn {self.turn_number}")
                return True
        return False


def _destination(destination: Union[Destination, str]) -> Destination:
    if isinstance(destination, Destination):
        return destination
    try:
        return Destination(str(destination).lower())
    except ValueError:
        raise TargetNotFoundError(f"Unknown destination: {destination}")


def _find_just_say_no(player: PlayerState) -> Optional[Card]:
    return next((c for c in player.hand if is_action(c, ActionKind.JUST_SAY_NO)), None)


def _describe_play(game: GameState, player: PlayerState, plan: PlayPlan) -> str:
    card = plan.card
    names = [game.get_player(s.victim_id).name for s in plan.steps]
    if plan.rent is not None:
        return f"{player.name} charged ${plan.rent.amount}M {plan.color} rent to {', '.join(names)}"
    if names:
        return f"{player.name} played {card.name} against {', '.join(dict.fromkeys(names))}"
    return f"{player.name} played {card.name}"


def create_game(config: GameConfig, players: List[Player]) -> GameState:
    """Create a game and deal the starting hands."""
    game = GameState(config, players)
    game.deal_starting_hands()
    return game


def start_game(
    player_count: int,
    bot_difficulty: str = "medium",
    seed: Optional[int] = None,
    config: Optional[GameConfig] = None,
) -> GameState:
    """
    Start a game with `config.human_players` humans and bots in the other seats.

    Args:
        player_count: Total number of players (2-6).
        bot_difficulty: easy, medium, hard or expert.
        seed: RNG seed for a reproducible shuffle.
        config: Optional base configuration; player_count, bot_difficulty
            and seed given here take precedence.
    """
    config = replace(
        config or GameConfig(),
        player_count=player_count,
        bot_difficulty=bot_difficulty,
    )
    if seed is not None:
        config.seed = seed

    players = []
    for i in range(player_count):
        if i < config.human_players:
            players.append(Player(i, "You" if config.human_players == 1 else f"Player {i + 1}", is_human=True))
        else:
            players.append(Player(i, f"Bot {i}"))
    return create_game(config, players)
