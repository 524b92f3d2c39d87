"""Shared test fixtures for the Monopoly Deal engine tests."""

from typing import List, Optional

import pytest

from monopoly_deal import GameConfig, Player, create_game
from monopoly_deal.cards import Card, WildPropertyCard, create_cards
from monopoly_deal.game import GameState


class Table:
    """Moves specific cards between zones so tests can stage a position."""

    def __init__(self, game: GameState):
        self.game = game

    def card(self, card_id: str) -> Card:
        return next(c for c in self.game.all_cards() if c.card_id == card_id)

    def take(self, card_id: str) -> Card:
        """Remove a card from whichever zone holds it."""
        game = self.game
        zones = [game.deck.cards, game.deck.discard_pile]
        for player in game.players:
            zones.extend([player.hand, player.bank, player.properties])
        for zone in zones:
            for card in zone:
                if card.card_id == card_id:
                    zone.remove(card)
                    return card
        raise KeyError(card_id)

    def give(self, player_id: int, zone: str, *card_ids: str, color: Optional[str] = None) -> List[Card]:
        """Put cards into a player's hand, bank or properties."""
        player = self.game.get_player(player_id)
        cards = []
        for card_id in card_ids:
            card = self.take(card_id)
            if color is not None and isinstance(card, WildPropertyCard):
                card.current_color = color
            getattr(player, zone).append(card)
            cards.append(card)
        return cards

    def clear(self, *player_ids: int) -> None:
        """Return every card a player holds to the bottom of the deck."""
        for player_id in player_ids:
            player = self.game.get_player(player_id)
            for zone in (player.hand, player.bank, player.properties):
                self.game.deck.cards.extend(zone)
                zone.clear()


@pytest.fixture
def catalog():
    """Fresh card instances keyed by card id."""
    return {card.card_id: card for card in create_cards()}


@pytest.fixture
def game_config():
    """Default game configuration with fixed seed for reproducibility."""
    return GameConfig(seed=42, human_players=0)


@pytest.fixture
def two_players():
    """Two bot players."""
    return [Player(0, "Alice"), Player(1, "Bob")]


@pytest.fixture
def four_players():
    """Four bot players."""
    return [
        Player(0, "Alice"),
        Player(1, "Bob"),
        Player(2, "Charlie"),
        Player(3, "Diana"),
    ]


@pytest.fixture
def basic_game(game_config, two_players):
    """Basic game with two players and fixed seed."""
    return create_game(game_config, two_players)


@pytest.fixture
def four_player_game(game_config, four_players):
    """Game with four players and fixed seed."""
    return create_game(game_config, four_players)


@pytest.fixture
def table(basic_game):
    return Table(basic_game)


@pytest.fixture
def playing_game(basic_game, table):
    """Two-player game in Alice's PLAYING phase with every player's zones empty."""
    basic_game.draw_cards()
    table.clear(0, 1)
    return basic_game


@pytest.fixture
def human_victim_game(game_config):
    """Alice is a bot, Bob is human; Alice to play with empty zones."""
    game = create_game(game_config, [Player(0, "Alice"), Player(1, "Bob", is_human=True)])
    game.draw_cards()
    Table(game).clear(0, 1)
    return game


@pytest.fixture
def four_playing_game(four_player_game):
    """Four-player game in Alice's PLAYING phase with every zone empty."""
    four_player_game.draw_cards()
    Table(four_player_game).clear(0, 1, 2, 3)
    return four_player_game
