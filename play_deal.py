#!/usr/bin/env python3
"""
Minimal CLI for simulating Monopoly Deal games.

This script demonstrates the game engine by running bot-only games at any
mix of difficulty tiers.
"""

import argparse
import json
import logging
from datetime import datetime
from typing import List, Optional

from monopoly_deal.agents import AGENT_TYPES, create_agent
from monopoly_deal.config import GameConfig
from monopoly_deal.game import GameState, create_game
from monopoly_deal.player import Player
from monopoly_deal.rules import step_turn
from monopoly_deal.settings import get_engine_settings
from monopoly_deal.sets import compute_sets, count_complete_sets

PLAYER_NAMES = ["Alice", "Bob", "Charlie", "Diana", "Eve", "Frank"]


def print_game_state(game: GameState) -> None:
    """Print current game state."""
    print("\n" + "=" * 60)
    print(f"TURN {game.turn_number}  (deck {game.deck_size}, discard {game.discard_size})")
    print("=" * 60)

    for player in game.players:
        sets = ", ".join(
            f"{s.color}{'*' if s.is_complete else ''}x{len(s.cards)}" for s in compute_sets(player.properties)
        )
        print(
            f"{player.name}: bank ${player.bank_value}M | hand {len(player.hand)} | "
            f"sets [{sets}]"
        )


def print_game_summary(game: GameState) -> None:
    """Print final game summary."""
    print("\n" + "=" * 60)
    print("GAME OVER" if game.game_over else "TURN LIMIT REACHED")
    print("=" * 60)

    if game.winner is not None:
        winner = game.get_player(game.winner)
        print(f"\nWinner: {winner.name}")

    print("\nFinal Standings:")
    standings = sorted(
        game.players,
        key=lambda p: (count_complete_sets(p.properties), p.total_assets),
        reverse=True,
    )
    for player in standings:
        print(
            f"  {player.name}: {count_complete_sets(player.properties)} complete set(s), "
            f"${player.total_assets}M in assets"
        )

    print(f"\nTotal Turns: {game.turn_number}")


def write_match_log(game: GameState, log_file: str) -> None:
    """Write the match log as JSONL, one event per line."""
    with open(log_file, "w") as f:
        for index, event in enumerate(game.event_log.get_events()):
            record = {
                "event_id": index,
                "event_type": event.event_type.value,
                "player_id": event.player_id,
                "message": event.message,
                **event.details,
            }
            f.write(json.dumps(record, default=str) + "\n")


def simulate_game(
    num_players: int = 4,
    difficulties: Optional[List[str]] = None,
    seed: Optional[int] = None,
    verbose: bool = True,
    max_turns: int = 500,
    log_file: Optional[str] = None,
) -> GameState:
    """
    Simulate a complete bot-only game.

    Args:
        num_players: Number of players (2-6)
        difficulties: Bot tier per seat; a single entry applies to every seat
        seed: Random seed for reproducibility
        verbose: Whether to print detailed output
        max_turns: Turn cap, in case no one completes three sets
        log_file: Optional path for a JSONL copy of the match log
    """
    difficulties = difficulties or ["medium"]
    if len(difficulties) == 1:
        difficulties = difficulties * num_players
    if len(difficulties) != num_players:
        raise ValueError(f"Expected 1 or {num_players} difficulties, got {len(difficulties)}")

    players = [Player(i, PLAYER_NAMES[i]) for i in range(num_players)]
    config = GameConfig(player_count=num_players, bot_difficulty=difficulties[0], human_players=0, seed=seed)
    game = create_game(config, players)

    agents = {
        i: create_agent(difficulties[i], i, PLAYER_NAMES[i], None if seed is None else seed + i)
        for i in range(num_players)
    }

    if verbose:
        tiers = ", ".join(f"{PLAYER_NAMES[i]}={difficulties[i]}" for i in range(num_players))
        print(f"Starting game with {num_players} players ({tiers})")
        print(f"Seed: {seed}")

    while not game.game_over and game.turn_number < max_turns:
        if verbose and game.turn_number % 10 == 0:
            print_game_state(game)
        if not step_turn(game, agents):
            break

    if log_file:
        write_match_log(game, log_file)

    if verbose:
        print_game_summary(game)
        if log_file:
            print(f"\nGame logged to: {log_file}")

    return game


def main():
    """Main entry point for CLI."""
    settings = get_engine_settings()

    parser = argparse.ArgumentParser(description="Simulate a Monopoly Deal game")
    parser.add_argument(
        "--players",
        type=int,
        default=settings.player_count,
        choices=range(2, 7),
        help="Number of players (2-6)",
    )
    parser.add_argument(
        "--difficulty",
        type=str,
        nargs="+",
        default=[settings.bot_difficulty],
        choices=sorted(AGENT_TYPES),
        help="Bot tier, once for every seat or once per seat",
    )
    parser.add_argument("--seed", type=int, default=settings.seed, help="Random seed")
    parser.add_argument("--quiet", action="store_true", help="Reduce output verbosity")
    parser.add_argument(
        "--max-turns",
        type=int,
        default=settings.max_turns,
        help="Maximum number of turns",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Path to a JSONL match log, or 'auto' for a timestamped file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=settings.log_level,
        help="Engine logging level (DEBUG, INFO, WARNING, ...)",
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    log_file = args.log_file
    if log_file == "auto":
        log_file = f"deal_game_{datetime.now().strftime('%Y%m%d_%H%M%S')}.jsonl"

    simulate_game(
        num_players=args.players,
        difficulties=args.difficulty,
        seed=args.seed,
        verbose=not args.quiet,
        max_turns=args.max_turns,
        log_file=log_file,
    )


if __name__ == "__main__":
    main()
