#!/usr/bin/env python3
"""
Minimal CLI for simulating domino matches.

This script demonstrates the rules engine by running a match between
simple AI players that make random or greedy decisions, then lays out the
final board.
"""

import argparse
import logging
import random
from typing import Dict, Optional

from domino_engine.agents import Agent, GreedyAgent, RandomAgent
from domino_engine.game import create_game, pass_player, place_tile
from domino_engine.layout import BoardLayoutEngine
from domino_engine.settings import get_settings
from domino_engine.state import GameState
from game_logger import GameLogger

PLAYER_NAMES = ["Alice", "Bob", "Charlie", "Diana"]


def print_game_state(state: GameState) -> None:
    """Print current board and hand sizes."""
    chain = " ".join(f"[{p.tile}]" for p in state.placed_tiles)
    print(f"\nBoard ({state.left_end}|{state.right_end}): {chain}")
    for player_id in state.player_order:
        marker = "*" if player_id == state.current_player else " "
        print(f" {marker} {player_id}: {len(state.hand_of(player_id))} tiles")


def print_game_summary(state: GameState, engine: BoardLayoutEngine) -> None:
    """Print final match summary."""
    print("\n" + "=" * 60)
    print("MATCH OVER")
    print("=" * 60)
    print(f"\nWinner: {state.winner}")

    print("\nRemaining pips:")
    for player_id in state.player_order:
        print(f"  {player_id}: {state.remaining_pips(player_id)}")

    layout = engine.compute(state.placed_tiles)
    bounds = layout.bounds()
    print(f"\nTiles played: {len(state.placed_tiles)}")
    print(f"Board size: {bounds.width:.0f} x {bounds.height:.0f} px")
    if layout.has_conflicts:
        print(f"Layout conflicts: {len(layout.conflicts)}")


def simulate_game(
    agent_type: str = "greedy",
    seed: Optional[int] = None,
    verbose: bool = True,
    log_file: Optional[str] = None,
) -> GameState:
    """
    Simulate a complete four-player match.

    Args:
        agent_type: Type of AI ('random' or 'greedy')
        seed: Random seed for reproducibility
        verbose: Whether to print detailed output
        log_file: Path to JSONL log file (None = auto-generate)
    """
    settings = get_settings()
    seed = seed if seed is not None else settings.seed
    rng = random.Random(seed)

    logger = GameLogger(log_file, log_dir=settings.log_dir)

    agents: Dict[str, Agent] = {}
    for name in PLAYER_NAMES:
        if agent_type == "random":
            agents[name] = RandomAgent(name, random.Random(rng.random()))
        else:
            agents[name] = GreedyAgent(name)

    state = create_game(PLAYER_NAMES, settings.game_config(), rng)
    logger.flush_engine_events(state)

    if verbose:
        print(f"Starting match with {agent_type} agents")
        print(f"Seed: {seed}")
        print(f"Logging to: {logger.log_file}")

    # Every turn either places a tile or passes; four passes in a row end the
    # match, so 28 placements plus passes bound the loop.
    max_turns = 28 * (len(PLAYER_NAMES) + 1)
    turns = 0
    while not state.game_ended and turns < max_turns:
        turns += 1
        player_id = state.current_player
        decision = agents[player_id].decide(state)

        if decision.is_pass:
            result = pass_player(player_id, state)
        else:
            result = place_tile(decision.tile, decision.side, state, player_id)

        state = result.unwrap()
        logger.flush_engine_events(state)

        if verbose:
            print_game_state(state)

    if verbose:
        print_game_summary(state, BoardLayoutEngine(settings.layout_config()))
        print(f"\nMatch logged to: {logger.log_file}")

    return state


def main():
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(description="Simulate a domino match")
    parser.add_argument(
        "--agent",
        type=str,
        default="greedy",
        choices=["random", "greedy"],
        help="AI agent type",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--quiet", action="store_true", help="Reduce output verbosity")
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Path to JSONL log file (default: auto-generated timestamp)",
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    simulate_game(
        agent_type=args.agent,
        seed=args.seed,
        verbose=not args.quiet,
        log_file=args.log_file,
    )


if __name__ == "__main__":
    main()
