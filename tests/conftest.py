"""Shared test fixtures for domino engine tests."""

from typing import Dict, List, Optional, Sequence

import pytest

from domino_engine import GameConfig, GameState, PlacedTile, Side, create_game, parse_tile


@pytest.fixture
def game_config():
    """Default game configuration with fixed seed for reproducibility."""
    return GameConfig(seed=42)


@pytest.fixture
def four_players():
    """Four test players, seated in this order."""
    return ["alice", "bob", "carol", "dave"]


@pytest.fixture
def new_game(game_config, four_players):
    """Freshly dealt four-player match."""
    return create_game(four_players, game_config)


def build_state(
    hands: Dict[str, Sequence[str]],
    *,
    order: Optional[List[str]] = None,
    current: Optional[str] = None,
    placed: Sequence[PlacedTile] = (),
    left_end: Optional[int] = None,
    right_end: Optional[int] = None,
    pass_count: int = 0,
    config: Optional[GameConfig] = None,
) -> GameState:
    """Build a state from tile notation, e.g. ``{"alice": ["3-4", "6-6"]}``."""
    order = order or list(hands)
    return GameState(
        player_hands={pid: tuple(parse_tile(t) for t in tiles) for pid, tiles in hands.items()},
        player_order=tuple(order),
        current_player=current or order[0],
        placed_tiles=tuple(placed),
        left_end=left_end,
        right_end=right_end,
        pass_count=pass_count,
        config=config or GameConfig(),
    )


def placed(notation: str, side: str = "right", player: str = "alice") -> PlacedTile:
    return PlacedTile(parse_tile(notation), 0.0, 0.0, Side(side), player)


@pytest.fixture
def make_state():
    """Factory for hand-crafted states."""
    return build_state


@pytest.fixture
def make_placed():
    """Factory for placed tiles that skip the rules (layout tests)."""
    return placed
