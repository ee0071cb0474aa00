"""
Domino Rules Engine

A deterministic implementation of four-player double-six domino rules,
with a board layout engine for rendering the played chain.
"""

from .config import GameConfig, LayoutConfig, PlacementConfig
from .exceptions import DominoError, InvalidMoveError, MoveError, ValidationError
from .game import (
    AvailableMove,
    MoveResult,
    calculate_blocked_game_winner,
    create_game,
    get_available_moves,
    pass_player,
    place_tile,
    player_can_play,
)
from .layout import BoardLayout, BoardLayoutEngine, compute_layout
from .placement import can_place_tile, plan_placement
from .state import GameState, PlacedTile
from .tiles import FlowDirection, Side, Tile, create_full_set, parse_tile, shuffle_tiles

__all__ = [
    "GameConfig",
    "LayoutConfig",
    "PlacementConfig",
    "DominoError",
    "InvalidMoveError",
    "MoveError",
    "ValidationError",
    "AvailableMove",
    "MoveResult",
    "calculate_blocked_game_winner",
    "create_game",
    "get_available_moves",
    "pass_player",
    "place_tile",
    "player_can_play",
    "BoardLayout",
    "BoardLayoutEngine",
    "compute_layout",
    "can_place_tile",
    "plan_placement",
    "GameState",
    "PlacedTile",
    "FlowDirection",
    "Side",
    "Tile",
    "create_full_set",
    "parse_tile",
    "shuffle_tiles",
]
