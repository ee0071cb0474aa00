"""
Move validation and placement planning.

Both functions are pure given a state. ``plan_placement`` only adds
cosmetic jitter to the coordinate hints when a jitter RNG is passed in, so
rotations and open ends are always reproducible.
"""

import math
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from domino_engine.config import PlacementConfig
from domino_engine.exceptions import NoValidConnectionError
from domino_engine.state import GameState
from domino_engine.tiles import Side, Tile


@dataclass(frozen=True)
class PlacementCheck:
    """Result of validating a tile against the open ends."""

    can_place: bool
    sides: Tuple[Side, ...]


@dataclass(frozen=True)
class PlacementPlan:
    """Rotation, resulting open ends and coordinate hint for a placement."""

    rotation: int
    new_left_end: int
    new_right_end: int
    x: float = 0.0
    y: float = 0.0


def can_place_tile(tile: Tile, state: GameState) -> PlacementCheck:
    """
    Decide which sides of the chain accept ``tile``.

    On an empty board the first tile always goes down as the left anchor.
    Otherwise a side is valid only if one of the tile's pips equals that
    side's open end exactly.
    """
    if state.is_board_empty:
        return PlacementCheck(True, (Side.LEFT,))

    sides = tuple(side for side in (Side.LEFT, Side.RIGHT) if tile.matches(state.end_for(side)))
    return PlacementCheck(bool(sides), sides)


def plan_placement(
    tile: Tile,
    side: Side,
    state: GameState,
    config: Optional[PlacementConfig] = None,
    jitter_rng: Optional[random.Random] = None,
) -> PlacementPlan:
    """
    Compute rotation, new open ends and a coordinate hint for a placement.

    Must only be called for a side accepted by ``can_place_tile``.

    Raises:
        NoValidConnectionError: if the tile does not match the open end on ``side``
    """
    config = config or PlacementConfig()

    if state.is_board_empty:
        return PlacementPlan(
            rotation=90 if tile.is_double else 0,
            new_left_end=tile.left,
            new_right_end=tile.right,
        )

    target_end = state.end_for(side)
    if not tile.matches(target_end):
        raise NoValidConnectionError(f"Tile {tile} does not match open end {target_end} on the {side.value}")

    if tile.is_double:
        rotation = 90
    elif tile.left == target_end:
        rotation = 180 if side == Side.LEFT else 0
    else:
        rotation = 0 if side == Side.LEFT else 180
    open_value = tile.other_pip(target_end)

    new_left_end, new_right_end = state.left_end, state.right_end
    if side == Side.LEFT:
        new_left_end = open_value
    else:
        new_right_end = open_value

    x, y = _position_hint(tile, side, len(state.placed_tiles), rotation, config, jitter_rng)
    return PlacementPlan(rotation, new_left_end, new_right_end, x, y)


def _position_hint(
    tile: Tile,
    side: Side,
    placed_count: int,
    rotation: int,
    config: PlacementConfig,
    jitter_rng: Optional[random.Random],
) -> Tuple[float, float]:
    """Lay tiles outward from the anchor, wrapping into new rows past the row width."""
    direction = -1 if side == Side.LEFT else 1
    base_x = direction * placed_count * config.tile_spacing / 2
    base_y = 0.0

    if abs(base_x) > config.max_row_width:
        row = math.floor(abs(base_x) / config.max_row_width)
        base_y = direction * row * config.row_height
        base_x = direction * (abs(base_x) % config.max_row_width)

    if tile.is_double:
        base_y += config.double_offset

    if jitter_rng is not None:
        variation = config.double_variation if tile.is_double else config.tile_variation
        offset = (jitter_rng.random() - 0.5) * variation
        if rotation in (90, 270):
            base_y += offset * 0.3
        else:
            base_x += offset

    return base_x, base_y
