"""
Board layout engine.

Recomputes where every placed tile is drawn, from the chain order and the
side/double metadata alone. Coordinates stored on ``PlacedTile`` are ignored.

The board is a grid of unit cells. A regular tile covers 4x2 cells
(along x across the local flow) and a double 2x4, so occupancy checks are
exact cell lookups. The anchor sits centered on the origin and the chain
grows in two arms: rightwards from its right edge and leftwards from its
left edge. An arm that would run past half the configured width turns 90
degrees (right arm down, left arm up), runs for one tile length, then
turns back into the opposite horizontal direction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from domino_engine.config import LayoutConfig
from domino_engine.state import PlacedTile, find_anchor_index
from domino_engine.tiles import FlowDirection

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]

TILE_LENGTH = 4
TILE_BREADTH = 2


@dataclass(frozen=True)
class Rect:
    """Half-open cell rectangle ``[x0, x1) x [y0, y1)``."""

    x0: int
    y0: int
    x1: int
    y1: int

    def cells(self) -> Iterator[Cell]:
        for i in range(self.x0, self.x1):
            for j in range(self.y0, self.y1):
                yield (i, j)

    def shifted(self, dx: int, dy: int) -> Rect:
        return Rect(self.x0 + dx, self.y0 + dy, self.x1 + dx, self.y1 + dy)

    @property
    def center(self) -> Tuple[float, float]:
        return ((self.x0 + self.x1) / 2, (self.y0 + self.y1) / 2)

    def edge(self, direction: FlowDirection) -> int:
        """Coordinate of the leading edge when growing towards ``direction``."""
        if direction == FlowDirection.RIGHT:
            return self.x1
        if direction == FlowDirection.LEFT:
            return self.x0
        if direction == FlowDirection.DOWN:
            return self.y1
        return self.y0


@dataclass(frozen=True)
class TilePosition:
    """Where and how a single tile is drawn, in pixels."""

    tile_id: str
    index: int
    x: float
    y: float
    rotation: int
    width: float
    height: float
    flow: Optional[FlowDirection] = None


@dataclass(frozen=True)
class LayoutConflict:
    """A tile whose collision could not be resolved within the nudge budget."""

    tile_id: str
    index: int
    x: float
    y: float
    attempts: int


@dataclass(frozen=True)
class LayoutBounds:
    min_x: float = 0.0
    max_x: float = 0.0
    min_y: float = 0.0
    max_y: float = 0.0

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class BoardLayout:
    """Positions for every placed tile, in chain order."""

    positions: Tuple[TilePosition, ...] = ()
    conflicts: Tuple[LayoutConflict, ...] = ()

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    def by_id(self) -> Dict[str, TilePosition]:
        return {p.tile_id: p for p in self.positions}

    def bounds(self) -> LayoutBounds:
        """Bounding box of all drawn tiles."""
        if not self.positions:
            return LayoutBounds()
        return LayoutBounds(
            min_x=min(p.x - p.width / 2 for p in self.positions),
            max_x=max(p.x + p.width / 2 for p in self.positions),
            min_y=min(p.y - p.height / 2 for p in self.positions),
            max_y=max(p.y + p.height / 2 for p in self.positions),
        )


class _Arm:
    """Growth state of one side of the chain."""

    def __init__(self, direction: FlowDirection, wrap: FlowDirection, open_value: int, last: Rect):
        self.direction = direction
        self.wrap = wrap
        self.last_horizontal = direction
        self.open_value = open_value
        self.last = last
        self.line = 0
        self.run = 0

    def turn(self, direction: FlowDirection) -> None:
        # The new segment hugs the far end of the last tile.
        back = -1 if self.direction in (FlowDirection.RIGHT, FlowDirection.DOWN) else 1
        self.line = self.last.edge(self.direction) + back
        if self.direction.is_horizontal:
            self.last_horizontal = self.direction
        self.direction = direction
        self.run = 0

    def propose(self, along: int, across: int) -> Rect:
        front = self.last.edge(self.direction)
        low = self.line - across // 2
        high = self.line + across // 2
        if self.direction == FlowDirection.RIGHT:
            return Rect(front, low, front + along, high)
        if self.direction == FlowDirection.LEFT:
            return Rect(front - along, low, front, high)
        if self.direction == FlowDirection.DOWN:
            return Rect(low, front, high, front + along)
        return Rect(low, front - along, high, front)


def _opposite(direction: FlowDirection) -> FlowDirection:
    return {
        FlowDirection.RIGHT: FlowDirection.LEFT,
        FlowDirection.LEFT: FlowDirection.RIGHT,
        FlowDirection.DOWN: FlowDirection.UP,
        FlowDirection.UP: FlowDirection.DOWN,
    }[direction]


def _rotation(placed: PlacedTile, direction: FlowDirection, connects_left: bool) -> int:
    """Doubles lie across the flow; other tiles face their connecting pip backwards."""
    if placed.is_double:
        return 90 if direction.is_horizontal else 0
    if direction == FlowDirection.RIGHT:
        return 0 if connects_left else 180
    if direction == FlowDirection.LEFT:
        return 180 if connects_left else 0
    if direction == FlowDirection.DOWN:
        return 90 if connects_left else 270
    return 270 if connects_left else 90


class BoardLayoutEngine:
    """Computes a collision-free layout for a placed-tile chain."""

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()

    def compute(self, placed_tiles: Sequence[PlacedTile]) -> BoardLayout:
        if not placed_tiles:
            return BoardLayout()

        occupied: Set[Cell] = set()
        positions: Dict[int, TilePosition] = {}
        conflicts: List[LayoutConflict] = []

        anchor_index = max(find_anchor_index(placed_tiles), 0)
        anchor = placed_tiles[anchor_index]
        if anchor.is_double:
            rect = Rect(-TILE_BREADTH // 2, -TILE_LENGTH // 2, TILE_BREADTH // 2, TILE_LENGTH // 2)
        else:
            rect = Rect(-TILE_LENGTH // 2, -TILE_BREADTH // 2, TILE_LENGTH // 2, TILE_BREADTH // 2)
        occupied.update(rect.cells())
        positions[anchor_index] = self._position(anchor, anchor_index, rect, 90 if anchor.is_double else 0, None)

        arms = (
            (_Arm(FlowDirection.RIGHT, FlowDirection.DOWN, anchor.right, rect),
             range(anchor_index + 1, len(placed_tiles))),
            (_Arm(FlowDirection.LEFT, FlowDirection.UP, anchor.left, rect),
             range(anchor_index - 1, -1, -1)),
        )
        for arm, indices in arms:
            for index in indices:
                positions[index] = self._place(placed_tiles[index], index, arm, occupied, conflicts)

        return BoardLayout(
            positions=tuple(positions[i] for i in range(len(placed_tiles))),
            conflicts=tuple(conflicts),
        )

    def _place(
        self,
        placed: PlacedTile,
        index: int,
        arm: _Arm,
        occupied: Set[Cell],
        conflicts: List[LayoutConflict],
    ) -> TilePosition:
        along, across = (TILE_BREADTH, TILE_LENGTH) if placed.is_double else (TILE_LENGTH, TILE_BREADTH)

        if arm.direction.is_horizontal:
            front = arm.last.edge(arm.direction)
            dx = arm.direction.vector[0]
            if abs(front + dx * along) > self.config.half_width_units:
                arm.turn(arm.wrap)
        elif arm.run >= TILE_LENGTH:
            arm.turn(_opposite(arm.last_horizontal))

        proposal = arm.propose(along, across)
        rect, attempts = self._resolve(proposal, arm.direction, occupied)
        if rect is None:
            rect = proposal
            x, y = self._to_pixels(rect)
            conflicts.append(LayoutConflict(placed.tile_id, index, x, y, attempts))
            logger.warning(
                "Layout conflict for tile %s at index %d after %d nudges",
                placed.tile_id,
                index,
                attempts,
                extra={"event": "layout_conflict", "tile": placed.tile_id},
            )

        connects_left = placed.left == arm.open_value
        arm.open_value = placed.right if connects_left else placed.left
        rotation = _rotation(placed, arm.direction, connects_left)

        arm.run += abs(rect.edge(arm.direction) - arm.last.edge(arm.direction))
        arm.last = rect
        occupied.update(rect.cells())
        return self._position(placed, index, rect, rotation, arm.direction)

    def _resolve(self, rect: Rect, direction: FlowDirection, occupied: Set[Cell]) -> Tuple[Optional[Rect], int]:
        """Nudge ``rect`` along the flow until it lands on free cells."""
        dx, dy = direction.vector
        attempts = 0
        candidate = rect
        while _collides(candidate.cells(), occupied):
            if attempts >= self.config.max_nudge_attempts:
                return None, attempts
            candidate = candidate.shifted(dx, dy)
            attempts += 1
        return candidate, attempts

    def _to_pixels(self, rect: Rect) -> Tuple[float, float]:
        cx, cy = rect.center
        return cx * self.config.unit, cy * self.config.unit

    def _position(
        self,
        placed: PlacedTile,
        index: int,
        rect: Rect,
        rotation: int,
        flow: Optional[FlowDirection],
    ) -> TilePosition:
        x, y = self._to_pixels(rect)
        long_side, short_side = self.config.tile_height, self.config.tile_width
        lies_flat = (rect.x1 - rect.x0) > (rect.y1 - rect.y0)
        return TilePosition(
            tile_id=placed.tile_id,
            index=index,
            x=x,
            y=y,
            rotation=rotation,
            width=long_side if lies_flat else short_side,
            height=short_side if lies_flat else long_side,
            flow=flow,
        )


def _collides(cells: Iterable[Cell], occupied: Set[Cell]) -> bool:
    return any(cell in occupied for cell in cells)


def compute_layout(placed_tiles: Sequence[PlacedTile], config: Optional[LayoutConfig] = None) -> BoardLayout:
    """Lay out a chain with a one-off engine."""
    return BoardLayoutEngine(config).compute(placed_tiles)
