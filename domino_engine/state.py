"""
Immutable match state.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple

from domino_engine.config import GameConfig
from domino_engine.events import GameLogEntry
from domino_engine.tiles import Side, Tile


@dataclass(frozen=True)
class PlacedTile:
    """A tile on the board, with the rotation chosen when it was played."""

    tile: Tile
    x: float
    y: float
    connected_side: Side
    placed_by: str

    @property
    def tile_id(self) -> str:
        return self.tile.tile_id

    @property
    def left(self) -> int:
        return self.tile.left

    @property
    def right(self) -> int:
        return self.tile.right

    @property
    def is_double(self) -> bool:
        return self.tile.is_double

    @property
    def rotation(self) -> int:
        return self.tile.rotation


def find_anchor_index(placed_tiles: Sequence[PlacedTile]) -> int:
    """
    Locate the first tile played in a physically ordered chain.

    Left plays are prepended and right plays appended, so the anchor is the
    right-most tile attached on the left side.
    """
    index = -1
    for i, placed in enumerate(placed_tiles):
        if placed.connected_side == Side.LEFT:
            index = i
    return index


@dataclass(frozen=True)
class GameState:
    """
    Complete snapshot of a match.

    Snapshots are never mutated; every accepted transition builds a new one
    with ``dataclasses.replace``.
    """

    player_hands: Dict[str, Tuple[Tile, ...]]
    player_order: Tuple[str, ...]
    current_player: str
    placed_tiles: Tuple[PlacedTile, ...] = ()
    left_end: Optional[int] = None
    right_end: Optional[int] = None
    pass_count: int = 0
    game_ended: bool = False
    winner: Optional[str] = None
    game_log: Tuple[GameLogEntry, ...] = ()
    config: GameConfig = field(default_factory=GameConfig)

    @property
    def is_board_empty(self) -> bool:
        return not self.placed_tiles

    @property
    def anchor_index(self) -> int:
        """Index of the first tile played within ``placed_tiles``; -1 on an empty board."""
        return find_anchor_index(self.placed_tiles)

    def hand_of(self, player_id: str) -> Tuple[Tile, ...]:
        return self.player_hands.get(player_id, ())

    def remaining_pips(self, player_id: str) -> int:
        return sum(tile.pip_count for tile in self.hand_of(player_id))

    def end_for(self, side: Side) -> Optional[int]:
        return self.left_end if side == Side.LEFT else self.right_end

    def next_player(self, player_id: str) -> str:
        index = self.player_order.index(player_id)
        return self.player_order[(index + 1) % len(self.player_order)]

    def __repr__(self) -> str:
        return (
            f"GameState(current={self.current_player}, placed={len(self.placed_tiles)}, "
            f"ends={self.left_end}/{self.right_end}, passes={self.pass_count}, "
            f"ended={self.game_ended}, winner={self.winner})"
        )
