"""
Game and layout configuration settings.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GameConfig:
    """Configuration for a domino match."""

    max_pip: int = 6
    tiles_per_hand: int = 7

    # Reject a pass while the player still holds a playable tile.
    strict_pass: bool = False

    seed: Optional[int] = None

    @property
    def set_size(self) -> int:
        """Number of tiles in a full set (28 for double-six)."""
        n = self.max_pip + 1
        return n * (n + 1) // 2

    @property
    def max_players(self) -> int:
        return self.set_size // self.tiles_per_hand


@dataclass(frozen=True)
class PlacementConfig:
    """Presentation hints computed by the placement planner, in pixels."""

    tile_spacing: float = 70.0
    row_height: float = 130.0
    max_row_width: float = 450.0
    double_offset: float = -30.0

    # Jitter amplitude when a jitter RNG is supplied
    double_variation: float = 3.0
    tile_variation: float = 8.0


@dataclass(frozen=True)
class LayoutConfig:
    """Configuration for the board layout engine.

    Tiles are laid out on a grid where one unit is half the tile's short
    side (plus its share of the gap), so a tile is 4x2 units and every tile
    covers whole cells.
    """

    tile_width: float = 60.0
    tile_height: float = 120.0
    tile_spacing: float = 4.0

    max_width: float = 800.0
    max_nudge_attempts: int = 8

    @property
    def unit(self) -> float:
        """Pixel size of one grid unit."""
        return (self.tile_width + self.tile_spacing) / 2

    @property
    def half_width_units(self) -> float:
        return self.max_width / self.unit / 2
