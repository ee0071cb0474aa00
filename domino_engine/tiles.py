"""
Tiles, board sides and tile set generation.
"""

import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from domino_engine.exceptions import ValidationError

ROTATIONS: Tuple[int, ...] = (0, 90, 180, 270)


class Side(Enum):
    """End of the chain a tile attaches to."""

    LEFT = "left"
    RIGHT = "right"


class FlowDirection(Enum):
    """Direction in which a chain arm grows on the board."""

    RIGHT = "right"
    LEFT = "left"
    DOWN = "down"
    UP = "up"

    @property
    def is_horizontal(self) -> bool:
        return self in (FlowDirection.RIGHT, FlowDirection.LEFT)

    @property
    def vector(self) -> Tuple[int, int]:
        return _FLOW_VECTORS[self]


_FLOW_VECTORS = {
    FlowDirection.RIGHT: (1, 0),
    FlowDirection.LEFT: (-1, 0),
    FlowDirection.DOWN: (0, 1),
    FlowDirection.UP: (0, -1),
}


@dataclass(frozen=True, eq=False)
class Tile:
    """
    A domino tile.

    Identity is the unordered pair of pips: ``Tile(3, 4) == Tile(4, 3)`` and
    rotation never takes part in equality or hashing.
    """

    left: int
    right: int
    rotation: int = 0

    def __post_init__(self) -> None:
        if self.left < 0 or self.right < 0:
            raise ValidationError(f"Pip values must be non-negative: {self.left}-{self.right}")
        if self.rotation not in ROTATIONS:
            raise ValidationError(f"Invalid rotation: {self.rotation}")

    @property
    def tile_id(self) -> str:
        low, high = sorted((self.left, self.right))
        return f"{low}_{high}"

    @property
    def is_double(self) -> bool:
        return self.left == self.right

    @property
    def pip_count(self) -> int:
        return self.left + self.right

    def matches(self, value: Optional[int]) -> bool:
        """Check whether either half carries the given pip value."""
        return value is not None and (self.left == value or self.right == value)

    def other_pip(self, value: int) -> int:
        """Return the pip opposite to ``value``; doubles return the same value."""
        if self.left == value:
            return self.right
        if self.right == value:
            return self.left
        raise ValueError(f"Value {value} not on tile {self}")

    def with_rotation(self, rotation: int) -> "Tile":
        return replace(self, rotation=rotation)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tile):
            return NotImplemented
        return self.tile_id == other.tile_id

    def __hash__(self) -> int:
        return hash(self.tile_id)

    def __str__(self) -> str:
        return f"{self.left}-{self.right}"


def parse_tile(text: str) -> Tile:
    """Parse tile notation such as ``"3-4"``, ``"[3|4]"``, ``"3_4"`` or ``"34"``."""
    s = (text or "").strip().replace("[", "").replace("]", "").replace(" ", "")
    for sep in ("|", ",", "_"):
        s = s.replace(sep, "-")
    try:
        if "-" in s:
            a, b = s.split("-", 1)
            return Tile(int(a), int(b))
        if len(s) == 2 and s.isdigit():
            return Tile(int(s[0]), int(s[1]))
    except ValueError as exc:
        raise ValidationError(f"Cannot parse tile: {text!r}") from exc
    raise ValidationError(f"Cannot parse tile: {text!r}")


def create_full_set(max_pip: int = 6) -> List[Tile]:
    """Create every tile ``i-j`` with ``0 <= i <= j <= max_pip`` in canonical order."""
    return [Tile(i, j) for i in range(max_pip + 1) for j in range(i, max_pip + 1)]


def shuffle_tiles(tiles: Sequence[Tile], rng: Optional[random.Random] = None) -> List[Tile]:
    """
    Return a uniformly random permutation of ``tiles``.

    Fisher-Yates over a copy; the input sequence is left untouched.
    """
    rng = rng or random.Random()
    shuffled = list(tiles)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def create_shuffled_set(rng: Optional[random.Random] = None, max_pip: int = 6) -> List[Tile]:
    """Create a full set and shuffle it."""
    return shuffle_tiles(create_full_set(max_pip), rng)
