"""
Dealing hands and resolving who starts.
"""

from typing import Dict, List, Sequence, Tuple

from domino_engine.exceptions import ValidationError
from domino_engine.tiles import Tile


def _check_players(player_ids: Sequence[str]) -> None:
    if not player_ids:
        raise ValidationError("At least one player is required")
    if len(set(player_ids)) != len(player_ids):
        raise ValidationError(f"Duplicate player ids: {list(player_ids)}")


def distribute_hands(
    tiles: Sequence[Tile],
    player_ids: Sequence[str],
    tiles_per_player: int = 7,
) -> Dict[str, Tuple[Tile, ...]]:
    """
    Deal contiguous slices of ``tiles_per_player`` tiles in player order.

    With four players and a double-six set the whole set is consumed.
    """
    _check_players(player_ids)
    needed = len(player_ids) * tiles_per_player
    if needed > len(tiles):
        raise ValidationError(
            f"Cannot deal {tiles_per_player} tiles to {len(player_ids)} players "
            f"from a set of {len(tiles)}"
        )

    return {
        player_id: tuple(tiles[index * tiles_per_player:(index + 1) * tiles_per_player])
        for index, player_id in enumerate(player_ids)
    }


def undealt_tiles(tiles: Sequence[Tile], num_players: int, tiles_per_player: int = 7) -> List[Tile]:
    """Tiles left over after dealing (empty for a full table)."""
    return list(tiles[num_players * tiles_per_player:])


def find_player_with_highest_double(
    hands: Dict[str, Sequence[Tile]],
    player_ids: Sequence[str],
) -> str:
    """
    Find the holder of the highest double.

    Hands are scanned in ``player_ids`` order. When nobody holds a double
    (only possible with a short table) the first player starts.
    """
    _check_players(player_ids)
    highest = -1
    starting_player = player_ids[0]

    for player_id in player_ids:
        for tile in hands.get(player_id, ()):
            if tile.is_double and tile.left > highest:
                highest = tile.left
                starting_player = player_id

    return starting_player


def create_player_order(starting_player: str, all_players: Sequence[str]) -> Tuple[str, ...]:
    """Rotate ``all_players`` so that it begins at ``starting_player``."""
    if starting_player not in all_players:
        raise ValidationError(f"Unknown starting player: {starting_player}")
    start = list(all_players).index(starting_player)
    count = len(all_players)
    return tuple(all_players[(start + i) % count] for i in range(count))
