"""
Snapshot serialization of GameState.

Produces flat, JSON-safe records suitable for storage or broadcast, and
rebuilds a GameState from such a record after validating it.
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import ValidationError as PydanticValidationError

from domino_engine.config import GameConfig
from domino_engine.events import GameLogEntry, LogAction, map_tile
from domino_engine.exceptions import ValidationError
from domino_engine.schemas import GameStateSchema, LogEntrySchema, TileSchema
from domino_engine.state import GameState, PlacedTile, find_anchor_index
from domino_engine.tiles import Side, Tile


def _serialize_log_entry(entry: GameLogEntry) -> Dict[str, Any]:
    return {
        "action": entry.action.value,
        "player_id": entry.player_id,
        "timestamp": entry.timestamp.isoformat(),
        "tile": map_tile(entry.tile) if entry.tile is not None else None,
        "side": entry.side.value if entry.side is not None else None,
        "details": dict(entry.details),
    }


def serialize_snapshot(state: GameState) -> Dict[str, Any]:
    """Serialize a GameState into a JSON-safe dict.

    The snapshot includes:
    - hands keyed by player id
    - the ordered placed-tile chain with side, placer and coordinate hints
    - open ends, current player, order and pass count
    - the game log and end/winner flags
    """
    placed: List[Dict[str, Any]] = []
    for p in state.placed_tiles:
        entry = map_tile(p.tile)
        entry.update(x=p.x, y=p.y, connected_side=p.connected_side.value, placed_by=p.placed_by)
        placed.append(entry)

    return {
        "player_hands": {
            pid: [map_tile(t) for t in hand] for pid, hand in state.player_hands.items()
        },
        "placed_tiles": placed,
        "left_end": state.left_end,
        "right_end": state.right_end,
        "current_player": state.current_player,
        "player_order": list(state.player_order),
        "pass_count": state.pass_count,
        "game_ended": state.game_ended,
        "winner": state.winner,
        "game_log": [_serialize_log_entry(e) for e in state.game_log],
        "config": {
            "max_pip": state.config.max_pip,
            "tiles_per_hand": state.config.tiles_per_hand,
            "strict_pass": state.config.strict_pass,
            "seed": state.config.seed,
        },
    }


def _tile(schema: TileSchema) -> Tile:
    return Tile(schema.left, schema.right, schema.rotation)


def _log_entry(schema: LogEntrySchema) -> GameLogEntry:
    return GameLogEntry(
        action=LogAction(schema.action),
        player_id=schema.player_id,
        tile=_tile(schema.tile) if schema.tile is not None else None,
        side=Side(schema.side) if schema.side is not None else None,
        timestamp=schema.timestamp,
        details=dict(schema.details),
    )


def load_snapshot(data: Dict[str, Any]) -> GameState:
    """
    Rebuild a GameState from ``serialize_snapshot`` output.

    Raises:
        ValidationError: if the record is malformed, a tile appears twice, or the
            chain does not produce the stored open ends
    """
    try:
        schema = GameStateSchema.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid game snapshot: {exc}") from exc

    hands = {pid: tuple(_tile(t) for t in tiles) for pid, tiles in schema.player_hands.items()}
    placed = tuple(
        PlacedTile(
            tile=_tile(p),
            x=p.x,
            y=p.y,
            connected_side=Side(p.connected_side),
            placed_by=p.placed_by,
        )
        for p in schema.placed_tiles
    )
    _check_tile_accounting(hands, placed, schema.config.max_pip)
    _check_chain(placed, schema.left_end, schema.right_end)

    return GameState(
        player_hands=hands,
        player_order=tuple(schema.player_order),
        current_player=schema.current_player,
        placed_tiles=placed,
        left_end=schema.left_end,
        right_end=schema.right_end,
        pass_count=schema.pass_count,
        game_ended=schema.game_ended,
        winner=schema.winner,
        game_log=tuple(_log_entry(e) for e in schema.game_log),
        config=GameConfig(**schema.config.model_dump()),
    )


def _check_tile_accounting(hands, placed, max_pip: int) -> None:
    """Every tile may sit in at most one hand or on the board, once."""
    seen = set()
    tiles = [tile for hand in hands.values() for tile in hand] + [p.tile for p in placed]
    for tile in tiles:
        if max(tile.left, tile.right) > max_pip:
            raise ValidationError(f"Tile {tile} exceeds max pip {max_pip}")
        if tile.tile_id in seen:
            raise ValidationError(f"Tile {tile} appears more than once")
        seen.add(tile.tile_id)


def _check_chain(placed, left_end, right_end) -> None:
    """
    Replay the chain outwards from the anchor and compare the open ends.

    Left plays are prepended and right plays appended, so every tile before
    the anchor must be attached on the left.
    """
    if not placed:
        return

    anchor_index = find_anchor_index(placed)
    if anchor_index < 0:
        raise ValidationError("No tile is attached on the left; the chain has no anchor")
    for p in placed[:anchor_index]:
        if p.connected_side != Side.LEFT:
            raise ValidationError(f"Tile {p.tile} sits left of the anchor but is attached on the right")

    anchor = placed[anchor_index]
    ends = {}
    for side, start, indices in (
        (Side.LEFT, anchor.left, range(anchor_index - 1, -1, -1)),
        (Side.RIGHT, anchor.right, range(anchor_index + 1, len(placed))),
    ):
        open_value = start
        for index in indices:
            tile = placed[index].tile
            if not tile.matches(open_value):
                raise ValidationError(f"Tile {tile} at index {index} does not connect to {open_value}")
            open_value = tile.other_pip(open_value)
        ends[side] = open_value

    if (ends[Side.LEFT], ends[Side.RIGHT]) != (left_end, right_end):
        raise ValidationError(
            f"Stored open ends {left_end}/{right_end} do not match the chain "
            f"({ends[Side.LEFT]}/{ends[Side.RIGHT]})"
        )
