"""
Game log entries and their canonical public JSON form.

The engine appends ``GameLogEntry`` records to ``GameState.game_log``. The
mapping helpers turn them into stable, JSON-friendly dicts with consistent
keys for JSONL logs and real-time UIs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from domino_engine.tiles import Side, Tile


class LogAction(Enum):
    """Types of game log entries."""

    START = "start"
    PLACE = "place"
    PASS = "pass"
    WIN = "win"


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class GameLogEntry:
    """A logged event in the match."""

    action: LogAction
    player_id: str
    tile: Optional[Tile] = None
    side: Optional[Side] = None
    timestamp: datetime = field(default_factory=now_utc)
    details: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        tile_str = f" {self.tile}" if self.tile is not None else ""
        side_str = f" on {self.side.value}" if self.side is not None else ""
        return f"[{self.player_id}] {self.action.value}{tile_str}{side_str}"


def map_tile(tile: Tile) -> Dict[str, Any]:
    return {
        "id": tile.tile_id,
        "left": tile.left,
        "right": tile.right,
        "is_double": tile.is_double,
        "rotation": tile.rotation,
    }


def map_log_entry(entry: GameLogEntry, *, sequence_number: Optional[int] = None) -> Dict[str, Any]:
    """
    Map a single log entry to a canonical JSON dict.

    Returns:
        dict with keys: event_type, player_id, timestamp and, depending on the
        action, tile / side / reason fields
    """
    base: Dict[str, Any] = {
        "event_type": entry.action.value,
        "player_id": entry.player_id,
        "timestamp": entry.timestamp.isoformat(),
    }
    if sequence_number is not None:
        base["sequence_number"] = sequence_number

    if entry.action == LogAction.PLACE:
        base.update(
            tile=map_tile(entry.tile) if entry.tile is not None else None,
            side=entry.side.value if entry.side is not None else None,
        )
        return base

    if entry.action == LogAction.WIN:
        base.update(reason=entry.details.get("reason"), pips=entry.details.get("pips"))
        return base

    if entry.details:
        base["details"] = dict(entry.details)
    return base


def map_log(entries: Iterable[GameLogEntry], start: int = 0) -> List[Dict[str, Any]]:
    """Map a sequence of log entries, numbering them from ``start``."""
    return [map_log_entry(e, sequence_number=start + i) for i, e in enumerate(entries)]
