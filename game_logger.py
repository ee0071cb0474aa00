"""
JSONL logger for domino match events.

Writes the engine's game log, mapped to its public JSON form, to a JSONL
file as a match progresses.
"""

import json
import os
from datetime import datetime
from typing import Any, Dict, Optional

from domino_engine.events import map_log
from domino_engine.state import GameState


class GameLogger:
    """Logger that writes match events to a JSONL file."""

    def __init__(self, log_file: Optional[str] = None, log_dir: str = ".", match_id: Optional[str] = None):
        """
        Initialize game logger.

        Args:
            log_file: Path to log file. If None, generates timestamped filename.
            log_dir: Directory for generated filenames
            match_id: Optional match id stamped on every record
        """
        if log_file is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = os.path.join(log_dir, f"domino_match_{timestamp}.jsonl")

        self.log_file = log_file
        self.match_id = match_id
        self.event_count = 0
        self._engine_last_idx = 0  # last flushed index from the state's game log

        # Create/clear log file
        with open(self.log_file, "w"):
            pass

    def log_event(self, event_type: str, **kwargs: Any) -> None:
        """
        Log a match event to the JSONL file.

        Args:
            event_type: Type of event (e.g., "start", "place", "pass", "win")
            **kwargs: Additional event data
        """
        event: Dict[str, Any] = {
            "event_id": self.event_count,
            "logged_at": datetime.now().isoformat(),
            "event_type": event_type,
            **kwargs,
        }
        if self.match_id is not None:
            event["match_id"] = self.match_id

        with open(self.log_file, "a") as f:
            f.write(json.dumps(event) + "\n")

        self.event_count += 1

    def flush_engine_events(self, state: GameState) -> int:
        """Write log entries added since the last flush.

        Returns the number of events written.
        """
        entries = state.game_log
        if self._engine_last_idx >= len(entries):
            return 0

        mapped = map_log(entries[self._engine_last_idx:], start=self._engine_last_idx)
        # Open ends reflect the state after the newest entry only
        mapped[-1].update(left_end=state.left_end, right_end=state.right_end)
        for m in mapped:
            if m["event_type"] == "win":
                m["final_pips"] = {pid: state.remaining_pips(pid) for pid in state.player_order}
            etype = m.pop("event_type")
            self.log_event(etype, **m)

        wrote = len(mapped)
        self._engine_last_idx = len(entries)
        return wrote
