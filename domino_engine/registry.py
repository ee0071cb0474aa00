"""
In-memory registry of running matches with versioned commits.

The engine validates moves only against the snapshot it is handed. The
registry is the single writer: every stored state carries a version and a
commit succeeds only against the version it was computed from, so two moves
computed from the same snapshot cannot both be accepted.
"""

from __future__ import annotations

import logging
import random
import threading
import uuid
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

from domino_engine.config import GameConfig
from domino_engine.exceptions import GameNotFoundError, StaleStateError
from domino_engine.game import MoveResult, create_game, pass_player, place_tile
from domino_engine.state import GameState
from domino_engine.tiles import Side, Tile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchRecord:
    match_id: str
    version: int
    state: GameState


class MatchRegistry:
    """In-memory registry of matches."""

    def __init__(self):
        self._matches: Dict[str, MatchRecord] = {}
        self._lock = threading.Lock()

    def create_match(
        self,
        player_ids: Sequence[str],
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> MatchRecord:
        match_id = uuid.uuid4().hex[:12]
        record = MatchRecord(match_id, 0, create_game(player_ids, config, rng))
        with self._lock:
            self._matches[match_id] = record
        logger.info("Match %s registered", match_id, extra={"event": "match_created"})
        return record

    def get(self, match_id: str) -> MatchRecord:
        record = self._matches.get(match_id)
        if record is None:
            raise GameNotFoundError(f"Match {match_id} does not exist")
        return record

    def list_matches(self) -> List[str]:
        return sorted(self._matches)

    def commit(self, match_id: str, expected_version: int, state: GameState) -> MatchRecord:
        """
        Store ``state`` if the match is still at ``expected_version``.

        Raises:
            GameNotFoundError: if the match is unknown
            StaleStateError: if another commit happened in between
        """
        with self._lock:
            current = self._matches.get(match_id)
            if current is None:
                raise GameNotFoundError(f"Match {match_id} does not exist")
            if current.version != expected_version:
                logger.warning(
                    "Stale commit for match %s: expected v%d, stored v%d",
                    match_id,
                    expected_version,
                    current.version,
                    extra={"event": "stale_commit"},
                )
                raise StaleStateError(
                    f"Match {match_id} is at version {current.version}, not {expected_version}"
                )
            record = MatchRecord(match_id, current.version + 1, state)
            self._matches[match_id] = record
            return record

    def apply_place(
        self,
        match_id: str,
        tile: Tile,
        side: Union[Side, str],
        player_id: str,
        expected_version: Optional[int] = None,
    ) -> Tuple[MatchRecord, MoveResult]:
        """Place a tile and commit the result; rejected moves leave the match untouched."""
        record = self._read(match_id, expected_version)
        result = place_tile(tile, side, record.state, player_id)
        return self._commit_result(record, result), result

    def apply_pass(
        self,
        match_id: str,
        player_id: str,
        expected_version: Optional[int] = None,
    ) -> Tuple[MatchRecord, MoveResult]:
        """Pass the turn and commit the result."""
        record = self._read(match_id, expected_version)
        result = pass_player(player_id, record.state)
        return self._commit_result(record, result), result

    def remove(self, match_id: str) -> bool:
        with self._lock:
            return self._matches.pop(match_id, None) is not None

    def _read(self, match_id: str, expected_version: Optional[int]) -> MatchRecord:
        record = self.get(match_id)
        if expected_version is not None and record.version != expected_version:
            raise StaleStateError(
                f"Match {match_id} is at version {record.version}, not {expected_version}"
            )
        return record

    def _commit_result(self, record: MatchRecord, result: MoveResult) -> MatchRecord:
        if not result.success:
            return record
        return self.commit(record.match_id, record.version, result.state)
