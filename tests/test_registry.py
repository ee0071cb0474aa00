"""
Tests for the versioned match registry.
"""

import pytest

from domino_engine.config import GameConfig
from domino_engine.exceptions import GameNotFoundError, MoveError, StaleStateError
from domino_engine.game import place_tile
from domino_engine.registry import MatchRegistry
from domino_engine.tiles import Side, Tile


@pytest.fixture
def registry():
    return MatchRegistry()


@pytest.fixture
def match(registry, four_players):
    return registry.create_match(four_players, GameConfig(seed=42))


def test_new_match_starts_at_version_zero(registry, match):
    assert match.version == 0
    assert registry.get(match.match_id) is match
    assert registry.list_matches() == [match.match_id]


def test_accepted_move_bumps_version(registry, match):
    starter = match.state.current_player
    record, result = registry.apply_place(match.match_id, Tile(6, 6), Side.LEFT, starter)

    assert result.success
    assert record.version == 1
    assert registry.get(match.match_id).state.left_end == 6


def test_rejected_move_keeps_version(registry, match):
    other = match.state.player_order[1]
    record, result = registry.apply_pass(match.match_id, other)

    assert not result.success
    assert result.error == MoveError.NOT_YOUR_TURN
    assert record.version == 0
    assert registry.get(match.match_id) is match


def test_stale_commit_is_refused(registry, match):
    """Two moves computed from the same snapshot cannot both land."""
    starter = match.state.current_player
    first = place_tile(Tile(6, 6), Side.LEFT, match.state, starter).unwrap()
    registry.commit(match.match_id, 0, first)

    with pytest.raises(StaleStateError):
        registry.commit(match.match_id, 0, first)
    assert registry.get(match.match_id).version == 1


def test_expected_version_checked_before_move(registry, match):
    starter = match.state.current_player
    registry.apply_place(match.match_id, Tile(6, 6), Side.LEFT, starter, expected_version=0)

    with pytest.raises(StaleStateError):
        registry.apply_pass(match.match_id, match.state.player_order[1], expected_version=0)


def test_unknown_match(registry):
    with pytest.raises(GameNotFoundError):
        registry.get("nope")
    with pytest.raises(GameNotFoundError):
        registry.commit("nope", 0, None)


def test_remove(registry, match):
    assert registry.remove(match.match_id)
    assert not registry.remove(match.match_id)
    assert registry.list_matches() == []
