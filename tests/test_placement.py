"""
Tests for move validation and placement planning.
"""

import random

import pytest

from domino_engine.config import PlacementConfig
from domino_engine.exceptions import NoValidConnectionError
from domino_engine.placement import can_place_tile, plan_placement
from domino_engine.tiles import Side, parse_tile


@pytest.fixture
def open_board(make_state, make_placed):
    """Board holding a single 3-4, open ends 3 (left) and 4 (right)."""
    return make_state(
        {"alice": ["3-5", "5-3", "4-4"], "bob": ["4-5", "5-4", "0-1"]},
        placed=[make_placed("3-4", side="left")],
        left_end=3,
        right_end=4,
    )


class TestCanPlaceTile:
    def test_empty_board_accepts_anything_on_left(self, make_state):
        state = make_state({"alice": ["0-1"]})
        check = can_place_tile(parse_tile("0-1"), state)

        assert check.can_place
        assert check.sides == (Side.LEFT,)

    def test_tile_matching_one_end(self, open_board):
        check = can_place_tile(parse_tile("4-5"), open_board)
        assert check.can_place
        assert check.sides == (Side.RIGHT,)

    def test_tile_matching_both_ends(self, open_board):
        check = can_place_tile(parse_tile("3-4"), open_board)
        assert check.sides == (Side.LEFT, Side.RIGHT)

    def test_tile_matching_neither_end(self, open_board):
        check = can_place_tile(parse_tile("0-1"), open_board)
        assert not check.can_place
        assert check.sides == ()

    def test_same_values_on_both_ends(self, make_state, make_placed):
        state = make_state({"alice": ["2-6"]}, placed=[make_placed("2-2", side="left")], left_end=2, right_end=2)
        check = can_place_tile(parse_tile("2-6"), state)
        assert check.sides == (Side.LEFT, Side.RIGHT)


class TestPlanPlacement:
    def test_first_tile(self, make_state):
        state = make_state({"alice": ["3-4"]})
        plan = plan_placement(parse_tile("3-4"), Side.LEFT, state)

        assert plan.rotation == 0
        assert (plan.new_left_end, plan.new_right_end) == (3, 4)
        assert (plan.x, plan.y) == (0, 0)

    def test_first_double_is_perpendicular(self, make_state):
        state = make_state({"alice": ["6-6"]})
        plan = plan_placement(parse_tile("6-6"), Side.LEFT, state)
        assert plan.rotation == 90
        assert (plan.new_left_end, plan.new_right_end) == (6, 6)

    @pytest.mark.parametrize(
        "notation, side, rotation, left_end, right_end",
        [
            ("3-5", Side.LEFT, 180, 5, 4),
            ("5-3", Side.LEFT, 0, 5, 4),
            ("4-5", Side.RIGHT, 0, 3, 5),
            ("5-4", Side.RIGHT, 180, 3, 5),
            ("4-4", Side.RIGHT, 90, 3, 4),
        ],
    )
    def test_rotation_and_open_end(self, open_board, notation, side, rotation, left_end, right_end):
        plan = plan_placement(parse_tile(notation), side, open_board)

        assert plan.rotation == rotation
        assert plan.new_left_end == left_end
        assert plan.new_right_end == right_end

    def test_mismatch_raises(self, open_board):
        with pytest.raises(NoValidConnectionError):
            plan_placement(parse_tile("0-1"), Side.RIGHT, open_board)

    def test_wrong_side_raises(self, open_board):
        with pytest.raises(NoValidConnectionError):
            plan_placement(parse_tile("4-5"), Side.LEFT, open_board)

    def test_plan_is_deterministic_without_jitter(self, open_board):
        first = plan_placement(parse_tile("4-5"), Side.RIGHT, open_board)
        second = plan_placement(parse_tile("4-5"), Side.RIGHT, open_board)
        assert first == second

    def test_jitter_only_moves_coordinates(self, open_board):
        plain = plan_placement(parse_tile("4-5"), Side.RIGHT, open_board)
        a = plan_placement(parse_tile("4-5"), Side.RIGHT, open_board, jitter_rng=random.Random(9))
        b = plan_placement(parse_tile("4-5"), Side.RIGHT, open_board, jitter_rng=random.Random(9))

        assert a == b
        assert (a.rotation, a.new_left_end, a.new_right_end) == (
            plain.rotation,
            plain.new_left_end,
            plain.new_right_end,
        )
        assert abs(a.x - plain.x) <= PlacementConfig().tile_variation / 2
        assert a.y == plain.y

    def test_position_hint_moves_outward(self, open_board):
        right = plan_placement(parse_tile("4-5"), Side.RIGHT, open_board)
        left = plan_placement(parse_tile("3-5"), Side.LEFT, open_board)

        assert right.x == 35
        assert left.x == -35

    def test_double_hint_is_offset(self, open_board):
        plan = plan_placement(parse_tile("4-4"), Side.RIGHT, open_board)
        assert plan.y == PlacementConfig().double_offset

    def test_long_chain_wraps_to_next_row(self, make_state, make_placed):
        chain = [make_placed("3-4", side="left")] + [make_placed("0-1") for _ in range(13)]
        state = make_state({"alice": ["4-5"]}, placed=chain, left_end=3, right_end=4)

        plan = plan_placement(parse_tile("4-5"), Side.RIGHT, state)

        assert plan.x == 40
        assert plan.y == 130
