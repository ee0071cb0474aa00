"""
Main game engine: match creation and turn transitions.

Every transition takes a ``GameState`` snapshot and returns a ``MoveResult``
holding either the new snapshot or the reason the move was rejected. Rule
violations are never raised across this boundary.
"""

import logging
import random
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple, Union

from domino_engine.config import GameConfig, PlacementConfig
from domino_engine.dealing import create_player_order, distribute_hands, find_player_with_highest_double
from domino_engine.events import GameLogEntry, LogAction
from domino_engine.exceptions import MoveError, ValidationError, error_for
from domino_engine.placement import can_place_tile, plan_placement
from domino_engine.state import GameState, PlacedTile
from domino_engine.tiles import Side, Tile, create_shuffled_set

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveResult:
    """Outcome of ``place_tile`` or ``pass_player``.

    On failure ``state`` is the unchanged input snapshot.
    """

    success: bool
    state: GameState
    error: Optional[MoveError] = None
    message: Optional[str] = None

    def unwrap(self) -> GameState:
        """Return the new state, raising the typed ``InvalidMoveError`` on failure."""
        if not self.success:
            raise error_for(self.error, self.message or "")
        return self.state


@dataclass(frozen=True)
class AvailableMove:
    """A tile from the hand and the sides it can go on."""

    tile: Tile
    sides: Tuple[Side, ...]


def create_game(
    player_ids: Sequence[str],
    config: Optional[GameConfig] = None,
    rng: Optional[random.Random] = None,
) -> GameState:
    """
    Create a new match: shuffle, deal, and hand the first turn to the
    holder of the highest double.

    Args:
        player_ids: Seating order of the participants
        config: Game configuration (defaults to double-six, 7 tiles each)
        rng: Source of randomness for the shuffle (defaults to ``Random(config.seed)``)
    """
    config = config or GameConfig()
    player_ids = list(player_ids)
    if len(player_ids) > config.max_players:
        raise ValidationError(f"At most {config.max_players} players can sit at the table")

    rng = rng or random.Random(config.seed)
    tiles = create_shuffled_set(rng, config.max_pip)
    hands = distribute_hands(tiles, player_ids, config.tiles_per_hand)
    starting_player = find_player_with_highest_double(hands, player_ids)
    player_order = create_player_order(starting_player, player_ids)

    state = GameState(
        player_hands=hands,
        player_order=player_order,
        current_player=starting_player,
        game_log=(GameLogEntry(LogAction.START, starting_player),),
        config=config,
    )
    logger.info(
        "Match created: players=%s starting=%s",
        list(player_order),
        starting_player,
        extra={"event": LogAction.START.value, "player_id": starting_player},
    )
    return state


def _reject(state: GameState, player_id: str, error: MoveError, message: str) -> MoveResult:
    logger.info(
        "Move rejected for %s: %s",
        player_id,
        message,
        extra={"event": "rejected", "player_id": player_id, "error": error.value},
    )
    return MoveResult(False, state, error, message)


def _find_in_hand(state: GameState, player_id: str, tile: Tile) -> Optional[Tile]:
    for held in state.hand_of(player_id):
        if held == tile:
            return held
    return None


def place_tile(
    tile: Tile,
    side: Union[Side, str],
    state: GameState,
    player_id: str,
    *,
    placement_config: Optional[PlacementConfig] = None,
    jitter_rng: Optional[random.Random] = None,
) -> MoveResult:
    """
    Place a tile from ``player_id``'s hand on one end of the chain.

    Args:
        tile: Tile to play (matched against the hand by identity)
        side: End of the chain to attach to
        state: Current snapshot
        player_id: Acting player
        placement_config: Constants for the coordinate hints
        jitter_rng: Optional RNG for cosmetic coordinate jitter

    Returns:
        MoveResult with the new state, or the error kind on rejection
    """
    try:
        side = Side(side)
    except ValueError as exc:
        raise ValidationError(f"Unknown side: {side!r}") from exc

    if state.game_ended:
        return _reject(state, player_id, MoveError.GAME_ENDED, "The match is over")

    if state.current_player != player_id:
        return _reject(state, player_id, MoveError.NOT_YOUR_TURN, f"It is {state.current_player}'s turn")

    held = _find_in_hand(state, player_id, tile)
    if held is None:
        return _reject(state, player_id, MoveError.TILE_NOT_IN_HAND, f"Tile {tile} is not in hand")

    check = can_place_tile(held, state)
    if not check.can_place:
        return _reject(
            state,
            player_id,
            MoveError.NO_VALID_CONNECTION,
            f"Tile {held} does not connect with {state.left_end} or {state.right_end}",
        )
    if side not in check.sides:
        return _reject(
            state,
            player_id,
            MoveError.SIDE_NOT_AVAILABLE,
            f"Tile {held} cannot be placed on the {side.value} side",
        )

    plan = plan_placement(held, side, state, placement_config, jitter_rng)
    placed = PlacedTile(
        tile=held.with_rotation(plan.rotation),
        x=plan.x,
        y=plan.y,
        connected_side=side,
        placed_by=player_id,
    )

    if side == Side.LEFT:
        placed_tiles = (placed,) + state.placed_tiles
    else:
        placed_tiles = state.placed_tiles + (placed,)

    hands = dict(state.player_hands)
    hands[player_id] = tuple(t for t in state.hand_of(player_id) if t != held)

    log = state.game_log + (GameLogEntry(LogAction.PLACE, player_id, tile=placed.tile, side=side),)

    new_state = replace(
        state,
        player_hands=hands,
        placed_tiles=placed_tiles,
        left_end=plan.new_left_end,
        right_end=plan.new_right_end,
        pass_count=0,
        current_player=state.next_player(player_id),
        game_log=log,
    )
    logger.info(
        "%s placed %s on the %s; ends %s/%s",
        player_id,
        held,
        side.value,
        plan.new_left_end,
        plan.new_right_end,
        extra={"event": LogAction.PLACE.value, "player_id": player_id, "tile": held.tile_id},
    )

    if not hands[player_id]:
        new_state = _end_game(new_state, player_id, reason="domino")

    return MoveResult(True, new_state)


def pass_player(player_id: str, state: GameState) -> MoveResult:
    """
    Pass the turn.

    The match ends as blocked once every player has passed in a row; the
    winner is then the player with the fewest remaining pips.
    """
    if state.game_ended:
        return _reject(state, player_id, MoveError.GAME_ENDED, "The match is over")

    if state.current_player != player_id:
        return _reject(state, player_id, MoveError.NOT_YOUR_TURN, f"It is {state.current_player}'s turn")

    if state.config.strict_pass and player_can_play(player_id, state):
        return _reject(state, player_id, MoveError.MUST_PLAY, "A playable tile is still in hand")

    new_state = replace(
        state,
        pass_count=state.pass_count + 1,
        current_player=state.next_player(player_id),
        game_log=state.game_log + (GameLogEntry(LogAction.PASS, player_id),),
    )
    logger.info(
        "%s passed (%d consecutive)",
        player_id,
        new_state.pass_count,
        extra={"event": LogAction.PASS.value, "player_id": player_id},
    )

    if new_state.pass_count >= len(state.player_order):
        winner = calculate_blocked_game_winner(new_state)
        new_state = _end_game(new_state, winner, reason="blocked")

    return MoveResult(True, new_state)


def _end_game(state: GameState, winner: str, reason: str) -> GameState:
    entry = GameLogEntry(
        LogAction.WIN,
        winner,
        details={"reason": reason, "pips": state.remaining_pips(winner)},
    )
    logger.info(
        "Match over (%s): winner %s",
        reason,
        winner,
        extra={"event": LogAction.WIN.value, "player_id": winner, "reason": reason},
    )
    return replace(state, game_ended=True, winner=winner, game_log=state.game_log + (entry,))


def calculate_blocked_game_winner(state: GameState) -> str:
    """
    Winner of a blocked match: the lowest remaining pip total.

    Ties go to whoever comes first in ``player_order``.
    """
    winner = state.player_order[0]
    min_points = state.remaining_pips(winner)
    for player_id in state.player_order[1:]:
        points = state.remaining_pips(player_id)
        if points < min_points:
            min_points = points
            winner = player_id
    return winner


def player_can_play(player_id: str, state: GameState) -> bool:
    """Check whether any tile in the hand connects."""
    if state.is_board_empty:
        return bool(state.hand_of(player_id))
    return any(can_place_tile(tile, state).can_place for tile in state.hand_of(player_id))


def get_available_moves(player_id: str, state: GameState) -> List[AvailableMove]:
    """List every playable tile in the hand with the sides it fits."""
    moves: List[AvailableMove] = []
    for tile in state.hand_of(player_id):
        check = can_place_tile(tile, state)
        if check.can_place:
            moves.append(AvailableMove(tile, check.sides))
    return moves
