"""Simple agents that pick a move from the available ones."""

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from domino_engine.game import AvailableMove, get_available_moves
from domino_engine.state import GameState
from domino_engine.tiles import Side, Tile


@dataclass(frozen=True)
class Decision:
    """A tile and side to play, or a pass when ``tile`` is None."""

    tile: Optional[Tile] = None
    side: Optional[Side] = None

    @property
    def is_pass(self) -> bool:
        return self.tile is None


class Agent(ABC):
    """
    Abstract base class for domino agents.

    Attributes:
        player_id: The player's identifier in the match.
    """

    def __init__(self, player_id: str):
        self.player_id = player_id

    def decide(self, state: GameState) -> Decision:
        """Choose a move, or pass when nothing connects."""
        moves = get_available_moves(self.player_id, state)
        if not moves:
            return Decision()
        return self.choose_move(state, moves)

    @abstractmethod
    def choose_move(self, state: GameState, moves: List[AvailableMove]) -> Decision:
        """
        Choose one of the available moves.

        Args:
            state: The current game state.
            moves: Non-empty list of playable tiles with their sides.
        """


class RandomAgent(Agent):
    """Plays a random legal tile on a random legal side."""

    def __init__(self, player_id: str, rng: Optional[random.Random] = None):
        super().__init__(player_id)
        self.rng = rng or random.Random()

    def choose_move(self, state: GameState, moves: List[AvailableMove]) -> Decision:
        move = self.rng.choice(moves)
        return Decision(move.tile, self.rng.choice(move.sides))


class GreedyAgent(Agent):
    """
    Dumps the heaviest tile first.

    Doubles win ties, since they are the hardest tiles to get rid of later.
    """

    def choose_move(self, state: GameState, moves: List[AvailableMove]) -> Decision:
        best = max(moves, key=lambda m: (m.tile.pip_count, m.tile.is_double))
        return Decision(best.tile, best.sides[0])
