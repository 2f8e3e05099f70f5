from __future__ import annotations

from copy import deepcopy
from typing import Optional

import numpy as np

from ataxx.core import Board, Move, PieceColor, legal_moves
from ataxx.search import AlphaBetaSearch, SearchConfig


class Player:
    """Produces the next move for ``color`` given the live board."""

    def __init__(self, color: PieceColor) -> None:
        if not color.is_piece:
            raise ValueError(f"{color.name} cannot play.")
        self.color = color

    def my_move(self, board: Board) -> Move:
        raise NotImplementedError

    def _check_turn(self, board: Board) -> None:
        if board.game_over():
            raise ValueError("The game is over; no move can be produced.")
        if board.whose_move != self.color:
            raise ValueError(f"It is not {self.color.name.lower()}'s turn to move.")

    def spawn(self, seed: Optional[int] = None) -> "Player":
        """Return an independent copy of this player for another game."""
        return self


class AIPlayer(Player):
    def __init__(self, color: PieceColor, config: Optional[SearchConfig] = None) -> None:
        super().__init__(color)
        self._config = deepcopy(config) if config else SearchConfig()
        self.search = AlphaBetaSearch(self._config)
        self.last_value: Optional[int] = None

    def my_move(self, board: Board) -> Move:
        self._check_turn(board)
        if not board.can_move(self.color):
            return Move.PASS
        result = self.search.run(board)
        self.last_value = result.value
        return result.move

    def spawn(self, seed: Optional[int] = None) -> "AIPlayer":
        return AIPlayer(self.color, config=self._config)


class RandomPlayer(Player):
    def __init__(self, color: PieceColor, rng: Optional[np.random.Generator] = None) -> None:
        super().__init__(color)
        self.rng = rng or np.random.default_rng()

    def my_move(self, board: Board) -> Move:
        self._check_turn(board)
        moves = legal_moves(board, self.color)
        if not moves:
            return Move.PASS
        return moves[int(self.rng.integers(len(moves)))]

    def spawn(self, seed: Optional[int] = None) -> "RandomPlayer":
        return RandomPlayer(self.color, np.random.default_rng(seed))
