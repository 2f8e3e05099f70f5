from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ataxx.core import Board, Move, PieceColor, legal_moves

from .evaluator import static_score

logger = logging.getLogger(__name__)

# Reserved for forced outcomes; no position scored by material reaches it.
WINNING_VALUE = 1_000_000
INFTY = WINNING_VALUE - 1

# Positive values favour Red: sense +1 maximises, sense -1 minimises.
SCORE_PERSPECTIVE = PieceColor.RED


@dataclass
class SearchConfig:
    depth: int = 4


@dataclass
class SearchResult:
    move: Move
    value: int
    nodes: int


class AlphaBetaSearch:
    """Depth-bounded minimax with alpha-beta pruning over a single working board.

    Each candidate is applied to the board, searched, and undone before the
    next one is tried. The recorded move is the first legal move at the root;
    later candidates only tighten the bounds.
    """

    def __init__(self, config: Optional[SearchConfig] = None) -> None:
        self.config = config or SearchConfig()
        self.last_found_move: Optional[Move] = None
        self.nodes = 0

    # ------------------------------------------------------------------
    def run(self, board: Board) -> SearchResult:
        working = board.copy()
        sense = 1 if working.whose_move == PieceColor.RED else -1
        self.last_found_move = None
        self.nodes = 0

        value = self.search(working, self.config.depth, sense, -INFTY, INFTY, save_move=True)
        if self.last_found_move is None:
            # A depth-0 search stops at the root without recording a candidate.
            moves = legal_moves(working, working.whose_move)
            if moves:
                self.last_found_move = moves[0]
        move = self.last_found_move if self.last_found_move is not None else Move.PASS
        logger.debug(
            "%s to move: chose %s (value %d, depth %d, %d nodes)",
            board.whose_move.name.lower(),
            move,
            value,
            self.config.depth,
            self.nodes,
        )
        return SearchResult(move=move, value=value, nodes=self.nodes)

    def search(
        self,
        board: Board,
        depth: int,
        sense: int,
        alpha: int,
        beta: int,
        *,
        save_move: bool = False,
    ) -> int:
        self.nodes += 1
        moves = legal_moves(board, board.whose_move)
        if depth == 0 or board.game_over() or not moves:
            return static_score(board, SCORE_PERSPECTIVE)
        if save_move:
            self.last_found_move = moves[0]

        for move in moves:
            board.make_move(move)
            value = self.search(board, depth - 1, -sense, alpha, beta)
            board.undo()
            if sense == 1:
                alpha = max(alpha, value)
            else:
                beta = min(beta, value)
            if beta <= alpha:
                break
        return alpha if sense == 1 else beta
