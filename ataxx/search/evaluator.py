from __future__ import annotations

from ataxx.core import Board, PieceColor


def static_score(board: Board, perspective: PieceColor) -> int:
    """Material difference from ``perspective``'s point of view."""
    return board.num_pieces(perspective) - board.num_pieces(perspective.opposite())
