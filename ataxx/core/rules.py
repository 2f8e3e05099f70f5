from __future__ import annotations

from typing import List, Optional

import numpy as np

from .board import Board
from .state import (
    INTERIOR,
    REACH_DELTAS,
    REACH_OFFSETS,
    SIDE,
    GameResult,
    Move,
    PieceColor,
    Square,
    square_at,
)

ACTION_VECTOR_SIZE = SIDE * SIDE * len(REACH_DELTAS) + 1
PASS_INDEX = ACTION_VECTOR_SIZE - 1

_QUADRANT = tuple(Square(col, row) for col in range(SIDE // 2 + 1) for row in range(SIDE // 2 + 1))


def legal_moves(board: Board, color: Optional[PieceColor] = None) -> List[Move]:
    """All extends and jumps available to ``color``.

    Origins are visited by ascending column then row, and so are the
    destinations of each origin; search relies on this order.
    """
    if color is None:
        color = board.whose_move
    if board.is_full:
        return []

    cells = board.cells
    moves: List[Move] = []
    for origin in INTERIOR[cells[INTERIOR] == color]:
        targets = origin + REACH_OFFSETS
        open_targets = targets[cells[targets] == PieceColor.EMPTY]
        if open_targets.size == 0:
            continue
        source = square_at(int(origin))
        moves.extend(Move(source, square_at(int(target))) for target in open_targets)
    return moves


def encode_move(move: Move) -> int:
    if move.is_pass:
        return PASS_INDEX
    delta = (move.destination.col - move.origin.col, move.destination.row - move.origin.row)
    if delta not in REACH_DELTAS:
        raise ValueError(f"Move {move} is out of reach.")
    base = move.origin.col * SIDE + move.origin.row
    return base * len(REACH_DELTAS) + REACH_DELTAS.index(delta)


def decode_move(index: int) -> Move:
    if not 0 <= index < ACTION_VECTOR_SIZE:
        raise ValueError("Action index out of range.")
    if index == PASS_INDEX:
        return Move.PASS
    base, offset = divmod(index, len(REACH_DELTAS))
    col, row = divmod(base, SIDE)
    dc, dr = REACH_DELTAS[offset]
    return Move(Square(col, row), Square(col + dc, row + dr))


def game_result(board: Board) -> GameResult:
    if not board.game_over():
        return GameResult.ONGOING
    if board.red_pieces > board.blue_pieces:
        return GameResult.RED_WIN
    if board.blue_pieces > board.red_pieces:
        return GameResult.BLUE_WIN
    return GameResult.DRAW


def random_blocks(board: Board, count: int, rng: np.random.Generator) -> List[Square]:
    """Place up to ``count`` symmetric block groups at random legal sites."""
    placed: List[Square] = []
    for _ in range(count):
        candidates = [
            square
            for square in _QUADRANT
            if board.get(square) != PieceColor.BLOCKED
            and all(board.legal_block(site) for site in (square,) + square.reflections())
        ]
        if not candidates:
            break
        square = candidates[int(rng.integers(len(candidates)))]
        board.set_block(square)
        placed.append(square)
    return placed
