"""Core game logic for Ataxx."""

from .state import (
    EXTENDED_SIDE,
    JUMP_LIMIT,
    SIDE,
    GameResult,
    Move,
    MoveKind,
    MoveRecord,
    PieceColor,
    Square,
    linearize,
    square_at,
)
from .errors import (
    AtaxxError,
    IllegalBlockError,
    IllegalMoveError,
    IllegalPassError,
    UndoUnderflowError,
)
from .board import Board
from .rules import (
    ACTION_VECTOR_SIZE,
    PASS_INDEX,
    decode_move,
    encode_move,
    game_result,
    legal_moves,
    random_blocks,
)

__all__ = [
    "Board",
    "GameResult",
    "Move",
    "MoveKind",
    "MoveRecord",
    "PieceColor",
    "Square",
    "EXTENDED_SIDE",
    "JUMP_LIMIT",
    "SIDE",
    "linearize",
    "square_at",
    "AtaxxError",
    "IllegalBlockError",
    "IllegalMoveError",
    "IllegalPassError",
    "UndoUnderflowError",
    "ACTION_VECTOR_SIZE",
    "PASS_INDEX",
    "decode_move",
    "encode_move",
    "game_result",
    "legal_moves",
    "random_blocks",
]
