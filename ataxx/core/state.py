from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import ClassVar, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

IndexArray = NDArray[np.intp]

SIDE = 7
BORDER = 2
EXTENDED_SIDE = SIDE + 2 * BORDER
GRID_SIZE = EXTENDED_SIDE * EXTENDED_SIDE
JUMP_LIMIT = 25

COLUMNS = "abcdefg"
ROWS = "1234567"


class PieceColor(IntEnum):
    EMPTY = 0
    RED = 1
    BLUE = 2
    BLOCKED = 3

    @property
    def is_piece(self) -> bool:
        return self in (PieceColor.RED, PieceColor.BLUE)

    def opposite(self) -> "PieceColor":
        if self == PieceColor.RED:
            return PieceColor.BLUE
        if self == PieceColor.BLUE:
            return PieceColor.RED
        return self


class MoveKind(Enum):
    PASS = "pass"
    EXTEND = "extend"
    JUMP = "jump"
    INVALID = "invalid"


class GameResult(Enum):
    ONGOING = "ongoing"
    RED_WIN = "red_win"
    BLUE_WIN = "blue_win"
    DRAW = "draw"


def linearize(col: int, row: int) -> int:
    """Index of interior square (col, row) in the bordered 11x11 grid."""
    return (row + BORDER) * EXTENDED_SIDE + (col + BORDER)


@dataclass(frozen=True)
class Square:
    col: int
    row: int

    def __post_init__(self) -> None:
        if not (0 <= self.col < SIDE and 0 <= self.row < SIDE):
            raise ValueError(f"Square ({self.col}, {self.row}) is off the board.")

    @property
    def index(self) -> int:
        return linearize(self.col, self.row)

    def reflections(self) -> Tuple["Square", "Square", "Square"]:
        mirror_col = SIDE - 1 - self.col
        mirror_row = SIDE - 1 - self.row
        return (
            Square(self.col, mirror_row),
            Square(mirror_col, self.row),
            Square(mirror_col, mirror_row),
        )

    def distance(self, other: "Square") -> int:
        return max(abs(self.col - other.col), abs(self.row - other.row))

    @staticmethod
    def parse(text: str) -> "Square":
        text = text.strip()
        if len(text) != 2 or text[0] not in COLUMNS or text[1] not in ROWS:
            raise ValueError(f"Malformed square {text!r}.")
        return Square(COLUMNS.index(text[0]), ROWS.index(text[1]))

    def __str__(self) -> str:
        return f"{COLUMNS[self.col]}{ROWS[self.row]}"


def square_at(index: int) -> Square:
    row, col = divmod(index, EXTENDED_SIDE)
    return Square(col - BORDER, row - BORDER)


@dataclass(frozen=True)
class Move:
    origin: Optional[Square] = None
    destination: Optional[Square] = None

    PASS: ClassVar["Move"]

    @property
    def is_pass(self) -> bool:
        return self.origin is None

    @property
    def kind(self) -> MoveKind:
        if self.origin is None or self.destination is None:
            return MoveKind.PASS
        distance = self.origin.distance(self.destination)
        if distance == 1:
            return MoveKind.EXTEND
        if distance == 2:
            return MoveKind.JUMP
        return MoveKind.INVALID

    @property
    def is_extend(self) -> bool:
        return self.kind == MoveKind.EXTEND

    @property
    def is_jump(self) -> bool:
        return self.kind == MoveKind.JUMP

    @staticmethod
    def between(origin: str, destination: str) -> "Move":
        return Move(Square.parse(origin), Square.parse(destination))

    @staticmethod
    def parse(text: str) -> "Move":
        text = text.strip()
        if text == "-":
            return Move.PASS
        parts = text.split("-")
        if len(parts) != 2:
            raise ValueError(f"Malformed move {text!r}.")
        return Move.between(parts[0], parts[1])

    def __str__(self) -> str:
        if self.origin is None or self.destination is None:
            return "-"
        return f"{self.origin}-{self.destination}"


Move.PASS = Move()


@dataclass(frozen=True)
class MoveRecord:
    move: Move
    mover: PieceColor
    flipped: Tuple[Square, ...] = field(default_factory=tuple)

    @property
    def kind(self) -> MoveKind:
        return self.move.kind

    @property
    def num_flipped(self) -> int:
        return len(self.flipped)


def _offsets(reach: int) -> IndexArray:
    # Ascending (dc, dr) so that destinations come out column-major.
    return np.array(
        [
            dc + dr * EXTENDED_SIDE
            for dc in range(-reach, reach + 1)
            for dr in range(-reach, reach + 1)
            if (dc, dr) != (0, 0)
        ],
        dtype=np.intp,
    )


NEIGHBOR_OFFSETS: IndexArray = _offsets(1)
REACH_OFFSETS: IndexArray = _offsets(2)
REACH_DELTAS: Tuple[Tuple[int, int], ...] = tuple(
    (dc, dr) for dc in range(-2, 3) for dr in range(-2, 3) if (dc, dr) != (0, 0)
)

# Interior squares in ascending column, then ascending row.
INTERIOR: IndexArray = np.array(
    [linearize(col, row) for col in range(SIDE) for row in range(SIDE)],
    dtype=np.intp,
)

STARTING_PIECES: Tuple[Tuple[Square, PieceColor], ...] = (
    (Square(0, 0), PieceColor.RED),
    (Square(6, 6), PieceColor.RED),
    (Square(0, 6), PieceColor.BLUE),
    (Square(6, 0), PieceColor.BLUE),
)
CORNERS = frozenset(square for square, _ in STARTING_PIECES)
