from __future__ import annotations

from typing import List, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .errors import IllegalBlockError, IllegalMoveError, IllegalPassError, UndoUnderflowError
from .state import (
    COLUMNS,
    CORNERS,
    EXTENDED_SIDE,
    GRID_SIZE,
    INTERIOR,
    JUMP_LIMIT,
    NEIGHBOR_OFFSETS,
    REACH_OFFSETS,
    ROWS,
    SIDE,
    STARTING_PIECES,
    Move,
    MoveKind,
    MoveRecord,
    PieceColor,
    Square,
    linearize,
    square_at,
)

SquareLike = Union[Square, str]

# Opens an undo frame; the paired value is the jump streak before the move.
_FRAME = -1

_GLYPHS = {
    PieceColor.EMPTY: "-",
    PieceColor.BLOCKED: "X",
    PieceColor.RED: "r",
    PieceColor.BLUE: "b",
}
_FROM_GLYPH = {glyph: color for color, glyph in _GLYPHS.items()}


def _as_square(value: SquareLike) -> Square:
    return value if isinstance(value, Square) else Square.parse(value)


def _as_move(args: Tuple) -> Move:
    if len(args) == 1:
        move = args[0]
        return move if isinstance(move, Move) else Move.parse(move)
    if len(args) == 4:
        c0, r0, c1, r1 = (str(arg) for arg in args)
        if c0 == "-":
            return Move.PASS
        return Move.between(c0 + r0, c1 + r1)
    raise TypeError("make_move expects a Move, move text, or four square descriptors.")


class Board:
    """An Ataxx board stored as a bordered 11x11 grid.

    The playable 7x7 area sits inside two rings of permanently blocked cells,
    so any neighbour up to distance two of an interior square is a valid index
    and reads as impassable when it falls off the board.

    Every mutation other than block placement pushes an undo frame: a
    ``(_FRAME, previous_jumps)`` marker followed by ``(index, previous_value)``
    pairs. ``undo`` replays the frame from the top down.
    """

    def __init__(self) -> None:
        self._cells: NDArray[np.int8] = np.full(GRID_SIZE, PieceColor.BLOCKED, dtype=np.int8)
        self.clear()

    def clear(self) -> None:
        self._cells[:] = PieceColor.BLOCKED
        self._cells[INTERIOR] = PieceColor.EMPTY
        for square, color in STARTING_PIECES:
            self._cells[square.index] = color
        self._whose_move = PieceColor.RED
        self._num_red = 2
        self._num_blue = 2
        self._jumps = 0
        self._history: List[Move] = []
        self._undo: List[Tuple[int, int]] = []

    def copy(self) -> "Board":
        other = Board.__new__(Board)
        other._cells = self._cells.copy()
        other._whose_move = self._whose_move
        other._num_red = self._num_red
        other._num_blue = self._num_blue
        other._jumps = self._jumps
        other._history = list(self._history)
        other._undo = list(self._undo)
        return other

    @classmethod
    def from_text(cls, text: str, whose_move: PieceColor = PieceColor.RED) -> "Board":
        """Build a position from rendered rows (row 7 first), with no history."""
        rows = [line.split() for line in text.strip().splitlines()]
        if len(rows) != SIDE or any(len(glyphs) != SIDE for glyphs in rows):
            raise ValueError("Board text must have 7 rows of 7 cells.")
        board = cls()
        for offset, glyphs in enumerate(rows):
            row = SIDE - 1 - offset
            for col, glyph in enumerate(glyphs):
                if glyph not in _FROM_GLYPH:
                    raise ValueError(f"Unknown cell glyph {glyph!r}.")
                board._cells[linearize(col, row)] = _FROM_GLYPH[glyph]
        board._num_red = board.count(PieceColor.RED)
        board._num_blue = board.count(PieceColor.BLUE)
        board._whose_move = whose_move
        return board

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def whose_move(self) -> PieceColor:
        return self._whose_move

    @property
    def jumps(self) -> int:
        return self._jumps

    @property
    def red_pieces(self) -> int:
        return self._num_red

    @property
    def blue_pieces(self) -> int:
        return self._num_blue

    @property
    def history(self) -> Tuple[Move, ...]:
        return tuple(self._history)

    @property
    def num_moves(self) -> int:
        return len(self._history)

    @property
    def num_blocks(self) -> int:
        return self.count(PieceColor.BLOCKED)

    @property
    def is_full(self) -> bool:
        return self.count(PieceColor.EMPTY) == 0

    def num_pieces(self, color: PieceColor) -> int:
        if color == PieceColor.RED:
            return self._num_red
        if color == PieceColor.BLUE:
            return self._num_blue
        return 0

    def count(self, value: PieceColor) -> int:
        return int(np.count_nonzero(self._cells[INTERIOR] == value))

    def get(self, square: SquareLike) -> PieceColor:
        return PieceColor(int(self._cells[_as_square(square).index]))

    def __getitem__(self, square: SquareLike) -> PieceColor:
        return self.get(square)

    @property
    def cells(self) -> NDArray[np.int8]:
        """Read-only view of the full bordered grid, by linearized index."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def cell(self, index: int) -> PieceColor:
        return PieceColor(int(self._cells[index]))

    def grid(self) -> NDArray[np.int8]:
        """Copy of the 7x7 interior indexed ``[row, col]``."""
        full = self._cells.reshape(EXTENDED_SIDE, EXTENDED_SIDE)
        return full[2 : 2 + SIDE, 2 : 2 + SIDE].copy()

    def legal(self, move: Move) -> bool:
        if move.is_pass:
            return True
        if move.kind not in (MoveKind.EXTEND, MoveKind.JUMP):
            return False
        if self._cells[move.destination.index] != PieceColor.EMPTY:
            return False
        return bool(self._cells[move.origin.index] == self._whose_move)

    def can_move(self, color: PieceColor) -> bool:
        origins = INTERIOR[self._cells[INTERIOR] == color]
        if origins.size == 0:
            return False
        reach = origins[:, None] + REACH_OFFSETS[None, :]
        return bool(np.any(self._cells[reach] == PieceColor.EMPTY))

    def game_over(self) -> bool:
        return (
            self._num_red == 0
            or self._num_blue == 0
            or self._jumps >= JUMP_LIMIT
            or (not self.can_move(PieceColor.RED) and not self.can_move(PieceColor.BLUE))
        )

    def legal_block(self, square: SquareLike) -> bool:
        square = _as_square(square)
        return square not in CORNERS and not self.get(square).is_piece

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def make_move(self, *args) -> MoveRecord:
        """Apply a Move, move text such as ``"a1-b1"``, or four descriptors
        ``c0, r0, c1, r1`` (``c0 == "-"`` passes). The board is left untouched
        when the move is rejected."""
        move = _as_move(args)
        if move.is_pass:
            return self.pass_turn()
        if not self.legal(move):
            raise IllegalMoveError(f"Illegal move {move} for {self._whose_move.name.lower()}.")
        return self._apply(move)

    def _apply(self, move: Move) -> MoveRecord:
        mover = self._whose_move
        opponent = mover.opposite()
        origin = move.origin.index
        destination = move.destination.index
        cells = self._cells
        undo = self._undo

        undo.append((_FRAME, self._jumps))
        neighbors = destination + NEIGHBOR_OFFSETS
        flipped = neighbors[cells[neighbors] == opponent]
        for index in flipped:
            undo.append((int(index), int(opponent)))
        cells[flipped] = mover
        k = len(flipped)

        if move.is_jump:
            undo.append((origin, int(mover)))
            cells[origin] = PieceColor.EMPTY
            self._add_pieces(mover, k)
            self._jumps += 1
        else:
            self._add_pieces(mover, k + 1)
            self._jumps = 0
        self._add_pieces(opponent, -k)

        undo.append((destination, int(PieceColor.EMPTY)))
        cells[destination] = mover

        self._whose_move = opponent
        self._history.append(move)
        return MoveRecord(move, mover, tuple(square_at(int(index)) for index in flipped))

    def pass_turn(self) -> MoveRecord:
        mover = self._whose_move
        if self.num_pieces(mover) == 0:
            raise IllegalPassError(f"{mover.name.lower()} has no pieces and may not pass.")
        if self.can_move(mover):
            raise IllegalPassError(f"{mover.name.lower()} can move, so may not pass.")
        self._undo.append((_FRAME, self._jumps))
        self._jumps += 1
        self._whose_move = mover.opposite()
        self._history.append(Move.PASS)
        return MoveRecord(Move.PASS, mover)

    def undo(self) -> Move:
        if not self._history:
            raise UndoUnderflowError("No moves to undo.")
        move = self._history.pop()
        mover = self._whose_move.opposite()
        matching = mismatching = vacated = 0
        while True:
            index, prior = self._undo.pop()
            if index == _FRAME:
                self._jumps = prior
                break
            self._cells[index] = prior
            if prior == PieceColor.EMPTY:
                vacated += 1
            elif prior == mover:
                matching += 1
            elif prior == mover.opposite():
                mismatching += 1
        if not move.is_pass:
            self._add_pieces(mover, matching - mismatching - vacated)
            self._add_pieces(mover.opposite(), mismatching)
        self._whose_move = mover
        return move

    def set_block(self, square: SquareLike) -> None:
        """Block ``square`` and its reflections across the middle row and column.

        Only allowed before the first move. Either all four sites are blocked
        or none are.
        """
        if self._history:
            raise IllegalBlockError("Blocks may only be placed before the first move.")
        square = _as_square(square)
        sites = (square,) + square.reflections()
        for site in sites:
            if not self.legal_block(site):
                raise IllegalBlockError(f"Illegal block placement at {site}.")
        self._cells[[site.index for site in sites]] = PieceColor.BLOCKED

    def _add_pieces(self, color: PieceColor, k: int) -> None:
        if color == PieceColor.RED:
            self._num_red += k
        elif color == PieceColor.BLUE:
            self._num_blue += k

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self, legend: bool = False) -> str:
        lines = []
        if legend:
            lines.append("   " + " ".join(COLUMNS))
        for row in reversed(range(SIDE)):
            prefix = "  " + (ROWS[row] if legend else "")
            glyphs = "".join(
                " " + _GLYPHS[PieceColor(int(self._cells[linearize(col, row)]))] for col in range(SIDE)
            )
            lines.append(prefix + glyphs)
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (
            f"Board(to_move={self._whose_move.name}, red={self._num_red}, "
            f"blue={self._num_blue}, jumps={self._jumps}, moves={len(self._history)})\n"
            f"{self.render(legend=True)}"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            np.array_equal(self._cells, other._cells)
            and self._num_red == other._num_red
            and self._num_blue == other._num_blue
            and self._jumps == other._jumps
            and self._whose_move == other._whose_move
        )

    __hash__ = None
