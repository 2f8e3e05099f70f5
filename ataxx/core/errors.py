from __future__ import annotations


class AtaxxError(ValueError):
    pass


class IllegalMoveError(AtaxxError):
    pass


class IllegalPassError(AtaxxError):
    pass


class IllegalBlockError(AtaxxError):
    pass


class UndoUnderflowError(RuntimeError):
    """Raised when undo is requested with no moves recorded."""
