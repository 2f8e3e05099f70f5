"""Players that produce moves for a board."""

from .players import AIPlayer, Player, RandomPlayer

__all__ = ["Player", "AIPlayer", "RandomPlayer"]
