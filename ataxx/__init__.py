"""Ataxx rules engine and alpha-beta opponent."""

from . import core, env, evaluation, players, search
from .config import AtaxxConfig, configure_logging, load_config, setup_board
from .core import (
    Board,
    GameResult,
    Move,
    MoveKind,
    MoveRecord,
    PieceColor,
    Square,
    game_result,
    legal_moves,
)
from .env import AtaxxEnv
from .evaluation import EvaluationResult, GameRecord, evaluate_players, play_game
from .players import AIPlayer, Player, RandomPlayer
from .search import AlphaBetaSearch, SearchConfig, SearchResult, static_score

__all__ = [
    "core",
    "env",
    "evaluation",
    "players",
    "search",
    "AtaxxConfig",
    "configure_logging",
    "load_config",
    "setup_board",
    "Board",
    "GameResult",
    "Move",
    "MoveKind",
    "MoveRecord",
    "PieceColor",
    "Square",
    "game_result",
    "legal_moves",
    "AtaxxEnv",
    "EvaluationResult",
    "GameRecord",
    "evaluate_players",
    "play_game",
    "Player",
    "AIPlayer",
    "RandomPlayer",
    "AlphaBetaSearch",
    "SearchConfig",
    "SearchResult",
    "static_score",
]
