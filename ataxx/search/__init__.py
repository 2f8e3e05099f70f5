"""Move search for Ataxx."""

from .alphabeta import INFTY, WINNING_VALUE, AlphaBetaSearch, SearchConfig, SearchResult
from .evaluator import static_score

__all__ = [
    "AlphaBetaSearch",
    "SearchConfig",
    "SearchResult",
    "INFTY",
    "WINNING_VALUE",
    "static_score",
]
