from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np
import yaml

from ataxx.core import Board, random_blocks
from ataxx.search import SearchConfig


@dataclass
class AtaxxConfig:
    search: SearchConfig = field(default_factory=SearchConfig)
    seed: Optional[int] = None
    # Squares in the form "c3"; each also blocks its reflections.
    blocks: List[str] = field(default_factory=list)
    random_blocks: int = 0
    log_level: str = "INFO"

    def make_rng(self) -> np.random.Generator:
        return np.random.default_rng(self.seed)


def _checked(cls, raw: Dict[str, Any], section: str) -> Dict[str, Any]:
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"Unknown {section} option(s): {', '.join(unknown)}")
    return raw


def config_from_dict(raw: Dict[str, Any]) -> AtaxxConfig:
    raw = dict(_checked(AtaxxConfig, raw, "config"))
    search_raw = raw.pop("search", None) or {}
    search = SearchConfig(**_checked(SearchConfig, search_raw, "search"))
    config = AtaxxConfig(search=search, **raw)
    if config.search.depth < 1:
        raise ValueError("search.depth must be at least 1")
    if config.random_blocks < 0:
        raise ValueError("random_blocks must be non-negative")
    return config


def load_config(path: Union[str, Path]) -> AtaxxConfig:
    path = Path(path)
    if not path.exists():
        return AtaxxConfig()
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return config_from_dict(raw)


def setup_board(config: AtaxxConfig, rng: Optional[np.random.Generator] = None) -> Board:
    """Fresh board with the configured fixed blocks, then any random ones."""
    board = Board()
    for square in config.blocks:
        board.set_block(square)
    if config.random_blocks:
        random_blocks(board, config.random_blocks, rng or config.make_rng())
    return board


def configure_logging(level: Union[str, int] = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
