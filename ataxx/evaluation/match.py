from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import numpy as np

from ataxx.core import AtaxxError, Board, GameResult, Move, PieceColor, game_result
from ataxx.players import Player

logger = logging.getLogger(__name__)


@dataclass
class GameRecord:
    result: GameResult
    red_pieces: int
    blue_pieces: int
    moves: List[Move] = field(default_factory=list)

    @property
    def length(self) -> int:
        return len(self.moves)


@dataclass
class EvaluationResult:
    games_played: int
    red_wins: int
    blue_wins: int
    draws: int
    unfinished: int
    average_length: float

    def winrate_red(self) -> float:
        return self.red_wins / max(1, self.games_played)

    def winrate_blue(self) -> float:
        return self.blue_wins / max(1, self.games_played)


def play_game(
    red: Player,
    blue: Player,
    *,
    board: Optional[Board] = None,
    max_moves: Optional[int] = None,
) -> GameRecord:
    """Alternate ``red`` and ``blue`` on ``board`` until the game is over.

    A game cut short by ``max_moves`` is reported as ``GameResult.ONGOING``.
    """
    if red.color != PieceColor.RED or blue.color != PieceColor.BLUE:
        raise ValueError("play_game expects a red player and a blue player.")
    board = board if board is not None else Board()
    players = {PieceColor.RED: red, PieceColor.BLUE: blue}
    moves: List[Move] = []

    while not board.game_over():
        if max_moves is not None and len(moves) >= max_moves:
            break
        mover = board.whose_move
        move = players[mover].my_move(board)
        try:
            board.make_move(move)
        except AtaxxError as exc:
            logger.error("%s produced an illegal move %s: %s", mover.name.lower(), move, exc)
            raise
        if move.is_pass:
            logger.debug("%s passes.", mover.name.lower())
        moves.append(move)

    result = game_result(board)
    logger.info(
        "Game finished after %d moves: %s (red %d, blue %d)",
        len(moves),
        result.value,
        board.red_pieces,
        board.blue_pieces,
    )
    return GameRecord(
        result=result,
        red_pieces=board.red_pieces,
        blue_pieces=board.blue_pieces,
        moves=moves,
    )


def evaluate_players(
    red: Player,
    blue: Player,
    *,
    episodes: int,
    board_factory: Optional[Callable[[], Board]] = None,
    max_moves: Optional[int] = None,
    seed: Optional[int] = None,
) -> EvaluationResult:
    board_factory = board_factory or Board
    seeds = np.random.default_rng(seed).integers(0, 2**31 - 1, size=(episodes, 2))

    red_wins = 0
    blue_wins = 0
    draws = 0
    unfinished = 0
    total_moves = 0

    for episode in range(episodes):
        record = play_game(
            red.spawn(int(seeds[episode, 0])),
            blue.spawn(int(seeds[episode, 1])),
            board=board_factory(),
            max_moves=max_moves,
        )
        total_moves += record.length
        if record.result == GameResult.RED_WIN:
            red_wins += 1
        elif record.result == GameResult.BLUE_WIN:
            blue_wins += 1
        elif record.result == GameResult.DRAW:
            draws += 1
        else:
            unfinished += 1

    return EvaluationResult(
        games_played=episodes,
        red_wins=red_wins,
        blue_wins=blue_wins,
        draws=draws,
        unfinished=unfinished,
        average_length=total_moves / max(1, episodes),
    )
