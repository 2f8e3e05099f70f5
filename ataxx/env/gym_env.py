from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from ataxx.core import (
    ACTION_VECTOR_SIZE,
    SIDE,
    Board,
    GameResult,
    PieceColor,
    decode_move,
    encode_move,
    game_result,
    legal_moves,
)

BOARD_CHANNELS = 3


def board_planes(board: Board) -> np.ndarray:
    """Red, blue and blocked planes of the interior, each indexed ``[row, col]``."""
    grid = board.grid()
    planes = np.stack(
        [grid == PieceColor.RED, grid == PieceColor.BLUE, grid == PieceColor.BLOCKED]
    )
    return planes.astype(np.float32)


class AtaxxEnv(gym.Env):
    """Two-player environment: each step is played by the side to move."""

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        *,
        enforce_legal_actions: bool = True,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._enforce_legal = enforce_legal_actions
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=0.0, high=1.0, shape=(BOARD_CHANNELS, SIDE, SIDE), dtype=np.float32
        )
        self.action_space = spaces.Discrete(ACTION_VECTOR_SIZE)

        self._board = Board()

    @property
    def board(self) -> Board:
        return self._board

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        self._board = Board()
        for square in (options or {}).get("blocks", ()):
            self._board.set_block(square)
        return board_planes(self._board), self._build_info()

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")

        legal_mask = self.legal_action_mask()
        if self._enforce_legal and not legal_mask[action_index]:
            raise ValueError("Illegal action provided and enforce_legal_actions=True.")

        self._board.make_move(decode_move(int(action_index)))

        result = game_result(self._board)
        reward = self._compute_reward(result)
        terminated = result != GameResult.ONGOING
        return board_planes(self._board), reward, terminated, False, self._build_info()

    def legal_action_mask(self) -> np.ndarray:
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        if self._board.game_over():
            return mask
        moves = legal_moves(self._board)
        for move in moves:
            mask[encode_move(move)] = 1
        if not moves:
            mask[-1] = 1
        return mask

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return self._board.render(legend=True)

    # ------------------------------------------------------------------
    def _build_info(self) -> Dict[str, np.ndarray]:
        return {
            "legal_action_mask": self.legal_action_mask(),
            "to_move": int(self._board.whose_move),
        }

    def _compute_reward(self, result: GameResult) -> float:
        if result == GameResult.RED_WIN:
            return 1.0
        if result == GameResult.BLUE_WIN:
            return -1.0
        return 0.0
