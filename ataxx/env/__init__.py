from .gym_env import BOARD_CHANNELS, AtaxxEnv, board_planes

__all__ = ["AtaxxEnv", "BOARD_CHANNELS", "board_planes"]
