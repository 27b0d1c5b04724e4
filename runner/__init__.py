"""Orchestration of multi-round move and remove runs."""

from .config import DEFAULT_MAX_ROUNDS, MoverConfig, load_config
from .move_runner import move, run_move
from .remove_runner import remove, run_remove
from .progress import ProgressLogger, quiet

__all__ = [
    "DEFAULT_MAX_ROUNDS",
    "MoverConfig",
    "load_config",
    "move",
    "run_move",
    "remove",
    "run_remove",
    "ProgressLogger",
    "quiet",
]
