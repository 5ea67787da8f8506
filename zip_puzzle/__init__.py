# Copyright (C) 2026 Lukas Huwald
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

from .config import EngineConfig, load_config
from .engine import EngineSnapshot, EngineState, MoveResult, PuzzleEngine
from .errors import InvalidArgument, MalformedLevel, ZipPuzzleError
from .models import Cell, Direction, Grid
from .path import PathState
from .rules import (
    can_move,
    checkpoint_sequence,
    has_legal_continuation,
    is_solved,
    is_stuck_but_incomplete,
    legal_moves,
)

__all__ = [
    "Cell",
    "Direction",
    "Grid",
    "PathState",
    "PuzzleEngine",
    "EngineState",
    "EngineSnapshot",
    "MoveResult",
    "EngineConfig",
    "load_config",
    "ZipPuzzleError",
    "MalformedLevel",
    "InvalidArgument",
    "can_move",
    "legal_moves",
    "has_legal_continuation",
    "is_stuck_but_incomplete",
    "checkpoint_sequence",
    "is_solved",
]
