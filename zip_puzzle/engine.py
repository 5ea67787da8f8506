import logging
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

from zip_puzzle import rules
from zip_puzzle.config import EngineConfig
from zip_puzzle.models import Cell, Grid
from zip_puzzle.path import PathState
from zip_puzzle.solver import Solver, SolverStatus

logger = logging.getLogger(__name__)


class EngineState(Enum):
    IDLE = "IDLE"
    DRAWING = "DRAWING"


class MoveResult(Enum):
    STARTED = "STARTED"
    EXTENDED = "EXTENDED"
    REWOUND = "REWOUND"
    IGNORED = "IGNORED"

    @property
    def accepted(self) -> bool:
        return self is not MoveResult.IGNORED


@dataclass(frozen=True)
class EngineSnapshot:
    """Read-only view of the engine handed to presentation code."""

    state: EngineState
    sequence: Tuple[Cell, ...]
    visited: FrozenSet[Cell]
    next_expected_number: int
    cells_remaining: int
    stuck: bool
    solved: bool


class PuzzleEngine:
    """
    Single entry point for an input/rendering layer.

    Commands (`start_at`, `extend_to`, `rewind`, `rewind_to`, `reset`) return
    whether they were accepted; a rejected command leaves the state untouched.
    `press` and `try_move_to` pick the transition for pointer-down and
    pointer-drag events on an already resolved cell.
    """

    def __init__(self, grid: Grid, config: EngineConfig | None = None):
        self.config = config if config is not None else EngineConfig()
        self._solver = Solver(node_limit=self.config.solver_node_limit)
        self.load(grid)

    def load(self, grid: Grid) -> None:
        """Switches to a new level and discards the current path."""
        self.grid = grid
        self.path = PathState(grid)
        logger.debug("Loaded %dx%d grid with %d checkpoints", grid.width, grid.height, grid.max_number)

    # Queries

    @property
    def state(self) -> EngineState:
        return EngineState.IDLE if self.path.is_empty() else EngineState.DRAWING

    @property
    def sequence(self) -> Tuple[Cell, ...]:
        return self.path.sequence

    @property
    def head(self) -> Optional[Cell]:
        return self.path.head

    @property
    def next_expected_number(self) -> int:
        return self.path.next_expected_number

    def is_visited(self, cell: Tuple[int, int]) -> bool:
        self.grid.check_bounds(cell)
        return cell in self.path

    def can_move(self, to_cell: Tuple[int, int]) -> bool:
        head = self.path.head
        if head is None:
            return False
        return rules.can_move(self.grid, self.path, head, to_cell)

    def legal_moves(self) -> List[Cell]:
        return rules.legal_moves(self.grid, self.path)

    def has_legal_continuation(self) -> bool:
        return rules.has_legal_continuation(self.grid, self.path)

    def is_stuck_but_incomplete(self) -> bool:
        return rules.is_stuck_but_incomplete(self.grid, self.path)

    def is_solved(self) -> bool:
        return rules.is_solved(self.grid, self.path)

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            state=self.state,
            sequence=self.path.sequence,
            visited=self.path.visited,
            next_expected_number=self.path.next_expected_number,
            cells_remaining=self.grid.cell_count - len(self.path),
            stuck=self.is_stuck_but_incomplete(),
            solved=self.is_solved(),
        )

    # Transitions

    def start_at(self, cell: Tuple[int, int]) -> bool:
        if self.grid.number(cell) != 1:
            logger.debug("start_at %s rejected: not the start cell", tuple(cell))
            return False

        restarting = not self.path.is_empty()
        self.path.start(cell)
        logger.debug("%s path at %s", "Restarted" if restarting else "Started", tuple(cell))
        return True

    def reset(self) -> bool:
        return self.start_at(self.grid.start_cell)

    def extend_to(self, cell: Tuple[int, int]) -> bool:
        if not self.can_move(cell):
            return False

        self.path.append(cell)
        logger.debug("Extended path to %s (length %d)", tuple(cell), len(self.path))
        if self.is_solved():
            logger.info("Puzzle solved in %d cells", len(self.path))
        return True

    def rewind(self) -> bool:
        if len(self.path) < 2:
            return False

        removed = self.path.pop()
        logger.debug("Rewound %s (length %d)", removed, len(self.path))
        return True

    def rewind_to(self, cell: Tuple[int, int]) -> bool:
        """Rewinds one step at a time until `cell` is the head."""
        index = self.path.index(cell)
        if index < 0 or index == len(self.path) - 1:
            return False

        while len(self.path) - 1 > index:
            self.rewind()
        return True

    # Pointer dispatch

    def press(self, cell: Tuple[int, int]) -> MoveResult:
        return MoveResult.STARTED if self.start_at(cell) else MoveResult.IGNORED

    def try_move_to(self, cell: Tuple[int, int]) -> MoveResult:
        self.grid.check_bounds(cell)
        head = self.path.head
        if head is None or cell == head:
            return MoveResult.IGNORED

        if cell == self.path.previous:
            self.rewind()
            return MoveResult.REWOUND

        if cell in self.path:
            if self.config.allow_multi_step_rewind and self.rewind_to(cell):
                return MoveResult.REWOUND
            return MoveResult.IGNORED

        if self.extend_to(cell):
            return MoveResult.EXTENDED
        return MoveResult.IGNORED

    # Assistance

    def hint(self) -> Optional[Cell]:
        """
        Next cell of some solution that continues the current path, or None if the
        path cannot be completed (or is already complete).
        """
        if self.path.is_empty():
            return self.grid.start_cell
        if len(self.path) >= self.grid.cell_count:
            return None

        result = self._solver.solve(self.grid, prefix=self.path.sequence)
        if result.status != SolverStatus.SOLVED:
            logger.debug("No hint available: %s after %d nodes", result.status.value, result.nodes_explored)
            return None
        return result.path[len(self.path)]
