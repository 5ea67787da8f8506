import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence, Tuple

from zip_puzzle.config import EngineConfig, load_config
from zip_puzzle.models import Cell, Grid
from zip_puzzle.path import PathState
from zip_puzzle.rules import can_move, is_solved, legal_moves


class SolverStatus(Enum):
    SOLVED = "SOLVED"
    NO_SOLUTION = "NO_SOLUTION"
    LIMIT_REACHED = "LIMIT_REACHED"


@dataclass
class SolverResult:
    """Outcome of a search. `path` is the first of `solutions`, if any were found."""

    status: SolverStatus
    path: List[Cell] = field(default_factory=list)
    solutions: List[List[Cell]] = field(default_factory=list)
    solution_count: int = 0
    nodes_explored: int = 0
    # False when the search stopped early, so `solution_count` is only a lower bound.
    exhaustive: bool = True
    elapsed: float = 0.0


class Solver:
    """
    Depth-first search for a full covering path.

    Unlike the interactive engine, the search enforces checkpoint order at move
    time since any other order can never be solved. Branches are cut when the
    unvisited cells stop being reachable from the head or when more than one
    unvisited cell is a dead end.
    """

    def __init__(self, node_limit: int | None = None):
        self.node_limit = node_limit
        self._nodes = 0
        self._max_solutions = 1
        self._solutions: List[List[Cell]] = []
        self._limit_hit = False

    def solve(
        self,
        grid: Grid,
        prefix: Sequence[Tuple[int, int]] | None = None,
        max_solutions: int = 1,
    ) -> SolverResult:
        start_time = time.perf_counter()
        self._nodes = 0
        self._max_solutions = max(max_solutions, 1)
        self._solutions = []
        self._limit_hit = False

        path = PathState(grid)
        if not self._seed(grid, path, prefix):
            return SolverResult(status=SolverStatus.NO_SOLUTION, elapsed=time.perf_counter() - start_time)

        stopped = self._search(grid, path)

        if self._solutions:
            status = SolverStatus.SOLVED
        elif self._limit_hit:
            status = SolverStatus.LIMIT_REACHED
        else:
            status = SolverStatus.NO_SOLUTION

        return SolverResult(
            status=status,
            path=list(self._solutions[0]) if self._solutions else [],
            solutions=self._solutions,
            solution_count=len(self._solutions),
            nodes_explored=self._nodes,
            exhaustive=not stopped,
            elapsed=time.perf_counter() - start_time,
        )

    def count_solutions(self, grid: Grid, limit: int = 2) -> int:
        """Number of solutions, counting no further than `limit`."""
        return self.solve(grid, max_solutions=limit).solution_count

    def _seed(self, grid: Grid, path: PathState, prefix: Sequence[Tuple[int, int]] | None) -> bool:
        cells = list(prefix) if prefix else [grid.start_cell]
        if grid.number(cells[0]) != 1:
            return False

        path.start(cells[0])
        for cell in cells[1:]:
            head = path.head
            assert head is not None
            if not can_move(grid, path, head, cell):
                return False
            number = grid.number(cell)
            if number and number != path.next_expected_number:
                return False
            path.append(cell)
        return True

    def _search(self, grid: Grid, path: PathState) -> bool:
        """Returns True when the search must stop (enough solutions or budget spent)."""
        self._nodes += 1
        if self.node_limit is not None and self._nodes > self.node_limit:
            self._limit_hit = True
            return True

        if len(path) == grid.cell_count:
            if is_solved(grid, path):
                self._solutions.append(list(path.sequence))
                if len(self._solutions) >= self._max_solutions:
                    return True
            return False

        if not self._is_viable(grid, path):
            return False

        for cell in self._ordered_moves(grid, path):
            path.append(cell)
            stop = self._search(grid, path)
            path.pop()
            if stop:
                return True
        return False

    def _ordered_moves(self, grid: Grid, path: PathState) -> List[Cell]:
        expected = path.next_expected_number
        moves = [c for c in legal_moves(grid, path) if grid.number(c) in (0, expected)]

        def onward(cell: Cell) -> int:
            return sum(
                1
                for nb in grid.neighbors(cell)
                if nb not in path and not grid.is_edge_blocked(cell, nb)
            )

        # Fewest onward moves first.
        return sorted(moves, key=onward)

    def _is_viable(self, grid: Grid, path: PathState) -> bool:
        head = path.head
        assert head is not None
        remaining = grid.cell_count - len(path)

        seen = {head}
        queue = deque([head])
        while queue:
            current = queue.popleft()
            for nb in grid.neighbors(current):
                if nb in seen or nb in path or grid.is_edge_blocked(current, nb):
                    continue
                seen.add(nb)
                queue.append(nb)

        if len(seen) - 1 != remaining:
            return False

        dead_ends = 0
        for cell in seen:
            if cell == head:
                continue
            degree = sum(
                1
                for nb in grid.neighbors(cell)
                if (nb == head or nb not in path) and not grid.is_edge_blocked(cell, nb)
            )
            if degree <= 1:
                dead_ends += 1
                if dead_ends > 1:
                    return False
        return True


def create_solver(config: EngineConfig | None = None) -> Solver:
    """
    Create a Solver using the node budget from the engine configuration.

    Args:
        config: Engine settings. If None, loads config/engine.yaml

    Returns:
        A Solver instance
    """
    if config is None:
        config = load_config()
    return Solver(node_limit=config.solver_node_limit)
