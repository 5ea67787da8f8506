import logging
import random
from dataclasses import dataclass
from typing import Any, List, Set, Tuple

from joblib import Parallel, delayed, effective_n_jobs

from zip_puzzle.models import Cell, Direction, Grid
from zip_puzzle.solver import Solver, SolverStatus, create_solver

logger = logging.getLogger(__name__)

Edge = Tuple[Cell, Cell]


@dataclass
class GenerationStats:
    puzzles_successfully_generated: int = 0
    puzzles_rejected_ambiguous: int = 0
    puzzles_rejected_timeout: int = 0
    barriers_added_for_uniqueness: int = 0

    def merge(self, other: "GenerationStats") -> None:
        self.puzzles_successfully_generated += other.puzzles_successfully_generated
        self.puzzles_rejected_ambiguous += other.puzzles_rejected_ambiguous
        self.puzzles_rejected_timeout += other.puzzles_rejected_timeout
        self.barriers_added_for_uniqueness += other.barriers_added_for_uniqueness


def _edge(a: Cell, b: Cell) -> Edge:
    return (a, b) if a <= b else (b, a)


class Generator:
    """
    Builds levels from a random covering path.

    The path is shuffled with backbite moves starting from a serpentine path, so
    every intermediate path still covers the grid. Checkpoints are placed along
    it in order, then barriers are dropped on edges the path does not use. When
    a unique solution is required, every competing solution the solver finds is
    cut by a barrier on one of its edges that the intended path does not use.
    """

    BACKBITE_STEPS_PER_CELL = 10
    MAX_BARRIER_ADDITIONS_FRACTION = 0.5

    def __init__(self, solver: Solver | None = None):
        self.solver = solver if solver is not None else create_solver()

    def generate(
        self,
        width: int,
        height: int,
        checkpoints: int,
        barrier_fraction: float = 0.0,
        require_unique: bool = True,
        max_attempts: int = 100,
        seed: int | None = None,
        _stats: GenerationStats | None = None,
    ) -> tuple[Grid | None, GenerationStats]:
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        if not 1 <= checkpoints <= width * height:
            raise ValueError(f"Checkpoint count must be between 1 and {width * height}, got {checkpoints}")
        if not 0.0 <= barrier_fraction <= 1.0:
            raise ValueError(f"Barrier fraction must be between 0 and 1, got {barrier_fraction}")

        rng = random.Random(seed)
        stats = _stats if _stats is not None else GenerationStats()

        for attempt in range(max_attempts):
            path = self.random_path(width, height, rng)
            numbers = self._place_checkpoints(path, width, height, checkpoints, rng)
            barriers = self._pick_barriers(path, width, height, barrier_fraction, rng)

            if not require_unique:
                stats.puzzles_successfully_generated += 1
                return self._build_grid(width, height, numbers, barriers), stats

            grid = self._make_unique(path, width, height, numbers, barriers, stats)
            if grid is not None:
                stats.puzzles_successfully_generated += 1
                logger.debug("Generated %dx%d level after %d attempts", width, height, attempt + 1)
                return grid, stats

        return None, stats

    def generate_many(
        self,
        count: int,
        width: int,
        height: int,
        checkpoints: int,
        n_jobs: int = 1,
        seed: int | None = None,
        **kwargs: Any,
    ) -> tuple[list[Grid], GenerationStats]:
        n_workers = effective_n_jobs(n_jobs)
        logger.info("Generating %d levels of %dx%d on %d workers", count, width, height, n_workers)

        rng = random.Random(seed)
        seeds = [rng.randrange(2**32) for _ in range(count)]

        results = Parallel(n_jobs=n_jobs)(
            delayed(self.generate)(width, height, checkpoints, seed=task_seed, **kwargs) for task_seed in seeds
        )

        grids: list[Grid] = []
        total_stats = GenerationStats()
        for grid, stats in results:
            total_stats.merge(stats)
            if grid is not None:
                grids.append(grid)
        return grids, total_stats

    def random_path(self, width: int, height: int, rng: random.Random) -> List[Cell]:
        """A random path through every cell of a width x height grid."""
        path = []
        for y in range(height):
            xs = range(width) if y % 2 == 0 else range(width - 1, -1, -1)
            path.extend(Cell(x, y) for x in xs)

        if len(path) < 3:
            return path[::-1] if rng.random() < 0.5 else path

        for _ in range(self.BACKBITE_STEPS_PER_CELL * len(path)):
            if rng.random() < 0.5:
                path.reverse()
            end = path[0]
            candidates = [d.step(end) for d in Direction]
            candidates = [c for c in candidates if 0 <= c.x < width and 0 <= c.y < height and c != path[1]]
            if not candidates:
                continue
            target = rng.choice(candidates)
            i = path.index(target)
            # path[0] is adjacent to path[i], so reversing the prefix keeps the path connected.
            path[:i] = path[:i][::-1]
        return path

    def _place_checkpoints(
        self, path: List[Cell], width: int, height: int, checkpoints: int, rng: random.Random
    ) -> List[List[int]]:
        numbers = [[0] * width for _ in range(height)]
        indices = [0]
        if checkpoints >= 2:
            middle = rng.sample(range(1, len(path) - 1), checkpoints - 2)
            indices += sorted(middle) + [len(path) - 1]

        for number, index in enumerate(indices, start=1):
            cell = path[index]
            numbers[cell.y][cell.x] = number
        return numbers

    def _pick_barriers(
        self, path: List[Cell], width: int, height: int, fraction: float, rng: random.Random
    ) -> Set[Edge]:
        used = {_edge(a, b) for a, b in zip(path, path[1:])}
        free = []
        for y in range(height):
            for x in range(width):
                cell = Cell(x, y)
                if x + 1 < width and _edge(cell, Cell(x + 1, y)) not in used:
                    free.append(_edge(cell, Cell(x + 1, y)))
                if y + 1 < height and _edge(cell, Cell(x, y + 1)) not in used:
                    free.append(_edge(cell, Cell(x, y + 1)))
        return set(rng.sample(free, int(len(free) * fraction)))

    def _make_unique(
        self,
        path: List[Cell],
        width: int,
        height: int,
        numbers: List[List[int]],
        barriers: Set[Edge],
        stats: GenerationStats,
    ) -> Grid | None:
        used = {_edge(a, b) for a, b in zip(path, path[1:])}
        barriers = set(barriers)
        max_additions = max(int(width * height * self.MAX_BARRIER_ADDITIONS_FRACTION), 1)

        for _ in range(max_additions + 1):
            grid = self._build_grid(width, height, numbers, barriers)
            result = self.solver.solve(grid, max_solutions=2)

            if result.status == SolverStatus.LIMIT_REACHED or (
                result.solution_count < 2 and not result.exhaustive
            ):
                stats.puzzles_rejected_timeout += 1
                return None
            if result.solution_count == 1:
                return grid

            # Cut every competing solution we were shown; the intended path keeps all its edges.
            for other in result.solutions:
                if other == path:
                    continue
                extra = [e for e in (_edge(a, b) for a, b in zip(other, other[1:])) if e not in used]
                barriers.add(extra[0])
                stats.barriers_added_for_uniqueness += 1

        stats.puzzles_rejected_ambiguous += 1
        return None

    def _build_grid(self, width: int, height: int, numbers: List[List[int]], barriers: Set[Edge]) -> Grid:
        block_right = [[False] * width for _ in range(height)]
        block_up = [[False] * width for _ in range(height)]
        for a, b in barriers:
            if a.y == b.y:
                block_right[a.y][min(a.x, b.x)] = True
            else:
                block_up[max(a.y, b.y)][a.x] = True
        return Grid.from_rows(numbers, block_right, block_up)
