from pathlib import Path

from zip_puzzle.io import read_level
from zip_puzzle.models import Cell, Grid
from zip_puzzle.path import PathState
from zip_puzzle.rules import can_move, is_solved
from zip_puzzle.solver import Solver, SolverStatus

SAMPLE_LEVEL = Path(__file__).parent.parent.parent / "levels" / "sample_4x4.json"


def replay(grid: Grid, cells: list[Cell]) -> PathState:
    path = PathState(grid)
    path.start(cells[0])
    for cell in cells[1:]:
        head = path.head
        assert head is not None
        assert can_move(grid, path, head, cell)
        path.append(cell)
    return path


def test_solve_sample_level() -> None:
    grid = read_level(SAMPLE_LEVEL)
    result = Solver().solve(grid)

    assert result.status == SolverStatus.SOLVED
    assert result.solution_count == 1
    assert result.nodes_explored > 0
    assert len(result.path) == grid.cell_count
    assert result.path[0] == grid.start_cell
    assert is_solved(grid, replay(grid, result.path))


def test_single_cell() -> None:
    grid = Grid.from_rows([[1]])
    result = Solver().solve(grid)

    assert result.status == SolverStatus.SOLVED
    assert result.path == [Cell(0, 0)]


def test_barrier_makes_level_unsolvable() -> None:
    grid = Grid.from_rows([[1, 0]], block_right=[[True, False]])
    result = Solver().solve(grid)

    assert result.status == SolverStatus.NO_SOLUTION
    assert result.path == []
    assert result.exhaustive


def test_start_in_the_middle_is_unsolvable() -> None:
    grid = Grid.from_rows([[0, 1, 0]])
    assert Solver().solve(grid).status == SolverStatus.NO_SOLUTION


def test_checkpoint_order_is_enforced() -> None:
    # The only covering path reaches 3 before 2.
    grid = Grid.from_rows([[1, 3, 2]])
    assert Solver().solve(grid).status == SolverStatus.NO_SOLUTION


def test_count_solutions() -> None:
    grid = Grid.from_rows([[1, 0], [0, 0]])
    solver = Solver()

    result = solver.solve(grid, max_solutions=5)
    assert result.status == SolverStatus.SOLVED
    assert result.solution_count == 2
    assert result.exhaustive
    assert sorted(result.solutions) == [
        [Cell(0, 0), Cell(0, 1), Cell(1, 1), Cell(1, 0)],
        [Cell(0, 0), Cell(1, 0), Cell(1, 1), Cell(0, 1)],
    ]

    assert solver.count_solutions(grid, limit=1) == 1
    assert solver.count_solutions(grid) == 2


def test_stopping_at_max_solutions_is_not_exhaustive() -> None:
    grid = Grid.from_rows([[1, 0], [0, 0]])
    result = Solver().solve(grid, max_solutions=1)

    assert result.solution_count == 1
    assert not result.exhaustive


def test_node_limit() -> None:
    grid = read_level(SAMPLE_LEVEL)
    result = Solver(node_limit=1).solve(grid)

    assert result.status == SolverStatus.LIMIT_REACHED
    assert result.solution_count == 0
    assert not result.exhaustive


def test_solve_from_prefix() -> None:
    grid = read_level(SAMPLE_LEVEL)
    prefix = [(0, 0), (0, 1)]
    result = Solver().solve(grid, prefix=prefix)

    assert result.status == SolverStatus.SOLVED
    assert result.path[:2] == prefix
    assert is_solved(grid, replay(grid, result.path))


def test_invalid_prefixes() -> None:
    grid = Grid.from_rows([[1, 0, 2], [0, 3, 0]])
    solver = Solver()

    # Does not start on 1
    assert solver.solve(grid, prefix=[(1, 0)]).status == SolverStatus.NO_SOLUTION
    # Illegal step
    assert solver.solve(grid, prefix=[(0, 0), (1, 1)]).status == SolverStatus.NO_SOLUTION
    # Repeats a cell
    assert solver.solve(grid, prefix=[(0, 0), (1, 0), (0, 0)]).status == SolverStatus.NO_SOLUTION
    # Reaches 3 before 2
    assert solver.solve(grid, prefix=[(0, 0), (0, 1), (1, 1)]).status == SolverStatus.NO_SOLUTION


def test_prefix_that_dooms_the_path() -> None:
    grid = Grid.from_rows([[1, 0, 0], [0, 0, 0]])
    # (0,1) and the right column lie on opposite sides of the head.
    result = Solver().solve(grid, prefix=[(0, 0), (1, 0), (1, 1)])
    assert result.status == SolverStatus.NO_SOLUTION
