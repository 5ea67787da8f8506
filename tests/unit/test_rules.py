import pytest

from zip_puzzle.errors import InvalidArgument
from zip_puzzle.models import Cell, Grid
from zip_puzzle.path import PathState
from zip_puzzle.rules import (
    can_move,
    checkpoint_sequence,
    has_legal_continuation,
    is_solved,
    is_stuck_but_incomplete,
    legal_moves,
)


def walk(grid: Grid, cells: list[tuple[int, int]]) -> PathState:
    path = PathState(grid)
    path.start(cells[0])
    for cell in cells[1:]:
        head = path.head
        assert head is not None
        assert can_move(grid, path, head, cell), f"{head} -> {cell} should be legal"
        path.append(cell)
    return path


def test_can_move_open_neighbor() -> None:
    grid = Grid.from_rows([[1, 0], [0, 0]])
    path = walk(grid, [(0, 0)])

    assert can_move(grid, path, (0, 0), (1, 0))
    assert can_move(grid, path, (0, 0), (0, 1))


def test_can_move_rejects_same_cell() -> None:
    grid = Grid.from_rows([[1, 0]])
    path = walk(grid, [(0, 0)])
    assert not can_move(grid, path, (0, 0), (0, 0))


def test_can_move_rejects_non_adjacent() -> None:
    grid = Grid.from_rows([[1, 0, 0], [0, 0, 0]])
    path = walk(grid, [(0, 0)])

    assert not can_move(grid, path, (0, 0), (1, 1))
    assert not can_move(grid, path, (0, 0), (2, 0))


def test_can_move_rejects_visited() -> None:
    grid = Grid.from_rows([[1, 0], [0, 0]])
    path = walk(grid, [(0, 0), (1, 0), (1, 1)])

    assert not can_move(grid, path, (1, 1), (1, 0))
    assert can_move(grid, path, (1, 1), (0, 1))


def test_can_move_rejects_out_of_bounds() -> None:
    grid = Grid.from_rows([[1, 0]])
    path = walk(grid, [(0, 0)])

    with pytest.raises(InvalidArgument):
        can_move(grid, path, (0, 0), (-1, 0))


def test_blocked_right_forbids_both_directions() -> None:
    # Scenario B: 2x1 grid with a barrier on the right edge of (0,0).
    grid = Grid.from_rows([[1, 0]], block_right=[[True, False]])
    path = walk(grid, [(0, 0)])

    assert not can_move(grid, path, (0, 0), (1, 0))

    reverse = PathState(grid)
    reverse.start((1, 0))
    assert not can_move(grid, reverse, (1, 0), (0, 0))


def test_blocked_up_forbids_both_directions() -> None:
    grid = Grid.from_rows([[1], [0]], block_up=[[False], [True]])
    path = walk(grid, [(0, 0)])

    assert not can_move(grid, path, (0, 0), (0, 1))

    reverse = PathState(grid)
    reverse.start((0, 1))
    assert not can_move(grid, reverse, (0, 1), (0, 0))


def test_numbers_do_not_restrict_moves() -> None:
    # 3 may be entered before 2.
    grid = Grid.from_rows([[1, 3, 2]])
    path = walk(grid, [(0, 0)])

    assert can_move(grid, path, (0, 0), (1, 0))


def test_legal_moves() -> None:
    grid = Grid.from_rows(
        [[1, 0, 0], [0, 0, 0]],
        block_right=[[False, True, False], [False, False, False]],
    )
    path = walk(grid, [(0, 0), (1, 0)])

    # (2,0) is behind a barrier, (0,0) is visited.
    assert legal_moves(grid, path) == [Cell(1, 1)]
    assert legal_moves(grid, PathState(grid)) == []


def test_has_legal_continuation() -> None:
    grid = Grid.from_rows([[1, 0]])
    path = walk(grid, [(0, 0)])
    assert has_legal_continuation(grid, path)

    path.append((1, 0))
    assert not has_legal_continuation(grid, path)
    assert not has_legal_continuation(grid, PathState(grid))


def test_stuck_but_incomplete() -> None:
    # Scenario D: every cell but (0,1) is covered and the barrier cuts it off from the head.
    grid = Grid.from_rows(
        [[1, 0], [0, 0]],
        block_right=[[False, False], [True, False]],
    )
    path = walk(grid, [(0, 0), (1, 0), (1, 1)])

    assert len(path) == grid.cell_count - 1
    assert not has_legal_continuation(grid, path)
    assert is_stuck_but_incomplete(grid, path)
    assert not is_solved(grid, path)


def test_complete_path_is_not_stuck() -> None:
    grid = Grid.from_rows([[1, 2]])
    path = walk(grid, [(0, 0), (1, 0)])

    assert not has_legal_continuation(grid, path)
    assert not is_stuck_but_incomplete(grid, path)


def test_empty_path_is_not_stuck() -> None:
    grid = Grid.from_rows([[1, 2]])
    assert not is_stuck_but_incomplete(grid, PathState(grid))


def test_solved_two_cells() -> None:
    # Scenario A
    grid = Grid.from_rows([[1, 2]])
    path = walk(grid, [(0, 0), (1, 0)])

    assert checkpoint_sequence(grid, path) == [1, 2]
    assert is_solved(grid, path)


def test_solved_with_unlabeled_cells_around_checkpoints() -> None:
    # Scenario C: the 2 is reached before the last cell; only the checkpoint order matters.
    grid = Grid.from_rows([[1, 0], [0, 2]])
    path = walk(grid, [(0, 0), (1, 0), (1, 1), (0, 1)])

    assert checkpoint_sequence(grid, path) == [1, 2]
    assert is_solved(grid, path)


def test_solved_straight_line_with_gap_cell() -> None:
    grid = Grid.from_rows([[1, 0, 2]])
    path = walk(grid, [(0, 0), (1, 0), (2, 0)])
    assert is_solved(grid, path)


def test_full_cover_out_of_order_is_not_solved() -> None:
    grid = Grid.from_rows([[1, 3, 2]])
    path = walk(grid, [(0, 0), (1, 0), (2, 0)])

    assert len(path) == grid.cell_count
    assert checkpoint_sequence(grid, path) == [1, 3, 2]
    assert not is_solved(grid, path)


def test_partial_path_is_not_solved() -> None:
    grid = Grid.from_rows([[1, 2, 0]])
    path = walk(grid, [(0, 0), (1, 0)])
    assert not is_solved(grid, path)


def test_non_strict_grid_without_start_is_never_solved() -> None:
    grid = Grid.from_rows([[0, 2]], strict=False)
    path = PathState(grid)
    path.start((0, 0))
    path.append((1, 0))

    assert not is_solved(grid, path)
