"""
Pure puzzle rules: move legality, stuck detection and the win condition.

None of these functions mutate the path. Checkpoint order is not a
move restriction; it only matters to `is_solved`.
"""

from typing import List, Tuple

from zip_puzzle.models import Cell, Grid
from zip_puzzle.path import PathState


def can_move(grid: Grid, path: PathState, from_cell: Tuple[int, int], to_cell: Tuple[int, int]) -> bool:
    """
    A move is legal iff the target differs from the source, is grid-adjacent to
    it, has not been visited, and no barrier sits on the shared edge.
    Out-of-bounds cells raise InvalidArgument.
    """
    grid.check_bounds(from_cell)
    grid.check_bounds(to_cell)

    if tuple(to_cell) == tuple(from_cell):
        return False
    if not grid.is_adjacent(from_cell, to_cell):
        return False
    if to_cell in path:
        return False
    return not grid.is_edge_blocked(from_cell, to_cell)


def legal_moves(grid: Grid, path: PathState) -> List[Cell]:
    head = path.head
    if head is None:
        return []
    return [cell for cell in grid.neighbors(head) if can_move(grid, path, head, cell)]


def has_legal_continuation(grid: Grid, path: PathState) -> bool:
    head = path.head
    if head is None:
        return False
    return any(can_move(grid, path, head, cell) for cell in grid.neighbors(head))


def is_stuck_but_incomplete(grid: Grid, path: PathState) -> bool:
    """True when a started path is short of full coverage and cannot be extended."""
    if len(path) == 0 or len(path) >= grid.cell_count:
        return False
    return not has_legal_continuation(grid, path)


def checkpoint_sequence(grid: Grid, path: PathState) -> List[int]:
    """Numbers of the labeled cells in path order."""
    return [n for n in (grid.number(cell) for cell in path.sequence) if n != 0]


def is_solved(grid: Grid, path: PathState) -> bool:
    if len(path) != grid.cell_count:
        return False

    numbers = checkpoint_sequence(grid, path)
    if not numbers or numbers[0] != 1:
        return False

    for i in range(1, len(numbers)):
        if numbers[i] != numbers[i - 1] + 1:
            return False
    return True
