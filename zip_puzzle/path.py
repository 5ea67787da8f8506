from typing import FrozenSet, Iterator, List, Optional, Tuple

from zip_puzzle.errors import InvalidArgument
from zip_puzzle.models import Cell, Grid


class PathState:
    """
    Ordered, duplicate-free path of visited cells.

    The sequence and the visited set are kept in sync on every push and pop.
    `next_expected_number` is the smallest checkpoint not yet reached in order;
    a history of its values is kept alongside the sequence so that `pop` restores
    it exactly. PathState knows nothing about adjacency or barriers: callers are
    expected to check legality with `rules.can_move` before appending.
    """

    def __init__(self, grid: Grid):
        self.grid = grid
        self._sequence: List[Cell] = []
        self._visited: set[Cell] = set()
        self._expected_history: List[int] = []

    def __len__(self) -> int:
        return len(self._sequence)

    def __contains__(self, cell: object) -> bool:
        return cell in self._visited

    def __iter__(self) -> Iterator[Cell]:
        return iter(tuple(self._sequence))

    def __repr__(self) -> str:
        cells = " -> ".join(str(c) for c in self._sequence)
        return f"PathState([{cells}])"

    @property
    def sequence(self) -> Tuple[Cell, ...]:
        return tuple(self._sequence)

    @property
    def visited(self) -> FrozenSet[Cell]:
        return frozenset(self._visited)

    @property
    def head(self) -> Optional[Cell]:
        return self._sequence[-1] if self._sequence else None

    @property
    def previous(self) -> Optional[Cell]:
        """The cell visited just before the head, if any."""
        return self._sequence[-2] if len(self._sequence) >= 2 else None

    @property
    def next_expected_number(self) -> int:
        return self._expected_history[-1] if self._expected_history else 1

    def is_empty(self) -> bool:
        return not self._sequence

    def index(self, cell: Tuple[int, int]) -> int:
        """Position of `cell` in the path, or -1 if it is not on it."""
        if cell not in self._visited:
            return -1
        return self._sequence.index(Cell(*cell))

    def start(self, cell: Tuple[int, int]) -> None:
        self.clear()
        self.append(cell)

    def append(self, cell: Tuple[int, int]) -> None:
        cell = Cell(*cell)
        if cell in self._visited:
            raise InvalidArgument(f"Cell {cell} is already on the path")

        # Validates bounds as a side effect.
        number = self.grid.number(cell)

        expected = self.next_expected_number
        if number == expected:
            expected += 1

        self._sequence.append(cell)
        self._visited.add(cell)
        self._expected_history.append(expected)

    def pop(self) -> Cell:
        if not self._sequence:
            raise InvalidArgument("Cannot pop from an empty path")
        cell = self._sequence.pop()
        self._visited.discard(cell)
        self._expected_history.pop()
        return cell

    def clear(self) -> None:
        self._sequence.clear()
        self._visited.clear()
        self._expected_history.clear()
