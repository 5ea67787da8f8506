from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from zip_puzzle.errors import InvalidArgument, MalformedLevel


class Cell(NamedTuple):
    x: int
    y: int

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


class Direction(str, Enum):
    RIGHT = "→"
    LEFT = "←"
    UP = "↑"
    DOWN = "↓"

    @property
    def delta(self) -> Tuple[int, int]:
        # Row 0 is the top row, so "up" decreases y.
        mapping = {
            Direction.RIGHT: (1, 0),
            Direction.LEFT: (-1, 0),
            Direction.UP: (0, -1),
            Direction.DOWN: (0, 1),
        }
        return mapping[self]

    @property
    def opposite(self) -> "Direction":
        return {
            Direction.RIGHT: Direction.LEFT,
            Direction.LEFT: Direction.RIGHT,
            Direction.UP: Direction.DOWN,
            Direction.DOWN: Direction.UP,
        }[self]

    def step(self, cell: Tuple[int, int]) -> Cell:
        dx, dy = self.delta
        return Cell(cell[0] + dx, cell[1] + dy)

    @classmethod
    def between(cls, a: Tuple[int, int], b: Tuple[int, int]) -> "Direction":
        """Direction of the single step from `a` to `b`."""
        delta = (b[0] - a[0], b[1] - a[1])
        for direction in cls:
            if direction.delta == delta:
                return direction
        raise InvalidArgument(f"Cells {a} and {b} are not adjacent")


def _freeze_rows(name: str, rows: Any, width: int, height: int, kind: type) -> Tuple[Tuple[Any, ...], ...]:
    if not isinstance(rows, (list, tuple)):
        raise MalformedLevel(f"'{name}' must be a list of rows, got {type(rows).__name__}")
    if len(rows) != height:
        raise MalformedLevel(f"'{name}' has {len(rows)} rows, expected {height}")

    frozen = []
    for y, row in enumerate(rows):
        if not isinstance(row, (list, tuple)):
            raise MalformedLevel(f"'{name}' row {y} is not a list")
        if len(row) != width:
            raise MalformedLevel(f"'{name}' row {y} has {len(row)} cols, expected {width}")
        for x, value in enumerate(row):
            # bool is a subclass of int, so number grids must reject it explicitly.
            if kind is int and (isinstance(value, bool) or not isinstance(value, int)):
                raise MalformedLevel(f"'{name}' entry at ({x},{y}) is not an integer: {value!r}")
            if kind is bool and not isinstance(value, bool):
                raise MalformedLevel(f"'{name}' entry at ({x},{y}) is not a boolean: {value!r}")
        frozen.append(tuple(row))
    return tuple(frozen)


@dataclass(frozen=True)
class Grid:
    """
    Immutable description of a puzzle instance.

    Rows are indexed `[y][x]`. A barrier is a property of an edge: `block_right[y][x]`
    sits between (x, y) and (x + 1, y), `block_up[y][x]` between (x, y) and (x, y - 1).
    """

    width: int
    height: int
    numbers: Tuple[Tuple[int, ...], ...]
    block_right: Optional[Tuple[Tuple[bool, ...], ...]] = None
    block_up: Optional[Tuple[Tuple[bool, ...], ...]] = None
    strict: bool = field(default=True, compare=False, repr=False)

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise MalformedLevel(f"'{name}' must be a positive integer, got {value!r}")

        blank = [[False] * self.width for _ in range(self.height)]
        numbers = _freeze_rows("cells", self.numbers, self.width, self.height, int)
        # A missing barrier array means no barriers; an empty or falsy one is still shape-checked.
        block_right = _freeze_rows(
            "blockRight", blank if self.block_right is None else self.block_right, self.width, self.height, bool
        )
        block_up = _freeze_rows(
            "blockUp", blank if self.block_up is None else self.block_up, self.width, self.height, bool
        )

        # Normalize to tuples on the frozen instance.
        object.__setattr__(self, "numbers", numbers)
        object.__setattr__(self, "block_right", block_right)
        object.__setattr__(self, "block_up", block_up)

        if self.strict:
            self.validate()

    def validate(self) -> None:
        """
        Checks the numbering: exactly one start cell, no negative labels, and the
        nonzero labels sorted form 1..N without gaps or repeats.
        Raises MalformedLevel with a description of the first problem found.
        """
        labels = []
        for cell in self.cells():
            n = self.numbers[cell.y][cell.x]
            if n < 0:
                raise MalformedLevel(f"Cell {cell} has negative number {n}")
            if n:
                labels.append(n)

        starts = labels.count(1)
        if starts != 1:
            raise MalformedLevel(f"Expected exactly one cell numbered 1, found {starts}")

        labels.sort()
        expected = list(range(1, len(labels) + 1))
        if labels != expected:
            raise MalformedLevel(f"Numbers must form the contiguous range 1..{len(labels)}, got {labels}")

    # Geometry

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def in_bounds(self, cell: Tuple[int, int]) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def cells(self) -> Iterator[Cell]:
        for y in range(self.height):
            for x in range(self.width):
                yield Cell(x, y)

    def neighbors(self, cell: Tuple[int, int]) -> List[Cell]:
        self.check_bounds(cell)
        result = []
        for direction in Direction:
            nxt = direction.step(cell)
            if self.in_bounds(nxt):
                result.append(nxt)
        return result

    def is_adjacent(self, a: Tuple[int, int], b: Tuple[int, int]) -> bool:
        return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1

    # Labels

    def number(self, cell: Tuple[int, int]) -> int:
        self.check_bounds(cell)
        return self.numbers[cell[1]][cell[0]]

    @property
    def start_cell(self) -> Cell:
        for cell in self.cells():
            if self.numbers[cell.y][cell.x] == 1:
                return cell
        raise MalformedLevel("Grid has no cell numbered 1")

    @property
    def max_number(self) -> int:
        labeled = self.checkpoints()
        return labeled[-1][0] if labeled else 0

    def checkpoints(self) -> List[Tuple[int, Cell]]:
        """All labeled cells as (number, cell), sorted by number."""
        found = [(self.numbers[c.y][c.x], c) for c in self.cells() if self.numbers[c.y][c.x]]
        return sorted(found)

    # Barriers

    def blocked_right(self, cell: Tuple[int, int]) -> bool:
        self.check_bounds(cell)
        return self.block_right[cell[1]][cell[0]]

    def blocked_up(self, cell: Tuple[int, int]) -> bool:
        self.check_bounds(cell)
        return self.block_up[cell[1]][cell[0]]

    def blocked_left(self, cell: Tuple[int, int]) -> bool:
        self.check_bounds(cell)
        x, y = cell
        return x > 0 and self.block_right[y][x - 1]

    def blocked_down(self, cell: Tuple[int, int]) -> bool:
        self.check_bounds(cell)
        x, y = cell
        return y + 1 < self.height and self.block_up[y + 1][x]

    def is_edge_blocked(self, a: Tuple[int, int], b: Tuple[int, int]) -> bool:
        self.check_bounds(a)
        self.check_bounds(b)
        direction = Direction.between(a, b)
        if direction is Direction.RIGHT:
            return self.blocked_right(a)
        if direction is Direction.LEFT:
            return self.blocked_right(b)
        if direction is Direction.UP:
            return self.blocked_up(a)
        return self.blocked_up(b)

    def check_bounds(self, cell: Tuple[int, int]) -> None:
        if not self.in_bounds(cell):
            raise InvalidArgument(f"Cell {tuple(cell)} is outside the {self.width}x{self.height} grid")

    # Conversion

    @classmethod
    def from_description(cls, description: Mapping[str, Any], strict: bool = True) -> "Grid":
        """
        Builds a Grid from a level mapping with keys `width`, `height`, `cells` and
        optionally `blockRight` / `blockUp`. Missing barrier arrays mean no barriers.
        """
        if not isinstance(description, Mapping):
            raise MalformedLevel(f"Level description must be a mapping, got {type(description).__name__}")
        for key in ("width", "height", "cells"):
            if key not in description:
                raise MalformedLevel(f"Level description is missing '{key}'")

        return cls(
            width=description["width"],
            height=description["height"],
            numbers=description["cells"],
            block_right=description.get("blockRight"),
            block_up=description.get("blockUp"),
            strict=strict,
        )

    def to_description(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "cells": [list(row) for row in self.numbers],
            "blockRight": [list(row) for row in self.block_right],
            "blockUp": [list(row) for row in self.block_up],
        }

    @classmethod
    def from_rows(
        cls,
        numbers: Sequence[Sequence[int]],
        block_right: Optional[Sequence[Sequence[bool]]] = None,
        block_up: Optional[Sequence[Sequence[bool]]] = None,
        strict: bool = True,
    ) -> "Grid":
        height = len(numbers)
        width = len(numbers[0]) if numbers else 0
        return cls(
            width=width,
            height=height,
            numbers=tuple(tuple(row) for row in numbers),
            block_right=block_right,  # type: ignore[arg-type]
            block_up=block_up,  # type: ignore[arg-type]
            strict=strict,
        )

    def to_string(self) -> str:
        """Plain-text dump: numbers (or '.'), '|' for right barriers, a line of '-' marks under up barriers."""
        col_width = max(len(str(self.max_number)), 1)
        res = []
        for y in range(self.height):
            if y > 0:
                parts = []
                for x in range(self.width):
                    mark = "-" if self.block_up[y][x] else " "
                    parts.append(mark * col_width)
                separator = " ".join(parts).rstrip()
                if separator:
                    res.append(separator)
            line = ""
            for x in range(self.width):
                n = self.numbers[y][x]
                line += (str(n) if n else ".").rjust(col_width)
                if x < self.width - 1:
                    line += "|" if self.block_right[y][x] else " "
            res.append(line)
        return "\n".join(res) + "\n"
