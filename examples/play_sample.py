# Copyright (C) 2026 Lukas Huwald
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

from zip_puzzle.engine import PuzzleEngine
from zip_puzzle.models import Grid


def main() -> None:
    # 3x3 level, barrier between the top-middle and top-right cells.
    grid = Grid.from_rows(
        [
            [1, 0, 0],
            [0, 2, 0],
            [0, 0, 3],
        ],
        block_right=[
            [False, True, False],
            [False, False, False],
            [False, False, False],
        ],
    )
    print(grid.to_string())

    engine = PuzzleEngine(grid)
    print(f"press (0,0): {engine.press((0, 0)).value}")

    while not engine.is_solved():
        nxt = engine.hint()
        if nxt is None:
            print("No way forward from here")
            break
        result = engine.try_move_to(nxt)
        snap = engine.snapshot()
        print(f"move {nxt}: {result.value}, {snap.cells_remaining} left, next number {snap.next_expected_number}")

    print("Solved!" if engine.is_solved() else "Not solved")
    print(" -> ".join(str(c) for c in engine.sequence))


if __name__ == "__main__":
    main()
