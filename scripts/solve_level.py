import argparse
import sys
from pathlib import Path

# Add project root to sys path so we can import from zip_puzzle
current_dir = Path(__file__).resolve().parent
project_root = current_dir.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from zip_puzzle.config import load_config  # noqa: E402
from zip_puzzle.io import read_level  # noqa: E402
from zip_puzzle.solver import SolverStatus, create_solver  # noqa: E402


def main() -> None:
    parser = argparse.ArgumentParser(description="Solve a Zip level")
    parser.add_argument("level", help="Path to a .json or .yaml level file")
    parser.add_argument("--count", type=int, default=1, help="Stop after this many solutions")
    args = parser.parse_args()

    config = load_config()
    level_path = Path(args.level)
    if not level_path.exists():
        print(f"Error: {level_path} not found")
        return

    grid = read_level(level_path, validate=config.validate_levels)
    print(grid.to_string())

    solver = create_solver(config)
    result = solver.solve(grid, max_solutions=args.count)

    print(f"Status: {result.status.value}")
    print(f"Nodes explored: {result.nodes_explored} in {result.elapsed:.3f}s")
    if result.status == SolverStatus.SOLVED:
        for i, path in enumerate(result.solutions, 1):
            print(f"Solution {i}: " + " ".join(str(cell) for cell in path))
        if not result.exhaustive:
            print("(search stopped early, more solutions may exist)")


if __name__ == "__main__":
    main()
