import argparse
import logging
import sys
from pathlib import Path

# Add project root to sys path so we can import from zip_puzzle
current_dir = Path(__file__).resolve().parent
project_root = current_dir.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from zip_puzzle.generator import Generator  # noqa: E402
from zip_puzzle.io import write_level  # noqa: E402
from zip_puzzle.solver import create_solver  # noqa: E402


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate Zip levels")
    parser.add_argument("--width", type=int, default=6, help="Grid width")
    parser.add_argument("--height", type=int, default=6, help="Grid height")
    parser.add_argument("--checkpoints", type=int, default=8, help="Number of numbered cells")
    parser.add_argument("--barriers", type=float, default=0.1, help="Fraction of unused edges to block")
    parser.add_argument("--count", type=int, default=1, help="Number of levels to generate")
    parser.add_argument("--jobs", type=int, default=1, help="Parallel workers (-1 for all cores)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--allow-ambiguous", action="store_true", help="Skip the uniqueness check")
    parser.add_argument("--out", type=str, default="scripts/output", help="Output directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(message)s")

    gen = Generator(solver=create_solver())
    grids, stats = gen.generate_many(
        count=args.count,
        width=args.width,
        height=args.height,
        checkpoints=args.checkpoints,
        n_jobs=args.jobs,
        seed=args.seed,
        barrier_fraction=args.barriers,
        require_unique=not args.allow_ambiguous,
    )

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)
    for i, grid in enumerate(grids, 1):
        file_path = out_dir / f"level_{args.width}x{args.height}_{i:03d}.json"
        write_level(grid, file_path)
        print(f"\nLevel {i} -> {file_path}")
        print(grid.to_string())

    print("Generation Statistics:")
    print(f"  Levels generated: {stats.puzzles_successfully_generated}")
    print(f"  Rejected as ambiguous: {stats.puzzles_rejected_ambiguous}")
    print(f"  Rejected on solver budget: {stats.puzzles_rejected_timeout}")
    print(f"  Barriers added for uniqueness: {stats.barriers_added_for_uniqueness}")


if __name__ == "__main__":
    main()
