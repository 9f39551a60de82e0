"""Command-line interface for the Sudoku propagation stepper."""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from .batch import BatchRunner, load_puzzles
from .config import StepperConfig, build_grid, load_config
from .core.errors import InvalidInputError
from .core.grid import Grid
from .engine import PropagationEngine
from .render import RenderLoop, InteractiveViewer, save_animation, plot_progress, plot_candidate_heatmap, plot_batch_rounds


def main(argv: Optional[List[str]] = None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Sudoku & Variant Constraint-Propagation Stepper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Propagate a classic puzzle until it is solved or stalls
  python -m sudoku_stepper.cli solve --classic --puzzle "5300700006..."

  # Watch the reference non-consecutive instance round by round
  python -m sudoku_stepper.cli watch

  # Print every round with a manual override at x=4, y=4
  python -m sudoku_stepper.cli step --set 4,4,5 --delay 0

  # Propagate every puzzle in a file
  python -m sudoku_stepper.cli batch --file puzzles.txt --classic --output results/
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Propagate until stable and print the result")
    _add_variant_args(solve_parser)
    _add_puzzle_args(solve_parser)
    solve_parser.add_argument(
        "--charts", type=str, default=None,
        help="Directory for a progress chart and candidate heatmap"
    )

    # Step command
    step_parser = subparsers.add_parser("step", help="Print the grid after every round")
    _add_variant_args(step_parser)
    _add_puzzle_args(step_parser)

    # Watch command
    watch_parser = subparsers.add_parser("watch", help="Open an interactive window")
    _add_variant_args(watch_parser)
    _add_puzzle_args(watch_parser)

    # Animate command
    anim_parser = subparsers.add_parser("animate", help="Write a GIF of the rounds")
    _add_variant_args(anim_parser)
    _add_puzzle_args(anim_parser)
    anim_parser.add_argument(
        "--output", "-o", type=str, default="propagation.gif",
        help="Output GIF path (default: propagation.gif)"
    )
    anim_parser.add_argument(
        "--fps", type=int, default=4,
        help="Frames per second (default: 4)"
    )

    # Batch command
    batch_parser = subparsers.add_parser("batch", help="Propagate every puzzle in a file")
    _add_variant_args(batch_parser)
    batch_parser.add_argument(
        "--file", "-f", type=str, required=True,
        help="Puzzle file (.json list, or text with one puzzle per line)"
    )
    batch_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    batch_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    commands = {
        "solve": cmd_solve,
        "step": cmd_step,
        "watch": cmd_watch,
        "animate": cmd_animate,
        "batch": cmd_batch,
    }
    try:
        commands[args.command](args)
    except InvalidInputError as e:
        print(f"Error: {e}")
        sys.exit(1)


def _add_variant_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", "-c", type=str, default=None,
        help="JSON settings file (default: ./sudoku_stepper.json if present)"
    )
    parser.add_argument(
        "--classic", action="store_true",
        help="Disable the non-consecutive adjacency rule"
    )
    parser.add_argument(
        "--diagonals", action="store_true",
        help="Add both main diagonals as regions"
    )
    parser.add_argument(
        "--regions", type=str, default=None,
        help="JSON file with extra regions (list of [x, y] lists)"
    )
    parser.add_argument(
        "--max-rounds", type=int, default=None,
        help="Stop after this many rounds (default: 500)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log every round"
    )


def _add_puzzle_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--puzzle", "-p", type=str, default=None,
        help="Puzzle string (81 chars, 0 or . for empty); default is the reference instance"
    )
    parser.add_argument(
        "--set", dest="overrides", action="append", default=[], metavar="X,Y,D",
        help="Manual override, repeatable (x = column, y = row, both 0-8)"
    )
    parser.add_argument(
        "--delay", type=int, default=None,
        help="Milliseconds between rounds (default: 400)"
    )


def parse_override(text: str) -> Tuple[int, int, int]:
    """Parse an "X,Y,D" override."""
    parts = text.split(",")
    if len(parts) != 3:
        raise InvalidInputError(f"Override must look like X,Y,D, got {text!r}")
    try:
        x, y, digit = (int(p) for p in parts)
    except ValueError:
        raise InvalidInputError(f"Override must contain integers, got {text!r}")
    return x, y, digit


def resolve_config(args) -> StepperConfig:
    """Settings file plus command-line overrides."""
    config = load_config(args.config)
    config = config.updated(
        max_rounds=args.max_rounds,
        delay_ms=getattr(args, "delay", None),
        regions_file=args.regions,
    )
    if args.classic:
        config.adjacency = False
    if args.diagonals:
        config.diagonals = True
    return config


def resolve_grid(args, config: StepperConfig) -> Grid:
    grid = build_grid(config, args.puzzle)
    for text in args.overrides:
        grid.set_cell(*parse_override(text))
    return grid


def cmd_solve(args):
    """Handle the solve command."""
    config = resolve_config(args)
    grid = resolve_grid(args, config)

    print("Input grid:")
    print(grid)
    print()

    engine = PropagationEngine(grid, adjacency=config.adjacency)
    stats = engine.run(max_rounds=config.max_rounds)

    symbol = "✓" if stats.solved else "✗"
    print(f"{symbol} {stats.status.value} after {stats.rounds} rounds ({stats.time_seconds:.4f}s)")
    if "error" in stats.extra:
        print(f"  {stats.extra['error']}")
    if args.verbose:
        print(f"  Promotions: {stats.promotions:,}")
        print(f"  Eliminations: {stats.eliminations:,}")
        for name, counts in stats.per_pass.items():
            print(f"  {name}: {counts['promotions']} promotions, {counts['eliminations']} eliminations")
    print(f"  Solved cells: {grid.count_solved()}/81")
    print(grid)
    print(grid.to_string())

    if args.charts:
        print("\nGenerating charts...")
        for chart in (plot_progress(stats.history, args.charts), plot_candidate_heatmap(grid, args.charts)):
            print(f"  - {chart}")


def cmd_step(args):
    """Handle the step command."""
    config = resolve_config(args)
    grid = resolve_grid(args, config)
    engine = PropagationEngine(grid, adjacency=config.adjacency)

    def on_frame(frame_grid, frame_no):
        print(f"--- Round {frame_no} ({frame_grid.count_solved()}/81 solved, "
              f"{frame_grid.count_candidates()} candidates) ---")
        print(frame_grid)

    loop = RenderLoop(
        engine,
        on_frame=on_frame,
        delay=config.delay_seconds,
        max_frames=config.max_rounds,
        stop_when_stable=config.stop_when_stable
    )
    loop.run()

    if engine.halted:
        print(f"✗ Halted: {engine.contradiction}")
    elif grid.is_complete():
        print("✓ Solved")
    else:
        print("✗ Stalled")


def cmd_watch(args):
    """Handle the watch command."""
    config = resolve_config(args)
    grid = resolve_grid(args, config)
    engine = PropagationEngine(grid, adjacency=config.adjacency)

    viewer = InteractiveViewer(engine, delay_ms=config.delay_ms, cell_size=config.cell_size)
    viewer.show()


def cmd_animate(args):
    """Handle the animate command."""
    config = resolve_config(args)
    grid = resolve_grid(args, config)
    engine = PropagationEngine(grid, adjacency=config.adjacency)

    frames = save_animation(engine, args.output, max_frames=config.max_rounds, fps=args.fps)
    print(f"Saved {frames} frames to {args.output}")


def cmd_batch(args):
    """Handle the batch command."""
    config = resolve_config(args)
    puzzles = load_puzzles(args.file)

    print("=" * 60)
    print("PROPAGATION BATCH")
    print("=" * 60)
    print(f"Puzzles: {len(puzzles)}")
    print(f"Adjacency rule: {'on' if config.adjacency else 'off'}")
    print(f"Diagonals: {'on' if config.diagonals else 'off'}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    runner = BatchRunner(puzzles, config)
    results = runner.run()
    summary = runner.get_summary()

    print("\nBy status:")
    for status, count in sorted(summary["by_status"].items()):
        print(f"  {status}: {count}")
    if "solve_rate" in summary:
        print(f"Solve rate: {summary['solve_rate']:.1f}%")
    if "avg_rounds" in summary:
        print(f"Avg rounds: {summary['avg_rounds']:.1f}")

    for path in runner.save_results(args.output):
        print(f"  - {path}")

    if not args.no_charts and results:
        print("\nGenerating charts...")
        chart = plot_batch_rounds([r.to_dict() for r in results], args.output)
        print(f"  - {chart}")

    print("\n" + "=" * 60)
    print("Batch complete!")


if __name__ == "__main__":
    main()
