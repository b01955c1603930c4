"""
Knight's Tour Solver - Entry Point

Runs the selected tour strategies from one start cell and prints a
comparison table (or JSON).

Example:
    python main.py
    python main.py --size 6 --row 0 --col 0 --strategies warnsdorff,warnsdorff_dfs
    python main.py --size 8 --timeout 10 --parallel --json
"""

import sys
import json
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from knights_tour.runner import (
    run_comparison,
    strategy_options_from_settings,
    summarize,
)
from knights_tour.settings import SETTINGS_FILE, load_settings
from knights_tour.solver import (
    Position,
    board_center,
    get_strategy_info,
)


logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False, log_file: Optional[str] = None) -> None:
    """Configure logging - console output plus optional file."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Knight's Tour Solver - Compare tour search strategies"
    )
    parser.add_argument(
        "--size", "-n",
        type=int,
        help="Board size N (default: from settings, 5)"
    )
    parser.add_argument(
        "--row", "-r",
        type=int,
        help="Start row (default: board center)"
    )
    parser.add_argument(
        "--col", "-c",
        type=int,
        help="Start column (default: board center)"
    )
    parser.add_argument(
        "--strategies", "-s",
        help="Comma-separated strategy names (default: all)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for randomized strategies"
    )
    parser.add_argument(
        "--timeout", "-t",
        type=float,
        help="Per-strategy time budget in seconds"
    )
    parser.add_argument(
        "--parallel", "-p",
        action="store_true",
        help="Run strategies on separate worker threads"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print full results (including paths) as JSON"
    )
    parser.add_argument(
        "--config",
        default=str(SETTINGS_FILE),
        help=f"Settings file (default: {SETTINGS_FILE})"
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available strategies and exit"
    )
    parser.add_argument(
        "--log-file",
        help="Also write log output to this file"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    return parser.parse_args(argv)


def print_table(rows) -> None:
    """Print comparison rows as an aligned table."""
    print(f"{'Strategy':<22}{'Result':<10}{'Steps':>10}  {'Time':>10}")
    print("-" * 54)
    for row in rows:
        status = "success" if row["success"] else ("timeout" if row["cancelled"] else "failed")
        steps = f"{row['steps']}/{row['total']}"
        print(f"{row['name']:<22}{status:<10}{steps:>10}  {row['time']:>10}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the comparison.

    Returns:
        0 if any strategy found a tour, 1 if none did, 2 on bad input
    """
    args = parse_args(argv)
    settings = load_settings(Path(args.config))
    setup_logging(args.debug or settings.get("debug_enabled", False), args.log_file)

    if args.list:
        for info in get_strategy_info():
            print(f"{info['name']:<22}{info['description']}")
        return 0

    board_size = args.size if args.size is not None else settings["board_size"]
    if args.strategies:
        names = [name.strip() for name in args.strategies.split(",") if name.strip()]
    else:
        names = settings.get("strategies")
    seed = args.seed if args.seed is not None else settings.get("seed")
    timeout = args.timeout if args.timeout is not None else settings.get("timeout_sec")
    parallel = args.parallel or settings.get("parallel", False)

    try:
        center = board_center(board_size)
        start = Position(
            args.row if args.row is not None else center.row,
            args.col if args.col is not None else center.col,
        )
        results = run_comparison(
            start, board_size, names,
            parallel=parallel,
            timeout_sec=timeout,
            seed=seed,
            strategy_options=strategy_options_from_settings(settings),
        )
    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps({
            "boardSize": board_size,
            "start": {"row": start.row, "col": start.col},
            "results": [result.to_dict() for result in results],
        }, indent=2))
    else:
        print(f"Knight's tour on {board_size}x{board_size} from {start}\n")
        print_table(summarize(results, board_size))

    return 0 if any(result.success for result in results) else 1


if __name__ == "__main__":
    sys.exit(main())
