"""Module entry point for `python -m gridpath`."""

from __future__ import annotations

import argparse

from gridpath.app import run_editor, run_headless
from gridpath.config import SOLVER_BACKENDS, resolve_config
from gridpath.grid.contracts import Heuristic
from gridpath.logging_config import configure_logging


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Edit a grid and watch an A* search explore it."
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run one search and replay it in the terminal (no editor).",
    )
    parser.add_argument(
        "--maze",
        action="store_true",
        help="Generate a random maze before searching (headless mode only).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for maze generation (headless mode only).",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=None,
        help="Grid width and height (5-100).",
    )
    parser.add_argument(
        "--speed",
        type=int,
        default=None,
        help="Animation speed level (1-10).",
    )
    parser.add_argument(
        "--heuristic",
        choices=[item.value for item in Heuristic],
        default=None,
        help="Distance heuristic passed to the solver.",
    )
    parser.add_argument(
        "--no-animate",
        action="store_true",
        help="Apply the final result at once instead of replaying steps.",
    )
    parser.add_argument(
        "--solver",
        choices=SOLVER_BACKENDS,
        default=None,
        help="Solver backend: local (in-process) or http (remote service).",
    )
    parser.add_argument(
        "--solver-url",
        default=None,
        help="Base URL of the remote solver (http backend only).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Remote solver timeout in seconds.",
    )
    parser.add_argument(
        "--density",
        type=float,
        default=None,
        help="Wall probability for generated mazes (0-1).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )
    args = parser.parse_args(argv)

    try:
        config = resolve_config(
            grid_size=args.size,
            speed=args.speed,
            heuristic=args.heuristic,
            animate=False if args.no_animate else None,
            solver=args.solver,
            solver_url=args.solver_url,
            timeout=args.timeout,
            maze_density=args.density,
            log_level=args.log_level,
        )
    except ValueError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc

    configure_logging(config.log_level, tui=not args.headless)

    if args.headless:
        run_headless(config, maze=args.maze, seed=args.seed)
        return

    run_editor(config)


if __name__ == "__main__":
    main()
