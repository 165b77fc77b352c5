#!/usr/bin/env python3
"""Inertia — slide, collect gems, dodge mines, beat the computer.

Usage::

    python main.py                  # interactive menu
    python main.py -d hard          # straight into a hard game
    python main.py --seed 7 -r 10   # reproducible 10×12 board
    python main.py -v               # debug logging from the engine
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.models.board import Difficulty  # noqa: E402


# -- helpers ------------------------------------------------------------------


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    difficulty: Optional[Difficulty] = typer.Option(
        None, "-d", "--difficulty",
        case_sensitive=False,
        help="Opponent tier. Omit for interactive menu.",
    ),
    rows: int = typer.Option(
        12, "-r", "--rows",
        min=5, max=30,
        help="Board height including the wall ring (5-30).",
    ),
    cols: int = typer.Option(
        12, "-c", "--cols",
        min=5, max=30,
        help="Board width including the wall ring (5-30).",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed for board generation.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log engine decisions at debug level.",
    ),
) -> None:
    """Inertia — a sliding gem duel against the computer."""
    _setup_logging(verbose)

    from frontend.cli.rich.app import run

    if difficulty is None:
        run(rows=rows, cols=cols, seed=seed, menu=True)
        return

    run(difficulty=difficulty, rows=rows, cols=cols, seed=seed, menu=False)


if __name__ == "__main__":
    app()
