"""Rich frontend helpers that do not need a terminal."""

from __future__ import annotations

import pytest
from rich.console import Console

from backend.models.board import Difficulty, Direction
from frontend.cli.input_handler import to_direction
from frontend.cli.rich.app import _render_help, _step_difficulty


def _text(renderable) -> str:
    console = Console(record=True, width=100)
    console.print(renderable)
    return console.export_text()


# -- help screen --------------------------------------------------------------


def test_help_lists_rules_and_goal() -> None:
    text = _text(_render_help())
    for heading in ("HOW TO PLAY", "GOAL", "DIFFICULTY LEVELS", "LEGEND"):
        assert heading in text
    assert "shield breaks" in text
    assert "Easy" in text and "Medium" in text and "Hard" in text


@pytest.mark.parametrize(
    ("glyph", "name"),
    [("◆", "gem"), ("◈", "shield"), ("✹", "mine"), ("□", "stop marker"), ("H", "you"), ("C", "computer")],
)
def test_help_legend_names_every_glyph(glyph: str, name: str) -> None:
    lines = _text(_render_help()).splitlines()
    assert any(glyph in line and name in line for line in lines)


# -- difficulty selection -----------------------------------------------------


@pytest.mark.parametrize(
    ("start", "key", "expected"),
    [
        (Difficulty.MEDIUM, "W", Difficulty.EASY),
        (Difficulty.MEDIUM, "E", Difficulty.HARD),
        (Difficulty.EASY, "W", Difficulty.EASY),
        (Difficulty.HARD, "E", Difficulty.HARD),
        (Difficulty.MEDIUM, "N", Difficulty.MEDIUM),
        (Difficulty.MEDIUM, "restart", Difficulty.MEDIUM),
        (Difficulty.MEDIUM, "7", Difficulty.MEDIUM),
    ],
)
def test_step_difficulty(start: Difficulty, key: str, expected: Difficulty) -> None:
    assert _step_difficulty(start, to_direction(key)) is expected


def test_step_difficulty_ignores_diagonals() -> None:
    assert _step_difficulty(Difficulty.MEDIUM, Direction.NE) is Difficulty.MEDIUM
