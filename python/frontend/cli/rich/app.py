"""Rich terminal frontend — coloured grid, score panel, and menu.

Uses the ``rich`` library for styled output.  All game rules live in the
backend; this module only draws the board and forwards keypresses.
"""

from __future__ import annotations

import random

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gameplay import GamePlay
from backend.models.board import Board, Difficulty, Direction
from frontend.cli.input_handler import get_key, to_direction

console = Console()


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


# -- board rendering ----------------------------------------------------------

_CELL_MARKUP = {
    "#": "[on #45475a]   [/on #45475a]",
    "g": "[bold magenta] ◆ [/bold magenta]",
    "m": "[bold red] ✹ [/bold red]",
    "s": "[bold cyan] ◈ [/bold cyan]",
    "o": "[yellow] □ [/yellow]",
    ".": "[dim] · [/dim]",
}


def _render_board(game: GamePlay) -> Table:
    """Return a Rich Table representing the playing grid."""
    board: Board = game.board
    human, cpu = game.state.human, game.state.cpu
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=False,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 0),
    )
    for _ in range(board.cols):
        table.add_column(width=3, justify="center")

    for r, line in enumerate(board.to_strings()):
        cells: list[str] = []
        for c, ch in enumerate(line):
            if (r, c) == human.position:
                cells.append("[bold black on green] H [/bold black on green]")
            elif (r, c) == cpu.position:
                cells.append("[bold black on red] C [/bold black on red]")
            else:
                cells.append(_CELL_MARKUP[ch])
        table.add_row(*cells)

    return table


def _render_scores(game: GamePlay) -> Text:
    state = game.state
    stats = Text()
    stats.append("  You: ", style="dim")
    stats.append(str(state.human.score), style="bold green")
    stats.append(f" ◈{state.human.shields}", style="cyan")
    stats.append("    CPU: ", style="dim")
    stats.append(str(state.cpu.score), style="bold red")
    stats.append(f" ◈{state.cpu.shields}", style="cyan")
    stats.append("    Gems left: ", style="dim")
    stats.append(str(game.board.gems_left()), style="bold magenta")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(state.elapsed_time), style="bold yellow")
    return stats


# -- screens ------------------------------------------------------------------


def _draw_menu(difficulty: Difficulty) -> None:
    """Draw the main menu."""
    console.clear()

    levels = Text()
    for i, level in enumerate(Difficulty):
        if i:
            levels.append("  ")
        if level is difficulty:
            levels.append(f" {level.value.upper()} ", style="bold green on #313244")
        else:
            levels.append(f" {level.value.upper()} ", style="dim")

    nav = Text("  \u2190 \u2192 / A D  change difficulty", style="dim")

    opts = Text()
    opts.append("  Enter", style="bold cyan")
    opts.append("  Play    ")
    opts.append("H", style="bold cyan")
    opts.append("  Help    ")
    opts.append("Shift-Q", style="dim bold")
    opts.append("  Quit", style="dim")

    body = Group(
        Text(""),
        Align.center(levels),
        Align.center(nav),
        Text(""),
        Align.center(opts),
        Text(""),
    )

    panel = Panel(
        body,
        title="[bold]I N E R T I A[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )

    console.print()
    console.print(Align.center(panel))


def _draw_game(game: GamePlay, status: str = "") -> None:
    """Draw the game screen."""
    console.clear()

    controls = Text()
    controls.append("  Q W E / A D / Z X C", style="bold cyan")
    controls.append(" or arrows", style="dim")
    controls.append("  slide   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  restart   ", style="dim")
    controls.append("H", style="bold cyan")
    controls.append("  help   ", style="dim")
    controls.append("Shift-Q", style="bold cyan")
    controls.append("  back", style="dim")

    difficulty = game.state.difficulty.value.upper()
    border = "bold green" if game.is_over else "bright_blue"
    panel = Panel(
        Align.center(_render_board(game)),
        title=f"[bold cyan]Inertia  {difficulty}[/bold cyan]",
        border_style=border,
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(_render_scores(game)))
    if game.is_over:
        console.print(
            Align.center(Text(f"\n  {game.state.result}\n", style="bold yellow"))
        )
        console.print(
            Align.center(Text("  Press R to play again, Shift-Q to go back.", style="dim"))
        )
        return
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


_HELP_SECTIONS: list[tuple[str, list[str]]] = [
    (
        "HOW TO PLAY",
        [
            "Pick one of eight directions; your piece slides until a wall or a stop marker.",
            "Gems and shields you pass over are collected on the way.",
            "A mine ends the game for whoever lands on it without a shield.",
            "With a shield, the shield breaks and you survive standing on the mine.",
        ],
    ),
    (
        "GOAL",
        [
            "Collect more gems than the CPU before all gems are gone.",
            "The game also ends when neither player has a safe move left.",
        ],
    ),
    (
        "DIFFICULTY LEVELS",
        [
            "Easy: looks one slide ahead.",
            "Medium: searches a few slides ahead for the nearest gems.",
            "Hard: weighs whole move sequences, with extra shields on the board.",
        ],
    ),
]

_LEGEND: list[tuple[str, str]] = [
    ("g", "gem"),
    ("s", "shield"),
    ("m", "mine"),
    ("o", "stop marker"),
    ("#", "wall"),
    (".", "empty"),
]


def _render_help() -> Panel:
    """Return the rules and glyph legend as a single panel."""
    parts: list[Text | Table] = []
    for title, lines in _HELP_SECTIONS:
        parts.append(Text(title, style="bold cyan"))
        for line in lines:
            parts.append(Text(f"  • {line}"))
        parts.append(Text(""))

    legend = Table(show_header=False, box=None, padding=(0, 1))
    legend.add_column(width=3, justify="center")
    legend.add_column(style="dim")
    for glyph, name in _LEGEND:
        legend.add_row(_CELL_MARKUP[glyph], name)
    legend.add_row("[bold black on green] H [/bold black on green]", "you")
    legend.add_row("[bold black on red] C [/bold black on red]", "computer")
    parts.append(Text("LEGEND", style="bold cyan"))
    parts.append(legend)

    return Panel(
        Group(*parts),
        title="[bold]H O W   T O   P L A Y[/bold]",
        border_style="bright_blue",
        padding=(1, 2),
    )


def _draw_help() -> None:
    """Full-screen help view; returns after any key."""
    console.clear()
    console.print()
    console.print(Align.center(_render_help()))
    console.print(Align.center(Text("\n  Press any key to go back.\n", style="dim")))
    get_key()


# -- game loop ----------------------------------------------------------------


def _play_game(
    difficulty: Difficulty, rows: int, cols: int, rng: random.Random
) -> None:
    status: list[str] = []

    def flash(row: int, col: int) -> None:
        status.append(f"[bold cyan]Shield shattered at ({row}, {col})![/bold cyan]")

    def new_game() -> GamePlay:
        return GamePlay(rows, cols, difficulty, rng, on_shield_break=flash)

    game = new_game()
    while True:
        _draw_game(game, "  ".join(status))
        status.clear()
        key = get_key()

        direction = to_direction(key)
        if direction is not None and not game.is_over:
            game.play_turn(direction)
        elif key == "restart":
            game = new_game()
        elif key == "help":
            game.state.pause()
            _draw_help()
            game.state.resume()
        elif key == "quit":
            return


# -- menu loop ----------------------------------------------------------------


def _step_difficulty(difficulty: Difficulty, direction: Direction | None) -> Difficulty:
    """West lowers the difficulty and east raises it; anything else keeps it."""
    levels = list(Difficulty)
    i = levels.index(difficulty)
    if direction is Direction.W:
        i = max(0, i - 1)
    elif direction is Direction.E:
        i = min(len(levels) - 1, i + 1)
    return levels[i]


def _menu_loop(difficulty: Difficulty, rows: int, cols: int, rng: random.Random) -> None:
    while True:
        _draw_menu(difficulty)
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
        elif key == "enter":
            _play_game(difficulty, rows, cols, rng)
        elif key == "help":
            _draw_help()
        else:
            difficulty = _step_difficulty(difficulty, to_direction(key))


# -- public entry point -------------------------------------------------------


def run(
    difficulty: Difficulty = Difficulty.MEDIUM,
    rows: int = 12,
    cols: int = 12,
    seed: int | None = None,
    menu: bool = True,
) -> None:
    """Launch the Rich frontend, optionally skipping the menu."""
    rng = random.Random(seed)
    if menu:
        _menu_loop(difficulty, rows, cols, rng)
    else:
        _play_game(difficulty, rows, cols, rng)
