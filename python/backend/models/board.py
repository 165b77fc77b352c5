"""Board model for the inertia game: cells, directions, and slide physics."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class Direction(StrEnum):
    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"

    @property
    def delta(self) -> tuple[int, int]:
        """Unit (row, col) step for this direction."""
        return _DELTAS[self]

    @classmethod
    def from_click(
        cls, src_row: int, src_col: int, dst_row: int, dst_col: int
    ) -> Direction | None:
        """Map the sign of the offset between two cells to a direction.

        Returns ``None`` when both cells are the same.
        """
        dr = (dst_row > src_row) - (dst_row < src_row)
        dc = (dst_col > src_col) - (dst_col < src_col)
        if dr == 0 and dc == 0:
            return None
        for d in cls:
            if d.delta == (dr, dc):
                return d
        return None


_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.N: (-1, 0),
    Direction.NE: (-1, 1),
    Direction.E: (0, 1),
    Direction.SE: (1, 1),
    Direction.S: (1, 0),
    Direction.SW: (1, -1),
    Direction.W: (0, -1),
    Direction.NW: (-1, -1),
}


class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def shield_quota(self) -> int:
        """Number of shields placed on a freshly generated board."""
        return 4 if self is Difficulty.HARD else 2


@dataclass
class Cell:
    wall: bool = False
    gem: bool = False
    mine: bool = False
    shield: bool = False
    stop: bool = False

    @property
    def is_special(self) -> bool:
        return self.wall or self.gem or self.mine or self.shield or self.stop


@dataclass(frozen=True)
class SlideResult:
    """Outcome of sliding from a cell until blocked."""

    row: int
    col: int
    gems: int = 0
    shields: int = 0
    hit_mine: bool = False

    @property
    def position(self) -> tuple[int, int]:
        return (self.row, self.col)


# ASCII glyphs used by from_strings / to_strings.
_GLYPHS = {
    "#": "wall",
    "g": "gem",
    "m": "mine",
    "s": "shield",
    "o": "stop",
}


@dataclass
class Board:
    """The playing grid.

    Cells are stored as a 2D list of :class:`Cell`.  The outer ring is wall
    on every generated board; the human always starts at ``(1, 1)`` and the
    computer at ``(rows - 2, cols - 2)``.
    """

    rows: int
    cols: int
    grid: list[list[Cell]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.grid:
            self.grid = [[Cell() for _ in range(self.cols)] for _ in range(self.rows)]

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_strings(cls, lines: list[str]) -> Board:
        """Create a board from an ASCII layout, one string per row.

        Example::

            Board.from_strings([
                "#####",
                "#.g.#",
                "#.m.#",
                "#..s#",
                "#####",
            ])

        ``#`` wall, ``.`` empty, ``g`` gem, ``m`` mine, ``s`` shield,
        ``o`` stop marker.
        """
        if not lines:
            raise ValueError("Expected at least one row.")
        cols = len(lines[0])
        grid: list[list[Cell]] = []
        for r, line in enumerate(lines):
            if len(line) != cols:
                raise ValueError(
                    f"Row {r} has {len(line)} cells, expected {cols}."
                )
            row: list[Cell] = []
            for c, ch in enumerate(line):
                cell = Cell()
                if ch in _GLYPHS:
                    setattr(cell, _GLYPHS[ch], True)
                elif ch != ".":
                    raise ValueError(f"Unknown glyph {ch!r} at ({r}, {c}).")
                row.append(cell)
            grid.append(row)
        return cls(rows=len(lines), cols=cols, grid=grid)

    def to_strings(self) -> list[str]:
        lines: list[str] = []
        for row in self.grid:
            chars: list[str] = []
            for cell in row:
                ch = "."
                for glyph, flag in _GLYPHS.items():
                    if getattr(cell, flag):
                        ch = glyph
                        break
                chars.append(ch)
            lines.append("".join(chars))
        return lines

    # -- queries --------------------------------------------------------------

    @property
    def human_start(self) -> tuple[int, int]:
        return (1, 1)

    @property
    def cpu_start(self) -> tuple[int, int]:
        return (self.rows - 2, self.cols - 2)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, row: int, col: int) -> Cell:
        return self.grid[row][col]

    def gems_left(self) -> int:
        return sum(cell.gem for row in self.grid for cell in row)

    def any_gem_left(self) -> bool:
        return any(cell.gem for row in self.grid for cell in row)

    def copy(self) -> Board:
        return Board(
            rows=self.rows,
            cols=self.cols,
            grid=[
                [
                    Cell(c.wall, c.gem, c.mine, c.shield, c.stop)
                    for c in row
                ]
                for row in self.grid
            ],
        )

    # -- physics --------------------------------------------------------------

    def slide(
        self, row: int, col: int, direction: Direction, mutate: bool = False
    ) -> SlideResult:
        """Slide from ``(row, col)`` in *direction* until blocked.

        Walls and the grid edge stop the slide before the blocking cell; a
        stop marker stops it on the marker after its item is collected; a
        mine stops it on the mine with ``hit_mine`` set (the mine is not
        counted).  Gems and shields passed over are counted and, when
        *mutate* is true, removed from the grid.
        """
        dr, dc = direction.delta
        r, c = row, col
        gems = shields = 0

        while True:
            nr, nc = r + dr, c + dc
            if not self.in_bounds(nr, nc) or self.grid[nr][nc].wall:
                break
            r, c = nr, nc
            cell = self.grid[r][c]

            if cell.mine:
                return SlideResult(r, c, gems, shields, hit_mine=True)
            if cell.gem:
                gems += 1
                if mutate:
                    cell.gem = False
            if cell.shield:
                shields += 1
                if mutate:
                    cell.shield = False
            if cell.stop:
                break

        return SlideResult(r, c, gems, shields)
