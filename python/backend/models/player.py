"""Per-player position and inventory."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Player:
    row: int
    col: int
    score: int = 0
    shields: int = 0

    @property
    def position(self) -> tuple[int, int]:
        return (self.row, self.col)

    def move_to(self, row: int, col: int) -> None:
        self.row = row
        self.col = col
