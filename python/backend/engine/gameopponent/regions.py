"""Quadtree region analysis used to bias the computer's move scoring.

The board is quartered recursively; every leaf is scored from its contents,
and the best and worst leaves form the :class:`RegionPolicy` for one
decision.  Nothing here outlives a single call to the opponent.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from backend.models.board import Board, Direction

ANALYSIS_DEPTH = 3
LEAF_AREA = 4

GEM_WEIGHT = 10.0
SHIELD_WEIGHT = 5.0
MINE_WEIGHT = -15.0
DEAD_END_WEIGHT = -8.0
WALL_WEIGHT = -0.5

DEAD_END_BLOCKED = 6

BEST_REGION_BONUS = 30
WORST_REGION_BONUS = -40


@dataclass
class Region:
    """Half-open rectangle ``[row_start, row_end) x [col_start, col_end)``."""

    row_start: int
    row_end: int
    col_start: int
    col_end: int
    index: int = 0
    gems: int = 0
    shields: int = 0
    mines: int = 0
    walls: int = 0
    dead_ends: int = 0
    score: float = 0.0
    subregions: list[Region] = field(default_factory=list)

    @property
    def area(self) -> int:
        return (self.row_end - self.row_start) * (self.col_end - self.col_start)

    def compute_score(self) -> float:
        raw = (
            GEM_WEIGHT * self.gems
            + SHIELD_WEIGHT * self.shields
            + MINE_WEIGHT * self.mines
            + DEAD_END_WEIGHT * self.dead_ends
            + WALL_WEIGHT * self.walls
        )
        # Normalise so large regions are not favoured just for their size.
        area = self.area
        return raw / math.sqrt(area) if area > 0 else raw


@dataclass
class RegionPolicy:
    best: Region | None
    worst: Region | None


def analyze(board: Board) -> RegionPolicy:
    """Build the region tree for *board* and pick its best and worst leaves."""
    root = _divide(board, Region(0, board.rows, 0, board.cols, 0), ANALYSIS_DEPTH)
    return RegionPolicy(best=_extreme(root, True), worst=_extreme(root, False))


def region_bonus(board: Board, policy: RegionPolicy, row: int, col: int) -> int:
    """Score adjustment for ending a move at ``(row, col)``.

    Positions are bucketed into four flat quadrants (1-4) split at the board
    midpoint, and the bucket is compared with the policy regions' tree
    indices.  The two numbering schemes do not describe the same areas
    below the first level of the tree.
    """
    index = quadrant_index(board, row, col)
    bonus = 0
    if policy.best is not None and index == policy.best.index:
        bonus += BEST_REGION_BONUS
    if policy.worst is not None and index == policy.worst.index:
        bonus += WORST_REGION_BONUS
    return bonus


def quadrant_index(board: Board, row: int, col: int) -> int:
    mid_row, mid_col = board.rows // 2, board.cols // 2
    if row < mid_row:
        return 1 if col < mid_col else 2
    return 3 if col < mid_col else 4


def is_dead_end(board: Board, row: int, col: int) -> bool:
    """A cell is a dead end when most of its neighbours are blocked."""
    blocked = 0
    for d in Direction:
        dr, dc = d.delta
        nr, nc = row + dr, col + dc
        if not board.in_bounds(nr, nc):
            blocked += 1
            continue
        cell = board.grid[nr][nc]
        if cell.wall or cell.mine:
            blocked += 1
    return blocked >= DEAD_END_BLOCKED


# -- recursion ----------------------------------------------------------------


def _divide(board: Board, region: Region, depth: int) -> Region:
    if depth == 0 or region.area <= LEAF_AREA:
        _tally(board, region)
        return region

    mid_row = (region.row_start + region.row_end) // 2
    mid_col = (region.col_start + region.col_end) // 2
    base = region.index * 4
    quadrants = [
        Region(region.row_start, mid_row, region.col_start, mid_col, base + 1),
        Region(region.row_start, mid_row, mid_col, region.col_end, base + 2),
        Region(mid_row, region.row_end, region.col_start, mid_col, base + 3),
        Region(mid_row, region.row_end, mid_col, region.col_end, base + 4),
    ]

    for quad in quadrants:
        sub = _divide(board, quad, depth - 1)
        region.gems += sub.gems
        region.shields += sub.shields
        region.mines += sub.mines
        region.walls += sub.walls
        region.dead_ends += sub.dead_ends
        region.subregions.append(sub)

    region.score = region.compute_score()
    return region


def _tally(board: Board, region: Region) -> None:
    for r in range(region.row_start, region.row_end):
        for c in range(region.col_start, region.col_end):
            cell = board.grid[r][c]
            if cell.wall:
                region.walls += 1
            elif cell.mine:
                region.mines += 1
            elif cell.gem:
                region.gems += 1
            elif cell.shield:
                region.shields += 1

            if not cell.wall and is_dead_end(board, r, c):
                region.dead_ends += 1
    region.score = region.compute_score()


def _extreme(region: Region, find_max: bool) -> Region:
    if not region.subregions:
        return region

    best = _extreme(region.subregions[0], find_max)
    for sub in region.subregions[1:]:
        candidate = _extreme(sub, find_max)
        if find_max and candidate.score > best.score:
            best = candidate
        elif not find_max and candidate.score < best.score:
            best = candidate
    return best
