"""Generates random boards whose gems are all reachable by sliding."""

from __future__ import annotations

import logging
import random
from collections import deque

from backend.models.board import Board, Difficulty, Direction

logger = logging.getLogger(__name__)

# Cumulative percentile bands for populating an interior cell.
WALL_BAND = 12
GEM_BAND = 30
STOP_BAND = 42
MINE_BAND = 48
SHIELD_BAND = 52


class GameGenerator:
    """Builds boards from a caller-supplied random source."""

    @staticmethod
    def empty(rows: int, cols: int) -> Board:
        """Return a board with only the outer wall ring."""
        board = Board(rows=rows, cols=cols)
        for r in range(rows):
            for c in range(cols):
                if r in (0, rows - 1) or c in (0, cols - 1):
                    board.grid[r][c].wall = True
        return board

    @staticmethod
    def generate(
        rows: int,
        cols: int,
        difficulty: Difficulty = Difficulty.MEDIUM,
        rng: random.Random | None = None,
    ) -> Board:
        """Return a random board of the given size.

        The same *rng* state always yields the same board.  Boards smaller
        than 5x5 are not supported.
        """
        if rng is None:
            rng = random.Random()

        board = GameGenerator.empty(rows, cols)
        quota = difficulty.shield_quota
        shields = 0

        for r in range(1, rows - 1):
            for c in range(1, cols - 1):
                if GameGenerator._in_start_zone(board, r, c):
                    continue
                cell = board.grid[r][c]
                if cell.wall:
                    continue

                v = rng.randrange(100)
                if v < WALL_BAND:
                    cell.wall = True
                elif v < GEM_BAND:
                    cell.gem = True
                elif v < STOP_BAND:
                    cell.stop = True
                elif v < MINE_BAND:
                    cell.mine = True
                elif v < SHIELD_BAND and shields < quota:
                    cell.shield = True
                    shields += 1

        # Top up to the quota anywhere in the interior that is still empty.
        while shields < quota:
            r = 1 + rng.randrange(rows - 2)
            c = 1 + rng.randrange(cols - 2)
            cell = board.grid[r][c]
            if not cell.is_special:
                cell.shield = True
                shields += 1

        removed = GameGenerator.prune_unreachable_gems(board)
        logger.debug(
            "Generated %dx%d %s board: %d gems, %d shields, %d unreachable gems pruned",
            rows, cols, difficulty, board.gems_left(), shields, removed,
        )
        return board

    # -- reachability ---------------------------------------------------------

    @staticmethod
    def reachable_gems(board: Board) -> set[tuple[int, int]]:
        """Return every gem cell some slide sequence from the human start passes over.

        Breadth-first search over slide endpoints.  Slides ending on a mine
        are not expanded, but gems passed before the mine still count.
        """
        start = board.human_start
        visited = {start}
        queue = deque([start])
        reachable: set[tuple[int, int]] = set()

        while queue:
            r, c = queue.popleft()
            for d in Direction:
                GameGenerator._mark_path_gems(board, r, c, d, reachable)
                res = board.slide(r, c, d)
                if res.hit_mine:
                    continue
                if res.position not in visited:
                    visited.add(res.position)
                    queue.append(res.position)

        return reachable

    @staticmethod
    def prune_unreachable_gems(board: Board) -> int:
        """Delete gems no slide can reach.  Returns the number removed.

        Idempotent: pruning never changes which slides are possible, so a
        second pass finds nothing to remove.
        """
        reachable = GameGenerator.reachable_gems(board)
        removed = 0
        for r, row in enumerate(board.grid):
            for c, cell in enumerate(row):
                if cell.gem and (r, c) not in reachable:
                    cell.gem = False
                    removed += 1
        return removed

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _in_start_zone(board: Board, r: int, c: int) -> bool:
        for sr, sc in (board.human_start, board.cpu_start):
            if abs(r - sr) <= 1 and abs(c - sc) <= 1:
                return True
        return False

    @staticmethod
    def _mark_path_gems(
        board: Board, r: int, c: int, d: Direction, reachable: set[tuple[int, int]]
    ) -> None:
        dr, dc = d.delta
        while True:
            r, c = r + dr, c + dc
            if not board.in_bounds(r, c) or board.grid[r][c].wall:
                return
            cell = board.grid[r][c]
            if cell.gem:
                reachable.add((r, c))
            if cell.stop or cell.mine:
                return
