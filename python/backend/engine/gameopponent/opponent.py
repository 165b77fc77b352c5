"""Computer opponent — picks a direction at one of three difficulty tiers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from backend.engine.gameopponent.regions import RegionPolicy, analyze, region_bonus
from backend.models.board import Board, Difficulty, Direction, SlideResult
from backend.models.player import Player

logger = logging.getLogger(__name__)

GEM_VALUE = 100
SHIELD_VALUE = 50
FATAL_SCORE = -1000
NO_OP_SCORE = -500

MEDIUM_DEPTH = 4
HARD_DEPTH = 4
DISCOUNT = 0.9

ADJACENT_GEM = 50
ADJACENT_SHIELD = 25
ADJACENT_MINE = -75


@dataclass
class _Candidate:
    """A gem pickup found by the medium search."""

    direction: Direction
    value: int
    depth: int
    bonus: int

    def beats(self, other: _Candidate) -> bool:
        # More gems, then shallower, then the better region.
        return (self.value, -self.depth, self.bonus) > (
            other.value, -other.depth, other.bonus
        )


@dataclass
class _Node:
    row: int
    col: int
    direction: Direction | None = None
    immediate: float = 0.0
    static: float = 0.0
    children: list[_Node] = field(default_factory=list)


class Opponent:
    """Stateless opponent — all methods are static and never mutate the board."""

    @staticmethod
    def choose(board: Board, player: Player, difficulty: Difficulty) -> Direction:
        """Return the direction *player* should slide in next."""
        policy = analyze(board)
        if difficulty is Difficulty.EASY:
            choice = Opponent.easy(board, player, policy)
        elif difficulty is Difficulty.HARD:
            choice = Opponent.hard(board, player, policy)
        else:
            choice = Opponent.medium(board, player, policy)
        logger.debug("%s opponent at %s chose %s", difficulty, player.position, choice)
        return choice

    # -- easy: one-ply scoring ------------------------------------------------

    @staticmethod
    def easy(board: Board, player: Player, policy: RegionPolicy) -> Direction:
        best, _ = Opponent._best_of(board, player, policy, list(Direction))
        return best

    @staticmethod
    def score_direction(
        board: Board, player: Player, policy: RegionPolicy, direction: Direction
    ) -> float:
        res = board.slide(player.row, player.col, direction)
        if res.hit_mine and player.shields == 0:
            return FATAL_SCORE
        if res.position == player.position:
            return NO_OP_SCORE
        return Opponent._move_value(board, policy, res)

    @staticmethod
    def _best_of(
        board: Board, player: Player, policy: RegionPolicy, directions: list[Direction]
    ) -> tuple[Direction, float]:
        """Best direction in *directions* by halving; the left half wins ties."""
        if len(directions) == 1:
            d = directions[0]
            return d, Opponent.score_direction(board, player, policy, d)

        mid = len(directions) // 2
        left = Opponent._best_of(board, player, policy, directions[:mid])
        right = Opponent._best_of(board, player, policy, directions[mid:])
        return left if left[1] >= right[1] else right

    # -- medium: bounded gem search -------------------------------------------

    @staticmethod
    def medium(board: Board, player: Player, policy: RegionPolicy) -> Direction:
        found = Opponent._search(
            board, policy, player.row, player.col, player.shields, frozenset(), 0
        )
        if found is None:
            return Opponent.easy(board, player, policy)
        return found.direction

    @staticmethod
    def _search(
        board: Board,
        policy: RegionPolicy,
        r: int,
        c: int,
        shields: int,
        visited: frozenset[tuple[int, int, int]],
        depth: int,
    ) -> _Candidate | None:
        if depth >= MEDIUM_DEPTH:
            return None

        best: _Candidate | None = None
        for d in Direction:
            res = board.slide(r, c, d)
            if _is_fatal(res, shields) or res.position == (r, c):
                continue

            if res.gems > 0:
                candidate = _Candidate(
                    d, res.gems, 1, region_bonus(board, policy, res.row, res.col)
                )
            else:
                key = (res.row, res.col, shields)
                if key in visited:
                    continue
                deeper = Opponent._search(
                    board, policy, res.row, res.col,
                    _next_shields(res, shields), visited | {key}, depth + 1,
                )
                if deeper is None:
                    continue
                candidate = _Candidate(d, deeper.value, deeper.depth + 1, deeper.bonus)

            if best is None or candidate.beats(best):
                best = candidate

        return best

    # -- hard: discounted lookahead tree --------------------------------------

    @staticmethod
    def hard(board: Board, player: Player, policy: RegionPolicy) -> Direction:
        root = Opponent._build(
            board, policy, player.row, player.col, player.shields, frozenset(), HARD_DEPTH
        )
        if not root.children:
            return Opponent.easy(board, player, policy)
        direction, _ = Opponent._evaluate(root)
        return direction

    @staticmethod
    def _build(
        board: Board,
        policy: RegionPolicy,
        r: int,
        c: int,
        shields: int,
        visited: frozenset[tuple[int, int]],
        depth: int,
    ) -> _Node:
        node = _Node(r, c)
        moves = Opponent.valid_moves(board, r, c, shields) if depth > 0 else []
        if not moves:
            node.static = Opponent.evaluate_position(board, policy, r, c)
            return node

        for d in moves:
            res = board.slide(r, c, d)
            if res.position in visited:
                continue
            child = Opponent._build(
                board, policy, res.row, res.col,
                _next_shields(res, shields), visited | {res.position}, depth - 1,
            )
            child.direction = d
            child.immediate = Opponent._move_value(board, policy, res)
            node.children.append(child)
        return node

    @staticmethod
    def _evaluate(node: _Node) -> tuple[Direction | None, float]:
        if not node.children:
            return node.direction, node.immediate + node.static

        best_dir: Direction | None = None
        best_value = 0.0
        for child in node.children:
            child_dir, child_total = Opponent._evaluate(child)
            value = child_total * DISCOUNT
            if best_dir is None or value > best_value:
                best_dir, best_value = child_dir, value

        direction = node.direction if node.direction is not None else best_dir
        return direction, node.immediate + best_value

    # -- shared helpers -------------------------------------------------------

    @staticmethod
    def valid_moves(board: Board, r: int, c: int, shields: int) -> list[Direction]:
        """Directions that move the piece without a fatal mine."""
        moves: list[Direction] = []
        for d in Direction:
            res = board.slide(r, c, d)
            if not _is_fatal(res, shields) and res.position != (r, c):
                moves.append(d)
        return moves

    @staticmethod
    def evaluate_position(board: Board, policy: RegionPolicy, r: int, c: int) -> float:
        """Static value of standing on ``(r, c)``: neighbouring items plus region bias."""
        score = 0.0
        for d in Direction:
            dr, dc = d.delta
            nr, nc = r + dr, c + dc
            if not board.in_bounds(nr, nc):
                continue
            cell = board.grid[nr][nc]
            if cell.gem:
                score += ADJACENT_GEM
            if cell.shield:
                score += ADJACENT_SHIELD
            if cell.mine:
                score += ADJACENT_MINE
        return score + region_bonus(board, policy, r, c)

    @staticmethod
    def _move_value(board: Board, policy: RegionPolicy, res: SlideResult) -> float:
        return (
            GEM_VALUE * res.gems
            + SHIELD_VALUE * res.shields
            + region_bonus(board, policy, res.row, res.col)
        )


def _is_fatal(res: SlideResult, shields: int) -> bool:
    return res.hit_mine and shields == 0


def _next_shields(res: SlideResult, shields: int) -> int:
    nxt = shields + res.shields
    if res.hit_mine and nxt > 0:
        nxt -= 1
    return nxt


def choose_move(board: Board, player: Player, difficulty: Difficulty) -> Direction:
    """Module-level shortcut for :meth:`Opponent.choose`."""
    return Opponent.choose(board, player, difficulty)
