"""Computer opponent — region analysis and the three difficulty tiers."""

from __future__ import annotations

import math
import random

import pytest

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameopponent import Opponent, Region, analyze, choose_move, region_bonus
from backend.engine.gameopponent.regions import is_dead_end, quadrant_index
from backend.models.board import Board, Difficulty, Direction
from backend.models.player import Player

# Regions below the first level of the tree: no region bonus anywhere.
OPEN = [
    "#######",
    "#.....#",
    "#.....#",
    "#.....#",
    "#.....#",
    "#.....#",
    "#######",
]

# CPU at (5,5) can only step west, onto a mine.
MINED_EXIT = [
    "#######",
    "#.....#",
    "#.....#",
    "#.....#",
    "#...###",
    "#...m.#",
    "#######",
]

BOXED = [
    "#######",
    "#.....#",
    "#.....#",
    "#.....#",
    "#...###",
    "#...#.#",
    "#######",
]


def _board(lines: list[str]) -> Board:
    return Board.from_strings(lines)


def _cpu(board: Board, shields: int = 0) -> Player:
    return Player(*board.cpu_start, shields=shields)


# -- regions ------------------------------------------------------------------


def test_region_score_is_normalised_by_area() -> None:
    region = Region(0, 2, 0, 2, gems=1, shields=1, mines=1, dead_ends=1, walls=2)
    assert region.compute_score() == pytest.approx((10 + 5 - 15 - 8 - 1) / math.sqrt(4))


def test_empty_region_keeps_raw_score() -> None:
    region = Region(3, 3, 0, 4, gems=2)
    assert region.area == 0
    assert region.compute_score() == 20


def test_quadrant_index_splits_at_midpoint() -> None:
    board = Board(rows=12, cols=12)
    assert quadrant_index(board, 0, 0) == 1
    assert quadrant_index(board, 5, 6) == 2
    assert quadrant_index(board, 6, 5) == 3
    assert quadrant_index(board, 11, 11) == 4


def test_dead_end_counts_walls_mines_and_edges() -> None:
    assert is_dead_end(_board(["#####", "#.#.#", "#####"]), 1, 1)
    assert not is_dead_end(_board(OPEN), 3, 3)
    mined = _board(["#####", "#mmm#", "#m.m#", "#m..#", "#####"])
    assert is_dead_end(mined, 2, 2)
    assert not is_dead_end(_board(["#####", "#m.m#", "#m.m#", "#...#", "#####"]), 2, 2)


def test_analysis_picks_best_and_worst_leaves() -> None:
    board = _board(["####", "#g.#", "#..#", "####"])
    policy = analyze(board)
    assert policy.best is not None and policy.worst is not None
    assert not policy.best.subregions and not policy.worst.subregions
    assert policy.best.index == 1
    assert policy.best.gems == 1
    assert policy.best.score == pytest.approx((10 - 1.5) / 2)
    # Three leaves tie for worst; the first one found wins.
    assert policy.worst.index == 2
    assert policy.worst.score == pytest.approx(-1.5 / 2)


def test_region_bonus_compares_flat_quadrant_with_tree_index() -> None:
    board = _board(["####", "#g.#", "#..#", "####"])
    policy = analyze(board)
    assert region_bonus(board, policy, 1, 1) == 30
    assert region_bonus(board, policy, 1, 2) == -40
    assert region_bonus(board, policy, 2, 1) == 0


def test_deep_tree_indices_never_match_flat_quadrants() -> None:
    board = _board(OPEN)
    policy = analyze(board)
    assert policy.best.index > 4 and policy.worst.index > 4
    for r in range(board.rows):
        for c in range(board.cols):
            assert region_bonus(board, policy, r, c) == 0


def test_analysis_leaves_board_untouched() -> None:
    board = GameGenerator.generate(12, 12, Difficulty.HARD, random.Random(1))
    before = board.to_strings()
    policy = analyze(board)
    assert policy.best.score >= policy.worst.score
    assert board.to_strings() == before


# -- easy ---------------------------------------------------------------------


def test_easy_takes_the_gem() -> None:
    board = _board(["#######", "#.....#", "#.....#", "#.....#", "#.....#", "#.g...#", "#######"])
    assert Opponent.easy(board, _cpu(board), analyze(board)) is Direction.W


def test_easy_ties_go_to_first_direction() -> None:
    board = _board(OPEN)
    assert Opponent.easy(board, _cpu(board), analyze(board)) is Direction.N


def test_easy_avoids_unshielded_mine() -> None:
    board = _board(["#######", "#.....#", "#.....#", "#.....#", "#.....#", "#.m...#", "#######"])
    assert Opponent.easy(board, _cpu(board), analyze(board)) is Direction.N


def test_easy_scores() -> None:
    board = _board(MINED_EXIT)
    policy = analyze(board)
    cpu = _cpu(board)
    assert Opponent.score_direction(board, cpu, policy, Direction.W) == -1000
    assert Opponent.score_direction(board, cpu, policy, Direction.N) == -500
    shielded = _cpu(board, shields=1)
    assert Opponent.score_direction(board, shielded, policy, Direction.W) == 0


def test_easy_still_answers_when_every_move_is_bad() -> None:
    board = _board(MINED_EXIT)
    choice = Opponent.easy(board, _cpu(board), analyze(board))
    assert choice is Direction.N


def test_easy_walks_onto_mine_with_a_shield() -> None:
    board = _board(MINED_EXIT)
    assert Opponent.easy(board, _cpu(board, shields=1), analyze(board)) is Direction.W


# -- medium -------------------------------------------------------------------


def test_medium_prefers_shallow_gem_path() -> None:
    board = _board(["#######", "#.....#", "#.....#", "#g....#", "#.....#", "#.....#", "#######"])
    policy = analyze(board)
    cpu = _cpu(board)
    assert Opponent.easy(board, cpu, policy) is Direction.N
    assert Opponent.medium(board, cpu, policy) is Direction.W


def test_medium_prefers_more_gems_over_shallower() -> None:
    board = _board(["#######", "#.....#", "#g....#", "#g...g#", "#.....#", "#.....#", "#######"])
    assert Opponent.medium(board, _cpu(board), analyze(board)) is Direction.W


@pytest.mark.parametrize("seed", range(4))
def test_medium_falls_back_to_easy_without_gems(seed: int) -> None:
    board = GameGenerator.generate(12, 12, Difficulty.MEDIUM, random.Random(seed))
    for row in board.grid:
        for cell in row:
            cell.gem = False
    policy = analyze(board)
    cpu = _cpu(board)
    assert Opponent.medium(board, cpu, policy) is Opponent.easy(board, cpu, policy)
    assert choose_move(board, cpu, Difficulty.MEDIUM) is choose_move(board, cpu, Difficulty.EASY)


def test_medium_boxed_in_falls_back() -> None:
    board = _board(BOXED)
    assert choose_move(board, _cpu(board), Difficulty.MEDIUM) is Direction.N


def test_medium_tie_goes_to_better_region() -> None:
    # E and S each take one gem in one slide; E ends in the worst quadrant,
    # S in the best, and E comes first in compass order.
    board = _board(["..g.", "..m.", "g...", "...."])
    policy = analyze(board)
    assert region_bonus(board, policy, 0, 3) == -40
    assert region_bonus(board, policy, 3, 0) == 30
    assert Opponent.medium(board, Player(0, 0), policy) is Direction.S


def test_medium_gem_beyond_search_depth_falls_back_to_easy() -> None:
    # Each slide east stops on the next marker; the gem needs a fifth slide.
    board = _board(["#########", "#.oooo.g#", "#########"])
    policy = analyze(board)
    cpu = Player(1, 1)
    assert Opponent.medium(board, cpu, policy) is Opponent.easy(board, cpu, policy)
    assert Opponent.medium(board, cpu, policy) is Direction.E


# -- hard ---------------------------------------------------------------------


def test_hard_takes_immediate_gem_over_delayed_one() -> None:
    board = _board(["########", "########", "#g.....#", "########", "########"])
    cpu = Player(2, 4)
    assert Opponent.hard(board, cpu, analyze(board)) is Direction.W


def test_hard_boxed_in_falls_back_to_easy() -> None:
    board = _board(BOXED)
    assert choose_move(board, _cpu(board), Difficulty.HARD) is Direction.N


def test_hard_never_chooses_unshielded_mine() -> None:
    board = _board(MINED_EXIT)
    assert choose_move(board, _cpu(board), Difficulty.HARD) is not Direction.W
    assert choose_move(board, _cpu(board, shields=1), Difficulty.HARD) is Direction.W


def test_position_evaluation_counts_neighbours() -> None:
    board = _board(["#####", "#gs.#", "#.m.#", "#...#", "#####"])
    policy = analyze(board)
    # (2,1) touches the gem, the shield and the mine.
    expected = 50 + 25 - 75 + region_bonus(board, policy, 2, 1)
    assert Opponent.evaluate_position(board, policy, 2, 1) == expected


# -- shared contract ----------------------------------------------------------


@pytest.mark.parametrize("difficulty", list(Difficulty))
@pytest.mark.parametrize("seed", range(3))
def test_choice_is_safe_and_board_untouched(difficulty: Difficulty, seed: int) -> None:
    board = GameGenerator.generate(12, 12, difficulty, random.Random(seed))
    cpu = _cpu(board)
    before = board.to_strings()
    choice = choose_move(board, cpu, difficulty)
    assert isinstance(choice, Direction)
    assert board.to_strings() == before
    valid = Opponent.valid_moves(board, cpu.row, cpu.col, cpu.shields)
    if valid:
        assert choice in valid
