"""Core gameplay logic — executes moves and detects the end of the game."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameopponent import choose_move
from backend.engine.gamestate import GameState
from backend.models.board import Board, Difficulty, Direction

logger = logging.getLogger(__name__)

ShieldBreakHook = Callable[[int, int], None]


class GamePlay:
    """Orchestrates a single game between the human and the computer."""

    def __init__(
        self,
        rows: int = 12,
        cols: int = 12,
        difficulty: Difficulty = Difficulty.MEDIUM,
        rng: random.Random | None = None,
        on_shield_break: ShieldBreakHook | None = None,
    ) -> None:
        board = GameGenerator.generate(rows, cols, difficulty, rng)
        self.state = GameState(board, difficulty)
        self.on_shield_break = on_shield_break

    @classmethod
    def from_board(
        cls,
        board: Board,
        difficulty: Difficulty = Difficulty.MEDIUM,
        on_shield_break: ShieldBreakHook | None = None,
    ) -> "GamePlay":
        """Create a game session from an existing board (e.g. an ASCII layout)."""
        obj = object.__new__(cls)
        obj.state = GameState(board, difficulty)
        obj.on_shield_break = on_shield_break
        return obj

    @property
    def board(self) -> Board:
        return self.state.board

    # -- movement -------------------------------------------------------------

    def move(self, is_human: bool, direction: Direction) -> None:
        """Slide the acting player in *direction*, consuming what it passes.

        A slide that goes nowhere is ignored.  Hitting a mine costs one
        shield (counting shields picked up on the way) and leaves the player
        on the mine; with no shield the game ends and the mover loses.
        """
        state = self.state
        player = state.player(is_human)
        res = self.board.slide(player.row, player.col, direction, mutate=True)

        if res.position == player.position and not res.hit_mine:
            return

        player.score += res.gems
        player.shields += res.shields
        state.increment_moves()

        if not res.hit_mine:
            player.move_to(res.row, res.col)
            return

        if player.shields > 0:
            player.shields -= 1
            player.move_to(res.row, res.col)
            logger.debug(
                "%s shield absorbed mine at (%d, %d)",
                "Human" if is_human else "CPU", res.row, res.col,
            )
            if self.on_shield_break is not None:
                self.on_shield_break(res.row, res.col)
        elif is_human:
            state.finish("Human hit a mine! CPU wins.")
        else:
            state.finish("CPU hit a mine! Human wins.")

    def has_any_safe_move(self, row: int, col: int, shields: int) -> bool:
        """Return True if some direction moves the piece without a fatal mine."""
        for d in Direction:
            res = self.board.slide(row, col, d)
            survivable = not res.hit_mine or shields > 0
            if survivable and res.position != (row, col):
                return True
        return False

    def check_end_game(self) -> None:
        """End the game if no gems remain or neither player can move safely.

        Must run after every half-move; calling it again changes nothing.
        """
        state = self.state
        if state.game_over:
            return

        if not self.board.any_gem_left():
            state.finish(self._verdict("All gems collected."))
            return

        human, cpu = state.human, state.cpu
        human_can_move = self.has_any_safe_move(human.row, human.col, human.shields)
        cpu_can_move = self.has_any_safe_move(cpu.row, cpu.col, cpu.shields)
        if not human_can_move and not cpu_can_move:
            state.finish(self._verdict("Stalemate."))

    # -- turns ----------------------------------------------------------------

    def play_turn(self, direction: Direction) -> bool:
        """Play the human's *direction* and, if it counted, the computer's reply.

        Returns True if the computer got to answer.  A human slide that
        neither moved nor spent a shield is void and the computer waits.
        """
        state = self.state
        if state.game_over:
            return False

        human = state.human
        start, start_shields = human.position, human.shields
        self.move(True, direction)
        if state.game_over:
            return False
        if human.position == start and human.shields >= start_shields:
            return False

        self.check_end_game()
        if state.game_over:
            return False

        cpu_direction = choose_move(self.board, state.cpu, state.difficulty)
        logger.debug("CPU (%s) plays %s", state.difficulty, cpu_direction)
        self.move(False, cpu_direction)
        self.check_end_game()
        return True

    def click(self, row: int, col: int) -> bool:
        """Play a turn toward the clicked cell.  Returns False if nothing happened."""
        human = self.state.human
        direction = Direction.from_click(human.row, human.col, row, col)
        if direction is None:
            return False
        return self.play_turn(direction)

    # -- queries --------------------------------------------------------------

    @property
    def is_over(self) -> bool:
        return self.state.game_over

    # -- helpers --------------------------------------------------------------

    def _verdict(self, prefix: str) -> str:
        human, cpu = self.state.human.score, self.state.cpu.score
        if human > cpu:
            return f"{prefix} Human wins!"
        if cpu > human:
            return f"{prefix} CPU wins!"
        return f"{prefix} Draw!"
