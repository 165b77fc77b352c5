"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import logging
import time

from backend.models.board import Board, Difficulty
from backend.models.player import Player

logger = logging.getLogger(__name__)


class GameState:
    """Holds the board, both players, the terminal flag and result text."""

    def __init__(self, board: Board, difficulty: Difficulty = Difficulty.MEDIUM) -> None:
        self.board = board
        self.difficulty = difficulty
        self.human = Player(*board.human_start)
        self.cpu = Player(*board.cpu_start)
        self.game_over: bool = False
        self.result: str = ""
        self.moves: int = 0
        self._start_time: float = time.time()
        self._elapsed_banked: float = 0.0
        self._running: bool = True

    def player(self, is_human: bool) -> Player:
        return self.human if is_human else self.cpu

    # -- status ---------------------------------------------------------------

    def finish(self, result: str) -> None:
        """Mark the game terminal.  The first recorded result sticks."""
        if self.game_over:
            return
        self.game_over = True
        self.result = result
        self.pause()
        logger.debug("Game over after %d moves: %s", self.moves, result)

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    def resume(self) -> None:
        if not self._running and not self.game_over:
            self._start_time = time.time()
            self._running = True

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1
