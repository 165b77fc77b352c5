from backend.models.board import Board, Cell, Difficulty, Direction, SlideResult
from backend.models.player import Player

__all__ = ["Board", "Cell", "Difficulty", "Direction", "Player", "SlideResult"]
