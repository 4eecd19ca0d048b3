"""
Logic module for TicTacToe.
Handles the board, win/draw detection, the minimax AI and the game session.
"""

__version__ = "1.0.0"

from .game_state import (
    EMPTY, LINES, GameOutcome, GameState, Mark, Move, Status,
    as_board, empty_cells, format_board, new_board,
)
from .win_checker import evaluate, winning_line
from .ai_player import AIPlayer, minimax, select_move
from .move_validator import MoveValidator, ValidationResult
from .session import GameMode, GameSession, InvalidMoveError
