"""
Move validator for TicTacToe.
Validates that moves follow the rules.
"""

import numbers
from typing import Optional, List
from dataclasses import dataclass

from .config import GameConfig
from .game_state import EMPTY, GameState


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates TicTacToe moves.

    Rules:
    1. Game must not be over
    2. Index must be a cell of the board (0-8)
    3. Can only place on empty cells
    """

    def validate_move(self, game_state: GameState, index) -> ValidationResult:
        """
        Validate a move.

        Args:
            game_state: Current game state.
            index: Cell to place the mark on (0-8).

        Returns:
            ValidationResult with is_valid and error_message.
        """
        if game_state.is_game_over:
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        # bool is an int subclass, but True/False are not cells
        if isinstance(index, bool) or not isinstance(index, numbers.Integral):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position {index!r}. Must be a whole number."
            )

        if not 0 <= index < GameConfig.BOARD_CELLS:
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position {index}. Must be 0-{GameConfig.BOARD_CELLS - 1}."
            )

        if game_state.board[index] != EMPTY:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already occupied!"
            )

        return ValidationResult(is_valid=True)

    def get_valid_moves(self, game_state: GameState) -> List[int]:
        """
        Get all valid moves for the current player.

        Args:
            game_state: Current game state.

        Returns:
            List of empty cell indices, empty if the game is over.
        """
        if game_state.is_game_over:
            return []
        return game_state.get_empty_cells()
