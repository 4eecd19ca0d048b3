"""
AI player for TicTacToe.
Uses the Minimax algorithm to choose the best move.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import numpy as np

from .config import GameConfig
from .game_state import EMPTY, GameState, Mark, as_board
from .win_checker import evaluate, line_winner

logger = logging.getLogger(__name__)


@contextmanager
def placed(board, index: int, mark: Mark) -> Iterator:
    """
    Temporarily put ``mark`` on ``board[index]``.

    The cell is emptied again when the block exits, however it exits.
    """
    board[index] = mark
    try:
        yield board
    finally:
        board[index] = EMPTY


class _Search:
    """One exhaustive search on a private list copy of the board."""

    def __init__(self, board: np.ndarray, maximizing: Mark):
        self.cells = [int(c) for c in board]
        self.maximizing = maximizing
        self.positions = 0

    def _empty(self):
        return [i for i, c in enumerate(self.cells) if c == EMPTY]

    def score(self, to_move: Mark) -> int:
        """Minimax value of ``self.cells`` with ``to_move`` on turn."""
        self.positions += 1

        winner = line_winner(self.cells)
        if winner is not None:
            if winner == self.maximizing:
                return GameConfig.WIN_SCORE
            return GameConfig.LOSS_SCORE

        empty = self._empty()
        if not empty:
            return GameConfig.DRAW_SCORE

        scores = []
        for index in empty:
            with placed(self.cells, index, to_move):
                scores.append(self.score(to_move.opposite()))

        if to_move == self.maximizing:
            return max(scores)
        return min(scores)

    def best_move(self) -> int:
        best_score = None
        best_index = None
        for index in self._empty():
            with placed(self.cells, index, self.maximizing):
                score = self.score(self.maximizing.opposite())
            # Strictly better only: ties keep the lowest index
            if best_score is None or score > best_score:
                best_score = score
                best_index = index

        logger.debug(
            "Evaluated %d positions. Best move for %s: %d (score: %d)",
            self.positions, self.maximizing.symbol, best_index, best_score,
        )
        return best_index


def _checked_copy(board) -> np.ndarray:
    work = as_board(board)
    outcome = evaluate(work)
    if outcome.is_over:
        raise ValueError(f"No move to select: game is already decided ({outcome})")
    return work


def select_move(board, side_to_move: Mark) -> int:
    """
    Pick the optimal cell for ``side_to_move``.

    Searches the whole game tree with ``side_to_move`` as the maximizing
    side: +10 for its win, -10 for its loss, 0 for a draw. Among equally
    good cells the lowest index is returned. The caller's board is never
    modified.

    Args:
        board: A 9-cell board that is still in progress.
        side_to_move: The mark about to be placed.

    Returns:
        Cell index in [0, 8].

    Raises:
        ValueError: If the board is malformed, full or already won.
    """
    side = Mark(side_to_move)
    return _Search(_checked_copy(board), side).best_move()


def minimax(board, to_move: Mark, maximizing: Optional[Mark] = None) -> int:
    """
    Value of a position under perfect play.

    Args:
        board: Any 9-cell board, finished or not.
        to_move: The mark on turn.
        maximizing: The side the score is reported for. Defaults to to_move.

    Returns:
        WIN_SCORE, LOSS_SCORE or DRAW_SCORE.
    """
    to_move = Mark(to_move)
    maximizing = to_move if maximizing is None else Mark(maximizing)
    return _Search(as_board(board), maximizing).score(to_move)


class AIPlayer:
    """
    An AI that plays TicTacToe using the Minimax algorithm.

    The AI will always play optimally - it will win if possible,
    block the opponent if needed, and never lose (at worst, draw).
    """

    def __init__(self, player: Mark = Mark.SECOND_PLAYER):
        """
        Initialize the AI player.

        Args:
            player: Which mark the AI places (default: SECOND_PLAYER)
        """
        self.player = player

    def get_best_move(self, game_state: GameState) -> Optional[int]:
        """
        Get the best move for the current position.

        Args:
            game_state: Current game state.

        Returns:
            Cell index of the best move, or None if it is not the AI's turn
            or the game is over.
        """
        if game_state.current_player != self.player:
            logger.warning("It's not %s's turn!", self.player.symbol)
            return None
        if game_state.is_game_over:
            return None

        return select_move(game_state.board, self.player)
