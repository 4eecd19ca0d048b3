"""
Win checker for TicTacToe.
Checks if a player has won or if the game is a draw.
"""

from typing import Optional, Tuple

import numpy as np

from .game_state import (
    DRAW, EMPTY, IN_PROGRESS, LINES, GameOutcome, GameState, Mark,
)

# A full line of one mark sums to +3 or -3
_FULL_LINE = len(LINES[0])


def _line_sums(board: np.ndarray) -> np.ndarray:
    return np.asarray(board)[LINES].sum(axis=1, dtype=np.int16)


def evaluate(board: np.ndarray) -> GameOutcome:
    """
    Classify a board.

    Lines are checked in the fixed order of LINES and the first complete line
    decides the winner. A full board with no complete line is a draw.

    Args:
        board: A 9-cell board.

    Returns:
        WIN(mark), DRAW or IN_PROGRESS.
    """
    sums = _line_sums(board)
    complete = np.flatnonzero(np.abs(sums) == _FULL_LINE)
    if complete.size:
        return GameOutcome.win(Mark(int(np.sign(sums[complete[0]]))))

    if not (np.asarray(board) == EMPTY).any():
        return DRAW
    return IN_PROGRESS


def winning_line(board: np.ndarray) -> Optional[Tuple[int, int, int]]:
    """
    Get the winning line if there is one.

    Returns:
        The first complete line as a tuple of cell indices, or None.
    """
    complete = np.flatnonzero(np.abs(_line_sums(board)) == _FULL_LINE)
    if not complete.size:
        return None
    return tuple(int(i) for i in LINES[complete[0]])


def update_game_state(game_state: GameState) -> GameState:
    """
    Refresh the cached outcome of a game state.

    Args:
        game_state: The game state to update.

    Returns:
        The same game state, updated.
    """
    game_state.outcome = evaluate(game_state.board)
    return game_state


# Plain tuples for the search's hot loop
_LINE_TUPLES = tuple(tuple(int(i) for i in line) for line in LINES)


def line_winner(cells) -> Optional[int]:
    """
    Mark value of the first complete line of a plain list of 9 cells.

    Same rules and line order as evaluate(), without numpy overhead.

    Returns:
        1 or -1 for the winning mark, or None.
    """
    for a, b, c in _LINE_TUPLES:
        first = cells[a]
        if first != EMPTY and first == cells[b] == cells[c]:
            return first
    return None
