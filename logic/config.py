"""
Game configuration for TicTacToe.
All the settings for scoring, players, timing and the UI theme.
"""

import logging


class GameConfig:
    """
    Configuration class for game settings.
    Change these values to tweak how the game behaves.
    """

    # ==================== BOARD SETTINGS ====================
    BOARD_SIZE = 3
    BOARD_CELLS = BOARD_SIZE * BOARD_SIZE  # 9

    # Display symbols, indexed by mark value (+1 first, -1 second)
    FIRST_SYMBOL = "X"
    SECOND_SYMBOL = "O"
    EMPTY_SYMBOL = "_"

    # ==================== SEARCH SETTINGS ====================
    # Terminal scores from the maximizing side's point of view.
    # Not depth-adjusted: a win is a win no matter how far away.
    WIN_SCORE = 10
    LOSS_SCORE = -10
    DRAW_SCORE = 0

    # ==================== SESSION SETTINGS ====================
    FIRST_PLAYER_NAME = "Player 1"
    SECOND_PLAYER_NAME = "Player 2"
    AI_NAME = "AI"

    # Start a fresh board straight away when a game is drawn
    AUTO_RESTART_ON_DRAW = False

    # ==================== UI SETTINGS ====================
    # Pause before the computer replies (milliseconds)
    AI_MOVE_DELAY_MS = 500

    LIGHT_THEME = {
        "bg": "#ffffff",
        "fg": "#000000",
        "cell_bg": "#dbeafe",
        "cell_active": "#bfdbfe",
        "highlight": "#22c55e",
    }
    DARK_THEME = {
        "bg": "#111827",
        "fg": "#ffffff",
        "cell_bg": "#374151",
        "cell_active": "#4b5563",
        "highlight": "#16a34a",
    }

    # ==================== DEBUG SETTINGS ====================
    LOG_LEVEL = "WARNING"
    LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level=None):
    """
    Configure the root logger.

    Args:
        level: Level name or number. Defaults to GameConfig.LOG_LEVEL.
    """
    if level is None:
        level = GameConfig.LOG_LEVEL
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=GameConfig.LOG_FORMAT)
