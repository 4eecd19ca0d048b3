"""
Main script for TicTacToe.

This script ties together:
- Logic (board, win checker, minimax AI)
- Session (mode, player names, scores)
- Front end (Tkinter UI by default, console with --no-ui)

Run this script to play TicTacToe against a friend or the computer!
"""

import logging
from typing import Callable, Optional

from logic.config import GameConfig, setup_logging
from logic.game_state import format_board
from logic.ai_player import select_move
from logic.session import GameMode, GameSession, InvalidMoveError

logger = logging.getLogger(__name__)


class TicTacToeGame:
    """
    Console controller for a TicTacToe session.

    Game flow:
    1. Human enters a cell number (1-9)
    2. Session validates and applies the move
    3. In AI mode, the computer answers with its minimax move
    4. Repeat until someone wins or it's a draw
    """

    def __init__(self, mode: GameMode, read_input: Optional[Callable[[str], str]] = None):
        """
        Args:
            mode: AI or PLAYER.
            read_input: Where human moves come from (default: stdin).
        """
        self.session = GameSession()
        self.session.start(mode)
        self.read_input = read_input or input

    def play_game(self):
        """Play one game to the end and print the result."""
        print("Index map:\n1 | 2 | 3\n4 | 5 | 6\n7 | 8 | 9\n")

        # The board object of this game, kept even if a draw restarts the session
        board = self.session.state.board
        while not self.session.last_outcome.is_over:
            board = self.session.state.board
            print(format_board(board))
            print(f"\n{self.session.status_text()}")

            if self.session.is_computer_turn:
                index = self.session.computer_move()
                print(f"{GameConfig.AI_NAME} plays at {index + 1}\n")
            else:
                self._read_human_move()

        self._show_game_result(board)

    def _read_human_move(self):
        """Ask until the session accepts a move."""
        while True:
            player = self.session.players[self.session.state.current_player]
            raw = self.read_input(f"{player}, play at [1-9]: ").strip()
            try:
                index = int(raw) - 1
            except ValueError:
                index = -1
            if not 0 <= index < GameConfig.BOARD_CELLS:
                print("Please type a number 1..9.")
                continue

            try:
                self.session.play(index)
                return
            except InvalidMoveError as e:
                logger.debug("Rejected move %d: %s", index, e)
                print("Illegal move. Try again.")

    def _show_game_result(self, board):
        """Show the final game result and the tally."""
        print("\n" + "="*40)
        print("   GAME OVER!")
        print("="*40)
        print(format_board(board))
        print(f"\n{self.session.status_text()}")
        for line in self.session.score_lines():
            print(f"  {line}")
        print("="*40)


def self_play(games: int = 1) -> GameSession:
    """
    Let the minimax AI play both sides.

    Perfect play from an empty board always ends in a draw.

    Returns:
        The session, with its score tally.
    """
    session = GameSession()
    session.start(GameMode.PLAYER)

    for game in range(games):
        session.new_game()
        outcome = session.last_outcome
        while not outcome.is_over:
            state = session.state
            outcome = session.play(select_move(state.board, state.current_player))
        logger.info("Self-play game %d: %s", game + 1, outcome)
        print(format_board(state.board))
        print(f"\nGame {game + 1}: {session.status_text()}\n")

    for line in session.score_lines():
        print(line)
    return session


def main(argv: Optional[list] = None):
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="TicTacToe")
    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Run without UI (console mode)"
    )
    parser.add_argument(
        "--mode",
        choices=["ai", "player", "selfplay"],
        default="ai",
        help="Console opponent: the computer, a second human, or AI vs AI"
    )
    parser.add_argument(
        "--games",
        type=int,
        default=1,
        help="Number of games to play in console mode"
    )
    parser.add_argument(
        "--log-level",
        default=GameConfig.LOG_LEVEL,
        help="Logging level (DEBUG shows the AI's search)"
    )

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    # Launch UI by default
    if not args.no_ui:
        from ui import TicTacToeUI
        ui = TicTacToeUI()
        ui.run()
        return

    if args.mode == "selfplay":
        self_play(args.games)
        return

    game = TicTacToeGame(GameMode(args.mode))
    try:
        for _ in range(args.games):
            game.session.new_game()
            game.play_game()
    except (KeyboardInterrupt, EOFError):
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")


if __name__ == "__main__":
    main()
