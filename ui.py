"""
TicTacToe UI
A graphical interface for TicTacToe using Tkinter.

Shows:
- Mode selection (play a friend or the computer)
- The 3x3 board, with the winning line highlighted
- Game status and the running score
- Light/dark theme toggle
"""

import logging
import tkinter as tk
from tkinter import ttk
from typing import List, Optional

from logic.config import GameConfig, setup_logging
from logic.game_state import EMPTY, Mark
from logic.session import GameMode, GameSession, InvalidMoveError
from logic.win_checker import winning_line

logger = logging.getLogger(__name__)


class TicTacToeUI:
    """
    Main UI class for TicTacToe.
    """

    def __init__(self):
        """Initialize the UI."""
        self.session = GameSession()
        self.dark_mode = False

        # Pending Tk.after id for the computer's reply
        self._ai_job: Optional[str] = None

        self._create_ui()
        self._show_mode_select()

    @property
    def theme(self) -> dict:
        return GameConfig.DARK_THEME if self.dark_mode else GameConfig.LIGHT_THEME

    def _create_ui(self):
        """Create the Tkinter UI."""
        self.root = tk.Tk()
        self.root.title("Tic Tac Toe")
        self.root.minsize(360, 520)

        self.style = ttk.Style()
        self.style.theme_use('clam')

        # Theme toggle, always visible
        self.theme_button = tk.Button(self.root, text="Dark", width=6,
                                      command=self._toggle_theme)
        self.theme_button.pack(anchor=tk.NE, padx=10, pady=10)

        # Mode selection screen
        self.mode_frame = ttk.Frame(self.root)
        ttk.Button(self.mode_frame, text="Play with Real Person", width=28,
                   command=lambda: self._start(GameMode.PLAYER)).pack(pady=(40, 10))
        ttk.Button(self.mode_frame, text="Play with AI", width=28,
                   command=lambda: self._start(GameMode.AI)).pack()

        # Game screen
        self.game_frame = ttk.Frame(self.root)
        ttk.Label(self.game_frame, text="Tic Tac Toe", style='Title.TLabel').pack(pady=(0, 10))

        self.status_label = ttk.Label(self.game_frame, text="", style='Status.TLabel')
        self.status_label.pack(pady=5)

        board_frame = ttk.Frame(self.game_frame)
        board_frame.pack(pady=10)

        self.board_cells: List[tk.Button] = []
        for index in range(GameConfig.BOARD_CELLS):
            row, col = divmod(index, GameConfig.BOARD_SIZE)
            cell = tk.Button(
                board_frame,
                text="",
                font=('Segoe UI', 24, 'bold'),
                width=3,
                height=1,
                relief='ridge',
                borderwidth=2,
                command=lambda i=index: self._on_cell_click(i)
            )
            cell.grid(row=row, column=col, padx=2, pady=2)
            self.board_cells.append(cell)

        self.new_game_button = ttk.Button(self.game_frame, text="Start New Game",
                                          command=self._new_game)
        ttk.Button(self.game_frame, text="Select Mode",
                   command=self._select_mode).pack(side=tk.BOTTOM, pady=5)

        self.score_label = ttk.Label(self.game_frame, text="", justify=tk.CENTER)
        self.score_label.pack(side=tk.BOTTOM, pady=10)

        self._apply_theme()

    def _apply_theme(self):
        """Recolour every widget for the current theme."""
        theme = self.theme
        self.root.configure(bg=theme["bg"])
        self.style.configure('TFrame', background=theme["bg"])
        self.style.configure('TLabel', background=theme["bg"], foreground=theme["fg"],
                             font=('Segoe UI', 11))
        self.style.configure('Title.TLabel', font=('Segoe UI', 18, 'bold'))
        self.style.configure('Status.TLabel', font=('Segoe UI', 13))
        self.theme_button.configure(text="Light" if self.dark_mode else "Dark")
        self._refresh_board()

    def _toggle_theme(self):
        self.dark_mode = not self.dark_mode
        self._apply_theme()

    # ==================== SCREENS ====================

    def _show_mode_select(self):
        self.game_frame.pack_forget()
        self.mode_frame.pack(fill=tk.BOTH, expand=True)

    def _show_game(self):
        self.mode_frame.pack_forget()
        self.game_frame.pack(fill=tk.BOTH, expand=True, padx=10, pady=10)
        self._refresh()

    def _start(self, mode: GameMode):
        self.session.start(mode)
        self._show_game()

    def _new_game(self):
        self._cancel_ai_move()
        self.session.new_game()
        self._refresh()

    def _select_mode(self):
        self._cancel_ai_move()
        self.session.select_mode()
        self._show_mode_select()

    # ==================== MOVES ====================

    def _on_cell_click(self, index: int):
        """Handle a click on a board cell."""
        try:
            self.session.play(index)
        except InvalidMoveError as e:
            logger.debug("Ignored click on cell %d: %s", index, e)
            return

        self._refresh()
        if self.session.is_computer_turn:
            # The delay is cosmetic; the move is chosen when it fires
            self._ai_job = self.root.after(GameConfig.AI_MOVE_DELAY_MS, self._ai_move)

    def _ai_move(self):
        self._ai_job = None
        self.session.computer_move()
        self._refresh()

    def _cancel_ai_move(self):
        if self._ai_job is not None:
            self.root.after_cancel(self._ai_job)
            self._ai_job = None

    # ==================== DISPLAY ====================

    def _refresh(self):
        """Redraw board, status and scores from the session."""
        self.status_label.configure(text=self.session.status_text())
        self.score_label.configure(text="\n".join(self.session.score_lines()))

        if self.session.outcome.is_over:
            self.new_game_button.pack(pady=5)
        else:
            self.new_game_button.pack_forget()

        self._refresh_board()

    def _refresh_board(self):
        theme = self.theme
        board = self.session.state.board
        game_over = self.session.outcome.is_over
        line = winning_line(board) or ()

        for index, cell in enumerate(self.board_cells):
            value = int(board[index])
            text = "" if value == EMPTY else Mark(value).symbol
            bg = theme["highlight"] if index in line else theme["cell_bg"]
            cell.configure(
                text=text,
                bg=bg,
                fg=theme["fg"],
                activebackground=theme["cell_active"],
                state=tk.DISABLED if value != EMPTY or game_over else tk.NORMAL,
                disabledforeground=theme["fg"],
            )

    def _quit(self):
        """Quit the application."""
        self._cancel_ai_move()
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self.root.protocol("WM_DELETE_WINDOW", self._quit)
        self.root.mainloop()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="TicTacToe UI")
    parser.add_argument(
        "--log-level",
        default=GameConfig.LOG_LEVEL,
        help="Logging level (DEBUG shows the AI's search)"
    )
    args = parser.parse_args()
    setup_logging(args.log_level)

    ui = TicTacToeUI()
    ui.run()


if __name__ == "__main__":
    main()
