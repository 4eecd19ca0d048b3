"""
Game session for TicTacToe.

Owns everything that outlives a single board: the game mode, player names
and the running score tally. The front ends (CLI and Tkinter UI) talk only
to this class; it calls into the pure board/evaluator/search functions.
"""

import logging
from enum import Enum
from typing import Dict, Optional

from .ai_player import AIPlayer
from .config import GameConfig
from .game_state import IN_PROGRESS, GameOutcome, GameState, Mark, Status
from .move_validator import MoveValidator
from .win_checker import update_game_state, winning_line

logger = logging.getLogger(__name__)

# The computer always answers the human who moves first
COMPUTER_MARK = Mark.SECOND_PLAYER


class GameMode(Enum):
    """Who the first player is up against."""
    AI = "ai"
    PLAYER = "player"


class InvalidMoveError(Exception):
    """A move was rejected by the MoveValidator."""


class GameSession:
    """
    One sitting at the board: any number of games in a fixed mode.

    Flow:
    1. start(mode)
    2. play(index) for human moves, computer_move() on the AI's turn
    3. new_game() keeps the scores, select_mode() clears them
    """

    def __init__(self):
        self.state = GameState()
        self.mode: Optional[GameMode] = None
        self.players: Dict[Mark, str] = self._player_names(None)
        self.scores: Dict[Mark, int] = {Mark.FIRST_PLAYER: 0, Mark.SECOND_PLAYER: 0}
        self.draws = 0
        # Survives the board reset of AUTO_RESTART_ON_DRAW
        self.last_outcome: GameOutcome = IN_PROGRESS

        self.validator = MoveValidator()
        self.ai = AIPlayer(COMPUTER_MARK)

    @staticmethod
    def _player_names(mode: Optional[GameMode]) -> Dict[Mark, str]:
        second = GameConfig.AI_NAME if mode is GameMode.AI else GameConfig.SECOND_PLAYER_NAME
        return {
            Mark.FIRST_PLAYER: GameConfig.FIRST_PLAYER_NAME,
            Mark.SECOND_PLAYER: second,
        }

    # ==================== NAVIGATION ====================

    @property
    def is_started(self) -> bool:
        return self.mode is not None

    def start(self, mode: GameMode):
        """Pick a mode and start the first game."""
        self.mode = GameMode(mode)
        self.players = self._player_names(self.mode)
        self.state = GameState()
        self.last_outcome = IN_PROGRESS
        logger.info("Started %s mode: %s vs %s", self.mode.value,
                    self.players[Mark.FIRST_PLAYER], self.players[Mark.SECOND_PLAYER])

    def new_game(self):
        """Clear the board. Mode and scores are kept."""
        self.state = GameState()
        self.last_outcome = IN_PROGRESS
        logger.info("New game")

    def select_mode(self):
        """Go back to mode selection. Board and scores are cleared."""
        self.state = GameState()
        self.last_outcome = IN_PROGRESS
        self.mode = None
        self.players = self._player_names(None)
        self.scores = {Mark.FIRST_PLAYER: 0, Mark.SECOND_PLAYER: 0}
        self.draws = 0
        logger.info("Session reset")

    # ==================== MOVES ====================

    @property
    def outcome(self) -> GameOutcome:
        return self.state.outcome

    @property
    def is_computer_turn(self) -> bool:
        return (
            self.mode is GameMode.AI
            and not self.state.is_game_over
            and self.state.current_player == COMPUTER_MARK
        )

    def play(self, index) -> GameOutcome:
        """
        Apply a human move.

        Args:
            index: Cell index (0-8).

        Returns:
            The outcome after the move.

        Raises:
            InvalidMoveError: If the move is not allowed right now.
        """
        if not self.is_started:
            raise InvalidMoveError("Select a game mode first!")
        if self.is_computer_turn:
            raise InvalidMoveError(f"Wait for {self.players[COMPUTER_MARK]} to move!")

        result = self.validator.validate_move(self.state, index)
        if not result.is_valid:
            raise InvalidMoveError(result.error_message)

        return self._apply(int(index))

    def computer_move(self) -> Optional[int]:
        """
        Let the computer play its move.

        Returns:
            The cell the computer played, or None if it is not its turn.
        """
        if not self.is_computer_turn:
            return None

        index = self.ai.get_best_move(self.state)
        logger.info("%s plays %d", self.players[COMPUTER_MARK], index)
        self._apply(index)
        return index

    def _apply(self, index: int) -> GameOutcome:
        player = self.state.current_player
        self.state.make_move(index)
        outcome = update_game_state(self.state).outcome
        self.last_outcome = outcome

        if outcome.status is Status.WIN:
            self.scores[outcome.winner] += 1
            logger.info("%s wins (line %s)", self.players[outcome.winner],
                        winning_line(self.state.board))
        elif outcome.status is Status.DRAW:
            self.draws += 1
            logger.info("Draw after %s's move", self.players[player])
            if GameConfig.AUTO_RESTART_ON_DRAW:
                self.new_game()
                self.last_outcome = outcome
        return outcome

    # ==================== DISPLAY ====================

    def status_text(self) -> str:
        """One-line status, e.g. "Player 1's turn." or "Winner: AI!"."""
        outcome = self.last_outcome
        if outcome.status is Status.WIN:
            return f"Winner: {self.players[outcome.winner]}!"
        if outcome.status is Status.DRAW:
            return "It's a draw!"
        return f"{self.players[self.state.current_player]}'s turn."

    def score_lines(self):
        """Score panel lines, one per player plus draws."""
        lines = [f"{self.players[mark]}: {self.scores[mark]} Wins" for mark in Mark]
        lines.append(f"Draws: {self.draws}")
        return lines
