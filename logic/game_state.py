"""
Game state management for TicTacToe.
Defines the marks, the 9-cell board, the winning lines and the game outcome.
"""

from enum import Enum, IntEnum
from typing import Optional, List, Tuple, Sequence, Union
from dataclasses import dataclass, field

import numpy as np

from .config import GameConfig


class Mark(IntEnum):
    """The two marks a cell can hold. Empty cells hold EMPTY (0)."""
    FIRST_PLAYER = 1
    SECOND_PLAYER = -1

    def opposite(self) -> "Mark":
        """Get the opposite mark."""
        return Mark(-self.value)

    @property
    def symbol(self) -> str:
        if self is Mark.FIRST_PLAYER:
            return GameConfig.FIRST_SYMBOL
        return GameConfig.SECOND_SYMBOL


EMPTY = 0

# All possible winning lines, checked in this order
LINES = np.array([
    # Rows
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    # Columns
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    # Diagonals
    (0, 4, 8), (2, 4, 6),
], dtype=np.intp)
LINES.setflags(write=False)

_SYMBOL_VALUES = {
    GameConfig.FIRST_SYMBOL: Mark.FIRST_PLAYER.value,
    GameConfig.SECOND_SYMBOL: Mark.SECOND_PLAYER.value,
    GameConfig.EMPTY_SYMBOL: EMPTY,
    " ": EMPTY,
    ".": EMPTY,
}

BoardLike = Union[np.ndarray, Sequence[int], str]


class Status(Enum):
    """Classification of a board."""
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class GameOutcome:
    """
    Result of evaluating a board.

    ``winner`` is only set when ``status`` is WIN.
    """
    status: Status
    winner: Optional[Mark] = None

    @classmethod
    def win(cls, mark: Mark) -> "GameOutcome":
        return cls(Status.WIN, Mark(mark))

    @property
    def is_over(self) -> bool:
        return self.status is not Status.IN_PROGRESS

    @property
    def is_draw(self) -> bool:
        return self.status is Status.DRAW

    def relabeled(self) -> "GameOutcome":
        """The same outcome with the two marks swapped."""
        if self.winner is None:
            return self
        return GameOutcome.win(self.winner.opposite())

    def __str__(self) -> str:
        if self.status is Status.WIN:
            return f"{self.winner.symbol} wins"
        if self.status is Status.DRAW:
            return "draw"
        return "in progress"


IN_PROGRESS = GameOutcome(Status.IN_PROGRESS)
DRAW = GameOutcome(Status.DRAW)


def new_board() -> np.ndarray:
    """Create an empty board."""
    return np.zeros(GameConfig.BOARD_CELLS, dtype=np.int8)


def as_board(cells: BoardLike) -> np.ndarray:
    """
    Build a board from any 9-cell description.

    Accepts a numpy array, a sequence of mark values (Mark, 1, -1, 0 or None)
    or a string such as ``"XX_OO____"``. Always returns a fresh array.

    Raises:
        ValueError: If the description is not exactly 9 valid cells.
    """
    if isinstance(cells, str):
        try:
            values = [_SYMBOL_VALUES[c] for c in cells.upper()]
        except KeyError as e:
            raise ValueError(f"Unknown board symbol {e.args[0]!r}") from None
    else:
        values = []
        for c in cells:
            if c is None:
                values.append(EMPTY)
            elif c != int(c):
                raise ValueError(f"Board cell {c!r} is not a whole number")
            else:
                values.append(int(c))

    board = np.array(values, dtype=np.int64)
    if board.shape != (GameConfig.BOARD_CELLS,):
        raise ValueError(
            f"Board must have exactly {GameConfig.BOARD_CELLS} cells, got {board.size}"
        )
    if not np.isin(board, (EMPTY, Mark.FIRST_PLAYER, Mark.SECOND_PLAYER)).all():
        raise ValueError(f"Board holds invalid cell values: {board.tolist()}")
    return board.astype(np.int8)


def empty_cells(board: np.ndarray) -> List[int]:
    """Indices of the empty cells, lowest first."""
    return np.flatnonzero(board == EMPTY).tolist()


def format_board(board: np.ndarray) -> str:
    """Render the board as three rows of symbols."""
    symbols = {
        EMPTY: " ",
        Mark.FIRST_PLAYER.value: GameConfig.FIRST_SYMBOL,
        Mark.SECOND_PLAYER.value: GameConfig.SECOND_SYMBOL,
    }
    rows = []
    for start in range(0, GameConfig.BOARD_CELLS, GameConfig.BOARD_SIZE):
        cells = board[start:start + GameConfig.BOARD_SIZE]
        rows.append(" | ".join(symbols[int(c)] for c in cells))
    return "\n---------\n".join(rows)


@dataclass
class Move:
    """
    A move in the game.
    """
    player: Mark            # Who made the move
    index: int              # Cell index (0-8)
    move_number: int        # Which move of the game this is (0-8)

    @property
    def row_col(self) -> Tuple[int, int]:
        return divmod(self.index, GameConfig.BOARD_SIZE)


@dataclass
class GameState:
    """
    The complete state of one game.

    Tracks:
    - The board
    - Current player
    - Move history
    - Outcome, recomputed after each move
    """

    board: np.ndarray = field(default_factory=new_board)
    current_player: Mark = Mark.FIRST_PLAYER
    moves: List[Move] = field(default_factory=list)
    outcome: GameOutcome = IN_PROGRESS

    @property
    def is_game_over(self) -> bool:
        return self.outcome.is_over

    @property
    def winner(self) -> Optional[Mark]:
        return self.outcome.winner

    def make_move(self, index: int) -> bool:
        """
        Place the current player's mark at ``index`` and pass the turn.

        The caller validates the move first (see MoveValidator).

        Returns:
            True if the mark was placed, False if the game is over or the
            cell is taken.
        """
        if self.is_game_over or self.board[index] != EMPTY:
            return False

        self.board[index] = self.current_player
        self.moves.append(Move(
            player=self.current_player,
            index=index,
            move_number=len(self.moves),
        ))

        # win_checker imports this module
        from .win_checker import evaluate
        self.outcome = evaluate(self.board)

        self.current_player = self.current_player.opposite()
        return True

    def get_empty_cells(self) -> List[int]:
        return empty_cells(self.board)

    def copy(self) -> "GameState":
        """Create a deep copy of the game state."""
        return GameState(
            board=self.board.copy(),
            current_player=self.current_player,
            moves=list(self.moves),
            outcome=self.outcome,
        )

    def __str__(self) -> str:
        return format_board(self.board)
