"""
Tests for the TicTacToe logic: board model, win checker and minimax AI.
"""

import itertools
import random

import numpy as np
import pytest

from logic.config import GameConfig
from logic.game_state import (
    DRAW, EMPTY, IN_PROGRESS, LINES, GameOutcome, Mark, Status,
    as_board, empty_cells, format_board, new_board,
)
from logic.win_checker import evaluate, line_winner, winning_line
from logic.ai_player import placed, minimax, select_move

X = Mark.FIRST_PLAYER
O = Mark.SECOND_PLAYER


def brute_force_outcome(board):
    """Reference classification written with plain loops."""
    for a, b, c in [(0, 1, 2), (3, 4, 5), (6, 7, 8), (0, 3, 6),
                    (1, 4, 7), (2, 5, 8), (0, 4, 8), (2, 4, 6)]:
        if board[a] != EMPTY and board[a] == board[b] == board[c]:
            return GameOutcome.win(Mark(int(board[a])))
    if all(cell != EMPTY for cell in board):
        return DRAW
    return IN_PROGRESS


def random_positions(count, seed=7, min_empty=1, max_empty=5):
    """Reachable, undecided positions reached by random alternating play."""
    rng = random.Random(seed)
    positions = []
    while len(positions) < count:
        board = new_board()
        to_move = X
        target = rng.randint(min_empty, max_empty)
        while len(empty_cells(board)) > target and not evaluate(board).is_over:
            board[rng.choice(empty_cells(board))] = to_move
            to_move = to_move.opposite()
        if not evaluate(board).is_over:
            positions.append((board, to_move))
    return positions


# ════════════════════════════════════════════════════════════════════════════
#  BOARD MODEL
# ════════════════════════════════════════════════════════════════════════════

class TestBoard:
    def test_new_board_is_empty(self):
        board = new_board()
        assert board.shape == (9,)
        assert empty_cells(board) == list(range(9))

    def test_mark_opposite(self):
        assert X.opposite() is O
        assert O.opposite() is X

    def test_symbols(self):
        assert X.symbol == "X"
        assert O.symbol == "O"

    def test_as_board_from_string(self):
        board = as_board("XX_OO____")
        assert board.tolist() == [1, 1, 0, -1, -1, 0, 0, 0, 0]

    def test_as_board_from_sequence(self):
        board = as_board([X, None, O, 0, 0, 0, 0, 0, 0])
        assert board.tolist() == [1, 0, -1, 0, 0, 0, 0, 0, 0]

    def test_as_board_copies(self):
        original = new_board()
        board = as_board(original)
        board[0] = X
        assert original[0] == EMPTY

    @pytest.mark.parametrize("cells", [
        "XX_OO",
        [0] * 10,
        [],
        [0, 0, 0, 0, 2, 0, 0, 0, 0],
        [300] + [0] * 8,
    ])
    def test_as_board_rejects_malformed(self, cells):
        with pytest.raises(ValueError):
            as_board(cells)

    @pytest.mark.parametrize("fraction", [1.7, -0.5, 0.25])
    def test_as_board_rejects_fractional_cells(self, fraction):
        with pytest.raises(ValueError, match="whole number"):
            as_board([fraction] + [0] * 8)

    def test_as_board_accepts_integral_floats(self):
        assert as_board([1.0, -1.0] + [0.0] * 7).tolist() == [1, -1] + [0] * 7

    def test_as_board_rejects_unknown_symbol(self):
        with pytest.raises(ValueError, match="Unknown board symbol"):
            as_board("XX?OO____")

    def test_lines_are_fixed(self):
        assert LINES.shape == (8, 3)
        with pytest.raises(ValueError):
            LINES[0, 0] = 5

    def test_format_board(self):
        text = format_board(as_board("XO_______"))
        assert text.splitlines()[0] == "X | O |  "
        assert len(text.splitlines()) == 5


# ════════════════════════════════════════════════════════════════════════════
#  WIN CHECKER
# ════════════════════════════════════════════════════════════════════════════

class TestEvaluate:
    def test_empty_board_in_progress(self):
        assert evaluate(new_board()) == IN_PROGRESS

    @pytest.mark.parametrize("line", [tuple(l) for l in LINES.tolist()])
    @pytest.mark.parametrize("mark", [X, O])
    def test_every_line_wins(self, line, mark):
        board = new_board()
        board[list(line)] = mark
        assert evaluate(board) == GameOutcome.win(mark)
        assert winning_line(board) == line

    def test_draw(self):
        board = as_board("XOXXOOOXX")
        assert evaluate(board) == DRAW
        assert evaluate(board).is_draw
        assert winning_line(board) is None

    def test_win_on_full_board_is_not_a_draw(self):
        board = as_board("XXXOOXOXO")
        assert evaluate(board) == GameOutcome.win(X)

    def test_first_matching_line_decides(self):
        # Not reachable in play: top row O, middle row X
        board = as_board("OOOXXX___")
        assert evaluate(board) == GameOutcome.win(O)
        assert winning_line(board) == (0, 1, 2)

    def test_accepts_plain_lists(self):
        assert evaluate([1, 1, 1, 0, 0, 0, 0, 0, 0]) == GameOutcome.win(X)

    def test_pure(self):
        board = as_board("XX_OO____")
        before = board.copy()
        results = {evaluate(board) for _ in range(5)}
        assert results == {IN_PROGRESS}
        assert np.array_equal(board, before)

    def test_matches_reference_on_every_board(self):
        for cells in itertools.product((EMPTY, X, O), repeat=9):
            board = as_board(cells)
            assert evaluate(board) == brute_force_outcome(board), cells

    def test_plain_list_check_matches_evaluate(self):
        for cells in itertools.product((EMPTY, 1, -1), repeat=9):
            winner = evaluate(as_board(cells)).winner
            expected = None if winner is None else int(winner)
            assert line_winner(list(cells)) == expected, cells

    def test_symmetric_under_relabeling(self):
        for cells in itertools.product((EMPTY, X, O), repeat=9):
            board = as_board(cells)
            assert evaluate(-board) == evaluate(board).relabeled(), cells

    def test_filling_last_cell(self):
        """One empty cell, no winner yet: filling it is a WIN or a DRAW."""
        checked = 0
        for gap in range(9):
            for fill in itertools.product((X, O), repeat=8):
                cells = list(fill)
                cells.insert(gap, EMPTY)
                board = as_board(cells)
                if evaluate(board) != IN_PROGRESS:
                    continue
                for mark in (X, O):
                    board[gap] = mark
                    completes = any(
                        gap in line and all(board[i] == mark for i in line)
                        for line in LINES.tolist()
                    )
                    expected = GameOutcome.win(mark) if completes else DRAW
                    assert evaluate(board) == expected
                    checked += 1
                board[gap] = EMPTY
        assert checked > 0

    def test_outcome_str(self):
        assert str(GameOutcome.win(X)) == "X wins"
        assert str(DRAW) == "draw"
        assert str(IN_PROGRESS) == "in progress"
        assert GameOutcome.win(O).status is Status.WIN


# ════════════════════════════════════════════════════════════════════════════
#  MINIMAX AI
# ════════════════════════════════════════════════════════════════════════════

class TestPlaced:
    def test_undo_on_exit(self):
        board = new_board()
        with placed(board, 4, X):
            assert board[4] == X
        assert board[4] == EMPTY

    def test_works_on_plain_lists(self):
        cells = [EMPTY] * 9
        with placed(cells, 0, O):
            assert cells[0] == O
        assert cells == [EMPTY] * 9

    def test_undo_on_exception(self):
        board = new_board()
        with pytest.raises(RuntimeError):
            with placed(board, 4, O):
                raise RuntimeError("boom")
        assert board[4] == EMPTY


class TestSelectMove:
    def test_takes_the_win(self):
        assert select_move(as_board("XX_OO____"), X) == 2

    def test_blocks_the_win(self):
        assert select_move(as_board("XX__O____"), O) == 2

    def test_answers_opposite_corners_with_an_edge(self):
        # X holds two opposite corners around O's centre. A corner reply
        # loses to a fork; the first edge draws.
        board = as_board("X___O___X")
        move = select_move(board, O)
        assert move == 1
        with placed(board, move, O):
            assert minimax(board, X, maximizing=O) == GameConfig.DRAW_SCORE
        for corner in (2, 6):
            with placed(board, corner, O):
                assert minimax(board, X, maximizing=O) == GameConfig.LOSS_SCORE

    def test_tie_keeps_lowest_index(self):
        # Both 2 and 6 win at once
        board = as_board("XX_XOO_O_")
        assert select_move(board, X) == 2
        assert [select_move(board, X) for _ in range(3)] == [2, 2, 2]

    def test_tie_break_matches_brute_force(self):
        for board, to_move in random_positions(40, seed=11, min_empty=3, max_empty=6):
            scores = {}
            for index in empty_cells(board):
                with placed(board, index, to_move):
                    scores[index] = minimax(board, to_move.opposite(), maximizing=to_move)
            best = max(scores.values())
            expected = min(i for i, s in scores.items() if s == best)
            assert select_move(board, to_move) == expected

    def test_never_picks_occupied_cell_and_leaves_board_alone(self):
        for board, to_move in random_positions(150, seed=3):
            before = board.copy()
            move = select_move(board, to_move)
            assert move in empty_cells(before)
            assert np.array_equal(board, before)
            assert board.dtype == before.dtype

    def test_side_is_symmetric(self):
        for board, to_move in random_positions(40, seed=5):
            assert select_move(board, to_move) == select_move(-board, to_move.opposite())

    def test_accepts_plain_lists(self):
        cells = [1, 1, 0, -1, -1, 0, 0, 0, 0]
        assert select_move(cells, X) == 2
        assert cells == [1, 1, 0, -1, -1, 0, 0, 0, 0]

    def test_rejects_decided_board(self):
        with pytest.raises(ValueError, match="already decided"):
            select_move(as_board("XXXOO____"), O)

    def test_rejects_full_board(self):
        with pytest.raises(ValueError):
            select_move(as_board("XOXXOOOXX"), X)

    def test_rejects_malformed_board(self):
        with pytest.raises(ValueError):
            select_move([0] * 8, X)

    def test_empty_board_opens_in_the_corner(self):
        # Every opening draws, so the lowest index wins the tie
        board = new_board()
        assert select_move(board, X) == 0
        assert select_move(board, O) == 0
        assert empty_cells(board) == list(range(9))

    def test_self_play_is_a_draw(self):
        board = new_board()
        to_move = X
        while not evaluate(board).is_over:
            move = select_move(board, to_move)
            assert board[move] == EMPTY
            board[move] = to_move
            to_move = to_move.opposite()
        assert evaluate(board) == DRAW


class TestMinimax:
    def test_terminal_scores(self):
        assert minimax(as_board("XXXOO____"), O, maximizing=X) == GameConfig.WIN_SCORE
        assert minimax(as_board("XXXOO____"), O) == GameConfig.LOSS_SCORE
        assert minimax(as_board("XOXXOOOXX"), X) == GameConfig.DRAW_SCORE

    def test_forced_win_is_not_depth_adjusted(self):
        # X wins now or later: both score the same
        board = as_board("XX_OO____")
        assert minimax(board, X) == GameConfig.WIN_SCORE

    def test_scores_are_bounded(self):
        for board, to_move in random_positions(30, seed=9):
            assert minimax(board, to_move) in (
                GameConfig.WIN_SCORE, GameConfig.DRAW_SCORE, GameConfig.LOSS_SCORE
            )


class TestAIPlayer:
    def test_never_loses_to_random_play(self):
        from logic.ai_player import AIPlayer
        from logic.game_state import GameState
        from logic.win_checker import update_game_state

        rng = random.Random(42)
        ai = AIPlayer(O)
        for _ in range(3):
            state = GameState()
            while not state.is_game_over:
                if state.current_player == ai.player:
                    move = ai.get_best_move(state)
                else:
                    move = rng.choice(state.get_empty_cells())
                state.make_move(move)
                update_game_state(state)
            assert state.winner != X

    def test_refuses_out_of_turn(self):
        from logic.ai_player import AIPlayer
        from logic.game_state import GameState

        assert AIPlayer(O).get_best_move(GameState()) is None
