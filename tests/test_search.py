import pytest

from ttt_engine.board import Board, GameStatus, Mark, Position
from ttt_engine.search import TERMINAL_SCORES, Engine

X, O, E = Mark.X, Mark.O, Mark.EMPTY


def test_immediate_win_completes_top_row():
    board = Board.from_rows([[X, X, E], [O, O, E], [E, E, E]])
    assert board.x_to_move
    engine = Engine(board)
    move = engine.choose_best_move()
    assert move == Position(2, 0)
    assert board.evaluate_status() is GameStatus.FIRST_WINS
    assert engine.last_search.score == +1


def test_second_side_takes_immediate_win():
    board = Board.from_rows([[O, O, E], [X, X, E], [X, E, E]])
    assert not board.x_to_move
    move = Engine(board).choose_best_move()
    assert move == Position(2, 0)
    assert board.evaluate_status() is GameStatus.SECOND_WINS


def test_second_side_blocks_bottom_row():
    board = Board.from_rows([[E, E, E], [E, O, E], [X, X, E]])
    move = Engine(board).choose_best_move()
    assert move == Position(2, 2)
    assert board.cell(Position(2, 2)) is O


def test_first_side_blocks_middle_column():
    board = Board.from_rows([[X, O, E], [E, O, E], [E, E, X]])
    assert board.x_to_move
    move = Engine(board).choose_best_move()
    assert move == Position(1, 2)


def test_win_preferred_over_block():
    # O threatens the middle row, but X can finish the top row first
    board = Board.from_rows([[X, X, E], [O, O, E], [E, E, E]])
    Engine(board).choose_best_move()
    assert board.cell(Position(2, 1)) is E
    assert board.cell(Position(2, 0)) is X


@pytest.mark.parametrize("raw", ["112221121", "111220000", "222110110"])
def test_choose_best_move_on_terminal_board_is_noop(raw):
    board = Board.from_string(raw)
    before = board.copy()
    engine = Engine(board)
    assert engine.choose_best_move() is None
    assert board == before
    assert engine.last_search is None


def test_minimax_terminal_scores():
    for raw, status in [("111220000", GameStatus.FIRST_WINS),
                        ("110222100", GameStatus.SECOND_WINS),
                        ("112221121", GameStatus.DRAW)]:
        board = Board.from_string(raw)
        assert board.evaluate_status() is status
        engine = Engine(board)
        for maximize in (True, False):
            assert engine.minimax(maximize) == TERMINAL_SCORES[status]


def test_minimax_forced_results():
    # X to move with an open top row: forced win
    assert Engine(Board.from_string("110220000")).minimax(True) == +1
    # O to move, O to win the middle row
    assert Engine(Board.from_string("110220100")).minimax(False) == -1


def test_minimax_leaves_board_untouched():
    board = Board.from_string("100020000")
    before = board.copy()
    Engine(board).minimax(True)
    assert board == before


def test_search_result_recorded():
    board = Board.from_string("100020000")
    engine = Engine(board)
    move = engine.choose_best_move()
    res = engine.last_search
    assert res.move == move
    assert res.score == 0
    assert res.nodes > 0
    assert board.cell(move) is X
    assert board.x_to_move is False


@pytest.mark.parametrize("raw", ["100020000", "120000000", "100000000", "121211200"])
def test_ties_keep_earliest_row_major_move(raw):
    scores = []
    for pos in Board.from_string(raw).candidate_moves():
        b = Board.from_string(raw)
        b.apply_move(pos)
        scores.append((pos, Engine(b).minimax(b.x_to_move)))
    board = Board.from_string(raw)
    pick = max if board.x_to_move else min
    best = pick(s for _, s in scores)
    move = Engine(board).choose_best_move()
    assert move == next(p for p, s in scores if s == best)


def test_forced_block_against_double_line_threat():
    # X threatens the last cell on both the diagonal and the right column
    board = Board.from_string("121211200")
    assert not board.x_to_move
    engine = Engine(board)
    assert engine.choose_best_move() == Position(2, 2)
    assert engine.last_search.score == 0
    assert board.evaluate_status() is GameStatus.IN_PROGRESS


@pytest.mark.slow
def test_optimal_self_play_from_empty_board_is_draw():
    board = Board()
    engine = Engine(board)
    while engine.choose_best_move() is not None:
        pass
    assert board.evaluate_status() is GameStatus.DRAW
    assert board.candidate_moves() == []


@pytest.mark.parametrize("opening", [Position(0, 0), Position(1, 0), Position(1, 1)])
def test_self_play_after_any_opening_is_draw(opening):
    board = Board()
    board.apply_move(opening)
    engine = Engine(board)
    while engine.choose_best_move() is not None:
        pass
    assert board.evaluate_status() is GameStatus.DRAW
