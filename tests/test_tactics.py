from ttt_engine.board import Board, Mark, Position
from ttt_engine.tactics import blocking_required, immediate_wins, threats


def test_immediate_wins_for_both_sides():
    b = Board.from_string("110220000")  # X to move
    assert immediate_wins(b, Mark.X) == [Position(2, 0)]
    assert immediate_wins(b, Mark.O) == [Position(2, 1)]
    assert threats(b) == [Position(2, 1)]
    assert blocking_required(b) is False


def test_blocking_required_when_only_opponent_threatens():
    b = Board.from_string("000020110")  # O to move, X threatens bottom right
    assert threats(b) == [Position(2, 2)]
    assert immediate_wins(b, Mark.O) == []
    assert blocking_required(b) is True


def test_cell_completing_two_lines_is_listed_once():
    b = Board.from_string("121211200")
    assert threats(b) == [Position(2, 2)]


def test_fork_lists_every_winning_cell():
    b = Board.from_string("110010220")  # O to move
    assert threats(b) == [Position(2, 0), Position(2, 2)]
    assert immediate_wins(b, Mark.O) == [Position(2, 2)]
    assert blocking_required(b) is False


def test_tactics_do_not_mutate_board():
    b = Board.from_string("110220000")
    before = b.copy()
    immediate_wins(b, Mark.X)
    threats(b)
    assert b == before
