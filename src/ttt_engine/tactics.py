"""
Tactics: immediate wins and the threats the side to move has to answer.
Used for diagnostics; the engine itself relies on full search only.
"""
from typing import List

from .board import WIN_LINES, Board, Mark, Position, POSITIONS


def immediate_wins(board: Board, mark: Mark) -> List[Position]:
    cells = [v for row in board.grid for v in row]
    wins: List[Position] = []
    for i, v in enumerate(cells):
        if v != Mark.EMPTY:
            continue
        b = cells[:]
        b[i] = mark
        if any(all(b[j] == mark for j in line) for line in WIN_LINES if i in line):
            wins.append(POSITIONS[i])
    return wins


def threats(board: Board) -> List[Position]:
    opp = Mark.O if board.x_to_move else Mark.X
    return immediate_wins(board, opp)


def blocking_required(board: Board) -> bool:
    return bool(threats(board)) and not immediate_wins(board, board.mover)
