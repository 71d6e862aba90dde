"""
Board and game state: the 3x3 grid, side to move, terminal classification.
Notes:
- Cells are stored row-major as 9 marks: 0=empty, 1=X, 2=O. X always starts.
- Positions are (col, row) with row 0 at the top.
- Status is recomputed from the cells on every query, never cached.
- The search mutates one board in place; scoped_move pairs every apply with its undo.
"""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterator, List, Optional, Sequence, Tuple


class Mark(IntEnum):
    EMPTY = 0
    X = 1
    O = 2


class GameStatus(Enum):
    FIRST_WINS = "first_wins"
    SECOND_WINS = "second_wins"
    DRAW = "draw"
    IN_PROGRESS = "in_progress"


@dataclass(frozen=True)
class Position:
    col: int
    row: int

    def in_bounds(self) -> bool:
        return 0 <= self.col < 3 and 0 <= self.row < 3

    @property
    def index(self) -> int:
        return self.row * 3 + self.col


class IllegalMove(ValueError):
    """Move onto an occupied or out-of-range cell. The board is left untouched."""

    def __init__(self, pos: Position, reason: str):
        super().__init__(f"illegal move at (col={pos.col}, row={pos.row}): {reason}")
        self.pos = pos
        self.reason = reason


# Row-major, so POSITIONS[i].index == i
POSITIONS: Tuple[Position, ...] = tuple(Position(c, r) for r in range(3) for c in range(3))

# Scan order fixes which line wins on boards with more than one complete line
WIN_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),             # diagonals
)

_WINNER_STATUS = {Mark.X: GameStatus.FIRST_WINS, Mark.O: GameStatus.SECOND_WINS}


class Board:
    def __init__(self, x_to_move: bool = True):
        self._cells: List[Mark] = [Mark.EMPTY] * 9
        self.x_to_move = x_to_move

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]], x_to_move: Optional[bool] = None) -> "Board":
        """Build a board from 3 rows of marks.

        When ``x_to_move`` is omitted the side to move is inferred from the
        piece counts, X moving when both sides have placed the same number.
        """
        if len(rows) != 3 or any(len(r) != 3 for r in rows):
            raise ValueError("Board must have 3 rows of 3 cells")
        board = cls()
        board._cells = [Mark(v) for r in rows for v in r]
        if x_to_move is None:
            x_count, o_count = board.piece_counts()
            x_to_move = x_count == o_count
        board.x_to_move = x_to_move
        return board

    @classmethod
    def from_string(cls, raw: str) -> "Board":
        raw = raw.strip()
        if len(raw) != 9 or any(c not in "012" for c in raw):
            raise ValueError("Invalid board string. Must be 9 chars of 0/1/2.")
        digits = [int(c) for c in raw]
        return cls.from_rows([digits[0:3], digits[3:6], digits[6:9]])

    def serialize(self) -> str:
        return ''.join(str(int(v)) for v in self._cells)

    def copy(self) -> "Board":
        other = Board(self.x_to_move)
        other._cells = self._cells[:]
        return other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells and self.x_to_move == other.x_to_move

    def __repr__(self) -> str:
        return f"Board({self.serialize()!r}, x_to_move={self.x_to_move})"

    @property
    def grid(self) -> Tuple[Tuple[Mark, ...], ...]:
        c = self._cells
        return (tuple(c[0:3]), tuple(c[3:6]), tuple(c[6:9]))

    @property
    def mover(self) -> Mark:
        return Mark.X if self.x_to_move else Mark.O

    def cell(self, pos: Position) -> Mark:
        return self._cells[pos.index]

    def piece_counts(self) -> Tuple[int, int]:
        return self._cells.count(Mark.X), self._cells.count(Mark.O)

    def apply_move(self, pos: Position) -> bool:
        if not pos.in_bounds():
            return False
        idx = pos.index
        if self._cells[idx] != Mark.EMPTY:
            return False
        self._cells[idx] = Mark.X if self.x_to_move else Mark.O
        self.x_to_move = not self.x_to_move
        return True

    def undo_move(self, pos: Position) -> None:
        # Only valid right after the apply_move that filled this cell
        self._cells[pos.index] = Mark.EMPTY
        self.x_to_move = not self.x_to_move

    def play(self, pos: Position) -> None:
        """Checked move for external input; raises IllegalMove instead of returning False."""
        if not pos.in_bounds():
            raise IllegalMove(pos, "out of range")
        if not self.apply_move(pos):
            raise IllegalMove(pos, "cell is occupied")

    @contextmanager
    def scoped_move(self, pos: Position) -> Iterator[None]:
        if not self.apply_move(pos):
            raise IllegalMove(pos, "cannot apply trial move")
        try:
            yield None
        finally:
            self.undo_move(pos)

    def candidate_moves(self) -> List[Position]:
        return [POSITIONS[i] for i, v in enumerate(self._cells) if v == Mark.EMPTY]

    def evaluate_status(self) -> GameStatus:
        cells = self._cells
        for a, b, c in WIN_LINES:
            v = cells[a]
            if v != Mark.EMPTY and v == cells[b] and v == cells[c]:
                return _WINNER_STATUS[v]
        if Mark.EMPTY not in cells:
            return GameStatus.DRAW
        return GameStatus.IN_PROGRESS

    def is_terminal(self) -> bool:
        return self.evaluate_status() is not GameStatus.IN_PROGRESS

    def is_consistent(self) -> bool:
        """True when the board could arise from alternating play with X first."""
        x_count, o_count = self.piece_counts()
        if not (x_count == o_count or x_count == o_count + 1):
            return False
        if self.x_to_move != (x_count == o_count):
            return False

        def count_wins(mark: Mark) -> int:
            return sum(1 for line in WIN_LINES if all(self._cells[i] == mark for i in line))

        x_wins, o_wins = count_wins(Mark.X), count_wins(Mark.O)
        if x_wins and o_wins:
            return False
        if x_wins and x_count != o_count + 1:
            return False
        if o_wins and x_count != o_count:
            return False
        return True
