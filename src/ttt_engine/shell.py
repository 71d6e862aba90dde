"""
Text interaction around the engine: rendering, human coordinates, the game loop.

Humans enter 1-indexed coordinates with the origin at the bottom-left cell;
the board uses 0-indexed (col, row) with row 0 at the top.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .board import Board, GameStatus, IllegalMove, Mark, Position
from .search import Engine

OUTCOME_MESSAGES = {
    GameStatus.FIRST_WINS: "x wins",
    GameStatus.SECOND_WINS: "o wins",
    GameStatus.DRAW: "Cats game",
    GameStatus.IN_PROGRESS: "Game not over",
}

_SYMBOLS = {Mark.EMPTY: ' ', Mark.X: 'x', Mark.O: 'o'}


@dataclass
class PlayArgs:
    engine_first: bool = False
    verbose: bool = False


def render_board(board: Board) -> str:
    lines = []
    for y, row in enumerate(board.grid):
        lines.append(" | ".join(_SYMBOLS[v] for v in row))
        if y != 2:
            lines.append("---------")
    return "\n".join(lines)


def to_position(x_text: str, y_text: str) -> Position:
    x = int(x_text.strip())
    y = int(y_text.strip())
    return Position(col=x - 1, row=3 - y)


class GameShell:
    def __init__(
        self,
        args: PlayArgs,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ):
        self.args = args
        self.engine = Engine(Board())
        self.read = read
        self.write = write

    @property
    def board(self) -> Board:
        return self.engine.board

    def prompt_human_move(self) -> Position:
        while True:
            x_text = self.read("Enter an x position for your move: ")
            y_text = self.read("Enter a y position for your move: ")
            try:
                pos = to_position(x_text, y_text)
                self.board.play(pos)
            except IllegalMove as e:
                logging.debug("%s", e)
                self.write("Invalid board position, try again")
                continue
            except ValueError:
                self.write("Positions must be whole numbers from 1 to 3, try again")
                continue
            return pos

    def run(self) -> GameStatus:
        """Play one game to the end and report the outcome. EOFError from read propagates."""
        if self.args.engine_first:
            self.engine.choose_best_move()
        self.write(render_board(self.board))
        while not self.board.is_terminal():
            self.prompt_human_move()
            self.engine.choose_best_move()
            self.write(render_board(self.board))

        status = self.board.evaluate_status()
        self.write(OUTCOME_MESSAGES[status])
        return status
