"""
Exhaustive minimax search over a single shared board.
Scoring is fixed to the first side's perspective:
- +1 when X (the side that opens the game) has won, -1 when O has won, 0 for a draw.
- X always maximises and O always minimises, whoever is choosing the current move.
No pruning and no caching: every line is searched to a terminal state.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .board import Board, GameStatus, Position

TERMINAL_SCORES = {
    GameStatus.FIRST_WINS: +1,
    GameStatus.SECOND_WINS: -1,
    GameStatus.DRAW: 0,
}


@dataclass
class SearchResult:
    move: Optional[Position]
    score: Optional[int]
    nodes: int


class Engine:
    def __init__(self, board: Optional[Board] = None):
        self.board = board if board is not None else Board()
        self.last_search: Optional[SearchResult] = None
        self._nodes = 0

    def minimax(self, maximize: bool) -> int:
        self._nodes += 1
        status = self.board.evaluate_status()
        if status is not GameStatus.IN_PROGRESS:
            return TERMINAL_SCORES[status]

        best = -2 if maximize else +2
        for pos in self.board.candidate_moves():
            with self.board.scoped_move(pos):
                score = self.minimax(not maximize)
            if maximize:
                best = max(best, score)
            else:
                best = min(best, score)
        return best

    def choose_best_move(self) -> Optional[Position]:
        """Play the optimal move for the side to move on the live board.

        Returns the move played, or None when the position is already
        terminal (nothing to do).
        """
        board = self.board
        if board.is_terminal():
            logging.debug("Position is terminal; no move to make")
            return None

        self._nodes = 0
        maximizing = board.x_to_move
        target = +1 if maximizing else -1
        best_score: Optional[int] = None
        best_pos: Optional[Position] = None

        for pos in board.candidate_moves():
            with board.scoped_move(pos):
                # board.x_to_move now names the side replying to pos
                score = self.minimax(board.x_to_move)
            if best_score is None or (score > best_score if maximizing else score < best_score):
                best_score = score
                best_pos = pos
                if score == target:
                    break

        self.last_search = SearchResult(move=best_pos, score=best_score, nodes=self._nodes)
        if best_pos is None:
            logging.warning("Engine failed to find a move")
            return None

        board.apply_move(best_pos)
        logging.info("Move value: %d", best_score)
        logging.debug(
            "engine played col=%d row=%d after %d nodes", best_pos.col, best_pos.row, self._nodes
        )
        return best_pos
