"""ttt_engine package.

Board model, exhaustive minimax engine, and a small text shell and CLI.

Convenience imports are exposed for common workflows.
"""

from .board import Board, GameStatus, IllegalMove, Mark, Position
from .search import Engine, SearchResult

__all__ = [
    "Board",
    "GameStatus",
    "IllegalMove",
    "Mark",
    "Position",
    "Engine",
    "SearchResult",
]
