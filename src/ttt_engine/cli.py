from __future__ import annotations

import argparse
import logging

from .board import Board
from .search import Engine
from .shell import OUTCOME_MESSAGES, GameShell, PlayArgs, render_board
from .tactics import immediate_wins, threats


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt-engine", description="Optimal tic-tac-toe engine")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("--info", action="store_true", help="Print environment info and exit")

    p_play = sub.add_parser("play", help="Play an interactive game against the engine")
    p_play.add_argument(
        "--engine-first",
        action="store_true",
        help="Let the engine play x and open the game (default: you play x)",
    )

    p_best = sub.add_parser("best-move", help="Show the engine's move for a board (9 digits, 0=empty,1=X,2=O)")
    p_best.add_argument("--board", required=True, help="Board string, e.g., 100020000")

    p_self = sub.add_parser("selfplay", help="Let the engine play both sides to the end")
    p_self.add_argument("--board", default="000000000", help="Starting board string (default: empty)")

    p_tac = sub.add_parser("tactics", help="List immediate wins and threats for side-to-move")
    p_tac.add_argument("--board", required=True, help="Board string, e.g., 110220000")

    return p


def _print_info() -> None:
    import platform
    import sys

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    print(f"ttt-engine={_version()}")


def _version() -> str:
    try:
        from importlib.metadata import version as _ver

        return _ver("ttt-engine")
    except Exception:
        return "unknown"


def _load_board(raw: str) -> Board | None:
    try:
        board = Board.from_string(raw)
    except ValueError as e:
        logging.error("%s", e)
        return None
    if not board.is_consistent():
        logging.error("Board is not a valid reachable state.")
        return None
    return board


def _fmt(positions) -> str:
    return "[" + ", ".join(f"({p.col},{p.row})" for p in positions) + "]"


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        print(_version())
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    if ns.cmd == "play":
        shell = GameShell(PlayArgs(engine_first=ns.engine_first, verbose=ns.verbose))
        try:
            shell.run()
        except (EOFError, KeyboardInterrupt):
            logging.error("Input ended before the game finished")
            return 1
        return 0

    if ns.cmd == "best-move":
        board = _load_board(ns.board)
        if board is None:
            return 2
        engine = Engine(board)
        move = engine.choose_best_move()
        status = board.evaluate_status()
        if move is None:
            logging.info("move=None status=%s", status.value)
            return 0
        logging.info(
            "move=(%d,%d) score=%d status=%s",
            move.col,
            move.row,
            engine.last_search.score,
            status.value,
        )
        return 0

    if ns.cmd == "selfplay":
        board = _load_board(ns.board)
        if board is None:
            return 2
        engine = Engine(board)
        while engine.choose_best_move() is not None:
            logging.debug("board=%s", board.serialize())
        print(render_board(board))
        print(OUTCOME_MESSAGES[board.evaluate_status()])
        return 0

    if ns.cmd == "tactics":
        board = _load_board(ns.board)
        if board is None:
            return 2
        logging.info(
            "to_move=%s wins=%s threats=%s",
            board.mover.name,
            _fmt(immediate_wins(board, board.mover)),
            _fmt(threats(board)),
        )
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
