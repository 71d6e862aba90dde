#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import math
import statistics as stats
import time
from dataclasses import dataclass
from typing import List, Tuple

from ttt_engine.board import Board
from ttt_engine.search import Engine


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    z = 1.96
    half = z * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Config:
    rounds: int = 5
    board: str = "000000000"


def time_search(raw: str) -> Tuple[float, int]:
    engine = Engine(Board.from_string(raw))
    t0 = time.perf_counter()
    engine.choose_best_move()
    t1 = time.perf_counter()
    nodes = engine.last_search.nodes if engine.last_search else 0
    return t1 - t0, nodes


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Time one full engine search")
    ap.add_argument("--rounds", type=int, default=Config.rounds)
    ap.add_argument("--board", default=Config.board, help="Board string (default: empty board)")
    ns = ap.parse_args(argv)
    cfg = Config(rounds=ns.rounds, board=ns.board)
    logging.basicConfig(level=logging.WARNING, format="[%(levelname)s] %(message)s")

    times: List[float] = []
    nodes = 0
    for _ in range(cfg.rounds):
        elapsed, nodes = time_search(cfg.board)
        times.append(elapsed)
    m, h = ci95(times)
    print(f"board={cfg.board} rounds={cfg.rounds} nodes={nodes}")
    print(f"choose_best_move: mean={m:.4f}s ± {h:.4f}s (95% CI)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
