#!/usr/bin/env python3
"""
Quick performance check of the search engine.
Compares alpha-beta against plain minimax from the opening position at
increasing depths: wall time and nodes visited.
"""

import time

from checkers_ai.board import Board
from checkers_ai.search import AlphaBetaSearch, MinimaxSearch


def benchmark_depth(depth):
    results = {}
    for name, engine in (("alpha-beta", AlphaBetaSearch(depth=depth)),
                         ("minimax", MinimaxSearch(depth=depth))):
        start_time = time.time()
        move = engine.find_best_move(Board())
        elapsed = time.time() - start_time
        results[name] = (move, engine.stats.nodes, elapsed)
        print(f"  {name:<10} {elapsed:7.3f}s  {engine.stats.nodes:7d} nodes  move {move}")
    return results


if __name__ == "__main__":
    print("=== SEARCH BENCHMARK ===")
    for depth in (1, 2, 3, 4):
        print(f"\nDepth {depth}")
        print("-" * 40)
        results = benchmark_depth(depth)
        pruned, plain = results["alpha-beta"], results["minimax"]
        if pruned[0] != plain[0]:
            print("  WARNING: pruning changed the chosen move")
        if pruned[1]:
            print(f"  Node reduction: {plain[1] / pruned[1]:.1f}x")
