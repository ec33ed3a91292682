"""
Search interfaces and the alpha-beta minimax engine that picks the computer's move.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple

from config import get_engine_settings
from checkers_ai.board import Board
from checkers_ai.eval import Evaluator, get_evaluator
from checkers_ai.types import Move, Player

logger = logging.getLogger(__name__)

INF = 10 ** 9


@dataclass
class SearchStats:
    """Statistics from the last find_best_move call."""
    nodes: int = 0
    best_move: Optional[Move] = None
    best_score: Optional[int] = None


class SearchStrategy(ABC):
    """Abstract interface for move-choosing strategies."""

    @abstractmethod
    def find_best_move(self, board: Board) -> Optional[Move]:  # pragma: no cover
        raise NotImplementedError


class AlphaBetaSearch(SearchStrategy):
    """Depth-limited minimax with alpha-beta pruning.

    The computer maximizes, the human minimizes. Every ply works on its own
    copy of the board, and nothing is cached between calls.
    """

    def __init__(self, depth: int = 4, evaluator: Optional[Evaluator] = None,
                 pruning: bool = True) -> None:
        if not isinstance(depth, int) or isinstance(depth, bool) or depth < 1:
            raise ValueError(f"Search depth must be a positive integer, got {depth!r}")
        self.depth = depth
        self.evaluator: Evaluator = evaluator or get_evaluator()
        self.pruning = pruning
        self.stats = SearchStats()

    def evaluate(self, board: Board) -> int:
        return self.evaluator.evaluate(board)

    def search(self, board: Board, depth: int, alpha: int, beta: int, maximizing: bool) -> int:
        """Minimax value of `board` with `depth` plies left."""
        self.stats.nodes += 1
        computer_moves = board.legal_moves(Player.COMPUTER)
        human_moves = board.legal_moves(Player.HUMAN)
        terminal = self.evaluator.terminal_score(board, computer_moves, human_moves)
        if terminal is not None:
            return terminal
        if depth == 0:
            return self.evaluator.score(board, computer_moves, human_moves)

        if maximizing:
            best = -INF
            for move in computer_moves:
                child = board.copy()
                child.apply_move(move)
                val = self.search(child, depth - 1, alpha, beta, False)
                best = max(best, val)
                alpha = max(alpha, val)
                if self.pruning and beta <= alpha:
                    break
            return best

        best = INF
        for move in human_moves:
            child = board.copy()
            child.apply_move(move)
            val = self.search(child, depth - 1, alpha, beta, True)
            best = min(best, val)
            beta = min(beta, val)
            if self.pruning and beta <= alpha:
                break
        return best

    def score_moves(self, board: Board) -> List[Tuple[Move, int]]:
        """(move, score) for every computer move at the root, in generation order."""
        scored = []
        for move in board.legal_moves(Player.COMPUTER):
            child = board.copy()
            child.apply_move(move)
            score = self.search(child, self.depth - 1, -INF, INF, False)
            logger.debug("Move %s -> score %s", move, score)
            scored.append((move, score))
        return scored

    def find_best_move(self, board: Board) -> Optional[Move]:
        """Best computer move, or None when the computer has no legal move."""
        self.stats = SearchStats()
        best_move: Optional[Move] = None
        best_score = -INF
        for move, score in self.score_moves(board):
            # Strictly greater: ties keep the first move generated.
            if best_move is None or score > best_score:
                best_move, best_score = move, score
        if best_move is None:
            logger.info("Computer has no legal moves")
            return None
        self.stats.best_move = best_move
        self.stats.best_score = best_score
        logger.info("Computer selected %s with score %s (%d nodes)", best_move, best_score, self.stats.nodes)
        return best_move


class MinimaxSearch(AlphaBetaSearch):
    """Plain minimax over the same tree, no pruning."""

    def __init__(self, depth: int = 4, evaluator: Optional[Evaluator] = None) -> None:
        super().__init__(depth=depth, evaluator=evaluator, pruning=False)


def get_search_strategy(depth: Optional[int] = None) -> SearchStrategy:
    """Factory for the default search strategy (alpha-beta)."""
    if depth is None:
        depth = get_engine_settings().default_depth
    return AlphaBetaSearch(depth=depth)


__all__ = [
    "SearchStats",
    "SearchStrategy",
    "AlphaBetaSearch",
    "MinimaxSearch",
    "get_search_strategy",
]
