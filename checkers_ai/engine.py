"""
Functional engine API used by front ends: board creation, legal moves,
move application, game end and the computer's move choice.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from config import get_engine_settings
from checkers_ai.board import Board
from checkers_ai.search import AlphaBetaSearch
from checkers_ai.types import Move, Player

__all__ = [
    "new_game_board",
    "legal_moves",
    "apply_move",
    "is_game_over",
    "best_move",
    "get_engine",
]


def new_game_board() -> Board:
    """Standard starting position: 12 men per side on the dark squares."""
    return Board()


def legal_moves(board: Board, player: Player) -> List[Move]:
    return board.legal_moves(player)


def apply_move(board: Board, move: Move) -> bool:
    """Mutates `board`; False when `move.from_pos` is empty."""
    return board.apply_move(move)


def is_game_over(board: Board) -> Tuple[bool, Optional[Player]]:
    winner = board.game_result()
    return winner is not None, winner


def get_engine(depth: Optional[int] = None) -> AlphaBetaSearch:
    """Get a new search engine instance."""
    if depth is None:
        depth = get_engine_settings().default_depth
    return AlphaBetaSearch(depth=depth)


def best_move(board: Board, depth: Optional[int] = None) -> Optional[Move]:
    """Computer's move for `board`, or None if it has none (it has lost)."""
    return get_engine(depth).find_best_move(board)
