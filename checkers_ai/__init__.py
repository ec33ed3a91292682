"""Checkers against a computer opponent: rules engine, evaluation and alpha-beta search.

Usage examples:
    from checkers_ai import new_game_board, legal_moves, Player
    from checkers_ai import AlphaBetaSearch
    from checkers_ai import GameSession
"""
from __future__ import annotations

from .types import (
    BOARD_SIZE,
    Direction,
    Move,
    Piece,
    PieceKind,
    Player,
    Position,
)
from .board import Board, board_from_pieces

# Engine API
from .engine import (
    new_game_board,
    legal_moves,
    apply_move,
    is_game_over,
    best_move,
    get_engine,
)

from .eval import Evaluator, HeuristicEvaluator, get_evaluator
from .search import AlphaBetaSearch, MinimaxSearch, SearchStats, get_search_strategy
from .moves import MoveValidator, move_to_str, parse_move_str, position_of, square_number
from .game import GameSession
