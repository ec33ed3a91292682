"""
Game session management: turns, game end and the computer's reply.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional, Tuple

from checkers_ai.board import Board
from checkers_ai.engine import get_engine
from checkers_ai.search import AlphaBetaSearch
from checkers_ai.types import Move, Player, Position

logger = logging.getLogger(__name__)


class GameSession:
    """Manages one game between the human and the computer."""

    def __init__(self, depth: Optional[int] = None) -> None:
        self.engine: AlphaBetaSearch = get_engine(depth)
        self.board = Board()
        self.current_player = Player.HUMAN
        self.game_over = False
        self.winner: Optional[Player] = None
        self.is_thinking = False
        self._generation = 0
        self._lock = threading.Lock()

    def reset(self) -> None:
        """Start a new game. A computer search still running is discarded."""
        with self._lock:
            self._generation += 1
            self.board = Board()
            self.current_player = Player.HUMAN
            self.game_over = False
            self.winner = None
            self.is_thinking = False
        logger.info("Game reset")

    def legal_moves(self) -> List[Move]:
        return self.board.legal_moves(self.current_player)

    def moves_from(self, position: Tuple[int, int]) -> List[Move]:
        """Legal moves of the side to move that start on `position`."""
        pos = Position(*position)
        return [m for m in self.legal_moves() if m.from_pos == pos]

    def selectable_positions(self) -> List[Position]:
        """Squares of human pieces that have a legal move, in generation order."""
        if self.game_over or self.current_player is not Player.HUMAN:
            return []
        seen: List[Position] = []
        for move in self.board.legal_moves(Player.HUMAN):
            if move.from_pos not in seen:
                seen.append(move.from_pos)
        return seen

    def is_human_turn(self) -> bool:
        return not self.game_over and self.current_player is Player.HUMAN

    def make_move(self, move: Move) -> bool:
        """Play a move for the side to move. Returns False if it is not legal."""
        if self.game_over:
            return False
        legal = self.legal_moves()
        if move not in legal:
            return False
        # Use the generated move so the captures are filled in.
        move = legal[legal.index(move)]
        if not self.board.apply_move(move):
            return False
        self._check_game_end()
        if not self.game_over:
            self.current_player = self.current_player.opponent
        return True

    def _check_game_end(self) -> None:
        winner = self.board.game_result()
        if winner is not None:
            self.game_over = True
            self.winner = winner
            logger.info("Game over, %s wins", winner.value)

    def play_computer_move(self) -> Optional[Move]:
        """Search and play the computer's move on the calling thread.

        Returns None while a background search is pending.
        """
        if self.is_thinking or self.game_over or self.current_player is not Player.COMPUTER:
            return None
        move = self.engine.find_best_move(self.board)
        if move is None:
            self._check_game_end()
            return None
        self.make_move(move)
        return move

    def request_computer_move(self, callback: Optional[Callable[[Optional[Move]], None]] = None) -> Optional[threading.Thread]:
        """Search for the computer's move on a background thread.

        The search runs on a copy of the board. The result is applied only if
        the game was not reset meanwhile; `callback` gets the applied move
        (None if the computer had no move or the move could not be played).
        Returns the worker thread, or None
        if it is not the computer's turn or a search is already running.
        """
        with self._lock:
            if self.is_thinking or self.game_over or self.current_player is not Player.COMPUTER:
                return None
            self.is_thinking = True
            generation = self._generation
            board_copy = self.board.copy()

        def worker() -> None:
            applied: Optional[Move] = None
            try:
                move = self.engine.find_best_move(board_copy)
                with self._lock:
                    if generation != self._generation:
                        logger.debug("Dropping stale computer move %s", move)
                        return
                    if move is None:
                        self._check_game_end()
                    elif self.make_move(move):
                        applied = move
                    else:
                        logger.warning("Computer move %s was rejected", move)
            finally:
                with self._lock:
                    if generation == self._generation:
                        self.is_thinking = False
            if callback is not None:
                callback(applied)

        thread = threading.Thread(target=worker, daemon=True)
        thread.start()
        return thread

    def piece_counts(self) -> Tuple[int, int]:
        """(human pieces, computer pieces)."""
        return self.board.count_pieces(Player.HUMAN), self.board.count_pieces(Player.COMPUTER)
