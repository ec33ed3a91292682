"""
Evaluation interfaces and the hand-tuned heuristic evaluator.

Scores are from the computer's point of view: positive favors the
computer, negative favors the human.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from checkers_ai.board import Board
from checkers_ai.types import Move, Piece, PieceKind, Player

WIN_SCORE = 10000

MAN_VALUE = 100
KING_VALUE = 300
ADVANCE_BONUS = 3
EDGE_BONUS = {PieceKind.MAN: 15, PieceKind.KING: 8}
MOBILITY_WEIGHT = 10
CAPTURE_THREAT = {PieceKind.MAN: 40, PieceKind.KING: 120}
CHAIN_BONUS = 20


class Evaluator(ABC):
    """Abstract evaluator interface for position scoring."""

    @abstractmethod
    def score(self, board: Board, computer_moves: List[Move], human_moves: List[Move]) -> int:  # pragma: no cover
        """Score a non-terminal position given both sides' legal moves."""
        raise NotImplementedError

    def terminal_score(self, board: Board,
                       computer_moves: Optional[List[Move]] = None,
                       human_moves: Optional[List[Move]] = None) -> Optional[int]:
        """-WIN_SCORE if the computer cannot move, +WIN_SCORE if the human cannot, else None."""
        if computer_moves is None:
            computer_moves = board.legal_moves(Player.COMPUTER)
        if not computer_moves:
            return -WIN_SCORE
        if human_moves is None:
            human_moves = board.legal_moves(Player.HUMAN)
        if not human_moves:
            return WIN_SCORE
        return None

    def evaluate(self, board: Board) -> int:
        computer_moves = board.legal_moves(Player.COMPUTER)
        human_moves = board.legal_moves(Player.HUMAN)
        terminal = self.terminal_score(board, computer_moves, human_moves)
        if terminal is not None:
            return terminal
        return self.score(board, computer_moves, human_moves)


def _signed(piece: Piece, value: int) -> int:
    return value if piece.owner is Player.COMPUTER else -value


class HeuristicEvaluator(Evaluator):
    """Material, advancement, edge safety, mobility and capture threats."""

    def position_bonus(self, piece: Piece, size: int) -> int:
        bonus = 0
        if piece.kind is PieceKind.MAN:
            r = piece.position.row
            progress = size - 1 - r if piece.owner is Player.COMPUTER else r
            bonus += progress * ADVANCE_BONUS
        if piece.position.col in (0, size - 1):
            bonus += EDGE_BONUS[piece.kind]
        return bonus

    def capture_potential(self, board: Board, moves: List[Move]) -> int:
        """Value of every capture currently on offer in `moves`."""
        total = 0
        for move in moves:
            if not move.is_capture:
                continue
            value = 0
            for pos in move.captured:
                target = board.piece_at(pos)
                if target is not None:
                    value += CAPTURE_THREAT[target.kind]
            if len(move.captured) > 1:
                value += CHAIN_BONUS * len(move.captured)
            total += value
        return total

    def score(self, board: Board, computer_moves: List[Move], human_moves: List[Move]) -> int:
        score = 0
        for piece in board.pieces:
            material = KING_VALUE if piece.is_king else MAN_VALUE
            score += _signed(piece, material + self.position_bonus(piece, board.size))
        score += (len(computer_moves) - len(human_moves)) * MOBILITY_WEIGHT
        score += self.capture_potential(board, computer_moves) - self.capture_potential(board, human_moves)
        return score


def get_evaluator() -> Evaluator:
    return HeuristicEvaluator()
