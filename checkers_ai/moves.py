from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from checkers_ai.board import Board
from checkers_ai.types import BOARD_SIZE, Move, Player, Position

SQUARES: int = 32

# -----------------------------
# Square numbering (1..32 over dark squares, row-major from row 0)
# -----------------------------
_pos_of: List[Optional[Position]] = [None] * (SQUARES + 1)
_num_of: Dict[Position, int] = {}


def _build_mappings() -> None:
    i: int = 1
    for r in range(BOARD_SIZE):
        for c in range(BOARD_SIZE):
            pos = Position(r, c)
            if pos.is_dark:
                _pos_of[i] = pos
                _num_of[pos] = i
                i += 1


_build_mappings()


def position_of(number: int) -> Position:
    if not 1 <= number <= SQUARES:
        raise ValueError(f"Square number must be in 1..{SQUARES}, got {number}")
    return _pos_of[number]  # type: ignore[return-value]


def square_number(position: Tuple[int, int]) -> Optional[int]:
    """Square number of a dark square, None for light squares."""
    return _num_of.get(Position(*position))


def move_to_str(move: Move) -> str:
    sep: str = 'x' if move.is_capture else '-'
    return f"{square_number(move.from_pos)}{sep}{square_number(move.to_pos)}"


def parse_move_str(s: str) -> Optional[Tuple[Position, Position]]:
    """Parse "9-13" or "10x19" into (from, to) positions."""
    s = s.strip().lower().replace('x', '-').replace(' ', '')
    if not s:
        return None
    parts: List[str] = [p for p in s.split('-') if p]
    if len(parts) != 2:
        return None
    try:
        a, b = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if not all(1 <= x <= SQUARES for x in (a, b)):
        return None
    return position_of(a), position_of(b)


def group_moves_by_start(moves: List[Move]) -> Dict[Position, List[Move]]:
    result: Dict[Position, List[Move]] = {}
    for move in moves:
        result.setdefault(move.from_pos, []).append(move)
    return result


def group_moves_by_dest(moves: List[Move]) -> Dict[Position, List[Move]]:
    result: Dict[Position, List[Move]] = {}
    for move in moves:
        result.setdefault(move.to_pos, []).append(move)
    return result


class MoveValidator:
    """Matches user-entered moves against the generated legal moves."""

    @staticmethod
    def find(board: Board, player: Player, from_pos: Tuple[int, int],
             to_pos: Tuple[int, int]) -> Optional[Move]:
        """The legal move with this origin and destination, captures filled in."""
        wanted = Move(Position(*from_pos), Position(*to_pos))
        for move in board.legal_moves(player):
            if move == wanted:
                return move
        return None
