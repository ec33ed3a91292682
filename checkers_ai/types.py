"""
Type definitions for the checkers rules and search engine.

This module provides:
- Position and Direction primitives
- Piece kind / owner enums and the movement direction table
- Piece and Move value types
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, NamedTuple, Tuple

BOARD_SIZE = 8

_piece_ids = itertools.count(1)


class Direction(NamedTuple):
    """Diagonal unit vector."""
    row: int
    col: int


class Position(NamedTuple):
    """(row, col) square on the board."""
    row: int
    col: int

    def offset(self, direction: Direction, steps: int = 1) -> "Position":
        return Position(self.row + direction.row * steps, self.col + direction.col * steps)

    def in_bounds(self, size: int = BOARD_SIZE) -> bool:
        return 0 <= self.row < size and 0 <= self.col < size

    @property
    def is_dark(self) -> bool:
        return (self.row + self.col) % 2 == 1


class PieceKind(Enum):
    MAN = "man"
    KING = "king"


class Player(Enum):
    HUMAN = "human"
    COMPUTER = "computer"

    @property
    def opponent(self) -> "Player":
        return Player.COMPUTER if self is Player.HUMAN else Player.HUMAN


ALL_DIRECTIONS: Tuple[Direction, ...] = (
    Direction(1, -1),
    Direction(1, 1),
    Direction(-1, -1),
    Direction(-1, 1),
)

# Movement and capture directions keyed on (kind, owner).
# Men only go forward: the human toward higher rows, the computer toward lower.
DIRECTIONS: Dict[Tuple[PieceKind, Player], Tuple[Direction, ...]] = {
    (PieceKind.MAN, Player.HUMAN): (Direction(1, -1), Direction(1, 1)),
    (PieceKind.MAN, Player.COMPUTER): (Direction(-1, -1), Direction(-1, 1)),
    (PieceKind.KING, Player.HUMAN): ALL_DIRECTIONS,
    (PieceKind.KING, Player.COMPUTER): ALL_DIRECTIONS,
}


def promotion_row(owner: Player, size: int = BOARD_SIZE) -> int:
    """Row on which a man of `owner` becomes a king."""
    return size - 1 if owner is Player.HUMAN else 0


@dataclass
class Piece:
    """A single checker. `id` stays the same for the piece's whole life."""
    kind: PieceKind
    owner: Player
    position: Position
    id: int = field(default_factory=lambda: next(_piece_ids))

    @property
    def is_king(self) -> bool:
        return self.kind is PieceKind.KING

    @property
    def directions(self) -> Tuple[Direction, ...]:
        return DIRECTIONS[(self.kind, self.owner)]

    def clone(self) -> "Piece":
        return Piece(kind=self.kind, owner=self.owner, position=self.position, id=self.id)


@dataclass(frozen=True)
class Move:
    """
    A move from one square to another.

    `captured` lists the captured squares in capture order; an empty tuple
    means a simple move. Two moves are equal when their origin and
    destination match, regardless of what they capture.
    """
    from_pos: Position
    to_pos: Position
    captured: Tuple[Position, ...] = field(default=(), compare=False)

    @property
    def is_capture(self) -> bool:
        return bool(self.captured)

    def __str__(self) -> str:
        sep = "x" if self.captured else "-"
        return f"{tuple(self.from_pos)}{sep}{tuple(self.to_pos)}"
