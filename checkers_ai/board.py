"""
Board state and game rules.

All rule logic lives here: setup, simple moves, forced capture chains for
men and flying kings, move application with promotion, and game end.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from checkers_ai.types import (
    ALL_DIRECTIONS,
    BOARD_SIZE,
    Move,
    Piece,
    PieceKind,
    Player,
    Position,
    promotion_row,
)

logger = logging.getLogger(__name__)

# Rows holding each side's men at the start of a game.
_START_ROWS: Dict[Player, range] = {
    Player.HUMAN: range(0, 3),
    Player.COMPUTER: range(BOARD_SIZE - 3, BOARD_SIZE),
}


class Board:
    """Authoritative set of live pieces for one game position."""

    size: int = BOARD_SIZE

    def __init__(self, setup: bool = True) -> None:
        # Keyed by position; insertion order is the piece iteration order.
        self._squares: Dict[Position, Piece] = {}
        if setup:
            self._setup()

    @classmethod
    def empty(cls) -> "Board":
        return cls(setup=False)

    def _setup(self) -> None:
        for owner in (Player.HUMAN, Player.COMPUTER):
            for r in _START_ROWS[owner]:
                for c in range(self.size):
                    pos = Position(r, c)
                    if pos.is_dark:
                        self.place(PieceKind.MAN, owner, pos)

    def place(self, kind: PieceKind, owner: Player, position: Tuple[int, int]) -> Piece:
        """Put a new piece on an empty square and return it."""
        pos = Position(*position)
        if not pos.in_bounds(self.size):
            raise ValueError(f"Position {tuple(pos)} is off the board")
        if pos in self._squares:
            raise ValueError(f"Square {tuple(pos)} is already occupied")
        piece = Piece(kind=kind, owner=owner, position=pos)
        self._squares[pos] = piece
        return piece

    # ----------------------------
    # Queries
    # ----------------------------
    @property
    def pieces(self) -> List[Piece]:
        return list(self._squares.values())

    def piece_at(self, position: Tuple[int, int]) -> Optional[Piece]:
        return self._squares.get(Position(*position))

    def pieces_of(self, player: Player) -> List[Piece]:
        return [p for p in self._squares.values() if p.owner is player]

    def count_pieces(self, player: Player) -> int:
        return sum(1 for p in self._squares.values() if p.owner is player)

    def copy(self) -> "Board":
        """Independent copy; no piece object is shared with the original."""
        nb = Board.empty()
        nb._squares = {pos: piece.clone() for pos, piece in self._squares.items()}
        return nb

    def to_array(self) -> np.ndarray:
        """8x8 int8 grid: +1/+2 human man/king, -1/-2 computer man/king, 0 empty."""
        grid = np.zeros((self.size, self.size), dtype=np.int8)
        for pos, piece in self._squares.items():
            value = 2 if piece.is_king else 1
            grid[pos.row, pos.col] = value if piece.owner is Player.HUMAN else -value
        return grid

    def __repr__(self) -> str:
        return (f"Board(human={self.count_pieces(Player.HUMAN)}, "
                f"computer={self.count_pieces(Player.COMPUTER)})")

    # ----------------------------
    # Move generation
    # ----------------------------
    def legal_moves(self, player: Player) -> List[Move]:
        """All legal moves for `player`. Captures are mandatory."""
        own = self.pieces_of(player)
        captures: List[Move] = []
        for piece in own:
            captures.extend(self.captures_for(piece))
        if captures:
            return captures
        moves: List[Move] = []
        for piece in own:
            moves.extend(self.simple_moves_for(piece))
        return moves

    def simple_moves_for(self, piece: Piece) -> List[Move]:
        moves: List[Move] = []
        for direction in piece.directions:
            cur = piece.position.offset(direction)
            while cur.in_bounds(self.size) and cur not in self._squares:
                moves.append(Move(piece.position, cur))
                if not piece.is_king:
                    break
                cur = cur.offset(direction)
        return moves

    def captures_for(self, piece: Piece) -> List[Move]:
        """Every complete capture chain available to `piece`, one Move per chain."""
        results: List[Move] = []
        if piece.is_king:
            self._king_chains(piece, piece.position, piece.position, [], results)
        else:
            self._man_chains(piece, piece.position, piece.position, [], results)
        return results

    def _is_capturable(self, piece: Piece, target: Optional[Piece], path: List[Position]) -> bool:
        return target is not None and target.owner is not piece.owner and target.position not in path

    def _man_chains(self, piece: Piece, origin: Position, at: Position,
                    path: List[Position], results: List[Move]) -> None:
        found = False
        for direction in piece.directions:
            jumped = at.offset(direction)
            land = at.offset(direction, 2)
            if not land.in_bounds(self.size) or land in self._squares:
                continue
            if self._is_capturable(piece, self._squares.get(jumped), path):
                found = True
                self._man_chains(piece, origin, land, path + [jumped], results)
        if not found and path:
            results.append(Move(origin, at, tuple(path)))

    def _king_chains(self, piece: Piece, origin: Position, at: Position,
                     path: List[Position], results: List[Move]) -> None:
        found = False
        for direction in ALL_DIRECTIONS:
            cur = at.offset(direction)
            captured: Optional[Position] = None
            while cur.in_bounds(self.size):
                occupant = self._squares.get(cur)
                if occupant is not None:
                    # Own piece (the king itself on its origin square), a piece
                    # already taken in this chain, or a second piece behind
                    # the candidate all end the scan.
                    if captured is not None or not self._is_capturable(piece, occupant, path):
                        break
                    captured = cur
                elif captured is not None:
                    found = True
                    self._king_chains(piece, origin, cur, path + [captured], results)
                cur = cur.offset(direction)
        if not found and path:
            results.append(Move(origin, at, tuple(path)))

    # ----------------------------
    # Applying moves
    # ----------------------------
    def apply_move(self, move: Move) -> bool:
        """Play `move` in place.

        Returns False, leaving the board untouched, if no piece stands on
        `move.from_pos` or another piece occupies `move.to_pos`.
        """
        piece = self._squares.get(move.from_pos)
        if piece is None:
            return False
        occupant = self._squares.get(move.to_pos)
        if occupant is not None and occupant is not piece:
            logger.debug("Rejected %s: %s is occupied", move, tuple(move.to_pos))
            return False
        for pos in move.captured:
            taken = self._squares.pop(pos, None)
            if taken is not None:
                logger.debug("Captured %s %s at %s", taken.owner.value, taken.kind.value, tuple(pos))
        del self._squares[move.from_pos]
        piece.position = Position(*move.to_pos)
        if piece.kind is PieceKind.MAN and piece.position.row == promotion_row(piece.owner, self.size):
            piece.kind = PieceKind.KING
            logger.debug("Promoted %s man to king at %s", piece.owner.value, tuple(piece.position))
        self._squares[piece.position] = piece
        return True

    # ----------------------------
    # Game end
    # ----------------------------
    def game_result(self) -> Optional[Player]:
        """Winner if either side is out of moves, otherwise None."""
        if not self.legal_moves(Player.COMPUTER):
            return Player.HUMAN
        if not self.legal_moves(Player.HUMAN):
            return Player.COMPUTER
        return None

    def is_terminal(self) -> bool:
        return self.game_result() is not None


def board_from_pieces(pieces: Iterable[Tuple[PieceKind, Player, Tuple[int, int]]]) -> Board:
    """Build a board holding exactly the given (kind, owner, position) pieces."""
    board = Board.empty()
    for kind, owner, position in pieces:
        board.place(kind, owner, position)
    return board
