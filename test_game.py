from __future__ import annotations

import threading

import pytest

from checkers_ai.board import Board, board_from_pieces
from checkers_ai.game import GameSession
from checkers_ai.types import Move, PieceKind, Player, Position

MAN, KING = PieceKind.MAN, PieceKind.KING
HUMAN, COMPUTER = Player.HUMAN, Player.COMPUTER


def opening_move():
    return Move(Position(2, 1), Position(3, 2))


def test_new_session_starts_with_human():
    session = GameSession(depth=1)
    assert session.current_player is HUMAN
    assert session.is_human_turn()
    assert not session.game_over
    assert session.piece_counts() == (12, 12)


def test_selectable_positions_on_opening_board():
    session = GameSession(depth=1)
    assert session.selectable_positions() == [(2, 1), (2, 3), (2, 5), (2, 7)]
    assert {tuple(m.to_pos) for m in session.moves_from((2, 1))} == {(3, 0), (3, 2)}
    assert session.moves_from((0, 1)) == []


def test_illegal_move_rejected():
    session = GameSession(depth=1)
    assert not session.make_move(Move(Position(5, 2), Position(4, 3)))
    assert not session.make_move(Move(Position(2, 1), Position(4, 3)))
    assert session.current_player is HUMAN


def test_legal_move_switches_turn():
    session = GameSession(depth=1)
    assert session.make_move(opening_move())
    assert session.current_player is COMPUTER
    assert session.selectable_positions() == []


def test_make_move_fills_in_captures():
    session = GameSession(depth=1)
    session.board = board_from_pieces([
        (MAN, HUMAN, (2, 1)),
        (MAN, COMPUTER, (3, 2)),
        (MAN, COMPUTER, (6, 5)),
    ])
    assert session.make_move(Move(Position(2, 1), Position(4, 3)))
    assert session.board.piece_at((3, 2)) is None
    assert session.piece_counts() == (1, 1)


def test_capturing_last_piece_ends_game():
    session = GameSession(depth=1)
    session.board = board_from_pieces([(MAN, HUMAN, (2, 1)), (MAN, COMPUTER, (3, 2))])
    assert session.make_move(Move(Position(2, 1), Position(4, 3)))
    assert session.game_over
    assert session.winner is HUMAN
    assert not session.make_move(Move(Position(4, 3), Position(5, 4)))
    assert session.play_computer_move() is None


def test_play_computer_move():
    session = GameSession(depth=1)
    assert session.play_computer_move() is None  # not the computer's turn
    session.make_move(opening_move())
    move = session.play_computer_move()
    assert move is not None
    assert move.from_pos.row == 5
    assert session.current_player is HUMAN


def test_request_computer_move_runs_in_background():
    session = GameSession(depth=2)
    session.make_move(opening_move())
    done = threading.Event()
    received = []

    def on_done(move):
        received.append(move)
        done.set()

    thread = session.request_computer_move(on_done)
    assert thread is not None
    assert session.request_computer_move(on_done) is None  # already thinking
    thread.join(timeout=60)
    assert done.wait(timeout=1)
    assert received[0] is not None
    assert session.current_player is HUMAN
    assert not session.is_thinking
    assert session.board.piece_at(received[0].to_pos).owner is COMPUTER


def test_reset_discards_pending_search():
    session = GameSession(depth=2)
    session.make_move(opening_move())
    thread = session.request_computer_move()
    session.reset()
    thread.join(timeout=60)
    assert session.current_player is HUMAN
    assert (session.board.to_array() == Board().to_array()).all()
    assert not session.is_thinking


def gate_search(session):
    """Make the session's engine wait for the returned event before searching."""
    gate = threading.Event()
    search = session.engine.find_best_move

    def gated(board):
        assert gate.wait(timeout=30)
        return search(board)

    session.engine.find_best_move = gated
    return gate


def test_synchronous_move_refused_while_background_search_pending():
    session = GameSession(depth=1)
    session.make_move(opening_move())
    gate = gate_search(session)
    received = []
    thread = session.request_computer_move(received.append)
    assert session.is_thinking
    assert session.play_computer_move() is None
    assert session.current_player is COMPUTER
    gate.set()
    thread.join(timeout=60)
    assert received[0] is not None
    assert session.board.piece_at(received[0].to_pos).owner is COMPUTER
    assert session.current_player is HUMAN


def test_callback_gets_none_when_move_cannot_be_played():
    session = GameSession(depth=1)
    session.make_move(opening_move())
    gate = gate_search(session)
    received = []
    thread = session.request_computer_move(received.append)
    # Hand the turn back so the computer's move is no longer legal.
    session.current_player = HUMAN
    gate.set()
    thread.join(timeout=60)
    assert received == [None]
    assert not session.is_thinking
    assert session.piece_counts() == (12, 12)


@pytest.mark.filterwarnings("ignore::pytest.PytestUnhandledThreadExceptionWarning")
def test_failed_search_clears_thinking_flag():
    session = GameSession(depth=1)
    session.make_move(opening_move())
    received = []

    def broken(board):
        raise RuntimeError("search failed")

    session.engine.find_best_move = broken
    thread = session.request_computer_move(received.append)
    thread.join(timeout=60)
    assert received == []
    assert not session.is_thinking
    del session.engine.find_best_move
    retry = session.request_computer_move(received.append)
    assert retry is not None
    retry.join(timeout=60)
    assert received[0] is not None
