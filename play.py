from __future__ import annotations

import argparse
import logging
from typing import Callable, Optional

from config import get_config, load_config_from_file, setup_logging
from checkers_ai.game import GameSession
from checkers_ai.moves import (
    SQUARES,
    MoveValidator,
    group_moves_by_dest,
    group_moves_by_start,
    move_to_str,
    parse_move_str,
    position_of,
    square_number,
)
from checkers_ai.render import render_board
from checkers_ai.types import Move, Player

logger = logging.getLogger(__name__)

HELP_TEXT = ("Enter a move as FROM-TO (e.g. 9-13 or 10x19) or just the destination square, "
             "'moves' to list legal moves, 'quit' to leave.")


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Play checkers against the computer")
    ap.add_argument("--depth", type=int, default=None, help="Search depth in plies (default from config)")
    ap.add_argument("--config", default=None, help="JSON configuration file")
    ap.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    ap.add_argument("--ascii", action="store_true", help="Draw pieces with ASCII letters")
    return ap.parse_args(argv)


def move_to_square(session: GameSession, number: int) -> Optional[Move]:
    """The only legal move landing on square `number`, else None."""
    if not 1 <= number <= SQUARES:
        return None
    candidates = group_moves_by_dest(session.legal_moves()).get(position_of(number), [])
    return candidates[0] if len(candidates) == 1 else None


def run(session: GameSession, read: Callable[[str], str] = input,
        write: Callable[[str], None] = print) -> Optional[Player]:
    """Play one game on `session`. Returns the winner, or None if the human quit."""
    settings = get_config().ui
    write(HELP_TEXT)
    while not session.game_over:
        if session.current_player is Player.COMPUTER:
            move = session.play_computer_move()
            if move is not None:
                write(f"Computer plays {move_to_str(move)}")
            continue

        write(render_board(session.board, settings, session.selectable_positions()))
        text = read("Your move: ").strip().lower()
        if text in ("quit", "q", "exit"):
            return None
        if text == "moves":
            for start, moves in group_moves_by_start(session.legal_moves()).items():
                write(f"{square_number(start)}: " + ", ".join(move_to_str(m) for m in moves))
            continue
        if text.isdigit():
            move = move_to_square(session, int(text))
            if move is None or not session.make_move(move):
                write(f"No single move reaches {text}")
            continue
        parsed = parse_move_str(text)
        if parsed is None:
            write(f"Could not read '{text}'. {HELP_TEXT}")
            continue
        move = MoveValidator.find(session.board, Player.HUMAN, *parsed)
        if move is None or not session.make_move(move):
            write(f"Illegal move: {text}")
            continue

    write(render_board(session.board, settings))
    winner = "You win!" if session.winner is Player.HUMAN else "The computer wins."
    write(winner)
    return session.winner


def main(argv=None) -> None:
    args = parse_args(argv)
    if args.config:
        load_config_from_file(args.config)
    config = get_config()
    if args.ascii:
        config.ui.use_unicode = False
    setup_logging(args.log_level)
    logger.info("Starting game at depth %s", args.depth or config.engine.default_depth)
    try:
        run(GameSession(depth=args.depth))
    except (KeyboardInterrupt, EOFError):
        print()


if __name__ == "__main__":
    main()
