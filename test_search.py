import pytest

from config import reset_config
from checkers_ai.board import Board, board_from_pieces
from checkers_ai.engine import best_move, get_engine
from checkers_ai.eval import WIN_SCORE, Evaluator
from checkers_ai.search import INF, AlphaBetaSearch, MinimaxSearch, get_search_strategy
from checkers_ai.types import Move, PieceKind, Player, Position

MAN, KING = PieceKind.MAN, PieceKind.KING
HUMAN, COMPUTER = Player.HUMAN, Player.COMPUTER


def make_board(*pieces):
    return board_from_pieces(pieces)


class FlatEvaluator(Evaluator):
    """Scores every non-terminal position the same."""

    def score(self, board, computer_moves, human_moves):
        return 0


def midgame_board():
    return make_board(
        (MAN, HUMAN, (1, 2)),
        (MAN, HUMAN, (2, 1)),
        (MAN, HUMAN, (2, 5)),
        (KING, HUMAN, (4, 7)),
        (MAN, COMPUTER, (5, 2)),
        (MAN, COMPUTER, (5, 6)),
        (MAN, COMPUTER, (6, 3)),
        (KING, COMPUTER, (3, 0)),
    )


def test_returns_none_without_computer_moves():
    board = make_board((MAN, HUMAN, (2, 1)))
    assert AlphaBetaSearch(depth=2).find_best_move(board) is None


def test_takes_forced_capture():
    board = make_board((MAN, COMPUTER, (3, 2)), (MAN, HUMAN, (2, 1)), (MAN, HUMAN, (0, 5)))
    move = AlphaBetaSearch(depth=2).find_best_move(board)
    assert move == Move(Position(3, 2), Position(1, 0))
    assert move.captured == (Position(2, 1),)


def test_avoids_losing_its_only_piece():
    board = make_board((MAN, COMPUTER, (5, 4)), (MAN, HUMAN, (3, 2)))
    move = AlphaBetaSearch(depth=2).find_best_move(board)
    assert move == Move(Position(5, 4), Position(4, 5))


def test_terminal_position_ignores_remaining_depth():
    engine = AlphaBetaSearch(depth=3)
    only_human = make_board((MAN, HUMAN, (2, 1)))
    assert engine.search(only_human, 5, -INF, INF, True) == -WIN_SCORE
    only_computer = make_board((MAN, COMPUTER, (5, 2)))
    assert engine.search(only_computer, 5, -INF, INF, False) == WIN_SCORE


def test_depth_zero_returns_evaluation():
    engine = AlphaBetaSearch(depth=1)
    board = midgame_board()
    assert engine.search(board, 0, -INF, INF, True) == engine.evaluate(board)


def test_ties_keep_first_generated_move():
    board = Board()
    engine = AlphaBetaSearch(depth=2, evaluator=FlatEvaluator())
    assert engine.find_best_move(board) == board.legal_moves(COMPUTER)[0]


def test_search_is_deterministic_and_leaves_board_untouched():
    board = Board()
    before = board.to_array().copy()
    first = best_move(board, depth=2)
    second = best_move(board, depth=2)
    assert first is not None
    assert first == second
    assert (board.to_array() == before).all()


@pytest.mark.parametrize("board_factory", [Board, midgame_board])
@pytest.mark.parametrize("depth", [1, 2, 3])
def test_alpha_beta_matches_plain_minimax(board_factory, depth):
    pruned = AlphaBetaSearch(depth=depth)
    plain = MinimaxSearch(depth=depth)

    assert pruned.score_moves(board_factory()) == plain.score_moves(board_factory())

    pruned_move = pruned.find_best_move(board_factory())
    plain_move = plain.find_best_move(board_factory())
    assert pruned_move == plain_move
    assert pruned.stats.best_score == plain.stats.best_score
    assert pruned.stats.nodes <= plain.stats.nodes


def test_pruning_visits_fewer_nodes():
    pruned = AlphaBetaSearch(depth=3)
    plain = MinimaxSearch(depth=3)
    pruned.find_best_move(Board())
    plain.find_best_move(Board())
    assert pruned.stats.nodes < plain.stats.nodes


def test_stats_reset_between_calls():
    engine = AlphaBetaSearch(depth=2)
    engine.find_best_move(Board())
    nodes = engine.stats.nodes
    engine.find_best_move(Board())
    assert engine.stats.nodes == nodes


@pytest.mark.parametrize("depth", [0, -1, 2.5, True])
def test_invalid_depth_rejected(depth):
    with pytest.raises(ValueError):
        AlphaBetaSearch(depth=depth)
    with pytest.raises(ValueError):
        best_move(Board(), depth=depth)


def test_default_depth_comes_from_config(monkeypatch):
    monkeypatch.delenv("CHECKERS_DEPTH", raising=False)
    reset_config()
    try:
        assert get_engine().depth == 4
        assert get_search_strategy().depth == 4
        monkeypatch.setenv("CHECKERS_DEPTH", "2")
        reset_config()
        assert get_engine().depth == 2
    finally:
        reset_config()
