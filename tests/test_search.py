import numpy as np
import pytest

from ataxx.core import Board, Move, PieceColor, legal_moves
from ataxx.players import AIPlayer, RandomPlayer
from ataxx.search import INFTY, WINNING_VALUE, AlphaBetaSearch, SearchConfig, static_score

MIDGAME = """
b - - - - - r
- - - - - - -
- - b X b - -
- - X - X - -
- - r X r - -
- - - - - - -
r - - - - - b
"""


def minimax(board: Board, depth: int, sense: int) -> int:
    moves = legal_moves(board, board.whose_move)
    if depth == 0 or board.game_over() or not moves:
        return static_score(board, PieceColor.RED)
    values = []
    for move in moves:
        board.make_move(move)
        values.append(minimax(board, depth - 1, -sense))
        board.undo()
    return max(values) if sense == 1 else min(values)


def test_static_score_is_antisymmetric() -> None:
    board = Board()
    board.make_move("a1-b1")
    assert static_score(board, PieceColor.RED) == 1
    assert static_score(board, PieceColor.BLUE) == -static_score(board, PieceColor.RED)


def test_sentinels() -> None:
    assert INFTY < WINNING_VALUE


@pytest.mark.parametrize("depth", [1, 2, 3])
def test_alpha_beta_matches_minimax_from_start(depth: int) -> None:
    board = Board()
    board.set_block("b2")
    board.set_block("c3")
    engine = AlphaBetaSearch(SearchConfig(depth=depth))
    value = engine.search(board.copy(), depth, 1, -INFTY, INFTY, save_move=True)
    assert value == minimax(board.copy(), depth, 1)


@pytest.mark.parametrize("depth", [1, 2, 3])
@pytest.mark.parametrize("to_move", [PieceColor.RED, PieceColor.BLUE])
def test_alpha_beta_matches_minimax_midgame(depth: int, to_move: PieceColor) -> None:
    board = Board.from_text(MIDGAME, whose_move=to_move)
    sense = 1 if to_move == PieceColor.RED else -1
    result = AlphaBetaSearch(SearchConfig(depth=depth)).run(board)
    assert result.value == minimax(board.copy(), depth, sense)


def test_search_restores_working_board() -> None:
    board = Board.from_text(MIDGAME)
    working = board.copy()
    engine = AlphaBetaSearch(SearchConfig(depth=3))
    engine.search(working, 3, 1, -INFTY, INFTY, save_move=True)
    assert working == board
    assert working.history == ()


def test_run_never_touches_live_board() -> None:
    board = Board()
    board.make_move("a1-b1")
    before = board.copy()
    AlphaBetaSearch(SearchConfig(depth=2)).run(board)
    assert board == before
    assert board.history == before.history


def test_recorded_move_is_first_legal_move() -> None:
    board = Board.from_text(MIDGAME)
    engine = AlphaBetaSearch(SearchConfig(depth=2))
    result = engine.run(board)
    assert result.move == legal_moves(board)[0]
    assert engine.last_found_move == result.move
    assert result.nodes > 1


def test_depth_one_value_prefers_red() -> None:
    result = AlphaBetaSearch(SearchConfig(depth=1)).run(Board())
    assert result.value == 1

    board = Board()
    board.make_move("a1-a2")
    result = AlphaBetaSearch(SearchConfig(depth=1)).run(board)
    assert result.value == 0


def test_pruning_visits_fewer_nodes() -> None:
    board = Board.from_text(MIDGAME)
    engine = AlphaBetaSearch(SearchConfig(depth=3))
    engine.run(board)

    def count_nodes(b: Board, depth: int) -> int:
        moves = legal_moves(b, b.whose_move)
        if depth == 0 or b.game_over() or not moves:
            return 1
        total = 1
        for move in moves:
            b.make_move(move)
            total += count_nodes(b, depth - 1)
            b.undo()
        return total

    assert engine.nodes < count_nodes(board.copy(), 3)


def test_ai_player_passes_without_search() -> None:
    board = Board.from_text(
        """
        - - - - - - b
        - - - - - - -
        - - - - - - -
        - - - - - - -
        b b b - - - -
        b b b - - - -
        r b b - - - -
        """
    )
    player = AIPlayer(PieceColor.RED, SearchConfig(depth=3))
    assert player.my_move(board) is Move.PASS
    assert player.search.nodes == 0


def test_ai_player_returns_legal_move() -> None:
    board = Board()
    board.set_block("c3")
    player = AIPlayer(PieceColor.RED, SearchConfig(depth=2))
    move = player.my_move(board)
    assert board.legal(move)
    assert player.last_value is not None


def test_zero_depth_still_plays_first_legal_move() -> None:
    board = Board()
    result = AlphaBetaSearch(SearchConfig(depth=0)).run(board)
    assert result.move == legal_moves(board)[0]
    assert result.value == static_score(board, PieceColor.RED)

    player = AIPlayer(PieceColor.RED, SearchConfig(depth=0))
    move = player.my_move(board)
    assert board.legal(move)
    board.make_move(move)


def jump_shuffle(plies: int) -> Board:
    board = Board()
    cycle = ["a1-a3", "g1-g3", "a3-a1", "g3-g1"]
    for ply in range(plies):
        board.make_move(cycle[ply % 4])
    return board


def test_ai_player_refuses_to_move_out_of_turn() -> None:
    board = Board()
    player = AIPlayer(PieceColor.BLUE, SearchConfig(depth=1))
    with pytest.raises(ValueError):
        player.my_move(board)
    assert player.search.nodes == 0
    assert board.history == ()


def test_players_refuse_to_move_after_jump_limit() -> None:
    board = jump_shuffle(25)
    assert board.game_over()
    assert board.whose_move == PieceColor.BLUE
    assert legal_moves(board)
    with pytest.raises(ValueError):
        AIPlayer(PieceColor.BLUE, SearchConfig(depth=2)).my_move(board)
    with pytest.raises(ValueError):
        RandomPlayer(PieceColor.BLUE, np.random.default_rng(0)).my_move(board)
    with pytest.raises(ValueError):
        RandomPlayer(PieceColor.BLUE, np.random.default_rng(0)).my_move(jump_shuffle(2))
