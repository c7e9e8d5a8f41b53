import chess
import pytest

from minimax.errors import UnbalancedUndoError
from minimax.rules import CHESS_RULES, applied, board_grid


def test_board_grid_orientation() -> None:
    grid = board_grid(chess.Board())
    assert len(grid) == 8 and all(len(row) == 8 for row in grid)
    assert grid[0][0] == chess.Piece(chess.ROOK, chess.BLACK)  # a8
    assert grid[0][4] == chess.Piece(chess.KING, chess.BLACK)  # e8
    assert grid[7][3] == chess.Piece(chess.QUEEN, chess.WHITE)  # d1
    assert grid[6][4] == chess.Piece(chess.PAWN, chess.WHITE)  # e2
    assert all(cell is None for row in grid[2:6] for cell in row)


def test_apply_undo_round_trip_restores_every_cell(board: chess.Board) -> None:
    before = board_grid(board)
    fen = board.fen()
    for move in CHESS_RULES.legal_moves(board):
        CHESS_RULES.apply_move(board, move)
        assert board_grid(board) != before
        CHESS_RULES.undo_move(board)
        assert board_grid(board) == before
    assert board.fen() == fen


def test_applied_undoes_on_exception() -> None:
    board = chess.Board()
    with pytest.raises(RuntimeError):
        with applied(CHESS_RULES, board, chess.Move.from_uci("e2e4")):
            assert board.piece_at(chess.E4) is not None
            raise RuntimeError("boom")
    assert board.fen() == chess.STARTING_FEN
    assert not board.move_stack


def test_undo_without_apply_fails_fast() -> None:
    with pytest.raises(UnbalancedUndoError):
        CHESS_RULES.undo_move(chess.Board())


def test_game_over_detection() -> None:
    fools_mate = chess.Board("rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3")
    assert CHESS_RULES.is_game_over(fools_mate)
    assert CHESS_RULES.legal_moves(fools_mate) == []
    assert not CHESS_RULES.is_game_over(chess.Board())
    assert len(CHESS_RULES.legal_moves(chess.Board())) == 20
