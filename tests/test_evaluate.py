import chess
import pytest

from minimax.errors import UnknownPieceError
from minimax.evaluate import (
    EVALUATORS,
    EXTENDED,
    POSITIONAL,
    STANDARD,
    EvalConfig,
    evaluate,
    get_eval_config,
)
from minimax.rules import board_grid


def grid_for(fen: str):
    return board_grid(chess.Board(fen))


def test_starting_position_is_balanced() -> None:
    grid = grid_for(chess.STARTING_FEN)
    assert evaluate(grid, chess.WHITE) == 0
    assert evaluate(grid, chess.WHITE, POSITIONAL) == pytest.approx(0)
    assert evaluate(grid, chess.BLACK, EXTENDED) == pytest.approx(0)


def test_standard_values_count_material() -> None:
    # White is up a queen and a pawn for a knight.
    grid = grid_for("4k3/8/3n4/8/8/8/3P4/3QK3 w - - 0 1")
    assert evaluate(grid, chess.WHITE) == 1000 + 100 - 350
    assert evaluate(grid, chess.BLACK) == -(1000 + 100 - 350)


def test_standard_score_is_an_int() -> None:
    grid = grid_for("4k3/8/8/8/8/8/3P4/4K3 w - - 0 1")
    assert isinstance(evaluate(grid, chess.WHITE), int)


@pytest.mark.parametrize("config", [STANDARD, POSITIONAL], ids=lambda c: c.name)
def test_symmetric_configs_are_antisymmetric(board: chess.Board, config: EvalConfig) -> None:
    grid = board_grid(board)
    assert evaluate(grid, chess.WHITE, config) == -evaluate(grid, chess.BLACK, config)


def test_positional_weights_prefer_the_center() -> None:
    central = evaluate(grid_for("4k3/8/8/8/3N4/8/8/4K3 w - - 0 1"), chess.WHITE, POSITIONAL)
    edge = evaluate(grid_for("4k3/8/8/8/N7/8/8/4K3 w - - 0 1"), chess.WHITE, POSITIONAL)
    assert central > edge
    assert central == pytest.approx(250 * 1.0001 * 1.0001, rel=1e-9)
    assert edge == pytest.approx(250 * 1.0001, rel=1e-9)


def test_extended_bonuses_are_one_sided() -> None:
    # 1.e4 e5 2.Nf3: both sides have a central pawn, only White has a developed knight.
    grid = grid_for("rnbqkbnr/pppp1ppp/8/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R b KQkq - 1 2")
    assert evaluate(grid, chess.WHITE, EXTENDED) == pytest.approx(150 + 50)
    assert evaluate(grid, chess.BLACK, EXTENDED) == pytest.approx(150)


def test_opponent_central_pawn_is_not_a_penalty() -> None:
    with_pawn = grid_for("4k3/8/8/3p4/8/8/8/4K3 w - - 0 1")
    bonus_free = EvalConfig(
        name="weights-only",
        piece_values=EXTENDED.piece_values,
        column_weights=EXTENDED.column_weights,
        row_weights=EXTENDED.row_weights,
    )
    assert evaluate(with_pawn, chess.WHITE, EXTENDED) == evaluate(with_pawn, chess.WHITE, bonus_free)


def test_knight_development_rows() -> None:
    # Black knight on c6 (sixth rank) counts for Black.
    grid = grid_for("4k3/8/2n5/8/8/8/8/4K3 b - - 0 1")
    assert evaluate(grid, chess.BLACK, EXTENDED) == pytest.approx(250 + 50)

    # A knight on the second rank is not "developed" for this bonus.
    grid = grid_for("4k3/8/8/8/8/8/2N5/4K3 w - - 0 1")
    assert evaluate(grid, chess.WHITE, EXTENDED) == pytest.approx(250)


def test_evaluate_does_not_mutate_grid() -> None:
    grid = grid_for(chess.STARTING_FEN)
    snapshot = [list(row) for row in grid]
    evaluate(grid, chess.WHITE, EXTENDED)
    assert grid == snapshot


def test_unknown_piece_type_is_a_hard_failure() -> None:
    partial = EvalConfig(name="pawns-only", piece_values={chess.PAWN: 100})
    with pytest.raises(UnknownPieceError):
        evaluate(grid_for(chess.STARTING_FEN), chess.WHITE, partial)


def test_unknown_piece_error_is_a_key_error() -> None:
    grid = [[None] * 8 for _ in range(8)]
    grid[0][0] = chess.Piece(7, chess.WHITE)
    with pytest.raises(KeyError):
        evaluate(grid, chess.WHITE)


def test_presets_by_name() -> None:
    assert set(EVALUATORS) == {"standard", "positional", "extended"}
    assert get_eval_config("extended") is EXTENDED
    assert STANDARD.piece_values[chess.KNIGHT] == 350
    assert STANDARD.piece_values[chess.ROOK] == 525
    with pytest.raises(ValueError, match="unknown evaluator"):
        get_eval_config("nnue")
