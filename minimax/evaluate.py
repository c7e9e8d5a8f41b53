"""
Static evaluation: material balance with optional positional adjustments.

The search needs a number for every leaf position so it can compare lines.
This module scores a board grid from one color's point of view: each piece
contributes its value, positive for the perspective color and negative for
the opponent.

Three adjustments can be layered on top of the material sum. All of them are
heuristics, tuned by hand and meant to be changed:

1. Positional weighting: each contribution is multiplied by a column weight
   and a row weight. The central files and ranks carry a weight a hair above
   1, so among equal material outcomes the one with more central pieces wins.
2. Center-pawn bonus: a flat bonus for each of our pawns on d4, e4, d5 or e5.
3. Knight-development bonus: a flat bonus for each of our knights standing on
   the third or sixth rank, i.e. one step off its home rank.

The bonuses are one-sided. The opponent's central pawns or developed knights
are not counted against us, so only the plain and positional presets are
exactly antisymmetric between the two colors.

Each combination of settings is an EvalConfig. The presets below reproduce the
three evaluators the engine ships with; callers can build their own.
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Union

import chess

from minimax.constants import (
    CENTER_LINES,
    CENTER_PAWN_BONUS,
    CENTER_WEIGHTS,
    KNIGHT_DEVELOPED_ROWS,
    KNIGHT_DEVELOPMENT_BONUS,
    PROJECT_PIECE_VALUES,
    STANDARD_PIECE_VALUES,
)
from minimax.errors import UnknownPieceError
from minimax.rules import Grid

Score = Union[int, float]


@dataclass(frozen=True)
class EvalConfig:
    """
    Tunable evaluation policy.

    Attributes:
        name:                     Preset name, used by the UCI and web front ends.
        piece_values:             Centipawn value per python-chess piece type.
        column_weights:           Multiplier per column (a..h), or None to skip
                                  positional weighting. Scores stay integers
                                  when both weight tables are None.
        row_weights:              Multiplier per row (rank 8..1), or None.
        center_pawn_bonus:        Added for each perspective-color pawn on one
                                  of the four central squares.
        knight_development_bonus: Added for each perspective-color knight on
                                  the third or sixth rank.
    """

    name: str
    piece_values: Mapping[int, int]
    column_weights: Optional[tuple[float, ...]] = None
    row_weights: Optional[tuple[float, ...]] = None
    center_pawn_bonus: int = 0
    knight_development_bonus: int = 0


STANDARD = EvalConfig(name="standard", piece_values=STANDARD_PIECE_VALUES)

POSITIONAL = EvalConfig(
    name="positional",
    piece_values=PROJECT_PIECE_VALUES,
    column_weights=CENTER_WEIGHTS,
    row_weights=CENTER_WEIGHTS,
)

EXTENDED = EvalConfig(
    name="extended",
    piece_values=PROJECT_PIECE_VALUES,
    column_weights=CENTER_WEIGHTS,
    row_weights=CENTER_WEIGHTS,
    center_pawn_bonus=CENTER_PAWN_BONUS,
    knight_development_bonus=KNIGHT_DEVELOPMENT_BONUS,
)

EVALUATORS: dict[str, EvalConfig] = {
    config.name: config for config in (STANDARD, POSITIONAL, EXTENDED)
}


def get_eval_config(name: str) -> EvalConfig:
    """Look up a preset by name; raises ValueError for an unknown name."""
    try:
        return EVALUATORS[name]
    except KeyError:
        known = ", ".join(sorted(EVALUATORS))
        raise ValueError(f"unknown evaluator {name!r} (expected one of: {known})") from None


def evaluate(grid: Grid, color: chess.Color, config: EvalConfig = STANDARD) -> Score:
    """
    Score a board grid from `color`'s perspective.

    Args:
        grid:   8x8 rows of optional pieces, top rank first (see rules.board_grid).
                Not modified.
        color:  chess.WHITE or chess.BLACK; positive scores favor this side.
        config: Evaluation policy. Defaults to the plain material count.

    Returns:
        The score. An int when the config has no positional weights, else a float.

    Raises:
        UnknownPieceError: A piece type has no entry in config.piece_values.

    Example:
        >>> import chess
        >>> from minimax.rules import board_grid
        >>> evaluate(board_grid(chess.Board()), chess.WHITE)
        0
    """
    value: Score = 0

    for row, cells in enumerate(grid):
        for col, piece in enumerate(cells):
            if piece is None:
                continue

            try:
                material = config.piece_values[piece.piece_type]
            except KeyError:
                raise UnknownPieceError(piece.piece_type) from None

            ours = piece.color == color
            contribution: Score = material if ours else -material

            if config.column_weights is not None:
                contribution *= config.column_weights[col]
            if config.row_weights is not None:
                contribution *= config.row_weights[row]

            value += contribution

            if not ours:
                continue

            if (
                piece.piece_type == chess.PAWN
                and row in CENTER_LINES
                and col in CENTER_LINES
            ):
                value += config.center_pawn_bonus

            if piece.piece_type == chess.KNIGHT and row in KNIGHT_DEVELOPED_ROWS:
                value += config.knight_development_bonus

    return value
