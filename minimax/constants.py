"""
Engine constants: piece values, positional weights, bonuses, and depth limits.

Every tunable number used by the evaluator and the search lives here, so the
evaluation presets in evaluate.py are assembled from named constants instead
of magic numbers scattered through the code.

Two piece-value tables are provided. The standard table is the classic
"king is worth more than everything else combined" scale used by the plain
material evaluator. The project table rates pawns higher and minor pieces
lower and is paired with the positional evaluators.
"""

import chess

# ---------------------------------------------------------------------------
# Piece values
# ---------------------------------------------------------------------------
# The king value only has to exceed the sum of all other material so that a
# line which loses the king can never look attractive to the search.

STANDARD_PIECE_VALUES: dict[int, int] = {
    chess.PAWN:   100,
    chess.KNIGHT: 350,
    chess.BISHOP: 350,
    chess.ROOK:   525,
    chess.QUEEN:  1_000,
    chess.KING:   10_000,
}

PROJECT_PIECE_VALUES: dict[int, int] = {
    chess.PAWN:   150,
    chess.KNIGHT: 250,
    chess.BISHOP: 250,
    chess.ROOK:   500,
    chess.QUEEN:  900,
    chess.KING:   10_000,
}

# ---------------------------------------------------------------------------
# Positional weighting
# ---------------------------------------------------------------------------
# Multipliers per column (file a..h) and per row (rank 8..1). The two central
# files and ranks get a weight just above 1, which only matters for breaking
# ties between otherwise equal material outcomes.

BOARD_SIZE: int = 8
CENTER_WEIGHT: float = 1.0001

CENTER_WEIGHTS: tuple[float, ...] = (1, 1, 1, CENTER_WEIGHT, CENTER_WEIGHT, 1, 1, 1)

# Row/column indices (0-based) of the four central squares d4, e4, d5, e5.
CENTER_LINES: frozenset[int] = frozenset({3, 4})

# Rows (0-based) a knight stands on once it has left the back rank: rank 6 for
# one side, rank 3 for the other.
KNIGHT_DEVELOPED_ROWS: frozenset[int] = frozenset({2, 5})

# ---------------------------------------------------------------------------
# Bonuses (centipawns)
# ---------------------------------------------------------------------------
# Both bonuses are one-sided: only the perspective color collects them, the
# opponent's central pawns and developed knights are not penalised.

CENTER_PAWN_BONUS: int = 150
KNIGHT_DEVELOPMENT_BONUS: int = 50

# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------
# DEFAULT_DEPTH is the ply count used when a caller does not ask for one.
# Without pruning the tree grows at ~35^depth, so anything past 4 is slow in
# pure Python; MAX_DEPTH only caps what the front ends will accept.

DEFAULT_DEPTH: int = 3
MAX_DEPTH: int = 6

# The web endpoint runs synchronously per request, so it gets a tighter cap.
MAX_WEB_DEPTH: int = 4

# Score reported to front ends for a line that ends in a position where the
# side to move has no legal moves. Interior nodes score such positions as
# +/- infinity; UCI and JSON both need a finite integer.
MATE_SCORE: int = 99_999
