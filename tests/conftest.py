import os
import sys

import chess
import pytest

# Ensure repo-local packages (minimax, interface, web) import without installing.
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)


# A few positions used across the evaluation and search tests.
FENS = {
    "start": chess.STARTING_FEN,
    "scandinavian": "rnbqkbnr/ppp1pppp/8/3p4/4P3/8/PPPP1PPP/RNBQKBNR w KQkq - 0 2",
    "italian": "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R b KQkq - 3 3",
    "rook_ending": "8/5pk1/6p1/7p/7P/6P1/5PK1/3R4 w - - 0 1",
    "pawn_race": "8/1p4k1/p7/P1K5/8/8/8/8 w - - 0 1",
}


@pytest.fixture(params=sorted(FENS))
def board(request: pytest.FixtureRequest) -> chess.Board:
    return chess.Board(FENS[request.param])
