"""
Rules-engine collaborator: the four game operations the search depends on.

The search never interprets moves or positions itself. It asks a rules engine
for legal moves, applies a move, undoes it, checks whether the game is over,
and reads the board grid for evaluation. RulesEngine spells out that contract
as a Protocol; ChessRules implements it on top of python-chess, which does the
actual move generation and bookkeeping.

Apply and undo follow strict stack discipline: undo_move() reverts the most
recent apply_move() on the same position. The applied() context manager pairs
the two so an undo can never be skipped, whether the caller leaves the block
normally, through a pruning break, or through an exception.
"""

from contextlib import contextmanager
from typing import Iterator, Optional, Protocol, Sequence

import chess

from minimax.constants import BOARD_SIZE
from minimax.errors import UnbalancedUndoError

# An 8x8 board: row 0 is rank 8, column 0 is the a-file, empty squares are None.
Grid = list[list[Optional[chess.Piece]]]


class RulesEngine(Protocol):
    """Game operations consumed by the search."""

    def legal_moves(self, position: chess.Board) -> Sequence[chess.Move]: ...

    def apply_move(self, position: chess.Board, move: chess.Move) -> None: ...

    def undo_move(self, position: chess.Board) -> None: ...

    def is_game_over(self, position: chess.Board) -> bool: ...

    def board(self, position: chess.Board) -> Grid: ...


def board_grid(board: chess.Board) -> Grid:
    """
    Return the board as rows of optional pieces, top rank first.

    The layout matches a printed diagram: grid[0][0] is a8 and grid[7][7] is h1.

    Args:
        board: Position to read. Not modified.

    Returns:
        A freshly built 8x8 list of lists; callers may keep or mutate it.
    """
    grid: Grid = []
    for row in range(BOARD_SIZE):
        rank = BOARD_SIZE - 1 - row
        grid.append([board.piece_at(chess.square(col, rank)) for col in range(BOARD_SIZE)])
    return grid


class ChessRules:
    """RulesEngine backed by python-chess."""

    def legal_moves(self, position: chess.Board) -> list[chess.Move]:
        return list(position.legal_moves)

    def apply_move(self, position: chess.Board, move: chess.Move) -> None:
        position.push(move)

    def undo_move(self, position: chess.Board) -> None:
        if not position.move_stack:
            raise UnbalancedUndoError("undo_move() called with no applied move to revert")
        position.pop()

    def is_game_over(self, position: chess.Board) -> bool:
        return position.is_game_over()

    def board(self, position: chess.Board) -> Grid:
        return board_grid(position)


# Shared stateless instance used as the default collaborator.
CHESS_RULES = ChessRules()


@contextmanager
def applied(rules: RulesEngine, position: chess.Board, move: chess.Move) -> Iterator[chess.Board]:
    """
    Apply `move` for the duration of the block, then undo it.

    The undo runs in a finally clause, so the position is restored even when
    the block breaks out of a loop or raises.
    """
    rules.apply_move(position, move)
    try:
        yield position
    finally:
        rules.undo_move(position)
