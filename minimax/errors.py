"""Exceptions raised by the search engine and the evaluator."""


class SearchError(Exception):
    """Base class for every error the engine raises."""


class InvalidDepthError(SearchError, ValueError):
    """Search depth is negative or not an integer."""


class GameOverError(SearchError):
    """A search was requested on a position whose game has already ended."""


class UnbalancedUndoError(SearchError):
    """undo_move() was called without a matching apply_move()."""


class UnknownPieceError(SearchError, KeyError):
    """The evaluator met a piece type it has no value for."""
