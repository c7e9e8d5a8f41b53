"""
Minimax chess move search package.

This package picks a move for a chess position by exploring the move tree to
a fixed depth with minimax, optionally accelerated by alpha-beta pruning, and
scoring leaf positions with a configurable material evaluator.

Modules:
    constants — Piece-value tables, positional weights, bonuses, depth limits
    errors    — Exception hierarchy raised by the search and the evaluator
    rules     — Rules-engine protocol and the python-chess adapter
    evaluate  — Static evaluation (material + optional positional bonuses)
    search    — Minimax / alpha-beta search, move ordering, choose_move()
"""

from minimax.errors import (
    GameOverError,
    InvalidDepthError,
    SearchError,
    UnbalancedUndoError,
    UnknownPieceError,
)
from minimax.evaluate import EVALUATORS, EvalConfig, evaluate, get_eval_config
from minimax.search import SearchResult, choose_move, get_best_move, search

__all__ = [
    "EVALUATORS",
    "EvalConfig",
    "GameOverError",
    "InvalidDepthError",
    "SearchError",
    "SearchResult",
    "UnbalancedUndoError",
    "UnknownPieceError",
    "choose_move",
    "evaluate",
    "get_best_move",
    "get_eval_config",
    "search",
]
