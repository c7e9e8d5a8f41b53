"""
Search entry points: fixed-depth minimax with optional alpha-beta pruning.

This module defines the stable public interface that interface/uci.py and
web/app.py depend on. choose_move() returns just the move; get_best_move()
returns the (move, score_cp, depth, nodes) tuple the front ends report.

One recursive procedure covers both variants:

1. Plain minimax (prune=False) visits every child of every node down to the
   requested depth. Levels alternate between a maximizing player (the
   perspective color) and a minimizing player (the opponent).

2. Alpha-beta (prune=True) keeps the running bounds alpha (best value the
   maximizer is already guaranteed) and beta (best value the minimizer is
   already guaranteed). As soon as beta <= alpha at a node, its remaining
   siblings cannot change the result and are skipped. The returned value is
   always the same as plain minimax; only which of several equally good moves
   comes back can differ.

Scores are always measured from the perspective color, at every depth. That
is the classic minimax convention rather than negamax: the evaluator is
called with the same color at every leaf, and the minimizing levels pick the
lowest value instead of negating.

Move ordering and ties:
    Legal moves are passed through an ordering policy before each node is
    expanded. The default shuffles them uniformly. A child replaces the
    current best only when it is strictly better, so among equal values the
    first one in the shuffled order wins, and repeated searches of a tied
    position may return different moves. Tests inject keep_order() or a
    seeded shuffler for reproducible results.

Position ownership:
    The position is one mutable object shared by the whole call chain. Each
    child is explored inside rules.applied(), which undoes the move on the
    way out of the block, including when the loop breaks on a cutoff or an
    exception unwinds through it. Never run two searches on the same
    position at once; copy the board first (the UCI handler does).
"""

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Callable, NamedTuple, Optional, Sequence

import chess

from minimax.constants import DEFAULT_DEPTH, MATE_SCORE
from minimax.errors import GameOverError, InvalidDepthError
from minimax.evaluate import STANDARD, EvalConfig, Score, evaluate, get_eval_config
from minimax.rules import CHESS_RULES, Grid, RulesEngine, applied

_log = logging.getLogger(__name__)

MoveOrdering = Callable[[Sequence[chess.Move]], list[chess.Move]]
LeafEvaluator = Callable[[Grid, chess.Color], Score]


# ---------------------------------------------------------------------------
# Move ordering policies
# ---------------------------------------------------------------------------


def shuffle_moves(moves: Sequence[chess.Move]) -> list[chess.Move]:
    """Return the moves in a uniformly random order (module-level RNG)."""
    ordered = list(moves)
    random.shuffle(ordered)
    return ordered


def make_shuffler(seed: Optional[int] = None) -> MoveOrdering:
    """Return a shuffling policy with its own RNG, reproducible for a fixed seed."""
    rng = random.Random(seed)

    def _shuffle(moves: Sequence[chess.Move]) -> list[chess.Move]:
        ordered = list(moves)
        rng.shuffle(ordered)
        return ordered

    return _shuffle


def keep_order(moves: Sequence[chess.Move]) -> list[chess.Move]:
    """Return the moves in the order the rules engine produced them."""
    return list(moves)


# ---------------------------------------------------------------------------
# Results, tracing, and per-search state
# ---------------------------------------------------------------------------


class SearchResult(NamedTuple):
    """
    Value of a node and the move that achieves it.

    move is None only for depth-0 (leaf) results and for nodes without legal
    moves.
    """

    score: Score
    move: Optional[chess.Move]


@dataclass(frozen=True)
class TraceEvent:
    """
    One diagnostic record emitted while searching.

    kind is "child" after each child has been scored, "prune" when a node
    stops early, and "node" when a node has finished. For "child" events,
    move and value describe the child just scored; best_move and best_value
    are the node's best before that child was considered.
    """

    kind: str
    depth: int
    maximizing: bool
    move: Optional[chess.Move]
    value: Score
    best_move: Optional[chess.Move]
    best_value: Score
    alpha: Score
    beta: Score


Tracer = Callable[[TraceEvent], None]


@dataclass
class SearchState:
    """
    Collaborators and counters for one search call chain.

    Attributes:
        rules:        Rules engine used to enumerate, apply and undo moves.
        config:       Evaluation policy used at leaf nodes.
        evaluator:    Replacement leaf scorer taking (grid, color). When set,
                      config is ignored.
        order_moves:  Move ordering policy applied at every interior node.
        tracer:       Optional callback receiving a TraceEvent per step.
        node_count:   Nodes visited, leaves included.
        leaf_count:   Leaf evaluations performed.
        cutoff_count: Nodes that stopped early on beta <= alpha.
    """

    rules: RulesEngine = CHESS_RULES
    config: EvalConfig = STANDARD
    evaluator: Optional[LeafEvaluator] = None
    order_moves: MoveOrdering = shuffle_moves
    tracer: Optional[Tracer] = None
    node_count: int = 0
    leaf_count: int = 0
    cutoff_count: int = 0
    tracing: bool = field(default=False, init=False)

    def score_leaf(self, position: chess.Board, color: chess.Color) -> Score:
        grid = self.rules.board(position)
        if self.evaluator is not None:
            return self.evaluator(grid, color)
        return evaluate(grid, color, self.config)


def _emit(state: SearchState, event: TraceEvent) -> None:
    if state.tracer is not None:
        state.tracer(event)
    if event.kind == "child":
        _log.debug(
            "%s %d %s %s %s %s",
            "Max:" if event.maximizing else "Min:",
            event.depth, event.move, event.value, event.best_move, event.best_value,
        )
    elif event.kind == "prune":
        _log.debug("Prune %s %s", event.alpha, event.beta)
    else:
        _log.debug(
            "Depth: %d | Best Move: %s | %s | A: %s | B: %s",
            event.depth, event.move, event.value, event.alpha, event.beta,
        )


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


def _check_depth(depth: int) -> None:
    # bool is an int subclass; search(True, ...) is always a caller bug.
    if isinstance(depth, bool) or not isinstance(depth, int) or depth < 0:
        raise InvalidDepthError(f"search depth must be a non-negative integer, got {depth!r}")


def _minimax(
    depth: int,
    position: chess.Board,
    color: chess.Color,
    maximizing: bool,
    alpha: Score,
    beta: Score,
    prune: bool,
    state: SearchState,
) -> SearchResult:
    state.node_count += 1

    # Leaf: score the position as it stands. Terminal positions are not
    # detected here; the depth bound is the only stopping rule.
    if depth == 0:
        state.leaf_count += 1
        return SearchResult(state.score_leaf(position, color), None)

    moves = state.order_moves(state.rules.legal_moves(position))

    best_move: Optional[chess.Move] = None
    best_value: Score = -math.inf if maximizing else math.inf

    for move in moves:
        with applied(state.rules, position, move):
            value = _minimax(
                depth - 1, position, color, not maximizing, alpha, beta, prune, state
            ).score

        if state.tracing:
            _emit(state, TraceEvent(
                "child", depth, maximizing, move, value, best_move, best_value, alpha, beta
            ))

        if maximizing:
            if value > best_value:
                best_value = value
                best_move = move
            if prune:
                alpha = max(alpha, value)
        else:
            if value < best_value:
                best_value = value
                best_move = move
            if prune:
                beta = min(beta, value)

        # The move is already undone here; the siblings after it were never applied.
        if prune and beta <= alpha:
            state.cutoff_count += 1
            if state.tracing:
                _emit(state, TraceEvent(
                    "prune", depth, maximizing, move, value, best_move, best_value, alpha, beta
                ))
            break

    # Every child tied with the sentinel: fall back to the first candidate so a
    # node with legal moves always names one.
    if best_move is None and moves:
        best_move = moves[0]

    if state.tracing:
        _emit(state, TraceEvent(
            "node", depth, maximizing, best_move, best_value, best_move, best_value, alpha, beta
        ))

    return SearchResult(best_value, best_move)


def search(
    depth: int,
    position: chess.Board,
    color: chess.Color,
    maximizing: bool = True,
    alpha: Score = -math.inf,
    beta: Score = math.inf,
    *,
    prune: bool = True,
    state: Optional[SearchState] = None,
) -> SearchResult:
    """
    Minimax value of `position` to `depth` plies from `color`'s perspective.

    Args:
        depth:      Remaining plies. 0 returns the static evaluation.
        position:   Board to search. Modified in place while searching and
                    restored exactly before returning, even on error.
        color:      Perspective color; the evaluator is always called with it.
        maximizing: True when the side to move at this node is the one
                    maximizing the score (normally the perspective color).
        alpha:      Lower bound of the window. Ignored when prune is False.
        beta:       Upper bound of the window. Ignored when prune is False.
        prune:      Enable alpha-beta cutoffs.
        state:      Collaborators and counters. A default SearchState
                    (python-chess rules, standard evaluator, random order)
                    is created when omitted; pass one in to read the
                    node/leaf/cutoff counts afterwards.

    Returns:
        SearchResult(score, move). At depth 0 move is None. A node without
        legal moves inside the tree scores -inf for the maximizer and +inf
        for the minimizer.

    Raises:
        InvalidDepthError: depth is negative or not an int.
        GameOverError:     depth > 0 and the game at `position` is over.
    """
    _check_depth(depth)
    if state is None:
        state = SearchState()
    state.tracing = state.tracer is not None or _log.isEnabledFor(logging.DEBUG)

    if depth > 0 and state.rules.is_game_over(position):
        raise GameOverError("cannot search a position whose game is already over")

    return _minimax(depth, position, color, maximizing, alpha, beta, prune, state)


def _has_moves(state: SearchState, position: chess.Board) -> bool:
    return not state.rules.is_game_over(position) and bool(state.rules.legal_moves(position))


def _check_root_depth(depth: int) -> None:
    _check_depth(depth)
    if depth == 0:
        raise InvalidDepthError("choosing a move needs a search depth of at least 1")


def choose_move(
    depth: int,
    position: chess.Board,
    color: chess.Color,
    use_pruning: bool = True,
    *,
    config: EvalConfig = STANDARD,
    evaluator: Optional[LeafEvaluator] = None,
    order_moves: MoveOrdering = shuffle_moves,
    rules: RulesEngine = CHESS_RULES,
    tracer: Optional[Tracer] = None,
) -> Optional[chess.Move]:
    """
    Pick a move for `color` by searching `depth` plies.

    Returns None when the game is over or there is nothing to play; in every
    other case a legal move is returned. The position is left as it was found.

    Raises:
        InvalidDepthError: depth is not a positive integer.
    """
    _check_root_depth(depth)
    state = SearchState(
        rules=rules, config=config, evaluator=evaluator, order_moves=order_moves, tracer=tracer
    )
    if not _has_moves(state, position):
        return None
    return search(depth, position, color, prune=use_pruning, state=state).move


def _centipawns(score: Score) -> int:
    if math.isinf(score):
        return MATE_SCORE if score > 0 else -MATE_SCORE
    return int(round(score))


def get_best_move(
    board: chess.Board,
    depth: int = DEFAULT_DEPTH,
    use_pruning: bool = True,
    evaluator: str = "standard",
    order_moves: MoveOrdering = shuffle_moves,
) -> tuple[Optional[chess.Move], int, int, int]:
    """
    Return the best move for the side to move, plus reporting numbers.

    This is the interface called by the UCI handler and the web app. The
    return type is always (move, score_cp, depth, nodes):
        - move:     The chosen chess.Move, or None if the game is over.
        - score_cp: Minimax value in centipawns from the side-to-move's
                    perspective, rounded to an int. Lines ending in a
                    position without legal moves report +/-MATE_SCORE.
        - depth:    The depth searched (0 when no search ran).
        - nodes:    Nodes visited, leaves included.

    Args:
        board:       The current position. Restored before returning.
        depth:       Plies to search, at least 1.
        use_pruning: Alpha-beta (True) or plain minimax (False).
        evaluator:   Name of an evaluation preset (see evaluate.EVALUATORS).
        order_moves: Move ordering policy.

    Raises:
        InvalidDepthError: depth is not a positive integer.
        ValueError:        evaluator is not a known preset name.
    """
    _check_root_depth(depth)
    state = SearchState(config=get_eval_config(evaluator), order_moves=order_moves)
    if not _has_moves(state, board):
        return (None, 0, 0, 0)

    result = search(depth, board, board.turn, prune=use_pruning, state=state)
    _log.debug(
        "search done: move=%s score=%s nodes=%d leaves=%d cutoffs=%d",
        result.move, result.score, state.node_count, state.leaf_count, state.cutoff_count,
    )
    return (result.move, _centipawns(result.score), depth, state.node_count)
