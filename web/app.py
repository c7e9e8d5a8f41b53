"""
FastAPI web application for the minimax engine.

Exposes POST /api/move, which accepts a FEN position plus search settings,
runs the engine, and returns the chosen move with its score and node count.
GET /api/evaluators lists the evaluation presets a client may request.

Architecture notes:
- Sync endpoint (not async): FastAPI runs sync handlers in a thread pool,
  which is the correct pattern for CPU-bound blocking calls like engine search.
- Stateless per request: the client sends the full FEN each time, and each
  request searches its own freshly parsed board, so concurrent requests
  never share a position.
"""

import logging

import chess
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, field_validator

from minimax.constants import DEFAULT_DEPTH, MAX_WEB_DEPTH
from minimax.evaluate import EVALUATORS
from minimax.search import get_best_move

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

app = FastAPI(title="Minimax Chess", version="1.0.0")


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class MoveRequest(BaseModel):
    """
    Client request to the engine.

    Fields:
        fen:       Full FEN string representing the current board position.
        depth:     Plies to search, clamped to [1, MAX_WEB_DEPTH] so a
                   request cannot start a search that runs for minutes.
        pruning:   Use alpha-beta pruning (same result, fewer nodes).
        evaluator: Evaluation preset name.
    """

    fen: str
    depth: int = DEFAULT_DEPTH
    pruning: bool = True
    evaluator: str = "standard"

    @field_validator("depth")
    @classmethod
    def clamp_depth(cls, v: int) -> int:
        """Clamp depth to a safe operating range."""
        return max(1, min(v, MAX_WEB_DEPTH))

    @field_validator("evaluator")
    @classmethod
    def known_evaluator(cls, v: str) -> str:
        """Reject evaluator names that have no preset."""
        if v not in EVALUATORS:
            raise ValueError(f"unknown evaluator {v!r}; expected one of {sorted(EVALUATORS)}")
        return v


class MoveResponse(BaseModel):
    """
    Engine response after computing the best move.

    Fields:
        move:  Chosen move in UCI notation (e.g. "e2e4", "e7e8q").
        fen:   Board FEN after the engine's move is applied.
        score: Minimax value in centipawns from the engine's perspective.
        depth: Depth searched.
        nodes: Nodes visited during the search.
    """

    move: str
    fen: str
    score: int
    depth: int
    nodes: int


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@app.post("/api/move", response_model=MoveResponse)
def api_move(request: MoveRequest) -> MoveResponse:
    """
    Compute the engine's move for the given position.

    Raises:
        HTTPException 400: Malformed FEN or game already over.
        HTTPException 500: Engine failure or no move returned.
    """
    try:
        board = chess.Board(request.fen)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid FEN: {exc}") from exc

    if board.is_game_over():
        raise HTTPException(
            status_code=400,
            detail=f"Game is already over: {board.result()}",
        )

    try:
        move, score, depth, nodes = get_best_move(
            board, request.depth, request.pruning, request.evaluator
        )
    except Exception as exc:
        _log.exception("Engine search failed for FEN=%s", request.fen)
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    if move is None:
        raise HTTPException(status_code=500, detail="Engine returned no move")

    _log.info(
        "Move=%s score=%d depth=%d nodes=%d pruning=%s evaluator=%s fen=%s",
        move.uci(),
        score,
        depth,
        nodes,
        request.pruning,
        request.evaluator,
        request.fen[:40],
    )

    board.push(move)
    return MoveResponse(
        move=move.uci(),
        fen=board.fen(),
        score=score,
        depth=depth,
        nodes=nodes,
    )


@app.get("/api/evaluators")
def api_evaluators() -> list[str]:
    """List the evaluation preset names accepted by /api/move."""
    return list(EVALUATORS)
