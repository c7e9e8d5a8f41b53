"""
Web package: FastAPI JSON endpoint that returns the engine's move for a FEN.

Run with `uvicorn web.app:app` from the repo root (install the `web` extra).
"""
