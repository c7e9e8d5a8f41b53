"""
UCI (Universal Chess Interface) protocol handler.

UCI is the standard text-based protocol that allows chess GUIs and testing
tools (like cutechess-cli) to communicate with chess engines. The engine
reads commands from stdin and writes responses to stdout. All output lines
must be flushed immediately — GUI programs won't block waiting for a newline.

Protocol overview:
    GUI → Engine: uci, isready, ucinewgame, position, setoption, go, stop, quit
    Engine → GUI: id name, id author, option, uciok, readyok, info, bestmove

Search control:
    This engine searches to a fixed depth, not to a clock. "go depth N" sets
    the depth for one search; otherwise the "Depth" option applies. Time
    control tokens (wtime, movetime, ...) are accepted and ignored.

Threading model:
    The UCI loop runs on the main thread. When the GUI sends "go", the search
    runs in a daemon thread on a copy of the board, so the next "position"
    command can never touch the board being searched. The search cannot be
    interrupted; "stop" waits for it to finish.

Critical rule: NEVER print to stdout except for valid UCI responses.
Debug output must go to stderr or be suppressed entirely.
"""

import sys
import os
import threading
import time

# ---------------------------------------------------------------------------
# Path setup: make 'minimax' importable when this script is run directly
# as `python interface/uci.py` from the repo root.
# ---------------------------------------------------------------------------
_REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

import chess
from minimax.constants import DEFAULT_DEPTH, MATE_SCORE, MAX_DEPTH
from minimax.evaluate import EVALUATORS
from minimax.search import get_best_move

ENGINE_NAME = "Minimax"


def _send(line: str) -> None:
    """
    Write a line to stdout and flush immediately.

    UCI requires every output line to be flushed right away. GUIs read
    line-by-line; if the buffer is not flushed, the GUI will hang waiting
    for output that is already in the buffer.
    """
    print(line, flush=True)


def _log(message: str) -> None:
    """Write a debug/error message to stderr; stdout is reserved for UCI."""
    print(message, file=sys.stderr, flush=True)


def _format_score(score: int) -> str:
    """
    Render a score for an "info" line.

    The search reports a line ending in a position without legal moves as
    +/-MATE_SCORE. It does not track the distance to that position, so it is
    sent as "mate 1" / "mate -1" rather than as a 999-pawn "cp" value.
    """
    if abs(score) == MATE_SCORE:
        return "mate 1" if score > 0 else "mate -1"
    return f"cp {score}"


class UciHandler:
    """
    Stateful handler for the UCI protocol.

    Holds the current board position and the engine options, and manages the
    search thread lifecycle. The main UCI loop creates one instance and
    dispatches commands to it.

    Attributes:
        board:         The current board position, updated by "position" commands.
        search_thread: The active search thread, or None if no search is running.
        depth:         Default search depth ("Depth" option).
        use_pruning:   Alpha-beta on/off ("Pruning" option).
        evaluator:     Evaluation preset name ("Evaluator" option).
    """

    def __init__(self) -> None:
        self.board: chess.Board = chess.Board()
        self.search_thread: threading.Thread | None = None
        self.depth: int = DEFAULT_DEPTH
        self.use_pruning: bool = True
        self.evaluator: str = "standard"

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_uci(self) -> None:
        """
        Respond to the "uci" command with identity, options, and "uciok".
        """
        _send(f"id name {ENGINE_NAME}")
        _send("id author Minimax Project")
        _send(f"option name Depth type spin default {DEFAULT_DEPTH} min 1 max {MAX_DEPTH}")
        _send("option name Pruning type check default true")
        presets = " ".join(f"var {name}" for name in EVALUATORS)
        _send(f"option name Evaluator type combo default standard {presets}")
        _send("uciok")

    def handle_isready(self) -> None:
        """Respond to "isready"; there is no lazy initialization to wait for."""
        _send("readyok")

    def handle_ucinewgame(self) -> None:
        """
        Respond to the "ucinewgame" command.

        Waits for any running search and resets the board to the starting
        position. Options survive a new game.
        """
        self._stop_search()
        self.board = chess.Board()

    def handle_position(self, tokens: list[str]) -> None:
        """
        Parse and apply a "position" command.

        Command formats:
            position startpos
            position startpos moves e2e4 e7e5 ...
            position fen <FEN>
            position fen <FEN> moves e2e4 e7e5 ...

        Args:
            tokens: The command tokens with "position" already stripped.
                    tokens[0] is "startpos" or "fen".
        """
        try:
            if not tokens:
                return

            if tokens[0] == "startpos":
                board = chess.Board()
                move_tokens = tokens[2:] if len(tokens) > 1 and tokens[1] == "moves" else []
            elif tokens[0] == "fen":
                # FEN strings have 6 space-separated fields; find where "moves" appears
                if "moves" in tokens:
                    moves_idx = tokens.index("moves")
                    fen = " ".join(tokens[1:moves_idx])
                    move_tokens = tokens[moves_idx + 1:]
                else:
                    fen = " ".join(tokens[1:])
                    move_tokens = []
                board = chess.Board(fen)
            else:
                _log(f"uci: unknown position type: {tokens[0]}")
                return

            for uci_move in move_tokens:
                move = chess.Move.from_uci(uci_move)
                if move in board.legal_moves:
                    board.push(move)
                else:
                    _log(f"uci: illegal move in position command: {uci_move}")
                    break

            self.board = board

        except ValueError as e:
            _log(f"uci: error in position command: {e}")

    def handle_setoption(self, tokens: list[str]) -> None:
        """
        Parse a "setoption name <Name> value <Value>" command.

        Supported options: Depth (1..MAX_DEPTH), Pruning (true/false),
        Evaluator (one of the evaluation presets). Unknown names and bad
        values are reported on stderr and leave the option unchanged.
        """
        if "name" not in tokens:
            _log("uci: setoption without name")
            return

        name_idx = tokens.index("name") + 1
        if "value" in tokens:
            value_idx = tokens.index("value")
            name = " ".join(tokens[name_idx:value_idx])
            value = " ".join(tokens[value_idx + 1:])
        else:
            name = " ".join(tokens[name_idx:])
            value = ""

        key = name.lower()
        if key == "depth":
            try:
                depth = int(value)
            except ValueError:
                _log(f"uci: invalid Depth value: {value!r}")
                return
            self.depth = max(1, min(depth, MAX_DEPTH))
        elif key == "pruning":
            if value.lower() not in ("true", "false"):
                _log(f"uci: invalid Pruning value: {value!r}")
                return
            self.use_pruning = value.lower() == "true"
        elif key == "evaluator":
            if value not in EVALUATORS:
                _log(f"uci: unknown Evaluator: {value!r}")
                return
            self.evaluator = value
        else:
            _log(f"uci: ignoring unknown option: {name!r}")

    def handle_go(self, tokens: list[str]) -> None:
        """
        Parse a "go" command and start the search in a background thread.

        Only "depth <n>" is honoured; other go parameters are ignored because
        the search is bounded by depth alone.

        Args:
            tokens: The command tokens with "go" already stripped.
        """
        self._stop_search()

        depth = self._parse_go_depth(tokens)

        # The search mutates its board while it runs; give it its own copy.
        board_copy = self.board.copy()
        use_pruning = self.use_pruning
        evaluator = self.evaluator

        def search_and_reply() -> None:
            """
            Run the search and emit the UCI info + bestmove lines.

            The GUI will not make its next move until it receives the
            "bestmove" line, so one is sent even when the search fails.
            """
            try:
                start = time.monotonic()
                move, score, searched, nodes = get_best_move(
                    board_copy, depth, use_pruning, evaluator
                )
                elapsed_ms = max(1, int((time.monotonic() - start) * 1000))

                if move is not None:
                    nps = max(1, nodes * 1000 // elapsed_ms)
                    _send(
                        f"info depth {searched} score {_format_score(score)} "
                        f"nodes {nodes} nps {nps} time {elapsed_ms}"
                    )
                    _send(f"bestmove {move.uci()}")
                else:
                    # No legal moves: the game is over (checkmate or stalemate).
                    _send("bestmove (none)")

            except Exception as e:
                _log(f"search error: {e}")
                _send("bestmove (none)")

        self.search_thread = threading.Thread(target=search_and_reply, daemon=True)
        self.search_thread.start()

    def handle_stop(self) -> None:
        """Wait for the running search to deliver its "bestmove"."""
        self._stop_search()

    def handle_quit(self) -> None:
        """Wait for the search and exit the process without a reply."""
        self._stop_search()
        sys.exit(0)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _stop_search(self) -> None:
        """Join the current search thread, if any."""
        if self.search_thread is not None and self.search_thread.is_alive():
            self.search_thread.join()
        self.search_thread = None

    def _parse_go_depth(self, tokens: list[str]) -> int:
        """
        Extract the search depth from "go" command tokens.

        Returns the "depth" parameter clamped to [1, MAX_DEPTH], or the
        Depth option when the parameter is missing or malformed.
        """
        if "depth" in tokens:
            idx = tokens.index("depth")
            try:
                return max(1, min(int(tokens[idx + 1]), MAX_DEPTH))
            except (ValueError, IndexError):
                _log(f"uci: invalid go depth: {tokens[idx + 1:idx + 2]}")
        return self.depth


def run_uci_loop() -> None:
    """
    Main UCI protocol loop.

    Reads lines from stdin and dispatches each command to the UciHandler.
    Runs until the "quit" command is received or stdin is closed.

    Each command is wrapped in a try/except so that a bug in one command
    handler does not crash the engine; errors are logged to stderr and the
    loop continues.
    """
    handler = UciHandler()

    for raw_line in sys.stdin:
        line = raw_line.strip()
        if not line:
            continue

        tokens = line.split()
        command = tokens[0]
        args = tokens[1:]

        try:
            if command == "uci":
                handler.handle_uci()
            elif command == "isready":
                handler.handle_isready()
            elif command == "ucinewgame":
                handler.handle_ucinewgame()
            elif command == "position":
                handler.handle_position(args)
            elif command == "setoption":
                handler.handle_setoption(args)
            elif command == "go":
                handler.handle_go(args)
            elif command == "stop":
                handler.handle_stop()
            elif command == "quit":
                handler.handle_quit()
            else:
                # Unknown commands are ignored per the UCI specification.
                _log(f"uci: ignoring unknown command: {command!r}")

        except Exception as e:
            _log(f"uci: unhandled error for command {command!r}: {e}")

    # stdin closed: let a running search finish and print its bestmove.
    handler.handle_stop()


if __name__ == "__main__":
    run_uci_loop()
