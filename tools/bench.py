#!/usr/bin/env python3
"""
Benchmark: compare plain minimax and alpha-beta on a fixed set of positions.

Each position is searched twice through the UCI engine, once with the
Pruning option off and once with it on, at the same depth. Both runs must
report the same score; the node counts show how much work pruning saves.

Usage: python3 tools/bench.py [depth]   (default depth 2)
"""
import subprocess
import sys
import os

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
PYTHON = sys.executable
ENGINE = os.path.join(REPO, "interface", "uci.py")

if REPO not in sys.path:
    sys.path.insert(0, REPO)

from minimax.constants import MATE_SCORE

# Fixed positions spanning opening, middlegame, and endgame.
POSITIONS = [
    ("Start",        "startpos"),
    ("After 1.e4",   "startpos moves e2e4"),
    ("Sicilian",     "startpos moves e2e4 c7c5"),
    ("Italian",      "startpos moves e2e4 e7e5 g1f3 b8c6 f1c4"),
    ("Mid-open",     "fen r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4"),
    ("Queen ending", "fen 6k1/ppp2ppp/8/3p4/3P4/8/PPP2PPP/6K1 w - - 0 1"),
    ("Pawn race",    "fen 8/1p4k1/p7/P1K5/8/8/8/8 w - - 0 1"),
]


def run_position(pos_spec: str, depth: int, pruning: bool) -> dict:
    """Run one position through the engine and return its info line metrics.

    Args:
        pos_spec: UCI position string (e.g. "startpos" or "fen <FEN>").
        depth: Search depth in plies.
        pruning: Value for the engine's Pruning option.

    Returns:
        Dict with keys: move, score, nodes, time_ms.
    """
    env = {**os.environ, "PYTHONPATH": REPO}
    proc = subprocess.Popen(
        [PYTHON, ENGINE],
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        text=True,
        env=env,
    )
    flag = "true" if pruning else "false"
    cmds = (
        f"uci\nsetoption name Pruning value {flag}\nisready\n"
        f"position {pos_spec}\ngo depth {depth}\n"
    )
    proc.stdin.write(cmds)
    proc.stdin.flush()

    nodes = time_ms = score = 0
    move = "(none)"
    for line in proc.stdout:
        line = line.strip()
        if line.startswith("info depth"):
            parts = line.split()

            def _get(key: str) -> int:
                try:
                    return int(parts[parts.index(key) + 1])
                except (ValueError, IndexError):
                    return 0

            # Mate scores arrive as "mate 1" / "mate -1".
            score = _get("cp") if "cp" in parts else MATE_SCORE * _get("mate")
            nodes = _get("nodes")
            time_ms = _get("time")
        elif line.startswith("bestmove"):
            move = line.split()[1]
            break

    proc.stdin.write("quit\n")
    proc.stdin.flush()
    proc.wait(timeout=5)

    return {"move": move, "score": score, "nodes": nodes, "time_ms": time_ms}


def main() -> None:
    """Run all benchmark positions and print a side-by-side table."""
    depth = int(sys.argv[1]) if len(sys.argv) > 1 else 2

    print(f"Minimax vs alpha-beta benchmark — depth {depth} — {PYTHON}")
    print()
    print(
        f"{'Position':<14} {'Score':>7} {'Minimax':>9} {'AlphaBeta':>10} "
        f"{'Saved':>6} {'MM(ms)':>8} {'AB(ms)':>8}"
    )
    print("-" * 68)

    total_plain = total_pruned = 0
    for label, pos in POSITIONS:
        plain = run_position(pos, depth, pruning=False)
        pruned = run_position(pos, depth, pruning=True)
        total_plain += plain["nodes"]
        total_pruned += pruned["nodes"]

        saved = 100 - (100 * pruned["nodes"] // plain["nodes"]) if plain["nodes"] else 0
        mark = "" if plain["score"] == pruned["score"] else "  SCORE MISMATCH"
        print(
            f"{label:<14} {pruned['score']:>7} {plain['nodes']:>9,} {pruned['nodes']:>10,} "
            f"{saved:>5}% {plain['time_ms']:>8,} {pruned['time_ms']:>8,}{mark}"
        )

    print("-" * 68)
    if total_plain:
        saved = 100 - (100 * total_pruned // total_plain)
        print(f"{'TOTAL':<14} {'':>7} {total_plain:>9,} {total_pruned:>10,} {saved:>5}%")


if __name__ == "__main__":
    main()
