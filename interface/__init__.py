"""
Interface package: text protocols in front of the minimax search.

Modules:
    uci — UCI protocol handler with Depth / Pruning / Evaluator options.
          Run standalone with: python interface/uci.py
"""
