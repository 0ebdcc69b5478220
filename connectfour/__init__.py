"""
connectfour - A Connect Four engine with a heuristic computer opponent
"""

__version__ = "0.1.0"
