"""
No-guess Minesweeper.

Board model, reveal engine, no-guess solver and board factory.
"""

__version__ = "0.1.0"
