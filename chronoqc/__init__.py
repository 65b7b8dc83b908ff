"""Puzzle integrity and quality control core for a daily history-guessing game."""

__version__ = "0.1.0"
