"""Pillar Labyrinth: maze generation and right-hand wall following."""

__version__ = "1.0.0"
