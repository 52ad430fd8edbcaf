"""Nostromo: a turn-based crew survival simulation."""

__version__ = "0.1.0"
