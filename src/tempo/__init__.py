"""Tempo: artist parsing and track deduplication for listening history."""

__version__ = "0.1.0"
