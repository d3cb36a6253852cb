"""Tempo domain layer - pure matching logic with no I/O."""

from . import matching

from .matching import (
    MatchResult,
    MatchType,
    ParsedArtists,
    TrackCandidate,
    find_best_match,
    match_tracks,
    parse_artists,
)

__all__ = [
    "matching",
    "MatchResult",
    "MatchType",
    "ParsedArtists",
    "TrackCandidate",
    "find_best_match",
    "match_tracks",
    "parse_artists",
]
