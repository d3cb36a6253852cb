"""Artist parsing and track matching for deduplicating listening history."""

from .algorithms import (
    MATCH_CONFIG,
    calculate_artist_similarity,
    classify_score,
    find_best_match,
    match_tracks,
    prefilter_candidates,
)
from .artists import (
    clean_track_title,
    extract_artists_from_title,
    get_all_artists,
    get_primary_artist,
    has_any_matching_artist,
    is_same_artist,
    is_unknown_artist,
    normalize_artist_name,
    normalize_for_search,
    parse_artists,
)
from .similarity import calculate_similarity
from .titles import normalize_artist, normalize_title
from .types import UNKNOWN_ARTIST, MatchResult, MatchType, ParsedArtists, TrackCandidate

__all__ = [
    "MATCH_CONFIG",
    "UNKNOWN_ARTIST",
    "MatchResult",
    "MatchType",
    "ParsedArtists",
    "TrackCandidate",
    "calculate_artist_similarity",
    "calculate_similarity",
    "classify_score",
    "clean_track_title",
    "extract_artists_from_title",
    "find_best_match",
    "get_all_artists",
    "get_primary_artist",
    "has_any_matching_artist",
    "is_same_artist",
    "is_unknown_artist",
    "match_tracks",
    "normalize_artist",
    "normalize_artist_name",
    "normalize_for_search",
    "normalize_title",
    "parse_artists",
    "prefilter_candidates",
]
