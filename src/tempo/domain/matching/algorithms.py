"""Pure algorithms for deciding whether two track observations are one song.

These functions combine title/artist normalization with composite string
similarity to classify a pair of tracks, and to pick the best existing track
for a new observation out of a candidate list.
"""

import re
from collections.abc import Iterable, Sequence

from tempo.config import get_logger

from .artists import parse_artists
from .similarity import calculate_similarity
from .titles import normalize_artist, normalize_title
from .types import MatchResult, MatchType, TrackCandidate

logger = get_logger(__name__)

# Matching configuration
MATCH_CONFIG = {
    # Tier thresholds on the overall score
    "exact_threshold": 0.95,
    "high_threshold": 0.85,
    "medium_threshold": 0.70,
    # Weights of the overall score
    "title_weight": 0.6,
    "artist_weight": 0.4,
    # Candidates below this title similarity skip artist scoring
    "min_title_similarity": 0.4,
}

_TOKEN_SPLIT = re.compile(r"[ \-_]")


def classify_score(overall_score: float) -> MatchType:
    """Map an overall score onto its match tier."""
    if overall_score >= MATCH_CONFIG["exact_threshold"]:
        return MatchType.EXACT
    if overall_score >= MATCH_CONFIG["high_threshold"]:
        return MatchType.HIGH
    if overall_score >= MATCH_CONFIG["medium_threshold"]:
        return MatchType.MEDIUM
    return MatchType.NONE


def calculate_overall_score(title_similarity: float, artist_similarity: float) -> float:
    return (
        title_similarity * MATCH_CONFIG["title_weight"]
        + artist_similarity * MATCH_CONFIG["artist_weight"]
    )


def calculate_artist_similarity(
    norm_artist1: str,
    norm_artist2: str,
    artist1: str,
    artist2: str,
) -> float:
    """Artist similarity with fallbacks for multi-artist strings.

    Tries, in order, the flattened artist strings, the primary artists, and
    the share of individual artists that match across both sides, stopping as
    soon as one reaches the high threshold.

    Args:
        norm_artist1: ``normalize_artist(artist1)``
        norm_artist2: ``normalize_artist(artist2)``
        artist1: Raw first artist string
        artist2: Raw second artist string

    Returns:
        Best similarity found, in [0, 1]
    """
    high = MATCH_CONFIG["high_threshold"]

    simple_similarity = calculate_similarity(norm_artist1, norm_artist2)
    if simple_similarity >= high:
        return simple_similarity

    parsed1 = parse_artists(artist1)
    parsed2 = parse_artists(artist2)

    primary_similarity = calculate_similarity(
        normalize_artist(parsed1.primary_artist),
        normalize_artist(parsed2.primary_artist),
    )
    if primary_similarity >= high:
        return primary_similarity

    artists1 = {normalize_artist(name) for name in parsed1.all_artists}
    artists2 = {normalize_artist(name) for name in parsed2.all_artists}
    overlap_count = sum(
        1
        for a1 in artists1
        if any(calculate_similarity(a1, a2) >= high for a2 in artists2)
    )
    overlap_similarity = overlap_count / max(len(artists1), len(artists2))

    return max(simple_similarity, primary_similarity, overlap_similarity)


def _score(
    title_similarity: float,
    norm_artist1: str,
    norm_artist2: str,
    artist1: str,
    artist2: str,
) -> MatchResult:
    artist_similarity = calculate_artist_similarity(
        norm_artist1, norm_artist2, artist1, artist2
    )
    overall_score = calculate_overall_score(title_similarity, artist_similarity)
    return MatchResult(
        match_type=classify_score(overall_score),
        title_similarity=title_similarity,
        artist_similarity=artist_similarity,
        overall_score=overall_score,
    )


def match_tracks(
    title1: str,
    artist1: str,
    title2: str,
    artist2: str,
    strict_matching: bool = False,
) -> MatchResult:
    """Classify whether two (title, artist) pairs are the same song.

    Args:
        title1: First track title
        artist1: First artist string
        title2: Second track title
        artist2: Second artist string
        strict_matching: Keep versions ("Live", "Remix") distinct instead of
            merging them with the original recording

    Returns:
        MatchResult with per-field similarities, overall score and tier
    """
    if not all(value.strip() for value in (title1, artist1, title2, artist2)):
        return MatchResult.no_match()

    if title1.lower() == title2.lower() and artist1.lower() == artist2.lower():
        return MatchResult.exact()

    title_similarity = calculate_similarity(
        normalize_title(title1, strict_matching),
        normalize_title(title2, strict_matching),
    )
    return _score(
        title_similarity,
        normalize_artist(artist1),
        normalize_artist(artist2),
        artist1,
        artist2,
    )


def _tokens(value: str) -> set[str]:
    return {token for token in _TOKEN_SPLIT.split(value) if len(token) > 1}


def prefilter_candidates(
    target_title: str,
    target_artist: str,
    candidates: Iterable[TrackCandidate],
) -> list[TrackCandidate]:
    """Keep candidates sharing at least one title or artist token with the target.

    Cheap substring screen that bounds the normalization work on large
    libraries. Candidate order is preserved. A title without usable tokens
    disables the screen.
    """
    title_tokens = _tokens(target_title.strip().lower())
    artist_tokens = _tokens(target_artist.strip().lower())

    if not title_tokens:
        return list(candidates)

    kept = []
    for candidate in candidates:
        candidate_title = candidate.title.lower()
        candidate_artist = candidate.artist.lower()
        if any(token in candidate_title for token in title_tokens) or any(
            token in candidate_artist for token in artist_tokens
        ):
            kept.append(candidate)
    return kept


def find_best_match(
    target_title: str,
    target_artist: str,
    candidates: Sequence[TrackCandidate],
    strict_matching: bool = False,
) -> tuple[TrackCandidate, MatchResult] | None:
    """Find the existing track that best matches a new observation.

    The first candidate reaching EXACT wins immediately. Otherwise the highest
    scoring HIGH or MEDIUM candidate is returned; on equal scores the earlier
    candidate in the caller's order is kept.

    Args:
        target_title: Newly observed title
        target_artist: Newly observed artist string
        candidates: Existing tracks, in the caller's priority order
        strict_matching: Keep versions distinct, see ``match_tracks``

    Returns:
        (candidate, result) for the best match, or None when nothing reaches
        the medium threshold
    """
    if not candidates:
        return None
    if not target_title.strip() or not target_artist.strip():
        return None

    title_lower = target_title.lower().strip()
    artist_lower = target_artist.lower().strip()

    for candidate in candidates:
        if (
            candidate.title.lower().strip() == title_lower
            and candidate.artist.lower().strip() == artist_lower
        ):
            return candidate, MatchResult.exact()

    filtered = prefilter_candidates(target_title, target_artist, candidates)
    if not filtered:
        logger.debug(
            "No candidate shares a token with '{}' by '{}'", target_title, target_artist
        )
        return None

    norm_title = normalize_title(target_title, strict_matching)
    norm_artist = normalize_artist(target_artist)
    min_title_similarity = MATCH_CONFIG["min_title_similarity"]

    best: tuple[TrackCandidate, MatchResult] | None = None
    for candidate in filtered:
        title_similarity = calculate_similarity(
            norm_title, normalize_title(candidate.title, strict_matching)
        )
        if title_similarity < min_title_similarity:
            continue

        result = _score(
            title_similarity,
            norm_artist,
            normalize_artist(candidate.artist),
            target_artist,
            candidate.artist,
        )

        if result.match_type is MatchType.EXACT:
            return candidate, result

        if result.is_match and (best is None or result.overall_score > best[1].overall_score):
            best = (candidate, result)

    if best is not None:
        logger.debug(
            "Best match for '{}' by '{}': candidate {} ({}, score {:.2f})",
            target_title,
            target_artist,
            best[0].id,
            best[1].match_type,
            best[1].overall_score,
        )
    return best
