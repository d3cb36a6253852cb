"""Use case deciding whether a newly observed track is already in the library.

Ingestion collaborators (notification capture, scrobble import) call this with
the observed title/artist and the stored tracks. The decision chain is:

1. case-insensitive exact title and artist
2. fuzzy best match at or above the configured threshold
3. legacy fallback: same cleaned title with any overlapping artist
4. otherwise a new track

The use case is pure: candidates are supplied by the caller and nothing is
persisted here.
"""

from collections.abc import Sequence
from typing import Literal

from attrs import define, field

from tempo.config import get_logger, settings
from tempo.domain.matching.algorithms import find_best_match
from tempo.domain.matching.artists import (
    clean_track_title,
    has_any_matching_artist,
    is_unknown_artist,
)
from tempo.domain.matching.types import MatchResult, TrackCandidate

logger = get_logger(__name__)

Resolution = Literal["exact", "fuzzy", "clean_title", "new"]


@define(frozen=True, slots=True)
class ResolveExistingTrackCommand:
    """Command for resolving an observed track against stored candidates.

    ``strict_matching`` and ``match_threshold`` default to the user's matching
    preferences when left as None.
    """

    title: str
    artist: str
    candidates: Sequence[TrackCandidate] = field(factory=list)
    strict_matching: bool | None = None
    match_threshold: float | None = None

    def __attrs_post_init__(self) -> None:
        """Validate command parameters."""
        if self.match_threshold is not None and not 0.0 <= self.match_threshold <= 1.0:
            raise ValueError(
                f"Match threshold must be between 0 and 1, got {self.match_threshold}"
            )

    def resolved_strict_matching(self) -> bool:
        if self.strict_matching is None:
            return settings.matching.strict_matching
        return self.strict_matching

    def resolved_threshold(self) -> float:
        if self.match_threshold is None:
            return settings.matching.track_match_threshold
        return self.match_threshold


@define(frozen=True, slots=True)
class ResolveExistingTrackResult:
    """Outcome of resolving an observed track.

    ``match`` is set only when the fuzzy matcher made the decision.
    """

    candidate: TrackCandidate | None
    resolution: Resolution
    match: MatchResult | None = None

    @property
    def is_existing(self) -> bool:
        return self.candidate is not None


@define(slots=True)
class ResolveExistingTrackUseCase:
    """Use case for attaching a listening event to an existing track.

    Stateless: the same instance can serve concurrent callers.
    """

    def execute(self, command: ResolveExistingTrackCommand) -> ResolveExistingTrackResult:
        """Resolve the observed track against the command's candidates.

        Args:
            command: Observed title/artist plus stored candidates

        Returns:
            Result naming the existing candidate, or resolution "new"
        """
        title, artist = command.title, command.artist

        title_lower = title.lower()
        artist_lower = artist.lower()
        for candidate in command.candidates:
            if candidate.title.lower() == title_lower and candidate.artist.lower() == artist_lower:
                logger.debug("Exact match for '{}' by '{}': track {}", title, artist, candidate.id)
                return ResolveExistingTrackResult(candidate=candidate, resolution="exact")

        best = find_best_match(
            title,
            artist,
            command.candidates,
            strict_matching=command.resolved_strict_matching(),
        )
        if best is not None:
            candidate, match = best
            if match.overall_score >= command.resolved_threshold():
                logger.debug(
                    "Fuzzy match for '{}' by '{}': track {} (score {:.2f}, type {})",
                    title,
                    artist,
                    candidate.id,
                    match.overall_score,
                    match.match_type,
                )
                return ResolveExistingTrackResult(
                    candidate=candidate, resolution="fuzzy", match=match
                )

        clean_title = clean_track_title(title).lower()
        for candidate in command.candidates:
            if candidate.title.lower() == clean_title and has_any_matching_artist(
                candidate.artist, artist
            ):
                logger.debug(
                    "Clean title match for '{}' by '{}': track {}", title, artist, candidate.id
                )
                return ResolveExistingTrackResult(candidate=candidate, resolution="clean_title")

        logger.info("No existing track for '{}' by '{}'", title, artist)
        return ResolveExistingTrackResult(candidate=None, resolution="new")


def should_adopt_artist(existing_artist: str, new_artist: str) -> bool:
    """Check whether a track stored with a placeholder artist should take a real one."""
    return is_unknown_artist(existing_artist) and not is_unknown_artist(new_artist)
