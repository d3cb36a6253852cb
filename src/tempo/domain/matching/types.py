"""Pure domain types for artist parsing and track matching.

These types are transient values built per call. They carry no identity beyond
value equality and are never mutated after construction.
"""

from enum import StrEnum, auto
from typing import Any

from attrs import define, field, validators

UNKNOWN_ARTIST = "Unknown Artist"


class MatchType(StrEnum):
    """Confidence tier of a track match, from strongest to none."""

    EXACT = auto()
    HIGH = auto()
    MEDIUM = auto()
    NONE = auto()


@define(frozen=True, slots=True)
class ParsedArtists:
    """Result of splitting a raw artist string.

    ``all_artists`` is never empty: when every parsed token was filtered out
    as noise it falls back to the trimmed original string.
    """

    primary_artists: list[str]
    featured_artists: list[str] = field(factory=list)
    all_artists: list[str] = field(factory=list)
    original: str = ""

    @property
    def primary_artist(self) -> str:
        """First primary artist, or the raw string when there is none."""
        return self.primary_artists[0] if self.primary_artists else self.original

    @property
    def has_multiple_artists(self) -> bool:
        return len(self.all_artists) > 1

    @property
    def has_featured_artists(self) -> bool:
        return bool(self.featured_artists)

    def format_all(self, separator: str = ", ") -> str:
        """Join every artist into a display string."""
        return separator.join(self.all_artists)

    def format_primary(self, separator: str = ", ") -> str:
        """Join the primary artists into a display string."""
        return separator.join(self.primary_artists)


@define(frozen=True, slots=True)
class MatchResult:
    """Outcome of comparing two tracks.

    ``overall_score`` is the weighted blend of title and artist similarity and
    ``match_type`` is the tier it falls into. ``is_match`` is derived from the
    tier so the two can never disagree.
    """

    match_type: MatchType = field(validator=validators.instance_of(MatchType))
    title_similarity: float = 0.0
    artist_similarity: float = 0.0
    overall_score: float = 0.0

    @property
    def is_match(self) -> bool:
        return self.match_type is not MatchType.NONE

    @classmethod
    def no_match(cls) -> "MatchResult":
        """Result for inputs that cannot be compared."""
        return cls(match_type=MatchType.NONE)

    @classmethod
    def exact(cls) -> "MatchResult":
        """Result for a case-insensitive identical title and artist."""
        return cls(
            match_type=MatchType.EXACT,
            title_similarity=1.0,
            artist_similarity=1.0,
            overall_score=1.0,
        )

    def as_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary for logging or storage by callers."""
        return {
            "is_match": self.is_match,
            "match_type": str(self.match_type),
            "title_similarity": round(self.title_similarity, 4),
            "artist_similarity": round(self.artist_similarity, 4),
            "overall_score": round(self.overall_score, 4),
        }


@define(frozen=True, slots=True)
class TrackCandidate:
    """Existing track offered to the matcher by the storage layer."""

    id: int
    title: str = field(validator=validators.instance_of(str))
    artist: str = field(validator=validators.instance_of(str))
    album: str | None = field(default=None)
