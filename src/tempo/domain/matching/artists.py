"""Parsing and comparison of raw artist strings.

Metadata producers disagree on how several artists are written:

- "Artist1, Artist2" / "Artist1 | Artist2" / "Artist1 / Artist2"
- "Artist1 feat. Artist2", "Artist1 ft. Artist2", "Artist1 (with Artist2)"
- "Artist1 x Artist2", "Artist1 vs. Artist2", "Artist1 + Artist2"
- "Artist1 & Artist2", except for band names such as "Simon & Garfunkel"

The functions here split such strings into primary and featured artists and
decide whether two strings name the same artist. Everything is pure: the
pattern tables are immutable and evaluated in order, first match wins.
"""

import re

from tempo.config import get_logger

from .types import UNKNOWN_ARTIST, ParsedArtists

logger = get_logger(__name__)

# Evaluated in order; the first pattern found anywhere in the string decides
# where the featured part begins.
FEATURING_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\s+feat\.?\s+", re.IGNORECASE),
    re.compile(r"\s+ft\.?\s+", re.IGNORECASE),
    re.compile(r"\s+featuring\s+", re.IGNORECASE),
    re.compile(r"\s+with\s+", re.IGNORECASE),
    re.compile(r"\(feat\.?\s*", re.IGNORECASE),
    re.compile(r"\(ft\.?\s*", re.IGNORECASE),
    re.compile(r"\(featuring\s*", re.IGNORECASE),
    re.compile(r"\(with\s*", re.IGNORECASE),
    re.compile(r"\[feat\.?\s*", re.IGNORECASE),
    re.compile(r"\[ft\.?\s*", re.IGNORECASE),
)

# Ampersand is deliberately absent, see _split_by_ampersand.
COLLABORATION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\s*,\s*"),
    re.compile(r"\s*\|\s*"),
    re.compile(r"\s+and\s+", re.IGNORECASE),
    re.compile(r"\s+x\s+", re.IGNORECASE),
    re.compile(r"\s*/\s*"),
    re.compile(r"\s+vs\.?\s+", re.IGNORECASE),
    re.compile(r"\s*\+\s*"),
)

# Shapes where "&" belongs to a band name ("Derek & The Dominos").
# Known limitation: a collaboration written as "A & The B" is kept whole too.
AMPERSAND_BAND_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\s*&\s*the\s+", re.IGNORECASE),
    re.compile(r"\s*&\s*company\b", re.IGNORECASE),
    re.compile(r"\s*&\s*friends\b", re.IGNORECASE),
    re.compile(r"\s*&\s*associates\b", re.IGNORECASE),
)

_KNOWN_AMPERSAND_BANDS_RAW = (
    "dead & company",
    "derek & the dominos",
    "belle & sebastian",
    "iron & wine",
    "simon & garfunkel",
    "hall & oates",
    "brooks & dunn",
    "big & rich",
    "the mamas & the papas",
    "peter paul & mary",
    "crosby stills nash & young",
    "emerson lake & palmer",
    "blood sweat & tears",
    "earth wind & fire",
    "kool & the gang",
    "rob base & dj ez rock",
    "eric b & rakim",
    "salt n pepa",
    "tom petty & the heartbreakers",
    "bob seger & the silver bullet band",
    "bruce springsteen & the e street band",
    "hootie & the blowfish",
    "sly & the family stone",
    "echo & the bunnymen",
    "florence & the machine",
    "marina & the diamonds",
    "mumford & sons",
    "angus & julia stone",
    "chase & status",
    "above & beyond",
    "kid cudi & eminem",
    "lil nas x & billy ray cyrus",
)

_AMPERSAND_SPLIT = re.compile(r"\s*&\s*")
_WHITESPACE = re.compile(r"\s+")
_TRAILING_BRACKETS = re.compile(r"[)\]]+$")
_LEADING_BRACKETS = re.compile(r"^[(&\[]+")
_FEATURED_CLOSER = re.compile(r"[)\]]$")
_NON_WORD = re.compile(r"[^\w\s]|_")

UNKNOWN_ARTIST_MARKERS = frozenset({
    "unknown artist",
    "unknown",
    "<unknown>",
    "various artists",
})


# =============================================================================
# NORMALIZATION
# =============================================================================


def normalize_for_search(value: str) -> str:
    """Fold an artist string into a lowercase, punctuation-free search key.

    A literal ``$`` reads as ``s`` so stylized names fold together
    ("Ke$ha" -> "kesha").
    """
    folded = value.lower().replace("$", "s")
    folded = _NON_WORD.sub("", folded)
    return _WHITESPACE.sub(" ", folded).strip()


def normalize_artist_name(name: str) -> str:
    """Clean a single artist name left over from splitting."""
    cleaned = _WHITESPACE.sub(" ", name.strip())
    cleaned = _TRAILING_BRACKETS.sub("", cleaned)
    cleaned = _LEADING_BRACKETS.sub("", cleaned)
    return cleaned.strip()


# Stored in search-key form so lookups compare like with like.
KNOWN_AMPERSAND_BANDS = frozenset(
    normalize_for_search(band) for band in _KNOWN_AMPERSAND_BANDS_RAW
)


def is_unknown_artist(artist: str) -> bool:
    """Check whether a string is a placeholder rather than a real artist."""
    normalized = artist.strip().lower()
    return not normalized or normalized in UNKNOWN_ARTIST_MARKERS


# =============================================================================
# SPLITTING
# =============================================================================


def _is_known_band(fragment: str) -> bool:
    normalized = normalize_for_search(fragment)
    return any(
        band in normalized or normalized in band for band in KNOWN_AMPERSAND_BANDS
    )


def _split_by_ampersand(fragment: str) -> list[str]:
    """Split on "&" unless the fragment looks like a band name."""
    if "&" not in fragment:
        return [fragment]

    if _is_known_band(fragment):
        logger.debug("Preserving known band name: '{}'", fragment)
        return [fragment]

    if any(pattern.search(fragment) for pattern in AMPERSAND_BAND_PATTERNS):
        logger.debug("Preserving band name (pattern match): '{}'", fragment)
        return [fragment]

    parts = [part.strip() for part in _AMPERSAND_SPLIT.split(fragment)]
    logger.debug("Split by '&': '{}' -> {}", fragment, parts)
    return parts


def _split_artists(text: str) -> list[str]:
    """Split one side of an artist string into individual names."""
    parts = [text]
    for pattern in COLLABORATION_PATTERNS:
        parts = [piece.strip() for part in parts for piece in pattern.split(part)]

    parts = [piece for part in parts for piece in _split_by_ampersand(part)]

    result: list[str] = []
    for part in parts:
        name = normalize_artist_name(part)
        if name and name != UNKNOWN_ARTIST and name not in result:
            result.append(name)

    if not result:
        stripped = text.strip()
        return [stripped] if stripped else []

    if len(result) > 1:
        logger.debug("Final split: '{}' -> {}", text, result)
    return result


def _separate_featured(cleaned: str) -> tuple[str, str]:
    """Cut a string at its featuring marker into (main, featured)."""
    for pattern in FEATURING_PATTERNS:
        match = pattern.search(cleaned)
        if match is None:
            continue
        main_part = cleaned[: match.start()].strip()
        featured_part = _FEATURED_CLOSER.sub("", cleaned[match.end() :]).strip()
        return main_part, featured_part
    return cleaned, ""


def parse_artists(raw: str) -> ParsedArtists:
    """Parse a raw artist string into primary, featured and combined lists.

    Args:
        raw: Artist string as delivered by a metadata source

    Returns:
        ParsedArtists with order-preserving, deduplicated artist lists

    Example:
        >>> parse_artists("Post Malone & Swae Lee feat. Nicki Minaj").all_artists
        ['Post Malone', 'Swae Lee', 'Nicki Minaj']
    """
    if not raw.strip():
        return ParsedArtists(
            primary_artists=[UNKNOWN_ARTIST],
            featured_artists=[],
            all_artists=[UNKNOWN_ARTIST],
            original=raw,
        )

    main_part, featured_part = _separate_featured(raw.strip())

    primary_artists = _split_artists(main_part) or [UNKNOWN_ARTIST]
    featured_artists = _split_artists(featured_part) if featured_part else []

    all_artists: list[str] = []
    for name in [*primary_artists, *featured_artists]:
        if name and name != UNKNOWN_ARTIST and name not in all_artists:
            all_artists.append(name)
    if not all_artists:
        all_artists = [raw.strip()]

    return ParsedArtists(
        primary_artists=primary_artists,
        featured_artists=featured_artists,
        all_artists=all_artists,
        original=raw,
    )


def get_primary_artist(raw: str) -> str:
    """Primary artist of a raw string, for single-artist lookups."""
    return parse_artists(raw).primary_artist


def get_all_artists(raw: str) -> list[str]:
    """Every artist named in a raw string."""
    return parse_artists(raw).all_artists


# =============================================================================
# COMPARISON
# =============================================================================


def _word_jaccard(norm1: str, norm2: str) -> float:
    words1 = set(norm1.split(" "))
    words2 = set(norm2.split(" "))
    union = words1 | words2
    if not union:
        return 0.0
    return len(words1 & words2) / len(union)


def is_same_artist(artist1: str, artist2: str) -> bool:
    """Check whether two artist strings likely refer to the same artist.

    Matches on equal search keys, containment ("Weeknd" in "The Weeknd"),
    equal primary artists, or at least half of the words in common.
    """
    norm1 = normalize_for_search(artist1)
    norm2 = normalize_for_search(artist2)

    if norm1 == norm2:
        return True
    # An empty key ("!!!") would be contained in every name.
    if not norm1 or not norm2:
        return False
    if norm1 in norm2 or norm2 in norm1:
        return True

    primary1 = normalize_for_search(get_primary_artist(artist1))
    primary2 = normalize_for_search(get_primary_artist(artist2))
    if primary1 == primary2:
        return True

    return _word_jaccard(norm1, norm2) >= 0.5


def has_any_matching_artist(artists1: str, artists2: str) -> bool:
    """Check whether any artist of one string matches any artist of the other.

    An unknown or empty artist on either side acts as a wildcard: metadata
    often arrives in stages and the title carries the decision then.
    """
    if is_unknown_artist(artists1) or is_unknown_artist(artists2):
        return True

    list1 = get_all_artists(artists1)
    list2 = get_all_artists(artists2)
    return any(is_same_artist(a1, a2) for a1 in list1 for a2 in list2)


# =============================================================================
# TITLE HELPERS
# =============================================================================

_TITLE_FEATURE_GROUP = re.compile(
    r"\s*[\[(]\s*(?:feat\.?|ft\.?|featuring|with)\s+[^)\]]+[)\]]", re.IGNORECASE
)
_TITLE_FEATURE_TRAILING = re.compile(r"\s+(?:feat|ft)\b\.?\s*\S.*$", re.IGNORECASE)
_TITLE_EDITION_GROUP = re.compile(
    r"\s*[\[(]\s*(?:remaster(?:ed)?|deluxe|radio edit|single version|album version)"
    r"\s*[)\]]",
    re.IGNORECASE,
)
_TITLE_FEATURED_TAIL = re.compile(r"[)\]]+.*$")

# A bare " with " inside a title is usually lyrics ("Dancing with Myself").
_TITLE_FEATURING_PATTERNS = FEATURING_PATTERNS[:3] + FEATURING_PATTERNS[4:]


def clean_track_title(title: str) -> str:
    """Strip embedded featuring credits and edition tags, keeping case.

    Used for queries to metadata providers, which match better on the bare
    title than on "Song (feat. X) [Remastered]".
    """
    cleaned = _TITLE_FEATURE_GROUP.sub("", title)
    cleaned = _TITLE_FEATURE_TRAILING.sub("", cleaned)
    cleaned = _TITLE_EDITION_GROUP.sub("", cleaned)
    return cleaned.strip()


def extract_artists_from_title(title: str) -> list[str]:
    """Featured artists credited inside a title, e.g. "Song (feat. X & Y)"."""
    for pattern in _TITLE_FEATURING_PATTERNS:
        match = pattern.search(title)
        if match is None:
            continue
        after = _TITLE_FEATURED_TAIL.sub("", title[match.end() :]).strip()
        if after:
            return _split_artists(after)
    return []
