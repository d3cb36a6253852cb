"""Title and artist normalization for string comparison.

Titles pass through ordered rule tables, each applied in full before the next:

1. junk suffixes describing the media, not the music ("Official Video")
2. explicit/clean tags
3. version suffixes ("Live", "Remix", "2009 Remaster"), merge mode only
4. featuring credits
5. diacritic folding
6. punctuation, whitespace and case folding

The sequence repeats on its own output until it stops changing.

Strict matching keeps step 3 so "Song (Live)" stays distinct from "Song".
"""

from collections.abc import Callable
import re
import unicodedata

# (pattern, replacement) pairs; order is significant.
Rule = tuple[re.Pattern[str], str]

_I = re.IGNORECASE

_MEDIA = r"(?:lyric\s+video|lyrics?|video|audio|visuali[sz]er|hq|hd|4k|uhd|8k)"
_VERSION = (
    r"(?:live|acoustic|demo|remix|mix|cover|instrumental|radio\s+edit|extended"
    r"|original|unplugged)"
)
_DASH_VERSION = (
    r"(?:live|acoustic|demo|remix|mix|cover|instrumental|radio\s+edit|unplugged"
    r"|remaster(?:ed)?)"
)

JUNK_SUFFIX_RULES: tuple[Rule, ...] = (
    (re.compile(rf"\s*[(\[]\s*(?:official\s+)?(?:music\s+)?{_MEDIA}\s*[)\]]", _I), ""),
    (re.compile(rf"\s+-\s+(?:official\s+)?(?:music\s+)?{_MEDIA}[\W_]*$", _I), ""),
    (re.compile(rf"[\W_]+official\s+(?:music\s+)?{_MEDIA}[\W_]*$", _I), ""),
    (re.compile(r"\s*[(\[]\s*official\s*[)\]]", _I), ""),
    (re.compile(r"\s*[(\[]\s*with\s+lyrics\s*[)\]]", _I), ""),
    (re.compile(r"\s*[(\[]\s*(?:explicit|clean|censored)\s+version\s*[)\]]", _I), ""),
    (
        re.compile(
            r"\s*[(\[]\s*(?:from|off)\s+(?:the\s+)?(?:album|ep|single)\b[^)\]]*[)\]]",
            _I,
        ),
        "",
    ),
)

EXPLICIT_TAG_RULES: tuple[Rule, ...] = (
    (re.compile(r"\s*[(\[]\s*(?:explicit|clean|censored)\s*[)\]]", _I), ""),
)

VERSION_SUFFIX_RULES: tuple[Rule, ...] = (
    (
        re.compile(
            rf"\s*[(\[]\s*{_VERSION}(?:\s+(?:version|edit|mix))?\s*[)\]]", _I
        ),
        "",
    ),
    (re.compile(r"\s*[(\[][^)\]]*\b(?:remix|mix|edit|version)\s*[)\]]", _I), ""),
    (re.compile(rf"\s+-\s+{_DASH_VERSION}\b.*$", _I), ""),
    (re.compile(r"\s+-\s+[^-]*\b(?:remix|mix|edit)\s*$", _I), ""),
    (re.compile(r"\s*\b\d{4}\s*(?:remaster(?:ed)?|version)\b.*$", _I), ""),
    (
        re.compile(
            r"\s*[(\[]\s*(?:digitally\s+)?remaster(?:ed)?(?:\s+\d{4})?\s*[)\]]", _I
        ),
        "",
    ),
    (
        re.compile(
            r"\s*[(\[]\s*(?:mtv|bbc|live\s+at|live\s+from|recorded\s+at)\b[^)\]]*[)\]]",
            _I,
        ),
        "",
    ),
    (
        re.compile(
            r"\s*[(\[][^)\]]*\b(?:sessions?|performance|concert|tour)\s*[)\]]", _I
        ),
        "",
    ),
)

FEATURE_TAG_RULES: tuple[Rule, ...] = (
    (
        re.compile(
            r"\s*[(\[]\s*(?:feat\b\.?|ft\b\.?|featuring\b|with\b|w/)[^)\]]*[)\]]", _I
        ),
        "",
    ),
    (re.compile(r"[\W_]+(?:feat|ft|featuring)(?![^\W_])[\W_]*[^\W_].*$", _I), ""),
)

# Titles keep "&" and "x" ("Jack & Diane"); only artists fold them.
ARTIST_SEPARATOR_RULES: tuple[Rule, ...] = (
    (re.compile(r"\s+with\s+", _I), " "),
    (re.compile(r"\s*&\s*"), " "),
    (re.compile(r"\s+x\s+", _I), " "),
)

_PUNCTUATION = re.compile(r"[^\w\s]|_")
_WHITESPACE = re.compile(r"\s+")


def apply_rules(value: str, rules: tuple[Rule, ...]) -> str:
    """Apply every rule of a table in order."""
    for pattern, replacement in rules:
        value = pattern.sub(replacement, value)
    return value


def fold_diacritics(value: str) -> str:
    """Decompose to NFD and drop combining marks ("Beyoncé" -> "Beyonce")."""
    decomposed = unicodedata.normalize("NFD", value)
    return "".join(ch for ch in decomposed if not unicodedata.category(ch).startswith("M"))


def fold_punctuation(value: str) -> str:
    """Replace punctuation with spaces, collapse whitespace and lowercase."""
    value = _PUNCTUATION.sub(" ", value)
    return _WHITESPACE.sub(" ", value).strip().lower()


def _until_stable(value: str, step: Callable[[str], str]) -> str:
    # Each step after the first only shortens a folded string, so this ends.
    while True:
        stepped = step(value)
        if stepped == value:
            return value
        value = stepped


def normalize_title(title: str, strict_matching: bool = False) -> str:
    """Normalize a track title for comparison.

    The rule tables are re-applied to the folded result until nothing
    changes, so markers hidden behind punctuation ("Song ft.Drake") are
    stripped and normalizing twice is a no-op.

    Args:
        title: Raw track title
        strict_matching: Keep version suffixes so "Live" or "Remix" cuts stay
            distinct from the original recording

    Returns:
        Lowercase, punctuation-free title
    """

    def step(value: str) -> str:
        value = apply_rules(value, JUNK_SUFFIX_RULES)
        value = apply_rules(value, EXPLICIT_TAG_RULES)
        if not strict_matching:
            value = apply_rules(value, VERSION_SUFFIX_RULES)
        value = apply_rules(value, FEATURE_TAG_RULES)
        return fold_punctuation(fold_diacritics(value))

    return _until_stable(title.strip(), step)


def _artist_step(value: str) -> str:
    value = apply_rules(value, FEATURE_TAG_RULES)
    value = apply_rules(value, ARTIST_SEPARATOR_RULES)
    return fold_punctuation(fold_diacritics(value))


def normalize_artist(artist: str) -> str:
    """Flatten an artist string into one comparison string.

    Featured credits are dropped and multi-artist separators become spaces,
    so "Drake & Future feat. Young Thug" compares as "drake future".
    """
    normalized = artist.strip()
    if not normalized:
        return ""
    return _until_stable(normalized, _artist_step)
