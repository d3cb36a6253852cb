"""Composite string similarity for normalized titles and artists.

Blends three measures that fail in different ways: edit distance catches
typos, character bigrams tolerate reordered words, and the longest common
subsequence tolerates inserted words.
"""

from rapidfuzz.distance import Levenshtein, LCSseq

SIMILARITY_WEIGHTS = {
    "levenshtein": 0.4,
    "bigram_jaccard": 0.3,
    "lcs": 0.3,
}

NGRAM_SIZE = 2


def levenshtein_similarity(s1: str, s2: str) -> float:
    """1 - edit distance / length of the longer string (unit costs)."""
    max_len = max(len(s1), len(s2))
    if max_len == 0:
        return 1.0
    return 1.0 - Levenshtein.distance(s1, s2) / max_len


def ngrams(value: str, n: int = NGRAM_SIZE) -> set[str]:
    """Character n-grams; a string shorter than n is its own single gram."""
    if len(value) < n:
        return {value}
    return {value[i : i + n] for i in range(len(value) - n + 1)}


def bigram_jaccard(s1: str, s2: str) -> float:
    """Jaccard index of the two strings' character bigram sets."""
    grams1 = ngrams(s1)
    grams2 = ngrams(s2)
    if not grams1 and not grams2:
        return 1.0
    if not grams1 or not grams2:
        return 0.0
    return len(grams1 & grams2) / len(grams1 | grams2)


def lcs_ratio(s1: str, s2: str) -> float:
    """Longest common subsequence length over the longer string's length."""
    max_len = max(len(s1), len(s2))
    if max_len == 0:
        return 1.0
    return LCSseq.similarity(s1, s2) / max_len


def calculate_similarity(s1: str, s2: str) -> float:
    """Similarity of two strings in [0, 1].

    Identical strings score 1.0 and an empty string against a non-empty one
    scores 0.0. Symmetric in its arguments.
    """
    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0

    return (
        levenshtein_similarity(s1, s2) * SIMILARITY_WEIGHTS["levenshtein"]
        + bigram_jaccard(s1, s2) * SIMILARITY_WEIGHTS["bigram_jaccard"]
        + lcs_ratio(s1, s2) * SIMILARITY_WEIGHTS["lcs"]
    )
