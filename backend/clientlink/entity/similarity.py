"""Edit-distance similarity between company names.

Levenshtein distance with unit costs, scaled to [0.0, 1.0] by the longer
string's length. Both come from rapidfuzz.
"""

from __future__ import annotations

from rapidfuzz.distance import Levenshtein


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character edits turning a into b."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Return 1 - distance / max(len(a), len(b)); two empty strings score 1.0."""
    return Levenshtein.normalized_similarity(a, b)
