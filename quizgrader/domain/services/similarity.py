"""
Lexical answer similarity.

Answers are canonicalized with ``normalize`` and compared with a
Levenshtein ratio on a 0-100 scale, then mapped to a 0-10 integer score.
Ties on the 0-10 scale round half away from zero, so a ratio of 75
scores 8 and a ratio of 25 scores 3.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal
from fractions import Fraction

from rapidfuzz.distance import Levenshtein

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")

MAX_SCORE = 10


def normalize(text: str) -> str:
    cleaned = (text or "").strip().lower()
    cleaned = _NON_WORD.sub("", cleaned)
    # stripping punctuation can expose new leading/trailing whitespace
    return _WHITESPACE.sub(" ", cleaned).strip()


def _ratio(left: str, right: str) -> Fraction:
    longest = max(len(left), len(right))
    if not longest:
        return Fraction(100)
    return 100 * (1 - Fraction(Levenshtein.distance(left, right), longest))


def similarity_ratio(a: str, b: str) -> float:
    """Levenshtein ratio of the normalized strings, 0-100 (100 for two empty strings)."""
    return float(_ratio(normalize(a), normalize(b)))


def score(a: str, b: str) -> int:
    # exact arithmetic so ratios such as 45 are ties, not 44.999...
    ratio = _ratio(normalize(a), normalize(b))
    scaled = Decimal(ratio.numerator) / Decimal(ratio.denominator) / 10
    return int(scaled.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
