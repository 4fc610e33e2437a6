"""
Fuzzy Similarity Features.

Responsibilities:
- Score the similarity of two address tokens on a 0-100 scale.
- Tolerate a leading house number on streets and a trailing qualifier on
  city names ("Saint-Pierre" vs "Saint-Pierre-le-Vieux").

Non-Responsibilities:
- No weighting between features.
- No address parsing.

Invariant:
Identical non-empty tokens score 100; an empty token scores 0.
"""

import math
from enum import Enum

from ..distance import damerau_levenshtein_distance
from ..normalize import standardize_string

TYPO_DISTANCE_THRESHOLD = 3
TYPO_PENALTY_PER_EDIT = 15
CONTAINMENT_MAX_SCORE = 85
CONTAINMENT_MIN_SCORE = 50


class ToleratedEnd(Enum):
    """Which end of the longer token may carry extra characters."""

    PREFIX = "prefix"  # longer starts with shorter, e.g. compound city names
    SUFFIX = "suffix"  # longer ends with shorter, e.g. "9 rue de la paix"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _is_contained(shorter: str, longer: str, tolerated_end: ToleratedEnd) -> bool:
    if tolerated_end is ToleratedEnd.SUFFIX:
        return longer.endswith(shorter)
    return longer.startswith(shorter)


def fuzzy_match_score(x: str, y: str, tolerated_end: ToleratedEnd) -> float:
    s1 = standardize_string(x)
    s2 = standardize_string(y)

    if not s1 or not s2:
        return 0
    if s1 == s2:
        return 100

    distance = damerau_levenshtein_distance(s1, s2)
    max_len = max(len(s1), len(s2))

    if distance <= TYPO_DISTANCE_THRESHOLD:
        return max(0, 100 - distance * TYPO_PENALTY_PER_EDIT)

    shorter, longer = (s1, s2) if len(s1) <= len(s2) else (s2, s1)
    if _is_contained(shorter, longer, tolerated_end):
        extra_ratio = (len(longer) - len(shorter)) / len(longer)
        return max(CONTAINMENT_MIN_SCORE, CONTAINMENT_MAX_SCORE - extra_ratio * 50)

    return max(0, round_half_up(100 - (distance / max_len) * 100))


def street_match_score(street1: str, street2: str) -> float:
    return fuzzy_match_score(street1, street2, ToleratedEnd.SUFFIX)


def city_match_score(city1: str, city2: str) -> float:
    return fuzzy_match_score(city1, city2, ToleratedEnd.PREFIX)
