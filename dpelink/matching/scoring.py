"""
Scoring Logic for Address Matching.

Responsibilities:
- Compute a deterministic 0-100 match score between an address query and a
  registry candidate from floor area, street and city similarity.

Non-Responsibilities:
- No database access.
- No candidate selection.
- No ranking or top-K decisions.

Invariant:
Given identical inputs, this module must always return the same score.
A side with no usable signal (missing area, no zip code in the address)
never costs points.
"""

from ..models import AddressQuery, DiagnosticCandidate
from ..normalize import split_address
from .features import city_match_score, round_half_up, street_match_score

BASE_SCORE = 100.0
SQUARE_FOOTAGE_WEIGHT = 20
STREET_WEIGHT = 0.35
CITY_WEIGHT = 0.35


def link_score(match_score: float) -> int:
    """Integer score stored on a link; halves round up."""
    return round_half_up(match_score)


def calculate_match_score(candidate: DiagnosticCandidate, query: AddressQuery) -> float:
    score = BASE_SCORE

    if query.square_footage and candidate.square_footage:
        difference = abs(candidate.square_footage - query.square_footage)
        score -= (difference / query.square_footage) * SQUARE_FOOTAGE_WEIGHT

    query_street, query_city = split_address(query.address, query.zip_code)
    candidate_street, candidate_city = split_address(candidate.address, candidate.zip_code)

    if query_street and candidate_street:
        score -= (100 - street_match_score(query_street, candidate_street)) * STREET_WEIGHT

    if query_city and candidate_city:
        score -= (100 - city_match_score(query_city, candidate_city)) * CITY_WEIGHT

    return max(0.0, score)
