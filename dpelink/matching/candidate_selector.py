"""
Candidate Selection Criteria.

Responsibilities:
- Derive the registry filter for an address query (zip code, energy class,
  floor-area band, row cap).

Non-Responsibilities:
- No database access; the repository executes the criteria.
- No scoring.

Invariant:
The floor-area band always contains the query's own square footage.
"""

from dataclasses import dataclass
from typing import Tuple

from ..models import AddressQuery, EnergyClass

DEFAULT_SQUARE_FOOTAGE_TOLERANCE = 0.10
DEFAULT_MAX_CANDIDATES = 50


@dataclass(frozen=True)
class CandidateCriteria:
    zip_code: str
    energy_class: EnergyClass
    square_footage_min: float
    square_footage_max: float
    limit: int = DEFAULT_MAX_CANDIDATES


def square_footage_band(
    square_footage: float,
    tolerance: float = DEFAULT_SQUARE_FOOTAGE_TOLERANCE,
) -> Tuple[float, float]:
    """Return ``(min, max)`` floor area within ``tolerance`` of ``square_footage``."""
    return square_footage * (1 - tolerance), square_footage * (1 + tolerance)


def build_candidate_criteria(
    query: AddressQuery,
    tolerance: float = DEFAULT_SQUARE_FOOTAGE_TOLERANCE,
    limit: int = DEFAULT_MAX_CANDIDATES,
) -> CandidateCriteria:
    minimum, maximum = square_footage_band(query.square_footage, tolerance)
    return CandidateCriteria(
        zip_code=query.zip_code,
        energy_class=EnergyClass(query.energy_class),
        square_footage_min=minimum,
        square_footage_max=maximum,
        limit=limit,
    )
