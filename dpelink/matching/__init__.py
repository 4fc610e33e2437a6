from .candidate_selector import CandidateCriteria, build_candidate_criteria, square_footage_band
from .features import ToleratedEnd, city_match_score, fuzzy_match_score, street_match_score
from .resolver import AddressMatchOrchestrator
from .scoring import calculate_match_score, link_score

__all__ = [
    "AddressMatchOrchestrator",
    "CandidateCriteria",
    "ToleratedEnd",
    "build_candidate_criteria",
    "calculate_match_score",
    "city_match_score",
    "fuzzy_match_score",
    "link_score",
    "square_footage_band",
    "street_match_score",
]
