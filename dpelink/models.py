"""
Plain data types passed between the matching engine and its collaborators.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .exceptions import InvalidQueryError, UnsupportedOpportunityTypeError
from .schema import EnergyClass, validate_query


class OpportunityType(str, Enum):
    """Kinds of opportunity that can be linked to energy diagnostics."""

    AUCTION = "auction"
    LISTING = "listing"

    @classmethod
    def parse(cls, value: Any) -> "OpportunityType":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedOpportunityTypeError(value) from None


@dataclass(frozen=True)
class AddressQuery:
    """Caller-supplied address fragment to reconcile against the registry."""

    zip_code: str
    energy_class: EnergyClass
    square_footage: float
    address: Optional[str] = None
    city: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AddressQuery":
        """
        Build a query from loosely typed input (JSON, CLI arguments).

        Raises:
            InvalidQueryError: If any field fails validation
        """
        errors = validate_query(data)
        if errors:
            raise InvalidQueryError(errors)
        return cls(
            zip_code=data["zip_code"],
            energy_class=EnergyClass(data["energy_class"].upper()),
            square_footage=data["square_footage"],
            address=data.get("address") or None,
            city=data.get("city") or None,
        )


@dataclass(frozen=True)
class DiagnosticCandidate:
    """Energy diagnostic record as returned by the registry."""

    id: str
    address: Optional[str]
    zip_code: str
    energy_class: EnergyClass
    square_footage: Optional[float]
    external_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "address": self.address,
            "zip_code": self.zip_code,
            "energy_class": EnergyClass(self.energy_class).value,
            "square_footage": self.square_footage,
            "external_id": self.external_id,
        }


@dataclass(frozen=True)
class MatchResult:
    """A scored candidate. Computed per search, never persisted as is."""

    candidate: DiagnosticCandidate
    match_score: float
    energy_diagnostic_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.candidate.to_dict(),
            "match_score": self.match_score,
            "energy_diagnostic_id": self.energy_diagnostic_id,
        }


@dataclass(frozen=True)
class DiagnosticLinkInput:
    opportunity_id: str
    energy_diagnostic_id: str
    match_score: int


@dataclass(frozen=True)
class DiagnosticLink:
    """Persisted association between an opportunity and a diagnostic."""

    id: int
    opportunity_id: str
    opportunity_type: OpportunityType
    energy_diagnostic_id: str
    match_score: int
    diagnostic: Optional[DiagnosticCandidate] = field(default=None, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "opportunity_id": self.opportunity_id,
            "opportunity_type": self.opportunity_type.value,
            "energy_diagnostic_id": self.energy_diagnostic_id,
            "match_score": self.match_score,
            "diagnostic": self.diagnostic.to_dict() if self.diagnostic else None,
        }
