"""
Energy Diagnostics Repository.

Responsibilities:
- Fetch registry candidates matching zip code, energy class and floor-area band.
- Load diagnostics into the registry.

Non-Responsibilities:
- No scoring.
- No link persistence.

Invariant:
Every returned candidate satisfies the criteria it was fetched with.
"""

from typing import Iterable, List, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ..database import EnergyDiagnostic
from ..exceptions import RepositoryError
from ..matching.candidate_selector import CandidateCriteria
from ..models import DiagnosticCandidate, EnergyClass
from .base import insert_ignore, retry_transient, session_scope


class CandidateRepository(Protocol):
    def find_candidates(self, criteria: CandidateCriteria) -> List[DiagnosticCandidate]:
        ...


def to_candidate(row: EnergyDiagnostic) -> DiagnosticCandidate:
    return DiagnosticCandidate(
        id=row.id,
        address=row.address,
        zip_code=row.zip_code,
        energy_class=EnergyClass(row.energy_class),
        square_footage=row.square_footage,
        external_id=row.external_id,
    )


class SqlDiagnosticRepository:
    """Candidate registry backed by the energy_diagnostics table."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def find_candidates(self, criteria: CandidateCriteria) -> List[DiagnosticCandidate]:
        try:
            return self._find_candidates(criteria)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Candidate lookup failed: {e}") from e

    @retry_transient
    def _find_candidates(self, criteria: CandidateCriteria) -> List[DiagnosticCandidate]:
        with session_scope(self.session_factory) as session:
            rows = (
                session.query(EnergyDiagnostic)
                .filter(
                    EnergyDiagnostic.zip_code == criteria.zip_code,
                    EnergyDiagnostic.energy_class == EnergyClass(criteria.energy_class).value,
                    EnergyDiagnostic.square_footage >= criteria.square_footage_min,
                    EnergyDiagnostic.square_footage <= criteria.square_footage_max,
                )
                .order_by(EnergyDiagnostic.id)
                .limit(criteria.limit)
                .all()
            )
            return [to_candidate(row) for row in rows]

    def find_by_id(self, diagnostic_id: str) -> Optional[DiagnosticCandidate]:
        try:
            return self._find_by_id(diagnostic_id)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Diagnostic lookup failed: {e}") from e

    @retry_transient
    def _find_by_id(self, diagnostic_id: str) -> Optional[DiagnosticCandidate]:
        with session_scope(self.session_factory) as session:
            row = session.get(EnergyDiagnostic, diagnostic_id)
            return to_candidate(row) if row is not None else None

    def add_many(self, candidates: Iterable[DiagnosticCandidate]) -> int:
        """
        Insert diagnostics, skipping any whose external id is already stored.

        Returns:
            Number of new rows
        """
        rows = [
            {
                "id": c.id,
                "external_id": c.external_id,
                "address": c.address,
                "zip_code": c.zip_code,
                "energy_class": EnergyClass(c.energy_class).value,
                "square_footage": c.square_footage,
            }
            for c in candidates
        ]
        try:
            return self._add_many(rows)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Diagnostic import failed: {e}") from e

    @retry_transient
    def _add_many(self, rows) -> int:
        with session_scope(self.session_factory) as session:
            return insert_ignore(session, EnergyDiagnostic, rows, ["external_id"])
