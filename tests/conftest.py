"""
Pytest configuration and shared fixtures.
"""

from typing import Dict, List, Tuple

import pytest

from dpelink.database import get_session_factory, init_database
from dpelink.exceptions import RepositoryError
from dpelink.logger import StructuredLogger
from dpelink.models import (
    AddressQuery,
    DiagnosticCandidate,
    DiagnosticLink,
    DiagnosticLinkInput,
    EnergyClass,
    OpportunityType,
)


class FakeCandidateRepository:
    """Registry double returning a fixed candidate list and recording criteria."""

    def __init__(self, candidates=None):
        self.candidates = list(candidates or [])
        self.calls = []

    def find_candidates(self, criteria):
        self.calls.append(criteria)
        return list(self.candidates)


class FailingCandidateRepository:
    def find_candidates(self, criteria):
        raise RepositoryError("registry unavailable")


class InMemoryLinkStore:
    """Link store double with the same insert-ignore semantics as the SQL store."""

    def __init__(self, opportunity_type: OpportunityType = OpportunityType.AUCTION):
        self.opportunity_type = opportunity_type
        self.rows: Dict[Tuple[str, str], DiagnosticLink] = {}
        self.save_calls: List[List[DiagnosticLinkInput]] = []
        self.get_calls: List[str] = []

    def save_links(self, links):
        self.save_calls.append(list(links))
        for link in links:
            key = (link.opportunity_id, link.energy_diagnostic_id)
            if key in self.rows:
                continue
            self.rows[key] = DiagnosticLink(
                id=len(self.rows) + 1,
                opportunity_id=link.opportunity_id,
                opportunity_type=self.opportunity_type,
                energy_diagnostic_id=link.energy_diagnostic_id,
                match_score=link.match_score,
            )

    def get_links(self, opportunity_id):
        self.get_calls.append(opportunity_id)
        links = [l for l in self.rows.values() if l.opportunity_id == opportunity_id]
        return sorted(links, key=lambda l: (-l.match_score, l.id))


class FailingLinkStore(InMemoryLinkStore):
    def save_links(self, links):
        raise RepositoryError("link table locked")


@pytest.fixture
def make_candidate():
    """Factory for registry candidates; defaults mirror the Paris query."""

    def _make(
        id: str = "diag-1",
        address="9 Rue de la Paix 75001 Paris",
        zip_code: str = "75001",
        energy_class: EnergyClass = EnergyClass.F,
        square_footage=50,
        external_id=None,
    ) -> DiagnosticCandidate:
        return DiagnosticCandidate(
            id=id,
            address=address,
            zip_code=zip_code,
            energy_class=energy_class,
            square_footage=square_footage,
            external_id=external_id or f"ext-{id}",
        )

    return _make


@pytest.fixture
def paris_query() -> AddressQuery:
    """Query for a 50 m2, class F flat on rue de la Paix."""
    return AddressQuery(
        zip_code="75001",
        energy_class=EnergyClass.F,
        square_footage=50,
        address="9 Rue de la Paix 75001 Paris",
    )


@pytest.fixture
def bare_query() -> AddressQuery:
    """Query with no address at all."""
    return AddressQuery(zip_code="75001", energy_class=EnergyClass.F, square_footage=50)


@pytest.fixture
def quiet_logger(tmp_path) -> StructuredLogger:
    return StructuredLogger(name="dpelink-test", level="DEBUG", enable_console=False)


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "dpelink.db"
    init_database(path)
    return path


@pytest.fixture
def session_factory(db_path):
    return get_session_factory(db_path)
