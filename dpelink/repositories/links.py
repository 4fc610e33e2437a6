"""
Diagnostic Links Repository.

Responsibilities:
- Persist opportunity-to-diagnostic links, one table per opportunity type.
- Read links back joined with their diagnostic summary.

Non-Responsibilities:
- No scoring.
- No top-K selection.

Invariant:
Saving an existing (opportunity, diagnostic) pair is a no-op; stored scores
are never updated in place and links are never deleted here.
"""

from typing import Dict, List, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ..database import AuctionDiagnosticLink, EnergyDiagnostic, ListingDiagnosticLink
from ..exceptions import RepositoryError, UnsupportedOpportunityTypeError
from ..models import DiagnosticLink, DiagnosticLinkInput, OpportunityType
from .base import insert_ignore, retry_transient, session_scope
from .diagnostics import to_candidate

# Link model and the name of its opportunity foreign key column.
LINK_TABLES = {
    OpportunityType.AUCTION: (AuctionDiagnosticLink, "auction_id"),
    OpportunityType.LISTING: (ListingDiagnosticLink, "listing_id"),
}


class LinkStore(Protocol):
    def save_links(self, links: List[DiagnosticLinkInput]) -> None:
        ...

    def get_links(self, opportunity_id: str) -> List[DiagnosticLink]:
        ...


class SqlLinkStore:
    """Link store bound to the table of a single opportunity type."""

    def __init__(self, session_factory: sessionmaker, opportunity_type: OpportunityType):
        opportunity_type = OpportunityType.parse(opportunity_type)
        if opportunity_type not in LINK_TABLES:
            raise UnsupportedOpportunityTypeError(opportunity_type)
        self.session_factory = session_factory
        self.opportunity_type = opportunity_type
        self.model, self.opportunity_column = LINK_TABLES[opportunity_type]

    def save_links(self, links: List[DiagnosticLinkInput]) -> None:
        if not links:
            return
        rows = [
            {
                self.opportunity_column: link.opportunity_id,
                "energy_diagnostic_id": link.energy_diagnostic_id,
                "match_score": link.match_score,
            }
            for link in links
        ]
        try:
            self._save(rows)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Saving {self.opportunity_type.value} links failed: {e}") from e

    @retry_transient
    def _save(self, rows) -> int:
        with session_scope(self.session_factory) as session:
            return insert_ignore(
                session,
                self.model,
                rows,
                [self.opportunity_column, "energy_diagnostic_id"],
            )

    def get_links(self, opportunity_id: str) -> List[DiagnosticLink]:
        try:
            return self._get(opportunity_id)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Reading {self.opportunity_type.value} links failed: {e}") from e

    @retry_transient
    def _get(self, opportunity_id: str) -> List[DiagnosticLink]:
        opportunity_attr = getattr(self.model, self.opportunity_column)
        with session_scope(self.session_factory) as session:
            rows = (
                session.query(self.model, EnergyDiagnostic)
                .join(EnergyDiagnostic, self.model.energy_diagnostic_id == EnergyDiagnostic.id)
                .filter(opportunity_attr == opportunity_id)
                .order_by(self.model.match_score.desc(), self.model.id)
                .all()
            )
            return [
                DiagnosticLink(
                    id=link.id,
                    opportunity_id=getattr(link, self.opportunity_column),
                    opportunity_type=self.opportunity_type,
                    energy_diagnostic_id=link.energy_diagnostic_id,
                    match_score=link.match_score,
                    diagnostic=to_candidate(diagnostic),
                )
                for link, diagnostic in rows
            ]


def build_link_stores(session_factory: sessionmaker) -> Dict[OpportunityType, SqlLinkStore]:
    """One store per opportunity type, keyed for AddressMatchOrchestrator."""
    return {
        opportunity_type: SqlLinkStore(session_factory, opportunity_type)
        for opportunity_type in LINK_TABLES
    }
