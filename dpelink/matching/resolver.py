"""
Address Match Orchestrator.

Responsibilities:
- Fetch registry candidates for an address query.
- Invoke scoring logic and rank candidates.
- Persist the top matches as links for an opportunity.

Non-Responsibilities:
- No SQL; the candidate repository and link stores are injected.
- No feature computation.
- No retries: failures from collaborators propagate unchanged.

Invariant:
At most ``max_links`` links are stored per opportunity, and the orchestrator
keeps no state between calls. Stored links are read before saving to apply
that cap; pairs already stored are skipped so they take no capacity. Pair
uniqueness itself comes from the store's insert-ignore.
"""

from typing import Any, List, Mapping, Optional

from ..config import Settings
from ..exceptions import RepositoryError, UnsupportedOpportunityTypeError
from ..logger import StructuredLogger, get_logger
from ..models import AddressQuery, DiagnosticLink, DiagnosticLinkInput, MatchResult, OpportunityType
from .candidate_selector import build_candidate_criteria
from .scoring import calculate_match_score, link_score


class AddressMatchOrchestrator:
    """
    Ranks energy diagnostics against an address query and links the best
    ones to auctions or listings.

    Args:
        candidate_repository: Object exposing ``find_candidates(criteria)``
        link_stores: Store per opportunity type, each exposing
            ``save_links(links)`` and ``get_links(opportunity_id)``
        settings: Limits and tolerance; defaults to ``Settings()``
        logger: Defaults to the global structured logger
    """

    def __init__(
        self,
        candidate_repository,
        link_stores: Optional[Mapping[OpportunityType, Any]] = None,
        settings: Optional[Settings] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        self.candidate_repository = candidate_repository
        self.link_stores = dict(link_stores or {})
        self.settings = settings or Settings()
        self.logger = logger or get_logger()

    def _link_store(self, opportunity_type):
        opportunity_type = OpportunityType.parse(opportunity_type)
        store = self.link_stores.get(opportunity_type)
        if store is None:
            raise UnsupportedOpportunityTypeError(opportunity_type)
        return store

    def search(self, query: AddressQuery) -> List[MatchResult]:
        """Return every registry candidate for ``query``, best match first."""
        criteria = build_candidate_criteria(
            query,
            tolerance=self.settings.square_footage_tolerance,
            limit=self.settings.max_candidates,
        )
        try:
            candidates = self.candidate_repository.find_candidates(criteria)
        except RepositoryError as e:
            self.logger.record_store_failure(type(e).__name__)
            self.logger.error("Candidate lookup failed", zip_code=query.zip_code, error=str(e))
            raise

        self.logger.record_search(len(candidates))
        if not candidates:
            self.logger.info(
                "No diagnostic candidates",
                zip_code=query.zip_code,
                energy_class=criteria.energy_class.value,
            )
            return []

        results = [
            MatchResult(
                candidate=candidate,
                match_score=calculate_match_score(candidate, query),
                energy_diagnostic_id=candidate.external_id,
            )
            for candidate in candidates
        ]
        # sorted() is stable: equal scores keep repository order.
        results = sorted(results, key=lambda r: r.match_score, reverse=True)

        self.logger.debug(
            "Scored diagnostic candidates",
            zip_code=query.zip_code,
            candidates=len(results),
            best_score=results[0].match_score,
        )
        return results

    def search_and_link(
        self,
        query: AddressQuery,
        opportunity_id: str,
        opportunity_type: OpportunityType,
    ) -> List[DiagnosticLink]:
        """
        Search, then persist the top matches as links for the opportunity.

        Returns:
            Stored links for the opportunity ordered by score, or [] when the
            search found nothing (nothing is written in that case)

        Raises:
            UnsupportedOpportunityTypeError: If no store is bound to the type
            RepositoryError: If the registry or the link store fails
        """
        store = self._link_store(opportunity_type)

        results = self.search(query)
        if not results:
            return []

        top_links = [
            DiagnosticLinkInput(
                opportunity_id=opportunity_id,
                energy_diagnostic_id=result.candidate.id,
                match_score=link_score(result.match_score),
            )
            for result in results[: self.settings.max_links]
        ]

        try:
            # Links are never deleted, so earlier runs count against the cap.
            linked_ids = {link.energy_diagnostic_id for link in store.get_links(opportunity_id)}
            capacity = max(0, self.settings.max_links - len(linked_ids))
            links = [link for link in top_links if link.energy_diagnostic_id not in linked_ids][:capacity]
            if links:
                store.save_links(links)
            stored = store.get_links(opportunity_id)
        except RepositoryError as e:
            self.logger.record_store_failure(type(e).__name__)
            self.logger.error(
                "Link persistence failed",
                opportunity_id=opportunity_id,
                opportunity_type=OpportunityType.parse(opportunity_type).value,
                error=str(e),
            )
            raise

        self.logger.record_links(len(links))
        self.logger.info(
            "Linked diagnostics to opportunity",
            opportunity_id=opportunity_id,
            opportunity_type=OpportunityType.parse(opportunity_type).value,
            submitted=len(links),
            stored=len(stored),
        )
        return stored

    def get_links(self, opportunity_id: str, opportunity_type: OpportunityType) -> List[DiagnosticLink]:
        """Stored links for an opportunity, highest score first."""
        return self._link_store(opportunity_type).get_links(opportunity_id)
