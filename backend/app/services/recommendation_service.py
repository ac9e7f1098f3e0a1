from __future__ import annotations

import logging
from typing import Iterable, Optional

from app.services.catalog_service import CatalogService
from app.services.errors import catalog_unavailable
from funnel.models import FunnelEvent, FunnelResult, FunnelStats, UserProfile
from funnel.recommender import DEFAULT_MAX_RESULTS, recommend

logger = logging.getLogger(__name__)


def brand_mismatch_notice(
    preferred_brands: Iterable[str],
    available_brands: Iterable[str],
    brand_mismatch: bool,
) -> Optional[str]:
    """User-facing notice shown when none of the preferred brands could be offered."""
    if not brand_mismatch:
        return None

    available = list(available_brands)
    unavailable = [brand for brand in preferred_brands if brand not in available]
    if not unavailable:
        return None

    verb = "is" if len(unavailable) == 1 else "are"
    notice = f"Note: {', '.join(unavailable)} {verb} not available for your current preferences."
    if available:
        notice += f" Showing best alternatives from available brands: {', '.join(available)}."
    return notice


def empty_state_message(stats: FunnelStats) -> Optional[str]:
    """Explain where the funnel emptied, or None when there are recommendations."""
    if stats.final > 0:
        return None
    if stats.total == 0:
        return "No credit cards are available right now."
    if stats.after_eligibility == 0:
        return "No cards match your income and credit score requirements."
    if stats.after_category == 0:
        return "No cards match enough of your spending categories. Try selecting fewer categories."
    return "No cards match your joining fee preference. Try relaxing your fee filter."


def _log_stage(event: FunnelEvent) -> None:
    logger.info("Funnel %s: %d/%d cards passed", event.stage, event.count_out, event.count_in)


class RecommendationService:
    def __init__(self, catalog_service: CatalogService, max_results: int = DEFAULT_MAX_RESULTS):
        self.catalog_service = catalog_service
        self.max_results = max_results

    def recommend(self, profile: UserProfile, *, max_results: Optional[int] = None) -> FunnelResult:
        """
        Run the recommendation funnel against the stored catalog.

        Raises:
            ServiceError: CATALOG_UNAVAILABLE if the catalog has no cards
        """
        catalog = self.catalog_service.get_catalog()
        if not catalog:
            logger.error("Card catalog is empty; cannot produce recommendations")
            raise catalog_unavailable()

        limit = max_results if max_results is not None else self.max_results
        result = recommend(catalog, profile, max_results=limit, observer=_log_stage)

        if result.brand_mismatch:
            logger.info(
                "Preferred brands %s unavailable; showing alternatives from %s",
                list(profile.preferred_brands),
                result.available_brands,
            )
        return result
