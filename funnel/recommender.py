"""
Recommendation funnel orchestration.
Runs eligibility -> category -> preference -> scoring and collects stats.
"""

import logging
from typing import Callable, Iterable, Optional

from funnel.filters import filter_by_category, filter_by_preferences, filter_eligible
from funnel.models import CardRecord, FunnelEvent, FunnelResult, FunnelStats, UserProfile
from funnel.scoring import rank_cards, score_cards, select_scenario

logger = logging.getLogger(__name__)


DEFAULT_MAX_RESULTS = 7


def _emit(observer: Optional[Callable], stage: str, count_in: int, count_out: int, **detail):
    logger.debug("Funnel stage %s: %d -> %d", stage, count_in, count_out)
    if observer is not None:
        observer(FunnelEvent(stage=stage, count_in=count_in, count_out=count_out, detail=detail))


def recommend(
    catalog: Iterable[CardRecord],
    profile: UserProfile,
    max_results: int = DEFAULT_MAX_RESULTS,
    observer: Optional[Callable[[FunnelEvent], None]] = None,
) -> FunnelResult:
    """
    Produce ranked card recommendations for one user.

    Args:
        catalog: normalized CardRecord list from the catalog loader
        profile: the user's profile
        max_results: maximum number of recommendations to return
        observer: optional callable receiving a FunnelEvent after each stage

    Returns:
        FunnelResult. An empty recommendation list is a normal outcome; the
        stats show at which stage the funnel emptied.
    """
    catalog = list(catalog)
    total = len(catalog)

    eligible = filter_eligible(catalog, profile.monthly_income, profile.credit_score)
    _emit(observer, "eligibility", total, len(eligible))
    if not eligible:
        return FunnelResult(
            recommendations=[],
            stats=FunnelStats(total=total),
            available_brands=[],
        )

    relevant = filter_by_category(eligible, profile.spending_categories)
    _emit(observer, "category", len(eligible), len(relevant))
    if not relevant:
        return FunnelResult(
            recommendations=[],
            stats=FunnelStats(total=total, after_eligibility=len(eligible)),
            available_brands=[],
        )

    preferences = filter_by_preferences(
        relevant, profile.joining_fee_preference, profile.preferred_brands
    )
    candidates = preferences.fee_filtered

    # Score as if no brand was requested when none of the requested brands survived.
    brand_satisfied = bool(profile.preferred_brands) and bool(preferences.filtered)
    scoring_brands = profile.preferred_brands if brand_satisfied else ()
    _emit(
        observer,
        "preference",
        len(relevant),
        len(candidates),
        available_brands=list(preferences.available_brands),
        brand_matches=len(preferences.filtered) if profile.preferred_brands else None,
    )

    scenario = select_scenario(profile.joining_fee_preference, scoring_brands)
    scored = score_cards(candidates, profile, preferred_brands=scoring_brands)
    ranked, brand_mismatch = rank_cards(scored, profile.preferred_brands)
    recommendations = ranked[:max(max_results, 0)]
    _emit(observer, "scoring", len(candidates), len(recommendations), scenario=scenario.name)

    stats = FunnelStats(
        total=total,
        after_eligibility=len(eligible),
        after_category=len(relevant),
        after_preference=len(candidates),
        final=len(recommendations),
    )
    return FunnelResult(
        recommendations=recommendations,
        stats=stats,
        available_brands=list(preferences.available_brands),
        brand_mismatch=brand_mismatch,
        scenario=scenario,
    )
