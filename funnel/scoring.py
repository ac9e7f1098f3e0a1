"""
Adaptive scoring and ranking for cards that survived the funnel.

One of four weighting scenarios is picked per request depending on whether
the user asked for zero joining fee and whether they named preferred brands.
Every scenario's weights add up to 100, so composite scores stay in [0, 100].
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from funnel.categories import match_percentage
from funnel.models import CardRecord, FeePreference, ScoredCard, UserProfile

logger = logging.getLogger(__name__)


PREFERRED_TIER = "preferred_brand"
GENERAL_TIER = "general"


@dataclass(frozen=True)
class ScoringScenario:
    """
    A fixed weight configuration.

    brand_weight and signup_weight are None when the scenario does not score
    that component at all.
    """
    name: str
    category_weight: float
    rewards_weight: float
    brand_weight: Optional[float] = None
    signup_weight: Optional[float] = None

    @property
    def total_weight(self) -> float:
        return (
            self.category_weight
            + self.rewards_weight
            + (self.brand_weight or 0)
            + (self.signup_weight or 0)
        )


# (zero joining fee requested, brand preference given) -> scenario
SCENARIOS = {
    (True, True): ScoringScenario("Zero Fee + Brand Match", 30, 20, brand_weight=50),
    (True, False): ScoringScenario("Zero Fee + No Brand Match", 30, 60, signup_weight=10),
    (False, True): ScoringScenario("Fee >0 + Brand Match", 30, 20, brand_weight=50),
    (False, False): ScoringScenario("Fee >0 + No Brand Match", 30, 60, signup_weight=10),
}


def select_scenario(fee_preference: FeePreference, preferred_brands: Iterable[str]) -> ScoringScenario:
    has_zero_fee_pref = FeePreference.parse(fee_preference) == FeePreference.NO_FEE
    has_brand_pref = len(list(preferred_brands)) > 0
    return SCENARIOS[(has_zero_fee_pref, has_brand_pref)]


def _normalizer(values: Iterable[float]) -> float:
    """Largest positive value, or 1 when there is none (avoids dividing by zero)."""
    positives = [v for v in values if v > 0]
    return max(positives) if positives else 1.0


def _format_amount(amount: float) -> str:
    return f"₹{int(round(amount)):,}"


def build_reasoning(
    card: CardRecord,
    match_pct: float,
    scenario: ScoringScenario,
    tier: str,
    requested_brands: Iterable[str],
) -> str:
    parts = [
        f"{match_pct:.1f}% category match",
        f"{card.reward_rate:g}% rewards rate",
    ]

    if tier == PREFERRED_TIER:
        parts.append("preferred brand match")
    elif list(requested_brands):
        parts.append("best alternative option")

    if card.joining_fee == 0:
        parts.append("no joining fee")

    if card.sign_up_bonus > 0:
        parts.append(f"{_format_amount(card.sign_up_bonus)} welcome bonus")

    tier_label = "Preferred Brand Tier" if tier == PREFERRED_TIER else "General Tier"
    return f"Selected from {tier_label} based on {', '.join(parts)}. Scenario: {scenario.name}."


def score_cards(
    cards: Iterable[CardRecord],
    profile: UserProfile,
    preferred_brands: Optional[Iterable[str]] = None,
) -> List[ScoredCard]:
    """
    Give every card a 0-100 composite score.

    Args:
        cards: candidate cards (normally the preference-stage output)
        profile: the requesting user's profile
        preferred_brands: brands to treat as preferred; defaults to the
            profile's own list. The recommender passes an empty list when the
            preference cannot be met so scoring runs as if none were given.

    Returns:
        ScoredCard list in the same order as the input cards
    """
    cards = list(cards)
    if preferred_brands is None:
        preferred_brands = profile.preferred_brands
    preferred = set(preferred_brands)

    scenario = select_scenario(profile.joining_fee_preference, preferred)

    max_reward_rate = _normalizer(card.reward_rate for card in cards)
    max_sign_up_bonus = _normalizer(card.sign_up_bonus for card in cards)

    scored = []
    for card in cards:
        match = match_percentage(profile.spending_categories, card.spending_categories)

        category_score = (match.percentage / 100) * scenario.category_weight
        rewards_score = (card.reward_rate / max_reward_rate) * scenario.rewards_weight

        brand_score = 0.0
        if scenario.brand_weight is not None and card.bank in preferred:
            brand_score = float(scenario.brand_weight)

        signup_score = 0.0
        if scenario.signup_weight is not None:
            signup_score = (card.sign_up_bonus / max_sign_up_bonus) * scenario.signup_weight

        total = category_score + rewards_score + brand_score + signup_score
        tier = PREFERRED_TIER if card.bank in preferred else GENERAL_TIER

        scored.append(
            ScoredCard(
                card=card,
                score=total,
                score_breakdown={
                    "category_match": category_score,
                    "rewards_rate": rewards_score,
                    "brand_match": brand_score,
                    "sign_up_bonus": signup_score,
                },
                match_percentage=match.percentage,
                reasoning=build_reasoning(card, match.percentage, scenario, tier, profile.preferred_brands),
                tier=tier,
            )
        )

    logger.debug("Scored %d cards using scenario %r", len(scored), scenario.name)
    return scored


def _by_score(scored: Iterable[ScoredCard]) -> List[ScoredCard]:
    # sorted() is stable, so equal scores keep their input order
    return sorted(scored, key=lambda s: s.score, reverse=True)


def rank_cards(scored: Iterable[ScoredCard], preferred_brands: Iterable[str] = ()) -> tuple:
    """
    Order scored cards best first.

    Rules:
    - No preferred brands: descending score.
    - Preferred brands present among the cards: preferred-brand cards first,
      each group sorted by descending score. A preferred card always outranks
      a non-preferred one regardless of score.
    - Preferred brands given but none present: descending score, and the
      brand mismatch flag is raised.

    Returns:
        Tuple of (ranked_cards, brand_mismatch)
    """
    scored = list(scored)
    preferred = set(preferred_brands)

    if not preferred:
        return _by_score(scored), False

    preferred_cards = [s for s in scored if s.card.bank in preferred]
    if not preferred_cards:
        return _by_score(scored), True

    other_cards = [s for s in scored if s.card.bank not in preferred]
    return _by_score(preferred_cards) + _by_score(other_cards), False
