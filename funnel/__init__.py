from .categories import CATEGORY_SYNONYMS, CategoryMatch, categories_match, match_percentage
from .filters import (
    PreferenceFilterResult,
    filter_by_category,
    filter_by_preferences,
    filter_eligible,
)
from .models import (
    CardRecord,
    CardType,
    FeePreference,
    FunnelEvent,
    FunnelResult,
    FunnelStats,
    ScoredCard,
    UserProfile,
)
from .recommender import DEFAULT_MAX_RESULTS, recommend
from .scoring import SCENARIOS, ScoringScenario, rank_cards, score_cards, select_scenario

__all__ = [
    "CATEGORY_SYNONYMS",
    "CategoryMatch",
    "categories_match",
    "match_percentage",
    "PreferenceFilterResult",
    "filter_by_category",
    "filter_by_preferences",
    "filter_eligible",
    "CardRecord",
    "CardType",
    "FeePreference",
    "FunnelEvent",
    "FunnelResult",
    "FunnelStats",
    "ScoredCard",
    "UserProfile",
    "DEFAULT_MAX_RESULTS",
    "recommend",
    "SCENARIOS",
    "ScoringScenario",
    "rank_cards",
    "score_cards",
    "select_scenario",
]
