"""
Data models for the Card Funnel recommendation engine.
All models are frozen dataclasses so no stage can mutate its input.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class CardType(str, Enum):
    CASHBACK = "Cashback"
    TRAVEL = "Travel"
    REWARDS = "Rewards"
    STUDENT = "Student"
    BUSINESS = "Business"

    @classmethod
    def parse(cls, value) -> "CardType":
        """Accept a CardType, its value or its name in any case."""
        if isinstance(value, cls):
            return value
        raw = str(value).strip().lower()
        for member in cls:
            if raw in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Invalid card type: {value!r}. Must be one of: {', '.join(m.value for m in cls)}")


class FeePreference(str, Enum):
    NO_FEE = "no_fee"
    LOW_FEE = "low_fee"
    NO_CONCERN = "no_concern"

    @classmethod
    def parse(cls, value) -> "FeePreference":
        if isinstance(value, cls):
            return value
        raw = str(value).strip().lower()
        for member in cls:
            if raw in (member.value, member.name.lower()):
                return member
        raise ValueError(
            f"Invalid joining fee preference: {value!r}. Must be one of: {', '.join(m.value for m in cls)}"
        )


def _normalize_tags(values) -> tuple:
    tags = []
    for value in values or ():
        tag = str(value).strip().lower()
        if tag:
            tags.append(tag)
    return tuple(tags)


@dataclass(frozen=True)
class CardRecord:
    """
    A credit card product as delivered by the catalog loader.

    Fields:
    - name: card product name
    - bank: issuing bank / brand
    - card_type: one of CardType
    - joining_fee: one-off fee in catalog currency (>= 0)
    - annual_fee: yearly fee in catalog currency (>= 0)
    - min_credit_score: minimum credit score, 0 means no requirement
    - min_monthly_income: minimum monthly income, 0 means no requirement
    - reward_rate: reward percentage (e.g. 5.0 for 5%)
    - sign_up_bonus: welcome bonus amount, may be 0
    - features: free-form feature strings
    - spending_categories: lowercase category tags, may be empty
    """
    name: str
    bank: str
    card_type: CardType = CardType.REWARDS
    joining_fee: float = 0.0
    annual_fee: float = 0.0
    min_credit_score: int = 0
    min_monthly_income: float = 0.0
    reward_rate: float = 0.0
    sign_up_bonus: float = 0.0
    features: tuple = ()
    spending_categories: tuple = ()

    def __post_init__(self):
        if not self.name or not str(self.name).strip():
            raise ValueError("Card name cannot be empty")
        object.__setattr__(self, "card_type", CardType.parse(self.card_type))

        for attr in (
            "joining_fee",
            "annual_fee",
            "min_credit_score",
            "min_monthly_income",
            "reward_rate",
            "sign_up_bonus",
        ):
            value = getattr(self, attr)
            if value < 0:
                raise ValueError(f"{attr} must be non-negative. Got: {value}")

        object.__setattr__(self, "features", tuple(str(f).strip() for f in self.features if str(f).strip()))
        object.__setattr__(self, "spending_categories", _normalize_tags(self.spending_categories))


@dataclass(frozen=True)
class UserProfile:
    """
    The user's answers for a single recommendation request.

    preferred_brands is usually 0-3 names picked in the form, but any number
    is accepted.
    """
    monthly_income: float
    credit_score: int
    spending_categories: tuple = ()
    joining_fee_preference: FeePreference = FeePreference.NO_CONCERN
    preferred_brands: tuple = ()

    def __post_init__(self):
        if self.monthly_income < 0:
            raise ValueError(f"monthly_income must be non-negative. Got: {self.monthly_income}")
        object.__setattr__(
            self, "joining_fee_preference", FeePreference.parse(self.joining_fee_preference)
        )

        categories = []
        for category in _normalize_tags(self.spending_categories):
            if category not in categories:
                categories.append(category)
        object.__setattr__(self, "spending_categories", tuple(categories))

        # Brand names keep their case; they are compared against CardRecord.bank as-is.
        brands = tuple(str(b).strip() for b in self.preferred_brands or () if str(b).strip())
        object.__setattr__(self, "preferred_brands", brands)


@dataclass(frozen=True)
class ScoredCard:
    """
    A card with its composite score for one recommendation request.

    Fields:
    - card: the underlying CardRecord
    - score: composite score between 0 and 100
    - score_breakdown: named contributions that sum to score
    - match_percentage: category match percentage (0-100)
    - reasoning: human-readable summary of why the card scored as it did
    - tier: "preferred_brand" or "general"
    """
    card: CardRecord
    score: float
    score_breakdown: Mapping[str, float] = field(compare=False)
    match_percentage: float
    reasoning: str
    tier: str = "general"

    def __post_init__(self):
        object.__setattr__(self, "score_breakdown", MappingProxyType(dict(self.score_breakdown)))


@dataclass(frozen=True)
class FunnelStats:
    total: int = 0
    after_eligibility: int = 0
    after_category: int = 0
    after_preference: int = 0
    final: int = 0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "after_eligibility": self.after_eligibility,
            "after_category": self.after_category,
            "after_preference": self.after_preference,
            "final": self.final,
        }


@dataclass(frozen=True)
class FunnelEvent:
    """Emitted to an observer after each funnel stage."""
    stage: str
    count_in: int
    count_out: int
    detail: dict = field(default_factory=dict)


@dataclass(frozen=True)
class FunnelResult:
    """
    The complete output of a recommendation run.

    Fields:
    - recommendations: ranked ScoredCard list, truncated to max_results
    - stats: FunnelStats counts at each stage boundary
    - available_brands: sorted brands left after the fee filter
    - brand_mismatch: True when none of the preferred brands survived
    - scenario: the ScoringScenario used, None if scoring never ran
    """
    recommendations: list
    stats: FunnelStats
    available_brands: list
    brand_mismatch: bool = False
    scenario: Optional[object] = None
