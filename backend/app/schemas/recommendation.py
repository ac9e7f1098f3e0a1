"""
Request/response DTOs for the recommendation endpoint.

The engine works on frozen dataclasses (funnel.models); these Pydantic models
are the HTTP contract and convert to and from those values.
"""

from typing import Optional, List, Dict

from pydantic import BaseModel, Field, field_validator

from funnel.models import CardType, FeePreference, FunnelResult, ScoredCard, UserProfile


class RecommendationRequest(BaseModel):
    """
    User answers from the recommendation form.

    Usage:
        request = RecommendationRequest(
            monthly_income=75000,
            credit_score=760,
            spending_categories=["dining", "travel"],
            joining_fee_preference="low_fee",
            preferred_brands=["HDFC Bank"],
        )
    """
    monthly_income: float = Field(..., ge=0, description="Monthly income in catalog currency")
    credit_score: int = Field(..., ge=300, le=900, description="Credit score, conventionally 300-850")
    spending_categories: List[str] = Field(default_factory=list, description="Free-form spending categories")
    joining_fee_preference: FeePreference = Field(default=FeePreference.NO_CONCERN)
    preferred_brands: List[str] = Field(default_factory=list, description="Preferred issuing banks")
    max_results: Optional[int] = Field(None, ge=1, le=20, description="Override for the result limit")

    @field_validator("spending_categories", "preferred_brands")
    @classmethod
    def strip_blank_entries(cls, v: List[str]) -> List[str]:
        return [item.strip() for item in v if item and item.strip()]

    def to_profile(self) -> UserProfile:
        return UserProfile(
            monthly_income=self.monthly_income,
            credit_score=self.credit_score,
            spending_categories=tuple(self.spending_categories),
            joining_fee_preference=self.joining_fee_preference,
            preferred_brands=tuple(self.preferred_brands),
        )


class ScoredCardResponse(BaseModel):
    card_name: str
    bank: str
    card_type: CardType
    joining_fee: float
    annual_fee: float
    reward_rate: float
    sign_up_bonus: float
    features: List[str]
    spending_categories: List[str]

    score: float = Field(..., ge=0, le=100)
    score_breakdown: Dict[str, float]
    match_percentage: float
    reasoning: str
    tier: str

    @classmethod
    def from_scored(cls, scored: ScoredCard) -> "ScoredCardResponse":
        card = scored.card
        return cls(
            card_name=card.name,
            bank=card.bank,
            card_type=card.card_type,
            joining_fee=card.joining_fee,
            annual_fee=card.annual_fee,
            reward_rate=card.reward_rate,
            sign_up_bonus=card.sign_up_bonus,
            features=list(card.features),
            spending_categories=list(card.spending_categories),
            score=round(scored.score, 2),
            score_breakdown={k: round(v, 2) for k, v in scored.score_breakdown.items()},
            match_percentage=round(scored.match_percentage, 1),
            reasoning=scored.reasoning,
            tier=scored.tier,
        )


class FunnelStatsResponse(BaseModel):
    total: int
    after_eligibility: int
    after_category: int
    after_preference: int
    final: int


class RecommendationResponse(BaseModel):
    recommendations: List[ScoredCardResponse]
    stats: FunnelStatsResponse
    available_brands: List[str]
    brand_mismatch: bool
    brand_mismatch_notice: Optional[str] = None
    scenario: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_result(
        cls,
        result: FunnelResult,
        *,
        notice: Optional[str] = None,
        message: Optional[str] = None,
    ) -> "RecommendationResponse":
        return cls(
            recommendations=[ScoredCardResponse.from_scored(s) for s in result.recommendations],
            stats=FunnelStatsResponse(**result.stats.to_dict()),
            available_brands=list(result.available_brands),
            brand_mismatch=result.brand_mismatch,
            brand_mismatch_notice=notice,
            scenario=result.scenario.name if result.scenario is not None else None,
            message=message,
        )
