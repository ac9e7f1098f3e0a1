import pytest

from funnel.models import CardRecord, CardType, UserProfile


@pytest.fixture
def make_card():
    """Factory for CardRecord objects with permissive defaults."""
    def _make(name="Card", bank="X", **overrides):
        fields = dict(
            card_type=CardType.REWARDS,
            joining_fee=0,
            annual_fee=0,
            min_credit_score=0,
            min_monthly_income=0,
            reward_rate=1.0,
            sign_up_bonus=0,
            features=(),
            spending_categories=("dining",),
        )
        fields.update(overrides)
        return CardRecord(name=name, bank=bank, **fields)
    return _make


@pytest.fixture
def make_profile():
    def _make(**overrides):
        fields = dict(
            monthly_income=10000,
            credit_score=700,
            spending_categories=("dining",),
            joining_fee_preference="no_concern",
            preferred_brands=(),
        )
        fields.update(overrides)
        return UserProfile(**fields)
    return _make
