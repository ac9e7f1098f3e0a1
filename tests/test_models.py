"""
Unit tests for funnel/models.py validation.
"""

import dataclasses

import pytest

from funnel.models import CardRecord, CardType, FeePreference, ScoredCard, UserProfile


class TestCardRecord:

    def test_categories_normalized(self):
        card = CardRecord(name="A", bank="X", spending_categories=[" Dining ", "", "TRAVEL"])

        assert card.spending_categories == ("dining", "travel")

    @pytest.mark.parametrize(
        "field_name", ["joining_fee", "annual_fee", "min_credit_score", "min_monthly_income", "reward_rate", "sign_up_bonus"]
    )
    def test_negative_numbers_rejected(self, field_name):
        with pytest.raises(ValueError):
            CardRecord(name="A", bank="X", **{field_name: -1})

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            CardRecord(name="  ", bank="X")

    def test_card_type_parsed(self):
        assert CardRecord(name="A", bank="X", card_type="cashback").card_type == CardType.CASHBACK
        assert CardRecord(name="A", bank="X", card_type="TRAVEL").card_type == CardType.TRAVEL

    def test_unknown_card_type_rejected(self):
        with pytest.raises(ValueError):
            CardRecord(name="A", bank="X", card_type="Premium")

    def test_immutable(self):
        card = CardRecord(name="A", bank="X")

        with pytest.raises(dataclasses.FrozenInstanceError):
            card.reward_rate = 10


class TestUserProfile:

    def test_fee_preference_parsed(self):
        profile = UserProfile(monthly_income=1000, credit_score=700, joining_fee_preference="NO_FEE")

        assert profile.joining_fee_preference == FeePreference.NO_FEE

    def test_invalid_fee_preference(self):
        with pytest.raises(ValueError):
            UserProfile(monthly_income=1000, credit_score=700, joining_fee_preference="cheap")

    def test_negative_income_rejected(self):
        with pytest.raises(ValueError):
            UserProfile(monthly_income=-1, credit_score=700)

    def test_categories_deduplicated_in_order(self):
        profile = UserProfile(monthly_income=0, credit_score=700, spending_categories=["travel", "dining", "travel"])

        assert profile.spending_categories == ("travel", "dining")

    def test_brands_stored_as_tuple(self):
        profile = UserProfile(monthly_income=0, credit_score=700, preferred_brands=["A", "B", "C", "D"])

        assert profile.preferred_brands == ("A", "B", "C", "D")

    def test_blank_categories_dropped_and_case_folded(self):
        profile = UserProfile(
            monthly_income=0,
            credit_score=700,
            spending_categories=["  ", "Dining", " dining ", ""],
        )

        assert profile.spending_categories == ("dining",)

    def test_blank_brands_dropped(self):
        profile = UserProfile(monthly_income=0, credit_score=700, preferred_brands=[" HDFC Bank ", "   ", ""])

        assert profile.preferred_brands == ("HDFC Bank",)


class TestScoredCard:

    def test_breakdown_is_read_only(self):
        scored = ScoredCard(
            card=CardRecord(name="A", bank="X"),
            score=50.0,
            score_breakdown={"category_match": 30.0, "rewards_rate": 20.0},
            match_percentage=100.0,
            reasoning="",
        )

        with pytest.raises(TypeError):
            scored.score_breakdown["category_match"] = 99.0
        assert scored.score_breakdown["category_match"] == 30.0

    def test_hashable(self):
        card = CardRecord(name="A", bank="X")
        first = ScoredCard(card=card, score=50.0, score_breakdown={"a": 50.0}, match_percentage=100.0, reasoning="")
        second = ScoredCard(card=card, score=50.0, score_breakdown={"a": 50.0}, match_percentage=100.0, reasoning="")

        assert hash(first) == hash(second)
        assert len({first, second}) == 1
