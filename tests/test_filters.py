"""
Unit tests for funnel/filters.py
Covers the eligibility, category and preference stages.
"""

import pytest

from funnel.categories import match_percentage
from funnel.filters import (
    CATEGORY_MATCH_THRESHOLD,
    filter_by_category,
    filter_by_preferences,
    filter_eligible,
)
from funnel.models import FeePreference


class TestEligibilityFilter:
    """Tests for filter_eligible."""

    def test_zero_requirements_mean_no_requirement(self, make_card):
        card = make_card(min_monthly_income=0, min_credit_score=0)

        assert filter_eligible([card], income=0, credit_score=0) == [card]

    def test_income_and_credit_thresholds(self, make_card):
        # Arrange
        low = make_card("Low", min_monthly_income=5000, min_credit_score=650)
        high_income = make_card("High Income", min_monthly_income=50000)
        high_score = make_card("High Score", min_credit_score=800)
        exact = make_card("Exact", min_monthly_income=10000, min_credit_score=700)

        # Act
        result = filter_eligible([low, high_income, high_score, exact], income=10000, credit_score=700)

        # Assert: thresholds are inclusive, order preserved
        assert result == [low, exact]

    def test_output_is_subset_satisfying_requirements(self, make_card):
        catalog = [
            make_card(f"Card {i}", min_monthly_income=income, min_credit_score=score)
            for i, (income, score) in enumerate(
                [(0, 0), (20000, 0), (0, 750), (8000, 650), (12000, 720), (9999, 0)]
            )
        ]

        result = filter_eligible(catalog, income=10000, credit_score=700)

        assert all(card in catalog for card in result)
        for card in result:
            assert card.min_monthly_income == 0 or 10000 >= card.min_monthly_income
            assert card.min_credit_score == 0 or 700 >= card.min_credit_score
        assert [c.name for c in result] == ["Card 0", "Card 3", "Card 5"]

    def test_empty_catalog(self):
        assert filter_eligible([], income=10000, credit_score=700) == []

    def test_input_not_modified(self, make_card):
        catalog = [make_card("A", min_monthly_income=50000), make_card("B")]
        snapshot = list(catalog)

        filter_eligible(catalog, income=10000, credit_score=700)

        assert catalog == snapshot


class TestCategoryFilter:
    """Tests for filter_by_category."""

    def test_empty_user_categories_is_identity(self, make_card):
        cards = [make_card("A", spending_categories=()), make_card("B", spending_categories=("fuel",))]

        assert filter_by_category(cards, []) == cards

    def test_threshold_is_strictly_greater_than_65(self, make_card):
        # Arrange: user states three categories
        user_categories = ["dining", "travel", "fuel"]
        two_of_three = make_card("Two", spending_categories=("restaurants", "hotels"))
        all_three = make_card("Three", spending_categories=("dining", "travel", "petrol"))
        one_of_three = make_card("One", spending_categories=("dining",))

        # Act
        result = filter_by_category([two_of_three, all_three, one_of_three], user_categories)

        # Assert: 66.7% passes, 33.3% does not
        assert result == [two_of_three, all_three]

    def test_exactly_half_is_excluded(self, make_card):
        card = make_card(spending_categories=("dining",))

        assert filter_by_category([card], ["dining", "insurance"]) == []

    def test_retained_cards_exceed_threshold(self, make_card):
        user_categories = ["dining", "grocery", "movies"]
        cards = [
            make_card("A", spending_categories=("dining", "supermarket", "cinema")),
            make_card("B", spending_categories=("grocery",)),
            make_card("C", spending_categories=("food", "entertainment")),
            make_card("D", spending_categories=()),
        ]

        result = filter_by_category(cards, user_categories)

        assert result
        for card in result:
            assert match_percentage(user_categories, card.spending_categories).percentage > CATEGORY_MATCH_THRESHOLD
        assert cards[3] not in result

    def test_card_without_categories_filtered_when_user_has_categories(self, make_card):
        card = make_card(spending_categories=())

        assert filter_by_category([card], ["dining"]) == []


class TestPreferenceFilter:
    """Tests for filter_by_preferences."""

    @pytest.fixture
    def cards(self, make_card):
        return [
            make_card("Free HDFC", bank="HDFC", joining_fee=0),
            make_card("Cheap SBI", bank="SBI", joining_fee=500),
            make_card("Edge Axis", bank="Axis", joining_fee=1000),
            make_card("Premium Axis", bank="Axis", joining_fee=5000),
        ]

    def test_no_fee_keeps_only_free_cards(self, cards):
        result = filter_by_preferences(cards, FeePreference.NO_FEE)

        assert [c.name for c in result.filtered] == ["Free HDFC"]
        assert result.available_brands == ["HDFC"]

    def test_low_fee_includes_1000(self, cards):
        result = filter_by_preferences(cards, "low_fee")

        assert [c.name for c in result.filtered] == ["Free HDFC", "Cheap SBI", "Edge Axis"]
        assert result.available_brands == ["Axis", "HDFC", "SBI"]

    def test_no_concern_keeps_all(self, cards):
        result = filter_by_preferences(cards, FeePreference.NO_CONCERN)

        assert result.filtered == cards
        assert result.fee_filtered == cards

    def test_brand_filter_applied_after_available_brands(self, cards):
        # Act
        result = filter_by_preferences(cards, FeePreference.LOW_FEE, ["Axis"])

        # Assert: available brands reflect the fee filter only
        assert result.available_brands == ["Axis", "HDFC", "SBI"]
        assert [c.name for c in result.filtered] == ["Edge Axis"]
        assert len(result.fee_filtered) == 3

    def test_unmatched_brand_returns_empty_filtered(self, cards):
        result = filter_by_preferences(cards, FeePreference.NO_FEE, ["ICICI"])

        assert result.filtered == []
        assert result.available_brands == ["HDFC"]
        assert [c.name for c in result.fee_filtered] == ["Free HDFC"]

    def test_any_number_of_brands_accepted(self, cards):
        brands = ["HDFC", "SBI", "Axis", "ICICI", "Kotak"]

        result = filter_by_preferences(cards, FeePreference.NO_CONCERN, brands)

        assert result.filtered == cards
