"""
Funnel filtering stages.

Each stage takes a list of CardRecord objects and returns a new list; the
input is never modified.
"""

from dataclasses import dataclass
from typing import Iterable, List

from funnel.categories import match_percentage
from funnel.models import CardRecord, FeePreference


# Cards must cover strictly more than this share of the user's categories.
CATEGORY_MATCH_THRESHOLD = 65.0

# Highest joining fee accepted under the "low_fee" preference, in catalog currency.
LOW_FEE_MAX_JOINING_FEE = 1000.0


@dataclass(frozen=True)
class PreferenceFilterResult:
    """
    Output of the preference stage.

    Fields:
    - filtered: fee-filtered cards narrowed to the preferred brands (may be empty)
    - available_brands: sorted brands present after the fee filter, before brand filtering
    - fee_filtered: cards that passed the fee filter only
    """
    filtered: list
    available_brands: list
    fee_filtered: list


def filter_eligible(cards: Iterable[CardRecord], income: float, credit_score: int) -> List[CardRecord]:
    """
    Keep the cards the user can realistically obtain.

    A requirement of 0 means the card has no requirement for that field.
    """
    eligible = []
    for card in cards:
        meets_income = card.min_monthly_income == 0 or income >= card.min_monthly_income
        meets_credit = card.min_credit_score == 0 or credit_score >= card.min_credit_score
        if meets_income and meets_credit:
            eligible.append(card)
    return eligible


def filter_by_category(cards: Iterable[CardRecord], user_categories: Iterable[str]) -> List[CardRecord]:
    """
    Keep cards whose categories cover more than 65% of the user's categories.

    With no user categories every card passes.
    """
    cards = list(cards)
    user_categories = list(user_categories)
    if not user_categories:
        return cards

    return [
        card for card in cards
        if match_percentage(user_categories, card.spending_categories).percentage > CATEGORY_MATCH_THRESHOLD
    ]


def filter_by_fee(cards: Iterable[CardRecord], fee_preference: FeePreference) -> List[CardRecord]:
    fee_preference = FeePreference.parse(fee_preference)

    if fee_preference == FeePreference.NO_FEE:
        return [card for card in cards if card.joining_fee == 0]
    if fee_preference == FeePreference.LOW_FEE:
        return [card for card in cards if card.joining_fee <= LOW_FEE_MAX_JOINING_FEE]
    return list(cards)


def available_brands(cards: Iterable[CardRecord]) -> List[str]:
    return sorted({card.bank for card in cards})


def filter_by_preferences(
    cards: Iterable[CardRecord],
    fee_preference: FeePreference,
    preferred_brands: Iterable[str] = (),
) -> PreferenceFilterResult:
    """
    Apply the joining-fee preference, then the optional brand allow-list.

    available_brands is computed before brand filtering so callers can tell
    the user which brands their fee choice still allows. An empty brand
    result is returned as-is; falling back is up to the caller.
    """
    fee_filtered = filter_by_fee(cards, fee_preference)
    brands = available_brands(fee_filtered)

    preferred = set(preferred_brands)
    if preferred:
        filtered = [card for card in fee_filtered if card.bank in preferred]
    else:
        filtered = list(fee_filtered)

    return PreferenceFilterResult(filtered=filtered, available_brands=brands, fee_filtered=fee_filtered)
