"""
Fuzzy spending-category matching.

Two category strings match when, after lowercasing and trimming, they are
equal, one contains the other, or they are linked through CATEGORY_SYNONYMS.
Shared by the category filter and the scorer.
"""

from dataclasses import dataclass
from typing import Iterable


# Keyword -> synonyms. A pair matches when one side contains the keyword and
# the other side contains any of its synonyms (checked in both directions).
CATEGORY_SYNONYMS = {
    "dining": frozenset({"restaurant", "food", "eat", "meal", "cafe"}),
    "restaurant": frozenset({"dining", "food", "eat", "meal", "cafe"}),
    "travel": frozenset({"hotel", "flight", "airline", "booking", "vacation", "air"}),
    "hotel": frozenset({"travel", "booking", "accommodation", "stay", "lodging"}),
    "flight": frozenset({"travel", "airline", "air", "booking"}),
    "shopping": frozenset({"retail", "store", "purchase", "buy", "mall"}),
    "online": frozenset({"internet", "digital", "e-commerce", "web", "shopping"}),
    "fuel": frozenset({"gas", "petrol", "gasoline", "pump", "vehicle"}),
    "gas": frozenset({"fuel", "petrol", "gasoline", "pump", "vehicle"}),
    "entertainment": frozenset({"movie", "cinema", "streaming", "show", "music"}),
    "grocery": frozenset({"supermarket", "groceries", "food", "market", "shopping"}),
    "utility": frozenset({"bill", "electric", "water", "internet", "phone", "mobile"}),
    "transport": frozenset({"taxi", "uber", "metro", "bus", "ride", "travel"}),
    "professional": frozenset({"business", "work", "office"}),
    "business": frozenset({"professional", "work", "office"}),
}


@dataclass(frozen=True)
class CategoryMatch:
    """
    Result of matching a user's categories against a card's categories.

    Fields:
    - count: number of user categories that matched at least one card category
    - matched: the user categories that matched, in user order
    - percentage: count / len(user categories) * 100
    """
    count: int
    matched: tuple
    percentage: float


def normalize_category(value: str) -> str:
    return str(value).strip().lower()


def _synonym_match(a: str, b: str, synonyms: dict) -> bool:
    for keyword, words in synonyms.items():
        if keyword in a and any(word in b for word in words):
            return True
        if keyword in b and any(word in a for word in words):
            return True
    return False


def categories_match(a: str, b: str, synonyms: dict = None) -> bool:
    """
    Return True if two category strings refer to the same kind of spend.

    Matching is symmetric. Blank strings never match anything.

    Example:
        >>> categories_match("Dining", "restaurants")
        True
        >>> categories_match("fuel", "groceries")
        False
    """
    if synonyms is None:
        synonyms = CATEGORY_SYNONYMS

    a = normalize_category(a)
    b = normalize_category(b)
    if not a or not b:
        return False

    if a == b:
        return True
    if a in b or b in a:
        return True
    return _synonym_match(a, b, synonyms)


def match_percentage(
    user_categories: Iterable[str],
    card_categories: Iterable[str],
    synonyms: dict = None,
) -> CategoryMatch:
    """
    Measure how much of the user's stated spend a card covers.

    Each user category counts at most once (first matching card category
    wins). The percentage is relative to the number of user categories, not
    to how many categories the card declares.
    """
    user_categories = list(user_categories)
    card_categories = list(card_categories or ())

    if not user_categories:
        return CategoryMatch(count=0, matched=(), percentage=0.0)

    matched = []
    for user_cat in user_categories:
        for card_cat in card_categories:
            if categories_match(user_cat, card_cat, synonyms):
                matched.append(user_cat)
                break

    percentage = (len(matched) / len(user_categories)) * 100
    return CategoryMatch(count=len(matched), matched=tuple(matched), percentage=percentage)
