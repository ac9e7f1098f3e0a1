"""
Command-line interface for the Card Funnel recommendation engine.
Reads the card catalog from CSV and prints funnel results.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

# Backend directory holds the catalog loader
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "backend"))

from app.services.catalog_service import load_catalog_csv  # noqa: E402
from app.services.recommendation_service import brand_mismatch_notice, empty_state_message  # noqa: E402
from funnel.models import FeePreference, UserProfile  # noqa: E402
from funnel.recommender import DEFAULT_MAX_RESULTS, recommend  # noqa: E402


# Default CSV file path
CSV_PATH = Path("data/card_catalogue.csv")


def load_catalog(path):
    """Load the catalog or exit with an error if it is missing or empty."""
    path = Path(path)
    if not path.exists():
        print(f"Error: Catalog file not found: {path}")
        sys.exit(1)

    catalog = load_catalog_csv(path)
    if not catalog:
        print(f"Error: No valid cards found in {path}")
        sys.exit(1)
    return catalog


def cmd_catalog(args):
    """
    List every card in the catalog.

    Args:
        args: Parsed command-line arguments with fields:
            - csv: path to the catalog CSV
    """
    catalog = load_catalog(args.csv)

    print(f"\n=== Card Catalog ({len(catalog)} cards) ===\n")
    for card in catalog:
        print(f"{card.name} ({card.bank}) - {card.card_type.value}")
        print(f"   Joining fee: ₹{card.joining_fee:,.0f}  Annual fee: ₹{card.annual_fee:,.0f}")
        print(f"   Min income: ₹{card.min_monthly_income:,.0f}  Min credit score: {card.min_credit_score}")
        print(f"   Rewards: {card.reward_rate:g}%  Categories: {', '.join(card.spending_categories) or '-'}")
    print()


def cmd_recommend(args):
    """
    Run the recommendation funnel for a user profile.

    Args:
        args: Parsed command-line arguments with fields:
            - income: monthly income
            - credit_score: credit score
            - category: list of spending categories
            - fee: 'no_fee' | 'low_fee' | 'no_concern'
            - brand: list of preferred brands
            - max: maximum number of results
            - csv: path to the catalog CSV
    """
    # Validate income
    if args.income < 0:
        print(f"Error: Income must be 0 or more. Got: {args.income}")
        sys.exit(1)

    # Validate result limit
    if args.max < 1:
        print(f"Error: --max must be at least 1. Got: {args.max}")
        sys.exit(1)

    try:
        profile = UserProfile(
            monthly_income=args.income,
            credit_score=args.credit_score,
            spending_categories=tuple(args.category or ()),
            joining_fee_preference=args.fee,
            preferred_brands=tuple(args.brand or ()),
        )
    except ValueError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    catalog = load_catalog(args.csv)
    result = recommend(catalog, profile, max_results=args.max)

    # Display results
    stats = result.stats
    print("\n=== Card Recommendations ===\n")
    print(f"Income: ₹{profile.monthly_income:,.0f}/month  Credit score: {profile.credit_score}")
    print(f"Categories: {', '.join(profile.spending_categories) or '(any)'}")
    print(f"Joining fee: {profile.joining_fee_preference.value}")
    print(f"Preferred brands: {', '.join(profile.preferred_brands) or '(none)'}")

    print("\n--- Funnel ---\n")
    print(f"Catalog:           {stats.total}")
    print(f"After eligibility: {stats.after_eligibility}")
    print(f"After category:    {stats.after_category}")
    print(f"After preference:  {stats.after_preference}")
    print(f"Recommended:       {stats.final}")
    if result.scenario is not None:
        print(f"Scoring scenario:  {result.scenario.name}")

    notice = brand_mismatch_notice(profile.preferred_brands, result.available_brands, result.brand_mismatch)
    if notice:
        print(f"\n{notice}")

    message = empty_state_message(stats)
    if message:
        print(f"\n{message}\n")
        return

    print("\n--- Ranked Cards ---\n")
    for i, scored in enumerate(result.recommendations, 1):
        card = scored.card
        print(f"{i}. {card.name} ({card.bank}) - score {scored.score:.1f}")
        breakdown = ", ".join(f"{name} {value:.1f}" for name, value in scored.score_breakdown.items() if value)
        print(f"   • Breakdown: {breakdown or '-'}")
        print(f"   • {scored.reasoning}")
        print()


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Credit Card Funnel Recommendation CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--verbose", action="store_true", help="Show funnel debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Catalog command
    parser_catalog = subparsers.add_parser("catalog", help="List the card catalog")
    parser_catalog.add_argument("--csv", default=str(CSV_PATH), help="Catalog CSV path")

    # Recommend command
    parser_recommend = subparsers.add_parser("recommend", help="Get card recommendations")
    parser_recommend.add_argument("--income", type=float, required=True, help="Monthly income")
    parser_recommend.add_argument("--credit-score", type=int, required=True, help="Credit score (300-900)")
    parser_recommend.add_argument("--category", action="append", help="Spending category (repeatable)")
    parser_recommend.add_argument(
        "--fee",
        default=FeePreference.NO_CONCERN.value,
        choices=[p.value for p in FeePreference],
        help="Joining fee preference",
    )
    parser_recommend.add_argument("--brand", action="append", help="Preferred brand (repeatable)")
    parser_recommend.add_argument("--max", type=int, default=DEFAULT_MAX_RESULTS, help="Maximum results")
    parser_recommend.add_argument("--csv", default=str(CSV_PATH), help="Catalog CSV path")

    # Parse arguments
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Execute command
    if args.command == "catalog":
        cmd_catalog(args)
    elif args.command == "recommend":
        cmd_recommend(args)


if __name__ == "__main__":
    main()
