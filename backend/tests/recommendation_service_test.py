import sys
import unittest
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


# Ensure `backend/` is on sys.path so `import app...` works
REPO_ROOT = Path(__file__).resolve().parents[2]
BACKEND_DIR = REPO_ROOT / "backend"
sys.path.insert(0, str(BACKEND_DIR))

from app.db.db import Base  # noqa: E402
from app.services.catalog_service import CatalogService, load_catalog_csv, seed_catalog  # noqa: E402
from app.services.errors import ServiceError  # noqa: E402
from app.services.recommendation_service import (  # noqa: E402
    RecommendationService,
    brand_mismatch_notice,
    empty_state_message,
)
from funnel.models import FunnelStats, UserProfile  # noqa: E402


class RecommendationServiceTests(unittest.TestCase):
    def setUp(self):
        engine = create_engine(
            "sqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(bind=engine)
        self.Session = sessionmaker(bind=engine)

        with self.Session() as db:
            inserted = seed_catalog(db, load_catalog_csv(REPO_ROOT / "data" / "card_catalogue.csv"))
            self.assertEqual(inserted, 14)

    def test_seed_is_skipped_when_catalog_present(self):
        with self.Session() as db:
            self.assertEqual(seed_catalog(db, load_catalog_csv(REPO_ROOT / "data" / "card_catalogue.csv")), 0)
            self.assertEqual(len(CatalogService(db).get_catalog()), 14)

    def test_recommendations_respect_fee_and_limit(self):
        profile = UserProfile(
            monthly_income=40000,
            credit_score=730,
            spending_categories=("dining", "online"),
            joining_fee_preference="low_fee",
        )
        with self.Session() as db:
            result = RecommendationService(CatalogService(db), max_results=3).recommend(profile)

        self.assertLessEqual(len(result.recommendations), 3)
        self.assertTrue(result.recommendations)
        for scored in result.recommendations:
            self.assertLessEqual(scored.card.joining_fee, 1000)
            self.assertLessEqual(scored.card.min_monthly_income, 40000)
        scores = [s.score for s in result.recommendations]
        self.assertEqual(scores, sorted(scores, reverse=True))

    def test_max_results_override(self):
        profile = UserProfile(monthly_income=200000, credit_score=800)
        with self.Session() as db:
            result = RecommendationService(CatalogService(db)).recommend(profile, max_results=2)

        self.assertEqual(len(result.recommendations), 2)
        self.assertEqual(result.stats.after_preference, 14)

    def test_preferred_brand_cards_come_first(self):
        profile = UserProfile(
            monthly_income=200000,
            credit_score=800,
            spending_categories=("shopping",),
            preferred_brands=("Kotak Mahindra Bank",),
        )
        with self.Session() as db:
            result = RecommendationService(CatalogService(db)).recommend(profile)

        self.assertFalse(result.brand_mismatch)
        self.assertEqual(result.recommendations[0].card.bank, "Kotak Mahindra Bank")
        self.assertEqual(result.recommendations[0].tier, "preferred_brand")

    def test_empty_catalog_raises_service_error(self):
        engine = create_engine("sqlite:///:memory:", poolclass=StaticPool)
        Base.metadata.create_all(bind=engine)
        with sessionmaker(bind=engine)() as db:
            with self.assertRaises(ServiceError) as ctx:
                RecommendationService(CatalogService(db)).recommend(UserProfile(monthly_income=0, credit_score=700))

        self.assertEqual(ctx.exception.status_code, 503)
        self.assertEqual(ctx.exception.code, "CATALOG_UNAVAILABLE")


class BrandMismatchNoticeTests(unittest.TestCase):
    def test_no_notice_without_mismatch(self):
        self.assertIsNone(brand_mismatch_notice(["HDFC Bank"], ["HDFC Bank"], False))

    def test_single_brand(self):
        self.assertEqual(
            brand_mismatch_notice(["Amex"], ["Axis Bank", "SBI Card"], True),
            "Note: Amex is not available for your current preferences. "
            "Showing best alternatives from available brands: Axis Bank, SBI Card.",
        )

    def test_multiple_brands(self):
        notice = brand_mismatch_notice(["Amex", "Citi"], ["Axis Bank"], True)
        self.assertTrue(notice.startswith("Note: Amex, Citi are not available"))

    def test_no_available_brands(self):
        self.assertEqual(
            brand_mismatch_notice(["Amex"], [], True),
            "Note: Amex is not available for your current preferences.",
        )


class EmptyStateMessageTests(unittest.TestCase):
    def test_results_present(self):
        self.assertIsNone(empty_state_message(FunnelStats(5, 4, 3, 2, 2)))

    def test_stage_where_funnel_emptied(self):
        self.assertIn("income", empty_state_message(FunnelStats(5, 0, 0, 0, 0)))
        self.assertIn("spending categories", empty_state_message(FunnelStats(5, 4, 0, 0, 0)))
        self.assertIn("joining fee", empty_state_message(FunnelStats(5, 4, 3, 0, 0)))
        self.assertIn("No credit cards", empty_state_message(FunnelStats()))


if __name__ == "__main__":
    unittest.main()
