from fastapi import Depends
from sqlalchemy.orm import Session

from app.config import settings
from app.dependencies.db import get_db
from app.services.catalog_service import CatalogService
from app.services.recommendation_service import RecommendationService
from app.services.submission_service import SubmissionLogger


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    return CatalogService(db)


def get_recommendation_service(
    catalog_service: CatalogService = Depends(get_catalog_service),
) -> RecommendationService:
    # Result limit comes from MAX_RECOMMENDATIONS; requests may override it per call.
    return RecommendationService(catalog_service, max_results=settings.max_recommendations)


def get_submission_logger() -> SubmissionLogger:
    return SubmissionLogger(
        webhook_url=settings.submission_webhook_url,
        secret=settings.submission_webhook_secret,
        timeout=settings.submission_timeout_seconds,
    )
