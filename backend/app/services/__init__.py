from .catalog_service import CatalogService, load_catalog_csv, seed_catalog
from .errors import ServiceError
from .recommendation_service import RecommendationService, brand_mismatch_notice, empty_state_message
from .submission_service import SubmissionLogger, build_submission_payload

__all__ = [
    "CatalogService",
    "load_catalog_csv",
    "seed_catalog",
    "ServiceError",
    "RecommendationService",
    "brand_mismatch_notice",
    "empty_state_message",
    "SubmissionLogger",
    "build_submission_payload",
]
