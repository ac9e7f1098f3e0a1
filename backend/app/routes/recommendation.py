from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends

from app.dependencies.services import get_recommendation_service, get_submission_logger
from app.schemas.recommendation import RecommendationRequest, RecommendationResponse
from app.services.recommendation_service import (
    RecommendationService,
    brand_mismatch_notice,
    empty_state_message,
)
from app.services.submission_service import SubmissionLogger

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["recommendation"])


@router.post("/recommendation", response_model=RecommendationResponse)
def get_recommendation(
    payload: RecommendationRequest,
    background_tasks: BackgroundTasks,
    service: RecommendationService = Depends(get_recommendation_service),
    submission_logger: SubmissionLogger = Depends(get_submission_logger),
):
    """Recommend the best-fit cards from the catalog for the submitted profile.

    Behavior:
    - Runs the eligibility -> category -> preference -> scoring funnel.
    - An empty list is a valid answer; `message` says where the funnel emptied.
    - The request is logged to the submission webhook after the response is sent.
    """
    profile = payload.to_profile()
    result = service.recommend(profile, max_results=payload.max_results)

    if submission_logger.enabled:
        background_tasks.add_task(submission_logger.submit_result, profile, result)

    return RecommendationResponse.from_result(
        result,
        notice=brand_mismatch_notice(profile.preferred_brands, result.available_brands, result.brand_mismatch),
        message=empty_state_message(result.stats),
    )
