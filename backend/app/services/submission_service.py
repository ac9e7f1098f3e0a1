"""
Submission logging for analytics.

Posts each recommendation request and its outcome to an external webhook.
Fire-and-forget: failures are logged and reported as False, never raised,
so the recommendation response is never affected.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import requests

from funnel.models import FunnelResult, UserProfile

logger = logging.getLogger(__name__)


SUBMISSION_TYPE = "funnel_based_recommendation"


def build_submission_payload(profile: UserProfile, result: FunnelResult) -> Dict[str, Any]:
    """Build the analytics record for one recommendation request."""
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "monthlyIncome": profile.monthly_income,
        "creditScore": profile.credit_score,
        "spendingCategories": list(profile.spending_categories),
        "joiningFeePreference": profile.joining_fee_preference.value,
        "preferredBrands": list(profile.preferred_brands),
        "submissionType": SUBMISSION_TYPE,
        "funnelStats": result.stats.to_dict(),
        "brandMismatch": result.brand_mismatch,
        "recommendations": [
            {
                "cardName": scored.card.name,
                "bank": scored.card.bank,
                "score": round(scored.score, 2),
            }
            for scored in result.recommendations
        ],
    }


class SubmissionLogger:
    def __init__(self, webhook_url: Optional[str], secret: str = "", timeout: float = 5.0):
        self.webhook_url = webhook_url
        self.secret = secret
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    def submit(self, payload: Dict[str, Any]) -> bool:
        """POST the payload to the webhook. Returns True on a 2xx response."""
        if not self.enabled:
            logger.warning("Submission webhook URL not configured; skipping submission log")
            return False

        headers = {"Content-Type": "application/json"}
        if self.secret:
            headers["Authorization"] = f"Bearer {self.secret}"

        try:
            response = requests.post(self.webhook_url, json=payload, headers=headers, timeout=self.timeout)
        except requests.Timeout:
            logger.warning("Submission webhook timed out after %ss", self.timeout)
            return False
        except requests.RequestException as exc:
            logger.error("Submission webhook error: %s", exc)
            return False

        if not response.ok:
            logger.warning("Submission webhook failed with status %s", response.status_code)
            return False

        logger.info("Submission logged (%s)", payload.get("submissionType", SUBMISSION_TYPE))
        return True

    def submit_result(self, profile: UserProfile, result: FunnelResult) -> bool:
        return self.submit(build_submission_payload(profile, result))
