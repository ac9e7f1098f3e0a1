"""
Service settings with environment variable overrides.
"""

import logging
import os

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid %s value %r; falling back to default %s", name, raw, default)
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid %s value %r; falling back to default %s", name, raw, default)
        return default


def _env_log_level(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Invalid %s value %r; falling back to default %s", name, raw, default)
        return default
    return level


class Settings:
    """Centralized service settings, read once per instance."""

    def __init__(self):
        self.database_url = os.getenv("DATABASE_URL", "sqlite:///./cardfunnel.db")
        self.catalog_csv_path = os.getenv("CATALOG_CSV_PATH", "data/card_catalogue.csv")
        self.log_level = _env_log_level("LOG_LEVEL", "INFO")

        self.max_recommendations = _env_int("MAX_RECOMMENDATIONS", 7)
        if self.max_recommendations < 1:
            logger.warning(
                "MAX_RECOMMENDATIONS must be >= 1; falling back to default 7"
            )
            self.max_recommendations = 7

        # Submission logging is disabled when no webhook URL is configured
        self.submission_webhook_url = os.getenv("SUBMISSION_WEBHOOK_URL") or None
        self.submission_webhook_secret = os.getenv("SUBMISSION_WEBHOOK_SECRET", "")
        self.submission_timeout_seconds = _env_float("SUBMISSION_TIMEOUT_SECONDS", 5.0)


settings = Settings()
