"""Rate limiting middleware for TradeVision.

Uses slowapi to provide per-client rate limiting keyed on the remote
address. Every public POST route is decorated; the AI-backed endpoints get a
stricter limit matching the Gemini free-tier quota.
"""

import logging
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from app.config import get_settings

logger = logging.getLogger(__name__)


def get_rate_limit_string(per_minute: int) -> str:
    """Create rate limit string for slowapi."""
    return f"{per_minute}/minute"


_settings = get_settings()

limiter = Limiter(
    key_func=get_remote_address,
    enabled=_settings.rate_limit_enabled,
)

if not _settings.rate_limit_enabled:
    logger.info("Rate limiting disabled")


def rate_limit_ai(func):
    """Stricter rate limit for AI endpoints (expensive operations).

    The decorated endpoint must accept a ``request: Request`` argument.
    """
    return limiter.limit(get_rate_limit_string(_settings.rate_limit_ai_per_minute))(func)


def rate_limit_standard(func):
    """Standard rate limit for cheap endpoints.

    Limits apply only to decorated routes; the decorated endpoint must
    accept a ``request: Request`` argument.
    """
    return limiter.limit(get_rate_limit_string(_settings.rate_limit_per_minute))(func)


__all__ = ["limiter", "RateLimitExceeded", "get_rate_limit_string", "rate_limit_ai", "rate_limit_standard"]
