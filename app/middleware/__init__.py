"""Middleware module for TradeVision."""

from app.middleware.rate_limit import limiter, rate_limit_ai, rate_limit_standard, RateLimitExceeded

__all__ = ["limiter", "rate_limit_ai", "rate_limit_standard", "RateLimitExceeded"]
