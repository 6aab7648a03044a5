"""Exception types for the analysis pipeline.

Only ValidationError ever reaches the HTTP layer. ProviderError and
ParseError are absorbed by VideoAnalyzer, which answers with a fallback
report instead.
"""

from fastapi import status


class AnalysisError(Exception):
    """Base exception for all analysis errors."""

    def __init__(self, message: str = "analysis failed"):
        self.message = message
        super().__init__(self.message)


class ValidationError(AnalysisError):
    """Bad or missing user input (HTTP 400)."""

    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.status_code = status_code
        super().__init__(message)


class ProviderError(AnalysisError):
    """Metadata or AI provider call failed or timed out."""

    def __init__(self, message: str, provider: str = "unknown"):
        self.provider = provider
        super().__init__(message)


class ParseError(AnalysisError):
    """AI response did not contain a decodable report."""
