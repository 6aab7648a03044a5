"""Video analysis agent.

VideoAnalyzer runs one analysis request end to end and is the only
place where provider and parse failures are absorbed: anything that
goes wrong after input validation is answered with a fallback report
built from the same locally generated session.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional, Protocol

from app.agent.providers import AIProvider
from app.agent.report_builder import (
    CONTENT_REAL,
    CONTENT_UPLOAD,
    build_fallback_report,
    build_prompt,
    complete_report,
)
from app.agent.response_parser import parse_report
from app.config import Settings
from app.exceptions import ParseError, ProviderError, ValidationError
from app.models.report import Report
from app.models.video import ClassificationResult, VideoContext
from app.tools.classifier import classify
from app.tools.trade_generator import GeneratedSession, TradeGenerator

logger = logging.getLogger(__name__)


class MetadataSource(Protocol):
    """Anything that can validate a video URL and fetch its metadata."""

    def is_valid_url(self, url: str) -> bool: ...

    async def fetch(self, url: str) -> VideoContext: ...


@dataclass
class AnalysisOutcome:
    """Result of one analysis request."""
    report: Report
    context: VideoContext
    classification: ClassificationResult
    used_fallback: bool = False
    error: Optional[str] = None


class VideoAnalyzer:
    """Analyzes trading videos with an AI provider and a local fallback.

    Args:
        settings: Application settings
        provider: AI provider, or None to always use the fallback
        metadata_source: Source for URL validation and video metadata
        rng: Random source for the synthetic trade generator
    """

    def __init__(
        self,
        settings: Settings,
        provider: Optional[AIProvider],
        metadata_source: MetadataSource,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings
        self.provider = provider
        self.metadata_source = metadata_source
        self.generator = TradeGenerator(
            rng=rng,
            enforce_consistency=settings.enforce_trade_consistency,
        )

    def validate_url(self, url: Optional[str]) -> str:
        """Check the URL is present and YouTube-shaped.

        Raises:
            ValidationError: If the URL is missing or malformed
        """
        if not url:
            raise ValidationError("url required")
        if not self.metadata_source.is_valid_url(url):
            raise ValidationError("invalid url")
        return url

    async def load_context(self, url: str) -> VideoContext:
        """Fetch video metadata, falling back to a placeholder context."""
        try:
            return await self.metadata_source.fetch(url)
        except ProviderError as e:
            logger.warning(f"Metadata extraction failed for {url}: {e.message}")
            return VideoContext.placeholder(url)

    async def analyze_url(self, url: Optional[str]) -> AnalysisOutcome:
        """Analyze a YouTube video by URL.

        Raises:
            ValidationError: If the URL is missing or malformed; nothing else
        """
        url = self.validate_url(url)
        logger.info(f"Starting analysis for {url}")

        context = VideoContext.placeholder(url)
        classification = classify(url)
        session: Optional[GeneratedSession] = None
        try:
            context = await self.load_context(url)
            classification = classify(context.content_text())
            session = self._generate(context, classification)
            report = await self._ai_report(context, classification, session, CONTENT_REAL)
            return AnalysisOutcome(report=report, context=context, classification=classification)
        except Exception as e:
            return self._fallback(context, classification, session, e)

    async def analyze_upload(
        self,
        filename: str,
        size_bytes: int,
        content_type: Optional[str] = None,
    ) -> AnalysisOutcome:
        """Analyze an uploaded video using what its filename reveals."""
        logger.info(f"Starting upload analysis for {filename} ({size_bytes} bytes)")

        context = VideoContext(
            url=filename,
            title=filename,
            description=f"Upload de vídeo ({content_type or 'tipo desconhecido'})",
            author="Upload do usuário",
            duration_seconds=0,
            content_extracted=False,
        )
        classification = classify(context.content_text())
        session: Optional[GeneratedSession] = None
        try:
            session = self._generate(context, classification)
            report = await self._ai_report(context, classification, session, CONTENT_UPLOAD)
            return AnalysisOutcome(report=report, context=context, classification=classification)
        except Exception as e:
            return self._fallback(context, classification, session, e)

    def _generate(self, context: VideoContext, classification: ClassificationResult) -> GeneratedSession:
        return self.generator.generate(
            classification,
            duration_seconds=context.duration_seconds,
            comments=context.top_comments,
            title=context.title if context.content_extracted else None,
        )

    async def _ai_report(
        self,
        context: VideoContext,
        classification: ClassificationResult,
        session: GeneratedSession,
        content_type: str,
    ) -> Report:
        if self.provider is None:
            raise ProviderError("no AI provider configured")

        prompt = build_prompt(context, classification, session, content_type=content_type)
        raw_text = await self.provider.complete(prompt)
        report = parse_report(raw_text)
        logger.info(f"AI report generated for '{context.title}' ({len(report.trades)} trades)")
        return complete_report(report, context, classification, content_type=content_type)

    def _fallback(
        self,
        context: VideoContext,
        classification: ClassificationResult,
        session: Optional[GeneratedSession],
        error: Exception,
    ) -> AnalysisOutcome:
        message = getattr(error, "message", None) or str(error) or type(error).__name__
        if isinstance(error, (ProviderError, ParseError)):
            logger.warning(f"Using fallback report for '{context.title}': {message}")
        else:
            logger.error(f"Unexpected analysis failure for '{context.title}': {message}", exc_info=True)

        if session is None:
            session = self._generate(context, classification)

        return AnalysisOutcome(
            report=build_fallback_report(context, classification, session),
            context=context,
            classification=classification,
            used_fallback=True,
            error=message,
        )
