"""Pytest configuration and shared fixtures."""

import os
import tempfile

# Must be set before app.config.get_settings() is first called
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["GEMINI_API_KEY"] = ""
os.environ["SIMULATE_COMMENTS"] = "true"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="tradevision-test-")

import json
import random
from typing import List, Optional

import pytest

from app.agent.providers import AIMessage, AIProvider, AIResponse, ModelProvider, ProviderConfig
from app.config import Settings
from app.exceptions import ProviderError
from app.models.video import ClassificationResult, VideoContext
from app.tools.video_metadata import SIMULATED_COMMENTS, is_valid_youtube_url

SAMPLE_URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"

AI_REPORT = json.dumps({
    "summary": {
        "total_trades": 1,
        "win_rate": 100,
        "total_points": 22,
        "main_assets": ["EURUSD"],
        "trading_platform": "MetaTrader 4",
        "session_type": "scalping",
    },
    "trades": [
        {
            "id": 1,
            "timestamp": "04:10",
            "asset": "EURUSD",
            "direction": "LONG",
            "entry_price": 1.0851,
            "exit_price": 1.0873,
            "points": 22,
            "result": "WIN",
            "setup_type": "breakout",
            "justification": "Rompimento na abertura de Londres",
        }
    ],
    "insights": ["Rompimento com volume na abertura"],
})


class ConstantRandom(random.Random):
    """Random source with fixed draws: random() is 0.5, randrange(n) is 0."""

    def random(self) -> float:
        return 0.5

    def randrange(self, *args, **kwargs) -> int:
        return 0


class StubProvider(AIProvider):
    """AI provider that returns a canned completion or raises."""

    def __init__(self, text: str = "", error: Optional[Exception] = None):
        super().__init__(ProviderConfig(provider=ModelProvider.GEMINI, model="stub-model", api_key="test"))
        self.text = text
        self.error = error
        self.prompts: List[str] = []

    async def create_message(self, messages: List[AIMessage], system=None, max_tokens=None) -> AIResponse:
        self.prompts.append(messages[-1].content)
        if self.error is not None:
            raise self.error
        return AIResponse(content=self.text, model=self.config.model)


class StubMetadataSource:
    """Metadata source returning a fixed context, or failing."""

    def __init__(self, context: Optional[VideoContext] = None, error: Optional[Exception] = None):
        self.context = context
        self.error = error
        self.fetched: List[str] = []

    def is_valid_url(self, url: str) -> bool:
        return is_valid_youtube_url(url)

    async def fetch(self, url: str) -> VideoContext:
        self.fetched.append(url)
        if self.error is not None:
            raise self.error
        return self.context.model_copy(update={"url": url})


@pytest.fixture
def constant_rng() -> ConstantRandom:
    return ConstantRandom()


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings isolated from the environment and .env file."""
    return Settings(
        _env_file=None,
        gemini_api_key="",
        rate_limit_enabled=False,
        upload_dir=str(tmp_path / "uploads"),
    )


@pytest.fixture
def eurusd_context() -> VideoContext:
    """Metadata of a 20 minute EUR/USD scalping video."""
    return VideoContext(
        url=SAMPLE_URL,
        title="Scalping EUR/USD ao vivo - rompimento na abertura de Londres",
        description="Operações rápidas no euro dólar aproveitando a volatilidade.",
        author="Trader Londres",
        duration_seconds=1200,
        tags=["forex", "scalping", "eurusd"],
        top_comments=list(SIMULATED_COMMENTS),
        views=15230,
        upload_date="2024-03-01",
        content_extracted=True,
    )


@pytest.fixture
def eurusd_classification() -> ClassificationResult:
    from app.tools.classifier import classify

    return classify("Scalping EUR/USD com rompimento em mercado volátil")


@pytest.fixture
def failing_provider() -> StubProvider:
    return StubProvider(error=ProviderError("quota exceeded", provider="gemini"))


@pytest.fixture
def metadata_source(eurusd_context) -> StubMetadataSource:
    return StubMetadataSource(context=eurusd_context)
