"""AI Provider abstraction layer for TradeVision.

This module provides a unified interface for generative-AI text providers,
so the analysis pipeline can run against Gemini in production and against
a stub in tests.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class ModelProvider(str, Enum):
    """Supported AI model providers."""
    GEMINI = "gemini"


class ProviderConfig(BaseModel):
    """Configuration for an AI provider."""
    provider: ModelProvider
    model: str = Field(..., description="Model ID used for completions")
    api_key: str = Field(..., description="API key for the provider")
    temperature: float = Field(0.7, description="Sampling temperature")
    max_output_tokens: int = Field(4096, description="Maximum tokens in a completion")
    timeout_seconds: float = Field(45.0, description="Per-call timeout")


class AIMessage(BaseModel):
    """A message in a conversation."""
    role: str = Field(..., description="Message role: 'user', 'assistant', or 'system'")
    content: str = Field(..., description="Message content")


class AIResponse(BaseModel):
    """Response from an AI provider."""
    content: str = Field(..., description="Text content of the response")
    model: Optional[str] = Field(None, description="Model that produced the response")
    usage: Optional[Dict[str, Any]] = Field(None, description="Token usage information")
    raw_response: Optional[Any] = Field(None, description="Raw response object from the provider", exclude=True)


class AIProvider(ABC):
    """Abstract base class for AI providers.

    Implementations must raise ProviderError for any failed or timed-out
    call so the caller can fall back.
    """

    def __init__(self, config: ProviderConfig):
        """Initialize the provider with configuration.

        Args:
            config: Provider configuration including API key and model name
        """
        self.config = config
        self._initialized = False
        logger.info(f"Initializing {config.provider.value} provider")

    @abstractmethod
    async def create_message(
        self,
        messages: List[AIMessage],
        system: Optional[str] = None,
        max_tokens: Optional[int] = None,
    ) -> AIResponse:
        """Create a message using the AI model.

        Args:
            messages: Conversation history
            system: System prompt
            max_tokens: Maximum tokens in response, config default when None

        Returns:
            AIResponse with the text completion

        Raises:
            ProviderError: If the call fails or times out
        """
        pass

    async def complete(self, prompt: str) -> str:
        """Send a single user prompt and return the text completion."""
        response = await self.create_message([AIMessage(role="user", content=prompt)])
        return response.content

    @property
    def name(self) -> str:
        return self.config.provider.value

    @property
    def model(self) -> str:
        return self.config.model


__all__ = [
    "ModelProvider",
    "ProviderConfig",
    "AIMessage",
    "AIResponse",
    "AIProvider",
]
