"""Gemini AI Provider implementation.

Uses the google.genai SDK. The SDK call is blocking, so it runs in a
worker thread under the configured timeout.
"""

import asyncio
import logging
from typing import Optional, List, Dict, Any

from google import genai
from google.genai import types

from app.agent.providers import (
    AIProvider,
    ProviderConfig,
    AIMessage,
    AIResponse,
)
from app.exceptions import ProviderError

logger = logging.getLogger(__name__)


class GeminiProvider(AIProvider):
    """Gemini provider for plain text completions."""

    def __init__(self, config: ProviderConfig, client: Optional[genai.Client] = None):
        """Initialize the Gemini provider.

        Args:
            config: Provider configuration with API key and model name
            client: Pre-built genai client, created lazily when omitted
        """
        super().__init__(config)
        self._client = client

    def _get_client(self) -> genai.Client:
        """Get or create the genai client."""
        if self._client is None:
            self._client = genai.Client(api_key=self.config.api_key)
            self._initialized = True
            logger.info(f"Gemini client initialized with model: {self.config.model}")
        return self._client

    def _build_contents(self, messages: List[AIMessage], system: Optional[str]) -> str:
        """Flatten the conversation into a single prompt string."""
        parts = []
        if system:
            parts.append(f"System Instructions:\n{system}")
        parts.extend(msg.content for msg in messages)
        return "\n\n".join(parts)

    def _extract_text(self, response) -> str:
        text = getattr(response, "text", None)
        if text:
            return text

        # Salvage text parts when the convenience accessor is empty
        chunks = []
        for candidate in getattr(response, "candidates", None) or []:
            content = getattr(candidate, "content", None)
            for part in getattr(content, "parts", None) or []:
                if getattr(part, "text", None):
                    chunks.append(part.text)
        return "".join(chunks)

    def _extract_usage(self, response) -> Optional[Dict[str, Any]]:
        usage = getattr(response, "usage_metadata", None)
        if not usage:
            return None
        return {
            "prompt_tokens": getattr(usage, "prompt_token_count", 0) or 0,
            "completion_tokens": getattr(usage, "candidates_token_count", 0) or 0,
        }

    async def create_message(
        self,
        messages: List[AIMessage],
        system: Optional[str] = None,
        max_tokens: Optional[int] = None,
    ) -> AIResponse:
        """Create a message using Gemini.

        Raises:
            ProviderError: On SDK errors, empty responses or timeout
        """
        client = self._get_client()
        config = types.GenerateContentConfig(
            temperature=self.config.temperature,
            max_output_tokens=max_tokens or self.config.max_output_tokens,
        )
        contents = self._build_contents(messages, system)

        logger.debug(f"Gemini request: model={self.config.model}, chars={len(contents)}")
        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(
                    client.models.generate_content,
                    model=self.config.model,
                    contents=contents,
                    config=config,
                ),
                timeout=self.config.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"Gemini call timed out after {self.config.timeout_seconds}s")
            raise ProviderError("Gemini call timed out", provider=self.name) from e
        except Exception as e:
            logger.warning(f"Gemini API error: {e}")
            raise ProviderError(f"Gemini API error: {e}", provider=self.name) from e

        text = self._extract_text(response)
        if not text:
            raise ProviderError("Empty response text from Gemini", provider=self.name)

        return AIResponse(
            content=text,
            model=self.config.model,
            usage=self._extract_usage(response),
            raw_response=response,
        )
