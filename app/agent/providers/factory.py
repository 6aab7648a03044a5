"""AI Provider factory.

Builds provider instances from explicit application settings. Instances
are created once at startup and kept on the application state.
"""

import logging
from typing import List, Optional

from app.config import Settings
from app.agent.providers import (
    ModelProvider,
    ProviderConfig,
    AIProvider,
)
from app.agent.providers.gemini_provider import GeminiProvider

logger = logging.getLogger(__name__)


def get_provider_config(provider: ModelProvider, settings: Settings) -> ProviderConfig:
    """Get the configuration for a specific provider.

    Args:
        provider: The provider to get configuration for
        settings: Application settings

    Returns:
        ProviderConfig with all settings populated

    Raises:
        ValueError: If the provider's API key is not configured
    """
    if provider == ModelProvider.GEMINI:
        if not settings.gemini_api_key:
            raise ValueError(
                "Gemini API key not configured. "
                "Set GEMINI_API_KEY in your environment or .env file."
            )
        return ProviderConfig(
            provider=provider,
            model=settings.gemini_model,
            api_key=settings.gemini_api_key,
            temperature=settings.ai_temperature,
            max_output_tokens=settings.ai_max_output_tokens,
            timeout_seconds=settings.ai_timeout_seconds,
        )

    raise ValueError(f"Unknown provider: {provider}")


def create_provider(provider: ModelProvider, settings: Settings) -> AIProvider:
    """Create a new provider instance.

    Raises:
        ValueError: If the provider is not configured or unknown
    """
    config = get_provider_config(provider, settings)

    if provider == ModelProvider.GEMINI:
        return GeminiProvider(config)

    raise ValueError(f"Unknown provider: {provider}")


def is_provider_available(provider: ModelProvider, settings: Settings) -> bool:
    """Check if a provider has its API key configured."""
    if provider == ModelProvider.GEMINI:
        return bool(settings.gemini_api_key)
    return False


def get_available_providers(settings: Settings) -> List[ModelProvider]:
    return [p for p in ModelProvider if is_provider_available(p, settings)]


def create_default_provider(settings: Settings) -> Optional[AIProvider]:
    """Create the first configured provider, or None when none is configured.

    Without a provider every analysis is answered with a fallback report.
    """
    available = get_available_providers(settings)
    if not available:
        logger.warning("⚠ No AI provider API key configured - analyses will use fallback reports")
        return None

    provider = create_provider(available[0], settings)
    logger.info(f"✓ AI provider ready: {provider.name} ({provider.model})")
    return provider
