from typing import Any

from .base import TextGenerator
from .providers import GeminiGenerator


def create_text_generator(provider: str = "gemini", **config: Any) -> TextGenerator:
    """Create a text generator instance.

    This factory function hides the instantiation logic for different providers.

    Args:
        provider: Provider type (only 'gemini' is supported)
        **config: Provider-specific configuration
            For Gemini:
                - api_key: str | None (missing key fails on first request)
                - model: str (default: 'gemini-2.5-flash')
                - config: GenerationConfig (default: fixed mentor parameters)

    Returns:
        Initialized text generator

    Raises:
        ValueError: If provider type is not supported

    Examples:
        >>> generator = create_text_generator(
        ...     "gemini",
        ...     api_key="...",
        ...     model="gemini-2.5-flash"
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower == "gemini":
        return GeminiGenerator(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'gemini'"
    )
