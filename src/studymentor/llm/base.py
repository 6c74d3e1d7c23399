from abc import ABC, abstractmethod
from typing import Any


class TextGenerator(ABC):
    """Abstract base class for generative-text clients.

    This module hides the design decision of which endpoint answers the
    mentor prompt. Implementations must handle:
    - Credential checks and client setup
    - Request/response format conversion
    - Mapping provider failures onto ConfigurationError, TransportError
      and ShapeError

    Supports async context manager protocol for proper resource cleanup:
        async with generator:
            text = await generator.generate(prompt)
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Model name used for generation."""

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Generate text for a single prompt.

        One round trip: no retry, no timeout, no cancellation.

        Args:
            prompt: Complete instruction string

        Returns:
            Generated text, trimmed of surrounding whitespace

        Raises:
            ConfigurationError: No credential is configured
            TransportError: Non-success HTTP status or unreachable endpoint
            ShapeError: Response lacks the expected text path
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "TextGenerator":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
