"""Google Gemini text generator.

Uses the official Google GenAI SDK for the async generateContent call.
Reference: https://github.com/googleapis/python-genai

The mentor sends one prompt per request and expects the reply under
candidates[0].content.parts[*].text. Anything else is a shape failure.
"""

from typing import Any

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from ...errors import ConfigurationError, ShapeError, TransportError
from ..base import TextGenerator
from ..models import DEFAULT_GENERATION_CONFIG, GenerationConfig


class GeminiGenerator(TextGenerator):
    """Google Gemini text generator.

    Hidden design decisions:
    - Lazy GenAI client creation (no client exists without a credential)
    - Generation parameter conversion
    - Mapping SDK and httpx failures onto the mentor error taxonomy
    - Text extraction from the candidate list
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = "gemini-2.5-flash",
        config: GenerationConfig = DEFAULT_GENERATION_CONFIG,
        client: Any | None = None,
        **client_kwargs: Any
    ):
        """Initialize Gemini generator.

        Args:
            api_key: Google AI API key; None or empty defers the failure to generate()
            model: Model name (gemini-2.5-flash, gemini-2.5-pro, ...)
            config: Fixed generation parameters
            client: Pre-built client exposing aio.models.generate_content (tests)
            **client_kwargs: Additional kwargs for genai.Client
        """
        self._api_key = (api_key or "").strip()
        self._model = model
        self._config = config
        self._client = client
        self._client_kwargs = client_kwargs

    @property
    def model(self) -> str:
        """Get the model name."""
        return self._model

    @property
    def has_credential(self) -> bool:
        """Whether an API key is configured."""
        return bool(self._api_key)

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key, **self._client_kwargs)
        return self._client

    def _build_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            temperature=self._config.temperature,
            top_k=self._config.top_k,
            top_p=self._config.top_p,
            max_output_tokens=self._config.max_output_tokens,
        )

    def _extract_text(self, response: Any) -> str:
        """Extract the generated text from the first candidate.

        Args:
            response: Gemini GenerateContentResponse

        Returns:
            Joined text parts of the first candidate

        Raises:
            ShapeError: If any step of the candidates/content/parts/text path is missing
        """
        candidates = getattr(response, "candidates", None)
        if not candidates:
            raise ShapeError("Invalid response from Gemini API: no candidates")

        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None) if content is not None else None
        if not parts:
            raise ShapeError("Invalid response from Gemini API: candidate has no content")

        texts = [part.text for part in parts if getattr(part, "text", None) is not None]
        if not texts:
            raise ShapeError("Invalid response from Gemini API: candidate has no text")

        return "".join(texts)

    async def generate(self, prompt: str) -> str:
        """Generate a reply for the mentor prompt.

        Args:
            prompt: Complete instruction string

        Returns:
            Generated text, trimmed

        Raises:
            ConfigurationError: If no API key is configured (checked before any network use)
            TransportError: On a non-success HTTP status or connection failure
            ShapeError: On a response without generated text
        """
        if not self._api_key:
            raise ConfigurationError()

        client = self._get_client()
        try:
            response = await client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=self._build_config(),
            )
        except genai_errors.APIError as e:
            raise TransportError(e.message or str(e), status=e.code) from e
        except (httpx.HTTPError, OSError) as e:
            raise TransportError(str(e) or type(e).__name__) from e
        except ValueError as e:
            # UnknownApiResponseError: body could not be parsed
            raise ShapeError(f"Invalid response from Gemini API: {e}") from e
        except Exception as e:
            # Other transports (aiohttp) raise their own client errors
            raise TransportError(f"{type(e).__name__}: {e}") from e

        return self._extract_text(response).strip()

    async def close(self) -> None:
        """Release the GenAI client.

        Note: The Google GenAI client doesn't require explicit closing,
        but we implement this for interface consistency.
        """
        self._client = None
