"""Google Gemini completion service built on the google-genai SDK.

Gemini may return no text at all, for example when a safety filter
blocks the answer. That comes back as empty content rather than an
error; the gateway substitutes its fallback reply.
"""

from typing import Any

from google import genai
from google.genai import types

from ..base import CompletionService
from ..models import CompletionResponse

DEFAULT_MODEL = "gemini-2.5-flash"


class GeminiCompletionService(CompletionService):
    """Completion service backed by ``client.aio.models.generate_content``.

    Hidden design decisions:
    - SDK client construction and credentials
    - Collecting text from the first candidate
    - Mapping usage metadata to token counts
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        temperature: float | None = None,
        **client_kwargs: Any
    ):
        """
        Args:
            api_key: Google AI API key
            model: Model name, e.g. gemini-2.5-flash or gemini-2.5-pro
            temperature: Sampling temperature, None keeps the model default
            **client_kwargs: Passed through to genai.Client
        """
        self._client = genai.Client(api_key=api_key, **client_kwargs)
        self._model = model
        self._temperature = temperature

    @property
    def model(self) -> str:
        return self._model

    async def complete(self, prompt: str, model: str | None = None, **kwargs: Any) -> CompletionResponse:
        """Send ``prompt`` as a single user content.

        Args:
            prompt: Full prompt text
            model: Overrides the default model for this call
            **kwargs: Extra GenerateContentConfig fields

        Returns:
            CompletionResponse with the candidate text and token usage
        """
        model_name = model or self._model
        config = None
        if self._temperature is not None or kwargs:
            config = types.GenerateContentConfig(temperature=self._temperature, **kwargs)

        response = await self._client.aio.models.generate_content(
            model=model_name,
            contents=prompt,
            config=config,
        )
        return CompletionResponse(
            content=_response_text(response),
            model=model_name,
            usage=_usage(response.usage_metadata),
        )

    async def close(self) -> None:
        # genai.Client holds no connection that needs explicit release
        return None


def _response_text(response: Any) -> str:
    """Join the text parts of the first candidate, or "" if there are none."""
    candidates = response.candidates or []
    content = candidates[0].content if candidates else None
    parts = (content.parts or []) if content else []
    text = "".join(part.text for part in parts if getattr(part, "text", None))
    if text:
        return text
    try:
        return response.text or ""
    except (ValueError, AttributeError):
        return ""


def _usage(metadata: Any) -> dict[str, int] | None:
    if not metadata:
        return None
    return {
        "prompt_tokens": metadata.prompt_token_count or 0,
        "completion_tokens": metadata.candidates_token_count or 0,
        "total_tokens": metadata.total_token_count or 0,
    }
