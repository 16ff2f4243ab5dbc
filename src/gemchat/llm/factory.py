from typing import Any

from .base import CompletionService
from .providers import GeminiCompletionService

_PROVIDERS: dict[str, type[CompletionService]] = {
    "gemini": GeminiCompletionService,
}


def create_completion_service(provider: str, **config: Any) -> CompletionService:
    """Build the completion service registered under ``provider``.

    Args:
        provider: Provider name, case-insensitive ('gemini')
        **config: Constructor arguments; ``api_key`` is required, ``model``
            and ``temperature`` are optional

    Returns:
        Completion service ready for use

    Raises:
        ValueError: If no provider has that name
        TypeError: If ``api_key`` is missing

    Example:
        >>> service = create_completion_service("gemini", api_key="...")
    """
    service_cls = _PROVIDERS.get(provider.lower())
    if service_cls is None:
        raise ValueError(f"Unsupported provider: {provider}. Available: {', '.join(sorted(_PROVIDERS))}")
    if "api_key" not in config:
        raise TypeError(f"{provider} provider requires 'api_key'")
    return service_cls(**config)
