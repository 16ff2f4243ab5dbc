from .base import CompletionService
from .factory import create_completion_service
from .models import CompletionResponse
from .providers import GeminiCompletionService

__all__ = [
    "CompletionResponse",
    "CompletionService",
    "GeminiCompletionService",
    "create_completion_service",
]
