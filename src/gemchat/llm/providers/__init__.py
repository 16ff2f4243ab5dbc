from .gemini import GeminiCompletionService

__all__ = [
    "GeminiCompletionService",
]
