from .gemini import GeminiGenerator

__all__ = [
    "GeminiGenerator",
]
