from .base import TextGenerator
from .factory import create_text_generator
from .models import DEFAULT_GENERATION_CONFIG, GenerationConfig
from .providers import GeminiGenerator

__all__ = [
    "DEFAULT_GENERATION_CONFIG",
    "GeminiGenerator",
    "GenerationConfig",
    "TextGenerator",
    "create_text_generator",
]
