"""Student profile module.

Provides the fixed descriptive record the mentor is grounded in.
"""

from .loader import load_profile
from .models import DEFAULT_PROFILE, StudentProfile

__all__ = [
    "DEFAULT_PROFILE",
    "StudentProfile",
    "load_profile",
]
