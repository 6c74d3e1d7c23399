"""Profile loading.

Hides where the profile comes from: the built-in default or a JSON file
supplied by the user.
"""

from pathlib import Path

from pydantic import ValidationError

from ..errors import MentorError
from .models import DEFAULT_PROFILE, StudentProfile


def load_profile(path: str | Path | None = None) -> StudentProfile:
    """Load a student profile.

    Args:
        path: JSON file with the profile fields, or None for the built-in profile

    Returns:
        Validated, frozen StudentProfile

    Raises:
        MentorError: If the file is missing or does not describe a valid profile
    """
    if path is None:
        return DEFAULT_PROFILE

    profile_path = Path(path).expanduser()
    try:
        raw = profile_path.read_text(encoding="utf-8")
    except OSError as e:
        raise MentorError(f"Cannot read profile file {profile_path}: {e}") from e

    try:
        return StudentProfile.model_validate_json(raw)
    except ValidationError as e:
        raise MentorError(f"Invalid profile file {profile_path}:\n{e}") from e
