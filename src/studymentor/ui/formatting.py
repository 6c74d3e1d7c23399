"""Text formatting utilities for the TUI.

Hides how timestamps, profile fields and greetings are turned into display text.
"""

from datetime import datetime

from rich.markup import escape

from ..profile import StudentProfile
from ..prompts import format_list, format_marks
from .config import MESSAGE_TIME_FORMAT


def format_time_of_day(timestamp: datetime) -> str:
    """Render a timestamp as local hours and minutes (HH:MM)."""
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone()
    return timestamp.strftime(MESSAGE_TIME_FORMAT)


def greeting(name: str) -> str:
    """Empty-transcript greeting."""
    return f"Hi {name}! How can I help you with your studies today?"


def format_marks_markup(profile: StudentProfile) -> str:
    """Marks as Rich markup with the weakest subject emphasized."""
    weakest = profile.weakest_subject
    if weakest is None or len(profile.marks) < 2:
        return escape(format_marks(profile.marks))

    parts = []
    for subject, mark in profile.marks.items():
        text = escape(f"{subject}: {mark}%")
        parts.append(f"[bold]{text}[/bold]" if subject == weakest else text)
    return ", ".join(parts)


def profile_fields(profile: StudentProfile) -> list[tuple[str, str]]:
    """Labeled profile fields shown on the profile card, as (label, markup)."""
    return [
        ("Schedule", escape(profile.schedule)),
        ("Academic Performance", format_marks_markup(profile)),
        ("Interests", escape(format_list(profile.interests))),
        ("Learning Preferences", escape(format_list(profile.likes))),
    ]
