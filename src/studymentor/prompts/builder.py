"""Prompt builder.

Serializes the student profile and one query into the single instruction
string sent to the model.
"""

from ..profile import StudentProfile


def format_marks(marks: dict[str, int]) -> str:
    """Render marks as "Subject: NN%" joined by commas, in insertion order."""
    return ", ".join(f"{subject}: {mark}%" for subject, mark in marks.items())


def format_list(items: list[str]) -> str:
    """Render an ordered list of strings as comma-separated text."""
    return ", ".join(items)


def build_prompt(profile: StudentProfile, query: str, template: str | None = None) -> str:
    """Build the mentor prompt for a query.

    Args:
        profile: Student the mentor is grounded in
        query: The student's question (already trimmed by the caller)
        template: Template override; defaults to the "mentor" prompt file

    Returns:
        The complete instruction string
    """
    if template is None:
        from . import get_mentor_template
        template = get_mentor_template()

    return template.format(
        name=profile.name,
        schedule=profile.schedule,
        marks=format_marks(profile.marks),
        interests=format_list(profile.interests),
        likes=format_list(profile.likes),
        dislikes=format_list(profile.dislikes),
        description=profile.description,
        query=query,
    ).rstrip("\n")
