"""Data model for the student profile.

The profile is read-only configuration: it is injected into the prompt
builder and the view, and never written back by the chat.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

Percentage = Annotated[int, Field(ge=0, le=100)]


class StudentProfile(BaseModel):
    """Descriptive record for the student the mentor talks to."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Student's first name")
    schedule: str = Field(default="", description="Free-text daily schedule")
    marks: dict[str, Percentage] = Field(
        default_factory=dict,
        description="Subject name to integer percentage, in display order"
    )
    interests: list[str] = Field(default_factory=list, description="Hobbies and interests")
    likes: list[str] = Field(default_factory=list, description="Preferred ways of learning")
    dislikes: list[str] = Field(default_factory=list, description="Learning challenges")
    description: str = Field(default="", description="Free-text notes about the student")

    @property
    def weakest_subject(self) -> str | None:
        """Subject with the lowest mark, or None when no marks are recorded."""
        if not self.marks:
            return None
        return min(self.marks, key=self.marks.__getitem__)


DEFAULT_PROFILE = StudentProfile(
    name="Riya",
    schedule="School 8 AM–2 PM, Dance 5–6 PM, Homework 7–9 PM",
    marks={"Math": 92, "Science": 78, "English": 85, "History": 65},
    interests=["dancing", "reading novels", "cricket"],
    likes=["group study", "interactive learning apps"],
    dislikes=["long lectures", "rote memorization"],
    description="Active student who enjoys creative expression. History is her weakest subject.",
)
