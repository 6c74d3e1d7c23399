"""
studymentor: a personalized study mentor chat for one student, backed by Gemini.

Each subpackage hides one design decision: where the profile comes from,
how the prompt is worded, which endpoint answers, where the transcript is
kept, and how the conversation is displayed.
"""

__version__ = "0.1.0"

from .chat import ChatController, ChatState, Message, Sender, TranscriptStore
from .errors import (
    ConfigurationError,
    MentorError,
    PersistenceError,
    ReplyPendingError,
    ShapeError,
    TransportError,
)
from .profile import DEFAULT_PROFILE, StudentProfile, load_profile

__all__ = [
    "DEFAULT_PROFILE",
    "ChatController",
    "ChatState",
    "ConfigurationError",
    "MentorError",
    "Message",
    "PersistenceError",
    "ReplyPendingError",
    "Sender",
    "ShapeError",
    "StudentProfile",
    "TranscriptStore",
    "TransportError",
    "load_profile",
]
