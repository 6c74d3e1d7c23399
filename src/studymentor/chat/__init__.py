"""Chat module for studymentor.

Holds the transcript, its persistence, and the submit/reply/clear flow.
"""

from .controller import ERROR_REPLY, ChatController
from .models import ChatState, Message, PendingReply, Sender
from .transcript import DEFAULT_TRANSCRIPT_KEY, TranscriptStore, dumps, loads

__all__ = [
    "DEFAULT_TRANSCRIPT_KEY",
    "ERROR_REPLY",
    "ChatController",
    "ChatState",
    "Message",
    "PendingReply",
    "Sender",
    "TranscriptStore",
    "dumps",
    "loads",
]
