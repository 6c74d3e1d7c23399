"""Data models for the chat transcript.

These models define the structure of messages independent of how the
transcript is stored or displayed.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Sender(str, Enum):
    """Origin of a message."""

    USER = "user"
    BOT = "bot"


class ChatState(str, Enum):
    """Controller state: accepting input, or one reply outstanding."""

    IDLE = "idle"
    AWAITING_REPLY = "awaiting_reply"


class Message(BaseModel):
    """A single transcript entry. Never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique id derived from the creation time in epoch milliseconds")
    content: str = Field(description="Message text")
    sender: Sender = Field(description="Who produced the message")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_user(self) -> bool:
        return self.sender == Sender.USER


@dataclass(frozen=True)
class PendingReply:
    """Ticket for one outstanding request.

    generation identifies the transcript the request belongs to; a clear
    starts a new generation and makes older tickets stale.
    """

    user_message: Message
    prompt: str
    generation: int
