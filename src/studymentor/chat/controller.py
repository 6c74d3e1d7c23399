"""Transcript controller.

Owns the transcript and the idle/awaiting-reply state machine. The view
only dispatches submit and clear actions here and renders what comes back.
"""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from ..errors import REPLY_ERRORS, ReplyPendingError
from ..llm import TextGenerator
from ..profile import StudentProfile
from ..prompts import build_prompt
from .models import ChatState, Message, PendingReply, Sender
from .transcript import TranscriptStore

ERROR_REPLY = "Sorry, I encountered an error. Please check your internet connection and try again."


class ChatController:
    """Chat session for one student profile.

    States:
        IDLE: accepting input
        AWAITING_REPLY: one request in flight, further submissions rejected

    Every transcript change is written through to the TranscriptStore.
    """

    def __init__(
        self,
        profile: StudentProfile,
        generator: TextGenerator,
        transcript: TranscriptStore,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._profile = profile
        self._generator = generator
        self._transcript = transcript
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._messages: list[Message] = []
        self._state = ChatState.IDLE
        self._generation = 0
        self._last_id_ms = 0
        self._debug_callback: Any | None = None

    @property
    def profile(self) -> StudentProfile:
        return self._profile

    @property
    def generator(self) -> TextGenerator:
        return self._generator

    @property
    def messages(self) -> tuple[Message, ...]:
        """Transcript snapshot in chronological order."""
        return tuple(self._messages)

    @property
    def state(self) -> ChatState:
        return self._state

    @property
    def is_awaiting_reply(self) -> bool:
        return self._state == ChatState.AWAITING_REPLY

    @property
    def generation(self) -> int:
        """Counter bumped by every clear."""
        return self._generation

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for execution logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Chat", message)

    def _new_message(self, content: str, sender: Sender) -> Message:
        now = self._clock()
        # Ids come from the clock but must stay unique within a session
        id_ms = max(int(now.timestamp() * 1000), self._last_id_ms + 1)
        self._last_id_ms = id_ms
        return Message(id=str(id_ms), content=content, sender=sender, timestamp=now)

    async def _append(self, message: Message) -> None:
        self._messages.append(message)
        await self._transcript.save(self._messages)

    async def load(self) -> tuple[Message, ...]:
        """Replace the transcript with the persisted one.

        Raises:
            PersistenceError: If the stored transcript is malformed
        """
        self._messages = await self._transcript.load()
        for m in self._messages:
            # Ids can be ahead of their timestamps
            seed = int(m.id) if m.id.isdigit() else int(m.timestamp.timestamp() * 1000)
            self._last_id_ms = max(self._last_id_ms, seed)
        self._debug("info", f"Loaded {len(self._messages)} message(s) from {self._transcript.store.backend_type} store")
        return self.messages

    def can_submit(self, text: str) -> bool:
        """True when idle and the trimmed text is non-empty."""
        return not self.is_awaiting_reply and bool(text.strip())

    async def submit_query(self, text: str) -> PendingReply | None:
        """Append the user's message and enter AWAITING_REPLY.

        Args:
            text: Raw input; surrounding whitespace is trimmed

        Returns:
            Ticket for await_reply(), or None for empty input (nothing appended)

        Raises:
            ReplyPendingError: If a reply is already outstanding
        """
        query = text.strip()
        if not query:
            return None
        if self.is_awaiting_reply:
            self._debug("warning", "Submission rejected: reply pending")
            raise ReplyPendingError()

        user_message = self._new_message(query, Sender.USER)
        self._state = ChatState.AWAITING_REPLY
        try:
            await self._append(user_message)
        except BaseException:
            self._state = ChatState.IDLE
            raise

        prompt = build_prompt(self._profile, query)
        self._debug("debug", f"Prompt built ({len(prompt)} chars) for generation {self._generation}")
        return PendingReply(user_message=user_message, prompt=prompt, generation=self._generation)

    async def await_reply(self, pending: PendingReply) -> Message | None:
        """Run the request for a ticket and append its reply.

        Any generator failure becomes the fixed error reply. A reply for a
        transcript that has since been cleared is dropped.

        Returns:
            The appended bot message, or None if the reply was stale
        """
        try:
            try:
                content = await self._generator.generate(pending.prompt)
                self._debug("info", f"Reply received from {self._generator.model} ({len(content)} chars)")
            except REPLY_ERRORS as e:
                self._debug("error", f"{type(e).__name__}: {e}")
                content = ERROR_REPLY
            except Exception as e:
                self._debug("error", f"Unexpected {type(e).__name__}: {e}")
                content = ERROR_REPLY

            if pending.generation != self._generation:
                self._debug("warning", "Discarding reply for a cleared transcript")
                return None

            reply = self._new_message(content, Sender.BOT)
            await self._append(reply)
            return reply
        finally:
            self._state = ChatState.IDLE

    async def send(self, text: str) -> Message | None:
        """Submit a query and wait for its reply.

        Returns:
            The appended reply, or None for empty input or a stale reply
        """
        pending = await self.submit_query(text)
        if pending is None:
            return None
        return await self.await_reply(pending)

    async def clear(self) -> None:
        """Empty the transcript and remove its persisted copy.

        Does not cancel an outstanding request; its reply will be dropped.
        """
        self._messages = []
        self._generation += 1
        await self._transcript.clear()
        self._debug("info", "Transcript cleared")
