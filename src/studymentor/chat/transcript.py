"""Transcript persistence.

Mirrors the whole transcript into one key of a KeyValueStore: rewritten in
full on every non-empty change, removed on clear, read in full at startup.
"""

from collections.abc import Sequence

from pydantic import TypeAdapter, ValidationError

from ..errors import PersistenceError
from ..storage import KeyValueStore
from .models import Message

DEFAULT_TRANSCRIPT_KEY = "chatMessages"

_transcript_adapter = TypeAdapter(list[Message])


def dumps(messages: Sequence[Message]) -> str:
    """Serialize messages as a JSON array of {id, content, sender, timestamp}."""
    return _transcript_adapter.dump_json(list(messages)).decode("utf-8")


def loads(text: str) -> list[Message]:
    """Parse a serialized transcript.

    Raises:
        PersistenceError: If the text is not a valid serialized transcript
    """
    try:
        return _transcript_adapter.validate_json(text)
    except ValidationError as e:
        raise PersistenceError(f"Stored transcript is malformed:\n{e}") from e


class TranscriptStore:
    """Reads and writes the serialized transcript under a single key."""

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_TRANSCRIPT_KEY):
        self._store = store
        self._key = key

    @property
    def store(self) -> KeyValueStore:
        return self._store

    @property
    def key(self) -> str:
        return self._key

    async def load(self) -> list[Message]:
        """Load the persisted transcript; an absent key yields an empty list.

        Raises:
            PersistenceError: If the stored value cannot be parsed
        """
        raw = await self._store.get(self._key)
        if raw is None:
            return []
        return loads(raw)

    async def save(self, messages: Sequence[Message]) -> None:
        """Rewrite the persisted transcript. An empty transcript is never written."""
        if not messages:
            return
        await self._store.set(self._key, dumps(messages))

    async def clear(self) -> None:
        """Remove the persisted transcript."""
        await self._store.remove(self._key)
