"""Pytest configuration and shared fixtures."""
import asyncio
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from google.genai import types

from studymentor.chat import ChatController, TranscriptStore
from studymentor.llm import TextGenerator
from studymentor.profile import DEFAULT_PROFILE
from studymentor.storage import InMemoryKeyValueStore

SUCCESS_BODY = {
    "candidates": [
        {"content": {"parts": [{"text": "Keep practicing History!"}]}}
    ]
}


class FakeModels:
    """Stands in for client.aio.models and records every request."""

    def __init__(self, body: dict | None = None, error: Exception | None = None):
        self.body = body if body is not None else SUCCESS_BODY
        self.error = error
        self.calls: list[dict] = []

    async def generate_content(self, *, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        return types.GenerateContentResponse.model_validate(self.body)


class FakeGenAIClient:
    """Minimal google-genai client exposing aio.models.generate_content."""

    def __init__(self, body: dict | None = None, error: Exception | None = None):
        self.models = FakeModels(body=body, error=error)
        self.aio = SimpleNamespace(models=self.models)

    @property
    def calls(self) -> list[dict]:
        return self.models.calls


class StubGenerator(TextGenerator):
    """Scripted generator; optionally blocks until release() is called."""

    def __init__(self, reply: str = "Try a timeline for History.", error: Exception | None = None, gated: bool = False):
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []
        self._gate = asyncio.Event()
        if not gated:
            self._gate.set()
        self.closed = False

    @property
    def model(self) -> str:
        return "stub-model"

    def release(self) -> None:
        self._gate.set()

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        await self._gate.wait()
        if self.error is not None:
            raise self.error
        return self.reply.strip()

    async def close(self) -> None:
        self.closed = True


class TickingClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(seconds=1)
        return current


@pytest.fixture
def profile():
    """Return the built-in student profile."""
    return DEFAULT_PROFILE


@pytest.fixture
def memory_store():
    """Return an empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def transcript(memory_store):
    """Return a transcript store backed by memory."""
    return TranscriptStore(memory_store)


@pytest.fixture
def stub_generator():
    """Return a generator that answers immediately."""
    return StubGenerator()


@pytest.fixture
def clock():
    """Return a deterministic clock."""
    return TickingClock()


@pytest.fixture
def make_controller(profile, transcript, clock):
    """Build a controller around a given generator."""
    def _make(generator: TextGenerator, store_transcript: TranscriptStore | None = None) -> ChatController:
        return ChatController(
            profile=profile,
            generator=generator,
            transcript=store_transcript or transcript,
            clock=clock,
        )
    return _make
