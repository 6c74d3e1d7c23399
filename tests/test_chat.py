"""Tests for the transcript model, its persistence and the chat controller."""
import asyncio
import json
from datetime import datetime, timezone

import httpx
import pytest
from google.genai import errors as genai_errors
from hypothesis import given, settings
from hypothesis import strategies as st

from conftest import FakeGenAIClient, StubGenerator
from studymentor.chat import (
    ERROR_REPLY,
    ChatController,
    ChatState,
    Message,
    Sender,
    TranscriptStore,
)
from studymentor.chat.transcript import DEFAULT_TRANSCRIPT_KEY, dumps, loads
from studymentor.errors import (
    ConfigurationError,
    PersistenceError,
    ReplyPendingError,
    ShapeError,
    TransportError,
)
from studymentor.llm import GeminiGenerator
from studymentor.storage import InMemoryKeyValueStore

T0 = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


def _message(id: str, content: str, sender: Sender = Sender.USER) -> Message:
    return Message(id=id, content=content, sender=sender, timestamp=T0)


class TestTranscriptSerialization:
    """Tests for dumps/loads."""

    def test_dumps_writes_array_of_records(self):
        raw = dumps([_message("1714555800000", "hi"), _message("1714555801000", "hello", Sender.BOT)])
        data = json.loads(raw)

        assert [set(record) for record in data] == [{"id", "content", "sender", "timestamp"}] * 2
        assert data[0]["sender"] == "user"
        assert data[1]["sender"] == "bot"
        assert data[0]["timestamp"].startswith("2024-05-01T09:30:00")

    def test_loads_restores_messages(self):
        raw = json.dumps([
            {"id": "1", "content": "How do I study History?", "sender": "user",
             "timestamp": "2024-05-01T09:30:00Z"},
        ])
        [message] = loads(raw)
        assert message.sender == Sender.USER
        assert message.timestamp == T0

    @pytest.mark.parametrize("raw", [
        "not json",
        '{"id": "1"}',
        '[{"id": "1", "content": "x", "sender": "parent", "timestamp": "2024-05-01T09:30:00Z"}]',
        '[{"id": "1", "sender": "user"}]',
    ])
    def test_malformed_transcript_raises_persistence_error(self, raw):
        with pytest.raises(PersistenceError):
            loads(raw)

    @given(st.lists(
        st.builds(
            Message,
            id=st.integers(min_value=0, max_value=2**53).map(str),
            content=st.text(),
            sender=st.sampled_from(Sender),
            timestamp=st.datetimes(
                min_value=datetime(2000, 1, 1), max_value=datetime(2100, 1, 1),
                timezones=st.just(timezone.utc),
            ),
        ),
        max_size=5,
    ))
    @settings(max_examples=50)
    def test_round_trip_preserves_messages(self, messages):
        assert loads(dumps(messages)) == messages


class TestTranscriptStore:
    """Tests for TranscriptStore."""

    @pytest.mark.asyncio
    async def test_absent_key_loads_empty(self, transcript):
        assert await transcript.load() == []

    @pytest.mark.asyncio
    async def test_save_uses_chat_messages_key(self, memory_store, transcript):
        await transcript.save([_message("1", "hi")])
        assert DEFAULT_TRANSCRIPT_KEY == "chatMessages"
        assert list(memory_store.snapshot()) == ["chatMessages"]

    @pytest.mark.asyncio
    async def test_empty_transcript_is_not_written(self, memory_store, transcript):
        await transcript.save([])
        assert memory_store.snapshot() == {}

    @pytest.mark.asyncio
    async def test_clear_removes_key(self, memory_store, transcript):
        await transcript.save([_message("1", "hi")])
        await transcript.clear()
        assert memory_store.snapshot() == {}

    @pytest.mark.asyncio
    async def test_malformed_value_raises(self):
        transcript = TranscriptStore(InMemoryKeyValueStore({"chatMessages": "{oops"}))
        with pytest.raises(PersistenceError):
            await transcript.load()


class TestChatController:
    """Tests for ChatController with a stub generator."""

    @pytest.mark.asyncio
    async def test_round_trip_appends_user_then_bot(self, make_controller, stub_generator, transcript):
        controller = make_controller(stub_generator)

        reply = await controller.send("  How should I study History?  ")

        assert [m.sender for m in controller.messages] == [Sender.USER, Sender.BOT]
        assert controller.messages[0].content == "How should I study History?"
        assert reply == controller.messages[1]
        assert reply.content == "Try a timeline for History."
        assert controller.state == ChatState.IDLE
        assert await transcript.load() == list(controller.messages)

    @pytest.mark.asyncio
    async def test_prompt_embeds_profile_and_query(self, make_controller, stub_generator):
        controller = make_controller(stub_generator)
        await controller.send("How should I study History?")

        [prompt] = stub_generator.prompts
        assert "Name: Riya" in prompt
        assert "Student Query: How should I study History?" in prompt

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    async def test_blank_input_is_ignored(self, make_controller, stub_generator, memory_store, text):
        controller = make_controller(stub_generator)

        assert not controller.can_submit(text)
        assert await controller.submit_query(text) is None
        assert controller.messages == ()
        assert controller.state == ChatState.IDLE
        assert stub_generator.prompts == []
        assert memory_store.snapshot() == {}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        ConfigurationError(),
        TransportError("Internal error", status=500),
        TransportError("connection refused"),
        ShapeError(),
    ])
    async def test_client_errors_become_error_reply(self, make_controller, error):
        controller = make_controller(StubGenerator(error=error))

        reply = await controller.send("hello")

        assert reply.sender == Sender.BOT
        assert reply.content == ERROR_REPLY
        assert len(controller.messages) == 2
        assert controller.state == ChatState.IDLE

    @pytest.mark.asyncio
    async def test_second_submission_rejected_while_pending(self, make_controller):
        generator = StubGenerator(gated=True)
        controller = make_controller(generator)

        pending = await controller.submit_query("first")
        assert controller.is_awaiting_reply
        assert not controller.can_submit("second")
        with pytest.raises(ReplyPendingError):
            await controller.submit_query("second")

        generator.release()
        await controller.await_reply(pending)
        assert [m.content for m in controller.messages] == ["first", "Try a timeline for History."]
        assert controller.can_submit("second")

    @pytest.mark.asyncio
    async def test_user_message_persisted_before_reply(self, make_controller, transcript):
        generator = StubGenerator(gated=True)
        controller = make_controller(generator)

        pending = await controller.submit_query("first")
        assert [m.content for m in await transcript.load()] == ["first"]

        generator.release()
        await controller.await_reply(pending)
        assert len(await transcript.load()) == 2

    @pytest.mark.asyncio
    async def test_clear_empties_transcript_and_store(self, make_controller, stub_generator, memory_store):
        controller = make_controller(stub_generator)
        await controller.send("hello")

        await controller.clear()

        assert controller.messages == ()
        assert memory_store.snapshot() == {}
        assert await controller.load() == ()

    @pytest.mark.asyncio
    async def test_reply_after_clear_is_discarded(self, make_controller, memory_store):
        generator = StubGenerator(gated=True)
        controller = make_controller(generator)

        pending = await controller.submit_query("first")
        task = asyncio.create_task(controller.await_reply(pending))
        await asyncio.sleep(0)
        await controller.clear()
        assert controller.is_awaiting_reply

        generator.release()
        assert await task is None
        assert controller.messages == ()
        assert memory_store.snapshot() == {}
        assert controller.state == ChatState.IDLE

    @pytest.mark.asyncio
    async def test_load_restores_previous_session(self, make_controller, stub_generator, transcript):
        first = make_controller(stub_generator)
        await first.send("hello")

        second = make_controller(StubGenerator())
        restored = await second.load()

        assert restored == first.messages
        await second.send("again")
        assert len(second.messages) == 4

    @pytest.mark.asyncio
    async def test_message_ids_unique_and_increasing(self, profile, transcript):
        fixed = lambda: T0  # noqa: E731
        controller = ChatController(profile, StubGenerator(), transcript, clock=fixed)

        await controller.send("one")
        await controller.send("two")

        ids = [int(m.id) for m in controller.messages]
        assert ids == sorted(set(ids))
        assert ids[0] == int(T0.timestamp() * 1000)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        ConnectionRefusedError(111, "Connection refused"),
        ValueError("Failed to parse response"),
        RuntimeError("unexpected SDK failure"),
    ])
    async def test_unexpected_errors_become_error_reply(self, make_controller, error):
        events = []
        controller = make_controller(StubGenerator(error=error))
        controller.set_debug_callback(lambda level, component, message: events.append((level, message)))

        reply = await controller.send("hello")

        assert reply.content == ERROR_REPLY
        assert [m.sender for m in controller.messages] == [Sender.USER, Sender.BOT]
        assert controller.state == ChatState.IDLE
        assert any(level == "error" and type(error).__name__ in message for level, message in events)

    @pytest.mark.asyncio
    async def test_ids_stay_unique_across_reload(self, profile, transcript):
        fixed = lambda: T0  # noqa: E731
        first = ChatController(profile, StubGenerator(), transcript, clock=fixed)
        await first.send("one")

        second = ChatController(profile, StubGenerator(), transcript, clock=fixed)
        await second.load()
        await second.send("two")

        ids = [m.id for m in second.messages]
        assert len(set(ids)) == len(ids) == 4
        assert [int(i) for i in ids] == sorted(int(i) for i in ids)

    @pytest.mark.asyncio
    async def test_debug_callback_receives_events(self, make_controller, stub_generator):
        events = []
        controller = make_controller(stub_generator)
        controller.set_debug_callback(lambda level, component, message: events.append((level, component)))

        await controller.send("hello")
        await controller.clear()

        assert ("info", "Chat") in events
        assert {component for _, component in events} == {"Chat"}


@pytest.mark.integration
class TestControllerWithGemini:
    """End-to-end tests through GeminiGenerator with a fake SDK client."""

    @pytest.mark.asyncio
    async def test_successful_reply(self, make_controller):
        client = FakeGenAIClient()
        controller = make_controller(GeminiGenerator(api_key="fake-key", client=client))

        reply = await controller.send("What should I revise?")

        assert reply.content == "Keep practicing History!"
        assert "Student Query: What should I revise?" in client.calls[0]["contents"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        genai_errors.ServerError(500, {"error": {"code": 500, "message": "Internal error", "status": "INTERNAL"}}),
        httpx.ConnectError("unreachable"),
    ])
    async def test_failures_become_error_reply(self, make_controller, error):
        controller = make_controller(GeminiGenerator(api_key="fake-key", client=FakeGenAIClient(error=error)))

        reply = await controller.send("hello")

        assert reply.content == ERROR_REPLY

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        ConnectionRefusedError(111, "Connection refused"),
        getattr(genai_errors, "UnknownApiResponseError", ValueError)("Failed to parse response as JSON"),
    ])
    async def test_sdk_failures_outside_httpx_become_error_reply(self, make_controller, error):
        controller = make_controller(GeminiGenerator(api_key="fake-key", client=FakeGenAIClient(error=error)))

        reply = await controller.send("hello")

        assert reply.content == ERROR_REPLY
        assert [m.sender for m in controller.messages] == [Sender.USER, Sender.BOT]

    @pytest.mark.asyncio
    async def test_missing_key_never_calls_api(self, make_controller):
        client = FakeGenAIClient()
        controller = make_controller(GeminiGenerator(api_key=None, client=client))

        reply = await controller.send("hello")

        assert reply.content == ERROR_REPLY
        assert client.calls == []
        assert [m.sender for m in controller.messages] == [Sender.USER, Sender.BOT]
