"""Main Textual TUI application.

Orchestrates the UI components and dispatches user actions to the
ChatController. The app holds no chat state of its own.
"""

import asyncio

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..chat import ChatController, PendingReply, Sender
from ..errors import ReplyPendingError
from .config import LogLevel
from .styles import APP_CSS
from .themes import MENTOR_INDIGO
from .widgets import (
    ChatHistoryWidget,
    ChatInputBar,
    DebugPanel,
    ProfileCard,
    TypingIndicator,
)


class MentorApp(App):
    """Textual TUI for the student mentor chat."""

    CSS = APP_CSS
    TITLE = "Student Mentor AI"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+k", "clear_chat", "Clear Chat", priority=True),
        Binding("ctrl+r", "copy_last_response", "Copy Reply"),
        Binding("ctrl+d", "toggle_debug", "Log", priority=True),
    ]

    def __init__(
        self,
        controller: ChatController,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._controller = controller
        self._log_level = log_level

    @property
    def controller(self) -> ChatController:
        return self._controller

    def compose(self) -> ComposeResult:
        profile = self._controller.profile
        yield Header(show_clock=True)
        yield ProfileCard(profile, id="profile-card")
        yield ChatHistoryWidget(profile.name, id="chat-history")
        yield TypingIndicator(id="typing-indicator")
        yield ChatInputBar(id="chat-input-bar")
        yield DebugPanel(id="debug-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(MENTOR_INDIGO)
        self.theme = "mentor-indigo"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        self._controller.set_debug_callback(self._route_debug)

        profile = self._controller.profile
        self.sub_title = f"{profile.name} | {self._controller.generator.model}"

        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.load_messages(self._controller.messages)
        self._sync_busy_state()
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def _route_debug(self, level: str, component: str, message: str) -> None:
        """Route controller debug messages to the log panel."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        log_panel.add_entry(component, message, LogLevel.from_string(level))

    def _sync_busy_state(self) -> None:
        busy = self._controller.is_awaiting_reply
        indicator = self.query_one("#typing-indicator", TypingIndicator)
        if busy:
            indicator.start()
        else:
            indicator.stop()
        self.query_one("#chat-input-bar", ChatInputBar).set_busy(busy)

    async def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        try:
            pending = await self._controller.submit_query(event.value)
        except ReplyPendingError:
            self.notify("Please wait for the current reply", severity="warning", timeout=2)
            return
        if pending is None:
            return

        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.add_message(pending.user_message)
        self._sync_busy_state()
        self._await_reply(pending)

    @work(exclusive=True, group="reply")
    async def _await_reply(self, pending: PendingReply) -> None:
        """Wait for the reply as a background async worker."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        log_panel = self.query_one("#debug-panel", DebugPanel)
        try:
            reply = await self._controller.await_reply(pending)
            if reply is not None:
                chat.add_message(reply)
        except asyncio.CancelledError:
            log_panel.warning("TUI", "Reply cancelled")
            raise
        except Exception as e:
            log_panel.error("TUI", f"Exception: {e}")
            self.notify(f"Error: {str(e)[:50]}", severity="error", timeout=5)
        finally:
            self._sync_busy_state()

    async def on_chat_input_bar_clear_requested(self, event: ChatInputBar.ClearRequested) -> None:
        await self.action_clear_chat()

    async def action_clear_chat(self) -> None:
        """Clear the transcript and its persisted copy."""
        await self._controller.clear()
        self.query_one("#chat-history", ChatHistoryWidget).clear_history()
        self.notify("Chat cleared", timeout=2)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last mentor reply to clipboard."""
        for message in reversed(self._controller.messages):
            if message.sender == Sender.BOT:
                self.copy_to_clipboard(message.content)
                self.notify("Reply copied")
                return
        self.notify("No reply to copy", severity="warning")


async def run_textual_tui(
    controller: ChatController,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        controller: Chat controller with its transcript already loaded
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = MentorApp(controller=controller, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        await controller.generator.close()
