"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Profile card layout
- Message bubble rendering and styling per sender
- Typing indicator animation
- Input history and submit/clear controls
- Log rendering and level filtering
"""

from datetime import datetime

from rich.markup import escape
from textual.containers import Grid, Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message as TextualMessage
from textual.timer import Timer
from textual.widgets import Button, Input, Markdown, RichLog, Static

from ..chat import Message
from ..profile import StudentProfile
from .config import (
    INPUT_HISTORY_MAX_SIZE,
    INPUT_PLACEHOLDER,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    TYPING_FRAME_INTERVAL,
    LogLevel,
)
from .formatting import format_time_of_day, greeting, profile_fields


class ProfileCard(Vertical):
    """Read-only card showing the student's profile."""

    def __init__(self, profile: StudentProfile, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._profile = profile
        self.border_title = f"{profile.name}'s Profile"

    def compose(self):
        with Grid(id="profile-grid"):
            for label, value in profile_fields(self._profile):
                yield Static(f"[b]{label}:[/b]\n{value}", classes="profile-field")
        yield Static(
            f"[b]About:[/b]\n{escape(self._profile.description)}",
            id="profile-about",
            classes="profile-field",
        )


class MessageBubble(Vertical):
    """A chat message bubble that copies its content when clicked."""

    def __init__(self, message: Message, *args, **kwargs) -> None:
        sender_class = "user-message" if message.is_user else "bot-message"
        super().__init__(*args, classes=f"chat-message {sender_class}", **kwargs)
        self.message = message

    def compose(self):
        if self.message.is_user:
            yield Static("You", classes="message-header")
            yield Static(escape(self.message.content), classes="message-content")
        else:
            yield Static("Mentor", classes="message-header")
            yield Markdown(self.message.content, classes="message-content")
        yield Static(format_time_of_day(self.message.timestamp), classes="message-time")

    def on_click(self, event: Click) -> None:
        """Copy message content to the clipboard."""
        event.stop()
        self.app.copy_to_clipboard(self.message.content)
        self.app.notify("Copied to clipboard", timeout=2)


class ChatHistoryWidget(VerticalScroll):
    """Scrollable transcript with an empty-state greeting."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Your personalized learning assistant"
    ALLOW_MAXIMIZE = True

    def __init__(self, student_name: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._student_name = student_name
        self._message_ids: list[str] = []
        self.border_title = f"Mentor for {student_name}"

    def compose(self):
        yield Static(greeting(self._student_name), id="empty-state")

    @property
    def message_count(self) -> int:
        return len(self._message_ids)

    def _update_chrome(self) -> None:
        for empty_state in self.query("#empty-state"):
            empty_state.display = not self._message_ids
        if self._message_ids:
            self.border_subtitle = f"{len(self._message_ids)} messages"
        else:
            self.border_subtitle = self.BORDER_SUBTITLE

    def add_message(self, message: Message) -> None:
        """Render one message at the bottom of the transcript."""
        row_class = "user-row" if message.is_user else "bot-row"
        self.mount(
            Horizontal(
                MessageBubble(message, id=f"msg-{message.id}"),
                classes=f"message-row {row_class}",
            )
        )
        self._message_ids.append(message.id)
        self._update_chrome()
        self.scroll_end(animate=False)

    def load_messages(self, messages: tuple[Message, ...] | list[Message]) -> None:
        """Replace the rendered transcript."""
        self.clear_history()
        for message in messages:
            self.add_message(message)

    def clear_history(self) -> None:
        """Remove every rendered message and show the greeting again."""
        self.query(".message-row").remove()
        self._message_ids.clear()
        self._update_chrome()


class TypingIndicator(Static):
    """Three-dot indicator shown while a reply is pending."""

    FRAMES = ("●  ·  ·", "·  ●  ·", "·  ·  ●", "·  ●  ·")

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(self.FRAMES[0], *args, **kwargs)
        self._frame = 0
        self._timer: Timer | None = None

    def on_mount(self) -> None:
        self.display = False
        self._timer = self.set_interval(TYPING_FRAME_INTERVAL, self._advance, pause=True)

    def _advance(self) -> None:
        self._frame = (self._frame + 1) % len(self.FRAMES)
        self.update(self.FRAMES[self._frame])

    @property
    def is_active(self) -> bool:
        return bool(self.display)

    def start(self) -> None:
        """Show and animate the indicator."""
        self._frame = 0
        self.update(self.FRAMES[0])
        self.display = True
        if self._timer is not None:
            self._timer.resume()

    def stop(self) -> None:
        """Hide the indicator."""
        self.display = False
        if self._timer is not None:
            self._timer.pause()


class HistoryInput(Input):
    """Question input that recalls earlier questions with Up/Down."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._asked: list[str] = []
        self._cursor: int | None = None
        self._draft = ""

    def _recall(self, index: int | None) -> None:
        self._cursor = index
        self.value = self._draft if index is None else self._asked[index]
        self.cursor_position = len(self.value)

    def on_key(self, event) -> None:
        if event.key not in ("up", "down"):
            return
        event.prevent_default()
        event.stop()
        if not self._asked:
            return
        if event.key == "up":
            if self._cursor is None:
                self._draft = self.value
                self._recall(len(self._asked) - 1)
            elif self._cursor > 0:
                self._recall(self._cursor - 1)
        elif self._cursor is not None:
            last = len(self._asked) - 1
            self._recall(self._cursor + 1 if self._cursor < last else None)

    def add_to_history(self, entry: str) -> None:
        """Remember a submitted question, skipping immediate repeats."""
        if entry and (not self._asked or self._asked[-1] != entry):
            self._asked.append(entry)
            del self._asked[:-INPUT_HISTORY_MAX_SIZE]
        self._cursor = None
        self._draft = ""


class ChatInputBar(Horizontal):
    """Chat input bar with Input, Send and Clear Chat buttons.

    Send is disabled while the trimmed input is empty or a reply is pending.
    """

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class ClearRequested(TextualMessage):
        """Message sent when the user asks to clear the chat."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._busy = False

    def compose(self):
        yield HistoryInput(placeholder=INPUT_PLACEHOLDER, id="chat-input")
        yield Button("Send", id="send-btn", variant="primary", disabled=True).with_tooltip(
            "Send message (Enter)"
        )
        yield Button("Clear Chat", id="clear-btn", variant="default").with_tooltip(
            "Clear the conversation (Ctrl+K)"
        )

    @property
    def busy(self) -> bool:
        return self._busy

    def set_busy(self, busy: bool) -> None:
        """Disable input while a reply is pending."""
        self._busy = busy
        self.query_one("#chat-input", HistoryInput).disabled = busy
        self._update_send_button()
        if not busy:
            self.focus_input()

    def _update_send_button(self) -> None:
        text = self.query_one("#chat-input", HistoryInput).value
        self.query_one("#send-btn", Button).disabled = self._busy or not text.strip()

    def on_input_changed(self, event: Input.Changed) -> None:
        self._update_send_button()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "send-btn":
            self._submit()
        elif event.button.id == "clear-btn":
            self.post_message(self.ClearRequested())

    def _submit(self) -> None:
        text_input = self.query_one("#chat-input", HistoryInput)
        value = text_input.value.strip()
        if not value or self._busy:
            return
        text_input.add_to_history(value)
        text_input.value = ""
        self.post_message(self.Submitted(value))

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", HistoryInput).focus()


_LEVEL_STYLES = {
    LogLevel.DEBUG: "dim",
    LogLevel.INFO: "blue",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
}

_COMPONENT_STYLES = {
    "TUI": "cyan",
    "Chat": "green",
}


class DebugPanel(RichLog):
    """Chat event log, filtered by level.

    Receives the controller's submit, reply, discard and clear events plus the
    app's own worker errors. Starts hidden; --log-level or Ctrl+D shows it.
    """

    BORDER_TITLE = "Log"

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(*args, markup=True, highlight=False, wrap=False, **kwargs)
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}" if self.display else "Hidden"

    def on_mount(self) -> None:
        self.display = False

    def add_entry(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Write one timestamped line unless it is below the threshold."""
        if level < self._log_level:
            return
        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        level_style = _LEVEL_STYLES.get(level, "default")
        component_style = _COMPONENT_STYLES.get(component, "default")
        self.write(
            f"[dim]{datetime.now().strftime(LOG_TIMESTAMP_FORMAT)}[/] "
            f"[{level_style}]{LogLevel.name(level):<7}[/] "
            f"[{component_style}]\\[{escape(component)}][/] {escape(message)}"
        )

    def info(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.INFO)

    def warning(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.WARNING)

    def error(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.ERROR)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self._update_subtitle()

    def toggle(self) -> bool:
        """Flip visibility and return whether the panel is now shown."""
        if self.display:
            self.hide()
        else:
            self.show()
        return bool(self.display)
