"""Terminal UI module for studymentor.

Provides a Textual-based TUI for the mentor chat.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (profile card, bubbles, typing indicator, input bar, log panel)
- formatting.py: Display text for timestamps and profile fields
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- config.py: UI constants and log levels
- app.py: Application orchestration (user interaction flow)
"""

from .app import MentorApp, run_textual_tui
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, ProfileCard, TypingIndicator

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "LogLevel",
    "MentorApp",
    "ProfileCard",
    "TypingIndicator",
    "run_textual_tui",
]
