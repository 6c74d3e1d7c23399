"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.

Layout, top to bottom:
- profile card (fixed height)
- chat history (fills remaining space)
- typing indicator (only while a reply is pending)
- input bar
- log panel (hidden unless enabled)
"""

APP_CSS = """
/* ============================================
   Main Screen Layout
   ============================================ */
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Profile Card
   ============================================ */
#profile-card {
    height: auto;
    margin: 1 2 0 2;
    padding: 0 1;
    background: $surface;
    border: round $secondary 60%;
    border-title-color: $secondary;
    border-title-style: bold;
    border-title-align: left;
}

#profile-grid {
    grid-size: 2;
    grid-gutter: 0 2;
    height: auto;
}

.profile-field {
    height: auto;
    margin-bottom: 1;
    color: $text-muted;
}

#profile-about {
    margin-bottom: 0;
}

/* ============================================
   Chat History Panel - Primary Focus Area
   ============================================ */
#chat-history {
    height: 1fr;
    margin: 1 2 0 2;
    padding: 0 1;
    background: $surface;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

#empty-state {
    width: 100%;
    content-align: center middle;
    text-align: center;
    color: $text-muted;
    padding: 2 0;
}

/* ============================================
   Message Bubbles
   ============================================ */
.chat-message {
    height: auto;
    width: 70%;
    margin: 1 0 0 0;
    padding: 0 1;
}

.user-message {
    background: $primary;
    color: #ffffff;
    border: round $primary;
    margin-left: 2;
}

.bot-message {
    background: $panel;
    color: $foreground;
    border: round $accent 50%;
    margin-right: 2;
}

.message-header {
    height: 1;
    text-style: bold;
}

.message-content {
    height: auto;
    margin: 0;
    padding: 0;
    background: transparent;
}

.message-time {
    height: 1;
    text-style: dim;
}

.user-row {
    height: auto;
    align-horizontal: right;
}

.bot-row {
    height: auto;
    align-horizontal: left;
}

/* ============================================
   Typing Indicator
   ============================================ */
#typing-indicator {
    height: 1;
    margin: 0 3;
    color: $accent;
    text-style: bold;
}

/* ============================================
   Chat Input Bar - Text Entry + Send + Clear
   ============================================ */
ChatInputBar {
    height: 5;
    margin: 1 2;
    padding: 0 1;
    border: round $primary 60%;
    background: $panel;

    &:focus-within {
        border: round $primary;
    }
}

#chat-input {
    width: 1fr;
    border: none;
    background: transparent;
}

#send-btn, #clear-btn {
    min-width: 10;
    margin-left: 1;
}

/* ============================================
   Debug/Log Panel
   ============================================ */
#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    margin: 0 2 1 2;
    background: $surface;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    overflow-y: scroll;
    overflow-x: auto;
    scrollbar-gutter: stable;
}
"""
