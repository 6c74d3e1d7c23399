"""UI constants for the mentor TUI: log levels, input history, timing."""


class LogLevel:
    """Thresholds for the mentor log panel.

    The controller reports level names ("debug", "info", "warning",
    "error"); the panel compares their numeric values.
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _by_name = {"debug": DEBUG, "info": INFO, "warning": WARNING, "error": ERROR}

    @classmethod
    def name(cls, level: int) -> str:
        """Upper-case label shown in the panel."""
        for label, value in cls._by_name.items():
            if value == level:
                return label.upper()
        return "UNKNOWN"

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Numeric level for a --log-level value; unknown names mean DEBUG."""
        return cls._by_name.get(level_str.strip().lower(), cls.DEBUG)


# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100  # Maximum entries in input history

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages

# Chat display configuration
MESSAGE_TIME_FORMAT = "%H:%M"
INPUT_PLACEHOLDER = "Ask me anything about your studies..."

# Typing indicator
TYPING_FRAME_INTERVAL = 0.2  # Seconds between animation frames
