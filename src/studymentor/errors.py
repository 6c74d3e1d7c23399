"""Error taxonomy for studymentor.

The three API client errors (configuration, transport, shape) are caught at the
chat submission boundary and turned into one user-visible reply. The remaining
errors propagate to the caller.
"""


class MentorError(Exception):
    """Base class for studymentor errors."""


class ConfigurationError(MentorError):
    """No credential configured for the generative-text endpoint."""

    def __init__(self, message: str = "Gemini API key not found. Set GEMINI_API_KEY in your environment or .env file."):
        super().__init__(message)


class TransportError(MentorError):
    """The endpoint answered with a non-success status or could not be reached."""

    def __init__(self, message: str, status: int | None = None):
        if status is not None:
            message = f"Gemini API error: {status} ({message})"
        else:
            message = f"Gemini API unreachable: {message}"
        super().__init__(message)
        self.status = status


class ShapeError(MentorError):
    """The response is missing the candidates/content/text path."""

    def __init__(self, message: str = "Invalid response from Gemini API"):
        super().__init__(message)


class PersistenceError(MentorError):
    """Stored transcript data could not be read back."""


class ReplyPendingError(MentorError):
    """A submission arrived while a reply is still outstanding."""

    def __init__(self):
        super().__init__("A reply is still pending; wait for it before sending another message")


# Errors converted into the fixed connectivity reply
REPLY_ERRORS = (ConfigurationError, TransportError, ShapeError)
