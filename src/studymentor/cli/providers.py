"""Provider factory functions for CLI.

Centralizes creation of the profile, text generator, and stores from
environment variables. Hides configuration details from command implementations.
"""

import os
from pathlib import Path

from rich.console import Console

from ..chat import ChatController, TranscriptStore
from ..llm import TextGenerator, create_text_generator
from ..profile import StudentProfile, load_profile
from ..storage import KeyValueStore, create_key_value_store

# Default console for output
_console = Console()

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_STORE = "json"
_DEFAULT_STORE_PATHS = {
    "json": "~/.studymentor/storage.json",
    "sqlite": "~/.studymentor/storage.db",
}


def get_profile(path: str | Path | None = None) -> StudentProfile:
    """Load the student profile.

    Args:
        path: Explicit profile path; falls back to MENTOR_PROFILE, then the built-in profile

    Environment variables:
        MENTOR_PROFILE: Path to a JSON profile file (optional)
    """
    return load_profile(path or os.getenv("MENTOR_PROFILE") or None)


def get_generator(console: Console | None = None) -> TextGenerator:
    """Create the text generator from environment variables.

    A missing key is reported here but does not stop the app: every request
    then fails with ConfigurationError and shows the error reply.

    Environment variables:
        GEMINI_API_KEY: Gemini API key (required for replies)
        GEMINI_MODEL: Gemini model (default: gemini-2.5-flash)
    """
    con = console or _console
    api_key = os.getenv("GEMINI_API_KEY", "").strip()
    if not api_key:
        con.print("[yellow]Warning: GEMINI_API_KEY not set, the mentor cannot reply[/yellow]")
    model = os.getenv("GEMINI_MODEL", DEFAULT_MODEL)
    return create_text_generator("gemini", api_key=api_key or None, model=model)


def get_store(backend: str | None = None, path: str | None = None) -> KeyValueStore:
    """Create the key-value store from environment variables.

    Returns:
        Store instance (not yet connected)

    Environment variables:
        MENTOR_STORE: Backend type (json, sqlite, memory; default: json)
        MENTOR_STORE_PATH: File path for json/sqlite backends
    """
    backend = (backend or os.getenv("MENTOR_STORE", DEFAULT_STORE)).lower()
    if backend == "memory":
        return create_key_value_store("memory")

    store_path = path or os.getenv("MENTOR_STORE_PATH") or _DEFAULT_STORE_PATHS.get(backend)
    if store_path is None:
        return create_key_value_store(backend)
    return create_key_value_store(backend, path=store_path)


def build_controller(
    store: KeyValueStore,
    generator: TextGenerator,
    profile: StudentProfile,
) -> ChatController:
    """Wire a chat controller from its collaborators."""
    return ChatController(
        profile=profile,
        generator=generator,
        transcript=TranscriptStore(store),
    )
