"""Key-value persistence module for studymentor.

Provides the durable store the chat transcript is mirrored to.
"""

from .base import KeyValueStore
from .factory import create_key_value_store
from .in_memory import InMemoryKeyValueStore

__all__ = [
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "create_key_value_store",
]
