"""State persistence."""

from humansort.storage.state_file import (
    StateFile,
    StateFileError,
    atomic_write_text,
    default_state_path,
    deserialize_state,
    serialize_state,
)

__all__ = [
    "StateFile",
    "StateFileError",
    "atomic_write_text",
    "default_state_path",
    "deserialize_state",
    "serialize_state",
]
