"""
JSON file storage for ranking state.

The file holds the rated items and the batch size. The traversal cursor
is not stored and starts at 0 after every load.
"""

import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from humansort.models.state import RankingState

logger = logging.getLogger(__name__)


class StateFileError(Exception):
    """Raised when persisted state cannot be read."""

    pass


def serialize_state(state: RankingState) -> str:
    """Serialize a ranking state to JSON."""
    return state.model_dump_json(indent=2)


def deserialize_state(data: str | bytes) -> RankingState:
    """
    Deserialize JSON to a ranking state.

    Raises:
        StateFileError: If the JSON is malformed or violates the state rules
    """
    try:
        return RankingState.model_validate_json(data)
    except ValidationError as e:
        raise StateFileError(f"Invalid ranking state: {e}") from e


def atomic_write_text(path: Path, content: str, encoding: str = "utf-8") -> None:
    """
    Write text to a file atomically.

    Writes to a temporary file in the same directory, then renames it over
    the destination so readers never see a partial file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, temp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "w", encoding=encoding) as f:
            f.write(content)
        os.replace(temp_path, path)
    except BaseException:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


class StateFile:
    """
    A ranking state persisted as a JSON file.

    Each load/save is a full read or write of the file; callers do one
    load-mutate-save cycle per operation.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> RankingState:
        """
        Read the state from disk.

        Raises:
            StateFileError: If the file is missing or invalid
        """
        try:
            data = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise StateFileError(f"State file not found: {self.path}") from e
        except OSError as e:
            raise StateFileError(f"Cannot read state file {self.path}: {e}") from e

        state = deserialize_state(data)
        logger.debug(f"Loaded {len(state.items)} items from {self.path}")
        return state

    def save(self, state: RankingState) -> None:
        """Write the state to disk, replacing any previous version."""
        atomic_write_text(self.path, serialize_state(state) + "\n")
        logger.debug(f"Saved {len(state.items)} items to {self.path}")


def default_state_path(list_path: str | Path, suffix: str = ".humansort") -> Path:
    """State file path for a list file: the list path plus suffix."""
    path = Path(list_path)
    return path.with_name(path.name + suffix)
