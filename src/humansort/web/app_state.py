"""
Browser app state.

The web front-end keeps one AppState: which view is showing plus the
ranking state. Every user action goes through AppState.reduce, which
returns a new AppState and leaves the old one untouched.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from humansort.models.state import RankingState
from humansort.ranking.engine import apply_judgment
from humansort.ranking.errors import InsufficientItems
from humansort.ranking.reconcile import (
    add_item,
    remove_item,
    rename_item,
    set_batch_size,
)
from humansort.storage.state_file import atomic_write_text

logger = logging.getLogger(__name__)


class AppView(str, Enum):
    """Views of the browser app."""

    INPUT = "input"
    SORTING = "sorting"
    OUTPUT = "output"


# -----------------------------------------------------------------------------
# Actions
# -----------------------------------------------------------------------------


class AddItem(BaseModel):
    type: Literal["add_item"] = "add_item"
    name: str


class RenameItem(BaseModel):
    type: Literal["rename_item"] = "rename_item"
    old_name: str
    new_name: str


class RemoveItem(BaseModel):
    type: Literal["remove_item"] = "remove_item"
    name: str


class SelectPreference(BaseModel):
    """The user picked winner out of a batch containing winner and others."""

    type: Literal["select_preference"] = "select_preference"
    winner: str
    others: list[str]


class ChangeView(BaseModel):
    type: Literal["change_view"] = "change_view"
    new_view: AppView


class SetBatchSize(BaseModel):
    type: Literal["set_batch_size"] = "set_batch_size"
    batch_size: int


Action = Annotated[
    Union[AddItem, RenameItem, RemoveItem, SelectPreference, ChangeView, SetBatchSize],
    Field(discriminator="type"),
]

_action_adapter = TypeAdapter(Action)


def parse_action(data: Any) -> Action:
    """
    Validate a decoded JSON action.

    Raises:
        pydantic.ValidationError: If data is not a known action
    """
    return _action_adapter.validate_python(data)


class AppState(BaseModel):
    """Everything the browser app persists."""

    current_view: AppView = AppView.INPUT
    humansort_state: RankingState = Field(default_factory=RankingState)

    @property
    def can_sort(self) -> bool:
        ranking = self.humansort_state
        return len(ranking.items) >= ranking.batch_size

    def reduce(self, action: Action) -> "AppState":
        """
        Apply an action and return the resulting state.

        Raises:
            RankingError: If the ranking operation is rejected
        """
        ranking = self.humansort_state.model_copy(deep=True)
        view = self.current_view

        if isinstance(action, AddItem):
            name = action.name.strip()
            if name:
                add_item(ranking, name)
        elif isinstance(action, RenameItem):
            new_name = action.new_name.strip()
            if new_name:
                rename_item(ranking, action.old_name, new_name)
        elif isinstance(action, RemoveItem):
            remove_item(ranking, action.name)
        elif isinstance(action, SelectPreference):
            apply_judgment(ranking, [action.winner, *action.others])
        elif isinstance(action, ChangeView):
            if action.new_view == AppView.SORTING and not self.can_sort:
                raise InsufficientItems(len(ranking.items), ranking.batch_size)
            view = action.new_view
        elif isinstance(action, SetBatchSize):
            set_batch_size(ranking, action.batch_size)

        return AppState(current_view=view, humansort_state=ranking)


class AppStateStore:
    """
    Local JSON store for the browser app state.

    A missing or unreadable store yields the default state.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load_or_default(self) -> AppState:
        try:
            data = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return AppState()
        except OSError as e:
            logger.warning(f"Cannot read app state {self.path}, starting fresh: {e}")
            return AppState()

        try:
            state = AppState.model_validate_json(data)
        except ValidationError as e:
            logger.warning(f"Ignoring invalid app state in {self.path}: {e}")
            return AppState()

        return state

    def store(self, state: AppState) -> None:
        atomic_write_text(self.path, state.model_dump_json(indent=2) + "\n")
