"""Browser front-end."""

from humansort.web.app_state import (
    Action,
    AddItem,
    AppState,
    AppStateStore,
    AppView,
    ChangeView,
    RemoveItem,
    RenameItem,
    SelectPreference,
    SetBatchSize,
    parse_action,
)
from humansort.web.server import HumansortHandler, make_server, serve

__all__ = [
    "Action",
    "AddItem",
    "AppState",
    "AppStateStore",
    "AppView",
    "ChangeView",
    "HumansortHandler",
    "RemoveItem",
    "RenameItem",
    "SelectPreference",
    "SetBatchSize",
    "make_server",
    "parse_action",
    "serve",
]
