"""humansort - rank a list of items by picking favourites from small batches."""

from .config import Config, get_config
from .models import RankingState, RatedItem
from .ranking import (
    DuplicateItem,
    InsufficientItems,
    InvalidBatchSize,
    RankingError,
    TooFewItems,
    UnknownItem,
    add_item,
    apply_judgment,
    drain_ranked,
    from_items,
    merge,
    remove_item,
    rename_item,
    select_batch,
    set_batch_size,
)
from .storage import StateFile, deserialize_state, serialize_state

__version__ = "0.1.0"

__all__ = [
    "Config",
    "get_config",
    "RankingState",
    "RatedItem",
    "RankingError",
    "InsufficientItems",
    "TooFewItems",
    "UnknownItem",
    "DuplicateItem",
    "InvalidBatchSize",
    "from_items",
    "select_batch",
    "apply_judgment",
    "drain_ranked",
    "merge",
    "add_item",
    "rename_item",
    "remove_item",
    "set_batch_size",
    "StateFile",
    "serialize_state",
    "deserialize_state",
]
