"""
Ranking module.

Turns batch judgments into ratings and keeps the ranked item list in
step with edits to the underlying list.
"""

from humansort.ranking.engine import (
    SELECTION_BIAS,
    apply_judgment,
    drain_ranked,
    expected_score,
    from_items,
    select_batch,
    sort_items,
    validate_batch_size,
)
from humansort.ranking.errors import (
    DuplicateItem,
    InsufficientItems,
    InvalidBatchSize,
    RankingError,
    TooFewItems,
    UnknownItem,
)
from humansort.ranking.reconcile import (
    MergeResult,
    add_item,
    merge,
    remove_item,
    rename_item,
    set_batch_size,
)

__all__ = [
    "SELECTION_BIAS",
    "DuplicateItem",
    "InsufficientItems",
    "InvalidBatchSize",
    "MergeResult",
    "RankingError",
    "TooFewItems",
    "UnknownItem",
    "add_item",
    "apply_judgment",
    "drain_ranked",
    "expected_score",
    "from_items",
    "merge",
    "remove_item",
    "rename_item",
    "select_batch",
    "set_batch_size",
    "sort_items",
    "validate_batch_size",
]
