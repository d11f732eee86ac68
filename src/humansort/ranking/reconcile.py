"""
Reconciliation of ranking state with edited item lists.

Adds, renames and removes items without losing the ratings of the
items that stay.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from humansort.models.state import RankingState, RatedItem
from humansort.ranking.engine import sort_items, validate_batch_size
from humansort.ranking.errors import DuplicateItem, UnknownItem

logger = logging.getLogger(__name__)


@dataclass
class MergeResult:
    """What a merge changed."""

    kept: list[str] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    dropped: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.dropped)


def _clamp_cursor(state: RankingState) -> None:
    if state.cursor > len(state.items):
        state._cursor = len(state.items)


def merge(state: RankingState, new_names: Iterable[str]) -> MergeResult:
    """
    Replace the item list while keeping ratings of surviving items.

    Items missing from new_names are dropped, new names start at 0.0.

    Args:
        state: Ranking state to update in place
        new_names: The updated item list

    Returns:
        MergeResult listing kept, added and dropped names
    """
    wanted = list(dict.fromkeys(new_names))
    wanted_set = set(wanted)
    existing = {item.value for item in state.items}

    result = MergeResult()
    survivors = []
    for item in state.items:
        if item.value in wanted_set:
            survivors.append(item)
            result.kept.append(item.value)
        else:
            result.dropped.append(item.value)

    for name in wanted:
        if name not in existing:
            survivors.append(RatedItem(value=name))
            result.added.append(name)

    state.items[:] = survivors
    sort_items(state)
    _clamp_cursor(state)

    logger.debug(
        f"Merged item list: {len(result.kept)} kept, "
        f"{len(result.added)} added, {len(result.dropped)} dropped"
    )
    return result


def add_item(state: RankingState, name: str) -> None:
    """
    Add a new item at rating 0.0.

    Raises:
        DuplicateItem: If an item with this name exists
    """
    if name in state:
        raise DuplicateItem(name)

    state.items.append(RatedItem(value=name))
    sort_items(state)
    logger.debug(f"Added item {name!r}")


def rename_item(state: RankingState, old: str, new: str) -> None:
    """
    Rename an item, keeping its rating.

    Raises:
        UnknownItem: If old is not in the state
        DuplicateItem: If new already names a different item
    """
    index = state.find(old)
    if index is None:
        raise UnknownItem(old)
    if new == old:
        return
    if new in state:
        raise DuplicateItem(new)

    state.items[index].value = new
    sort_items(state)
    logger.debug(f"Renamed item {old!r} to {new!r}")


def remove_item(state: RankingState, name: str) -> None:
    """
    Remove an item. The remaining items keep their order.

    Raises:
        UnknownItem: If name is not in the state
    """
    index = state.find(name)
    if index is None:
        raise UnknownItem(name)

    del state.items[index]
    _clamp_cursor(state)
    logger.debug(f"Removed item {name!r}")


def set_batch_size(state: RankingState, size: int) -> None:
    """
    Change how many items are presented per judgment.

    Raises:
        InvalidBatchSize: If size is outside [2, 9]
    """
    state.batch_size = validate_batch_size(size)
