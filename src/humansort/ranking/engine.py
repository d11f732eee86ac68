"""
Ranking engine.

Builds ranking states, picks batches of items to present, and turns a
user's pick into rating updates. Every function here works on a single
RankingState in memory; persistence and prompting live in the shells.
"""

import logging
import random
from collections.abc import Iterable, Iterator, Sequence
from typing import Optional

from humansort.models.state import (
    DEFAULT_BATCH_SIZE,
    MAX_BATCH_SIZE,
    MIN_BATCH_SIZE,
    RankingState,
    RatedItem,
)
from humansort.ranking.errors import (
    DuplicateItem,
    InsufficientItems,
    InvalidBatchSize,
    TooFewItems,
    UnknownItem,
)

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Selection tuning
# -----------------------------------------------------------------------------

# Exponent of the index warp. 1.0 is uniform; larger values favour the
# top of the ranking more strongly.
SELECTION_BIAS = 2.0


def validate_batch_size(size: int) -> int:
    """
    Check a batch size against the supported range.

    Args:
        size: Requested batch size

    Returns:
        The same size

    Raises:
        InvalidBatchSize: If size is not an int in [MIN, MAX]
    """
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidBatchSize(size, MIN_BATCH_SIZE, MAX_BATCH_SIZE)
    if not MIN_BATCH_SIZE <= size <= MAX_BATCH_SIZE:
        raise InvalidBatchSize(size, MIN_BATCH_SIZE, MAX_BATCH_SIZE)
    return size


def sort_items(state: RankingState) -> None:
    """Sort items by rating descending, ties by value."""
    state.items.sort(key=lambda item: (-item.rating, item.value))


def from_items(
    names: Iterable[str],
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> RankingState:
    """
    Create a fresh ranking state from a list of names.

    Later duplicates are dropped; the first occurrence keeps its position.

    Args:
        names: Item names in input order
        batch_size: Items presented per judgment

    Returns:
        RankingState with every item at rating 0.0
    """
    validate_batch_size(batch_size)

    items = [RatedItem(value=name) for name in dict.fromkeys(names)]
    logger.debug(f"Created ranking state with {len(items)} items")

    return RankingState(items=items, batch_size=batch_size)


def _warp(u: float, bias: float) -> float:
    """Monotonic map of [0, 1) onto [0, 1) that crowds values toward 0."""
    return u**bias


def select_batch(
    state: RankingState,
    rng: Optional[random.Random] = None,
    bias: float = SELECTION_BIAS,
) -> list[str]:
    """
    Pick the next batch of items to present.

    Indices are drawn through a warp that favours the top of the ranking.
    Each draw comes from the indices not chosen yet, so the batch never
    repeats an item and always completes in batch_size draws.

    Args:
        state: Ranking state to draw from
        rng: Random source (anything with random() and shuffle())
        bias: Warp exponent, must be >= 1

    Returns:
        List of batch_size distinct item values

    Raises:
        InsufficientItems: If the state has fewer items than batch_size
    """
    if bias < 1.0:
        raise ValueError(f"Selection bias must be >= 1.0, got {bias}")

    rng = rng or random
    size = state.batch_size
    count = len(state.items)

    if count < size:
        raise InsufficientItems(count, size)

    if count == size:
        chosen = list(range(count))
        rng.shuffle(chosen)
    else:
        remaining = list(range(count))
        chosen = []
        while len(chosen) < size:
            pos = int(_warp(rng.random(), bias) * len(remaining))
            chosen.append(remaining.pop(pos))

    return [state.items[i].value for i in chosen]


def expected_score(loser_rating: float, winner_rating: float) -> float:
    """
    Logistic expected score used for a single loser.

    Args:
        loser_rating: Rating of the losing item
        winner_rating: Rating of the winner before this judgment

    Returns:
        Amount moved from the loser to the winner
    """
    try:
        return 1.0 / (1.0 + 10.0 ** (loser_rating - winner_rating))
    except OverflowError:
        return 0.0


def apply_judgment(state: RankingState, ordered: Sequence[str]) -> None:
    """
    Record a judgment: ordered[0] beat every other item in ordered.

    All losers are scored against the winner's rating from before this
    call. The winner gains the sum of what the losers lose.

    Args:
        state: Ranking state to update in place
        ordered: Winner first, then the remaining items of the batch

    Raises:
        TooFewItems: If fewer than two values are given
        DuplicateItem: If a value appears more than once
        UnknownItem: If a value is not in the state
    """
    if len(ordered) < 2:
        raise TooFewItems(len(ordered))

    seen = set()
    for value in ordered:
        if value in seen:
            raise DuplicateItem(value)
        seen.add(value)

    by_value = {item.value: item for item in state.items}
    for value in ordered:
        if value not in by_value:
            raise UnknownItem(value)

    winner = by_value[ordered[0]]
    winner_rating = winner.rating
    gained = 0.0

    for value in ordered[1:]:
        loser = by_value[value]
        expected = expected_score(loser.rating, winner_rating)
        loser.rating -= expected
        gained += expected

    winner.rating = winner_rating + gained
    sort_items(state)

    logger.debug(
        f"Judgment: {winner.value!r} beat {len(ordered) - 1} items "
        f"(+{gained:.3f}, now {winner.rating:.3f})"
    )


def drain_ranked(state: RankingState) -> Iterator[RatedItem]:
    """
    Yield items in ranked order, advancing the state's cursor.

    Iterates over a snapshot taken on first use. Once the cursor reaches
    the end nothing more is produced until state.reset_cursor() is called.
    """
    snapshot = tuple(state.items)
    while state.cursor < len(snapshot):
        item = snapshot[state.cursor]
        state._cursor += 1
        yield item
