"""
Interactive sorting rounds.

Each round presents one batch, reads the user's choice and records it.
Input and persistence are passed in as callables so the loop itself does
no terminal or file I/O.
"""

import logging
import random
from collections.abc import Callable, Sequence
from typing import Optional

from humansort.models.state import RankingState
from humansort.ranking.engine import SELECTION_BIAS, apply_judgment, select_batch

logger = logging.getLogger(__name__)

QUIT_INPUTS = {"q", "quit", "exit"}


class ChoiceError(ValueError):
    """Raised when a typed choice cannot be read."""

    pass


def parse_choice(raw: str, batch: Sequence[str]) -> list[str]:
    """
    Turn typed digits into a judgment order.

    The first digit names the winner. Further digits order the other
    items; anything not mentioned follows in presented order.

    Args:
        raw: User input such as "3" or "312"
        batch: Items as presented, numbered from 1

    Returns:
        All batch values, winner first

    Raises:
        ChoiceError: If the input is empty, not digits, out of range or repeats
    """
    text = "".join(raw.split()).replace(",", "")
    if not text:
        raise ChoiceError("Type the number of the best item")
    if not (text.isascii() and text.isdigit()):
        raise ChoiceError(f"Not a number: {raw.strip()!r}")

    picked = []
    for char in text:
        number = int(char)
        if not 1 <= number <= len(batch):
            raise ChoiceError(f"Choose a number between 1 and {len(batch)}")
        value = batch[number - 1]
        if value in picked:
            raise ChoiceError(f"{number} was chosen more than once")
        picked.append(value)

    return picked + [value for value in batch if value not in picked]


def run_rounds(
    state: RankingState,
    prompt: Callable[[list[str]], Optional[str]],
    store: Callable[[RankingState], None],
    rounds: Optional[int] = None,
    rng: Optional[random.Random] = None,
    bias: float = SELECTION_BIAS,
    on_invalid: Optional[Callable[[str], None]] = None,
) -> int:
    """
    Run sorting rounds until the user quits or the round limit is reached.

    Args:
        state: Ranking state, updated in place
        prompt: Shows a batch and returns the typed answer (None on EOF)
        store: Called with the state after every recorded judgment
        rounds: Maximum number of judgments, None for no limit
        rng: Random source for batch selection
        bias: Selection bias passed to select_batch
        on_invalid: Called with a message when input cannot be parsed

    Returns:
        Number of judgments recorded

    Raises:
        InsufficientItems: If the state cannot fill a batch
    """
    completed = 0

    while rounds is None or completed < rounds:
        batch = select_batch(state, rng=rng, bias=bias)

        ordered = None
        while ordered is None:
            raw = prompt(batch)
            if raw is None or raw.strip().lower() in QUIT_INPUTS:
                logger.debug(f"Sorting stopped after {completed} rounds")
                return completed
            try:
                ordered = parse_choice(raw, batch)
            except ChoiceError as e:
                if on_invalid:
                    on_invalid(str(e))

        apply_judgment(state, ordered)
        store(state)
        completed += 1

    return completed
