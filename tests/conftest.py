"""Pytest configuration and fixtures."""

import random
from pathlib import Path

import pytest

from humansort.models import RankingState, RatedItem
from humansort.ranking import apply_judgment, from_items


@pytest.fixture
def sample_names() -> list[str]:
    """Six distinct item names."""
    return ["apple", "banana", "cherry", "date", "elderberry", "fig"]


@pytest.fixture
def fresh_state(sample_names) -> RankingState:
    """Unsorted state, every rating at 0.0."""
    return from_items(sample_names)


@pytest.fixture
def judged_state() -> RankingState:
    """
    Three items after one judgment: B beat A and C.

    Ratings: B = 1.0, A = -0.5, C = -0.5.
    """
    state = from_items(["A", "B", "C"], batch_size=3)
    apply_judgment(state, ["B", "A", "C"])
    return state


@pytest.fixture
def rated_state() -> RankingState:
    """State with distinct, already-sorted ratings."""
    return RankingState(
        items=[
            RatedItem(value="gold", rating=2.0),
            RatedItem(value="silver", rating=1.0),
            RatedItem(value="bronze", rating=0.0),
            RatedItem(value="tin", rating=-1.5),
        ],
        batch_size=2,
    )


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def list_file(tmp_path: Path, sample_names) -> Path:
    """Line-delimited list file with a blank line and a repeat."""
    path = tmp_path / "fruit.txt"
    lines = sample_names[:3] + ["", sample_names[0]] + sample_names[3:]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
