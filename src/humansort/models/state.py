"""
Data models for ranking state.

These models are what gets persisted between sorting sessions.
"""

from pydantic import BaseModel, Field, PrivateAttr, model_validator


# -----------------------------------------------------------------------------
# Batch size bounds
# -----------------------------------------------------------------------------

MIN_BATCH_SIZE = 2  # one winner and at least one loser
MAX_BATCH_SIZE = 9  # choices must stay single keystrokes
DEFAULT_BATCH_SIZE = 5


class RatedItem(BaseModel):
    """A single item and its current rating."""

    value: str
    rating: float = 0.0


class RankingState(BaseModel):
    """
    Ordered set of rated items.

    Items are kept sorted by rating (highest first) by the ranking
    operations. The traversal cursor is transient and never serialized.
    """

    items: list[RatedItem] = Field(default_factory=list)
    batch_size: int = Field(
        default=DEFAULT_BATCH_SIZE,
        ge=MIN_BATCH_SIZE,
        le=MAX_BATCH_SIZE,
        description="Number of items presented per judgment",
    )

    _cursor: int = PrivateAttr(default=0)

    @model_validator(mode="after")
    def check_unique_values(self) -> "RankingState":
        """Reject states where two items share a value."""
        seen = set()
        for item in self.items:
            if item.value in seen:
                raise ValueError(f"Duplicate item value: {item.value!r}")
            seen.add(item.value)
        return self

    @property
    def cursor(self) -> int:
        return self._cursor

    def reset_cursor(self) -> None:
        """Rewind the ranked traversal to the first item."""
        self._cursor = 0

    def __contains__(self, value: object) -> bool:
        return any(item.value == value for item in self.items)

    def find(self, value: str) -> int | None:
        """Return the index of the item with this value, or None."""
        for i, item in enumerate(self.items):
            if item.value == value:
                return i
        return None
