"""Errors raised by the ranking engine."""


class RankingError(Exception):
    """Base exception for ranking operations."""

    pass


class InsufficientItems(RankingError):
    """Raised when there are not enough items to fill a batch."""

    def __init__(self, available: int, required: int):
        self.available = available
        self.required = required
        super().__init__(
            f"Need at least {required} items to sort, only {available} available"
        )


class TooFewItems(RankingError):
    """Raised when a judgment does not contain a winner and a loser."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"A judgment needs at least 2 items, got {count}")


class UnknownItem(RankingError):
    """Raised when a referenced item is not in the state."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Unknown item: {value!r}")


class DuplicateItem(RankingError):
    """Raised when an operation would give two items the same value."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Item already exists: {value!r}")


class InvalidBatchSize(RankingError):
    """Raised for batch sizes outside the supported range."""

    def __init__(self, size: object, minimum: int, maximum: int):
        self.size = size
        super().__init__(
            f"Batch size must be between {minimum} and {maximum}, got {size!r}"
        )
