"""
Line-delimited item lists.

One item per line. Blank lines and repeated lines are ignored.
"""

from collections.abc import Iterable
from pathlib import Path


def parse_item_lines(lines: Iterable[str]) -> list[str]:
    """
    Extract item names from raw lines.

    Args:
        lines: Raw lines, with or without trailing newlines

    Returns:
        Distinct non-blank names in first-seen order
    """
    names = []
    seen = set()

    for line in lines:
        name = line.strip()
        if not name or name in seen:
            continue
        names.append(name)
        seen.add(name)

    return names


def load_item_list(filepath: str | Path) -> list[str]:
    """
    Load item names from a plain text file.

    Args:
        filepath: Path to the list file

    Returns:
        Distinct item names in file order
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Item list not found: {filepath}")

    with open(path, "r", encoding="utf-8") as f:
        return parse_item_lines(f)
