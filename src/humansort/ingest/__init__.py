"""
Item list ingestion.

Reads the line-delimited lists that ranking states are built from.
"""

from humansort.ingest.item_list import load_item_list, parse_item_lines

__all__ = [
    "load_item_list",
    "parse_item_lines",
]
