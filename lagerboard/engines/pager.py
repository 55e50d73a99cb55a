# lagerboard/engines/pager.py
from __future__ import annotations

from typing import List, Sequence, Tuple, TypeVar

T = TypeVar("T")

# A page is an immutable slice; refetches replace pages, never edit them.
Page = Tuple[T, ...]


def paginate(items: Sequence[T], page_size: int) -> List[Page]:
    """
    Split `items` into consecutive pages of at most `page_size`.

    Empty input gives zero pages, not one empty page.
    """
    if page_size <= 0:
        raise ValueError(f"page_size must be positive (got {page_size})")

    return [tuple(items[i:i + page_size]) for i in range(0, len(items), page_size)]


def clamp_index(index: int, page_count: int) -> int:
    """Keep a cursor inside [0, page_count); 0 when there are no pages."""
    return index % max(1, page_count)
