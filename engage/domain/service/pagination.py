"""Comment pagination."""

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CommentPage(Generic[T]):
    """One page of top-level threads or of replies to a single comment."""

    items: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int
    has_next: bool
    has_prev: bool


def paginate(rows: Sequence[T], page: int, page_size: int) -> CommentPage[T]:
    """Slice an ordered sequence into one page.

    For threads the rows are top-level nodes, each keeping its full
    subtree. Pages are 1-indexed and a page below 1 is treated as page 1.
    A page past the end is empty.

    Args:
        rows: Ordered top-level nodes or replies
        page: Requested page number
        page_size: Rows per page (must be positive)

    Returns:
        The requested page with navigation flags
    """
    if page_size < 1:
        raise ValueError("page_size must be positive")

    page = max(page, 1)
    total = len(rows)
    total_pages = math.ceil(total / page_size)
    start = (page - 1) * page_size

    return CommentPage(
        items=list(rows[start : start + page_size]),
        total=total,
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )
