"""
Paginated Collection Reader

Drains a zero-indexed paged endpoint until it returns an empty page.
"""

import logging
from typing import Callable, List, Optional, Sequence, TypeVar

from rainbridge.utils.error_handler import PaginationLimitExceeded

T = TypeVar("T")

logger = logging.getLogger(__name__)


def read_all(
    page_fetcher: Callable[[int], Sequence[T]],
    max_pages: Optional[int] = None,
) -> List[T]:
    """
    Fetch pages 0, 1, 2, ... and concatenate their items.

    Iteration stops at the first empty page. Errors raised by
    ``page_fetcher`` propagate unchanged and the partial result is dropped.
    Retrying is the fetcher's business, not this function's.

    Args:
        page_fetcher: Callable returning the items of one page
        max_pages: Optional safety cap on the number of non-empty pages;
            ``None`` reads until the endpoint runs dry

    Returns:
        All items in page order

    Raises:
        PaginationLimitExceeded: ``max_pages`` non-empty pages were read
            and the endpoint still had more
    """
    items: List[T] = []
    page = 0

    while True:
        page_items = page_fetcher(page)
        if not page_items:
            break

        if max_pages is not None and page >= max_pages:
            raise PaginationLimitExceeded(max_pages)

        items.extend(page_items)
        page += 1

    logger.debug(f"Read {len(items)} items across {page + 1} page fetches")
    return items
