"""Page-by-page accumulation for GitHub list endpoints."""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from octoref.github.constants import PAGE_SIZE

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def collect_pages(
    fetch_page: Callable[[int], Awaitable[list[T]]],
    per_page: int = PAGE_SIZE,
) -> list[T]:
    """
    Fetch pages 1, 2, ... and concatenate their items.

    Stops after the first page holding fewer than ``per_page`` items. Pages are
    requested one at a time; an error on any page propagates and the items
    collected so far are discarded.

    Args:
        fetch_page: Coroutine function returning the items of a 1-indexed page
        per_page: Page size the endpoint was asked for

    Returns:
        All items in page order
    """
    collected: list[T] = []
    page = 0

    while True:
        page += 1
        items = await fetch_page(page)
        collected.extend(items)

        if len(items) < per_page:
            break

    logger.debug(f"Collected {len(collected)} items over {page} page(s)")
    return collected
