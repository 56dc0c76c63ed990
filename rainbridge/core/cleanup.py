"""
Destination cleanup.

Removes bookmarks and lists from Karakeep, typically after a test import.
Not part of a normal import run.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from rainbridge.utils.error_handler import RainbridgeError

from .data_sources.karakeep_client import KarakeepClient

logger = logging.getLogger(__name__)


@dataclass
class CleanupResult:
    bookmarks_deleted: int = 0
    lists_deleted: int = 0
    errors: List[str] = field(default_factory=list)


def _matches(value: Optional[str], prefix: Optional[str]) -> bool:
    if not prefix:
        return True
    return bool(value) and value.startswith(prefix)


def cleanup_destination(
    client: KarakeepClient, prefix: Optional[str] = None
) -> CleanupResult:
    """
    Delete destination bookmarks and lists.

    Listing failures propagate; individual delete failures are logged and
    collected so the rest of the cleanup still runs.

    Args:
        client: Destination client
        prefix: Only delete bookmarks whose title (and lists whose name)
            start with this text; everything when empty

    Returns:
        What was deleted and what failed
    """
    result = CleanupResult()
    logger.info("Starting destination cleanup...")

    for bookmark in client.get_all_bookmarks():
        if not bookmark.id or not _matches(bookmark.title, prefix):
            continue
        try:
            client.delete_bookmark(bookmark.id)
        except RainbridgeError as e:
            logger.error(f"Failed to delete bookmark '{bookmark.title}': {e}")
            result.errors.append(str(e))
            continue
        result.bookmarks_deleted += 1

    for folder in client.get_all_lists():
        if not folder.id or not _matches(folder.name, prefix):
            continue
        try:
            client.delete_list(folder.id)
        except RainbridgeError as e:
            logger.error(f"Failed to delete list '{folder.name}': {e}")
            result.errors.append(str(e))
            continue
        result.lists_deleted += 1

    logger.info(
        f"Cleanup completed: {result.bookmarks_deleted} bookmarks and "
        f"{result.lists_deleted} lists deleted"
    )
    return result
