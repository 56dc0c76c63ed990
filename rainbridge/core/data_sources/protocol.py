"""
Data Source Protocols for Bookmark Transfer.

This module defines the interfaces the importer relies on, so any pair of
read-side and write-side services can be plugged in (and so tests can use
in-memory fakes).
"""

from typing import List, Protocol, runtime_checkable

from ..data_models import DestinationFolder, DestinationItem, Folder, Item, SourceId


@runtime_checkable
class BookmarkSource(Protocol):
    """
    Read side of a transfer.

    Example Usage:
        >>> source = RaindropClient(token)
        >>> for folder in source.get_collections():
        ...     items = source.get_raindrops_by_collection(folder.id)
    """

    def get_collections(self) -> List[Folder]:
        """
        Fetch every folder.

        Returns:
            All folders, in the order the service lists them
        """
        ...

    def get_raindrops_by_collection(self, collection_id: SourceId) -> List[Item]:
        """
        Fetch every item of one folder, draining all pages.

        Args:
            collection_id: Folder identifier; 0 is the unsorted folder

        Returns:
            All items of the folder
        """
        ...


@runtime_checkable
class BookmarkDestination(Protocol):
    """Write side of a transfer."""

    def create_list(self, folder: DestinationFolder) -> DestinationFolder:
        """Create a folder and return it with its server-assigned id."""
        ...

    def create_bookmark(self, bookmark: DestinationItem) -> DestinationItem:
        """Create an item and return it with its server-assigned id."""
        ...

    def add_bookmark_to_list(self, bookmark_id: str, list_id: str) -> None:
        """Attach an existing item to an existing folder."""
        ...
