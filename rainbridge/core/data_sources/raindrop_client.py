"""
Raindrop.io Client.

Read-only access to Raindrop.io collections and bookmarks over its REST API.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from ..base_api_client import BaseAPIClient
from ..data_models import Folder, Item, SourceId
from ..pagination import read_all


class _CollectionsResponse(BaseModel):
    items: List[Folder] = Field(default_factory=list)


class _RaindropsResponse(BaseModel):
    items: List[Item] = Field(default_factory=list)


class RaindropClient(BaseAPIClient):
    """
    Raindrop.io API client.

    Collections are returned in a single response; bookmarks are paged with
    a zero-based ``page`` and a fixed ``perpage`` of 50.

    Example:
        >>> with RaindropClient(token="...") as client:
        ...     folders = client.get_collections()
        ...     items = client.get_raindrops_by_collection(folders[0].id)
    """

    DEFAULT_BASE_URL = "https://api.raindrop.io/rest/v1"
    PER_PAGE = 50
    UNSORTED_COLLECTION_ID = 0

    def __init__(self, token: str, max_pages: Optional[int] = None, **kwargs):
        """
        Initialize the client.

        Args:
            token: Raindrop.io API token
            max_pages: Optional cap on pages read per collection
            **kwargs: Passed to ``BaseAPIClient``
        """
        super().__init__(token, **kwargs)
        self.max_pages = max_pages

    def get_collections(self) -> List[Folder]:
        operation = "get collections"
        response = self._request("GET", "collections", operation)
        folders = self._decode(response, operation, _CollectionsResponse).items
        self.logger.debug(f"Fetched {len(folders)} collections")
        return folders

    def get_raindrops_page(self, collection_id: SourceId, page: int) -> List[Item]:
        """
        Fetch a single page of bookmarks.

        Args:
            collection_id: Collection to read
            page: Zero-based page index

        Returns:
            Items on that page; empty once the collection is exhausted
        """
        operation = "get raindrops"
        response = self._request(
            "GET",
            f"raindrops/{collection_id}",
            operation,
            params={"page": page, "perpage": self.PER_PAGE},
        )
        return self._decode(response, operation, _RaindropsResponse).items

    def get_raindrops_by_collection(self, collection_id: SourceId) -> List[Item]:
        return read_all(
            lambda page: self.get_raindrops_page(collection_id, page),
            max_pages=self.max_pages,
        )

    def get_raindrops(self) -> List[Item]:
        """Fetch all bookmarks from the catch-all collection 0."""
        return self.get_raindrops_by_collection(self.UNSORTED_COLLECTION_ID)
