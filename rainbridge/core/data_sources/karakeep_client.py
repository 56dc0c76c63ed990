"""
Karakeep Client.

Write access to Karakeep bookmarks and lists, plus the list/delete calls
used by the cleanup tooling.
"""

from typing import List, Union

from pydantic import BaseModel, Field

from rainbridge.utils.error_handler import DecodeError

from ..base_api_client import BaseAPIClient
from ..data_models import DestinationFolder, DestinationItem


class _BookmarksEnvelope(BaseModel):
    bookmarks: List[DestinationItem] = Field(default_factory=list)


class _ListsEnvelope(BaseModel):
    lists: List[DestinationFolder] = Field(default_factory=list)


class KarakeepClient(BaseAPIClient):
    """
    Karakeep API client.

    Example:
        >>> with KarakeepClient(token="...") as client:
        ...     created = client.create_list(DestinationFolder(name="Reading"))
    """

    DEFAULT_BASE_URL = "https://api.karakeep.app/v1"

    CREATED = (201,)
    LINKED = (200, 201, 204)
    DELETED = (200, 204)

    def create_bookmark(self, bookmark: DestinationItem) -> DestinationItem:
        operation = "create bookmark"
        response = self._request(
            "POST",
            "bookmarks",
            operation,
            expected_status=self.CREATED,
            json=bookmark.to_payload(),
        )
        created = self._decode(response, operation, DestinationItem)
        self._require_id(created.id, operation)
        return created

    def create_list(self, folder: DestinationFolder) -> DestinationFolder:
        operation = "create list"
        response = self._request(
            "POST",
            "lists",
            operation,
            expected_status=self.CREATED,
            json=folder.to_payload(),
        )
        created = self._decode(response, operation, DestinationFolder)
        self._require_id(created.id, operation)
        return created

    def add_bookmark_to_list(self, bookmark_id: str, list_id: str) -> None:
        operation = "add bookmark to list"
        response = self._request(
            "PUT",
            f"lists/{list_id}/bookmarks/{bookmark_id}",
            operation,
            expected_status=self.LINKED,
        )
        response.close()

    def get_all_bookmarks(self) -> List[DestinationItem]:
        operation = "get bookmarks"
        response = self._request("GET", "bookmarks", operation)
        decoded = self._decode(
            response, operation, Union[List[DestinationItem], _BookmarksEnvelope]
        )
        if isinstance(decoded, _BookmarksEnvelope):
            return decoded.bookmarks
        return decoded

    def get_all_lists(self) -> List[DestinationFolder]:
        operation = "get lists"
        response = self._request("GET", "lists", operation)
        decoded = self._decode(
            response, operation, Union[List[DestinationFolder], _ListsEnvelope]
        )
        if isinstance(decoded, _ListsEnvelope):
            return decoded.lists
        return decoded

    def delete_bookmark(self, bookmark_id: str) -> None:
        response = self._request(
            "DELETE",
            f"bookmarks/{bookmark_id}",
            "delete bookmark",
            expected_status=self.DELETED,
        )
        response.close()

    def delete_list(self, list_id: str) -> None:
        response = self._request(
            "DELETE",
            f"lists/{list_id}",
            "delete list",
            expected_status=self.DELETED,
        )
        response.close()

    def _require_id(self, identifier, operation: str) -> None:
        if not identifier:
            raise DecodeError(operation, "response has no id")
