"""
Data models for Rainbridge.

Wire-level models for the source (Raindrop.io) and destination (Karakeep)
services. Responses are validated with Pydantic so a body of the wrong
shape is rejected at the client boundary instead of deep in the importer.
"""

import threading
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

SourceId = Union[int, str]


def _none_to_empty_list(v):
    return [] if v is None else v


def _none_to_empty_str(v):
    return "" if v is None else v


class Folder(BaseModel):
    """A source collection. Identifier 0 is the implicit unsorted folder."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: SourceId = Field(alias="_id")
    title: str = ""

    @field_validator("title", mode="before")
    @classmethod
    def normalize_title(cls, v):
        return _none_to_empty_str(v)


class Item(BaseModel):
    """A source bookmark ("raindrop"). Read-only for the length of a run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: SourceId = Field(alias="_id")
    title: str = ""
    excerpt: str = ""
    link: str = ""
    tags: List[str] = Field(default_factory=list)

    @field_validator("title", "excerpt", "link", mode="before")
    @classmethod
    def normalize_strings(cls, v):
        """Treat JSON null like a missing string."""
        return _none_to_empty_str(v)

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v):
        """Treat JSON null like an empty tag list."""
        return _none_to_empty_list(v)


class DestinationFolder(BaseModel):
    """A Karakeep list. ``id`` is assigned by the server on creation."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    name: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, v):
        return _none_to_empty_str(v)

    def to_payload(self) -> Dict[str, Any]:
        return {"name": self.name}


class DestinationItem(BaseModel):
    """A Karakeep bookmark. ``id`` is assigned by the server on creation."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    url: str = ""
    title: Optional[str] = ""
    description: Optional[str] = ""
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v):
        return _none_to_empty_list(v)

    @classmethod
    def from_item(cls, item: Item) -> "DestinationItem":
        """
        Map a source item onto the destination shape.

        Values are copied verbatim, empty ones included; nothing is trimmed
        or sanitized here.
        """
        return cls(
            url=item.link,
            title=item.title,
            description=item.excerpt,
            tags=list(item.tags),
        )

    def to_payload(self) -> Dict[str, Any]:
        """
        Build the create-bookmark request body.

        Empty ``description`` and ``tags`` are left out of the body.
        """
        payload: Dict[str, Any] = {
            "type": "link",
            "url": self.url,
            "title": self.title or "",
        }
        if self.description:
            payload["description"] = self.description
        if self.tags:
            payload["tags"] = list(self.tags)
        return payload


class FolderMapping:
    """
    Source folder id -> destination folder id, for a single import run.

    Writes happen while folders are created; reads happen from item workers.
    Access is guarded by a lock so both may overlap.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._ids: Dict[SourceId, str] = {}

    def set(self, source_id: SourceId, destination_id: str) -> None:
        with self._lock:
            self._ids[source_id] = destination_id

    def get(self, source_id: SourceId) -> Optional[str]:
        with self._lock:
            return self._ids.get(source_id)

    def items(self) -> List[Tuple[SourceId, str]]:
        with self._lock:
            return list(self._ids.items())

    def __contains__(self, source_id: object) -> bool:
        with self._lock:
            return source_id in self._ids

    def __len__(self) -> int:
        with self._lock:
            return len(self._ids)

    def __iter__(self) -> Iterator[SourceId]:
        return iter([source_id for source_id, _ in self.items()])

    def __repr__(self) -> str:
        return f"FolderMapping({dict(self.items())!r})"
