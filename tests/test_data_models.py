"""
Unit tests for the wire models and the folder mapping.
"""

import threading

import pytest
from pydantic import ValidationError

from rainbridge.core.data_models import (
    DestinationFolder,
    DestinationItem,
    Folder,
    FolderMapping,
    Item,
)


class TestSourceModels:
    """Test decoding of source records."""

    def test_item_from_wire(self):
        item = Item.model_validate(
            {
                "_id": 12,
                "title": "Docs",
                "excerpt": "Reference",
                "link": "https://docs.test",
                "tags": ["a"],
                "cover": "ignored",
            }
        )

        assert item.id == 12
        assert item.tags == ["a"]

    def test_item_null_fields_become_empty(self):
        item = Item.model_validate(
            {"_id": 1, "title": None, "excerpt": None, "link": None, "tags": None}
        )

        assert item.title == ""
        assert item.excerpt == ""
        assert item.link == ""
        assert item.tags == []

    def test_item_missing_fields_default(self):
        item = Item.model_validate({"_id": 1})

        assert item.title == ""
        assert item.tags == []

    def test_item_wrong_type_rejected(self):
        with pytest.raises(ValidationError):
            Item.model_validate({"_id": 1, "tags": "not-a-list"})

    def test_item_requires_id(self):
        with pytest.raises(ValidationError):
            Item.model_validate({"title": "no id"})

    def test_item_is_frozen(self):
        item = Item(id=1, title="x")

        with pytest.raises(ValidationError):
            item.title = "y"

    def test_folder_accepts_string_id(self):
        folder = Folder.model_validate({"_id": "abc", "title": None})

        assert folder.id == "abc"
        assert folder.title == ""


class TestDestinationItem:
    """Test the source-to-destination transform and request bodies."""

    def test_from_item_copies_fields(self, sample_items):
        bookmark = DestinationItem.from_item(sample_items[0])

        assert bookmark.id is None
        assert bookmark.url == "https://docs.python.org/3/"
        assert bookmark.title == "Python docs"
        assert bookmark.description == "The Python documentation"
        assert bookmark.tags == ["python", "docs"]

    def test_from_item_keeps_empty_values(self):
        bookmark = DestinationItem.from_item(Item(id=1))

        assert bookmark.url == ""
        assert bookmark.title == ""
        assert bookmark.description == ""
        assert bookmark.tags == []

    def test_from_item_does_not_trim(self):
        bookmark = DestinationItem.from_item(
            Item(id=1, title="  spaced  ", link=" https://x.test ")
        )

        assert bookmark.title == "  spaced  "
        assert bookmark.url == " https://x.test "

    def test_payload_full(self, sample_items):
        payload = DestinationItem.from_item(sample_items[0]).to_payload()

        assert payload == {
            "type": "link",
            "url": "https://docs.python.org/3/",
            "title": "Python docs",
            "description": "The Python documentation",
            "tags": ["python", "docs"],
        }

    def test_payload_omits_empty_description_and_tags(self, sample_items):
        payload = DestinationItem.from_item(sample_items[1]).to_payload()

        assert payload == {"type": "link", "url": "https://example.com", "title": "Example"}

    def test_created_response_decodes(self):
        created = DestinationItem.model_validate(
            {"id": "bm-1", "title": None, "tags": None, "createdAt": "2024-01-01"}
        )

        assert created.id == "bm-1"
        assert created.title is None
        assert created.tags == []

    def test_folder_payload(self):
        assert DestinationFolder(name="Reading").to_payload() == {"name": "Reading"}


class TestFolderMapping:
    """Test the source-to-destination folder id mapping."""

    def test_set_and_get(self):
        mapping = FolderMapping()
        mapping.set(1, "list-1")

        assert mapping.get(1) == "list-1"
        assert 1 in mapping
        assert len(mapping) == 1

    def test_missing_returns_none(self):
        mapping = FolderMapping()

        assert mapping.get(99) is None
        assert 99 not in mapping

    def test_iteration(self):
        mapping = FolderMapping()
        mapping.set(1, "a")
        mapping.set(2, "b")

        assert list(mapping) == [1, 2]
        assert mapping.items() == [(1, "a"), (2, "b")]

    def test_concurrent_writes(self):
        mapping = FolderMapping()

        def writer(offset):
            for i in range(200):
                mapping.set(offset + i, f"list-{offset + i}")

        threads = [threading.Thread(target=writer, args=(n * 1000,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(mapping) == 800
        assert mapping.get(3005) == "list-3005"
