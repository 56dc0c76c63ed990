"""
Pytest configuration and shared fixtures for rainbridge tests.

This module provides common fixtures, fakes and command line options that
are shared across multiple test modules.
"""

import os
import threading
from typing import Dict, List

import pytest

from rainbridge.core.data_models import (
    DestinationFolder,
    DestinationItem,
    Folder,
    Item,
)
from rainbridge.utils.error_handler import UnexpectedStatus
from tests.fixtures.mock_utilities import RecordingSleeper

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "network: test talks to the live APIs")
    config.addinivalue_line("markers", "slow: slow test")


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--runnetwork",
        action="store_true",
        default=False,
        help="run tests against the live Raindrop.io and Karakeep APIs",
    )


def pytest_runtest_setup(item):
    """Skip network tests unless requested and configured."""
    if "network" in item.keywords:
        if not item.config.getoption("--runnetwork", default=False):
            pytest.skip("need --runnetwork option to run")
        if not (
            os.environ.get("RAINDROP_API_TOKEN") and os.environ.get("KARAKEEP_API_TOKEN")
        ):
            pytest.skip("RAINDROP_API_TOKEN and KARAKEEP_API_TOKEN must be set")


# ============================================================================
# Fakes
# ============================================================================


class FakeSource:
    """In-memory ``BookmarkSource``."""

    def __init__(self, folders: List[Folder], items: Dict[object, List[Item]]):
        self.folders = folders
        self.items = items
        self.collection_error = None
        self.item_errors: Dict[object, Exception] = {}
        self.item_calls: List[object] = []

    def get_collections(self) -> List[Folder]:
        if self.collection_error:
            raise self.collection_error
        return list(self.folders)

    def get_raindrops_by_collection(self, collection_id) -> List[Item]:
        self.item_calls.append(collection_id)
        if collection_id in self.item_errors:
            raise self.item_errors[collection_id]
        return list(self.items.get(collection_id, []))


class FakeDestination:
    """In-memory ``BookmarkDestination`` recording every call in order."""

    def __init__(self):
        self._lock = threading.Lock()
        self.calls: List[tuple] = []
        self.lists: List[DestinationFolder] = []
        self.bookmarks: List[DestinationItem] = []
        self.links: List[tuple] = []
        self.fail_lists: set = set()
        self.fail_bookmarks: set = set()
        self.fail_links: set = set()

    def create_list(self, folder: DestinationFolder) -> DestinationFolder:
        with self._lock:
            self.calls.append(("create_list", folder.name))
            if folder.name in self.fail_lists:
                raise UnexpectedStatus("create list", 500, "500 Internal Server Error")
            created = DestinationFolder(id=f"list-{len(self.lists) + 1}", name=folder.name)
            self.lists.append(created)
            return created

    def create_bookmark(self, bookmark: DestinationItem) -> DestinationItem:
        with self._lock:
            self.calls.append(("create_bookmark", bookmark.url))
            if bookmark.url in self.fail_bookmarks:
                raise UnexpectedStatus("create bookmark", 500, "500 Internal Server Error")
            created = bookmark.model_copy(update={"id": f"bm-{len(self.bookmarks) + 1}"})
            self.bookmarks.append(created)
            return created

    def add_bookmark_to_list(self, bookmark_id: str, list_id: str) -> None:
        with self._lock:
            self.calls.append(("add_bookmark_to_list", bookmark_id, list_id))
            if bookmark_id in self.fail_links:
                raise UnexpectedStatus("add bookmark to list", 404, "404 Not Found")
            self.links.append((bookmark_id, list_id))


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def sleeper() -> RecordingSleeper:
    return RecordingSleeper()


@pytest.fixture
def fake_destination() -> FakeDestination:
    return FakeDestination()


@pytest.fixture
def sample_items() -> List[Item]:
    return [
        Item(
            id=101,
            title="Python docs",
            excerpt="The Python documentation",
            link="https://docs.python.org/3/",
            tags=["python", "docs"],
        ),
        Item(id=102, title="Example", excerpt="", link="https://example.com", tags=[]),
    ]


@pytest.fixture
def fake_source(sample_items) -> FakeSource:
    return FakeSource(
        folders=[Folder(id=1, title="Reading")],
        items={1: sample_items},
    )
