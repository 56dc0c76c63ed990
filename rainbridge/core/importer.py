"""
Bookmark Importer

Drives a full migration from a bookmark source to a bookmark destination:

1. Fetch every source folder (the only step whose failure aborts the run).
2. Create a destination folder for each, remembering the id mapping.
3. For each source folder, read its items, create each one on the
   destination and attach it to the mapped destination folder.

Failures after step 1 are logged, counted and skipped so one bad record
never stops the rest of the migration.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional

from rainbridge.utils.error_handler import ImportAbortedError, RainbridgeError

from .data_models import DestinationFolder, DestinationItem, Folder, FolderMapping, Item
from .data_sources.protocol import BookmarkDestination, BookmarkSource


@dataclass
class TransferFailure:
    """One record that did not make it across."""

    stage: str
    title: str
    url: str
    error: str

    def __str__(self) -> str:
        target = f"'{self.title}'"
        if self.url:
            target += f" ({self.url})"
        return f"[{self.stage}] {target}: {self.error}"


@dataclass
class ImportSummary:
    """Counters and failures collected over one import run."""

    folders_found: int = 0
    folders_created: int = 0
    items_found: int = 0
    items_created: int = 0
    links_created: int = 0
    failures: List[TransferFailure] = field(default_factory=list)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def add(self, counter: str, amount: int = 1) -> None:
        with self._lock:
            setattr(self, counter, getattr(self, counter) + amount)

    def record_failure(self, stage: str, title: str, url: str, error: Exception) -> None:
        with self._lock:
            self.failures.append(TransferFailure(stage, title, url, str(error)))

    def count_failures(self, stage: str) -> int:
        with self._lock:
            return sum(1 for f in self.failures if f.stage == stage)

    @property
    def folders_failed(self) -> int:
        return self.count_failures(Importer.STAGE_CREATE_FOLDER)

    @property
    def items_failed(self) -> int:
        return self.count_failures(Importer.STAGE_CREATE_ITEM)

    @property
    def links_failed(self) -> int:
        return self.count_failures(Importer.STAGE_LINK_ITEM)

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)

    def __str__(self) -> str:
        return (
            f"ImportSummary(folders={self.folders_created}/{self.folders_found}, "
            f"items={self.items_created}/{self.items_found}, "
            f"links={self.links_created}, "
            f"failures={len(self.failures)})"
        )


class Importer:
    """
    Transfer orchestrator between a ``BookmarkSource`` and a
    ``BookmarkDestination``.

    With ``workers`` greater than one, folders are imported concurrently on
    a bounded thread pool once every destination folder exists. Items within
    one folder are always handled in order, so each created item is linked
    before the next one of that folder is created.

    Example:
        >>> importer = Importer(RaindropClient(rd_token), KarakeepClient(kk_token))
        >>> summary = importer.run_import()
    """

    STAGE_FETCH_ITEMS = "fetch items"
    STAGE_CREATE_FOLDER = "create folder"
    STAGE_CREATE_ITEM = "create item"
    STAGE_LINK_ITEM = "link item"

    def __init__(
        self,
        source: BookmarkSource,
        destination: BookmarkDestination,
        workers: int = 1,
        logger: Optional[logging.Logger] = None,
    ):
        if workers < 1:
            raise ValueError("workers must be at least 1")

        self.source = source
        self.destination = destination
        self.workers = workers
        self.logger = logger or logging.getLogger(__name__)

    def run_import(self) -> ImportSummary:
        """
        Perform the full import.

        Returns:
            Summary of what was created and what failed

        Raises:
            ImportAbortedError: The source folders could not be listed
        """
        self.logger.info("Fetching collections from source...")
        try:
            folders = self.source.get_collections()
        except RainbridgeError as e:
            raise ImportAbortedError(f"failed to get collections: {e}") from e

        summary = ImportSummary(folders_found=len(folders))
        self.logger.info(f"Fetched {len(folders)} collections.")

        mapping = self._create_folders(folders, summary)

        self.logger.info("Importing bookmarks...")
        if self.workers == 1 or len(folders) <= 1:
            for folder in folders:
                self._import_folder(folder, mapping, summary)
        else:
            with ThreadPoolExecutor(
                max_workers=self.workers, thread_name_prefix="rainbridge-import"
            ) as pool:
                futures = [
                    pool.submit(self._import_folder, folder, mapping, summary)
                    for folder in folders
                ]
                for future in futures:
                    future.result()

        self._log_summary(summary)
        return summary

    def _create_folders(
        self, folders: List[Folder], summary: ImportSummary
    ) -> FolderMapping:
        mapping = FolderMapping()
        if not folders:
            return mapping

        self.logger.info("Creating lists on destination...")
        for folder in folders:
            try:
                created = self.destination.create_list(
                    DestinationFolder(name=folder.title)
                )
            except RainbridgeError as e:
                self.logger.error(f"Failed to create list '{folder.title}': {e}")
                summary.record_failure(self.STAGE_CREATE_FOLDER, folder.title, "", e)
                continue

            mapping.set(folder.id, created.id)
            summary.add("folders_created")
            self.logger.info(f"Created list: {created.name}")

        return mapping

    def _import_folder(
        self, folder: Folder, mapping: FolderMapping, summary: ImportSummary
    ) -> None:
        self.logger.info(f"Fetching bookmarks for collection: {folder.title}")
        try:
            items = self.source.get_raindrops_by_collection(folder.id)
        except RainbridgeError as e:
            self.logger.error(
                f"Failed to get bookmarks for collection '{folder.title}': {e}"
            )
            summary.record_failure(self.STAGE_FETCH_ITEMS, folder.title, "", e)
            return

        summary.add("items_found", len(items))
        self.logger.info(f"Found {len(items)} bookmarks in '{folder.title}'.")

        list_id = mapping.get(folder.id)
        for item in items:
            self._import_item(item, list_id, summary)

    def _import_item(
        self, item: Item, list_id: Optional[str], summary: ImportSummary
    ) -> None:
        try:
            created = self.destination.create_bookmark(DestinationItem.from_item(item))
        except RainbridgeError as e:
            self.logger.error(
                f"Failed to create bookmark '{item.title}' ({item.link}): {e}"
            )
            summary.record_failure(self.STAGE_CREATE_ITEM, item.title, item.link, e)
            return

        summary.add("items_created")
        self.logger.debug(f"Created bookmark: {created.title}")

        if list_id is None:
            return

        try:
            self.destination.add_bookmark_to_list(created.id, list_id)
        except RainbridgeError as e:
            self.logger.error(
                f"Failed to add bookmark '{item.title}' ({item.link}) to list: {e}"
            )
            summary.record_failure(self.STAGE_LINK_ITEM, item.title, item.link, e)
            return

        summary.add("links_created")

    def _log_summary(self, summary: ImportSummary) -> None:
        self.logger.info(
            f"Import complete: {summary.folders_created}/{summary.folders_found} "
            f"lists, {summary.items_created}/{summary.items_found} bookmarks, "
            f"{summary.links_created} linked"
        )

        if not summary.has_failures:
            return

        self.logger.warning(
            f"{len(summary.failures)} records failed "
            f"({summary.folders_failed} lists, {summary.items_failed} bookmarks, "
            f"{summary.links_failed} links)"
        )
        for failure in summary.failures:
            self.logger.warning(f"  {failure}")
