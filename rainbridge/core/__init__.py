"""
Core transfer components: request execution, pagination, API clients and
the importer.
"""

from .data_models import DestinationFolder, DestinationItem, Folder, FolderMapping, Item
from .importer import Importer, ImportSummary, TransferFailure
from .pagination import read_all
from .request_executor import RequestExecutor

__all__ = [
    "DestinationFolder",
    "DestinationItem",
    "Folder",
    "FolderMapping",
    "Importer",
    "ImportSummary",
    "Item",
    "RequestExecutor",
    "TransferFailure",
    "read_all",
]
