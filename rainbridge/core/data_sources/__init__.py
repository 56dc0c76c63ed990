"""
Data Sources Module for Bookmark Transfer.

Clients for the services bookmarks are read from and written to.

Main Components:
    - BookmarkSource / BookmarkDestination: protocols the importer uses
    - RaindropClient: Raindrop.io read client (source)
    - KarakeepClient: Karakeep write client (destination)

Usage:
    >>> from rainbridge.core.data_sources import KarakeepClient, RaindropClient
    >>> with RaindropClient(rd_token) as source, KarakeepClient(kk_token) as dest:
    ...     Importer(source, dest).run_import()
"""

from .karakeep_client import KarakeepClient
from .protocol import BookmarkDestination, BookmarkSource
from .raindrop_client import RaindropClient

__all__ = [
    "BookmarkDestination",
    "BookmarkSource",
    "KarakeepClient",
    "RaindropClient",
]
