"""
Storage provider clients.

``StorageClient`` is the contract the filesystem adapter consumes;
``HttpStorageClient`` implements it against the provider's REST API.
"""

from .base import BadRequest, ListFolderResult, RawEntry, RequestFailure, StorageClient
from .http_client import HttpStorageClient

__all__ = [
    "StorageClient",
    "HttpStorageClient",
    "RawEntry",
    "ListFolderResult",
    "RequestFailure",
    "BadRequest",
]
