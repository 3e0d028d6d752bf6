"""
cloudfs: a filesystem adapter for a remote cloud storage provider.

The adapter exposes a conventional filesystem interface (write, read, delete,
rename, copy, list, metadata) and translates it into calls on a provider
client, normalizing paths and provider entries along the way.
"""

from .client import BadRequest, HttpStorageClient, RequestFailure, StorageClient
from .models import EntryType, NormalizedEntry
from .storage import CloudFilesystemAdapter, FilesystemAdapter, PathPrefix, ResponseFormatError, WriteConfig

__version__ = "0.1.0"

__all__ = [
    "CloudFilesystemAdapter",
    "FilesystemAdapter",
    "StorageClient",
    "HttpStorageClient",
    "EntryType",
    "NormalizedEntry",
    "PathPrefix",
    "WriteConfig",
    "RequestFailure",
    "BadRequest",
    "ResponseFormatError",
]
