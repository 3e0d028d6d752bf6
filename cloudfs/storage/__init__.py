"""
Filesystem adapter over a remote cloud storage provider.

This module provides the generic filesystem interface and its implementation
on top of a provider client, together with the path prefix and option types
they share.
"""

from .adapter import CloudFilesystemAdapter, parse_timestamp
from .filesystem import (
    AdapterError,
    EntryResult,
    FilesystemAdapter,
    ResponseFormatError,
    WriteConfig,
    WriteMode,
)
from .path_prefix import PathPrefix


__all__ = [
    # Abstract interfaces and base classes
    "FilesystemAdapter",
    # Concrete implementations
    "CloudFilesystemAdapter",
    # Data models and options
    "PathPrefix",
    "WriteConfig",
    "WriteMode",
    "EntryResult",
    "parse_timestamp",
    # Exceptions
    "AdapterError",
    "ResponseFormatError",
]
