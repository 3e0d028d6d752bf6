"""
Generic filesystem interface implemented by storage adapters.

This module defines the abstract base class every adapter implements, the
option bag accepted by write operations and the adapter-level errors. Results
follow the conventional filesystem-adapter shapes: a normalized mapping, a
boolean, or ``False`` where an operation reports failure instead of raising.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from enum import Enum
from typing import Any, BinaryIO, Dict, Iterator, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


EntryResult = Union[Dict[str, Any], Literal[False]]
"""A normalized entry mapping, or ``False`` when the lookup failed."""


class WriteMode(str, Enum):
    """Upload modes understood by the provider."""

    ADD = "add"
    OVERWRITE = "overwrite"


class WriteConfig(BaseModel):
    """Options recognized by write operations. Unknown options are ignored."""

    model_config = ConfigDict(extra="ignore")

    autorename: bool = Field(default=False, description="Let the provider rename on conflict")
    mute: bool = Field(default=False, description="Suppress client notifications for this change")
    strict_conflict: bool = Field(default=False, description="Treat identical-content writes as conflicts")
    client_modified: Optional[datetime] = Field(default=None, description="Modification time to record")

    @classmethod
    def coerce(cls, config: Union["WriteConfig", Mapping[str, Any], None]) -> "WriteConfig":
        """Build a config from ``None``, a mapping or an existing config."""
        if config is None:
            return cls()
        if isinstance(config, cls):
            return config
        if isinstance(config, Mapping):
            return cls.model_validate(dict(config))
        raise TypeError(f"Unsupported config type: {type(config).__name__}")

    def to_upload_options(self, mode: WriteMode) -> Dict[str, Any]:
        """Options mapping handed to the client's upload call."""
        options: Dict[str, Any] = {
            "mode": WriteMode(mode).value,
            "autorename": self.autorename,
            "mute": self.mute,
            "strict_conflict": self.strict_conflict,
        }
        if self.client_modified is not None:
            modified = self.client_modified
            if modified.tzinfo is not None:
                modified = modified.astimezone(timezone.utc)
            options["client_modified"] = modified.strftime("%Y-%m-%dT%H:%M:%SZ")
        return options


class AdapterError(Exception):
    """Base exception for adapter-level errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ResponseFormatError(AdapterError):
    """The provider returned an entry the adapter cannot normalize."""

    pass


class FilesystemAdapter(ABC):
    """
    Abstract base class for filesystem adapters.

    Paths are relative to the adapter's root and use ``/`` as separator.
    """

    @abstractmethod
    def write(self, path: str, contents: bytes, config: Union[WriteConfig, Mapping[str, Any], None] = None) -> Dict[str, Any]:
        """
        Write a new file.

        Args:
            path: Destination path
            contents: File contents
            config: Write options

        Returns:
            Normalized entry of the written file
        """
        pass

    @abstractmethod
    def update(self, path: str, contents: bytes, config: Union[WriteConfig, Mapping[str, Any], None] = None) -> Dict[str, Any]:
        """
        Overwrite an existing file.

        Args:
            path: Destination path
            contents: File contents
            config: Write options

        Returns:
            Normalized entry of the written file
        """
        pass

    @abstractmethod
    def write_stream(self, path: str, stream: BinaryIO, config: Union[WriteConfig, Mapping[str, Any], None] = None) -> Dict[str, Any]:
        """Write a new file from a readable byte stream."""
        pass

    @abstractmethod
    def update_stream(self, path: str, stream: BinaryIO, config: Union[WriteConfig, Mapping[str, Any], None] = None) -> Dict[str, Any]:
        """Overwrite an existing file from a readable byte stream."""
        pass

    @abstractmethod
    def read(self, path: str) -> Dict[str, Any]:
        """
        Read a file into memory.

        Returns:
            Mapping with a ``contents`` key holding the file bytes
        """
        pass

    @abstractmethod
    def read_stream(self, path: str) -> Dict[str, Any]:
        """
        Open a file for reading.

        Returns:
            Mapping with a ``stream`` key holding a readable byte stream
        """
        pass

    @abstractmethod
    def delete(self, path: str) -> bool:
        """Delete a file. Returns False when the provider refused."""
        pass

    @abstractmethod
    def delete_dir(self, path: str) -> bool:
        """Delete a directory and its contents."""
        pass

    @abstractmethod
    def create_dir(self, path: str, config: Union[WriteConfig, Mapping[str, Any], None] = None) -> EntryResult:
        """
        Create a directory.

        Returns:
            ``{"path": ..., "type": "dir"}`` on success, False otherwise
        """
        pass

    @abstractmethod
    def rename(self, path: str, new_path: str) -> bool:
        """Move a file or directory."""
        pass

    @abstractmethod
    def copy(self, path: str, new_path: str) -> bool:
        """Copy a file or directory."""
        pass

    @abstractmethod
    def has(self, path: str) -> bool:
        """Check whether a path exists."""
        pass

    @abstractmethod
    def get_metadata(self, path: str) -> EntryResult:
        """Get the normalized entry for a path."""
        pass

    @abstractmethod
    def get_timestamp(self, path: str) -> Union[datetime, None, Literal[False]]:
        """Get the last modification time of a path."""
        pass

    @abstractmethod
    def get_size(self, path: str) -> Union[int, None, Literal[False]]:
        """Get the size of a file in bytes."""
        pass

    @abstractmethod
    def get_mimetype(self, path: str) -> Union[str, Literal[False]]:
        """Get the MIME type of a file."""
        pass

    @abstractmethod
    def iter_contents(self, directory: str = "", recursive: bool = False) -> Iterator[Dict[str, Any]]:
        """Yield the entries of a directory."""
        pass

    def list_contents(self, directory: str = "", recursive: bool = False) -> List[Dict[str, Any]]:
        """
        List the entries of a directory.

        Args:
            directory: Directory to list, the root when empty
            recursive: Include entries of all subdirectories

        Returns:
            List of normalized entry mappings
        """
        return list(self.iter_contents(directory, recursive))

    def health_check(self) -> bool:
        """
        Check if the storage service is accessible.

        Returns:
            True if service is healthy, False otherwise
        """
        return False


__all__ = [
    "FilesystemAdapter",
    "WriteConfig",
    "WriteMode",
    "EntryResult",
    "AdapterError",
    "ResponseFormatError",
]
