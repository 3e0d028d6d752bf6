"""
Pydantic data models for normalized storage entries.

The provider describes every file and folder with its own field names
(``.tag``, ``path_display``, ``server_modified``). This module defines the
uniform shape handed back to callers of the filesystem adapter.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class EntryType(str, Enum):
    """Kind of a storage entry."""
    FILE = "file"
    DIR = "dir"

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> "EntryType":
        """Decode the provider's type tag.

        Raises:
            ValueError: If the tag names neither a file nor a folder.
        """
        if tag == "file":
            return cls.FILE
        if tag == "folder":
            return cls.DIR
        raise ValueError(f"Unsupported entry tag: {tag!r}")


class NormalizedEntry(BaseModel):
    """A file or directory as seen through the adapter."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Path relative to the adapter prefix")
    type: EntryType
    timestamp: Optional[datetime] = Field(default=None, description="Last server modification")
    size: Optional[int] = Field(default=None, ge=0, description="Size in bytes")
    contents: Optional[bytes] = None

    @property
    def is_dir(self) -> bool:
        return self.type is EntryType.DIR

    @property
    def is_file(self) -> bool:
        return self.type is EntryType.FILE

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping with unset optional fields left out."""
        data = self.model_dump(exclude_none=True)
        data["type"] = self.type.value
        return data
