"""Data models shared by the adapter and its clients."""

from .entry import EntryType, NormalizedEntry

__all__ = [
    "EntryType",
    "NormalizedEntry",
]
