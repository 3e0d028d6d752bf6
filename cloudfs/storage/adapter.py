"""
Filesystem adapter backed by a remote storage provider client.

``CloudFilesystemAdapter`` maps the generic filesystem interface onto a
``StorageClient``: caller paths are prefixed on the way out and stripped on
the way back, provider entries are normalized to ``NormalizedEntry`` and
paginated listings are flattened into a single sequence.

Two failure policies coexist. Writes, reads and listings let the client's
``RequestFailure`` propagate. Deletes, moves, directory creation and metadata
lookups report failure as ``False`` instead, which means a missing path, a
conflict and a transport error all look the same to the caller.
"""

import mimetypes
from datetime import datetime
from typing import Any, BinaryIO, Callable, Dict, Iterator, Literal, Mapping, Optional, TypeVar, Union

import structlog
from pydantic import ValidationError

from ..client.base import RawEntry, RequestFailure, StorageClient
from ..models.entry import EntryType, NormalizedEntry
from .filesystem import EntryResult, FilesystemAdapter, ResponseFormatError, WriteConfig, WriteMode
from .path_prefix import PathPrefix


logger = structlog.get_logger(__name__)

T = TypeVar("T")

DEFAULT_MIMETYPE = "application/octet-stream"


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse the provider's ISO-8601 timestamps (``2015-05-12T15:50:38Z``)."""
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValueError(f"Expected an ISO-8601 string, got {type(value).__name__}")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


class CloudFilesystemAdapter(FilesystemAdapter):
    """
    Filesystem adapter translating calls to a storage provider client.

    The adapter keeps no state between calls apart from the client and the
    immutable path prefix.
    """

    def __init__(self, client: StorageClient, prefix: str = ""):
        """
        Args:
            client: Provider client to delegate to
            prefix: Root folder every path is resolved under
        """
        self._client = client
        self.prefix = PathPrefix(prefix)

    def get_client(self) -> StorageClient:
        """Return the wrapped client for calls outside the adapter contract."""
        return self._client

    # Writes

    def write(self, path: str, contents: bytes, config: Union[WriteConfig, Mapping[str, Any], None] = None) -> Dict[str, Any]:
        return self._upload(path, contents, WriteMode.ADD, config)

    def update(self, path: str, contents: bytes, config: Union[WriteConfig, Mapping[str, Any], None] = None) -> Dict[str, Any]:
        return self._upload(path, contents, WriteMode.OVERWRITE, config)

    def write_stream(self, path: str, stream: BinaryIO, config: Union[WriteConfig, Mapping[str, Any], None] = None) -> Dict[str, Any]:
        return self._upload(path, stream, WriteMode.ADD, config)

    def update_stream(self, path: str, stream: BinaryIO, config: Union[WriteConfig, Mapping[str, Any], None] = None) -> Dict[str, Any]:
        return self._upload(path, stream, WriteMode.OVERWRITE, config)

    # Reads

    def read(self, path: str) -> Dict[str, Any]:
        stream = self.read_stream(path)["stream"]
        try:
            contents = stream.read()
        finally:
            stream.close()
        return {"contents": contents}

    def read_stream(self, path: str) -> Dict[str, Any]:
        stream = self._client.download(self.prefix.apply(path))
        if hasattr(stream, "seekable") and stream.seekable():
            stream.seek(0)
        return {"stream": stream}

    def get_temporary_link(self, path: str) -> str:
        """Get a short-lived direct download link for a file."""
        return self._client.get_temporary_link(self.prefix.apply(path))["link"]

    # Mutations reported as booleans

    def delete(self, path: str) -> bool:
        location = self.prefix.apply(path)
        return self._succeeds("delete", path, lambda: self._client.delete(location))

    def delete_dir(self, path: str) -> bool:
        return self.delete(path)

    def create_dir(self, path: str, config: Union[WriteConfig, Mapping[str, Any], None] = None) -> EntryResult:
        location = self.prefix.apply(path)
        entry = self._attempt(
            "create_dir", path, lambda: self.normalize_response(self._client.create_folder(location))
        )
        if entry is None:
            return False
        return {"path": entry.path, "type": EntryType.DIR.value}

    def rename(self, path: str, new_path: str) -> bool:
        source = self.prefix.apply(path)
        destination = self.prefix.apply(new_path)
        return self._succeeds("rename", path, lambda: self._client.move(source, destination))

    def copy(self, path: str, new_path: str) -> bool:
        source = self.prefix.apply(path)
        destination = self.prefix.apply(new_path)
        return self._succeeds("copy", path, lambda: self._client.copy(source, destination))

    # Metadata

    def has(self, path: str) -> bool:
        return self._lookup(path) is not None

    def get_metadata(self, path: str) -> EntryResult:
        entry = self._lookup(path)
        if entry is None:
            return False
        return entry.to_dict()

    def get_timestamp(self, path: str) -> Union[datetime, None, Literal[False]]:
        entry = self._lookup(path)
        if entry is None:
            return False
        return entry.timestamp

    def get_size(self, path: str) -> Union[int, None, Literal[False]]:
        entry = self._lookup(path)
        if entry is None:
            return False
        return entry.size

    def get_mimetype(self, path: str) -> Union[str, Literal[False]]:
        """Guess the MIME type of an existing file from its extension.

        The provider does not store MIME types.
        """
        entry = self._lookup(path)
        if entry is None or entry.is_dir:
            return False
        mimetype, _ = mimetypes.guess_type(entry.path)
        return mimetype or DEFAULT_MIMETYPE

    # Listing

    def iter_contents(self, directory: str = "", recursive: bool = False) -> Iterator[Dict[str, Any]]:
        """
        Yield the entries of a directory, pulling pages as they are consumed.

        Each call starts a fresh listing. A failure on any page propagates.
        """
        location = self.prefix.apply(directory)
        result = self._client.list_folder(location, recursive)
        page = 1
        while True:
            for raw in result.get("entries", []):
                yield self.normalize_response(raw).to_dict()
            if not result.get("has_more"):
                break
            cursor = result.get("cursor")
            if not cursor:
                raise ResponseFormatError(
                    "Listing reports more entries but carries no cursor",
                    details={"directory": directory, "page": page},
                )
            page += 1
            logger.debug("Fetching next listing page", directory=directory, page=page)
            result = self._client.list_folder_continue(cursor)

    def health_check(self) -> bool:
        location = self.prefix.apply("")
        return self._succeeds("health_check", "", lambda: self._client.list_folder(location, False))

    # Normalization

    def normalize_response(self, raw: RawEntry, path: Optional[str] = None) -> NormalizedEntry:
        """
        Map a provider entry onto the uniform entry shape.

        Args:
            raw: Entry as returned by the client
            path: Caller path to report instead of the stripped ``path_display``

        Raises:
            ResponseFormatError: If the entry lacks a known tag or a path
        """
        if not isinstance(raw, Mapping):
            raise ResponseFormatError(f"Expected an entry mapping, got {type(raw).__name__}")

        try:
            entry_type = EntryType.from_tag(raw.get(".tag"))
        except ValueError as e:
            raise ResponseFormatError(str(e), details={"entry": dict(raw)}) from e

        if path is None:
            if not isinstance(raw.get("path_display"), str):
                raise ResponseFormatError("Entry has no path_display", details={"entry": dict(raw)})
            path = self.prefix.strip(raw["path_display"])

        try:
            timestamp = parse_timestamp(raw.get("server_modified"))
        except ValueError as e:
            raise ResponseFormatError(f"Invalid server_modified: {raw.get('server_modified')!r}") from e

        try:
            return NormalizedEntry(path=path, type=entry_type, timestamp=timestamp, size=raw.get("size"))
        except ValidationError as e:
            raise ResponseFormatError(f"Invalid entry fields: {e.error_count()} error(s)", details={"entry": dict(raw)}) from e

    # Private helper methods

    def _upload(
        self,
        path: str,
        contents: Union[bytes, BinaryIO],
        mode: WriteMode,
        config: Union[WriteConfig, Mapping[str, Any], None],
    ) -> Dict[str, Any]:
        options = WriteConfig.coerce(config).to_upload_options(mode)
        raw = self._client.upload(self.prefix.apply(path), contents, options)
        entry = self.normalize_response(raw)
        logger.info(f"Uploaded {entry.path}", mode=mode.value, size=entry.size)
        return entry.to_dict()

    def _lookup(self, path: str) -> Optional[NormalizedEntry]:
        location = self.prefix.apply(path)
        return self._attempt(
            "get_metadata", path, lambda: self.normalize_response(self._client.get_metadata(location))
        )

    def _attempt(self, operation: str, path: str, call: Callable[[], T]) -> Optional[T]:
        """Run ``call``; a provider failure becomes ``None``."""
        try:
            return call()
        except (RequestFailure, ResponseFormatError) as e:
            logger.warning(
                f"{operation} failed",
                path=path,
                status_code=getattr(e, "status_code", None),
                error=str(e),
            )
            return None

    def _succeeds(self, operation: str, path: str, call: Callable[[], Any]) -> bool:
        return self._attempt(operation, path, lambda: call() or True) is not None
