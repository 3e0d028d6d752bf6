"""
Client contract for the remote storage provider.

The filesystem adapter talks to the provider exclusively through the
``StorageClient`` protocol defined here. Any object exposing these methods
(the bundled HTTP client, a test double, a wrapper around another SDK) can be
handed to the adapter.
"""

from typing import Any, BinaryIO, Dict, List, Mapping, Optional, Protocol, TypedDict, Union, runtime_checkable


RawEntry = Dict[str, Any]
"""Provider entry: ``{'.tag': 'file'|'folder', 'path_display': str, 'server_modified'?: str, 'size'?: int}``."""


class ListFolderResult(TypedDict, total=False):
    """One page of a folder listing."""

    entries: List[RawEntry]
    has_more: bool
    cursor: str


class RequestFailure(Exception):
    """A request to the storage provider did not succeed."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.status_code})"


class BadRequest(RequestFailure):
    """The provider rejected the request (4xx), e.g. a path conflict."""

    @property
    def is_conflict(self) -> bool:
        return self.status_code == 409


@runtime_checkable
class StorageClient(Protocol):
    """Operations the adapter consumes from a provider client.

    Every method raises ``RequestFailure`` (or a subclass) when the provider
    reports an error or cannot be reached.
    """

    def upload(self, path: str, contents: Union[bytes, BinaryIO], options: Mapping[str, Any]) -> RawEntry:
        ...

    def download(self, path: str) -> BinaryIO:
        ...

    def get_metadata(self, path: str) -> RawEntry:
        ...

    def get_temporary_link(self, path: str) -> Dict[str, Any]:
        ...

    def delete(self, path: str) -> RawEntry:
        ...

    def create_folder(self, path: str) -> RawEntry:
        ...

    def list_folder(self, path: str, recursive: bool = False) -> ListFolderResult:
        ...

    def list_folder_continue(self, cursor: str) -> ListFolderResult:
        ...

    def move(self, from_path: str, to_path: str) -> RawEntry:
        ...

    def copy(self, from_path: str, to_path: str) -> RawEntry:
        ...
