"""
HTTP implementation of the storage client contract.

This module provides ``HttpStorageClient``, a synchronous httpx client for the
provider's v2 "files" REST API. RPC endpoints take a JSON body on the API host;
content endpoints (upload, download) carry their arguments JSON-encoded in the
``Dropbox-API-Arg`` header on the content host.
"""

import json
import tempfile
from typing import Any, BinaryIO, Dict, Iterator, Mapping, Optional, Union

import httpx
import structlog

from .base import BadRequest, ListFolderResult, RawEntry, RequestFailure


logger = structlog.get_logger(__name__)

DEFAULT_API_URL = "https://api.dropboxapi.com/2"
DEFAULT_CONTENT_URL = "https://content.dropboxapi.com/2"
DEFAULT_CHUNK_SIZE = 4194304
API_ARG_HEADER = "Dropbox-API-Arg"


class HttpStorageClient:
    """
    Storage provider client over HTTP.

    Every call is a single request; failures are raised as ``BadRequest`` for
    4xx answers and ``RequestFailure`` for everything else. Nothing is retried.
    """

    def __init__(
        self,
        access_token: str,
        api_url: str = DEFAULT_API_URL,
        content_url: str = DEFAULT_CONTENT_URL,
        timeout: float = 30.0,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        http_client: Optional[httpx.Client] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.content_url = content_url.rstrip("/")
        self.timeout = timeout
        self.chunk_size = chunk_size
        self._headers = {"Authorization": f"Bearer {access_token}"}
        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else httpx.Client(timeout=timeout)

    def __enter__(self) -> "HttpStorageClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session if this client created it."""
        if self._owns_http:
            self._http.close()

    # Content endpoints

    def upload(self, path: str, contents: Union[bytes, BinaryIO], options: Mapping[str, Any]) -> RawEntry:
        """Upload bytes or a readable stream to ``path``."""
        arg = {"path": path, **options}
        body: Union[bytes, Iterator[bytes]]
        if isinstance(contents, (bytes, bytearray)):
            body = bytes(contents)
        elif isinstance(contents, str):
            body = contents.encode("utf-8")
        else:
            body = self._iter_chunks(contents)

        response = self._send(
            "files/upload",
            f"{self.content_url}/files/upload",
            content=body,
            headers={
                API_ARG_HEADER: json.dumps(arg),
                "Content-Type": "application/octet-stream",
            },
        )
        entry = self._decode(response, "files/upload")
        entry.setdefault(".tag", "file")
        return entry

    def download(self, path: str) -> BinaryIO:
        """Download ``path`` into a seekable, rewound temporary file."""
        url = f"{self.content_url}/files/download"
        headers = {**self._headers, API_ARG_HEADER: json.dumps({"path": path})}
        buffer = tempfile.SpooledTemporaryFile(max_size=self.chunk_size)
        logger.debug("Storage API request", endpoint="files/download", path=path)

        try:
            with self._http.stream("POST", url, headers=headers) as response:
                if response.status_code >= 400:
                    response.read()
                    self._raise_for_status(response, "files/download")
                for chunk in response.iter_bytes(self.chunk_size):
                    buffer.write(chunk)
        except httpx.TimeoutException as e:
            buffer.close()
            raise RequestFailure("Request to storage API timed out", details={"endpoint": "files/download"}) from e
        except httpx.RequestError as e:
            buffer.close()
            raise RequestFailure(f"Network error calling storage API: {e}", details={"endpoint": "files/download"}) from e
        except RequestFailure:
            buffer.close()
            raise

        buffer.seek(0)
        return buffer

    # RPC endpoints

    def get_metadata(self, path: str) -> RawEntry:
        return self._rpc("files/get_metadata", {"path": path})

    def get_temporary_link(self, path: str) -> Dict[str, Any]:
        return self._rpc("files/get_temporary_link", {"path": path})

    def delete(self, path: str) -> RawEntry:
        return self._unwrap(self._rpc("files/delete_v2", {"path": path}), "files/delete_v2")

    def create_folder(self, path: str) -> RawEntry:
        endpoint = "files/create_folder_v2"
        entry = self._unwrap(self._rpc(endpoint, {"path": path, "autorename": False}), endpoint)
        entry.setdefault(".tag", "folder")
        return entry

    def list_folder(self, path: str, recursive: bool = False) -> ListFolderResult:
        return self._rpc("files/list_folder", {"path": path, "recursive": recursive})

    def list_folder_continue(self, cursor: str) -> ListFolderResult:
        return self._rpc("files/list_folder/continue", {"cursor": cursor})

    def move(self, from_path: str, to_path: str) -> RawEntry:
        endpoint = "files/move_v2"
        return self._unwrap(self._rpc(endpoint, {"from_path": from_path, "to_path": to_path}), endpoint)

    def copy(self, from_path: str, to_path: str) -> RawEntry:
        endpoint = "files/copy_v2"
        return self._unwrap(self._rpc(endpoint, {"from_path": from_path, "to_path": to_path}), endpoint)

    # Private helper methods

    def _rpc(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Call a JSON RPC endpoint on the API host."""
        response = self._send(endpoint, f"{self.api_url}/{endpoint}", json=payload)
        return self._decode(response, endpoint)

    def _decode(self, response: httpx.Response, endpoint: str) -> Dict[str, Any]:
        """Parse a successful reply, which must be a JSON object."""
        try:
            data = response.json()
        except ValueError as e:
            raise RequestFailure(
                "Invalid response from storage API",
                status_code=response.status_code,
                details={"endpoint": endpoint, "response": response.text[:200]},
            ) from e
        if not isinstance(data, dict):
            raise RequestFailure(
                "Invalid response from storage API",
                status_code=response.status_code,
                details={"endpoint": endpoint, "response": data},
            )
        return data

    def _unwrap(self, data: Dict[str, Any], endpoint: str) -> RawEntry:
        """Return the entry nested under ``metadata`` in a _v2 reply."""
        entry = data.get("metadata")
        if not isinstance(entry, dict):
            raise RequestFailure(
                "Invalid response from storage API", details={"endpoint": endpoint, "response": data}
            )
        return entry

    def _send(self, endpoint: str, url: str, headers: Optional[Dict[str, str]] = None, **kwargs: Any) -> httpx.Response:
        """POST a request and convert transport and HTTP errors."""
        logger.debug("Storage API request", endpoint=endpoint)
        try:
            response = self._http.post(url, headers={**self._headers, **(headers or {})}, **kwargs)
        except httpx.TimeoutException as e:
            raise RequestFailure("Request to storage API timed out", details={"endpoint": endpoint}) from e
        except httpx.RequestError as e:
            raise RequestFailure(f"Network error calling storage API: {e}", details={"endpoint": endpoint}) from e

        self._raise_for_status(response, endpoint)
        return response

    def _raise_for_status(self, response: httpx.Response, endpoint: str) -> None:
        """Raise the matching ``RequestFailure`` for an error response."""
        if response.status_code < 400:
            return

        try:
            error_data = response.json()
        except ValueError:
            error_data = {"error": response.text}

        error_code = None
        if isinstance(error_data, dict):
            error_code = error_data.get("error_summary")
        details = {"endpoint": endpoint, "response": error_data}

        if 400 <= response.status_code < 500:
            raise BadRequest(
                f"Storage API rejected {endpoint}",
                status_code=response.status_code,
                error_code=error_code,
                details=details,
            )
        raise RequestFailure(
            f"Storage API error during {endpoint}",
            status_code=response.status_code,
            error_code=error_code,
            details=details,
        )

    def _iter_chunks(self, readable: BinaryIO) -> Iterator[bytes]:
        """Read a stream lazily in ``chunk_size`` pieces."""
        chunk = readable.read(self.chunk_size)
        while chunk:
            yield chunk
            chunk = readable.read(self.chunk_size)
