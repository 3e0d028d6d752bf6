from typing import Any
from unittest.mock import MagicMock

import pytest
import structlog

from cloudfs.client.base import BadRequest
from cloudfs.client.http_client import HttpStorageClient
from cloudfs.storage.adapter import CloudFilesystemAdapter
from cloudfs.utils.env_config import AppSettings


@pytest.fixture
def client() -> MagicMock:
    return MagicMock(spec=HttpStorageClient)


@pytest.fixture
def adapter(client: MagicMock) -> CloudFilesystemAdapter:
    return CloudFilesystemAdapter(client, "prefix")


@pytest.fixture
def file_entry() -> dict[str, Any]:
    return {
        "server_modified": "2015-05-12T15:50:38Z",
        "path_display": "/prefix/something",
        ".tag": "file",
    }


@pytest.fixture
def conflict() -> BadRequest:
    return BadRequest("Storage API rejected files/move_v2", status_code=409, error_code="to/conflict/folder/")


@pytest.fixture
def mock_settings() -> MagicMock:
    settings = MagicMock(spec=AppSettings)
    settings.access_token = "test-token"
    settings.path_prefix = "prefix"
    settings.get_client_config.return_value = {
        "access_token": "test-token",
        "api_url": "https://api.example.com/2",
        "content_url": "https://content.example.com/2",
        "timeout": 30.0,
        "chunk_size": 4194304,
    }
    settings.get_adapter_config.return_value = {"prefix": "prefix"}
    return settings


@pytest.fixture(autouse=True)
def mock_logger(mocker: Any) -> MagicMock:
    return mocker.patch.object(structlog, "get_logger", return_value=MagicMock())
