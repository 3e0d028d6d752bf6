"""
Factory for creating provider clients and filesystem adapters.
"""

from typing import Optional

from cloudfs.client.base import StorageClient
from cloudfs.client.http_client import HttpStorageClient
from cloudfs.storage.adapter import CloudFilesystemAdapter
from cloudfs.utils.env_config import AppSettings


def create_client(settings: AppSettings) -> HttpStorageClient | None:
    """Create an HTTP client when an access token is configured."""
    config_dict = settings.get_client_config()

    access_token = config_dict["access_token"]
    if access_token and access_token.strip():
        config_dict["access_token"] = access_token.strip()
        return HttpStorageClient(**config_dict)
    return None


def create_adapter(settings: AppSettings, client: Optional[StorageClient] = None) -> CloudFilesystemAdapter | None:
    """Create a filesystem adapter around ``client`` or a client built from settings."""
    if client is None:
        client = create_client(settings)
    if client is None:
        return None
    return CloudFilesystemAdapter(client, **settings.get_adapter_config())
