from .storage_factory import create_adapter, create_client

__all__ = ["create_adapter", "create_client"]
