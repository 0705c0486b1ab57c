# SPDX-License-Identifier: MIT
"""Azure Blob Storage adapter for a generic file-storage framework."""

from .config import AdapterConfig, load_settings
from .exceptions import (
    AdapterError,
    ConfigurationError,
    StorageDeleteError,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from .storage import (
    AzureStorageAdapter,
    FileData,
    FilesAdapter,
    FilesConfig,
    LocationConfig,
    OperationResult,
    get_adapter,
)

__all__ = [
    "AdapterConfig",
    "AdapterError",
    "AzureStorageAdapter",
    "ConfigurationError",
    "FileData",
    "FilesAdapter",
    "FilesConfig",
    "LocationConfig",
    "OperationResult",
    "StorageDeleteError",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "get_adapter",
    "load_settings",
]
