# SPDX-License-Identifier: MIT
"""Azure Blob Storage backend for the files adapter.

Usage::

    from azure_storage_adapter.storage import get_adapter

    adapter = get_adapter()
    await adapter.create_file("hero.png", png_bytes, content_type="image/png")
    data = await adapter.get_file_data("hero.png")
"""

from .azure_blob import AzureStorageAdapter
from .factory import get_adapter
from .protocol import FileData, FilesAdapter, FilesConfig, LocationConfig, OperationResult

__all__ = [
    "AzureStorageAdapter",
    "FileData",
    "FilesAdapter",
    "FilesConfig",
    "LocationConfig",
    "OperationResult",
    "get_adapter",
]
