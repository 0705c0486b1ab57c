# SPDX-License-Identifier: MIT
"""Exception hierarchy for the Azure Blob Storage files adapter."""


class AdapterError(Exception):
    """Base exception for all adapter errors."""


class ConfigurationError(AdapterError, RuntimeError):
    """Raised when the adapter is constructed without its required identity."""


class StorageError(AdapterError):
    """Base exception for failed blob operations.

    The backend exception is always chained as ``__cause__``.
    """


class StorageWriteError(StorageError):
    """Raised when a blob (or its container) cannot be created."""


class StorageDeleteError(StorageError):
    """Raised when a blob cannot be deleted, including when it does not exist."""


class StorageReadError(StorageError):
    """Raised when a blob cannot be downloaded in full."""
