# SPDX-License-Identifier: MIT
"""Adapter factory.

Reads the ``AZURE_*`` environment variables (after loading any ``.env``
file) and returns a singleton :class:`AzureStorageAdapter`.
"""

from __future__ import annotations

import atexit
import logging
from functools import lru_cache

from dotenv import load_dotenv

from ..config import load_settings
from .azure_blob import AzureStorageAdapter

logger = logging.getLogger("azure_storage_adapter")


@lru_cache(maxsize=1)
def get_adapter() -> AzureStorageAdapter:
    """Return the configured :class:`AzureStorageAdapter` (cached singleton).

    The SDK client is closed automatically at process exit via :func:`atexit`.

    Configuration
    -------------
    ``AZURE_ACCOUNT_NAME`` / ``AZURE_CONTAINER``
        Required storage account and container.
    ``AZURE_ACCESS_KEY``
        Shared key; leave unset for ``DefaultAzureCredential``.
    ``AZURE_DIRECT_ACCESS``
        ``"true"`` to return public blob URLs from ``get_file_location``.
    """
    load_dotenv()
    settings = load_settings()
    adapter = AzureStorageAdapter(
        settings.account_name,
        settings.container,
        access_key=settings.access_key,
        direct_access=settings.direct_access,
    )
    logger.info(
        "Azure storage adapter ready for %s/%s (direct access: %s)",
        settings.account_name,
        settings.container,
        settings.direct_access,
    )
    _register_cleanup(adapter)
    return adapter


def _register_cleanup(adapter: AzureStorageAdapter) -> None:
    """Register an atexit handler to close the adapter's SDK client."""

    def _cleanup() -> None:
        import asyncio

        try:
            loop = asyncio.get_running_loop()
            loop.create_task(adapter.aclose())
        except RuntimeError:
            # No running loop, run synchronously
            asyncio.run(adapter.aclose())
        logger.debug("Azure storage adapter client closed")

    atexit.register(_cleanup)
