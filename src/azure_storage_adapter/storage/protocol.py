# SPDX-License-Identifier: MIT
"""Files adapter protocol and shared types.

Defines the contract the hosting file-storage framework calls into.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol, Union, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

FileData = Union[bytes, bytearray, memoryview, str, Iterable[int]]
"""Content accepted by :meth:`FilesAdapter.create_file`."""


@dataclass(frozen=True)
class OperationResult:
    """Backend acknowledgement of a write or delete, for observability only."""

    request_id: str | None = None
    etag: str | None = None
    last_modified: str | None = None
    version_id: str | None = None


@runtime_checkable
class LocationConfig(Protocol):
    """Framework settings needed to build proxied file URLs."""

    mount: str | None
    application_id: str | None


class FilesConfig(BaseModel):
    """Concrete :class:`LocationConfig`, e.g. ``FilesConfig(mount="/parse", application_id="app1")``.

    Also accepts the framework's own ``applicationId`` spelling.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    mount: str | None = None
    application_id: str | None = Field(default=None, alias="applicationId")


@runtime_checkable
class FilesAdapter(Protocol):
    """Protocol for pluggable file storage used by the hosting framework.

    Filenames are opaque keys; callers sanitise them before they get here.
    """

    async def create_file(self, filename: str, data: FileData, content_type: str | None = None) -> OperationResult:
        """Store *data* under *filename*, replacing any existing file.

        Raises:
            StorageWriteError: If the file could not be stored.
        """
        ...

    async def delete_file(self, filename: str) -> OperationResult:
        """Delete *filename*.

        Raises:
            StorageDeleteError: If the file does not exist or could not be deleted.
        """
        ...

    async def get_file_data(self, filename: str) -> bytes:
        """Return the entire contents of *filename*.

        Raises:
            StorageReadError: If the file does not exist or could not be read in full.
        """
        ...

    def get_file_location(self, config: LocationConfig, filename: str) -> str:
        """URL (absolute or mount-relative) under which *filename* is served."""
        ...
