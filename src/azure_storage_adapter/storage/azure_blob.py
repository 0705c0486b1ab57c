# SPDX-License-Identifier: MIT
"""Azure Blob Storage files adapter.

Stores framework files as block blobs in a single container, using the
async Azure SDK for all I/O.  Files are served either straight from the
public blob endpoint (``direct_access=True``) or through the hosting
application's ``{mount}/files/{application_id}/...`` route.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from azure.core.credentials import AzureNamedKeyCredential
from azure.core.exceptions import ResourceExistsError
from azure.identity.aio import DefaultAzureCredential
from azure.storage.blob import ContentSettings, PublicAccess
from azure.storage.blob.aio import BlobServiceClient
from pydantic import ValidationError

from ..config import AdapterConfig
from ..exceptions import ConfigurationError, StorageDeleteError, StorageReadError, StorageWriteError
from .protocol import FileData, LocationConfig, OperationResult

logger = logging.getLogger("azure_storage_adapter")

# Characters JavaScript's encodeURIComponent leaves alone on top of Python's unreserved set
_URI_COMPONENT_SAFE = "!*'()"


class _ResponseHeaders:
    """``raw_response_hook`` that keeps the headers of the last response seen."""

    def __init__(self) -> None:
        self.headers: Mapping[str, str] = {}

    def __call__(self, pipeline_response: Any) -> None:
        self.headers = pipeline_response.http_response.headers

    def result(self) -> OperationResult:
        return OperationResult(
            request_id=self.headers.get("x-ms-request-id"),
            etag=self.headers.get("ETag"),
            last_modified=self.headers.get("Last-Modified"),
            version_id=self.headers.get("x-ms-version-id"),
        )


def _to_bytes(data: FileData) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    # bytes(n) would silently allocate n zero bytes
    if isinstance(data, int):
        raise TypeError(f"File data must be bytes-like, str or an iterable of ints, not {type(data).__name__}")
    return bytes(data)


class AzureStorageAdapter:
    """Files adapter backed by one Azure Blob Storage container.

    The container is created on the first write if it does not exist yet:
    with blob-level public read access in direct-access mode, private
    otherwise.  Construction only validates arguments and builds the SDK
    client; no request is sent until the first operation.

    Args:
        account_name: Storage account name.
        container: Container holding the files.
        access_key: Shared key.  Empty means ``DefaultAzureCredential``.
        direct_access: Serve files from public blob URLs instead of the
            hosting application's files route.
        client: Pre-built async ``BlobServiceClient``.  When given, the
            adapter uses it as-is and leaves closing it to the caller.

    Raises:
        ConfigurationError: If ``account_name`` or ``container`` is empty.
    """

    def __init__(
        self,
        account_name: str | None = None,
        container: str | None = None,
        access_key: str = "",
        direct_access: bool = False,
        *,
        client: BlobServiceClient | None = None,
    ) -> None:
        if not account_name:
            raise ConfigurationError("AzureStorageAdapter requires an account name")
        if not container:
            raise ConfigurationError("AzureStorageAdapter requires a container")

        try:
            self._config = AdapterConfig(
                account_name=account_name,
                container=container,
                access_key=access_key or "",
                direct_access=direct_access,
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid AzureStorageAdapter configuration: {e}") from e

        self._credential: DefaultAzureCredential | None = None
        if client is not None:
            self._client = client
            self._owns_client = False
        else:
            self._client = BlobServiceClient(self._config.account_url, credential=self._make_credential())
            self._owns_client = True
        self._container_client = self._client.get_container_client(container)
        self._container_ready = False

    def _make_credential(self) -> AzureNamedKeyCredential | DefaultAzureCredential:
        if self._config.access_key:
            return AzureNamedKeyCredential(self._config.account_name, self._config.access_key)
        logger.debug("No access key for account %s, using DefaultAzureCredential", self._config.account_name)
        self._credential = DefaultAzureCredential()
        return self._credential

    @property
    def account_name(self) -> str:
        return self._config.account_name

    @property
    def container(self) -> str:
        return self._config.container

    @property
    def direct_access(self) -> bool:
        return self._config.direct_access

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        """Close the SDK client and credential this adapter created.

        Injected clients are left open.
        """
        try:
            if self._owns_client:
                await self._client.close()
        finally:
            if self._credential is not None:
                await self._credential.close()

    async def __aenter__(self) -> AzureStorageAdapter:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Container
    # ------------------------------------------------------------------

    async def _ensure_container(self) -> None:
        """Create the container once per adapter, tolerating one that already exists.

        Not synchronized: concurrent first writers may each try to create it.
        """
        if self._container_ready:
            return
        public_access = PublicAccess.BLOB if self._config.direct_access else None
        try:
            await self._container_client.create_container(public_access=public_access)
            logger.info("Created container %s (public access: %s)", self._config.container, public_access or "none")
        except ResourceExistsError:
            logger.debug("Container %s already exists", self._config.container)
        self._container_ready = True

    # ------------------------------------------------------------------
    # Byte-level I/O
    # ------------------------------------------------------------------

    async def create_file(self, filename: str, data: FileData, content_type: str | None = None) -> OperationResult:
        """Upload *data* as a single block blob named *filename*.

        An existing blob with the same name is overwritten.

        Returns:
            The backend's acknowledgement, including its request id.

        Raises:
            StorageWriteError: If *data* cannot be turned into bytes, or the
                container or the blob could not be created.
        """
        capture = _ResponseHeaders()
        try:
            payload = _to_bytes(data)
            await self._ensure_container()
            blob = self._container_client.get_blob_client(filename)
            content_settings = ContentSettings(content_type=content_type) if content_type else None
            await blob.upload_blob(
                payload,
                overwrite=True,
                content_settings=content_settings,
                raw_response_hook=capture,
            )
        except Exception as e:
            raise StorageWriteError(f"Error creating file: {e}") from e

        result = capture.result()
        logger.debug("Uploaded %s (%d bytes, request %s)", filename, len(payload), result.request_id)
        return result

    async def delete_file(self, filename: str) -> OperationResult:
        """Delete the blob named *filename*.

        Raises:
            StorageDeleteError: If the blob does not exist or could not be deleted.
        """
        capture = _ResponseHeaders()
        try:
            blob = self._container_client.get_blob_client(filename)
            await blob.delete_blob(raw_response_hook=capture)
        except Exception as e:
            raise StorageDeleteError(f"Error deleting file: {e}") from e

        result = capture.result()
        logger.debug("Deleted %s (request %s)", filename, result.request_id)
        return result

    async def get_file_data(self, filename: str) -> bytes:
        """Download the whole blob named *filename*.

        The SDK delivers the content as a stream of chunks; all of them are
        drained before returning, so callers never see a partial body.

        Raises:
            StorageReadError: If the blob does not exist or the download fails
                at any point.
        """
        buf = bytearray()
        try:
            blob = self._container_client.get_blob_client(filename)
            downloader = await blob.download_blob()
            async for chunk in downloader.chunks():
                buf.extend(chunk)
        except Exception as e:
            raise StorageReadError(f"Error getting file data: {e}") from e

        logger.debug("Downloaded %s (%d bytes)", filename, len(buf))
        return bytes(buf)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def get_file_location(self, config: LocationConfig | Mapping[str, Any], filename: str) -> str:
        """Public URL of *filename*.

        Direct access returns the blob endpoint URL with the name as-is.
        Otherwise the name is percent-encoded into the framework's files
        route; a missing ``mount`` or application id renders empty.  The
        application id is read as ``application_id`` or ``applicationId``.
        """
        if self._config.direct_access:
            return f"{self._config.account_url}/{self._config.container}/{filename}"

        mount = _config_value(config, "mount")
        application_id = _config_value(config, "application_id", "applicationId")
        return f"{mount}/files/{application_id}/{quote(filename, safe=_URI_COMPONENT_SAFE)}"


def _config_value(config: LocationConfig | Mapping[str, Any], *names: str) -> str:
    for name in names:
        if isinstance(config, Mapping):
            value = config.get(name)
        else:
            value = getattr(config, name, None)
        if value is not None:
            return str(value)
    return ""
