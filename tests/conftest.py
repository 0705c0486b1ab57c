# SPDX-License-Identifier: MIT
"""Shared pytest fixtures for the Azure storage adapter tests.

``FakeBlobServiceClient`` mimics the slice of ``azure.storage.blob.aio`` the
adapter uses, backed by plain dicts, and raises the SDK's real exception types.
"""

from __future__ import annotations

import asyncio
import uuid
from types import SimpleNamespace

import pytest
from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError, ServiceResponseError

from azure_storage_adapter.storage.azure_blob import AzureStorageAdapter


def _respond(hook, **headers: str) -> None:
    """Feed synthetic response headers to a ``raw_response_hook``."""
    if hook is None:
        return
    headers.setdefault("x-ms-request-id", str(uuid.uuid4()))
    hook(SimpleNamespace(http_response=SimpleNamespace(headers=headers)))


class FakeDownloader:
    def __init__(self, data: bytes, chunk_size: int, fail_after: int | None) -> None:
        self._data = data
        self._chunk_size = chunk_size
        self._fail_after = fail_after

    async def chunks(self):
        for index, start in enumerate(range(0, len(self._data), self._chunk_size)):
            if self._fail_after is not None and index >= self._fail_after:
                raise ServiceResponseError("Connection reset while reading body")
            yield self._data[start : start + self._chunk_size]


class FakeBlobClient:
    def __init__(self, container: FakeContainerClient, name: str) -> None:
        self._container = container
        self.blob_name = name

    def _blobs(self) -> dict[str, bytes]:
        state = self._container.service.containers.get(self._container.container_name)
        if state is None:
            raise ResourceNotFoundError("The specified container does not exist.")
        return state["blobs"]

    async def upload_blob(self, data, overwrite=False, content_settings=None, raw_response_hook=None, **kwargs):
        service = self._container.service
        if service.upload_error is not None:
            raise service.upload_error
        blobs = self._blobs()
        if not overwrite and self.blob_name in blobs:
            raise ResourceExistsError("The specified blob already exists.")
        blobs[self.blob_name] = bytes(data)
        service.content_types[self.blob_name] = content_settings.content_type if content_settings else None
        etag = f'"0x{uuid.uuid4().hex[:15].upper()}"'
        _respond(raw_response_hook, ETag=etag, **{"Last-Modified": "Sun, 18 Oct 2026 09:00:00 GMT"})
        return {"etag": etag}

    async def delete_blob(self, raw_response_hook=None, **kwargs):
        blobs = self._blobs()
        if self.blob_name not in blobs:
            raise ResourceNotFoundError("The specified blob does not exist.")
        del blobs[self.blob_name]
        _respond(raw_response_hook)

    async def download_blob(self, **kwargs):
        blobs = self._blobs()
        if self.blob_name not in blobs:
            raise ResourceNotFoundError("The specified blob does not exist.")
        service = self._container.service
        return FakeDownloader(blobs[self.blob_name], service.chunk_size, service.fail_stream_after)


class FakeContainerClient:
    def __init__(self, service: FakeBlobServiceClient, name: str) -> None:
        self.service = service
        self.container_name = name

    async def create_container(self, public_access=None, **kwargs):
        self.service.create_calls.append(public_access)
        # Suspend like a real request so concurrent callers interleave
        await asyncio.sleep(0)
        if self.service.create_error is not None:
            raise self.service.create_error
        if self.container_name in self.service.containers:
            raise ResourceExistsError("The specified container already exists.")
        self.service.containers[self.container_name] = {"public_access": public_access, "blobs": {}}

    def get_blob_client(self, blob: str) -> FakeBlobClient:
        return FakeBlobClient(self, blob)


class FakeBlobServiceClient:
    """In-memory stand-in for ``azure.storage.blob.aio.BlobServiceClient``."""

    def __init__(self) -> None:
        self.containers: dict[str, dict] = {}
        self.content_types: dict[str, str | None] = {}
        self.create_calls: list = []
        self.create_error: Exception | None = None
        self.upload_error: Exception | None = None
        self.fail_stream_after: int | None = None
        self.chunk_size = 4
        self.closed = False

    def get_container_client(self, container: str) -> FakeContainerClient:
        return FakeContainerClient(self, container)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_service() -> FakeBlobServiceClient:
    return FakeBlobServiceClient()


@pytest.fixture
def adapter(fake_service) -> AzureStorageAdapter:
    """Proxied-mode adapter for account ``acct`` / container ``c1``."""
    return AzureStorageAdapter("acct", "c1", access_key="a2V5", client=fake_service)


@pytest.fixture
def direct_adapter(fake_service) -> AzureStorageAdapter:
    """Direct-access adapter for account ``acct`` / container ``c1``."""
    return AzureStorageAdapter("acct", "c1", access_key="a2V5", direct_access=True, client=fake_service)
