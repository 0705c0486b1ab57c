# SPDX-License-Identifier: MIT
"""Configuration management for the Azure Blob Storage files adapter.

This module handles:
- Logging setup
- The immutable adapter configuration model
- Loading that configuration from environment variables
"""

import logging
import os
import sys

from pydantic import BaseModel, Field

from .exceptions import ConfigurationError

# ---------- Logging configuration ----------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("azure_storage_adapter")

BLOB_ENDPOINT_SUFFIX = "blob.core.windows.net"

_TRUTHY = ("true", "1", "yes", "on")


class AdapterConfig(BaseModel, frozen=True):
    """Connection identity of an adapter, fixed for its lifetime.

    An empty ``access_key`` means the client authenticates with
    ``DefaultAzureCredential`` (managed identity, CLI login, ...).
    """

    account_name: str
    container: str
    access_key: str = Field(default="", repr=False)
    direct_access: bool = False

    @property
    def account_url(self) -> str:
        return f"https://{self.account_name}.{BLOB_ENDPOINT_SUFFIX}"


# ---------- Environment configuration (runtime) ----------

_REQUIRED_ENV: dict[str, str] = {
    "AZURE_ACCOUNT_NAME": "Storage account name",
    "AZURE_CONTAINER": "Blob container holding the files",
}


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


def load_settings() -> AdapterConfig:
    """Build an :class:`AdapterConfig` from environment variables.

    Required::

        AZURE_ACCOUNT_NAME     Storage account name
        AZURE_CONTAINER        Blob container holding the files

    Optional::

        AZURE_ACCESS_KEY       Shared key (omit for passwordless auth)
        AZURE_DIRECT_ACCESS    "true" to serve files from public blob URLs

    Raises:
        ConfigurationError: If any required variable is missing or blank.
    """
    missing = [name for name in _REQUIRED_ENV if not os.getenv(name, "").strip()]
    if missing:
        details = "\n".join(f"  - {name}: {_REQUIRED_ENV[name]}" for name in missing)
        raise ConfigurationError(f"Missing required Azure environment variable(s):\n{details}")

    return AdapterConfig(
        account_name=os.environ["AZURE_ACCOUNT_NAME"].strip(),
        container=os.environ["AZURE_CONTAINER"].strip(),
        access_key=os.getenv("AZURE_ACCESS_KEY", "").strip(),
        direct_access=_env_flag("AZURE_DIRECT_ACCESS"),
    )
