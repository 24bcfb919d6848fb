"""
Centralized configuration for the CredHub client.

All configuration is loaded from environment variables with sensible defaults.

Usage:
    from credhub.config import get_config
    cfg = get_config()
    print(cfg.url)                         # "https://localhost:9000"
    print(cfg.options.connection_timeout)  # 5.0
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from credhub.errors import InvalidArgumentError


@dataclass(frozen=True)
class ClientOptions:
    """HTTP client settings handed to the transport factory.

    Timeouts are in seconds; None leaves the httpx default in place.
    """

    connection_timeout: float | None = None
    read_timeout: float | None = None
    ca_cert_files: tuple[Path, ...] | None = None  # None = system trust store

    # mTLS client identity, or an OAuth2 bearer token
    client_cert: Path | None = None
    client_key: Path | None = None
    token: str = ""

    @property
    def using_custom_certs(self) -> bool:
        return self.ca_cert_files is not None


@dataclass(frozen=True)
class Config:
    """Top-level client configuration."""

    url: str = "https://localhost:9000"
    options: ClientOptions = field(default_factory=ClientOptions)

    @property
    def api_url(self) -> str:
        return f"{self.url.rstrip('/')}/api/v1"


# Singleton
_config: Config | None = None


def get_config() -> Config:
    """Get or create the singleton config from environment variables."""
    global _config
    if _config is not None:
        return _config
    _config = _load_from_env()
    return _config


def _float_env(key: str) -> float | None:
    raw = os.environ.get(key, "")
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        raise InvalidArgumentError(f"{key} must be a number of seconds, got {raw!r}") from None


def _path_env(key: str) -> Path | None:
    raw = os.environ.get(key, "")
    return Path(raw) if raw else None


def _load_from_env() -> Config:
    """Load configuration from environment variables."""
    ca_files = os.environ.get("CREDHUB_CA_CERT_FILES", "")
    options = ClientOptions(
        connection_timeout=_float_env("CREDHUB_CONNECT_TIMEOUT"),
        read_timeout=_float_env("CREDHUB_READ_TIMEOUT"),
        ca_cert_files=tuple(Path(p) for p in ca_files.split(os.pathsep) if p) or None,
        client_cert=_path_env("CREDHUB_CLIENT_CERT"),
        client_key=_path_env("CREDHUB_CLIENT_KEY"),
        token=os.environ.get("CREDHUB_TOKEN", ""),
    )
    return Config(
        url=os.environ.get("CREDHUB_URL", "https://localhost:9000"),
        options=options,
    )


def reset_config() -> None:
    """Reset the singleton config (for testing)."""
    global _config
    _config = None
