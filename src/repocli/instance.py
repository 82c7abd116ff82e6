"""Derive the wrapped CLI's host settings from a configured instance URL."""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import urlsplit

from .errors import ConfigError

GITLAB_DEFAULT_HOST = "gitlab.com"
GITLAB_HOST_ENV = "GITLAB_HOST"


@dataclass(frozen=True)
class InstanceTarget:
    hostname: str
    env: dict[str, str] = field(default_factory=dict)

    @property
    def is_default(self) -> bool:
        return not self.env


def extract_host(url: str) -> str:
    """``https://user@git.example.com:8443/group?x=1`` -> ``git.example.com:8443``."""
    raw = url.strip()
    if "://" not in raw:
        raw = f"https://{raw}"
    parts = urlsplit(raw)
    if parts.scheme not in ("http", "https"):
        raise ConfigError(f"instance URL must use http or https: {url}")
    if not parts.hostname:
        raise ConfigError(f"instance URL has no host: {url}")
    try:
        port = parts.port
    except ValueError as exc:
        raise ConfigError(f"instance URL has an invalid port: {url}") from exc
    host = parts.hostname.lower()
    return f"{host}:{port}" if port else host


def resolve_instance(
    url: str | None,
    *,
    default_host: str = GITLAB_DEFAULT_HOST,
    host_env: str = GITLAB_HOST_ENV,
) -> InstanceTarget:
    if url is None or not url.strip():
        return InstanceTarget(default_host)
    host = extract_host(url)
    if host == default_host:
        return InstanceTarget(host)
    return InstanceTarget(host, {host_env: host})


__all__ = ["InstanceTarget", "extract_host", "resolve_instance"]
