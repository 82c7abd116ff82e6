"""Locate and parse the repocli configuration file.

A config names the provider (github, gitlab, gitea, codeberg), an optional
instance URL, the wrapped CLI tool and the strict flag. Plain ``key=value``
files and YAML files are both accepted.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

import yaml
from dotenv import dotenv_values

from .errors import ConfigError
from .models import DEFAULT_CLI_TOOLS

CONFIG_ENV = "REPOCLI_CONFIG"
CODEBERG_INSTANCE = "https://codeberg.org"


@dataclass
class ProviderConfig:
    provider: str = "github"
    instance: str | None = None
    cli_tool: str | None = None
    strict: bool = False
    source: Path | None = None


def default_locations(cwd: Path | None = None, home: Path | None = None) -> list[Path]:
    cwd = cwd or Path.cwd()
    home = home or Path.home()
    return [
        cwd / "repocli.conf",
        home / ".repocli.conf",
        home / ".config" / "repocli" / "config",
    ]


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in {"1", "true", "yes", "on"}


def _read_raw(path: Path) -> dict[str, Any]:
    if path.suffix in (".yaml", ".yml"):
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError(f"configuration must be a mapping: {path}")
        return cast(dict[str, Any], raw)
    # repocli.conf: plain key=value lines with # comments
    return {k: v for k, v in dotenv_values(path).items() if v is not None}


def load_config(path: str | Path) -> ProviderConfig:
    p = Path(path)
    if not p.is_file():
        raise ConfigError(f"Configuration file does not exist: {p}")
    if not os.access(p, os.R_OK):
        raise ConfigError(f"Configuration file is not readable: {p}")
    raw = _read_raw(p)
    provider = str(raw.get("provider") or "github").strip().lower()
    if provider not in DEFAULT_CLI_TOOLS:
        raise ConfigError(f"unknown provider '{provider}' in {p}")
    instance = str(raw.get("instance") or "").strip() or None
    if instance is None and provider == "codeberg":
        instance = CODEBERG_INSTANCE
    if instance is not None and not instance.startswith(("http://", "https://")):
        raise ConfigError(f"instance URL must start with http:// or https://: {instance}")
    cli_tool = str(raw.get("cli_tool") or "").strip() or DEFAULT_CLI_TOOLS[provider]
    return ProviderConfig(
        provider=provider,
        instance=instance,
        cli_tool=cli_tool,
        strict=_as_bool(raw.get("strict")),
        source=p,
    )


def discover_config(
    explicit: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    cwd: Path | None = None,
    home: Path | None = None,
) -> ProviderConfig:
    """Find and load the active configuration.

    Order: explicit ``--repocli-config`` path, ``REPOCLI_CONFIG``, then the
    standard locations. Explicit paths must exist; when no standard file is
    present the defaults (GitHub passthrough) apply.
    """
    env = os.environ if environ is None else environ
    if explicit:
        return load_config(explicit)
    from_env = (env.get(CONFIG_ENV) or "").strip()
    if from_env:
        return load_config(from_env)
    for candidate in default_locations(cwd, home):
        if candidate.is_file():
            return load_config(candidate)
    return ProviderConfig(cli_tool=DEFAULT_CLI_TOOLS["github"])


__all__ = ["ConfigError", "ProviderConfig", "default_locations", "discover_config", "load_config"]
