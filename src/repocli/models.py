"""Value types passed between the dispatcher, the translators and the executor."""

from __future__ import annotations

import os
import shlex
import sys
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .errors import redact
from .logging import env_flag

CLI_PATH_ENV = "REPOCLI_CLI_PATH"
INSTANCE_ENV = "REPOCLI_INSTANCE"
STRICT_ENV = "REPOCLI_STRICT"

DEFAULT_CLI_TOOLS = {
    "github": "gh",
    "gitlab": "glab",
    "gitea": "tea",
    "codeberg": "tea",
}


@dataclass(frozen=True)
class CommandInvocation:
    """One ``gh``-shaped command as received on the command line."""

    verb: str
    subcommand: str = ""
    args: tuple[str, ...] = ()
    stdin_available: bool = False

    @classmethod
    def from_argv(cls, argv: Sequence[str], stdin_available: bool | None = None) -> CommandInvocation:
        if stdin_available is None:
            stdin_available = sys.stdin is not None and not sys.stdin.isatty()
        parts = list(argv)
        verb = parts[0] if parts else ""
        if len(parts) > 1 and not parts[1].startswith("-"):
            return cls(verb, parts[1], tuple(parts[2:]), stdin_available)
        return cls(verb, "", tuple(parts[1:]), stdin_available)

    @property
    def argv(self) -> list[str]:
        head = [p for p in (self.verb, self.subcommand) if p]
        return [*head, *self.args]

    @property
    def label(self) -> str:
        return " ".join(p for p in (self.verb, self.subcommand) if p)


@dataclass(frozen=True)
class NativeInvocation:
    """A fully translated command, ready to exec without a shell."""

    executable: str
    args: tuple[str, ...] = ()
    env: Mapping[str, str] = field(default_factory=dict)
    capture: bool = False
    temp_files: tuple[Path, ...] = ()
    # >0: run page by page with --page/--per-page and join the JSON arrays
    page_size: int = 0
    max_items: int | None = None

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.args]

    def describe(self) -> str:
        prefix = " ".join(f"{k}={shlex.quote(v)}" for k, v in sorted(self.env.items()))
        line = shlex.join(self.argv)
        return redact(f"{prefix} {line}" if prefix else line)


PostProcess = Callable[[str], str]
Expander = Callable[[list[str]], Sequence[NativeInvocation]]


@dataclass(frozen=True)
class NativePlan:
    """Ordered native steps for one command plus optional output rewriting.

    ``postprocess`` receives the buffered stdout of the last step. ``expand``
    receives the captured stdout of every step and returns more steps to run
    afterwards (used when later commands depend on earlier output).
    """

    steps: tuple[NativeInvocation, ...]
    postprocess: PostProcess | None = None
    expand: Expander | None = None

    @classmethod
    def single(cls, invocation: NativeInvocation, postprocess: PostProcess | None = None) -> NativePlan:
        return cls((invocation,), postprocess)


@dataclass(frozen=True)
class ProviderContext:
    provider_name: str
    instance_url: str | None = None
    cli_tool: str = "gh"
    cli_path: str | None = None
    strict: bool = False

    @property
    def executable(self) -> str:
        return self.cli_path or self.cli_tool

    @classmethod
    def resolve(cls, config: object, environ: Mapping[str, str] | None = None) -> ProviderContext:
        """Combine a loaded ``ProviderConfig`` with environment overrides."""
        env = dict(os.environ if environ is None else environ)
        provider = str(getattr(config, "provider", None) or "github").lower()
        cli_tool = getattr(config, "cli_tool", None) or DEFAULT_CLI_TOOLS.get(provider, provider)
        instance = (env.get(INSTANCE_ENV) or "").strip() or getattr(config, "instance", None)
        cli_path = (env.get(CLI_PATH_ENV) or "").strip() or None
        return cls(
            provider_name=provider,
            instance_url=instance or None,
            cli_tool=cli_tool,
            cli_path=cli_path,
            strict=bool(getattr(config, "strict", False)) or env_flag(STRICT_ENV, env),
        )


__all__ = [
    "CommandInvocation",
    "NativeInvocation",
    "NativePlan",
    "ProviderContext",
]
