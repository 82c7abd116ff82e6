"""Flag parsing and rewrite primitives shared by provider rule sets.

``gh`` arguments are parsed against a small per-command table of
:class:`FlagSpec` entries rather than argparse: the translator must keep the
exact order of repeated flags, reject flags it does not understand, and never
print usage text of its own.
"""

from __future__ import annotations

import os
import sys
import tempfile
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from .errors import TranslationError

STDIN_SENTINEL = "-"


@dataclass(frozen=True)
class FlagSpec:
    name: str
    aliases: tuple[str, ...] = ()
    takes_value: bool = True

    @property
    def spellings(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)


def flag(name: str, *aliases: str) -> FlagSpec:
    return FlagSpec(name, tuple(aliases), True)


def switch(name: str, *aliases: str) -> FlagSpec:
    return FlagSpec(name, tuple(aliases), False)


REPO_FLAG = flag("--repo", "-R")


@dataclass
class ParsedArgs:
    positionals: list[str] = field(default_factory=list)
    flags: list[tuple[str, str | None]] = field(default_factory=list)

    def has(self, name: str) -> bool:
        return any(n == name for n, _ in self.flags)

    def last(self, name: str) -> str | None:
        value = None
        for n, v in self.flags:
            if n == name:
                value = v
        return value

    def all(self, name: str) -> list[str]:
        return [v for n, v in self.flags if n == name and v is not None]

    def positional(self, index: int, label: str) -> str:
        if index >= len(self.positionals):
            raise TranslationError(label)
        return self.positionals[index]


def parse_flags(args: Sequence[str], specs: Iterable[FlagSpec]) -> ParsedArgs:
    table: dict[str, FlagSpec] = {}
    for spec in specs:
        for spelling in spec.spellings:
            table[spelling] = spec
    parsed = ParsedArgs()
    items = list(args)
    i = 0
    only_positionals = False
    while i < len(items):
        token = items[i]
        i += 1
        if only_positionals or token == STDIN_SENTINEL or not token.startswith("-"):
            parsed.positionals.append(token)
            continue
        if token == "--":
            only_positionals = True
            continue
        name, eq, inline = token.partition("=")
        spec = table.get(name)
        if spec is None:
            raise TranslationError(name, "is not supported by this command")
        if not spec.takes_value:
            if eq:
                raise TranslationError(spec.name, "does not take a value")
            parsed.flags.append((spec.name, None))
            continue
        if eq:
            parsed.flags.append((spec.name, inline))
            continue
        if i >= len(items):
            raise TranslationError(spec.name, "requires a value")
        parsed.flags.append((spec.name, items[i]))
        i += 1
    return parsed


def require(value: str | None, flag_name: str) -> str:
    if value is None or not value.strip():
        raise TranslationError(flag_name)
    return value


def split_csv(values: Iterable[str]) -> list[str]:
    """``["a,b", "c"]`` -> ``["a", "b", "c"]``, dropping blanks."""
    out: list[str] = []
    for value in values:
        out.extend(part.strip() for part in value.split(",") if part.strip())
    return out


def repeat_flag(flag_name: str, values: Iterable[str]) -> list[str]:
    out: list[str] = []
    for value in values:
        out.extend([flag_name, value])
    return out


def _read_stdin(stdin: TextIO | None) -> str:
    try:
        return (stdin or sys.stdin).read()
    except UnicodeDecodeError as exc:
        raise TranslationError("--body-file", "is not valid UTF-8") from exc


def read_body_source(source: str, stdin: TextIO | None = None) -> str:
    """Return the text named by ``--body-file`` (``-`` reads stdin)."""
    if source == STDIN_SENTINEL:
        return _read_stdin(stdin)
    path = Path(source)
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise TranslationError("--body-file", "is not valid UTF-8") from exc
    except OSError as exc:
        raise TranslationError("--body-file", f"cannot be read: {exc.strerror or exc}") from exc


def materialize_stdin(stdin: TextIO | None = None) -> Path:
    """Copy stdin into a temp file for CLIs without a stdin sentinel."""
    content = _read_stdin(stdin)
    fd, name = tempfile.mkstemp(prefix="repocli-body-", suffix=".md")
    with os.fdopen(fd, "w", encoding="utf-8") as fh:
        fh.write(content)
    return Path(name)


def normalize_color(value: str) -> str:
    """``gh`` takes ``ff0000``; GitLab wants ``#ff0000``."""
    value = value.strip()
    if len(value) in (3, 6) and all(c in "0123456789abcdefABCDEF" for c in value):
        return f"#{value}"
    return value


__all__ = [
    "FlagSpec",
    "ParsedArgs",
    "REPO_FLAG",
    "STDIN_SENTINEL",
    "flag",
    "materialize_stdin",
    "normalize_color",
    "parse_flags",
    "read_body_source",
    "repeat_flag",
    "require",
    "split_csv",
    "switch",
]
