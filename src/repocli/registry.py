"""Capability registry: which handler services a ``verb subcommand`` pair.

Handlers are registered explicitly, in order, through :class:`RegistryBuilder`
at process start. The first descriptor whose predicate accepts the pair wins;
there is no other tie-break, so registration order is part of the contract
and ``CapabilityRegistry.names()`` exposes it for audits and tests.

Predicates only ever see the verb and the subcommand (either may be empty).
"""

from __future__ import annotations

import fnmatch
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from .errors import UnsupportedCommand
from .models import CommandInvocation, NativePlan, ProviderContext

Predicate = Callable[[str, str], bool]
Translator = Callable[[CommandInvocation, ProviderContext], NativePlan]


def exact(verb: str, subcommand: str = "") -> Predicate:
    def _match(v: str, s: str) -> bool:
        return v == verb and s == subcommand

    return _match


def any_of(verb: str, *subcommands: str) -> Predicate:
    allowed = frozenset(subcommands)

    def _match(v: str, s: str) -> bool:
        return v == verb and s in allowed

    return _match


def pattern(regex: str) -> Predicate:
    """Regex matched against ``"verb subcommand"``."""
    compiled = re.compile(regex)

    def _match(v: str, s: str) -> bool:
        return compiled.fullmatch(f"{v} {s}") is not None

    return _match


def glob(expr: str) -> Predicate:
    def _match(v: str, s: str) -> bool:
        return fnmatch.fnmatchcase(f"{v} {s}", expr)

    return _match


def verb_only(verb: str) -> Predicate:
    def _match(v: str, s: str) -> bool:
        return v == verb

    return _match


@dataclass(frozen=True)
class HandlerDescriptor:
    name: str
    matches: Predicate
    translate: Translator

    def can_handle(self, verb: str, subcommand: str) -> bool:
        return bool(self.matches(verb, subcommand))


class CapabilityRegistry:
    def __init__(
        self,
        descriptors: tuple[HandlerDescriptor, ...],
        *,
        provider: str | None = None,
        hints: dict[str, str] | None = None,
    ) -> None:
        self._descriptors = descriptors
        self.provider = provider
        self._hints = dict(hints or {})

    def __iter__(self) -> Iterator[HandlerDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def names(self) -> list[str]:
        return [d.name for d in self._descriptors]

    def find(self, verb: str, subcommand: str = "") -> HandlerDescriptor | None:
        if not verb:
            return None
        for descriptor in self._descriptors:
            if descriptor.can_handle(verb, subcommand):
                return descriptor
        return None

    def dispatch(self, invocation: CommandInvocation) -> HandlerDescriptor:
        descriptor = self.find(invocation.verb, invocation.subcommand)
        if descriptor is None:
            raise UnsupportedCommand(
                invocation.verb,
                invocation.subcommand,
                invocation.args,
                provider=self.provider,
                hint=self._hints.get(invocation.verb),
            )
        return descriptor


class RegistryBuilder:
    def __init__(self, provider: str | None = None) -> None:
        self._provider = provider
        self._descriptors: list[HandlerDescriptor] = []
        self._hints: dict[str, str] = {}

    def add(self, name: str, predicate: Predicate, translate: Translator) -> RegistryBuilder:
        if any(d.name == name for d in self._descriptors):
            raise ValueError(f"duplicate handler name: {name}")
        self._descriptors.append(HandlerDescriptor(name, predicate, translate))
        return self

    def hint(self, verb: str, text: str) -> RegistryBuilder:
        """Attach guidance shown when ``verb`` ends up unsupported."""
        self._hints[verb] = text
        return self

    def build(self) -> CapabilityRegistry:
        return CapabilityRegistry(
            tuple(self._descriptors), provider=self._provider, hints=self._hints
        )


__all__ = [
    "CapabilityRegistry",
    "HandlerDescriptor",
    "RegistryBuilder",
    "any_of",
    "exact",
    "glob",
    "pattern",
    "verb_only",
]
