"""GitHub provider: the reference contract, forwarded to ``gh`` unchanged."""

from __future__ import annotations

from .instance import resolve_instance
from .models import CommandInvocation, NativeInvocation, NativePlan, ProviderContext
from .registry import CapabilityRegistry, RegistryBuilder

PROVIDER = "github"
GITHUB_DEFAULT_HOST = "github.com"


def _any_command(verb: str, subcommand: str) -> bool:
    return bool(verb)


def _cmd_passthrough(inv: CommandInvocation, ctx: ProviderContext) -> NativePlan:
    # GitHub Enterprise hosts are selected through GH_HOST
    target = resolve_instance(ctx.instance_url, default_host=GITHUB_DEFAULT_HOST, host_env="GH_HOST")
    return NativePlan.single(NativeInvocation(ctx.executable, tuple(inv.argv), target.env))


def build_registry(ctx: ProviderContext) -> CapabilityRegistry:
    return RegistryBuilder(PROVIDER).add("gh passthrough", _any_command, _cmd_passthrough).build()


__all__ = ["build_registry"]
