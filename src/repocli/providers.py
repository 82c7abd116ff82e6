"""Provider name to capability registry factory."""

from __future__ import annotations

from collections.abc import Callable

from . import github, gitlab
from .errors import ConfigError
from .models import ProviderContext
from .registry import CapabilityRegistry

RegistryFactory = Callable[[ProviderContext], CapabilityRegistry]

PROVIDERS: dict[str, RegistryFactory] = {
    "github": github.build_registry,
    "gitlab": gitlab.build_registry,
}

PLANNED_PROVIDERS = ("gitea", "codeberg")


def build_registry(ctx: ProviderContext) -> CapabilityRegistry:
    factory = PROVIDERS.get(ctx.provider_name)
    if factory is not None:
        return factory(ctx)
    if ctx.provider_name in PLANNED_PROVIDERS:
        raise ConfigError(
            f"{ctx.provider_name.capitalize()} provider is not yet implemented",
            hint="Please use the GitHub or GitLab providers for now.",
        )
    known = ", ".join([*PROVIDERS, *PLANNED_PROVIDERS])
    raise ConfigError(f"unknown provider '{ctx.provider_name}' (expected one of: {known})")


__all__ = ["PROVIDERS", "build_registry"]
