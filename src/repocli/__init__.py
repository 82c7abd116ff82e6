"""repocli: run GitHub CLI commands against other git hosting providers."""

from __future__ import annotations

__version__ = "0.1.0"

from .errors import (  # noqa: E402
    ConfigError,
    MalformedInputError,
    NativeCliFailure,
    NativeCliMissing,
    RepocliError,
    TranslationError,
    UnsupportedCommand,
)
from .fields import Comparison, Direction, FieldMapper, compare, map_fields  # noqa: E402
from .models import CommandInvocation, NativeInvocation, NativePlan, ProviderContext  # noqa: E402
from .registry import CapabilityRegistry, HandlerDescriptor, RegistryBuilder  # noqa: E402

__all__ = [
    "CapabilityRegistry",
    "CommandInvocation",
    "Comparison",
    "ConfigError",
    "Direction",
    "FieldMapper",
    "HandlerDescriptor",
    "MalformedInputError",
    "NativeCliFailure",
    "NativeCliMissing",
    "NativeInvocation",
    "NativePlan",
    "ProviderContext",
    "RegistryBuilder",
    "RepocliError",
    "TranslationError",
    "UnsupportedCommand",
    "__version__",
    "compare",
    "map_fields",
]
