"""Core pieces for managing npm/yarn registry endpoints."""

from .active import CurrentRegistry, current_registry, use_registry, write_local_registry
from .context import NnrmContext
from .errors import (
    InvalidRegistryError,
    NnrmError,
    PackageManagerError,
    RegistryStoreError,
    SettingsError,
    UnknownRegistryError,
)
from .latency import LatencyBucket, LatencyProber, ProbeResult, classify_latency
from .pkg_manager import PackageManagerConfig
from .settings import NnrmSettings
from .store import RegistryEntry, RegistrySet, RegistryStore

__version__ = "1.0.0"

__all__ = [
    "CurrentRegistry",
    "current_registry",
    "use_registry",
    "write_local_registry",
    "NnrmContext",
    "NnrmError",
    "InvalidRegistryError",
    "PackageManagerError",
    "RegistryStoreError",
    "SettingsError",
    "UnknownRegistryError",
    "LatencyBucket",
    "LatencyProber",
    "ProbeResult",
    "classify_latency",
    "PackageManagerConfig",
    "NnrmSettings",
    "RegistryEntry",
    "RegistrySet",
    "RegistryStore",
]
