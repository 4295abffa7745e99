"""Per-invocation context handed to every command handler."""

from __future__ import annotations

from dataclasses import dataclass, field

from .latency import LatencyProber
from .pkg_manager import PackageManagerConfig
from .settings import NnrmSettings
from .store import RegistrySet, RegistryStore


@dataclass
class NnrmContext:
    pkg_manager: str
    settings: NnrmSettings
    store: RegistryStore
    package_manager: PackageManagerConfig
    prober: LatencyProber
    registries: RegistrySet = field(default_factory=RegistrySet)

    @classmethod
    def create(
        cls,
        pkg_manager: str = "npm",
        settings: NnrmSettings | None = None,
    ) -> "NnrmContext":
        settings = settings or NnrmSettings.load()
        store = RegistryStore(settings.custom_registries_file)
        ctx = cls(
            pkg_manager=pkg_manager,
            settings=settings,
            store=store,
            package_manager=PackageManagerConfig(
                pkg_manager=pkg_manager,
                timeout_seconds=settings.command_timeout_seconds,
            ),
            prober=LatencyProber(
                timeout_seconds=settings.probe_timeout_seconds,
                max_workers=settings.probe_workers,
            ),
        )
        ctx.reload()
        return ctx

    def reload(self) -> RegistrySet:
        self.registries = self.store.load()
        return self.registries
