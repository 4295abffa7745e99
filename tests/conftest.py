"""Shared fakes for nnrm tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from nnrm_core.context import NnrmContext
from nnrm_core.errors import PackageManagerError
from nnrm_core.latency import LatencyProber
from nnrm_core.settings import NnrmSettings
from nnrm_core.store import RegistryEntry, RegistryStore

DEFAULTS = {
    "npm": RegistryEntry("npm", "https://registry.npmjs.org/", "https://www.npmjs.org"),
    "yarn": RegistryEntry("yarn", "https://registry.yarnpkg.com/", "https://yarnpkg.com"),
    "taobao": RegistryEntry("taobao", "https://registry.npmmirror.com/", "https://npmmirror.com"),
}


class FakePackageManager:
    """Records config calls instead of shelling out to npm/yarn."""

    def __init__(self, registry: str = "https://registry.npmjs.org/", *, fail: bool = False) -> None:
        self.registry = registry
        self.fail = fail
        self.set_calls: list[str] = []

    def get_registry(self) -> str:
        if self.fail:
            raise PackageManagerError("npm not found", command=("npm", "config", "get", "registry"))
        return self.registry

    def set_registry(self, url: str) -> None:
        if self.fail:
            raise PackageManagerError("npm not found", command=("npm", "config", "set", "registry", url))
        self.set_calls.append(url)
        self.registry = url


class FakeResponse:
    def __init__(self) -> None:
        self.closed = False

    def close(self) -> None:
        self.closed = True


class FakeSession:
    """Answers GETs with a response or raises, per url."""

    def __init__(self, errors: dict[str, BaseException] | None = None) -> None:
        self.errors = errors or {}
        self.calls: list[tuple[str, Any, bool]] = []

    def get(self, url: str, timeout: Any = None, stream: bool = False) -> FakeResponse:
        self.calls.append((url, timeout, stream))
        if url in self.errors:
            raise self.errors[url]
        return FakeResponse()


@pytest.fixture
def settings(tmp_path: Path) -> NnrmSettings:
    config_dir = tmp_path / "config"
    return NnrmSettings(config_dir=config_dir, custom_registries_file=config_dir / "registries.json")


@pytest.fixture
def make_context(settings: NnrmSettings) -> Callable[..., NnrmContext]:
    def _make(
        package_manager: FakePackageManager | None = None,
        session: FakeSession | None = None,
    ) -> NnrmContext:
        ctx = NnrmContext(
            pkg_manager="npm",
            settings=settings,
            store=RegistryStore(settings.custom_registries_file, defaults=DEFAULTS),
            package_manager=package_manager or FakePackageManager(),  # type: ignore[arg-type]
            prober=LatencyProber(timeout_seconds=1.0, max_workers=4, session=session or FakeSession()),
        )
        ctx.reload()
        return ctx

    return _make
