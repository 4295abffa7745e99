"""Read and switch the package manager's active registry."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .context import NnrmContext

logger = logging.getLogger(__name__)

_REGISTRY_LINE_RE = re.compile(r"^registry=[^\r\n]*", re.MULTILINE)


@dataclass(frozen=True)
class CurrentRegistry:
    url: str
    name: str | None = None

    @property
    def known(self) -> bool:
        return self.name is not None

    @property
    def display(self) -> str:
        return self.name if self.name is not None else self.url


def current_registry(ctx: "NnrmContext") -> CurrentRegistry:
    url = ctx.package_manager.get_registry()
    entry = ctx.registries.find_by_url(url)
    return CurrentRegistry(url=url, name=entry.name if entry else None)


def write_local_registry(path: Path, url: str) -> None:
    """Point a project-level .npmrc at `url`, keeping every other line."""

    line = f"registry={url}"
    if path.exists():
        with path.open("r", encoding="utf-8", newline="") as handle:
            content = handle.read()
        content = _REGISTRY_LINE_RE.sub(lambda _: line, content)
    else:
        content = line
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(content)
    logger.info("wrote %s to %s", line, path)


def use_registry(
    ctx: "NnrmContext",
    name: str,
    *,
    local: bool = False,
    cwd: Path | None = None,
) -> Path | None:
    """Switch to `name`; returns the local config path when one was written."""

    entry = ctx.registries.get(name)
    ctx.package_manager.set_registry(entry.registry)
    if not local:
        return None
    target = (cwd or Path.cwd()) / ctx.settings.local_config_name
    write_local_registry(target, entry.registry)
    return target
