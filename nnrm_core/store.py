"""Bundled default registries merged with the user's custom registry file."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Iterator, Mapping

from .errors import InvalidRegistryError, RegistryStoreError, UnknownRegistryError

logger = logging.getLogger(__name__)

DEFAULTS_RESOURCE = "registries.json"

__all__ = [
    "RegistryEntry",
    "RegistrySet",
    "RegistryStore",
    "ensure_suffix",
    "load_default_registries",
]


def ensure_suffix(suffix: str, value: str) -> str:
    if value.endswith(suffix):
        return value
    return value + suffix


@dataclass(frozen=True)
class RegistryEntry:
    name: str
    registry: str
    home: str | None = None

    @classmethod
    def from_dict(cls, name: str, data: Any) -> "RegistryEntry":
        if not isinstance(data, Mapping):
            raise ValueError(f"registry '{name}' must be an object")
        url = data.get("registry")
        if not isinstance(url, str) or not url:
            raise ValueError(f"registry '{name}' has no 'registry' url")
        home = data.get("home")
        return cls(name=name, registry=url, home=str(home) if home else None)

    def to_dict(self) -> dict[str, str]:
        data = {"registry": self.registry}
        if self.home:
            data["home"] = self.home
        return data


class RegistrySet:
    """Ordered, read-only mapping of registry name to entry."""

    def __init__(self, entries: Mapping[str, RegistryEntry] | None = None) -> None:
        self._entries: dict[str, RegistryEntry] = dict(entries or {})

    @classmethod
    def merge(
        cls,
        defaults: Mapping[str, RegistryEntry],
        custom: Mapping[str, RegistryEntry],
    ) -> "RegistrySet":
        merged = dict(defaults)
        merged.update(custom)
        return cls(merged)

    def names(self) -> list[str]:
        return list(self._entries)

    def get(self, name: str) -> RegistryEntry:
        try:
            return self._entries[name]
        except KeyError:
            raise UnknownRegistryError(name) from None

    def find_by_url(self, url: str) -> RegistryEntry | None:
        """Return the first entry whose registry url matches `url`."""

        target = ensure_suffix("/", url)
        for entry in self._entries.values():
            if entry.registry == target:
                return entry
        return None

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[RegistryEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


def _parse_registries(payload: Any, source: str) -> dict[str, RegistryEntry]:
    if not isinstance(payload, dict):
        raise RegistryStoreError(f"{source}: expected a JSON object of registries")
    entries: dict[str, RegistryEntry] = {}
    for name, data in payload.items():
        try:
            entries[name] = RegistryEntry.from_dict(name, data)
        except ValueError as exc:
            raise RegistryStoreError(f"{source}: {exc}") from exc
    return entries


def load_default_registries() -> dict[str, RegistryEntry]:
    text = resources.files(__package__).joinpath(DEFAULTS_RESOURCE).read_text(encoding="utf-8")
    return _parse_registries(json.loads(text), DEFAULTS_RESOURCE)


class RegistryStore:
    """Reads and rewrites the custom registry file on top of the defaults."""

    def __init__(
        self,
        custom_file: Path | str,
        defaults: Mapping[str, RegistryEntry] | None = None,
    ) -> None:
        self.custom_file = Path(custom_file).expanduser()
        self._defaults = dict(defaults) if defaults is not None else load_default_registries()

    @property
    def defaults(self) -> dict[str, RegistryEntry]:
        return dict(self._defaults)

    def load(self) -> RegistrySet:
        custom = _parse_registries(self._read_custom(), str(self.custom_file))
        return RegistrySet.merge(self._defaults, custom)

    def custom(self) -> dict[str, RegistryEntry]:
        return _parse_registries(self._read_custom(), str(self.custom_file))

    def add(self, name: str, url: str, home: str | None = None) -> RegistryEntry:
        name = (name or "").strip()
        url = (url or "").strip()
        if not name:
            raise InvalidRegistryError("registry name is required")
        if not url:
            raise InvalidRegistryError("registry url is required")
        entry = RegistryEntry(name=name, registry=ensure_suffix("/", url), home=home or None)
        payload = self._read_custom()
        payload[name] = entry.to_dict()
        self._write_custom(payload)
        logger.info("custom registry %s saved as %s", name, entry.registry)
        return entry

    def remove(self, name: str) -> bool:
        payload = self._read_custom()
        if name not in payload:
            logger.debug("custom registry %s not present, nothing to remove", name)
            return False
        del payload[name]
        self._write_custom(payload)
        logger.info("custom registry %s removed", name)
        return True

    def _read_custom(self) -> dict[str, Any]:
        if not self.custom_file.exists():
            return {}
        try:
            payload = json.loads(self.custom_file.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise RegistryStoreError(f"{self.custom_file}: invalid JSON ({exc})") from exc
        except OSError as exc:
            raise RegistryStoreError(f"{self.custom_file}: {exc}") from exc
        if not isinstance(payload, dict):
            raise RegistryStoreError(f"{self.custom_file}: expected a JSON object of registries")
        return payload

    def _write_custom(self, payload: Mapping[str, Any]) -> None:
        text = json.dumps(dict(payload), ensure_ascii=False, indent=2) + "\n"
        try:
            self.custom_file.parent.mkdir(parents=True, exist_ok=True)
            self.custom_file.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise RegistryStoreError(f"{self.custom_file}: {exc}") from exc
