"""Typed errors raised by the nnrm core."""

from __future__ import annotations

from typing import Sequence


class NnrmError(RuntimeError):
    """Base nnrm error."""


class UnknownRegistryError(NnrmError, KeyError):
    """Raised when a registry name is not part of the known set."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown registry '{name}'")
        self.name = name

    def __str__(self) -> str:
        return str(self.args[0])


class PackageManagerError(NnrmError):
    """The package manager command failed, timed out or is missing."""

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        returncode: int | None = None,
        stderr: str | None = None,
    ) -> None:
        super().__init__(message)
        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = stderr


class InvalidRegistryError(NnrmError, ValueError):
    """A registry name or url given to `add` is empty."""


class RegistryStoreError(NnrmError):
    """The custom registry file could not be read or parsed."""


class SettingsError(NnrmError):
    """Invalid nnrm configuration value."""
