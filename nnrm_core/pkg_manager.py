"""Thin wrapper around `<npm|yarn> config get/set registry`."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass

from .errors import PackageManagerError

logger = logging.getLogger(__name__)

SUPPORTED_PACKAGE_MANAGERS = ("npm", "yarn")
REGISTRY_KEY = "registry"
# yarn berry stores the registry under a different key
FALLBACK_REGISTRY_KEY = "npmRegistryServer"


@dataclass(frozen=True)
class PackageManagerConfig:
    pkg_manager: str = "npm"
    timeout_seconds: float = 30.0

    def get_registry(self) -> str:
        """Return the configured registry url, trimmed."""

        try:
            result = self._run(["config", "get", REGISTRY_KEY])
        except PackageManagerError as exc:
            logger.debug(
                "%s config get %s failed (%s), trying %s",
                self.pkg_manager,
                REGISTRY_KEY,
                exc,
                FALLBACK_REGISTRY_KEY,
            )
            result = self._run(["config", "get", FALLBACK_REGISTRY_KEY])
        return (result.stdout or "").strip()

    def set_registry(self, url: str) -> None:
        self._run(["config", "set", REGISTRY_KEY, url])

    def _run(self, args: list[str]) -> subprocess.CompletedProcess[str]:
        command = [self.pkg_manager, *args]
        logger.debug("running %s", " ".join(command))
        try:
            result = subprocess.run(
                command,
                check=False,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
            )
        except FileNotFoundError as exc:
            raise PackageManagerError(
                f"{self.pkg_manager} not found. Install it and ensure it is available in PATH.",
                command=command,
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise PackageManagerError(
                f"{' '.join(command)} timed out after {self.timeout_seconds:.1f}s",
                command=command,
            ) from exc
        if result.returncode != 0:
            raise PackageManagerError(
                _format_failure(command, result.returncode, result.stderr),
                command=command,
                returncode=result.returncode,
                stderr=result.stderr,
            )
        return result


def _format_failure(command: list[str], code: int, stderr: str | None) -> str:
    detail = (stderr or "").strip()
    if detail:
        return f"command failed (exit={code}) cmd='{' '.join(command)}' err='{detail}'"
    return f"command failed (exit={code}) cmd='{' '.join(command)}'"
