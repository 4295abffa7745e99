"""Concurrent response-time probes against every known registry."""

from __future__ import annotations

import enum
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Iterable

import requests

from .store import RegistryEntry

logger = logging.getLogger(__name__)

FAST_THRESHOLD_MS = 500
SLOW_THRESHOLD_MS = 1000


class LatencyBucket(str, enum.Enum):
    FAST = "fast"
    MEDIUM = "medium"
    SLOW = "slow"
    TIMEOUT = "timeout"


def classify_latency(elapsed_ms: float) -> LatencyBucket:
    if elapsed_ms < FAST_THRESHOLD_MS:
        return LatencyBucket.FAST
    if elapsed_ms < SLOW_THRESHOLD_MS:
        return LatencyBucket.MEDIUM
    return LatencyBucket.SLOW


@dataclass(frozen=True)
class ProbeResult:
    name: str
    url: str
    elapsed_ms: int | None
    bucket: LatencyBucket

    @property
    def label(self) -> str:
        if self.bucket is LatencyBucket.TIMEOUT or self.elapsed_ms is None:
            return "Timeout"
        return f"{self.elapsed_ms} ms"


class LatencyProber:
    """Issue one GET per registry and bucket the elapsed wall-clock time."""

    def __init__(
        self,
        timeout_seconds: float = 5.0,
        max_workers: int = 8,
        *,
        session: Any | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.max_workers = max(int(max_workers), 1)
        self._session = session
        self._clock = clock

    def probe(self, entry: RegistryEntry) -> ProbeResult:
        getter = self._session.get if self._session is not None else requests.get
        start = self._clock()
        try:
            # stream=True returns once headers arrive; the body is never read
            response = getter(entry.registry, timeout=self.timeout_seconds, stream=True)
        except Exception as exc:
            logger.debug("probe %s (%s) failed: %s", entry.name, entry.registry, exc)
            return ProbeResult(entry.name, entry.registry, None, LatencyBucket.TIMEOUT)
        elapsed_ms = int((self._clock() - start) * 1000)
        close = getattr(response, "close", None)
        if callable(close):
            close()
        if elapsed_ms > self.timeout_seconds * 1000:
            logger.debug("probe %s exceeded %ss after %s ms", entry.name, self.timeout_seconds, elapsed_ms)
            return ProbeResult(entry.name, entry.registry, None, LatencyBucket.TIMEOUT)
        logger.debug("probe %s answered in %s ms", entry.name, elapsed_ms)
        return ProbeResult(entry.name, entry.registry, elapsed_ms, classify_latency(elapsed_ms))

    def probe_all(self, entries: Iterable[RegistryEntry]) -> list[ProbeResult]:
        """Probe every entry concurrently; results keep the input order."""

        entries = list(entries)
        if not entries:
            return []
        workers = min(self.max_workers, len(entries))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(self.probe, entries))
