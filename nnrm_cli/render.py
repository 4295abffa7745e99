"""Column-aligned, colored rendering of registry lists and probe results."""

from __future__ import annotations

from typing import Iterable, Sequence

from rich.console import Console
from rich.text import Text

from nnrm_core.active import CurrentRegistry
from nnrm_core.latency import LatencyBucket, ProbeResult
from nnrm_core.store import RegistrySet

LATENCY_STYLES = {
    LatencyBucket.FAST: "green",
    LatencyBucket.MEDIUM: "yellow",
    LatencyBucket.SLOW: "red",
    LatencyBucket.TIMEOUT: "red",
}


def make_console() -> Console:
    return Console(highlight=False, soft_wrap=True)


def dashline(name: str, names: Iterable[str]) -> str:
    """Pad `name` with dashes so every url column starts at the same offset."""

    width = max((len(item) for item in names), default=len(name)) + 3
    return name + " " + "-" * (max(1, width - len(name)) - 1)


def registry_lines(registries: RegistrySet, current: CurrentRegistry) -> list[Text]:
    names = registries.names()
    lines: list[Text] = []
    for entry in registries:
        active = entry.name == current.name
        prefix = "*" if active else " "
        line = Text(f" {prefix} {dashline(entry.name, names)} {entry.registry}")
        if active:
            line.stylize("green")
        lines.append(line)
    return lines


def unknown_registry_line(current: CurrentRegistry) -> Text:
    line = Text("  ")
    line.append("Unknown", style="red")
    line.append(" registry: ")
    line.append(current.url, style="yellow")
    return line


def print_registries(console: Console, registries: RegistrySet, current: CurrentRegistry) -> None:
    if not current.known:
        console.print()
        console.print(unknown_registry_line(current))
    console.print()
    for line in registry_lines(registries, current):
        console.print(line)
    console.print()


def latency_line(result: ProbeResult, names: Sequence[str]) -> Text:
    line = Text(f" {dashline(result.name, names)} ")
    line.append(result.label, style=LATENCY_STYLES[result.bucket])
    return line


def print_latencies(console: Console, results: Sequence[ProbeResult], names: Sequence[str]) -> None:
    console.print()
    for result in results:
        console.print(latency_line(result, names))
    console.print()


def print_use_hint(console: Console, prog: str) -> None:
    console.print()
    console.print(f"  {prog} use <registry>")
    hint = Text("  Example: ")
    hint.append(f"{prog} use taobao", style="yellow")
    console.print(hint)
    console.print()
