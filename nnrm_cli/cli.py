"""Command line surface: ls, use, test, add, remove, current."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Sequence

from rich.console import Console
from rich.text import Text

from nnrm_core import __version__
from nnrm_core.active import current_registry, use_registry
from nnrm_core.context import NnrmContext
from nnrm_core.errors import NnrmError
from nnrm_core.settings import LOG_LEVELS, NnrmSettings

from .render import make_console, print_latencies, print_registries, print_use_hint

logger = logging.getLogger(__name__)

PROG_BY_MANAGER = {"npm": "nnrm", "yarn": "nyrm"}

Handler = Callable[[argparse.Namespace, NnrmContext, Console], int | None]


def build_parser(prog: str = "nnrm") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Switch, test and manage npm/yarn registries.",
    )
    parser.add_argument("--version", action="version", version=f"{prog} v{__version__}")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="logging verbosity (defaults to the configured log_level)",
    )
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = False

    ls_cmd = subparsers.add_parser("ls", help="List all the registries")
    ls_cmd.set_defaults(func=_handle_ls)

    use_cmd = subparsers.add_parser("use", help="Change registry")
    use_cmd.add_argument("registry", nargs="?", help="registry name")
    use_cmd.add_argument(
        "-l",
        "--local",
        action="store_true",
        help="also set the registry in the local '.npmrc'",
    )
    use_cmd.set_defaults(func=_handle_use)

    test_cmd = subparsers.add_parser("test", help="Show response time for all registries")
    test_cmd.set_defaults(func=_handle_test)

    add_cmd = subparsers.add_parser("add", help="Add a custom registry")
    add_cmd.add_argument("registry", help="registry name")
    add_cmd.add_argument("url", help="registry url")
    add_cmd.add_argument("home", nargs="?", help="registry homepage")
    add_cmd.set_defaults(func=_handle_add)

    remove_cmd = subparsers.add_parser("remove", help="Remove a custom registry")
    remove_cmd.add_argument("registry", help="registry name")
    remove_cmd.set_defaults(func=_handle_remove)

    current_cmd = subparsers.add_parser("current", help="Show current registry")
    current_cmd.set_defaults(func=_handle_current)

    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    pkg_manager: str = "npm",
    context: NnrmContext | None = None,
    console: Console | None = None,
) -> int:
    prog = PROG_BY_MANAGER.get(pkg_manager, pkg_manager)
    parser = build_parser(prog)
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return exc.code or 0

    func: Handler | None = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 0

    console = console or make_console()
    try:
        settings = context.settings if context is not None else NnrmSettings.load()
        _configure_logging(args.log_level or settings.log_level)
        ctx = context or NnrmContext.create(pkg_manager, settings)
        args.prog = prog
        return to_int(func(args, ctx, console))
    except NnrmError as exc:
        logger.debug("%s %s failed", prog, args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _list(ctx: NnrmContext, console: Console) -> None:
    print_registries(console, ctx.registries, current_registry(ctx))


def _handle_ls(args: argparse.Namespace, ctx: NnrmContext, console: Console) -> None:
    _list(ctx, console)


def _handle_use(args: argparse.Namespace, ctx: NnrmContext, console: Console) -> None:
    if not args.registry:
        print_use_hint(console, args.prog)
        return
    use_registry(ctx, args.registry, local=args.local, cwd=Path.cwd())
    _list(ctx, console)


def _handle_test(args: argparse.Namespace, ctx: NnrmContext, console: Console) -> None:
    results = ctx.prober.probe_all(ctx.registries)
    print_latencies(console, results, ctx.registries.names())


def _handle_add(args: argparse.Namespace, ctx: NnrmContext, console: Console) -> None:
    ctx.store.add(args.registry, args.url, args.home)
    ctx.reload()
    _list(ctx, console)


def _handle_remove(args: argparse.Namespace, ctx: NnrmContext, console: Console) -> None:
    ctx.store.remove(args.registry)
    ctx.reload()
    _list(ctx, console)


def _handle_current(args: argparse.Namespace, ctx: NnrmContext, console: Console) -> None:
    console.print(Text(current_registry(ctx).display))


def to_int(result: int | None) -> int:
    return 0 if result is None else result
