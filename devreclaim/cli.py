from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial

from rich.console import Console
from rich.logging import RichHandler

from devreclaim import __version__
from devreclaim.config.loader import load_config
from devreclaim.config.schema import AppConfig
from devreclaim.models.enums import Category
from devreclaim.models.finding import Finding, sort_findings
from devreclaim.services.discovery import discover
from devreclaim.services.environment import Environment
from devreclaim.services.fs import DEFAULT_FS, FileSystem
from devreclaim.services.removal import execute, execute_simulators
from devreclaim.services.report import (
    render_dry_run,
    render_outcome,
    render_removal_summary,
    render_scan_report,
)
from devreclaim.services.simulators import SimulatorTool, XcrunSimulatorTool
from devreclaim.ui.app import SelectionError, select_interactively

Selector = Callable[[list[Finding]], list[Finding]]

_CATEGORY_COMMANDS: dict[str, tuple[Category, str]] = {
    "antigravity": (Category.ANTIGRAVITY, "Clean Antigravity IDE session recordings, conversations, and caches"),
    "flutter": (Category.FLUTTER, "Clean Flutter project build directories and .dart_tool"),
    "xcode": (Category.XCODE, "Clean Xcode DerivedData, DeviceSupport, and archives"),
    "android": (Category.ANDROID, "Clean Gradle caches and Android emulator images"),
    "vscode": (Category.VSCODE, "Clean VS Code and Cursor caches"),
    "simulator": (Category.SIMULATOR, "Remove unavailable and old simulator runtimes"),
}


@dataclass(slots=True)
class Runtime:
    """Everything a command needs; tests build one with fakes."""

    config: AppConfig
    env: Environment
    fs: FileSystem = DEFAULT_FS
    console: Console = field(default_factory=Console)
    simulators: SimulatorTool = field(default_factory=XcrunSimulatorTool)
    selector: Selector = select_interactively


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="devreclaim",
        description="Clean up IDE caches, build artifacts and simulator images left behind by developer tools.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", metavar="PATH", help="JSON file overriding the built-in rule tables")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log discovery and removal details")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("scan", help="Scan for cleanable items")

    clean = sub.add_parser("clean", help="Clean up caches and build artifacts")
    clean.add_argument("-a", "--all", action="store_true", help="Clean all items without prompting")
    clean.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Show what would be cleaned without actually cleaning",
    )

    for name, (_, help_text) in _CATEGORY_COMMANDS.items():
        cmd = sub.add_parser(name, help=help_text)
        if name == "flutter":
            cmd.add_argument("-p", "--path", help="Path to scan for Flutter projects (default: ~/Documents)")
    return parser


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _clean(findings: list[Finding], runtime: Runtime, category: Category | None = None) -> None:
    console = runtime.console
    console.print()
    console.print("[bold]🧹 Cleaning...[/bold]")

    progress = partial(render_outcome, console)

    if category is Category.SIMULATOR:
        summary = execute_simulators(findings, runtime.simulators, progress=progress)
    else:
        summary = execute(findings, runtime.fs, progress=progress)
    render_removal_summary(console, summary)


def cmd_scan(args: argparse.Namespace, runtime: Runtime) -> int:
    bundle = discover(None, runtime.config, runtime.env, runtime.fs)
    render_scan_report(runtime.console, bundle, runtime.env.home)
    return 0


def cmd_clean(args: argparse.Namespace, runtime: Runtime) -> int:
    bundle = discover(None, runtime.config, runtime.env, runtime.fs)
    if not bundle.findings:
        runtime.console.print("No cleanable items found.")
        return 0

    if args.all:
        to_clean = sort_findings(bundle.findings)
    else:
        to_clean = runtime.selector(bundle.findings)

    if not to_clean:
        runtime.console.print("No items selected for cleaning.")
        return 0

    if args.dry_run:
        render_dry_run(runtime.console, to_clean)
        return 0

    _clean(to_clean, runtime)
    return 0


def cmd_category(args: argparse.Namespace, runtime: Runtime) -> int:
    category, _ = _CATEGORY_COMMANDS[args.command]
    scan_root = getattr(args, "path", None)
    if scan_root:
        scan_root = runtime.fs.absolute(runtime.fs.expanduser(scan_root))
    bundle = discover(
        category,
        runtime.config,
        runtime.env,
        runtime.fs,
        scan_root=scan_root,
        simulators=runtime.simulators,
    )
    if not bundle.findings:
        if category is Category.SIMULATOR:
            runtime.console.print("No old simulator runtimes found.")
        else:
            runtime.console.print(f"No {category.label} cleanable items found.")
        return 0

    to_clean = runtime.selector(bundle.findings)
    if to_clean:
        _clean(to_clean, runtime, category)
    return 0


_COMMANDS: dict[str, Callable[[argparse.Namespace, Runtime], int]] = {
    "scan": cmd_scan,
    "clean": cmd_clean,
    **{name: cmd_category for name in _CATEGORY_COMMANDS},
}


def run(args: argparse.Namespace, runtime: Runtime) -> int:
    try:
        return _COMMANDS[args.command](args, runtime)
    except SelectionError as exc:
        Console(stderr=True).print(f"[red]Error:[/red] {exc}")
        return 1


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    err_console = Console(stderr=True)

    env = Environment.current()
    if env.is_err():
        err_console.print(f"[red]Error:[/red] {env.unwrap_err()}")
        return 1

    config = load_config(args.config)
    if config.is_err():
        err_console.print(f"[red]Error:[/red] {config.unwrap_err()}")
        return 1

    return run(args, Runtime(config=config.unwrap(), env=env.unwrap()))
