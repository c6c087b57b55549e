"""
Command line interface for the pwnstyles stylesheet kit.
"""

from __future__ import annotations

import logging
import os
from contextlib import nullcontext
from pathlib import Path
from typing import Iterable, List, Optional

import typer
from filelock import Timeout
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import ConfigError, ProjectConfig, get_settings, load_project_config
from .generators import GENERATORS, GeneratorError, run_generator
from .stylesheets import StylesheetCompileError, StylesheetExpansions, compile_stylesheets
from .sync import SyncError, sync as sync_tree
from .util import file_lock

console = Console()
app = typer.Typer(help="Install, update and compile the pwnstyles stylesheet kit.")
logger = logging.getLogger(__name__)

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]
LOCK_NAME = ".pwnstyles"
LOCK_TIMEOUT = 60.0


def _configure_logging(level_name: str) -> None:
    env_override = os.getenv("PWNSTYLES_LOG_LEVEL") or get_settings().log_level
    level_str = (env_override or level_name or "info").upper()
    if level_str not in {lvl.upper() for lvl in LOG_LEVELS}:
        level_str = "INFO"
    logging.basicConfig(
        level=getattr(logging, level_str, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level_str)


def _resolve_project_root(value: Path) -> Path:
    """Ensure the project root is an existing directory and return its absolute path."""
    resolved = value.expanduser().resolve()
    if not resolved.exists():
        raise typer.BadParameter(f"No project directory found at {resolved}")
    if not resolved.is_dir():
        raise typer.BadParameter(f"Project root must be a directory, got file: {resolved}")
    return resolved


def _resolve_config_path(value: Optional[Path]) -> Optional[Path]:
    if value is None:
        return None
    resolved = value.expanduser().resolve()
    if not resolved.exists():
        raise typer.BadParameter(f"No config file found at {resolved}")
    if not resolved.is_file():
        raise typer.BadParameter(f"Config path must be a file, got directory: {resolved}")
    return resolved


def _lock_busy_exit(exc: Timeout) -> typer.Exit:
    console.print(
        f"[bold red]Project is locked:[/] another pwnstyles run holds {escape(exc.lock_file)} "
        f"(waited {LOCK_TIMEOUT:g}s)."
    )
    return typer.Exit(code=1)


def _load_config_or_exit(project_root: Path, path: Optional[Path]) -> ProjectConfig:
    try:
        return load_project_config(project_root, path)
    except ConfigError as exc:
        console.print(f"[bold red]Configuration error:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def _print_summary(title: str, rows: Iterable[tuple[str, str]]) -> None:
    table = Table(title=title)
    table.add_column("Key")
    table.add_column("Value", overflow="fold")
    for key, value in rows:
        table.add_row(key, value)
    console.print(table)


@app.callback(invoke_without_command=True)
def _root_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show pwnstyles version and exit.",
        is_flag=True,
    ),
    log_level: str = typer.Option(
        "info",
        "--log-level",
        help="Logging level (critical, error, warning, info, debug).",
        show_default=True,
        case_sensitive=False,
    ),
) -> None:
    """
    Default command when no subcommand is selected.
    """
    _configure_logging(log_level)

    if version:
        console.print(f"[bold green]pwnstyles[/] {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(
            "[bold yellow]pwnstyles[/] is ready. Run [cyan]pwnstyles generate install[/] "
            "inside your application to copy the kit.",
        )


@app.command()
def generate(
    name: str = typer.Argument(..., help="Generator to run (install, update, all)."),
    project_root: Path = typer.Option(
        Path("."),
        "--project-root",
        "-p",
        help="Root directory of the consuming application.",
        callback=_resolve_project_root,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to pwnstyles.toml (defaults to <project-root>/pwnstyles.toml when present).",
        callback=_resolve_config_path,
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="List the files that would be copied without writing anything.",
    ),
) -> None:
    """
    Copy the bundled kit into the application using the named generator.
    """
    project_config = _load_config_or_exit(project_root, config)
    try:
        lock = nullcontext() if dry_run else file_lock(project_root / LOCK_NAME, timeout=LOCK_TIMEOUT)
        with lock:
            report = run_generator(name, project_root, project_config, dry_run=dry_run)
    except Timeout as exc:
        raise _lock_busy_exit(exc) from exc
    except (GeneratorError, SyncError) as exc:
        console.print(f"[bold red]Generator failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    _print_summary("Generator Summary", report.summary_rows())
    if dry_run:
        for step in report.steps:
            for relative in step.copied:
                console.print(f"- {step.destination_root / relative}")
        console.print("[bold blue]Dry run complete.[/] No filesystem changes made.")
        return
    console.print(f"[bold green]{report.generator} complete.[/]")


@app.command()
def generators() -> None:
    """
    List the available generators and the directories each one copies.
    """
    table = Table(title="Generators")
    table.add_column("Name")
    table.add_column("Copies", overflow="fold")
    table.add_column("Description", overflow="fold")
    for name in sorted(GENERATORS):
        generator = GENERATORS[name]
        copies = "\n".join(f"{step.source} -> {step.destination}" for step in generator.steps)
        table.add_row(name, copies, generator.description)
    console.print(table)


@app.command("compile")
def compile_command(
    project_root: Path = typer.Option(
        Path("."),
        "--project-root",
        "-p",
        help="Root directory of the consuming application.",
        callback=_resolve_project_root,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to pwnstyles.toml (defaults to <project-root>/pwnstyles.toml when present).",
        callback=_resolve_config_path,
    ),
    environment: Optional[str] = typer.Option(
        None,
        "--environment",
        "-e",
        help="Application environment (overrides the config file and PWNSTYLES_ENV).",
    ),
) -> None:
    """
    Compile every configured SCSS template location into CSS.
    """
    project_config = _load_config_or_exit(project_root, config)
    try:
        with file_lock(project_root / LOCK_NAME, timeout=LOCK_TIMEOUT):
            report = compile_stylesheets(project_root, project_config, environment=environment)
    except Timeout as exc:
        raise _lock_busy_exit(exc) from exc
    except StylesheetCompileError as exc:
        console.print(f"[bold red]Compilation failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    _print_summary("Stylesheet Compilation", report.summary_rows())


@app.command()
def sync(
    source: Path = typer.Argument(..., help="Directory to copy from."),
    destination: Path = typer.Argument(..., help="Directory to copy into."),
    exclude: List[str] = typer.Option(
        None,
        "--exclude",
        "-x",
        help="Relative path to leave untouched (multiple allowed).",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="List the files that would be copied without writing anything.",
    ),
) -> None:
    """
    Copy every file under SOURCE into DESTINATION, skipping excluded paths.
    """
    try:
        report = sync_tree(source, destination, exclude or (), dry_run=dry_run)
    except SyncError as exc:
        console.print(f"[bold red]Sync failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    _print_summary("Sync Summary", report.summary_rows())


@app.command("link-tags")
def link_tags(
    names: List[str] = typer.Argument(..., help="Expansion names or stylesheet paths."),
    project_root: Path = typer.Option(
        Path("."),
        "--project-root",
        "-p",
        help="Root directory of the consuming application.",
        callback=_resolve_project_root,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to pwnstyles.toml (defaults to <project-root>/pwnstyles.toml when present).",
        callback=_resolve_config_path,
    ),
) -> None:
    """
    Print the <link> tags that load the given stylesheet expansions.
    """
    project_config = _load_config_or_exit(project_root, config)
    expansions = StylesheetExpansions(project_config.expansions)
    typer.echo(expansions.link_tags(*names))


def main() -> None:
    """
    Entry-point used by the console script defined in pyproject.toml.
    """
    app()
