"""
ewproj — CLI entrypoint.

Usage:
    python -m ewproj.main --help
    ewproj scan path/to/workspace
    ewproj show path/to/app.ewp --configuration Debug
    ewproj watch path/to/workspace
"""

from __future__ import annotations

import json
import os
import sys
import time
from pathlib import Path

import click

from ewproj import __version__
from ewproj.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="ewproj")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to ewproj.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """ewproj — inspect IAR Embedded Workbench projects."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("EWPROJ_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("EWPROJ_LOG_FILE"),
        log_file_level=os.environ.get("EWPROJ_LOG_FILE_LEVEL"),
    )


def _load_settings_or_exit(ctx: click.Context):
    from ewproj.core.config.loader import SettingsError, load_settings

    try:
        return load_settings(ctx.obj.get("config_path"))
    except SettingsError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


@cli.command()
@click.argument("directory", type=click.Path(file_okay=False), default=".")
@click.option(
    "--recursive/--no-recursive",
    default=None,
    help="Descend into subdirectories (default: from settings, on).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def scan(ctx: click.Context, directory: str, recursive: bool | None, as_json: bool) -> None:
    """Find and list the projects under DIRECTORY."""
    from ewproj.core.use_cases.scan import run_scan

    settings = _load_settings_or_exit(ctx)
    result = run_scan(Path(directory), recursive=recursive, settings=settings)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if not result.projects:
        click.echo(f"No projects found in {directory}")
    else:
        click.secho(f"\n📁 {len(result.projects)} project(s)", fg="cyan", bold=True)
        for project in result.projects:
            names = ", ".join(c.name for c in project.configurations) or "no configurations"
            click.echo(f"   • {project.name}  [{names}]  → {project.path}")

    if result.skipped and ctx.obj.get("verbose"):
        click.echo()
        click.secho(f"⚠️  Skipped {len(result.skipped)} file(s):", fg="yellow")
        for skipped in result.skipped:
            click.echo(f"   • {skipped.path}: {skipped.reason}")

    click.echo()


@cli.command()
@click.argument("path", type=click.Path())
@click.option("--configuration", "-C", "configuration", default=None,
              help="Show a single configuration by name.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def show(path: str, configuration: str | None, as_json: bool) -> None:
    """Show the configurations of the project file at PATH."""
    from ewproj.core.use_cases.inspect import inspect_project

    result = inspect_project(Path(path), configuration=configuration)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    project = result.project
    assert project is not None  # guaranteed after error check above

    click.secho(f"\n📋 {project.name}", fg="cyan", bold=True)
    click.echo(f"   {project.path}")
    click.echo()

    configs = [result.configuration] if result.configuration else list(project.configurations)
    for config in configs:
        debug = " (debug)" if config.debug else ""
        toolchain = f" [{config.toolchain}]" if config.toolchain else ""
        click.secho(f"   {config.name}{toolchain}{debug}", fg="white", bold=True)
        if config.defines:
            click.echo(f"     defines:  {' '.join(config.defines)}")
        for include in config.include_paths:
            click.echo(f"     include:  {include}")
        for pre in config.pre_includes:
            click.echo(f"     pre-inc:  {pre}")

    click.echo()


@cli.command()
@click.argument("directory", type=click.Path(file_okay=False), default=".")
@click.option("--interval", type=click.FloatRange(min=0, min_open=True), default=None,
              help="Seconds between polls (default: from settings).")
@click.option("--count", type=click.IntRange(min=0), default=0,
              help="Stop after this many polls (0 = run until interrupted).")
@click.pass_context
def watch(ctx: click.Context, directory: str, interval: float | None, count: int) -> None:
    """Reload projects under DIRECTORY whenever their file changes."""
    from ewproj.core.services.project_watcher import ProjectWatcher
    from ewproj.core.use_cases.scan import run_scan

    settings = _load_settings_or_exit(ctx)
    result = run_scan(Path(directory), settings=settings)
    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    def _report(project, reload_result) -> None:
        if reload_result.ok:
            names = ", ".join(c.name for c in project.configurations) or "no configurations"
            click.secho(f"🔄 {project.name} reloaded  [{names}]", fg="green")
        else:
            click.secho(f"⚠️  {project.name} kept previous state: {reload_result.error}", fg="yellow")

    watcher = ProjectWatcher(
        interval=interval if interval is not None else settings.watch.interval,
        on_reload=_report,
    )
    for project in result.projects:
        watcher.watch(project)

    click.echo(f"Watching {len(result.projects)} project(s) in {directory}, Ctrl-C to stop")

    polls = 0
    try:
        while count == 0 or polls < count:
            time.sleep(watcher.interval)
            watcher.poll_once()
            polls += 1
    except KeyboardInterrupt:
        click.echo()


if __name__ == "__main__":
    cli()
