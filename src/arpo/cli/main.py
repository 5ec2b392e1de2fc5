"""Main CLI interface for arpo using Click."""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .. import __version__
from ..catalog import ProjectCatalog
from ..config import ArpoConfig, get_config_manager
from ..config.manager import USER_CONFIG_PATH
from ..core import AppController, AppState, describe_record
from ..errors import CatalogLoadError
from ..mover import DirectoryMover
from ..runtime import CommandExecutor, EventLoop
from ..tui import HeadlessPresenter, TerminalPresenter
from ..utils.logging import get_logger, setup_logging

console = Console()
logger = get_logger(__name__)


def load_config(ctx, **overrides) -> ArpoConfig:
    """
    Load the configuration file and apply command-line overrides.

    Options left at None keep the file (or default) value.
    """
    config_manager = get_config_manager(ctx.obj.get("config_path"))
    config = config_manager.load(create_if_missing=True)

    updates = {key: value for key, value in overrides.items() if value is not None}
    if ctx.obj.get("log_level"):
        updates["logging"] = config.logging.model_copy(update={"level": ctx.obj["log_level"]})
    if updates:
        config = ArpoConfig(**{**config.model_dump(), **updates})

    setup_logging(
        level=config.logging.level,
        log_dir=config.logging.log_dir,
        max_bytes=config.logging.max_bytes,
        backup_count=config.logging.backup_count,
        console_enabled=config.logging.console_enabled,
        file_enabled=config.logging.file_enabled,
    )
    return config


def build_catalog(config: ArpoConfig) -> ProjectCatalog:
    return ProjectCatalog(
        skip_hidden=config.skip_hidden,
        excluded_paths=[config.archive_root],
    )


def build_loop(config: ArpoConfig, presenter) -> EventLoop:
    """Wire catalog, mover, controller and presenter into an event loop."""
    mover = DirectoryMover(
        archive_root=config.archive_root,
        dry_run=config.dry_run,
        on_conflict=config.on_conflict,
    )
    controller = AppController(
        projects_root=config.projects_root,
        archive_root=config.archive_root,
        history_size=config.history_size,
    )
    return EventLoop(
        controller=controller,
        executor=CommandExecutor(build_catalog(config), mover),
        presenter=presenter,
        max_workers=config.max_workers,
    )


def report_outcome(state: AppState) -> None:
    """Print the final status line and exit non-zero on a fatal error."""
    if state.error:
        console.print(f"[bold red]✗ {escape(state.error)}[/bold red]")
        sys.exit(1)

    if state.cancelled:
        console.print("[yellow]Archiving cancelled[/yellow]")
        return

    if state.pipeline is not None and state.done:
        moved = state.pipeline.total
        if moved == 0:
            console.print("[yellow]Nothing selected, nothing archived.[/yellow]")
        else:
            console.print(
                f"[bold green]✓ Archived {moved} project(s) into {state.archive_root}[/bold green]"
            )


path_option = click.Path(file_okay=False, path_type=Path)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="arpo")
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Override the configured log level",
)
@click.pass_context
def cli(ctx, config: Optional[Path], log_level: Optional[str]):
    """
    arpo - move finished projects into an archive folder.

    Pick directories from your projects root and archive them one by one.
    Without a subcommand, starts the interactive picker.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["log_level"] = log_level

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@cli.command()
@click.option("--root", type=path_option, help="Projects root (overrides config)")
@click.option("--archive", type=path_option, help="Archive destination (overrides config)")
@click.option("--dry-run", is_flag=True, help="Time moves without moving anything")
@click.pass_context
def run(ctx, root: Optional[Path], archive: Optional[Path], dry_run: bool):
    """Select projects interactively and archive them."""
    try:
        config = load_config(ctx, projects_root=root, archive_path=archive, dry_run=dry_run or None)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]✗ Configuration error:[/bold red] {e}")
        sys.exit(1)

    if not sys.stdin.isatty():
        console.print(
            "[bold red]✗ Interactive mode needs a terminal.[/bold red] "
            "Use [cyan]arpo archive NAME...[/cyan] instead."
        )
        sys.exit(1)

    presenter = TerminalPresenter(config.ui, console=console)
    try:
        state = build_loop(config, presenter).run()
    except Exception as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        logger.exception("Interactive session error")
        sys.exit(1)

    # The live display used the alternate screen; repeat the history on exit
    if state.pipeline is not None:
        for record in state.pipeline.history.completed():
            console.print(escape(describe_record(record)))
    report_outcome(state)


@cli.command(name="archive")
@click.argument("names", nargs=-1, required=True)
@click.option("--root", type=path_option, help="Projects root (overrides config)")
@click.option("--archive", type=path_option, help="Archive destination (overrides config)")
@click.option("--dry-run", is_flag=True, help="Time moves without moving anything")
@click.pass_context
def archive_command(
    ctx,
    names: tuple[str, ...],
    root: Optional[Path],
    archive: Optional[Path],
    dry_run: bool,
):
    """
    Archive the named projects without the interactive picker.

    \b
    Examples:
        arpo archive old-site scratch
        arpo archive --root ~/dev --dry-run demo
    """
    try:
        config = load_config(ctx, projects_root=root, archive_path=archive, dry_run=dry_run or None)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]✗ Configuration error:[/bold red] {e}")
        sys.exit(1)

    if config.dry_run:
        console.print("[yellow]DRY RUN - nothing will be moved[/yellow]")

    presenter = HeadlessPresenter(list(names), console=console)
    try:
        state = build_loop(config, presenter).run()
    except Exception as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        logger.exception("Archive command error")
        sys.exit(1)

    if presenter.missing:
        console.print(
            f"[bold red]✗ Unknown project(s):[/bold red] {escape(', '.join(presenter.missing))}"
        )
        sys.exit(1)
    report_outcome(state)


@cli.command(name="list")
@click.option("--root", type=path_option, help="Projects root (overrides config)")
@click.pass_context
def list_command(ctx, root: Optional[Path]):
    """Show the projects that can be archived."""
    try:
        config = load_config(ctx, projects_root=root)
        entries = build_catalog(config).load(config.projects_root)
    except CatalogLoadError as e:
        console.print(f"[bold red]✗ {escape(str(e))}[/bold red]")
        sys.exit(1)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]✗ Configuration error:[/bold red] {e}")
        sys.exit(1)

    if not entries:
        console.print(f"[yellow]No projects found in {config.projects_root}[/yellow]")
        return

    table = Table(title=f"Projects in {config.projects_root}", header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name", style="green")
    table.add_column("Path", style="dim")
    for position, entry in enumerate(entries, start=1):
        table.add_row(str(position), entry.name, str(entry.source_path))
    console.print(table)


@cli.command()
@click.option(
    "--path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Where to write the configuration (default: ~/.config/arpo/config.yaml)",
)
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init(path: Optional[Path], force: bool):
    """Write a default configuration file."""
    config_manager = get_config_manager()
    target = path or USER_CONFIG_PATH

    if target.exists() and not force:
        console.print(f"[yellow]⚠ {target} already exists.[/yellow] Use --force to overwrite.")
        sys.exit(1)

    try:
        written = config_manager.save(ArpoConfig(), target)
    except OSError as e:
        console.print(f"[bold red]✗ Could not write configuration:[/bold red] {e}")
        sys.exit(1)
    console.print(f"✓ Created default configuration: [green]{written}[/green]")


@cli.group(name="config")
def config_group():
    """Manage arpo configuration."""
    pass


@config_group.command(name="show")
@click.pass_context
def config_show(ctx):
    """Display the effective configuration."""
    try:
        config_manager = get_config_manager(ctx.obj.get("config_path"))
        config = config_manager.load(create_if_missing=True)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)

    console.print("\n[bold cyan]arpo Configuration[/bold cyan]\n")

    console.print("[bold]Paths:[/bold]")
    console.print(f"  Projects root: {config.projects_root}")
    console.print(f"  Archive:       {config.archive_root}")

    console.print("\n[bold]Archiving:[/bold]")
    console.print(f"  History size: {config.history_size}")
    console.print(f"  Skip hidden:  {config.skip_hidden}")
    console.print(f"  On conflict:  {config.on_conflict}")
    console.print(
        f"  Dry run:      {'[yellow]Yes[/yellow]' if config.dry_run else 'No'}"
    )

    console.print("\n[bold]Keys:[/bold]")
    for action in ("up", "down", "toggle", "commit", "quit"):
        console.print(f"  {action:<7} {', '.join(getattr(config.ui.keys, action))}")

    console.print("\n[bold]Logging:[/bold]")
    console.print(f"  Level: {config.logging.level}")
    console.print(f"  Dir:   {config.logging.log_dir}")

    source = config_manager.config_path or "defaults (no file found)"
    console.print(f"\n[dim]Config file: {source}[/dim]")


if __name__ == "__main__":
    cli()
