"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Optional, Annotated

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import WeekAgendaError
from ..adapters.agenda_file import load_agenda
from ..adapters.console_renderer import ConsoleWeekRenderer
from ..services.week_agenda import WeekAgenda

app = typer.Typer(
    name="weekagenda",
    help="Show a week of appointments with overlapping ones side by side",
    add_completion=False
)

console = Console()


def _configure_logging(verbose: bool) -> None:
    """Send package log records through rich; debug only with --verbose."""
    package_logger = logging.getLogger("weekagenda")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=console, show_path=False))


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """Load the given config file, or the default one if it exists."""
    if config_file is not None:
        return AppConfig.load_from_yaml(config_file)

    default_path = get_default_config_path()
    if default_path.exists():
        return AppConfig.load_from_yaml(default_path)

    return AppConfig()


def _determine_start_day(
    *,
    tz: str,
    this_week: bool,
    next_week: bool,
    start_option: Optional[str]
):
    """
    Resolve the first day of the week window from shortcut flags or an explicit date.
    """
    if sum([this_week, next_week, start_option is not None]) > 1:
        console.print("[red]Error: --start, --this-week and --next-week are mutually exclusive.[/red]")
        raise typer.Exit(1)

    now = pendulum.now(tz)

    if this_week:
        return now.start_of("week")

    if next_week:
        return now.next(pendulum.MONDAY).start_of("day")

    if start_option:
        try:
            return pendulum.from_format(start_option, "YYYY-MM-DD", tz=tz).start_of("day")
        except ValueError as e:
            console.print(f"[red]Error parsing start date: {e}[/red]")
            raise typer.Exit(1)

    return now.start_of("day")


@app.command()
def show(
    agenda_file: Annotated[Path, typer.Argument(help="JSON or YAML file with appointments (start_date, end_date, title).")],
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to $WEEKAGENDA_CONFIG or ./config.yaml")] = None,
    start: Annotated[Optional[str], typer.Option("--start", help="First day of the week (YYYY-MM-DD)")] = None,
    this_week: Annotated[bool, typer.Option("--this-week", help="Show the current week starting on Monday.")] = False,
    next_week: Annotated[bool, typer.Option("--next-week", help="Show the coming week (Monday to Sunday).")] = False,
    row_height: Annotated[Optional[float], typer.Option("--row-height", help="Height of a full day column, overrides the config")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log skipped appointments.")] = False,
):
    """
    Show the appointments of a week.

    Examples:

        weekagenda show agenda.json --start 2024-01-01

        weekagenda show agenda.yaml --next-week --verbose
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_file)
        tz = config.timezone

        start_day = _determine_start_day(
            tz=tz,
            this_week=this_week,
            next_week=next_week,
            start_option=start
        )

        records = load_agenda(agenda_file, timezone=tz)
        week = WeekAgenda(config.target, start_day, records)

        height = row_height if row_height is not None else config.display.row_height
        if height <= 0:
            console.print("[red]Error: --row-height must be greater than 0.[/red]")
            raise typer.Exit(1)

        renderer = ConsoleWeekRenderer(console=console)
        views = week.render(
            renderer,
            height,
            header_format=config.display.header_format,
            locale=config.display.locale
        )
        renderer.render()

        console.print(f"[green]✓ {len(views)} appointment(s) shown[/green]")
        if week.skipped:
            console.print(f"[yellow]⚠ {len(week.skipped)} record(s) skipped[/yellow]")

    except (FileNotFoundError, ValueError, WeekAgendaError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]weekagenda[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
