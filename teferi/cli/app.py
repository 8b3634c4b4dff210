"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, List, Optional

import pendulum
import typer
from pendulum import Date, DateTime
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from ..bootstrap import build_locator
from ..config import AppConfig, load_config
from ..domain.calendar_range import CalendarRangeModel
from ..domain.exceptions import TeferiError
from ..domain.models import CalendarCell, Category, CategorySlot, MonthGrid
from ..services.view_model_locator import ViewModelLocator

app = typer.Typer(
    name="teferi",
    help="Browse tracked time in a month calendar",
    add_completion=False
)

console = Console()

CATEGORY_COLORS = {
    Category.COMMUTE: "cyan",
    Category.FOOD: "yellow",
    Category.FRIENDS: "magenta",
    Category.WORK: "red",
    Category.LEISURE: "green",
    Category.UNKNOWN: "grey50",
}

WEEKDAY_LABELS = ["Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"]

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
TodayOption = Annotated[Optional[str], typer.Option("--today", help="Pretend today is this date (YYYY-MM-DD)")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _parse_day(value: str, tz: str, label: str) -> Date:
    try:
        return pendulum.from_format(value, "YYYY-MM-DD", tz=tz).date()
    except ValueError as e:
        console.print(f"[red]Could not parse {label} '{value}': {e}[/red]")
        raise typer.Exit(1)


def _parse_month(value: str, tz: str) -> Date:
    try:
        return pendulum.from_format(value, "YYYY-MM", tz=tz).date()
    except ValueError as e:
        console.print(f"[red]Could not parse month '{value}': {e}[/red]")
        raise typer.Exit(1)


def _resolve_now(today: Optional[str], tz: str) -> DateTime | None:
    """A pinned day counts as fully elapsed."""
    if today is None:
        return None
    day = _parse_day(today, tz, "--today")
    return pendulum.datetime(day.year, day.month, day.day, tz=tz).end_of("day")


def _load(config_file: Optional[Path], today: Optional[str]) -> tuple[AppConfig, CalendarRangeModel, ViewModelLocator]:
    config = load_config(config_file)
    locator = build_locator(config, now=_resolve_now(today, config.timezone))
    return config, locator.get_calendar_model(), locator


def _header_text(model: CalendarRangeModel) -> Text:
    header = model.get_attributed_header_name(model.current_visible_calendar_date)

    text = Text()
    text.append("‹ ", style="bold" if model.can_scroll_to_previous_segment() else "dim")
    text.append(header.month, style="bold")
    text.append(f" {header.year}")
    text.append(" ›", style="bold" if model.can_scroll_to_next_segment() else "dim")
    return text


def _cell_text(cell: CalendarCell) -> Text:
    if not cell.belongs_to_month:
        return Text("")

    if cell.is_selected:
        style = "bold reverse"
    elif cell.allows_scrolling:
        style = "bold"
    else:
        style = "dim"

    text = Text(f"{cell.date.day:>2}", style=style)

    dominant = cell.dominant_category
    if dominant is not None:
        text.append(" ●", style=CATEGORY_COLORS[dominant])
    else:
        text.append("  ")

    return text


def render_month(grid: MonthGrid, model: CalendarRangeModel, first_weekday: int = 0) -> Table:
    """Render a month grid as a Rich table."""
    table = Table(title=_header_text(model), show_header=True, header_style="bold cyan", show_lines=False)

    labels = WEEKDAY_LABELS[first_weekday:] + WEEKDAY_LABELS[:first_weekday]
    for label in labels:
        table.add_column(label, justify="center", min_width=4)

    for row in grid.rows:
        table.add_row(*[_cell_text(cell) for cell in row])

    return table


def render_category_slots(slots: List[CategorySlot], title: str) -> Table:
    """Render a day's category slots as a Rich table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Category", style="bold")
    table.add_column("Share", justify="right")
    table.add_column("")

    for slot in slots:
        color = CATEGORY_COLORS[slot.category]
        bar = "█" * max(1, round(slot.proportion * 20))
        table.add_row(
            Text(slot.category.value, style=color),
            f"{slot.percentage()}%",
            Text(bar, style=color),
        )

    return table


@app.command()
def show(
    config_file: ConfigOption = None,
    month: Annotated[Optional[str], typer.Option("--month", "-m", help="Month to show (YYYY-MM)")] = None,
    select: Annotated[Optional[str], typer.Option("--select", "-s", help="Day to select (YYYY-MM-DD)")] = None,
    today: TodayOption = None,
    verbose: VerboseOption = False,
):
    """
    Show a month of the calendar.

    Examples:

        teferi show
        teferi show --month 2017-06
        teferi show --select 2017-06-15 --today 2017-12-31
    """
    _configure_logging(verbose)

    try:
        config, model, locator = _load(config_file, today)

        if select is not None:
            selected = _parse_day(select, config.timezone, "--select")
            if not model.can_scroll(selected):
                console.print(
                    f"[bold red]Error:[/bold red] {selected.to_date_string()} is outside "
                    f"the calendar range {model.date_range}"
                )
                raise typer.Exit(1)
            model.selected_date = selected

        if month is not None:
            model.current_visible_calendar_date = _parse_month(month, config.timezone)
        else:
            model.current_visible_calendar_date = model.selected_date

        grid = locator.get_calendar_grid_builder(model).build_visible_month()

        console.print()
        console.print(render_month(grid, model, first_weekday=config.first_weekday))

        slots = model.get_category_slots(model.selected_date)
        title = f"Selected: {model.selected_date.format('dddd, DD.MM.YYYY', locale=config.locale)}"
        console.print()
        if slots:
            console.print(render_category_slots(slots, title=title))
        else:
            console.print(f"[bold]{title}[/bold]")
            console.print("[yellow]No tracked time on this day.[/yellow]")
        console.print()

    except FileNotFoundError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    except (TeferiError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def day(
    date: Annotated[str, typer.Argument(help="Day to summarise (YYYY-MM-DD)")],
    config_file: ConfigOption = None,
    today: TodayOption = None,
    verbose: VerboseOption = False,
):
    """
    Show how the tracked time of a day splits into categories.
    """
    _configure_logging(verbose)

    try:
        config, model, _ = _load(config_file, today)
        target = _parse_day(date, config.timezone, "date")

        if not model.can_scroll(target):
            console.print(
                f"[bold red]Error:[/bold red] {target.to_date_string()} is outside "
                f"the calendar range {model.date_range}"
            )
            raise typer.Exit(1)

        slots = model.get_category_slots(target)

        console.print()
        if not slots:
            console.print(f"[yellow]No tracked time on {target.to_date_string()}.[/yellow]")
        else:
            console.print(render_category_slots(slots, title=target.format("dddd, DD.MM.YYYY", locale=config.locale)))
        console.print()

    except FileNotFoundError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    except (TeferiError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command(name="range")
def show_range(
    config_file: ConfigOption = None,
    today: TodayOption = None,
    verbose: VerboseOption = False,
):
    """
    Show the install date and the days the calendar covers.
    """
    _configure_logging(verbose)

    try:
        _, model, locator = _load(config_file, today)

        install_date = locator.settings_service.install_date

        table = Table(title="Calendar range", show_header=False)
        table.add_column("Field", style="bold yellow")
        table.add_column("Value")
        table.add_row("Install date", install_date.to_date_string() if install_date else "-")
        table.add_row("First day", model.min_valid_date.to_date_string())
        table.add_row("Last day", model.max_valid_date.to_date_string())
        table.add_row("Months", str(len(model.segments())))

        console.print()
        console.print(table)
        console.print()

    except FileNotFoundError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    except (TeferiError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]teferi[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
