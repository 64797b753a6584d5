"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..adapters.json_busy_source import JsonBusySource
from ..config import AppConfig, get_default_config_path
from ..domain.business_clock import BusinessClock
from ..domain.exceptions import MalformedBusyInterval, SlotError
from ..domain.models import TimeRange, parse_instant
from ..domain.shift_status import ShiftStatus, is_within_waiting_window, shift_status
from ..services.slot_finder import SlotFinderService

app = typer.Typer(
    name="queueslots",
    help="Resolve bookable time slots for branch services",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")
]
BusyOption = Annotated[
    Optional[Path],
    typer.Option("--busy", "-b", help="JSON snapshot of blocked / reserved / employee intervals")
]
EmployeeOption = Annotated[
    Optional[str],
    typer.Option("--employee", "-e", help="Employee whose own bookings must be respected")
]

STATUS_STYLES = {
    ShiftStatus.OPEN: "bold green",
    ShiftStatus.CLOSING_SOON: "bold yellow",
    ShiftStatus.CLOSED: "bold red",
}


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
):
    """
    Branch slot availability tools.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    config_path = config_file or get_default_config_path()
    return AppConfig.load_from_yaml(config_path)


def _parse_date(value: Optional[str], clock: BusinessClock):
    """Parse YYYY-MM-DD, defaulting to the current business day."""
    if value is None:
        return clock.business_date_of(clock.now())
    return pendulum.from_format(value, "YYYY-MM-DD", tz=clock.tz).date()


def _parse_instant_option(name: str, value: str, clock: BusinessClock):
    try:
        return parse_instant(value, clock.tz)
    except MalformedBusyInterval as exc:
        raise ValueError(f"Invalid {name}: {exc}") from exc


def _fail(error: Exception) -> typer.Exit:
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    return typer.Exit(1)


@app.command()
def slots(
    branch: Annotated[str, typer.Argument(help="Branch name")],
    service: Annotated[str, typer.Argument(help="Service name")],
    day: Annotated[Optional[str], typer.Option("--date", "-d", help="Date (YYYY-MM-DD). Defaults to today.")] = None,
    busy_file: BusyOption = None,
    employee: EmployeeOption = None,
    ignore_current_time: Annotated[bool, typer.Option("--ignore-current-time", help="Include slots that already started.")] = False,
    config_file: ConfigOption = None,
):
    """
    List the bookable slots of a service on one business day.

    Examples:

        queueslots slots olaya haircut --date 2024-11-25

        queueslots slots olaya haircut --busy busy.json --employee emp-1
    """
    try:
        config = _load_config(config_file)
        branch_config, service_config = config.resolve_branch_service(branch, service)
        clock = branch_config.build_clock()
        target = _parse_date(day, clock)

        finder = SlotFinderService(JsonBusySource(busy_file))
        found = asyncio.run(
            finder.find_slots(
                branch=branch_config,
                service=service_config,
                day=target,
                employee_id=employee,
                ignore_current_time=ignore_current_time,
            )
        )
    except (SlotError, FileNotFoundError, ValueError) as e:
        raise _fail(e)

    console.print(
        f"\n[bold cyan]{branch_config.name} / {service_config.name}[/bold cyan] "
        f"({service_config.duration_minutes} min) on {target.isoformat()}\n"
    )

    if not found:
        console.print("[yellow]⚠ No available slots found.[/yellow]\n")
        return

    table = Table(
        title=f"✓ {len(found)} available slot(s)",
        title_style="bold green",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("#", style="dim", justify="right")
    table.add_column("Slot")

    for index, slot in enumerate(found, start=1):
        table.add_row(str(index), slot.format_display())

    console.print(table)
    console.print()


@app.command()
def check(
    branch: Annotated[str, typer.Argument(help="Branch name")],
    service: Annotated[str, typer.Argument(help="Service name")],
    start: Annotated[str, typer.Option("--start", help="Slot start (ISO 8601)")],
    end: Annotated[str, typer.Option("--end", help="Slot end (ISO 8601)")],
    busy_file: BusyOption = None,
    employee: EmployeeOption = None,
    config_file: ConfigOption = None,
):
    """
    Re-check one interval against current bookings before committing it.

    Exits with status 1 when the interval is no longer free.
    """
    try:
        config = _load_config(config_file)
        branch_config, service_config = config.resolve_branch_service(branch, service)
        clock = branch_config.build_clock()
        candidate = TimeRange(
            start=_parse_instant_option("--start", start, clock),
            end=_parse_instant_option("--end", end, clock),
        )

        finder = SlotFinderService(JsonBusySource(busy_file))
        available = asyncio.run(
            finder.confirm_available(
                branch=branch_config,
                service=service_config,
                candidate=candidate,
                employee_id=employee,
            )
        )
    except (SlotError, FileNotFoundError, ValueError) as e:
        raise _fail(e)

    if available:
        console.print(f"[bold green]✓ Available:[/bold green] {candidate}")
        return

    console.print(f"[bold yellow]✗ Taken:[/bold yellow] {candidate}")
    raise typer.Exit(1)


@app.command()
def status(
    branch: Annotated[str, typer.Argument(help="Branch name")],
    service: Annotated[Optional[str], typer.Argument(help="Service name (optional)")] = None,
    at: Annotated[Optional[str], typer.Option("--at", help="Instant to evaluate (ISO 8601). Defaults to now.")] = None,
    config_file: ConfigOption = None,
):
    """
    Show whether a branch is open and whether a service takes waiting tickets.
    """
    try:
        config = _load_config(config_file)
        branch_config = config.find_branch_by_name(branch)
        if branch_config is None:
            raise ValueError(f"Unknown branch: '{branch}'.")
        service_config = None
        if service is not None:
            _, service_config = config.resolve_branch_service(branch, service)

        clock = branch_config.build_clock()
        now = clock.localize(_parse_instant_option("--at", at, clock)) if at else clock.now()
        state = shift_status(
            branch_config.shift_template(),
            now,
            clock,
            closing_soon_minutes=branch_config.closing_soon_minutes,
        )
    except (SlotError, FileNotFoundError, ValueError) as e:
        raise _fail(e)

    style = STATUS_STYLES[state]
    console.print(f"\n{branch_config.name} at {now.format('DD.MM.YYYY HH:mm')}: [{style}]{state.value}[/{style}]")

    if service_config is not None:
        accepting = is_within_waiting_window(service_config.window(), now, clock)
        label = "[green]accepting[/green]" if accepting else "[red]not accepting[/red]"
        console.print(f"{service_config.name}: {label} waiting tickets")
    console.print()


@app.command()
def branches(
    config_file: ConfigOption = None,
):
    """
    List all configured branches and their services.
    """
    try:
        config = _load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        raise _fail(e)

    if not config.branches:
        console.print("[yellow]No branches defined in the config file.[/yellow]")
        return

    table = Table(
        title="Configured branches",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Branch", style="bold yellow")
    table.add_column("Timezone", style="dim")
    table.add_column("Day starts")
    table.add_column("Services")

    for branch_config in config.branches:
        table.add_row(
            branch_config.name,
            branch_config.timezone,
            f"{branch_config.business_day_anchor_hours:02d}:00",
            ", ".join(
                f"{s.name} ({s.duration_minutes} min)" for s in branch_config.services
            ),
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]queueslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
