"""Typer CLI for the Long Weekend Planner."""

from __future__ import annotations

import datetime
import json
import logging
import pathlib
import sys

import typer

from longweekend.config import Settings
from longweekend.holidays import PRESETS, get_holidays
from longweekend.planner import HolidayPlanner
from longweekend.recommender import format_recommendations, parse_holiday_date
from longweekend.storage import StorageError, StorageErrorType, StorageGateway
from longweekend.stores import DirectoryStore

app = typer.Typer(
    name="long-weekend",
    help="Long Weekend Planner — keep a list of holidays and find the single "
    "days off that turn them into 4-day weekends.",
    add_completion=False,
)


def _current_year() -> int:
    return datetime.date.today().year


def _format_day(value: str) -> str:
    d = parse_holiday_date(value)
    return d.strftime("%a, %b %d, %Y") if d else value


def _fail(error: StorageError) -> None:
    typer.echo(f"Error: {error.user_message}", err=True)
    raise typer.Exit(code=1)


def _open_planner(ctx: typer.Context) -> HolidayPlanner:
    """Load the planner from the configured store, reporting recovery notices."""
    planner = HolidayPlanner(StorageGateway(DirectoryStore(ctx.obj.data_dir), ctx.obj))
    result = planner.load()
    if result.error is not None and result.error.type is StorageErrorType.CORRUPTION_ERROR:
        typer.echo(f"Notice: {result.error.user_message}", err=True)
    elif result.error is not None:
        _fail(result.error)
    elif result.had_corruption:
        typer.echo("Notice: some saved holidays were invalid and have been removed.", err=True)
    return planner


@app.callback()
def main_callback(
    ctx: typer.Context,
    data_dir: str | None = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Directory holding saved holidays. Defaults to $LONGWEEKEND_DATA_DIR "
        "or ~/.local/share/long-weekend.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    settings = Settings.load()
    if data_dir is not None:
        settings.data_dir = pathlib.Path(data_dir)
    ctx.obj = settings


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command("list")
def list_holidays(ctx: typer.Context) -> None:
    """List saved holidays."""
    planner = _open_planner(ctx)
    if not planner.holidays:
        typer.echo("  No holidays saved yet. Add one with 'long-weekend add'.")
        return
    for h in planner.holidays:
        typer.echo(f"  {_format_day(h.date):>17}  {h.name}  [{h.id}]")


@app.command()
def add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Holiday name."),
    date: str = typer.Argument(..., help="Holiday date (YYYY-MM-DD)."),
) -> None:
    """Add a holiday."""
    planner = _open_planner(ctx)
    try:
        error = planner.add_holiday(name, date)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from None
    if error is not None:
        _fail(error)
    typer.echo(f"Added {name.strip()} on {_format_day(date)}.")


@app.command()
def remove(
    ctx: typer.Context,
    holiday_id: str = typer.Argument(..., help="Id of the holiday to remove (see 'list')."),
) -> None:
    """Remove a holiday by id."""
    planner = _open_planner(ctx)
    try:
        error = planner.delete_holiday(holiday_id)
    except KeyError:
        typer.echo(f"Error: No holiday with id {holiday_id!r}.", err=True)
        raise typer.Exit(code=1) from None
    if error is not None:
        _fail(error)
    typer.echo(f"Removed holiday {holiday_id}.")


@app.command()
def recommend(
    ctx: typer.Context,
    output_json: bool = typer.Option(False, "--json", help="Output results as JSON."),
    bridges: bool = typer.Option(
        False, "--bridges", help="Also suggest days that bridge nearby holidays."
    ),
) -> None:
    """Recommend extra days off for long weekends."""
    planner = _open_planner(ctx)
    recs = planner.recommendations()
    bridge_list = planner.bridges() if bridges else []

    if output_json:
        output: dict[str, object] = {"recommendations": [r.to_dict() for r in recs]}
        if bridges:
            output["bridges"] = [b.to_dict() for b in bridge_list]
        json.dump(output, sys.stdout, indent=2)
        typer.echo()
        return

    typer.echo(format_recommendations(recs, bridge_list))


@app.command()
def presets(
    country: str = typer.Option(
        "us",
        "--country",
        "-c",
        help=f"Country preset ({', '.join(sorted(PRESETS))}).",
    ),
    year: int = typer.Option(
        None,
        "--year",
        "-y",
        help="Year to list holidays for. Defaults to the current year.",
    ),
) -> None:
    """List holidays for a country preset."""
    resolved_year = year if year is not None else _current_year()

    try:
        preset = get_holidays(country, resolved_year)
    except KeyError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None

    typer.echo(f"  {PRESETS[country]} — {resolved_year}")
    typer.echo()
    for d, name in preset:
        typer.echo(f"    {d.strftime('%a, %b %d'):>12}  {name}")


@app.command("add-presets")
def add_presets(
    ctx: typer.Context,
    country: str = typer.Option("us", "--country", "-c", help="Country preset."),
    year: int = typer.Option(
        None, "--year", "-y", help="Year to add. Defaults to the current year."
    ),
) -> None:
    """Add every holiday of a preset that is not already saved."""
    resolved_year = year if year is not None else _current_year()
    planner = _open_planner(ctx)
    try:
        added, error = planner.add_presets(country, resolved_year)
    except KeyError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None
    if error is not None:
        _fail(error)
    typer.echo(f"Added {added} holiday{'s' if added != 1 else ''} from {PRESETS[country]}.")


@app.command()
def storage(ctx: typer.Context) -> None:
    """Show storage availability and usage."""
    data_dir = ctx.obj.data_dir
    gateway = StorageGateway(DirectoryStore(data_dir), ctx.obj)
    info = gateway.get_storage_quota_info()
    typer.echo(f"  Location:  {data_dir}")
    # Checking availability writes, which would create the directory.
    if not data_dir.exists():
        typer.echo("  Available: yes (not created yet)")
    else:
        typer.echo(f"  Available: {'yes' if gateway.is_storage_available() else 'no'}")
    typer.echo(f"  Used:      {info.used} chars")
    if info.total is not None:
        typer.echo(f"  Remaining: {info.available} of {info.total} chars")


def main() -> None:
    """Entry point for the CLI."""
    app()
