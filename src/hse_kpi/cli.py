"""CLI entry point for the HSE KPI fiscal calendar."""

from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Iterator

import click

from .calendar.month_mapper import month_day_counts, week_to_month_key
from .calendar.periods import parse_period
from .calendar.weeks import (
    all_weeks_for_year,
    current_week,
    format_week,
    is_overflow_date,
    week_dates,
    week_from_date,
)
from .core.clock import SystemClock
from .core.config import Settings, load_settings
from .core.enums import ExportFormat
from .core.errors import HseKpiError
from .core.models import to_date
from .observability.logger import new_run_id, setup_logging


@contextmanager
def _user_errors() -> Iterator[None]:
    """Report domain errors as click errors (exit code 1)."""
    try:
        yield
    except HseKpiError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.option("--config", "config_path", default=None, help="TOML config file path")
@click.option("--log-level", default=None, help="Log level override (DEBUG, INFO, ...)")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, log_level: str | None) -> None:
    """HSE KPI fiscal calendar (Saturday-Friday weeks, 52 per year)."""
    overrides: dict = {}
    if log_level:
        overrides["observability"] = {"log_level": log_level}

    with _user_errors():
        settings = load_settings(config_path, overrides)

    obs = settings.observability
    setup_logging(level=obs.log_level, format=obs.log_format.value)
    new_run_id()
    ctx.obj = settings


@main.command()
@click.argument("year", type=int)
@click.option("--json", "as_json", is_flag=True, help="Output JSON instead of labels")
@click.pass_obj
def weeks(settings: Settings, year: int, as_json: bool) -> None:
    """List the 52 weeks of a fiscal year."""
    with _user_errors():
        rows = all_weeks_for_year(year, label=settings.calendar.week_label)

    if as_json:
        click.echo(json.dumps([w.model_dump(mode="json") for w in rows], indent=2))
        return
    for w in rows:
        click.echo(f"{w.week:>2}  {w.start_date.isoformat()}  {w.end_date.isoformat()}  {w.label}")


@main.command()
@click.argument("week_number", type=int)
@click.argument("year", type=int)
@click.pass_obj
def week(settings: Settings, week_number: int, year: int) -> None:
    """Dates of one fiscal week."""
    with _user_errors():
        rng = week_dates(week_number, year)
        label = format_week(week_number, year, label=settings.calendar.week_label)
        month = week_to_month_key(rng.start, rng.end)

    click.echo(json.dumps({
        "week": week_number,
        "year": year,
        "start_date": rng.start.isoformat(),
        "end_date": rng.end.isoformat(),
        "month": str(month),
        "label": label,
    }, indent=2))


@main.command("week-of")
@click.argument("date")
def week_of(date: str) -> None:
    """Fiscal week containing DATE (YYYY-MM-DD)."""
    with _user_errors():
        d = to_date(date)
        week_id = week_from_date(d)
        overflow = is_overflow_date(d)

    click.echo(json.dumps({
        "date": d.isoformat(),
        "week": week_id.week,
        "year": week_id.year,
        "token": week_id.token,
        "overflow": overflow,
    }, indent=2))


@main.command("current-week")
@click.pass_obj
def current_week_cmd(settings: Settings) -> None:
    """Fiscal week of today in the configured time zone."""
    with _user_errors():
        clock = SystemClock(settings.calendar.tzinfo())
        today = clock.today()
        week_id = current_week(today=today)

    click.echo(json.dumps({
        "date": today.isoformat(),
        "week": week_id.week,
        "year": week_id.year,
        "token": week_id.token,
    }, indent=2))


@main.command("month-key")
@click.argument("start")
@click.argument("end")
def month_key(start: str, end: str) -> None:
    """Month a START..END week range is reported under."""
    with _user_errors():
        key = week_to_month_key(start, end)
        counts = month_day_counts(start, end)

    click.echo(json.dumps({
        "month": str(key),
        "days": {str(k): n for k, n in counts.items()},
    }, indent=2))


@main.command()
@click.argument("file", type=click.File("r"))
@click.option("--month", default=None, help="Month period (YYYY-MM)")
@click.option("--week-start", default=None, help="Week range start (YYYY-WXX)")
@click.option("--week-end", default=None, help="Week range end (YYYY-WXX)")
@click.option(
    "--format", "fmt",
    type=click.Choice([f.value for f in ExportFormat]),
    default=ExportFormat.JSON.value,
    help="Output format",
)
@click.option("--approved-only", is_flag=True, help="Only count approved reports")
@click.pass_obj
def rollup(
    settings: Settings,
    file,
    month: str | None,
    week_start: str | None,
    week_end: str | None,
    fmt: str,
    approved_only: bool,
) -> None:
    """Monthly rollup of weekly KPI reports stored as a JSON list in FILE."""
    from .reporting.export import RollupExporter
    from .reporting.rollup import MonthlyRollup, load_reports

    try:
        rows = json.load(file)
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"Invalid JSON in {file.name}: {exc}") from exc
    if not isinstance(rows, list):
        raise click.ClickException("Expected a JSON list of weekly reports")

    cfg = settings.reporting
    if approved_only:
        cfg = cfg.model_copy(update={"approved_only": True})

    with _user_errors():
        period = None
        if month or week_start or week_end:
            period = parse_period(month=month, week_start=week_start, week_end=week_end)
        agg = MonthlyRollup(cfg)
        agg.add_reports(load_reports(rows))
        summary = agg.report(period)

    exporter = RollupExporter()
    if fmt == ExportFormat.CSV.value:
        click.echo(exporter.to_csv(summary["buckets"]), nl=False)
    else:
        click.echo(exporter.to_json(summary))


if __name__ == "__main__":
    main()
