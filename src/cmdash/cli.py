"""Typer CLI for cmdash."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer
from pydantic import BaseModel
from result import Err, Result

from cmdash.config import Config
from cmdash.models.timeframe import CustomRange, DashboardQuery, TimeFrame

app = typer.Typer(
    name="cmdash",
    help="Copilot metrics dashboard: aggregate usage telemetry over a time frame.",
    no_args_is_help=True,
)

TimeFrameOption = Annotated[
    str,
    typer.Option("--time-frame", "-t", help="yesterday, this_week, last_week, last_7_days, ..."),
]
SinceOption = Annotated[
    datetime | None,
    typer.Option("--since", formats=["%Y-%m-%d"], help="Custom range start (with --until)"),
]
UntilOption = Annotated[
    datetime | None,
    typer.Option("--until", formats=["%Y-%m-%d"], help="Custom range end (with --since)"),
]
OrgOption = Annotated[str, typer.Option("--org", help="Organization login")]
EnterpriseOption = Annotated[str, typer.Option("--enterprise", help="Enterprise slug")]
InputOption = Annotated[
    Path | None,
    typer.Option("--input", "-i", exists=True, dir_okay=False, help="Read records from a JSON file"),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def summary(
    time_frame: TimeFrameOption = TimeFrame.LAST_28_DAYS.value,
    since: SinceOption = None,
    until: UntilOption = None,
    org: OrgOption = "",
    enterprise: EnterpriseOption = "",
    input_path: InputOption = None,
) -> None:
    """Print aggregated metrics (max users, editors, top languages) as JSON."""
    query = _build_query(time_frame, since, until, org, enterprise)
    _emit(asyncio.run(_run("summary", Config.from_env(), query, input_path)))


@app.command()
def usage(
    time_frame: TimeFrameOption = TimeFrame.LAST_28_DAYS.value,
    since: SinceOption = None,
    until: UntilOption = None,
    org: OrgOption = "",
    enterprise: EnterpriseOption = "",
    input_path: InputOption = None,
) -> None:
    """Print suggestion and acceptance totals as JSON."""
    query = _build_query(time_frame, since, until, org, enterprise)
    _emit(asyncio.run(_run("usage", Config.from_env(), query, input_path)))


@app.command()
def orgs() -> None:
    """List organizations visible to GITHUB_TOKEN."""
    result = asyncio.run(_run("orgs", Config.from_env(), DashboardQuery(), None))
    if isinstance(result, Err):
        _emit(result)
        return
    for org in result.ok_value:
        typer.echo(f"{org.login}\t{org.name}")


def _build_query(
    time_frame: str,
    since: datetime | None,
    until: datetime | None,
    org: str,
    enterprise: str,
) -> DashboardQuery:
    frame = TimeFrame.parse(time_frame)
    custom = None
    if since is not None or until is not None:
        frame = TimeFrame.CUSTOM
        custom = CustomRange(
            start=since.date() if since else None,
            end=until.date() if until else None,
        )
    return DashboardQuery(time_frame=frame, custom=custom, org=org, enterprise=enterprise)


async def _run(
    command: str, config: Config, query: DashboardQuery, input_path: Path | None
) -> Result[object, str]:
    """Run one service call inside a freshly wired container."""
    from cmdash.data.loader import FileMetricsSource
    from cmdash.services.container import ServiceContainer

    source = FileMetricsSource(input_path) if input_path else None
    if source is not None and not (query.org or query.enterprise or config.org):
        query = query.model_copy(update={"org": input_path.stem})  # type: ignore[union-attr]

    container = ServiceContainer.create(config, source)
    try:
        service = container.metrics_service
        match command:
            case "usage":
                return await service.get_usage(query)
            case "orgs":
                return await service.list_organizations()
            case _:
                return await service.get_summary(query)
    finally:
        await container.close()


def _emit(result: Result[object, str]) -> None:
    if isinstance(result, Err):
        typer.echo(result.err_value, err=True)
        raise typer.Exit(code=1)
    value = result.ok_value
    if isinstance(value, BaseModel):
        typer.echo(value.model_dump_json(indent=2))
    else:
        typer.echo(value)
