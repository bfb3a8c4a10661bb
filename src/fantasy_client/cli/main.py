"""CLI commands for querying the fantasy sports API."""

import json
import logging
import sys
from collections.abc import Callable
from typing import Any

import click
import httpx
import structlog
from pydantic import BaseModel, ValidationError

from fantasy_client import __version__
from fantasy_client.client import FantasyClient
from fantasy_client.errors import FantasyClientError
from fantasy_client.factory import client_from_settings
from fantasy_client.observability.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
)
from fantasy_client.observability.metrics import ClientMetrics
from fantasy_client.settings.app import AppSettings


logger = structlog.get_logger()


def _build_client() -> FantasyClient:
    settings = AppSettings()
    client = client_from_settings(settings)
    bind_request_context(settings.consumer_key or "")
    return client


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, dict):
        return {str(key): _to_jsonable(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_to_jsonable(item) for item in value]
    return value


def _run(ctx: click.Context, call: Callable[[FantasyClient], Any]) -> None:
    """Execute a client call and print its result as JSON.

    Library failures are reported on stderr with exit status 1.
    """
    factory: Callable[[], FantasyClient] = ctx.obj["client_factory"]
    try:
        with factory() as client:
            result = call(client)
    except (FantasyClientError, httpx.HTTPError, ValidationError, ValueError) as e:
        logger.error("command_failed", error=str(e), error_type=type(e).__name__)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    finally:
        clear_request_context()

    click.echo(json.dumps(_to_jsonable(result), indent=2, sort_keys=True))
    metrics = ClientMetrics.get_instance()
    logger.info(
        "command_complete",
        requests=client.request_count,
        cache_hit_ratio=metrics.cache_hit_ratio,
        **metrics.to_dict(),
    )


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--json-logs/--no-json-logs",
    default=False,
    help="Use JSON format for logs on stderr (default: false).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging.",
)
@click.pass_context
def cli(ctx: click.Context, json_logs: bool, verbose: bool) -> None:
    """Query leagues, teams and players from the fantasy sports API.

    Credentials are read from FANTASY_CONSUMER_KEY, FANTASY_CONSUMER_SECRET,
    FANTASY_ACCESS_TOKEN and FANTASY_ACCESS_TOKEN_SECRET (or a .env file).
    """
    configure_logging(
        level=logging.DEBUG if verbose else logging.WARNING,
        json_format=json_logs,
    )
    ctx.ensure_object(dict)
    ctx.obj.setdefault("client_factory", _build_client)


@cli.command()
@click.argument("year")
@click.pass_context
def leagues(ctx: click.Context, year: str) -> None:
    """List the current user's leagues for a season (e.g. 2013, or nfl)."""
    _run(ctx, lambda client: client.get_user_leagues(year))


@cli.command()
@click.argument("team_key")
@click.pass_context
def team(ctx: click.Context, team_key: str) -> None:
    """Show a single team."""
    _run(ctx, lambda client: client.get_team(team_key))


@cli.command()
@click.argument("league_key")
@click.pass_context
def standings(ctx: click.Context, league_key: str) -> None:
    """Show league standings."""
    _run(ctx, lambda client: client.get_league_standings(league_key).standings)


@cli.command()
@click.argument("team_key")
@click.argument("week", type=click.IntRange(min=1))
@click.pass_context
def roster(ctx: click.Context, team_key: str, week: int) -> None:
    """Show a team's roster for a week."""
    _run(ctx, lambda client: client.get_team_roster(team_key, week))


@cli.command()
@click.argument("league_key")
@click.argument("start", type=click.IntRange(min=1))
@click.argument("end", type=click.IntRange(min=1))
@click.pass_context
def matchups(ctx: click.Context, league_key: str, start: int, end: int) -> None:
    """Show scoreboard matchups for weeks START through END."""
    _run(
        ctx,
        lambda client: client.get_matchups_for_week_range(league_key, start, end),
    )


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
