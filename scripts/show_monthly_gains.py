#!/usr/bin/env python3
"""Show each player's net Elo change for one calendar month."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory
from domain.ratings.elo.config import load_elo_system_configs
from domain.ratings.periods import DEFAULT_TIMEZONE, current_month, month_bounds, monthly_gains
from repositories.match_sets import fetch_match_sets, fetch_start_ratings

DEFAULT_CONFIG_DIR = ROOT_DIR / "configs" / "elo"

app = typer.Typer(
    add_completion=False,
    help="Monthly Elo gains.",
)


@app.command()
def show_monthly_gains(
    year: Annotated[int | None, typer.Option("--year")] = None,
    month: Annotated[int | None, typer.Option("--month", min=1, max=12)] = None,
    timezone: Annotated[
        str,
        typer.Option("--timezone", help="Timezone used to pick the current month."),
    ] = DEFAULT_TIMEZONE,
    system_name: Annotated[str, typer.Option("--system-name")] = "padel_elo_default",
    top_n: Annotated[int, typer.Option("--top-n")] = 10,
    db_url: Annotated[str, typer.Option("--db-url")] = DEFAULT_DB_URL,
    config_dir: Annotated[Path, typer.Option("--config-dir")] = DEFAULT_CONFIG_DIR,
) -> None:
    """Print the biggest Elo gainers for a month (defaults to the current month)."""
    if (year is None) != (month is None):
        raise typer.BadParameter("--year and --month must be given together")
    if year is None or month is None:
        year, month = current_month(timezone)

    configs = {config.name: config for config in load_elo_system_configs(config_dir)}
    if system_name not in configs:
        raise typer.BadParameter(f"Unknown system '{system_name}'", param_hint="--system-name")

    _, end_exclusive = month_bounds(year, month)
    session_factory = create_session_factory(create_db_engine(db_url))
    with session_factory() as session:
        match_sets = fetch_match_sets(session, end_exclusive=end_exclusive)
        start_ratings = fetch_start_ratings(session)

    gains = monthly_gains(match_sets, start_ratings, year, month, configs[system_name].parameters)
    if not gains:
        typer.echo(f"No sets played in {year}-{month:02d}.")
        return

    typer.echo(f"month={year}-{month:02d} system={system_name}")
    for index, gain in enumerate(gains[:top_n], start=1):
        typer.echo(f"{index:2d}. {gain.player:<24} {gain.gain:+7.1f} sets={gain.sets_played:3d}")


if __name__ == "__main__":
    app()
