#!/usr/bin/env python3
"""Show one player's Elo after every set they played."""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory
from domain.ratings.elo.config import load_elo_system_configs
from domain.ratings.history import player_rating_history
from domain.ratings.seasons import lunar_row
from repositories.match_sets import fetch_lunar_bonuses, fetch_match_sets, fetch_start_ratings

DEFAULT_CONFIG_DIR = ROOT_DIR / "configs" / "elo"

app = typer.Typer(
    add_completion=False,
    help="Per-player Elo history.",
)


@app.command()
def show_player_history(
    player: Annotated[str, typer.Argument(help="Player display name.")],
    system_name: Annotated[str, typer.Option("--system-name")] = "padel_elo_default",
    lunar: Annotated[
        bool,
        typer.Option("--lunar", help="Also print the Lunar season monthly averages."),
    ] = False,
    db_url: Annotated[str, typer.Option("--db-url")] = DEFAULT_DB_URL,
    config_dir: Annotated[Path, typer.Option("--config-dir")] = DEFAULT_CONFIG_DIR,
) -> None:
    """Print the rating time series for one player."""
    configs = {config.name: config for config in load_elo_system_configs(config_dir)}
    if system_name not in configs:
        raise typer.BadParameter(f"Unknown system '{system_name}'", param_hint="--system-name")
    params = configs[system_name].parameters

    session_factory = create_session_factory(create_db_engine(db_url))
    with session_factory() as session:
        match_sets = fetch_match_sets(session)
        start_ratings = fetch_start_ratings(session)
        bonuses = fetch_lunar_bonuses(session)

    history = player_rating_history(player, match_sets, start_ratings, params)
    if not history:
        typer.echo(f"No sets found for '{player}'.")
        return

    for point in history:
        typer.echo(f"{point.date.isoformat()} set={point.set_id:<6d} elo={point.rating:8.1f}")

    if lunar:
        row = lunar_row(
            player,
            match_sets,
            start_ratings,
            params,
            reference=date.today(),
            bonus=bonuses.get(player, 0.0),
        )
        for month in row.months:
            average = "-" if month.average_rating is None else f"{month.average_rating:.1f}"
            typer.echo(f"{month.label} {month.year} weight={month.weight:.0f} avg={average}")
        typer.echo(
            f"weighted_average={row.weighted_average:.1f} bonus={row.bonus:.1f} "
            f"thursdays={row.thursday_count} thursday_points={row.thursday_points:.0f} "
            f"total={row.total:.1f}"
        )


if __name__ == "__main__":
    app()
