#!/usr/bin/env python3
"""Show the current padel Elo leaderboard, replayed from stored sets."""

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
from domain.ratings.leaderboard import build_leaderboard, most_active_players
from domain.ratings.seasons import lunar_standings
from repositories.match_sets import (
    fetch_lunar_bonuses,
    fetch_match_sets,
    fetch_player_profiles,
    fetch_start_ratings,
)

DEFAULT_CONFIG_DIR = ROOT_DIR / "configs" / "elo"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Leaderboard views.",
)


@app.command("top")
def show_top(
    system_name: Annotated[str, typer.Option("--system-name")] = "padel_elo_default",
    top_n: Annotated[int, typer.Option("--top-n", help="Number of players to return.")] = 20,
    active_only: Annotated[
        bool,
        typer.Option("--active-only", help="Only list players whose profile is active."),
    ] = False,
    known_players_only: Annotated[
        bool,
        typer.Option(
            "--known-players-only",
            help="Skip sets that include a player without a profile.",
        ),
    ] = False,
    db_url: Annotated[str, typer.Option("--db-url")] = DEFAULT_DB_URL,
    config_dir: Annotated[Path, typer.Option("--config-dir")] = DEFAULT_CONFIG_DIR,
) -> None:
    """Print top players by replayed Elo."""
    if top_n <= 0:
        raise typer.BadParameter("--top-n must be greater than 0")

    configs = {config.name: config for config in load_elo_system_configs(config_dir)}
    if system_name not in configs:
        raise typer.BadParameter(f"Unknown system '{system_name}'", param_hint="--system-name")

    session_factory = create_session_factory(create_db_engine(db_url))
    with session_factory() as session:
        match_sets = fetch_match_sets(session)
        profiles = fetch_player_profiles(session)

    entries = build_leaderboard(
        match_sets,
        profiles,
        configs[system_name].parameters,
        active_only=active_only,
        known_players_only=known_players_only,
    )
    if not entries:
        typer.echo("No players found.")
        return

    typer.echo(f"system={system_name} top_n={top_n} sets={len(match_sets)}")
    for entry in entries[:top_n]:
        typer.echo(
            f"{entry.rank:2d}. {entry.player:<24} "
            f"elo={entry.rating:8.1f} sets={entry.sets_played:4d}"
        )


@app.command("active")
def show_most_active(
    since: Annotated[
        str | None,
        typer.Option("--since", help="Only count sets on or after this date (YYYY-MM-DD)."),
    ] = None,
    limit: Annotated[int, typer.Option("--limit")] = 20,
    db_url: Annotated[str, typer.Option("--db-url")] = DEFAULT_DB_URL,
) -> None:
    """Print players with the most sets played."""
    if limit <= 0:
        raise typer.BadParameter("--limit must be greater than 0")
    try:
        since_date = date.fromisoformat(since) if since else None
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--since") from exc

    session_factory = create_session_factory(create_db_engine(db_url))
    with session_factory() as session:
        match_sets = fetch_match_sets(session, start=since_date)

    for index, entry in enumerate(most_active_players(match_sets, since=since_date, limit=limit), start=1):
        typer.echo(f"{index:2d}. {entry.player:<24} sets={entry.sets_played:4d}")


@app.command("lunar")
def show_lunar(
    system_name: Annotated[str, typer.Option("--system-name")] = "padel_elo_default",
    reference: Annotated[
        str | None,
        typer.Option("--reference", help="Any date inside the season (YYYY-MM-DD). Defaults to today."),
    ] = None,
    db_url: Annotated[str, typer.Option("--db-url")] = DEFAULT_DB_URL,
    config_dir: Annotated[Path, typer.Option("--config-dir")] = DEFAULT_CONFIG_DIR,
) -> None:
    """Rank Lunar entrants by weighted Elo plus bonus and Thursday points."""
    try:
        reference_date = date.fromisoformat(reference) if reference else date.today()
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--reference") from exc

    configs = {config.name: config for config in load_elo_system_configs(config_dir)}
    if system_name not in configs:
        raise typer.BadParameter(f"Unknown system '{system_name}'", param_hint="--system-name")

    session_factory = create_session_factory(create_db_engine(db_url))
    with session_factory() as session:
        match_sets = fetch_match_sets(session)
        start_ratings = fetch_start_ratings(session)
        bonuses = fetch_lunar_bonuses(session)

    if not bonuses:
        typer.echo("No Lunar entrants.")
        return

    rows = lunar_standings(
        bonuses,
        match_sets,
        start_ratings,
        configs[system_name].parameters,
        reference=reference_date,
        bonuses=bonuses,
    )
    for rank, row in enumerate(rows, start=1):
        typer.echo(
            f"{rank:2d}. {row.player:<24} weighted={row.weighted_average:8.1f} "
            f"bonus={row.bonus:5.1f} thursdays={row.thursday_count:2d} "
            f"(+{row.thursday_points:.0f}) total={row.total:8.1f}"
        )


if __name__ == "__main__":
    app()
