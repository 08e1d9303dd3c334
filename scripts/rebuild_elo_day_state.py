#!/usr/bin/env python3
"""Rebuild start-of-day Elo snapshots into the elo_day_state table."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory, ensure_schema
from domain.pipeline import rebuild_day_states
from domain.ratings.elo.config import load_elo_system_configs

DEFAULT_CONFIG_DIR = ROOT_DIR / "configs" / "elo"

app = typer.Typer(
    add_completion=False,
    help="Rebuild elo_day_state snapshots.",
)


@app.command()
def rebuild(
    system_name: Annotated[
        str,
        typer.Option("--system-name", help="Elo system name from the config directory."),
    ] = "padel_elo_default",
    db_url: Annotated[str, typer.Option("--db-url")] = DEFAULT_DB_URL,
    config_dir: Annotated[Path, typer.Option("--config-dir")] = DEFAULT_CONFIG_DIR,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Compute snapshots without writing them."),
    ] = False,
) -> None:
    """Replay every set day by day and store each player's rating at the start of the day."""
    configs = {config.name: config for config in load_elo_system_configs(config_dir)}
    if system_name not in configs:
        raise typer.BadParameter(
            f"Unknown system '{system_name}'. Available: {', '.join(sorted(configs))}",
            param_hint="--system-name",
        )

    engine = create_db_engine(db_url)
    ensure_schema(engine)
    rebuild_day_states(
        session_factory=create_session_factory(engine),
        system_config=configs[system_name],
        dry_run=dry_run,
        echo=typer.echo,
    )


if __name__ == "__main__":
    app()
