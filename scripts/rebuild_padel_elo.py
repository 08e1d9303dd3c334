#!/usr/bin/env python3
"""Rebuild set-level player Elo history into the player_set_elo table."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory, ensure_schema
from domain.pipeline import rebuild_elo_system
from domain.ratings.elo.config import load_elo_system_configs

DEFAULT_CONFIG_DIR = ROOT_DIR / "configs" / "elo"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Padel Elo rebuild jobs.",
)


@app.command("rebuild")
def rebuild(
    db_url: Annotated[
        str,
        typer.Option(
            "--db-url",
            help="Database URL. Defaults to $PADEL_ELO_DB_URL or the local padel postgres instance.",
        ),
    ] = DEFAULT_DB_URL,
    config_dir: Annotated[
        Path,
        typer.Option("--config-dir", help="Directory of Elo system TOML files."),
    ] = DEFAULT_CONFIG_DIR,
    config_name: Annotated[
        str | None,
        typer.Option(
            "--config-name",
            help="Optional single config filename (for example: default.toml).",
        ),
    ] = None,
    batch_size: Annotated[
        int,
        typer.Option("--batch-size", help="Batch size for inserting Elo events."),
    ] = 5000,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Compute Elo without writing to player_set_elo."),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Recompute player Elo from all stored sets in chronological order."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )
    if batch_size <= 0:
        raise typer.BadParameter("--batch-size must be greater than 0")

    configs = load_elo_system_configs(config_dir)
    if config_name is not None:
        configs = [config for config in configs if config.file_path.name == config_name]
        if not configs:
            raise typer.BadParameter(
                f"No config named '{config_name}' found in {config_dir}",
                param_hint="--config-name",
            )

    engine = create_db_engine(db_url)
    ensure_schema(engine)
    session_factory = create_session_factory(engine)

    typer.echo(f"loaded_configs={len(configs)} config_dir={config_dir}")
    for config in configs:
        rebuild_elo_system(
            session_factory=session_factory,
            system_config=config,
            batch_size=batch_size,
            dry_run=dry_run,
            echo=typer.echo,
        )


@app.command("list-configs")
def list_configs(
    config_dir: Annotated[
        Path,
        typer.Option("--config-dir", help="Directory of Elo system TOML files."),
    ] = DEFAULT_CONFIG_DIR,
) -> None:
    """Print the Elo systems defined in the config directory."""
    for config in load_elo_system_configs(config_dir):
        typer.echo(f"{config.file_path.name:<24} {config.name:<28} {config.description or ''}")


if __name__ == "__main__":
    app()
