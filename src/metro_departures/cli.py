from __future__ import annotations

import json
import logging
from pathlib import Path

import typer

from .config import Settings, load_settings
from .departures import fetch_next
from .errors import InvalidInput, NoDeparturesFound, UpstreamFailure
from .formatting import FORMATS, is_valid_format, render
from .routes import ROUTE_ALIASES, parse_direction, resolve_route
from .server import create_app

app = typer.Typer(help="Next Metro Transit departures as plain text.")


def _setup(config_file: Path | None) -> Settings:
    settings = load_settings(config_file)
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return settings


@app.command()
def serve(
    config_file: Path = typer.Option(None, help="Path to YAML config file"),
    host: str = typer.Option(None, help="Override listen host"),
    port: int = typer.Option(None, help="Override listen port"),
):
    """Run the plaintext HTTP server."""
    settings = _setup(config_file)
    host = host or settings.host
    port = port or settings.port
    logging.getLogger(__name__).info("Server running at http://%s:%d", host, port)
    create_app(settings).run(host=host, port=port)


@app.command("next")
def next_departures(
    name: str = typer.Argument(..., help="Route alias (BLUE, A, ...) or NexTrip route ID"),
    stop: str = typer.Argument(..., help="Stop code, e.g. TF2"),
    direction: str = typer.Argument(..., help="north, south, east or west"),
    format_id: int = typer.Option(None, "--format", help="Format ID, see `formats`"),
    amount: int = typer.Option(None, help="Number of departures (1-3)"),
    config_file: Path = typer.Option(None, help="Path to YAML config file"),
):
    """Fetch the next departures and print them like the server would."""
    settings = _setup(config_file)
    if format_id is None:
        format_id = settings.default_format
    if not is_valid_format(format_id):
        raise typer.BadParameter(f"unknown format {format_id}", param_hint="--format")

    try:
        found = fetch_next(
            resolve_route(name),
            parse_direction(direction),
            stop,
            amount if amount is not None else settings.default_amount,
            base_url=settings.nextrip_url,
            timeout=settings.request_timeout_seconds,
        )
    except NoDeparturesFound:
        typer.echo("No upcoming departures.")
        return
    except InvalidInput as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)
    except UpstreamFailure as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    for d in found:
        typer.echo(render(format_id, d))


@app.command()
def formats():
    """List the available output formats."""
    for format_id, template in FORMATS.items():
        typer.echo(f"{format_id}: {template}")


@app.command()
def routes():
    """List the route aliases."""
    for alias, route_id in ROUTE_ALIASES.items():
        typer.echo(f"{alias} -> {route_id}")


@app.command()
def show_config(config_file: Path = typer.Option(None, help="Path to YAML config file")):
    """Print the effective configuration (YAML + env overrides)."""
    settings = load_settings(config_file)
    typer.echo(json.dumps(settings.model_dump(), indent=2))


if __name__ == "__main__":
    app()
