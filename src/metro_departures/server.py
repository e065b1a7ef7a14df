from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, Response, request

from .config import Settings
from .departures import MAX_DEPARTURES, fetch_next
from .errors import InvalidInput, NoDeparturesFound, UnknownFormat, UpstreamFailure
from .formatting import is_valid_format, render
from .routes import parse_direction, resolve_route

log = logging.getLogger(__name__)

USAGE = "Usage: /{name}/{stop}/{north|south|east|west}"


def _text(body: str, status: int = 200) -> Response:
    return Response(body, status=status, mimetype="text/plain")


def _int_arg(name: str) -> Optional[int]:
    try:
        return int(request.args.get(name, ""))
    except ValueError:
        return None


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app serving ``GET /{name}/{stop}/{direction}``.

    Query parameters:
        format: template ID, falls back to settings.default_format.
        amount: number of departures (1-3), falls back to settings.default_amount.
    """
    settings = settings or Settings()
    app = Flask(__name__)
    app.config["SETTINGS"] = settings

    @app.errorhandler(NoDeparturesFound)
    def _no_departures(e: NoDeparturesFound):
        log.info("%s", e)
        return _text("No upcoming departures.\n")

    @app.errorhandler(UpstreamFailure)
    def _upstream(e: UpstreamFailure):
        log.warning("NexTrip lookup failed: %s", e)
        return _text("There was an issue. Please double check the name and direction.\n", 500)

    @app.errorhandler(InvalidInput)
    def _invalid(e: InvalidInput):
        return _text(f"{e}\n", 400)

    @app.errorhandler(UnknownFormat)
    def _format(e: UnknownFormat):
        log.error("%s", e)
        return _text("There was an issue with your format.\n", 500)

    @app.route("/", defaults={"path": ""})
    @app.route("/<path:path>")
    def departures(path: str):
        parts = path.strip("/").split("/")
        if len(parts) != 3 or not all(parts):
            return _text(USAGE + "\n", 400)
        name, stop, direction_str = parts

        format_id = _int_arg("format")
        if format_id is None or not is_valid_format(format_id):
            format_id = settings.default_format

        amount = _int_arg("amount")
        if amount is None or amount < 1 or amount > MAX_DEPARTURES:
            amount = settings.default_amount

        found = fetch_next(
            resolve_route(name),
            parse_direction(direction_str),
            stop,
            amount,
            base_url=settings.nextrip_url,
            timeout=settings.request_timeout_seconds,
        )
        return _text("".join(render(format_id, d) + "\n" for d in found))

    return app
