from __future__ import annotations

import logging
from typing import List, Union
from datetime import datetime, timezone

import requests
from requests.utils import quote
from pydantic import ValidationError

from .errors import (
    InvalidCount,
    InvalidDirection,
    InvalidStop,
    NoDeparturesFound,
    UpstreamError,
    UpstreamUnreachable,
)
from .http import create_session
from .models import Departure, NexTripPayload
from .routes import Direction

log = logging.getLogger(__name__)

NEXTRIP_URL = "https://svc.metrotransit.org/nextrip"
DEFAULT_TIMEOUT = 7.0
MAX_DEPARTURES = 3


def _format_scheduled(epoch: int) -> str:
    local = datetime.fromtimestamp(epoch, tz=timezone.utc).astimezone()
    return local.strftime("%Y-%m-%d %H:%M %Z")


def _decode(resp: requests.Response) -> NexTripPayload:
    try:
        return NexTripPayload.model_validate(resp.json())
    except (ValueError, ValidationError) as e:
        raise UpstreamError(resp.status_code, f"failed to decode JSON response: {e}") from e


def fetch_next(
    route_id: str,
    direction: Union[Direction, str],
    stop_id: str,
    count: int,
    *,
    base_url: str = NEXTRIP_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[Departure]:
    """Find the next departures of a route at a stop.

    Args:
        route_id: NexTrip route ID, e.g. "901" for the Blue Line.
        direction: Direction.NORTHBOUND ("0") or Direction.SOUTHBOUND ("1").
        stop_id: Stop code, e.g. "TF2" for Target Field Station Platform 2.
        count: How many departures to return, between 1 and 3.
        base_url: NexTrip base URL, without the trailing route segments.
        timeout: Request timeout in seconds.

    Returns:
        Up to ``count`` upcoming departures in arrival order.

    Raises:
        InvalidStop, InvalidCount, InvalidDirection: bad arguments.
        UpstreamUnreachable: the request itself failed.
        UpstreamError: NexTrip answered with an error or an unreadable body.
        NoDeparturesFound: nothing upcoming at this stop.
    """
    if not stop_id:
        raise InvalidStop(stop_id)
    if count < 1 or count > MAX_DEPARTURES:
        raise InvalidCount(count)

    try:
        direction_id = Direction(direction).value
    except ValueError:
        raise InvalidDirection(str(direction)) from None

    # path segments come percent-decoded from the dispatcher
    segments = [quote(str(s), safe="") for s in (route_id, direction_id, stop_id)]
    url = "/".join([base_url.rstrip("/")] + segments)
    log.debug("GET %s", url)

    sess = create_session()
    try:
        resp = sess.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise UpstreamUnreachable(f"request NexTrip: {e}") from e
    finally:
        sess.close()

    if not (200 <= resp.status_code < 300):
        raise UpstreamError(resp.status_code)

    payload = _decode(resp)

    # the last listed stop carries the full name
    stop_name = payload.stops[-1].description if payload.stops else ""

    now = int(datetime.now(tz=timezone.utc).timestamp())
    short_stop = stop_id.upper()
    results: List[Departure] = []

    for item in payload.departures:
        if item.departure_time - now < 0:
            continue
        results.append(
            Departure(
                name=item.route_short_name,
                stop_name=stop_name,
                short_stop_name=short_stop,
                direction=item.direction_text,
                departure_text=item.departure_text,
                scheduled_time=_format_scheduled(item.departure_time),
            )
        )
        if len(results) == count:
            break

    log.debug("route %s stop %s: %d upcoming departures", route_id, short_stop, len(results))
    if not results:
        raise NoDeparturesFound(route_id, stop_id)

    return results
