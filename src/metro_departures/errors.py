from __future__ import annotations

from typing import Optional


class MetroDeparturesError(Exception):
    """Base class for every error raised by this package."""


class InvalidInput(MetroDeparturesError):
    pass


class InvalidStop(InvalidInput):
    def __init__(self, stop_id: str = ""):
        super().__init__("invalid stop ID")
        self.stop_id = stop_id


class InvalidCount(InvalidInput):
    def __init__(self, count: int):
        super().__init__(f"invalid amount {count}, expected between 1 and 3")
        self.count = count


class InvalidDirection(InvalidInput):
    def __init__(self, direction: str):
        super().__init__(f"invalid direction {direction!r}, expected '0' or '1'")
        self.direction = direction


class UpstreamFailure(MetroDeparturesError):
    pass


class UpstreamUnreachable(UpstreamFailure):
    """The NexTrip API could not be reached (DNS, connect, timeout, ...)."""


class UpstreamError(UpstreamFailure):
    """NexTrip answered, but not with a usable payload."""

    def __init__(self, status_code: int, reason: Optional[str] = None):
        message = f"NexTrip API returned status {status_code}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class NoDeparturesFound(MetroDeparturesError):
    def __init__(self, route_id: str, stop_id: str):
        super().__init__(f"no upcoming departures for route {route_id} at stop {stop_id}")
        self.route_id = route_id
        self.stop_id = stop_id


class UnknownFormat(MetroDeparturesError):
    def __init__(self, format_id: int):
        super().__init__(f"unknown format type {format_id}")
        self.format_id = format_id
