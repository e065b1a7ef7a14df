from __future__ import annotations

import requests

from . import __version__


def create_session(user_agent: str | None = None) -> requests.Session:
    """Create a requests session that asks NexTrip for JSON.

    No retry adapter is mounted: a failed call surfaces immediately and the
    caller decides what to tell the user.

    Args:
        user_agent: Custom User-Agent header value.

    Returns:
        Configured requests Session.
    """
    session = requests.Session()
    session.headers.update(
        {
            "User-Agent": user_agent
            or f"MetroDepartures/{__version__} (+https://example.com/metro-departures)",
            "Accept": "application/json",
        }
    )
    return session
