from __future__ import annotations

import re
from types import MappingProxyType
from typing import Callable, Dict, Mapping

from .errors import UnknownFormat
from .models import Departure

# Default response formats, verbose to terse.
FORMATS: Mapping[int, str] = MappingProxyType(
    {
        0: "There's a %DIR %NAME %TYPE coming to %STOP %TIME.",
        1: "%DIR %NAME %TYPE at %STOP %TIME.",
        2: "%SHORT_DIR %COLOR %TYPE: %SHORT_STOP %TIME.",
        3: "%COLOR %SHORT_DIR @ %SHORT_STOP %TIME",
    }
)

# Circle emojis for the lines that have a color.
COLORS: Mapping[str, str] = MappingProxyType(
    {
        "gold": "🟡",
        "orange": "🟠",
        "red": "🔴",
        "green": "🟢",
        "blue": "🔵",
    }
)

DIRECTION_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "NB": "northbound",
        "SB": "southbound",
        "EB": "eastbound",
        "WB": "westbound",
    }
)

TRAIN_LINES = frozenset({"blue", "green"})

_TOKEN_RE = re.compile(
    r"%(SHORT_STOP|SHORT_DIR|COLOR|NAME|STOP|TIME|TYPE|DIR)", re.IGNORECASE
)


def _vehicle_type(d: Departure) -> str:
    return "Train" if d.name.lower() in TRAIN_LINES else "Bus"


def _time(d: Departure) -> str:
    # NexTrip mixes countdowns ("5 Min") with clock times ("12:34")
    if "Min" in d.departure_text:
        return "in " + d.departure_text
    return "at " + d.departure_text


_VARIABLES: Dict[str, Callable[[Departure], str]] = {
    "name": lambda d: d.name,
    "short_stop": lambda d: d.short_stop_name,
    "short_dir": lambda d: d.direction,
    "type": _vehicle_type,
    "stop": lambda d: d.stop_name.lower(),
    "color": lambda d: COLORS.get(d.name.lower(), "N/A"),
    "time": _time,
    "dir": lambda d: DIRECTION_NAMES.get(d.direction, ""),
}


def is_valid_format(format_id: int) -> bool:
    return format_id in FORMATS


def render(format_id: int, departure: Departure) -> str:
    """Render a departure using one of the FORMATS templates.

    Args:
        format_id: Key into FORMATS.
        departure: The departure to describe.

    Returns:
        The template with every placeholder substituted.

    Raises:
        UnknownFormat: if format_id is not a known template.
    """
    template = FORMATS.get(format_id)
    if template is None:
        raise UnknownFormat(format_id)

    values: Dict[str, str] = {}

    def _substitute(match: re.Match) -> str:
        key = match.group(1).lower()
        if key not in values:
            values[key] = _VARIABLES[key](departure)
        return values[key]

    return _TOKEN_RE.sub(_substitute, template)
