from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping

# Common names for NexTrip route IDs.
ROUTE_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "BLUE": "901",
        "GREEN": "902",
        "RED": "903",
        "ORANGE": "904",
        "GOLD": "905",
        "A": "921",
        "B": "922",
        "C": "923",
        "D": "924",
        "E": "923",
        "F": "923",
    }
)


class Direction(str, Enum):
    """NexTrip direction IDs. Every route has exactly two."""

    NORTHBOUND = "0"  # also eastbound
    SOUTHBOUND = "1"  # also westbound


def resolve_route(name: str) -> str:
    """Map an alias like ``blue`` to its route ID, or pass a raw ID through."""
    return ROUTE_ALIASES.get(name.upper(), name)


def parse_direction(text: str) -> Direction:
    if text.strip().lower() in ("north", "east"):
        return Direction.NORTHBOUND
    return Direction.SOUTHBOUND
