from __future__ import annotations

from typing import Any, List
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Departure(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    stop_name: str
    short_stop_name: str
    direction: str
    departure_text: str
    scheduled_time: str = ""


# NexTrip wire format. Kept apart from Departure so upstream schema
# changes stop at the fetcher.


class NexTripStop(BaseModel):
    description: str = ""

    @field_validator("description", mode="before")
    @classmethod
    def _null_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class NexTripDeparture(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    route_id: str = ""
    route_short_name: str = ""
    direction_text: str = ""
    departure_text: str = ""
    departure_time: int = 0  # unix epoch seconds
    description: str = ""

    # NexTrip sends null for fields it has no value for
    @field_validator(
        "route_id", "route_short_name", "direction_text", "departure_text", "description", mode="before"
    )
    @classmethod
    def _null_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("departure_time", mode="before")
    @classmethod
    def _null_to_zero(cls, v: Any) -> Any:
        return 0 if v is None else v


class NexTripPayload(BaseModel):
    stops: List[NexTripStop] = Field(default_factory=list)
    departures: List[NexTripDeparture] = Field(default_factory=list)

    @field_validator("stops", "departures", mode="before")
    @classmethod
    def _null_to_list(cls, v: Any) -> Any:
        return [] if v is None else v
