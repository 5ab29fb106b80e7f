from datetime import date, datetime, time
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from aviation.timeutils import combine


class TakenIntent(BaseModel):
    """Traveler departs from an origin at a set time; asset flies home afterwards."""

    trip_type: Literal["taken"] = "taken"
    origin_code: str = Field(description="Departure location code")
    destination_code: str = Field(description="Destination location code")
    departure_date: date
    departure_time: time

    @property
    def requested_at(self) -> datetime:
        return combine(self.departure_date, self.departure_time)


class PickupIntent(BaseModel):
    """Asset must be at the pickup point by a set time, then carries the traveler on."""

    trip_type: Literal["pickup"] = "pickup"
    pickup_code: str = Field(description="Pickup location code")
    destination_code: str = Field(description="Destination location code")
    pickup_date: date
    pickup_time: time

    @property
    def requested_at(self) -> datetime:
        return combine(self.pickup_date, self.pickup_time)


class MultiLegStop(BaseModel):
    departure_code: str
    arrival_code: str
    departure_date: date
    departure_time: time

    @property
    def departs_at(self) -> datetime:
        return combine(self.departure_date, self.departure_time)


class MultiLegIntent(BaseModel):
    """Explicit sequence of customer legs; no repositioning legs are added."""

    trip_type: Literal["multileg"] = "multileg"
    legs: list[MultiLegStop] = Field(default_factory=list)

    @property
    def requested_at(self) -> datetime | None:
        return self.legs[0].departs_at if self.legs else None


TripIntent = Annotated[
    Union[TakenIntent, PickupIntent, MultiLegIntent],
    Field(discriminator="trip_type"),
]
