from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from aviation import settings
from aviation.models.locations import Location, Network
from aviation.timeutils import add_minutes, minutes_between, naive

LegKind = Literal["customer", "empty"]
TripType = Literal["taken", "pickup", "multileg"]
AssetKind = Literal["plane", "helicopter"]


class AssetProfile(BaseModel):
    """Performance characteristics of the asset being booked."""

    model_config = ConfigDict(frozen=True)

    name: str = Field("", description="Asset display name")
    kind: AssetKind = Field("plane", description="'plane' or 'helicopter'")
    cruise_speed: Optional[float] = Field(None, description="Cruise speed in knots")
    turnaround_minutes: Optional[int] = Field(
        None, description="Minimum ground time between landing and next departure"
    )
    home_base_code: Optional[str] = Field(
        None, description="ICAO/IATA code of the home airport or heliport"
    )

    @property
    def effective_cruise_speed(self) -> float:
        if self.cruise_speed is None:
            return settings.DEFAULT_CRUISE_SPEED
        return self.cruise_speed

    @property
    def effective_turnaround_minutes(self) -> int:
        return self.turnaround_minutes or settings.DEFAULT_TURNAROUND_MINUTES

    @property
    def network(self) -> Network:
        return "heliport" if self.kind == "helicopter" else "airport"


class LegRecord(BaseModel):
    """Serialized form of a leg handed to the persistence collaborator."""

    kind: LegKind
    departure: Optional[str] = Field(None, description="Departure code")
    arrival: Optional[str] = Field(None, description="Arrival code")
    departure_time: str = Field(description="ISO 8601 departure timestamp")
    arrival_time: str = Field(description="ISO 8601 arrival timestamp")
    distance_nm: Optional[int] = None
    flight_minutes: Optional[int] = Field(
        None, description="Block time in minutes, including any taxi buffer"
    )


class FlightLeg(BaseModel):
    """One takeoff-to-landing segment of an itinerary."""

    kind: LegKind = "customer"
    departure: Optional[Location] = None
    arrival: Optional[Location] = None
    departure_time: datetime
    arrival_time: datetime
    flight_minutes: Optional[int] = Field(
        None, description="Flight duration, None when geometry is unknown"
    )
    distance_nm: Optional[int] = Field(
        None, description="Great-circle distance, None when geometry is unknown"
    )

    @field_validator("departure_time", "arrival_time")
    @classmethod
    def drop_offset(cls, value: datetime) -> datetime:
        return naive(value)

    @property
    def elapsed_minutes(self) -> int:
        return self.flight_minutes or 0

    @property
    def has_endpoints(self) -> bool:
        return self.departure is not None and self.arrival is not None

    @property
    def has_coordinates(self) -> bool:
        return (
            self.has_endpoints
            and self.departure.has_coordinates
            and self.arrival.has_coordinates
        )

    @property
    def is_complete(self) -> bool:
        return (
            self.has_coordinates
            and self.distance_nm is not None
            and self.flight_minutes is not None
        )

    def retime(self, departure_time: datetime) -> None:
        """Move the departure and keep the arrival consistent with the duration."""
        self.departure_time = departure_time
        self.arrival_time = add_minutes(departure_time, self.elapsed_minutes)

    def to_record(self) -> LegRecord:
        return LegRecord(
            kind=self.kind,
            departure=self.departure.code if self.departure else None,
            arrival=self.arrival.code if self.arrival else None,
            departure_time=self.departure_time.isoformat(),
            arrival_time=self.arrival_time.isoformat(),
            distance_nm=self.distance_nm,
            flight_minutes=self.flight_minutes,
        )


class Itinerary(BaseModel):
    """Ordered legs of one trip."""

    trip_type: TripType
    legs: list[FlightLeg] = Field(default_factory=list)

    @property
    def total_distance_nm(self) -> int:
        return sum(leg.distance_nm or 0 for leg in self.legs)

    @property
    def total_flight_minutes(self) -> int:
        return sum(leg.elapsed_minutes for leg in self.legs)

    @property
    def start_time(self) -> Optional[datetime]:
        return self.legs[0].departure_time if self.legs else None

    @property
    def end_time(self) -> Optional[datetime]:
        return self.legs[-1].arrival_time if self.legs else None

    @property
    def total_elapsed_minutes(self) -> int:
        """Minutes from the first departure to the last arrival."""
        if not self.legs:
            return 0
        return minutes_between(self.start_time, self.end_time)

    def to_records(self) -> list[LegRecord]:
        return [leg.to_record() for leg in self.legs]
