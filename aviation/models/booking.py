from typing import Literal, Optional

from pydantic import BaseModel, Field

from aviation.models.itinerary import LegRecord, TripType


class Passenger(BaseModel):
    """Manifest entry required by the civil aviation authority."""

    full_name: str = Field(description="Passenger full name")
    id_type: Literal["cedula", "passport"] = Field(
        "cedula", description="Identity document type"
    )
    id_number: str = Field("", description="Identity document number")
    weight_kg: float = Field(0, ge=0, description="Passenger weight in kilograms")


class BookingMetadata(BaseModel):
    """Itinerary details stored with the booking.

    Leg durations are block times: a pickup positioning leg includes the taxi
    buffer, so its minutes and the total exceed pure airborne time.
    """

    trip_type: TripType
    legs: list[LegRecord] = Field(default_factory=list)
    total_distance_nm: int = 0
    total_flight_minutes: int = Field(0, description="Sum of leg block times")
    passengers: list[Passenger] = Field(default_factory=list)
    total_passenger_weight_kg: float = 0


class BookingSubmission(BaseModel):
    """Payload handed to the booking persistence collaborator."""

    title: str
    trip_type: TripType
    departure_code: Optional[str] = None
    arrival_code: Optional[str] = None
    start_datetime: str = Field(description="ISO 8601 first departure")
    end_datetime: str = Field(description="ISO 8601 last arrival")
    notes: str = ""
    metadata: BookingMetadata
