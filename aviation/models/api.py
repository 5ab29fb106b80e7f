from typing import Any, Optional

from pydantic import BaseModel, Field

from aviation.editor import EditCommand
from aviation.models.booking import BookingSubmission, Passenger
from aviation.models.intent import TripIntent
from aviation.models.itinerary import AssetProfile, FlightLeg
from aviation.models.locations import Location
from aviation.validator import ValidationReport


class BuildItineraryRequest(BaseModel):
    intent: TripIntent
    asset: AssetProfile


class EditItineraryRequest(BaseModel):
    intent: TripIntent
    asset: AssetProfile
    legs: list[FlightLeg] = Field(description="Current working legs")
    edited: bool = False
    commands: list[EditCommand] = Field(default_factory=list)


class ItineraryResponse(BaseModel):
    success: bool
    legs: list[FlightLeg] = Field(default_factory=list)
    edited: bool = False
    total_distance_nm: int = 0
    total_flight_minutes: int = 0
    total_elapsed_minutes: int = 0
    summary: Optional[str] = None
    validation: Optional[ValidationReport] = None
    error: Optional[str] = None


class BookingRequest(BaseModel):
    intent: TripIntent
    asset: AssetProfile
    legs: list[FlightLeg]
    title: Optional[str] = None
    notes: str = ""
    passengers: list[Passenger] = Field(default_factory=list)


class BookingResponse(BaseModel):
    success: bool
    submission: Optional[BookingSubmission] = None
    booking: Optional[dict[str, Any]] = None
    error: Optional[str] = None


class LocationSearchResponse(BaseModel):
    results: list[Location]
    count: int
