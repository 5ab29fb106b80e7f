import logging
from typing import Optional

import requests

from aviation import settings
from aviation.models.booking import BookingMetadata, BookingSubmission, Passenger
from aviation.models.intent import MultiLegIntent, PickupIntent, TripIntent
from aviation.models.itinerary import Itinerary
from aviation.validator import validate

logger = logging.getLogger(__name__)


class ItineraryNotSubmittableError(ValueError):
    """Raised when an itinerary still has legs without resolved locations."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors) or "Itinerary cannot be submitted")


def trip_endpoints(itinerary: Itinerary, intent: TripIntent) -> tuple[str, str]:
    if isinstance(intent, MultiLegIntent):
        first, last = itinerary.legs[0], itinerary.legs[-1]
        return first.departure.code, last.arrival.code
    if isinstance(intent, PickupIntent):
        return intent.pickup_code.upper(), intent.destination_code.upper()
    return intent.origin_code.upper(), intent.destination_code.upper()


def default_title(itinerary: Itinerary, intent: TripIntent) -> str:
    if isinstance(intent, MultiLegIntent):
        stops = [leg.departure.code for leg in itinerary.legs]
        stops.append(itinerary.legs[-1].arrival.code)
        return f"Multi-leg: {' → '.join(stops)}"
    departure, arrival = trip_endpoints(itinerary, intent)
    label = "Pickup" if isinstance(intent, PickupIntent) else "Flight"
    return f"{label}: {departure} → {arrival}"


def build_submission(
    itinerary: Itinerary,
    intent: TripIntent,
    title: Optional[str] = None,
    notes: str = "",
    passengers: Optional[list[Passenger]] = None,
) -> BookingSubmission:
    """Assemble the booking payload for a finished itinerary.

    Raises:
        ItineraryNotSubmittableError: if any leg lacks a departure or arrival
    """
    report = validate(itinerary)
    if not report.submittable:
        raise ItineraryNotSubmittableError(report.errors)
    for warning in report.warnings:
        logger.warning(warning)

    passengers = passengers or []
    departure, arrival = trip_endpoints(itinerary, intent)
    return BookingSubmission(
        title=title or default_title(itinerary, intent),
        trip_type=intent.trip_type,
        departure_code=departure,
        arrival_code=arrival,
        start_datetime=itinerary.start_time.isoformat(),
        end_datetime=itinerary.end_time.isoformat(),
        notes=notes,
        metadata=BookingMetadata(
            trip_type=intent.trip_type,
            legs=itinerary.to_records(),
            total_distance_nm=itinerary.total_distance_nm,
            total_flight_minutes=itinerary.total_flight_minutes,
            passengers=passengers,
            total_passenger_weight_kg=sum(p.weight_kg for p in passengers),
        ),
    )


class BookingClient:
    """Sends finished bookings to the reservations service."""

    def __init__(
        self,
        base_url: str = settings.BOOKINGS_API_URL,
        timeout: float = settings.BOOKINGS_API_TIMEOUT,
    ):
        if not base_url:
            raise ValueError("BOOKINGS_API_URL environment variable is required")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def submit(self, submission: BookingSubmission) -> dict:
        try:
            response = requests.post(
                f"{self.base_url}/reservations",
                json=submission.model_dump(mode="json"),
                timeout=self.timeout,
            )
            response.raise_for_status()
            logger.info(f"Booking '{submission.title}' submitted")
            return {"success": True, "booking": response.json()}
        except requests.exceptions.Timeout:
            logger.error(f"Booking '{submission.title}' timed out")
            return {
                "success": False,
                "error": "Request timed out. Please try again.",
            }
        except requests.exceptions.RequestException as e:
            logger.error(f"Booking '{submission.title}' failed: {e}")
            return {"success": False, "error": str(e)}
