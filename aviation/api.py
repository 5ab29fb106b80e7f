import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from aviation import settings
from aviation.booking import BookingClient, ItineraryNotSubmittableError, build_submission
from aviation.catalog import LocationCatalog
from aviation.editor import ItineraryEditor
from aviation.models.api import (
    BookingRequest,
    BookingResponse,
    BuildItineraryRequest,
    EditItineraryRequest,
    ItineraryResponse,
    LocationSearchResponse,
)
from aviation.models.itinerary import Itinerary
from aviation.models.locations import Network
from aviation.observability import get_tracer, setup_tracing
from aviation.timeutils import format_duration
from aviation.validator import validate

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
setup_tracing()
tracer = get_tracer(__name__)

app = FastAPI(
    title="Aviation Scheduler API",
    description="Flight itinerary generation and editing for aircraft and helicopter bookings",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache
def get_catalog() -> LocationCatalog:
    return LocationCatalog.from_csv(settings.LOCATIONS_PATH)


def get_booking_client() -> Optional[BookingClient]:
    if not settings.BOOKINGS_API_URL:
        logger.warning("BOOKINGS_API_URL not configured. Bookings cannot be submitted.")
        return None
    return BookingClient(settings.BOOKINGS_API_URL, settings.BOOKINGS_API_TIMEOUT)


def summarize(itinerary: Itinerary) -> str:
    count = len(itinerary.legs)
    return (
        f"{count} leg{'s' if count != 1 else ''} • "
        f"{itinerary.total_distance_nm:,} nm • "
        f"{format_duration(itinerary.total_elapsed_minutes)}"
    )


def itinerary_response(editor: ItineraryEditor) -> ItineraryResponse:
    itinerary = editor.itinerary
    if not itinerary.legs:
        return ItineraryResponse(
            success=False,
            error="Could not generate an itinerary: check the home base, locations and coordinates",
        )
    return ItineraryResponse(
        success=True,
        legs=itinerary.legs,
        edited=editor.edited,
        total_distance_nm=itinerary.total_distance_nm,
        total_flight_minutes=itinerary.total_flight_minutes,
        total_elapsed_minutes=itinerary.total_elapsed_minutes,
        summary=summarize(itinerary),
        validation=validate(itinerary),
    )


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "Aviation Scheduler API is running"}


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "service": "aviation-scheduler-api"}


@app.get("/locations", response_model=LocationSearchResponse)
async def search_locations(
    q: str = "",
    network: Optional[Network] = None,
    limit: int = settings.SEARCH_LIMIT,
    catalog: LocationCatalog = Depends(get_catalog),
):
    """Partial-match search over location codes, names and cities."""
    if network:
        catalog = catalog.for_network(network)
    results = catalog.search(q, limit=limit)
    return LocationSearchResponse(results=results, count=len(results))


@app.post("/itineraries", response_model=ItineraryResponse)
async def build(
    request: BuildItineraryRequest, catalog: LocationCatalog = Depends(get_catalog)
):
    """
    Generate the legs for a trip intent.
    """
    with tracer.start_as_current_span("build_itinerary") as span:
        span.set_attribute("trip.type", request.intent.trip_type)
        span.set_attribute("asset.kind", request.asset.kind)
        try:
            logger.info(
                f"Building {request.intent.trip_type} itinerary for {request.asset.name or 'asset'}"
            )
            editor = ItineraryEditor(request.intent, request.asset, catalog)
            span.set_attribute("itinerary.legs", len(editor.legs))
            return itinerary_response(editor)

        except Exception as e:
            logger.error(f"Error building itinerary: {str(e)}")
            return ItineraryResponse(success=False, error=str(e))


@app.post("/itineraries/edit", response_model=ItineraryResponse)
async def edit(
    request: EditItineraryRequest, catalog: LocationCatalog = Depends(get_catalog)
):
    """
    Apply edit commands to the working legs and return the recalculated itinerary.
    """
    with tracer.start_as_current_span("edit_itinerary") as span:
        span.set_attribute("edit.commands", len(request.commands))
        try:
            editor = ItineraryEditor(
                request.intent,
                request.asset,
                catalog,
                itinerary=Itinerary(trip_type=request.intent.trip_type, legs=request.legs),
                edited=request.edited,
            )
            editor.apply_all(request.commands)
            span.set_attribute("itinerary.legs", len(editor.legs))
            return itinerary_response(editor)

        except Exception as e:
            logger.error(f"Error editing itinerary: {str(e)}")
            return ItineraryResponse(success=False, error=str(e))


@app.post("/bookings", response_model=BookingResponse)
async def submit_booking(
    request: BookingRequest,
    client: Optional[BookingClient] = Depends(get_booking_client),
):
    """
    Validate a finished itinerary and hand it to the reservations service.
    """
    with tracer.start_as_current_span("submit_booking") as span:
        itinerary = Itinerary(trip_type=request.intent.trip_type, legs=request.legs)
        try:
            submission = build_submission(
                itinerary,
                request.intent,
                title=request.title,
                notes=request.notes,
                passengers=request.passengers,
            )
        except ItineraryNotSubmittableError as e:
            span.set_attribute("error.type", "itinerary_not_submittable")
            logger.warning(f"Rejected booking: {e}")
            return BookingResponse(success=False, error=str(e))

        span.set_attribute("booking.title", submission.title)
        if client is None:
            span.set_attribute("error.type", "persistence_unconfigured")
            return BookingResponse(
                success=False,
                submission=submission,
                error="Bookings service is not configured",
            )

        with ThreadPoolExecutor() as executor:
            result = await asyncio.get_event_loop().run_in_executor(
                executor, client.submit, submission
            )

        if not result["success"]:
            span.set_attribute("error.type", "persistence_failed")
            return BookingResponse(
                success=False, submission=submission, error=result["error"]
            )
        return BookingResponse(
            success=True, submission=submission, booking=result["booking"]
        )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
