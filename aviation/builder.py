"""Generation of flight itineraries from trip intents.

Every trip mode is derived from the same primitives: a leg between two
locations is timed either forward from a departure or backward from a
required arrival, with the asset's turnaround separating consecutive legs
and a fixed taxi buffer around customer departures.
"""

import logging
from datetime import datetime
from typing import Optional

from aviation import settings
from aviation.catalog import LocationCatalog
from aviation.geo import distance_nm, flight_minutes
from aviation.models.intent import MultiLegIntent, PickupIntent, TakenIntent, TripIntent
from aviation.models.itinerary import AssetProfile, FlightLeg, Itinerary, LegKind
from aviation.models.locations import Location
from aviation.timeutils import add_minutes

logger = logging.getLogger(__name__)


def measure(
    departure: Optional[Location], arrival: Optional[Location], cruise_speed: float
) -> tuple[Optional[int], Optional[int]]:
    """Distance and flight minutes between two locations, or (None, None) without coordinates."""
    if departure is None or arrival is None:
        return None, None
    if not (departure.has_coordinates and arrival.has_coordinates):
        return None, None
    distance = distance_nm(departure.coordinates, arrival.coordinates)
    return distance, flight_minutes(distance, cruise_speed)


def make_leg(
    kind: LegKind,
    departure: Optional[Location],
    arrival: Optional[Location],
    departure_time: datetime,
    cruise_speed: float,
) -> FlightLeg:
    distance, minutes = measure(departure, arrival, cruise_speed)
    return FlightLeg(
        kind=kind,
        departure=departure,
        arrival=arrival,
        departure_time=departure_time,
        arrival_time=add_minutes(departure_time, minutes or 0),
        flight_minutes=minutes,
        distance_nm=distance,
    )


def _resolve_endpoints(
    catalog: LocationCatalog, profile: AssetProfile, *codes: str
) -> Optional[list[Location]]:
    """Home base followed by the requested locations, all with coordinates."""
    home = catalog.get(profile.home_base_code)
    if home is None:
        logger.warning(
            f"No home base '{profile.home_base_code}' for asset '{profile.name}'; "
            "cannot generate repositioning legs"
        )
        return None

    locations = [home]
    for code in codes:
        location = catalog.get(code)
        if location is None:
            logger.warning(f"Unknown location code: {code}")
            return None
        locations.append(location)

    missing = [location.code for location in locations if not location.has_coordinates]
    if missing:
        logger.warning(f"Missing coordinates for {', '.join(missing)}")
        return None
    return locations


def _build_taken(
    intent: TakenIntent, profile: AssetProfile, catalog: LocationCatalog
) -> Optional[Itinerary]:
    endpoints = _resolve_endpoints(
        catalog, profile, intent.origin_code, intent.destination_code
    )
    if endpoints is None:
        return None
    home, origin, destination = endpoints
    speed = profile.effective_cruise_speed

    customer = make_leg(
        "customer",
        origin,
        destination,
        add_minutes(intent.requested_at, settings.TAXI_MINUTES),
        speed,
    )
    legs = [customer]

    if destination.id != home.id:
        legs.append(
            make_leg(
                "empty",
                destination,
                home,
                add_minutes(customer.arrival_time, profile.effective_turnaround_minutes),
                speed,
            )
        )
    return Itinerary(trip_type="taken", legs=legs)


def _build_pickup(
    intent: PickupIntent, profile: AssetProfile, catalog: LocationCatalog
) -> Optional[Itinerary]:
    endpoints = _resolve_endpoints(
        catalog, profile, intent.pickup_code, intent.destination_code
    )
    if endpoints is None:
        return None
    home, pickup, destination = endpoints
    speed = profile.effective_cruise_speed
    legs = []

    # The pickup time constrains the positioning leg's arrival, so it is timed backward.
    if pickup.id != home.id:
        distance, minutes = measure(home, pickup, speed)
        # Block time includes the taxi buffer so arrival stays departure + duration.
        minutes += settings.TAXI_MINUTES
        arrival_time = add_minutes(
            intent.requested_at, -profile.effective_turnaround_minutes
        )
        legs.append(
            FlightLeg(
                kind="empty",
                departure=home,
                arrival=pickup,
                departure_time=add_minutes(arrival_time, -minutes),
                arrival_time=arrival_time,
                flight_minutes=minutes,
                distance_nm=distance,
            )
        )

    legs.append(
        make_leg(
            "customer",
            pickup,
            destination,
            add_minutes(intent.requested_at, settings.TAXI_MINUTES),
            speed,
        )
    )
    return Itinerary(trip_type="pickup", legs=legs)


def _build_multileg(
    intent: MultiLegIntent, profile: AssetProfile, catalog: LocationCatalog
) -> Optional[Itinerary]:
    if not intent.legs:
        logger.warning("Multi-leg trip has no legs")
        return None

    speed = profile.effective_cruise_speed
    legs = []
    for stop in intent.legs:
        leg = make_leg(
            "customer",
            catalog.get(stop.departure_code),
            catalog.get(stop.arrival_code),
            stop.departs_at,
            speed,
        )
        if not leg.is_complete:
            logger.info(
                f"Leg {stop.departure_code} -> {stop.arrival_code} is incomplete"
            )
        legs.append(leg)
    return Itinerary(trip_type="multileg", legs=legs)


def build_itinerary(
    intent: TripIntent, profile: AssetProfile, catalog: LocationCatalog
) -> Optional[Itinerary]:
    """Generate the legs for a trip intent, or None when it cannot be scheduled.

    Args:
        intent: Taken, pickup or multi-leg request
        profile: Performance profile of the asset being booked
        catalog: Locations; restricted to the asset's network before lookup

    Returns:
        The generated itinerary, or None when required locations or
        coordinates are missing
    """
    catalog = catalog.for_network(profile.network)
    if isinstance(intent, TakenIntent):
        return _build_taken(intent, profile, catalog)
    if isinstance(intent, PickupIntent):
        return _build_pickup(intent, profile, catalog)
    return _build_multileg(intent, profile, catalog)
