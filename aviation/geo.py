import math

from aviation.models.locations import Coordinates

EARTH_RADIUS_NM = 3440.065


def distance_nm(a: Coordinates, b: Coordinates) -> int:
    """Great-circle distance between two coordinates, rounded to whole nautical miles."""
    d_lat = math.radians(b.latitude - a.latitude)
    d_lon = math.radians(b.longitude - a.longitude)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.latitude))
        * math.cos(math.radians(b.latitude))
        * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return round(EARTH_RADIUS_NM * c)


def flight_minutes(distance: float, cruise_speed: float | None) -> int:
    """Block time in minutes for a distance at cruise speed (knots).

    A zero or missing cruise speed yields 0, which callers read as an
    unknown duration.
    """
    if not cruise_speed:
        return 0
    return round(distance / cruise_speed * 60)
