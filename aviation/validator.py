from pydantic import BaseModel, Field

from aviation.models.itinerary import Itinerary


class ValidationReport(BaseModel):
    submittable: bool
    errors: list[str] = Field(default_factory=list, description="Blocking problems")
    warnings: list[str] = Field(
        default_factory=list, description="Non-blocking problems, e.g. missing coordinates"
    )


def is_submittable(itinerary: Itinerary | None) -> bool:
    """True when every leg has a resolved departure and arrival."""
    if itinerary is None or not itinerary.legs:
        return False
    return all(leg.has_endpoints for leg in itinerary.legs)


def missing_endpoint_errors(itinerary: Itinerary) -> list[str]:
    errors = []
    for number, leg in enumerate(itinerary.legs, 1):
        if leg.departure is None:
            errors.append(f"Leg {number} has no departure location")
        if leg.arrival is None:
            errors.append(f"Leg {number} has no arrival location")
    return errors


def coordinate_warnings(itinerary: Itinerary) -> list[str]:
    """Legs whose distance and duration cannot be computed."""
    warnings = []
    for number, leg in enumerate(itinerary.legs, 1):
        missing = [
            location.code
            for location in (leg.departure, leg.arrival)
            if location is not None and not location.has_coordinates
        ]
        if missing:
            warnings.append(
                f"Leg {number}: no coordinates for {', '.join(missing)}; "
                "distance and flight time are unknown"
            )
    return warnings


def validate(itinerary: Itinerary | None) -> ValidationReport:
    if itinerary is None or not itinerary.legs:
        return ValidationReport(submittable=False, errors=["Itinerary has no legs"])
    return ValidationReport(
        submittable=is_submittable(itinerary),
        errors=missing_endpoint_errors(itinerary),
        warnings=coordinate_warnings(itinerary),
    )
