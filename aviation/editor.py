"""Interactive editing of a generated itinerary.

Edits are explicit command objects applied to a working copy of the legs.
After any timing or structural edit the legs downstream of the edited one
are re-chained: each departs one turnaround after the previous arrival and
keeps its own locations.
"""

import logging
from datetime import datetime
from typing import Annotated, Callable, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from aviation.builder import build_itinerary, make_leg, measure
from aviation.catalog import LocationCatalog
from aviation.models.intent import TripIntent
from aviation.models.itinerary import AssetProfile, FlightLeg, Itinerary
from aviation.timeutils import add_minutes, naive

logger = logging.getLogger(__name__)


class ChangeEndpoint(BaseModel):
    action: Literal["change_endpoint"] = "change_endpoint"
    index: int
    endpoint: Literal["departure", "arrival"]
    code: Optional[str] = Field(None, description="New location code, None to clear")


class ChangeTime(BaseModel):
    action: Literal["change_time"] = "change_time"
    index: int
    departure_time: datetime

    @field_validator("departure_time")
    @classmethod
    def drop_offset(cls, value: datetime) -> datetime:
        return naive(value)


class ToggleKind(BaseModel):
    action: Literal["toggle_kind"] = "toggle_kind"
    index: int


class AddLeg(BaseModel):
    action: Literal["add_leg"] = "add_leg"


class RemoveLeg(BaseModel):
    action: Literal["remove_leg"] = "remove_leg"
    index: int


class Reset(BaseModel):
    action: Literal["reset"] = "reset"


EditCommand = Annotated[
    Union[ChangeEndpoint, ChangeTime, ToggleKind, AddLeg, RemoveLeg, Reset],
    Field(discriminator="action"),
]


class ItineraryEditor:
    """Owns the working copy of one booking session's itinerary."""

    def __init__(
        self,
        intent: TripIntent,
        profile: AssetProfile,
        catalog: LocationCatalog,
        itinerary: Optional[Itinerary] = None,
        edited: bool = False,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.intent = intent
        self.profile = profile
        self.catalog = catalog.for_network(profile.network)
        self.clock = clock
        self.edited = edited
        if itinerary is None:
            itinerary = self._build()
        else:
            itinerary = itinerary.model_copy(deep=True)
        self.itinerary = itinerary

    @property
    def legs(self) -> list[FlightLeg]:
        return self.itinerary.legs

    @property
    def turnaround(self) -> int:
        return self.profile.effective_turnaround_minutes

    def _build(self) -> Itinerary:
        built = build_itinerary(self.intent, self.profile, self.catalog)
        if built is None:
            return Itinerary(trip_type=self.intent.trip_type, legs=[])
        return built

    def _valid_index(self, index: int, action: str) -> bool:
        if 0 <= index < len(self.legs):
            return True
        logger.warning(
            f"Ignoring {action}: leg {index} out of range for {len(self.legs)} legs"
        )
        return False

    def _remeasure(self, leg: FlightLeg) -> None:
        distance, minutes = measure(
            leg.departure, leg.arrival, self.profile.effective_cruise_speed
        )
        leg.distance_nm = distance
        leg.flight_minutes = minutes

    def cascade(self, index: int) -> None:
        """Re-chain the timing of every leg after ``index``."""
        for j in range(index + 1, len(self.legs)):
            leg = self.legs[j]
            if leg.has_coordinates:
                self._remeasure(leg)
            leg.retime(add_minutes(self.legs[j - 1].arrival_time, self.turnaround))

    def change_endpoint(self, command: ChangeEndpoint) -> None:
        """Set or clear one endpoint of a leg.

        A code of None clears the endpoint. A code missing from the catalog
        leaves the leg untouched.
        """
        if not self._valid_index(command.index, command.action):
            return
        leg = self.legs[command.index]
        location = self.catalog.get(command.code)
        if command.code and location is None:
            logger.warning(f"Ignoring change_endpoint: unknown location code {command.code}")
            return
        setattr(leg, command.endpoint, location)
        self._remeasure(leg)
        leg.retime(leg.departure_time)
        self.cascade(command.index)
        self.edited = True

    def change_time(self, command: ChangeTime) -> None:
        if not self._valid_index(command.index, command.action):
            return
        self.legs[command.index].retime(command.departure_time)
        self.cascade(command.index)
        self.edited = True

    def toggle_kind(self, command: ToggleKind) -> None:
        if not self._valid_index(command.index, command.action):
            return
        leg = self.legs[command.index]
        leg.kind = "empty" if leg.kind == "customer" else "customer"
        self.edited = True

    def add_leg(self, command: Optional[AddLeg] = None) -> None:
        home = self.catalog.get(self.profile.home_base_code)
        if self.legs:
            previous = self.legs[-1]
            departure = previous.arrival
            departure_time = add_minutes(previous.arrival_time, self.turnaround)
        else:
            departure = home
            departure_time = self.clock()
        self.legs.append(
            make_leg(
                "customer",
                departure,
                home,
                departure_time,
                self.profile.effective_cruise_speed,
            )
        )
        self.edited = True

    def remove_leg(self, command: RemoveLeg) -> None:
        if not self._valid_index(command.index, command.action):
            return
        if len(self.legs) <= 1:
            logger.warning("Ignoring remove_leg: an itinerary keeps at least one leg")
            return
        del self.legs[command.index]
        self.cascade(max(0, command.index - 1))
        self.edited = True

    def reset(self, command: Optional[Reset] = None) -> None:
        """Discard all edits and rebuild from the trip intent."""
        self.itinerary = self._build()
        self.edited = False

    def regenerate(self, intent: TripIntent) -> bool:
        """Rebuild for a changed trip intent unless the legs carry manual edits.

        Returns:
            True when the itinerary was replaced
        """
        if self.edited:
            logger.info("Itinerary has manual edits; keeping it until reset")
            return False
        self.intent = intent
        self.itinerary = self._build()
        return True

    def apply(self, command: EditCommand) -> Itinerary:
        handlers = {
            "change_endpoint": self.change_endpoint,
            "change_time": self.change_time,
            "toggle_kind": self.toggle_kind,
            "add_leg": self.add_leg,
            "remove_leg": self.remove_leg,
            "reset": self.reset,
        }
        handlers[command.action](command)
        return self.itinerary

    def apply_all(self, commands: list[EditCommand]) -> Itinerary:
        for command in commands:
            self.apply(command)
        return self.itinerary
