from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

Network = Literal["airport", "heliport"]


class Coordinates(BaseModel):
    latitude: float
    longitude: float


class Location(BaseModel):
    """A point on the travel network, owned by the external location catalog."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Stable catalog identifier")
    icao_code: Optional[str] = Field(None, description="ICAO code (e.g., 'MPTO')")
    iata_code: Optional[str] = Field(None, description="IATA code (e.g., 'PTY')")
    name: str = Field(description="Display name")
    city: Optional[str] = Field(None, description="City served")
    country: str = Field("", description="Country code or name")
    latitude: Optional[float] = Field(None, description="Latitude in degrees")
    longitude: Optional[float] = Field(None, description="Longitude in degrees")
    network: Network = Field(
        "airport", description="Travel network: 'airport' or 'heliport'"
    )

    @model_validator(mode="after")
    def require_code(self) -> "Location":
        if not self.icao_code and not self.iata_code:
            raise ValueError(f"Location {self.id} needs an ICAO or IATA code")
        return self

    @property
    def code(self) -> str:
        """IATA code when available, otherwise ICAO."""
        return self.iata_code or self.icao_code

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def coordinates(self) -> Optional[Coordinates]:
        if not self.has_coordinates:
            return None
        return Coordinates(latitude=self.latitude, longitude=self.longitude)

    def matches(self, code: str) -> bool:
        if not code:
            return False
        code = code.upper()
        return code in {
            (self.icao_code or "").upper(),
            (self.iata_code or "").upper(),
        }
