import logging
from pathlib import Path
from typing import Iterator, Optional

import pandas as pd

from aviation import settings
from aviation.models.locations import Location, Network

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"id", "name"}
LOCATION_COLUMNS = [
    "id",
    "icao_code",
    "iata_code",
    "name",
    "city",
    "country",
    "latitude",
    "longitude",
    "network",
]


def load_locations(path: Path = settings.LOCATIONS_PATH) -> pd.DataFrame:
    frame = pd.read_csv(path, dtype={"id": str, "icao_code": str, "iata_code": str})
    missing = REQUIRED_COLUMNS - set(frame.columns)
    if missing:
        raise ValueError(f"Locations file {path} is missing columns: {sorted(missing)}")
    return frame


class LocationCatalog:
    """Read-only view over a table of locations."""

    def __init__(self, frame: pd.DataFrame):
        frame = frame.copy()
        for column in LOCATION_COLUMNS:
            if column not in frame.columns:
                frame[column] = None
        frame["network"] = frame["network"].fillna("airport")
        self._frame = frame.reset_index(drop=True)

    @classmethod
    def from_csv(cls, path: Path = settings.LOCATIONS_PATH) -> "LocationCatalog":
        catalog = cls(load_locations(path))
        logger.info(f"Loaded {len(catalog)} locations from {path}")
        return catalog

    @classmethod
    def from_locations(cls, locations: list[Location]) -> "LocationCatalog":
        return cls(pd.DataFrame([location.model_dump() for location in locations]))

    def __len__(self) -> int:
        return len(self._frame)

    def __iter__(self) -> Iterator[Location]:
        for _, row in self._frame.iterrows():
            yield self._to_location(row)

    def for_network(self, network: Network) -> "LocationCatalog":
        """Catalog restricted to one travel network (airports or heliports)."""
        return LocationCatalog(self._frame[self._frame["network"] == network])

    def get(self, code: Optional[str]) -> Optional[Location]:
        """Exact lookup by ICAO or IATA code."""
        if not code:
            return None
        code = code.upper()
        mask = pd.Series(False, index=self._frame.index)
        for column in ("icao_code", "iata_code"):
            mask |= (
                self._frame[column].astype("string").str.upper().eq(code).fillna(False)
            )
        matching_rows = self._frame[mask.astype(bool)]
        if len(matching_rows) == 0:
            return None
        return self._to_location(matching_rows.iloc[0])

    def search(self, text: str = "", limit: int = settings.SEARCH_LIMIT) -> list[Location]:
        """Case-insensitive partial match on codes, name and city."""
        if not text:
            return [self._to_location(row) for _, row in self._frame.head(limit).iterrows()]

        mask = pd.Series(False, index=self._frame.index)
        for column in ("icao_code", "iata_code", "name", "city"):
            mask |= self._frame[column].astype("string").str.contains(
                text, case=False, regex=False, na=False
            )
        matching_rows = self._frame[mask.astype(bool)].head(limit)
        return [self._to_location(row) for _, row in matching_rows.iterrows()]

    @staticmethod
    def _to_location(row: pd.Series) -> Location:
        # Empty CSV cells come back as NaN
        values = {
            column: (None if pd.isna(row[column]) else row[column])
            for column in LOCATION_COLUMNS
        }
        values["id"] = str(values["id"])
        values["country"] = values["country"] or ""
        return Location(**values)
