import os
import tempfile
from datetime import date, time
from unittest.mock import MagicMock

import pandas as pd
import pytest
from fastapi.testclient import TestClient

from aviation.api import app, get_booking_client, get_catalog
from aviation.catalog import LocationCatalog
from aviation.models.intent import PickupIntent, TakenIntent
from aviation.models.itinerary import AssetProfile
from aviation.models.locations import Location

TRIP_DATE = date(2026, 3, 1)


@pytest.fixture
def sample_locations():
    """Locations along the equator, one degree (about 60 nm) apart."""
    return [
        Location(id="a", icao_code="AAAA", iata_code="AAA", name="Alpha Field", city="Alpha", country="PA", latitude=0.0, longitude=0.0),
        Location(id="b", icao_code="BBBB", iata_code="BBB", name="Bravo International", city="Bravo", country="PA", latitude=0.0, longitude=1.0),
        Location(id="c", icao_code="CCCC", name="Charlie Regional", city="Charlie", country="PA", latitude=0.0, longitude=2.0),
        Location(id="d", icao_code="DDDD", iata_code="DDD", name="Delta Airport", city="Delta", country="CR", latitude=0.0, longitude=5.0),
        Location(id="n", icao_code="NOCO", name="No Coordinates Strip", city="Nowhere", country="PA"),
        Location(id="h", icao_code="HELI", name="Harbor Heliport", city="Alpha", country="PA", latitude=0.0, longitude=0.5, network="heliport"),
        Location(id="p", icao_code="HPAD", name="Peak Heliport", city="Peak", country="PA", latitude=0.0, longitude=1.5, network="heliport"),
    ]


@pytest.fixture
def catalog(sample_locations):
    return LocationCatalog.from_locations(sample_locations)


@pytest.fixture
def plane_profile():
    """Plane based at BBB cruising at 450 kt with a one hour turnaround."""
    return AssetProfile(
        name="HP-1234",
        kind="plane",
        cruise_speed=450,
        turnaround_minutes=60,
        home_base_code="BBB",
    )


@pytest.fixture
def helicopter_profile():
    return AssetProfile(
        name="HP-H01",
        kind="helicopter",
        cruise_speed=120,
        turnaround_minutes=30,
        home_base_code="HELI",
    )


@pytest.fixture
def taken_intent():
    """Taken trip AAA -> CCCC at 09:00; the plane returns home to BBB."""
    return TakenIntent(
        origin_code="AAA",
        destination_code="CCCC",
        departure_date=TRIP_DATE,
        departure_time=time(9, 0),
    )


@pytest.fixture
def pickup_intent():
    return PickupIntent(
        pickup_code="AAA",
        destination_code="CCCC",
        pickup_date=TRIP_DATE,
        pickup_time=time(9, 0),
    )


@pytest.fixture
def temp_locations_csv(sample_locations):
    """Temporary CSV file with location data."""
    frame = pd.DataFrame([location.model_dump() for location in sample_locations])
    with tempfile.NamedTemporaryFile(mode="w", suffix=".csv", delete=False) as f:
        frame.to_csv(f.name, index=False)
        yield f.name
    os.unlink(f.name)


@pytest.fixture
def mock_booking_client():
    client = MagicMock()
    client.submit.return_value = {"success": True, "booking": {"id": "res-1"}}
    return client


@pytest.fixture
def test_client(catalog, mock_booking_client):
    """FastAPI test client with the catalog and booking client overridden."""
    app.dependency_overrides[get_catalog] = lambda: catalog
    app.dependency_overrides[get_booking_client] = lambda: mock_booking_client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def unconfigured_client(catalog, monkeypatch):
    """FastAPI test client with no bookings service URL configured."""
    monkeypatch.setattr("aviation.settings.BOOKINGS_API_URL", "")
    app.dependency_overrides[get_catalog] = lambda: catalog
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
