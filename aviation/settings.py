"""Configuration loader for the itinerary scheduling engine."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv

load_dotenv()

with open(Path(__file__).parent / "config" / "engine.yaml", "r") as f:
    engine_config = yaml.safe_load(f)

# Itinerary
TAXI_MINUTES = engine_config["itinerary"]["taxi_minutes"]
DEFAULT_CRUISE_SPEED = engine_config["itinerary"]["default_cruise_speed"]
DEFAULT_TURNAROUND_MINUTES = engine_config["itinerary"]["default_turnaround_minutes"]

# Location catalog
SEARCH_LIMIT = engine_config["catalog"]["search_limit"]
LOCATIONS_PATH = Path(
    os.getenv(
        "LOCATIONS_PATH",
        str(Path(__file__).parent / "data" / engine_config["catalog"]["locations_file"]),
    )
)

# Booking persistence collaborator
BOOKINGS_API_URL = os.getenv("BOOKINGS_API_URL", "")
BOOKINGS_API_TIMEOUT = float(
    os.getenv("BOOKINGS_API_TIMEOUT", str(engine_config["bookings"]["timeout_seconds"]))
)
