from fastapi.testclient import TestClient

TAKEN_INTENT = {
    "trip_type": "taken",
    "origin_code": "AAA",
    "destination_code": "CCCC",
    "departure_date": "2026-03-01",
    "departure_time": "09:00",
}

PLANE = {
    "name": "HP-1234",
    "kind": "plane",
    "cruise_speed": 450,
    "turnaround_minutes": 60,
    "home_base_code": "BBB",
}


def build_legs(test_client: TestClient) -> list[dict]:
    response = test_client.post(
        "/itineraries", json={"intent": TAKEN_INTENT, "asset": PLANE}
    )
    return response.json()["legs"]


class TestAPI:
    """Test suite for FastAPI endpoints."""

    def test_root_endpoint(self, test_client: TestClient):
        """Test the root health check endpoint."""
        response = test_client.get("/")
        assert response.status_code == 200
        assert response.json() == {"message": "Aviation Scheduler API is running"}

    def test_health_endpoint(self, test_client: TestClient):
        """Test the health check endpoint."""
        response = test_client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "aviation-scheduler-api"


class TestLocationSearch:
    """Test suite for the location search endpoint."""

    def test_search_by_name(self, test_client: TestClient):
        """Test partial matching on location names."""
        response = test_client.get("/locations", params={"q": "bravo"})
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["results"][0]["icao_code"] == "BBBB"

    def test_search_by_network(self, test_client: TestClient):
        """Test restricting results to heliports."""
        response = test_client.get("/locations", params={"network": "heliport"})
        data = response.json()
        assert {result["icao_code"] for result in data["results"]} == {"HELI", "HPAD"}

    def test_search_limit(self, test_client: TestClient):
        """Test that results are capped at the requested limit."""
        response = test_client.get("/locations", params={"limit": 2})
        assert response.json()["count"] == 2

    def test_invalid_network(self, test_client: TestClient):
        """Test that an unknown network is rejected."""
        response = test_client.get("/locations", params={"network": "seaport"})
        assert response.status_code == 422


class TestItineraryEndpoints:
    """Test suite for itinerary generation and editing."""

    def test_build_taken_itinerary(self, test_client: TestClient):
        """Test generating a taken trip with its return leg."""
        response = test_client.post(
            "/itineraries", json={"intent": TAKEN_INTENT, "asset": PLANE}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert [leg["kind"] for leg in data["legs"]] == ["customer", "empty"]
        assert data["legs"][0]["departure_time"] == "2026-03-01T09:15:00"
        assert data["total_distance_nm"] == 180
        assert data["total_flight_minutes"] == 24
        assert data["summary"] == "2 legs • 180 nm • 1h 24m"
        assert data["validation"]["submittable"] is True
        assert data["edited"] is False

    def test_build_without_home_base(self, test_client: TestClient):
        """Test that a taken trip without a home base reports failure."""
        asset = {**PLANE, "home_base_code": None}
        response = test_client.post(
            "/itineraries", json={"intent": TAKEN_INTENT, "asset": asset}
        )

        data = response.json()
        assert data["success"] is False
        assert data["legs"] == []
        assert "home base" in data["error"]

    def test_build_multileg_with_warnings(self, test_client: TestClient):
        """Test that incomplete multi-leg trips come back with warnings."""
        intent = {
            "trip_type": "multileg",
            "legs": [
                {
                    "departure_code": "AAA",
                    "arrival_code": "NOCO",
                    "departure_date": "2026-03-01",
                    "departure_time": "08:00",
                }
            ],
        }
        response = test_client.post("/itineraries", json={"intent": intent, "asset": PLANE})

        data = response.json()
        assert data["success"] is True
        assert data["legs"][0]["distance_nm"] is None
        assert data["validation"]["submittable"] is True
        assert len(data["validation"]["warnings"]) == 1

    def test_invalid_trip_type(self, test_client: TestClient):
        """Test that an unknown trip type is a validation error."""
        intent = {**TAKEN_INTENT, "trip_type": "charter"}
        response = test_client.post("/itineraries", json={"intent": intent, "asset": PLANE})
        assert response.status_code == 422

    def test_edit_itinerary(self, test_client: TestClient):
        """Test applying edit commands to generated legs."""
        legs = build_legs(test_client)
        response = test_client.post(
            "/itineraries/edit",
            json={
                "intent": TAKEN_INTENT,
                "asset": PLANE,
                "legs": legs,
                "commands": [
                    {"action": "change_endpoint", "index": 0, "endpoint": "arrival", "code": "DDD"},
                    {"action": "toggle_kind", "index": 1},
                ],
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["edited"] is True
        assert data["legs"][0]["arrival"]["iata_code"] == "DDD"
        assert data["legs"][0]["arrival_time"] == "2026-03-01T09:55:00"
        assert data["legs"][1]["kind"] == "customer"
        assert data["legs"][1]["departure_time"] == "2026-03-01T10:55:00"

    def test_edit_time_with_utc_offset(self, test_client: TestClient):
        """Test that a departure time with an offset is applied, not rejected."""
        legs = build_legs(test_client)
        response = test_client.post(
            "/itineraries/edit",
            json={
                "intent": TAKEN_INTENT,
                "asset": PLANE,
                "legs": legs,
                "commands": [
                    {"action": "change_time", "index": 1, "departure_time": "2026-03-01T12:00:00Z"}
                ],
            },
        )

        data = response.json()
        assert data["success"] is True
        assert data["legs"][1]["departure_time"] == "2026-03-01T12:00:00"
        assert data["total_elapsed_minutes"] == 173

    def test_edit_reset(self, test_client: TestClient):
        """Test that a reset command discards manual edits."""
        legs = build_legs(test_client)
        legs[0]["kind"] = "empty"
        response = test_client.post(
            "/itineraries/edit",
            json={
                "intent": TAKEN_INTENT,
                "asset": PLANE,
                "legs": legs,
                "edited": True,
                "commands": [{"action": "reset"}],
            },
        )

        data = response.json()
        assert data["edited"] is False
        assert data["legs"][0]["kind"] == "customer"

    def test_edit_unknown_action(self, test_client: TestClient):
        """Test that an unknown command is a validation error."""
        response = test_client.post(
            "/itineraries/edit",
            json={
                "intent": TAKEN_INTENT,
                "asset": PLANE,
                "legs": [],
                "commands": [{"action": "teleport"}],
            },
        )
        assert response.status_code == 422


class TestBookingEndpoint:
    """Test suite for booking submission."""

    def test_submit_booking(self, test_client: TestClient, mock_booking_client):
        """Test submitting a complete itinerary."""
        legs = build_legs(test_client)
        response = test_client.post(
            "/bookings",
            json={
                "intent": TAKEN_INTENT,
                "asset": PLANE,
                "legs": legs,
                "passengers": [
                    {"full_name": "Ana Rivera", "id_type": "cedula", "id_number": "8-123-456", "weight_kg": 62.5}
                ],
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["booking"] == {"id": "res-1"}
        submission = data["submission"]
        assert submission["title"] == "Flight: AAA → CCCC"
        assert submission["start_datetime"] == "2026-03-01T09:15:00"
        assert submission["end_datetime"] == "2026-03-01T10:39:00"
        assert submission["metadata"]["total_passenger_weight_kg"] == 62.5
        mock_booking_client.submit.assert_called_once()

    def test_unresolved_leg_rejected(self, test_client: TestClient, mock_booking_client):
        """Test that a leg without an arrival blocks submission."""
        legs = build_legs(test_client)
        legs[1]["arrival"] = None
        response = test_client.post(
            "/bookings", json={"intent": TAKEN_INTENT, "asset": PLANE, "legs": legs}
        )

        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Leg 2 has no arrival location"
        mock_booking_client.submit.assert_not_called()

    def test_empty_itinerary_rejected(self, test_client: TestClient, mock_booking_client):
        """Test that an itinerary without legs cannot be booked."""
        response = test_client.post(
            "/bookings", json={"intent": TAKEN_INTENT, "asset": PLANE, "legs": []}
        )

        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Itinerary has no legs"
        mock_booking_client.submit.assert_not_called()

    def test_persistence_failure(self, test_client: TestClient, mock_booking_client):
        """Test that a failed persistence call is reported with the submission kept."""
        mock_booking_client.submit.return_value = {
            "success": False,
            "error": "Request timed out. Please try again.",
        }
        legs = build_legs(test_client)
        response = test_client.post(
            "/bookings", json={"intent": TAKEN_INTENT, "asset": PLANE, "legs": legs}
        )

        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Request timed out. Please try again."
        assert data["submission"]["departure_code"] == "AAA"

    def test_rejection_without_bookings_service(self, unconfigured_client: TestClient):
        """Test that validation errors are reported even with no bookings service."""
        response = unconfigured_client.post(
            "/bookings", json={"intent": TAKEN_INTENT, "asset": PLANE, "legs": []}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Itinerary has no legs"

    def test_submit_without_bookings_service(self, unconfigured_client: TestClient):
        """Test that a valid booking reports the missing service instead of failing."""
        legs = build_legs(unconfigured_client)
        response = unconfigured_client.post(
            "/bookings", json={"intent": TAKEN_INTENT, "asset": PLANE, "legs": legs}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Bookings service is not configured"
        assert data["submission"]["title"] == "Flight: AAA → CCCC"
