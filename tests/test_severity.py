#!/usr/bin/env python3
"""Tests for Severity and VehicleKind enums."""

from vehicles import Severity, VehicleKind


class TestSeverity:
    """Tests for Severity values."""

    def test_values_match_notification_levels(self):
        assert [s.value for s in Severity] == ["info", "success", "warning", "error"]


class TestVehicleKind:
    """Tests for VehicleKind discriminator."""

    def test_lookup_by_stored_value(self):
        """Stored kind strings map back to the enum."""
        assert VehicleKind("Car") is VehicleKind.CAR
        assert VehicleKind("SportsCar") is VehicleKind.SPORTS_CAR
        assert VehicleKind("Truck") is VehicleKind.TRUCK

    def test_id_prefix(self):
        assert VehicleKind.CAR.id_prefix == "car"
        assert VehicleKind.SPORTS_CAR.id_prefix == "sportscar"
        assert VehicleKind.TRUCK.id_prefix == "truck"
