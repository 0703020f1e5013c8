#!/usr/bin/env python3
"""Tests for YAML loading and saving utilities."""

import logging

import pytest
import yaml

from vehicles import (
    Fleet,
    MaintenanceRecord,
    SportsCar,
    Truck,
    ValidationError,
    Vehicle,
    create_fleet,
    load_fleet,
    rehydrate_fleet,
    save_fleet,
    vehicle_from_dict,
    vehicle_to_dict,
)

# =============================================================================
# vehicle_from_dict tests
# =============================================================================


class TestVehicleFromDict:
    """Tests for vehicle_from_dict function."""

    def test_builds_car(self):
        vehicle = vehicle_from_dict(
            {"kind": "Car", "id": "car_1", "model": "Civic", "color": "Blue"}
        )
        assert type(vehicle) is Vehicle
        assert vehicle.id == "car_1"
        assert vehicle.max_speed == 180
        assert vehicle.engine_on is False

    def test_builds_sports_car_with_turbo(self):
        vehicle = vehicle_from_dict(
            {
                "kind": "SportsCar",
                "id": "sportscar_1",
                "model": "Ferrari",
                "color": "Red",
                "engineOn": True,
                "speed": 120,
                "turbo": True,
            }
        )
        assert isinstance(vehicle, SportsCar)
        assert vehicle.max_speed == 250
        assert vehicle.speed == 120
        assert vehicle.turbo is True

    def test_builds_truck(self):
        vehicle = vehicle_from_dict(
            {
                "kind": "Truck",
                "id": "truck_1",
                "model": "Volvo",
                "color": "Red",
                "cargoCapacity": 1000,
                "cargoLoad": 800,
            }
        )
        assert isinstance(vehicle, Truck)
        assert vehicle.cargo_capacity == 1000
        assert vehicle.cargo_load == 800
        assert vehicle.max_speed == 120

    def test_rebuilds_maintenance_history(self):
        vehicle = vehicle_from_dict(
            {
                "kind": "Car",
                "id": "car_1",
                "model": "Civic",
                "color": "Blue",
                "maintenanceHistory": [
                    {"kind": "MaintenanceRecord", "date": "2024-01-15", "type": "Oil", "cost": 100},
                    {"kind": "MaintenanceRecord", "date": "2024-06-15", "type": "Tires", "cost": 800},
                ],
            }
        )
        assert all(isinstance(m, MaintenanceRecord) for m in vehicle.maintenance_history)
        assert vehicle.maintenance_history[0].service_type == "Tires"

    def test_speed_clamped_to_max(self):
        vehicle = vehicle_from_dict(
            {
                "kind": "Car",
                "model": "Civic",
                "color": "Blue",
                "engineOn": True,
                "speed": 900,
                "maxSpeed": 150,
            }
        )
        assert vehicle.speed == 150

    def test_engine_off_means_stopped(self):
        vehicle = vehicle_from_dict(
            {
                "kind": "SportsCar",
                "model": "Ferrari",
                "color": "Red",
                "engineOn": False,
                "speed": 80,
                "turbo": True,
            }
        )
        assert vehicle.speed == 0
        assert vehicle.turbo is False

    def test_only_true_booleans_count(self):
        vehicle = vehicle_from_dict(
            {
                "kind": "SportsCar",
                "model": "Ferrari",
                "color": "Red",
                "engineOn": "false",
                "speed": 80,
                "turbo": "yes",
            }
        )
        assert vehicle.engine_on is False
        assert vehicle.speed == 0
        assert vehicle.turbo is False

    def test_overloaded_truck_is_clamped(self):
        vehicle = vehicle_from_dict(
            {
                "kind": "Truck",
                "model": "Volvo",
                "color": "Red",
                "cargoCapacity": 1000,
                "cargoLoad": 1500,
            }
        )
        assert vehicle.cargo_load == 1000

    def test_missing_id_is_generated(self):
        vehicle = vehicle_from_dict({"kind": "Truck", "model": "Volvo", "color": "Red", "cargoCapacity": 10})
        assert vehicle.id.startswith("truck_")

    def test_unknown_kind_raises(self):
        with pytest.raises(ValidationError, match="kind"):
            vehicle_from_dict({"kind": "Boat", "model": "Sea Ray", "color": "White"})

    def test_non_mapping_raises(self):
        with pytest.raises(ValidationError):
            vehicle_from_dict(["Car", "Civic"])

    def test_missing_model_raises(self):
        with pytest.raises(ValidationError):
            vehicle_from_dict({"kind": "Car", "color": "Blue"})


class TestVehicleToDict:
    """Tests for vehicle_to_dict function."""

    def test_rebuilds_same_state(self):
        truck = Truck("Volvo", "Red", 1000, id="truck_1", cargo_load=800)
        truck.add_maintenance_record(MaintenanceRecord("2024-01-15", "Oil", 100))
        truck.turn_on()
        truck.accelerate()

        rebuilt = vehicle_from_dict(vehicle_to_dict(truck))

        assert vehicle_to_dict(rebuilt) == vehicle_to_dict(truck)


# =============================================================================
# rehydrate_fleet tests
# =============================================================================


class TestRehydrateFleet:
    """Tests for rehydrate_fleet function."""

    def test_skips_bad_records(self, caplog):
        items = [
            {"kind": "Car", "id": "car_1", "model": "Civic", "color": "Blue"},
            {"kind": "Truck", "id": "truck_1", "model": "Volvo", "color": "Red"},
            {"kind": "Boat", "id": "boat_1", "model": "Sea Ray", "color": "White"},
            "junk",
            {"kind": "SportsCar", "id": "sportscar_1", "model": "Ferrari", "color": "Red"},
        ]
        with caplog.at_level(logging.ERROR):
            vehicles = rehydrate_fleet(items)
        assert [v.id for v in vehicles] == ["car_1", "sportscar_1"]
        assert len([r for r in caplog.records if r.levelno == logging.ERROR]) == 3

    def test_skips_records_with_malformed_ids(self, caplog):
        items = [
            {"kind": "Car", "id": [1, 2], "model": "Bad", "color": "Red"},
            {"kind": "Car", "id": 7, "model": "Numbered", "color": "Red"},
            {"kind": "Car", "id": "car_ok", "model": "Civic", "color": "Blue"},
        ]
        with caplog.at_level(logging.ERROR):
            vehicles = rehydrate_fleet(items)
        assert [v.id for v in vehicles] == ["car_ok"]
        assert "Invalid vehicle id" in caplog.text

    def test_non_list_gives_empty_fleet(self):
        assert rehydrate_fleet(None) == []
        assert rehydrate_fleet({"kind": "Car"}) == []


# =============================================================================
# load_fleet / save_fleet tests
# =============================================================================


class TestLoadFleet:
    """Tests for load_fleet function."""

    def test_loads_fleet_file(self, tmp_path):
        yaml_content = """
selected: truck_1
vehicles:
  - kind: Car
    id: car_1
    model: Civic
    color: Blue
  - kind: Truck
    id: truck_1
    model: Volvo
    color: Red
    cargoCapacity: 1000
    cargoLoad: 250
    maintenanceHistory:
      - kind: MaintenanceRecord
        date: '2024-03-15'
        type: Oil Change
        cost: 150
"""
        yaml_file = tmp_path / "garage.yaml"
        yaml_file.write_text(yaml_content)

        fleet = load_fleet(yaml_file)

        assert isinstance(fleet, Fleet)
        assert len(fleet) == 2
        assert fleet.selected.model == "Volvo"
        assert fleet.selected.cargo_load == 250
        assert fleet.selected.maintenance_history[0].cost == 150.0

    def test_unquoted_dates_load(self, tmp_path):
        yaml_file = tmp_path / "garage.yaml"
        yaml_file.write_text(
            """
vehicles:
  - kind: Car
    id: car_1
    model: Civic
    color: Blue
    maintenanceHistory:
      - kind: MaintenanceRecord
        date: 2024-03-15
        type: Oil Change
        cost: 150
"""
        )
        fleet = load_fleet(yaml_file)
        assert fleet.get("car_1").maintenance_history[0].date == "2024-03-15"

    def test_malformed_ids_do_not_abort_load(self, tmp_path):
        yaml_file = tmp_path / "garage.yaml"
        yaml_file.write_text(
            """
selected: [car_ok]
vehicles:
  - kind: Car
    id: [1, 2]
    model: Bad
    color: Red
  - kind: Car
    id: 7
    model: Numbered
    color: Red
  - kind: Car
    id: car_ok
    model: Civic
    color: Blue
"""
        )
        fleet = load_fleet(yaml_file)
        assert [v.id for v in fleet] == ["car_ok"]
        assert fleet.selected is None

    def test_empty_file_gives_empty_fleet(self, tmp_path):
        yaml_file = tmp_path / "garage.yaml"
        yaml_file.write_text("")
        fleet = load_fleet(yaml_file)
        assert len(fleet) == 0
        assert fleet.selected is None

    def test_non_mapping_file_raises(self, tmp_path):
        yaml_file = tmp_path / "garage.yaml"
        yaml_file.write_text("- just\n- a list\n")
        with pytest.raises(ValidationError):
            load_fleet(yaml_file)

    def test_fleet_kwargs_are_passed(self, tmp_path):
        yaml_file = tmp_path / "garage.yaml"
        create_fleet(yaml_file)
        saved = []
        fleet = load_fleet(yaml_file, on_save=saved.append)
        fleet.add(Vehicle("Civic", "Blue"))
        assert saved == [fleet]


class TestSaveFleet:
    """Tests for save_fleet and create_fleet functions."""

    def test_create_fleet(self, tmp_path):
        yaml_file = tmp_path / "garage.yaml"
        create_fleet(yaml_file)
        data = yaml.safe_load(yaml_file.read_text())
        assert data == {"selected": None, "vehicles": []}

    def test_save_writes_camel_case_records(self, tmp_path):
        yaml_file = tmp_path / "garage.yaml"
        ferrari = SportsCar("Ferrari", "Red", id="sportscar_1")
        fleet = Fleet([ferrari], selected_id="sportscar_1")

        save_fleet(yaml_file, fleet)

        data = yaml.safe_load(yaml_file.read_text())
        assert data["selected"] == "sportscar_1"
        record = data["vehicles"][0]
        assert record["kind"] == "SportsCar"
        assert record["maxSpeed"] == 250
        assert record["engineOn"] is False
        assert record["turbo"] is False
        assert record["maintenanceHistory"] == []

    def test_save_then_load_keeps_state(self, tmp_path):
        yaml_file = tmp_path / "garage.yaml"
        create_fleet(yaml_file)
        fleet = load_fleet(yaml_file, on_save=lambda f: save_fleet(yaml_file, f))

        volvo = fleet.add(Truck("Volvo", "Red", 1000, id="truck_1"))
        fleet.add(SportsCar("Ferrari", "Red", id="sportscar_1"))
        fleet.select("truck_1")
        volvo.load(800)
        volvo.turn_on()
        volvo.accelerate(5)
        volvo.add_maintenance_record(
            MaintenanceRecord("2024-03-15", "Oil Change", 150, "synthetic")
        )

        reloaded = load_fleet(yaml_file)

        assert [v.id for v in reloaded] == ["truck_1", "sportscar_1"]
        assert reloaded.selected_id == "truck_1"
        truck = reloaded.get("truck_1")
        assert truck.engine_on is True
        assert truck.cargo_load == 800
        assert truck.speed == pytest.approx(2.2)
        assert truck.maintenance_history[0].description == "synthetic"

    def test_saves_unicode_unescaped(self, tmp_path):
        yaml_file = tmp_path / "garage.yaml"
        fleet = Fleet([Vehicle("Fusca", "Azul-céu", id="car_1")])
        save_fleet(yaml_file, fleet)
        assert "Azul-céu" in yaml_file.read_text(encoding="utf-8")
