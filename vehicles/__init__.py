"""
Vehicle garage models.

This package provides the vehicle state machines and their maintenance data:
- Severity / VehicleKind: notice levels and the vehicle kind discriminator
- MaintenanceRecord: a validated, read-only service event
- VehicleHooks: side effects a vehicle triggers (notices, cues, refresh, save)
- Vehicle / SportsCar / Truck: ignition, speed, turbo and cargo rules
- Fleet: the vehicle collection and the selected vehicle
- loader: YAML persistence and rehydration of stored fleets
"""

from .severity import Severity, VehicleKind
from .maintenance_record import MaintenanceRecord, ValidationError, rehydrate_history
from .hooks import VehicleHooks
from .vehicle import Vehicle, VehicleState
from .sports_car import SportsCar
from .truck import Truck
from .fleet import Fleet
from .calculations import load_factor, turbo_factor, parse_number
from .loader import (
    create_fleet,
    load_fleet,
    rehydrate_fleet,
    save_fleet,
    vehicle_from_dict,
    vehicle_to_dict,
)
from .config import Settings

__all__ = [
    "Severity",
    "VehicleKind",
    "MaintenanceRecord",
    "ValidationError",
    "rehydrate_history",
    "VehicleHooks",
    "Vehicle",
    "VehicleState",
    "SportsCar",
    "Truck",
    "Fleet",
    "load_factor",
    "turbo_factor",
    "parse_number",
    "create_fleet",
    "load_fleet",
    "rehydrate_fleet",
    "save_fleet",
    "vehicle_from_dict",
    "vehicle_to_dict",
    "Settings",
]
