"""YAML loading and saving utilities for fleet data."""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Union

import yaml

from .calculations import parse_number
from .fleet import Fleet
from .maintenance_record import ValidationError
from .severity import VehicleKind
from .sports_car import SportsCar
from .truck import Truck
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


def _build_car(data: Dict[str, Any], common: Dict[str, Any]) -> Vehicle:
    return Vehicle(max_speed=data.get("maxSpeed", 180), **common)


def _build_sports_car(data: Dict[str, Any], common: Dict[str, Any]) -> Vehicle:
    return SportsCar(
        max_speed=data.get("maxSpeed", 250),
        turbo=data.get("turbo") is True,
        **common,
    )


def _build_truck(data: Dict[str, Any], common: Dict[str, Any]) -> Vehicle:
    return Truck(
        cargo_capacity=data.get("cargoCapacity"),
        max_speed=data.get("maxSpeed", 120),
        cargo_load=data.get("cargoLoad", 0),
        **common,
    )


BUILDERS: Dict[VehicleKind, Callable[[Dict[str, Any], Dict[str, Any]], Vehicle]] = {
    VehicleKind.CAR: _build_car,
    VehicleKind.SPORTS_CAR: _build_sports_car,
    VehicleKind.TRUCK: _build_truck,
}


def _restore_motion(vehicle: Vehicle, data: Dict[str, Any]) -> None:
    """Apply stored engine/speed state, keeping the state machine invariants."""
    vehicle.engine_on = data.get("engineOn") is True
    speed = parse_number(data.get("speed")) or 0.0
    if vehicle.engine_on:
        vehicle.speed = min(max(0.0, speed), vehicle.max_speed)
    else:
        vehicle.speed = 0.0
    if isinstance(vehicle, SportsCar) and not vehicle.engine_on:
        vehicle.turbo = False


def vehicle_from_dict(data: Any) -> Vehicle:
    """
    Build a live vehicle from a storage record.

    Dispatches on the record's 'kind'. Raises ValidationError when the
    record is not a mapping, names an unknown kind, or holds invalid fields.
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Vehicle record must be a mapping, got {data!r}")
    try:
        kind = VehicleKind(data.get("kind"))
    except ValueError:
        raise ValidationError(f"Unknown vehicle kind {data.get('kind')!r}")

    common = {
        "model": data.get("model"),
        "color": data.get("color"),
        "id": data.get("id"),
        "maintenance_history": data.get("maintenanceHistory"),
    }
    vehicle = BUILDERS[kind](data, common)
    _restore_motion(vehicle, data)
    return vehicle


def vehicle_to_dict(vehicle: Vehicle) -> Dict[str, Any]:
    """Serialize a vehicle to the YAML dict format (camelCase keys)."""
    return vehicle.to_dict()


def rehydrate_fleet(items: Any) -> List[Vehicle]:
    """
    Build every well-formed vehicle in items.

    Malformed records are logged and skipped; the rest still load.
    """
    if not isinstance(items, list):
        return []
    vehicles = []
    for index, item in enumerate(items):
        try:
            vehicles.append(vehicle_from_dict(item))
        except ValidationError as e:
            logger.error("Skipped vehicle record #%d: %s", index, e)
    return vehicles


def load_fleet(filename: Union[str, Path], **fleet_kwargs) -> Fleet:
    """Load a fleet from a YAML file."""
    with open(filename, "rb") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader) or {}
    if not isinstance(data, dict):
        raise ValidationError(f"{filename}: fleet file must hold a mapping")
    return Fleet(
        rehydrate_fleet(data.get("vehicles")),
        selected_id=data.get("selected"),
        **fleet_kwargs,
    )


def _write(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w", encoding="utf-8") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def save_fleet(filename: Union[str, Path], fleet: Fleet) -> None:
    """Write the whole fleet, including the selected vehicle, to a YAML file."""
    _write(
        filename,
        {
            "selected": fleet.selected_id,
            "vehicles": [vehicle_to_dict(v) for v in fleet],
        },
    )
    logger.debug("Saved %d vehicles to %s", len(fleet), filename)


def create_fleet(filename: Union[str, Path]) -> None:
    """Create a new, empty fleet YAML file."""
    _write(filename, {"selected": None, "vehicles": []})
