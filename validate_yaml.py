#!/usr/bin/env python3
"""
Validate fleet YAML files.

Two passes: the JSON schema in schema.yaml checks the shape of each record,
then fleet rules check what a schema cannot express (unique ids, a selected
id that exists, speeds and cargo within their limits).
"""
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from jsonschema import Draft7Validator

from vehicles import Settings

SCHEMA_FILE = Path(__file__).parent / "schema.yaml"


def load_schema(path: Path = SCHEMA_FILE) -> dict:
    """Load the fleet JSON schema (stored as YAML)."""
    with open(path) as f:
        return yaml.load(f, Loader=yaml.SafeLoader)


def _format_path(path) -> str:
    return ".".join(str(p) for p in path)


def schema_errors(data: Any, schema: dict) -> List[str]:
    """Every schema violation in data, ordered by location."""
    validator = Draft7Validator(schema)
    errors = []
    for error in sorted(validator.iter_errors(data), key=lambda e: list(map(str, e.path))):
        errors.append(f"Schema validation error: {error.message}")
        if error.path:
            errors.append(f"  at path: {_format_path(error.path)}")
    return errors


def _vehicle_rule_errors(index: int, record: Dict[str, Any]) -> List[str]:
    errors = []
    where = f"vehicles.{index}"
    speed = record.get("speed", 0)
    max_speed = record.get("maxSpeed")
    if max_speed is not None and speed > max_speed:
        errors.append(f"{where}: speed {speed} exceeds maxSpeed {max_speed}")
    if speed > 0 and not record.get("engineOn", False):
        errors.append(f"{where}: moving with the engine off")
    if record.get("turbo") and not record.get("engineOn", False):
        errors.append(f"{where}: turbo engaged with the engine off")
    capacity = record.get("cargoCapacity")
    load = record.get("cargoLoad", 0)
    if capacity is not None and load > capacity:
        errors.append(f"{where}: cargoLoad {load} exceeds cargoCapacity {capacity}")
    return errors


def fleet_rule_errors(data: Dict[str, Any]) -> List[str]:
    """
    Check fleet-wide rules on schema-valid data.

    Vehicle ids must be unique and 'selected' must name one of them. Each
    vehicle must respect its speed and cargo limits.
    """
    errors = []
    seen = set()
    for index, record in enumerate(data.get("vehicles", [])):
        vehicle_id = record["id"]
        if vehicle_id in seen:
            errors.append(f"vehicles.{index}: duplicate id {vehicle_id!r}")
        seen.add(vehicle_id)
        errors.extend(_vehicle_rule_errors(index, record))
    selected = data.get("selected")
    if selected is not None and selected not in seen:
        errors.append(f"selected: unknown vehicle id {selected!r}")
    return errors


def validate_fleet_file(filepath: Path, schema: dict) -> List[str]:
    """Validate a single fleet YAML file. Returns list of errors."""
    try:
        with open(filepath, "rb") as f:
            data = yaml.load(f, Loader=yaml.SafeLoader)
    except yaml.YAMLError as e:
        return [f"YAML parse error: {e}"]
    except OSError as e:
        return [f"Error: {e}"]

    errors = schema_errors(data, schema)
    if errors:
        return errors
    return fleet_rule_errors(data)


def main(argv: Optional[List[str]] = None):
    """Validate the given fleet files, or the configured fleet file."""
    schema = load_schema()
    argv = sys.argv[1:] if argv is None else argv
    yaml_files = [Path(arg) for arg in argv] or [Path(Settings().fleet_file)]

    all_valid = True
    for filepath in yaml_files:
        errors = validate_fleet_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
