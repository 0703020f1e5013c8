#!/usr/bin/env python3
"""
Unified CLI for the vehicle garage.

Commands:
  init        - Create an empty fleet file
  list        - List vehicles in the fleet
  add         - Add a car, sports car or truck
  remove      - Remove a vehicle
  select      - Select the vehicle to watch
  show        - Show a vehicle's details
  on / off    - Turn the engine on or off
  accelerate  - Speed up
  brake       - Slow down
  honk        - Sound the horn
  turbo       - Engage or disengage a sports car's turbo
  load/unload - Move cargo on a truck
  log         - Add a maintenance record
  history     - View maintenance history or scheduled services
"""

import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from vehicles import (
    Fleet,
    MaintenanceRecord,
    Settings,
    Severity,
    SportsCar,
    Truck,
    ValidationError,
    Vehicle,
    create_fleet,
    load_fleet,
    save_fleet,
)
from vehicles.calculations import format_brl

logger = logging.getLogger("garage")

# =============================================================================
# Formatting helpers
# =============================================================================


def format_notice(message: str, severity: Severity) -> str:
    """Format a vehicle notice for the terminal."""
    return f"[{severity.value}] {message}"


def format_speed(vehicle: Vehicle) -> str:
    return f"{vehicle.speed:.0f}/{vehicle.max_speed:.0f} km/h"


def make_fleet_table(fleet: Fleet) -> List[List[str]]:
    """Convert the fleet to table rows, marking the selected vehicle."""
    rows = []
    for vehicle in fleet:
        rows.append(
            [
                "*" if vehicle.id == fleet.selected_id else "",
                vehicle.id,
                vehicle.kind.value,
                vehicle.model,
                vehicle.color,
                vehicle.state.value,
                format_speed(vehicle),
            ]
        )
    return rows


def make_history_table(records: List[MaintenanceRecord]) -> List[List[str]]:
    """Convert maintenance records to table rows."""
    return [[record.format()] for record in records]


def print_notice(message: str, severity: Severity, duration_ms: int) -> None:
    print(format_notice(message, severity))


def play_cue(name: str) -> None:
    logger.debug("cue: %s", name)


def print_vehicle(vehicle: Vehicle) -> None:
    print(tabulate(vehicle.describe(), tablefmt="plain"))


# =============================================================================
# Fleet helpers
# =============================================================================


def open_fleet(fleet_file: Path) -> Fleet:
    """Load the fleet with hooks that print notices and save on change."""
    return load_fleet(
        fleet_file,
        on_save=lambda fleet: save_fleet(fleet_file, fleet),
        notify=print_notice,
        play_cue=play_cue,
    )


def find_vehicle(fleet: Fleet, vehicle_id: Optional[str]) -> Optional[Vehicle]:
    """Find a vehicle by id, falling back to the selected one."""
    if vehicle_id is None:
        vehicle = fleet.selected
        if vehicle is None:
            print("Error: No vehicle selected")
        return vehicle
    vehicle = fleet.get(vehicle_id)
    if vehicle is None:
        print(f"Error: Unknown vehicle '{vehicle_id}'")
    return vehicle


# =============================================================================
# Fleet commands
# =============================================================================


def cmd_init(args):
    """Create an empty fleet file."""
    if args.fleet.exists():
        print(f"Error: File already exists: {args.fleet}")
        return 1
    create_fleet(args.fleet)
    print(f"Created {args.fleet}")
    return 0


def cmd_list(args):
    """List vehicles in the fleet."""
    fleet = open_fleet(args.fleet)
    print(f"Vehicles: {len(fleet)}")
    print()
    if not len(fleet):
        print("No vehicles in the garage.")
        return 0
    headers = ["", "ID", "Type", "Model", "Color", "State", "Speed"]
    print(tabulate(make_fleet_table(fleet), headers=headers, tablefmt="simple"))
    return 0


def cmd_add(args):
    """Add a vehicle to the fleet."""
    fleet = open_fleet(args.fleet)
    if args.kind == "truck":
        if args.capacity is None:
            print("Error: --capacity is required for trucks")
            return 1
        vehicle = Truck(
            args.model,
            args.color,
            args.capacity,
            max_speed=args.max_speed if args.max_speed is not None else 120,
            cargo_load=args.load or 0,
        )
    elif args.kind == "sportscar":
        vehicle = SportsCar(
            args.model,
            args.color,
            max_speed=args.max_speed if args.max_speed is not None else 250,
        )
    else:
        vehicle = Vehicle(
            args.model,
            args.color,
            max_speed=args.max_speed if args.max_speed is not None else 180,
        )
    fleet.add(vehicle)
    print(f"Added {vehicle.kind.value} {vehicle.model} ({vehicle.id})")
    return 0


def cmd_remove(args):
    """Remove a vehicle from the fleet."""
    fleet = open_fleet(args.fleet)
    if find_vehicle(fleet, args.vehicle_id) is None:
        return 1
    vehicle = fleet.remove(args.vehicle_id)
    print(f"Removed {vehicle.model} ({vehicle.id})")
    return 0


def cmd_select(args):
    """Select the vehicle to watch."""
    fleet = open_fleet(args.fleet)
    if find_vehicle(fleet, args.vehicle_id) is None:
        return 1
    fleet.on_refresh = print_vehicle
    fleet.select(args.vehicle_id)
    return 0


def cmd_show(args):
    """Show a vehicle's details."""
    fleet = open_fleet(args.fleet)
    vehicle = find_vehicle(fleet, args.vehicle_id)
    if vehicle is None:
        return 1
    print_vehicle(vehicle)
    return 0


# =============================================================================
# Vehicle commands
# =============================================================================


def run_action(args, action) -> int:
    """Apply an action to a vehicle; exit 1 if the vehicle rejected it."""
    fleet = open_fleet(args.fleet)
    fleet.on_refresh = print_vehicle
    vehicle = find_vehicle(fleet, args.vehicle_id)
    if vehicle is None:
        return 1
    result = action(vehicle)
    return 0 if result else 1


def cmd_on(args):
    return run_action(args, lambda v: v.turn_on())


def cmd_off(args):
    return run_action(args, lambda v: v.turn_off())


def cmd_accelerate(args):
    def action(vehicle):
        if args.by is None:
            return vehicle.accelerate()
        return vehicle.accelerate(args.by)

    return run_action(args, action)


def cmd_brake(args):
    def action(vehicle):
        if args.by is None:
            return vehicle.brake()
        return vehicle.brake(args.by)

    return run_action(args, action)


def cmd_honk(args):
    return run_action(args, lambda v: v.honk())


def cmd_turbo(args):
    def action(vehicle):
        if not isinstance(vehicle, SportsCar):
            print(f"Error: {vehicle.model} has no turbo")
            return None
        if args.state == "on":
            return vehicle.engage_turbo()
        if not vehicle.disengage_turbo():
            print(format_notice(f"{vehicle.model}: Turbo is already off.", Severity.INFO))
        return True

    return run_action(args, action)


def cmd_cargo(args):
    def action(vehicle):
        if not isinstance(vehicle, Truck):
            print(f"Error: {vehicle.model} does not carry cargo")
            return None
        if args.command == "load":
            return vehicle.load(args.weight)
        return vehicle.unload(args.weight)

    return run_action(args, action)


# =============================================================================
# Maintenance commands
# =============================================================================


def cmd_log(args):
    """Add a maintenance record to a vehicle."""
    fleet = open_fleet(args.fleet)
    vehicle = find_vehicle(fleet, args.vehicle_id)
    if vehicle is None:
        return 1

    record = MaintenanceRecord(
        args.date or datetime.now(timezone.utc).date().isoformat(),
        args.service_type,
        args.cost,
        args.description or "",
    )

    print(f"Adding maintenance record to {vehicle.model}:")
    print(f"  {record.format()}")
    if record.is_future_scheduled():
        print("  (scheduled)")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    vehicle.add_maintenance_record(record)
    print("Record saved.")
    return 0


def cmd_history(args):
    """View maintenance history or scheduled services."""
    fleet = open_fleet(args.fleet)
    vehicle = find_vehicle(fleet, args.vehicle_id)
    if vehicle is None:
        return 1

    if args.scheduled:
        records = sorted(vehicle.future_scheduled(), key=lambda m: m.date)
        title = "Scheduled services"
    else:
        records = vehicle.past_records()
        title = "Maintenance history"

    total_cost = sum(m.cost for m in records)

    print(f"Vehicle: {vehicle.model} ({vehicle.id})")
    print(f"{title}: {len(records)}")
    if total_cost > 0:
        print(f"Total cost: {format_brl(total_cost)}")
    print()

    if not records:
        print("No records found.")
        return 0

    print(tabulate(make_history_table(records), headers=["Record"], tablefmt="simple"))
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle garage",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s init
  %(prog)s add truck Volvo Red --capacity 1000
  %(prog)s add sportscar Ferrari Red
  %(prog)s list
  %(prog)s on truck_1700000000000_a1b2c3
  %(prog)s load truck_1700000000000_a1b2c3 800
  %(prog)s accelerate truck_1700000000000_a1b2c3 --by 5
  %(prog)s log car_1700000000000_d4e5f6 "Oil Change" --cost 150 --date 2024-03-15
  %(prog)s history car_1700000000000_d4e5f6 --scheduled
""",
    )
    parser.add_argument(
        "--fleet",
        type=Path,
        default=Path(settings.fleet_file),
        help=f"Path to fleet YAML file (default: {settings.fleet_file})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init", help="Create an empty fleet file")
    subparsers.add_parser("list", help="List vehicles in the fleet")

    add_parser = subparsers.add_parser("add", help="Add a vehicle")
    add_parser.add_argument("kind", choices=["car", "sportscar", "truck"])
    add_parser.add_argument("model", type=str, help="Model name")
    add_parser.add_argument("color", type=str, help="Color")
    add_parser.add_argument("--max-speed", type=float, help="Maximum speed (km/h)")
    add_parser.add_argument(
        "--capacity", type=float, help="Cargo capacity in kg (trucks only)"
    )
    add_parser.add_argument(
        "--load", type=float, help="Initial cargo in kg (trucks only)"
    )

    for name, help_text in [
        ("remove", "Remove a vehicle"),
        ("select", "Select the vehicle to watch"),
        ("on", "Turn the engine on"),
        ("off", "Turn the engine off"),
        ("honk", "Sound the horn"),
    ]:
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("vehicle_id", type=str)

    show_parser = subparsers.add_parser("show", help="Show a vehicle's details")
    show_parser.add_argument(
        "vehicle_id", type=str, nargs="?", help="Vehicle id (default: selected)"
    )

    for name, help_text in [("accelerate", "Speed up"), ("brake", "Slow down")]:
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("vehicle_id", type=str)
        sub.add_argument(
            "--by", type=float, help="Amount in km/h (default depends on the vehicle)"
        )

    turbo_parser = subparsers.add_parser("turbo", help="Engage or disengage the turbo")
    turbo_parser.add_argument("vehicle_id", type=str)
    turbo_parser.add_argument("state", choices=["on", "off"])

    for name, help_text in [("load", "Load cargo"), ("unload", "Unload cargo")]:
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("vehicle_id", type=str)
        sub.add_argument("weight", type=str, help="Weight in kg")

    log_parser = subparsers.add_parser("log", help="Add a maintenance record")
    log_parser.add_argument("vehicle_id", type=str)
    log_parser.add_argument(
        "service_type", type=str, help="Service performed (e.g., 'Oil Change')"
    )
    log_parser.add_argument("--cost", type=str, required=True, help="Cost of service")
    log_parser.add_argument(
        "--date", type=str, help="Service date in YYYY-MM-DD format (default: today)"
    )
    log_parser.add_argument("--description", type=str, help="Notes about the service")
    log_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    history_parser = subparsers.add_parser("history", help="View maintenance history")
    history_parser.add_argument("vehicle_id", type=str)
    history_parser.add_argument(
        "--scheduled",
        action="store_true",
        help="Show scheduled (future) services instead of past ones",
    )

    return parser


COMMANDS = {
    "init": cmd_init,
    "list": cmd_list,
    "add": cmd_add,
    "remove": cmd_remove,
    "select": cmd_select,
    "show": cmd_show,
    "on": cmd_on,
    "off": cmd_off,
    "accelerate": cmd_accelerate,
    "brake": cmd_brake,
    "honk": cmd_honk,
    "turbo": cmd_turbo,
    "load": cmd_cargo,
    "unload": cmd_cargo,
    "log": cmd_log,
    "history": cmd_history,
}


def main(argv: Optional[List[str]] = None):
    settings = Settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = build_parser(settings).parse_args(argv)

    # Validate fleet file exists
    if args.command != "init" and not args.fleet.exists():
        print(f"Error: File not found: {args.fleet}")
        return 1

    try:
        return COMMANDS[args.command](args)
    except ValidationError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
