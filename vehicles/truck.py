"""Truck class - a vehicle that carries cargo."""

import logging
from typing import Any, List, Optional

from .calculations import (
    format_kg,
    load_factor,
    load_gauge,
    load_percent,
    parse_number,
)
from .hooks import VehicleHooks
from .maintenance_record import ValidationError
from .severity import Severity, VehicleKind
from .vehicle import SummaryRow, Vehicle

logger = logging.getLogger(__name__)

# Cargo weights are kept to the gram.
CARGO_DECIMALS = 3


class Truck(Vehicle):
    """
    A vehicle with a cargo bay.

    Cargo slows acceleration down to 30% of normal when full. Loading never
    exceeds capacity; an overloaded truck (only possible by assigning cargo_load
    directly) refuses to start.

    Loads are rounded to CARGO_DECIMALS, so load(x) followed by unload(x)
    restores the previous load for any weight given to the gram.
    """

    kind = VehicleKind.TRUCK
    default_image = "images/truck.png"

    def __init__(
        self,
        model: str,
        color: str,
        cargo_capacity: Any,
        max_speed: Any = 120,
        id: Optional[str] = None,
        maintenance_history: Optional[list] = None,
        cargo_load: Any = 0,
        hooks: Optional[VehicleHooks] = None,
    ):
        capacity = parse_number(cargo_capacity)
        if capacity is None or capacity <= 0:
            raise ValidationError(
                f"Invalid cargo capacity {cargo_capacity!r} (must be > 0)."
            )
        Vehicle.__init__(self, model, color, max_speed, id, maintenance_history, hooks)
        self.cargo_capacity = capacity
        initial = parse_number(cargo_load)
        self.cargo_load = (
            min(round(initial, CARGO_DECIMALS), capacity)
            if initial is not None and initial >= 0
            else 0.0
        )

    @property
    def free_capacity(self) -> float:
        return self.cargo_capacity - self.cargo_load

    def load(self, weight: Any) -> bool:
        amount = parse_number(weight)
        if amount is None or amount <= 0:
            return self._reject("Enter a valid weight.", Severity.ERROR, True)
        if self.cargo_load + amount > self.cargo_capacity:
            return self._reject(
                f"Capacity exceeded! Free: {self.free_capacity:.0f} kg.",
                Severity.WARNING,
                True,
            )
        self.cargo_load = min(
            round(self.cargo_load + amount, CARGO_DECIMALS), self.cargo_capacity
        )
        logger.info(
            "%s: loaded %.0f kg, now %.0f kg", self.model, amount, self.cargo_load
        )
        self._state_changed()
        return True

    def unload(self, weight: Any) -> bool:
        amount = parse_number(weight)
        if amount is None or amount <= 0:
            return self._reject("Enter a valid weight.", Severity.ERROR, True)
        if amount > self.cargo_load:
            return self._reject(
                f"Cannot unload {amount:.0f} kg. Current: {self.cargo_load:.0f} kg.",
                Severity.WARNING,
                True,
            )
        self.cargo_load = round(self.cargo_load - amount, CARGO_DECIMALS)
        logger.info(
            "%s: unloaded %.0f kg, now %.0f kg", self.model, amount, self.cargo_load
        )
        self._state_changed()
        return True

    def turn_on(self) -> bool:
        if self.cargo_load > self.cargo_capacity:
            return self._reject(
                "Overloaded! Remove the excess cargo.", Severity.ERROR, True
            )
        return self._start_engine()

    def accelerate(self, delta: Any = 5) -> bool:
        factor = load_factor(self.cargo_load, self.cargo_capacity)
        return self._apply_acceleration(max(0, parse_number(delta) or 0) * factor)

    def _extra_rows(self) -> List[SummaryRow]:
        percent = load_percent(self.cargo_load, self.cargo_capacity)
        return [
            ("Capacity", format_kg(self.cargo_capacity)),
            ("Current load", f"{format_kg(self.cargo_load)} ({percent:.1f}%)"),
            ("Load", load_gauge(percent)),
        ]

    def to_dict(self) -> dict:
        data = Vehicle.to_dict(self)
        data["cargoCapacity"] = self.cargo_capacity
        data["cargoLoad"] = self.cargo_load
        return data
