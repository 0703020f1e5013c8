"""SportsCar class - a car with a turbo boost."""

import logging
from typing import Any, List, Optional

from .calculations import parse_number, turbo_factor
from .hooks import VehicleHooks
from .severity import Severity, VehicleKind
from .vehicle import SummaryRow, Vehicle

logger = logging.getLogger(__name__)

TURBO_CUTOFF_SPEED = 30


class SportsCar(Vehicle):
    """
    A car with a turbo that multiplies acceleration by 1.5.

    The turbo needs the engine running. It is dropped when the engine is
    turned off and when braking leaves the car below TURBO_CUTOFF_SPEED.
    """

    kind = VehicleKind.SPORTS_CAR
    default_image = "images/sportscar.png"

    def __init__(
        self,
        model: str,
        color: str,
        max_speed: Any = 250,
        id: Optional[str] = None,
        maintenance_history: Optional[list] = None,
        turbo: bool = False,
        hooks: Optional[VehicleHooks] = None,
    ):
        Vehicle.__init__(self, model, color, max_speed, id, maintenance_history, hooks)
        self.turbo = bool(turbo)

    def engage_turbo(self) -> bool:
        if not self.engine_on:
            return self._reject(
                "Turn the car on to engage the turbo!", Severity.ERROR, True
            )
        if self.turbo:
            return self._reject("Turbo is already engaged!", Severity.WARNING)
        self.turbo = True
        logger.info("%s: turbo engaged", self.model)
        self._play("turbo")
        self.alert("Turbo engaged!", Severity.SUCCESS, 3000)
        self._state_changed()
        return True

    def disengage_turbo(self) -> bool:
        if not self.turbo:
            return False
        self.turbo = False
        logger.info("%s: turbo disengaged", self.model)
        self._state_changed()
        return True

    def accelerate(self, delta: Any = 20) -> bool:
        amount = max(0, parse_number(delta) or 0) * turbo_factor(self.turbo)
        return self._apply_acceleration(amount)

    def turn_off(self) -> bool:
        turned_off = self._stop_engine()
        if turned_off and self.turbo:
            self.disengage_turbo()
        return turned_off

    def brake(self, delta: Any = 25) -> bool:
        braked = self._apply_braking(parse_number(delta) or 0)
        if braked and self.turbo and self.speed < TURBO_CUTOFF_SPEED:
            logger.info("%s: turbo cut at low speed", self.model)
            self.disengage_turbo()
            self.alert("Turbo disengaged (low speed).", Severity.INFO)
        return braked

    def _extra_rows(self) -> List[SummaryRow]:
        return [("Turbo", "ENGAGED" if self.turbo else "Off")]

    def to_dict(self) -> dict:
        data = Vehicle.to_dict(self)
        data["turbo"] = self.turbo
        return data
