"""Vehicle class - the base state machine shared by every kind of vehicle."""

import logging
import secrets
import time
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple

from .calculations import calc_slow_down, calc_speed_up, parse_number
from .hooks import VehicleHooks
from .maintenance_record import MaintenanceRecord, ValidationError, rehydrate_history
from .severity import Severity, VehicleKind

logger = logging.getLogger(__name__)

SummaryRow = Tuple[str, str]

MAINTENANCE_LABEL = "Maintenance"
DESCRIBE_FALLBACK: List[SummaryRow] = [
    ("Error", "Unable to display vehicle information.")
]


class VehicleState(Enum):
    """Engine/motion state derived from engine_on and speed."""

    OFF = "off"
    IDLE = "idle"
    MOVING = "moving"


def generate_vehicle_id(kind: VehicleKind) -> str:
    """Unique id from the current time plus a random suffix."""
    return f"{kind.id_prefix}_{int(time.time() * 1000)}_{secrets.token_hex(3)}"


def insert_before_maintenance(
    rows: List[SummaryRow], extra: Iterable[SummaryRow]
) -> List[SummaryRow]:
    """Insert extra rows immediately before the maintenance count row."""
    labels = [label for label, _ in rows]
    if MAINTENANCE_LABEL not in labels:
        return rows + list(extra)
    index = labels.index(MAINTENANCE_LABEL)
    return rows[:index] + list(extra) + rows[index:]


class Vehicle:
    """
    A plain car: ignition, speed and maintenance history.

    Operations return True when they changed the vehicle and False when a
    precondition rejected them. A rejection produces exactly one notice.
    A success calls hooks.on_state_changed() then hooks.persist_fleet().

    Shared behavior is split into step methods (_start_engine, _stop_engine,
    _apply_acceleration, _apply_braking) that other kinds compose.
    """

    kind = VehicleKind.CAR
    default_image = "images/car.png"
    notice_duration_ms = 5000

    def __init__(
        self,
        model: str,
        color: str,
        max_speed: Any = 180,
        id: Optional[str] = None,
        maintenance_history: Optional[list] = None,
        hooks: Optional[VehicleHooks] = None,
    ):
        if (
            not isinstance(model, str)
            or not model.strip()
            or not isinstance(color, str)
            or not color.strip()
        ):
            raise ValidationError("Model and color are required.")
        top_speed = parse_number(max_speed)
        if top_speed is None:
            raise ValidationError(f"Invalid max speed: {max_speed!r}")
        if id is not None and (not isinstance(id, str) or not id.strip()):
            raise ValidationError(f"Invalid vehicle id: {id!r}")

        self.id = id.strip() if id is not None else generate_vehicle_id(self.kind)
        self.model = model.strip()
        self.color = color.strip()
        self.max_speed = max(0.0, top_speed)
        self.engine_on = False
        self.speed = 0.0
        self.maintenance_history = sorted(
            rehydrate_history(maintenance_history or [], owner=self.model),
            key=lambda m: m.date,
            reverse=True,
        )
        self.image = self.default_image
        self.hooks = hooks or VehicleHooks()

    @property
    def state(self) -> VehicleState:
        if not self.engine_on:
            return VehicleState.OFF
        if self.speed > 0:
            return VehicleState.MOVING
        return VehicleState.IDLE

    # -------------------------------------------------------------------------
    # Side effects
    # -------------------------------------------------------------------------

    def alert(
        self,
        message: str,
        severity: Severity = Severity.INFO,
        duration_ms: Optional[int] = None,
    ) -> None:
        """Send a notice prefixed with this vehicle's model."""
        self.hooks.notify(
            f"{self.model}: {message}",
            severity,
            duration_ms or self.notice_duration_ms,
        )

    def _play(self, cue: str) -> None:
        logger.debug("%s: cue %s", self.model, cue)
        self.hooks.play_cue(cue)

    def _reject(
        self, message: str, severity: Severity, error_cue: bool = False
    ) -> bool:
        logger.debug("%s: rejected (%s)", self.model, message)
        self.alert(message, severity)
        if error_cue:
            self._play("error")
        return False

    def _state_changed(self) -> None:
        self.hooks.on_state_changed()
        self.hooks.persist_fleet()

    # -------------------------------------------------------------------------
    # Steps shared by every kind
    # -------------------------------------------------------------------------

    def _start_engine(self) -> bool:
        if self.engine_on:
            return self._reject("Vehicle is already on.", Severity.WARNING)
        self.engine_on = True
        logger.info("%s: engine on", self.model)
        self._play("ignition")
        self._state_changed()
        return True

    def _stop_engine(self) -> bool:
        if not self.engine_on:
            return self._reject("Vehicle is already off.", Severity.WARNING)
        if self.speed > 0:
            return self._reject(
                "Stop the vehicle before turning it off!", Severity.ERROR, True
            )
        self.engine_on = False
        logger.info("%s: engine off", self.model)
        self._play("shutdown")
        self._state_changed()
        return True

    def _apply_acceleration(self, amount: float) -> bool:
        if not self.engine_on:
            return self._reject(
                "Turn the vehicle on to accelerate!", Severity.ERROR, True
            )
        new_speed = calc_speed_up(self.speed, amount, self.max_speed)
        if new_speed == self.speed:
            if self.speed == self.max_speed:
                return self._reject("Maximum speed reached!", Severity.WARNING)
            return self._reject("Acceleration had no effect.", Severity.INFO)
        self.speed = new_speed
        logger.info("%s: accelerating to %.0f km/h", self.model, self.speed)
        self._play("accelerate")
        self._state_changed()
        return True

    def _apply_braking(self, amount: float) -> bool:
        if self.speed == 0:
            return self._reject("Vehicle is already stopped.", Severity.WARNING)
        self.speed = calc_slow_down(self.speed, amount)
        logger.info("%s: braking to %.0f km/h", self.model, self.speed)
        self._play("brake")
        self._state_changed()
        return True

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def turn_on(self) -> bool:
        return self._start_engine()

    def turn_off(self) -> bool:
        return self._stop_engine()

    def accelerate(self, delta: Any = 10) -> bool:
        return self._apply_acceleration(parse_number(delta) or 0)

    def brake(self, delta: Any = 20) -> bool:
        return self._apply_braking(parse_number(delta) or 0)

    def honk(self) -> bool:
        """Sound the horn. Nothing durable changes, so nothing is persisted."""
        logger.info("%s: honk", self.model)
        self._play("horn")
        self.alert("Honk!", Severity.INFO, 2000)
        return True

    def add_maintenance_record(self, record: MaintenanceRecord) -> bool:
        """Add a record to the history, newest first."""
        if not isinstance(record, MaintenanceRecord):
            raise TypeError(
                f"Expected a MaintenanceRecord, got {type(record).__name__}"
            )
        self.maintenance_history.append(record)
        self.maintenance_history.sort(key=lambda m: m.date, reverse=True)
        logger.info("%s: added maintenance (%s)", self.model, record.service_type)
        self._state_changed()
        return True

    def past_records(self) -> List[MaintenanceRecord]:
        """Records dated today or earlier."""
        try:
            return [m for m in self.maintenance_history if not m.is_future_scheduled()]
        except Exception:
            logger.exception("%s: could not filter past records", self.model)
            return []

    def future_scheduled(self) -> List[MaintenanceRecord]:
        """Records scheduled after today."""
        try:
            return [m for m in self.maintenance_history if m.is_future_scheduled()]
        except Exception:
            logger.exception("%s: could not filter scheduled records", self.model)
            return []

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    def _extra_rows(self) -> List[SummaryRow]:
        """Kind-specific rows shown before the maintenance count."""
        return []

    def _summary_rows(self) -> List[SummaryRow]:
        rows = [
            ("ID", self.id),
            ("Type", self.kind.value),
            ("Model", self.model),
            ("Color", self.color),
            ("Image", self.image),
            ("Status", "On" if self.engine_on else "Off"),
            ("Speed", f"{self.speed:.0f} km/h (max: {self.max_speed:.0f} km/h)"),
            (
                MAINTENANCE_LABEL,
                f"{len(self.past_records())} past | "
                f"{len(self.future_scheduled())} scheduled",
            ),
        ]
        return insert_before_maintenance(rows, self._extra_rows())

    def describe(self) -> List[SummaryRow]:
        """Summary rows of (label, value) for display."""
        try:
            return self._summary_rows()
        except Exception:
            logger.exception("%s: could not describe vehicle", self.model)
            return list(DESCRIBE_FALLBACK)

    def to_dict(self) -> dict:
        """Serialize to the storage record format."""
        return {
            "kind": self.kind.value,
            "id": self.id,
            "model": self.model,
            "color": self.color,
            "engineOn": self.engine_on,
            "speed": self.speed,
            "maxSpeed": self.max_speed,
            "maintenanceHistory": [m.to_dict() for m in self.maintenance_history],
        }

    def __repr__(self):
        return f"{type(self).__name__}({self.model!r}, {self.color!r}, id={self.id!r})"
