"""Fleet class - the collection of vehicles and the selected one."""

import logging
from typing import Callable, Dict, Iterator, List, Optional

from .hooks import VehicleHooks
from .severity import Severity
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


class Fleet:
    """
    Ordered collection of vehicles keyed by id.

    Each vehicle added here gets hooks that refresh the observer only when
    it is the selected vehicle, and that save the whole fleet on change.
    """

    def __init__(
        self,
        vehicles: Optional[List[Vehicle]] = None,
        selected_id: Optional[str] = None,
        on_save: Optional[Callable[["Fleet"], None]] = None,
        on_refresh: Optional[Callable[[Vehicle], None]] = None,
        notify: Optional[Callable[[str, Severity, int], None]] = None,
        play_cue: Optional[Callable[[str], None]] = None,
    ):
        self.on_save = on_save
        self.on_refresh = on_refresh
        self.notify = notify
        self.play_cue = play_cue
        self._vehicles: Dict[str, Vehicle] = {}
        for vehicle in vehicles or []:
            if vehicle.id in self._vehicles:
                logger.error("Skipped duplicate vehicle id %s", vehicle.id)
                continue
            self._attach(vehicle)
        if isinstance(selected_id, str) and selected_id in self._vehicles:
            self.selected_id = selected_id
        else:
            self.selected_id = None

    def hooks_for(self, vehicle: Vehicle) -> VehicleHooks:
        """Hooks bound to this fleet for the given vehicle."""

        def state_changed():
            if self.selected_id == vehicle.id and self.on_refresh:
                self.on_refresh(vehicle)

        hooks = VehicleHooks(on_state_changed=state_changed, persist_fleet=self.save)
        if self.notify:
            hooks.notify = self.notify
        if self.play_cue:
            hooks.play_cue = self.play_cue
        return hooks

    def _attach(self, vehicle: Vehicle) -> None:
        vehicle.hooks = self.hooks_for(vehicle)
        self._vehicles[vehicle.id] = vehicle

    @property
    def selected(self) -> Optional[Vehicle]:
        if self.selected_id is None:
            return None
        return self._vehicles.get(self.selected_id)

    def get(self, vehicle_id: str) -> Optional[Vehicle]:
        return self._vehicles.get(vehicle_id)

    def add(self, vehicle: Vehicle) -> Vehicle:
        """Add a vehicle and save the fleet."""
        if vehicle.id in self._vehicles:
            raise ValueError(f"Vehicle id {vehicle.id} already in the fleet")
        self._attach(vehicle)
        logger.info("Added %s %s (%s)", vehicle.kind.value, vehicle.model, vehicle.id)
        self.save()
        return vehicle

    def remove(self, vehicle_id: str) -> Vehicle:
        """Remove a vehicle by id and save the fleet."""
        if vehicle_id not in self._vehicles:
            raise KeyError(vehicle_id)
        vehicle = self._vehicles.pop(vehicle_id)
        vehicle.hooks = VehicleHooks()
        if self.selected_id == vehicle_id:
            self.selected_id = None
        logger.info("Removed %s (%s)", vehicle.model, vehicle_id)
        self.save()
        return vehicle

    def select(self, vehicle_id: str) -> Vehicle:
        """Make a vehicle the observed one."""
        if vehicle_id not in self._vehicles:
            raise KeyError(vehicle_id)
        self.selected_id = vehicle_id
        vehicle = self._vehicles[vehicle_id]
        if self.on_refresh:
            self.on_refresh(vehicle)
        self.save()
        return vehicle

    def deselect(self) -> None:
        self.selected_id = None
        self.save()

    def save(self) -> None:
        """Persist the whole fleet through on_save, if set."""
        if self.on_save:
            self.on_save(self)

    def __iter__(self) -> Iterator[Vehicle]:
        return iter(list(self._vehicles.values()))

    def __len__(self) -> int:
        return len(self._vehicles)

    def __contains__(self, vehicle_id: object) -> bool:
        return vehicle_id in self._vehicles
