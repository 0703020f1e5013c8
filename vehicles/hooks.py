"""VehicleHooks dataclass bundling the side effects a vehicle may trigger."""

from dataclasses import dataclass
from typing import Callable

from .severity import Severity


def _ignore(*args, **kwargs) -> None:
    return None


@dataclass
class VehicleHooks:
    """
    Callbacks a vehicle invokes after its operations.

    notify:           show a notice (message, severity, duration_ms)
    play_cue:         play a named sound cue
    on_state_changed: the vehicle changed; observers may refresh
    persist_fleet:    save the whole fleet, not only this vehicle

    Every hook defaults to a no-op so a vehicle works on its own.
    """

    notify: Callable[[str, Severity, int], None] = _ignore
    play_cue: Callable[[str], None] = _ignore
    on_state_changed: Callable[[], None] = _ignore
    persist_fleet: Callable[[], None] = _ignore
