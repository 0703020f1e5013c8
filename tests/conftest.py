"""Shared fixtures for vehicle tests."""

import pytest

from vehicles import VehicleHooks


class Recorder:
    """Collects everything a vehicle sends through its hooks."""

    def __init__(self):
        self.notices = []
        self.cues = []
        self.changes = 0
        self.persists = 0
        self.hooks = VehicleHooks(
            notify=lambda message, severity, duration_ms: self.notices.append(
                (message, severity, duration_ms)
            ),
            play_cue=self.cues.append,
            on_state_changed=self._changed,
            persist_fleet=self._persisted,
        )

    def _changed(self):
        self.changes += 1

    def _persisted(self):
        self.persists += 1

    @property
    def last_notice(self):
        return self.notices[-1] if self.notices else None


@pytest.fixture
def recorder():
    return Recorder()
