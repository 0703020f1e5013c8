"""Settings read from the environment."""

import os
from dataclasses import dataclass, field


@dataclass
class Settings:
    """Garage configuration."""

    fleet_file: str = field(
        default_factory=lambda: os.getenv("GARAGE_FLEET_FILE", "garage.yaml")
    )
    log_level: str = field(
        default_factory=lambda: os.getenv("GARAGE_LOG_LEVEL", "WARNING").upper()
    )
