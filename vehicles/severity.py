"""Enums for notice severity and vehicle kinds."""

from enum import Enum


class Severity(Enum):
    """Notice levels understood by the notification sink."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class VehicleKind(Enum):
    """Discriminator stored with each vehicle record."""

    CAR = "Car"
    SPORTS_CAR = "SportsCar"
    TRUCK = "Truck"

    @property
    def id_prefix(self) -> str:
        """Prefix used when generating vehicle ids."""
        return self.value.lower()
