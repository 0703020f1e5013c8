"""MaintenanceRecord class for service events."""

import datetime as dt
import logging
from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser

from .calculations import format_brl, format_date_br, parse_number

logger = logging.getLogger(__name__)

RECORD_KIND = "MaintenanceRecord"
FORMAT_FALLBACK = "Error formatting record"


class ValidationError(ValueError):
    """Raised when a model cannot be built from the given input."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or [message]


def _parse_date(value: Any) -> Optional[dt.date]:
    """Reduce date input to a UTC calendar date, or None if unparseable."""
    if isinstance(value, dt.datetime):
        moment = value
    elif isinstance(value, dt.date):
        return value
    elif isinstance(value, str) and value.strip():
        try:
            moment = date_parser.parse(value.strip())
        except (ValueError, OverflowError):
            return None
    else:
        return None
    if moment.tzinfo is not None:
        moment = moment.astimezone(dt.timezone.utc)
    return moment.date()


class MaintenanceRecord:
    """
    A single service event, past or scheduled.

    All fields are validated before anything is assigned, so an instance
    either exists fully formed or not at all. Records are read-only.
    """

    def __init__(
        self,
        date: Any,
        service_type: Any,
        cost: Any,
        description: Optional[str] = "",
    ):
        errors = []
        day = _parse_date(date)
        if day is None:
            errors.append(f"unparseable date {date!r}")
        if not isinstance(service_type, str) or not service_type.strip():
            errors.append("service type must be non-empty text")
        amount = parse_number(cost)
        if amount is None or amount < 0:
            errors.append("cost must be a non-negative number")
        if description is not None and not isinstance(description, str):
            errors.append("description must be text")
        if errors:
            logger.debug("Rejected maintenance record: %s", "; ".join(errors))
            raise ValidationError(
                "Invalid maintenance record: " + "; ".join(errors), errors
            )

        self._date = day.isoformat()
        self._service_type = service_type.strip()
        self._cost = amount
        self._description = (description or "").strip()

    @property
    def date(self) -> str:
        """Service date as YYYY-MM-DD (UTC calendar day)."""
        return self._date

    @property
    def service_type(self) -> str:
        return self._service_type

    @property
    def cost(self) -> float:
        return self._cost

    @property
    def description(self) -> str:
        return self._description

    def format(self) -> str:
        """One-line summary: 'DD/MM/YYYY - type (R$ cost) - Desc: description'."""
        try:
            text = (
                f"{format_date_br(dt.date.fromisoformat(self._date))} - "
                f"{self._service_type} ({format_brl(self._cost)})"
            )
            if self._description:
                text += f" - Desc: {self._description}"
            return text
        except Exception:
            logger.exception("Could not format maintenance record %r", self)
            return FORMAT_FALLBACK

    def is_future_scheduled(self, today: Optional[dt.date] = None) -> bool:
        """True if the record falls strictly after today (UTC)."""
        try:
            if today is None:
                today = dt.datetime.now(dt.timezone.utc).date()
            return dt.date.fromisoformat(self._date) > today
        except Exception:
            logger.exception("Could not compare date of %r", self)
            return False

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the storage record format."""
        return {
            "kind": RECORD_KIND,
            "date": self._date,
            "type": self._service_type,
            "cost": self._cost,
            "description": self._description,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MaintenanceRecord":
        return cls(
            data.get("date"),
            data.get("type"),
            data.get("cost"),
            data.get("description"),
        )

    def __eq__(self, other):
        if not isinstance(other, MaintenanceRecord):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash((self._date, self._service_type, self._cost, self._description))

    def __repr__(self):
        return (
            f"MaintenanceRecord({self._date!r}, {self._service_type!r}, "
            f"{self._cost!r}, {self._description!r})"
        )


def rehydrate_history(items: Any, owner: str = "") -> List[MaintenanceRecord]:
    """
    Turn stored history entries back into MaintenanceRecord instances.

    Live records pass through. Storage dicts tagged as maintenance records are
    rebuilt; the ones that fail validation are logged and dropped. Anything
    else is dropped without complaint.
    """
    if not isinstance(items, list):
        return []
    records = []
    for item in items:
        if isinstance(item, MaintenanceRecord):
            records.append(item)
        elif isinstance(item, dict) and item.get("kind") == RECORD_KIND:
            try:
                records.append(MaintenanceRecord.from_dict(item))
            except ValidationError as e:
                logger.error("Dropped maintenance record for %s: %s", owner, e)
        elif item is not None:
            logger.debug("Ignored unexpected history entry for %s: %r", owner, item)
    return records
