"""Helper functions for speed, cargo and display calculations."""

import math
from datetime import date
from typing import Any, Optional

TURBO_BOOST = 1.5
MIN_LOAD_FACTOR = 0.3
LOAD_PENALTY = 0.7


def parse_number(value: Any) -> Optional[float]:
    """
    Convert user or storage input to a finite float.

    Accepts ints, floats and numeric text. Returns None for anything else,
    including booleans, NaN and infinities.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def calc_speed_up(speed: float, delta: float, max_speed: float) -> float:
    """Speed after accelerating by delta (negative deltas count as zero)."""
    return min(speed + max(0, delta), max_speed)


def calc_slow_down(speed: float, delta: float) -> float:
    """Speed after braking by delta, never below zero."""
    return max(0, speed - max(0, delta))


def turbo_factor(engaged: bool) -> float:
    return TURBO_BOOST if engaged else 1.0


def load_factor(cargo_load: float, cargo_capacity: float) -> float:
    """
    Acceleration multiplier for a truck carrying cargo_load.

    1.0 when empty, dropping linearly to MIN_LOAD_FACTOR as the truck fills.
    A zero capacity applies no penalty.
    """
    if cargo_capacity <= 0:
        return 1.0
    return max(MIN_LOAD_FACTOR, 1 - (cargo_load / cargo_capacity) * LOAD_PENALTY)


def load_percent(cargo_load: float, cargo_capacity: float) -> float:
    """Share of capacity in use, as a percentage."""
    if cargo_capacity <= 0:
        return 0.0
    return (cargo_load / cargo_capacity) * 100


def load_gauge(percent: float, width: int = 20) -> str:
    """Proportional text bar, e.g. '[#####---------------]' for 25%."""
    filled = round(width * min(max(percent, 0), 100) / 100)
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def _swap_separators(text: str) -> str:
    # 1,234.50 -> 1.234,50
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def format_brl(amount: float) -> str:
    """Format an amount as Brazilian reais (R$ 1.234,50)."""
    return f"R$ {_swap_separators(f'{amount:,.2f}')}"


def format_kg(weight: float) -> str:
    """Format a weight with pt-BR thousands separators (1.500 kg)."""
    return f"{_swap_separators(f'{weight:,.0f}')} kg"


def format_date_br(day: date) -> str:
    """Format a date as DD/MM/YYYY."""
    return day.strftime("%d/%m/%Y")
