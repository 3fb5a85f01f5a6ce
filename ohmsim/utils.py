from __future__ import annotations
from typing import Tuple

_PREFIXES: Tuple[Tuple[float, float, str], ...] = (
    (1e-9, 1e12, "p"),
    (1e-6, 1e9, "n"),
    (1e-3, 1e6, "µ"),
    (1.0, 1e3, "m"),
)


def format_unit(value: float, unit: str, precision: int = 3) -> str:
    """
    Render a telemetry value with an SI prefix.

    Args:
        value: Quantity in base units (V, A, W, ...).
        unit: Unit symbol appended after the prefix.
        precision: Number of decimals kept before trailing zeros are dropped.

    Returns:
        String such as "4.7 mA" or "1.2 kV". Magnitudes below 1 pico are shown as zero.
    """
    magnitude = abs(value)
    if magnitude < 1e-12:
        return f"0 {unit}"
    for limit, scale, prefix in _PREFIXES:
        if magnitude < limit:
            return f"{_trim(value * scale, precision)} {prefix}{unit}"
    if magnitude >= 1000:
        return f"{_trim(value / 1000, precision)} k{unit}"
    return f"{_trim(value, precision)} {unit}"


def _trim(value: float, precision: int) -> str:
    text = f"{round(value, precision):.{precision}f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text
