"""Urgency easing for the hourglass progress indicator.

The indicator fills with ``progress_pct`` and shifts colour with ``ease``.
Urgency stays low for most of an interval and rises sharply at the end:

* first 90% of the interval: linear 0.00 -> 0.10
* next 5%: linear 0.10 -> 0.25
* final 5%: cubic ease-in 0.25 -> 1.00

Thresholds are proportional to the interval length, so a 5 minute break and
a 50 minute focus block warm up at the same relative pace.
"""

from __future__ import annotations

CALM_UNTIL = 0.90
WARN_UNTIL = 0.95

CALM_URGENCY = 0.10
WARN_URGENCY = 0.25


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def progress_pct(remaining_seconds: int, total_seconds: int) -> float:
    """Fraction of the interval still to go, clamped into [0, 1]."""
    if total_seconds <= 0:
        return 0.0
    return _clamp(remaining_seconds / total_seconds)


def ease(remaining_seconds: int, total_seconds: int) -> float:
    """Map time left in an interval to an urgency in [0, 1].

    ``ease(total, total)`` is 0.0 and ``ease(0, total)`` is 1.0. The curve is
    continuous and never decreases as the countdown runs down.
    """
    if total_seconds <= 0:
        return 1.0
    progress = 1.0 - progress_pct(remaining_seconds, total_seconds)

    if progress < CALM_UNTIL:
        urgency = progress / CALM_UNTIL * CALM_URGENCY
    elif progress < WARN_UNTIL:
        span = (progress - CALM_UNTIL) / (WARN_UNTIL - CALM_UNTIL)
        urgency = CALM_URGENCY + span * (WARN_URGENCY - CALM_URGENCY)
    else:
        t = (progress - WARN_UNTIL) / (1.0 - WARN_UNTIL)
        urgency = WARN_URGENCY + t**3 * (1.0 - WARN_URGENCY)
    return _clamp(urgency)


def _parse_hex(colour: str) -> tuple[int, int, int]:
    value = colour.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"expected #rrggbb colour, got {colour!r}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def blend(start: str, end: str, urgency: float) -> str:
    """Linear RGB interpolation between two ``#rrggbb`` colours."""
    weight = _clamp(urgency)
    a = _parse_hex(start)
    b = _parse_hex(end)
    mixed = (round(x + (y - x) * weight) for x, y in zip(a, b))
    return "#" + "".join(f"{channel:02x}" for channel in mixed)
