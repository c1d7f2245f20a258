"""Math utility functions for animations and layout."""

from typing import Union

Number = Union[int, float]


def lerp(start: Number, end: Number, t: float) -> float:
    """Linear interpolation between start and end.

    Args:
        start: Starting value
        end: Ending value
        t: Interpolation factor (0.0 to 1.0)

    Returns:
        Interpolated value
    """
    return start + (end - start) * t


def inverse_lerp(start: Number, end: Number, value: Number) -> float:
    """Calculate the interpolation factor for a value between start and end.

    Returns 0.0 when start and end are equal.
    """
    if start == end:
        return 0.0
    return (value - start) / (end - start)


def approach(current: float, target: float, speed: float, dt: float) -> float:
    """Exponential ease of current toward target, frame-rate independent."""
    return current + (target - current) * min(1.0, speed * dt)
