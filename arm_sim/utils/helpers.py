"""
Small stateless helpers used across the arm_sim package.

Provides the two planar primitives every arm coordinate is built from
(polar-to-cartesian conversion and clockwise rotation), plus colour
conversion for the renderers.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np


def polar_to_cartesian(radius: float, angle_deg: float) -> Tuple[float, float]:
    """Convert a polar coordinate to cartesian.

    Args:
        radius: Distance from the origin. Negative values reverse direction.
        angle_deg: Angle in degrees, counter-clockwise from the +x axis.

    Returns:
        Tuple ``(x, y)``.
    """
    theta = np.deg2rad(angle_deg)
    return float(radius * np.cos(theta)), float(radius * np.sin(theta))


def rotate(x: float, y: float, angle_deg: float) -> Tuple[float, float]:
    """Rotate a cartesian position by *angle_deg*, clockwise positive.

    Args:
        x: Horizontal coordinate.
        y: Vertical coordinate.
        angle_deg: Rotation in degrees; positive turns clockwise.

    Returns:
        Rotated tuple ``(x, y)``.
    """
    theta = np.deg2rad(angle_deg)
    c, s = np.cos(theta), np.sin(theta)
    rotation = np.array([[c, s], [-s, c]])
    rx, ry = rotation @ np.array([x, y], dtype=np.float64)
    return float(rx), float(ry)


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """Parse ``'#rrggbb'`` or shorthand ``'#rgb'`` into an RGB tuple.

    Raises:
        ValueError: If *color* is not a valid hex colour.
    """
    digits = color.strip().lstrip("#")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) != 6:
        raise ValueError(f"Expected a hex colour like '#d5dbcc', got {color!r}")
    return tuple(int(digits[i : i + 2], 16) for i in (0, 2, 4))  # type: ignore[return-value]
