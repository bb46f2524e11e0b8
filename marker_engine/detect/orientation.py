from __future__ import annotations
import math
from typing import Tuple

Point2 = Tuple[float, float]


def marker_angle(c0: Point2, c1: Point2) -> float:
    """Angle of the line from marker 0 to marker 1, in (-pi, pi]."""
    return math.atan2(c1[1] - c0[1], c1[0] - c0[0])


def normalized_position(angle: float) -> float:
    """
    Map a tilt angle to a horizontal position: 0 rad -> 0.5, -pi/2 -> 1.0, +pi/2 -> 0.0.

    Linear in the angle and deliberately unclamped, so tilting past vertical
    pushes the value outside [0, 1].
    """
    if angle < 0:
        return 0.5 + 0.5 * (-angle / (math.pi / 2))
    return 0.5 - 0.5 * (angle / (math.pi / 2))


def estimate(c0: Point2, c1: Point2) -> Tuple[float, float]:
    angle = marker_angle(c0, c1)
    return angle, normalized_position(angle)
