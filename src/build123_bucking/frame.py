"""Local coordinate frames of placed elements.

Elements (logs, tools, markers) carry a ``location`` whose orientation is a
set of Euler angles in degrees. The helpers here map local points and
directions of such an element into world coordinates, and build the axis
frame of a log.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

from build123d import Location, Vector


class Placed(Protocol):
    location: Location


@dataclass(frozen=True)
class AxisFrame:
    """Orthonormal frame of a log in world space.

    - axial: along the long axis, pointing away from the log start
    - lateral1, lateral2: span the cross-section plane

    The frame is right-handed: ``axial.cross(lateral1) == lateral2``.
    """

    axial: Vector
    lateral1: Vector
    lateral2: Vector


def _turn(a: float, b: float, angle_deg: float) -> tuple[float, float]:
    """Turn the point (a, b) counter-clockwise in its plane."""
    rad = math.radians(angle_deg)
    c, s = math.cos(rad), math.sin(rad)
    return (a * c - b * s, a * s + b * c)


def rotate_vector(v: Vector, rx: float, ry: float, rz: float) -> Vector:
    """Rotate vector by intrinsic XYZ Euler angles (degrees), as ``Location`` does.

    The Z turn is applied first, then Y, then X.
    """
    x, y, z = v.X, v.Y, v.Z
    x, y = _turn(x, y, rz)
    z, x = _turn(z, x, ry)
    y, z = _turn(y, z, rx)
    return Vector(x, y, z)


def local_direction_to_world(element: Placed, local_direction: Vector) -> Vector:
    """Convert a direction in the element's local coords to world coordinates."""
    rx, ry, rz = tuple(element.location.orientation)
    return rotate_vector(Vector(local_direction), rx, ry, rz)


def local_to_world(element: Placed, local_point: Vector) -> Vector:
    """Convert a local point to world coordinates."""
    origin = element.location.position
    rotated = local_direction_to_world(element, local_point)
    return Vector(origin.X + rotated.X, origin.Y + rotated.Y, origin.Z + rotated.Z)


def make_axis_frame(log: Placed) -> AxisFrame:
    """Create the axis frame of a log from its local coordinate system.

    Logs grow along their local Y axis, so the frame is remapped:
    local Y -> axial, local X -> lateral1, local -Z -> lateral2.
    """
    return AxisFrame(
        axial=local_direction_to_world(log, Vector(0, 1, 0)),
        lateral1=local_direction_to_world(log, Vector(1, 0, 0)),
        lateral2=local_direction_to_world(log, Vector(0, 0, -1)),
    )


def vector_angle_difference(a: Vector, b: Vector) -> float:
    """Unsigned angle in radians between two directions.

    Returns 0.0 when either vector is degenerate.
    """
    len_a = math.sqrt(a.X**2 + a.Y**2 + a.Z**2)
    len_b = math.sqrt(b.X**2 + b.Y**2 + b.Z**2)
    if len_a < 1e-10 or len_b < 1e-10:
        return 0.0
    dot = (a.X * b.X + a.Y * b.Y + a.Z * b.Z) / (len_a * len_b)
    return math.acos(max(-1.0, min(1.0, dot)))
