"""Surface probing of log solids.

A probe answers two questions about a log in world space:

- how far the log extends below and above a plane through a point
- where the log's cross-section lies inside a square search window

``SolidSurfaceProbe`` answers both with build123d boolean operations on the
log's global shape. Anything with the same two methods can stand in for it,
for example an engine-side probe working on split shapes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from build123d import Align, Box, Compound, Part, Plane, Vector

from build123_bucking.config import DEFAULT_CONFIG, CutIndicatorConfig
from build123_bucking.elements import Log

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProbeExtents:
    """Extents of a cross-section relative to a search window corner.

    X runs along the probe X direction, Y along ``axial x probe_x``.
    """

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def center(self) -> tuple[float, float]:
        return ((self.min_x + self.max_x) / 2.0, (self.min_y + self.max_y) / 2.0)

    @property
    def size(self) -> tuple[float, float]:
        return (self.max_x - self.min_x, self.max_y - self.min_y)


class SurfaceProbe(Protocol):
    def plane_extents(self, target: Log, origin: Vector, axial: Vector) -> tuple[float, float]:
        ...

    def probe_surface(
        self,
        target: Log,
        origin: Vector,
        axial: Vector,
        probe_x: Vector,
        size_x: float,
        size_y: float,
    ) -> ProbeExtents | None:
        ...


class SolidSurfaceProbe:
    """Probe a log's solid geometry with build123d."""

    def __init__(self, config: CutIndicatorConfig = DEFAULT_CONFIG):
        self.config = config

    def plane_extents(self, target: Log, origin: Vector, axial: Vector) -> tuple[float, float]:
        """Distances the log extends below and above a plane.

        Args:
            target: The log to measure
            origin: A point on the plane
            axial: Plane normal; "above" is the side it points to

        Returns:
            (below, above), both clamped at zero
        """
        plane = Plane(origin=origin, z_dir=axial)
        bbox = plane.to_local_coords(target.global_shape).bounding_box()
        return (max(0.0, -bbox.min.Z), max(0.0, bbox.max.Z))

    def probe_surface(
        self,
        target: Log,
        origin: Vector,
        axial: Vector,
        probe_x: Vector,
        size_x: float,
        size_y: float,
    ) -> ProbeExtents | None:
        """Find the log's cross-section inside a search window.

        The window is the rectangle spanned from ``origin`` by ``size_x``
        along ``probe_x`` and ``size_y`` along ``axial x probe_x``, lying in
        the plane normal to ``axial``.

        Returns:
            Extents relative to ``origin``, or None if the log does not pass
            through the window.
        """
        plane = Plane(origin=origin, x_dir=probe_x, z_dir=axial)
        slab = Box(
            size_x,
            size_y,
            self.config.probe_thickness,
            align=(Align.MIN, Align.MIN, Align.CENTER),
        ).move(plane.location)

        section = _as_part(target.global_shape & slab)
        if section is None or section.volume <= 0:
            return None

        bbox = plane.to_local_coords(section).bounding_box()
        extents = ProbeExtents(bbox.min.X, bbox.max.X, bbox.min.Y, bbox.max.Y)
        log.debug("Probe of %r found extents %s", target, extents)
        return extents


def _as_part(result) -> Part | Compound | None:
    """Normalise the result of a boolean intersection."""
    if result is None:
        return None
    if isinstance(result, list):
        if not result:
            return None
        result = Compound(list(result))
    # An empty boolean result has no underlying shape to query.
    # is_null is a method in some build123d releases and a property in others.
    is_null = result.is_null
    if callable(is_null):
        is_null = is_null()
    if is_null:
        return None
    return result
