"""Locate the desired cut on a log.

Starting from the tool's focus point on the log:

1. Measure how far the log extends below the focus point along its axis.
2. Shift the focus point along the axis so it lies ``target_distance`` from
   the log start.
3. Search a square window across the log at that point for the log's
   cross-section and take its centre as the marker position.
4. Turn the marker around the vertical axis so it lines up with the log.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from build123d import Location, Vector

from build123_bucking.config import DEFAULT_CONFIG, CutIndicatorConfig
from build123_bucking.elements import CuttingTool, Log, Marker
from build123_bucking.frame import (
    AxisFrame,
    local_direction_to_world,
    local_to_world,
    make_axis_frame,
    vector_angle_difference,
)
from build123_bucking.probe import ProbeExtents, SolidSurfaceProbe, SurfaceProbe

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProbeReferencePoint:
    """The tool's focus location together with the axis frame of the log."""

    position: Vector
    frame: AxisFrame

    @classmethod
    def from_tool(cls, tool: CuttingTool, target: Log) -> ProbeReferencePoint:
        return cls(position=local_to_world(tool, Vector(0, 0, 0)), frame=make_axis_frame(target))


@dataclass(frozen=True)
class SearchWindow:
    """Square in the lateral plane, given by its corner and side length."""

    origin: Vector
    size: float

    @property
    def half_size(self) -> float:
        return self.size / 2


@dataclass(frozen=True)
class CutTarget:
    """Where the marker goes: world position and rotation around vertical (radians)."""

    position: Vector
    rotation: float

    @property
    def location(self) -> Location:
        return Location(self.position, (0, math.degrees(self.rotation), 0))


def axial_offset(target_distance: float, distance_below: float) -> float:
    """Distance to move from the reference point along the axis.

    Negative when the reference point already lies beyond the target distance.
    """
    return target_distance - distance_below


def desired_location(reference: Vector, axial: Vector, offset: float) -> Vector:
    return reference + axial * offset


def build_search_window(center: Vector, frame: AxisFrame, half_size: float) -> SearchWindow:
    origin = center - frame.lateral1 * half_size - frame.lateral2 * half_size
    return SearchWindow(origin=origin, size=half_size * 2)


def window_point(window: SearchWindow, frame: AxisFrame, extents: ProbeExtents) -> Vector:
    """World position of the centre of the found cross-section."""
    c1, c2 = extents.center
    return window.origin + frame.lateral1 * c1 + frame.lateral2 * c2


def marker_rotation(marker: Marker, axial: Vector) -> float:
    """Rotation around the vertical axis which turns the marker onto the log axis.

    The marker rotation is reset to identity first, so repeated calls give
    the same answer.
    """
    marker.set_rotation(0, 0, 0)
    marker_x = local_direction_to_world(marker, Vector(1, 0, 0))
    rotation = vector_angle_difference(marker_x, axial)
    # The angle difference is unsigned; logs pointing towards +Z need the opposite turn
    if axial.Z > 0:
        rotation = -rotation
    return rotation


class AxisAlignedCutLocator:
    """Compute the cut position marker pose for a log."""

    def __init__(self, probe: SurfaceProbe | None = None, config: CutIndicatorConfig = DEFAULT_CONFIG):
        self.config = config
        self.probe = probe if probe is not None else SolidSurfaceProbe(config)

    def find_cut_position(self, target: Log, reference: ProbeReferencePoint) -> Vector | None:
        """World position of the log centre at the target distance, or None."""
        frame = reference.frame
        below, _ = self.probe.plane_extents(target, reference.position, frame.axial)
        offset = axial_offset(self.config.target_distance, below)
        desired = desired_location(reference.position, frame.axial, offset)
        window = build_search_window(desired, frame, self.config.search_half_size)

        if self.config.debug_position_detection:
            log.debug(
                "Cut search on %r: reference=%s below=%.3f offset=%.3f desired=%s window=%s",
                target,
                tuple(reference.position),
                below,
                offset,
                tuple(desired),
                tuple(window.origin),
            )

        extents = self.probe.probe_surface(
            target,
            window.origin,
            frame.axial,
            frame.lateral1,
            window.size,
            window.size,
        )
        if extents is None:
            return None
        return window_point(window, frame, extents)

    def compute_cut_target(
        self,
        target: Log,
        reference: ProbeReferencePoint,
        marker: Marker,
    ) -> CutTarget | None:
        """Place ``marker`` on the cut position of ``target``.

        On success the marker is moved and rotated onto the cut. If the log
        cannot be found at the target distance (usually because it is too
        short) the marker is hidden and its rotation reset. Either way the
        marker scale is reset to the configured scale.
        """
        position = self.find_cut_position(target, reference)
        if position is None:
            marker.set_visible(False)
            marker.set_rotation(0, 0, 0)
            marker.set_scale(self.config.marker_scale)
            return None

        marker.set_translation(position)
        rotation = marker_rotation(marker, reference.frame.axial)
        marker.set_rotation(0, rotation, 0)
        marker.set_scale(self.config.marker_scale)

        if self.config.debug_indicator:
            log.debug("Marker %r placed at %s, rotation %.4f rad", marker, tuple(position), rotation)
        return CutTarget(position=position, rotation=rotation)
