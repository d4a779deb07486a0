from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path

from build123d import Align, Axis, Cone, Cylinder, Location, Part, Torus, Vector


@dataclass
class Log:
    """A felled or standing tree trunk, modelled as a frustum.

    Local coordinate system:
    - Y: along the length (growth direction of the tree)
    - X, Z: across the cross-section

    Origin at the centre of the start (butt) face, log extends in positive Y.
    """

    length: float
    start_diameter: float
    end_diameter: float | None = None
    name: str = ""
    location: Location = field(default_factory=Location)

    def __post_init__(self) -> None:
        if self.end_diameter is None:
            self.end_diameter = self.start_diameter
        for dim, val in [
            ("length", self.length),
            ("start_diameter", self.start_diameter),
            ("end_diameter", self.end_diameter),
        ]:
            if val <= 0:
                raise ValueError(f"{dim} must be positive, got {val}")

    @classmethod
    def standing(cls, length: float, start_diameter: float, end_diameter: float | None = None, **kwargs) -> Log:
        """Create a standing tree (length along world Y)."""
        return cls(length=length, start_diameter=start_diameter, end_diameter=end_diameter, **kwargs)

    @classmethod
    def felled(
        cls,
        length: float,
        start_diameter: float,
        end_diameter: float | None = None,
        heading: float = 0.0,
        **kwargs,
    ) -> Log:
        """Create a log lying on the ground.

        The log is rotated -90° around Z so local Y (length) points along
        world X, then turned by ``heading`` degrees around world Y.
        """
        loc = kwargs.pop("location", Location())
        rotation = Location((0, 0, 0), (0, heading, -90))
        return cls(
            length=length,
            start_diameter=start_diameter,
            end_diameter=end_diameter,
            location=loc * rotation,
            **kwargs,
        )

    @property
    def tapered(self) -> bool:
        return self.start_diameter != self.end_diameter

    @property
    def shape(self) -> Part:
        align = (Align.CENTER, Align.CENTER, Align.MIN)
        if self.tapered:
            solid = Cone(self.start_diameter / 2, self.end_diameter / 2, self.length, align=align)
        else:
            # OCC refuses a cone with equal radii
            solid = Cylinder(self.start_diameter / 2, self.length, align=align)
        # Built along Z; rotate -90° around X so it grows along Y
        return solid.rotate(Axis.X, -90)

    @property
    def global_shape(self) -> Part:
        return self.shape.move(self.location)

    def __repr__(self) -> str:
        name_str = f"'{self.name}' " if self.name else ""
        return f"Log({name_str}L={self.length}, D={self.start_diameter}->{self.end_diameter})"


@dataclass
class Marker:
    """Ring shaped indicator placed on a log.

    Local coordinate system:
    - X: axis of the ring, aligned with the log when placed

    Rotations are given in radians and stored on ``location`` in degrees.
    """

    ring_radius: float = 0.5
    tube_radius: float = 0.02
    name: str = ""
    location: Location = field(default_factory=Location)
    visible: bool = True
    scale: float = 1.0
    color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)

    def set_translation(self, position: Vector) -> None:
        self.location = Location(Vector(position), tuple(self.location.orientation))

    def set_rotation(self, rx: float, ry: float, rz: float) -> None:
        self.location = Location(
            self.location.position,
            (math.degrees(rx), math.degrees(ry), math.degrees(rz)),
        )

    @property
    def rotation(self) -> tuple[float, float, float]:
        """Current rotation in radians."""
        return tuple(math.radians(a) for a in self.location.orientation)

    def set_visible(self, visible: bool) -> None:
        self.visible = visible

    def set_scale(self, scale: float) -> None:
        if scale <= 0:
            raise ValueError(f"scale must be positive, got {scale}")
        self.scale = scale

    def set_color(self, r: float, g: float, b: float, a: float = 1.0) -> None:
        self.color = (r, g, b, a)

    @property
    def shape(self) -> Part:
        # Torus axis is Z; turn it onto local X
        ring = Torus(self.ring_radius * self.scale, self.tube_radius * self.scale)
        return ring.rotate(Axis.Y, 90)

    @property
    def global_shape(self) -> Part:
        return self.shape.move(self.location)

    def __repr__(self) -> str:
        name_str = f"'{self.name}' " if self.name else ""
        state = "visible" if self.visible else "hidden"
        return f"Marker({name_str}{state}, pos={tuple(self.location.position)})"


@dataclass
class CuttingTool:
    """A hand held cutting tool (chainsaw).

    ``location`` is the pose of the tool's focus point, the spot on the log
    the tool currently aims at. ``focus_visible`` mirrors whether the tool
    shows its own focus ring, which is the case only while aiming at a log.
    """

    name: str = ""
    location: Location = field(default_factory=Location)
    focus_visible: bool = False
    marker_asset: str | None = None
    base_directory: Path = field(default_factory=Path)

    def aim_at(self, position: Vector) -> None:
        self.location = Location(Vector(position), tuple(self.location.orientation))
        self.focus_visible = True

    def release_aim(self) -> None:
        self.focus_visible = False

    def __repr__(self) -> str:
        name_str = f"'{self.name}' " if self.name else ""
        return f"CuttingTool({name_str}focus={tuple(self.location.position)})"
