"""Central configuration for the cut position indicator.

Distances are in world units (metres in the host scene). The search window
must be large enough to cover the cross-section of a typical log; it does not
scale with the log.
"""

from dataclasses import dataclass, fields, replace


# Desired distance from the start of the log to the cut
TARGET_DISTANCE: float = 6.0

# Half side length of the square searched for the log cross-section
SEARCH_HALF_SIZE: float = 0.6


@dataclass(frozen=True)
class CutIndicatorConfig:
    """Configuration for locating and drawing the cut position marker."""

    target_distance: float = TARGET_DISTANCE
    search_half_size: float = SEARCH_HALF_SIZE
    marker_scale: float = 1.0
    marker_color: tuple[float, float, float, float] = (0.7, 0.0, 0.7, 1.0)

    # Thickness of the slab intersected with the log to sample a cross-section
    probe_thickness: float = 1e-3

    debug_position_detection: bool = False
    debug_indicator: bool = False

    def __post_init__(self) -> None:
        for name in ("target_distance", "search_half_size", "marker_scale", "probe_thickness"):
            val = getattr(self, name)
            if val <= 0:
                raise ValueError(f"{name} must be positive, got {val}")
        if len(self.marker_color) != 4:
            raise ValueError(f"marker_color must be RGBA, got {self.marker_color}")

    @property
    def search_size(self) -> float:
        """Full side length of the search window."""
        return self.search_half_size * 2

    def __repr__(self) -> str:
        return (
            f"CutIndicatorConfig(\n"
            f"  target_distance={self.target_distance}\n"
            f"  search_half_size={self.search_half_size} (size={self.search_size})\n"
            f"  marker_scale={self.marker_scale}\n"
            f"  marker_color={self.marker_color}\n"
            f"  probe_thickness={self.probe_thickness}\n"
            f")"
        )


# Global default configuration instance
DEFAULT_CONFIG = CutIndicatorConfig()


def get_config(**overrides) -> CutIndicatorConfig:
    """Get configuration, optionally with some fields overridden.

    Args:
        **overrides: Field values replacing the defaults

    Returns:
        CutIndicatorConfig with the requested values
    """
    if not overrides:
        return DEFAULT_CONFIG
    known = {f.name for f in fields(CutIndicatorConfig)}
    unknown = set(overrides) - known
    if unknown:
        raise ValueError(f"Unknown config fields: {sorted(unknown)}")
    return replace(DEFAULT_CONFIG, **overrides)
