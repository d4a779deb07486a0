from build123_bucking.config import CutIndicatorConfig, DEFAULT_CONFIG, get_config
from build123_bucking.elements import Log, Marker, CuttingTool
from build123_bucking.frame import (
    AxisFrame,
    make_axis_frame,
    local_to_world,
    local_direction_to_world,
    vector_angle_difference,
)
from build123_bucking.probe import ProbeExtents, SurfaceProbe, SolidSurfaceProbe
from build123_bucking.locator import (
    AxisAlignedCutLocator,
    CutTarget,
    ProbeReferencePoint,
    SearchWindow,
)
from build123_bucking.assets import AssetLoadError, LoadRequest, RingMarkerLoader
from build123_bucking.indicator import CutPositionIndicator
from build123_bucking.debug import show_frame, search_window_edges

__version__ = "0.1.0"

__all__ = [
    "CutIndicatorConfig",
    "DEFAULT_CONFIG",
    "get_config",
    "Log",
    "Marker",
    "CuttingTool",
    "AxisFrame",
    "make_axis_frame",
    "local_to_world",
    "local_direction_to_world",
    "vector_angle_difference",
    "ProbeExtents",
    "SurfaceProbe",
    "SolidSurfaceProbe",
    "AxisAlignedCutLocator",
    "CutTarget",
    "ProbeReferencePoint",
    "SearchWindow",
    "AssetLoadError",
    "LoadRequest",
    "RingMarkerLoader",
    "CutPositionIndicator",
    "show_frame",
    "search_window_edges",
]
