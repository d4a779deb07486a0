# %%
import logging

from build123d import Location
from ocp_vscode import show_object, set_defaults, Camera

from build123_bucking import (
    CutPositionIndicator,
    CuttingTool,
    Log,
    get_config,
    make_axis_frame,
    show_frame,
    search_window_edges,
)
from build123_bucking.locator import ProbeReferencePoint, build_search_window

logging.basicConfig(level=logging.DEBUG)
set_defaults(reset_camera=Camera.CENTER)

# %%
config = get_config(debug_position_detection=True, debug_indicator=True)

# Spruce lying on the ground, turned 20° off the X axis
spruce = Log.felled(
    length=14.0,
    start_diameter=0.55,
    end_diameter=0.3,
    heading=20,
    name="spruce",
    location=Location((0, 0.275, 0)),
)

saw = CuttingTool(name="chainsaw", marker_asset="shared/ringSelector.i3d")

indicator = CutPositionIndicator(config=config)
indicator.on_post_load(saw)
indicator.on_activate(saw)

# %%
# Aim 2.5 m along the log; the marker should sit 6 m from the butt end
frame = make_axis_frame(spruce)
saw.aim_at(Location((0, 0.275, 0)).position + frame.axial * 2.5)
target = indicator.on_update(saw, spruce)
print(target)

# %%
show_object(spruce.global_shape, name="spruce", options={"alpha": 0.5})
if target is not None:
    show_object(indicator.marker.global_shape, name="marker", options={"color": indicator.marker.color[:3]})

reference = ProbeReferencePoint.from_tool(saw, spruce)
show_object(show_frame(reference.position, frame), name="focus frame")
window = build_search_window(target.position if target else reference.position, frame, config.search_half_size)
show_object(search_window_edges(window, frame), name="search window")
