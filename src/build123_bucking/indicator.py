"""Cut position indicator tied to the lifecycle of a cutting tool.

The owner of the tool calls the hooks explicitly:

- ``on_post_load`` once the tool is loaded; starts loading the marker
- ``on_activate`` / ``on_deactivate`` when the tool is equipped or put away
- ``on_update`` every tick while the tool updates its focus ring
- ``on_destroy`` before the tool is deleted
"""

from __future__ import annotations

import logging
from concurrent.futures import Future

from build123_bucking.assets import LoadRequest, MarkerLoader, RingMarkerLoader, resolve_asset_path
from build123_bucking.config import DEFAULT_CONFIG, CutIndicatorConfig
from build123_bucking.elements import CuttingTool, Log, Marker
from build123_bucking.locator import AxisAlignedCutLocator, CutTarget, ProbeReferencePoint

log = logging.getLogger(__name__)


class CutPositionIndicator:
    """Show a marker where the next cut should go on the log the tool aims at."""

    def __init__(
        self,
        locator: AxisAlignedCutLocator | None = None,
        loader: MarkerLoader | None = None,
        config: CutIndicatorConfig = DEFAULT_CONFIG,
    ):
        self.config = config
        self.locator = locator if locator is not None else AxisAlignedCutLocator(config=config)
        self.loader = loader if loader is not None else RingMarkerLoader()
        self.marker: Marker | None = None
        self.request: LoadRequest | None = None
        self.tool_alive = False
        self.active = False

    def on_post_load(self, tool: CuttingTool) -> LoadRequest | None:
        """Start loading the marker asset named by the tool."""
        self.tool_alive = True
        if tool.marker_asset is None:
            return None

        path = resolve_asset_path(tool.marker_asset, tool.base_directory)
        request = self.loader.load_async(path)
        self.request = request
        request.future.add_done_callback(lambda future: self._on_marker_loaded(request, future))
        return request

    def _on_marker_loaded(self, request: LoadRequest, future: Future) -> None:
        try:
            if future.cancelled():
                log.debug("Marker load %d cancelled", request.handle)
                return
            exc = future.exception()
            if exc is not None:
                log.warning("Failed to load marker asset %s: %s", request.path, exc)
                return
            if not self.tool_alive or request is not self.request:
                log.debug("Discarding stale marker %d", request.handle)
                return

            marker = future.result()
            marker.set_visible(False)
            marker.set_color(*self.config.marker_color)
            self.marker = marker
        finally:
            self.loader.release(request)
            if self.request is request:
                self.request = None

    def on_activate(self, tool: CuttingTool) -> None:
        self.active = True

    def on_deactivate(self, tool: CuttingTool) -> None:
        self.active = False
        if self.marker is not None:
            self.marker.set_visible(False)

    def on_destroy(self, tool: CuttingTool) -> None:
        """Drop the marker and abandon any pending load."""
        self.tool_alive = False
        self.active = False
        self.marker = None
        request, self.request = self.request, None
        if request is not None:
            # A cancelled request is released by its completion handler
            request.cancel()

    def on_update(self, tool: CuttingTool, target: Log | None) -> CutTarget | None:
        """Follow the tool's focus ring and place the marker on ``target``."""
        if self.marker is None:
            return None
        if not (self.tool_alive and self.active):
            self.marker.set_visible(False)
            return None

        self.marker.set_visible(tool.focus_visible)
        if target is None or not self.marker.visible:
            return None

        reference = ProbeReferencePoint.from_tool(tool, target)
        return self.locator.compute_cut_target(target, reference, self.marker)
