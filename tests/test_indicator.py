"""Tests for the indicator lifecycle and marker loading."""
import logging
from pathlib import Path

import pytest
from build123d import Location

from build123_bucking import (
    CutPositionIndicator,
    CuttingTool,
    Log,
    Marker,
    RingMarkerLoader,
    get_config,
)
from build123_bucking.assets import AssetLoadError, resolve_asset_path


class DeferredExecutor:
    """Executor which only runs submitted work when asked to."""

    def __init__(self):
        self.queue = []

    def submit(self, fn, *args):
        self.queue.append((fn, args))

    def run_all(self):
        while self.queue:
            fn, args = self.queue.pop(0)
            fn(*args)


@pytest.fixture
def tool():
    return CuttingTool(
        name="saw",
        location=Location((2, 0, 0)),
        focus_visible=True,
        marker_asset="shared/ringSelector.i3d",
        base_directory=Path("/data/handTools/chainsaw"),
    )


@pytest.fixture
def felled_log():
    return Log.felled(length=10.0, start_diameter=0.6, end_diameter=0.4)


@pytest.fixture
def loaded_indicator(tool):
    indicator = CutPositionIndicator()
    indicator.on_post_load(tool)
    indicator.on_activate(tool)
    return indicator


class TestAssetPaths:
    def test_relative_path(self):
        path = resolve_asset_path("shared/ring.i3d", Path("/mods/saw"))
        assert path == Path("/mods/saw/shared/ring.i3d")

    def test_absolute_path(self):
        path = resolve_asset_path("/assets/ring.i3d", Path("/mods/saw"))
        assert path == Path("/assets/ring.i3d")


class TestRingMarkerLoader:
    def test_inline_load(self):
        loader = RingMarkerLoader(ring_radius=0.4)
        request = loader.load_async(Path("/a/ring.i3d"))
        marker = request.future.result()
        assert isinstance(marker, Marker)
        assert marker.name == "ring"
        assert marker.ring_radius == 0.4
        assert request.handle in loader.pending

    def test_handles_are_unique(self):
        loader = RingMarkerLoader()
        first = loader.load_async(Path("a.i3d"))
        second = loader.load_async(Path("b.i3d"))
        assert first.handle != second.handle

    def test_failure_is_set_on_future(self):
        loader = RingMarkerLoader()
        request = loader.load_async(Path("/a/ring"))
        with pytest.raises(AssetLoadError):
            request.future.result()

    def test_release(self):
        loader = RingMarkerLoader()
        request = loader.load_async(Path("a.i3d"))
        loader.release(request)
        assert loader.pending == {}

    def test_double_release_warns(self, caplog):
        loader = RingMarkerLoader()
        request = loader.load_async(Path("a.i3d"))
        loader.release(request)
        with caplog.at_level(logging.WARNING):
            loader.release(request)
        assert "released twice" in caplog.text

    def test_deferred_load(self):
        executor = DeferredExecutor()
        loader = RingMarkerLoader(executor=executor)
        request = loader.load_async(Path("a.i3d"))
        assert not request.future.done()
        executor.run_all()
        assert isinstance(request.future.result(), Marker)


class TestPostLoad:
    def test_marker_loaded_hidden_and_coloured(self, loaded_indicator):
        marker = loaded_indicator.marker
        assert marker is not None
        assert marker.visible is False
        assert marker.color == get_config().marker_color

    def test_request_released(self, loaded_indicator):
        assert loaded_indicator.request is None
        assert loaded_indicator.loader.pending == {}

    def test_resolved_path(self, tool):
        executor = DeferredExecutor()
        indicator = CutPositionIndicator(loader=RingMarkerLoader(executor=executor))
        request = indicator.on_post_load(tool)
        assert request.path == Path("/data/handTools/chainsaw/shared/ringSelector.i3d")

    def test_no_asset(self, tool):
        tool.marker_asset = None
        indicator = CutPositionIndicator()
        assert indicator.on_post_load(tool) is None
        assert indicator.marker is None

    def test_load_failure(self, tool, caplog):
        tool.marker_asset = "shared/ringSelector"
        indicator = CutPositionIndicator()
        with caplog.at_level(logging.WARNING):
            indicator.on_post_load(tool)
        assert indicator.marker is None
        assert indicator.loader.pending == {}
        assert "Failed to load marker asset" in caplog.text


class TestDestroyWhileLoading:
    def test_cancelled_before_start(self, tool):
        executor = DeferredExecutor()
        loader = RingMarkerLoader(executor=executor)
        indicator = CutPositionIndicator(loader=loader)
        request = indicator.on_post_load(tool)

        indicator.on_destroy(tool)

        assert request.future.cancelled()
        assert loader.pending == {}
        executor.run_all()
        assert indicator.marker is None

    def test_stale_result_discarded(self, tool):
        executor = DeferredExecutor()
        loader = RingMarkerLoader(executor=executor)
        indicator = CutPositionIndicator(loader=loader)
        request = indicator.on_post_load(tool)
        # Loading already started, so it can no longer be cancelled
        assert request.future.set_running_or_notify_cancel()

        indicator.on_destroy(tool)
        assert request.handle in loader.pending
        request.future.set_result(Marker())

        assert indicator.marker is None
        assert loader.pending == {}
        assert indicator.request is None

    def test_reload_after_destroy(self, tool, loaded_indicator):
        loaded_indicator.on_destroy(tool)
        assert loaded_indicator.marker is None
        loaded_indicator.on_post_load(tool)
        assert loaded_indicator.marker is not None

    def test_superseded_request_discarded(self, tool):
        executor = DeferredExecutor()
        loader = RingMarkerLoader(executor=executor)
        indicator = CutPositionIndicator(loader=loader)
        first = indicator.on_post_load(tool)
        assert first.future.set_running_or_notify_cancel()
        indicator.on_destroy(tool)

        second = indicator.on_post_load(tool)
        first.future.set_result(Marker(name="stale"))
        assert indicator.marker is None
        assert indicator.request is second

        # Only the second load is still queued to start
        executor.queue.pop(0)
        executor.run_all()
        assert indicator.marker is not None
        assert indicator.marker.name == "ringSelector"
        assert loader.pending == {}


class TestUpdate:
    def test_places_marker(self, tool, felled_log, loaded_indicator):
        result = loaded_indicator.on_update(tool, felled_log)

        assert result is not None
        assert loaded_indicator.marker.visible is True
        assert tuple(result.position) == pytest.approx((6, 0, 0), abs=1e-2)

    def test_follows_focus_visibility(self, tool, felled_log, loaded_indicator):
        tool.release_aim()
        assert loaded_indicator.on_update(tool, felled_log) is None
        assert loaded_indicator.marker.visible is False

    def test_no_target(self, tool, loaded_indicator):
        assert loaded_indicator.on_update(tool, None) is None
        assert loaded_indicator.marker.visible is True

    def test_log_too_short(self, tool, loaded_indicator):
        short_log = Log.felled(length=4.0, start_diameter=0.5)
        assert loaded_indicator.on_update(tool, short_log) is None
        assert loaded_indicator.marker.visible is False

    def test_no_marker_yet(self, tool, felled_log):
        indicator = CutPositionIndicator()
        assert indicator.on_update(tool, felled_log) is None

    def test_deactivate_hides_marker(self, tool, felled_log, loaded_indicator):
        loaded_indicator.on_update(tool, felled_log)
        loaded_indicator.on_deactivate(tool)
        assert loaded_indicator.marker.visible is False

    def test_no_update_while_deactivated(self, tool, felled_log, loaded_indicator):
        loaded_indicator.on_update(tool, felled_log)
        loaded_indicator.on_deactivate(tool)

        assert loaded_indicator.on_update(tool, felled_log) is None
        assert loaded_indicator.marker.visible is False

    def test_no_update_before_activate(self, tool, felled_log):
        indicator = CutPositionIndicator()
        indicator.on_post_load(tool)
        assert indicator.on_update(tool, felled_log) is None
        assert indicator.marker.visible is False

    def test_uniform_log(self, tool, loaded_indicator):
        uniform_log = Log.felled(length=10.0, start_diameter=0.5)
        result = loaded_indicator.on_update(tool, uniform_log)
        assert tuple(result.position) == pytest.approx((6, 0, 0), abs=1e-2)

    def test_reactivate(self, tool, felled_log, loaded_indicator):
        loaded_indicator.on_deactivate(tool)
        loaded_indicator.on_activate(tool)
        assert loaded_indicator.on_update(tool, felled_log) is not None
        assert loaded_indicator.marker.visible is True

    def test_aim_moves_along_log(self, tool, felled_log, loaded_indicator):
        tool.aim_at((7.5, 0, 0))
        result = loaded_indicator.on_update(tool, felled_log)
        assert tuple(result.position) == pytest.approx((6, 0, 0), abs=1e-2)
