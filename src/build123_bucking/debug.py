"""Diagnostic geometry for checking frames and search windows in a viewer."""

from __future__ import annotations

from build123d import Edge, Vector

from build123_bucking.frame import AxisFrame
from build123_bucking.locator import SearchWindow


def show_frame(origin: Vector, frame: AxisFrame, size: float = 0.5) -> tuple[Edge, Edge, Edge]:
    """Show an axis frame as 3 lines (axial, lateral1, lateral2).

    Use this to debug orientation issues.
    """
    origin = Vector(origin)
    return (
        Edge.make_line(origin, origin + frame.axial * size),
        Edge.make_line(origin, origin + frame.lateral1 * size),
        Edge.make_line(origin, origin + frame.lateral2 * size),
    )


def search_window_edges(window: SearchWindow, frame: AxisFrame) -> list[Edge]:
    """Outline of a search window as 4 lines."""
    c0 = window.origin
    c1 = c0 + frame.lateral1 * window.size
    c2 = c1 + frame.lateral2 * window.size
    c3 = c0 + frame.lateral2 * window.size
    return [
        Edge.make_line(c0, c1),
        Edge.make_line(c1, c2),
        Edge.make_line(c2, c3),
        Edge.make_line(c3, c0),
    ]
