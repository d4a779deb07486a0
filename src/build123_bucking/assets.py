"""Loading of the marker asset.

Loading is asynchronous: ``load_async`` hands back a ``LoadRequest`` whose
future resolves to a ``Marker``. Every request must be released exactly once
through the loader that issued it, whether it succeeded, failed or was
cancelled.
"""

from __future__ import annotations

import itertools
import logging
from concurrent.futures import Executor, Future
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from build123_bucking.elements import Marker

log = logging.getLogger(__name__)


class AssetLoadError(Exception):
    """Raised into a load request's future when the asset cannot be loaded."""


@dataclass(eq=False)
class LoadRequest:
    handle: int
    path: Path
    future: Future = field(default_factory=Future, repr=False)

    def cancel(self) -> bool:
        return self.future.cancel()


class MarkerLoader(Protocol):
    def load_async(self, path: Path) -> LoadRequest:
        ...

    def release(self, request: LoadRequest) -> None:
        ...


def resolve_asset_path(filename: str, base_directory: Path) -> Path:
    """Resolve an asset path relative to the directory of the owning tool."""
    path = Path(filename)
    if path.is_absolute():
        return path
    return Path(base_directory) / path


class RingMarkerLoader:
    """Build ring markers, inline or on an executor.

    The asset file only names the marker; the ring geometry comes from
    ``ring_radius`` and ``tube_radius``. Paths without a file suffix are
    rejected as unloadable.
    """

    def __init__(self, ring_radius: float = 0.5, tube_radius: float = 0.02, executor: Executor | None = None):
        self.ring_radius = ring_radius
        self.tube_radius = tube_radius
        self.executor = executor
        self._handles = itertools.count(1)
        self.pending: dict[int, LoadRequest] = {}

    def load_async(self, path: Path) -> LoadRequest:
        request = LoadRequest(handle=next(self._handles), path=Path(path))
        self.pending[request.handle] = request
        if self.executor is None:
            self._run(request)
        else:
            self.executor.submit(self._run, request)
        return request

    def release(self, request: LoadRequest) -> None:
        if self.pending.pop(request.handle, None) is None:
            log.warning("Load request %d released twice", request.handle)

    def _build(self, path: Path) -> Marker:
        if not path.suffix:
            raise AssetLoadError(f"Not a marker asset file: {path}")
        return Marker(ring_radius=self.ring_radius, tube_radius=self.tube_radius, name=path.stem)

    def _run(self, request: LoadRequest) -> None:
        if not request.future.set_running_or_notify_cancel():
            return
        try:
            marker = self._build(request.path)
        except Exception as exc:
            request.future.set_exception(exc)
        else:
            request.future.set_result(marker)
