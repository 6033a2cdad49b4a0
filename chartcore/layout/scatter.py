from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from chartcore.errors import EmptyDatasetError
from chartcore.geometry import Affine, Rect, union_all
from chartcore.series import XY


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScatterLayout:
    paths: tuple[np.ndarray, ...]
    transform: Affine
    bounds: Rect


def points_to_array(values: Sequence[XY[float]]) -> np.ndarray:
    if not values:
        return np.zeros((0, 2), dtype=np.float64)
    return np.asarray([(float(v.x), float(v.y)) for v in values], dtype=np.float64)


def fit_transform(bounds: Rect, target: Rect) -> Affine:
    """Flip y, scale by `target / bounds` extents, then centre on `target`.

    Scale factors use the bounds' maximum corner, i.e. the data is taken to
    be measured from the origin.
    """
    sx = _axis_scale(target.width, bounds.x1)
    sy = _axis_scale(target.height, bounds.y1)
    flip_scale = Affine.flip_y().then(Affine.scaling(sx, sy))
    placed = flip_scale.apply_rect(bounds).center
    center = target.center
    return flip_scale.then(Affine.translation(center.x - placed.x, center.y - placed.y))


def layout_scatter(
    datasets: Sequence[Sequence[XY[float]]],
    target: Rect,
    frame: Rect | None = None,
) -> ScatterLayout:
    """Map every dataset's polyline from data space into `target`.

    `frame`, when given, is folded into the bounds so a tick-rounded range
    maps exactly onto `target`. Each returned path is an `(n, 2)` array in
    device space; the first row is where the path starts, later rows are
    line-to points.
    """
    arrays = [points_to_array(values) for values in datasets]
    boxes = [Rect.from_points(arr) for arr in arrays if arr.size > 0]
    bounds = union_all(boxes)
    if bounds is None:
        raise EmptyDatasetError()
    if frame is not None:
        bounds = bounds.union(frame)

    transform = fit_transform(bounds, target)
    LOGGER.debug("scatter bounds=%s target=%s transform=%s", bounds, target, transform)
    paths = tuple(transform.apply_points(arr) for arr in arrays)
    return ScatterLayout(paths=paths, transform=transform, bounds=bounds)


def _axis_scale(length: float, extent: float) -> float:
    if extent <= 0:
        return 1.0
    return length / extent
