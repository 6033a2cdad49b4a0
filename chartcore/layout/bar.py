from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from chartcore.errors import EmptyDatasetError, InvalidDatasetsError, NotEnoughSpaceError
from chartcore.geometry import Rect


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class BarBlock:
    category: int
    dataset: int
    value: float
    rect: Rect


@dataclass(frozen=True)
class BarLayout:
    """Grouped bar geometry in value space: blocks grow up from `area.y0`."""

    area: Rect
    blocks: tuple[BarBlock, ...]
    block_width: float
    block_gap: float
    max_value: float
    category_centers: tuple[float, ...]

    def blocks_for_dataset(self, dataset: int) -> tuple[BarBlock, ...]:
        return tuple(b for b in self.blocks if b.dataset == dataset)


def global_max_value(values: Sequence[Sequence[float]]) -> float:
    """Ceiling of the largest value across all datasets (0.0 when there is none)."""
    flat = [float(v) for row in values for v in row]
    if not flat:
        return 0.0
    return float(math.ceil(max(flat)))


def validate_bar_values(values: Sequence[Sequence[float]], categories: int | None = None) -> tuple[int, int]:
    """Check the dataset x category grid; returns `(datasets, categories)`."""
    n = len(values)
    if n == 0:
        raise EmptyDatasetError("bar chart has no datasets")
    c = len(values[0]) if categories is None else categories
    for index, row in enumerate(values):
        if len(row) != c:
            raise InvalidDatasetsError(f"dataset {index} has {len(row)} values for {c} categories")
    if c == 0:
        raise EmptyDatasetError("bar chart has no categories")
    for row in values:
        for v in row:
            if not math.isfinite(float(v)) or float(v) < 0:
                raise InvalidDatasetsError(f"bar values must be finite and >= 0, got {v!r}")
    return n, c


def layout_bars(
    values: Sequence[Sequence[float]],
    area: Rect,
    spacing: float,
    *,
    categories: int | None = None,
    max_value: float | None = None,
) -> BarLayout:
    """Allocate one block per (category, dataset) inside `area`.

    `values[d][c]` is dataset `d`'s value for category `c`. Blocks of one
    category sit side by side; categories are separated by `spacing`.
    """
    if spacing < 0:
        raise ValueError("spacing must be >= 0")
    n, c = validate_bar_values(values, categories)

    free_width = area.width - (c - 1) * spacing
    if free_width < n * c:
        raise NotEnoughSpaceError(needed=n * c + (c - 1) * spacing, available=area.width, what="bar blocks")
    block_width = free_width / (n * c)
    block_gap = block_width * n + spacing

    top = global_max_value(values) if max_value is None else float(max_value)
    # All-zero data: keep blocks at zero height instead of dividing by zero.
    unit = area.height / top if top > 0 else 0.0

    blocks: list[BarBlock] = []
    for cat in range(c):
        for ds in range(n):
            value = float(values[ds][cat])
            x0 = area.x0 + cat * block_gap + ds * block_width
            height = unit * value
            blocks.append(BarBlock(category=cat, dataset=ds, value=value, rect=Rect(x0, area.y0, x0 + block_width, area.y0 + height)))

    centers = tuple(area.x0 + cat * block_gap + block_width * n / 2.0 for cat in range(c))
    LOGGER.debug("bar layout n=%d c=%d block_width=%.3f max_value=%s", n, c, block_width, top)
    return BarLayout(
        area=area,
        blocks=tuple(blocks),
        block_width=block_width,
        block_gap=block_gap,
        max_value=top,
        category_centers=centers,
    )
