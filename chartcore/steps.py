from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal

from chartcore.errors import NotEnoughSpaceError
from chartcore.geometry import Rect, ceil_mul, floor_mul
from chartcore.series import XY


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepLabel:
    value: float
    offset: float
    text: str


def decide_steps(length: float, min_val: float, max_val: float, step: float) -> list[StepLabel]:
    """Evenly spaced tick labels across the step-rounded range `[min_val, max_val]`.

    Values start at `min_val` rounded down to a multiple of `step` and end at
    `max_val` rounded up, inclusive. Offsets are linear in `length` over the
    rounded range, so the first label sits at 0 and the last at `length`.
    """
    intervals = step_count(min_val, max_val, step)
    lo = floor_mul(min_val, step)
    hi = ceil_mul(max_val, step)
    if intervals == 0:
        return [StepLabel(value=_snap(lo, step), offset=0.0, text=format_tick(lo, step=step))]

    offset_step = length / ((hi - lo) / step)
    labels = []
    for i in range(intervals + 1):
        value = _snap(lo + step * i, step)
        labels.append(StepLabel(value=value, offset=offset_step * i, text=format_tick(value, step=step)))
    assert labels[-1].offset <= length * (1.0 + 1e-9) + 1e-9, (
        f"offset outside bounds: length {length} min_val {min_val} max_val {max_val} "
        f"step {step} offset_step {offset_step}"
    )
    return labels


def step_count(min_val: float, max_val: float, step: float) -> int:
    """Number of `step` intervals across the step-rounded range, without building labels."""
    if step <= 0:
        raise ValueError("step must be > 0")
    if max_val < min_val:
        raise ValueError("max_val must be >= min_val")
    return int(round((ceil_mul(max_val, step) - floor_mul(min_val, step)) / step))


def check_step_space(area: Rect, counts: XY[int]) -> None:
    """Raise `NotEnoughSpaceError` unless every interval can get one device unit."""
    if area.width < counts.x:
        raise NotEnoughSpaceError(needed=counts.x, available=area.width, what="x steps")
    if area.height < counts.y:
        raise NotEnoughSpaceError(needed=counts.y, available=area.height, what="y steps")


def step_adjust(area: Rect, steps: XY[int]) -> Rect:
    """Round width and height up to whole multiples of `steps`.

    Width grows from `x0`; height grows upward from `y1`, the baseline of a
    value axis drawn in device space.
    """
    if steps.x <= 0 or steps.y <= 0:
        raise ValueError("steps must be > 0")
    width = ceil_mul(area.width, steps.x)
    height = ceil_mul(area.height, steps.y)
    return Rect(area.x0, area.y1 - height, area.x0 + width, area.y1)


def fit_to_steps(area: Rect, counts: XY[int]) -> Rect:
    """Largest step-adjusted rectangle of `area` that still lies inside it.

    `counts` are the number of tick intervals per axis; the result gives each
    interval a whole number of device units (at least one).
    """
    if counts.x <= 0 or counts.y <= 0:
        raise ValueError("counts must be > 0")
    check_step_space(area, counts)
    shrunk = Rect(
        area.x0,
        area.y1 - floor_mul(area.height, counts.y),
        area.x0 + floor_mul(area.width, counts.x),
        area.y1,
    )
    adjusted = step_adjust(shrunk, counts)
    LOGGER.debug("fit_to_steps area=%s counts=%s adjusted=%s", area, counts, adjusted)
    return adjusted


def nice_step(vmin: float, vmax: float, target: int = 6) -> float:
    """1/2/5 x 10^k step giving roughly `target` ticks over `[vmin, vmax]`.

    An empty or non-finite span falls back to the magnitude of `vmax`.
    """
    if target <= 0:
        raise ValueError("target must be > 0")
    span = vmax - vmin
    if not math.isfinite(span) or span <= 0:
        return _round_to_125(abs(vmax) if vmax != 0 else 1.0)
    return _round_to_125(span / max(target - 1, 1))


def format_tick(value: float, *, step: float) -> str:
    """Label text for a tick on a `step` grid, using the step's decimal count."""
    if not math.isfinite(value):
        return str(value)
    if abs(value) <= step * 1e-9:
        value = 0.0
    if value != 0 and (abs(value) >= 1e6 or abs(value) < 1e-6 or step < 1e-4):
        return f"{value:.4e}"
    text = f"{value:.{_step_decimals(step)}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _snap(value: float, step: float) -> float:
    snapped = round(value / step) * step
    if abs(snapped) <= step * 1e-9:
        return 0.0
    return float(round(snapped, _step_decimals(step) + 2))


def _round_to_125(value: float) -> float:
    base = 10.0 ** math.floor(math.log10(value))
    ratio = value / base
    for limit, mult in ((1.5, 1.0), (3.0, 2.0), (7.0, 5.0)):
        if ratio < limit:
            return mult * base
    return 10.0 * base


def _step_decimals(step: float) -> int:
    if step <= 0 or not math.isfinite(step):
        return 6
    exponent = Decimal(str(step)).normalize().as_tuple().exponent
    return min(12, max(0, -int(exponent)))
