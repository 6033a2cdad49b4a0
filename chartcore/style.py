from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping

from chartcore.colors import Colour


@dataclass(frozen=True)
class ChartStyle:
    """Colours shared by every chart type."""

    background: Colour = (255, 255, 255, 255)
    axis: Colour = (40, 40, 40, 255)
    grid: Colour = (0, 0, 0, 60)
    text: Colour = (20, 20, 20, 255)
    legend_background: Colour = (250, 250, 250, 255)
    axis_width: float = 1.0
    grid_width: float = 1.0

    def __post_init__(self) -> None:
        if self.axis_width <= 0 or self.grid_width <= 0:
            raise ValueError("ChartStyle line widths must be > 0")


DEFAULT_STYLE = ChartStyle()


def style_with_overrides(overrides: Mapping[str, Any] | None = None) -> ChartStyle:
    """Validate and merge overrides against the default style."""
    raw: dict[str, Any] = asdict(DEFAULT_STYLE)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown style key: {key}")
            raw[key] = value

    for key in ("background", "axis", "grid", "text", "legend_background"):
        raw[key] = _validate_colour(key, raw[key])

    for key in ("axis_width", "grid_width"):
        if not isinstance(raw[key], (int, float)) or float(raw[key]) <= 0:
            raise ValueError(f"Style `{key}` must be a positive number")
        raw[key] = float(raw[key])

    return ChartStyle(**raw)


def _validate_colour(key: str, value: Any) -> Colour:
    if not isinstance(value, (tuple, list)) or len(value) not in (3, 4):
        raise ValueError(f"Style `{key}` must be an RGB or RGBA tuple")
    channels = [int(c) for c in value]
    if any(c < 0 or c > 255 for c in channels):
        raise ValueError(f"Style `{key}` channels must be in [0, 255]")
    if len(channels) == 3:
        channels.append(255)
    return (channels[0], channels[1], channels[2], channels[3])
