from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Generic, Literal, TypeVar

from chartcore.colors import Colour


T = TypeVar("T")
Pt = TypeVar("Pt")

LegendCorner = Literal["upper-right", "upper-left", "lower-right", "lower-left"]

DEFAULT_MARGINS = (5.0, 10.0)
DEFAULT_FONT_SIZE_PX = 12.0


@dataclass(frozen=True)
class XY(Generic[T]):
    x: T
    y: T


@dataclass(frozen=True)
class FontSpec:
    """Font request resolved by the drawing context.

    `family=None` asks for the default sans font. If `file_path` is set the
    font is loaded from that file and `family` is only used in messages.
    """

    family: str | None = None
    size: float = DEFAULT_FONT_SIZE_PX
    file_path: str | None = None

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError("FontSpec `size` must be > 0")
        if self.family is not None and not self.family.strip():
            raise ValueError("FontSpec `family` must be non-empty when provided")
        if self.file_path is not None and not str(self.file_path).strip():
            raise ValueError("FontSpec `file_path` must be non-empty when provided")

    @property
    def name(self) -> str:
        if self.family:
            return self.family
        if self.file_path:
            return Path(self.file_path).stem
        return "sans-serif"

    def scaled(self, factor: float) -> "FontSpec":
        return FontSpec(family=self.family, size=self.size * factor, file_path=self.file_path)


@dataclass(frozen=True)
class Dataset(Generic[T]):
    values: tuple[T, ...]
    name: str = ""
    colour: Colour | None = None
    thickness: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))
        if self.thickness <= 0:
            raise ValueError("Dataset `thickness` must be > 0")

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class ChartInfo(Generic[Pt]):
    datasets: tuple[Dataset[Pt], ...] = field(default_factory=tuple)
    font: FontSpec | None = None
    margins: XY[float | None] | None = None
    caption: str | None = None
    legend: bool = True
    legend_corner: LegendCorner = "upper-right"

    def __post_init__(self) -> None:
        object.__setattr__(self, "datasets", tuple(self.datasets))
        if self.legend_corner not in ("upper-right", "upper-left", "lower-right", "lower-left"):
            raise ValueError(f"unknown legend corner: {self.legend_corner}")
        if self.margins is not None:
            for value in (self.margins.x, self.margins.y):
                if value is not None and value < 0:
                    raise ValueError("margins must be >= 0")

    def resolved_margins(self) -> XY[float]:
        default_x, default_y = DEFAULT_MARGINS
        if self.margins is None:
            return XY(default_x, default_y)
        return XY(
            default_x if self.margins.x is None else float(self.margins.x),
            default_y if self.margins.y is None else float(self.margins.y),
        )

    def resolved_font(self) -> FontSpec:
        return self.font if self.font is not None else FontSpec()
