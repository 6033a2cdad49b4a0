from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np


def floor_mul(value: float, step: float) -> float:
    """Largest multiple of `step` that is <= `value`."""
    return math.floor(value / step) * step


def ceil_mul(value: float, step: float) -> float:
    """Smallest multiple of `step` that is >= `value`."""
    return math.ceil(value / step) * step


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    x0: float
    y0: float
    x1: float
    y1: float

    def __post_init__(self) -> None:
        if self.x1 < self.x0 or self.y1 < self.y0:
            raise ValueError(f"Rect width/height must be >= 0: {self}")

    @classmethod
    def from_size(cls, x: float, y: float, width: float, height: float) -> "Rect":
        return cls(x, y, x + width, y + height)

    @classmethod
    def from_points(cls, points: np.ndarray) -> "Rect":
        if points.size == 0:
            raise ValueError("cannot bound an empty point set")
        mins = points.min(axis=0)
        maxs = points.max(axis=0)
        return cls(float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1]))

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    @property
    def center(self) -> Point:
        return Point((self.x0 + self.x1) / 2.0, (self.y0 + self.y1) / 2.0)

    def union(self, other: "Rect") -> "Rect":
        return Rect(
            min(self.x0, other.x0),
            min(self.y0, other.y0),
            max(self.x1, other.x1),
            max(self.y1, other.y1),
        )

    def contains_rect(self, other: "Rect", tolerance: float = 1e-9) -> bool:
        return (
            other.x0 >= self.x0 - tolerance
            and other.y0 >= self.y0 - tolerance
            and other.x1 <= self.x1 + tolerance
            and other.y1 <= self.y1 + tolerance
        )

    def inset(self, left: float, top: float, right: float, bottom: float) -> "Rect":
        """Shrink by per-edge amounts; collapses to zero size instead of inverting."""
        x0 = self.x0 + left
        y0 = self.y0 + top
        x1 = max(x0, self.x1 - right)
        y1 = max(y0, self.y1 - bottom)
        return Rect(x0, y0, x1, y1)


def union_all(rects: Iterable[Rect]) -> Rect | None:
    out: Rect | None = None
    for rect in rects:
        out = rect if out is None else out.union(rect)
    return out


@dataclass(frozen=True)
class Affine:
    """2-D affine map `(x, y) -> (a*x + c*y + e, b*x + d*y + f)`.

    Compose with `then`: `A.then(B)` applies A first, then B.
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> "Affine":
        return cls()

    @classmethod
    def translation(cls, dx: float, dy: float) -> "Affine":
        return cls(e=dx, f=dy)

    @classmethod
    def scaling(cls, sx: float, sy: float | None = None) -> "Affine":
        return cls(a=sx, d=sx if sy is None else sy)

    @classmethod
    def flip_y(cls) -> "Affine":
        return cls(d=-1.0)

    @classmethod
    def flip_y_within(cls, rect: Rect) -> "Affine":
        """Mirror vertically so that `rect.y0` and `rect.y1` swap places."""
        return cls(d=-1.0, f=rect.y0 + rect.y1)

    @classmethod
    def rotation(cls, degrees: float) -> "Affine":
        """Counter-clockwise as seen on screen, where y grows downward."""
        rad = math.radians(degrees)
        cos = math.cos(rad)
        sin = math.sin(rad)
        return cls(a=cos, b=-sin, c=sin, d=cos)

    def then(self, other: "Affine") -> "Affine":
        return Affine(
            a=other.a * self.a + other.c * self.b,
            b=other.b * self.a + other.d * self.b,
            c=other.a * self.c + other.c * self.d,
            d=other.b * self.c + other.d * self.d,
            e=other.a * self.e + other.c * self.f + other.e,
            f=other.b * self.e + other.d * self.f + other.f,
        )

    @property
    def is_identity(self) -> bool:
        return self == Affine()

    @property
    def rotation_degrees(self) -> float:
        return math.degrees(math.atan2(-self.b, self.a))

    def apply(self, point: Point) -> Point:
        return Point(
            self.a * point.x + self.c * point.y + self.e,
            self.b * point.x + self.d * point.y + self.f,
        )

    def apply_points(self, points: np.ndarray) -> np.ndarray:
        if points.size == 0:
            return np.zeros((0, 2), dtype=np.float64)
        xs = points[:, 0]
        ys = points[:, 1]
        out = np.empty_like(points, dtype=np.float64)
        out[:, 0] = self.a * xs + self.c * ys + self.e
        out[:, 1] = self.b * xs + self.d * ys + self.f
        return out

    def apply_rect(self, rect: Rect) -> Rect:
        corners = np.asarray(
            [[rect.x0, rect.y0], [rect.x1, rect.y0], [rect.x0, rect.y1], [rect.x1, rect.y1]],
            dtype=np.float64,
        )
        return Rect.from_points(self.apply_points(corners))

    def scale_factor(self) -> float:
        """Mean length scale, used to scale stroke widths and font sizes."""
        return math.sqrt(abs(self.a * self.d - self.b * self.c))
