from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from chartcore.colors import Colour
from chartcore.geometry import Point, Rect
from chartcore.series import FontSpec


HAlign = Literal["left", "center", "right"]
VAlign = Literal["top", "middle", "bottom"]


@dataclass(frozen=True)
class Line:
    p0: Point
    p1: Point
    colour: Colour
    width: float = 1.0


@dataclass(frozen=True)
class FilledRect:
    rect: Rect
    colour: Colour
    corner_radius: float = 0.0


@dataclass(frozen=True)
class StrokedPath:
    points: tuple[Point, ...]
    colour: Colour
    thickness: float = 1.0


@dataclass(frozen=True)
class Text:
    """Text anchored at `position`; alignment says which edge of the box sits there.

    `rotation` is in degrees, counter-clockwise positive, about `position`.
    """

    position: Point
    content: str
    h_align: HAlign
    v_align: VAlign
    rotation: float
    font: FontSpec
    colour: Colour


DrawingPrimitive = Union[Line, FilledRect, StrokedPath, Text]


def aligned_origin(position: Point, size: tuple[float, float], h_align: HAlign, v_align: VAlign) -> Point:
    """Top-left corner of an unrotated text box anchored at `position`."""
    w, h = size
    if h_align == "left":
        x = position.x
    elif h_align == "center":
        x = position.x - w / 2.0
    else:
        x = position.x - w
    if v_align == "top":
        y = position.y
    elif v_align == "middle":
        y = position.y - h / 2.0
    else:
        y = position.y - h
    return Point(x, y)
