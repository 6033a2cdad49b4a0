from __future__ import annotations

from itertools import cycle
from typing import Iterator


Colour = tuple[int, int, int, int]

# Qualitative palette for datasets that do not name a colour.
DEFAULT_PALETTE: tuple[Colour, ...] = (
    (62, 149, 255, 255),
    (255, 165, 0, 255),
    (80, 200, 120, 255),
    (232, 76, 61, 255),
    (155, 89, 182, 255),
    (241, 196, 15, 255),
    (26, 188, 156, 255),
    (230, 126, 34, 255),
)


def coerce_colour(color: tuple[int, int, int] | tuple[int, int, int, int], alpha: float = 1.0) -> Colour:
    if len(color) == 3:
        r, g, b = color
        a = int(max(0.0, min(1.0, alpha)) * 255)
        return (r, g, b, a)
    r, g, b, a = color
    out_a = int(max(0.0, min(1.0, alpha)) * a)
    return (r, g, b, out_a)


def with_alpha(color: Colour, alpha: float) -> Colour:
    """Replace the alpha channel with `alpha` in [0, 1]."""
    return coerce_colour(color[:3], alpha)


def palette() -> Iterator[Colour]:
    return cycle(DEFAULT_PALETTE)


def resolve_colours(colours: list[Colour | None]) -> list[Colour]:
    """Fill unset colours from the palette, in dataset order."""
    fallback = palette()
    return [c if c is not None else next(fallback) for c in colours]
