from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Protocol, Sequence

from chartcore.colors import Colour
from chartcore.geometry import Affine, Point, Rect
from chartcore.primitives import HAlign, VAlign
from chartcore.series import FontSpec


class DrawingContext(Protocol):
    """Backend-agnostic sink for chart primitives.

    Coordinates passed in are local to the current transform; backends map
    them to device space. `save`/`restore` bracket transform changes and must
    always be paired, see `saved_state`.
    """

    def resolve_font(self, spec: FontSpec) -> FontSpec:
        ...

    def text_size(self, text: str, font: FontSpec, rotation: float = 0.0) -> tuple[float, float]:
        ...

    def draw_line(self, p0: Point, p1: Point, colour: Colour, width: float = 1.0) -> None:
        ...

    def fill_rect(self, rect: Rect, colour: Colour, corner_radius: float = 0.0) -> None:
        ...

    def stroke_path(self, points: Sequence[Point], colour: Colour, thickness: float = 1.0) -> None:
        ...

    def draw_text(
        self,
        position: Point,
        content: str,
        font: FontSpec,
        colour: Colour,
        *,
        h_align: HAlign = "left",
        v_align: VAlign = "top",
        rotation: float = 0.0,
    ) -> tuple[float, float]:
        ...

    def save(self) -> None:
        ...

    def restore(self) -> None:
        ...

    def transform(self, affine: Affine) -> None:
        ...


@contextmanager
def saved_state(ctx: DrawingContext, affine: Affine | None = None) -> Iterator[DrawingContext]:
    """Save the context, optionally apply `affine`, and restore on exit, even on error."""
    ctx.save()
    try:
        if affine is not None and not affine.is_identity:
            ctx.transform(affine)
        yield ctx
    finally:
        ctx.restore()
