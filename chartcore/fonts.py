from __future__ import annotations

import logging
import math
from functools import lru_cache
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from chartcore.errors import DrawError, FontLoadingError
from chartcore.series import FontSpec


LOGGER = logging.getLogger(__name__)

PilFont = ImageFont.FreeTypeFont | ImageFont.ImageFont

SANS_FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "liberationsans",
    "helvetica",
    "arial",
    "notosans",
)

GENERIC_SANS_NAMES = frozenset({"sans", "sans-serif", "sansserif"})

FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path.home() / ".fonts",
)


def load_font(spec: FontSpec) -> PilFont:
    """Resolve `spec` into a Pillow font.

    A named family or file that cannot be loaded raises `FontLoadingError`;
    an unnamed font falls back to common sans families, then Pillow's default.
    """
    family = spec.family
    if family is not None and family.strip().lower() in GENERIC_SANS_NAMES:
        family = None
    return _load_font(family, spec.file_path, _size_key(spec.size))


def text_size(text: str, spec: FontSpec, rotation: float = 0.0) -> tuple[float, float]:
    font = load_font(spec)
    if not text:
        ascent, descent = _metrics(font)
        w, h = 0.0, float(max(1, ascent + descent))
    else:
        try:
            left, top, right, bottom = font.getbbox(text)
        except (OSError, ValueError) as exc:
            raise DrawError(f"failed to build text {text!r}: {exc}") from exc
        w = float(max(0, right - left))
        h = float(max(1, bottom - top))
    if rotation % 90 == 0:
        turns = int(rotation // 90) % 4
        return (h, w) if turns % 2 == 1 else (w, h)
    rad = math.radians(rotation)
    cos = abs(math.cos(rad))
    sin = abs(math.sin(rad))
    return (w * cos + h * sin, w * sin + h * cos)


@lru_cache(maxsize=128)
def render_mask(text: str, spec: FontSpec) -> np.ndarray:
    """8-bit coverage mask of `text`, cropped to its ink box."""
    font = load_font(spec)
    if not text:
        return np.zeros((1, 1), dtype=np.uint8)
    try:
        left, top, right, bottom = font.getbbox(text)
        width = max(1, int(right - left))
        height = max(1, int(bottom - top))
        image = Image.new("L", (width, height), 0)
        draw = ImageDraw.Draw(image)
        draw.text((-left, -top), text, fill=255, font=font)
    except (OSError, ValueError) as exc:
        raise DrawError(f"failed to build text {text!r}: {exc}") from exc
    return np.asarray(image, dtype=np.uint8)


def _size_key(size: float) -> int:
    return max(1, int(round(size)))


def _metrics(font: PilFont) -> tuple[int, int]:
    if isinstance(font, ImageFont.FreeTypeFont):
        return font.getmetrics()
    left, top, right, bottom = font.getbbox("Ag")
    return (int(bottom - top), 0)


@lru_cache(maxsize=64)
def _load_font(family: str | None, file_path: str | None, size: int) -> PilFont:
    if file_path is not None:
        try:
            return ImageFont.truetype(str(file_path), size=size)
        except OSError as exc:
            raise FontLoadingError(family or str(file_path), str(exc)) from exc

    if family is not None:
        path = _resolve_font_path((family,))
        if path is None:
            raise FontLoadingError(family, "family not found")
        try:
            return ImageFont.truetype(str(path), size=size)
        except OSError as exc:
            raise FontLoadingError(family, str(exc)) from exc

    path = _resolve_font_path(SANS_FONT_FALLBACK_PATTERNS)
    if path is not None:
        try:
            return ImageFont.truetype(str(path), size=size)
        except OSError:
            LOGGER.warning("could not open %s, using built-in font", path)
    else:
        LOGGER.debug("no system sans font found, using built-in font")
    return ImageFont.load_default(size=size)


@lru_cache(maxsize=1)
def _font_candidates() -> tuple[Path, ...]:
    candidates: list[Path] = []
    for base in FONT_DIRS:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(sorted(base.rglob(ext)))
    return tuple(candidates)


def _resolve_font_path(patterns: tuple[str, ...]) -> Path | None:
    candidates = _font_candidates()
    for pattern in patterns:
        p = pattern.strip().lower().replace(" ", "")
        if not p:
            continue
        for path in candidates:
            stem = path.stem.lower().replace(" ", "")
            name = path.name.lower().replace(" ", "")
            if p in stem or p in name:
                return path
    return None
