from __future__ import annotations

from functools import lru_cache
import logging
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from sandbox_charts.errors import FontMetricsError
from sandbox_charts.metrics import TextMetrics
from sandbox_charts.style import RGBA, FontSpec


LOGGER = logging.getLogger(__name__)

SANS_FONT_FALLBACK_PATTERNS = (
    "helvetica",
    "arial",
    "liberationsans",
    "dejavusans",
)
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path.home() / ".fonts",
    Path("C:/Windows/Fonts"),
)

PillowFont = ImageFont.FreeTypeFont | ImageFont.ImageFont


class PillowFontMetrics:
    """`FontMetrics` backed by the same Pillow fonts `draw_text` renders with."""

    def measure(self, font: FontSpec, text: str) -> TextMetrics:
        loaded = load_font(font)
        ascent, descent = loaded.getmetrics()
        width = int(round(loaded.getlength(text))) if text else 0
        return TextMetrics(width=width, height=int(ascent + descent), ascent=int(ascent), descent=int(descent))


def draw_text(dst: np.ndarray, x: float, y: float, text: str, font: FontSpec, color: RGBA, *, rotate_deg: int = 0) -> None:
    """Blend ``text`` with its baseline origin at ``(x, y)``, turned about that point."""

    if not text:
        return
    loaded = load_font(font)
    ascent, descent = (int(v) for v in loaded.getmetrics())
    mask = _render_mask(text, loaded)
    turns = _normalize_quarter_turns(rotate_deg)
    w = mask.shape[1]
    px = int(round(x))
    py = int(round(y))
    if turns == 0:
        x0, y0 = px, py - ascent
    elif turns == 1:
        x0, y0 = px - ascent, py - w
    elif turns == 2:
        x0, y0 = px - w, py - descent
    else:
        x0, y0 = px - descent, py
    _blend_mask(dst, x0, y0, np.rot90(mask, k=turns), color)


def load_font(font: FontSpec) -> PillowFont:
    return _load_font(font.family, font.size_px, font.bold, font.file_path)


@lru_cache(maxsize=64)
def _load_font(family: str, size_px: float, bold: bool, file_path: str | None) -> PillowFont:
    size = max(1, int(round(size_px)))
    if file_path is not None:
        try:
            return ImageFont.truetype(file_path, size=size)
        except OSError as exc:
            raise FontMetricsError(f"cannot load font file `{file_path}`: {exc}") from exc
    font_path = _resolve_font_path(family, bold)
    if font_path is not None:
        try:
            return ImageFont.truetype(str(font_path), size=size)
        except OSError:
            LOGGER.warning("font %s could not be opened", font_path)
    LOGGER.warning("no font file found for family %r (bold=%s); using Pillow's default font", family, bold)
    return ImageFont.load_default(size=size)


def _resolve_font_path(family: str, bold: bool) -> Path | None:
    wanted = family.strip().lower().replace(" ", "")
    patterns = ((wanted,) if wanted else ()) + SANS_FONT_FALLBACK_PATTERNS
    candidates = _font_candidates()
    for pattern in patterns:
        for path in candidates:
            if _matches(path.stem.lower().replace(" ", ""), pattern, bold):
                return path
    return None


def _matches(stem: str, pattern: str, bold: bool) -> bool:
    if not stem.startswith(pattern):
        return False
    suffix = stem[len(pattern) :].strip("-_")
    if bold:
        return suffix in ("bold", "b", "bd")
    return suffix in ("", "regular", "roman", "book")


@lru_cache(maxsize=1)
def _font_candidates() -> tuple[Path, ...]:
    candidates: list[Path] = []
    for base in FONT_DIRS:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))
    return tuple(sorted(candidates))


@lru_cache(maxsize=256)
def _render_mask(text: str, font: PillowFont) -> np.ndarray:
    # Line box: row `ascent` is the baseline, column 0 the pen origin.
    ascent, descent = font.getmetrics()
    right = font.getbbox(text)[2]
    width = max(1, int(round(font.getlength(text))), int(right))
    height = max(1, int(ascent + descent))
    image = Image.new("L", (width, height), 0)
    ImageDraw.Draw(image).text((0, 0), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


def _blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    h, w = mask.shape
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    cov = mask[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32) / 255.0
    src_alpha = (color[3] / 255.0) * cov
    if not np.any(src_alpha > 0):
        return

    patch = dst[y0:y1, x0:x1]
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0
    src_rgb = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    out_rgb_num = src_rgb * src_alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - src_alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    out_rgb = out_rgb_num / safe_alpha[:, :, None]

    patch[:, :, :3] = np.clip(out_rgb, 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(out_alpha * 255.0, 0, 255).astype(np.uint8)


def _normalize_quarter_turns(rotate_deg: int) -> int:
    """Map a screen angle (negative = counter-clockwise) to an ``np.rot90`` k."""

    if rotate_deg % 90 != 0:
        raise ValueError("rotate_deg must be a multiple of 90")
    return (-rotate_deg // 90) % 4
