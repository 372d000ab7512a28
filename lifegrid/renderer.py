"""Raster renderer: draws a LayoutPlan onto a Pillow image.

Order is background, text, dots. Label text is composited from RGBA layers
so its opacity blends with the background instead of overwriting it.
"""

from __future__ import annotations

import base64
import io
import math
import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image, ImageColor, ImageDraw, ImageFont

from .config import DEFAULT_CONFIG, RenderConfig
from .errors import RenderError
from .layout import DotDraw, LayoutPlan, TextDraw, compute_layout
from .settings import Settings
from .weeks import Moment

logger = logging.getLogger(__name__)

MAX_CANVAS_SIDE = 8192
ROUNDED_CORNER_RATIO = 0.25

_FONT_DIR = "/usr/share/fonts/truetype/dejavu"
_FONT_CANDIDATES = {
    "regular": ("DejaVuSans.ttf", f"{_FONT_DIR}/DejaVuSans.ttf"),
    "light": (
        "DejaVuSans-ExtraLight.ttf",
        f"{_FONT_DIR}/DejaVuSans-ExtraLight.ttf",
        "DejaVuSans.ttf",
        f"{_FONT_DIR}/DejaVuSans.ttf",
    ),
}


class RasterSurface:
    """Rendered wallpaper: an addressable bitmap with PNG export."""

    def __init__(self, image: Image.Image):
        self.image = image

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def getpixel(self, x: int, y: int) -> tuple[int, int, int]:
        return self.image.getpixel((x, y))

    def to_array(self) -> np.ndarray:
        """Pixels as a (height, width, channels) uint8 array."""
        return np.asarray(self.image, dtype=np.uint8)

    def to_png(self) -> bytes:
        buffer = io.BytesIO()
        self.image.save(buffer, format="PNG")
        return buffer.getvalue()

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.to_png()).decode()
        return f"data:image/png;base64,{encoded}"

    def save(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.write_bytes(self.to_png())
        return path


def _fonts():
    """Per-render font loader (TrueType DejaVu, Pillow default as fallback)."""
    cache: dict[tuple[int, str], ImageFont.ImageFont] = {}

    def load(size: int, weight: str = "regular"):
        key = (size, weight)
        if key in cache:
            return cache[key]
        font = None
        for candidate in _FONT_CANDIDATES.get(weight, _FONT_CANDIDATES["regular"]):
            try:
                font = ImageFont.truetype(candidate, size)
                break
            except OSError:
                continue
        if font is None:
            font = ImageFont.load_default(size=size)
        cache[key] = font
        return font

    return load


def _rgba(color: str, opacity: float = 1.0) -> tuple[int, int, int, int]:
    r, g, b = ImageColor.getrgb(color)[:3]
    return r, g, b, max(0, min(255, round(255 * opacity)))


def _text_origin(draw: ImageDraw.ImageDraw, text: TextDraw, font) -> tuple[float, float]:
    """Top-left draw origin for a text anchored at (x, y)."""
    left, top, right, bottom = draw.textbbox((0, 0), text.text, font=font)
    if text.align == "center":
        x = text.x - (left + right) / 2
    elif text.align == "right":
        x = text.x - right
    else:
        x = text.x - left
    if text.baseline == "middle":
        y = text.y - (top + bottom) / 2
    elif text.baseline == "top":
        y = text.y - top
    else:
        y = text.y - bottom
    return x, y


def _rotated_text_layer(text: TextDraw, font, fill) -> tuple[Image.Image, tuple[int, int]]:
    """Rotated text on a square layer just large enough to hold it.

    Returns the layer and the canvas position of its top-left corner, which
    may be negative when the text sits near an edge.
    """
    measure = ImageDraw.Draw(Image.new("RGBA", (1, 1)))
    ox, oy = _text_origin(measure, text, font)
    left, top, right, bottom = measure.textbbox((ox, oy), text.text, font=font)
    reach = max(math.hypot(x - text.x, y - text.y) for x in (left, right) for y in (top, bottom))
    half = math.ceil(reach) + 2

    x0 = math.floor(text.x) - half
    y0 = math.floor(text.y) - half
    layer = Image.new("RGBA", (2 * half + 2, 2 * half + 2), (0, 0, 0, 0))
    ImageDraw.Draw(layer).text((ox - x0, oy - y0), text.text, font=font, fill=fill)
    layer = layer.rotate(
        text.rotation,
        resample=Image.Resampling.BICUBIC,
        center=(text.x - x0, text.y - y0),
        expand=False,
    )
    return layer, (x0, y0)


def _draw_texts(canvas: Image.Image, texts, font_for) -> None:
    flat = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    flat_draw = ImageDraw.Draw(flat)
    for text in texts:
        font = font_for(text.font_size, text.weight)
        fill = _rgba(text.color, text.opacity)
        if not text.rotation:
            flat_draw.text(_text_origin(flat_draw, text, font), text.text, font=font, fill=fill)
            continue
        layer, (x0, y0) = _rotated_text_layer(text, font, fill)
        if x0 + layer.width <= 0 or y0 + layer.height <= 0 or x0 >= canvas.width or y0 >= canvas.height:
            continue
        # alpha_composite needs a non-negative destination; clip from the source side
        canvas.alpha_composite(layer, dest=(max(0, x0), max(0, y0)), source=(max(0, -x0), max(0, -y0)))
    canvas.alpha_composite(flat)


def _dot_box(dot: DotDraw) -> tuple[int, int, int, int]:
    x0 = round(dot.x)
    y0 = round(dot.y)
    x1 = max(x0, round(dot.x + dot.size) - 1)
    y1 = max(y0, round(dot.y + dot.size) - 1)
    return x0, y0, x1, y1


def draw_dot(draw: ImageDraw.ImageDraw, dot: DotDraw) -> None:
    box = _dot_box(dot)
    # Opaque like the background; any alpha in the color string is dropped
    fill = _rgba(dot.color)
    if dot.shape == "circle":
        draw.ellipse(box, fill=fill)
    elif dot.shape == "square":
        draw.rectangle(box, fill=fill)
    else:
        radius = round(dot.size * ROUNDED_CORNER_RATIO)
        draw.rounded_rectangle(box, radius=radius, fill=fill)


def render(plan: LayoutPlan) -> RasterSurface:
    """Draw a plan onto a new surface.

    Raises:
        RenderError: If the surface cannot be allocated or drawing fails
    """
    width, height = plan.width, plan.height
    if width <= 0 or height <= 0:
        raise RenderError(f"Cannot allocate a {width}x{height} surface")
    if width > MAX_CANVAS_SIDE or height > MAX_CANVAS_SIDE:
        raise RenderError(f"Surface {width}x{height} exceeds {MAX_CANVAS_SIDE}px")

    try:
        canvas = Image.new("RGBA", (width, height), _rgba(plan.background))
        if plan.texts:
            _draw_texts(canvas, plan.texts, _fonts())
        draw = ImageDraw.Draw(canvas)
        for dot in plan.dots:
            draw_dot(draw, dot)
        image = canvas.convert("RGB")
    except (ValueError, OSError, MemoryError) as exc:
        raise RenderError(f"Drawing failed: {exc}") from exc

    return RasterSurface(image)


def render_wallpaper(
    settings: Settings,
    config: RenderConfig = DEFAULT_CONFIG,
    width: Optional[int] = None,
    height: Optional[int] = None,
    now: Optional[Moment] = None,
) -> RasterSurface:
    """Lay out and render ``settings`` for its device.

    Defaults to the device's native resolution. When only ``width`` is given
    the height follows the device aspect ratio.
    """
    device = config.devices.resolve(settings.device)
    if width is None:
        width = device.width
        if height is None:
            height = device.height
    elif height is None:
        height = round(width * device.height / device.width)

    plan = compute_layout(
        settings, device, width, height,
        now=now, gap_ratio=config.gap_ratio, themes=config.themes,
    )
    logger.debug(
        "Rendering %s at %dx%d: %d/%d weeks lived, cell=%.2fpx",
        device.id, width, height, plan.weeks_lived, plan.total_weeks, plan.cell_size,
    )
    return render(plan)
