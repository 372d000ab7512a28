"""Layout engine: settings + device profile -> drawing instructions.

Geometry is defined at the device's native resolution and multiplied by
``scale = canvas_width / device.width``, so the same plan shape comes out for
a full-size export and a thumbnail preview.

Vertical bands, top to bottom::

    top_offset     clock/date (+ widget row or a small buffer)
    top_padding    axis title + week ticks (labels only)
    grid           rows x 52 cells, centered in the available box
    bottom_offset  home indicator + lock screen buttons (+ widget row)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import GAP_RATIO
from .devices import DeviceProfile
from .settings import Settings
from .themes import ThemeCatalog
from .weeks import COLS, Moment, grid_rows, total_weeks, weeks_lived

# Fractions of the device width
TOP_BUFFER = 0.05
TOP_WIDGET_BAND = 0.28
BOTTOM_BUTTONS_BAND = 0.12
BOTTOM_WIDGET_BAND = 0.20
SIDE_PADDING = 0.04
LABEL_SPACE = 0.025
AXIS_TITLE_SPACE = 0.015
TITLE_FONT = 0.016

TICK_FONT = 0.55  # fraction of the cell size
LABEL_OPACITY = 0.4
WEEK_TICKS = (1, 4, 8, 12, 16, 20, 24, 28, 32, 36, 40, 44, 48, 52)
AGE_TICK_STEP = 10


@dataclass(frozen=True)
class TextDraw:
    """One text run.

    ``(x, y)`` is the anchor point; ``align`` is the horizontal anchor
    (left/center/right) and ``baseline`` the vertical one (bottom/middle).
    ``rotation`` is counter-clockwise degrees about the anchor.
    """

    text: str
    x: float
    y: float
    font_size: int
    color: str
    align: str = "center"
    baseline: str = "bottom"
    rotation: float = 0.0
    opacity: float = LABEL_OPACITY
    weight: str = "regular"


@dataclass(frozen=True)
class DotDraw:
    index: int
    x: float  # top-left corner
    y: float
    size: float
    shape: str
    color: str
    lived: bool


@dataclass(frozen=True)
class LayoutPlan:
    """Ordered drawing instructions plus the geometry that produced them."""

    width: int
    height: int
    background: str
    texts: tuple[TextDraw, ...]
    dots: tuple[DotDraw, ...]
    cols: int
    rows: int
    total_weeks: int
    weeks_lived: int
    scale: float
    top_offset: float
    bottom_offset: float
    top_padding: float
    side_padding: float
    available_width: float
    available_height: float
    cell_size: float
    dot_size: float
    gap: float
    start_x: float
    start_y: float

    @property
    def grid_width(self) -> float:
        return self.cols * self.cell_size

    @property
    def grid_height(self) -> float:
        return self.rows * self.cell_size

    @property
    def lived_count(self) -> int:
        return sum(1 for dot in self.dots if dot.lived)


def top_offset(device: DeviceProfile, widget_position: str) -> int:
    """Native pixels above the grid: the clock band plus widgets or a buffer.

    Top widgets replace the small visual buffer under the clock.
    """
    if widget_position == "top":
        return device.clock_height + round(device.width * TOP_WIDGET_BAND)
    return device.clock_height + round(device.width * TOP_BUFFER)


def bottom_offset(device: DeviceProfile, widget_position: str) -> int:
    """Native pixels below the grid: home indicator, lock screen buttons, widgets."""
    offset = device.safe_area_bottom + round(device.width * BOTTOM_BUTTONS_BAND)
    if widget_position == "bottom":
        offset += round(device.width * BOTTOM_WIDGET_BAND)
    return offset


def compute_layout(
    settings: Settings,
    device: DeviceProfile,
    canvas_width: int,
    canvas_height: int,
    now: Optional[Moment] = None,
    gap_ratio: float = GAP_RATIO,
    themes: Optional[ThemeCatalog] = None,
) -> LayoutPlan:
    """Map settings onto a canvas.

    Args:
        settings: Validated settings
        device: Resolved device profile (caller substitutes the default for
            unknown ids)
        canvas_width: Output width in pixels
        canvas_height: Output height in pixels
        now: Reference moment for the lived/future split (defaults to now)
        gap_ratio: Gap between dots as a fraction of the cell
        themes: Palette table (defaults to the built-in themes)

    Returns:
        LayoutPlan with background, label texts and one dot per week
    """
    colors = (themes or ThemeCatalog()).resolve_colors(settings)
    scale = canvas_width / device.width

    weeks = total_weeks(settings.life_expectancy)
    lived = weeks_lived(settings.birth_date, now)
    rows = grid_rows(weeks)

    top = top_offset(device, settings.widget_position) * scale
    bottom = bottom_offset(device, settings.widget_position) * scale

    if settings.show_labels:
        label_space = round(device.width * LABEL_SPACE) * scale
        axis_title_space = round(device.width * AXIS_TITLE_SPACE) * scale
    else:
        label_space = axis_title_space = 0.0
    label_offset = label_space + axis_title_space

    side_padding = device.width * SIDE_PADDING * scale + label_offset
    top_padding = label_offset

    available_width = canvas_width - 2 * side_padding
    available_height = canvas_height - top - bottom - top_padding

    cell_size = max(0.0, min(available_width / COLS, available_height / rows))
    dot_size = cell_size * (1 - gap_ratio)
    gap = cell_size * gap_ratio

    grid_width = COLS * cell_size
    grid_height = rows * cell_size
    start_x = side_padding + (available_width - grid_width) / 2
    start_y = top + top_padding + (available_height - grid_height) / 2

    texts: tuple[TextDraw, ...] = ()
    if settings.show_labels:
        texts = _label_texts(
            settings, colors.text, rows, cell_size, start_x, start_y,
            grid_width, grid_height, label_space, axis_title_space,
            title_font=max(1, round(round(device.width * TITLE_FONT) * scale)),
        )

    dots = []
    for row in range(rows):
        for col in range(COLS):
            index = row * COLS + col
            if index >= weeks:
                break
            is_lived = index < lived
            dots.append(DotDraw(
                index=index,
                x=start_x + col * cell_size + gap / 2,
                y=start_y + row * cell_size + gap / 2,
                size=dot_size,
                shape=settings.shape,
                color=colors.lived if is_lived else colors.future,
                lived=is_lived,
            ))

    return LayoutPlan(
        width=canvas_width,
        height=canvas_height,
        background=colors.background,
        texts=texts,
        dots=tuple(dots),
        cols=COLS,
        rows=rows,
        total_weeks=weeks,
        weeks_lived=lived,
        scale=scale,
        top_offset=top,
        bottom_offset=bottom,
        top_padding=top_padding,
        side_padding=side_padding,
        available_width=available_width,
        available_height=available_height,
        cell_size=cell_size,
        dot_size=dot_size,
        gap=gap,
        start_x=start_x,
        start_y=start_y,
    )


def _label_texts(settings, color, rows, cell_size, start_x, start_y,
                 grid_width, grid_height, label_space, axis_title_space, title_font):
    tick_font = max(1, round(cell_size * TICK_FONT))
    texts = [
        TextDraw("WEEK OF YEAR", start_x + grid_width / 2, start_y - label_space * 0.6,
                 title_font, color, weight="light"),
    ]
    for week in WEEK_TICKS:
        x = start_x + (week - 1) * cell_size + cell_size / 2
        texts.append(TextDraw(str(week), x, start_y - tick_font * 0.2, tick_font, color))

    texts.append(TextDraw(
        "AGE",
        start_x - label_space - axis_title_space * 0.6,
        start_y + grid_height / 2,
        title_font, color, baseline="middle", rotation=90.0, weight="light",
    ))
    # Row index == age in years; an age equal to rows would sit below the grid
    for age in range(AGE_TICK_STEP, settings.life_expectancy + 1, AGE_TICK_STEP):
        if age >= rows:
            break
        y = start_y + age * cell_size + cell_size / 2
        texts.append(TextDraw(str(age), start_x - tick_font * 0.4, y, tick_font, color,
                              align="right", baseline="middle"))
    return tuple(texts)
