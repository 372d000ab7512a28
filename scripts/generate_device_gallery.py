#!/usr/bin/env python3
"""
Render one wallpaper per supported device (or theme) into a contact sheet.
Useful for eyeballing layout regressions across screen sizes.
"""

import argparse
import os
import sys
from datetime import date

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from PIL import Image, ImageDraw

from lifegrid import DEFAULT_CONFIG, Settings, render_wallpaper
from lifegrid.settings import SHAPES, WIDGET_POSITIONS

THUMB_WIDTH = 240
CAPTION_HEIGHT = 24
SPACING = 12


def generate_gallery(settings_list, captions):
    """Tile thumbnails left to right, wrapping every 6 columns."""
    thumbs = [render_wallpaper(s, width=THUMB_WIDTH).image for s in settings_list]
    cols = min(6, len(thumbs))
    rows = (len(thumbs) + cols - 1) // cols
    cell_h = max(t.height for t in thumbs) + CAPTION_HEIGHT

    sheet = Image.new(
        "RGB",
        (cols * (THUMB_WIDTH + SPACING) + SPACING, rows * (cell_h + SPACING) + SPACING),
        "white",
    )
    draw = ImageDraw.Draw(sheet)
    for i, (thumb, caption) in enumerate(zip(thumbs, captions)):
        x = SPACING + (i % cols) * (THUMB_WIDTH + SPACING)
        y = SPACING + (i // cols) * (cell_h + SPACING)
        sheet.paste(thumb, (x, y))
        draw.text((x, y + thumb.height + 4), caption, fill="black")
    return sheet


def main():
    parser = argparse.ArgumentParser(description="Generate a device/theme contact sheet")
    parser.add_argument(
        "-o",
        "--output",
        default="images/device_gallery.png",
        help="Output PNG file (default: images/device_gallery.png)",
    )
    parser.add_argument("--birth-date", default="1990-05-01")
    parser.add_argument("--life-expectancy", type=int, default=80)
    parser.add_argument("--shape", choices=SHAPES, default="circle")
    parser.add_argument("--widget-position", choices=WIDGET_POSITIONS, default="none")
    parser.add_argument(
        "--themes", action="store_true", help="One tile per theme on the default device"
    )
    args = parser.parse_args()

    output_dir = os.path.dirname(args.output) or "."
    os.makedirs(output_dir, exist_ok=True)

    base = dict(
        birth_date=date.fromisoformat(args.birth_date),
        life_expectancy=args.life_expectancy,
        shape=args.shape,
        widget_position=args.widget_position,
    )
    if args.themes:
        themes = [t.id for t in DEFAULT_CONFIG.themes]
        settings_list = [
            Settings(device=DEFAULT_CONFIG.devices.default_id, theme=t, **base) for t in themes
        ]
        captions = themes
    else:
        devices = list(DEFAULT_CONFIG.devices)
        settings_list = [Settings(device=d.id, **base) for d in devices]
        captions = [f"{d.id} {d.width}x{d.height}" for d in devices]

    generate_gallery(settings_list, captions).save(args.output)
    print(f"Generated {args.output} ({len(settings_list)} tiles)")


if __name__ == "__main__":
    main()
