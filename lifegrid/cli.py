#!/usr/bin/env python3
"""Thin CLI over the lifegrid library.

Stays a small wrapper: parse arguments, call library functions, map errors
to exit codes (0 ok, 1 usage, 2 invalid input or render failure).
"""

import argparse
import logging
import sys
from pathlib import Path

from .codec import decode, encode, wallpaper_url
from .config import DEFAULT_CONFIG
from .errors import LifegridError
from .renderer import render_wallpaper
from .settings import SHAPES, WIDGET_POSITIONS, Settings, parse_birth_date
from .themes import THEME_IDS
from .weeks import life_expectancy_for


def _add_settings_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--token", help="settings token (overrides the options below)")
    p.add_argument("--birth-date", help="YYYY-MM-DD")
    p.add_argument("--life-expectancy", type=int, help="years (default: country preset)")
    p.add_argument("--country", default="US", help="country code for the life expectancy preset")
    p.add_argument("--device", default=DEFAULT_CONFIG.devices.default_id)
    p.add_argument("--shape", choices=SHAPES, default="circle")
    p.add_argument("--widget-position", choices=WIDGET_POSITIONS, default="none")
    p.add_argument("--theme", choices=sorted(THEME_IDS), default="light")
    p.add_argument("--no-labels", action="store_true", help="hide axis labels")


def _settings_from_args(args) -> Settings:
    if args.token:
        return decode(args.token)
    if not args.birth_date:
        raise LifegridError("--birth-date or --token is required")
    return Settings(
        birth_date=parse_birth_date(args.birth_date),
        life_expectancy=(args.life_expectancy if args.life_expectancy is not None
                         else life_expectancy_for(args.country)),
        device=args.device,
        shape=args.shape,
        widget_position=args.widget_position,
        theme=args.theme,
        show_labels=not args.no_labels,
    )


def main(argv=None):
    parser = argparse.ArgumentParser(prog="lifegrid", description="Life calendar wallpaper generator")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="cmd")

    p = sub.add_parser("render", help="render a wallpaper PNG")
    _add_settings_args(p)
    p.add_argument("--width", type=int, help="output width (default: device native)")
    p.add_argument("--height", type=int, help="output height (default: device aspect)")
    p.add_argument("-o", "--output", default="life-calendar.png")

    p = sub.add_parser("token", help="print the settings token")
    _add_settings_args(p)
    p.add_argument("--base-url", help="also print the wallpaper URL for this server")

    sub.add_parser("devices", help="list supported devices")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.cmd == "devices":
        for device in DEFAULT_CONFIG.devices:
            marker = " (default)" if device.id == DEFAULT_CONFIG.devices.default_id else ""
            print(f"{device.id:20} {device.width}x{device.height}  {device.name}{marker}")
        return 0

    if args.cmd in ("render", "token"):
        try:
            settings = _settings_from_args(args)
            if args.cmd == "token":
                token = encode(settings)
                print(token)
                if args.base_url:
                    print(wallpaper_url(args.base_url, token))
                return 0
            surface = render_wallpaper(settings, width=args.width, height=args.height)
            out = surface.save(Path(args.output))
        except LifegridError as e:
            print(f"error: {e}", file=sys.stderr)
            return 2
        print(f"Wrote {out} ({surface.width}x{surface.height})")
        return 0

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
