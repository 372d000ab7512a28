"""Shared web constants used across API routes, services, and preview payloads."""


class AppConstants:
    """Single source of truth for preview geometry and response details."""

    # Interactive preview canvas (CSS pixels) and its backing-store scale
    PREVIEW_WIDTH_PX = 260
    PREVIEW_HEIGHT_PX = 560
    PREVIEW_PIXEL_RATIO = 2
    PREVIEW_MIN_WIDTH_PX = 100
    PREVIEW_MAX_WIDTH_PX = 1320

    # Phone mockup chrome around the preview (CSS pixels)
    MOCKUP_BEZEL_PX = 10
    MOCKUP_OUTER_RADIUS_PX = 48
    MOCKUP_SCREEN_RADIUS_PX = 35
    ISLAND_WIDTH_PX = 112
    ISLAND_HEIGHT_PX = 32
    ISLAND_TOP_PX = 12
    NOTCH_WIDTH_PX = 144
    NOTCH_HEIGHT_PX = 28
    NOTCH_RADIUS_PX = 24
    HOME_INDICATOR_WIDTH_PX = 110
    HOME_INDICATOR_HEIGHT_PX = 4
    HOME_INDICATOR_BOTTOM_PX = 14

    # Mockup colors
    COLOR_CUTOUT = "#1a1a1a"
    COLOR_FRAME_DARK = "#1a1a1f"
    COLOR_FRAME_LIGHT = "#e8e8ed"

    # Responses
    WALLPAPER_FILENAME = "life-calendar.png"
    EXPORT_FILENAME = "inspogrid-wallpaper.png"
    NO_CACHE = "no-cache, no-store, must-revalidate"
