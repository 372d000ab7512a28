"""lifegrid - life calendar wallpaper engine.

Pure-Python layout, rendering and token codec. No web framework imports;
the Flask app in ``lifegrid_app`` is a thin layer over this package.
"""

from .codec import decode, decode_or_none, encode, wallpaper_url
from .config import DEFAULT_CONFIG, RenderConfig
from .devices import DEFAULT_DEVICE_ID, DeviceCatalog, DeviceProfile
from .errors import InvalidTokenError, LifegridError, RenderError, ValidationError
from .layout import LayoutPlan, compute_layout
from .renderer import RasterSurface, render, render_wallpaper
from .settings import Settings, default_settings, settings_from_dict, settings_to_dict, switch_theme
from .themes import ThemeCatalog, ThemeColors

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_DEVICE_ID",
    "DeviceCatalog",
    "DeviceProfile",
    "InvalidTokenError",
    "LayoutPlan",
    "LifegridError",
    "RasterSurface",
    "RenderConfig",
    "RenderError",
    "Settings",
    "ThemeCatalog",
    "ThemeColors",
    "ValidationError",
    "compute_layout",
    "decode",
    "decode_or_none",
    "default_settings",
    "encode",
    "render",
    "render_wallpaper",
    "settings_from_dict",
    "settings_to_dict",
    "switch_theme",
    "wallpaper_url",
]
__version__ = "0.1.0"
